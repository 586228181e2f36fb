#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Response files
==============

``fib crsp`` asks for the bundle options one by one and writes them as a
response file, one flag per line, ready for ``fib bundle @<file>``.

Answers are taken as typed. Only ``yes`` (any case) counts as yes.
"""

from __future__ import annotations

import shlex
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from filebundler.fs import FileSystem, LocalFileSystem


@dataclass
class RecordedOptions:
    output: str
    languages: str
    note: bool
    sort: str
    remove_empty_lines: bool
    author: str
    response_file: str


def ask(prompt: str, stdin, stdout) -> str:
    stdout.write(prompt)
    stdout.flush()
    # EOF reads as an empty answer
    return stdin.readline().rstrip("\r\n")


def is_yes(answer: str) -> bool:
    return answer.strip().lower() == "yes"


def record_options(stdin=None, stdout=None) -> RecordedOptions:
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    output = ask("Enter output file path: ", stdin, stdout)
    languages = ask(
        "Enter languages to include (comma-separated, or 'all'): ",
        stdin, stdout)
    note = is_yes(ask("Include source file paths as comments? (yes/no): ",
                      stdin, stdout))
    sort = ask("Sort files by (name/extension): ", stdin, stdout)
    rel = is_yes(ask("Remove empty lines? (yes/no): ", stdin, stdout))
    author = ask("Enter author name (optional): ", stdin, stdout)
    rsp = ask("Enter response file name (e.g., command.rsp): ",
              stdin, stdout)

    return RecordedOptions(output, languages, note, sort, rel, author, rsp)


def response_lines(rec: RecordedOptions) -> List[str]:
    lines = [
        f"--o {shlex.quote(rec.output)}",
        f"--l {shlex.quote(rec.languages)}",
    ]
    if rec.note:
        lines.append("--n")
    if rec.sort:
        lines.append(f"--s {shlex.quote(rec.sort)}")
    if rec.remove_empty_lines:
        lines.append("--rel")
    if rec.author:
        lines.append(f"--a {shlex.quote(rec.author)}")
    return lines


def write_response_file(rec: RecordedOptions, root: Optional[Path] = None,
                        fs: Optional[FileSystem] = None) -> Path:
    if not rec.response_file.strip():
        raise ValueError("Response file name is required.")

    root = Path(root) if root is not None else Path.cwd()
    fs = fs or LocalFileSystem()

    path = root / rec.response_file
    with fs.open_write(path) as fh:
        for line in response_lines(rec):
            fh.write(line + "\n")
    return path


def run_create_response(stdin=None, stdout=None, root: Optional[Path] = None,
                        fs: Optional[FileSystem] = None) -> bool:
    """
    ``fib crsp`` handler. Every failure is printed, never raised.
    """
    stdout = stdout or sys.stdout
    rec = record_options(stdin, stdout)

    try:
        write_response_file(rec, root, fs)
    except NotADirectoryError:
        print("[error] Invalid file path.", file=stdout)
        return False
    except Exception as exc:
        print(f"[error] {exc}", file=stdout)
        return False

    print(f"[done] Response file '{rec.response_file}' created successfully.",
          file=stdout)
    print(f"[info] Run the command using: fib bundle @{rec.response_file}",
          file=stdout)
    return True
