#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
File Bundler
============

Concatenates the source files under a directory into one text file:

- Extension-based language filtering (or ``all``)
- Unknown-extension report
- Ordering by file name or by extension
- Optional author header and per-file source comments
- Optional removal of empty lines

The output file must not exist beforehand, and it only appears once the
whole bundle has been written.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from tqdm import tqdm

from filebundler.fs import FileSystem, LocalFileSystem
from filebundler.languages import ALL_LANGUAGES, language_for


DEFAULT_SORT = "name"
SORT_MODES = ("name", "extension")

AUTHOR_PREFIX = "// Author: "
SOURCE_PREFIX = "// Source file: "


class OutputExistsError(FileExistsError):
    pass


# ============================================================
# Options
# ============================================================

def parse_languages(values: Iterable[str]) -> Tuple[str, ...]:
    """
    Flatten ``--l`` values into unique lower-cased tags.

    Each value may itself be comma-separated, so ``python,c#``,
    ``python c#`` and ``"python, c#"`` all give ``("python", "c#")``.
    """
    langs: List[str] = []
    for value in values:
        for part in value.split(","):
            tag = part.strip().lower()
            if tag and tag not in langs:
                langs.append(tag)
    return tuple(langs)


@dataclass(frozen=True)
class BundleOptions:
    output: Path
    languages: Tuple[str, ...]
    note: bool = False
    sort: str = DEFAULT_SORT
    remove_empty_lines: bool = False
    author: Optional[str] = None

    def __post_init__(self):
        if not self.languages:
            raise ValueError("At least one language is required.")

    @classmethod
    def from_args(cls, args) -> "BundleOptions":
        return cls(
            output=Path(args.o),
            languages=parse_languages(args.l),
            note=args.n,
            sort=args.s,
            remove_empty_lines=args.rel,
            author=args.a,
        )


# ============================================================
# Selection
# ============================================================

@dataclass(frozen=True)
class CandidateFile:
    path: Path
    extension: str

    @property
    def name(self) -> str:
        return self.path.name

    @classmethod
    def from_path(cls, path: Path) -> "CandidateFile":
        return cls(path=path, extension=path.suffix.lower())


@dataclass(frozen=True)
class Selection:
    files: List[CandidateFile]
    unknown_extensions: List[str]


def select_files(root: Path, languages: Sequence[str],
                 fs: FileSystem) -> Selection:
    include_all = ALL_LANGUAGES in languages
    files, unknown = [], set()

    for path in fs.walk_files(root):
        cand = CandidateFile.from_path(path)
        lang = language_for(cand.extension)
        if lang is None:
            unknown.add(cand.extension)
            continue
        if include_all or lang in languages:
            files.append(cand)

    return Selection(files, sorted(unknown))


# ============================================================
# Ordering
# ============================================================

def _name_key(f: CandidateFile):
    # case-insensitive, exact name breaks ties
    return (f.name.casefold(), f.name)


def sort_files(files: Iterable[CandidateFile],
               mode: str = DEFAULT_SORT) -> List[CandidateFile]:
    if mode == "extension":
        return sorted(files, key=lambda f: (f.extension, _name_key(f)))
    # "name" and anything unrecognised
    return sorted(files, key=_name_key)


# ============================================================
# Writing
# ============================================================

def strip_empty_lines(text: str) -> str:
    return "\n".join(line for line in text.splitlines() if line.strip())


def relative_to_root(path: Path, root: Path) -> str:
    return os.path.relpath(path, root)


def write_bundle(files: Sequence[CandidateFile], options: BundleOptions,
                 output: Path, root: Path, fs: FileSystem, out=None) -> int:
    """
    Stream the author header and every file into ``output``.

    Returns the number of files written. Raises ``OutputExistsError``
    without touching anything if ``output`` is already there.
    """
    out = out or sys.stdout

    if fs.exists(output):
        raise OutputExistsError(str(output))

    with fs.open_write(output) as fh:
        if options.author:
            fh.write(f"{AUTHOR_PREFIX}{options.author}\n")

        for cand in tqdm(files, desc="Bundling", unit="file",
                         disable=None, leave=False):
            rel = relative_to_root(cand.path, root)
            if options.note:
                fh.write(f"{SOURCE_PREFIX}{rel}\n")

            tqdm.write(f"[info] Adding file: {rel}", file=out)
            content = fs.read_text(cand.path)
            if options.remove_empty_lines:
                content = strip_empty_lines(content)
            fh.write(content + "\n")

    return len(files)


# ============================================================
# Command
# ============================================================

def report_unknown(extensions: Sequence[str], out) -> None:
    print("[warn] Found files with unknown extensions:", file=out)
    for ext in extensions:
        print(f"- {ext or '(no extension)'}", file=out)
    print("These files will not be included in the bundle.", file=out)


def run_bundle(options: BundleOptions, root: Optional[Path] = None,
               fs: Optional[FileSystem] = None, out=None) -> bool:
    """
    ``fib bundle`` handler. Every failure is printed, never raised.
    """
    root = Path(root) if root is not None else Path.cwd()
    fs = fs or LocalFileSystem()
    out = out or sys.stdout

    output = root / options.output

    try:
        if fs.exists(output):
            raise OutputExistsError(str(output))

        print(f"[info] Output file path: {output}", file=out)

        selection = select_files(root, options.languages, fs)
        names = ", ".join(
            relative_to_root(f.path, root) for f in selection.files
        )
        print(f"[info] Files selected for bundling: {names}", file=out)

        if selection.unknown_extensions:
            report_unknown(selection.unknown_extensions, out)

        if options.sort not in SORT_MODES:
            print(f"[warn] Unknown sort mode '{options.sort}', "
                  f"sorting by {DEFAULT_SORT}", file=out)

        files = sort_files(selection.files, options.sort)
        n = write_bundle(files, options, output, root, fs, out)

    except OutputExistsError:
        print("[error] Choose another name. This name already exists",
              file=out)
        return False
    except NotADirectoryError:
        print("[error] Invalid file path.", file=out)
        return False
    except Exception as exc:
        print(f"[error] {exc}", file=out)
        return False

    print(f"[done] Bundled {n} file(s) into {output}", file=out)
    return True
