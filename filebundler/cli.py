#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
CLI entrypoint for the File Bundler.

This module defines the ``fib`` command with two subcommands:

    fib bundle   → concatenates source files into one bundle
    fib crsp     → records bundle options into a response file

Arguments can be read from a response file with ``@<file>``:

    fib bundle @command.rsp
"""

from __future__ import annotations

import argparse
import shlex

from filebundler.bundler import DEFAULT_SORT, BundleOptions, run_bundle
from filebundler.languages import ALL_LANGUAGES, known_languages
from filebundler.response import run_create_response


class ResponseFileParser(argparse.ArgumentParser):
    """
    Reads ``@file`` lines shell-style, so ``--o out.txt`` on one line
    gives two arguments and quoted values stay whole. Backslashes are
    escapes, so Windows paths must be quoted.
    """

    def convert_arg_line_to_args(self, arg_line):
        try:
            return shlex.split(arg_line)
        except ValueError as exc:
            self.error(f"bad line in response file: {arg_line!r} ({exc})")


def _bundle(args):
    try:
        options = BundleOptions.from_args(args)
    except ValueError as exc:
        print(f"[error] {exc}")
        return
    run_bundle(options)


def _crsp(args):
    run_create_response()


def build_parser() -> argparse.ArgumentParser:
    p = ResponseFileParser(
        prog="fib",
        description="Root command for File Bundler CLI",
        fromfile_prefix_chars="@",
    )
    sub = p.add_subparsers(dest="command")

    b = sub.add_parser("bundle", help="Bundle code files into a single file")
    b.add_argument("--o", required=True, metavar="PATH",
                   help="File path and name")
    b.add_argument("--l", required=True, nargs="+", metavar="LANG",
                   help="A list of programming languages to include "
                        f"({', '.join(known_languages())}) "
                        f"or '{ALL_LANGUAGES}'")
    b.add_argument("--n", action="store_true",
                   help="Include source file paths as comments in the bundle")
    b.add_argument("--s", default=DEFAULT_SORT, metavar="MODE",
                   help="Sort files by 'name' (alphabetically by file name) "
                        "or 'extension' (by file type). Default is 'name'.")
    b.add_argument("--rel", action="store_true",
                   help="Remove empty lines from source code before adding "
                        "to the bundle")
    b.add_argument("--a", default=None, metavar="AUTHOR",
                   help="Name of the author to include in the bundle header")
    b.set_defaults(func=_bundle)

    c = sub.add_parser("crsp",
                       help="Create a response file with prepared bundle command")
    c.set_defaults(func=_crsp)

    return p


def main(argv=None):
    """
    Dispatcher for the ``fib`` command.
    """
    p = build_parser()
    args = p.parse_args(argv)

    if args.command is None:
        p.print_help()
        return

    args.func(args)


# Allow running: python -m filebundler.cli
if __name__ == "__main__":
    main()
