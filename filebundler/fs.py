#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
File-system access
==================

Everything the bundler does to disk goes through a ``FileSystem``:

- ``walk_files``  → recursive listing of every file under a root
- ``read_text``   → whole-file text read
- ``exists``      → pre-existence check for output paths
- ``open_write``  → text handle whose content only lands on success

``LocalFileSystem`` is the real implementation. Tests swap in an
in-memory one with the same four methods.
"""

from __future__ import annotations

import os
import tempfile
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, TextIO


def get_encoding() -> str:
    return os.environ.get("FIB_ENCODING", "utf-8")


class FileSystem(ABC):
    @abstractmethod
    def walk_files(self, root: Path) -> Iterator[Path]:
        raise NotImplementedError

    @abstractmethod
    def read_text(self, path: Path) -> str:
        raise NotImplementedError

    @abstractmethod
    def exists(self, path: Path) -> bool:
        raise NotImplementedError

    @abstractmethod
    def open_write(self, path: Path):
        raise NotImplementedError


class LocalFileSystem(FileSystem):
    def __init__(self, encoding: Optional[str] = None):
        self.encoding = encoding or get_encoding()

    def walk_files(self, root: Path) -> Iterator[Path]:
        root = Path(root)
        if not root.is_dir():
            raise NotADirectoryError(f"Not a directory: {root}")

        for base, dirs, files in os.walk(root):
            dirs.sort()
            for name in sorted(files):
                yield Path(base) / name

    def read_text(self, path: Path) -> str:
        with open(path, "r", encoding=self.encoding) as fh:
            return fh.read()

    def exists(self, path: Path) -> bool:
        return Path(path).exists()

    @contextmanager
    def open_write(self, path: Path) -> Iterator[TextIO]:
        """
        Write to a temporary sibling of ``path`` and move it into place
        once the block exits cleanly. On error the temporary file is
        removed and the exception propagates.
        """
        path = Path(path)
        parent = path.parent
        if not parent.is_dir():
            raise NotADirectoryError(f"Not a directory: {parent}")

        fd, tmp = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=parent
        )
        try:
            with open(fd, "w", encoding=self.encoding) as fh:
                yield fh
            # mkstemp creates 0600
            os.chmod(tmp, 0o644)
            os.replace(tmp, path)
        except BaseException:
            if os.path.exists(tmp):
                os.remove(tmp)
            raise
