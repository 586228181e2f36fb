import io
from contextlib import contextmanager
from pathlib import Path

import pytest

from filebundler.fs import FileSystem


ROOT = Path("/proj")


class MemoryFileSystem(FileSystem):
    """
    Dict-backed FileSystem. Directories are the root plus every parent
    of a stored file.
    """

    def __init__(self, root=ROOT, files=None):
        self.root = Path(root)
        self.files = {}
        self.fail_on = set()
        for rel, text in (files or {}).items():
            self.files[self.root / rel] = text

    def _dirs(self):
        dirs = {self.root}
        for path in self.files:
            dirs.update(p for p in path.parents if self.root in (p, *p.parents))
        return dirs

    def walk_files(self, root):
        root = Path(root)
        if root not in self._dirs():
            raise NotADirectoryError(f"Not a directory: {root}")
        for path in sorted(self.files):
            if root in path.parents:
                yield path

    def read_text(self, path):
        if Path(path) in self.fail_on:
            raise PermissionError(f"Permission denied: '{path}'")
        return self.files[Path(path)]

    def exists(self, path):
        return Path(path) in self.files or Path(path) in self._dirs()

    @contextmanager
    def open_write(self, path):
        path = Path(path)
        if path.parent not in self._dirs():
            raise NotADirectoryError(f"Not a directory: {path.parent}")
        buf = io.StringIO()
        yield buf
        self.files[path] = buf.getvalue()


@pytest.fixture
def memfs():
    return MemoryFileSystem(files={
        "a.py": "x\n\ny",
        "b.cs": "z",
        "c.txt": "ignored",
    })


@pytest.fixture
def tree(tmp_path):
    """
    Real directory with the same three files as ``memfs``.
    """
    (tmp_path / "a.py").write_text("x\n\ny", encoding="utf-8")
    (tmp_path / "b.cs").write_text("z", encoding="utf-8")
    (tmp_path / "c.txt").write_text("ignored", encoding="utf-8")
    return tmp_path
