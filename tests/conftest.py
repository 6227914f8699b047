"""Shared fixtures."""

from pathlib import Path

import pytest

from mkanban.errors import StorageError
from mkanban.model import create_board, create_column, create_task
from mkanban.store.paths import PathBuilder
from mkanban.store.repository import BoardRepository


class MemoryFileSystem:
    """In-memory stand-in for LocalFileSystem."""

    def __init__(self):
        self.files: dict[Path, str] = {}
        self.dirs: set[Path] = set()

    def exists(self, path):
        return path in self.files or path in self.dirs

    def is_dir(self, path):
        return path in self.dirs

    def list_dirs(self, path):
        if path not in self.dirs:
            raise StorageError(path, "list directory", "no such directory")
        return sorted(d.name for d in self.dirs if d.parent == path)

    def read_text(self, path):
        if path not in self.files:
            raise StorageError(path, "read", "no such file")
        return self.files[path]

    def write_text(self, path, text):
        self.ensure_dir(path.parent)
        self.files[path] = text

    def ensure_dir(self, path):
        self.dirs.add(path)
        self.dirs.update(path.parents)

    def remove_dir(self, path):
        self.dirs = {d for d in self.dirs if not d.is_relative_to(path)}
        self.files = {f: t for f, t in self.files.items() if not f.is_relative_to(path)}

    def rename(self, src, dst):
        if src not in self.dirs:
            raise StorageError(src, f"rename to {dst}", "no such directory")
        self.dirs = {dst / d.relative_to(src) if d.is_relative_to(src) else d for d in self.dirs}
        self.files = {dst / f.relative_to(src) if f.is_relative_to(src) else f: t for f, t in self.files.items()}


ROOT = Path("/boards")


@pytest.fixture
def memfs():
    fs = MemoryFileSystem()
    fs.ensure_dir(ROOT)
    return fs


@pytest.fixture
def mem_paths():
    return PathBuilder(ROOT)


@pytest.fixture
def mem_repo(memfs):
    return BoardRepository(ROOT, fs=memfs)


@pytest.fixture
def repo(tmp_path):
    return BoardRepository(tmp_path / "boards")


@pytest.fixture
def demo_board():
    """Board "Demo" with an "In Progress" column holding DEMO-1-fix-bug."""
    board = create_board("Demo", "A demo board.")
    col = create_column(board, "In Progress", wip_limit=3)
    create_task(board, col, "Fix bug", priority="high", tags=["urgent"])
    return board


@pytest.fixture
def write_file():
    """Write a file under a directory, creating parents."""

    def _write(path: Path, text: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text)
        return path

    return _write
