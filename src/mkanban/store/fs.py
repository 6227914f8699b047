"""The directory operations the store needs, behind a swappable interface."""

from pathlib import Path
from typing import Protocol

from mkanban import fsutil


class FileSystem(Protocol):
    """Directory and file access used by the loader, writer and migrations.

    Paths are always absolute paths produced by a PathBuilder. Failures
    raise StorageError.
    """

    def exists(self, path: Path) -> bool: ...

    def is_dir(self, path: Path) -> bool: ...

    def list_dirs(self, path: Path) -> list[str]: ...

    def read_text(self, path: Path) -> str: ...

    def write_text(self, path: Path, text: str) -> None: ...

    def ensure_dir(self, path: Path) -> None: ...

    def remove_dir(self, path: Path) -> None: ...

    def rename(self, src: Path, dst: Path) -> None: ...


class LocalFileSystem:
    """FileSystem backed by the real disk. Every write is atomic."""

    def exists(self, path: Path) -> bool:
        return fsutil.exists(path)

    def is_dir(self, path: Path) -> bool:
        return fsutil.is_dir(path)

    def list_dirs(self, path: Path) -> list[str]:
        return fsutil.list_dirs(path)

    def read_text(self, path: Path) -> str:
        return fsutil.read_text(path)

    def write_text(self, path: Path, text: str) -> None:
        fsutil.safe_write(path, text)

    def ensure_dir(self, path: Path) -> None:
        fsutil.ensure_dir(path)

    def remove_dir(self, path: Path) -> None:
        fsutil.remove_dir(path)

    def rename(self, src: Path, dst: Path) -> None:
        fsutil.rename(src, dst)
