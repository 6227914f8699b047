"""Filesystem primitives: atomic writes and error-translating helpers."""

import logging
import os
import shutil
import tempfile
from pathlib import Path

from mkanban.errors import StorageError

logger = logging.getLogger(__name__)

FILE_MODE = 0o644
DIR_MODE = 0o755
TEMP_PREFIX = ".tmp-"


def safe_write(path: str | Path, data: bytes | str, mode: int = FILE_MODE) -> None:
    """Atomically replace path with data.

    The bytes go to a temp file in the same directory, which is synced,
    chmodded and renamed over the target. Readers see either the old
    content or the new content, never a partial file.
    """
    path = Path(path)
    if isinstance(data, str):
        data = data.encode("utf-8")

    ensure_dir(path.parent)

    try:
        fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=TEMP_PREFIX)
    except OSError as e:
        raise StorageError(path, "create temp file for", str(e)) from e

    step = "write"
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            step = "sync"
            os.fsync(f.fileno())
        step = "set permissions on"
        os.chmod(tmp, mode)
        step = "rename temp file onto"
        os.replace(tmp, path)
    except OSError as e:
        _discard(tmp)
        raise StorageError(path, step, str(e)) from e
    except BaseException:
        _discard(tmp)
        raise

    logger.debug("wrote %s (%d bytes)", path, len(data))


def _discard(tmp: str) -> None:
    """Remove a leftover temp file, ignoring a file that is already gone."""
    try:
        os.unlink(tmp)
    except FileNotFoundError:
        pass


def ensure_dir(path: str | Path, mode: int = DIR_MODE) -> None:
    """Create path and any missing parents."""
    try:
        os.makedirs(path, mode=mode, exist_ok=True)
    except OSError as e:
        raise StorageError(path, "create directory", str(e)) from e


def remove_dir(path: str | Path) -> None:
    """Remove a directory tree. A missing directory is not an error."""
    try:
        shutil.rmtree(path)
    except FileNotFoundError:
        return
    except OSError as e:
        raise StorageError(path, "remove directory", str(e)) from e
    logger.debug("removed %s", path)


def exists(path: str | Path) -> bool:
    return Path(path).exists()


def is_dir(path: str | Path) -> bool:
    return Path(path).is_dir()


def list_dirs(path: str | Path) -> list[str]:
    """Return the sorted names of the immediate child directories of path."""
    try:
        with os.scandir(path) as entries:
            return sorted(entry.name for entry in entries if entry.is_dir())
    except OSError as e:
        raise StorageError(path, "list directory", str(e)) from e


def read_text(path: str | Path) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise StorageError(path, "read", str(e)) from e


def rename(src: str | Path, dst: str | Path) -> None:
    """Rename src to dst. Both must be on the same filesystem."""
    try:
        os.rename(src, dst)
    except OSError as e:
        raise StorageError(src, f"rename to {dst}", str(e)) from e
    logger.debug("renamed %s -> %s", src, dst)
