"""Delete child directories that no longer have an in-memory counterpart."""

import logging
from collections.abc import Iterable
from pathlib import Path

from mkanban.store.fs import FileSystem

logger = logging.getLogger(__name__)


def reconcile(desired: Iterable[str], actual: Iterable[str]) -> list[str]:
    """Return the keys in actual that are not in desired, sorted."""
    keep = set(desired)
    return sorted(key for key in set(actual) if key not in keep)


def prune(fs: FileSystem, container: Path, desired: Iterable[str]) -> list[str]:
    """Remove every child directory of container whose name is not desired.

    Returns the removed names. A missing container has nothing to prune.
    """
    if not fs.is_dir(container):
        return []
    stale = reconcile(desired, fs.list_dirs(container))
    for name in stale:
        logger.debug("pruning stale directory %s", container / name)
        fs.remove_dir(container / name)
    return stale
