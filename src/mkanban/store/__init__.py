"""Filesystem persistence for boards."""

from mkanban.store.fs import FileSystem, LocalFileSystem
from mkanban.store.paths import EntityFiles, Nesting, PathBuilder
from mkanban.store.repository import BoardRepository

__all__ = [
    "BoardRepository",
    "EntityFiles",
    "FileSystem",
    "LocalFileSystem",
    "Nesting",
    "PathBuilder",
]
