"""Write a board tree to disk in the current split layout.

Every file goes through the atomic writer. After a column's tasks are
written, task directories with no in-memory task are removed; after all
columns are written, stale column directories are removed. A failure
part way through is not rolled back: the next save converges the tree
because the stale sets are recomputed from scratch each time.
"""

import logging
from pathlib import Path

from mkanban.model.board import Board
from mkanban.model.column import Column
from mkanban.model.task import Task
from mkanban.parser import serialize_yaml
from mkanban.store import mapper
from mkanban.store.fs import FileSystem
from mkanban.store.paths import PathBuilder
from mkanban.store.reconcile import prune

logger = logging.getLogger(__name__)


def save_board(fs: FileSystem, paths: PathBuilder, board: Board) -> None:
    """Persist board and everything under it."""
    files = paths.board_files(board.id)
    fs.ensure_dir(files.directory)
    fs.write_text(files.metadata, serialize_yaml(mapper.board_to_metadata(board)))
    fs.write_text(files.content, mapper.board_to_markdown(board))

    written: list[str] = []
    for column in board.columns:
        key = column.key
        if key in written:
            logger.warning("board %s: column %r overwrites another column with key %r", board.id, column.name, key)
        _save_column(fs, paths, paths.column_dir(board.id, key), column)
        written.append(key)

    pruned = prune(fs, paths.columns_dir(board.id), written)
    logger.debug("saved board %s (%d columns, pruned %d)", board.id, len(written), len(pruned))


def _save_column(fs: FileSystem, paths: PathBuilder, directory: Path, column: Column) -> None:
    files = paths.column_files(directory)
    fs.ensure_dir(directory)
    fs.write_text(files.metadata, serialize_yaml(mapper.column_to_metadata(column)))
    fs.write_text(files.content, mapper.column_to_markdown(column))

    keys = []
    for task in column.tasks:
        _save_task(fs, paths, paths.task_dir(directory, str(task.id)), task)
        keys.append(str(task.id))

    prune(fs, paths.tasks_dir(directory), keys)


def _save_task(fs: FileSystem, paths: PathBuilder, directory: Path, task: Task) -> None:
    files = paths.task_files(directory)
    meta, body = mapper.task_to_storage(task)
    fs.ensure_dir(directory)
    fs.write_text(files.metadata, serialize_yaml(meta))
    fs.write_text(files.content, f"{body}\n" if body else "")
