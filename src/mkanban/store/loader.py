"""Load a board tree from disk, whatever file generation each entity is in.

Every entity directory is probed with a fixed list of detectors, in order:

1. split pair: ``metadata.yml`` and the markdown file both exist
2. front-matter: the markdown file alone carries a YAML block
3. metadata-only: ``metadata.yml`` exists but the markdown half was never
   written (a half-finished migration); the directory name stands in for
   the title

A detector answers ``None`` when its files are not there. Parse failures
are raised, never used to pick a generation.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from mkanban.errors import BoardNotFoundError, ConsistencyError, DomainError, ParseError
from mkanban.ids import TaskID, is_task_key
from mkanban.model.board import Board
from mkanban.model.column import Column
from mkanban.model.task import Task
from mkanban.parser import Document, has_front_matter, parse_front_matter, parse_titled_markdown, parse_yaml
from mkanban.store import mapper
from mkanban.store.fs import FileSystem
from mkanban.store.paths import COLUMNS_DIR, EntityFiles, Nesting, PathBuilder

logger = logging.getLogger(__name__)

# Errors that make a single column or task unloadable without failing the board.
SKIPPABLE = (ParseError, ConsistencyError, DomainError)


class Generation(Enum):
    SPLIT = "split"
    FRONT_MATTER = "front-matter"
    METADATA_ONLY = "metadata-only"


@dataclass
class StoredEntity:
    """Raw stored form of one entity, before mapping."""

    generation: Generation
    meta: dict[str, Any] = field(default_factory=dict)
    title: str = ""
    body: str = ""

    def document(self) -> Document:
        return Document(meta=self.meta, body=self.body)


# --- Detectors ---


def _detect_split(fs: FileSystem, files: EntityFiles, titled: bool) -> StoredEntity | None:
    if not (fs.exists(files.metadata) and fs.exists(files.content)):
        return None
    text = fs.read_text(files.content)
    if titled and has_front_matter(text):
        # metadata.yml written but the markdown file is still the old
        # front-matter document
        return None
    meta = parse_yaml(fs.read_text(files.metadata), str(files.metadata))
    if titled:
        title, body = parse_titled_markdown(text)
    else:
        title, body = "", text.strip()
    return StoredEntity(Generation.SPLIT, meta, title, body)


def _detect_front_matter(fs: FileSystem, files: EntityFiles, titled: bool) -> StoredEntity | None:
    if not fs.exists(files.legacy):
        return None
    text = fs.read_text(files.legacy)
    if not has_front_matter(text):
        return None
    doc = parse_front_matter(text, str(files.legacy))
    return StoredEntity(Generation.FRONT_MATTER, doc.meta, "", doc.body)


def _detect_metadata_only(fs: FileSystem, files: EntityFiles, titled: bool) -> StoredEntity | None:
    if not fs.exists(files.metadata) or fs.exists(files.content):
        return None
    meta = parse_yaml(fs.read_text(files.metadata), str(files.metadata))
    return StoredEntity(Generation.METADATA_ONLY, meta, files.directory.name, "")


DETECTORS: list[Callable[[FileSystem, EntityFiles, bool], StoredEntity | None]] = [
    _detect_split,
    _detect_front_matter,
    _detect_metadata_only,
]


def detect(fs: FileSystem, files: EntityFiles, titled: bool = True) -> StoredEntity | None:
    """Run the detectors in order and return the first match.

    ``titled`` says whether the markdown half opens with a ``# `` heading
    (boards and columns) or is a plain body (tasks).
    """
    for detector in DETECTORS:
        stored = detector(fs, files, titled)
        if stored is not None:
            return stored
    return None


def is_column_dir(fs: FileSystem, paths: PathBuilder, directory: Path) -> bool:
    files = paths.column_files(directory)
    return fs.exists(files.metadata) or fs.exists(files.content)


# --- Loading ---


def load_board(fs: FileSystem, paths: PathBuilder, board_id: str) -> Board:
    """Load a board with all its columns and tasks.

    Raises BoardNotFoundError if the board directory does not exist, and
    ParseError if the board's own files are missing or broken. Columns and
    tasks that cannot be loaded are skipped with a warning.
    """
    board_dir = paths.board_dir(board_id)
    if not fs.is_dir(board_dir):
        raise BoardNotFoundError(board_id)

    files = paths.board_files(board_id)
    stored = detect(fs, files, titled=True)
    if stored is None:
        raise ParseError(f"no board files in {board_dir}")

    if stored.generation is Generation.FRONT_MATTER:
        board = mapper.board_from_legacy(stored.document(), board_id)
    else:
        board = mapper.board_from_storage(stored.meta, board_id, stored.title, stored.body)

    for directory, key in _column_dirs(fs, paths, board_id):
        try:
            column = _load_column(fs, paths, directory, key)
            board.add_column(column)
        except SKIPPABLE as e:
            logger.warning("skipping column %s: %s", directory, e)

    board.reorder_columns()

    highest = max((task.id.number for task in board.all_tasks()), default=0)
    if board.next_task_num <= highest:
        logger.warning(
            "board %s: next task number %d is behind task %d, advancing", board_id, board.next_task_num, highest
        )
        board.next_task_num = highest + 1

    logger.debug("loaded board %s (%d columns)", board_id, len(board.columns))
    return board


def _column_dirs(fs: FileSystem, paths: PathBuilder, board_id: str) -> list[tuple[Path, str]]:
    """(directory, key) for every column of a board, nested or flat."""
    columns_dir = paths.columns_dir(board_id)
    if fs.is_dir(columns_dir):
        return [(paths.column_dir(board_id, key), key) for key in fs.list_dirs(columns_dir)]

    found = []
    for name in fs.list_dirs(paths.board_dir(board_id)):
        if name == COLUMNS_DIR:
            continue
        directory = paths.column_dir(board_id, name, Nesting.FLAT)
        if is_column_dir(fs, paths, directory):
            found.append((directory, name))
    return found


def _load_column(fs: FileSystem, paths: PathBuilder, directory: Path, key: str) -> Column:
    stored = detect(fs, paths.column_files(directory), titled=True)
    if stored is None:
        raise ParseError(f"no column files in {directory}")

    if stored.generation is Generation.FRONT_MATTER:
        column = mapper.column_from_legacy(stored.document(), key)
    else:
        column = mapper.column_from_storage(stored.meta, key, stored.title, stored.body)

    tasks = []
    for task_dir, name in _task_dirs(fs, paths, directory):
        try:
            tasks.append(_load_task(fs, paths, task_dir, name))
        except SKIPPABLE as e:
            logger.warning("skipping task %s: %s", task_dir, e)

    tasks.sort(key=lambda t: t.id.number)
    for task in tasks:
        try:
            column.add_task(task, enforce_wip=False)
        except DomainError as e:
            logger.warning("skipping task %s in column %s: %s", task.id, key, e)
    return column


def _task_dirs(fs: FileSystem, paths: PathBuilder, column_dir: Path) -> list[tuple[Path, str]]:
    """(directory, name) for every task of a column, nested or flat."""
    tasks_dir = paths.tasks_dir(column_dir)
    if fs.is_dir(tasks_dir):
        return [(paths.task_dir(column_dir, name), name) for name in fs.list_dirs(tasks_dir)]
    return [
        (paths.task_dir(column_dir, name, Nesting.FLAT), name) for name in fs.list_dirs(column_dir) if is_task_key(name)
    ]


def _load_task(fs: FileSystem, paths: PathBuilder, directory: Path, name: str) -> Task:
    task_id = TaskID.parse(name)
    stored = detect(fs, paths.task_files(directory), titled=False)
    if stored is None:
        raise ParseError(f"no task files in {directory}")
    return mapper.task_from_storage(stored.meta, stored.body, task_id)
