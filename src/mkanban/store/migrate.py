"""Bring older board layouts up to the current one.

Each migration looks at every column (or task) on its own, so a board that
is only partly migrated is finished off, and running a migration again
changes nothing. A rename whose destination is already taken is logged
and left alone.
"""

import logging
from pathlib import Path

from mkanban.errors import BoardNotFoundError, DomainError, ParseError
from mkanban.ids import is_task_key, slugify
from mkanban.parser import has_front_matter, parse_front_matter, serialize_yaml
from mkanban.store import mapper
from mkanban.store.fs import FileSystem
from mkanban.store.loader import is_column_dir
from mkanban.store.paths import COLUMNS_DIR, Nesting, PathBuilder

logger = logging.getLogger(__name__)


def _require_board(fs: FileSystem, paths: PathBuilder, board_id: str) -> Path:
    board_dir = paths.board_dir(board_id)
    if not fs.is_dir(board_dir):
        raise BoardNotFoundError(board_id)
    return board_dir


def _flat_columns(fs: FileSystem, paths: PathBuilder, board_id: str) -> list[str]:
    """Names of column directories sitting directly under the board."""
    return [
        name
        for name in fs.list_dirs(paths.board_dir(board_id))
        if name != COLUMNS_DIR and is_column_dir(fs, paths, paths.column_dir(board_id, name, Nesting.FLAT))
    ]


def _all_columns(fs: FileSystem, paths: PathBuilder, board_id: str) -> list[Path]:
    """Every column directory of a board, nested ones first."""
    found = []
    columns_dir = paths.columns_dir(board_id)
    if fs.is_dir(columns_dir):
        found.extend(paths.column_dir(board_id, key) for key in fs.list_dirs(columns_dir))
    found.extend(paths.column_dir(board_id, name, Nesting.FLAT) for name in _flat_columns(fs, paths, board_id))
    return found


def _move(fs: FileSystem, src: Path, dst: Path) -> bool:
    if fs.exists(dst):
        logger.warning("not moving %s: %s already exists", src, dst)
        return False
    fs.rename(src, dst)
    logger.info("moved %s -> %s", src, dst)
    return True


def migrate_columns_to_subdirectory(fs: FileSystem, paths: PathBuilder, board_id: str) -> list[str]:
    """Move column directories from the board root into ``columns/``.

    Returns the names of the columns moved.
    """
    _require_board(fs, paths, board_id)
    pending = _flat_columns(fs, paths, board_id)
    if not pending:
        return []

    fs.ensure_dir(paths.columns_dir(board_id))
    moved = []
    for name in pending:
        src = paths.column_dir(board_id, name, Nesting.FLAT)
        if _move(fs, src, paths.column_dir(board_id, name)):
            moved.append(name)
    return moved


def migrate_tasks_to_subdirectory(fs: FileSystem, paths: PathBuilder, board_id: str) -> list[str]:
    """Move task directories from each column root into its ``tasks/``.

    Returns the moved tasks as ``column/task`` names.
    """
    _require_board(fs, paths, board_id)
    moved = []
    for column_dir in _all_columns(fs, paths, board_id):
        pending = [name for name in fs.list_dirs(column_dir) if is_task_key(name)]
        if not pending:
            continue
        fs.ensure_dir(paths.tasks_dir(column_dir))
        for name in pending:
            src = paths.task_dir(column_dir, name, Nesting.FLAT)
            if _move(fs, src, paths.task_dir(column_dir, name)):
                moved.append(f"{column_dir.name}/{name}")
    return moved


def migrate_columns_to_split_format(fs: FileSystem, paths: PathBuilder, board_id: str) -> list[str]:
    """Rewrite front-matter ``column.md`` files as a metadata.yml + column.md pair.

    The directory is renamed to the key derived from the display name when
    they differ. A column whose metadata.yml was written but whose
    column.md still holds front-matter is rewritten again. Returns the keys
    of the columns rewritten.
    """
    _require_board(fs, paths, board_id)
    migrated = []
    for column_dir in _all_columns(fs, paths, board_id):
        files = paths.column_files(column_dir)
        if not fs.exists(files.legacy):
            continue
        text = fs.read_text(files.legacy)
        if not has_front_matter(text):
            continue

        folder = column_dir.name
        try:
            doc = parse_front_matter(text, str(files.legacy))
            column = mapper.column_from_legacy(doc, folder)
        except (ParseError, DomainError) as e:
            logger.warning("not migrating column %s: %s", column_dir, e)
            continue

        key = slugify(doc.get_str("display_name") or folder)
        if key != folder:
            target = column_dir.parent / key
            if not _move(fs, column_dir, target):
                continue
            column_dir = target
            files = paths.column_files(column_dir)

        fs.write_text(files.metadata, serialize_yaml(mapper.column_to_metadata(column)))
        fs.write_text(files.content, mapper.column_to_markdown(column))
        logger.info("migrated column %s to split format", column_dir)
        migrated.append(key)
    return migrated


def migrate_board(fs: FileSystem, paths: PathBuilder, board_id: str) -> list[str]:
    """Run every migration on one board. Returns everything that changed."""
    changed = []
    changed.extend(migrate_columns_to_subdirectory(fs, paths, board_id))
    changed.extend(migrate_columns_to_split_format(fs, paths, board_id))
    changed.extend(migrate_tasks_to_subdirectory(fs, paths, board_id))
    return changed
