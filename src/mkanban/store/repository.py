"""Board repository: the public face of the filesystem store."""

import logging
from pathlib import Path

from mkanban.errors import BoardNotFoundError, MkanbanError
from mkanban.ids import is_valid_board_id
from mkanban.model.board import Board
from mkanban.store import migrate as migrations
from mkanban.store.fs import FileSystem, LocalFileSystem
from mkanban.store.loader import load_board
from mkanban.store.paths import PathBuilder
from mkanban.store.writer import save_board

logger = logging.getLogger(__name__)


class BoardRepository:
    """Save, load and migrate boards stored under one root directory.

    The repository does no locking. Callers must not run two mutating
    operations on the same board at once.
    """

    def __init__(self, boards_root: str | Path, fs: FileSystem | None = None) -> None:
        self.paths = PathBuilder(Path(boards_root))
        self.fs = fs if fs is not None else LocalFileSystem()

    @property
    def boards_root(self) -> Path:
        return self.paths.boards_root

    def save(self, board: Board) -> None:
        save_board(self.fs, self.paths, board)

    def find_by_id(self, board_id: str) -> Board:
        return load_board(self.fs, self.paths, board_id)

    def board_ids(self) -> list[str]:
        if not self.fs.is_dir(self.boards_root):
            return []
        return self.fs.list_dirs(self.boards_root)

    def find_all(self) -> list[Board]:
        """Load every board under the root, skipping any that fail to load."""
        self.fs.ensure_dir(self.boards_root)
        boards = []
        for board_id in self.board_ids():
            try:
                boards.append(self.find_by_id(board_id))
            except MkanbanError as e:
                logger.warning("skipping board %s: %s", board_id, e)
        return boards

    def find_by_name(self, name: str) -> Board:
        for board in self.find_all():
            if board.name == name:
                return board
        raise BoardNotFoundError(name)

    def exists(self, board_id: str) -> bool:
        if not is_valid_board_id(board_id):
            return False
        return self.fs.is_dir(self.paths.board_dir(board_id))

    def delete(self, board_id: str) -> None:
        if not self.exists(board_id):
            raise BoardNotFoundError(board_id)
        self.fs.remove_dir(self.paths.board_dir(board_id))
        logger.info("deleted board %s", board_id)

    # --- Migrations ---

    def migrate_columns_to_subdirectory(self, board_id: str) -> list[str]:
        return migrations.migrate_columns_to_subdirectory(self.fs, self.paths, board_id)

    def migrate_tasks_to_subdirectory(self, board_id: str) -> list[str]:
        return migrations.migrate_tasks_to_subdirectory(self.fs, self.paths, board_id)

    def migrate_columns_to_split_format(self, board_id: str) -> list[str]:
        return migrations.migrate_columns_to_split_format(self.fs, self.paths, board_id)

    def migrate(self, board_id: str | None = None) -> dict[str, list[str]]:
        """Run every migration on one board, or on all boards.

        Returns what changed, keyed by board id.
        """
        board_ids = [board_id] if board_id is not None else self.board_ids()
        return {bid: migrations.migrate_board(self.fs, self.paths, bid) for bid in board_ids}
