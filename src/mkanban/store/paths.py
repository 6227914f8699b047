"""Where each board, column and task lives on disk.

Current layout::

    <root>/<board>/metadata.yml, board.md
    <root>/<board>/columns/<key>/metadata.yml, column.md
    <root>/<board>/columns/<key>/tasks/<PREFIX-N-slug>/metadata.yml, task.md

The flat legacy layout drops the ``columns/`` and ``tasks/`` wrappers.
Nothing here touches the disk.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from mkanban.errors import BoardNotFoundError
from mkanban.ids import is_valid_board_id

METADATA_FILE = "metadata.yml"
BOARD_FILE = "board.md"
COLUMN_FILE = "column.md"
TASK_FILE = "task.md"
COLUMNS_DIR = "columns"
TASKS_DIR = "tasks"


class Nesting(Enum):
    NESTED = "nested"
    FLAT = "flat"


@dataclass(frozen=True)
class EntityFiles:
    """The files that can hold one entity.

    ``metadata`` plus ``content`` is the split pair. A front-matter file from
    the older generation sits at the same path as ``content``.
    """

    directory: Path
    metadata: Path
    content: Path

    @property
    def legacy(self) -> Path:
        return self.content


def _files(directory: Path, content_name: str) -> EntityFiles:
    return EntityFiles(directory, directory / METADATA_FILE, directory / content_name)


@dataclass(frozen=True)
class PathBuilder:
    boards_root: Path

    def __post_init__(self) -> None:
        object.__setattr__(self, "boards_root", Path(self.boards_root))

    def board_dir(self, board_id: str) -> Path:
        """Directory for board_id. An id that is not a direct child of the root is never found."""
        if not is_valid_board_id(board_id):
            raise BoardNotFoundError(board_id)
        return self.boards_root / board_id

    def board_files(self, board_id: str) -> EntityFiles:
        return _files(self.board_dir(board_id), BOARD_FILE)

    def columns_dir(self, board_id: str) -> Path:
        return self.board_dir(board_id) / COLUMNS_DIR

    def column_dir(self, board_id: str, key: str, nesting: Nesting = Nesting.NESTED) -> Path:
        if nesting is Nesting.FLAT:
            return self.board_dir(board_id) / key
        return self.columns_dir(board_id) / key

    def column_files(self, column_dir: Path) -> EntityFiles:
        return _files(column_dir, COLUMN_FILE)

    def tasks_dir(self, column_dir: Path) -> Path:
        return column_dir / TASKS_DIR

    def task_dir(self, column_dir: Path, task_key: str, nesting: Nesting = Nesting.NESTED) -> Path:
        if nesting is Nesting.FLAT:
            return column_dir / task_key
        return self.tasks_dir(column_dir) / task_key

    def task_files(self, task_dir: Path) -> EntityFiles:
        return _files(task_dir, TASK_FILE)
