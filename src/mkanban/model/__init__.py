"""Board, column and task entities."""

from mkanban.model.board import Board, create_board, create_column, create_task, move_task
from mkanban.model.column import Column, normalize_color
from mkanban.model.task import Priority, Status, Task, utcnow

__all__ = [
    "Board",
    "Column",
    "Priority",
    "Status",
    "Task",
    "create_board",
    "create_column",
    "create_task",
    "move_task",
    "normalize_color",
    "utcnow",
]
