"""Board entity and board-level operations."""

from dataclasses import dataclass, field
from datetime import datetime

from mkanban.errors import (
    ColumnNotFoundError,
    DomainError,
    DuplicateColumnError,
    TaskNotFoundError,
    WIPLimitExceededError,
)
from mkanban.ids import TaskID, derive_prefix, is_display_name, is_valid_board_id, is_valid_prefix, slugify
from mkanban.model.column import Column
from mkanban.model.task import Priority, Status, Task, utcnow


@dataclass
class Board:
    """Root aggregate. The id doubles as the board's directory name."""

    id: str
    name: str
    description: str = ""
    prefix: str = ""
    created_at: datetime = field(default_factory=utcnow)
    modified_at: datetime = field(default_factory=utcnow)
    next_task_num: int = 1
    columns: list[Column] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not is_valid_board_id(self.id):
            raise DomainError(f"invalid board id: {self.id!r}")
        if not is_display_name(self.name):
            raise DomainError(f"board name must be a single non-empty line: {self.name!r}")
        if not self.prefix:
            self.prefix = derive_prefix(self.name)
        if not is_valid_prefix(self.prefix):
            raise DomainError(f"invalid task prefix: {self.prefix!r}")
        if self.next_task_num < 1:
            raise DomainError("next task number must be positive")

    def find_column(self, name: str) -> Column | None:
        """Find a column by display name or directory key."""
        key = slugify(name)
        for col in self.columns:
            if col.name == name or col.key == key:
                return col
        return None

    def add_column(self, column: Column) -> None:
        for existing in self.columns:
            if existing.key == column.key:
                raise DuplicateColumnError(
                    f"column {column.name!r} collides with {existing.name!r} on key {column.key!r}"
                )
        self.columns.append(column)

    def remove_column(self, name: str) -> Column:
        col = self.find_column(name)
        if col is None:
            raise ColumnNotFoundError(f"column {name!r} not found on board {self.id!r}")
        self.columns.remove(col)
        return col

    def rename_column(self, name: str, new_name: str) -> None:
        col = self.find_column(name)
        if col is None:
            raise ColumnNotFoundError(f"column {name!r} not found on board {self.id!r}")
        new_key = slugify(new_name)
        for other in self.columns:
            if other is not col and other.key == new_key:
                raise DuplicateColumnError(f"column {new_name!r} collides with {other.name!r}")
        col.rename(new_name)

    def reorder_columns(self) -> None:
        """Sort columns by their order field. Ties keep their current order."""
        self.columns.sort(key=lambda c: c.order)

    def mint_task_id(self, title: str) -> TaskID:
        """Allocate the next task number. Numbers are never handed out twice."""
        task_id = TaskID.for_title(self.prefix, self.next_task_num, title)
        self.next_task_num += 1
        return task_id

    def find_task(self, task_id: TaskID | str) -> tuple[Column, Task] | None:
        for col in self.columns:
            task = col.find_task(task_id)
            if task is not None:
                return col, task
        return None

    def all_tasks(self) -> list[Task]:
        return [task for col in self.columns for task in col.tasks]


def create_board(name: str, description: str = "", prefix: str = "") -> Board:
    """Create an empty board whose id is derived from its name."""
    return Board(id=slugify(name), name=name, description=description, prefix=prefix)


def create_column(
    board: Board,
    name: str,
    description: str = "",
    order: int | None = None,
    wip_limit: int = 0,
    color: str | None = None,
) -> Column:
    """Create a column, add it to the board and keep columns sorted.

    Without an explicit order the column goes after the last one.
    """
    if order is None:
        order = max((c.order for c in board.columns), default=-1) + 1
    col = Column(name=name, description=description, order=order, wip_limit=wip_limit, color=color)
    board.add_column(col)
    board.reorder_columns()
    board.modified_at = utcnow()
    return col


def create_task(
    board: Board,
    column: Column,
    title: str,
    description: str = "",
    priority: Priority | str = Priority.NONE,
    status: Status | str = Status.TODO,
    tags: list[str] | None = None,
) -> Task:
    """Mint an id for a new task and append it to column."""
    if column not in board.columns:
        raise ColumnNotFoundError(f"column {column.name!r} is not on board {board.id!r}")
    task = Task(
        id=TaskID.for_title(board.prefix, board.next_task_num, title),
        title=title,
        description=description,
        priority=priority,
        status=status,
        tags=list(tags or []),
    )
    column.add_task(task)
    board.next_task_num += 1
    board.modified_at = utcnow()
    return task


def move_task(board: Board, task_id: TaskID | str, target: Column, position: int | None = None) -> Task:
    """Move a task to target at position (end when None)."""
    found = board.find_task(task_id)
    if found is None:
        raise TaskNotFoundError(f"task {task_id} not found on board {board.id!r}")
    source, task = found
    if source is target:
        source.tasks.remove(task)
        insert_at = len(source.tasks) if position is None else min(position, len(source.tasks))
        source.tasks.insert(insert_at, task)
        return task
    if target.is_full():
        raise WIPLimitExceededError(f"column {target.name!r} is at its limit of {target.wip_limit}")
    source.tasks.remove(task)
    target.add_task(task, position)
    board.modified_at = utcnow()
    return task
