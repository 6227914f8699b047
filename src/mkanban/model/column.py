"""Column entity and column operations on a board."""

import re
from dataclasses import dataclass, field

from mkanban.errors import DomainError, DuplicateTaskError, TaskNotFoundError, WIPLimitExceededError
from mkanban.ids import TaskID, is_display_name, slugify
from mkanban.model.task import Task

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def normalize_color(value: str) -> str:
    """Validate a #RGB or #RRGGBB colour and return it lower-cased."""
    if not _HEX_COLOR.match(value):
        raise DomainError(f"invalid color: {value!r}")
    return value.lower()


@dataclass
class Column:
    """A board column.

    The display name is the source of truth; the directory key is derived
    from it on demand and never stored.
    """

    name: str
    description: str = ""
    order: int = 0
    wip_limit: int = 0
    color: str | None = None
    tasks: list[Task] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not is_display_name(self.name):
            raise DomainError(f"column name must be a single non-empty line: {self.name!r}")
        if self.wip_limit < 0:
            raise DomainError("wip limit cannot be negative")
        if self.color is not None:
            self.color = normalize_color(self.color)

    @property
    def key(self) -> str:
        return slugify(self.name)

    def find_task(self, task_id: TaskID | str) -> Task | None:
        """Find a task by TaskID, full key or short id."""
        wanted = str(task_id)
        for task in self.tasks:
            if str(task.id) == wanted or task.id.short == wanted:
                return task
        return None

    def add_task(self, task: Task, position: int | None = None, enforce_wip: bool = True) -> None:
        if self.find_task(task.id) is not None:
            raise DuplicateTaskError(f"task {task.id} already in column {self.name!r}")
        if enforce_wip and self.wip_limit and len(self.tasks) >= self.wip_limit:
            raise WIPLimitExceededError(f"column {self.name!r} is at its limit of {self.wip_limit}")
        if position is None:
            self.tasks.append(task)
        else:
            self.tasks.insert(position, task)

    def remove_task(self, task_id: TaskID | str) -> Task:
        task = self.find_task(task_id)
        if task is None:
            raise TaskNotFoundError(f"task {task_id} not in column {self.name!r}")
        self.tasks.remove(task)
        return task

    def rename(self, new_name: str) -> None:
        if not is_display_name(new_name):
            raise DomainError(f"column name must be a single non-empty line: {new_name!r}")
        self.name = new_name

    def is_full(self) -> bool:
        return bool(self.wip_limit) and len(self.tasks) >= self.wip_limit
