"""Task entity and its enumerations."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from mkanban.errors import DomainError
from mkanban.ids import TaskID


class Priority(str, Enum):
    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class Status(str, Enum):
    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Task:
    """A work item. Its id is fixed for life; everything else may change."""

    id: TaskID
    title: str
    description: str = ""
    priority: Priority = Priority.NONE
    status: Status = Status.TODO
    tags: list[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=utcnow)
    modified_at: datetime = field(default_factory=utcnow)
    due_date: datetime | None = None
    completed_date: datetime | None = None
    metadata: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.id, TaskID):
            raise DomainError(f"task id must be a TaskID, got {type(self.id).__name__}")
        if not self.title.strip():
            raise DomainError("task title cannot be empty")
        try:
            self.priority = Priority(self.priority)
            self.status = Status(self.status)
        except ValueError as e:
            raise DomainError(str(e)) from e
        self.tags = list(dict.fromkeys(self.tags))

    def _touch(self) -> None:
        self.modified_at = utcnow()

    def update_title(self, title: str) -> None:
        if not title.strip():
            raise DomainError("task title cannot be empty")
        self.title = title
        self._touch()

    def update_description(self, description: str) -> None:
        self.description = description
        self._touch()

    def update_priority(self, priority: Priority | str) -> None:
        try:
            self.priority = Priority(priority)
        except ValueError as e:
            raise DomainError(str(e)) from e
        self._touch()

    def update_status(self, status: Status | str) -> None:
        """Change status, stamping completed_date the first time it is done."""
        try:
            self.status = Status(status)
        except ValueError as e:
            raise DomainError(str(e)) from e
        self._touch()
        if self.status is Status.DONE and self.completed_date is None:
            self.completed_date = self.modified_at

    def mark_completed(self) -> None:
        self.update_status(Status.DONE)

    def set_due_date(self, due: datetime) -> None:
        if due < utcnow():
            raise DomainError("due date cannot be in the past")
        self.due_date = due
        self._touch()

    def clear_due_date(self) -> None:
        self.due_date = None
        self._touch()

    def add_tag(self, tag: str) -> None:
        if tag in self.tags:
            return
        self.tags.append(tag)
        self._touch()

    def remove_tag(self, tag: str) -> None:
        if tag not in self.tags:
            return
        self.tags.remove(tag)
        self._touch()

    def get_metadata(self, key: str) -> str | None:
        return self.metadata.get(key)

    def set_metadata(self, key: str, value: str) -> None:
        self.metadata[key] = value
        self._touch()

    def is_overdue(self) -> bool:
        if self.due_date is None or self.status is Status.DONE:
            return False
        return self.due_date < utcnow()
