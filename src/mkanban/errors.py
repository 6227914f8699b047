"""Exception hierarchy for mkanban.

Every error raised by the storage core inherits from :class:`MkanbanError`,
so callers can catch the whole family in one place while still telling a
missing board apart from a broken file or a failed write.
"""

from pathlib import Path


class MkanbanError(Exception):
    """Base exception for all mkanban errors."""


class StorageError(MkanbanError):
    """A filesystem operation failed.

    Attributes:
        path: The path the operation was acting on.
        operation: Short verb naming the failed step ("write", "rename", ...).
    """

    def __init__(self, path: str | Path, operation: str, reason: str = "") -> None:
        self.path = Path(path)
        self.operation = operation
        message = f"failed to {operation} {self.path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class BoardNotFoundError(MkanbanError):
    """No board directory exists for the requested id."""

    def __init__(self, board_id: str) -> None:
        self.board_id = board_id
        super().__init__(f"board not found: {board_id}")


class ParseError(MkanbanError):
    """A stored document could not be turned into structured data."""


class MissingFieldError(ParseError):
    """A required field is absent from stored metadata."""

    def __init__(self, field: str, source: str = "") -> None:
        self.field = field
        where = f" in {source}" if source else ""
        super().__init__(f"missing required field '{field}'{where}")


class InvalidFieldError(ParseError):
    """A stored field holds a value outside its allowed set."""


class ConsistencyError(MkanbanError):
    """An identifier embedded in a file disagrees with its directory name."""


class DomainError(MkanbanError):
    """A board, column or task rule was violated."""


class InvalidTaskIDError(DomainError, ValueError):
    """A string is not a PREFIX-NUMBER-slug task identifier."""


class DuplicateColumnError(DomainError):
    """A column with the same directory key already exists on the board."""


class ColumnNotFoundError(DomainError):
    """No column with the given name exists on the board."""


class DuplicateTaskError(DomainError):
    """A task with the same identifier already exists in the column."""


class TaskNotFoundError(DomainError):
    """No task with the given identifier exists."""


class WIPLimitExceededError(DomainError):
    """Adding a task would exceed the column's work-in-progress limit."""
