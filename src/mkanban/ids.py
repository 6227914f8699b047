"""Directory keys and task identifiers."""

import re
from dataclasses import dataclass

from mkanban.errors import InvalidTaskIDError

MAX_SLUG_LENGTH = 50
DEFAULT_PREFIX = "TASK"

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_TASK_KEY = re.compile(r"^([A-Z][A-Z0-9]*)-(\d+)-([a-z0-9]+(?:-[a-z0-9]+)*)$")
_PREFIX = re.compile(r"^[A-Z][A-Z0-9]*$")


def slugify(text: str, max_length: int = MAX_SLUG_LENGTH) -> str:
    """Convert text to a lowercase, hyphenated directory key.

    "In Progress" -> "in-progress", "  Fix: the bug!" -> "fix-the-bug"
    """
    slug = _NON_ALNUM.sub("-", text.lower()).strip("-")
    if not slug:
        return "untitled"
    if len(slug) > max_length:
        slug = slug[:max_length].rstrip("-")
    return slug


def derive_prefix(name: str) -> str:
    """Build a task prefix from a board name.

    "Demo" -> "DEMO", "My Side Project" -> "MSP", "2024 plans" -> "TASK"
    """
    words = [w for w in re.split(r"[^A-Za-z0-9]+", name) if w]
    if len(words) > 1:
        prefix = "".join(w[0] for w in words)[:4]
    else:
        prefix = "".join(words)[:4]
    prefix = prefix.upper()
    return prefix if _PREFIX.match(prefix) else DEFAULT_PREFIX


def is_valid_prefix(prefix: str) -> bool:
    return bool(_PREFIX.match(prefix))


def is_valid_board_id(board_id: str) -> bool:
    """True if board_id names a single directory directly under the boards root."""
    if not board_id.strip() or board_id in (".", ".."):
        return False
    return "/" not in board_id and "\\" not in board_id and "\0" not in board_id


def is_display_name(name: str) -> bool:
    """True if name is non-blank and fits on one line, as a ``# `` heading must."""
    return bool(name.strip()) and "\n" not in name and "\r" not in name


@dataclass(frozen=True)
class TaskID:
    """A task identifier: board prefix, board-scoped number and title slug.

    The full form ("DEMO-1-fix-bug") names the task's directory. The short
    form ("DEMO-1") is what cross-references and metadata files use.
    """

    prefix: str
    number: int
    slug: str

    def __post_init__(self) -> None:
        if not is_valid_prefix(self.prefix):
            raise InvalidTaskIDError(f"invalid task prefix: {self.prefix!r}")
        if self.number < 1:
            raise InvalidTaskIDError(f"task number must be positive: {self.number}")
        if not self.slug or slugify(self.slug) != self.slug:
            raise InvalidTaskIDError(f"invalid task slug: {self.slug!r}")

    def __str__(self) -> str:
        return f"{self.prefix}-{self.number}-{self.slug}"

    @property
    def short(self) -> str:
        return f"{self.prefix}-{self.number}"

    @classmethod
    def parse(cls, name: str) -> "TaskID":
        """Parse a folder name of the form PREFIX-NUMBER-slug."""
        match = _TASK_KEY.match(name)
        if not match:
            raise InvalidTaskIDError(f"not a task identifier: {name!r}")
        prefix, number, slug = match.groups()
        return cls(prefix, int(number), slug)

    @classmethod
    def for_title(cls, prefix: str, number: int, title: str) -> "TaskID":
        return cls(prefix, number, slugify(title))


def is_task_key(name: str) -> bool:
    """True if name looks like a task directory (PREFIX-NUMBER-slug)."""
    match = _TASK_KEY.match(name)
    return bool(match) and int(match.group(2)) > 0
