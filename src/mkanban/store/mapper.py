"""Convert entities to and from their stored key/value blocks.

The to-storage functions return plain dicts ready for YAML. The
from-storage functions take the directory-derived key or id as the
authority and check it against whatever the file itself claims.
"""

from datetime import datetime
from typing import Any

from mkanban.errors import ConsistencyError, DomainError, InvalidFieldError, MissingFieldError
from mkanban.ids import TaskID
from mkanban.model.board import Board
from mkanban.model.column import Column, normalize_color
from mkanban.model.task import Priority, Status, Task
from mkanban.parser import Document, serialize_titled_markdown


def _timestamp(value: datetime) -> str:
    return value.isoformat()


def _restore_times(entity: Board | Task, doc: Document) -> None:
    """Overwrite construction-time timestamps with stored ones, when present."""
    created = doc.get_datetime("created")
    if created is not None:
        entity.created_at = created
    modified = doc.get_datetime("modified")
    if modified is not None:
        entity.modified_at = modified


# --- Board ---


def board_to_metadata(board: Board) -> dict[str, Any]:
    return {
        "id": board.id,
        "prefix": board.prefix,
        "created": _timestamp(board.created_at),
        "modified": _timestamp(board.modified_at),
        "description": board.description,
        "next_task_num": board.next_task_num,
    }


def board_to_markdown(board: Board) -> str:
    return serialize_titled_markdown(board.name, board.description)


def board_from_storage(meta: dict[str, Any], board_id: str, name: str, description: str) -> Board:
    """Build a board from a split pair.

    The board.md body is the description; metadata.yml's copy is only used
    when the body is empty.
    """
    doc = Document(meta=meta)
    stored_id = doc.get_str("id")
    if not stored_id:
        raise MissingFieldError("id", f"board {board_id}")
    if stored_id != board_id:
        raise ConsistencyError(f"board directory {board_id!r} holds metadata for {stored_id!r}")

    board = Board(
        id=board_id,
        name=name or board_id,
        description=description or doc.get_str("description"),
        prefix=doc.get_str("prefix"),
    )
    next_num = doc.get_int("next_task_num")
    if next_num > 0:
        board.next_task_num = next_num
    _restore_times(board, doc)
    return board


def board_from_legacy(doc: Document, board_id: str) -> Board:
    """Build a board from a single front-matter board.md."""
    name = doc.get_str("name") or board_id
    return board_from_storage(doc.meta, board_id, name, doc.body)


# --- Column ---


def column_to_metadata(column: Column) -> dict[str, Any]:
    meta: dict[str, Any] = {
        "order": column.order,
        "wip_limit": column.wip_limit,
    }
    if column.color:
        meta["color"] = column.color
    return meta


def column_to_markdown(column: Column) -> str:
    return serialize_titled_markdown(column.name, column.description)


def _stored_color(doc: Document) -> str | None:
    value = doc.get_str("color")
    if not value:
        return None
    try:
        return normalize_color(value)
    except DomainError:
        return None


def column_from_storage(meta: dict[str, Any], key: str, title: str, description: str) -> Column:
    """Build a column from a split pair. An empty title falls back to the key."""
    doc = Document(meta=meta)
    return Column(
        name=title or key,
        description=description,
        order=doc.get_int("order"),
        wip_limit=doc.get_int("wip_limit"),
        color=_stored_color(doc),
    )


def column_from_legacy(doc: Document, key: str) -> Column:
    """Build a column from a front-matter column.md.

    The display name lives in ``display_name``; the description is either a
    ``description`` field or the body.
    """
    return Column(
        name=doc.get_str("display_name") or key,
        description=doc.get_str("description") or doc.body,
        order=doc.get_int("order"),
        wip_limit=doc.get_int("wip_limit"),
        color=_stored_color(doc),
    )


# --- Task ---


def task_to_storage(task: Task) -> tuple[dict[str, Any], str]:
    """Return (metadata, body) for a task. Empty optional fields are left out."""
    meta: dict[str, Any] = {
        "id": task.id.short,
        "title": task.title,
        "created": _timestamp(task.created_at),
        "modified": _timestamp(task.modified_at),
        "priority": task.priority.value,
        "status": task.status.value,
    }
    if task.due_date is not None:
        meta["due_date"] = _timestamp(task.due_date)
    if task.completed_date is not None:
        meta["completed_date"] = _timestamp(task.completed_date)
    if task.tags:
        meta["tags"] = list(task.tags)
    if task.metadata:
        meta["metadata"] = dict(task.metadata)
    return meta, task.description


def task_from_storage(meta: dict[str, Any], body: str, task_id: TaskID) -> Task:
    """Build a task from stored metadata and body.

    ``task_id`` comes from the directory name. The file's ``id`` is the
    short form and must agree with it when present.
    """
    doc = Document(meta=meta)
    source = f"task {task_id}"

    stored_id = doc.get_str("id")
    if stored_id and stored_id != task_id.short:
        raise ConsistencyError(f"{source}: metadata id {stored_id!r} does not match directory id {task_id.short!r}")

    title = doc.get_str("title")
    if not title:
        raise MissingFieldError("title", source)

    try:
        priority = Priority(doc.get_str("priority") or Priority.NONE.value)
    except ValueError as e:
        raise InvalidFieldError(f"{source}: invalid priority {doc.get_str('priority')!r}") from e
    try:
        status = Status(doc.get_str("status") or Status.TODO.value)
    except ValueError as e:
        raise InvalidFieldError(f"{source}: invalid status {doc.get_str('status')!r}") from e

    task = Task(
        id=task_id,
        title=title,
        description=body,
        priority=priority,
        status=status,
        tags=doc.get_list("tags"),
        due_date=doc.get_datetime("due_date"),
        completed_date=doc.get_datetime("completed_date"),
        metadata=doc.get_dict("metadata"),
    )
    _restore_times(task, doc)
    return task
