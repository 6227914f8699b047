"""Shared helpers for CLI command handlers."""

import json
import logging
import sys

from mkanban.config import load_config
from mkanban.errors import MkanbanError
from mkanban.model.board import Board
from mkanban.store.repository import BoardRepository


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(message)s",
        stream=sys.stderr,
        level=logging.DEBUG if verbose else logging.WARNING,
    )


def open_repository(args) -> BoardRepository:
    """Repository for --boards if given, else for the configured boards root."""
    if getattr(args, "boards", None):
        return BoardRepository(args.boards)
    try:
        config = load_config()
    except MkanbanError as e:
        error(str(e), args.json)
    return BoardRepository(config.boards_path)


def load_board_or_die(repo: BoardRepository, board_id: str, json_mode: bool) -> Board:
    """Load a board by id. Exit 1 with message if it cannot be loaded."""
    try:
        return repo.find_by_id(board_id)
    except MkanbanError as e:
        error(str(e), json_mode)


def board_summary(board: Board) -> dict:
    return {
        "id": board.id,
        "name": board.name,
        "prefix": board.prefix,
        "columns": len(board.columns),
        "tasks": len(board.all_tasks()),
    }


def board_detail(board: Board) -> dict:
    """Full JSON-ready view of a board."""
    return {
        "id": board.id,
        "name": board.name,
        "description": board.description,
        "prefix": board.prefix,
        "next_task_num": board.next_task_num,
        "created": board.created_at.isoformat(),
        "modified": board.modified_at.isoformat(),
        "columns": [
            {
                "key": col.key,
                "name": col.name,
                "order": col.order,
                "wip_limit": col.wip_limit,
                "color": col.color,
                "tasks": [
                    {
                        "id": str(task.id),
                        "title": task.title,
                        "priority": task.priority.value,
                        "status": task.status.value,
                        "tags": list(task.tags),
                    }
                    for task in col.tasks
                ],
            }
            for col in board.columns
        ],
    }


def output_json(data: dict | list) -> None:
    """Write JSON to stdout."""
    print(json.dumps(data, indent=2))


def output_result(data: dict, text: str, json_mode: bool) -> None:
    """Output mutation result as JSON or plain text."""
    if json_mode:
        output_json(data)
    else:
        print(text)


def error(message: str, json_mode: bool) -> None:
    """Print error to stderr and exit 1."""
    if json_mode:
        print(json.dumps({"error": message}), file=sys.stderr)
    else:
        print(f"error: {message}", file=sys.stderr)
    sys.exit(1)
