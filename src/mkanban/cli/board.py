"""Handlers for 'mkanban board' commands."""

from mkanban.cli._common import (
    board_detail,
    board_summary,
    error,
    load_board_or_die,
    open_repository,
    output_json,
    output_result,
)
from mkanban.errors import MkanbanError


def board_list(args) -> int:
    """List every loadable board with column and task counts."""
    repo = open_repository(args)
    try:
        boards = repo.find_all()
    except MkanbanError as e:
        error(str(e), args.json)

    items = [board_summary(b) for b in boards]
    if args.json:
        output_json(items)
    elif not items:
        print("no boards")
    else:
        for b in items:
            tasks = "task" if b["tasks"] == 1 else "tasks"
            print(f"{b['id']:<20} {b['name']:<24} {b['tasks']} {tasks}")
    return 0


def board_show(args) -> int:
    """Show a board's columns and tasks."""
    repo = open_repository(args)
    board = load_board_or_die(repo, args.id, args.json)

    if args.json:
        output_json(board_detail(board))
        return 0

    print(board.name)
    if board.description:
        print(f"  {board.description}")
    for col in board.columns:
        limit = f"/{col.wip_limit}" if col.wip_limit else ""
        print(f"  {col.name} ({len(col.tasks)}{limit})")
        for task in col.tasks:
            print(f"    {task.id.short}  {task.title}  [{task.priority.value}]")
    return 0


def board_delete(args) -> int:
    """Delete a board directory and everything in it."""
    repo = open_repository(args)
    try:
        repo.delete(args.id)
    except MkanbanError as e:
        error(str(e), args.json)

    output_result({"deleted": args.id}, f"Deleted board {args.id}", args.json)
    return 0
