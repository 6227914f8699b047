"""CLI argument parser and dispatch for mkanban."""

import argparse

from mkanban.cli.board import board_delete, board_list, board_show
from mkanban.cli.migrate import migrate_boards


def build_parser() -> argparse.ArgumentParser:
    """Build the full CLI argument parser."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--boards", help="Boards directory (default: from config)")
    common.add_argument("--json", action="store_true", help="Machine-readable JSON output")
    common.add_argument("-v", "--verbose", action="store_true", help="Debug logging to stderr")

    parser = argparse.ArgumentParser(
        prog="mkanban",
        description="Markdown kanban boards on the filesystem",
        parents=[common],
    )

    nouns = parser.add_subparsers(dest="noun")

    # --- board ---
    board_p = nouns.add_parser("board", help="Board operations", parents=[common])
    board_verbs = board_p.add_subparsers(dest="verb")

    board_list_p = board_verbs.add_parser("list", help="List boards", parents=[common])
    board_list_p.set_defaults(func=board_list)

    board_show_p = board_verbs.add_parser("show", help="Show a board", parents=[common])
    board_show_p.add_argument("id", help="Board ID")
    board_show_p.set_defaults(func=board_show)

    board_delete_p = board_verbs.add_parser("delete", help="Delete a board", parents=[common])
    board_delete_p.add_argument("id", help="Board ID")
    board_delete_p.set_defaults(func=board_delete)

    # board with no verb = list
    board_p.set_defaults(func=board_list)

    # --- migrate ---
    migrate_p = nouns.add_parser("migrate", help="Upgrade boards to the current layout", parents=[common])
    migrate_p.add_argument("--board-id", dest="board_id", help="Only migrate this board")
    migrate_p.set_defaults(func=migrate_boards)

    return parser
