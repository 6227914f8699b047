"""Handler for 'mkanban migrate' command."""

from mkanban.cli._common import error, open_repository, output_json
from mkanban.errors import MkanbanError


def migrate_boards(args) -> int:
    """Bring one board, or every board, up to the current layout."""
    repo = open_repository(args)
    try:
        changes = repo.migrate(args.board_id)
    except MkanbanError as e:
        error(str(e), args.json)

    if args.json:
        output_json(changes)
        return 0

    changed = {bid: names for bid, names in changes.items() if names}
    if not changed:
        print("nothing to migrate")
    for bid, names in changed.items():
        print(f"{bid}:")
        for name in names:
            print(f"  {name}")
    return 0
