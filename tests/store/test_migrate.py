"""Tests for layout migrations."""

import pytest

from mkanban.errors import BoardNotFoundError
from mkanban.parser import parse_yaml


@pytest.fixture
def legacy_board(repo, write_file):
    """A board in the oldest layout: flat, front-matter files everywhere."""
    board_dir = repo.boards_root / "old"
    write_file(board_dir / "board.md", "---\nid: old\nprefix: OLD\nnext_task_num: 3\n---\nOld board\n")
    write_file(
        board_dir / "In_Progress" / "column.md",
        "---\ndisplay_name: In Progress\norder: 1\nwip_limit: 2\ncolor: '#00FF00'\n---\nActive work\n",
    )
    write_file(board_dir / "In_Progress" / "OLD-1-fix-bug" / "metadata.yml", "id: OLD-1\ntitle: Fix bug\n")
    write_file(board_dir / "In_Progress" / "OLD-1-fix-bug" / "task.md", "Details\n")
    write_file(board_dir / "backlog" / "column.md", "---\norder: 0\n---\n")
    write_file(board_dir / "backlog" / "OLD-2-plan" / "task.md", "---\nid: OLD-2\ntitle: Plan\n---\n")
    write_file(board_dir / "assets" / "logo.txt", "not a column")
    return board_dir


def _snapshot(root):
    return sorted((str(p.relative_to(root)), p.read_text() if p.is_file() else None) for p in root.rglob("*"))


def test_columns_to_subdirectory(repo, legacy_board):
    moved = repo.migrate_columns_to_subdirectory("old")
    assert sorted(moved) == ["In_Progress", "backlog"]
    assert (legacy_board / "columns" / "In_Progress" / "column.md").is_file()
    assert (legacy_board / "columns" / "backlog" / "OLD-2-plan" / "task.md").is_file()
    assert (legacy_board / "assets").is_dir()
    assert not (legacy_board / "In_Progress").exists()


def test_tasks_to_subdirectory(repo, legacy_board):
    moved = repo.migrate_tasks_to_subdirectory("old")
    assert sorted(moved) == ["In_Progress/OLD-1-fix-bug", "backlog/OLD-2-plan"]
    assert (legacy_board / "In_Progress" / "tasks" / "OLD-1-fix-bug" / "task.md").read_text() == "Details\n"


def test_split_format(repo, legacy_board):
    migrated = repo.migrate_columns_to_split_format("old")
    assert sorted(migrated) == ["backlog", "in-progress"]

    col_dir = legacy_board / "in-progress"
    assert not (legacy_board / "In_Progress").exists()
    assert parse_yaml((col_dir / "metadata.yml").read_text()) == {"order": 1, "wip_limit": 2, "color": "#00ff00"}
    assert (col_dir / "column.md").read_text() == "# In Progress\n\nActive work\n"
    assert (col_dir / "OLD-1-fix-bug" / "metadata.yml").is_file()
    assert (legacy_board / "backlog" / "column.md").read_text() == "# backlog\n"


def test_split_format_redoes_half_migrated_column(repo, legacy_board):
    col_dir = legacy_board / "backlog"
    (col_dir / "metadata.yml").write_text("order: 99\n")
    assert sorted(repo.migrate_columns_to_split_format("old")) == ["backlog", "in-progress"]
    assert parse_yaml((col_dir / "metadata.yml").read_text()) == {"order": 0, "wip_limit": 0}


def test_split_format_rename_blocked(repo, legacy_board, write_file, caplog):
    write_file(legacy_board / "in-progress" / "column.md", "# In Progress\n")
    migrated = repo.migrate_columns_to_split_format("old")
    assert "in-progress" not in migrated
    assert (legacy_board / "In_Progress" / "column.md").read_text().startswith("---")
    assert "already exists" in caplog.text


def test_migrate_all_then_load(repo, legacy_board):
    changes = repo.migrate()
    assert changes["old"]

    assert (legacy_board / "columns" / "in-progress" / "tasks" / "OLD-1-fix-bug" / "metadata.yml").is_file()
    assert (legacy_board / "columns" / "backlog" / "tasks" / "OLD-2-plan" / "task.md").is_file()

    board = repo.find_by_id("old")
    assert [c.name for c in board.columns] == ["backlog", "In Progress"]
    assert board.columns[1].tasks[0].description == "Details"
    assert board.columns[0].tasks[0].title == "Plan"


@pytest.mark.parametrize(
    "operation",
    [
        "migrate_columns_to_subdirectory",
        "migrate_tasks_to_subdirectory",
        "migrate_columns_to_split_format",
        "migrate",
    ],
)
def test_migrations_idempotent(repo, legacy_board, operation):
    getattr(repo, operation)("old")
    once = _snapshot(legacy_board)
    second = getattr(repo, operation)("old")
    assert _snapshot(legacy_board) == once
    assert second in ([], {"old": []})


def test_migrations_noop_on_current_layout(repo, demo_board):
    repo.save(demo_board)
    board_dir = repo.boards_root / "demo"
    before = _snapshot(board_dir)
    assert repo.migrate("demo") == {"demo": []}
    assert _snapshot(board_dir) == before


def test_mixed_board_finishes_stragglers(repo, demo_board, write_file):
    repo.save(demo_board)
    board_dir = repo.boards_root / "demo"
    write_file(board_dir / "Done" / "column.md", "---\ndisplay_name: Done\norder: 5\n---\n")

    repo.migrate("demo")

    assert (board_dir / "columns" / "done" / "metadata.yml").is_file()
    assert not (board_dir / "Done").exists()
    assert [c.name for c in repo.find_by_id("demo").columns] == ["In Progress", "Done"]


def test_migrate_missing_board(repo):
    with pytest.raises(BoardNotFoundError):
        repo.migrate_columns_to_subdirectory("nope")
