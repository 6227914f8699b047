"""Tests for saving boards to disk."""

import pytest

from mkanban.errors import StorageError
from mkanban.model import Column, create_column, create_task
from mkanban.parser import parse_yaml


def test_save_layout(repo, demo_board):
    repo.save(demo_board)

    board_dir = repo.boards_root / "demo"
    task_dir = board_dir / "columns" / "in-progress" / "tasks" / "DEMO-1-fix-bug"
    assert (board_dir / "metadata.yml").is_file()
    assert (board_dir / "board.md").read_text() == "# Demo\n\nA demo board.\n"
    assert (board_dir / "columns" / "in-progress" / "column.md").read_text() == "# In Progress\n"
    assert (task_dir / "metadata.yml").is_file()
    assert (task_dir / "task.md").is_file()


def test_saved_metadata_contents(repo, demo_board):
    repo.save(demo_board)

    col_dir = repo.boards_root / "demo" / "columns" / "in-progress"
    assert parse_yaml((col_dir / "metadata.yml").read_text()) == {"order": 0, "wip_limit": 3}

    meta = parse_yaml((col_dir / "tasks" / "DEMO-1-fix-bug" / "metadata.yml").read_text())
    assert meta["id"] == "DEMO-1"
    assert meta["title"] == "Fix bug"
    assert meta["priority"] == "high"
    assert meta["tags"] == ["urgent"]
    assert "due_date" not in meta

    board_meta = parse_yaml((repo.boards_root / "demo" / "metadata.yml").read_text())
    assert board_meta["id"] == "demo"
    assert board_meta["next_task_num"] == 2


def test_task_body_written(repo, demo_board):
    demo_board.columns[0].tasks[0].update_description("Line one\n\nLine two")
    repo.save(demo_board)
    task_md = repo.boards_root / "demo" / "columns" / "in-progress" / "tasks" / "DEMO-1-fix-bug" / "task.md"
    assert task_md.read_text() == "Line one\n\nLine two\n"


def test_removed_task_directory_deleted(repo, demo_board):
    repo.save(demo_board)
    col = demo_board.columns[0]
    col.remove_task("DEMO-1")
    repo.save(demo_board)

    col_dir = repo.boards_root / "demo" / "columns" / "in-progress"
    assert not (col_dir / "tasks" / "DEMO-1-fix-bug").exists()
    assert (col_dir / "metadata.yml").is_file()
    assert (col_dir / "column.md").is_file()


def test_removed_column_subtree_deleted(repo, demo_board):
    done = create_column(demo_board, "Done")
    create_task(demo_board, done, "Ship")
    repo.save(demo_board)

    demo_board.remove_column("In Progress")
    repo.save(demo_board)

    columns = repo.boards_root / "demo" / "columns"
    assert sorted(p.name for p in columns.iterdir()) == ["done"]
    assert (columns / "done" / "tasks" / "DEMO-2-ship" / "metadata.yml").is_file()


def test_renamed_column_moves_directory(repo, demo_board):
    repo.save(demo_board)
    demo_board.rename_column("In Progress", "Doing")
    repo.save(demo_board)

    columns = repo.boards_root / "demo" / "columns"
    assert sorted(p.name for p in columns.iterdir()) == ["doing"]
    assert (columns / "doing" / "tasks" / "DEMO-1-fix-bug" / "task.md").is_file()


def test_same_key_saved_twice(repo, demo_board):
    repo.save(demo_board)
    repo.save(demo_board)
    assert [p.name for p in (repo.boards_root / "demo" / "columns").iterdir()] == ["in-progress"]


def test_unrelated_board_files_survive(repo, demo_board):
    repo.save(demo_board)
    notes = repo.boards_root / "demo" / "notes.txt"
    notes.write_text("keep me")
    repo.save(demo_board)
    assert notes.read_text() == "keep me"


def test_colliding_keys_logged(mem_repo, demo_board, caplog):
    demo_board.columns.append(Column(name="in progress", order=5))
    mem_repo.save(demo_board)
    assert "overwrites another column" in caplog.text
    assert mem_repo.fs.list_dirs(mem_repo.paths.columns_dir("demo")) == ["in-progress"]


def test_write_failure_aborts_save(mem_repo, demo_board, monkeypatch):
    fs = mem_repo.fs
    real_write = fs.write_text

    def failing_write(path, text):
        if path.name == "task.md":
            raise StorageError(path, "write", "disk full")
        real_write(path, text)

    monkeypatch.setattr(fs, "write_text", failing_write)
    with pytest.raises(StorageError):
        mem_repo.save(demo_board)

    # Files written before the failure stay; nothing is rolled back.
    assert fs.exists(mem_repo.paths.board_files("demo").metadata)
