"""Shared fixtures for CLI tests."""

import pytest

from mkanban.model import create_board, create_column, create_task
from mkanban.store.repository import BoardRepository


@pytest.fixture
def boards_dir(tmp_path):
    """A boards root holding one saved board with two columns and two tasks."""
    root = tmp_path / "boards"
    board = create_board("Test Board", "A test board.")
    todo = create_column(board, "Todo")
    create_column(board, "Doing", wip_limit=2)
    create_task(board, todo, "First task", priority="high")
    create_task(board, todo, "Second task")
    BoardRepository(root).save(board)
    return root
