"""Tests for stale-directory reconciliation."""

from pathlib import Path

from mkanban.store.reconcile import prune, reconcile


def test_reconcile_returns_stale_sorted():
    assert reconcile(["todo", "done"], ["todo", "old", "archive", "done"]) == ["archive", "old"]


def test_reconcile_nothing_stale():
    assert reconcile(["a", "b"], ["a"]) == []
    assert reconcile([], []) == []


def test_reconcile_everything_stale():
    assert reconcile([], ["b", "a"]) == ["a", "b"]


def test_prune_removes_only_stale(memfs):
    container = Path("/boards/demo/columns")
    for key in ("todo", "doing", "gone"):
        memfs.write_text(container / key / "column.md", f"# {key}\n")

    removed = prune(memfs, container, ["todo", "doing"])

    assert removed == ["gone"]
    assert memfs.list_dirs(container) == ["doing", "todo"]
    assert container / "gone" / "column.md" not in memfs.files
    assert memfs.read_text(container / "todo" / "column.md") == "# todo\n"


def test_prune_missing_container(memfs):
    assert prune(memfs, Path("/boards/demo/columns"), ["todo"]) == []
