import pytest

from tree_editor import TreeEditor
from tree_models import Tree


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    monkeypatch.setenv("TR33DR4W_EDIT_LOG", str(tmp_path / "edit.log"))
    # Registered so set_active_style() is undone after each test.
    monkeypatch.setenv("TR33DR4W_STYLE", "")
    monkeypatch.delenv("TR33DR4W_STYLE")


@pytest.fixture
def sample_editor():
    """R with children A (holding X) and B."""
    editor = TreeEditor(Tree("R"))
    root = editor.tree.root
    editor.insert_child(root, "A")
    a = editor.last_created
    editor.insert_child(root, "B")
    editor.insert_child(a, "X")
    return editor
