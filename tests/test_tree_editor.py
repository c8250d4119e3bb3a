from tree_editor import TreeEditor
from tree_models import Tree
from tree_render import render


def _labels(editor):
    return [node.label for node in editor.tree.walk()]


class TestSelectNode:
    def test_cursor_starts_at_root(self):
        editor = TreeEditor(Tree("R"))
        assert editor.selected is editor.tree.root
        assert editor.selected_id == 0

    def test_select_by_id(self, sample_editor):
        b = sample_editor.tree.root.children[1]
        assert sample_editor.select_node(b.id)
        assert sample_editor.selected is b

    def test_unknown_id_leaves_cursor(self, sample_editor):
        assert not sample_editor.select_node(12345)
        assert sample_editor.selected is sample_editor.tree.root

    def test_foreign_node_is_refused(self, sample_editor):
        other = Tree("other")
        assert not sample_editor.select_node(other.root)
        assert sample_editor.selected is sample_editor.tree.root


class TestInsertChild:
    def test_appends_as_last_child(self, sample_editor):
        root = sample_editor.tree.root
        assert sample_editor.insert_child(root, "  C ")
        created = sample_editor.last_created
        assert root.children[-1] is created
        found = sample_editor.tree.find_by_id(created.id)
        assert found is created
        assert found.parent is root
        assert found.label == "C"

    def test_defaults_to_selection(self, sample_editor):
        b = sample_editor.tree.root.children[1]
        sample_editor.select_node(b)
        assert sample_editor.insert_child(None, "under b")
        assert b.children[0].label == "under b"

    def test_cursor_stays_unless_asked(self, sample_editor):
        root = sample_editor.tree.root
        sample_editor.insert_child(root, "stay")
        assert sample_editor.selected is root
        sample_editor.insert_child(root, "move", select=True)
        assert sample_editor.selected.label == "move"

    def test_blank_label_refused(self, sample_editor):
        before = render(sample_editor.tree)
        assert not sample_editor.insert_child(sample_editor.tree.root, " \t ")
        assert render(sample_editor.tree) == before

    def test_stale_parent_refused(self, sample_editor):
        a = sample_editor.tree.root.children[0]
        sample_editor.delete_subtree(a)
        assert not sample_editor.insert_child(a.id, "ghost")
        assert not sample_editor.insert_child(a, "ghost")


class TestInsertSibling:
    def test_inserted_right_after_target(self, sample_editor):
        a = sample_editor.tree.root.children[0]
        assert sample_editor.insert_sibling(a, "A2")
        assert [child.label for child in sample_editor.tree.root.children] == ["A", "A2", "B"]
        assert sample_editor.last_created.parent is sample_editor.tree.root

    def test_after_last_child(self, sample_editor):
        b = sample_editor.tree.root.children[1]
        assert sample_editor.insert_sibling(b, "C", select=True)
        assert sample_editor.tree.root.children[-1].label == "C"
        assert sample_editor.selected.label == "C"

    def test_root_refused(self, sample_editor):
        before = render(sample_editor.tree)
        assert not sample_editor.insert_sibling(sample_editor.tree.root, "nope")
        assert render(sample_editor.tree) == before

    def test_blank_label_refused(self, sample_editor):
        a = sample_editor.tree.root.children[0]
        assert not sample_editor.insert_sibling(a, "")
        assert len(sample_editor.tree) == 4


class TestRename:
    def test_rename_trims(self, sample_editor):
        a = sample_editor.tree.root.children[0]
        assert sample_editor.rename(a, "  Alpha  ")
        assert a.label == "Alpha"

    def test_rename_root(self, sample_editor):
        assert sample_editor.rename(None, "Top")
        assert render(sample_editor.tree)[0] == "Top"

    def test_blank_keeps_previous_label(self, sample_editor):
        a = sample_editor.tree.root.children[0]
        assert not sample_editor.rename(a, "   ")
        assert a.label == "A"


class TestDeleteSubtree:
    def test_removes_node_and_descendants(self, sample_editor):
        a = sample_editor.tree.root.children[0]
        assert sample_editor.delete_subtree(a)
        assert sample_editor.last_removed_count == 2
        assert len(sample_editor.tree) == 2
        assert _labels(sample_editor) == ["R", "B"]

    def test_cursor_moves_to_former_parent(self, sample_editor):
        a = sample_editor.tree.root.children[0]
        sample_editor.delete_subtree(a)
        assert sample_editor.selected is sample_editor.tree.root

    def test_cursor_inside_subtree_is_redirected(self, sample_editor):
        a = sample_editor.tree.root.children[0]
        x = a.children[0]
        sample_editor.select_node(x)
        sample_editor.delete_subtree(a.id)
        assert sample_editor.selected is sample_editor.tree.root
        assert sample_editor.tree.find_by_id(x.id) is None

    def test_deletes_selection_by_default(self, sample_editor):
        a = sample_editor.tree.root.children[0]
        x = a.children[0]
        sample_editor.select_node(x)
        assert sample_editor.delete_subtree(None)
        assert sample_editor.selected is a
        assert a.children == []

    def test_root_refused(self, sample_editor):
        assert not sample_editor.delete_subtree(sample_editor.tree.root)
        assert len(sample_editor.tree) == 4

    def test_identifiers_are_not_reused(self, sample_editor):
        a = sample_editor.tree.root.children[0]
        old_ids = {a.id, a.children[0].id}
        sample_editor.delete_subtree(a)
        sample_editor.insert_child(None, "fresh")
        assert sample_editor.last_created.id not in old_ids
        for stale in old_ids:
            assert not sample_editor.select_node(stale)
