from typing import Optional, Union

from tree_models import Tree, TreeNode, normalize_label

NodeRef = Union[TreeNode, int, None]


class TreeEditor:
    """Structural edits on a ``Tree`` under a single selection cursor.

    Every command either applies completely and returns ``True`` or leaves the
    tree untouched and returns ``False``. Refusals are ordinary outcomes (root
    has no siblings, blank label, stale identifier) and never raise.
    """

    def __init__(self, tree: Tree) -> None:
        self.tree = tree
        self._selected: TreeNode = tree.root
        self.last_created: Optional[TreeNode] = None
        self.last_removed_count = 0

    @property
    def selected(self) -> TreeNode:
        return self._selected

    @property
    def selected_id(self) -> int:
        return self._selected.id

    def resolve(self, ref: NodeRef) -> Optional[TreeNode]:
        """Map a node, identifier or ``None`` (the selection) to a live node."""
        if ref is None:
            return self._selected
        if isinstance(ref, TreeNode):
            # Nodes from another tree, or already deleted, are refused.
            return ref if self.tree.contains(ref) else None
        return self.tree.find_by_id(ref)

    def select_node(self, ref: NodeRef) -> bool:
        node = self.resolve(ref)
        if node is None:
            return False
        self._selected = node
        return True

    def insert_child(self, parent: NodeRef, label: str, *, select: bool = False) -> bool:
        target = self.resolve(parent)
        normalized = normalize_label(label)
        if target is None or normalized is None:
            return False
        new_node = self.tree.create_node(normalized, target)
        target.children.append(new_node)
        self._created(new_node, select)
        return True

    def insert_sibling(self, node: NodeRef, label: str, *, select: bool = False) -> bool:
        target = self.resolve(node)
        normalized = normalize_label(label)
        if target is None or normalized is None or target.parent is None:
            return False
        parent = target.parent
        new_node = self.tree.create_node(normalized, parent)
        parent.children.insert(target.index_in_parent() + 1, new_node)
        self._created(new_node, select)
        return True

    def rename(self, node: NodeRef, label: str) -> bool:
        target = self.resolve(node)
        normalized = normalize_label(label)
        if target is None or normalized is None:
            return False
        target.label = normalized
        return True

    def delete_subtree(self, node: NodeRef) -> bool:
        target = self.resolve(node)
        if target is None or target.parent is None:
            return False
        parent = target.parent
        removed = target.subtree_size()
        del parent.children[target.index_in_parent()]
        target.parent = None
        self.last_removed_count = removed
        # The cursor may have pointed anywhere inside the removed subtree.
        self._selected = parent
        return True

    def _created(self, node: TreeNode, select: bool) -> None:
        self.last_created = node
        if select:
            self._selected = node
