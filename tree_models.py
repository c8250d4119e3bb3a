from dataclasses import dataclass, field
from itertools import count
from typing import Iterator, List, Optional


def normalize_label(text: Optional[str]) -> Optional[str]:
    """Return ``text`` trimmed, or ``None`` when nothing is left."""
    if text is None:
        return None
    stripped = text.strip()
    return stripped or None


@dataclass(eq=False)
class TreeNode:
    id: int
    label: str
    # Back-reference only; ownership runs downward through ``children``.
    parent: Optional["TreeNode"] = field(default=None, repr=False)
    children: List["TreeNode"] = field(default_factory=list, repr=False)

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def index_in_parent(self) -> int:
        if self.parent is None:
            raise ValueError("root node has no parent")
        for index, sibling in enumerate(self.parent.children):
            if sibling is self:
                return index
        raise ValueError(f"node {self.id} is detached from its parent")

    def subtree_size(self) -> int:
        total = 0
        stack = [self]
        while stack:
            node = stack.pop()
            total += 1
            stack.extend(node.children)
        return total


class Tree:
    """Owns the root node and the identifier counter for its nodes."""

    def __init__(self, root_label: str = "Root") -> None:
        self._ids = count()
        self.root = self.create_node(root_label, None)

    def create_node(self, label: str, parent: Optional[TreeNode]) -> TreeNode:
        """Build a node with a fresh identifier.

        The node is *not* appended to ``parent.children``; attaching it is up
        to the caller.
        """
        normalized = normalize_label(label)
        if normalized is None:
            raise ValueError("node label must not be empty")
        return TreeNode(id=next(self._ids), label=normalized, parent=parent)

    def walk(self) -> Iterator[TreeNode]:
        """Yield every node in pre-order, children in stored order."""
        stack = [self.root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def find_by_id(self, node_id: int) -> Optional[TreeNode]:
        for node in self.walk():
            if node.id == node_id:
                return node
        return None

    def contains(self, node: TreeNode) -> bool:
        return self.find_by_id(node.id) is node

    def __len__(self) -> int:
        return self.root.subtree_size()
