from typing import List

from tree_models import Tree
from tree_styles import StyleLike, get_style


def render(tree: Tree, style: StyleLike = None) -> List[str]:
    """Render ``tree`` as box-drawing lines, one per node, in pre-order.

    The root line is the bare label. Every other node gets
    ``prefix + connector + label``; the prefix handed down to a node's children
    grows by ``pipe`` when the node still has later siblings and by ``empty``
    when it is the last child, so vertical bars only continue where a sibling
    follows further down.
    """
    glyphs = get_style(style)
    root = tree.root
    lines: List[str] = [root.label]

    # (node, prefix, is_last); pushed in reverse so siblings pop in order.
    stack = []
    last_index = len(root.children) - 1
    for index in range(last_index, -1, -1):
        stack.append((root.children[index], "", index == last_index))

    while stack:
        node, prefix, is_last = stack.pop()
        connector = glyphs.end if is_last else glyphs.branch
        lines.append(f"{prefix}{connector}{node.label}")

        if not node.children:
            continue
        child_prefix = prefix + (glyphs.empty if is_last else glyphs.pipe)
        last_index = len(node.children) - 1
        for index in range(last_index, -1, -1):
            stack.append((node.children[index], child_prefix, index == last_index))

    return lines


def render_text(tree: Tree, style: StyleLike = None, newline: str = "\n") -> str:
    return newline.join(render(tree, style))
