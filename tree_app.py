from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Footer, Header, Input, OptionList, Static, TextArea, Tree
from textual.widgets.option_list import Option, OptionDoesNotExist
from textual.widgets._tree import TextType
from rich.text import Text

import edit_log
from tree_editor import TreeEditor
from tree_models import Tree as LabelTree
from tree_models import TreeNode, normalize_label
from tree_render import render_text
from tree_styles import AVAILABLE_STYLES, BranchStyle, get_active_style, set_active_style

DEFAULT_ROOT_LABEL = "Root"
DEFAULT_NEW_LABEL = "New node"


class OutlineTree(Tree[int]):
    """Tree widget whose node data is the model node identifier."""

    def process_label(self, label: TextType) -> Text:
        # Labels are user text, never markup.
        if isinstance(label, str):
            return Text(label, justify="left")
        return label


class StyleSelectorScreen(ModalScreen[str | None]):
    """Modal dialog that lets the user pick a branch style."""

    DEFAULT_CSS = """
    StyleSelectorScreen {
        align: center middle;
    }

    #style-selector-panel {
        min-width: 40;
        max-width: 60;
        height: auto;
        background: $panel;
        border: round $secondary;
        padding: 1 2 2 2;
        box-sizing: border-box;
    }

    #style-selector-title {
        content-align: center middle;
        text-style: bold;
        padding-bottom: 1;
    }

    #style-selector-list {
        border: none;
        background: $surface;
        padding: 0;
    }

    #style-selector-list:focus {
        border: none;
        outline: none;
    }
    """

    def __init__(self, styles: list[str], current_style: str) -> None:
        super().__init__()
        self._styles = styles
        self._current_style = current_style

    @staticmethod
    def _sample(name: str) -> Text:
        glyphs = BranchStyle(name).glyphs
        return Text(f"{name:<8}{glyphs.branch}a  {glyphs.end}b")

    def compose(self) -> ComposeResult:
        with Vertical(id="style-selector-panel"):
            yield Static("Branch style", id="style-selector-title")
            yield OptionList(
                *[Option(self._sample(name), id=name) for name in self._styles],
                id="style-selector-list",
            )

    def on_mount(self) -> None:
        option_list = self.query_one("#style-selector-list", OptionList)
        option_list.focus()
        try:
            option_list.highlighted = option_list.get_option_index(self._current_style)
        except OptionDoesNotExist:
            option_list.highlighted = 0 if option_list.option_count else None

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        event.stop()
        self.dismiss(event.option_id)

    def on_key(self, event: events.Key) -> None:
        if event.key == "escape":
            event.stop()
            self.dismiss(None)


class LabelPromptScreen(ModalScreen[str | None]):
    """Modal prompt asking for a node label."""

    DEFAULT_CSS = """
    LabelPromptScreen {
        align: center middle;
        background: transparent;
    }

    #label-prompt-panel {
        width: 60;
        height: auto;
        background: $panel;
        border: round $secondary;
        padding: 0 1;
    }

    #label-prompt-title {
        text-style: bold;
    }

    #label-prompt-field {
        background: $surface;
    }
    """

    def __init__(self, title: str, initial_label: str) -> None:
        super().__init__()
        self._title = title
        self._initial_label = initial_label

    def compose(self) -> ComposeResult:
        with Vertical(id="label-prompt-panel"):
            yield Static(self._title, id="label-prompt-title")
            yield Input(value=self._initial_label, id="label-prompt-field")

    def on_mount(self) -> None:
        self.query_one("#label-prompt-field", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.dismiss(event.value)

    def on_key(self, event: events.Key) -> None:
        if event.key == "escape":
            event.stop()
            self.dismiss(None)


class ConfirmDeleteScreen(ModalScreen[bool]):
    """Yes/no confirmation before a subtree is discarded."""

    DEFAULT_CSS = """
    ConfirmDeleteScreen {
        align: center middle;
    }

    #confirm-delete-message {
        width: 60;
        height: auto;
        background: $panel;
        border: round $error;
        padding: 1 2;
    }
    """

    def __init__(self, message: str) -> None:
        super().__init__()
        self._message = message

    def compose(self) -> ComposeResult:
        # Plain Text: labels may contain square brackets.
        yield Static(Text(f"{self._message}\n\n[y] delete   [n] keep"), id="confirm-delete-message")

    def on_key(self, event: events.Key) -> None:
        if event.key in ("y", "enter"):
            event.stop()
            self.dismiss(True)
        elif event.key in ("n", "escape"):
            event.stop()
            self.dismiss(False)


class TreeDrawApp(App[None]):
    """Textual front end: edit a labelled tree and watch its text diagram."""

    TITLE = "tr33dr4w"

    CSS = """
    #outline-tree {
        width: 1fr;
    }
    #ascii-output {
        width: 2fr;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit", show=False),
        Binding("tab", "add_child", "(child +)", priority=True),
        Binding("n", "add_sibling", "(sibling +)"),
        Binding("e", "edit_node", "(edit)"),
        Binding("0", "delete_node", "(del)"),
        Binding("delete", "delete_node", "(del)", show=False),
        Binding("s", "choose_style", "Style"),
        Binding("c", "copy_ascii", "Copy"),
    ]

    def __init__(self, root_label: str = DEFAULT_ROOT_LABEL, style: str | None = None) -> None:
        super().__init__()
        self.title = "tr33dr4w"
        self.editor = TreeEditor(LabelTree(normalize_label(root_label) or DEFAULT_ROOT_LABEL))
        self.branch_style = set_active_style(style) if style else get_active_style()
        self._tree_widget: Optional[OutlineTree] = None
        self._output_widget: Optional[TextArea] = None
        self._widget_nodes: dict[int, Tree.Node[int]] = {}
        self._cursor_sync_pending = False
        edit_log.reset_edit_log()

    @property
    def ascii_text(self) -> str:
        return render_text(self.editor.tree, self.branch_style)

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Horizontal():
            tree = OutlineTree(self.editor.tree.root.label, id="outline-tree")
            tree.show_root = True
            tree.auto_expand = False
            self._tree_widget = tree
            yield tree
            output = TextArea(id="ascii-output", read_only=True, soft_wrap=False)
            self._output_widget = output
            yield output
        yield Footer()

    def on_mount(self) -> None:
        self.refresh_views()
        self.require_tree().focus()
        self.show_status()

    def require_tree(self) -> OutlineTree:
        if self._tree_widget is None:
            raise RuntimeError("Tree widget not initialised")
        return self._tree_widget

    def require_output(self) -> TextArea:
        if self._output_widget is None:
            raise RuntimeError("Output widget not initialised")
        return self._output_widget

    # -- view refresh -------------------------------------------------

    def refresh_views(self) -> None:
        self.rebuild_tree()
        self.require_output().load_text(self.ascii_text)

    def rebuild_tree(self) -> None:
        tree = self.require_tree()
        tree.clear()
        self._widget_nodes = {}
        root = self.editor.tree.root
        tree.root.set_label(self._format_node_label(root))
        tree.root.data = root.id
        self._widget_nodes[root.id] = tree.root
        self.populate_tree(tree.root, root)
        tree.root.expand_all()
        tree.refresh(layout=True)
        # Line numbers are only known after the next refresh.
        self._cursor_sync_pending = True
        tree.call_after_refresh(self._restore_cursor)

    def populate_tree(self, tree_node: Tree.Node[int], model_node: TreeNode) -> None:
        for child in model_node.children:
            child_tree_node = tree_node.add(self._format_node_label(child), data=child.id)
            self._widget_nodes[child.id] = child_tree_node
            self.populate_tree(child_tree_node, child)

    def _restore_cursor(self) -> None:
        self._cursor_sync_pending = False
        tree = self.require_tree()
        widget_node = self._widget_nodes.get(self.editor.selected_id, tree.root)
        tree.select_node(widget_node)
        tree.scroll_to_node(widget_node)

    @staticmethod
    def _format_node_label(node: TreeNode) -> Text:
        if node.is_root:
            return Text(node.label, style="bold")
        return Text(node.label)

    # -- selection ----------------------------------------------------

    def _prompt_open(self) -> bool:
        # Priority bindings such as ``tab`` still fire while a modal is up.
        return isinstance(self.screen, ModalScreen)

    def on_tree_node_selected(self, event: Tree.NodeSelected[int]) -> None:
        if event.node.data is not None:
            self.editor.select_node(event.node.data)

    def sync_selection(self) -> TreeNode:
        """Point the editor cursor at the widget cursor and return it."""
        if not self._cursor_sync_pending:
            cursor = self.require_tree().cursor_node
            if cursor is not None and cursor.data is not None:
                # A stale identifier simply leaves the cursor where it was.
                self.editor.select_node(cursor.data)
        return self.editor.selected

    # -- commands -----------------------------------------------------

    def action_add_child(self) -> None:
        if self._prompt_open():
            return
        target = self.sync_selection()
        target_id = target.id

        def apply_label(label: str | None) -> None:
            if label is None:
                self.show_status("Add cancelled.")
                return
            applied = self.editor.insert_child(target_id, label, select=True)
            self._after_command("insert_child", applied, f"parent={target_id} label={label}")
            if applied:
                self.show_status(f"Added child '{self.editor.last_created.label}'.")

        self.push_screen(LabelPromptScreen("New child node", DEFAULT_NEW_LABEL), apply_label)

    def action_add_sibling(self) -> None:
        if self._prompt_open():
            return
        target = self.sync_selection()
        if target.is_root:
            self._refuse("insert_sibling", "The root node has no siblings.", f"node={target.id}")
            return
        target_id = target.id

        def apply_label(label: str | None) -> None:
            if label is None:
                self.show_status("Add cancelled.")
                return
            applied = self.editor.insert_sibling(target_id, label, select=True)
            self._after_command("insert_sibling", applied, f"node={target_id} label={label}")
            if applied:
                self.show_status(f"Added sibling '{self.editor.last_created.label}'.")

        self.push_screen(LabelPromptScreen("New sibling node", DEFAULT_NEW_LABEL), apply_label)

    def action_edit_node(self) -> None:
        if self._prompt_open():
            return
        target = self.sync_selection()
        target_id = target.id
        previous = target.label

        def apply_label(label: str | None) -> None:
            if label is None:
                self.show_status("Edit cancelled.")
                return
            applied = self.editor.rename(target_id, label)
            self._after_command(
                "rename",
                applied,
                f"node={target_id} label={label}",
                refusal=f"Label cannot be empty; kept '{previous}'.",
            )
            if applied:
                self.show_status(f"Renamed to '{normalize_label(label)}'.")

        self.push_screen(LabelPromptScreen("Rename node", previous), apply_label)

    def action_delete_node(self) -> None:
        if self._prompt_open():
            return
        target = self.sync_selection()
        if target.is_root:
            self._refuse("delete_subtree", "The root node cannot be deleted.", f"node={target.id}")
            return
        target_id = target.id
        label = target.label
        descendants = target.subtree_size() - 1

        def apply_choice(confirmed: bool | None) -> None:
            if not confirmed:
                self.show_status("Nothing deleted.")
                return
            applied = self.editor.delete_subtree(target_id)
            self._after_command(
                "delete_subtree",
                applied,
                f"node={target_id} label={label}",
                refusal="Node no longer exists.",
            )
            if applied:
                self.show_status(f"Deleted '{label}' ({self.editor.last_removed_count} nodes).")

        message = f"Delete '{label}'"
        if descendants:
            message += f" and its {descendants} descendant node(s)"
        self.push_screen(ConfirmDeleteScreen(message + "?"), apply_choice)

    def action_choose_style(self) -> None:
        if self._prompt_open():
            return

        def apply_selection(selection: str | None) -> None:
            if not selection:
                return
            self.branch_style = set_active_style(selection)
            edit_log.log_edit_event("style", True, self.branch_style.value)
            self.require_output().load_text(self.ascii_text)
            self.show_status(f"Style set to {self.branch_style.value}.")

        self.push_screen(
            StyleSelectorScreen(list(AVAILABLE_STYLES), self.branch_style.value),
            apply_selection,
        )

    async def action_quit(self) -> None:
        if self._prompt_open():
            return
        await super().action_quit()

    def action_copy_ascii(self) -> None:
        if self._prompt_open():
            return
        self.copy_to_clipboard(self.ascii_text)
        self.show_status("Copied diagram to clipboard.")

    def _after_command(
        self, action: str, applied: bool, detail: str, *, refusal: str = "Label cannot be empty."
    ) -> None:
        edit_log.log_edit_event(action, applied, detail)
        if applied:
            self.refresh_views()
        else:
            self.bell()
            self.show_status(refusal)

    def _refuse(self, action: str, message: str, detail: str) -> None:
        edit_log.log_edit_event(action, False, detail)
        self.bell()
        self.show_status(message)

    def show_status(self, message: str | None = None) -> None:
        summary = f"Style: {self.branch_style.value} | Nodes: {len(self.editor.tree)}"
        self.sub_title = f"{message} | {summary}" if message else summary


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="tr33dr4w",
        description="Edit a labelled tree and render it as a box-drawing diagram.",
    )
    parser.add_argument("root_label", nargs="?", default=DEFAULT_ROOT_LABEL)
    parser.add_argument(
        "--style",
        default=None,
        help=f"Branch style ({', '.join(AVAILABLE_STYLES)}); unknown names use the default.",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    TreeDrawApp(args.root_label, args.style).run()


if __name__ == "__main__":
    main()
