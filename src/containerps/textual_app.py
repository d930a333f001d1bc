"""Textual presentation sink for containerps."""

from __future__ import annotations

import logging
from typing import Optional

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Footer, Header, Static, Tree
from textual.widgets.tree import TreeNode

from .actions import ActionDispatcher
from .config import AppConfig
from .inventory import InventoryBuilder
from .model import (
    Action, ActionItem, ConfirmRequest, ContainerEntry, ErrorLine, MenuItem,
    MenuModel, Separator, StaticItem,
)
from .state import AppContext

logger = logging.getLogger(__name__)

ICON = "●"
SEPARATOR = "─" * 24


class ConfirmScreen(ModalScreen[int]):
    def __init__(self, request: ConfirmRequest) -> None:
        super().__init__()
        self.request = request

    def compose(self) -> ComposeResult:
        no_label, yes_label = self.request.buttons
        yield Vertical(
            Static(self.request.title, classes="modal_title"),
            Static(self.request.message, classes="modal_body"),
            Static(self.request.detail, classes="modal_hint"),
            Horizontal(
                Button(no_label, id="button_0"),
                Button(yes_label, id="button_1", variant="error"),
                classes="modal_buttons",
            ),
            id="modal",
            classes=self.request.kind,
        )

    def on_mount(self) -> None:
        # The safe answer has focus
        self.query_one("#button_0", Button).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(1 if event.button.id == "button_1" else 0)

    async def on_key(self, event: events.Key) -> None:
        if event.key in ("y", "Y"):
            self.dismiss(1)
        elif event.key in ("escape", "n", "N"):
            self.dismiss(0)


def item_label(item: MenuItem) -> Text:
    if isinstance(item, Separator):
        return Text(SEPARATOR, style="dim")
    if isinstance(item, ErrorLine):
        return Text(item.label, style="red")
    if isinstance(item, ActionItem):
        label = Text(item.label, style="bold")
        if item.accelerator:
            label.append(f"  {item.accelerator}", style="dim")
        return label
    return Text(item.label, style="dim")


class ContainerPSApp(App[None]):
    TITLE = "Container PS"

    CSS = """
    #menu {
      height: 1fr;
      border: round $accent;
      padding: 0 1;
    }

    #menu:disabled {
      opacity: 60%;
    }

    #modal {
      width: 70;
      height: auto;
      border: round $warning;
      background: $surface;
      padding: 1 2;
      align: center middle;
    }

    #modal.danger {
      border: round $error;
    }

    .modal_title {
      text-style: bold;
      margin-bottom: 1;
    }

    .modal_body {
      margin-bottom: 1;
    }

    .modal_hint {
      color: $text-muted;
      margin-bottom: 1;
    }

    .modal_buttons {
      height: auto;
      align: right middle;
    }
    """

    def __init__(self, config: AppConfig) -> None:
        super().__init__()
        self.app_config = config
        self.title = config.ui.title
        self.context: Optional[AppContext] = None
        self.builder: Optional[InventoryBuilder] = None
        self.dispatcher: Optional[ActionDispatcher] = None
        self._menu_model: Optional[MenuModel] = None
        self._menu_loading = False
        self._menu_ready = False

    def attach(self, context: AppContext) -> None:
        self.context = context
        self.builder = InventoryBuilder(context)
        self.dispatcher = ActionDispatcher(context, self.builder)

    def compose(self) -> ComposeResult:
        yield Header()
        yield Tree(self.app_config.ui.title, id="menu")
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#menu", Tree).show_root = False
        self._menu_ready = True
        self.set_menu(self.builder.loading_model())
        self.action_reload()

    # --- presentation sink ---

    def set_menu(self, menu: MenuModel) -> None:
        self._menu_model = menu
        if self._menu_ready:
            self._render_menu()

    def set_loading(self, loading: bool) -> None:
        self._menu_loading = loading
        self.sub_title = "loading..." if loading else ""
        if self._menu_ready:
            self.query_one("#menu", Tree).disabled = loading

    # --- dialog sink ---

    async def confirm(self, request: ConfirmRequest) -> int:
        result = await self.push_screen_wait(ConfirmScreen(request))
        return int(result or 0)

    def _render_menu(self) -> None:
        tree = self.query_one("#menu", Tree)
        tree.clear()
        for item in (*self._menu_model.header, *self._menu_model.body):
            self._add_item(tree.root, item)
        tree.root.expand()

    def _add_item(self, parent: TreeNode, item: MenuItem) -> None:
        if isinstance(item, ContainerEntry):
            style = self.context.icons.get(item.lifecycle, "") if self.context else ""
            label = Text.assemble((f"{ICON} ", style), item.label)
            node = parent.add(label, expand=False)
            for sub_item in item.items:
                self._add_item(node, sub_item)
        elif isinstance(item, ActionItem):
            parent.add_leaf(item_label(item), data=item)
        else:
            parent.add_leaf(item_label(item))

    def on_tree_node_selected(self, event: Tree.NodeSelected) -> None:
        item = event.node.data
        if not isinstance(item, ActionItem) or self._menu_loading:
            return
        event.stop()
        if item.action is Action.QUIT:
            self.exit()
            return
        self.run_worker(
            self.dispatcher.dispatch(item),
            group="menu-action",
            exclusive=False,
            thread=False,
        )

    def action_reload(self) -> None:
        if self._menu_loading:
            return
        self.run_worker(self.builder.refresh(), group="menu-action", exclusive=False, thread=False)

    async def on_key(self, event: events.Key) -> None:
        if len(self.screen_stack) > 1:
            return
        if event.key == self.app_config.keybindings.reload:
            self.action_reload()
            event.stop()
        elif event.key == self.app_config.keybindings.quit:
            self.exit()
            event.stop()
