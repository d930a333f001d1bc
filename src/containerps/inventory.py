"""
Inventory builder: engine listing text -> menu model.

Steps of a build:
  1. Run `<engine> container list --all --size`
  2. Drop the column header line and the trailing empty line
  3. Parse every remaining line (one bad line fails the whole build)
  4. Put running (up/restarting) containers before stopped ones, keeping the
     engine's order inside each group
  5. Assemble the header block followed by one entry per container

Any ExecutionError or ParseError turns into the error menu: a fixed lead
line plus the diagnostic text cut into narrow disabled lines.
"""

import asyncio
import logging
import re
from typing import Iterable, List, Tuple

from .backend import ExecutionError
from .model import (
    Action, ActionItem, Container, ContainerEntry, ErrorLine, MenuItem,
    MenuModel, Separator, StaticItem,
)
from .parser import ParseError, parse_line
from .state import AppContext

logger = logging.getLogger(__name__)

ERROR_LEAD = "We can't get the container list back. Is Docker on?"
ERROR_CHUNK_WIDTH = 35
LINE_BREAK = re.compile(r"\r?\n")


def chunk_text(text: str, width: int = ERROR_CHUNK_WIDTH) -> List[str]:
    """Cut text into pieces of at most width characters; newlines end a piece."""
    if width < 1:
        raise ValueError(f"Chunk width must be positive, got {width}")
    chunks = []
    for line in LINE_BREAK.split(text):
        chunks.extend(line[i:i + width] for i in range(0, len(line), width))
    return chunks


def split_listing(text: str) -> List[str]:
    lines = text.replace("\r\n", "\n").split("\n")
    lines = lines[1:]
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def parse_listing(text: str) -> List[Container]:
    return [parse_line(line) for line in split_listing(text)]


def order_containers(containers: Iterable[Container]) -> List[Container]:
    # sorted() is stable, so each group keeps the engine's listing order
    return sorted(containers, key=lambda c: 0 if c.is_running else 1)


class InventoryBuilder:
    def __init__(self, context: AppContext):
        self.context = context

    def header(self) -> Tuple[MenuItem, ...]:
        config = self.context.config
        return (
            StaticItem(config.ui.title),
            Separator(),
            ActionItem("Reload List", Action.RELOAD, accelerator=config.keybindings.reload),
            ActionItem("Quit", Action.QUIT, accelerator=config.keybindings.quit),
            Separator(),
        )

    def loading_model(self) -> MenuModel:
        return MenuModel(
            header=self.header(),
            body=(StaticItem(f"{self.context.config.ui.title} is loading..."),),
        )

    def error_model(self, error: Exception) -> MenuModel:
        width = self.context.config.ui.error_chunk_width
        if not isinstance(width, int) or width < 1:
            width = ERROR_CHUNK_WIDTH
        lines = [ErrorLine(ERROR_LEAD)]
        lines.extend(ErrorLine(chunk) for chunk in chunk_text(str(error), width))
        return MenuModel(header=self.header(), body=tuple(lines))

    def container_entry(self, container: Container) -> ContainerEntry:
        cid = container.id
        running = container.is_running
        items = (
            StaticItem(f"Id: {cid}"),
            StaticItem(f"Name: {container.name}"),
            StaticItem(f"Entry Point: {container.entrypoint}"),
            StaticItem(f"Created: {container.created_at}"),
            StaticItem(f"Info: {container.status_text}"),
            StaticItem(f"Ports: {container.ports}"),
            StaticItem(f"Image: {container.image}"),
            StaticItem(f"Size: {container.size_text}"),
            Separator(),
            ActionItem("Stop Container" if running else "Start Container",
                       Action.TOGGLE_RUN, cid, currently_up=running),
            ActionItem("Restart Container", Action.RESTART, cid),
            ActionItem("Open Console", Action.OPEN_SHELL, cid, entrypoint=container.entrypoint),
            Separator(),
            ActionItem("Copy ID Container", Action.COPY_ID, cid),
            Separator(),
            ActionItem("Delete Container", Action.DELETE, cid),
        )
        return ContainerEntry(
            container_id=cid,
            label=container.name,
            lifecycle=container.lifecycle,
            items=items,
        )

    def build(self) -> MenuModel:
        engine = self.context.config.engine
        try:
            text = self.context.runner.run(engine.binary, engine.list_args)
            containers = order_containers(parse_listing(text))
        except (ExecutionError, ParseError) as e:
            logger.error(f"Inventory refresh failed: {e}")
            return self.error_model(e)

        logger.info(f"Inventory holds {len(containers)} containers")
        return MenuModel(
            header=self.header(),
            body=tuple(self.container_entry(c) for c in containers),
        )

    async def refresh(self) -> MenuModel:
        """Loading -> build in a worker thread -> commit -> Idle."""
        refresh_state = self.context.refresh
        refresh_state.enter_loading()
        logger.debug("Refresh started")
        menu = None
        try:
            menu = await asyncio.to_thread(self.build)
        except Exception as e:
            logger.error(f"Unexpected error while building inventory: {e}", exc_info=True)
            menu = self.error_model(e)
        finally:
            if menu is None:
                menu = MenuModel(header=(), body=(ErrorLine(ERROR_LEAD),))
            refresh_state.commit_and_idle(menu)
        logger.debug("Refresh finished")
        return menu
