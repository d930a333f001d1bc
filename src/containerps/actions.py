"""
Lifecycle action dispatcher for containerps.

Menu entries carry an Action tag plus a container id; the presentation sink
hands the selected ActionItem to ActionDispatcher.dispatch().

Mutating actions (start/stop, restart, delete) enter Loading before their
first external command and always end with a full inventory rebuild, which
returns the state to Idle. A failed command is logged and otherwise treated
like success: the next inventory shows what really happened.

Opening a shell and copying the id do not touch the engine state and
therefore never rebuild.
"""

import asyncio
import logging

from .backend import ExecutionError, build_shell_command
from .inventory import InventoryBuilder
from .model import Action, ActionItem, ConfirmRequest
from .state import AppContext

logger = logging.getLogger(__name__)

DELETE_CONFIRMATION = ConfirmRequest(
    title="Do you really want to delete this container?",
    message="Do you really want to delete this container?",
    detail="This container will be deleted permanently and it will no longer be possible to recover it",
    buttons=("No", "Yes"),
    kind="danger",
)
CONFIRM_BUTTON = 1


class ActionDispatcher:
    def __init__(self, context: AppContext, builder: InventoryBuilder):
        self.context = context
        self.builder = builder

    async def dispatch(self, item: ActionItem) -> None:
        logger.debug(f"Dispatching {item.action.value} for {item.container_id}")
        if item.action is Action.RELOAD:
            await self.builder.refresh()
        elif item.action is Action.TOGGLE_RUN:
            await self.toggle_run(item.container_id, item.currently_up)
        elif item.action is Action.RESTART:
            await self.restart(item.container_id)
        elif item.action is Action.OPEN_SHELL:
            self.open_shell(item.container_id, item.entrypoint)
        elif item.action is Action.COPY_ID:
            self.copy_id(item.container_id)
        elif item.action is Action.DELETE:
            await self.delete(item.container_id)
        else:
            logger.warning(f"Action {item.action.value} is not handled by the dispatcher")

    async def _engine(self, *args: str) -> bool:
        binary = self.context.config.engine.binary
        try:
            await asyncio.to_thread(self.context.runner.run, binary, list(args))
            return True
        except ExecutionError as e:
            logger.error(f"'{binary} {' '.join(args)}' failed: {e}")
            return False

    async def toggle_run(self, container_id: str, currently_up: bool) -> None:
        verb = "stop" if currently_up else "start"
        logger.info(f"{verb.capitalize()} container {container_id}")
        self.context.refresh.enter_loading()
        try:
            await self._engine(verb, container_id)
        finally:
            await self.builder.refresh()

    async def restart(self, container_id: str) -> None:
        logger.info(f"Restart container {container_id}")
        self.context.refresh.enter_loading()
        try:
            await self._engine("restart", container_id)
        finally:
            await self.builder.refresh()

    def shell_for(self, entrypoint: str) -> str:
        engine = self.context.config.engine
        return engine.default_shell if "bash" in entrypoint else engine.fallback_shell

    def open_shell(self, container_id: str, entrypoint: str) -> None:
        config = self.context.config
        command = build_shell_command(
            config.engine.binary,
            container_id,
            self.shell_for(entrypoint),
            config.terminal.launcher,
        )
        logger.info(f"Opening console into {container_id}")
        self.context.runner.fire_and_forget(command)

    def copy_id(self, container_id: str) -> None:
        if not self.context.clipboard(container_id):
            logger.warning(f"Could not copy {container_id} to the clipboard")

    async def delete(self, container_id: str) -> None:
        choice = await self.context.dialog.confirm(DELETE_CONFIRMATION)
        if choice != CONFIRM_BUTTON:
            logger.info(f"Deletion of {container_id} declined")
            return

        logger.info(f"Delete container {container_id}")
        self.context.refresh.enter_loading()
        try:
            # rm only runs once stop has returned
            if await self._engine("stop", container_id):
                await self._engine("rm", container_id)
            else:
                logger.warning(f"Not removing {container_id}: stop failed")
        finally:
            await self.builder.refresh()
