"""
Refresh state machine and application context.

The refresh state is a single Loading/Idle indicator that gates the visual
"loading" feedback of the presentation sink.

Lifecycle:
  - Starts Idle
  - enter_loading() is called before any refresh or mutating action issues
    its first external command; calling it while already Loading is a no-op
  - commit_and_idle(model) pushes the new menu model to the sink and only
    then returns to Idle
  - There is no timeout: a hung external command keeps the state Loading
    until the process is restarted

Everything runs on the event loop of the presentation sink; external
commands are awaited in worker threads but never touch this state, so no
lock is taken.

AppContext is the one explicitly owned value created at startup and handed
to the inventory builder and the action dispatcher.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional

from .backend import CommandRunner, copy_to_clipboard
from .config import AppConfig
from .model import Lifecycle, MenuModel

logger = logging.getLogger(__name__)


class RefreshState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"


class RefreshStateMachine:
    """Owns the Loading/Idle indicator and the currently committed menu."""

    def __init__(self, sink: Any):
        self._sink = sink
        self._state = RefreshState.IDLE
        self.menu: Optional[MenuModel] = None

    @property
    def state(self) -> RefreshState:
        return self._state

    @property
    def is_loading(self) -> bool:
        return self._state is RefreshState.LOADING

    def enter_loading(self) -> None:
        if self._state is RefreshState.LOADING:
            return
        self._state = RefreshState.LOADING
        self._sink.set_loading(True)

    def commit_and_idle(self, menu: MenuModel) -> None:
        self._sink.set_menu(menu)
        self.menu = menu
        self._state = RefreshState.IDLE
        self._sink.set_loading(False)
        logger.debug(f"Menu committed with {len(menu.body)} body items")


def icons_from_config(icons: Dict[str, str]) -> Dict[Lifecycle, str]:
    defaults = {Lifecycle.UP: "green", Lifecycle.RESTARTING: "yellow", Lifecycle.DOWN: "red"}
    return {lc: icons.get(lc.value, style) for lc, style in defaults.items()}


@dataclass
class AppContext:
    config: AppConfig
    runner: CommandRunner
    refresh: RefreshStateMachine
    dialog: Any
    clipboard: Callable[[str], bool] = copy_to_clipboard
    icons: Dict[Lifecycle, str] = field(default_factory=dict)

    @classmethod
    def create(cls, config: AppConfig, sink: Any, dialog: Any,
               runner: Optional[CommandRunner] = None,
               clipboard: Callable[[str], bool] = copy_to_clipboard) -> "AppContext":
        return cls(
            config=config,
            runner=runner or CommandRunner(),
            refresh=RefreshStateMachine(sink),
            dialog=dialog,
            clipboard=clipboard,
            icons=icons_from_config(config.ui.icons),
        )
