"""
Data models and structures for containerps.

This module defines the dataclasses shared by the parser, the inventory
builder, the action dispatcher and the presentation sink:
  - Lifecycle: derived classification of a container (up, restarting, down)
  - Container: one parsed line of the engine listing (immutable)
  - Menu items: StaticItem, Separator, ActionItem, ContainerEntry, ErrorLine
  - MenuModel: the render-ready description of the whole menu
  - ConfirmRequest: what the dialog sink is asked to confirm

Key Points:
  - Container and all menu items are frozen; a refresh builds new values
  - Container.lifecycle is derived from status_text in __post_init__ and
    cannot be passed to the constructor
  - Menu entries carry an Action tag plus a container id instead of a
    callback; the presentation sink forwards them to the dispatcher
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union


class Lifecycle(str, Enum):
    UP = "up"
    RESTARTING = "restarting"
    DOWN = "down"


def classify_status(status_text: str) -> Lifecycle:
    """Map the engine status text to a Lifecycle by its leading keyword."""
    if status_text.startswith("Up"):
        return Lifecycle.UP
    if status_text.startswith("Restarting"):
        return Lifecycle.RESTARTING
    return Lifecycle.DOWN


@dataclass(frozen=True)
class Container:
    id: str
    image: str
    entrypoint: str
    created_at: str
    status_text: str
    ports: str
    name: str
    size_text: str
    lifecycle: Lifecycle = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "lifecycle", classify_status(self.status_text))

    @property
    def is_running(self) -> bool:
        # Restarting counts as running for ordering and for the stop/start toggle
        return self.lifecycle in (Lifecycle.UP, Lifecycle.RESTARTING)


class Action(str, Enum):
    RELOAD = "reload"
    QUIT = "quit"
    TOGGLE_RUN = "toggle_run"
    RESTART = "restart"
    OPEN_SHELL = "open_shell"
    COPY_ID = "copy_id"
    DELETE = "delete"


@dataclass(frozen=True)
class StaticItem:
    """Disabled display line."""
    label: str


@dataclass(frozen=True)
class Separator:
    pass


@dataclass(frozen=True)
class ActionItem:
    label: str
    action: Action
    container_id: Optional[str] = None
    currently_up: bool = False
    entrypoint: str = ""
    accelerator: Optional[str] = None


@dataclass(frozen=True)
class ErrorLine:
    label: str


SubItem = Union[StaticItem, Separator, ActionItem]


@dataclass(frozen=True)
class ContainerEntry:
    container_id: str
    label: str
    lifecycle: Lifecycle
    items: Tuple[SubItem, ...]

    @property
    def actions(self) -> List[ActionItem]:
        return [i for i in self.items if isinstance(i, ActionItem)]

    @property
    def details(self) -> List[str]:
        return [i.label for i in self.items if isinstance(i, StaticItem)]


MenuItem = Union[StaticItem, Separator, ActionItem, ContainerEntry, ErrorLine]


@dataclass(frozen=True)
class MenuModel:
    header: Tuple[MenuItem, ...]
    body: Tuple[MenuItem, ...] = ()

    @property
    def entries(self) -> List[ContainerEntry]:
        return [i for i in self.body if isinstance(i, ContainerEntry)]

    @property
    def error_lines(self) -> List[str]:
        return [i.label for i in self.body if isinstance(i, ErrorLine)]

    @property
    def is_error(self) -> bool:
        return any(isinstance(i, ErrorLine) for i in self.body)


@dataclass(frozen=True)
class ConfirmRequest:
    title: str
    message: str
    detail: str
    buttons: Tuple[str, str] = ("No", "Yes")
    kind: str = "warning"
