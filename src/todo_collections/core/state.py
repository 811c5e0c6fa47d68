# src/todo_collections/core/state.py

"""
Top-level state and controller.

AppData is the persisted root (collections + current index). App owns exactly one
AppData, the derived NavigationIndex and the creation-dialog state, and is the only
place where handles are resolved into positions.

Dialog state machine:
- Normal --(select "create new" / OpenCreationDialog)--> CreationDialogOpen
- CreationDialogOpen --(CreateCollection with a non-blank name)--> Normal
- CreationDialogOpen --(CloseCreationDialog)--> Normal (no mutation)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .messages import (
    AppMessage,
    CloseCreationDialog,
    CollectionMessage,
    CreateCollection,
    DispatchToCollection,
    Effect,
    OpenCreationDialog,
    RemoveCollection,
    SelectCollection,
    SetCreationDialogInput,
)
from .models import Collection
from .navigation import CollectionIndex, CreateNewEntry, NavHandle, NavigationIndex

logger = logging.getLogger(__name__)

HOME_TITLE = "Home"


@dataclass(slots=True)
class AppData:
    collections: list[Collection] = field(default_factory=list)
    current_index: int = 0

    def clamp_current_index(self) -> None:
        """Force 0 <= current_index < len(collections); 0 when there are none."""
        if not self.collections:
            self.current_index = 0
        else:
            self.current_index = max(0, min(self.current_index, len(self.collections) - 1))


class App:
    def __init__(self, data: AppData | None = None, *, app_name: str = "Todo") -> None:
        self.data = data if data is not None else AppData()
        self.data.clamp_current_index()
        self.app_name = app_name

        self.show_dialog = False
        self.dialog_input = ""

        self.nav = self.rebuild_navigation_index()

    # ---- update entry point ----

    def update(self, message: AppMessage) -> list[Effect]:
        if isinstance(message, DispatchToCollection):
            self.dispatch_to_collection(message.index, message.message)
            return []
        if isinstance(message, SelectCollection):
            return self.select_collection(message.handle)
        if isinstance(message, CreateCollection):
            return self.create_collection(message.name)
        if isinstance(message, RemoveCollection):
            return self.remove_collection(message.handle)
        if isinstance(message, OpenCreationDialog):
            self.show_dialog = True
            return []
        if isinstance(message, CloseCreationDialog):
            self.show_dialog = False
            return []
        if isinstance(message, SetCreationDialogInput):
            self.dialog_input = message.text
            return []

        logger.warning("Unhandled app message: %r", message)
        return []

    # ---- operations ----

    def dispatch_to_collection(self, index: int, message: CollectionMessage) -> None:
        if not 0 <= index < len(self.data.collections):
            logger.debug("Dispatch to collection %d ignored (have %d)", index, len(self.data.collections))
            return
        self.data.collections[index].update(message)

    def select_collection(self, handle: NavHandle) -> list[Effect]:
        entry = self.nav.resolve(handle)
        if isinstance(entry, CollectionIndex):
            self.data.current_index = entry.position
            return [Effect.TITLE_CHANGED]
        if isinstance(entry, CreateNewEntry):
            self.show_dialog = True
            return []
        logger.debug("Select ignored: unknown navigation handle %r", handle)
        return []

    def create_collection(self, name: str) -> list[Effect]:
        if not name.strip():
            logger.debug("Ignoring blank collection name")
            return []

        self.data.collections.append(Collection(name=name))
        self.data.current_index = len(self.data.collections) - 1
        self.dialog_input = ""
        self.show_dialog = False
        self.rebuild_navigation_index()
        logger.debug("Created collection %r at %d", name, self.data.current_index)
        return [Effect.NAVIGATION_CHANGED, Effect.TITLE_CHANGED]

    def remove_collection(self, handle: NavHandle) -> list[Effect]:
        entry = self.nav.resolve(handle)
        if not isinstance(entry, CollectionIndex):
            logger.debug("Remove ignored: handle %r is not a collection entry", handle)
            return []

        position = entry.position
        if not 0 <= position < len(self.data.collections):
            return []

        removed = self.data.collections.pop(position)
        if position < self.data.current_index:
            # Keep pointing at the same collection after the shift.
            self.data.current_index -= 1
        self.data.clamp_current_index()
        self.rebuild_navigation_index()
        logger.debug(
            "Removed collection %r at %d; current index now %d",
            removed.name,
            position,
            self.data.current_index,
        )
        return [Effect.NAVIGATION_CHANGED, Effect.TITLE_CHANGED]

    def rebuild_navigation_index(self) -> NavigationIndex:
        self.nav = NavigationIndex.build(c.name for c in self.data.collections)
        return self.nav

    # ---- reads ----

    @property
    def current_index(self) -> int:
        return self.data.current_index

    def current_collection(self) -> Collection | None:
        if 0 <= self.data.current_index < len(self.data.collections):
            return self.data.collections[self.data.current_index]
        return None

    def title(self) -> str:
        current = self.current_collection()
        name = current.name if current is not None else HOME_TITLE
        return f"{self.app_name} - {name}"
