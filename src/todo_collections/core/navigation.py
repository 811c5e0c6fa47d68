# src/todo_collections/core/navigation.py

"""
Navigation index: opaque UI handles -> collection positions.

The index is derived data. It is rebuilt from scratch whenever the collections
sequence changes shape and is never patched in place, so handles cannot drift
away from the positions they name. Handles from an older build resolve to None.
"""

from __future__ import annotations

import itertools
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Union

NavHandle = int

CREATE_NEW_LABEL = "Add new Collection"


@dataclass(slots=True, frozen=True)
class CollectionIndex:
    position: int


@dataclass(slots=True, frozen=True)
class CreateNewEntry:
    """The synthetic "create a new collection" entry; never refers to data."""


NavEntry = Union[CollectionIndex, CreateNewEntry]


@dataclass(slots=True, frozen=True)
class NavItem:
    handle: NavHandle
    label: str
    target: NavEntry
    closable: bool


# Shared across builds so that a stale handle never collides with a fresh one.
_handle_counter = itertools.count(1)


class NavigationIndex:
    def __init__(self, items: list[NavItem] | None = None) -> None:
        self._items: list[NavItem] = list(items or [])
        self._by_handle: dict[NavHandle, NavEntry] = {item.handle: item.target for item in self._items}

    @classmethod
    def build(cls, collection_names: Iterable[str]) -> NavigationIndex:
        items = [
            NavItem(
                handle=next(_handle_counter),
                label=CREATE_NEW_LABEL,
                target=CreateNewEntry(),
                closable=False,
            )
        ]
        for position, name in enumerate(collection_names):
            items.append(
                NavItem(
                    handle=next(_handle_counter),
                    label=name,
                    target=CollectionIndex(position),
                    closable=True,
                )
            )
        return cls(items)

    def resolve(self, handle: NavHandle) -> NavEntry | None:
        return self._by_handle.get(handle)

    def items(self) -> list[NavItem]:
        return list(self._items)

    def create_new_handle(self) -> NavHandle:
        return self._items[0].handle

    def handle_for(self, position: int) -> NavHandle | None:
        """Handle of the entry targeting collection `position`, if any."""
        for item in self._items:
            if isinstance(item.target, CollectionIndex) and item.target.position == position:
                return item.handle
        return None

    def __len__(self) -> int:
        return len(self._items)
