# src/todo_collections/core/messages.py

"""
Messages consumed by the update() entry points.

Each message is a small frozen dataclass; the isinstance() check is the tag.
Routing is strictly positional: App -> Collection by index, Collection -> Task by index.
Handle -> position resolution happens only in App, via the NavigationIndex.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from .models import Filter
    from .navigation import NavHandle


# ---- task level ----


@dataclass(slots=True, frozen=True)
class Completed:
    value: bool


@dataclass(slots=True, frozen=True)
class Delete:
    """Intent to remove the task; handled by the owning Collection."""


TaskMessage = Union[Completed, Delete]


# ---- collection level ----


@dataclass(slots=True, frozen=True)
class ForwardToTask:
    # Position in the unfiltered backing sequence, not the filtered view.
    index: int
    message: TaskMessage


@dataclass(slots=True, frozen=True)
class AddTask:
    pass


@dataclass(slots=True, frozen=True)
class SetPendingInput:
    text: str


@dataclass(slots=True, frozen=True)
class SetFilter:
    filter: Filter


@dataclass(slots=True, frozen=True)
class RemoveTasksMatchingFilter:
    """Remove every task visible under the collection's active filter."""


CollectionMessage = Union[ForwardToTask, AddTask, SetPendingInput, SetFilter, RemoveTasksMatchingFilter]


# ---- app level ----


@dataclass(slots=True, frozen=True)
class DispatchToCollection:
    index: int
    message: CollectionMessage


@dataclass(slots=True, frozen=True)
class SelectCollection:
    handle: NavHandle


@dataclass(slots=True, frozen=True)
class CreateCollection:
    name: str


@dataclass(slots=True, frozen=True)
class RemoveCollection:
    handle: NavHandle


@dataclass(slots=True, frozen=True)
class OpenCreationDialog:
    pass


@dataclass(slots=True, frozen=True)
class CloseCreationDialog:
    pass


@dataclass(slots=True, frozen=True)
class SetCreationDialogInput:
    text: str


AppMessage = Union[
    DispatchToCollection,
    SelectCollection,
    CreateCollection,
    RemoveCollection,
    OpenCreationDialog,
    CloseCreationDialog,
    SetCreationDialogInput,
]


class Effect(StrEnum):
    """Follow-up work for the UI layer after App.update()."""

    NAVIGATION_CHANGED = "navigation_changed"
    TITLE_CHANGED = "title_changed"
