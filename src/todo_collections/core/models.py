# src/todo_collections/core/models.py

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum

from .messages import (
    AddTask,
    CollectionMessage,
    Completed,
    Delete,
    ForwardToTask,
    RemoveTasksMatchingFilter,
    SetFilter,
    SetPendingInput,
    TaskMessage,
)

logger = logging.getLogger(__name__)


class Filter(StrEnum):
    """
    Task selector, shared by rendering and bulk removal.

    Values double as the persisted representation ("All" / "Active" / "Completed").
    """

    ALL = "All"
    ACTIVE = "Active"
    COMPLETED = "Completed"

    def matches(self, task: Task) -> bool:
        if self is Filter.ACTIVE:
            return not task.completed
        if self is Filter.COMPLETED:
            return task.completed
        return True


_REMOVE_LABELS = {
    Filter.ALL: "Remove All Tasks",
    Filter.ACTIVE: "Remove Active Tasks",
    Filter.COMPLETED: "Remove Completed Tasks",
}


@dataclass(slots=True)
class Task:
    name: str
    completed: bool = False

    def update(self, message: TaskMessage) -> None:
        if isinstance(message, Completed):
            self.completed = message.value
        # Delete is intercepted by the owning Collection; nothing to do here.
        return None


@dataclass(slots=True)
class Collection:
    """
    Named, ordered group of tasks with its own filter.

    Task order is insertion order. pending_input is the transient text of the
    "new task" box and is never persisted (excluded from equality too).
    """

    name: str
    tasks: list[Task] = field(default_factory=list)
    filter: Filter = Filter.ALL
    pending_input: str = field(default="", compare=False)

    # ---- update entry point ----

    def update(self, message: CollectionMessage) -> None:
        # Delete must be matched before generic forwarding: the task cannot remove itself.
        if isinstance(message, ForwardToTask) and isinstance(message.message, Delete):
            self.remove_task_at(message.index)
        elif isinstance(message, ForwardToTask):
            self.forward_to_task(message.index, message.message)
        elif isinstance(message, SetPendingInput):
            self.set_pending_input(message.text)
        elif isinstance(message, AddTask):
            self.add_task(self.pending_input)
        elif isinstance(message, SetFilter):
            self.set_filter(message.filter)
        elif isinstance(message, RemoveTasksMatchingFilter):
            self.remove_tasks_matching_filter(self.filter)
        else:
            logger.warning("Collection %r: unhandled message %r", self.name, message)
        return None

    # ---- operations ----

    def add_task(self, text: str) -> bool:
        """
        Append a task named exactly `text` (untrimmed) unless it is blank.

        Returns True when a task was added; the pending input is cleared only then.
        """
        if not text.strip():
            logger.debug("Collection %r: ignoring blank task input", self.name)
            return False
        self.tasks.append(Task(name=text, completed=False))
        self.pending_input = ""
        return True

    def set_pending_input(self, text: str) -> None:
        self.pending_input = text

    def set_filter(self, new_filter: Filter) -> None:
        self.filter = Filter(new_filter)

    def remove_task_at(self, index: int) -> bool:
        if not 0 <= index < len(self.tasks):
            logger.debug("Collection %r: delete index %d out of range", self.name, index)
            return False
        del self.tasks[index]
        return True

    def forward_to_task(self, index: int, message: TaskMessage) -> None:
        if not 0 <= index < len(self.tasks):
            logger.debug("Collection %r: task index %d out of range", self.name, index)
            return
        self.tasks[index].update(message)

    def remove_tasks_matching_filter(self, selector: Filter) -> int:
        """Drop every task `selector` matches, keeping the rest in order. Returns the removed count."""
        kept = 0
        for task in self.tasks:
            if not selector.matches(task):
                self.tasks[kept] = task
                kept += 1
        removed = len(self.tasks) - kept
        del self.tasks[kept:]
        if removed:
            logger.debug("Collection %r: removed %d task(s) matching %s", self.name, removed, selector)
        return removed

    # ---- reads ----

    def visible_tasks(self) -> list[tuple[int, Task]]:
        """Tasks shown under the active filter, paired with their backing positions."""
        return [(i, task) for i, task in enumerate(self.tasks) if self.filter.matches(task)]

    def remove_label(self) -> str:
        return _REMOVE_LABELS[self.filter]
