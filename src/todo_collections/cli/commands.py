# src/todo_collections/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core.messages import (
    AddTask,
    Completed,
    CreateCollection,
    Delete,
    DispatchToCollection,
    ForwardToTask,
    RemoveCollection,
    RemoveTasksMatchingFilter,
    SelectCollection,
    SetFilter,
    SetPendingInput,
)
from ..core.models import Collection, Filter
from ..core.state import App

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[App, list[str]], str]
CommandHandler3 = Callable[[App, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

NO_COLLECTION = "No collection selected. Create one with /new <name>."


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /new, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}
        # Commands whose argument is free text: they get the untouched remainder of the line.
        self._raw: set[str] = set()

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
        *,
        raw: bool = False,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler
        for k in [key, *(a.lower() for a in aliases)]:
            if raw:
                self._raw.add(k)
            else:
                self._raw.discard(k)

    def handle(self, app: App, line: str, emit: CommandEmitter | None = None) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        body = line[1:].lstrip()
        parts = body.split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]
        if name in self._raw:
            rest = body[len(parts[0]) :].lstrip()
            args = [rest] if rest else []

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(app, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(app, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- rendering helpers (plain-text read of the model) ----


def render_collections(app: App) -> str:
    items = [item for item in app.nav.items() if item.closable]
    if not items:
        return "No collections yet. Create one with /new <name>."
    lines = ["Collections:"]
    for number, item in enumerate(items, start=1):
        marker = "*" if number - 1 == app.current_index else " "
        lines.append(f" {marker}{number}. {item.label}")
    return "\n".join(lines)


def render_collection(collection: Collection) -> str:
    lines = [f"{collection.name} [{collection.filter.value}]"]
    visible = collection.visible_tasks()
    if not visible:
        lines.append("  (no tasks)")
    for number, (_, task) in enumerate(visible, start=1):
        box = "x" if task.completed else " "
        lines.append(f"  {number}. [{box}] {task.name}")
    return "\n".join(lines)


# ---- argument helpers ----


def _parse_number(args: list[str]) -> int | None:
    """First argument as a 1-based number, converted to 0-based; None if missing/invalid."""
    if not args:
        return None
    try:
        n = int(args[0])
    except ValueError:
        return None
    return n - 1 if n >= 1 else None


def _task_position(collection: Collection, args: list[str]) -> int | None:
    """Map a displayed (filtered) task number to its backing position."""
    shown = _parse_number(args)
    visible = collection.visible_tasks()
    if shown is None or shown >= len(visible):
        return None
    return visible[shown][0]


def _rest(args: list[str]) -> str:
    """Free-text argument of a raw command ("" when absent)."""
    return args[0] if args else ""


# ---- commands ----


def cmd_help(app: App, args: list[str], emit: CommandEmitter | None = None) -> str:
    return registry.build_help()


def cmd_status(app: App, args: list[str]) -> str:
    current = app.current_collection()
    total = sum(len(c.tasks) for c in app.data.collections)
    return (
        "Status:\n"
        f"  Title: {app.title()}\n"
        f"  Collections: {len(app.data.collections)}\n"
        f"  Tasks: {total}\n"
        f"  Current filter: {current.filter.value if current else '-'}"
    )


def cmd_lists(app: App, args: list[str]) -> str:
    return render_collections(app)


def cmd_new(app: App, args: list[str]) -> str:
    name = _rest(args)
    if not app.update(CreateCollection(name)):
        return "Usage: /new <name> (name must not be blank)."
    return f"Created collection '{name}'.\n{render_collections(app)}"


def cmd_open(app: App, args: list[str]) -> str:
    position = _parse_number(args)
    handle = app.nav.handle_for(position) if position is not None else None
    if handle is None:
        return "Usage: /open <number> (see /lists)."
    app.update(SelectCollection(handle))
    return cmd_show(app, [])


def cmd_close(app: App, args: list[str]) -> str:
    """
    /close <n> -> remove collection number n (and all of its tasks)
    """
    position = _parse_number(args)
    handle = app.nav.handle_for(position) if position is not None else None
    if handle is None:
        return "Usage: /close <number> (see /lists)."
    name = app.data.collections[position].name
    app.update(RemoveCollection(handle))
    return f"Removed collection '{name}'.\n{render_collections(app)}"


def cmd_show(app: App, args: list[str]) -> str:
    current = app.current_collection()
    if current is None:
        return NO_COLLECTION
    return render_collection(current)


def cmd_add(app: App, args: list[str]) -> str:
    current = app.current_collection()
    if current is None:
        return NO_COLLECTION
    before = len(current.tasks)
    app.update(DispatchToCollection(app.current_index, SetPendingInput(_rest(args))))
    app.update(DispatchToCollection(app.current_index, AddTask()))
    if len(current.tasks) == before:
        return "Usage: /add <text> (text must not be blank)."
    return render_collection(current)


def _task_command(app: App, args: list[str], message, usage: str) -> str:
    current = app.current_collection()
    if current is None:
        return NO_COLLECTION
    position = _task_position(current, args)
    if position is None:
        return usage
    app.update(DispatchToCollection(app.current_index, ForwardToTask(position, message)))
    return render_collection(current)


def cmd_done(app: App, args: list[str]) -> str:
    return _task_command(app, args, Completed(True), "Usage: /done <number>.")


def cmd_undo(app: App, args: list[str]) -> str:
    return _task_command(app, args, Completed(False), "Usage: /undo <number>.")


def cmd_del(app: App, args: list[str]) -> str:
    return _task_command(app, args, Delete(), "Usage: /del <number>.")


def cmd_filter(app: App, args: list[str]) -> str:
    """
    /filter               -> show active filter
    /filter all|active|completed
    """
    current = app.current_collection()
    if current is None:
        return NO_COLLECTION
    if not args:
        return f"Filter is {current.filter.value}. Use /filter all|active|completed."
    by_name = {f.value.lower(): f for f in Filter}
    selector = by_name.get(args[0].lower())
    if selector is None:
        return "Usage: /filter all|active|completed."
    app.update(DispatchToCollection(app.current_index, SetFilter(selector)))
    return render_collection(current)


def cmd_clear(app: App, args: list[str], emit: CommandEmitter | None = None) -> str:
    current = app.current_collection()
    if current is None:
        return NO_COLLECTION
    if emit:
        emit(f"[{current.remove_label()}]")
    app.update(DispatchToCollection(app.current_index, RemoveTasksMatchingFilter()))
    return render_collection(current)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show collection/task totals.")
registry.register("lists", cmd_lists, help_text="List collections.", aliases=["ls"])
registry.register("new", cmd_new, help_text="Create a collection: /new <name>.", raw=True)
registry.register("open", cmd_open, help_text="Switch to a collection: /open <n>.")
registry.register("close", cmd_close, help_text="Remove a collection: /close <n>.", aliases=["rmlist"])
registry.register("show", cmd_show, help_text="Show tasks of the current collection.")
registry.register("add", cmd_add, help_text="Add a task: /add <text>.", raw=True)
registry.register("done", cmd_done, help_text="Mark a task completed: /done <n>.")
registry.register("undo", cmd_undo, help_text="Mark a task active again: /undo <n>.")
registry.register("del", cmd_del, help_text="Delete a task: /del <n>.", aliases=["rm"])
registry.register("filter", cmd_filter, help_text="Set the filter: /filter all|active|completed.")
registry.register("clear", cmd_clear, help_text="Remove every task visible under the current filter.")
