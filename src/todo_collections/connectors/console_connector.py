# src/todo_collections/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..cli.commands import CommandRegistry, render_collection
from ..cli.commands import registry as command_registry
from ..core.messages import AddTask, DispatchToCollection, SetPendingInput
from ..core.state import App

logger = logging.getLogger(__name__)

EXIT_COMMANDS = ("/exit", "/quit")


def handle_line(app: App, line: str, registry: CommandRegistry | None = None, emit=None) -> str | None:
    """
    Process one console line. Returns the text to show, or None for nothing.

    Plain text (no leading "/") becomes a new task in the current collection.
    """
    registry = registry or command_registry
    line = line.strip()
    if not line:
        return None

    try:
        cmd_response = registry.handle(app, line, emit=emit)
    except Exception:
        logger.exception("Command handler crashed.")
        return "Internal error while handling a command."

    if cmd_response is not None:
        return cmd_response

    current = app.current_collection()
    if current is None:
        return "No collection selected. Create one with /new <name>."

    app.update(DispatchToCollection(app.current_index, SetPendingInput(line)))
    app.update(DispatchToCollection(app.current_index, AddTask()))
    return render_collection(current)


def run_console_loop(app: App, read_line: Callable[[str], str] = input) -> None:
    logger.info("Console connector started (collections=%d).", len(app.data.collections))
    print(f"[{app.title()}] Type a task to add it. Use /help for commands. Use /exit to quit.\n")

    def emit(text: str) -> None:
        print(text, flush=True)

    while True:
        try:
            user_input = read_line(">>> ")
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if user_input.strip().lower() in EXIT_COMMANDS:
            logger.info("Console exit command received.")
            break

        reply = handle_line(app, user_input, emit=emit)
        if reply is not None:
            print(reply)

    logger.info("Console connector finished.")
