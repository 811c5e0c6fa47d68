# src/todo_collections/cli/main.py

"""
CLI entrypoint.

Initializes logging, loads the App from storage, runs the console front-end and
persists the state on the way out. A failed save is reported and ends the process
with a non-zero status.
"""

from __future__ import annotations

import logging
import sys

from ..cli.bootstrap import create_app, create_store, shutdown
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging
from ..storage.json_store import PersistenceError

logger = logging.getLogger(__name__)


def main() -> int:
    settings = get_settings()

    # choose console log level from settings.log_level
    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    setup_logging(log_dir=settings.log_dir, console_level=console_level)

    logger.info("Starting %s (data=%s)...", settings.app_name, settings.data_path)

    store = create_store(settings=settings)
    app = create_app(settings=settings, store=store)

    exit_code = 0
    try:
        run_console_loop(app)
    except KeyboardInterrupt:
        # Final persistence is unconditional.
        logger.info("Interrupted, saving state.")
        exit_code = 130
    except Exception:
        logger.exception("Console loop crashed.")
        exit_code = 1

    try:
        shutdown(app, store, settings=settings)
    except PersistenceError as e:
        logger.error("%s", e, exc_info=e.__cause__)
        print(f"ERROR: {e}. Your changes were NOT saved.", file=sys.stderr)
        return 1

    logger.info("Bye.")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
