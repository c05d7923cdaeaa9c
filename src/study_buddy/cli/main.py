# src/study_buddy/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, starts the store's event loop in a
background thread, then runs the console REPL in the main thread.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..core.loop_runner import start_loop_in_background
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)

_SHUTDOWN_TIMEOUT_S = 10.0


def main() -> None:
    settings = get_settings()

    # choose console log level from settings.log_level
    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)
    runner = start_loop_in_background()

    try:
        runner.run(state.task_store.initialize())
        run_console_loop(state, runner)
    finally:
        try:
            runner.run(state.task_store.close(), timeout=_SHUTDOWN_TIMEOUT_S)
        except Exception:
            logger.exception("Failed to flush tasks on shutdown.")
        runner.stop()
        runner.join(timeout=_SHUTDOWN_TIMEOUT_S)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
