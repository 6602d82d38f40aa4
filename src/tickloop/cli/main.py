# src/tickloop/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds the EventLoop, then runs the console menu in the
main thread. Async handlers run on the engine's background thread.
"""

from __future__ import annotations

import logging
import signal

from ..cli.bootstrap import build_task_kinds, create_event_loop
from ..cli.console import run_console_menu
from ..config import get_settings
from ..core.sinks import ConsoleSink
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    # SIGTERM behaves like Ctrl+C so input() unblocks and the menu exits.
    try:
        signal.signal(signal.SIGTERM, signal.default_int_handler)
    except (AttributeError, ValueError, OSError):
        logger.debug("SIGTERM handler not installed.", exc_info=True)

    loop = create_event_loop(sink=ConsoleSink())
    try:
        run_console_menu(
            loop,
            build_task_kinds(settings),
            async_timeout_seconds=settings.async_timeout_seconds,
        )
    finally:
        loop.close()
        logger.info("Bye.")


if __name__ == "__main__":
    main()
