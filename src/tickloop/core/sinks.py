# src/tickloop/core/sinks.py

from __future__ import annotations

import logging
from datetime import datetime

from .models import Event, EventResult

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def format_result(result: EventResult) -> str:
    return f'Output for Event "{result.key}": {result.result}'


class ConsoleSink:
    """Prints each result to stdout with a local timestamp."""

    def emit(self, result: EventResult) -> None:
        print(f"[{_ts_local()}] {format_result(result)}\n", flush=True)


class LoggingSink:
    """Headless sink: results go to the log instead of stdout."""

    def __init__(self, level: int = logging.INFO) -> None:
        self.level = level

    def emit(self, result: EventResult) -> None:
        logger.log(self.level, "%s", format_result(result))


class ConsoleTickReporter:
    """Prints the per-event progress lines of the console menu."""

    def on_received(self, event: Event) -> None:
        print(f"[{_ts_local()}] Received Event: {event.key}\n", flush=True)

    def on_blocked(self, event: Event, blocked_seconds: float) -> None:
        ms = int(blocked_seconds * 1000)
        print(f"[{_ts_local()}] Event loop was blocked for {ms} ms due to this operation\n", flush=True)
