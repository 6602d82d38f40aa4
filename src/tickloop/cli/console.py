# src/tickloop/cli/console.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from ..core.event_loop import EventLoop, TickReport
from ..core.models import Event, ExecutionMode
from ..keys import KeySequence
from .bootstrap import TaskKind

logger = logging.getLogger(__name__)

DRAIN_CHOICE = "4"
EXIT_CHOICE = "5"


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def _ask(
    read_line: Callable[[str], str],
    lines: list[str],
    valid: set[str],
    error: str,
) -> str:
    while True:
        for line in lines:
            print(line)
        answer = read_line(" > ").strip()
        if answer in valid:
            return answer
        print(error)


def _task_menu(kinds: dict[str, TaskKind]) -> list[str]:
    lines = ["What kind of task would you like to submit to the Event Loop?"]
    for choice in sorted(kinds):
        lines.append(f" {choice}. {kinds[choice].label}")
    lines.append(f" {DRAIN_CHOICE}. Print output of previously submitted Async task")
    lines.append(f" {EXIT_CHOICE}. Exit!")
    return lines


MODE_MENU = [
    "How would you like to execute this operation?",
    " 1. Synchronously (this would block the Event Loop until the operation completes)",
    " 2. Asynchronously (this won't block Event Loop in any way)",
]


def print_report(report: TickReport) -> None:
    # per-event lines come from the loop's ConsoleTickReporter as the tick runs
    if report.idle:
        _print_ts("Nothing to do: no pending events and no finished async results.\n")


def run_console_menu(
    loop: EventLoop,
    kinds: dict[str, TaskKind],
    *,
    keys: KeySequence | None = None,
    read_line: Callable[[str], str] = input,
    async_timeout_seconds: float | None = None,
) -> None:
    """
    Interactive driver: every answered menu round submits at most one event
    and then ticks the loop exactly once.
    """
    keys = keys or KeySequence()
    menu = _task_menu(kinds)
    valid_choices = set(kinds) | {DRAIN_CHOICE, EXIT_CHOICE}
    choice_error = f"Invalid input. Please select a valid option (1-{EXIT_CHOICE})."

    logger.info("Console menu started.")

    while True:
        try:
            choice = _ask(read_line, menu, valid_choices, choice_error)
            if choice == EXIT_CHOICE:
                logger.info("Console exit requested.")
                break

            kind = kinds.get(choice)
            if kind is not None:
                answer = _ask(
                    read_line,
                    MODE_MENU,
                    {"1", "2"},
                    "Invalid input. Please select a valid option (1 or 2).",
                )
                mode = ExecutionMode.from_choice(answer)
                key = keys.next_key(kind.key_base)
                handler = kind.async_handler if mode is ExecutionMode.ASYNC else kind.sync_handler
                loop.on(key, handler).dispatch(
                    Event(
                        key=key,
                        payload=kind.payload,
                        mode=mode,
                        timeout_seconds=async_timeout_seconds if mode is ExecutionMode.ASYNC else None,
                    )
                )

            print_report(loop.tick())

        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

    logger.info("Console menu finished.")
