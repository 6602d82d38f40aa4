# src/tickloop/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- builds the EventLoop with the chosen output sink,
- binds the demo handlers (greeting, file reader, API fetcher) to settings.
"""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass

from ..config import get_settings
from ..core.event_loop import EventLoop
from ..core.ports import Handler, OutputSink, TickObserver
from ..core.sinks import ConsoleTickReporter
from ..handlers.files import read_file
from ..handlers.greeting import greet
from ..handlers.remote import afetch_post, fetch_post

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class TaskKind:
    """
    One menu entry that submits work.

    The same payload runs through sync_handler or async_handler depending on
    the mode the user picks. async_handler may be a coroutine function.
    """

    choice: str
    label: str
    key_base: str
    payload: str
    sync_handler: Handler
    async_handler: Handler


def build_task_kinds(settings=None) -> dict[str, TaskKind]:
    if settings is None:
        settings = get_settings()

    fetch_kwargs = {
        "base_url": settings.api_base_url,
        "timeout": float(settings.http_timeout_seconds),
    }

    kinds = [
        TaskKind(
            choice="1",
            label="Wish me Hello",
            key_base="hello",
            payload=settings.greeting,
            sync_handler=greet,
            async_handler=greet,
        ),
        TaskKind(
            choice="2",
            label=f"Print the contents of a file named {settings.hello_file.name}",
            key_base="read-file",
            payload=str(settings.hello_file),
            sync_handler=read_file,
            async_handler=read_file,
        ),
        TaskKind(
            choice="3",
            label="Retrieve data from API & print it",
            key_base="fetch-from-api",
            payload=settings.api_post_id,
            sync_handler=functools.partial(fetch_post, **fetch_kwargs),
            async_handler=functools.partial(afetch_post, **fetch_kwargs),
        ),
    ]
    return {k.choice: k for k in kinds}


def create_event_loop(
    *,
    sink: OutputSink | None = None,
    observer: TickObserver | None = None,
) -> EventLoop:
    """Create an empty EventLoop. Handlers are registered per submission."""
    loop = EventLoop(sink=sink, observer=observer or ConsoleTickReporter())
    logger.debug("Event loop created (sink=%s).", type(loop.sink).__name__)
    return loop
