# src/tickloop/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The event loop depends on Protocols instead of concrete implementations, so
output rendering stays swappable and tests can capture results directly.
"""

from typing import Awaitable, Callable, Protocol, Union

from .models import Event, EventResult

SyncHandler = Callable[[str], str]
AsyncHandler = Callable[[str], Awaitable[str]]
Handler = Union[SyncHandler, AsyncHandler]
# payload -> result. Failures are expected to be encoded in the returned text.


class OutputSink(Protocol):
    """
    Renders one finished result.

    Implementations must not swallow their own failures: a broken output
    stream is fatal and propagates out of EventLoop.tick().
    """

    def emit(self, result: EventResult) -> None: ...


class TickObserver(Protocol):
    """
    Progress hooks of EventLoop.tick(), called in order for each dispatched event:
    on_received before the handler runs, on_blocked once execute() returned
    and any immediate result was emitted.
    """

    def on_received(self, event: Event) -> None: ...

    def on_blocked(self, event: Event, blocked_seconds: float) -> None: ...
