# src/tickloop/core/event_loop.py

"""
Event loop: register handlers, submit events, advance with tick().

There is no embedded loop. Whoever drives the scheduler (console menu, test,
headless script) decides when to call tick() again. One tick does at most:
1. one dispatch from the pending queue (sync results go straight to the sink),
2. one drain from the completed queue.

An optional TickObserver hears about each dispatch as it happens, so progress
lines interleave with sink output in execution order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .engine import AsyncTask, ExecutionEngine
from .models import Event, EventResult
from .ports import Handler, OutputSink, TickObserver
from .queues import CompletedQueue, PendingQueue
from .registry import HandlerRegistry
from .sinks import LoggingSink

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class TickReport:
    """What a single tick() did. All fields are empty for an idle tick."""

    event: Event | None = None
    handled: bool = False
    blocked_seconds: float | None = None
    immediate: EventResult | None = None
    drained: EventResult | None = None
    task: AsyncTask | None = None

    @property
    def dispatched(self) -> bool:
        return self.event is not None

    @property
    def blocked_ms(self) -> int | None:
        if self.blocked_seconds is None:
            return None
        return int(self.blocked_seconds * 1000)

    @property
    def idle(self) -> bool:
        return self.event is None and self.drained is None


class EventLoop:
    def __init__(
        self,
        *,
        sink: OutputSink | None = None,
        registry: HandlerRegistry | None = None,
        observer: TickObserver | None = None,
    ) -> None:
        self.registry = registry or HandlerRegistry()
        self.pending = PendingQueue()
        self.completed = CompletedQueue()
        self.engine = ExecutionEngine(self.completed)
        self.sink: OutputSink = sink or LoggingSink()
        self.observer = observer

    def register(self, key: str, handler: Handler) -> None:
        self.registry.register(key, handler)

    def on(self, key: str, handler: Handler) -> EventLoop:
        """Chainable register(): loop.on(key, fn).dispatch(event)."""
        self.register(key, handler)
        return self

    def submit(self, event: Event) -> None:
        self.pending.enqueue(event)
        logger.debug("Submitted %s (mode=%s)", event.key, event.mode.value)

    def dispatch(self, event: Event) -> EventLoop:
        """Chainable submit()."""
        self.submit(event)
        return self

    def tick(self) -> TickReport:
        event = self.pending.dequeue()

        handled = False
        blocked: float | None = None
        immediate: EventResult | None = None
        task: AsyncTask | None = None

        if event is not None:
            logger.debug("Received event %s", event.key)
            if self.observer is not None:
                self.observer.on_received(event)

            execution = self.engine.execute(event, self.registry)
            handled = execution.handled
            blocked = execution.blocked_seconds
            immediate = execution.result
            task = execution.task

            if immediate is not None:
                self.sink.emit(immediate)
            if blocked is not None:
                logger.debug("Event loop was blocked for %d ms by %s", int(blocked * 1000), event.key)
                if self.observer is not None:
                    self.observer.on_blocked(event, blocked)

        drained = self.completed.dequeue()
        if drained is not None:
            self.sink.emit(drained)

        return TickReport(
            event=event,
            handled=handled,
            blocked_seconds=blocked,
            immediate=immediate,
            drained=drained,
            task=task,
        )

    def close(self) -> None:
        self.engine.close()

    def __enter__(self) -> EventLoop:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
