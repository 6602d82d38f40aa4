# src/tickloop/core/engine.py

"""
Execution engine.

Runs one event's handler either:
- inline on the caller's thread (SYNC), returning the result immediately, or
- as a task on a background asyncio loop (ASYNC), which appends the result
  to the CompletedQueue once the handler finishes.

The driver (console menu, tests) blocks and owns the main thread; async
tasks live on a loop in a daemon thread that keeps running between ticks.

Plain handlers dispatched ASYNC get a daemon worker thread each, so a slow or
stuck handler never delays another one. Coroutine handlers are awaited on the
loop itself.
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import contextlib
import inspect
import logging
import threading
import time
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Coroutine

from .models import Event, EventResult, ExecutionMode
from .ports import Handler, SyncHandler
from .queues import CompletedQueue
from .registry import HandlerRegistry

logger = logging.getLogger(__name__)


def _failure_text(exc: BaseException) -> str:
    detail = str(exc).strip()
    name = exc.__class__.__name__
    return f"Error: {name}: {detail}" if detail else f"Error: {name}"


class _DeadlineExceeded(Exception):
    """The event's own timeout_seconds elapsed (not a TimeoutError from the handler)."""


class TaskState(StrEnum):
    PENDING = "pending"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class AsyncTask:
    """
    Handle of one ASYNC dispatch.

    Delivery and cancellation go through the same lock: once the result is
    queued, cancel() returns False; once cancelled, the result is dropped.
    """

    def __init__(self, key: str) -> None:
        self.key = key
        self.future: concurrent.futures.Future | None = None
        self._state = TaskState.PENDING
        self._lock = threading.Lock()

    @property
    def state(self) -> TaskState:
        with self._lock:
            return self._state

    def cancel(self) -> bool:
        with self._lock:
            if self._state is not TaskState.PENDING:
                return False
            self._state = TaskState.CANCELLED
        if self.future is not None:
            self.future.cancel()
        return True

    def _deliver(self, completed: CompletedQueue, result: EventResult) -> bool:
        with self._lock:
            if self._state is not TaskState.PENDING:
                return False
            completed.enqueue(result)
            self._state = TaskState.DELIVERED
            return True


@dataclass(slots=True, frozen=True)
class Execution:
    """
    Outcome of one execute() call.

    - handled=False: no handler ran (none registered, or the engine is closed).
    - result: the EventResult of a SYNC run (None for ASYNC).
    - blocked_seconds: how long execute() held the caller.
    - task: handle of the ASYNC run; cancel() stops it before it reports.
    """

    event: Event
    handled: bool
    blocked_seconds: float | None = None
    result: EventResult | None = None
    task: AsyncTask | None = None

    def cancel(self) -> bool:
        if self.task is None:
            return False
        return self.task.cancel()


@dataclass
class _LoopRunner:
    thread: threading.Thread
    loop: asyncio.AbstractEventLoop

    def submit(self, coro: Coroutine[Any, Any, Any]) -> concurrent.futures.Future:
        return asyncio.run_coroutine_threadsafe(coro, self.loop)

    def stop(self) -> None:
        try:
            self.loop.call_soon_threadsafe(self.loop.stop)
        except RuntimeError:
            logger.debug("Engine loop already closed.", exc_info=True)

    def join(self, timeout: float | None = None) -> None:
        self.thread.join(timeout=timeout)


def _start_loop_thread(name: str) -> _LoopRunner:
    ready = threading.Event()
    holder: dict[str, asyncio.AbstractEventLoop] = {}

    def runner() -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        holder["loop"] = loop
        ready.set()

        try:
            loop.run_forever()
        finally:
            # anything still pending is a leaked handler
            pending = asyncio.all_tasks(loop)
            for task in pending:
                task.cancel()
            if pending:
                with contextlib.suppress(Exception):
                    loop.run_until_complete(asyncio.gather(*pending, return_exceptions=True))
            loop.close()

    t = threading.Thread(target=runner, name=name, daemon=True)
    t.start()

    if not ready.wait(timeout=5.0) or "loop" not in holder:
        raise RuntimeError("Engine loop thread did not start")

    logger.debug("Engine loop thread %s started.", name)
    return _LoopRunner(thread=t, loop=holder["loop"])


def _start_worker(handler: SyncHandler, event: Event) -> asyncio.Future:
    """
    Run a plain handler on its own daemon thread.

    Returns a loop future resolved from the worker via call_soon_threadsafe.
    Must be called on the engine loop. The thread is started before this
    returns, so a deadline measured from here covers only the handler.
    """
    loop = asyncio.get_running_loop()
    fut: asyncio.Future = loop.create_future()

    def _settle(value: Any, exc: BaseException | None) -> None:
        if fut.done():
            # cancelled or timed out meanwhile; the late value is discarded
            return
        if exc is not None:
            fut.set_exception(exc)
        else:
            fut.set_result(value)

    def worker() -> None:
        value: Any = None
        error: BaseException | None = None
        try:
            value = handler(event.payload)
        except Exception as exc:
            error = exc
        try:
            loop.call_soon_threadsafe(_settle, value, error)
        except RuntimeError:
            logger.debug("Engine loop closed before %s finished.", event.key)

    threading.Thread(target=worker, name=f"tickloop-task-{event.key}", daemon=True).start()
    return fut


class ExecutionEngine:
    def __init__(self, completed: CompletedQueue, *, thread_name: str = "tickloop-engine") -> None:
        self._completed = completed
        self._thread_name = thread_name
        self._runner: _LoopRunner | None = None
        self._lock = threading.Lock()
        self._inflight: set[concurrent.futures.Future] = set()
        self._closed = False

    # ---- public API ----

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    def execute(self, event: Event, registry: HandlerRegistry) -> Execution:
        handler = registry.lookup(event.key)
        if handler is None:
            logger.info("No handler found for %s", event.key)
            return Execution(event=event, handled=False)

        needs_loop = event.mode is ExecutionMode.ASYNC or inspect.iscoroutinefunction(handler)
        if needs_loop and self.closed:
            logger.warning("Engine is closed; dropping %s (mode=%s)", event.key, event.mode.value)
            return Execution(event=event, handled=False)

        started = time.perf_counter()
        if event.mode is ExecutionMode.ASYNC:
            task = self._spawn(handler, event)
            return Execution(
                event=event,
                handled=True,
                blocked_seconds=time.perf_counter() - started,
                task=task,
            )

        text = self._run_inline(handler, event)
        return Execution(
            event=event,
            handled=True,
            blocked_seconds=time.perf_counter() - started,
            result=EventResult(key=event.key, result=text),
        )

    def outstanding(self) -> int:
        with self._lock:
            return len(self._inflight)

    def wait_idle(self, timeout: float | None = None) -> bool:
        """Wait for every in-flight async task. True if none is left running."""
        with self._lock:
            snapshot = list(self._inflight)
        if not snapshot:
            return True
        _, not_done = concurrent.futures.wait(snapshot, timeout=timeout)
        return not not_done

    def close(self, timeout: float = 2.0) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            runner = self._runner
            self._runner = None

        if runner is None:
            return

        leaked = self.outstanding()
        if leaked:
            logger.warning("Closing engine with %d async task(s) still running.", leaked)
        runner.stop()
        runner.join(timeout=timeout)
        logger.debug("Engine loop thread stopped.")

    # ---- internals ----

    def _loop_runner(self) -> _LoopRunner:
        with self._lock:
            if self._closed:
                raise RuntimeError("ExecutionEngine is closed")
            if self._runner is None:
                self._runner = _start_loop_thread(self._thread_name)
            return self._runner

    def _run_inline(self, handler: Handler, event: Event) -> str:
        try:
            if inspect.iscoroutinefunction(handler):
                # Coroutine handlers need a loop; the driver waits on ours.
                return str(self._loop_runner().submit(handler(event.payload)).result())
            return str(handler(event.payload))
        except Exception as exc:
            logger.exception("Handler for %s raised", event.key)
            return _failure_text(exc)

    def _spawn(self, handler: Handler, event: Event) -> AsyncTask:
        task = AsyncTask(event.key)
        future = self._loop_runner().submit(self._run_task(handler, event, task))
        task.future = future
        with self._lock:
            self._inflight.add(future)
        future.add_done_callback(self._forget)
        if task.state is TaskState.CANCELLED:
            # cancel() raced ahead of the future assignment
            future.cancel()
        return task

    def _forget(self, future: concurrent.futures.Future) -> None:
        with self._lock:
            self._inflight.discard(future)

    async def _await_handler(self, handler: Handler, event: Event) -> Any:
        if inspect.iscoroutinefunction(handler):
            call: Any = handler(event.payload)
        else:
            call = _start_worker(handler, event)

        if event.timeout_seconds is None:
            return await call

        scope = asyncio.timeout(event.timeout_seconds)
        try:
            async with scope:
                return await call
        except TimeoutError:
            if scope.expired():
                raise _DeadlineExceeded() from None
            raise

    async def _run_task(self, handler: Handler, event: Event, task: AsyncTask) -> None:
        try:
            text = str(await self._await_handler(handler, event))
        except _DeadlineExceeded:
            logger.warning("Async handler for %s timed out after %ss", event.key, event.timeout_seconds)
            text = f"Error: handler timed out after {event.timeout_seconds}s"
        except asyncio.CancelledError:
            logger.info("Async task for %s cancelled", event.key)
            raise
        except Exception as exc:
            logger.exception("Async handler for %s raised", event.key)
            text = _failure_text(exc)

        if task._deliver(self._completed, EventResult(key=event.key, result=text)):
            logger.debug("Async result for %s queued", event.key)
        else:
            logger.debug("Async result for %s discarded (task cancelled)", event.key)
