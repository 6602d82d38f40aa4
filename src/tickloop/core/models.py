# src/tickloop/core/models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ExecutionMode(StrEnum):
    """How an event's handler runs relative to the driver."""

    SYNC = "sync"  # inline, blocks tick() for the handler's duration
    ASYNC = "async"  # background task, result arrives via the completed queue

    @classmethod
    def from_choice(cls, raw: str | None) -> ExecutionMode:
        """Menu choice "2" (or "async") selects ASYNC; anything else is SYNC."""
        value = (raw or "").strip().lower()
        if value in ("2", cls.ASYNC.value):
            return cls.ASYNC
        return cls.SYNC


@dataclass(slots=True, frozen=True)
class Event:
    """
    A unit of submitted work.

    timeout_seconds only applies to ASYNC dispatch; None means the task may
    run forever.
    """

    key: str
    payload: str
    mode: ExecutionMode = ExecutionMode.SYNC
    timeout_seconds: float | None = None

    @property
    def is_async(self) -> bool:
        return self.mode is ExecutionMode.ASYNC


@dataclass(slots=True, frozen=True)
class EventResult:
    key: str
    result: str
