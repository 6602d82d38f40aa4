"""
tickloop: a minimal cooperative event loop.

Register handlers, submit sync or async events, and advance the loop one
bounded step at a time with EventLoop.tick().
"""

__version__ = "0.1.0"

from .core.event_loop import EventLoop, TickReport
from .core.models import Event, EventResult, ExecutionMode

__all__ = [
    "Event",
    "EventLoop",
    "EventResult",
    "ExecutionMode",
    "TickReport",
]
