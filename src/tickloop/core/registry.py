# src/tickloop/core/registry.py

from __future__ import annotations

import logging

from .ports import Handler

logger = logging.getLogger(__name__)


class HandlerRegistry:
    """Event key -> handler mapping. Last registration for a key wins."""

    def __init__(self) -> None:
        self._handlers: dict[str, Handler] = {}

    def register(self, key: str, handler: Handler) -> None:
        if key in self._handlers:
            logger.debug("Handler for %s replaced", key)
        self._handlers[key] = handler

    def lookup(self, key: str) -> Handler | None:
        return self._handlers.get(key)

    def keys(self) -> list[str]:
        return list(self._handlers)

    def __contains__(self, key: object) -> bool:
        return key in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)
