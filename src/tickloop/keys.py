# src/tickloop/keys.py

from __future__ import annotations

import itertools


def generate_unique_event_key(base: str, counter: int) -> str:
    return f"{base}-{counter}"


class KeySequence:
    """
    Hands out event keys from one shared counter: hello-0, read-file-1, ...

    The counter is global across bases, so a key never repeats within a run
    even when two bases look alike.
    """

    def __init__(self, start: int = 0) -> None:
        self._counter = itertools.count(start)

    def next_key(self, base: str) -> str:
        return generate_unique_event_key(base, next(self._counter))
