# tests/conftest.py

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from types import SimpleNamespace

import pytest

from tickloop.core.event_loop import EventLoop

from .fakes import CollectingSink


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with the CLI bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the developer's environment and .env.
    """
    return SimpleNamespace(
        app_name="tickloop-test",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        hello_file=tmp_path / "hello.txt",
        greeting="How are you doing today?",
        api_base_url="http://api.invalid",
        api_post_id="2",
        http_timeout_seconds=1.0,
        async_timeout_seconds=None,
    )


@pytest.fixture()
def sink() -> CollectingSink:
    return CollectingSink()


@pytest.fixture()
def scheduler(sink: CollectingSink) -> Iterator[EventLoop]:
    """EventLoop wired to a CollectingSink; the engine thread is stopped afterwards."""
    loop = EventLoop(sink=sink)
    try:
        yield loop
    finally:
        loop.close()
