# tests/test_handlers.py

from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest

from tickloop.handlers.files import NEW_FILE_CONTENT, read_file
from tickloop.handlers.greeting import greet
from tickloop.handlers.remote import DECODE_ERROR, FETCH_ERROR, Post, afetch_post, fetch_post
from tickloop.keys import KeySequence, generate_unique_event_key

POST = {"userId": 1, "id": 2, "title": "qui est esse", "body": "est rerum tempore"}


def _transport(status: int = 200, body: str | None = None) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/posts/2"
        return httpx.Response(status, text=json.dumps(POST) if body is None else body)

    return httpx.MockTransport(handler)


def test_read_file_returns_existing_content(tmp_path: Path) -> None:
    path = tmp_path / "hello.txt"
    path.write_text("hi there", "utf-8")
    assert read_file(str(path)) == "hi there"


def test_read_file_creates_missing_file(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "hello.txt"

    assert read_file(str(path)) == NEW_FILE_CONTENT
    assert path.read_text("utf-8") == NEW_FILE_CONTENT


def test_read_file_encodes_errors(tmp_path: Path) -> None:
    # a directory can't be read as text
    result = read_file(str(tmp_path))
    assert result.startswith("Error reading file:")


def test_greet() -> None:
    assert greet("How are you doing today?") == "Hello! How are you doing today?"


def test_fetch_post_formats_record() -> None:
    with httpx.Client(transport=_transport(), base_url="http://api.test") as client:
        result = fetch_post("2", base_url="http://api.test", client=client)

    expected = Post(id=2, user_id=1, title="qui est esse", body="est rerum tempore")
    assert result == f"Fetched post from API: {expected}"


def test_fetch_post_encodes_http_and_decode_failures() -> None:
    with httpx.Client(transport=_transport(status=500)) as client:
        assert fetch_post("2", base_url="http://api.test", client=client) == FETCH_ERROR

    with httpx.Client(transport=_transport(body="<html>")) as client:
        assert fetch_post("2", base_url="http://api.test", client=client) == DECODE_ERROR

    with httpx.Client(transport=_transport(body='{"id": 2}')) as client:
        assert fetch_post("2", base_url="http://api.test", client=client) == DECODE_ERROR


def test_fetch_post_encodes_network_failure() -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with httpx.Client(transport=httpx.MockTransport(refuse)) as client:
        assert fetch_post("2", base_url="http://api.test", client=client) == FETCH_ERROR


@pytest.mark.asyncio
async def test_afetch_post_matches_blocking_variant() -> None:
    async with httpx.AsyncClient(transport=_transport()) as client:
        result = await afetch_post("2", base_url="http://api.test/", client=client)

    assert result.startswith("Fetched post from API: Post(id=2, user_id=1")


@pytest.mark.asyncio
async def test_afetch_post_encodes_failure() -> None:
    async with httpx.AsyncClient(transport=_transport(status=404)) as client:
        assert await afetch_post("2", base_url="http://api.test", client=client) == FETCH_ERROR


def test_generate_unique_event_key() -> None:
    assert generate_unique_event_key("hello", 0) == "hello-0"
    assert generate_unique_event_key("read-file", 12) == "read-file-12"


def test_key_sequence_never_repeats() -> None:
    seq = KeySequence()
    keys = [seq.next_key(base) for base in ["hello", "hello", "read-file", "hello"] * 50]

    assert len(set(keys)) == len(keys)
    assert keys[:3] == ["hello-0", "hello-1", "read-file-2"]
