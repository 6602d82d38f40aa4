# src/tickloop/handlers/remote.py

"""
Remote-record fetcher.

GET <base_url>/posts/<id> and render the post as a one-line description.
Both variants (blocking and coroutine) return error strings instead of
raising, so they can be registered as handlers as-is.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from ..config import DEFAULT_API_BASE_URL

logger = logging.getLogger(__name__)

FETCH_ERROR = "Error fetching data from API"
DECODE_ERROR = "Error decoding data from API"


@dataclass(slots=True, frozen=True)
class Post:
    id: int
    user_id: int
    title: str
    body: str

    @classmethod
    def from_json(cls, data: Any) -> Post:
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")
        return cls(
            id=int(data["id"]),
            user_id=int(data["userId"]),
            title=str(data["title"]),
            body=str(data["body"]),
        )


def post_url(post_id: str, base_url: str = DEFAULT_API_BASE_URL) -> str:
    return f"{base_url.rstrip('/')}/posts/{str(post_id).strip()}"


def _render(response: httpx.Response) -> str:
    try:
        post = Post.from_json(response.json())
    except (ValueError, KeyError, TypeError) as e:
        logger.warning("Could not decode post from %s: %s", response.url, e)
        return DECODE_ERROR
    return f"Fetched post from API: {post}"


def fetch_post(
    post_id: str,
    *,
    base_url: str = DEFAULT_API_BASE_URL,
    timeout: float = 10.0,
    client: httpx.Client | None = None,
) -> str:
    url = post_url(post_id, base_url)
    try:
        if client is None:
            with httpx.Client(timeout=timeout) as c:
                response = c.get(url)
        else:
            response = client.get(url)
        response.raise_for_status()
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.warning("GET %s failed: %s", url, e)
        return FETCH_ERROR
    return _render(response)


async def afetch_post(
    post_id: str,
    *,
    base_url: str = DEFAULT_API_BASE_URL,
    timeout: float = 10.0,
    client: httpx.AsyncClient | None = None,
) -> str:
    url = post_url(post_id, base_url)
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=timeout) as c:
                response = await c.get(url)
        else:
            response = await client.get(url)
        response.raise_for_status()
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.warning("GET %s failed: %s", url, e)
        return FETCH_ERROR
    return _render(response)
