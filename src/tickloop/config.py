# src/tickloop/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing is required at import time; every field has a default.
- Malformed values fall back to defaults instead of crashing the CLI.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TICKLOOP"

DEFAULT_API_BASE_URL = "https://jsonplaceholder.typicode.com"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_optional_float(name: str) -> float | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    # zero/negative means "no deadline"
    return value if value > 0 else None


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    data_dir: Path

    # ---- Demo handlers ----
    hello_file: Path
    greeting: str

    # ---- Remote fetcher ----
    api_base_url: str
    api_post_id: str
    http_timeout_seconds: float

    # ---- Async dispatch ----
    async_timeout_seconds: float | None

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "tickloop").strip() or "tickloop"
        log_level = _env(_k("LOG_LEVEL"), "INFO").strip() or "INFO"
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/tickloop"))

        hello_file = _env_path(_k("HELLO_FILE"), Path("hello.txt"))
        greeting = _env(_k("GREETING"), "How are you doing today?")

        api_base_url = _env(_k("API_BASE_URL"), DEFAULT_API_BASE_URL).strip() or DEFAULT_API_BASE_URL
        api_post_id = _env(_k("API_POST_ID"), "2").strip() or "2"
        http_timeout_seconds = max(0.1, _env_float(_k("HTTP_TIMEOUT_SECONDS"), 10.0))

        async_timeout_seconds = _env_optional_float(_k("ASYNC_TIMEOUT_SECONDS"))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            hello_file=hello_file,
            greeting=greeting,
            api_base_url=api_base_url,
            api_post_id=api_post_id,
            http_timeout_seconds=http_timeout_seconds,
            async_timeout_seconds=async_timeout_seconds,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
