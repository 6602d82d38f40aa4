# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from tickloop.config import DEFAULT_API_BASE_URL, Settings

_VARS = [
    "TICKLOOP_APP_NAME",
    "TICKLOOP_LOG_LEVEL",
    "TICKLOOP_DATA_DIR",
    "TICKLOOP_HELLO_FILE",
    "TICKLOOP_GREETING",
    "TICKLOOP_API_BASE_URL",
    "TICKLOOP_API_POST_ID",
    "TICKLOOP_HTTP_TIMEOUT_SECONDS",
    "TICKLOOP_ASYNC_TIMEOUT_SECONDS",
]


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env) -> None:
    s = Settings.from_env()

    assert s.app_name == "tickloop"
    assert s.log_level == "INFO"
    assert s.data_dir == Path(".local/tickloop")
    assert s.hello_file == Path("hello.txt")
    assert s.greeting == "How are you doing today?"
    assert s.api_base_url == DEFAULT_API_BASE_URL
    assert s.api_post_id == "2"
    assert s.http_timeout_seconds == 10.0
    assert s.async_timeout_seconds is None


def test_env_overrides(clean_env, tmp_path: Path) -> None:
    clean_env.setenv("TICKLOOP_HELLO_FILE", str(tmp_path / "other.txt"))
    clean_env.setenv("TICKLOOP_API_POST_ID", " 7 ")
    clean_env.setenv("TICKLOOP_HTTP_TIMEOUT_SECONDS", "2.5")
    clean_env.setenv("TICKLOOP_ASYNC_TIMEOUT_SECONDS", "30")

    s = Settings.from_env()

    assert s.hello_file == tmp_path / "other.txt"
    assert s.api_post_id == "7"
    assert s.http_timeout_seconds == 2.5
    assert s.async_timeout_seconds == 30.0


@pytest.mark.parametrize("raw", ["abc", "0", "-5", ""])
def test_bad_or_disabled_async_timeout_means_no_deadline(clean_env, raw: str) -> None:
    clean_env.setenv("TICKLOOP_ASYNC_TIMEOUT_SECONDS", raw)
    assert Settings.from_env().async_timeout_seconds is None


def test_malformed_http_timeout_falls_back(clean_env) -> None:
    clean_env.setenv("TICKLOOP_HTTP_TIMEOUT_SECONDS", "soon")
    assert Settings.from_env().http_timeout_seconds == 10.0
