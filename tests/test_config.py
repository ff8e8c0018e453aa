from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from adapters.http_client import build_async_client
from cli.logging_setup import configure_logging
from core.config import AppSettings


def test_settings_defaults():
    settings = AppSettings(_env_file=None)
    assert settings.http_timeout_seconds == 20.0
    assert settings.follow_redirects is True
    assert settings.max_redirects == 10
    assert settings.log_level == "WARNING"


def test_settings_read_prefixed_environment(monkeypatch):
    monkeypatch.setenv("REQPEEK_HTTP_TIMEOUT_SECONDS", "3.5")
    monkeypatch.setenv("REQPEEK_LOG_LEVEL", "debug")

    settings = AppSettings(_env_file=None)

    assert settings.http_timeout_seconds == 3.5
    assert settings.log_level == "DEBUG"


def test_settings_reject_unknown_log_level():
    with pytest.raises(ValidationError):
        AppSettings(_env_file=None, log_level="chatty")


def test_client_uses_settings():
    settings = AppSettings(_env_file=None, user_agent="probe/1.0", http_timeout_seconds=2.0)
    client = build_async_client(settings)

    assert client.headers["User-Agent"] == "probe/1.0"
    assert client.timeout.connect == 2.0
    assert client.follow_redirects is True


def test_configure_logging_does_not_stack_handlers():
    root = configure_logging("INFO")
    count = len(root.handlers)

    configure_logging("WARNING", verbose=True)

    assert len(root.handlers) == count
    assert root.level == logging.DEBUG
