"""
Shared fixtures for the logging tests.
"""

from datetime import datetime
from types import SimpleNamespace

import pytest
from faker import Faker

from tsvlog.core.logging.entry import LogEntry
from tsvlog.core.logging.levels import Severity

FIXED_TIME = datetime(2025, 9, 26, 11, 8, 38, 680075)


@pytest.fixture
def fake() -> Faker:
    faker = Faker()
    Faker.seed(1234)
    return faker


@pytest.fixture
def make_entry():
    """Factory for LogEntry objects with deterministic pid/timestamp."""

    def _make(level=Severity.INFO, message="hello", context=None, error=None,
              channel="app", pid=4321, timestamp=FIXED_TIME):
        return LogEntry(
            level=level,
            message=message,
            context=dict(context or {}),
            error=error,
            channel=channel,
            pid=pid,
            timestamp=timestamp,
        )

    return _make


@pytest.fixture
def log_path(tmp_path):
    return tmp_path / "app.log"


@pytest.fixture
def make_test_settings(tmp_path):
    """Build a lightweight settings object for tests (duck-typed)."""

    def _make(**overrides):
        s = SimpleNamespace()
        s.ENV = "testing"
        s.LOG_LEVEL = "DEBUG"
        s.LOG_CHANNEL = "app"
        s.LOG_FORMAT = "tsv"
        s.LOG_TO_STDOUT = False
        s.LOG_DIR = tmp_path / "logs"
        s.LOG_FILE = "test"
        s.LOG_REDACT = True
        s.LOG_REQUEST_ID = True
        for key, value in overrides.items():
            setattr(s, key, value)
        return s

    return _make
