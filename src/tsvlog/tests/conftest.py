"""
Core pytest configuration for the test suite.

Domain-specific fixtures live in:
- tests/test_fixtures/logging_fixtures.py
- tests/test_fixtures/workers.py (helpers for concurrency tests, not fixtures)
"""

from __future__ import annotations

import sys
from pathlib import Path

# ------------------------------------------------------------------------------------------------
# PATH PATCHING
# ------------------------------------------------------------------------------------------------

# Ensure 'src' on sys.path so `import tsvlog...` works when running tests without installing
SRC = Path(__file__).resolve().parents[2]
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import pytest

from tsvlog.core.logging import builder


@pytest.fixture(autouse=True)
def reset_active_logger():
    """Close whatever setup_logging() installed so tests never share a file handle."""
    yield
    builder.shutdown_logging()


# Logging test fixtures
from tsvlog.tests.test_fixtures.logging_fixtures import (  # noqa: E402
    fake,
    make_entry,
    log_path,
    make_test_settings,
)
