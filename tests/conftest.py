"""Shared test fixtures and configuration.

Sets predictable environment variables before any memento import, and
provides common fixtures like a temp record store and mocked ports.
"""

import os
import tempfile
from pathlib import Path

# Patch env vars BEFORE any memento imports
os.environ.setdefault("DATABASE_PATH", str(Path(tempfile.mkdtemp()) / "memento.db"))
os.environ.setdefault("LOG_LEVEL", "DEBUG")
os.environ.setdefault("ROLL_SAME_WEEKDAY", "true")
os.environ.setdefault("TELEGRAM_CHAT_ID", "")
os.environ.setdefault("OPENAI_API_KEY", "")

from datetime import datetime
from unittest.mock import AsyncMock

import pytest

# Wednesday, 21 October 2026, 10:30:15
NOW = datetime(2026, 10, 21, 10, 30, 15)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def tmp_db_path(tmp_path):
    """Return a temporary SQLite DB path."""
    return str(tmp_path / "test_memento.db")


@pytest.fixture
def store(tmp_db_path):
    """Return a RecordStore instance backed by a temp file."""
    from memento.data.db import RecordStore
    return RecordStore(db_path=tmp_db_path)


@pytest.fixture
def scheduler():
    """Mocked NotificationPort."""
    return AsyncMock()


@pytest.fixture
def speech():
    """Mocked SpeechSynthesizerPort."""
    return AsyncMock()
