"""
Memento — Centralized configuration.

Loads all settings from .env and validates them.
Nothing here is required: the core runs on defaults, and the optional
adapters (Telegram scheduler, Whisper transcriber) read their keys lazily.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

# Load .env from project root (two levels up from memento/config.py)
_ENV_PATH = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_ENV_PATH)

_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class Settings(BaseModel):
    """Application settings loaded from environment variables."""

    # SQLite
    DATABASE_PATH: str = "data/memento.db"

    # Logging
    LOG_LEVEL: str = "INFO"

    # Life tracker
    DEFAULT_LIFE_EXPECTANCY: int = 80

    # Time parsing: a weekday naming today resolves to next week
    ROLL_SAME_WEEKDAY: bool = True

    # Reminder titles derived from the message
    TITLE_MAX_LENGTH: int = 30

    # Telegram (only needed for the Telegram notification scheduler)
    TELEGRAM_BOT_TOKEN: str = ""
    TELEGRAM_CHAT_ID: int | None = None

    # Audio: OpenAI Whisper (transcription only)
    OPENAI_API_KEY: str = ""
    WHISPER_LANGUAGE: str = "en"

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def parse_log_level(cls, v: str) -> str:
        level = str(v).strip().upper() or "INFO"
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown LOG_LEVEL: {v!r}")
        return level

    @field_validator("DEFAULT_LIFE_EXPECTANCY", "TITLE_MAX_LENGTH", mode="before")
    @classmethod
    def parse_positive_int(cls, v: str | int) -> int:
        value = int(v)
        if value <= 0:
            raise ValueError(f"Expected a positive integer, got {v!r}")
        return value

    @field_validator("ROLL_SAME_WEEKDAY", mode="before")
    @classmethod
    def parse_flag(cls, v: str | bool) -> bool:
        if isinstance(v, bool):
            return v
        return str(v).strip().lower() in ("1", "true", "yes", "on")

    @field_validator("TELEGRAM_CHAT_ID", mode="before")
    @classmethod
    def parse_chat_id(cls, v: str | int | None) -> int | None:
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return int(v)


def _load_settings() -> Settings:
    """Load settings from environment."""
    return Settings(
        DATABASE_PATH=os.getenv("DATABASE_PATH", "data/memento.db"),
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO"),
        DEFAULT_LIFE_EXPECTANCY=os.getenv("DEFAULT_LIFE_EXPECTANCY", "80"),
        ROLL_SAME_WEEKDAY=os.getenv("ROLL_SAME_WEEKDAY", "true"),
        TITLE_MAX_LENGTH=os.getenv("TITLE_MAX_LENGTH", "30"),
        TELEGRAM_BOT_TOKEN=os.getenv("TELEGRAM_BOT_TOKEN", ""),
        TELEGRAM_CHAT_ID=os.getenv("TELEGRAM_CHAT_ID", ""),
        OPENAI_API_KEY=os.getenv("OPENAI_API_KEY", ""),
        WHISPER_LANGUAGE=os.getenv("WHISPER_LANGUAGE", "en"),
    )


def configure_logging(level: str | None = None) -> None:
    """Install the root handler used by every memento module logger."""
    logging.basicConfig(
        level=level or settings.LOG_LEVEL,
        format=_LOG_FORMAT,
    )


# Read-only configuration, imported by other modules as:
#   from memento.config import settings
settings = _load_settings()
