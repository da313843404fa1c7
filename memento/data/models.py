"""
Memento — Data Models.

Plain records owned by the persistence layer. The core receives snapshots
of these and returns derived views; it never mutates a stored record in
place. Serialized field names match the keys the mobile app stores.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Frequency(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"


class GoalCategory(str, Enum):
    PERSONAL = "personal"
    PROFESSIONAL = "professional"
    HEALTH = "health"
    RELATIONSHIPS = "relationships"


def new_record_id(now: datetime) -> str:
    """Time-based identifier: milliseconds since the epoch."""
    return str(int(now.timestamp() * 1000))


def _parse_optional_datetime(raw: str | None) -> datetime | None:
    if not raw:
        return None
    return datetime.fromisoformat(raw)


@dataclass(frozen=True)
class Reminder:
    """A scheduled reminder.

    Created once on save and deleted by id; never edited. Whether it is
    past due is derived from `datetime` at evaluation time.
    """

    id: str
    title: str
    message: str
    datetime: datetime
    is_voice: bool = False

    def to_record(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "message": self.message,
            "datetime": self.datetime.isoformat(),
            "isVoice": self.is_voice,
        }

    @classmethod
    def from_record(cls, data: dict) -> Reminder:
        return cls(
            id=str(data["id"]),
            title=data.get("title", ""),
            message=data["message"],
            datetime=datetime.fromisoformat(data["datetime"]),
            is_voice=bool(data.get("isVoice", False)),
        )


@dataclass(frozen=True)
class HouseTask:
    """A recurring household task.

    `last_completed` is None until the first completion; completing a task
    only ever moves this timestamp.
    """

    id: str
    title: str
    area: str                                 # e.g. "Kitchen"
    frequency: Frequency = Frequency.WEEKLY
    last_completed: datetime | None = None

    def completed_at(self, when: datetime) -> HouseTask:
        return replace(self, last_completed=when)

    def to_record(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "area": self.area,
            "frequency": self.frequency.value,
            "lastCompleted": self.last_completed.isoformat() if self.last_completed else None,
        }

    @classmethod
    def from_record(cls, data: dict) -> HouseTask:
        return cls(
            id=str(data["id"]),
            title=data["title"],
            area=data.get("area", ""),
            frequency=Frequency(data.get("frequency", Frequency.WEEKLY.value)),
            last_completed=_parse_optional_datetime(data.get("lastCompleted")),
        )


@dataclass(frozen=True)
class LifeGoal:
    """A life goal. Transitions one way, from open to completed."""

    id: str
    title: str
    date_created: datetime
    description: str = ""
    category: GoalCategory = GoalCategory.PERSONAL
    completed: bool = field(default=False)

    def to_record(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": self.category.value,
            "dateCreated": self.date_created.isoformat(),
            "completed": self.completed,
        }

    @classmethod
    def from_record(cls, data: dict) -> LifeGoal:
        return cls(
            id=str(data["id"]),
            title=data["title"],
            description=data.get("description") or "",
            category=GoalCategory(data.get("category", GoalCategory.PERSONAL.value)),
            date_created=datetime.fromisoformat(data["dateCreated"]),
            completed=bool(data.get("completed", False)),
        )


@dataclass(frozen=True)
class LifeProfile:
    """Inputs of the life-progress view."""

    birth_date: date | None = None
    life_expectancy: int = 80

    def to_record(self) -> dict:
        return {
            "id": "profile",
            "birthDate": self.birth_date.isoformat() if self.birth_date else None,
            "lifeExpectancy": self.life_expectancy,
        }

    @classmethod
    def from_record(cls, data: dict) -> LifeProfile:
        raw = data.get("birthDate")
        return cls(
            birth_date=date.fromisoformat(raw[:10]) if raw else None,
            life_expectancy=int(data.get("lifeExpectancy", 80)),
        )


class UserSettings(BaseModel):
    """Per-user notification preferences, stored as one record.

    JSON example:
    {
        "enableVoiceNotifications": true,
        "enableVibration": true,
        "notificationVolume": 0.7
    }
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    enable_voice_notifications: bool = Field(True, alias="enableVoiceNotifications")
    enable_vibration: bool = Field(True, alias="enableVibration")
    notification_volume: float = Field(0.7, alias="notificationVolume", ge=0.0, le=1.0)

    def to_record(self) -> dict:
        return {"id": "settings", **self.model_dump(by_alias=True)}
