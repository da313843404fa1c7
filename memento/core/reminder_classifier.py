"""Reminder classifier — pure business logic.

Splits a reminder snapshot into upcoming and past-due, orders both,
picks the next reminder and renders countdown and date labels.

No I/O: this module only transforms data.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from memento.data.models import Reminder

_NOW_LABEL = "Now"
_UNDER_A_MINUTE_LABEL = "Less than a minute"


@dataclass
class ReminderView:
    """Reminders ordered for display."""

    upcoming: list[Reminder] = field(default_factory=list)  # soonest first
    past_due: list[Reminder] = field(default_factory=list)  # most recently missed first

    @property
    def next_reminder(self) -> Reminder | None:
        return self.upcoming[0] if self.upcoming else None


def classify(reminders: Iterable[Reminder], now: datetime) -> ReminderView:
    """Partition reminders on `datetime > now`, then sort each side."""
    upcoming: list[Reminder] = []
    past_due: list[Reminder] = []
    for reminder in reminders:
        if reminder.datetime > now:
            upcoming.append(reminder)
        else:
            past_due.append(reminder)

    upcoming.sort(key=lambda r: r.datetime)
    past_due.sort(key=lambda r: r.datetime, reverse=True)
    return ReminderView(upcoming=upcoming, past_due=past_due)


def next_reminder(reminders: Iterable[Reminder], now: datetime) -> Reminder | None:
    """The soonest reminder still in the future, or None."""
    return classify(reminders, now).next_reminder


def is_time_in_past(target: datetime, now: datetime) -> bool:
    return target < now


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'s' if count > 1 else ''}"


def time_remaining_label(target: datetime, now: datetime) -> str:
    """Largest whole unit left until `target`, e.g. "2 days", "1 hour".

    Returns "Now" once the difference is zero or negative.
    """
    seconds = int((target - now).total_seconds())
    if seconds <= 0:
        return _NOW_LABEL

    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24

    if days > 0:
        return _plural(days, "day")
    if hours > 0:
        return _plural(hours, "hour")
    if minutes > 0:
        return _plural(minutes, "minute")
    return _UNDER_A_MINUTE_LABEL


def _clock_12h(value: datetime) -> str:
    hour = value.hour % 12 or 12
    period = "AM" if value.hour < 12 else "PM"
    return f"{hour}:{value.minute:02d} {period}"


def format_reminder_date(target: datetime, now: datetime) -> str:
    """Display date: "Today at 8:00 PM", "Tomorrow at ...", or a full date."""
    if target.date() == now.date():
        return f"Today at {_clock_12h(target)}"
    if target.date() == (now + timedelta(days=1)).date():
        return f"Tomorrow at {_clock_12h(target)}"
    return f"{target.strftime('%b')} {target.day}, {target.year} at {_clock_12h(target)}"
