"""
Memento — Time Phrase Parser.

Turns free text like "Go to the gym at 8pm", "in 15 minutes" or
"call mom tomorrow" into a concrete datetime. Two modes share one
am/pm rule:

VOICE  — transcripts. Resolves a clock time and a day keyword
         (today, tomorrow, weekday names); with neither present the
         result is `now` itself.
TYPED  — text typed into the reminder form. Recognizes only
         "at <time>[am|pm]" and "in <N> minute(s)"; otherwise the
         form's current value is left as it was.

The parser never raises: unrecognized or out-of-range text degrades to a
default.
No I/O: this module only transforms data.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum

logger = logging.getLogger(__name__)

WEEKDAYS = (
    "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday",
)

QUICK_TIME_MINUTES = (5, 15, 30, 60)

_VOICE_TIME_RE = re.compile(r"(\d{1,2})(?::(\d{1,2}))?(?:\s*(am|pm))?", re.IGNORECASE)
_DAY_RE = re.compile(
    r"\b(today|tomorrow|" + "|".join(WEEKDAYS) + r")\b", re.IGNORECASE,
)
_TYPED_AT_RE = re.compile(r"\bat\s+(\d+)(?::(\d+))?\s*(am|pm)?", re.IGNORECASE)
_TYPED_IN_MINUTES_RE = re.compile(r"\bin\s+(\d+)\s+minutes?", re.IGNORECASE)


class ParseMode(Enum):
    VOICE = "voice"
    TYPED = "typed"


@dataclass(frozen=True)
class ClockTime:
    hour: int
    minute: int


def to_24_hour(hour: int, period: str | None) -> int:
    """Apply the am/pm marker; without one the hour is used verbatim."""
    period = period.lower() if period else None
    if period == "pm" and hour < 12:
        return hour + 12
    if period == "am" and hour == 12:
        return 0
    return hour


def _clock_from_match(match: re.Match) -> ClockTime:
    hour = int(match.group(1))
    minute = int(match.group(2)) if match.group(2) else 0
    return ClockTime(hour=to_24_hour(hour, match.group(3)), minute=minute)


def _at_time_of_day(day: datetime, clock: ClockTime) -> datetime:
    """Place `clock` on `day`, seconds zeroed.

    Out-of-range values roll over from midnight (hour 25 is 01:00 the
    next day) instead of raising.
    """
    midnight = day.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight + timedelta(hours=clock.hour, minutes=clock.minute)


def weekday_offset(target: int, current: int, roll_same_day: bool = True) -> int:
    """Days forward from weekday `current` to weekday `target` (Monday = 0).

    With `roll_same_day`, naming today's weekday means next week.
    """
    offset = (target + 7 - current) % 7
    if offset == 0 and roll_same_day:
        return 7
    return offset


class TimePhraseParser:
    """Resolves time phrases against an explicit `now`."""

    def __init__(self, roll_same_weekday: bool = True) -> None:
        self._roll_same_weekday = roll_same_weekday

    def parse(
        self,
        text: str,
        now: datetime,
        mode: ParseMode = ParseMode.VOICE,
        current: datetime | None = None,
    ) -> datetime:
        """Resolve `text` to a datetime.

        Args:
            text: Free text (transcript or typed message).
            now: Evaluation time; all relative phrases resolve from it.
            mode: VOICE or TYPED rules, see module docstring.
            current: TYPED mode only — the value to keep when nothing
                matches, and whose date an "at <time>" lands on.
                Defaults to `now`.
        """
        if mode is ParseMode.TYPED:
            return self._parse_typed(text, now, current or now)
        return self._parse_voice(text, now)

    def _resolve_day(self, keyword: str, now: datetime) -> datetime:
        keyword = keyword.lower()
        if keyword == "tomorrow":
            return now + timedelta(days=1)
        if keyword == "today":
            return now
        offset = weekday_offset(
            WEEKDAYS.index(keyword), now.weekday(), self._roll_same_weekday,
        )
        return now + timedelta(days=offset)

    def _parse_voice(self, text: str, now: datetime) -> datetime:
        time_match = _VOICE_TIME_RE.search(text)
        day_match = _DAY_RE.search(text)

        if time_match is None and day_match is None:
            logger.debug("No time phrase in %r, using now", text[:80])
            return now

        if time_match is not None:
            clock = _clock_from_match(time_match)
        else:
            clock = ClockTime(hour=now.hour, minute=now.minute)

        day = self._resolve_day(day_match.group(1), now) if day_match else now
        result = _at_time_of_day(day, clock)
        logger.debug("Voice phrase %r resolved to %s", text[:80], result.isoformat())
        return result

    def _parse_typed(self, text: str, now: datetime, current: datetime) -> datetime:
        at_match = _TYPED_AT_RE.search(text)
        in_match = _TYPED_IN_MINUTES_RE.search(text)
        try:
            if at_match is not None:
                result = _at_time_of_day(current, _clock_from_match(at_match))
                logger.debug("Typed 'at' phrase resolved to %s", result.isoformat())
                return result

            if in_match is not None:
                result = now + timedelta(minutes=int(in_match.group(1)))
                logger.debug("Typed 'in N minutes' phrase resolved to %s", result.isoformat())
                return result
        except (OverflowError, ValueError) as exc:
            # Digit runs are unbounded; a calendar overflow keeps the form value.
            logger.debug("Typed phrase %r out of range (%s), keeping current", text[:80], exc)

        return current


def derive_title(text: str, limit: int = 30) -> str:
    """Short display title: the first `limit` characters, "..." if cut."""
    title = text[:limit].strip()
    if len(text) > limit:
        title += "..."
    return title


def quick_time(now: datetime, minutes: int) -> datetime:
    """Datetime for one of the quick-time shortcuts."""
    if minutes not in QUICK_TIME_MINUTES:
        raise ValueError(
            f"Quick time must be one of {QUICK_TIME_MINUTES}, got {minutes}"
        )
    return now + timedelta(minutes=minutes)
