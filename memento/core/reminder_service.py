"""
Memento — Reminder Service.

UI-agnostic orchestration of the reminder flow:
text or transcript -> parse time -> validate -> store -> schedule
notification, plus listing, deletion and the spoken playback when a
notification fires.

Collaborators (record store, notification scheduler, speech synthesizer)
are passed in explicitly; this module holds no global handles.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

from memento.core.reminder_classifier import ReminderView, classify, is_time_in_past
from memento.core.time_parser import ParseMode, TimePhraseParser, derive_title, quick_time
from memento.data.models import Reminder, UserSettings, new_record_id
from memento.errors import PersistenceError, ValidationError
from memento.ports.notification_port import NotificationFlags, NotificationRequest

if TYPE_CHECKING:
    from memento.core.preferences import PreferencesService
    from memento.ports.notification_port import NotificationPort
    from memento.ports.persistence_port import RecordStorePort
    from memento.ports.speech_port import SpeechCapturePort, SpeechSynthesizerPort

logger = logging.getLogger(__name__)

KIND = "reminders"


@dataclass(frozen=True)
class ReminderDraft:
    """Form state derived from free text, before the user saves it."""

    message: str
    title: str
    when: datetime


def format_spoken_message(message: str) -> str:
    """Prefix "Reminder: " unless the message already mentions it."""
    if "reminder" not in message.lower():
        return f"Reminder: {message}"
    return message


class ReminderService:
    """Creates, lists, deletes and plays back reminders."""

    def __init__(
        self,
        store: RecordStorePort,
        scheduler: NotificationPort,
        speech: SpeechSynthesizerPort | None = None,
        parser: TimePhraseParser | None = None,
        preferences: PreferencesService | None = None,
        title_max_length: int = 30,
        capture: SpeechCapturePort | None = None,
    ) -> None:
        self._store = store
        self._scheduler = scheduler
        self._speech = speech
        self._capture = capture
        self._parser = parser or TimePhraseParser()
        self._preferences = preferences
        self._title_max_length = title_max_length

    def _settings(self) -> UserSettings:
        if self._preferences is None:
            return UserSettings()
        return self._preferences.load()

    # ------------------------------------------------------------------
    # Drafting
    # ------------------------------------------------------------------

    def draft_from_text(
        self,
        text: str,
        now: datetime,
        voice: bool = False,
        current: datetime | None = None,
    ) -> ReminderDraft:
        """Derive message, title and time from typed text or a transcript."""
        mode = ParseMode.VOICE if voice else ParseMode.TYPED
        when = self._parser.parse(text, now, mode=mode, current=current)
        return ReminderDraft(
            message=text,
            title=derive_title(text, self._title_max_length),
            when=when,
        )

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    async def create_reminder(
        self,
        message: str,
        when: datetime,
        now: datetime,
        title: str | None = None,
        is_voice: bool = True,
    ) -> Reminder:
        """Validate, store and schedule a new reminder.

        Raises:
            ValidationError: Empty message, or `when` before `now`.
            PersistenceError: The store rejected the record.
        """
        if not message or not message.strip():
            raise ValidationError("Please enter a reminder message")
        if is_time_in_past(when, now):
            raise ValidationError("Please select a future time for your reminder")

        reminder = Reminder(
            id=new_record_id(now),
            title=title.strip() if title and title.strip() else derive_title(message, self._title_max_length),
            message=message,
            datetime=when,
            is_voice=is_voice,
        )

        if not self._store.append(KIND, reminder.to_record()):
            raise PersistenceError(f"Failed to store reminder '{reminder.title}'")

        await self._schedule(reminder)
        logger.info("Reminder saved: #%s '%s' at %s", reminder.id, reminder.title, when.isoformat())
        return reminder

    async def create_from_transcript(self, transcript: str, now: datetime) -> Reminder:
        """Voice path: a finished transcript becomes a reminder."""
        draft = self.draft_from_text(transcript, now, voice=True)
        return await self.create_reminder(
            draft.message, draft.when, now, title=draft.title, is_voice=True,
        )

    async def create_from_recording(self, file_path: str, now: datetime) -> Reminder:
        """Transcribe a finished recording, then follow the voice path."""
        if self._capture is None:
            raise ValidationError("Voice capture is not available")
        transcript = await self._capture.transcribe(file_path)
        if not transcript:
            raise ValidationError("Nothing was heard in the recording")
        return await self.create_from_transcript(transcript, now)

    async def create_quick(self, message: str, minutes: int, now: datetime) -> Reminder:
        """Quick-time path: fire `minutes` from now."""
        try:
            when = quick_time(now, minutes)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc
        return await self.create_reminder(message, when, now)

    async def _schedule(self, reminder: Reminder) -> None:
        settings = self._settings()
        request = NotificationRequest(
            id=reminder.id,
            title=reminder.title,
            message=reminder.message,
            datetime=reminder.datetime,
            flags=NotificationFlags(
                is_voice=reminder.is_voice,
                vibrate=settings.enable_vibration,
                allow_while_idle=True,
            ),
        )
        await self._scheduler.schedule(request)

    # ------------------------------------------------------------------
    # Listing / deletion
    # ------------------------------------------------------------------

    def list_reminders(self) -> list[Reminder]:
        """All stored reminders, soonest first."""
        reminders = [Reminder.from_record(r) for r in self._store.list(KIND)]
        return sorted(reminders, key=lambda r: r.datetime)

    def view(self, now: datetime) -> ReminderView:
        return classify(self.list_reminders(), now)

    async def delete_reminder(self, reminder_id: str) -> bool:
        """Remove a reminder and cancel its notification."""
        removed = self._store.remove(KIND, reminder_id)
        await self._scheduler.cancel(reminder_id)
        if removed:
            logger.info("Reminder #%s deleted", reminder_id)
        else:
            logger.warning("Reminder #%s not found for deletion", reminder_id)
        return removed

    async def clear_all(self) -> int:
        """Remove every reminder and cancel all notifications."""
        count = 0
        for record in self._store.list(KIND):
            if self._store.remove(KIND, record["id"]):
                count += 1
        await self._scheduler.cancel_all()
        logger.info("Cleared %d reminders", count)
        return count

    # ------------------------------------------------------------------
    # Notification playback
    # ------------------------------------------------------------------

    async def on_notification(self, payload: dict) -> bool:
        """Speak a fired voice notification if voice playback is enabled.

        Returns True when speech was requested.
        """
        if not payload.get("isVoice"):
            return False
        if self._speech is None:
            logger.debug("No speech synthesizer configured, skipping playback")
            return False

        settings = self._settings()
        if not settings.enable_voice_notifications:
            logger.info("Voice notifications disabled, not speaking #%s", payload.get("id"))
            return False

        spoken = format_spoken_message(payload.get("message", ""))
        try:
            await self._speech.stop()
            await self._speech.speak(spoken, settings.notification_volume)
        except Exception as exc:
            logger.error("Failed to play voice message for #%s: %s", payload.get("id"), exc)
            return False
        return True
