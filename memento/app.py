"""
Memento — Composition Root.

The host builds one AppContext at startup and passes it to whatever
needs a service. Every collaborator lives on the context object;
nothing is held in module globals.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from memento.config import settings
from memento.core.house_tasks import HouseTaskService
from memento.core.life_tracker import LifeTrackerService
from memento.core.preferences import PreferencesService
from memento.core.reminder_service import ReminderService
from memento.core.time_parser import TimePhraseParser
from memento.data.db import RecordStore

if TYPE_CHECKING:
    from telegram.ext import Application, JobQueue

    from memento.ports.notification_port import NotificationPort
    from memento.ports.persistence_port import RecordStorePort
    from memento.ports.speech_port import SpeechCapturePort, SpeechSynthesizerPort

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Everything a host screen or handler needs, built once."""

    store: RecordStorePort
    scheduler: NotificationPort
    parser: TimePhraseParser
    preferences: PreferencesService
    reminders: ReminderService
    house_tasks: HouseTaskService
    life_tracker: LifeTrackerService
    speech: SpeechSynthesizerPort | None = None
    capture: SpeechCapturePort | None = None


def create_context(
    scheduler: NotificationPort,
    speech: SpeechSynthesizerPort | None = None,
    capture: SpeechCapturePort | None = None,
    store: RecordStorePort | None = None,
    db_path: str | None = None,
) -> AppContext:
    """Wire services around the given collaborators.

    Args:
        scheduler: Notification scheduler implementation.
        speech: Speech synthesizer; without one, notifications stay silent.
        capture: Speech capture; without one, only text input is available.
        store: Record store. Defaults to a SQLite RecordStore at db_path
               (or DATABASE_PATH).
    """
    if store is None:
        store = RecordStore(db_path=db_path)

    parser = TimePhraseParser(roll_same_weekday=settings.ROLL_SAME_WEEKDAY)
    preferences = PreferencesService(store)
    reminders = ReminderService(
        store,
        scheduler,
        speech=speech,
        parser=parser,
        preferences=preferences,
        title_max_length=settings.TITLE_MAX_LENGTH,
        capture=capture,
    )

    ctx = AppContext(
        store=store,
        scheduler=scheduler,
        parser=parser,
        preferences=preferences,
        reminders=reminders,
        house_tasks=HouseTaskService(store),
        life_tracker=LifeTrackerService(
            store, default_life_expectancy=settings.DEFAULT_LIFE_EXPECTANCY,
        ),
        speech=speech,
        capture=capture,
    )
    logger.info("Memento context created (speech=%s, capture=%s)", speech is not None, capture is not None)
    return ctx


def create_telegram_context(
    job_queue: JobQueue,
    speech: SpeechSynthesizerPort | None = None,
    capture: SpeechCapturePort | None = None,
    chat_id: int | None = None,
    db_path: str | None = None,
) -> AppContext:
    """Context whose notifications are delivered through a Telegram JobQueue.

    Fired notifications are routed back to ReminderService.on_notification
    so voice reminders are spoken.
    """
    from memento.adapters.telegram_notifier import TelegramReminderScheduler

    chat_id = chat_id if chat_id is not None else settings.TELEGRAM_CHAT_ID
    if chat_id is None:
        raise ValueError("TELEGRAM_CHAT_ID is not set")

    scheduler = TelegramReminderScheduler(job_queue, chat_id)
    ctx = create_context(scheduler, speech=speech, capture=capture, db_path=db_path)
    scheduler.set_on_fire(ctx.reminders.on_notification)
    return ctx


def create_telegram_application(
    speech: SpeechSynthesizerPort | None = None,
    capture: SpeechCapturePort | None = None,
    chat_id: int | None = None,
    db_path: str | None = None,
) -> tuple[Application, AppContext]:
    """Build the Telegram Application and a context scheduling on its JobQueue.

    The context is also stored in `bot_data["memento"]` for handler access.
    The caller starts the application (e.g. `app.run_polling()`).
    """
    from telegram.ext import ApplicationBuilder

    if not settings.TELEGRAM_BOT_TOKEN:
        raise ValueError("TELEGRAM_BOT_TOKEN is not set")

    app = ApplicationBuilder().token(settings.TELEGRAM_BOT_TOKEN).build()
    ctx = create_telegram_context(
        app.job_queue, speech=speech, capture=capture, chat_id=chat_id, db_path=db_path,
    )
    app.bot_data["memento"] = ctx
    logger.info("Telegram application built")
    return app, ctx
