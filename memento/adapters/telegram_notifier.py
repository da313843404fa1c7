"""Telegram notification adapter — implements NotificationPort.

Schedules each reminder as a one-shot job on a python-telegram-bot
JobQueue, named after the reminder id so it can be cancelled. When the
job fires, the reminder is sent to the configured chat and the payload
is handed to an optional callback (e.g. ReminderService.on_notification).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Awaitable, Callable

from telegram.ext import ContextTypes, JobQueue

if TYPE_CHECKING:
    from memento.ports.notification_port import NotificationRequest

logger = logging.getLogger(__name__)

OnFire = Callable[[dict], Awaitable[object]]


def format_notification_text(payload: dict) -> str:
    title = payload.get("title", "")
    message = payload.get("message", "")
    if not title or title == message:
        return message
    return f"{title}\n{message}"


class TelegramReminderScheduler:
    """Telegram implementation of NotificationPort."""

    def __init__(
        self,
        job_queue: JobQueue,
        chat_id: int,
        on_fire: OnFire | None = None,
    ) -> None:
        self._job_queue = job_queue
        self._chat_id = chat_id
        self._on_fire = on_fire

    def set_on_fire(self, on_fire: OnFire | None) -> None:
        self._on_fire = on_fire

    async def schedule(self, request: NotificationRequest) -> None:
        # Naive datetimes are local wall-clock time; JobQueue assumes UTC.
        when = request.datetime.astimezone()
        self._job_queue.run_once(
            self._fire,
            when=when,
            data=request.payload(),
            name=request.id,
            chat_id=self._chat_id,
        )
        logger.info("Notification #%s scheduled for %s", request.id, when.isoformat())

    async def cancel(self, notification_id: str) -> None:
        jobs = self._job_queue.get_jobs_by_name(notification_id)
        if not jobs:
            logger.debug("No scheduled notification #%s to cancel", notification_id)
            return
        for job in jobs:
            job.schedule_removal()
        logger.info("Notification #%s canceled", notification_id)

    async def cancel_all(self) -> None:
        jobs = self._job_queue.jobs()
        for job in jobs:
            job.schedule_removal()
        logger.info("All notifications canceled (%d)", len(jobs))

    async def _fire(self, context: ContextTypes.DEFAULT_TYPE) -> None:
        payload = context.job.data
        await context.bot.send_message(
            chat_id=context.job.chat_id,
            text=format_notification_text(payload),
        )
        logger.info("Notification #%s delivered", payload.get("id"))
        if self._on_fire is not None:
            await self._on_fire(payload)
