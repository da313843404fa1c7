"""Notification port — abstract interface for scheduling reminder notifications.

Core modules depend on this protocol, never on a specific delivery provider.
Delivery timing and retries belong to the implementation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol


@dataclass(frozen=True)
class NotificationFlags:
    is_voice: bool = True
    vibrate: bool = True
    allow_while_idle: bool = True


@dataclass(frozen=True)
class NotificationRequest:
    """What the scheduler needs to fire one reminder."""

    id: str
    title: str
    message: str
    datetime: datetime
    flags: NotificationFlags = field(default_factory=NotificationFlags)

    def payload(self) -> dict:
        """Data handed back to the app when the notification fires."""
        return {
            "id": self.id,
            "title": self.title,
            "message": self.message,
            "isVoice": self.flags.is_voice,
        }


class NotificationPort(Protocol):
    """Abstract notification scheduler used by core modules."""

    async def schedule(self, request: NotificationRequest) -> None: ...

    async def cancel(self, notification_id: str) -> None: ...

    async def cancel_all(self) -> None: ...
