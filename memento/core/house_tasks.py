"""
Memento — House Task Cadence.

Tracks recurring household tasks. A task is due when it has never been
completed, or when its frequency interval has elapsed since the last
completion. Completing a task only moves `last_completed`; tasks are
never removed automatically.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Iterable

from memento.data.models import Frequency, HouseTask, new_record_id
from memento.errors import PersistenceError, RecordNotFoundError, ValidationError

if TYPE_CHECKING:
    from memento.ports.persistence_port import RecordStorePort

logger = logging.getLogger(__name__)

KIND = "house_tasks"

FREQUENCY_DAYS: dict[Frequency, int] = {
    Frequency.DAILY: 1,
    Frequency.WEEKLY: 7,
    Frequency.MONTHLY: 30,
    Frequency.QUARTERLY: 90,
}


def next_due(task: HouseTask) -> datetime | None:
    """When the task is next due, or None if it was never completed."""
    if task.last_completed is None:
        return None
    return task.last_completed + timedelta(days=FREQUENCY_DAYS[task.frequency])


def is_due(task: HouseTask, now: datetime) -> bool:
    due_at = next_due(task)
    return due_at is None or due_at <= now


@dataclass
class TaskView:
    """House tasks ordered for display."""

    due: list[HouseTask] = field(default_factory=list)
    upcoming: list[HouseTask] = field(default_factory=list)


def classify_tasks(tasks: Iterable[HouseTask], now: datetime) -> TaskView:
    """Split tasks into due and upcoming.

    Never-completed tasks lead the due list, followed by the longest
    overdue. Upcoming tasks are ordered by next due date.
    """
    due: list[HouseTask] = []
    upcoming: list[HouseTask] = []
    for task in tasks:
        (due if is_due(task, now) else upcoming).append(task)

    due.sort(key=lambda t: (t.last_completed is not None, next_due(t) or now))
    upcoming.sort(key=lambda t: next_due(t))
    return TaskView(due=due, upcoming=upcoming)


def complete_task(task: HouseTask, now: datetime) -> HouseTask:
    """Return the task marked as completed at `now`."""
    return task.completed_at(now)


class HouseTaskService:
    """Stores house tasks and records completions."""

    def __init__(self, store: RecordStorePort) -> None:
        self._store = store

    def add_task(
        self,
        title: str,
        area: str,
        now: datetime,
        frequency: Frequency | str = Frequency.WEEKLY,
    ) -> HouseTask:
        """Create a task. Title and area are both required."""
        if not title or not title.strip():
            raise ValidationError("House task title cannot be empty")
        if not area or not area.strip():
            raise ValidationError("House task area cannot be empty")
        try:
            frequency = Frequency(frequency)
        except ValueError as exc:
            raise ValidationError(f"Unknown frequency: {frequency!r}") from exc

        task = HouseTask(
            id=new_record_id(now),
            title=title.strip(),
            area=area.strip(),
            frequency=frequency,
        )
        if not self._store.append(KIND, task.to_record()):
            raise PersistenceError(f"Failed to store house task '{task.title}'")
        logger.info("House task added: #%s '%s' (%s)", task.id, task.title, frequency.value)
        return task

    def list_tasks(self) -> list[HouseTask]:
        return [HouseTask.from_record(r) for r in self._store.list(KIND)]

    def view(self, now: datetime) -> TaskView:
        return classify_tasks(self.list_tasks(), now)

    def complete_task(self, task_id: str, now: datetime) -> HouseTask:
        """Mark a task as completed now."""
        task = next((t for t in self.list_tasks() if t.id == task_id), None)
        if task is None:
            raise RecordNotFoundError(f"House task {task_id} not found")

        done = complete_task(task, now)
        patch = {"lastCompleted": done.last_completed.isoformat()}
        if not self._store.update(KIND, task_id, patch):
            raise PersistenceError(f"Failed to complete house task {task_id}")
        logger.info("House task #%s '%s' completed, next due %s", task_id, task.title, next_due(done))
        return done
