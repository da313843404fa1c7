"""Tests for memento.core.house_tasks — cadence logic and storage."""

from datetime import datetime, timedelta

import pytest

from memento.core.house_tasks import (
    FREQUENCY_DAYS,
    HouseTaskService,
    classify_tasks,
    complete_task,
    is_due,
    next_due,
)
from memento.data.models import Frequency, HouseTask
from memento.errors import RecordNotFoundError, ValidationError

NOW = datetime(2026, 10, 21, 10, 30, 15)


def _make_task(
    task_id: str = "1",
    frequency: Frequency = Frequency.WEEKLY,
    last_completed: datetime | None = None,
) -> HouseTask:
    return HouseTask(
        id=task_id,
        title=f"Task {task_id}",
        area="Kitchen",
        frequency=frequency,
        last_completed=last_completed,
    )


# ---------------------------------------------------------------------------
# Pure cadence logic
# ---------------------------------------------------------------------------


class TestNextDue:
    def test_never_completed(self):
        assert next_due(_make_task()) is None

    @pytest.mark.parametrize("frequency", list(Frequency))
    def test_adds_interval(self, frequency):
        task = _make_task(frequency=frequency, last_completed=NOW)
        assert next_due(task) == NOW + timedelta(days=FREQUENCY_DAYS[frequency])


class TestIsDue:
    def test_never_completed_is_due(self):
        assert is_due(_make_task(), NOW) is True

    def test_recently_completed_not_due(self):
        task = _make_task(frequency=Frequency.WEEKLY, last_completed=NOW - timedelta(days=2))
        assert is_due(task, NOW) is False

    def test_interval_elapsed_is_due(self):
        task = _make_task(frequency=Frequency.DAILY, last_completed=NOW - timedelta(days=1))
        assert is_due(task, NOW) is True


class TestClassifyTasks:
    def test_orders_due_and_upcoming(self):
        never = _make_task("never")
        overdue_long = _make_task("long", Frequency.DAILY, NOW - timedelta(days=10))
        overdue_short = _make_task("short", Frequency.DAILY, NOW - timedelta(days=2))
        soon = _make_task("soon", Frequency.WEEKLY, NOW - timedelta(days=6))
        later = _make_task("later", Frequency.MONTHLY, NOW - timedelta(days=1))

        view = classify_tasks([later, overdue_short, soon, never, overdue_long], NOW)

        assert [t.id for t in view.due] == ["never", "long", "short"]
        assert [t.id for t in view.upcoming] == ["soon", "later"]

    def test_empty(self):
        view = classify_tasks([], NOW)
        assert view.due == []
        assert view.upcoming == []


class TestCompleteTask:
    def test_only_last_completed_changes(self):
        task = _make_task(frequency=Frequency.QUARTERLY)
        done = complete_task(task, NOW)
        assert done.last_completed == NOW
        assert (done.id, done.title, done.area, done.frequency) == (
            task.id, task.title, task.area, task.frequency,
        )
        assert task.last_completed is None


# ---------------------------------------------------------------------------
# HouseTaskService
# ---------------------------------------------------------------------------


class TestHouseTaskService:
    def test_add_and_list(self, store):
        service = HouseTaskService(store)
        task = service.add_task("Clean fridge", "Kitchen", NOW, frequency="monthly")
        assert task.frequency is Frequency.MONTHLY
        assert task.last_completed is None
        assert service.list_tasks() == [task]

    def test_default_frequency_weekly(self, store):
        task = HouseTaskService(store).add_task("Vacuum", "Living room", NOW)
        assert task.frequency is Frequency.WEEKLY

    def test_title_required(self, store):
        with pytest.raises(ValidationError):
            HouseTaskService(store).add_task("  ", "Kitchen", NOW)

    def test_area_required(self, store):
        with pytest.raises(ValidationError):
            HouseTaskService(store).add_task("Dust", "", NOW)

    def test_unknown_frequency(self, store):
        with pytest.raises(ValidationError):
            HouseTaskService(store).add_task("Dust", "Hall", NOW, frequency="yearly")

    def test_complete_persists_timestamp(self, store):
        service = HouseTaskService(store)
        task = service.add_task("Mop", "Bathroom", NOW)
        later = NOW + timedelta(hours=3)

        done = service.complete_task(task.id, later)

        assert done.last_completed == later
        stored = service.list_tasks()
        assert len(stored) == 1
        assert stored[0].last_completed == later
        assert stored[0].title == "Mop"

    def test_complete_unknown_raises(self, store):
        with pytest.raises(RecordNotFoundError):
            HouseTaskService(store).complete_task("nope", NOW)

    def test_view(self, store):
        service = HouseTaskService(store)
        first = service.add_task("Dishes", "Kitchen", NOW, frequency="daily")
        second = service.add_task("Windows", "House", NOW + timedelta(seconds=1), frequency="monthly")
        service.complete_task(second.id, NOW)

        view = service.view(NOW + timedelta(hours=1))
        assert [t.id for t in view.due] == [first.id]
        assert [t.id for t in view.upcoming] == [second.id]
