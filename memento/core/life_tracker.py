"""
Memento — Life Tracker.

Life goals grouped by category, plus the profile (birth date, life
expectancy) behind the life-progress view. Goals move one way, from
open to completed, and are never deleted.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import TYPE_CHECKING

from memento.core.life_progress import LifeProgress, calculate_life_progress
from memento.data.models import GoalCategory, LifeGoal, LifeProfile, new_record_id
from memento.errors import PersistenceError, RecordNotFoundError, ValidationError

if TYPE_CHECKING:
    from memento.ports.persistence_port import RecordStorePort

logger = logging.getLogger(__name__)

GOALS_KIND = "life_goals"
PROFILE_KIND = "life_profile"


class LifeTrackerService:
    """Stores the life profile and life goals."""

    def __init__(self, store: RecordStorePort, default_life_expectancy: int = 80) -> None:
        self._store = store
        self._default_life_expectancy = default_life_expectancy

    # -- profile ------------------------------------------------------------

    def get_profile(self) -> LifeProfile:
        records = self._store.list(PROFILE_KIND)
        if not records:
            return LifeProfile(life_expectancy=self._default_life_expectancy)
        return LifeProfile.from_record(records[0])

    def set_profile(self, birth_date: date | None, life_expectancy: int | None = None) -> LifeProfile:
        """Overwrite the profile. Life expectancy must be positive."""
        if life_expectancy is None:
            life_expectancy = self.get_profile().life_expectancy
        if life_expectancy <= 0:
            raise ValidationError(f"Life expectancy must be positive, got {life_expectancy}")

        profile = LifeProfile(birth_date=birth_date, life_expectancy=life_expectancy)
        record = profile.to_record()
        if self._store.list(PROFILE_KIND):
            ok = self._store.update(PROFILE_KIND, record["id"], record)
        else:
            ok = self._store.append(PROFILE_KIND, record)
        if not ok:
            raise PersistenceError("Failed to store life profile")
        logger.info("Life profile set: born %s, expectancy %d", birth_date, life_expectancy)
        return profile

    def progress(self, now: datetime) -> LifeProgress | None:
        """Life progress for the stored profile; None without a birth date."""
        profile = self.get_profile()
        return calculate_life_progress(profile.birth_date, profile.life_expectancy, now)

    # -- goals --------------------------------------------------------------

    def add_goal(
        self,
        title: str,
        now: datetime,
        description: str = "",
        category: GoalCategory | str = GoalCategory.PERSONAL,
    ) -> LifeGoal:
        if not title or not title.strip():
            raise ValidationError("Life goal title cannot be empty")
        try:
            category = GoalCategory(category)
        except ValueError as exc:
            raise ValidationError(f"Unknown goal category: {category!r}") from exc

        goal = LifeGoal(
            id=new_record_id(now),
            title=title.strip(),
            description=(description or "").strip(),
            category=category,
            date_created=now,
        )
        if not self._store.append(GOALS_KIND, goal.to_record()):
            raise PersistenceError(f"Failed to store life goal '{goal.title}'")
        logger.info("Life goal added: #%s '%s' (%s)", goal.id, goal.title, category.value)
        return goal

    def list_goals(self) -> list[LifeGoal]:
        return [LifeGoal.from_record(r) for r in self._store.list(GOALS_KIND)]

    def complete_goal(self, goal_id: str) -> LifeGoal:
        """Mark a goal completed. Completing it again changes nothing."""
        goal = next((g for g in self.list_goals() if g.id == goal_id), None)
        if goal is None:
            raise RecordNotFoundError(f"Life goal {goal_id} not found")
        if goal.completed:
            return goal

        if not self._store.update(GOALS_KIND, goal_id, {"completed": True}):
            raise PersistenceError(f"Failed to complete life goal {goal_id}")
        logger.info("Life goal #%s '%s' completed", goal_id, goal.title)
        return replace(goal, completed=True)

    def goals_by_category(self) -> dict[GoalCategory, list[LifeGoal]]:
        """Goals grouped per category, every category present."""
        grouped: dict[GoalCategory, list[LifeGoal]] = {c: [] for c in GoalCategory}
        for goal in self.list_goals():
            grouped[goal.category].append(goal)
        return grouped
