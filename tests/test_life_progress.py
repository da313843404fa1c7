"""Tests for memento.core.life_progress — pure life-progress math."""

from datetime import date, datetime, timedelta

import pytest

from memento.core.life_progress import LifeProgress, age_in_years, calculate_life_progress

NOW = datetime(2026, 10, 21)


class TestCalculateLifeProgress:
    def test_halfway(self):
        # 40 calendar years containing 10 leap days
        birth = NOW - timedelta(days=14610)
        result = calculate_life_progress(birth, 80, NOW)
        assert result == LifeProgress(
            age_years=40,
            remaining_years=40,
            lived_percentage="50.0",
            remaining_percentage="50.0",
        )

    def test_accepts_date(self):
        result = calculate_life_progress(date(1986, 10, 21), 80, NOW)
        assert result.age_years == 40
        assert result.lived_percentage == "50.0"

    def test_quarter(self):
        birth = NOW - timedelta(days=20 * 365.25)
        result = calculate_life_progress(birth, 80, NOW)
        assert result.age_years == 20
        assert result.remaining_years == 60
        assert result.lived_percentage == "25.0"
        assert result.remaining_percentage == "75.0"

    def test_one_decimal_place(self):
        birth = NOW - timedelta(days=10 * 365.25)
        result = calculate_life_progress(birth, 75, NOW)
        assert result.lived_percentage == "13.3"
        assert result.remaining_percentage == "86.7"

    def test_clamped_past_life_expectancy(self):
        birth = NOW - timedelta(days=100 * 365.25)
        result = calculate_life_progress(birth, 80, NOW)
        assert result.age_years == 100
        assert result.remaining_years == 0
        assert result.lived_percentage == "100.0"
        assert result.remaining_percentage == "0.0"

    def test_no_birth_date_returns_none(self):
        assert calculate_life_progress(None, 80, NOW) is None

    def test_non_positive_expectancy_raises(self):
        with pytest.raises(ValueError):
            calculate_life_progress(date(1990, 1, 1), 0, NOW)

    def test_age_floors_before_birthday(self):
        result = calculate_life_progress(date(1986, 10, 22), 80, NOW)
        assert result.age_years == 39
        assert result.remaining_years == 40


class TestAgeInYears:
    def test_exact_years(self):
        assert age_in_years(NOW - timedelta(days=365.25 * 3), NOW) == pytest.approx(3.0)
