"""Tests for trend direction, habit streaks and the baseline health score."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from lifemirror.domains.twin.domain_logic.impact_resolver import create_moment
from lifemirror.domains.twin.domain_logic.moment_models import (
    HealthState,
    HealthTrend,
    Intensity,
    Moment,
    MomentType,
)
from lifemirror.domains.twin.domain_logic.trend_analyzer import (
    calculate_health_score,
    calculate_streak,
    calculate_trend,
    trend_average,
)

TODAY = date(2026, 3, 15)


def _moment(moment_type: str, intensity: str, days_ago: int = 0, hour: int = 12) -> Moment:
    day = TODAY - timedelta(days=days_ago)
    return create_moment(
        MomentType(moment_type),
        Intensity(intensity),
        "",
        datetime(day.year, day.month, day.day, hour, tzinfo=timezone.utc),
    )


class TestCalculateTrend:
    def test_trend_average_of_neutral_state(self):
        assert trend_average(HealthState()) == 50

    def test_within_band_is_stable(self):
        # avg 50 -> 55: exactly at the +5 band edge
        assert calculate_trend(HealthState(), HealthState(energy=65)) is HealthTrend.STABLE

    def test_just_past_band_is_improving(self):
        # avg 50 -> 55.1
        assert calculate_trend(HealthState(), HealthState(energy=65.3)) is HealthTrend.IMPROVING

    def test_lower_band_edge_is_stable(self):
        # avg 50 -> 45
        assert calculate_trend(HealthState(), HealthState(energy=35)) is HealthTrend.STABLE

    def test_just_past_lower_band_is_declining(self):
        # avg 50 -> 44.9
        assert calculate_trend(HealthState(), HealthState(energy=34.7)) is HealthTrend.DECLINING

    def test_stress_and_momentum_do_not_affect_trend(self):
        current = HealthState(stress_level=100, adherence_momentum=0)
        assert calculate_trend(HealthState(), current) is HealthTrend.STABLE

    def test_glucose_relief_is_improving(self):
        current = HealthState(glucose_stress=20, insulin_workload=30)
        assert calculate_trend(HealthState(), current) is HealthTrend.IMPROVING


class TestCalculateStreak:
    def test_high_intensity_is_not_favorable(self):
        moments = [_moment("activity", "moderate", 0), _moment("activity", "high", 1)]
        assert calculate_streak(moments, MomentType.ACTIVITY, 7, today=TODAY) == 1

    def test_consecutive_days(self):
        moments = [
            _moment("activity", "moderate", 0),
            _moment("activity", "low", 1),
            _moment("activity", "moderate", 2),
        ]
        assert calculate_streak(moments, MomentType.ACTIVITY, 7, today=TODAY) == 3

    def test_gap_ends_streak(self):
        moments = [_moment("activity", "moderate", 0), _moment("activity", "moderate", 2)]
        assert calculate_streak(moments, MomentType.ACTIVITY, 7, today=TODAY) == 1

    def test_nothing_today_is_zero(self):
        moments = [_moment("activity", "moderate", 1), _moment("activity", "moderate", 2)]
        assert calculate_streak(moments, MomentType.ACTIVITY, 7, today=TODAY) == 0

    def test_window_caps_streak(self):
        moments = [_moment("diet", "low", d) for d in range(10)]
        assert calculate_streak(moments, MomentType.DIET, 7, today=TODAY) == 7
        assert calculate_streak(moments, MomentType.DIET, 3, today=TODAY) == 3

    def test_other_types_ignored(self):
        moments = [_moment("diet", "low", 0), _moment("activity", "moderate", 1)]
        assert calculate_streak(moments, MomentType.ACTIVITY, 7, today=TODAY) == 0

    def test_one_favorable_moment_is_enough_for_a_day(self):
        moments = [
            _moment("activity", "high", 0, hour=7),
            _moment("activity", "low", 0, hour=19),
        ]
        assert calculate_streak(moments, MomentType.ACTIVITY, 7, today=TODAY) == 1

    def test_positive_intensity_counts(self):
        moments = [_moment("emotional", "positive", 0), _moment("emotional", "positive", 1)]
        assert calculate_streak(moments, MomentType.EMOTIONAL, 7, today=TODAY) == 2

    @pytest.mark.parametrize("moments", [[], None])
    def test_empty_history(self, moments):
        assert calculate_streak(moments, MomentType.ACTIVITY, 7, today=TODAY) == 0

    def test_order_of_history_does_not_matter(self):
        moments = [_moment("activity", "low", d) for d in (2, 0, 1)]
        assert calculate_streak(moments, MomentType.ACTIVITY, 7, today=TODAY) == 3


class TestHealthScore:
    def test_neutral_state(self):
        assert calculate_health_score(HealthState()) == 50

    def test_best_and_worst(self):
        best = HealthState(energy=100, glucose_stress=0, insulin_workload=0, adherence_momentum=100)
        worst = HealthState(energy=0, glucose_stress=100, insulin_workload=100, adherence_momentum=0)
        assert calculate_health_score(best) == 100
        assert calculate_health_score(worst) == 0

    def test_glucose_weighs_most(self):
        assert calculate_health_score(HealthState(glucose_stress=20)) == 59
        assert calculate_health_score(HealthState(energy=80)) == 56
