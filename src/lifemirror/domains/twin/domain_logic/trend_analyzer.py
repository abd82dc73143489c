"""Directional trends, habit streaks and the baseline health score.

Unlike longitudinal signal statistics, everything here works on two snapshots
or on a moment history handed in by the caller; nothing is read from storage.
"""

from __future__ import annotations

import math
from datetime import date, datetime, timedelta, timezone
from typing import Iterable

from lifemirror.domains.twin.domain_logic.moment_models import (
    FAVORABLE_INTENSITIES,
    HealthState,
    HealthTrend,
    Moment,
    MomentType,
)

# Hysteresis band on the trend average, to keep noise from flipping the trend
TREND_THRESHOLD = 5.0

DEFAULT_STREAK_WINDOW_DAYS = 7

# Baseline health score weights; glucose and insulin load are inverted
SCORE_WEIGHTS = {
    "energy": 0.20,
    "glucose_stress": 0.30,
    "insulin_workload": 0.25,
    "adherence_momentum": 0.25,
}


def trend_average(state: HealthState) -> float:
    """Mean of energy and inverted glucose stress / insulin workload."""
    return (state.energy + (100 - state.glucose_stress) + (100 - state.insulin_workload)) / 3


def calculate_trend(previous: HealthState, current: HealthState) -> HealthTrend:
    previous_avg = trend_average(previous)
    current_avg = trend_average(current)

    if current_avg > previous_avg + TREND_THRESHOLD:
        return HealthTrend.IMPROVING
    if current_avg < previous_avg - TREND_THRESHOLD:
        return HealthTrend.DECLINING
    return HealthTrend.STABLE


def calculate_health_score(state: HealthState) -> int:
    """Baseline health score on a 0-100 scale (rounded)."""
    score = (
        state.energy * SCORE_WEIGHTS["energy"]
        + (100 - state.glucose_stress) * SCORE_WEIGHTS["glucose_stress"]
        + (100 - state.insulin_workload) * SCORE_WEIGHTS["insulin_workload"]
        + state.adherence_momentum * SCORE_WEIGHTS["adherence_momentum"]
    )
    return math.floor(score + 0.5)  # half-up, not banker's rounding


def calculate_streak(
    moments: Iterable[Moment] | None,
    moment_type: MomentType,
    window_days: int = DEFAULT_STREAK_WINDOW_DAYS,
    *,
    today: date | None = None,
) -> int:
    """Count consecutive days, ending today, with a favorable moment of ``moment_type``.

    Walks backward one calendar day at a time for at most ``window_days``
    days. A day qualifies when it holds a moment of the requested type whose
    intensity is low, moderate or positive. The first day without one ends
    the streak; there is no gap tolerance.

    Args:
        moments: Moment history in any order.
        moment_type: Habit to track.
        window_days: Maximum streak length considered.
        today: Anchor date (UTC). Defaults to the current UTC date.

    Returns:
        Streak length in days, 0 for an empty history.
    """
    qualifying_days = {
        m.date
        for m in (moments or [])
        if m.type == moment_type and m.intensity in FAVORABLE_INTENSITIES
    }
    if not qualifying_days:
        return 0

    check_date = today or datetime.now(timezone.utc).date()
    streak = 0
    for _ in range(max(window_days, 0)):
        if check_date not in qualifying_days:
            break
        streak += 1
        check_date -= timedelta(days=1)

    return streak
