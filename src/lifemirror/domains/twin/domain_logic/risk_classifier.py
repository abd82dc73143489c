"""Risk factor classification from a health state and a recent-moment window.

Every rule is evaluated independently, so a state can carry zero, one or
several risk factors at once. Thresholds are strict inequalities.
"""

from __future__ import annotations

from typing import Callable, Iterable

from lifemirror.domains.twin.domain_logic.moment_models import (
    HealthState,
    Intensity,
    Moment,
    MomentType,
    RiskFactor,
)

# (predicate, factor) pairs over the state alone
THRESHOLD_RULES: tuple[tuple[Callable[[HealthState], bool], RiskFactor], ...] = (
    (lambda s: s.glucose_stress > 70, RiskFactor.HIGH_GLUCOSE_STRESS),
    (lambda s: s.stress_level > 75, RiskFactor.HIGH_STRESS),
    (lambda s: s.energy < 30, RiskFactor.LOW_ENERGY),
    (lambda s: s.insulin_workload > 80, RiskFactor.PANCREAS_OVERLOAD),
    (lambda s: s.adherence_momentum < 30, RiskFactor.LOSING_MOMENTUM),
)

# Poor sleep + high stress + sugar-heavy diet, anywhere in the window
TRIPLE_HIT_COMPONENTS: tuple[tuple[MomentType, Intensity], ...] = (
    (MomentType.SLEEP, Intensity.POOR),
    (MomentType.STRESS, Intensity.HIGH),
    (MomentType.DIET, Intensity.HIGH),
)


def has_triple_hit(recent_moments: Iterable[Moment] | None) -> bool:
    window = list(recent_moments or [])
    return all(
        any(m.matches(moment_type, intensity) for m in window)
        for moment_type, intensity in TRIPLE_HIT_COMPONENTS
    )


def classify_risks(
    state: HealthState,
    recent_moments: Iterable[Moment] | None = None,
) -> frozenset[RiskFactor]:
    """Derive the set of risk factors for ``state``.

    The recent-moment window is supplied by the caller; its size and recency
    ordering are the caller's concern.
    """
    risks = {factor for predicate, factor in THRESHOLD_RULES if predicate(state)}
    if has_triple_hit(recent_moments):
        risks.add(RiskFactor.TRIPLE_HIT_PATTERN)
    return frozenset(risks)


def sorted_risks(risks: Iterable[RiskFactor]) -> list[str]:
    """Risk factor names in declaration order, for stable output."""
    present = set(risks)
    return [r.value for r in RiskFactor if r in present]
