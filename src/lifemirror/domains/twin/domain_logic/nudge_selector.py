"""Contextual nudge selection from health state and risk factors."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from lifemirror.domains.twin.domain_logic.moment_models import HealthState, RiskFactor
from lifemirror.domains.twin.domain_logic.risk_classifier import sorted_risks


@dataclass(frozen=True)
class Nudge:
    type: str
    title: str
    message: str
    context: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "title": self.title,
            "message": self.message,
            "context": self.context,
        }


def select_nudges(
    state: HealthState,
    risk_factors: Iterable[RiskFactor],
    *,
    activity_streak: int = 0,
) -> list[Nudge]:
    """Pick the nudges that apply to the current state.

    Conditions are independent; the result keeps a fixed order:
    loss-aversion, habit-streak, gentle-warning, progress-visibility.
    """
    risks = frozenset(risk_factors)
    momentum = state.adherence_momentum
    nudges: list[Nudge] = []

    if 50 < momentum < 70:
        nudges.append(Nudge(
            type="loss-aversion",
            title="Protect your momentum",
            message="You've built real momentum. One small choice today keeps it alive.",
            context={"momentum": round(momentum, 2)},
        ))

    if RiskFactor.LOSING_MOMENTUM in risks:
        nudges.append(Nudge(
            type="habit-streak",
            title="Restart the streak",
            message="Momentum is slipping. A short walk today starts a new streak.",
            context={"recent_streak": activity_streak},
        ))

    if len(risks) > 2:
        nudges.append(Nudge(
            type="gentle-warning",
            title="Several signals need care",
            message="A few things are stacking up. Pick one to ease today.",
            context={"risk_factors": sorted_risks(risks)},
        ))

    if momentum > 65 and RiskFactor.HIGH_STRESS not in risks:
        nudges.append(Nudge(
            type="progress-visibility",
            title="Look how far you've come",
            message="Your consistency is showing. Keep it up.",
            context={"momentum": round(momentum, 2)},
        ))

    return nudges
