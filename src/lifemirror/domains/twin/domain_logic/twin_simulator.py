"""What-if twin simulation.

The what-if twin is a second health track advanced from the same incoming
moments as the real one, but with the counterfactual deltas of
``WHAT_IF_TABLE`` shaped by fixed policy multipliers. The two tracks never read
each other's prior snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from lifemirror.domains.twin.domain_logic.impact_resolver import resolve_what_if_impact
from lifemirror.domains.twin.domain_logic.moment_models import (
    HealthState,
    ImpactVector,
    Metric,
    Moment,
)
from lifemirror.domains.twin.domain_logic.state_accumulator import apply_impact
from lifemirror.domains.twin.domain_logic.trend_analyzer import calculate_health_score

# Policy constants, kept as-is for parity with existing twin histories
ENERGY_MULTIPLIER = 1.5
GLUCOSE_MULTIPLIER = 0.7
INSULIN_MULTIPLIER = 0.6
MOMENTUM_BASE = 10.0    # used when the counterfactual carries no momentum delta
MOMENTUM_BONUS = 15.0


def shape_what_if_impact(impact: Mapping[Metric, float]) -> ImpactVector:
    """Apply the twin multipliers and the momentum bonus to a what-if vector."""
    shaped: ImpactVector = {
        Metric.ENERGY: (impact.get(Metric.ENERGY) or 0.0) * ENERGY_MULTIPLIER,
        Metric.GLUCOSE_STRESS: (impact.get(Metric.GLUCOSE_STRESS) or 0.0) * GLUCOSE_MULTIPLIER,
        Metric.INSULIN_WORKLOAD: (impact.get(Metric.INSULIN_WORKLOAD) or 0.0) * INSULIN_MULTIPLIER,
        Metric.ADHERENCE_MOMENTUM: (
            (impact.get(Metric.ADHERENCE_MOMENTUM) or MOMENTUM_BASE) + MOMENTUM_BONUS
        ),
    }
    if impact.get(Metric.STRESS_LEVEL):
        shaped[Metric.STRESS_LEVEL] = impact[Metric.STRESS_LEVEL]
    return shaped


def advance_twin(twin_state: HealthState, moment: Moment | None) -> HealthState:
    """Advance the what-if twin by one moment and return the new snapshot."""
    if moment is None:
        return twin_state
    what_if = resolve_what_if_impact(moment.type, moment.intensity)
    return apply_impact(twin_state, shape_what_if_impact(what_if))


@dataclass(frozen=True)
class TwinComparison:
    """Side-by-side view of the current and what-if twins."""

    current: HealthState
    what_if: HealthState
    differences: dict[Metric, float]  # what_if - current
    current_score: int
    what_if_score: int

    @property
    def score_gap(self) -> int:
        return self.what_if_score - self.current_score

    def to_dict(self) -> dict:
        return {
            "current": self.current.to_dict(),
            "whatIf": self.what_if.to_dict(),
            "differences": {m.value: round(d, 2) for m, d in self.differences.items()},
            "current_score": self.current_score,
            "what_if_score": self.what_if_score,
            "score_gap": self.score_gap,
        }


def compare_twins(current: HealthState, what_if: HealthState) -> TwinComparison:
    return TwinComparison(
        current=current,
        what_if=what_if,
        differences={m: what_if.get(m) - current.get(m) for m in Metric},
        current_score=calculate_health_score(current),
        what_if_score=calculate_health_score(what_if),
    )
