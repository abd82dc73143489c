"""Impact resolution: (moment type, intensity) -> signed metric deltas.

Two static tables share the same keys. ``IMPACT_TABLE`` describes what a
moment does to the real health track; ``WHAT_IF_TABLE`` describes the more
favorable counterfactual used by the what-if twin. A pairing missing from a
table resolves to the empty vector, which is a no-op rather than an error.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from lifemirror.domains.twin.domain_logic.moment_models import (
    ImpactVector,
    Intensity,
    Metric,
    Moment,
    MomentType,
)

E = Metric.ENERGY
G = Metric.GLUCOSE_STRESS
I = Metric.INSULIN_WORKLOAD  # noqa: E741
M = Metric.ADHERENCE_MOMENTUM
S = Metric.STRESS_LEVEL


IMPACT_TABLE: dict[MomentType, dict[Intensity, ImpactVector]] = {
    MomentType.SLEEP: {
        Intensity.POOR: {E: -25, S: 15, G: 10},
        Intensity.POSITIVE: {E: 25, S: -15},
    },
    MomentType.ACTIVITY: {
        Intensity.HIGH: {E: 20, S: -15, G: -10, I: -5},
        Intensity.LOW: {E: -5},
    },
    MomentType.DIET: {
        Intensity.HIGH: {G: 25, I: 20},
        Intensity.LOW: {G: -8, I: -3, M: 8},
    },
    MomentType.STRESS: {
        Intensity.HIGH: {S: 30, E: -15, G: 8},
        Intensity.LOW: {S: -10},
    },
    MomentType.EMOTIONAL: {
        Intensity.POSITIVE: {S: -12, E: 10, M: 5},
        Intensity.POOR: {S: 10, E: -5},
    },
}

WHAT_IF_TABLE: dict[MomentType, dict[Intensity, ImpactVector]] = {
    MomentType.SLEEP: {
        Intensity.POOR: {E: 0, S: -5, G: -3},
    },
    MomentType.ACTIVITY: {
        Intensity.HIGH: {E: 10, S: -8},
        Intensity.LOW: {E: 10, S: -8, M: 5},
        Intensity.SKIPPED: {E: 15, M: 15},
    },
    MomentType.DIET: {
        Intensity.HIGH: {G: -15, I: -12, M: 8},
    },
    MomentType.STRESS: {
        Intensity.HIGH: {S: -15, E: 5},
    },
}


def _lookup(
    table: dict[MomentType, dict[Intensity, ImpactVector]],
    moment_type: MomentType,
    intensity: Intensity,
) -> ImpactVector:
    return dict(table.get(moment_type, {}).get(intensity, {}))


def resolve_impact(moment_type: MomentType, intensity: Intensity) -> ImpactVector:
    """Real-track deltas for a pairing; empty when the table has no entry."""
    return _lookup(IMPACT_TABLE, moment_type, intensity)


def resolve_what_if_impact(moment_type: MomentType, intensity: Intensity) -> ImpactVector:
    """Counterfactual deltas for a pairing; empty when the table has no entry."""
    return _lookup(WHAT_IF_TABLE, moment_type, intensity)


def create_moment(
    moment_type: MomentType,
    intensity: Intensity,
    description: str,
    timestamp: datetime,
    *,
    moment_id: str | None = None,
) -> Moment:
    """Create a moment, resolving its impact exactly once."""
    return Moment(
        id=moment_id or uuid.uuid4().hex,
        type=moment_type,
        intensity=intensity,
        description=description,
        timestamp=timestamp,
        impact=resolve_impact(moment_type, intensity),
    )


def table_as_dict(table: dict[MomentType, dict[Intensity, ImpactVector]]) -> dict:
    """Plain-JSON view of an impact table."""
    return {
        t.value: {i.value: {m.value: d for m, d in vec.items()} for i, vec in row.items()}
        for t, row in table.items()
    }
