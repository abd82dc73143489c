"""Bounded accumulation of impact vectors onto health state snapshots."""

from __future__ import annotations

from typing import Mapping

from lifemirror.domains.twin.domain_logic.moment_models import (
    HealthState,
    Metric,
    Moment,
    clamp_metric,
)


def apply_impact(state: HealthState, impact: Mapping[Metric, float] | None) -> HealthState:
    """Apply signed deltas to ``state`` and return a new, clamped snapshot.

    ``impact=None`` returns ``state`` itself. Metrics absent from ``impact``
    are carried over unchanged; the input snapshot is never modified.
    """
    if impact is None:
        return state

    return HealthState(**{
        metric.attr: clamp_metric(state.get(metric) + (impact.get(metric) or 0.0))
        for metric in Metric
    })


def apply_moment(state: HealthState, moment: Moment | None) -> HealthState:
    """Apply a moment's stored impact (never re-resolved)."""
    if moment is None:
        return state
    return apply_impact(state, moment.impact)
