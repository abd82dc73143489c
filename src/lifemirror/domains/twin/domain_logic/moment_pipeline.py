"""One-call moment processing across the real track and both twins.

``process_moment`` is the engine entry point used by the host: it takes the
caller-owned ``LifeState`` plus the new moment and returns a fresh
``LifeState`` together with the labels derived from it. Nothing is cached
between calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from lifemirror.domains.twin.domain_logic.avatar_classifier import classify_avatar
from lifemirror.domains.twin.domain_logic.avatar_voice import avatar_reaction
from lifemirror.domains.twin.domain_logic.moment_models import (
    AvatarState,
    HealthState,
    HealthTrend,
    Moment,
    RiskFactor,
    TwinTrack,
)
from lifemirror.domains.twin.domain_logic.risk_classifier import classify_risks, sorted_risks
from lifemirror.domains.twin.domain_logic.state_accumulator import apply_moment
from lifemirror.domains.twin.domain_logic.trend_analyzer import (
    calculate_health_score,
    calculate_trend,
)
from lifemirror.domains.twin.domain_logic.twin_simulator import advance_twin


@dataclass(frozen=True)
class LifeState:
    """The real health state and both twin tracks, owned by the caller."""

    health_state: HealthState = HealthState()
    current_twin: HealthState = HealthState()
    what_if_twin: HealthState = HealthState()

    def twin(self, track: TwinTrack) -> HealthState:
        return self.current_twin if track == TwinTrack.CURRENT else self.what_if_twin

    def to_dict(self) -> dict[str, Any]:
        return {
            "health_state": self.health_state.to_dict(),
            "twins": {
                TwinTrack.CURRENT.value: self.current_twin.to_dict(),
                TwinTrack.WHAT_IF.value: self.what_if_twin.to_dict(),
            },
        }


@dataclass(frozen=True)
class MomentOutcome:
    moment: Moment
    life_state: LifeState
    risk_factors: frozenset[RiskFactor]
    avatar: AvatarState
    trend: HealthTrend
    health_score: int
    reaction: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "moment": self.moment.to_dict(),
            **self.life_state.to_dict(),
            "risk_factors": sorted_risks(self.risk_factors),
            "avatar": self.avatar.value,
            "trend": self.trend.value,
            "health_score": self.health_score,
            "reaction": self.reaction,
        }


def process_moment(
    life_state: LifeState,
    moment: Moment,
    recent_moments: Iterable[Moment] = (),
) -> MomentOutcome:
    """Apply ``moment`` to every track and classify the new real state.

    Args:
        life_state: Snapshot before the moment.
        moment: The new moment (impact already resolved).
        recent_moments: Moments preceding ``moment``, newest first. The risk
            window is ``[moment, *recent_moments]``.
    """
    health_state = apply_moment(life_state.health_state, moment)
    next_state = LifeState(
        health_state=health_state,
        current_twin=apply_moment(life_state.current_twin, moment),
        what_if_twin=advance_twin(life_state.what_if_twin, moment),
    )
    window = [moment, *recent_moments]

    return MomentOutcome(
        moment=moment,
        life_state=next_state,
        risk_factors=classify_risks(health_state, window),
        avatar=classify_avatar(health_state),
        trend=calculate_trend(life_state.health_state, health_state),
        health_score=calculate_health_score(health_state),
        reaction=avatar_reaction(moment),
    )
