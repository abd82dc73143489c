"""Avatar classification: health state -> emotional avatar category.

Classification is an ordered decision list. Rules overlap on purpose: acute
stress or exhaustion must win over a composite score that looks good on
average, so the first matching rule decides and later rules are never
consulted. Reordering ``AVATAR_RULES`` changes behavior.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from lifemirror.domains.twin.domain_logic.moment_models import AvatarState, HealthState


@dataclass(frozen=True)
class AvatarProfile:
    """Static display attributes for an avatar state (presentation only)."""

    expression: str
    posture: str
    color: str
    aura: str
    emoji: str
    description: str

    def to_dict(self) -> dict[str, str]:
        return {
            "expression": self.expression,
            "posture": self.posture,
            "color": self.color,
            "aura": self.aura,
            "emoji": self.emoji,
            "description": self.description,
        }


AVATAR_PROFILES: dict[AvatarState, AvatarProfile] = {
    AvatarState.ENERGIZED: AvatarProfile(
        "happy", "upright", "#4CAF50", "bright", "😊", "Energized and confident",
    ),
    AvatarState.BALANCED: AvatarProfile(
        "neutral", "neutral", "#2196F3", "stable", "😌", "Balanced and stable",
    ),
    AvatarState.STRUGGLING: AvatarProfile(
        "concerned", "slouched", "#FF9800", "dim", "😟", "Struggling but managing",
    ),
    AvatarState.STRESSED: AvatarProfile(
        "anxious", "tense", "#F44336", "turbulent", "😰", "Stressed and overwhelmed",
    ),
    AvatarState.TIRED: AvatarProfile(
        "exhausted", "slouched", "#9C27B0", "fading", "😴", "Tired and depleted",
    ),
    AvatarState.RECOVERING: AvatarProfile(
        "hopeful", "rising", "#FF6F00", "warming", "🤔", "Recovering and healing",
    ),
}


def composite_score(state: HealthState) -> float:
    """Equal-weight blend of energy, inverted glucose/insulin load, and momentum."""
    return (
        0.25 * state.energy
        + 0.25 * (100 - state.glucose_stress)
        + 0.25 * (100 - state.insulin_workload)
        + 0.25 * state.adherence_momentum
    )


@dataclass(frozen=True)
class AvatarRule:
    name: str
    predicate: Callable[[HealthState, float], bool]  # (state, composite score)
    result: AvatarState


AVATAR_RULES: tuple[AvatarRule, ...] = (
    AvatarRule(
        "acute_stress",
        lambda s, score: s.energy < 25 and s.stress_level > 70,
        AvatarState.STRESSED,
    ),
    AvatarRule(
        "low_energy",
        lambda s, score: s.energy < 35,
        AvatarState.TIRED,
    ),
    AvatarRule(
        "metabolic_load",
        lambda s, score: s.glucose_stress > 75 or s.insulin_workload > 80,
        AvatarState.STRUGGLING,
    ),
    AvatarRule(
        "stress_drain",
        lambda s, score: s.stress_level > 60 and s.energy < 50,
        AvatarState.STRUGGLING,
    ),
    AvatarRule(
        "high_composite",
        lambda s, score: score > 75,
        AvatarState.ENERGIZED,
    ),
    AvatarRule(
        "energy_and_momentum",
        lambda s, score: s.energy > 70 and s.adherence_momentum > 70,
        AvatarState.ENERGIZED,
    ),
    AvatarRule(
        "calm_and_steady",
        lambda s, score: s.energy > 50 and s.glucose_stress < 50 and s.stress_level < 50,
        AvatarState.BALANCED,
    ),
    AvatarRule(
        "fair_composite",
        lambda s, score: score > 50,
        AvatarState.BALANCED,
    ),
    AvatarRule(
        "rebuilding",
        lambda s, score: score > 40 and s.adherence_momentum > 50,
        AvatarState.RECOVERING,
    ),
    AvatarRule(
        "default",
        lambda s, score: True,
        AvatarState.BALANCED,
    ),
)


def match_avatar_rule(state: HealthState) -> AvatarRule:
    """Return the first rule in ``AVATAR_RULES`` that matches ``state``."""
    score = composite_score(state)
    for rule in AVATAR_RULES:
        if rule.predicate(state, score):
            return rule
    return AVATAR_RULES[-1]  # pragma: no cover - the default rule always matches


def classify_avatar(state: HealthState) -> AvatarState:
    return match_avatar_rule(state).result
