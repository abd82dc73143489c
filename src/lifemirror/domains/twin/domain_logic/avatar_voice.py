"""First-person avatar lines for moments and for whole days.

Deterministic template text only; prose generation belongs to the external
narrative service.
"""

from __future__ import annotations

from typing import Iterable

from lifemirror.domains.twin.domain_logic.avatar_classifier import classify_avatar
from lifemirror.domains.twin.domain_logic.moment_models import (
    AvatarState,
    HealthState,
    Intensity,
    Moment,
    MomentType,
)

IDLE_LINE = "I'm here for your journey."


def avatar_reaction(moment: Moment | None) -> str:
    """How the avatar reacts to a single moment."""
    if moment is None:
        return IDLE_LINE

    if moment.type == MomentType.SLEEP:
        if moment.intensity == Intensity.POOR:
            return "😴 That rough night is draining me. I need rest to help you."
        return "😊 Good sleep! I feel so much better. Let's make today count."

    if moment.type == MomentType.ACTIVITY:
        if moment.intensity == Intensity.HIGH:
            return "💪 That workout energized me! I'm ready for anything."
        if moment.intensity in (Intensity.LOW, Intensity.SKIPPED):
            return "🤔 I missed moving today. We both need the energy boost."
        return "🚶 Nice walk. My heart feels steadier already."

    if moment.type == MomentType.DIET:
        if moment.intensity == Intensity.HIGH:
            return "😟 That sugar rush is overwhelming my system. I'm working overtime."
        return "😌 Smooth digestion. My pancreas is grateful."

    if moment.type == MomentType.STRESS:
        if moment.intensity == Intensity.HIGH:
            return "😰 That stress hit hard. I'm tense and racing."
        return "😟 Some tension, but I'm managing."

    if moment.intensity == Intensity.POSITIVE:
        return "😊 That moment of joy heals me. Thank you."
    return "🤗 Connection matters. It helps me relax."


def _is_good_choice(moment: Moment) -> bool:
    return moment.type == MomentType.ACTIVITY or (
        moment.type == MomentType.DIET and moment.intensity == Intensity.LOW
    )


def _is_struggle(moment: Moment) -> bool:
    return moment.intensity in (Intensity.HIGH, Intensity.POOR)


def day_narrative(state: HealthState, day_moments: Iterable[Moment]) -> str:
    """The avatar's one-paragraph take on a day."""
    moments = list(day_moments)
    avatar = classify_avatar(state)

    if avatar is AvatarState.ENERGIZED:
        return (
            "What a day! You made choices that helped me thrive. "
            "I'm energized and ready for tomorrow."
        )
    if avatar is AvatarState.STRESSED:
        return (
            "Today was intense. Between the stress and the struggles, I'm overwhelmed. "
            "I need tomorrow to be gentler."
        )
    if avatar is AvatarState.TIRED:
        return "I'm exhausted. The poor sleep depleted me, and I'm running on fumes. I need rest."

    good_choices = any(_is_good_choice(m) for m in moments)
    struggles = any(_is_struggle(m) for m in moments)

    if good_choices and struggles:
        return (
            "A mixed day: you had victories and setbacks. That's real life. "
            "Tomorrow is a new opportunity."
        )
    if good_choices:
        return "You made thoughtful choices today. I can feel the difference. Keep going."
    return "Today was a challenge, but you're still here. That matters."
