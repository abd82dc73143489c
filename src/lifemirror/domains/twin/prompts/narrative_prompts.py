"""MCP Prompts: read-only engine context for the external narrative service.

The narrative service (an LLM) turns moments and state into prose. It gets
the numbers and labels computed here and never writes back into engine state.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Iterable

from fastmcp import FastMCP

from lifemirror.domains.twin.domain_logic.avatar_classifier import classify_avatar
from lifemirror.domains.twin.domain_logic.moment_models import Moment
from lifemirror.domains.twin.domain_logic.risk_classifier import classify_risks, sorted_risks
from lifemirror.domains.twin.domain_logic.trend_analyzer import calculate_health_score
from lifemirror.domains.twin.domain_logic.twin_simulator import compare_twins

if TYPE_CHECKING:
    from lifemirror.domains.twin.connectors import LifeStateStore
    from lifemirror.domains.twin.domain_logic.moment_pipeline import LifeState

CONTEXT_MOMENTS = 3


def build_narrative_context(
    life_state: LifeState,
    recent_moments: Iterable[Moment],
) -> dict[str, Any]:
    """Assemble the context the narrative service reads.

    Args:
        life_state: Current real state and twins.
        recent_moments: Risk window, newest first.
    """
    window = list(recent_moments)
    state = life_state.health_state
    comparison = compare_twins(life_state.current_twin, life_state.what_if_twin)

    return {
        "health_state": state.to_dict(),
        "health_score": calculate_health_score(state),
        "avatar": classify_avatar(state).value,
        "risk_factors": sorted_risks(classify_risks(state, window)),
        "recent_moments": [
            {"type": m.type.value, "intensity": m.intensity.value, "description": m.description}
            for m in window[:CONTEXT_MOMENTS]
        ],
        "twins": comparison.to_dict(),
    }


def register_narrative_prompts(
    mcp: FastMCP,
    store: LifeStateStore,
    recent_window: int,
) -> None:
    """Register narrative MCP prompts backed by the session store."""

    def _context() -> str:
        context = build_narrative_context(
            store.get_life_state(), store.list_moments(limit=recent_window),
        )
        return json.dumps(context, indent=2)

    @mcp.prompt()
    def moment_reflection_prompt() -> str:
        """Prompt template reflecting on the latest life moments."""
        return f"""You are a compassionate health companion. Using only the context below,
reflect on my latest moments in 4-5 sentences and give two concrete, numbered tips
that fit my current state. Plain text, no markdown. This is not medical advice.

Context:
{_context()}"""

    @mcp.prompt()
    def what_if_reflection_prompt() -> str:
        """Prompt template comparing the current twin with the what-if twin."""
        return f"""Compare my current twin with my what-if twin in 3-4 sentences.
Explain which choices made the difference and one small step that would close the gap.
Plain text, no markdown. This is not medical advice.

Context:
{_context()}"""
