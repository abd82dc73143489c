"""MCP tools for logging life moments and reading the twin engine's state.

The tools are the input boundary: moment fields are validated here against
the closed enumerations before anything reaches the engine. Engine calls are
synchronous and pure; the store holds the only mutable state.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from fastmcp import Context, FastMCP

from lifemirror.domains.twin.domain_logic.avatar_classifier import (
    AVATAR_PROFILES,
    composite_score,
    match_avatar_rule,
)
from lifemirror.domains.twin.domain_logic.avatar_voice import day_narrative
from lifemirror.domains.twin.domain_logic.impact_resolver import create_moment
from lifemirror.domains.twin.domain_logic.moment_models import (
    InvalidMomentError,
    MomentType,
    parse_moment_type,
    parse_pairing,
    parse_timestamp,
)
from lifemirror.domains.twin.domain_logic.moment_pipeline import process_moment
from lifemirror.domains.twin.domain_logic.nudge_selector import select_nudges
from lifemirror.domains.twin.domain_logic.risk_classifier import classify_risks, sorted_risks
from lifemirror.domains.twin.domain_logic.trend_analyzer import (
    calculate_health_score,
    calculate_streak,
)
from lifemirror.domains.twin.domain_logic.twin_simulator import compare_twins

if TYPE_CHECKING:
    from lifemirror.core.config.settings import Settings
    from lifemirror.domains.twin.connectors import LifeStateStore

logger = logging.getLogger(__name__)


def _error(message: str) -> str:
    return json.dumps({"status": "error", "message": message})


def register_life_moment_tools(
    mcp: FastMCP,
    store: LifeStateStore,
    settings: Settings,
) -> None:
    """Register life moment and twin engine tools on the MCP server."""

    # Everything before the new moment that still fits in the risk window
    prior_window = max(settings.recent_moment_window - 1, 0)

    @mcp.tool
    async def log_life_moment(
        ctx: Context,
        moment_type: str,
        intensity: str,
        description: str,
        timestamp: str = "",
    ) -> str:
        """Log a life moment and update your health state and both twins.

        Args:
            moment_type: One of 'sleep', 'activity', 'diet', 'stress', 'emotional'.
            intensity: One of 'low', 'moderate', 'high', 'poor', 'positive',
                'skipped' (activity only).
            description: What happened, in your own words.
            timestamp: When it happened (ISO 8601). Defaults to now.
        """
        try:
            parsed_type, parsed_intensity = parse_pairing(moment_type, intensity)
            parsed_timestamp = parse_timestamp(timestamp)
            if not description.strip():
                raise InvalidMomentError("Please describe your moment")
        except InvalidMomentError as exc:
            logger.warning("Rejected life moment: %s", exc)
            return _error(str(exc))

        moment = create_moment(
            parsed_type, parsed_intensity, description.strip(), parsed_timestamp,
        )
        recent = store.list_moments(limit=prior_window)
        outcome = process_moment(store.get_life_state(), moment, recent)

        store.add_moment(moment)
        store.save_life_state(outcome.life_state)
        logger.info(
            "Life moment logged: %s/%s (id %s, avatar %s, risks %s)",
            moment.type.value,
            moment.intensity.value,
            moment.id,
            outcome.avatar.value,
            sorted_risks(outcome.risk_factors),
        )
        return json.dumps({"status": "saved", **outcome.to_dict()})

    @mcp.tool
    async def health_overview(ctx: Context) -> str:
        """Current health state, score, avatar and risk factors."""
        state = store.get_life_state().health_state
        recent = store.list_moments(limit=settings.recent_moment_window)
        rule = match_avatar_rule(state)

        return json.dumps({
            "status": "ok",
            "health_state": state.to_dict(),
            "health_score": calculate_health_score(state),
            "composite_score": round(composite_score(state), 2),
            "avatar": {
                "state": rule.result.value,
                "rule": rule.name,
                **AVATAR_PROFILES[rule.result].to_dict(),
            },
            "risk_factors": sorted_risks(classify_risks(state, recent)),
            "moments_stored": store.count_moments(),
        })

    @mcp.tool
    async def twin_comparison(ctx: Context) -> str:
        """Compare your current twin with the what-if twin."""
        life_state = store.get_life_state()
        comparison = compare_twins(life_state.current_twin, life_state.what_if_twin)
        return json.dumps({"status": "ok", **comparison.to_dict()})

    @mcp.tool
    async def habit_streak(
        ctx: Context,
        moment_type: str = "activity",
        window_days: int | None = None,
    ) -> str:
        """Count consecutive days (ending today) with a favorable moment of a type.

        Args:
            moment_type: Habit to track: 'sleep', 'activity', 'diet', 'stress', 'emotional'.
            window_days: Longest streak considered. Defaults to the configured window.
        """
        try:
            parsed_type = parse_moment_type(moment_type)
        except InvalidMomentError as exc:
            logger.warning("Rejected streak request: %s", exc)
            return _error(str(exc))

        days = window_days if window_days is not None else settings.streak_window_days
        streak = calculate_streak(store.list_moments(), parsed_type, days)
        return json.dumps({
            "status": "ok",
            "moment_type": parsed_type.value,
            "window_days": days,
            "streak": streak,
        })

    @mcp.tool
    async def contextual_nudges(ctx: Context) -> str:
        """Nudges that fit your current state and risk factors."""
        state = store.get_life_state().health_state
        moments = store.list_moments()
        risks = classify_risks(state, moments[: settings.recent_moment_window])
        streak = calculate_streak(moments, MomentType.ACTIVITY, settings.streak_window_days)
        nudges = select_nudges(state, risks, activity_streak=streak)
        return json.dumps({
            "status": "ok",
            "count": len(nudges),
            "nudges": [n.to_dict() for n in nudges],
        })

    @mcp.tool
    async def list_life_moments(ctx: Context, limit: int | None = None) -> str:
        """List logged life moments, newest first.

        Args:
            limit: Maximum number of moments. Defaults to the configured page size.
        """
        moments = store.list_moments(limit=limit if limit is not None else settings.history_page_size)
        return json.dumps({
            "status": "ok",
            "count": len(moments),
            "total": store.count_moments(),
            "moments": [m.to_dict() for m in moments],
        }, indent=2)

    @mcp.tool
    async def day_summary(ctx: Context, date: str = "") -> str:
        """The avatar's take on one day.

        Args:
            date: Day to summarize (ISO 8601 date, UTC). Defaults to today.
        """
        try:
            day = parse_timestamp(date).date()
        except InvalidMomentError as exc:
            logger.warning("Rejected day summary request: %s", exc)
            return _error(str(exc))

        day_moments = [m for m in store.list_moments() if m.date == day]
        state = store.get_life_state().health_state
        return json.dumps({
            "status": "ok",
            "date": day.isoformat(),
            "moments": len(day_moments),
            "narrative": day_narrative(state, day_moments),
        })
