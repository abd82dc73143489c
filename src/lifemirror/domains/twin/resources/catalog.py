"""MCP Resources for avatar states and impact tables."""

from __future__ import annotations

import json

from fastmcp import FastMCP

from lifemirror.domains.twin.domain_logic.avatar_classifier import AVATAR_PROFILES, AVATAR_RULES
from lifemirror.domains.twin.domain_logic.impact_resolver import (
    IMPACT_TABLE,
    WHAT_IF_TABLE,
    table_as_dict,
)


def register_catalog_resources(mcp: FastMCP) -> None:
    """Register static engine catalog resources on the MCP server."""

    @mcp.resource("lifemirror://avatar/states")
    def avatar_states_resource() -> str:
        """Avatar states, their display profiles, and the rule order that selects them."""
        return json.dumps(
            {
                "states": {
                    state.value: profile.to_dict()
                    for state, profile in AVATAR_PROFILES.items()
                },
                "rule_order": [
                    {"rule": rule.name, "result": rule.result.value}
                    for rule in AVATAR_RULES
                ],
            },
            indent=2,
            ensure_ascii=False,
        )

    @mcp.resource("lifemirror://impacts/table")
    def impact_table_resource() -> str:
        """Real and what-if impact deltas per moment type and intensity."""
        return json.dumps(
            {
                "impact": table_as_dict(IMPACT_TABLE),
                "what_if": table_as_dict(WHAT_IF_TABLE),
            },
            indent=2,
        )
