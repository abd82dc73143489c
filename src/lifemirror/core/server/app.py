"""Life Mirror MCP Server: application factory.

This module provides:
- create_app() for testability (integration tests create fresh server instances)
- Module-level `mcp` variable for FastMCP discovery
"""

from __future__ import annotations

import logging

from fastmcp import FastMCP

from lifemirror.core.config.settings import get_settings
from lifemirror.domains.twin.connectors import LifeStateStore
from lifemirror.domains.twin.connectors.demo_data import build_demo_store
from lifemirror.domains.twin.connectors.memory_store import InMemoryLifeStore
from lifemirror.domains.twin.prompts.narrative_prompts import register_narrative_prompts
from lifemirror.domains.twin.resources.catalog import register_catalog_resources
from lifemirror.domains.twin.tools.life_moment_tools import register_life_moment_tools

logger = logging.getLogger(__name__)

SERVER_NAME = "Life Mirror"
SERVER_VERSION = "0.1.0"


def create_app(*, store_override: LifeStateStore | None = None) -> FastMCP:
    """Create and configure the Life Mirror MCP server.

    This is the main application factory. It:
    1. Creates the FastMCP server instance
    2. Initializes the session store (in-memory, optionally demo-seeded)
    3. Registers all tools, resources, and prompts
    """
    settings = get_settings()

    # --- Server instance ---
    server = FastMCP(
        SERVER_NAME,
        instructions=(
            "Life Mirror health twin server. Log daily life moments (sleep, activity, "
            "diet, stress, emotional) and read the resulting health state, risk "
            "factors, avatar state, habit streaks and what-if twin comparison. "
            "Not a medical model."
        ),
    )

    # --- Initialize session store ---
    if store_override is not None:
        store = store_override
    elif settings.seed_demo_data:
        store = build_demo_store()
        logger.info("Using demo-seeded session store (%d moments)", store.count_moments())
    else:
        store = InMemoryLifeStore()
        logger.info("Using empty in-memory session store")

    # --- Register tools ---
    @server.tool
    def health_check() -> dict:
        """Check server health and return basic status information."""
        return {
            "status": "ok",
            "server": SERVER_NAME,
            "version": SERVER_VERSION,
            "data_source": store.data_source,
            "moments_stored": store.count_moments(),
        }

    register_life_moment_tools(server, store, settings)
    logger.info("Life moment tools registered")

    # --- Register resources ---
    register_catalog_resources(server)

    # --- Register prompts ---
    register_narrative_prompts(server, store, settings.recent_moment_window)

    return server


# Module-level instance for FastMCP discovery ("...app.py:mcp").
# Lazy: only created when this module is loaded directly (not when tests import create_app).
def __getattr__(name: str):
    if name == "mcp":
        global mcp  # noqa: PLW0603
        mcp = create_app()
        return mcp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
