"""Life Mirror server entry point: ``python -m lifemirror.core.server.main``."""

from __future__ import annotations

import logging
from ipaddress import ip_address

from lifemirror.core.config.settings import Settings, get_settings
from lifemirror.core.server.app import create_app

logger = logging.getLogger(__name__)


def _is_loopback_host(host: str) -> bool:
    if host in {"localhost"}:
        return True
    try:
        return ip_address(host).is_loopback
    except ValueError:
        return False


def check_bind(settings: Settings) -> None:
    """Refuse a public HTTP bind unless explicitly allowed.

    Moments are personal health data and the tools have no auth layer, so only
    loopback is served by default. stdio never binds a socket.
    """
    if settings.lifemirror_transport == "stdio":
        return
    if settings.lifemirror_allow_insecure_bind or _is_loopback_host(settings.lifemirror_host):
        return
    raise RuntimeError(
        "Refusing to bind Life Mirror server to a non-loopback host without an auth layer. "
        "Set LIFEMIRROR_ALLOW_INSECURE_BIND=true to override (unsafe)."
    )


def describe_session(settings: Settings) -> str:
    """One-line summary of the session store and engine windows for the startup log."""
    store = "demo week" if settings.seed_demo_data else "empty baseline"
    return (
        f"session={store} (in-memory, lost on restart), "
        f"risk_window={settings.recent_moment_window} moments, "
        f"streak_window={settings.streak_window_days} days"
    )


def run() -> None:
    """Start the Life Mirror MCP server on the configured transport."""
    settings = get_settings()
    logging.basicConfig(level=getattr(logging, settings.lifemirror_log_level.upper(), logging.INFO))

    check_bind(settings)
    logger.info("Life Mirror %s", describe_session(settings))

    mcp = create_app()
    if settings.lifemirror_transport == "stdio":
        logger.info("Starting Life Mirror server on stdio")
        mcp.run(transport="stdio")
        return

    logger.info(
        "Starting Life Mirror server on %s:%d",
        settings.lifemirror_host,
        settings.lifemirror_port,
    )
    mcp.run(
        transport="streamable-http",
        host=settings.lifemirror_host,
        port=settings.lifemirror_port,
    )


if __name__ == "__main__":
    run()
