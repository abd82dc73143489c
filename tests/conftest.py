"""Shared test fixtures for Life Mirror tests."""

from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Test hermeticity
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _force_hermetic_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SEED_DEMO_DATA", "false")
    monkeypatch.setenv("RECENT_MOMENT_WINDOW", "6")
    monkeypatch.setenv("STREAK_WINDOW_DAYS", "7")
    monkeypatch.setenv("HISTORY_PAGE_SIZE", "10")
    for name in ("LIFEMIRROR_HOST", "LIFEMIRROR_TRANSPORT", "LIFEMIRROR_ALLOW_INSECURE_BIND"):
        monkeypatch.delenv(name, raising=False)

# Allow running tests without `pip install -e .` by making `src/` importable.
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_SRC_DIR = _PROJECT_ROOT / "src"
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

from lifemirror.domains.twin.connectors.demo_data import build_demo_store  # noqa: E402
from lifemirror.domains.twin.connectors.memory_store import InMemoryLifeStore  # noqa: E402


# ---------------------------------------------------------------------------
# Session store fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def life_store() -> InMemoryLifeStore:
    """Empty in-memory store at the neutral baseline."""
    return InMemoryLifeStore()


@pytest.fixture
def demo_store() -> InMemoryLifeStore:
    """Store seeded with the demo week, anchored to a fixed date."""
    return build_demo_store(now=datetime(2026, 3, 15, 20, tzinfo=timezone.utc))
