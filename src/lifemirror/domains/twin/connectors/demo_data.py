"""Demo session seed for development and manual testing.

Replays a short, realistic week through the engine so the stored state is
consistent with the stored moments. Represents someone doing reasonably well
with one rough patch, not a crisis.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from lifemirror.domains.twin.connectors.memory_store import InMemoryLifeStore
from lifemirror.domains.twin.domain_logic.impact_resolver import create_moment
from lifemirror.domains.twin.domain_logic.moment_models import Intensity, MomentType
from lifemirror.domains.twin.domain_logic.moment_pipeline import LifeState, process_moment

# (days ago, hour, type, intensity, description), oldest first
DEMO_MOMENTS = [
    (4, 7, MomentType.SLEEP, Intensity.POOR, "Up late finishing a deadline"),
    (4, 13, MomentType.DIET, Intensity.HIGH, "Pastries at the team meeting"),
    (3, 9, MomentType.STRESS, Intensity.HIGH, "Presentation ran long"),
    (2, 8, MomentType.SLEEP, Intensity.POSITIVE, "Slept a solid eight hours"),
    (2, 18, MomentType.ACTIVITY, Intensity.MODERATE, "Evening walk around the park"),
    (1, 12, MomentType.DIET, Intensity.LOW, "Salad and grilled fish for lunch"),
    (1, 19, MomentType.ACTIVITY, Intensity.LOW, "Light stretching"),
    (0, 8, MomentType.EMOTIONAL, Intensity.POSITIVE, "Coffee with an old friend"),
]


def build_demo_store(now: datetime | None = None) -> InMemoryLifeStore:
    """Return an InMemoryLifeStore seeded with DEMO_MOMENTS."""
    now = now or datetime.now(timezone.utc)
    today = now.replace(minute=0, second=0, microsecond=0)

    state = LifeState()
    history = []  # newest first
    for days_ago, hour, moment_type, intensity, description in DEMO_MOMENTS:
        timestamp = (today - timedelta(days=days_ago)).replace(hour=hour)
        moment = create_moment(moment_type, intensity, description, timestamp)
        state = process_moment(state, moment, history[:5]).life_state
        history.insert(0, moment)

    return InMemoryLifeStore(state, history, data_source="demo")
