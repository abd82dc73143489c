"""Life moment and health state models shared by the twin engine."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import date, datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


# ---------------------------------------------------------------------------
# Closed enumerations
# ---------------------------------------------------------------------------

class Metric(str, Enum):
    """The five health metrics, keyed by their wire names."""

    ENERGY = "energy"
    GLUCOSE_STRESS = "glucoseStress"
    INSULIN_WORKLOAD = "insulinWorkload"
    ADHERENCE_MOMENTUM = "adherenceMomentum"
    STRESS_LEVEL = "stressLevel"

    @property
    def attr(self) -> str:
        """Attribute name on HealthState."""
        return _METRIC_ATTRS[self]


class MomentType(str, Enum):
    SLEEP = "sleep"
    ACTIVITY = "activity"
    DIET = "diet"
    STRESS = "stress"
    EMOTIONAL = "emotional"


class Intensity(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    POOR = "poor"
    POSITIVE = "positive"
    SKIPPED = "skipped"  # activity only


class RiskFactor(str, Enum):
    HIGH_GLUCOSE_STRESS = "high_glucose_stress"
    HIGH_STRESS = "high_stress"
    LOW_ENERGY = "low_energy"
    PANCREAS_OVERLOAD = "pancreas_overload"
    LOSING_MOMENTUM = "losing_momentum"
    TRIPLE_HIT_PATTERN = "triple_hit_pattern"


class AvatarState(str, Enum):
    ENERGIZED = "energized"
    BALANCED = "balanced"
    STRUGGLING = "struggling"
    STRESSED = "stressed"
    TIRED = "tired"
    RECOVERING = "recovering"


class TwinTrack(str, Enum):
    CURRENT = "current"
    WHAT_IF = "whatIf"


class HealthTrend(str, Enum):
    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"


_METRIC_ATTRS = {
    Metric.ENERGY: "energy",
    Metric.GLUCOSE_STRESS: "glucose_stress",
    Metric.INSULIN_WORKLOAD: "insulin_workload",
    Metric.ADHERENCE_MOMENTUM: "adherence_momentum",
    Metric.STRESS_LEVEL: "stress_level",
}

# Accepted input spellings -> Metric. "stress" is the legacy impact key.
_METRIC_ALIASES: dict[str, Metric] = {
    **{m.value: m for m in Metric},
    **{attr: m for m, attr in _METRIC_ATTRS.items()},
    "stress": Metric.STRESS_LEVEL,
}

# Intensities that count toward a habit streak.
FAVORABLE_INTENSITIES = frozenset({Intensity.LOW, Intensity.MODERATE, Intensity.POSITIVE})

METRIC_MIN = 0.0
METRIC_MAX = 100.0
METRIC_DEFAULT = 50.0


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class InvalidMomentError(ValueError):
    """Raised at the input boundary for values outside the closed enumerations."""


# ---------------------------------------------------------------------------
# Health state
# ---------------------------------------------------------------------------

ImpactVector = dict[Metric, float]


def clamp_metric(value: float) -> float:
    """Clamp a metric value to [0, 100]."""
    return max(METRIC_MIN, min(METRIC_MAX, value))


def _num(val: Any, default: float = METRIC_DEFAULT) -> float:
    if val is None:
        return default
    try:
        return float(val)
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class HealthState:
    """A five-metric health snapshot. Every metric lives in [0, 100]."""

    energy: float = METRIC_DEFAULT
    glucose_stress: float = METRIC_DEFAULT
    insulin_workload: float = METRIC_DEFAULT
    adherence_momentum: float = METRIC_DEFAULT
    stress_level: float = METRIC_DEFAULT

    def __post_init__(self) -> None:
        # None means "not measured" and reads as the neutral default
        for f in fields(self):
            object.__setattr__(self, f.name, clamp_metric(_num(getattr(self, f.name))))

    def get(self, metric: Metric) -> float:
        return getattr(self, metric.attr)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> HealthState:
        """Build a snapshot from a wire mapping.

        Missing or null metrics default to 50; values are clamped to [0, 100].
        Unknown keys are ignored.
        """
        values: dict[str, float] = {}
        for key, raw in (data or {}).items():
            metric = _METRIC_ALIASES.get(key)
            if metric is not None:
                values[metric.attr] = raw
        return cls(**values)

    def to_dict(self) -> dict[str, float]:
        """Wire form keyed by camelCase metric names."""
        return {m.value: round(self.get(m), 2) for m in Metric}


# ---------------------------------------------------------------------------
# Moments
# ---------------------------------------------------------------------------

def impact_from_mapping(data: Mapping[str, Any] | None) -> ImpactVector:
    """Convert a string-keyed delta mapping to an ImpactVector.

    Unknown metric names are dropped; zero deltas are kept out of the vector.
    """
    impact: ImpactVector = {}
    for key, raw in (data or {}).items():
        metric = key if isinstance(key, Metric) else _METRIC_ALIASES.get(key)
        delta = _num(raw, default=0.0)
        if metric is not None and delta:
            impact[metric] = impact.get(metric, 0.0) + delta
    return impact


def impact_to_dict(impact: Mapping[Metric, float]) -> dict[str, float]:
    return {m.value: v for m, v in impact.items()}


@dataclass(frozen=True)
class Moment:
    """A single logged life event. Immutable once created."""

    id: str
    type: MomentType
    intensity: Intensity
    description: str
    timestamp: datetime
    impact: Mapping[Metric, float] = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        # Read-only view over a private copy; the stored impact is never rewritten
        object.__setattr__(self, "impact", MappingProxyType(dict(self.impact)))

    @property
    def date(self) -> date:
        """UTC calendar date of the moment."""
        ts = self.timestamp
        if ts.tzinfo is None:
            ts = ts.replace(tzinfo=timezone.utc)
        return ts.astimezone(timezone.utc).date()

    def matches(self, moment_type: MomentType, intensity: Intensity) -> bool:
        return self.type == moment_type and self.intensity == intensity

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "intensity": self.intensity.value,
            "description": self.description,
            "timestamp": self.timestamp.isoformat(),
            "date": self.date.isoformat(),
            "impact": impact_to_dict(self.impact),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Moment:
        """Rehydrate a stored moment without recomputing its impact."""
        moment_type, intensity = parse_pairing(data["type"], data["intensity"])
        return cls(
            id=str(data["id"]),
            type=moment_type,
            intensity=intensity,
            description=str(data.get("description", "")),
            timestamp=parse_timestamp(data.get("timestamp")),
            impact=impact_from_mapping(data.get("impact")),
        )


# ---------------------------------------------------------------------------
# Boundary parsers
# ---------------------------------------------------------------------------

def parse_moment_type(value: str | MomentType) -> MomentType:
    try:
        return MomentType(value)
    except ValueError:
        allowed = ", ".join(t.value for t in MomentType)
        raise InvalidMomentError(f"Unknown moment type {value!r} (expected one of: {allowed})") from None


def parse_intensity(value: str | Intensity) -> Intensity:
    try:
        return Intensity(value)
    except ValueError:
        allowed = ", ".join(i.value for i in Intensity)
        raise InvalidMomentError(f"Unknown intensity {value!r} (expected one of: {allowed})") from None


def parse_pairing(
    moment_type: str | MomentType,
    intensity: str | Intensity,
) -> tuple[MomentType, Intensity]:
    """Parse a (type, intensity) pair, rejecting intensities the type cannot carry."""
    parsed_type = parse_moment_type(moment_type)
    parsed_intensity = parse_intensity(intensity)
    if parsed_intensity == Intensity.SKIPPED and parsed_type != MomentType.ACTIVITY:
        raise InvalidMomentError(
            f"Intensity 'skipped' only applies to activity moments, not {parsed_type.value!r}"
        )
    return parsed_type, parsed_intensity


def parse_timestamp(value: str | datetime | None) -> datetime:
    """Parse an ISO 8601 timestamp; empty means now (UTC). Naive values are UTC."""
    if value is None or value == "":
        return datetime.now(timezone.utc)
    if isinstance(value, datetime):
        ts = value
    else:
        try:
            ts = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError:
            raise InvalidMomentError(f"Invalid timestamp {value!r} (expected ISO 8601)") from None
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts
