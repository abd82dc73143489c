"""Tests for impact resolution: static (type, intensity) delta tables."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from lifemirror.domains.twin.domain_logic.impact_resolver import (
    IMPACT_TABLE,
    WHAT_IF_TABLE,
    create_moment,
    resolve_impact,
    resolve_what_if_impact,
    table_as_dict,
)
from lifemirror.domains.twin.domain_logic.moment_models import Intensity, Metric, MomentType


class TestResolveImpact:
    def test_poor_sleep(self):
        impact = resolve_impact(MomentType.SLEEP, Intensity.POOR)
        assert impact == {
            Metric.ENERGY: -25,
            Metric.STRESS_LEVEL: 15,
            Metric.GLUCOSE_STRESS: 10,
        }

    def test_high_activity_touches_four_metrics(self):
        impact = resolve_impact(MomentType.ACTIVITY, Intensity.HIGH)
        assert impact == {
            Metric.ENERGY: 20,
            Metric.STRESS_LEVEL: -15,
            Metric.GLUCOSE_STRESS: -10,
            Metric.INSULIN_WORKLOAD: -5,
        }

    def test_low_diet_builds_momentum(self):
        impact = resolve_impact(MomentType.DIET, Intensity.LOW)
        assert impact[Metric.ADHERENCE_MOMENTUM] == 8

    def test_unknown_pairing_is_empty(self):
        assert resolve_impact(MomentType.DIET, Intensity.POSITIVE) == {}

    def test_skipped_activity_has_no_real_impact(self):
        assert resolve_impact(MomentType.ACTIVITY, Intensity.SKIPPED) == {}

    @pytest.mark.parametrize("moment_type", list(MomentType))
    @pytest.mark.parametrize("intensity", list(Intensity))
    def test_every_pairing_resolves_without_error(self, moment_type, intensity):
        impact = resolve_impact(moment_type, intensity)
        assert all(isinstance(m, Metric) for m in impact)

    def test_returned_vector_is_a_copy(self):
        impact = resolve_impact(MomentType.STRESS, Intensity.HIGH)
        impact[Metric.STRESS_LEVEL] = 999
        assert IMPACT_TABLE[MomentType.STRESS][Intensity.HIGH][Metric.STRESS_LEVEL] == 30


class TestResolveWhatIfImpact:
    def test_is_a_separate_table(self):
        real = resolve_impact(MomentType.DIET, Intensity.HIGH)
        what_if = resolve_what_if_impact(MomentType.DIET, Intensity.HIGH)
        assert real[Metric.GLUCOSE_STRESS] == 25
        assert what_if[Metric.GLUCOSE_STRESS] == -15

    def test_skipped_activity_has_counterfactual(self):
        assert resolve_what_if_impact(MomentType.ACTIVITY, Intensity.SKIPPED) == {
            Metric.ENERGY: 15,
            Metric.ADHERENCE_MOMENTUM: 15,
        }

    def test_unknown_pairing_is_empty(self):
        assert resolve_what_if_impact(MomentType.EMOTIONAL, Intensity.POSITIVE) == {}


class TestCreateMoment:
    def test_impact_resolved_at_creation(self):
        ts = datetime(2026, 3, 1, 8, tzinfo=timezone.utc)
        moment = create_moment(MomentType.STRESS, Intensity.HIGH, "deadline", ts)
        assert moment.impact == resolve_impact(MomentType.STRESS, Intensity.HIGH)
        assert moment.timestamp == ts
        assert moment.id

    def test_explicit_id_kept(self):
        ts = datetime(2026, 3, 1, tzinfo=timezone.utc)
        moment = create_moment(MomentType.SLEEP, Intensity.POOR, "", ts, moment_id="m-1")
        assert moment.id == "m-1"

    def test_ids_are_unique(self):
        ts = datetime(2026, 3, 1, tzinfo=timezone.utc)
        ids = {create_moment(MomentType.DIET, Intensity.LOW, "", ts).id for _ in range(20)}
        assert len(ids) == 20


def test_table_as_dict_uses_wire_names():
    table = table_as_dict(WHAT_IF_TABLE)
    assert table["stress"]["high"] == {"stressLevel": -15, "energy": 5}
