"""Tests for ReadinessEvaluator scoring and classification."""

import random

import pytest

from safe_update.models import DeviceHealthSnapshot, ReadinessStatus, UpdateReadiness
from safe_update.readiness import (
    DEFAULT_RULES,
    DEFAULT_THRESHOLDS,
    ReadinessEvaluator,
    ReadinessThresholds,
    classify,
    evaluate,
)

ALL_SUGGESTIONS = [
    "Charge battery to at least 50%",
    "Cool down device before updating",
    "Free up storage space",
    "Connect to a stable network",
    "Device is 5+ years old; updating may cause issues",
    "High RAM usage may slow down update",
    "CPU heavily loaded; consider closing apps",
    "CPU is very hot; cool down before updating",
]


@pytest.fixture
def worst_snapshot():
    """Snapshot that fires every penalty rule at its highest tier."""
    return DeviceHealthSnapshot(
        battery_level=30,
        battery_temperature=45.0,
        storage_free_percent=10,
        is_network_stable=False,
        device_age_score=5,
        ram_usage_percent=90,
        cpu_load_percent=90,
        cpu_temperature=90.0,
    )


class TestReadinessThresholds:
    """Tests for ReadinessThresholds dataclass."""

    def test_default_thresholds_have_expected_values(self):
        assert DEFAULT_THRESHOLDS.battery_min == 50
        assert DEFAULT_THRESHOLDS.battery_temp_max == 40.0
        assert DEFAULT_THRESHOLDS.storage_min == 20
        assert DEFAULT_THRESHOLDS.age_penalties == (0, 0, 15, 30, 45)
        assert DEFAULT_THRESHOLDS.age_fallback_penalty == 60
        assert DEFAULT_THRESHOLDS.ram_max == 80
        assert DEFAULT_THRESHOLDS.cpu_load_warning == 50
        assert DEFAULT_THRESHOLDS.cpu_load_critical == 80
        assert DEFAULT_THRESHOLDS.cpu_temp_warning == 70.0
        assert DEFAULT_THRESHOLDS.cpu_temp_critical == 80.0
        assert DEFAULT_THRESHOLDS.safe_min_score == 80
        assert DEFAULT_THRESHOLDS.warning_min_score == 50

    def test_thresholds_are_frozen(self):
        with pytest.raises(Exception):  # FrozenInstanceError
            DEFAULT_THRESHOLDS.battery_min = 10


class TestClassification:
    """Tests for score to status classification."""

    @pytest.mark.parametrize(
        "score,status",
        [
            (100, ReadinessStatus.SAFE),
            (80, ReadinessStatus.SAFE),
            (79, ReadinessStatus.WARNING),
            (50, ReadinessStatus.WARNING),
            (49, ReadinessStatus.RISKY),
            (0, ReadinessStatus.RISKY),
            (-140, ReadinessStatus.RISKY),
        ],
    )
    def test_status_thresholds(self, score, status):
        assert classify(score) == status


class TestEvaluatorScenarios:
    """End-to-end scenarios for ReadinessEvaluator.evaluate()."""

    def test_healthy_device_is_safe(self, healthy_snapshot):
        verdict = ReadinessEvaluator().evaluate(healthy_snapshot)

        assert verdict.score == 100
        assert verdict.status == ReadinessStatus.SAFE
        assert verdict.suggestions == []
        assert verdict.penalties == []
        assert verdict.is_safe is True

    def test_all_penalties_fire_and_score_goes_negative(self, worst_snapshot):
        verdict = ReadinessEvaluator().evaluate(worst_snapshot)

        assert verdict.score == -140
        assert verdict.status == ReadinessStatus.RISKY
        assert verdict.suggestions == ALL_SUGGESTIONS
        assert verdict.is_safe is False

    def test_aging_busy_warm_device_is_risky(self):
        snapshot = DeviceHealthSnapshot(
            battery_level=60,
            battery_temperature=30.0,
            storage_free_percent=50,
            is_network_stable=True,
            device_age_score=3,
            ram_usage_percent=50,
            cpu_load_percent=60,
            cpu_temperature=75.0,
        )

        verdict = evaluate(snapshot)

        assert verdict.score == 40
        assert verdict.status == ReadinessStatus.RISKY
        assert verdict.suggestions == [
            "Device is 3 years old; consider updating apps first",
            "CPU under load; wait before updating",
            "CPU is warm; consider waiting",
        ]

    def test_single_minor_penalty_is_safe(self, healthy_snapshot):
        verdict = evaluate(healthy_snapshot.model_copy(update={"device_age_score": 2}))

        assert verdict.score == 85
        assert verdict.status == ReadinessStatus.SAFE

    def test_two_penalties_give_warning(self, healthy_snapshot):
        snapshot = healthy_snapshot.model_copy(
            update={"storage_free_percent": 5, "is_network_stable": False}
        )

        verdict = evaluate(snapshot)

        assert verdict.score == 60
        assert verdict.status == ReadinessStatus.WARNING
        assert verdict.suggestions == ["Free up storage space", "Connect to a stable network"]

    def test_boundary_zero_values_do_not_fail(self):
        snapshot = DeviceHealthSnapshot(
            battery_level=0,
            battery_temperature=0.0,
            storage_free_percent=0,
            is_network_stable=True,
            device_age_score=0,
        )

        verdict = evaluate(snapshot)

        assert verdict.score == 50
        assert verdict.status == ReadinessStatus.WARNING

    def test_evaluation_is_deterministic(self, worst_snapshot):
        evaluator = ReadinessEvaluator()
        assert evaluator.evaluate(worst_snapshot) == evaluator.evaluate(worst_snapshot)


class TestPenaltyAdditivity:
    """Score does not depend on rule order; only suggestion order does."""

    def test_score_independent_of_rule_order(self, worst_snapshot):
        expected = ReadinessEvaluator().evaluate(worst_snapshot).score
        rng = random.Random(1234)

        for _ in range(20):
            rules = list(DEFAULT_RULES)
            rng.shuffle(rules)
            verdict = ReadinessEvaluator(rules=rules).evaluate(worst_snapshot)
            assert verdict.score == expected
            assert sorted(verdict.suggestions) == sorted(ALL_SUGGESTIONS)

    def test_score_equals_initial_minus_sum_of_points(self, worst_snapshot):
        verdict = evaluate(worst_snapshot)
        assert verdict.score == 100 - sum(p.points for p in verdict.penalties)


class TestCustomEvaluator:
    """Tests for custom thresholds and rule lists."""

    def test_custom_thresholds_change_outcome(self, healthy_snapshot):
        strict = ReadinessThresholds(battery_min=101)

        verdict = ReadinessEvaluator(thresholds=strict).evaluate(healthy_snapshot)

        assert verdict.score == 70
        assert verdict.suggestions == ["Charge battery to at least 50%"]

    def test_empty_rule_list_always_safe(self, worst_snapshot):
        verdict = ReadinessEvaluator(rules=[]).evaluate(worst_snapshot)

        assert verdict.score == 100
        assert verdict.status == ReadinessStatus.SAFE

    def test_thresholds_property_defaults(self):
        assert ReadinessEvaluator().thresholds is DEFAULT_THRESHOLDS


class TestUpdateReadinessModel:
    """Tests for UpdateReadiness serialization."""

    def test_to_dict(self, worst_snapshot):
        data = evaluate(worst_snapshot).to_dict()

        assert data["score"] == -140
        assert data["status"] == "Risky"
        assert data["suggestions"] == ALL_SUGGESTIONS
        assert data["penalties"][0] == {
            "category": "battery_level",
            "points": 30,
            "suggestion": "Charge battery to at least 50%",
        }

    def test_verdict_is_frozen(self):
        verdict = UpdateReadiness(score=100, status=ReadinessStatus.SAFE)
        with pytest.raises(Exception):
            verdict.score = 0
