"""Tests for ReportGenerator text and JSON rendering."""

import json

import pytest

from safe_update.models import DeviceHealthSnapshot
from safe_update.readiness import evaluate
from safe_update.reports import ReportGenerator


@pytest.fixture
def generator():
    return ReportGenerator()


@pytest.fixture
def risky_snapshot():
    return DeviceHealthSnapshot(
        battery_level=60,
        battery_temperature=30.0,
        storage_free_percent=50,
        is_network_stable=True,
        device_age_score=3,
        ram_usage_percent=50,
        cpu_load_percent=60,
        cpu_temperature=75.0,
    )


class TestGenerateText:
    """Tests for ReportGenerator.generate_text()."""

    def test_safe_report(self, generator, healthy_snapshot):
        text = generator.generate_text(evaluate(healthy_snapshot))

        assert "Update Readiness Report" in text
        assert "Score:  100" in text
        assert "Status: Safe" in text
        assert "No issues found" in text
        assert "Suggestions" not in text

    def test_risky_report_lists_suggestions_in_order(self, generator, risky_snapshot):
        text = generator.generate_text(evaluate(risky_snapshot))

        assert "Score:  40" in text
        assert "Status: Risky" in text
        first = text.index("- Device is 3 years old; consider updating apps first (-30)")
        second = text.index("- CPU under load; wait before updating (-15)")
        third = text.index("- CPU is warm; consider waiting (-15)")
        assert first < second < third

    def test_snapshot_section_included_when_given(self, generator, risky_snapshot):
        text = generator.generate_text(evaluate(risky_snapshot), snapshot=risky_snapshot)

        assert "Device Health" in text
        assert "Battery:          60% at 30.0C" in text
        assert "Network:          stable" in text
        assert "Device age:       3 years" in text
        assert "CPU temperature:  75.0C" in text

    def test_snapshot_section_omitted_by_default(self, generator, risky_snapshot):
        assert "Device Health" not in generator.generate_text(evaluate(risky_snapshot))

    def test_custom_title(self, healthy_snapshot):
        text = ReportGenerator(report_title="Phone Check").generate_text(evaluate(healthy_snapshot))

        assert text.startswith("Phone Check\n===========")

    def test_network_speed_line(self, generator, healthy_snapshot):
        text = generator.generate_text(evaluate(healthy_snapshot), network_speed_mbps=8.0)

        assert "Network speed: 8.00 Mbps" in text

    def test_network_speed_omitted_when_unmeasured(self, generator, healthy_snapshot):
        assert "Network speed" not in generator.generate_text(evaluate(healthy_snapshot))


class TestGenerateJson:
    """Tests for ReportGenerator.generate_json()."""

    def test_json_verdict(self, generator, risky_snapshot):
        data = json.loads(generator.generate_json(evaluate(risky_snapshot)))

        assert data["score"] == 40
        assert data["status"] == "Risky"
        assert len(data["suggestions"]) == 3
        assert "snapshot" not in data

    def test_json_includes_snapshot(self, generator, risky_snapshot):
        data = json.loads(generator.generate_json(evaluate(risky_snapshot), snapshot=risky_snapshot))

        assert data["snapshot"]["device_age_score"] == 3
        assert data["snapshot"]["is_network_stable"] is True

    def test_json_network_speed_rounded(self, generator, healthy_snapshot):
        data = json.loads(
            generator.generate_json(evaluate(healthy_snapshot), network_speed_mbps=8.23456)
        )

        assert data["network_speed_mbps"] == 8.23
        assert data["score"] == 100

    def test_json_network_speed_omitted_when_unmeasured(self, generator, healthy_snapshot):
        assert "network_speed_mbps" not in json.loads(
            generator.generate_json(evaluate(healthy_snapshot))
        )


class TestGenerate:
    """Tests for format dispatch."""

    def test_dispatch_json(self, generator, healthy_snapshot):
        output = generator.generate(evaluate(healthy_snapshot), "json")
        assert json.loads(output)["status"] == "Safe"

    def test_dispatch_text(self, generator, healthy_snapshot):
        assert "Status: Safe" in generator.generate(evaluate(healthy_snapshot), "text")

    def test_unknown_format_raises(self, generator, healthy_snapshot):
        with pytest.raises(ValueError):
            generator.generate(evaluate(healthy_snapshot), "html")
