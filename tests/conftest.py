"""Shared pytest fixtures."""

import pytest
import structlog


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
    """Keep CONFIG_PATH and structlog configuration from leaking between tests."""
    monkeypatch.setenv("CONFIG_PATH", "")
    yield
    structlog.reset_defaults()


@pytest.fixture
def healthy_snapshot():
    """Snapshot that triggers no penalty."""
    from safe_update.models import DeviceHealthSnapshot

    return DeviceHealthSnapshot(
        battery_level=100,
        battery_temperature=25.0,
        storage_free_percent=50,
        is_network_stable=True,
        device_age_score=0,
        ram_usage_percent=10,
        cpu_load_percent=10,
        cpu_temperature=20.0,
    )
