"""Device health snapshot model and loaders.

Provides the immutable pydantic model handed to the readiness evaluator,
plus factories for building it from raw mappings and YAML/JSON files.
"""

import json
from pathlib import Path
from typing import Any, Dict, Mapping, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError


class SnapshotError(ValueError):
    """Raised when a snapshot cannot be built from the supplied data."""

    pass


# Fields the collector may leave unset; they default to 0
OPTIONAL_FIELDS = ("ram_usage_percent", "cpu_load_percent", "cpu_temperature")


class DeviceHealthSnapshot(BaseModel):
    """Point-in-time capture of device health metrics.

    Bounds are enforced on construction. The evaluator trusts a constructed
    snapshot and never re-validates it.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    battery_level: int = Field(
        ..., ge=0, le=100, alias="batteryLevel", description="Battery charge percent"
    )
    battery_temperature: float = Field(
        ..., ge=0.0, alias="batteryTemperature", description="Battery temperature in Celsius"
    )
    storage_free_percent: int = Field(
        ..., ge=0, le=100, alias="storageFreePercent", description="Free storage percent"
    )
    is_network_stable: bool = Field(
        ..., alias="isNetworkStable", description="Whether internet capability was verified"
    )
    device_age_score: int = Field(
        ..., ge=0, alias="deviceAgeScore", description="Device age in whole years"
    )

    # Optional metrics (0 when the collector could not read them)
    ram_usage_percent: int = Field(
        default=0, ge=0, le=100, alias="ramUsagePercent", description="RAM usage percent"
    )
    cpu_load_percent: int = Field(
        default=0, ge=0, le=100, alias="cpuLoadPercent", description="CPU load percent"
    )
    cpu_temperature: float = Field(
        default=0.0, ge=0.0, alias="cpuTemperature", description="CPU temperature in Celsius"
    )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "DeviceHealthSnapshot":
        """Build a snapshot from a raw mapping.

        Accepts snake_case or camelCase keys. Keys whose value is None are
        dropped so optional metrics fall back to their defaults.

        Args:
            data: Raw metric values keyed by field name

        Returns:
            Validated DeviceHealthSnapshot

        Raises:
            SnapshotError: If a required field is missing or a value is invalid
        """
        if not isinstance(data, Mapping):
            raise SnapshotError(
                f"Snapshot data must be a mapping, got {type(data).__name__}"
            )

        cleaned = {key: value for key, value in data.items() if value is not None}
        try:
            return cls.model_validate(cleaned)
        except ValidationError as e:
            raise SnapshotError(_format_errors(e)) from e

    def to_dict(self) -> Dict[str, Any]:
        """Return the snapshot as a plain snake_case dict."""
        return self.model_dump()


def _format_errors(error: ValidationError) -> str:
    """Collapse pydantic validation errors into one readable message."""
    parts = []
    for item in error.errors():
        loc = ".".join(str(part) for part in item.get("loc", []))
        parts.append(f"'{loc}' {item.get('msg', 'invalid value')}")
    return "Invalid snapshot: " + "; ".join(parts)


def load_snapshot_file(path: Union[str, Path]) -> DeviceHealthSnapshot:
    """Load a snapshot from a YAML or JSON file.

    Files ending in .json are parsed as JSON, anything else as YAML.

    Args:
        path: Path to the snapshot file

    Returns:
        Validated DeviceHealthSnapshot

    Raises:
        SnapshotError: If the file is missing, unreadable, or invalid
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise SnapshotError(f"Snapshot file not found: {path}")
    except PermissionError:
        raise SnapshotError(f"Cannot read snapshot file {path}: permission denied")
    except UnicodeDecodeError as e:
        raise SnapshotError(f"Snapshot file {path} is not valid UTF-8: {e}")
    except OSError as e:
        raise SnapshotError(f"Cannot read snapshot file {path}: {e}")

    try:
        if path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise SnapshotError(f"Cannot parse snapshot file {path}: {e}")

    if data is None:
        raise SnapshotError(f"Snapshot file is empty: {path}")

    return DeviceHealthSnapshot.from_mapping(data)
