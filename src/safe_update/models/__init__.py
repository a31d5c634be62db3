"""Data models for Safe Update."""

from .enums import PenaltyCategory, ReadinessStatus
from .readiness import Penalty, UpdateReadiness
from .snapshot import DeviceHealthSnapshot, SnapshotError, load_snapshot_file

__all__ = [
    "DeviceHealthSnapshot",
    "Penalty",
    "PenaltyCategory",
    "ReadinessStatus",
    "SnapshotError",
    "UpdateReadiness",
    "load_snapshot_file",
]
