"""Shared enumerations for the Safe Update models."""

from enum import Enum


class ReadinessStatus(str, Enum):
    """Categorical update-readiness verdict."""

    SAFE = "Safe"
    WARNING = "Warning"
    RISKY = "Risky"


class PenaltyCategory(str, Enum):
    """Health metric a penalty rule checks."""

    BATTERY_LEVEL = "battery_level"
    BATTERY_TEMPERATURE = "battery_temperature"
    STORAGE = "storage"
    NETWORK = "network"
    DEVICE_AGE = "device_age"
    RAM = "ram"
    CPU_LOAD = "cpu_load"
    CPU_TEMPERATURE = "cpu_temperature"
