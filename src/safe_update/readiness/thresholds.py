"""Readiness threshold configuration.

Defines the limits, penalty points, and classification cut-offs used by the
readiness penalty rules.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class ReadinessThresholds:
    """Static thresholds for update-readiness scoring.

    "min" thresholds use < comparison (value < min triggers a penalty),
    "max"/"warning"/"critical" thresholds use > comparison.

    Attributes:
        battery_min: Minimum battery charge percent
        battery_temp_max: Maximum battery temperature in Celsius
        storage_min: Minimum free storage percent
        age_penalties: Penalty points indexed by device age in years
        age_fallback_penalty: Penalty for ages beyond the age_penalties table
        ram_max: Maximum RAM usage percent
        cpu_load_warning: CPU load percent for the minor penalty
        cpu_load_critical: CPU load percent for the major penalty
        cpu_temp_warning: CPU temperature for the minor penalty
        cpu_temp_critical: CPU temperature for the major penalty
        safe_min_score: Lowest score still classified Safe
        warning_min_score: Lowest score still classified Warning
    """

    # Battery
    battery_min: int = 50
    battery_penalty: int = 30
    battery_temp_max: float = 40.0
    battery_temp_penalty: int = 20

    # Storage and network
    storage_min: int = 20
    storage_penalty: int = 20
    network_penalty: int = 20

    # Device age (years 0..4, then a flat fallback)
    age_penalties: Tuple[int, ...] = (0, 0, 15, 30, 45)
    age_fallback_penalty: int = 60

    # Memory
    ram_max: int = 80
    ram_penalty: int = 30

    # CPU load (percent)
    cpu_load_warning: int = 50
    cpu_load_warning_penalty: int = 15
    cpu_load_critical: int = 80
    cpu_load_critical_penalty: int = 30

    # CPU temperature (Celsius)
    cpu_temp_warning: float = 70.0
    cpu_temp_warning_penalty: int = 15
    cpu_temp_critical: float = 80.0
    cpu_temp_critical_penalty: int = 30

    # Classification
    initial_score: int = 100
    safe_min_score: int = 80
    warning_min_score: int = 50


# Default thresholds for production use
DEFAULT_THRESHOLDS = ReadinessThresholds()
