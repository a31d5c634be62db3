"""Penalty rules for update-readiness scoring.

Each rule is a pure function that inspects one metric of a snapshot and
returns a Penalty when its condition holds, or None otherwise. Rules are
independent of each other; DEFAULT_RULES fixes the order in which their
suggestions are reported.
"""

from typing import Callable, List, Optional

from safe_update.models.enums import PenaltyCategory
from safe_update.models.readiness import Penalty
from safe_update.models.snapshot import DeviceHealthSnapshot
from safe_update.readiness.thresholds import ReadinessThresholds

PenaltyRule = Callable[[DeviceHealthSnapshot, ReadinessThresholds], Optional[Penalty]]


# Suggestion text by category
_SUGGESTIONS = {
    "battery_level": "Charge battery to at least 50%",
    "battery_temperature": "Cool down device before updating",
    "storage": "Free up storage space",
    "network": "Connect to a stable network",
    "ram": "High RAM usage may slow down update",
    "cpu_load": {
        "warning": "CPU under load; wait before updating",
        "critical": "CPU heavily loaded; consider closing apps",
    },
    "cpu_temperature": {
        "warning": "CPU is warm; consider waiting",
        "critical": "CPU is very hot; cool down before updating",
    },
}

_AGE_SUGGESTIONS = {
    2: "Device is 2 years old; minor caution advised",
    3: "Device is 3 years old; consider updating apps first",
    4: "Device is 4 years old; update only essential apps",
}
_AGE_FALLBACK_SUGGESTION = "Device is 5+ years old; updating may cause issues"


def check_battery_level(
    snapshot: DeviceHealthSnapshot, thresholds: ReadinessThresholds
) -> Optional[Penalty]:
    """Penalize a battery charged below the minimum level."""
    if snapshot.battery_level < thresholds.battery_min:
        return Penalty(
            category=PenaltyCategory.BATTERY_LEVEL,
            points=thresholds.battery_penalty,
            suggestion=_SUGGESTIONS["battery_level"],
        )
    return None


def check_battery_temperature(
    snapshot: DeviceHealthSnapshot, thresholds: ReadinessThresholds
) -> Optional[Penalty]:
    """Penalize a hot battery."""
    if snapshot.battery_temperature > thresholds.battery_temp_max:
        return Penalty(
            category=PenaltyCategory.BATTERY_TEMPERATURE,
            points=thresholds.battery_temp_penalty,
            suggestion=_SUGGESTIONS["battery_temperature"],
        )
    return None


def check_storage(
    snapshot: DeviceHealthSnapshot, thresholds: ReadinessThresholds
) -> Optional[Penalty]:
    """Penalize low free storage."""
    if snapshot.storage_free_percent < thresholds.storage_min:
        return Penalty(
            category=PenaltyCategory.STORAGE,
            points=thresholds.storage_penalty,
            suggestion=_SUGGESTIONS["storage"],
        )
    return None


def check_network(
    snapshot: DeviceHealthSnapshot, thresholds: ReadinessThresholds
) -> Optional[Penalty]:
    """Penalize a device without verified internet capability."""
    if not snapshot.is_network_stable:
        return Penalty(
            category=PenaltyCategory.NETWORK,
            points=thresholds.network_penalty,
            suggestion=_SUGGESTIONS["network"],
        )
    return None


def check_device_age(
    snapshot: DeviceHealthSnapshot, thresholds: ReadinessThresholds
) -> Optional[Penalty]:
    """Penalize older devices by whole-year tier.

    Ages inside the age_penalties table use their own tier; every other age
    falls into the flat fallback tier.
    """
    age = snapshot.device_age_score

    if 0 <= age < len(thresholds.age_penalties):
        points = thresholds.age_penalties[age]
        if points <= 0:
            return None
        suggestion = _AGE_SUGGESTIONS.get(age, f"Device is {age} years old")
    else:
        points = thresholds.age_fallback_penalty
        suggestion = _AGE_FALLBACK_SUGGESTION

    return Penalty(
        category=PenaltyCategory.DEVICE_AGE,
        points=points,
        suggestion=suggestion,
    )


def check_ram(
    snapshot: DeviceHealthSnapshot, thresholds: ReadinessThresholds
) -> Optional[Penalty]:
    """Penalize high RAM usage."""
    if snapshot.ram_usage_percent > thresholds.ram_max:
        return Penalty(
            category=PenaltyCategory.RAM,
            points=thresholds.ram_penalty,
            suggestion=_SUGGESTIONS["ram"],
        )
    return None


def check_cpu_load(
    snapshot: DeviceHealthSnapshot, thresholds: ReadinessThresholds
) -> Optional[Penalty]:
    """Penalize CPU load, critical tier first."""
    load = snapshot.cpu_load_percent

    if load > thresholds.cpu_load_critical:
        return Penalty(
            category=PenaltyCategory.CPU_LOAD,
            points=thresholds.cpu_load_critical_penalty,
            suggestion=_SUGGESTIONS["cpu_load"]["critical"],
        )

    if load > thresholds.cpu_load_warning:
        return Penalty(
            category=PenaltyCategory.CPU_LOAD,
            points=thresholds.cpu_load_warning_penalty,
            suggestion=_SUGGESTIONS["cpu_load"]["warning"],
        )

    return None


def check_cpu_temperature(
    snapshot: DeviceHealthSnapshot, thresholds: ReadinessThresholds
) -> Optional[Penalty]:
    """Penalize CPU temperature, critical tier first."""
    temp = snapshot.cpu_temperature

    if temp > thresholds.cpu_temp_critical:
        return Penalty(
            category=PenaltyCategory.CPU_TEMPERATURE,
            points=thresholds.cpu_temp_critical_penalty,
            suggestion=_SUGGESTIONS["cpu_temperature"]["critical"],
        )

    if temp > thresholds.cpu_temp_warning:
        return Penalty(
            category=PenaltyCategory.CPU_TEMPERATURE,
            points=thresholds.cpu_temp_warning_penalty,
            suggestion=_SUGGESTIONS["cpu_temperature"]["warning"],
        )

    return None


DEFAULT_RULES: List[PenaltyRule] = [
    check_battery_level,
    check_battery_temperature,
    check_storage,
    check_network,
    check_device_age,
    check_ram,
    check_cpu_load,
    check_cpu_temperature,
]
