"""Host metrics collector for Linux devices.

Reads battery, storage, network, memory, CPU, and thermal values from the
running host and assembles them into a DeviceHealthSnapshot. Every reader
substitutes a safe default instead of raising, so a snapshot is always
produced.
"""

import contextlib
import shutil
import time
from datetime import date
from pathlib import Path
from typing import Iterator, Optional, Tuple

import httpx
import structlog

from safe_update.config.settings import SafeUpdateSettings
from safe_update.models.snapshot import DeviceHealthSnapshot

log = structlog.get_logger()

# Battery level assumed for hosts without a battery (mains powered)
NO_BATTERY_LEVEL = 100


def _clamp_percent(value: float) -> int:
    """Clamp a percentage to [0, 100] and truncate to int."""
    return int(min(max(value, 0.0), 100.0))


def _read_text(path: Path) -> str:
    return path.read_text().strip()


def parse_cpu_times(stat_text: str) -> Tuple[int, int]:
    """Parse the aggregate cpu line of /proc/stat.

    Args:
        stat_text: Contents of /proc/stat

    Returns:
        Tuple of (idle, total) jiffies, where idle includes iowait

    Raises:
        ValueError: If the aggregate cpu line is missing or malformed
    """
    for line in stat_text.splitlines():
        parts = line.split()
        if parts and parts[0] == "cpu":
            values = [int(v) for v in parts[1:]]
            if len(values) < 5:
                raise ValueError("cpu line has fewer than 5 fields")
            idle = values[3] + values[4]
            return idle, sum(values)
    raise ValueError("no aggregate cpu line in /proc/stat")


def parse_meminfo(meminfo_text: str) -> float:
    """Compute used-memory percent from /proc/meminfo contents.

    Raises:
        ValueError: If MemTotal or MemAvailable is missing or MemTotal is 0
    """
    fields = {}
    for line in meminfo_text.splitlines():
        key, _, rest = line.partition(":")
        parts = rest.split()
        if parts:
            fields[key.strip()] = int(parts[0])

    total = fields.get("MemTotal")
    available = fields.get("MemAvailable")
    if not total or available is None:
        raise ValueError("MemTotal/MemAvailable not found in /proc/meminfo")
    return (total - available) / total * 100


class HostMetricsCollector:
    """Collector that builds a DeviceHealthSnapshot from the local host."""

    def __init__(
        self,
        settings: SafeUpdateSettings,
        http_client: Optional[httpx.Client] = None,
    ):
        """Initialize the collector.

        Args:
            settings: Configuration with metric source paths and probe settings
            http_client: Optional httpx client for the network probe and
                speed test. A short-lived client is created per call when omitted.
        """
        self._settings = settings
        self._http_client = http_client
        self._proc = Path(settings.proc_path)
        self._power_supply = Path(settings.power_supply_path)
        self._thermal_zone = Path(settings.thermal_zone_path)

    def collect(self) -> DeviceHealthSnapshot:
        """Read every metric and return a populated snapshot."""
        battery_temperature = self.read_battery_temperature()

        snapshot = DeviceHealthSnapshot(
            battery_level=self.read_battery_level(),
            battery_temperature=battery_temperature,
            storage_free_percent=self.read_storage_free_percent(),
            is_network_stable=self.check_network(),
            device_age_score=self.read_device_age(),
            ram_usage_percent=self.read_ram_usage_percent(),
            cpu_load_percent=self.read_cpu_load_percent(),
            cpu_temperature=self.read_cpu_temperature(battery_temperature),
        )
        log.info("metrics_collected", **snapshot.to_dict())
        return snapshot

    def read_battery_level(self) -> int:
        """Read battery charge percent.

        Hosts without a battery report NO_BATTERY_LEVEL.
        """
        capacity = self._power_supply / "capacity"
        if not capacity.exists():
            log.info("battery_not_present", path=str(capacity))
            return NO_BATTERY_LEVEL

        try:
            return _clamp_percent(float(_read_text(capacity)))
        except (OSError, ValueError) as e:
            log.warning("battery_unavailable", path=str(capacity), error=str(e))
            return 0

    def read_battery_temperature(self) -> float:
        """Read battery temperature in Celsius (sysfs reports tenths)."""
        temp = self._power_supply / "temp"
        if not temp.exists():
            return 0.0

        try:
            return max(float(_read_text(temp)) / 10.0, 0.0)
        except (OSError, ValueError) as e:
            log.warning("battery_temperature_unavailable", path=str(temp), error=str(e))
            return 0.0

    def read_storage_free_percent(self) -> int:
        """Read free space percent of the configured filesystem."""
        try:
            usage = shutil.disk_usage(self._settings.storage_path)
        except OSError as e:
            log.warning(
                "storage_unavailable",
                path=self._settings.storage_path,
                error=str(e),
            )
            return 0

        if usage.total == 0:
            return 0
        return _clamp_percent(usage.free / usage.total * 100)

    @contextlib.contextmanager
    def _client(self) -> Iterator[httpx.Client]:
        """Yield the injected client, or a short-lived one."""
        if self._http_client is not None:
            yield self._http_client
        else:
            with httpx.Client(follow_redirects=True) as client:
                yield client

    def check_network(self) -> bool:
        """Probe the configured URL to verify internet capability."""
        url = self._settings.network_check_url
        timeout = self._settings.network_timeout

        try:
            with self._client() as client:
                response = client.get(url, timeout=timeout, follow_redirects=True)
        except httpx.HTTPError as e:
            log.warning("network_probe_failed", url=url, error=str(e))
            return False

        stable = response.status_code < 400
        if not stable:
            log.warning("network_probe_rejected", url=url, status_code=response.status_code)
        return stable

    def measure_network_speed(self) -> Optional[float]:
        """Estimate download throughput in Mbps.

        Streams speed_test_url until speed_test_max_bytes have arrived or the
        body ends. Best effort: returns None on any HTTP error or when no
        measurable data arrived. The value is informational and never feeds
        the snapshot.
        """
        url = self._settings.speed_test_url
        max_bytes = self._settings.speed_test_max_bytes
        downloaded = 0

        try:
            with self._client() as client:
                with client.stream(
                    "GET",
                    url,
                    timeout=self._settings.network_timeout,
                    follow_redirects=True,
                ) as response:
                    response.raise_for_status()
                    started = time.monotonic()
                    for chunk in response.iter_bytes():
                        downloaded += len(chunk)
                        if downloaded >= max_bytes:
                            break
                    elapsed = time.monotonic() - started
        except httpx.HTTPError as e:
            log.warning("speed_test_failed", url=url, error=str(e))
            return None

        if downloaded == 0 or elapsed <= 0:
            log.warning("speed_test_inconclusive", url=url, bytes=downloaded)
            return None

        mbps = downloaded * 8 / 1024.0 / 1024.0 / elapsed
        log.info(
            "speed_test_complete",
            bytes=downloaded,
            seconds=round(elapsed, 3),
            mbps=round(mbps, 2),
        )
        return mbps

    def read_device_age(self, today: Optional[date] = None) -> int:
        """Compute device age in whole years from the configured build date.

        Returns 0 when no build date is configured or it lies in the future.
        """
        build_date = self._settings.device_build_date
        if build_date is None:
            log.debug("device_build_date_not_configured")
            return 0

        today = today or date.today()
        return max((today - build_date).days // 365, 0)

    def read_ram_usage_percent(self) -> int:
        """Read used-memory percent from /proc/meminfo."""
        meminfo = self._proc / "meminfo"
        try:
            return _clamp_percent(parse_meminfo(_read_text(meminfo)))
        except (OSError, ValueError) as e:
            log.warning("ram_usage_unavailable", path=str(meminfo), error=str(e))
            return 0

    def read_cpu_load_percent(self) -> int:
        """Sample /proc/stat twice and compute busy percent over the interval."""
        stat = self._proc / "stat"
        try:
            idle1, total1 = parse_cpu_times(_read_text(stat))
            time.sleep(self._settings.cpu_sample_interval)
            idle2, total2 = parse_cpu_times(_read_text(stat))
        except (OSError, ValueError) as e:
            log.warning("cpu_load_unavailable", path=str(stat), error=str(e))
            return 0

        total_delta = total2 - total1
        if total_delta <= 0:
            return 0
        return _clamp_percent((1.0 - (idle2 - idle1) / total_delta) * 100)

    def read_cpu_temperature(self, battery_temperature: float = 0.0) -> float:
        """Read CPU temperature in Celsius.

        Sysfs thermal zones report millidegrees; values above 1000 are
        scaled down. Falls back to battery_temperature when the thermal
        zone is absent.
        """
        if not self._thermal_zone.exists():
            log.debug(
                "thermal_zone_missing",
                path=str(self._thermal_zone),
                fallback=battery_temperature,
            )
            return battery_temperature

        try:
            temp = float(_read_text(self._thermal_zone))
        except (OSError, ValueError) as e:
            log.warning(
                "cpu_temperature_unavailable",
                path=str(self._thermal_zone),
                error=str(e),
            )
            return 0.0

        if temp > 1000:
            temp = temp / 1000.0
        return max(temp, 0.0)

