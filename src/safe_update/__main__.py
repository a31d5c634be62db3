"""
Entry point for the safe-update CLI.

Usage:
    safe-update                         Collect host metrics and print a verdict
    safe-update --snapshot FILE         Evaluate a snapshot from a YAML/JSON file
    safe-update --format json           Print the verdict as JSON
    safe-update --fail-on warning       Exit non-zero unless the device is Safe
    safe-update --version               Show version and exit

Exit Codes:
    0 - Success
    1 - Configuration error (invalid settings, unreadable config file)
    2 - Snapshot error (missing or invalid snapshot file)
    4 - Device not ready (verdict at or below the --fail-on level)
"""

from __future__ import annotations

import argparse
import sys
from typing import TYPE_CHECKING, Optional, Sequence

if TYPE_CHECKING:
    from safe_update.models.enums import ReadinessStatus

from safe_update import __version__

# Exit codes
EXIT_SUCCESS = 0
EXIT_CONFIG_ERROR = 1
EXIT_SNAPSHOT_ERROR = 2
EXIT_NOT_READY = 4


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="safe-update",
        description="Check whether this device is ready to receive a software update",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Exit Codes:
  0   Success
  1   Configuration error
  2   Snapshot error (missing or invalid snapshot file)
  4   Device not ready (see --fail-on)

Environment Variables:
  CONFIG_PATH                      Path to YAML configuration file
  SAFEUPDATE_LOG_LEVEL             Logging level: DEBUG, INFO, WARNING, ERROR
  SAFEUPDATE_LOG_FORMAT            Log format: json or text
  SAFEUPDATE_OUTPUT_FORMAT         Verdict format: json or text
  SAFEUPDATE_NETWORK_CHECK_URL     URL probed to verify internet access
  SAFEUPDATE_SPEED_TEST_ENABLED    Measure download speed in host mode (default: true)
  SAFEUPDATE_DEVICE_BUILD_DATE     Device build date (YYYY-MM-DD) for age scoring

Examples:
  # Check this host
  safe-update

  # Evaluate a snapshot exported by another device
  safe-update --snapshot phone.yaml --format json

  # Gate an update script
  safe-update --fail-on warning && ./apply-update.sh
""",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--snapshot",
        metavar="PATH",
        help="Evaluate a snapshot file (YAML or JSON) instead of collecting host metrics",
    )
    parser.add_argument(
        "--format",
        dest="output_format",
        choices=["text", "json"],
        default=None,
        help="Verdict output format (overrides configuration)",
    )
    parser.add_argument(
        "--fail-on",
        choices=["warning", "risky"],
        default=None,
        help="Exit with code 4 when the verdict is this status or worse",
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        default=None,
        help="Path to YAML configuration file (same as CONFIG_PATH)",
    )
    return parser.parse_args(argv)


def is_not_ready(status: ReadinessStatus, fail_on: Optional[str]) -> bool:
    """Check whether a status trips the --fail-on level."""
    from safe_update.models.enums import ReadinessStatus

    if fail_on == "warning":
        return status in (ReadinessStatus.WARNING, ReadinessStatus.RISKY)
    if fail_on == "risky":
        return status == ReadinessStatus.RISKY
    return False


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for safe-update.

    Returns:
        Exit code (0=success, 1=config error, 2=snapshot error, 4=not ready)
    """
    args = parse_args(argv)

    # Import here to allow --help and --version without dependencies
    from safe_update.collector import HostMetricsCollector
    from safe_update.config.loader import ConfigurationError, load_config
    from safe_update.logging import configure_logging, get_logger
    from safe_update.models.snapshot import SnapshotError, load_snapshot_file
    from safe_update.readiness import ReadinessEvaluator
    from safe_update.reports import ReportGenerator

    # Load configuration
    try:
        config = load_config(args.config)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except SystemExit as e:
        # Validation errors cause sys.exit(1) in loader
        return e.code if isinstance(e.code, int) else EXIT_CONFIG_ERROR

    configure_logging(log_format=config.log_format, log_level=config.log_level)
    log = get_logger()

    # Acquire snapshot
    network_speed_mbps = None
    if args.snapshot:
        try:
            snapshot = load_snapshot_file(args.snapshot)
        except SnapshotError as e:
            log.error("snapshot_load_failed", path=args.snapshot, error=str(e))
            print(f"Snapshot error: {e}", file=sys.stderr)
            return EXIT_SNAPSHOT_ERROR
        log.info("snapshot_loaded", path=args.snapshot)
    else:
        log.info("collecting_host_metrics")
        collector = HostMetricsCollector(config)
        snapshot = collector.collect()
        if config.speed_test_enabled:
            network_speed_mbps = collector.measure_network_speed()

    verdict = ReadinessEvaluator().evaluate(snapshot)
    log.info(
        "verdict_ready",
        score=verdict.score,
        status=verdict.status.value,
        suggestions=len(verdict.suggestions),
    )

    output_format = args.output_format or config.output_format
    report = ReportGenerator().generate(
        verdict,
        output_format,
        snapshot=snapshot,
        network_speed_mbps=network_speed_mbps,
    )
    print(report)

    if is_not_ready(verdict.status, args.fail_on):
        return EXIT_NOT_READY
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
