"""
Safe Update - Decide whether a device is ready to receive a software update.

This package scores a snapshot of device health metrics (battery, storage,
network, age, memory, CPU) and reports a readiness status with remediation
suggestions.

Features:
- Deterministic penalty-rule scoring with Safe/Warning/Risky classification
- Host metric collection from Linux /proc and /sys interfaces
- Snapshot loading from YAML or JSON files
- Configuration via YAML with environment variable overrides
- Structured logging (JSON for production, text for development)
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
