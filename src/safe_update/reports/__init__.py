"""Report generation for readiness verdicts."""

from safe_update.reports.generator import ReportGenerator

__all__ = ["ReportGenerator"]
