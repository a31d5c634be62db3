"""Report generator with Jinja2 template support.

Provides the ReportGenerator class for rendering readiness verdicts as
plain text or JSON.
"""

import json
from typing import Any, Dict, Optional

from jinja2 import Environment, PackageLoader

from safe_update.models.readiness import UpdateReadiness
from safe_update.models.snapshot import DeviceHealthSnapshot


class ReportGenerator:
    """Generator for text and JSON readiness reports.

    Attributes:
        env: Jinja2 Environment configured with PackageLoader
        report_title: Title printed at the top of text reports
    """

    def __init__(self, report_title: str = "Update Readiness Report") -> None:
        """Initialize ReportGenerator with Jinja2 environment.

        Args:
            report_title: Title for generated text reports.
        """
        self.report_title = report_title

        # Plain text output only, no autoescaping
        self.env = Environment(
            loader=PackageLoader("safe_update.reports", "templates"),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def _build_context(
        self,
        verdict: UpdateReadiness,
        snapshot: Optional[DeviceHealthSnapshot] = None,
        network_speed_mbps: Optional[float] = None,
    ) -> Dict[str, Any]:
        return {
            "title": self.report_title,
            "verdict": verdict,
            "snapshot": snapshot,
            "network_speed_mbps": network_speed_mbps,
        }

    def generate_text(
        self,
        verdict: UpdateReadiness,
        snapshot: Optional[DeviceHealthSnapshot] = None,
        network_speed_mbps: Optional[float] = None,
    ) -> str:
        """Render a verdict as a plain text report.

        Args:
            verdict: Readiness verdict to render
            snapshot: Optional snapshot the verdict was computed from. When
                given, the measured metrics are listed as well.
            network_speed_mbps: Optional measured download speed, shown
                next to the verdict. It does not affect the score.

        Returns:
            Rendered text report
        """
        template = self.env.get_template("readiness.txt")
        return template.render(
            **self._build_context(verdict, snapshot, network_speed_mbps)
        )

    def generate_json(
        self,
        verdict: UpdateReadiness,
        snapshot: Optional[DeviceHealthSnapshot] = None,
        network_speed_mbps: Optional[float] = None,
    ) -> str:
        """Render a verdict as an indented JSON document."""
        data: Dict[str, Any] = verdict.to_dict()
        if network_speed_mbps is not None:
            data["network_speed_mbps"] = round(network_speed_mbps, 2)
        if snapshot is not None:
            data["snapshot"] = snapshot.to_dict()
        return json.dumps(data, indent=2)

    def generate(
        self,
        verdict: UpdateReadiness,
        output_format: str = "text",
        snapshot: Optional[DeviceHealthSnapshot] = None,
        network_speed_mbps: Optional[float] = None,
    ) -> str:
        """Render a verdict in the requested format ("text" or "json")."""
        if output_format == "json":
            return self.generate_json(verdict, snapshot, network_speed_mbps)
        if output_format == "text":
            return self.generate_text(verdict, snapshot, network_speed_mbps)
        raise ValueError(f"Unknown output format: {output_format}")
