"""
Report Writer
=============
Serializes a CancelSummary into a JSON report for cron jobs and dashboards.
"""
import json
import logging
import os

from run_canceller.models.run_outcome import CancelSummary

logger = logging.getLogger(__name__)


class ReportWriter:

    @staticmethod
    def build_report(summary: CancelSummary) -> dict:
        data = summary.model_dump()
        data["counts"] = summary.counts
        data["has_failures"] = summary.has_failures
        return data

    @staticmethod
    def write_report(summary: CancelSummary, output_path: str = "cancel_report.json") -> bool:
        """
        Write the report. Returns False (and logs) when the file cannot be written.
        """
        abs_output = os.path.abspath(output_path)
        try:
            parent = os.path.dirname(abs_output)
            if not os.path.exists(parent):
                os.makedirs(parent)
            logger.info("Writing cancel report to %s", abs_output)
            with open(abs_output, "w", encoding="utf-8") as f:
                json.dump(ReportWriter.build_report(summary), f, indent=2)
            return True
        except OSError as e:
            logger.error("Failed to write %s: %s", abs_output, e, exc_info=True)
            return False
