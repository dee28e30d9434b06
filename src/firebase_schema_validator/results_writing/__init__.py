"""Results writing exports."""

from .report_renderer import ReportFormat, render_json, render_report, render_text

__all__ = [
    "ReportFormat",
    "render_json",
    "render_report",
    "render_text",
]
