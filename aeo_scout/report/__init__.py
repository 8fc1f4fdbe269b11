"""aeo_scout.report: JSON and HTML renderers for an AuditReport, used by the CLI."""

from aeo_scout.report.html_report import DEFAULT_TEMPLATE_DIR, render_html, score_band
from aeo_scout.report.json_report import render_json, to_json

__all__ = ["render_json", "render_html", "to_json", "score_band", "DEFAULT_TEMPLATE_DIR"]
