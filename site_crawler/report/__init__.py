"""site_crawler.report: Запись отчётов об обходе в JSON, CSV и HTML."""

from __future__ import annotations

from site_crawler.report.csv_report import render_csv
from site_crawler.report.html_report import DEFAULT_TEMPLATE_DIR, render_html
from site_crawler.report.json_report import render_json

__all__ = ["render_json", "render_csv", "render_html", "DEFAULT_TEMPLATE_DIR"]
