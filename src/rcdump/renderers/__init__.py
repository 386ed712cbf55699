# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Report renderers consuming only the report model."""

from rcdump.renderers.csv_report import render_csv
from rcdump.renderers.html_report import render_html
from rcdump.renderers.json_report import build_json_dict, render_json
from rcdump.renderers.text import render_text

__all__ = ["build_json_dict", "render_csv", "render_html", "render_json", "render_text"]
