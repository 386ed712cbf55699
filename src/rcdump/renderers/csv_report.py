# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""CSV report rendering."""

import csv
import io

from rcdump.model import IssueTier, ReportModel
from rcdump.renderers.common import visible_issues

CSV_HEADER: tuple[str, ...] = ("Tier", "Category", "Origin", "Source Key", "Message")


def render_csv(report: ReportModel, minimum: IssueTier = "warning") -> str:
    """Render listed issues as CSV rows, one per issue."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for issue in visible_issues(report, minimum):
        writer.writerow(
            (issue.tier, issue.category, issue.origin, issue.source_key or "", issue.message)
        )
    return buffer.getvalue()
