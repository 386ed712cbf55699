# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Helpers shared by report renderers."""

from rcdump.model import Issue, IssueTier, ReportModel
from rcdump.taxonomy import TIER_RANK, meets_tier

REPORT_TITLE = "Rocket.Chat Support Dump Analysis Report"
REPORT_VERSION = "1.0.0"
HEALTHY_SCORE = 90
FAIR_SCORE = 70


def visible_issues(report: ReportModel, minimum: IssueTier = "warning") -> list[Issue]:
    """Return report issues at or above ``minimum``, most severe first.

    The filter applies to listed issues only; health counts always cover the
    full issue set.
    """
    selected = [issue for issue in report.issues if meets_tier(issue, minimum)]
    return sorted(selected, key=lambda issue: -TIER_RANK[issue.tier])


def score_band(score: int) -> str:
    """Return the band label for a health score."""
    if score >= HEALTHY_SCORE:
        return "healthy"
    if score >= FAIR_SCORE:
        return "fair"
    return "poor"
