# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Issue severity taxonomy."""

import logging

from rcdump.model import Issue, IssueCategory, IssueOrigin, IssueTier

logger = logging.getLogger(__name__)

TIER_RANK: dict[IssueTier, int] = {"warning": 0, "error": 1, "critical": 2}

_TIER_BY_ORIGIN_CATEGORY: dict[tuple[IssueOrigin, IssueCategory], IssueTier] = {
    ("statistics", "performance"): "critical",
    ("log", "log"): "error",
    ("settings", "performance"): "error",
    ("omnichannel", "configuration"): "error",
    ("settings", "configuration"): "warning",
    ("apps", "configuration"): "warning",
}


class TaxonomyError(ValueError):
    """Represent an origin/category pair with no tier assignment."""


def tier_for(origin: IssueOrigin, category: IssueCategory) -> IssueTier:
    """Resolve the scoring tier for an issue.

    Security issues are critical regardless of origin.

    Args:
        origin: Classifier that raised the issue.
        category: Issue category.

    Returns:
        Fixed tier for the pair.

    Raises:
        TaxonomyError: If the pair has no tier assignment.
    """
    if category == "security":
        return "critical"
    try:
        return _TIER_BY_ORIGIN_CATEGORY[(origin, category)]
    except KeyError as exc:
        raise TaxonomyError(
            f"No tier assigned to origin={origin} category={category}"
        ) from exc


def make_issue(
    origin: IssueOrigin,
    category: IssueCategory,
    message: str,
    source_key: str | None = None,
    advisory: bool = False,
) -> Issue:
    """Create an issue with its tier resolved from the fixed mapping.

    Args:
        origin: Classifier that raised the issue.
        category: Issue category.
        message: Human-readable description.
        source_key: Traceable key, if any.
        advisory: Whether scoring and recommendations skip the issue.

    Returns:
        Immutable issue record.
    """
    return Issue(
        origin=origin,
        category=category,
        tier=tier_for(origin, category),
        message=message,
        source_key=source_key,
        advisory=advisory,
    )


def meets_tier(issue: Issue, minimum: IssueTier) -> bool:
    """Return whether an issue is at or above a minimum tier."""
    return TIER_RANK[issue.tier] >= TIER_RANK[minimum]
