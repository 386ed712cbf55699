# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Health scoring over the full issue set.

score = 100 - 20 * critical - 10 * error - 5 * warning, minus 15 when any
security issue exists and minus 10 when more than three apps are outdated,
clamped to [0, 100].
"""

import logging
from typing import Callable, Sequence

from rcdump.model import HealthScore, Issue

logger = logging.getLogger(__name__)

MAX_SCORE = 100
TIER_PENALTIES: dict[str, int] = {"critical": 20, "error": 10, "warning": 5}
SECURITY_PENALTY = 15
OUTDATED_APPS_PENALTY = 10
OUTDATED_APPS_LIMIT = 3

RECOMMEND_SECURITY = "Address security issues immediately"
RECOMMEND_UPGRADE = "Plan Rocket.Chat version upgrade"
RECOMMEND_PERFORMANCE = "Optimize performance (memory/CPU)"
RECOMMEND_OMNICHANNEL = "Fix Omnichannel configuration"
RECOMMEND_APPS = "Update outdated apps"
RECOMMEND_MONITORING = "Implement monitoring and maintenance procedures"
RECOMMEND_HEALTHY = "System appears healthy; continue regular monitoring and maintenance"


def _is_security(issue: Issue) -> bool:
    return issue.category == "security"


def _is_outdated_version(issue: Issue) -> bool:
    return issue.origin == "statistics" and issue.source_key == "version"


def _is_statistics_performance(issue: Issue) -> bool:
    return issue.origin == "statistics" and issue.category == "performance"


def _is_omnichannel_problem(issue: Issue) -> bool:
    return issue.origin == "omnichannel"


def _is_outdated_app(issue: Issue) -> bool:
    return issue.origin == "apps"


# Evaluated top to bottom; each row appends at most one recommendation.
PRIORITY_TABLE: tuple[tuple[Callable[[Issue], bool], str], ...] = (
    (_is_security, RECOMMEND_SECURITY),
    (_is_outdated_version, RECOMMEND_UPGRADE),
    (_is_statistics_performance, RECOMMEND_PERFORMANCE),
    (_is_omnichannel_problem, RECOMMEND_OMNICHANNEL),
    (_is_outdated_app, RECOMMEND_APPS),
)


def compute_health_score(issues: Sequence[Issue]) -> HealthScore:
    """Compute the health score and recommendations.

    The result depends only on ``issues``; absent classifiers simply
    contribute no issues. Advisory issues are skipped.

    Args:
        issues: Union of all classifier issues.

    Returns:
        Health score with per-tier counts and ordered recommendations.
    """
    scored = [issue for issue in issues if not issue.advisory]
    counts = {tier: 0 for tier in TIER_PENALTIES}
    for issue in scored:
        counts[issue.tier] += 1

    score = MAX_SCORE - sum(
        TIER_PENALTIES[tier] * count for tier, count in counts.items()
    )
    if any(_is_security(issue) for issue in scored):
        score -= SECURITY_PENALTY
    if sum(1 for issue in scored if _is_outdated_app(issue)) > OUTDATED_APPS_LIMIT:
        score -= OUTDATED_APPS_PENALTY
    score = max(0, min(MAX_SCORE, score))

    health = HealthScore(
        overall=score,
        critical_count=counts["critical"],
        error_count=counts["error"],
        warning_count=counts["warning"],
        recommendations=build_recommendations(scored),
    )
    logger.debug(
        f"Health score computed (overall={score} critical={health.critical_count} "
        f"error={health.error_count} warning={health.warning_count} "
        f"advisory={len(issues) - len(scored)})"
    )
    return health


def build_recommendations(issues: Sequence[Issue]) -> tuple[str, ...]:
    """Build the ordered recommendation list.

    Args:
        issues: Union of all classifier issues.

    Returns:
        Recommendations from the priority table followed by the monitoring
        recommendation, or the single healthy-system recommendation when no
        priority row applies.
    """
    recommendations = [
        recommendation
        for predicate, recommendation in PRIORITY_TABLE
        if any(predicate(issue) and not issue.advisory for issue in issues)
    ]
    if not recommendations:
        return (RECOMMEND_HEALTHY,)
    recommendations.append(RECOMMEND_MONITORING)
    return tuple(recommendations)
