# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Unit tests for health scoring and the issue taxonomy."""

import pytest

from rcdump.model import Issue
from rcdump.scorer import (
    RECOMMEND_APPS,
    RECOMMEND_HEALTHY,
    RECOMMEND_MONITORING,
    RECOMMEND_OMNICHANNEL,
    RECOMMEND_PERFORMANCE,
    RECOMMEND_SECURITY,
    RECOMMEND_UPGRADE,
    compute_health_score,
)
from rcdump.taxonomy import TaxonomyError, make_issue, meets_tier, tier_for


def _outdated_app(name: str) -> Issue:
    return make_issue("apps", "configuration", f"Potentially outdated app: {name}", name)


def test_tax_001_fixed_tier_mapping() -> None:
    assert tier_for("settings", "security") == "critical"
    assert tier_for("statistics", "security") == "critical"
    assert tier_for("statistics", "performance") == "critical"
    assert tier_for("log", "log") == "error"
    assert tier_for("settings", "performance") == "error"
    assert tier_for("omnichannel", "configuration") == "error"
    assert tier_for("settings", "configuration") == "warning"
    assert tier_for("apps", "configuration") == "warning"


def test_tax_002_unmapped_pair_raises() -> None:
    with pytest.raises(TaxonomyError):
        tier_for("apps", "performance")


def test_tax_003_minimum_tier_filter() -> None:
    warning = make_issue("settings", "configuration", "w")
    critical = make_issue("settings", "security", "c")

    assert meets_tier(critical, "error")
    assert not meets_tier(warning, "error")
    assert meets_tier(warning, "warning")


def test_score_001_empty_issue_set_is_perfect_and_healthy() -> None:
    health = compute_health_score([])

    assert health.overall == 100
    assert health.tier_counts == {"critical": 0, "error": 0, "warning": 0}
    assert health.recommendations == (RECOMMEND_HEALTHY,)


def test_score_002_single_security_issue_scores_65() -> None:
    issue = make_issue("settings", "security", "Two-factor authentication is disabled")

    health = compute_health_score([issue])

    assert health.overall == 65
    assert health.critical_count == 1
    assert health.recommendations == (RECOMMEND_SECURITY, RECOMMEND_MONITORING)


def test_score_003_outdated_apps_penalty_applies_above_three() -> None:
    three = [_outdated_app(f"app{n}") for n in range(3)]
    four = [_outdated_app(f"app{n}") for n in range(4)]

    assert compute_health_score(three).overall == 85
    assert compute_health_score(four).overall == 70
    assert compute_health_score(four).recommendations == (RECOMMEND_APPS, RECOMMEND_MONITORING)


def test_score_004_score_is_clamped_at_zero() -> None:
    issues = [make_issue("settings", "security", f"s{n}") for n in range(10)]

    assert compute_health_score(issues).overall == 0


def test_score_005_adding_an_issue_never_raises_the_score() -> None:
    issues: list[Issue] = []
    previous = compute_health_score(issues).overall
    candidates = [
        make_issue("settings", "configuration", "w"),
        make_issue("log", "log", "e"),
        _outdated_app("a"),
        _outdated_app("b"),
        _outdated_app("c"),
        _outdated_app("d"),
        make_issue("statistics", "security", "v", "version"),
    ]
    for issue in candidates:
        issues.append(issue)
        current = compute_health_score(issues).overall
        assert current <= previous
        previous = current


def test_score_006_recommendations_follow_priority_order() -> None:
    issues = [
        _outdated_app("a"),
        make_issue("omnichannel", "configuration", "Omnichannel service is disabled"),
        make_issue("statistics", "performance", "High memory usage", "os.totalmem"),
        make_issue("statistics", "security", "Rocket.Chat version may be outdated: 5.0.0", "version"),
    ]

    health = compute_health_score(issues)

    assert health.recommendations == (
        RECOMMEND_SECURITY,
        RECOMMEND_UPGRADE,
        RECOMMEND_PERFORMANCE,
        RECOMMEND_OMNICHANNEL,
        RECOMMEND_APPS,
        RECOMMEND_MONITORING,
    )


def test_score_007_omnichannel_configuration_issue_recommends_fix() -> None:
    issue = make_issue("omnichannel", "configuration", "No maximum agents configured")

    health = compute_health_score([issue])

    assert health.overall == 90
    assert health.recommendations == (RECOMMEND_OMNICHANNEL, RECOMMEND_MONITORING)


def test_score_008_advisory_issue_is_neither_scored_nor_recommended() -> None:
    issue = make_issue(
        "omnichannel",
        "configuration",
        "Large queue size configured (250)",
        "Livechat_queue_size",
        advisory=True,
    )

    health = compute_health_score([issue])

    assert issue.tier == "error"
    assert health.overall == 100
    assert health.total_issues == 0
    assert health.recommendations == (RECOMMEND_HEALTHY,)


def test_score_009_advisory_issue_does_not_change_mixed_score() -> None:
    security = make_issue("settings", "security", "Two-factor authentication is disabled")
    advisory = make_issue(
        "omnichannel", "configuration", "Large queue size configured (250)", advisory=True
    )

    assert compute_health_score([security, advisory]) == compute_health_score([security])
