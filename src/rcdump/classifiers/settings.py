# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Server settings classification.

Two independent passes run over the same settings:

* the rule-table pass judges known setting ids and raises issues or notes;
* the keyword-overview pass counts ids that merely look security or
  performance related.

The overview counts are reported next to, never instead of, the issue counts.
"""

import logging
import re
from typing import Mapping

from rcdump.model import ClassifierResult, Issue, Setting, SettingList, SettingsSummary
from rcdump.rules import DEFAULT_SETTINGS_RULES, RuleVerdict, SettingRule
from rcdump.taxonomy import make_issue

logger = logging.getLogger(__name__)

SECURITY_KEYWORDS = re.compile(
    r"password|auth|token|secret|ldap|saml|oauth|security|encryption|ssl|tls",
    re.IGNORECASE,
)
PERFORMANCE_KEYWORDS = re.compile(
    r"cache|limit|timeout|max|pool|buffer|memory|cpu|performance|rate|throttle",
    re.IGNORECASE,
)


class DuplicateSettingError(ValueError):
    """Represent conflicting values supplied for one setting id."""


def unique_settings(settings: list[Setting]) -> list[Setting]:
    """Drop repeated setting ids, keeping the first occurrence.

    Args:
        settings: Settings as supplied by the caller.

    Returns:
        Settings with unique ids.

    Raises:
        DuplicateSettingError: If an id repeats with a different value.
    """
    first_by_id: dict[str, Setting] = {}
    unique: list[Setting] = []
    for setting in settings:
        first = first_by_id.get(setting.id)
        if first is None:
            first_by_id[setting.id] = setting
            unique.append(setting)
        elif first.value != setting.value:
            raise DuplicateSettingError(
                f"Setting {setting.id} supplied with conflicting values."
            )
    return unique


class SettingsClassifier:
    """Judge server settings against a rule table."""

    def __init__(self, rules: Mapping[str, SettingRule] | None = None) -> None:
        """Initialize classifier.

        Args:
            rules: Rule table keyed by exact setting id; defaults when omitted.
        """
        self._rules = dict(DEFAULT_SETTINGS_RULES) if rules is None else dict(rules)

    def classify(self, source: SettingList) -> ClassifierResult[SettingsSummary]:
        """Classify one normalized settings source.

        Args:
            source: Normalized settings.

        Returns:
            Settings summary and the rule-table issues.

        Raises:
            DuplicateSettingError: If the caller supplied one id with two values.
        """
        settings = unique_settings(source.settings)
        issues: list[Issue] = []
        notes: list[str] = []
        for setting in settings:
            rule = self._rules.get(setting.id)
            if rule is None:
                continue
            verdict = rule(setting.value)
            if verdict is None:
                continue
            if verdict.is_issue:
                issues.append(_issue_from_verdict(verdict, setting.id))
            else:
                notes.append(verdict.message)

        summary = SettingsSummary(
            total_settings=source.entry_count,
            security_issue_count=_count(issues, "security"),
            performance_issue_count=_count(issues, "performance"),
            configuration_warning_count=_count(issues, "configuration"),
            security_related_count=sum(
                1 for s in settings if SECURITY_KEYWORDS.search(s.id)
            ),
            performance_related_count=sum(
                1 for s in settings if PERFORMANCE_KEYWORDS.search(s.id)
            ),
            notes=tuple(notes),
        )
        logger.info(
            f"Settings analysis completed (settings={summary.total_settings} "
            f"security_issues={summary.security_issue_count} "
            f"performance_issues={summary.performance_issue_count})"
        )
        return ClassifierResult(summary=summary, issues=issues)


def _issue_from_verdict(verdict: RuleVerdict, setting_id: str) -> Issue:
    if verdict.outcome == "security":
        return make_issue("settings", "security", verdict.message, setting_id)
    if verdict.outcome == "performance":
        return make_issue("settings", "performance", verdict.message, setting_id)
    return make_issue("settings", "configuration", verdict.message, setting_id)


def _count(issues: list[Issue], category: str) -> int:
    return sum(1 for issue in issues if issue.category == category)
