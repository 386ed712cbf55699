# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Omnichannel settings classification."""

import logging
from typing import Mapping

from rcdump.classifiers.settings import unique_settings
from rcdump.model import ClassifierResult, Issue, OmnichannelSummary, SettingList
from rcdump.rules import DEFAULT_OMNICHANNEL_RULES, SettingRule
from rcdump.taxonomy import make_issue

logger = logging.getLogger(__name__)

ENABLED_VALUES = {"true", "1"}
DISABLED_VALUES = {"false", "0"}


class OmnichannelClassifier:
    """Judge Omnichannel settings against a small rule table."""

    def __init__(self, rules: Mapping[str, SettingRule] | None = None) -> None:
        """Initialize classifier.

        Args:
            rules: Rule table keyed by setting id fragment; defaults when omitted.
        """
        self._rules = (
            dict(DEFAULT_OMNICHANNEL_RULES) if rules is None else dict(rules)
        )

    def classify(self, source: SettingList) -> ClassifierResult[OmnichannelSummary]:
        """Classify one normalized Omnichannel settings source.

        Args:
            source: Normalized Omnichannel settings.

        Returns:
            Omnichannel summary and configuration issues. An oversized queue
            is an advisory issue: listed, but neither counted nor scored.
        """
        enabled = 0
        disabled = 0
        counted = 0
        issues: list[Issue] = []
        notes: list[str] = []
        for setting in unique_settings(source.settings):
            if setting.value in ENABLED_VALUES:
                enabled += 1
            elif setting.value in DISABLED_VALUES:
                disabled += 1

            rule = self._rule_for(setting.id)
            if rule is None:
                continue
            verdict = rule(setting.value)
            if verdict is None:
                continue
            if verdict.outcome == "note":
                notes.append(verdict.message)
                continue
            advisory = verdict.outcome == "warning"
            issues.append(
                make_issue(
                    "omnichannel",
                    "configuration",
                    verdict.message,
                    setting.id,
                    advisory=advisory,
                )
            )
            if not advisory:
                counted += 1

        summary = OmnichannelSummary(
            total_settings=source.entry_count,
            enabled_features=enabled,
            disabled_features=disabled,
            configuration_issue_count=counted,
            notes=tuple(notes),
        )
        logger.info(
            f"Omnichannel analysis completed (settings={summary.total_settings} "
            f"enabled={enabled} disabled={disabled})"
        )
        return ClassifierResult(summary=summary, issues=issues)

    def _rule_for(self, setting_id: str) -> SettingRule | None:
        for fragment, rule in self._rules.items():
            if fragment in setting_id:
                return rule
        return None
