# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Log record classification."""

import logging

from rcdump.config import LogPatterns
from rcdump.model import ClassifierResult, Issue, LogSource, LogSummary
from rcdump.taxonomy import make_issue

logger = logging.getLogger(__name__)


class LogClassifier:
    """Count log severities and sample messages matching keyword sets."""

    def __init__(self, patterns: LogPatterns | None = None) -> None:
        """Initialize classifier with keyword sets.

        Args:
            patterns: Keyword sets and sample limits; defaults when omitted.
        """
        self._patterns = patterns or LogPatterns()
        self._error_keywords = _lowered(self._patterns.error)
        self._warning_keywords = _lowered(self._patterns.warning)
        self._security_keywords = _lowered(self._patterns.security)

    def classify(self, source: LogSource) -> ClassifierResult[LogSummary]:
        """Classify one normalized log source.

        A message is tested against each keyword set independently, so one
        message can land in several sample lists.

        Args:
            source: Normalized log source.

        Returns:
            Log summary and one ``log`` issue per sampled message.
        """
        counts = {"info": 0, "warn": 0, "error": 0}
        error_samples: list[str] = []
        warning_samples: list[str] = []
        security_samples: list[str] = []

        for record in source.records:
            counts[record.severity] += 1
            text = record.message.lower()
            if len(error_samples) < self._patterns.error_limit and _matches(
                text, self._error_keywords
            ):
                error_samples.append(record.message)
            if len(warning_samples) < self._patterns.warning_limit and _matches(
                text, self._warning_keywords
            ):
                warning_samples.append(record.message)
            if len(security_samples) < self._patterns.security_limit and _matches(
                text, self._security_keywords
            ):
                security_samples.append(record.message)

        summary = LogSummary(
            total_entries=source.entry_count,
            error_count=counts["error"],
            warning_count=counts["warn"],
            info_count=counts["info"],
            error_samples=tuple(error_samples),
            warning_samples=tuple(warning_samples),
            security_samples=tuple(security_samples),
        )
        issues: list[Issue] = [
            make_issue("log", "log", message)
            for message in (*error_samples, *warning_samples, *security_samples)
        ]
        logger.info(
            f"Log analysis completed (entries={summary.total_entries} "
            f"issues={summary.issues_found})"
        )
        return ClassifierResult(summary=summary, issues=issues)


def _lowered(keywords: tuple[str, ...]) -> tuple[str, ...]:
    return tuple(keyword.lower() for keyword in keywords if keyword)


def _matches(text: str, keywords: tuple[str, ...]) -> bool:
    return any(keyword in text for keyword in keywords)
