# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Installed apps classification."""

import logging
import re

from rcdump.model import AppDescriptor, AppList, AppsSummary, ClassifierResult, Issue
from rcdump.taxonomy import make_issue

logger = logging.getLogger(__name__)

ENABLED_STATUSES = {"enabled", "true", "initialized"}
DISABLED_STATUSES = {"disabled", "false", "invalid"}

SECURITY_APP = re.compile(r"auth|security|login|oauth|ldap|saml|sso|2fa|mfa", re.IGNORECASE)
PERFORMANCE_APP = re.compile(r"monitor|performance|metrics|analytics|stats", re.IGNORECASE)
INTEGRATION_APP = re.compile(
    r"webhook|api|bot|connector|integration|telegram|slack|jitsi|zoom|teams",
    re.IGNORECASE,
)
# Leading major version 0, 1 or 2; not semantic-version aware.
OUTDATED_VERSION = re.compile(r"^[0-2]\.")


class AppsClassifier:
    """Tally app statuses and flag notable or outdated apps."""

    def classify(self, source: AppList) -> ClassifierResult[AppsSummary]:
        """Classify one normalized apps source.

        Args:
            source: Normalized app descriptors.

        Returns:
            Apps summary and one warning-tier issue per outdated app.
        """
        enabled = 0
        disabled = 0
        security_apps: list[str] = []
        performance_apps: list[str] = []
        integration_apps: list[str] = []
        outdated_apps: list[str] = []
        issues: list[Issue] = []

        for app in source.apps:
            status = app.status.lower()
            if status in ENABLED_STATUSES:
                enabled += 1
            elif status in DISABLED_STATUSES:
                disabled += 1

            if _flagged(app, SECURITY_APP):
                security_apps.append(app.name)
            if _flagged(app, PERFORMANCE_APP):
                performance_apps.append(app.name)
            if _flagged(app, INTEGRATION_APP):
                integration_apps.append(app.name)

            if OUTDATED_VERSION.match(app.version):
                outdated_apps.append(app.name)
                issues.append(
                    make_issue(
                        "apps",
                        "configuration",
                        f"Potentially outdated app: {app.name} v{app.version} by {app.author}",
                        app.name,
                    )
                )

        summary = AppsSummary(
            total_apps=source.entry_count,
            enabled_count=enabled,
            disabled_count=disabled,
            security_apps=tuple(security_apps),
            performance_apps=tuple(performance_apps),
            integration_apps=tuple(integration_apps),
            outdated_apps=tuple(outdated_apps),
            apps=tuple(source.apps),
        )
        logger.info(
            f"Apps analysis completed (apps={summary.total_apps} enabled={enabled} "
            f"disabled={disabled} outdated={summary.outdated_count})"
        )
        return ClassifierResult(summary=summary, issues=issues)


def _flagged(app: AppDescriptor, pattern: re.Pattern[str]) -> bool:
    return bool(pattern.search(app.name) or pattern.search(app.description))
