# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""JSON report rendering."""

import json
from dataclasses import asdict
from typing import Any

from rcdump.model import IssueTier, ReportModel
from rcdump.renderers.common import REPORT_TITLE, REPORT_VERSION, visible_issues


def build_json_dict(report: ReportModel, minimum: IssueTier = "warning") -> dict[str, Any]:
    """Build a JSON-serializable report payload.

    Args:
        report: Analysis report model.
        minimum: Lowest tier of listed issues.

    Returns:
        Report payload with metadata, health score, per-source analysis,
        issues and recommendations.
    """
    health = report.health
    analysis: dict[str, Any] = {}
    if report.log is not None:
        analysis["logs"] = {
            "totalEntries": report.log.total_entries,
            "errorCount": report.log.error_count,
            "warningCount": report.log.warning_count,
            "infoCount": report.log.info_count,
            "issuesFound": report.log.issues_found,
            "errorSamples": list(report.log.error_samples),
            "warningSamples": list(report.log.warning_samples),
            "securitySamples": list(report.log.security_samples),
        }
    if report.settings is not None:
        analysis["settings"] = {
            "totalSettings": report.settings.total_settings,
            "securityIssues": report.settings.security_issue_count,
            "performanceIssues": report.settings.performance_issue_count,
            "configurationWarnings": report.settings.configuration_warning_count,
            "securityRelated": report.settings.security_related_count,
            "performanceRelated": report.settings.performance_related_count,
            "notes": list(report.settings.notes),
        }
    if report.statistics is not None:
        stats = report.statistics
        analysis["statistics"] = {
            "version": stats.version,
            "nodeVersion": stats.node_version,
            "platform": stats.platform,
            "arch": stats.arch,
            "uptime": stats.uptime,
            "memoryMB": stats.memory_mb,
            "freeMemoryMB": stats.memory_free_mb,
            "totalUsers": stats.total_users,
            "onlineUsers": stats.online_users,
            "totalMessages": stats.total_messages,
            "totalRooms": stats.total_rooms,
            "databaseMB": stats.db_size_mb,
            "performanceIssues": stats.performance_issue_count,
        }
    if report.apps is not None:
        analysis["apps"] = {
            "totalApps": report.apps.total_apps,
            "enabledApps": report.apps.enabled_count,
            "disabledApps": report.apps.disabled_count,
            "securityApps": list(report.apps.security_apps),
            "performanceApps": list(report.apps.performance_apps),
            "integrationApps": list(report.apps.integration_apps),
            "outdatedApps": list(report.apps.outdated_apps),
        }
    if report.omnichannel is not None:
        analysis["omnichannel"] = {
            "totalSettings": report.omnichannel.total_settings,
            "enabledFeatures": report.omnichannel.enabled_features,
            "disabledFeatures": report.omnichannel.disabled_features,
            "configurationIssues": report.omnichannel.configuration_issue_count,
            "notes": list(report.omnichannel.notes),
        }

    return {
        "metadata": {
            "reportType": REPORT_TITLE,
            "version": REPORT_VERSION,
            "generatedAt": report.generated_at,
            "dumpPath": report.source_path,
            "minimumTier": minimum,
        },
        "sources": dict(report.sources),
        "healthScore": {
            "overall": health.overall,
            "totalIssues": health.total_issues,
            "criticalIssues": health.critical_count,
            "errorIssues": health.error_count,
            "warningIssues": health.warning_count,
        },
        "analysis": analysis,
        "issues": [asdict(issue) for issue in visible_issues(report, minimum)],
        "recommendations": list(health.recommendations),
    }


def render_json(report: ReportModel, minimum: IssueTier = "warning") -> str:
    """Render a report as indented JSON with sorted keys."""
    return json.dumps(build_json_dict(report, minimum), indent=2, sort_keys=True)
