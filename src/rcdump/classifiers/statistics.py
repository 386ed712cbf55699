# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Server statistics classification."""

import logging
import re
from typing import Any

from rcdump.config import StatisticsThresholds
from rcdump.model import ClassifierResult, Issue, StatisticsSummary, StatsObject
from rcdump.taxonomy import make_issue

logger = logging.getLogger(__name__)

BYTES_PER_MB = 1024 * 1024
SECONDS_PER_DAY = 86_400
SECONDS_PER_HOUR = 3_600


class StatisticsClassifier:
    """Extract server statistics and apply fixed threshold rules."""

    def __init__(self, thresholds: StatisticsThresholds | None = None) -> None:
        """Initialize classifier.

        Args:
            thresholds: Rule thresholds; defaults when omitted.
        """
        self._thresholds = thresholds or StatisticsThresholds()
        self._outdated_version = re.compile(self._thresholds.outdated_version_pattern)

    def is_outdated_version(self, version: str) -> bool:
        """Return whether a version string matches the outdated pattern."""
        return bool(self._outdated_version.match(version))

    def classify(self, stats: StatsObject) -> ClassifierResult[StatisticsSummary]:
        """Classify one statistics object.

        Absent fields default to ``0``, ``"unknown"`` or ``False``.

        Args:
            stats: Decoded statistics object.

        Returns:
            Statistics summary with performance and version issues.
        """
        t = self._thresholds
        version = _as_str(stats.get("version"))
        uptime = _as_int(
            _first_present(_dig(stats, "process", "uptime"), _dig(stats, "os", "uptime"))
        )
        memory_mb = _as_int(_dig(stats, "os", "totalmem")) // BYTES_PER_MB
        online_users = _as_int(stats.get("onlineUsers"))
        total_users = _as_int(stats.get("totalUsers"))
        total_rooms = _as_int(stats.get("totalRooms"))
        db_size_mb = _as_int(stats.get("dbSize")) // BYTES_PER_MB

        issues: list[Issue] = []
        if memory_mb > t.memory_mb:
            issues.append(
                make_issue(
                    "statistics",
                    "performance",
                    f"High memory usage detected: {memory_mb}MB",
                    "os.totalmem",
                )
            )
        if online_users > t.online_users:
            issues.append(
                make_issue(
                    "statistics",
                    "performance",
                    f"High user load: {online_users} online users",
                    "onlineUsers",
                )
            )
        if db_size_mb > t.db_size_mb:
            issues.append(
                make_issue(
                    "statistics",
                    "performance",
                    f"Large database size: {db_size_mb}MB",
                    "dbSize",
                )
            )
        if total_users > 0:
            rooms_per_user = total_rooms // total_users
            if rooms_per_user > t.rooms_per_user:
                issues.append(
                    make_issue(
                        "statistics",
                        "performance",
                        f"High rooms-to-users ratio: {rooms_per_user} rooms per user",
                        "totalRooms",
                    )
                )
        if self.is_outdated_version(version):
            issues.append(
                make_issue(
                    "statistics",
                    "security",
                    f"Rocket.Chat version may be outdated: {version}",
                    "version",
                )
            )

        summary = StatisticsSummary(
            version=version,
            node_version=_as_str(_dig(stats, "process", "nodeVersion")),
            platform=_as_str(_dig(stats, "os", "platform")),
            arch=_as_str(_dig(stats, "os", "arch")),
            os_type=_as_str(_dig(stats, "os", "type")),
            os_release=_as_str(_dig(stats, "os", "release")),
            uptime_seconds=uptime,
            uptime_days=uptime // SECONDS_PER_DAY,
            uptime_hours=(uptime % SECONDS_PER_DAY) // SECONDS_PER_HOUR,
            memory_mb=memory_mb,
            memory_free_mb=_as_int(_dig(stats, "os", "freemem")) // BYTES_PER_MB,
            total_users=total_users,
            online_users=online_users,
            away_users=_as_int(stats.get("awayUsers")),
            busy_users=_as_int(stats.get("busyUsers")),
            offline_users=_as_int(stats.get("offlineUsers")),
            total_messages=_as_int(stats.get("totalMessages")),
            total_rooms=total_rooms,
            total_channels=_as_int(stats.get("totalChannels")),
            total_private_groups=_as_int(stats.get("totalPrivateGroups")),
            total_direct_messages=_as_int(stats.get("totalDirectMessages")),
            total_livechat_rooms=_as_int(stats.get("totalLivechatRooms")),
            db_size_mb=db_size_mb,
            federation_enabled=_as_bool(stats.get("federationEnabled")),
            ldap_enabled=_as_bool(stats.get("ldapEnabled")),
            livechat_enabled=_as_bool(stats.get("livechatEnabled")),
            enterprise_enabled=_as_bool(stats.get("enterpriseReady")),
            performance_issue_count=sum(
                1 for issue in issues if issue.category == "performance"
            ),
        )
        logger.info(
            f"Statistics analysis completed (version={version} memory_mb={memory_mb} "
            f"users={total_users} online={online_users})"
        )
        return ClassifierResult(summary=summary, issues=issues)


def _dig(stats: StatsObject, *path: str) -> Any:
    current: Any = stats
    for key in path:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def _first_present(*values: Any) -> Any:
    return next((value for value in values if value is not None), None)


def _as_int(value: Any) -> int:
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, int):
        return value
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0


def _as_str(value: Any) -> str:
    if value is None or value == "":
        return "unknown"
    return str(value)


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return value is True
