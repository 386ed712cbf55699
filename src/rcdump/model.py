# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Domain models for dump sources, issues, scores and reports."""

from dataclasses import dataclass, field
from typing import Any, Generic, Literal, Mapping, TypeVar

SourceKind = Literal["log", "settings", "statistics", "apps", "omnichannel"]
SourceStatus = Literal["present", "absent", "unparseable"]
AnalysisStatus = Literal["analyzed", "absent", "unparseable"]
Severity = Literal["info", "warn", "error"]
IssueOrigin = SourceKind
IssueCategory = Literal["security", "performance", "configuration", "log"]
IssueTier = Literal["critical", "error", "warning"]

SOURCE_KINDS: tuple[SourceKind, ...] = (
    "log",
    "settings",
    "statistics",
    "apps",
    "omnichannel",
)
TIERS: tuple[IssueTier, ...] = ("critical", "error", "warning")

StatsObject = Mapping[str, Any]


@dataclass(frozen=True)
class LogRecord:
    """Represent one normalized log record.

    Attributes:
        severity: Severity bucket derived from the record level.
        message: Non-empty log message text.
    """

    severity: Severity
    message: str


@dataclass(frozen=True)
class LogSource:
    """Represent a normalized log source.

    Attributes:
        records: Records carrying a recognizable message.
        entry_count: Raw number of entries in the source container.
    """

    records: list[LogRecord]
    entry_count: int


@dataclass(frozen=True)
class Setting:
    """Represent one configuration key/value pair.

    Attributes:
        id: Setting identifier, unique within one source.
        value: Textual rendering of the raw value.
        kind: Declared setting type, ``unknown`` when absent.
    """

    id: str
    value: str
    kind: str = "unknown"


@dataclass(frozen=True)
class SettingList:
    """Represent a normalized settings source."""

    settings: list[Setting]
    entry_count: int


@dataclass(frozen=True)
class AppDescriptor:
    """Represent one installed app."""

    name: str
    version: str
    status: str
    author: str = "unknown"
    description: str = ""


@dataclass(frozen=True)
class AppList:
    """Represent a normalized apps source."""

    apps: list[AppDescriptor]
    entry_count: int


@dataclass(frozen=True)
class DumpBundle:
    """Hold the normalized sources for one analysis run.

    A ``None`` source is either absent or unparseable; ``status`` tells the two
    apart.

    Attributes:
        log: Normalized log records.
        settings: Normalized server settings.
        statistics: Raw statistics object.
        apps: Normalized app descriptors.
        omnichannel: Normalized Omnichannel settings.
        status: Presence marker for every source kind.
    """

    log: LogSource | None = None
    settings: SettingList | None = None
    statistics: StatsObject | None = None
    apps: AppList | None = None
    omnichannel: SettingList | None = None
    status: dict[SourceKind, SourceStatus] = field(default_factory=dict)

    def status_of(self, kind: SourceKind) -> SourceStatus:
        """Return the presence marker for one source kind."""
        if kind in self.status:
            return self.status[kind]
        return "absent" if getattr(self, kind) is None else "present"


@dataclass(frozen=True)
class Issue:
    """Represent one classified finding.

    Attributes:
        origin: Classifier that produced the issue.
        category: Issue category.
        tier: Severity tier used for scoring.
        message: Human-readable description.
        source_key: Setting id, statistics field or app name the issue traces to.
        advisory: Listed in reports but ignored by scoring and recommendations.
    """

    origin: IssueOrigin
    category: IssueCategory
    tier: IssueTier
    message: str
    source_key: str | None = None
    advisory: bool = False


@dataclass(frozen=True)
class HealthScore:
    """Represent the aggregated health assessment.

    Counts cover scored issues only; advisory issues are excluded.
    """

    overall: int
    critical_count: int
    error_count: int
    warning_count: int
    recommendations: tuple[str, ...]

    @property
    def total_issues(self) -> int:
        return self.critical_count + self.error_count + self.warning_count

    @property
    def tier_counts(self) -> dict[IssueTier, int]:
        return {
            "critical": self.critical_count,
            "error": self.error_count,
            "warning": self.warning_count,
        }


SummaryT = TypeVar("SummaryT")


@dataclass(frozen=True)
class ClassifierResult(Generic[SummaryT]):
    """Represent the output of one classifier run."""

    summary: SummaryT
    issues: list[Issue]


@dataclass(frozen=True)
class LogSummary:
    """Summarize one log classification pass.

    ``issues_found`` is the plain sum of the three sample sizes, so a message
    matching several pattern sets is counted once per set.
    """

    total_entries: int
    error_count: int
    warning_count: int
    info_count: int
    error_samples: tuple[str, ...]
    warning_samples: tuple[str, ...]
    security_samples: tuple[str, ...]

    @property
    def issues_found(self) -> int:
        return (
            len(self.error_samples)
            + len(self.warning_samples)
            + len(self.security_samples)
        )


@dataclass(frozen=True)
class SettingsSummary:
    """Summarize one settings classification pass.

    Attributes:
        total_settings: Raw number of entries in the settings source.
        security_issue_count: Security issues raised by the rule table.
        performance_issue_count: Performance issues raised by the rule table.
        configuration_warning_count: Configuration warnings raised by the rule table.
        security_related_count: Setting ids that look security related.
        performance_related_count: Setting ids that look performance related.
        notes: Neutral observations for settings that passed their rule.
    """

    total_settings: int
    security_issue_count: int
    performance_issue_count: int
    configuration_warning_count: int
    security_related_count: int
    performance_related_count: int
    notes: tuple[str, ...]


@dataclass(frozen=True)
class StatisticsSummary:
    """Summarize the extracted server statistics."""

    version: str
    node_version: str
    platform: str
    arch: str
    os_type: str
    os_release: str
    uptime_seconds: int
    uptime_days: int
    uptime_hours: int
    memory_mb: int
    memory_free_mb: int
    total_users: int
    online_users: int
    away_users: int
    busy_users: int
    offline_users: int
    total_messages: int
    total_rooms: int
    total_channels: int
    total_private_groups: int
    total_direct_messages: int
    total_livechat_rooms: int
    db_size_mb: int
    federation_enabled: bool
    ldap_enabled: bool
    livechat_enabled: bool
    enterprise_enabled: bool
    performance_issue_count: int

    @property
    def uptime(self) -> str:
        return f"{self.uptime_days}d {self.uptime_hours}h"


@dataclass(frozen=True)
class AppsSummary:
    """Summarize the installed apps."""

    total_apps: int
    enabled_count: int
    disabled_count: int
    security_apps: tuple[str, ...]
    performance_apps: tuple[str, ...]
    integration_apps: tuple[str, ...]
    outdated_apps: tuple[str, ...]
    apps: tuple[AppDescriptor, ...]

    @property
    def outdated_count(self) -> int:
        return len(self.outdated_apps)


@dataclass(frozen=True)
class OmnichannelSummary:
    """Summarize the Omnichannel settings."""

    total_settings: int
    enabled_features: int
    disabled_features: int
    configuration_issue_count: int
    notes: tuple[str, ...]


@dataclass(frozen=True)
class ReportModel:
    """Represent the renderer-agnostic result of one analysis run.

    Every collection field is a tuple or a read-only mapping.

    Attributes:
        source_path: Dump path the run analyzed.
        generated_at: ISO-8601 UTC generation timestamp.
        sources: Analysis marker for every source kind.
        log: Log summary, ``None`` unless analyzed.
        settings: Settings summary, ``None`` unless analyzed.
        statistics: Statistics summary, ``None`` unless analyzed.
        apps: Apps summary, ``None`` unless analyzed.
        omnichannel: Omnichannel summary, ``None`` unless analyzed.
        issues: All issues in classifier order.
        health: Health score and recommendations.
    """

    source_path: str
    generated_at: str
    sources: Mapping[SourceKind, AnalysisStatus]
    log: LogSummary | None
    settings: SettingsSummary | None
    statistics: StatisticsSummary | None
    apps: AppsSummary | None
    omnichannel: OmnichannelSummary | None
    issues: tuple[Issue, ...]
    health: HealthScore

    def is_analyzed(self, kind: SourceKind) -> bool:
        """Return whether the classifier for ``kind`` ran."""
        return self.sources.get(kind) == "analyzed"

    def issues_for(self, origin: IssueOrigin) -> tuple[Issue, ...]:
        """Return issues produced by one classifier."""
        return tuple(issue for issue in self.issues if issue.origin == origin)
