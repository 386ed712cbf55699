# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Console report rendering with rich."""

from typing import TextIO

from rich.console import Console
from rich.markup import escape
from rich.style import Style
from rich.table import Table

from rcdump.model import IssueTier, ReportModel
from rcdump.renderers.common import REPORT_TITLE, score_band, visible_issues

SCORE_STYLES: dict[str, str] = {"healthy": "green", "fair": "yellow", "poor": "red"}
TIER_STYLES: dict[str, str] = {"critical": "bold red", "error": "red", "warning": "yellow"}
SAMPLE_LIMIT = 5

TABLE_COLUMN_RATIOS: dict[str, int] = {
    "tier": 1,
    "category": 1,
    "origin": 1,
    "source_key": 2,
    "message": 5,
}


def render_text(report: ReportModel, stdout: TextIO, minimum: IssueTier = "warning") -> None:
    """Write a console report.

    Args:
        report: Analysis report model.
        stdout: Output stream.
        minimum: Lowest tier of listed issues.
    """
    console = Console(file=stdout, force_terminal=False, color_system="truecolor")
    console.rule(REPORT_TITLE.upper(), style=Style(color="cyan"))
    console.print(f"Dump: {escape(report.source_path)}", highlight=False)
    console.print(f"Generated: {escape(report.generated_at)}", highlight=False)

    health = report.health
    _section(console, "Health Overview")
    style = SCORE_STYLES[score_band(health.overall)]
    console.print(f"Overall Health Score: [{style}]{health.overall}%[/{style}]")
    console.print(
        f"Total Issues: {health.total_issues} (critical={health.critical_count} "
        f"error={health.error_count} warning={health.warning_count})",
        highlight=False,
    )
    console.print(
        " ".join(f"{kind}={status}" for kind, status in report.sources.items()),
        highlight=False,
    )

    if report.log is not None:
        log = report.log
        _section(console, "Log Analysis")
        console.print(f"Total Log Entries: {log.total_entries}")
        console.print(
            f"Errors: [red]{log.error_count}[/red] | Warnings: [yellow]{log.warning_count}[/yellow]"
            f" | Info: [cyan]{log.info_count}[/cyan]"
        )
        if log.error_samples:
            console.print("Top Error Issues:")
            for sample in log.error_samples[:SAMPLE_LIMIT]:
                console.print(f"  [red]• {escape(sample)}[/red]")
        else:
            console.print("[green]✓ No critical errors found[/green]")

    if report.settings is not None:
        settings = report.settings
        _section(console, "Settings Analysis")
        console.print(f"Total Settings: {settings.total_settings}")
        console.print(f"Security Issues: [red]{settings.security_issue_count}[/red]")
        console.print(f"Performance Issues: [yellow]{settings.performance_issue_count}[/yellow]")
        console.print(
            f"Configuration Warnings: [cyan]{settings.configuration_warning_count}[/cyan]"
        )
        for note in settings.notes[:SAMPLE_LIMIT]:
            console.print(f"  [green]✓ {escape(note)}[/green]")

    if report.statistics is not None:
        stats = report.statistics
        _section(console, "Server Statistics")
        console.print(
            f"Version: {escape(stats.version)} (Node {escape(stats.node_version)})",
            highlight=False,
        )
        console.print(
            f"Platform: {escape(stats.platform)}/{escape(stats.arch)} | Uptime: {stats.uptime}",
            highlight=False,
        )
        console.print(f"Memory: {stats.memory_mb}MB (free {stats.memory_free_mb}MB)")
        console.print(
            f"Users: {stats.total_users} (online {stats.online_users} away {stats.away_users} "
            f"busy {stats.busy_users} offline {stats.offline_users})"
        )
        console.print(f"Messages: {stats.total_messages} | Rooms: {stats.total_rooms}")

    if report.apps is not None:
        apps = report.apps
        _section(console, "Apps & Integrations")
        console.print(
            f"Total Apps: {apps.total_apps} | Enabled: [green]{apps.enabled_count}[/green]"
            f" | Disabled: {apps.disabled_count} | Outdated: [yellow]{apps.outdated_count}[/yellow]"
        )

    if report.omnichannel is not None:
        omni = report.omnichannel
        _section(console, "Omnichannel Analysis")
        console.print(f"Total Settings: {omni.total_settings}")
        console.print(
            f"Enabled Features: [green]{omni.enabled_features}[/green] | "
            f"Disabled Features: {omni.disabled_features} | "
            f"Configuration Issues: [red]{omni.configuration_issue_count}[/red]"
        )

    issues = visible_issues(report, minimum)
    _section(console, f"Issues (minimum tier: {minimum})")
    if issues:
        table = Table(show_header=True, show_lines=True, expand=True)
        for column, ratio in TABLE_COLUMN_RATIOS.items():
            table.add_column(column, ratio=ratio, overflow="fold")
        for issue in issues:
            table.add_row(
                f"[{TIER_STYLES[issue.tier]}]{issue.tier}[/{TIER_STYLES[issue.tier]}]",
                issue.category,
                issue.origin,
                escape(issue.source_key or ""),
                escape(issue.message),
            )
        console.print(table)
    else:
        console.print("[green]No issues found[/green]")

    _section(console, "Recommendations")
    for index, recommendation in enumerate(health.recommendations, start=1):
        console.print(f"{index}. {recommendation}", highlight=False)


def _section(console: Console, title: str) -> None:
    console.rule(title, style=Style(color="green"), characters="-", align="left")
