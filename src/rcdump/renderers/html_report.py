# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Standalone HTML report rendering."""

import html

from rcdump.model import IssueTier, ReportModel
from rcdump.renderers.common import REPORT_TITLE, score_band, visible_issues

_STYLE = (
    "    body { margin: 0; background: #f3f4f6; color: #101828; font-family: ui-sans-serif, system-ui, sans-serif; }",
    "    .wrap { max-width: 1080px; margin: 0 auto; padding: 24px; }",
    "    .card { background: #ffffff; border: 1px solid #d0d5dd; border-radius: 12px; padding: 16px; margin-bottom: 14px; }",
    "    .score { font-size: 2.4rem; font-weight: 700; }",
    "    .healthy { color: #067647; } .fair { color: #b54708; } .poor { color: #b42318; }",
    "    table { width: 100%; border-collapse: collapse; }",
    "    th, td { text-align: left; padding: 6px 8px; border-bottom: 1px solid #eaecf0; }",
    "    .tier-critical { color: #b42318; font-weight: 700; } .tier-error { color: #c4320a; } .tier-warning { color: #b54708; }",
    "    .muted { color: #475467; }",
)


def _e(value: object) -> str:
    return html.escape(str(value), quote=True)


def render_html(report: ReportModel, minimum: IssueTier = "warning") -> str:
    """Render a report as a standalone HTML page.

    Args:
        report: Analysis report model.
        minimum: Lowest tier of listed issues.

    Returns:
        Complete HTML document with every dynamic value escaped.
    """
    health = report.health
    lines = [
        "<!doctype html>",
        '<html lang="en">',
        "<head>",
        '  <meta charset="utf-8">',
        f"  <title>{_e(REPORT_TITLE)}</title>",
        "  <style>",
        *_STYLE,
        "  </style>",
        "</head>",
        "<body>",
        '  <div class="wrap">',
        '    <section class="card">',
        f"      <h1>{_e(REPORT_TITLE)}</h1>",
        f'      <p class="muted">Dump: {_e(report.source_path)} | Generated: {_e(report.generated_at)}</p>',
        "    </section>",
        '    <section class="card">',
        "      <h2>Health Overview</h2>",
        f'      <div class="score {score_band(health.overall)}">{health.overall}%</div>',
        f"      <p>Total issues: {health.total_issues} | Critical: {health.critical_count}"
        f" | Error: {health.error_count} | Warning: {health.warning_count}</p>",
        "    </section>",
    ]
    lines.extend(_sources_section(report))
    lines.extend(_overview_section(report))
    lines.extend(_issues_section(report, minimum))
    lines.extend(
        [
            '    <section class="card">',
            "      <h2>Recommendations</h2>",
            "      <ul>",
            *(f"        <li>{_e(item)}</li>" for item in health.recommendations),
            "      </ul>",
            "    </section>",
            "  </div>",
            "</body>",
            "</html>",
        ]
    )
    return "\n".join(lines) + "\n"


def _sources_section(report: ReportModel) -> list[str]:
    rows = [
        f"        <tr><td>{_e(kind)}</td><td>{_e(status)}</td></tr>"
        for kind, status in report.sources.items()
    ]
    return [
        '    <section class="card">',
        "      <h2>Sources</h2>",
        "      <table>",
        "        <tr><th>Source</th><th>Status</th></tr>",
        *rows,
        "      </table>",
        "    </section>",
    ]


def _overview_section(report: ReportModel) -> list[str]:
    facts: list[tuple[str, object]] = []
    if report.log is not None:
        facts.extend(
            [
                ("Log entries", report.log.total_entries),
                ("Log errors / warnings / info", f"{report.log.error_count} / {report.log.warning_count} / {report.log.info_count}"),
            ]
        )
    if report.settings is not None:
        facts.append(("Settings", report.settings.total_settings))
    if report.statistics is not None:
        facts.extend(
            [
                ("Version", report.statistics.version),
                ("Uptime", report.statistics.uptime),
                ("Memory (MB)", report.statistics.memory_mb),
                ("Users (online)", f"{report.statistics.total_users} ({report.statistics.online_users})"),
                ("Messages", report.statistics.total_messages),
            ]
        )
    if report.apps is not None:
        facts.append(
            ("Apps (enabled / disabled)", f"{report.apps.total_apps} ({report.apps.enabled_count} / {report.apps.disabled_count})")
        )
    if report.omnichannel is not None:
        facts.append(("Omnichannel settings", report.omnichannel.total_settings))
    if not facts:
        return []
    return [
        '    <section class="card">',
        "      <h2>Analysis Details</h2>",
        "      <table>",
        *(f"        <tr><th>{_e(label)}</th><td>{_e(value)}</td></tr>" for label, value in facts),
        "      </table>",
        "    </section>",
    ]


def _issues_section(report: ReportModel, minimum: IssueTier) -> list[str]:
    issues = visible_issues(report, minimum)
    lines = ['    <section class="card">', "      <h2>Issues</h2>"]
    if not issues:
        lines.append('      <p class="muted">No issues found.</p>')
    else:
        lines.extend(
            [
                "      <table>",
                "        <tr><th>Tier</th><th>Category</th><th>Origin</th><th>Source Key</th><th>Message</th></tr>",
            ]
        )
        for issue in issues:
            lines.append(
                f'        <tr><td class="tier-{_e(issue.tier)}">{_e(issue.tier)}</td>'
                f"<td>{_e(issue.category)}</td><td>{_e(issue.origin)}</td>"
                f"<td>{_e(issue.source_key or '')}</td><td>{_e(issue.message)}</td></tr>"
            )
        lines.append("      </table>")
    lines.append("    </section>")
    return lines
