# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Unit tests for the rcdump command line interface."""

import io
import json
import re
from pathlib import Path
from typing import Any, Callable

from cli.rcdump_cli import run

WriteJson = Callable[[Path, Any], Path]


def _strip_ansi(text: str) -> str:
    return re.sub(r"\x1b\[[0-9;]*m", "", text)


def _dump(root: Path, write_json: WriteJson) -> Path:
    write_json(
        root / "rocketchat-settings.json",
        [{"_id": "Accounts_TwoFactorAuthentication_Enabled", "value": False}],
    )
    write_json(root / "rocketchat-statistics.json", {"version": "6.5.0", "totalUsers": 2})
    return root


def test_cli_001_requires_a_command() -> None:
    stdout = io.StringIO()
    stderr = io.StringIO()

    exit_code = run([], stdout=stdout, stderr=stderr)

    assert exit_code == 2


def test_cli_002_analyze_fails_when_dump_path_is_missing(tmp_path: Path) -> None:
    stdout = io.StringIO()
    stderr = io.StringIO()

    exit_code = run(
        ["analyze", "--path", str(tmp_path / "missing")], stdout=stdout, stderr=stderr
    )

    assert exit_code == 2
    assert "Dump path does not exist" in stderr.getvalue()


def test_cli_003_analyze_writes_json_report(tmp_path: Path, write_json: WriteJson) -> None:
    dump = _dump(tmp_path / "dump", write_json)
    stdout = io.StringIO()
    stderr = io.StringIO()

    exit_code = run(
        ["analyze", "--path", str(dump), "--format", "json"], stdout=stdout, stderr=stderr
    )

    assert exit_code == 0
    payload = json.loads(stdout.getvalue())
    assert payload["healthScore"]["overall"] == 65
    assert payload["sources"]["settings"] == "analyzed"
    assert payload["metadata"]["dumpPath"] == str(dump)


def test_cli_004_analyze_writes_output_file(tmp_path: Path, write_json: WriteJson) -> None:
    dump = _dump(tmp_path / "dump", write_json)
    output = tmp_path / "reports" / "report.csv"
    stdout = io.StringIO()
    stderr = io.StringIO()

    exit_code = run(
        ["analyze", "--path", str(dump), "--format", "csv", "--output", str(output)],
        stdout=stdout,
        stderr=stderr,
    )

    assert exit_code == 0
    assert stdout.getvalue() == ""
    lines = output.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "Tier,Category,Origin,Source Key,Message"
    assert len(lines) == 2


def test_cli_005_analyze_rejects_bad_rules_file(tmp_path: Path, write_json: WriteJson) -> None:
    dump = _dump(tmp_path / "dump", write_json)
    rules = tmp_path / "rules.json"
    rules.write_text("{", encoding="utf-8")
    stdout = io.StringIO()
    stderr = io.StringIO()

    exit_code = run(
        ["analyze", "--path", str(dump), "--config", str(rules)], stdout=stdout, stderr=stderr
    )

    assert exit_code == 2
    assert "Cannot read rules file" in stderr.getvalue()


def test_cli_006_analyze_rejects_non_positive_workers(
    tmp_path: Path, write_json: WriteJson
) -> None:
    dump = _dump(tmp_path / "dump", write_json)
    stdout = io.StringIO()
    stderr = io.StringIO()

    exit_code = run(
        ["analyze", "--path", str(dump), "--workers", "0"], stdout=stdout, stderr=stderr
    )

    assert exit_code == 2


def test_cli_007_analyze_reports_undecodable_files_and_continues(
    tmp_path: Path, write_json: WriteJson
) -> None:
    dump = _dump(tmp_path / "dump", write_json)
    (dump / "rocketchat-apps.json").write_text("[", encoding="utf-8")
    stdout = io.StringIO()
    stderr = io.StringIO()

    exit_code = run(
        ["analyze", "--path", str(dump), "--format", "text", "--workers", "3"],
        stdout=stdout,
        stderr=stderr,
    )

    assert exit_code == 0
    assert "dump_file_error:" in stderr.getvalue()
    assert "Overall Health Score: 65%" in _strip_ansi(stdout.getvalue())


def test_cli_008_detect_lists_located_sources(tmp_path: Path, write_json: WriteJson) -> None:
    dump = _dump(tmp_path / "dump", write_json)
    stdout = io.StringIO()
    stderr = io.StringIO()

    exit_code = run(["detect", "--path", str(dump)], stdout=stdout, stderr=stderr)

    assert exit_code == 0
    output = _strip_ansi(stdout.getvalue())
    assert "sources_found=2" in output
    assert "statistics" in output
