# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Unit tests for dump file location."""

from pathlib import Path
from typing import Any, Callable

import pytest

from rcdump.locator import DumpLocator, LocatorError, detect_sources, kind_from_name, locate_dump

WriteJson = Callable[[Path, Any], Path]


def test_loc_001_directory_resolves_each_kind(tmp_path: Path, write_json: WriteJson) -> None:
    write_json(tmp_path / "rocketchat-log.json", {"queue": []})
    write_json(tmp_path / "rocketchat-settings.json", [])
    write_json(tmp_path / "omnichannel-settings.json", [])
    write_json(tmp_path / "nested" / "server-statistics.json", {"totalUsers": 1})
    write_json(tmp_path / "installed-apps.json", {"apps": []})
    (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")

    located = {item.kind: item.path.name for item in DumpLocator().find_files(tmp_path)}

    assert located == {
        "log": "rocketchat-log.json",
        "settings": "rocketchat-settings.json",
        "statistics": "server-statistics.json",
        "apps": "installed-apps.json",
        "omnichannel": "omnichannel-settings.json",
    }


def test_loc_002_settings_falls_back_to_omnichannel_file(
    tmp_path: Path, write_json: WriteJson
) -> None:
    write_json(tmp_path / "omnichannel-settings.json", [])

    located = {item.kind: item.path.name for item in DumpLocator().find_files(tmp_path)}

    assert located == {
        "settings": "omnichannel-settings.json",
        "omnichannel": "omnichannel-settings.json",
    }


def test_loc_003_single_file_kind_comes_from_name() -> None:
    assert kind_from_name("omnichannel-settings.json") == "omnichannel"
    assert kind_from_name("Server-Settings.json") == "settings"
    assert kind_from_name("statistics.json") == "statistics"
    assert kind_from_name("support-dump.json") == "unknown"


def test_loc_004_unknown_single_file_is_decoded_as_unknown_payload(
    tmp_path: Path, write_json: WriteJson
) -> None:
    dump = write_json(tmp_path / "support-dump.json", {"totalUsers": 3})

    raw, errors = locate_dump(dump)

    assert errors == []
    assert raw.payloads == {}
    assert raw.unknown == [{"totalUsers": 3}]


def test_loc_005_undecodable_file_is_recorded_not_raised(tmp_path: Path) -> None:
    (tmp_path / "rocketchat-log.json").write_text("{oops", encoding="utf-8")

    raw, errors = locate_dump(tmp_path)

    assert raw.undecodable == frozenset({"log"})
    assert len(errors) == 1
    assert errors[0].file_path.endswith("rocketchat-log.json")


def test_loc_006_missing_path_raises(tmp_path: Path) -> None:
    with pytest.raises(LocatorError):
        locate_dump(tmp_path / "missing")


def test_loc_007_detect_reports_sniffed_kinds(tmp_path: Path, write_json: WriteJson) -> None:
    write_json(tmp_path / "server-statistics.json", {"totalMessages": 5})
    (tmp_path / "rocketchat-apps.json").write_text("[", encoding="utf-8")

    detected = {located.kind: sniffed for located, sniffed in detect_sources(tmp_path)}

    assert detected == {"statistics": "statistics", "apps": "unreadable"}
