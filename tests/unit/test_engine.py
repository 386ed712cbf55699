# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Unit tests for analysis orchestration."""

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from rcdump.config import AnalysisConfig, StatisticsThresholds
from rcdump.engine import DumpAnalyzer
from rcdump.locator import LocatorError
from rcdump.model import DumpBundle
from rcdump.normalizer import RawDump, build_bundle
from rcdump.scorer import RECOMMEND_HEALTHY

GENERATED_AT = "2026-01-01T00:00:00+00:00"


def _full_raw() -> RawDump:
    return RawDump(
        payloads={
            "log": {
                "queue": [
                    {"string": json.dumps({"level": 50, "msg": "Connection refused to database"})},
                    {"string": json.dumps({"level": 30, "msg": "Deprecated API in use"})},
                ]
            },
            "settings": [
                {"_id": "Accounts_TwoFactorAuthentication_Enabled", "value": False},
                {"_id": "RetentionPolicy_Enabled", "value": False},
            ],
            "statistics": {"version": "6.2.0", "totalUsers": 4, "onlineUsers": 2},
            "apps": {"apps": [{"name": "Legacy", "version": "2.0.0", "status": "enabled"}]},
            "omnichannel": [{"_id": "Livechat_Omnichannel_enable", "value": False}],
        }
    )


def test_engine_001_empty_bundle_scores_100_with_default_recommendation() -> None:
    report = DumpAnalyzer().analyze(DumpBundle(), source_path="empty", generated_at=GENERATED_AT)

    assert report.health.overall == 100
    assert report.health.tier_counts == {"critical": 0, "error": 0, "warning": 0}
    assert report.health.recommendations == (RECOMMEND_HEALTHY,)
    assert set(report.sources.values()) == {"absent"}
    assert report.log is None and report.statistics is None


def test_engine_002_single_error_log_record_reports_one_error() -> None:
    bundle = build_bundle(
        RawDump(payloads={"log": [{"level": 50, "msg": "Connection refused to database"}]})
    )

    report = DumpAnalyzer().analyze(bundle, source_path="log.json", generated_at=GENERATED_AT)

    assert report.log is not None
    assert report.log.error_count == 1
    assert report.log.error_samples == ("Connection refused to database",)
    assert report.health.overall == 90


def test_engine_003_two_factor_only_settings_scores_65() -> None:
    bundle = build_bundle(
        RawDump(
            payloads={
                "settings": {
                    "settings": [
                        {"_id": "Accounts_TwoFactorAuthentication_Enabled", "value": False},
                        {"_id": "Site_Name", "value": "Chat"},
                    ]
                }
            }
        )
    )

    report = DumpAnalyzer().analyze(bundle, source_path="settings.json", generated_at=GENERATED_AT)

    assert len(report.issues) == 1
    assert report.issues[0].category == "security"
    assert report.health.overall == 65


def test_engine_004_issues_merge_in_fixed_source_order() -> None:
    report = DumpAnalyzer().analyze(
        build_bundle(_full_raw()), source_path="dump", generated_at=GENERATED_AT
    )

    origins = [issue.origin for issue in report.issues]
    assert origins == sorted(
        origins, key=["log", "settings", "statistics", "apps", "omnichannel"].index
    )
    assert set(origins) == {"log", "settings", "apps", "omnichannel"}
    assert all(report.is_analyzed(kind) for kind in report.sources)


def test_engine_005_thread_pool_gives_identical_report() -> None:
    bundle = build_bundle(_full_raw())

    sequential = DumpAnalyzer().analyze(bundle, source_path="dump", generated_at=GENERATED_AT)
    parallel = DumpAnalyzer(max_workers=4).analyze(
        bundle, source_path="dump", generated_at=GENERATED_AT
    )

    assert parallel == sequential


def test_engine_006_analysis_is_idempotent() -> None:
    analyzer = DumpAnalyzer()
    bundle = build_bundle(_full_raw())

    first = analyzer.analyze(bundle, source_path="dump", generated_at=GENERATED_AT)
    second = analyzer.analyze(bundle, source_path="dump", generated_at=GENERATED_AT)

    assert first == second


def test_engine_007_unparseable_source_is_skipped_without_issue() -> None:
    bundle = build_bundle(RawDump(payloads={"statistics": "not an object"}))

    report = DumpAnalyzer().analyze(bundle, source_path="dump", generated_at=GENERATED_AT)

    assert report.sources["statistics"] == "unparseable"
    assert report.statistics is None
    assert report.issues == ()


def test_engine_008_config_thresholds_flow_to_classifiers() -> None:
    config = AnalysisConfig(thresholds=StatisticsThresholds(online_users=1))
    bundle = build_bundle(RawDump(payloads={"statistics": {"version": "7.0.0", "onlineUsers": 2}}))

    report = DumpAnalyzer(config=config).analyze(bundle, source_path="dump", generated_at=GENERATED_AT)

    assert [issue.source_key for issue in report.issues] == ["onlineUsers"]


def test_engine_009_invalid_worker_count_is_rejected() -> None:
    with pytest.raises(ValueError):
        DumpAnalyzer(max_workers=0)


def test_engine_010_analyze_path_locates_and_reports_file_errors(
    tmp_path: Path, write_json: Callable[[Path, Any], Path]
) -> None:
    dump = tmp_path / "dump"
    write_json(dump / "rocketchat-statistics.json", {"version": "5.0.0", "totalUsers": 1})
    (dump / "rocketchat-settings.json").write_text("{broken", encoding="utf-8")

    report, errors = DumpAnalyzer().analyze_path(dump, generated_at=GENERATED_AT)

    assert report.sources["statistics"] == "analyzed"
    assert report.sources["settings"] == "unparseable"
    assert [issue.source_key for issue in report.issues] == ["version"]
    assert len(errors) == 1
    assert errors[0].file_path.endswith("rocketchat-settings.json")


def test_engine_011_analyze_path_raises_for_missing_dump(tmp_path: Path) -> None:
    with pytest.raises(LocatorError):
        DumpAnalyzer().analyze_path(tmp_path / "missing")


def test_engine_012_large_queue_is_listed_but_keeps_perfect_score() -> None:
    bundle = build_bundle(
        RawDump(payloads={"omnichannel": [{"_id": "Livechat_queue_size", "value": 250}]})
    )

    report = DumpAnalyzer().analyze(bundle, source_path="dump", generated_at=GENERATED_AT)

    assert report.omnichannel is not None
    assert report.omnichannel.configuration_issue_count == 0
    assert [issue.message for issue in report.issues] == ["Large queue size configured (250)"]
    assert report.health.overall == 100
    assert report.health.error_count == 0
    assert report.health.recommendations == (RECOMMEND_HEALTHY,)


def test_engine_013_report_collections_are_read_only() -> None:
    report = DumpAnalyzer().analyze(
        build_bundle(_full_raw()), source_path="dump", generated_at=GENERATED_AT
    )

    assert isinstance(report.issues, tuple)
    assert isinstance(report.health.recommendations, tuple)
    assert report.settings is not None and isinstance(report.settings.notes, tuple)
    assert report.apps is not None and isinstance(report.apps.outdated_apps, tuple)
    with pytest.raises(TypeError):
        report.sources["log"] = "absent"  # type: ignore[index]
