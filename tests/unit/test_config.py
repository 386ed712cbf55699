# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Unit tests for analysis rules configuration."""

from pathlib import Path
from typing import Any, Callable

import pytest

from rcdump.config import (
    DEFAULT_SECURITY_PATTERNS,
    AnalysisConfig,
    ConfigError,
    config_from_dict,
    load_config,
)


def test_cfg_001_defaults_match_fixed_thresholds() -> None:
    config = AnalysisConfig()

    assert config.thresholds.memory_mb == 2048
    assert config.thresholds.online_users == 1000
    assert config.thresholds.db_size_mb == 10_000
    assert config.thresholds.rooms_per_user == 50
    assert config.log_patterns.error_limit == 20
    assert "Log_Level" in config.settings_rules


def test_cfg_002_rules_file_overrides_selected_keys(
    tmp_path: Path, write_json: Callable[[Path, Any], Path]
) -> None:
    path = write_json(
        tmp_path / "analysis-rules.json",
        {
            "logPatterns": {"error": ["panic", "ERROR"]},
            "thresholds": {"memoryMb": 8192, "roomsPerUser": 10},
        },
    )

    config = load_config(path)

    assert config.log_patterns.error == ("panic", "ERROR")
    assert config.log_patterns.security == DEFAULT_SECURITY_PATTERNS
    assert config.thresholds.memory_mb == 8192
    assert config.thresholds.rooms_per_user == 10
    assert config.thresholds.online_users == 1000


def test_cfg_003_invalid_shapes_raise_config_error() -> None:
    with pytest.raises(ConfigError):
        config_from_dict({"logPatterns": ["error"]})
    with pytest.raises(ConfigError):
        config_from_dict({"logPatterns": {"warning": []}})
    with pytest.raises(ConfigError):
        config_from_dict({"thresholds": {"memoryMb": "lots"}})
    with pytest.raises(ConfigError):
        config_from_dict({"thresholds": {"onlineUsers": True}})


def test_cfg_004_unreadable_rules_file_raises_config_error(tmp_path: Path) -> None:
    broken = tmp_path / "rules.json"
    broken.write_text("{nope", encoding="utf-8")
    array = tmp_path / "array.json"
    array.write_text("[]", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path / "missing.json")
    with pytest.raises(ConfigError):
        load_config(broken)
    with pytest.raises(ConfigError):
        load_config(array)
