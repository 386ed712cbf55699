# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Analysis configuration and rules-file loading."""

import json
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Mapping

from rcdump.rules import DEFAULT_OMNICHANNEL_RULES, DEFAULT_SETTINGS_RULES, SettingRule

logger = logging.getLogger(__name__)

DEFAULT_ERROR_PATTERNS: tuple[str, ...] = (
    "error",
    "exception",
    "failed",
    "timeout",
    "connection refused",
    "cannot connect",
)
DEFAULT_WARNING_PATTERNS: tuple[str, ...] = (
    "warn",
    "warning",
    "deprecated",
    "slow",
    "retry",
    "fallback",
)
DEFAULT_SECURITY_PATTERNS: tuple[str, ...] = (
    "auth",
    "authentication",
    "unauthorized",
    "permission",
    "security",
    "breach",
)


class ConfigError(ValueError):
    """Represent an invalid analysis rules file."""


@dataclass(frozen=True)
class LogPatterns:
    """Keyword sets used to sample log messages.

    Each set is a disjunction of case-insensitive substrings.

    Attributes:
        error: Keywords selecting error samples.
        warning: Keywords selecting warning samples.
        security: Keywords selecting security samples.
        error_limit: Maximum number of error samples kept.
        warning_limit: Maximum number of warning samples kept.
        security_limit: Maximum number of security samples kept.
    """

    error: tuple[str, ...] = DEFAULT_ERROR_PATTERNS
    warning: tuple[str, ...] = DEFAULT_WARNING_PATTERNS
    security: tuple[str, ...] = DEFAULT_SECURITY_PATTERNS
    error_limit: int = 20
    warning_limit: int = 10
    security_limit: int = 10


@dataclass(frozen=True)
class StatisticsThresholds:
    """Fixed thresholds for statistics performance rules."""

    memory_mb: int = 2048
    online_users: int = 1000
    db_size_mb: int = 10_000
    rooms_per_user: int = 50
    outdated_version_pattern: str = r"^[0-5]\."


@dataclass(frozen=True)
class AnalysisConfig:
    """Group every overridable analysis parameter.

    Attributes:
        log_patterns: Log sampling keyword sets.
        thresholds: Statistics thresholds.
        settings_rules: Rule table keyed by exact setting id.
        omnichannel_rules: Rule table keyed by Omnichannel setting id fragment.
    """

    log_patterns: LogPatterns = field(default_factory=LogPatterns)
    thresholds: StatisticsThresholds = field(default_factory=StatisticsThresholds)
    settings_rules: Mapping[str, SettingRule] = field(
        default_factory=lambda: dict(DEFAULT_SETTINGS_RULES)
    )
    omnichannel_rules: Mapping[str, SettingRule] = field(
        default_factory=lambda: dict(DEFAULT_OMNICHANNEL_RULES)
    )


_THRESHOLD_KEYS: dict[str, str] = {
    "memoryMb": "memory_mb",
    "onlineUsers": "online_users",
    "databaseMb": "db_size_mb",
    "roomsPerUser": "rooms_per_user",
}


def load_config(path: Path) -> AnalysisConfig:
    """Load an analysis rules file.

    Missing sections keep their defaults.

    Args:
        path: JSON rules file path.

    Returns:
        Analysis configuration.

    Raises:
        ConfigError: If the file cannot be read or has an invalid shape.
    """
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.warning(f"Failed to read rules file (path={path} error={exc})")
        raise ConfigError(f"Cannot read rules file {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise ConfigError(f"Rules file {path} must contain a JSON object.")
    config = config_from_dict(payload)
    logger.debug(f"Loaded rules file (path={path})")
    return config


def config_from_dict(payload: Mapping[str, Any]) -> AnalysisConfig:
    """Build a configuration from a decoded rules document.

    Args:
        payload: Decoded rules document.

    Returns:
        Analysis configuration.

    Raises:
        ConfigError: If a section has an invalid shape.
    """
    config = AnalysisConfig()
    patterns_section = payload.get("logPatterns")
    if patterns_section is not None:
        if not isinstance(patterns_section, dict):
            raise ConfigError("logPatterns must be an object.")
        patterns = config.log_patterns
        for name in ("error", "warning", "security"):
            if name in patterns_section:
                patterns = replace(
                    patterns, **{name: _keyword_tuple(name, patterns_section[name])}
                )
        config = replace(config, log_patterns=patterns)

    thresholds_section = payload.get("thresholds")
    if thresholds_section is not None:
        if not isinstance(thresholds_section, dict):
            raise ConfigError("thresholds must be an object.")
        overrides: dict[str, int] = {}
        for key, attribute in _THRESHOLD_KEYS.items():
            if key not in thresholds_section:
                continue
            value = thresholds_section[key]
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"thresholds.{key} must be an integer.")
            overrides[attribute] = value
        config = replace(config, thresholds=replace(config.thresholds, **overrides))
    return config


def _keyword_tuple(name: str, value: Any) -> tuple[str, ...]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"logPatterns.{name} must be a list of strings.")
    keywords = tuple(v for v in value if v)
    if not keywords:
        raise ConfigError(f"logPatterns.{name} must not be empty.")
    return keywords
