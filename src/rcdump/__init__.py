# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Public import surface for the support dump analyzer."""

from rcdump.config import AnalysisConfig, ConfigError, load_config
from rcdump.engine import DumpAnalyzer
from rcdump.locator import DumpFileError, LocatorError, detect_sources, locate_dump
from rcdump.model import DumpBundle, HealthScore, Issue, ReportModel
from rcdump.normalizer import RawDump, build_bundle
from rcdump.scorer import compute_health_score

__version__ = "1.0.0"

__all__ = [
    "AnalysisConfig",
    "ConfigError",
    "DumpAnalyzer",
    "DumpBundle",
    "DumpFileError",
    "HealthScore",
    "Issue",
    "LocatorError",
    "RawDump",
    "ReportModel",
    "build_bundle",
    "compute_health_score",
    "detect_sources",
    "load_config",
    "locate_dump",
]
