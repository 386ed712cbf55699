# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Per-source classifiers for the dump analyzer."""

from rcdump.classifiers.apps import AppsClassifier
from rcdump.classifiers.logs import LogClassifier
from rcdump.classifiers.omnichannel import OmnichannelClassifier
from rcdump.classifiers.settings import DuplicateSettingError, SettingsClassifier
from rcdump.classifiers.statistics import StatisticsClassifier

__all__ = [
    "AppsClassifier",
    "DuplicateSettingError",
    "LogClassifier",
    "OmnichannelClassifier",
    "SettingsClassifier",
    "StatisticsClassifier",
]
