# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Analysis orchestration from a dump bundle to a report model."""

import concurrent.futures
import logging
from datetime import datetime, timezone
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable

from rcdump.classifiers import (
    AppsClassifier,
    LogClassifier,
    OmnichannelClassifier,
    SettingsClassifier,
    StatisticsClassifier,
)
from rcdump.config import AnalysisConfig
from rcdump.locator import DumpFileError, locate_dump
from rcdump.model import (
    SOURCE_KINDS,
    AnalysisStatus,
    ClassifierResult,
    DumpBundle,
    Issue,
    ReportModel,
    SourceKind,
)
from rcdump.normalizer import build_bundle
from rcdump.scorer import compute_health_score

logger = logging.getLogger(__name__)

_ANALYSIS_STATUS: dict[str, AnalysisStatus] = {
    "present": "analyzed",
    "absent": "absent",
    "unparseable": "unparseable",
}


class DumpAnalyzer:
    """Run the per-source classifiers and assemble the report model."""

    def __init__(self, config: AnalysisConfig | None = None, max_workers: int = 1) -> None:
        """Initialize analyzer.

        Args:
            config: Analysis configuration; defaults when omitted.
            max_workers: Worker threads for classifier runs; ``1`` runs them
                sequentially.

        Raises:
            ValueError: If ``max_workers`` is not greater than zero.
        """
        if max_workers <= 0:
            raise ValueError("max_workers must be > 0")
        self._config = config or AnalysisConfig()
        self._max_workers = max_workers
        self._classifiers: dict[SourceKind, Callable[[Any], ClassifierResult[Any]]] = {
            "log": LogClassifier(self._config.log_patterns).classify,
            "settings": SettingsClassifier(self._config.settings_rules).classify,
            "statistics": StatisticsClassifier(self._config.thresholds).classify,
            "apps": AppsClassifier().classify,
            "omnichannel": OmnichannelClassifier(self._config.omnichannel_rules).classify,
        }

    def analyze(
        self,
        bundle: DumpBundle,
        source_path: str,
        generated_at: str | None = None,
    ) -> ReportModel:
        """Analyze one dump bundle.

        Issues are merged once, in fixed source order, after every classifier
        has finished, so the result does not depend on ``max_workers``.

        Args:
            bundle: Normalized dump sources.
            source_path: Dump path recorded in the report.
            generated_at: ISO-8601 timestamp; current UTC time when omitted.

        Returns:
            Immutable report model.
        """
        sources = {kind: _ANALYSIS_STATUS[bundle.status_of(kind)] for kind in SOURCE_KINDS}
        selected = [
            kind
            for kind in SOURCE_KINDS
            if sources[kind] == "analyzed" and getattr(bundle, kind) is not None
        ]
        for kind in SOURCE_KINDS:
            if sources[kind] == "absent":
                logger.debug(f"Skipping classifier for absent source (kind={kind})")
            elif sources[kind] == "unparseable":
                logger.warning(f"Skipping classifier for unparseable source (kind={kind})")

        results = self._run_classifiers(bundle, selected)
        issues: list[Issue] = []
        for kind in SOURCE_KINDS:
            if kind in results:
                issues.extend(results[kind].issues)
        health = compute_health_score(issues)

        logger.info(
            f"Dump analysis completed (source_path={source_path} analyzed={len(results)} "
            f"issues={len(issues)} score={health.overall})"
        )
        return ReportModel(
            source_path=source_path,
            generated_at=generated_at or datetime.now(timezone.utc).isoformat(),
            sources=MappingProxyType(sources),
            log=_summary(results, "log"),
            settings=_summary(results, "settings"),
            statistics=_summary(results, "statistics"),
            apps=_summary(results, "apps"),
            omnichannel=_summary(results, "omnichannel"),
            issues=tuple(issues),
            health=health,
        )

    def analyze_path(
        self, dump_path: Path, generated_at: str | None = None
    ) -> tuple[ReportModel, list[DumpFileError]]:
        """Locate, normalize and analyze a dump on disk.

        Args:
            dump_path: Dump directory or single dump file.
            generated_at: ISO-8601 timestamp; current UTC time when omitted.

        Returns:
            A tuple of report model and recoverable file errors.

        Raises:
            LocatorError: If ``dump_path`` does not exist.
        """
        raw, errors = locate_dump(dump_path)
        bundle = build_bundle(raw)
        report = self.analyze(bundle, source_path=str(dump_path), generated_at=generated_at)
        return report, errors

    def _run_classifiers(
        self, bundle: DumpBundle, kinds: list[SourceKind]
    ) -> dict[SourceKind, ClassifierResult[Any]]:
        if self._max_workers == 1 or len(kinds) <= 1:
            return {kind: self._classifiers[kind](getattr(bundle, kind)) for kind in kinds}

        results: dict[SourceKind, ClassifierResult[Any]] = {}
        with concurrent.futures.ThreadPoolExecutor(
            max_workers=self._max_workers
        ) as executor:
            future_to_kind = {
                executor.submit(self._classifiers[kind], getattr(bundle, kind)): kind
                for kind in kinds
            }
            for future in concurrent.futures.as_completed(future_to_kind):
                results[future_to_kind[future]] = future.result()
        return results


def _summary(results: dict[SourceKind, ClassifierResult[Any]], kind: SourceKind) -> Any:
    result = results.get(kind)
    return None if result is None else result.summary
