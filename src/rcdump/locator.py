# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Locate and decode support dump files on disk."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

import pathspec

from rcdump.model import SOURCE_KINDS, SourceKind
from rcdump.normalizer import RawDump, sniff_source_kind

logger = logging.getLogger(__name__)

FileKind = Literal["log", "settings", "statistics", "apps", "omnichannel", "unknown"]

KIND_PATTERNS: dict[SourceKind, tuple[str, ...]] = {
    "log": ("*log*.json",),
    "settings": ("*settings*.json", "!*omnichannel*"),
    "statistics": ("*statistics*.json",),
    "apps": ("*apps*.json",),
    "omnichannel": ("*omnichannel*.json",),
}
# Used only when no settings file outside Omnichannel exists.
SETTINGS_FALLBACK_PATTERNS: tuple[str, ...] = ("*settings*.json",)

# Name fragments checked in order for a single-file dump.
SINGLE_FILE_FRAGMENTS: tuple[tuple[str, SourceKind], ...] = (
    ("log", "log"),
    ("omnichannel", "omnichannel"),
    ("settings", "settings"),
    ("statistics", "statistics"),
    ("apps", "apps"),
)


class LocatorError(RuntimeError):
    """Represent a dump path that cannot be located."""


@dataclass(frozen=True)
class DumpFileError:
    """Represent a dump file that was found but could not be decoded."""

    file_path: str
    message: str


@dataclass(frozen=True)
class LocatedFile:
    """Represent one dump file and the kind resolved from its name.

    Attributes:
        path: File path on disk.
        kind: Source kind from the file name, ``unknown`` for a single file
            whose name carries no kind.
    """

    path: Path
    kind: FileKind


class DumpLocator:
    """Resolve dump files for every source kind."""

    def __init__(self) -> None:
        self._specs = {
            kind: pathspec.GitIgnoreSpec.from_lines(patterns)
            for kind, patterns in KIND_PATTERNS.items()
        }
        self._settings_fallback = pathspec.GitIgnoreSpec.from_lines(
            SETTINGS_FALLBACK_PATTERNS
        )

    def find_files(self, dump_path: Path) -> list[LocatedFile]:
        """Find the file for each source kind.

        Args:
            dump_path: Dump directory or single dump file.

        Returns:
            Located files in source kind order.

        Raises:
            LocatorError: If ``dump_path`` does not exist.
        """
        if not dump_path.exists():
            raise LocatorError(f"Dump path does not exist: {dump_path}")
        if dump_path.is_file():
            return [LocatedFile(path=dump_path, kind=kind_from_name(dump_path.name))]

        candidates = sorted(
            path for path in dump_path.rglob("*.json") if path.is_file()
        )
        relative = {path: path.relative_to(dump_path).as_posix() for path in candidates}
        located: list[LocatedFile] = []
        for kind in SOURCE_KINDS:
            match = self._first_match(candidates, relative, self._specs[kind])
            if match is None and kind == "settings":
                match = self._first_match(candidates, relative, self._settings_fallback)
            if match is None:
                logger.debug(f"No dump file found (kind={kind})")
                continue
            logger.debug(f"Found dump file (kind={kind} path={match})")
            located.append(LocatedFile(path=match, kind=kind))
        return located

    def locate(self, dump_path: Path) -> tuple[RawDump, list[DumpFileError]]:
        """Locate and decode every dump file.

        Files that cannot be read or decoded mark their kind undecodable and
        are reported as errors instead of aborting the run.

        Args:
            dump_path: Dump directory or single dump file.

        Returns:
            A tuple of decoded payloads and recoverable file errors.

        Raises:
            LocatorError: If ``dump_path`` does not exist.
        """
        payloads: dict[SourceKind, Any] = {}
        undecodable: set[SourceKind] = set()
        unknown: list[Any] = []
        errors: list[DumpFileError] = []
        for located in self.find_files(dump_path):
            try:
                payload = json.loads(located.path.read_text(encoding="utf-8"))
            except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
                logger.warning(
                    f"Skipping dump file due to read/decode failure "
                    f"(file_path={located.path} error={exc})"
                )
                errors.append(DumpFileError(file_path=str(located.path), message=str(exc)))
                if located.kind != "unknown":
                    undecodable.add(located.kind)
                continue
            if located.kind == "unknown":
                unknown.append(payload)
            else:
                payloads[located.kind] = payload
        raw = RawDump(
            payloads=payloads, undecodable=frozenset(undecodable), unknown=unknown
        )
        return raw, errors

    @staticmethod
    def _first_match(
        candidates: list[Path],
        relative: dict[Path, str],
        spec: pathspec.GitIgnoreSpec,
    ) -> Path | None:
        return next(
            (path for path in candidates if spec.match_file(relative[path])), None
        )


def kind_from_name(file_name: str) -> FileKind:
    """Resolve a source kind from a single file name."""
    lowered = file_name.lower()
    for fragment, kind in SINGLE_FILE_FRAGMENTS:
        if fragment in lowered:
            return kind
    return "unknown"


def locate_dump(dump_path: Path) -> tuple[RawDump, list[DumpFileError]]:
    """Locate and decode a dump with the default locator."""
    return DumpLocator().locate(dump_path)


def detect_sources(dump_path: Path) -> list[tuple[LocatedFile, str]]:
    """List located files with the kind sniffed from their content.

    Args:
        dump_path: Dump directory or single dump file.

    Returns:
        Pairs of located file and sniffed kind; ``unreadable`` when the file
        cannot be decoded.

    Raises:
        LocatorError: If ``dump_path`` does not exist.
    """
    detected: list[tuple[LocatedFile, str]] = []
    for located in DumpLocator().find_files(dump_path):
        try:
            payload = json.loads(located.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.warning(
                f"Cannot sniff dump file (file_path={located.path} error={exc})"
            )
            detected.append((located, "unreadable"))
            continue
        detected.append((located, sniff_source_kind(payload)))
    return detected
