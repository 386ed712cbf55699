# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Source normalization from decoded dump payloads to canonical shapes.

Every normalizer tolerates the container shapes seen in support dumps
(envelope-wrapped, bare array, single object). An unrecognized shape yields
``None``, which the bundle records as ``unparseable``; normalizers never raise
for shape reasons.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Literal, Mapping

from rcdump.model import (
    SOURCE_KINDS,
    AppDescriptor,
    AppList,
    DumpBundle,
    LogRecord,
    LogSource,
    Setting,
    SettingList,
    Severity,
    SourceKind,
    SourceStatus,
    StatsObject,
)

logger = logging.getLogger(__name__)

SniffedKind = Literal["log", "settings", "statistics", "apps", "unknown"]

MESSAGE_FIELDS: tuple[str, ...] = ("message", "msg", "text")
SETTING_ID_FIELDS: tuple[str, ...] = ("_id", "key", "id")
WARN_LEVEL = 30
ERROR_LEVEL = 40

_ERROR_NAMES = {"error", "fatal", "critical"}
_WARN_NAMES = {"warn", "warning"}

# Payloads of unknown kind that sniff as anything are treated as all of these.
COMPREHENSIVE_ALIASES: tuple[SourceKind, ...] = ("log", "settings", "statistics")


@dataclass(frozen=True)
class RawDump:
    """Hold decoded payloads before normalization.

    Attributes:
        payloads: Decoded payload per source kind resolved from file names.
        undecodable: Source kinds whose file was found but could not be decoded.
        unknown: Decoded payloads whose kind could not be told from the file name.
    """

    payloads: dict[SourceKind, Any] = field(default_factory=dict)
    undecodable: frozenset[SourceKind] = frozenset()
    unknown: list[Any] = field(default_factory=list)


def severity_from_level(level: Any) -> Severity:
    """Map a numeric or textual log level to a severity bucket.

    Args:
        level: Raw level value; numeric levels use fixed thresholds.

    Returns:
        Severity bucket, ``info`` when the level is missing or unrecognized.
    """
    if isinstance(level, bool) or level is None:
        return "info"
    if isinstance(level, (int, float)):
        return _severity_from_number(level)
    if isinstance(level, str):
        text = level.strip().lower()
        try:
            return _severity_from_number(float(text))
        except ValueError:
            pass
        if text in _ERROR_NAMES:
            return "error"
        if text in _WARN_NAMES:
            return "warn"
    return "info"


def _severity_from_number(level: float) -> Severity:
    if level >= ERROR_LEVEL:
        return "error"
    if level >= WARN_LEVEL:
        return "warn"
    return "info"


def normalize_log(payload: Any) -> LogSource | None:
    """Normalize a log payload.

    Args:
        payload: Envelope object with a ``queue`` of encoded records, bare array of
            record objects, or a single record object.

    Returns:
        Normalized log source, or ``None`` when the shape is unrecognized.
    """
    if isinstance(payload, dict) and "queue" in payload:
        queue = payload["queue"]
        if not isinstance(queue, list):
            return None
        records = [
            record
            for record in (_record_from_queue_entry(entry) for entry in queue)
            if record is not None
        ]
        return LogSource(records=records, entry_count=len(queue))
    if isinstance(payload, list):
        records = [
            record
            for record in (_record_from_object(entry) for entry in payload)
            if record is not None
        ]
        return LogSource(records=records, entry_count=len(payload))
    if isinstance(payload, dict):
        record = _record_from_object(payload)
        return LogSource(records=[record] if record else [], entry_count=1)
    return None


def _record_from_queue_entry(entry: Any) -> LogRecord | None:
    if not isinstance(entry, dict):
        return None
    encoded = entry.get("string")
    if encoded is None:
        return _record_from_object(entry)
    if not isinstance(encoded, str):
        return None
    try:
        inner = json.loads(encoded)
    except json.JSONDecodeError:
        logger.debug("Skipping queue entry with undecodable payload")
        return None
    if not isinstance(inner, dict) or "level" not in inner:
        return None
    message = inner.get("msg")
    if not isinstance(message, str) or not message:
        return None
    return LogRecord(severity=severity_from_level(inner["level"]), message=message)


def _record_from_object(entry: Any) -> LogRecord | None:
    if not isinstance(entry, dict):
        return None
    message = next(
        (
            entry[name]
            for name in MESSAGE_FIELDS
            if isinstance(entry.get(name), str) and entry[name]
        ),
        None,
    )
    if message is None:
        return None
    level = entry.get("level", entry.get("severity"))
    return LogRecord(severity=severity_from_level(level), message=message)


def stringify_value(value: Any) -> str:
    """Render a raw setting value as text.

    Args:
        value: Decoded JSON value.

    Returns:
        ``true``/``false`` for booleans, integral floats without a fraction,
        compact JSON for containers, ``str(value)`` otherwise.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"), sort_keys=True)
    return str(value)


def normalize_settings(payload: Any) -> SettingList | None:
    """Normalize a settings payload.

    Entries with a ``null`` value or without an id are dropped. When an id
    repeats, the first occurrence wins.

    Args:
        payload: Bare array of setting objects, ``{"settings": [...]}``,
            ``{"settings": {id: value}}``, or a single setting object.

    Returns:
        Normalized settings, or ``None`` when the shape is unrecognized.
    """
    entries = _setting_entries(payload)
    if entries is None:
        return None
    settings: list[Setting] = []
    seen: set[str] = set()
    for entry in entries:
        setting = _setting_from_object(entry)
        if setting is None:
            continue
        if setting.id in seen:
            logger.debug(f"Ignoring duplicate setting (id={setting.id})")
            continue
        seen.add(setting.id)
        settings.append(setting)
    return SettingList(settings=settings, entry_count=len(entries))


def _setting_entries(payload: Any) -> list[Any] | None:
    if isinstance(payload, list):
        return payload
    if not isinstance(payload, dict):
        return None
    if "settings" in payload:
        inner = payload["settings"]
        if isinstance(inner, list):
            return inner
        if isinstance(inner, dict):
            return [_entry_from_mapping_item(key, value) for key, value in inner.items()]
        return None
    if any(name in payload for name in SETTING_ID_FIELDS):
        return [payload]
    return None


def _entry_from_mapping_item(key: str, value: Any) -> dict[str, Any]:
    if isinstance(value, dict) and "value" in value:
        return {"_id": key, "value": value["value"], "type": value.get("type")}
    return {"_id": key, "value": value}


def _setting_from_object(entry: Any) -> Setting | None:
    if not isinstance(entry, dict):
        return None
    setting_id = next(
        (
            entry[name]
            for name in SETTING_ID_FIELDS
            if isinstance(entry.get(name), str) and entry[name]
        ),
        None,
    )
    if setting_id is None or entry.get("value") is None:
        return None
    kind = entry.get("type")
    return Setting(
        id=setting_id,
        value=stringify_value(entry["value"]),
        kind=kind if isinstance(kind, str) and kind else "unknown",
    )


def normalize_statistics(payload: Any) -> StatsObject | None:
    """Normalize a statistics payload.

    Args:
        payload: Statistics object.

    Returns:
        The object itself, or ``None`` when it is not an object.
    """
    if isinstance(payload, dict):
        return payload
    return None


def normalize_apps(payload: Any) -> AppList | None:
    """Normalize an installed-apps payload.

    Descriptors missing ``name``, ``version`` or ``status`` are dropped.

    Args:
        payload: ``{"apps": [...]}``, a bare array, or a single app object.

    Returns:
        Normalized apps, or ``None`` when the shape is unrecognized.
    """
    if isinstance(payload, dict) and isinstance(payload.get("apps"), list):
        entries: list[Any] = payload["apps"]
    elif isinstance(payload, list):
        entries = payload
    elif isinstance(payload, dict) and "name" in payload:
        entries = [payload]
    else:
        return None
    apps = [
        app for app in (_app_from_object(entry) for entry in entries) if app is not None
    ]
    return AppList(apps=apps, entry_count=len(entries))


def _app_from_object(entry: Any) -> AppDescriptor | None:
    if not isinstance(entry, dict):
        return None
    values = [entry.get(name) for name in ("name", "version", "status")]
    if any(value is None or value == "" for value in values):
        return None
    name, version, status = (stringify_value(value) for value in values)
    author = entry.get("author")
    if isinstance(author, dict):
        author = author.get("name")
    description = entry.get("description")
    return AppDescriptor(
        name=name,
        version=version,
        status=status,
        author=stringify_value(author) if author else "unknown",
        description=description if isinstance(description, str) else "",
    )


def _has_any_key(*keys: str) -> Callable[[Mapping[str, Any]], bool]:
    return lambda payload: any(key in payload for key in keys)


SIGNATURE_RULES: tuple[tuple[Callable[[Mapping[str, Any]], bool], SniffedKind], ...] = (
    (_has_any_key("settings"), "settings"),
    (_has_any_key("totalUsers", "totalMessages"), "statistics"),
    (_has_any_key("queue"), "log"),
    (_has_any_key("apps", "marketplace"), "apps"),
)


def sniff_source_kind(payload: Any) -> SniffedKind:
    """Infer a source kind from a payload's top-level keys.

    Args:
        payload: Decoded payload of unknown kind.

    Returns:
        Label of the first matching signature rule, or ``unknown``.
    """
    if not isinstance(payload, dict):
        return "unknown"
    for predicate, label in SIGNATURE_RULES:
        if predicate(payload):
            return label
    return "unknown"


_NORMALIZERS: dict[SourceKind, Callable[[Any], Any]] = {
    "log": normalize_log,
    "settings": normalize_settings,
    "statistics": normalize_statistics,
    "apps": normalize_apps,
    "omnichannel": normalize_settings,
}


def build_bundle(raw: RawDump) -> DumpBundle:
    """Normalize every decoded payload into one bundle.

    Payloads of unknown kind whose content sniffs as a known kind are aliased
    into the log, settings and statistics slots at once (and the apps slot when
    they sniff as apps), filling only slots that are still empty.

    Args:
        raw: Decoded payloads.

    Returns:
        Immutable dump bundle with a status for every source kind.
    """
    payloads: dict[SourceKind, Any] = dict(raw.payloads)
    for payload in raw.unknown:
        label = sniff_source_kind(payload)
        if label == "unknown":
            logger.debug("Ignoring payload with no recognizable signature")
            continue
        targets = list(COMPREHENSIVE_ALIASES)
        if label == "apps":
            targets.append("apps")
        for kind in targets:
            if kind not in payloads and kind not in raw.undecodable:
                logger.debug(f"Aliasing comprehensive payload (kind={kind} signature={label})")
                payloads[kind] = payload

    sources: dict[SourceKind, Any] = {}
    status: dict[SourceKind, SourceStatus] = {}
    for kind in SOURCE_KINDS:
        if kind in raw.undecodable:
            status[kind] = "unparseable"
            continue
        if kind not in payloads:
            status[kind] = "absent"
            continue
        normalized = _NORMALIZERS[kind](payloads[kind])
        if normalized is None:
            logger.warning(f"Source present but unparseable (kind={kind})")
            status[kind] = "unparseable"
            continue
        sources[kind] = normalized
        status[kind] = "present"

    return DumpBundle(
        log=sources.get("log"),
        settings=sources.get("settings"),
        statistics=sources.get("statistics"),
        apps=sources.get("apps"),
        omnichannel=sources.get("omnichannel"),
        status=status,
    )
