# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Rule tables for server and Omnichannel settings."""

import logging
from dataclasses import dataclass
from typing import Callable, Literal, Mapping

logger = logging.getLogger(__name__)

RuleOutcome = Literal["security", "performance", "configuration", "warning", "note"]

MAX_UPLOAD_BYTES = 100 * 1024 * 1024
MAX_MESSAGE_CHARS = 10_000
MAX_QUEUE_SIZE = 100
MIN_AGENT_NUMBER = 1


@dataclass(frozen=True)
class RuleVerdict:
    """Represent the judgment of one rule over one setting value.

    Attributes:
        outcome: ``note`` for a neutral observation, otherwise the finding kind.
        message: Human-readable description.
    """

    outcome: RuleOutcome
    message: str

    @property
    def is_issue(self) -> bool:
        return self.outcome != "note"


SettingRule = Callable[[str], RuleVerdict | None]


def parse_int(value: str) -> int | None:
    """Parse an integral setting value.

    Args:
        value: Textual setting value.

    Returns:
        Parsed integer, or ``None`` when the value is not numeric.
    """
    try:
        return int(float(value.strip()))
    except (ValueError, OverflowError):
        return None


def _two_factor(value: str) -> RuleVerdict:
    if value == "false":
        return RuleVerdict("security", "Two-factor authentication is disabled")
    return RuleVerdict("note", "Two-factor authentication enabled")


def _registration_form(value: str) -> RuleVerdict:
    if value == "Public":
        return RuleVerdict("security", "Public user registration is enabled")
    return RuleVerdict("note", f"Registration form: {value}")


def _anonymous_read(value: str) -> RuleVerdict | None:
    if value == "true":
        return RuleVerdict("configuration", "Anonymous reading is enabled")
    return None


def _anonymous_write(value: str) -> RuleVerdict | None:
    if value == "true":
        return RuleVerdict("security", "Anonymous writing is enabled")
    return None


def _ldap(value: str) -> RuleVerdict | None:
    if value == "true":
        return RuleVerdict("note", "LDAP authentication enabled")
    return None


def _saml(value: str) -> RuleVerdict | None:
    if value == "true":
        return RuleVerdict("note", "SAML authentication enabled")
    return None


def _max_file_size(value: str) -> RuleVerdict | None:
    size = parse_int(value)
    if size is None:
        return None
    size_mb = size // (1024 * 1024)
    if size > MAX_UPLOAD_BYTES:
        return RuleVerdict("performance", f"Large file upload limit ({size_mb}MB)")
    return RuleVerdict("note", f"File upload limit: {size_mb}MB")


def _storage_type(value: str) -> RuleVerdict:
    return RuleVerdict("note", f"Storage type: {value}")


def _rate_limiter(value: str) -> RuleVerdict:
    if value == "false":
        return RuleVerdict("security", "API rate limiting is disabled")
    return RuleVerdict("note", "API rate limiting enabled")


def _rate_limiter_dev(value: str) -> RuleVerdict | None:
    if value == "true":
        return RuleVerdict(
            "configuration", "Development rate limiter is enabled in production"
        )
    return None


def _message_max_size(value: str) -> RuleVerdict | None:
    size = parse_int(value)
    if size is None:
        return None
    if size > MAX_MESSAGE_CHARS:
        return RuleVerdict("performance", f"Large message size limit ({size} chars)")
    return RuleVerdict("note", f"Message size limit: {size} characters")


def _retention_policy(value: str) -> RuleVerdict:
    if value == "false":
        return RuleVerdict("configuration", "No message retention policy configured")
    return RuleVerdict("note", "Message retention policy enabled")


def _federation(value: str) -> RuleVerdict | None:
    if value == "true":
        return RuleVerdict("note", "Federation enabled")
    return None


def _e2e(value: str) -> RuleVerdict:
    if value == "false":
        return RuleVerdict("security", "End-to-end encryption is disabled")
    return RuleVerdict("note", "End-to-end encryption enabled")


def _log_level(value: str) -> RuleVerdict:
    # Level 0 is debug.
    if value == "0":
        return RuleVerdict("performance", "Debug logging enabled in production")
    return RuleVerdict("note", f"Log level: {value}")


DEFAULT_SETTINGS_RULES: Mapping[str, SettingRule] = {
    "Accounts_TwoFactorAuthentication_Enabled": _two_factor,
    "Accounts_RegistrationForm": _registration_form,
    "Accounts_AllowAnonymousRead": _anonymous_read,
    "Accounts_AllowAnonymousWrite": _anonymous_write,
    "LDAP_Enable": _ldap,
    "SAML_Custom_Default": _saml,
    "FileUpload_MaxFileSize": _max_file_size,
    "FileUpload_Storage_Type": _storage_type,
    "API_Enable_Rate_Limiter": _rate_limiter,
    "API_Enable_Rate_Limiter_Dev": _rate_limiter_dev,
    "Message_MaxAllowedSize": _message_max_size,
    "RetentionPolicy_Enabled": _retention_policy,
    "Federation_Enabled": _federation,
    "E2E_Enable": _e2e,
    "Log_Level": _log_level,
}


def _omnichannel_enabled(value: str) -> RuleVerdict:
    if value == "false":
        return RuleVerdict("configuration", "Omnichannel service is disabled")
    return RuleVerdict("note", "Omnichannel service is enabled")


def _routing_method(value: str) -> RuleVerdict:
    return RuleVerdict("note", f"Routing method: {value}")


def _max_agent_number(value: str) -> RuleVerdict | None:
    agents = parse_int(value)
    if agents is None:
        return None
    if agents < MIN_AGENT_NUMBER:
        return RuleVerdict("configuration", "No maximum agents configured")
    return RuleVerdict("note", f"Max agents: {agents}")


def _queue_size(value: str) -> RuleVerdict | None:
    size = parse_int(value)
    if size is None:
        return None
    if size > MAX_QUEUE_SIZE:
        return RuleVerdict("warning", f"Large queue size configured ({size})")
    return RuleVerdict("note", f"Queue size: {size}")


# Keys are id fragments; a setting matches the first fragment contained in its id.
DEFAULT_OMNICHANNEL_RULES: Mapping[str, SettingRule] = {
    "Omnichannel_enable": _omnichannel_enabled,
    "routing_method": _routing_method,
    "max_agent_number": _max_agent_number,
    "queue_size": _queue_size,
}
