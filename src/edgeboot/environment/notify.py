"""Notification of applied environment overrides."""

from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger(__name__)

# Field-level tokens whose values are never logged in clear.
SENSITIVE_KEYS = {
    "api_key",
    "apikey",
    "token",
    "secret",
    "password",
    "passwd",
    "access_key",
    "client_secret",
    "credential",
}

REDACTED = "***redacted***"


class OverrideNotifier(Protocol):
    """Receives one call per option or field overridden from the environment."""

    def __call__(self, name: str, key: str, value: str) -> None: ...


def is_sensitive_key(name: str) -> bool:
    """Return True if a field or variable name looks like it holds a secret."""
    lower = name.lower()
    return any(token in lower for token in SENSITIVE_KEYS)


def log_override(name: str, key: str, value: str) -> None:
    """Log that ``name`` was overridden by environment variable ``key``."""
    if is_sensitive_key(name) or is_sensitive_key(key):
        value = REDACTED
    logger.info("Variables override of '%s' by environment variable: %s=%s", name, key, value)
