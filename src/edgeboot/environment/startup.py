"""Startup timer values taken from the environment.

Only the values are resolved here; retrying with them is up to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
import re

from .notify import OverrideNotifier, log_override
from .snapshot import EnvironmentSnapshot

BOOT_TIMEOUT_SECONDS_DEFAULT = 60
BOOT_RETRY_SECONDS_DEFAULT = 1

ENV_KEY_STARTUP_DURATION = "EDGEX_STARTUP_DURATION"
ENV_V1_KEY_STARTUP_DURATION = "startup_duration"
ENV_KEY_STARTUP_INTERVAL = "EDGEX_STARTUP_INTERVAL"
ENV_V1_KEY_STARTUP_INTERVAL = "startup_interval"

_INTEGER = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class StartupInfo:
    """Seconds to keep retrying at boot, and seconds between attempts."""

    duration: int = BOOT_TIMEOUT_SECONDS_DEFAULT
    interval: int = BOOT_RETRY_SECONDS_DEFAULT


def _positive_int(value: str) -> int | None:
    if not _INTEGER.fullmatch(value):
        return None
    # Anything past 64 bits is malformed, not huge
    if len(value.lstrip("+-")) > 19:
        return None
    number = int(value)
    return number if 0 < number < 2**63 else None


def resolve_startup_info(
    env: EnvironmentSnapshot | None = None,
    *,
    defaults: StartupInfo | None = None,
    notify: OverrideNotifier = log_override,
) -> StartupInfo:
    """Resolve the startup duration and interval.

    Each value is read from its ``EDGEX_*`` variable, or from the older
    lower-case variable when the new one is unset or empty. A value that is
    not a positive integer keeps the default, so a stray ``0`` cannot turn
    the startup retry into a busy loop. Never raises.
    """
    env = env if env is not None else EnvironmentSnapshot.capture()
    startup = defaults if defaults is not None else StartupInfo()

    key, value = env.lookup(ENV_KEY_STARTUP_DURATION, ENV_V1_KEY_STARTUP_DURATION)
    if value:
        notify("Startup Duration", key, value)
        if (duration := _positive_int(value)) is not None:
            startup = replace(startup, duration=duration)

    key, value = env.lookup(ENV_KEY_STARTUP_INTERVAL, ENV_V1_KEY_STARTUP_INTERVAL)
    if value:
        notify("Startup Interval", key, value)
        if (interval := _positive_int(value)) is not None:
            startup = replace(startup, interval=interval)

    return startup
