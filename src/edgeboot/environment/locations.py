"""Configuration directory, profile and file name overrides."""

from __future__ import annotations

from .notify import OverrideNotifier, log_override
from .snapshot import EnvironmentSnapshot

DEFAULT_CONF_DIR = "./res"

ENV_CONF_DIR = "EDGEX_CONF_DIR"
ENV_PROFILE = "EDGEX_PROFILE"
ENV_V1_PROFILE = "edgex_profile"
ENV_CONFIG_FILE = "EDGEX_CONFIG_FILE"


def get_conf_dir(
    configured: str = "",
    env: EnvironmentSnapshot | None = None,
    *,
    notify: OverrideNotifier = log_override,
) -> str:
    """Return the configuration directory.

    ``EDGEX_CONF_DIR`` wins over ``configured``; ``./res`` is used when both
    are blank.
    """
    env = env if env is not None else EnvironmentSnapshot.capture()
    if value := env.get(ENV_CONF_DIR, ""):
        configured = value
        notify("-c/-confdir", ENV_CONF_DIR, value)
    return configured or DEFAULT_CONF_DIR


def get_profile_dir(
    configured: str = "",
    env: EnvironmentSnapshot | None = None,
    *,
    notify: OverrideNotifier = log_override,
) -> str:
    """Return the profile directory with a trailing ``/``, or ``""`` for none."""
    env = env if env is not None else EnvironmentSnapshot.capture()
    key, value = env.lookup(ENV_PROFILE, ENV_V1_PROFILE)
    if value:
        configured = value
        notify("-p/-profile", key, value)
    return f"{configured}/" if configured else configured


def get_config_file_name(
    configured: str = "",
    env: EnvironmentSnapshot | None = None,
    *,
    notify: OverrideNotifier = log_override,
) -> str:
    """Return the configuration file name, preferring ``EDGEX_CONFIG_FILE``."""
    env = env if env is not None else EnvironmentSnapshot.capture()
    if value := env.get(ENV_CONFIG_FILE, ""):
        configured = value
        notify("-f/-file", ENV_CONFIG_FILE, value)
    return configured
