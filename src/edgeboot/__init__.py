"""edgeboot: environment variable overrides for service bootstrap.

Public API:
    - EnvironmentSnapshot: Capture the process environment once
    - Variables: Override a pydantic configuration model from the environment
    - resolve_startup_info(): Startup retry duration and interval
    - Location resolvers for the config directory, profile and file name
"""

from __future__ import annotations

import logging

from edgeboot.environment import (
    AppliedOverride,
    EnvironmentSnapshot,
    ProviderInfo,
    StartupInfo,
    Variables,
    get_conf_dir,
    get_config_file_name,
    get_profile_dir,
    resolve_startup_info,
)
from edgeboot.errors import (
    ConfigurationError,
    DeserializationError,
    EdgebootError,
    OverrideError,
    ParseError,
    SerializationError,
    UnsupportedTypeError,
)

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("edgeboot")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("edgeboot").addHandler(logging.NullHandler())

__all__ = [
    "AppliedOverride",
    "ConfigurationError",
    "DeserializationError",
    "EdgebootError",
    "EnvironmentSnapshot",
    "OverrideError",
    "ParseError",
    "ProviderInfo",
    "SerializationError",
    "StartupInfo",
    "UnsupportedTypeError",
    "Variables",
    "get_conf_dir",
    "get_config_file_name",
    "get_profile_dir",
    "resolve_startup_info",
]
