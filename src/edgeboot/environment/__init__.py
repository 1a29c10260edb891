# src/edgeboot/environment/__init__.py

"""Environment variable overrides for service bootstrap.

The environment is captured once into an immutable snapshot and passed
explicitly to every resolver, so nothing here reads ``os.environ`` behind the
caller's back.

Key exports:
- EnvironmentSnapshot: Immutable copy of the process environment
- Variables: Overlays environment values onto a pydantic configuration model
- resolve_startup_info: Startup retry duration and interval
- get_conf_dir / get_profile_dir / get_config_file_name: Location overrides
- Int8 ... UInt64, Float32, Float64: Width-tagged field annotations
"""

# ruff: noqa: I001

from .coercion import (
    Float32,
    Float64,
    Int,
    Int8,
    Int16,
    Int32,
    Int64,
    LeafKind,
    UInt,
    UInt8,
    UInt16,
    UInt32,
    UInt64,
    coerce,
    coerce_as,
    kind_of,
)
from .locations import get_conf_dir, get_config_file_name, get_profile_dir
from .notify import OverrideNotifier, log_override
from .overrides import AppliedOverride, Variables
from .paths import build_case_index, enumerate_paths, resolve_path
from .provider import ProviderInfo
from .snapshot import EnvironmentSnapshot
from .startup import StartupInfo, resolve_startup_info
from .tree import ConfigTree

__all__ = [  # noqa: RUF022
    # Main public API
    "EnvironmentSnapshot",
    "Variables",
    "AppliedOverride",
    "resolve_startup_info",
    "StartupInfo",
    "get_conf_dir",
    "get_profile_dir",
    "get_config_file_name",
    "ProviderInfo",
    # Logging collaborator
    "OverrideNotifier",
    "log_override",
    # Field annotations
    "LeafKind",
    "Int",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "UInt",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "Float32",
    "Float64",
    # Building blocks
    "ConfigTree",
    "enumerate_paths",
    "build_case_index",
    "resolve_path",
    "coerce",
    "coerce_as",
    "kind_of",
]
