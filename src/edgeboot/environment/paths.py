"""Dotted leaf paths and the case-insensitive path index."""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import TYPE_CHECKING, Any
import warnings

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)

PathIndex = dict[str, str]


def enumerate_paths(tree: Mapping[str, Any]) -> list[str]:
    """Return the dotted path of every leaf in a nested mapping.

    A mapping value recurses; anything else (scalars, lists) is a leaf.
    Order follows the tree's key order.
    """
    paths: list[str] = []
    for key, item in tree.items():
        if not isinstance(item, Mapping):
            paths.append(key)
            continue
        paths.extend(f"{key}.{path}" for path in enumerate_paths(item))
    return paths


def build_case_index(paths: Iterable[str]) -> PathIndex:
    """Map each path's uppercase form to the path itself.

    When two paths share an uppercase form the later one wins and a
    ``UserWarning`` names the path it shadows.
    """
    index: PathIndex = {}
    for path in paths:
        upper = path.upper()
        shadowed = index.get(upper)
        if shadowed is not None and shadowed != path:
            warnings.warn(
                f"Configuration path '{path}' shadows '{shadowed}' for "
                "upper-case environment overrides",
                UserWarning,
                stacklevel=2,
            )
        index[upper] = path
    logger.debug("Indexed %d configuration paths", len(index))
    return index


def is_all_upper_case(key: str) -> bool:
    """Return True unless ``key`` contains a lower-case letter.

    Digits and punctuation are ignored, so ``"SERVICE.PORT_2"`` qualifies.
    """
    return not any(ch.isalpha() and not ch.isupper() for ch in key)


def env_key_to_path(env_var: str) -> str:
    """Turn an environment variable name into a dotted path candidate."""
    return env_var.replace("_", ".")


def resolve_path(index: Mapping[str, str], candidate: str) -> str | None:
    """Find the canonical path matching a dotted candidate.

    An all upper-case candidate is matched case-insensitively against the
    uppercase index keys. Any other candidate must equal a canonical path
    exactly; this keeps lower-case variable names from older deployments
    working.

    Returns:
        The canonical path, or ``None`` when nothing matches.
    """
    upper = is_all_upper_case(candidate)
    for upper_path, path in index.items():
        if (upper_path if upper else path) == candidate:
            return path
    return None
