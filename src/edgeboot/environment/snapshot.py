"""Immutable point-in-time copy of the process environment.

The override engine never reads ``os.environ`` itself. Callers capture a
snapshot once at startup and pass it around, which keeps resolution
deterministic and lets tests inject an environment directly.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
import logging
import os
from typing import TYPE_CHECKING

from dotenv import dotenv_values

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

logger = logging.getLogger(__name__)


class EnvironmentSnapshot(Mapping[str, str]):
    """Read-only mapping of environment variable names to raw values."""

    __slots__ = ("_variables",)

    def __init__(self, variables: Mapping[str, str] | None = None) -> None:
        self._variables: dict[str, str] = dict(variables or {})

    @classmethod
    def from_entries(cls, entries: Iterable[str]) -> EnvironmentSnapshot:
        """Build a snapshot from raw ``KEY=VALUE`` strings.

        Entries without ``=`` are dropped. Only the first ``=`` separates the
        key, so values may themselves contain ``=``.
        """
        variables: dict[str, str] = {}
        for entry in entries:
            key, sep, value = entry.partition("=")
            if not sep:
                logger.debug("Ignoring malformed environment entry %r", entry)
                continue
            variables[key] = value
        return cls(variables)

    @classmethod
    def capture(cls, *, dotenv_path: str | Path | None = None) -> EnvironmentSnapshot:
        """Capture the current process environment.

        Args:
            dotenv_path: Optional ``.env`` file layered underneath the process
                environment. Process variables win; ``.env`` keys declared
                without a value are ignored.

        Returns:
            A new, independent snapshot.
        """
        variables: dict[str, str] = {}
        if dotenv_path is not None:
            for key, value in dotenv_values(dotenv_path).items():
                if value is not None:
                    variables[key] = value
        # os.environ is already split on the first "=" with malformed entries dropped
        variables.update(os.environ)
        return cls(variables)

    def lookup(self, key: str, legacy_key: str | None = None) -> tuple[str, str]:
        """Return ``(key, value)`` preferring ``key`` over ``legacy_key``.

        The legacy key is consulted only when the primary value is missing or
        empty. The returned key is the last one attempted, and the value is
        ``""`` when neither is set.
        """
        value = self._variables.get(key, "")
        if not value and legacy_key is not None:
            key = legacy_key
            value = self._variables.get(key, "")
        return key, value

    def __getitem__(self, key: str) -> str:
        return self._variables[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._variables)

    def __len__(self) -> int:
        return len(self._variables)

    def __repr__(self) -> str:
        return f"EnvironmentSnapshot({len(self._variables)} variables)"
