"""Exception hierarchy for edgeboot."""

from __future__ import annotations


class EdgebootError(Exception):
    """Base exception for all edgeboot errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint

    def __str__(self) -> str:
        """Return the message followed by the hint, when present."""
        msg = super().__str__()
        return f"{msg}. {self.hint}" if self.hint else msg


class ConfigurationError(EdgebootError):
    """A configuration value supplied by the environment is malformed."""


class OverrideError(EdgebootError):
    """Environment override of a configuration object failed."""


class SerializationError(OverrideError):
    """The configuration object cannot be represented as a generic tree."""


class DeserializationError(OverrideError):
    """The merged tree cannot be written back into the configuration object."""


class ParseError(OverrideError):
    """A raw environment string cannot be coerced to the target leaf type.

    ``env_key`` is filled in by the override engine; direct calls to the
    coercion functions leave it as ``None``.
    """

    def __init__(
        self,
        message: str,
        *,
        value: str,
        kind: str,
        env_key: str | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.value = value
        self.kind = kind
        self.env_key = env_key


class UnsupportedTypeError(OverrideError):
    """The leaf's type has no coercion rule."""

    def __init__(
        self,
        message: str,
        *,
        type_name: str,
        env_key: str | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.type_name = type_name
        self.env_key = env_key
