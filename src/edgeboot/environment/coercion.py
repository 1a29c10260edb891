"""Type coercion of raw environment strings into typed leaf values.

Every leaf of a configuration tree carries a :class:`LeafKind` tag. Python has
a single unbounded ``int``, so fixed widths are declared on model fields with
the annotated aliases below; each alias tags the field and also bounds it at
the pydantic validation boundary::

    class Service(BaseModel):
        port: UInt16 = 8080
        timeout: Float32 = 2.5
        hosts: list[str] = []

Fields without an alias are tagged from their plain annotation (``int`` is
the native 64-bit signed width, ``float`` is 64-bit) and, failing that, from
the runtime type of the serialized value.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
import math
import re
import struct
from typing import TYPE_CHECKING, Annotated, Any

from pydantic import Field

from edgeboot.errors import ParseError, UnsupportedTypeError

if TYPE_CHECKING:
    from collections.abc import Callable


class LeafKind(str, Enum):
    """Closed set of leaf types that accept environment overrides."""

    STRING = "string"
    STRING_LIST = "string_list"
    BOOL = "bool"
    INT = "int"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT = "uint"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"


def _signed(bits: int) -> tuple[int, int]:
    return -(2 ** (bits - 1)), 2 ** (bits - 1) - 1


def _unsigned(bits: int) -> tuple[int, int]:
    return 0, 2**bits - 1


# Native width is 64 bits for both signed and unsigned integers.
INTEGER_BOUNDS: dict[LeafKind, tuple[int, int]] = {
    LeafKind.INT: _signed(64),
    LeafKind.INT8: _signed(8),
    LeafKind.INT16: _signed(16),
    LeafKind.INT32: _signed(32),
    LeafKind.INT64: _signed(64),
    LeafKind.UINT: _unsigned(64),
    LeafKind.UINT8: _unsigned(8),
    LeafKind.UINT16: _unsigned(16),
    LeafKind.UINT32: _unsigned(32),
    LeafKind.UINT64: _unsigned(64),
}

_UNSIGNED = frozenset(
    {LeafKind.UINT, LeafKind.UINT8, LeafKind.UINT16, LeafKind.UINT32, LeafKind.UINT64}
)

# --- Annotated width aliases ---

Int = Annotated[int, Field(ge=_signed(64)[0], le=_signed(64)[1]), LeafKind.INT]
Int8 = Annotated[int, Field(ge=_signed(8)[0], le=_signed(8)[1]), LeafKind.INT8]
Int16 = Annotated[int, Field(ge=_signed(16)[0], le=_signed(16)[1]), LeafKind.INT16]
Int32 = Annotated[int, Field(ge=_signed(32)[0], le=_signed(32)[1]), LeafKind.INT32]
Int64 = Annotated[int, Field(ge=_signed(64)[0], le=_signed(64)[1]), LeafKind.INT64]
UInt = Annotated[int, Field(ge=0, le=_unsigned(64)[1]), LeafKind.UINT]
UInt8 = Annotated[int, Field(ge=0, le=_unsigned(8)[1]), LeafKind.UINT8]
UInt16 = Annotated[int, Field(ge=0, le=_unsigned(16)[1]), LeafKind.UINT16]
UInt32 = Annotated[int, Field(ge=0, le=_unsigned(32)[1]), LeafKind.UINT32]
UInt64 = Annotated[int, Field(ge=0, le=_unsigned(64)[1]), LeafKind.UINT64]
Float32 = Annotated[float, LeafKind.FLOAT32]
Float64 = Annotated[float, LeafKind.FLOAT64]

# --- Per-kind parsers ---

_SIGNED_PATTERN = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_PATTERN = re.compile(r"[0-9]+")

# Halfway between the largest float32 and 2**128; anything at or above rounds to inf.
_FLOAT32_OVERFLOW = 2.0**128 - 2.0**103
_INFINITY_LITERALS = frozenset({"inf", "infinity"})

_TRUE_LITERALS = frozenset({"1", "t", "true"})
_FALSE_LITERALS = frozenset({"0", "f", "false"})


def _parse_string(raw: str) -> str:
    return raw


def _parse_string_list(raw: str) -> list[str]:
    """Split a comma separated value, trimming whitespace around each entry."""
    return [entry.strip() for entry in raw.strip().split(",")]


def _parse_bool(raw: str) -> bool:
    literal = raw.lower()
    if literal in _TRUE_LITERALS:
        return True
    if literal in _FALSE_LITERALS:
        return False
    raise ParseError(
        f"invalid syntax: {raw!r} is not a boolean",
        value=raw,
        kind=LeafKind.BOOL.value,
        hint="Use one of true/false, t/f or 1/0",
    )


def _integer_parser(kind: LeafKind) -> Callable[[str], int]:
    low, high = INTEGER_BOUNDS[kind]
    pattern = _UNSIGNED_PATTERN if kind in _UNSIGNED else _SIGNED_PATTERN

    def parse(raw: str) -> int:
        if not pattern.fullmatch(raw):
            raise ParseError(
                f"invalid syntax: {raw!r} is not a base-10 {kind.value}",
                value=raw,
                kind=kind.value,
            )
        # int() refuses very long digit strings, padded or not
        sign = "-" if raw.startswith("-") else ""
        digits = raw.lstrip("+-").lstrip("0") or "0"
        if len(digits) <= 20:
            value = int(sign + digits)
            if low <= value <= high:
                return value
        raise ParseError(
            f"value out of range: {raw} does not fit {kind.value} [{low}, {high}]",
            value=raw,
            kind=kind.value,
        )

    return parse


def _float_parser(kind: LeafKind) -> Callable[[str], float]:
    def parse(raw: str) -> float:
        # float() tolerates surrounding whitespace and digit separators
        if not raw or raw != raw.strip() or "_" in raw:
            raise ParseError(
                f"invalid syntax: {raw!r} is not a {kind.value}",
                value=raw,
                kind=kind.value,
            )
        try:
            number = float(raw)
        except ValueError as exc:
            raise ParseError(
                f"invalid syntax: {raw!r} is not a {kind.value}",
                value=raw,
                kind=kind.value,
            ) from exc
        if raw.lstrip("+-").lower() not in _INFINITY_LITERALS and (
            math.isinf(number)
            or (kind is LeafKind.FLOAT32 and abs(number) >= _FLOAT32_OVERFLOW)
        ):
            raise ParseError(
                f"value out of range: {raw} does not fit {kind.value}",
                value=raw,
                kind=kind.value,
            )
        if kind is LeafKind.FLOAT32 and math.isfinite(number):
            (number,) = struct.unpack("f", struct.pack("f", number))
        return number

    return parse


_PARSERS: dict[LeafKind, Callable[[str], Any]] = {
    LeafKind.STRING: _parse_string,
    LeafKind.STRING_LIST: _parse_string_list,
    LeafKind.BOOL: _parse_bool,
    LeafKind.FLOAT32: _float_parser(LeafKind.FLOAT32),
    LeafKind.FLOAT64: _float_parser(LeafKind.FLOAT64),
    **{kind: _integer_parser(kind) for kind in INTEGER_BOUNDS},
}


# --- Public API ---


def kind_of(value: Any) -> LeafKind | None:
    """Infer the leaf kind from a serialized value's runtime type.

    Returns ``None`` for values without a coercion rule, including lists
    that hold nested tables.
    """
    # bool is a subclass of int
    if isinstance(value, bool):
        return LeafKind.BOOL
    if isinstance(value, int):
        return LeafKind.INT
    if isinstance(value, float):
        return LeafKind.FLOAT64
    if isinstance(value, str):
        return LeafKind.STRING
    if isinstance(value, (list, tuple)):
        if any(isinstance(item, (Mapping, list, tuple)) for item in value):
            return None
        return LeafKind.STRING_LIST
    return None


def coerce_as(kind: LeafKind, raw: str) -> Any:
    """Convert ``raw`` into a value of the given leaf kind.

    Raises:
        ParseError: ``raw`` is malformed or out of range for ``kind``.
    """
    return _PARSERS[kind](raw)


def coerce(existing: Any, raw: str, kind: LeafKind | None = None) -> Any:
    """Convert ``raw`` to the type of ``existing``.

    Args:
        existing: The current leaf value.
        raw: Raw environment string.
        kind: Declared leaf kind; inferred from ``existing`` when omitted.

    Raises:
        ParseError: ``raw`` cannot be represented in the target type.
        UnsupportedTypeError: The target type has no coercion rule.
    """
    if kind is None:
        kind = kind_of(existing)
    if kind is None:
        type_name = type(existing).__name__
        raise UnsupportedTypeError(
            f"configuration type of '{type_name}' is not supported for "
            "environment variable override",
            type_name=type_name,
        )
    return coerce_as(kind, raw)
