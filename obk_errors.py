"""Error model for obfuskey.

Every failure raised by the library is an ``ObfuskeyError``. Callers tell
failures apart by ``err.kind`` (a closed ``ErrorKind`` enum), not by
subclass; structured details travel in ``err.payload``.

Payload keys by kind:
  - BIT_OVERFLOW: field, value, bits, maximum
  - KEY_LENGTH: expected, actual
  - SCHEMA_VALIDATION / INVALID_VALUE from field checks: missing, extra
  - INVALID_VALUE from byte input: expected, actual
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    TYPE_MISMATCH = "type_mismatch"
    OUT_OF_RANGE = "out_of_range"
    INVALID_VALUE = "invalid_value"
    NEGATIVE_VALUE = "negative_value"
    MAXIMUM_VALUE = "maximum_value"
    KEY_LENGTH = "key_length"
    MULTIPLIER = "multiplier"
    DUPLICATE_SYMBOL = "duplicate_symbol"
    UNKNOWN_SYMBOL = "unknown_symbol"
    SCHEMA_VALIDATION = "schema_validation"
    BIT_OVERFLOW = "bit_overflow"


class ObfuskeyError(ValueError):
    """A caller error detected by the library (never transient, never retried)."""

    def __init__(self, kind: ErrorKind, message: str, **payload: object) -> None:
        super().__init__(message)
        self.kind = ErrorKind(kind)
        self.message = message
        self.payload: dict[str, object] = payload

    def __repr__(self) -> str:
        return f"ObfuskeyError({self.kind.name}, {self.message!r})"

    @classmethod
    def bit_overflow(cls, field: str, value: int, bits: int) -> ObfuskeyError:
        maximum = (1 << bits) - 1
        return cls(
            ErrorKind.BIT_OVERFLOW,
            f"Field '{field}' ({value}) exceeds its allocated {bits} bits (maximum allowed: {maximum}).",
            field=field,
            value=value,
            bits=bits,
            maximum=maximum,
        )


def require_int(value: object, what: str) -> int:
    """Return ``value`` if it is a real ``int`` (bools rejected), else raise TYPE_MISMATCH."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ObfuskeyError(
            ErrorKind.TYPE_MISMATCH,
            f"{what} must be an int, got {type(value).__name__}.",
        )
    return value


__all__ = ["ErrorKind", "ObfuskeyError", "require_int"]
