"""Packer: several bit fields <-> one integer, key string or fixed-width bytes.

Layout comes from a Schema (first field = most significant bits). The
packed integer can be:
  - returned as is,
  - turned into a fixed-length key through an Obfuscator,
  - serialized to ceil(total_bits / 8) bytes, big- or little-endian.

This module does NOT deal with files.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

from obk_errors import ErrorKind, ObfuskeyError
from obk_schema import FieldSpec, Schema

if TYPE_CHECKING:
    from obfuskey import Obfuscator

BYTE_ORDERS = ("big", "little")


def _check_byteorder(byteorder: str) -> str:
    if byteorder not in BYTE_ORDERS:
        raise ObfuskeyError(ErrorKind.INVALID_VALUE, f"byteorder must be 'big' or 'little', got {byteorder!r}.")
    return byteorder


class Packer:
    def __init__(
        self,
        schema: Schema | Iterable[FieldSpec | Mapping[str, object] | tuple[str, int]],
        obfuscator: Obfuscator | None = None,
    ) -> None:
        self._schema = schema if isinstance(schema, Schema) else Schema(schema)
        self._obfuscator = obfuscator

        if obfuscator is not None and self._schema.maximum_value > obfuscator.maximum_value:
            raise ObfuskeyError(
                ErrorKind.MAXIMUM_VALUE,
                f"The provided schema requires a maximum packed integer value of {self._schema.maximum_value} "
                f"(which needs {self._schema.total_bits} bits to represent), but the provided Obfuscator "
                f"can only handle up to a maximum value of {obfuscator.maximum_value} "
                f"(which covers {obfuscator.maximum_value.bit_length()} bits).",
                expected=self._schema.maximum_value,
                actual=obfuscator.maximum_value,
            )

    @property
    def schema(self) -> Schema:
        return self._schema

    @property
    def obfuscator(self) -> Obfuscator | None:
        return self._obfuscator

    @property
    def total_bits(self) -> int:
        return self._schema.total_bits

    @property
    def maximum_value(self) -> int:
        return self._schema.maximum_value

    @property
    def byte_length(self) -> int:
        return (self._schema.total_bits + 7) // 8

    def _require_obfuscator(self, action: str) -> Obfuscator:
        if self._obfuscator is None:
            raise ObfuskeyError(
                ErrorKind.INVALID_VALUE,
                f"An Obfuscator was not provided during initialization, but {action} was requested.",
            )
        return self._obfuscator

    # --- int / key ----------------------------------------------------------

    def pack(self, values: Mapping[str, int], obfuscate: bool = False) -> int | str:
        """OR of value << shift over all fields; a key string when `obfuscate` is set."""
        self._schema.validate_fields(values)

        packed = 0
        for name in self._schema.field_names:
            packed |= values[name] << self._schema.get_field_info(name).shift

        if not obfuscate:
            return packed
        return self._require_obfuscator("obfuscation").get_key(packed)

    def unpack(self, data: int | str, obfuscated: bool = False) -> dict[str, int]:
        """Split a packed int (or a key, when `obfuscated`) back into fields, in schema order.

        A packed int outside [0, maximum_value] raises OUT_OF_RANGE; it is not masked.
        """
        if obfuscated:
            obfuscator = self._require_obfuscator("de-obfuscation")
            if not isinstance(data, str):
                raise ObfuskeyError(
                    ErrorKind.TYPE_MISMATCH,
                    "Input 'data' must be a str when 'obfuscated' is true.",
                )
            packed = obfuscator.get_value(data)
        else:
            if isinstance(data, bool) or not isinstance(data, int):
                raise ObfuskeyError(
                    ErrorKind.TYPE_MISMATCH,
                    "Input 'data' must be an int when 'obfuscated' is false.",
                )
            packed = data

        if not 0 <= packed <= self._schema.maximum_value:
            raise ObfuskeyError(
                ErrorKind.OUT_OF_RANGE,
                f"Packed integer {packed} is out of range (0 to {self._schema.maximum_value}) "
                "for the schema's total bit capacity.",
            )

        out: dict[str, int] = {}
        for name in self._schema.field_names:
            info = self._schema.get_field_info(name)
            out[name] = (packed >> info.shift) & info.mask
        return out

    # --- bytes ---------------------------------------------------------------

    def pack_bytes(self, values: Mapping[str, int], byteorder: str = "big") -> bytes:
        _check_byteorder(byteorder)
        packed = self.pack(values, obfuscate=False)
        return packed.to_bytes(self.byte_length, byteorder)

    def unpack_bytes(self, data: bytes | bytearray | memoryview, byteorder: str = "big") -> dict[str, int]:
        _check_byteorder(byteorder)
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise ObfuskeyError(
                ErrorKind.TYPE_MISMATCH,
                f"Input 'data' must be bytes-like, got {type(data).__name__}.",
            )
        data = bytes(data)
        if len(data) != self.byte_length:
            raise ObfuskeyError(
                ErrorKind.INVALID_VALUE,
                f"Byte data length ({len(data)}) does not match expected length for this schema "
                f"({self.byte_length} bytes based on {self.total_bits} bits).",
                expected=self.byte_length,
                actual=len(data),
            )
        packed = int.from_bytes(data, byteorder)
        if packed > self._schema.maximum_value:
            raise ObfuskeyError(
                ErrorKind.OUT_OF_RANGE,
                f"Byte data encodes {packed}, above the schema maximum {self._schema.maximum_value}.",
            )
        return self.unpack(packed, obfuscated=False)


__all__ = ["BYTE_ORDERS", "Packer"]
