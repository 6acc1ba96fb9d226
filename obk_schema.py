"""Bit-field schema: named fields, their widths and their shifts.

Fields are listed most significant first; the last field sits in the
lowest bits. Example: [("id", 10), ("type", 2), ("flag", 1)] gives
  id   -> bits 3..12 (shift 3)
  type -> bits 1..2  (shift 1)
  flag -> bit  0     (shift 0)
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from obk_errors import ErrorKind, ObfuskeyError


@dataclass(frozen=True)
class FieldSpec:
    name: str
    bits: int


@dataclass(frozen=True)
class FieldInfo:
    bits: int
    shift: int

    @property
    def mask(self) -> int:
        return (1 << self.bits) - 1

    @property
    def maximum(self) -> int:
        return self.mask


def _coerce_item(item: object, index: int) -> FieldSpec:
    if isinstance(item, FieldSpec):
        return item
    if isinstance(item, Mapping):
        extra = set(item.keys()) - {"name", "bits"}
        if extra:
            raise ObfuskeyError(
                ErrorKind.SCHEMA_VALIDATION,
                f"Schema item (index {index}): unexpected keys {sorted(map(str, extra))}.",
            )
        if "name" not in item or "bits" not in item:
            raise ObfuskeyError(
                ErrorKind.SCHEMA_VALIDATION,
                f"Schema item (index {index}): required keys are 'name' and 'bits'.",
            )
        return FieldSpec(name=item["name"], bits=item["bits"])
    if isinstance(item, tuple) and len(item) == 2:
        return FieldSpec(name=item[0], bits=item[1])
    raise ObfuskeyError(
        ErrorKind.SCHEMA_VALIDATION,
        f"Schema item (index {index}): expected FieldSpec, mapping or (name, bits) pair, got {type(item).__name__}.",
    )


def _validate_item(spec: FieldSpec, index: int, seen: set[str]) -> None:
    name, bits = spec.name, spec.bits
    if not isinstance(name, str):
        raise ObfuskeyError(
            ErrorKind.SCHEMA_VALIDATION,
            f"Schema item (index {index}): 'name' must be a string, got {type(name).__name__}.",
        )
    if not name.isidentifier():
        raise ObfuskeyError(
            ErrorKind.SCHEMA_VALIDATION,
            f"Schema item (index {index}): 'name' must be a non-empty identifier, got {name!r}.",
        )
    if isinstance(bits, bool) or not isinstance(bits, int):
        raise ObfuskeyError(
            ErrorKind.SCHEMA_VALIDATION,
            f"Schema item '{name}' (index {index}): 'bits' must be an int, got {type(bits).__name__}.",
        )
    if bits <= 0:
        raise ObfuskeyError(
            ErrorKind.SCHEMA_VALIDATION,
            f"Schema field '{name}' (index {index}): 'bits' must be a positive integer, got {bits}.",
        )
    if name in seen:
        raise ObfuskeyError(
            ErrorKind.SCHEMA_VALIDATION,
            f"Schema contains duplicate name: '{name}'. Names must be unique.",
        )


@dataclass(frozen=True, init=False)
class Schema:
    """Validated, immutable field layout. Accepts FieldSpec, {"name", "bits"} or (name, bits) items."""

    fields: tuple[FieldSpec, ...]
    total_bits: int = field(init=False)
    _info: dict[str, FieldInfo] = field(init=False, repr=False, compare=False)

    def __init__(self, fields: Iterable[FieldSpec | Mapping[str, object] | tuple[str, int]]) -> None:
        if isinstance(fields, (str, bytes)) or not isinstance(fields, Iterable):
            raise ObfuskeyError(ErrorKind.SCHEMA_VALIDATION, "Schema must be a sequence of field definitions.")

        specs: list[FieldSpec] = []
        seen: set[str] = set()
        for i, item in enumerate(fields):
            spec = _coerce_item(item, i)
            _validate_item(spec, i, seen)
            seen.add(spec.name)
            specs.append(spec)

        info: dict[str, FieldInfo] = {}
        shift = 0
        for spec in reversed(specs):
            info[spec.name] = FieldInfo(bits=spec.bits, shift=shift)
            shift += spec.bits

        object.__setattr__(self, "fields", tuple(specs))
        object.__setattr__(self, "total_bits", shift)
        object.__setattr__(self, "_info", info)

    @property
    def maximum_value(self) -> int:
        return (1 << self.total_bits) - 1

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    @property
    def definition(self) -> list[dict[str, object]]:
        return [{"name": f.name, "bits": f.bits} for f in self.fields]

    def __len__(self) -> int:
        return len(self.fields)

    def get_field_info(self, name: str) -> FieldInfo:
        info = self._info.get(name)
        if info is None:
            raise ObfuskeyError(ErrorKind.INVALID_VALUE, f"Field '{name}' not found in the schema definition.")
        return info

    field_info = get_field_info

    def validate_fields(self, values: Mapping[str, int]) -> None:
        """Exact name match, int values, each in [0, 2**bits)."""
        if not isinstance(values, Mapping):
            raise ObfuskeyError(
                ErrorKind.TYPE_MISMATCH,
                f"Field values must be a mapping of name -> int, got {type(values).__name__}.",
            )
        names = set(values.keys())
        missing = sorted(set(self._info) - names)
        extra = sorted(map(str, names - set(self._info)))
        if missing:
            raise ObfuskeyError(
                ErrorKind.SCHEMA_VALIDATION,
                f"Required values for the following fields are missing: {', '.join(missing)}.",
                missing=missing,
                extra=extra,
            )
        if extra:
            raise ObfuskeyError(
                ErrorKind.INVALID_VALUE,
                f"Unexpected fields provided in input values: {', '.join(extra)}.",
                missing=missing,
                extra=extra,
            )

        for name in self.field_names:
            value = values[name]
            if isinstance(value, bool) or not isinstance(value, int):
                raise ObfuskeyError(
                    ErrorKind.TYPE_MISMATCH,
                    f"Field '{name}' must be an int, got {type(value).__name__}.",
                    field=name,
                )
            bits = self._info[name].bits
            if value < 0 or value >= 1 << bits:
                raise ObfuskeyError.bit_overflow(name, value, bits)


__all__ = ["FieldInfo", "FieldSpec", "Schema"]
