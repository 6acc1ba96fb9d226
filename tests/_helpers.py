from __future__ import annotations

import json

# id -> 10 bits, type -> 2 bits, flag -> 1 bit (13 bits, max 8191)
SIMPLE_FIELDS: list[tuple[str, int]] = [("id", 10), ("type", 2), ("flag", 1)]
SIMPLE_VALUES: dict[str, int] = {"id": 100, "type": 2, "flag": 1}
SIMPLE_PACKED = 805


def naive_pow(base: int, exponent: int) -> int:
    out = 1
    for _ in range(exponent):
        out *= base
    return out


def naive_is_prime(n: int) -> bool:
    if n < 2:
        return False
    d = 2
    while d * d <= n:
        if n % d == 0:
            return False
        d += 1
    return True


def write_schema_file(path, items=SIMPLE_FIELDS, **extra) -> str:
    """Write a v1 schema JSON document; `extra` keys go straight into the object."""
    doc = {
        "type": "obfuskey-schema",
        "version": 1,
        "fields": [{"name": n, "bits": b} for n, b in items],
    }
    doc.update(extra)
    path.write_text(json.dumps(doc), encoding="utf-8")
    return str(path)
