"""JSON backend for obfuskey schemas.

File format (v1), one JSON object:
  {"type":"obfuskey-schema","version":1,"fields":[{"name":"id","bits":10}, ...]}
  optional: "note" (free text)

Loading is strict: unknown keys, wrong type/version or bad field items are
rejected with SCHEMA_VALIDATION errors.
"""

from __future__ import annotations

import json

from obk_errors import ErrorKind, ObfuskeyError
from obk_schema import Schema

SCHEMA_TYPE = "obfuskey-schema"
SCHEMA_VERSION = 1


def _fail(msg: str) -> ObfuskeyError:
    return ObfuskeyError(ErrorKind.SCHEMA_VALIDATION, msg)


def dump_schema_json(schema: Schema, path: str, note: str | None = None) -> None:
    """Write schema to JSON in canonical key order."""
    doc: dict[str, object] = {"type": SCHEMA_TYPE, "version": SCHEMA_VERSION}
    if note:
        doc["note"] = note
    doc["fields"] = schema.definition

    with open(path, "w", encoding="utf-8") as f:
        f.write(json.dumps(doc, separators=(",", ":"), ensure_ascii=False) + "\n")


def _validate_document(obj: object) -> list[object]:
    if not isinstance(obj, dict):
        raise _fail("Schema file: expected a JSON object")

    allowed = {"type", "version", "fields", "note"}
    extra = set(obj.keys()) - allowed
    if extra:
        raise _fail(f"Schema file: keys not allowed: {sorted(extra)}")

    if obj.get("type") != SCHEMA_TYPE:
        raise _fail(f"Schema file: type must be {SCHEMA_TYPE!r}")
    if obj.get("version") != SCHEMA_VERSION:
        raise _fail(f"Schema file: version must be {SCHEMA_VERSION}")
    note = obj.get("note")
    if note is not None and not isinstance(note, str):
        raise _fail("Schema file: note must be a string")

    fields = obj.get("fields")
    if not isinstance(fields, list) or not fields:
        raise _fail("Schema file: fields must be a non-empty list")
    for i, item in enumerate(fields):
        if not isinstance(item, dict):
            raise _fail(f"Schema file: field {i} must be an object")
    return fields


def load_schema_json(path: str) -> Schema:
    with open(path, encoding="utf-8") as f:
        text = f.read()
    try:
        obj = json.loads(text)
    except json.JSONDecodeError as e:
        raise _fail(f"Schema file: invalid JSON at line {e.lineno}: {e.msg}") from e

    return Schema(_validate_document(obj))


__all__ = ["SCHEMA_TYPE", "SCHEMA_VERSION", "dump_schema_json", "load_schema_json"]
