"""Predefined alphabets and lookup by preset name."""

from __future__ import annotations

from obk_alphabet import Alphabet
from obk_errors import ErrorKind, ObfuskeyError

HEX_ALPHABET = Alphabet("0123456789abcdef")
BASE16_ALPHABET = Alphabet("0123456789ABCDEF")
BASE32_ALPHABET = Alphabet("234567ABCDEFGHIJKLMNOPQRSTUVWXYZ")
BASE36_ALPHABET = Alphabet("0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ")
# no vowels
BASE52_ALPHABET = Alphabet("0123456789BCDFGHJKLMNPQRSTVWXYZbcdfghjklmnpqrstvwxyz")
# no 0/1/I/O/l/o
BASE56_ALPHABET = Alphabet("23456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnpqrstuvwxyz")
BASE58_ALPHABET = Alphabet("123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz")
BASE62_ALPHABET = Alphabet("0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz")
BASE64_ALPHABET = Alphabet("0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz+/")
BASE64_URL_SAFE_ALPHABET = Alphabet("0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz-_")
BASE94_ALPHABET = Alphabet("".join(chr(c) for c in range(0x21, 0x7F)))
CROCKFORD_BASE32_ALPHABET = Alphabet("0123456789ABCDEFGHJKMNPQRSTVWXYZ")
ZBASE32_ALPHABET = Alphabet("ybndrfg8ejkmcpqxot1uwisza345h769")

PRESETS: dict[str, Alphabet] = {
    "hex": HEX_ALPHABET,
    "base16": BASE16_ALPHABET,
    "base32": BASE32_ALPHABET,
    "base36": BASE36_ALPHABET,
    "base52": BASE52_ALPHABET,
    "base56": BASE56_ALPHABET,
    "base58": BASE58_ALPHABET,
    "base62": BASE62_ALPHABET,
    "base64": BASE64_ALPHABET,
    "base64url": BASE64_URL_SAFE_ALPHABET,
    "base94": BASE94_ALPHABET,
    "crockford": CROCKFORD_BASE32_ALPHABET,
    "zbase32": ZBASE32_ALPHABET,
}


def resolve_alphabet(name: str | Alphabet) -> Alphabet:
    """Preset name (case-insensitive) -> preset; any other str is taken as literal symbols."""
    if isinstance(name, Alphabet):
        return name
    if not isinstance(name, str):
        raise ObfuskeyError(ErrorKind.TYPE_MISMATCH, f"Alphabet name must be a str, got {type(name).__name__}.")
    preset = PRESETS.get(name.lower())
    if preset is not None:
        return preset
    if len(name) < 2:
        raise ObfuskeyError(ErrorKind.INVALID_VALUE, f"Unknown alphabet preset or too few symbols: {name!r}")
    return Alphabet(name)


__all__ = [
    "BASE16_ALPHABET",
    "BASE32_ALPHABET",
    "BASE36_ALPHABET",
    "BASE52_ALPHABET",
    "BASE56_ALPHABET",
    "BASE58_ALPHABET",
    "BASE62_ALPHABET",
    "BASE64_ALPHABET",
    "BASE64_URL_SAFE_ALPHABET",
    "BASE94_ALPHABET",
    "CROCKFORD_BASE32_ALPHABET",
    "HEX_ALPHABET",
    "PRESETS",
    "ZBASE32_ALPHABET",
    "resolve_alphabet",
]
