#!/usr/bin/env python3
"""
obfuskey.py — fixed-length, non-sequential keys for integers.

Idea:
- A key of `key_length` symbols over an alphabet of base b holds every value
  in [0, M] with M = b^key_length - 1.
- Multiplying by an odd multiplier m coprime with M+1 permutes [0, M]:
    raw = value * m mod (M+1)
  and the permutation is undone with the modular inverse of m.
- raw is written in base b and left-padded with the zero symbol, so
  neighbouring values give unrelated-looking keys.

If no multiplier is given, one is synthesized: the next prime above
M * 1.618... (golden-ratio factor). A prime larger than M+1 cannot share a
factor with it, so the transform is always invertible.

Not a cipher: anyone who learns the alphabet and multiplier can invert keys.

CLI:
  python3 obfuskey.py key 12345 --alphabet base62 --key-length 6
  python3 obfuskey.py value d2Aasl --alphabet base62 --key-length 6
"""

from __future__ import annotations

import threading

from obk_alphabet import Alphabet, decode, encode
from obk_errors import ErrorKind, ObfuskeyError, require_int
from obk_math import mod_inverse
from obk_primes import PRIME_MULTIPLIER, generate_prime_multiplier


class Obfuscator:
    """Bijective value <-> key transform over [0, maximum_value]."""

    def __init__(self, alphabet: Alphabet | str, key_length: int, multiplier: int | None = None) -> None:
        if isinstance(alphabet, str):
            alphabet = Alphabet(alphabet)
        elif not isinstance(alphabet, Alphabet):
            raise ObfuskeyError(
                ErrorKind.TYPE_MISMATCH,
                f"Obfuscator argument 'alphabet' must be an Alphabet or str, got {type(alphabet).__name__}.",
            )
        require_int(key_length, "Obfuscator argument 'key_length'")
        if key_length < 0:
            raise ObfuskeyError(ErrorKind.NEGATIVE_VALUE, "Key length cannot be negative.")
        if key_length == 0:
            raise ObfuskeyError(ErrorKind.INVALID_VALUE, "Key length must be at least 1.")
        if multiplier is not None:
            require_int(multiplier, "Obfuscator argument 'multiplier'")
            if not multiplier & 1:
                raise ObfuskeyError(ErrorKind.MULTIPLIER, "The multiplier must be an odd integer.")

        self._alphabet = alphabet
        self._key_length = key_length
        self._maximum_value = alphabet.max_value(key_length)
        self._multiplier = multiplier
        self._prime_factor = PRIME_MULTIPLIER
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"Obfuscator(base={self._alphabet.base}, key_length={self._key_length})"

    @property
    def alphabet(self) -> Alphabet:
        return self._alphabet

    @property
    def key_length(self) -> int:
        return self._key_length

    @property
    def maximum_value(self) -> int:
        return self._maximum_value

    @property
    def multiplier(self) -> int:
        """Caller-supplied multiplier, or the synthesized prime (computed once, on first use)."""
        m = self._multiplier
        if m is None:
            with self._lock:
                if self._multiplier is None:
                    self._multiplier = generate_prime_multiplier(self._alphabet, self._key_length, self._prime_factor)
                m = self._multiplier
        return m

    @property
    def _zero_key(self) -> str:
        return self._alphabet.zero * self._key_length

    def get_key(self, value: int) -> str:
        """Obfuscate `value` into a key of exactly `key_length` symbols."""
        require_int(value, "get_key argument 'value'")
        if value < 0:
            raise ObfuskeyError(ErrorKind.NEGATIVE_VALUE, "The value must be greater than or equal to zero.")
        if value > self._maximum_value:
            raise ObfuskeyError(
                ErrorKind.MAXIMUM_VALUE,
                f"The maximum value possible is {self._maximum_value}",
                maximum=self._maximum_value,
                value=value,
            )
        if value == 0:
            # encode(0) would be a single zero symbol; keep the fixed width explicit
            return self._zero_key

        raw = (value * self.multiplier) % (self._maximum_value + 1)
        return encode(raw, self._alphabet).rjust(self._key_length, self._alphabet.zero)

    def get_value(self, key: str) -> int:
        """Recover the value behind a key produced by get_key."""
        if not isinstance(key, str):
            raise ObfuskeyError(ErrorKind.TYPE_MISMATCH, f"get_value argument 'key' must be a str, got {type(key).__name__}.")
        if len(key) != self._key_length:
            raise ObfuskeyError(
                ErrorKind.KEY_LENGTH,
                f"Key length mismatch, expected a {self._key_length}-character key.",
                expected=self._key_length,
                actual=len(key),
            )
        if key == self._zero_key:
            return 0

        modulus = self._maximum_value + 1
        raw = decode(key, self._alphabet)
        return (raw * mod_inverse(self.multiplier, modulus)) % modulus


# --- Public API -----------------------------------------------------------------
# Facade: `import obfuskey` gives the whole library.

from obk_alphabets import (  # noqa: E402
    BASE16_ALPHABET,
    BASE32_ALPHABET,
    BASE36_ALPHABET,
    BASE52_ALPHABET,
    BASE56_ALPHABET,
    BASE58_ALPHABET,
    BASE62_ALPHABET,
    BASE64_ALPHABET,
    BASE64_URL_SAFE_ALPHABET,
    BASE94_ALPHABET,
    CROCKFORD_BASE32_ALPHABET,
    HEX_ALPHABET,
    PRESETS,
    ZBASE32_ALPHABET,
    resolve_alphabet,
)
from obk_bits import Packer  # noqa: E402
from obk_json import dump_schema_json, load_schema_json  # noqa: E402
from obk_math import bit_length, factor_two_powers, floor_divmod, gcd, isqrt, mod_pow  # noqa: E402
from obk_primes import (  # noqa: E402
    is_prime,
    is_small_strong_pseudoprime,
    is_strong_pseudoprime,
    next_prime,
    trial_division,
)
from obk_schema import FieldInfo, FieldSpec, Schema  # noqa: E402

__all__ = [
    "Alphabet",
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
    "ErrorKind",
    "FieldInfo",
    "FieldSpec",
    "HEX_ALPHABET",
    "Obfuscator",
    "ObfuskeyError",
    "PRESETS",
    "Packer",
    "Schema",
    "ZBASE32_ALPHABET",
    "bit_length",
    "decode",
    "dump_schema_json",
    "encode",
    "factor_two_powers",
    "floor_divmod",
    "gcd",
    "generate_prime_multiplier",
    "is_prime",
    "is_small_strong_pseudoprime",
    "is_strong_pseudoprime",
    "isqrt",
    "load_schema_json",
    "mod_inverse",
    "mod_pow",
    "next_prime",
    "resolve_alphabet",
    "trial_division",
]


if __name__ == "__main__":
    from cli import main

    raise SystemExit(main())
