"""Primality oracle and next-prime search.

is_prime:
  1) tiny cases and multiples of 2, 3, 5
  2) wheel short-circuit: gcd(n, 2*3*5*7*11*13*17) > 1 => prime only if n in {7, 11, 13, 17}
  3) n < 2_000_000: exact trial division
  4) otherwise Miller-Rabin with the fixed bases (2, 13, 23, 1662803)

Step 4 is NOT a primality certificate. No counterexample is known for the
sizes an obfuscation multiplier takes, but the bases were chosen
empirically, so treat is_prime above TRIAL_DIVISION_LIMIT as "probable prime".

next_prime walks a mod-30 wheel (skips multiples of 2, 3, 5) and refuses
inputs wider than MAX_PRIME_BITS to keep the worst case bounded.
"""

from __future__ import annotations

from typing import Protocol

from obk_errors import ErrorKind, ObfuskeyError, require_int
from obk_math import bit_length, factor_two_powers, gcd, isqrt, mod_pow

# --- Config -------------------------------------------------------------------

MAX_PRIME_BITS = 512
TRIAL_DIVISION_LIMIT = 2_000_000
SMALL_PRIME_PRODUCT = 510_510  # 2*3*5*7*11*13*17
WHEEL_PRIMES = (7, 11, 13, 17)
STRONG_PSEUDOPRIME_BASES: tuple[int, ...] = (2, 13, 23, 1_662_803)

# Golden-ratio factor used to place the synthesized multiplier inside the keyspace.
PRIME_MULTIPLIER = 1.618033988749894848
FIXED_POINT_SCALE = 10**18

# WHEEL_GAPS[n % 30] = distance from n to the next number coprime to 30
WHEEL_GAPS: tuple[int, ...] = (
    1, 6, 5, 4, 3, 2, 1, 4, 3, 2,
    1, 2, 1, 4, 3, 2, 1, 2, 1, 4,
    3, 2, 1, 6, 5, 4, 3, 2, 1, 2,
)


# --- Primality ------------------------------------------------------------------


def trial_division(n: int) -> bool:
    """Exact test: divide by 2 and odd i up to isqrt(n)."""
    require_int(n, "trial_division argument 'n'")
    if n <= 1:
        return False
    if n in (2, 3):
        return True
    if n % 2 == 0:
        return False
    limit = isqrt(n)
    for i in range(3, limit + 1, 2):
        if n % i == 0:
            return False
    return True


def is_strong_pseudoprime(n: int, base: int = 2) -> bool:
    """Single-base Miller-Rabin round: does n pass as a strong probable prime to `base`?"""
    require_int(n, "is_strong_pseudoprime argument 'n'")
    require_int(base, "is_strong_pseudoprime argument 'base'")
    if n == 1 or n % 2 == 0:
        return False

    s, d = factor_two_powers(n)
    x = mod_pow(base, d, n)
    if x == 1 or x == n - 1:
        return True

    for _ in range(s - 1):
        x = (x * x) % n
        if x == n - 1:
            return True
        if x == 1:
            return False
    return False


def is_small_strong_pseudoprime(n: int) -> bool:
    """Strong pseudoprime to every base in STRONG_PSEUDOPRIME_BASES."""
    require_int(n, "is_small_strong_pseudoprime argument 'n'")
    return all(is_strong_pseudoprime(n, b) for b in STRONG_PSEUDOPRIME_BASES)


def is_prime(n: int) -> bool:
    """Exact below TRIAL_DIVISION_LIMIT, fixed-base Miller-Rabin above (see module doc)."""
    require_int(n, "is_prime argument 'n'")
    if n < 2:
        return False
    if n in (2, 3, 5):
        return True
    if n % 2 == 0 or n % 3 == 0 or n % 5 == 0:
        return False

    if gcd(n, SMALL_PRIME_PRODUCT) > 1:
        return n in WHEEL_PRIMES

    if n < TRIAL_DIVISION_LIMIT:
        return trial_division(n)

    return is_small_strong_pseudoprime(n)


# --- Search -------------------------------------------------------------------


def next_prime(n: int) -> int:
    """Smallest prime strictly greater than n (2 for any n < 2).

    Raises MAXIMUM_VALUE for inputs wider than MAX_PRIME_BITS and
    INVALID_VALUE for negative inputs.
    """
    require_int(n, "next_prime argument 'n'")
    if bit_length(n) > MAX_PRIME_BITS:
        raise ObfuskeyError(
            ErrorKind.MAXIMUM_VALUE,
            f"Integers wider than {MAX_PRIME_BITS} bits are not supported by next_prime.",
        )

    if n < 2:
        return 2
    if n < 5:
        return (3, 5, 5)[n - 2]

    # first odd number above n
    n += 1 + (n & 1)
    if n % 3 == 0 or n % 5 == 0:
        n += WHEEL_GAPS[n % 30]

    while not is_prime(n):
        n += WHEEL_GAPS[n % 30]
    return n


class _HasMaxValue(Protocol):
    def max_value(self, key_length: int) -> int: ...


def scale_to_fixed_point(factor: float, scale: int = FIXED_POINT_SCALE) -> int:
    """round(factor * scale) as an int, so later products stay in integer arithmetic."""
    if not isinstance(factor, (int, float)) or isinstance(factor, bool):
        raise ObfuskeyError(ErrorKind.TYPE_MISMATCH, "factor must be a number.")
    require_int(scale, "scale")
    return int(round(factor * scale))


def generate_prime_multiplier(
    alphabet: _HasMaxValue,
    key_length: int,
    factor: float = PRIME_MULTIPLIER,
) -> int:
    """Next prime above floor(max_value(key_length) * factor), computed in fixed point.

    The result is always odd: keyspaces of at most two values would otherwise get 2.
    """
    require_int(key_length, "key_length")
    scaled = scale_to_fixed_point(factor)
    target = alphabet.max_value(key_length) * scaled // FIXED_POINT_SCALE
    return next_prime(max(target, 2))


__all__ = [
    "FIXED_POINT_SCALE",
    "MAX_PRIME_BITS",
    "PRIME_MULTIPLIER",
    "SMALL_PRIME_PRODUCT",
    "STRONG_PSEUDOPRIME_BASES",
    "TRIAL_DIVISION_LIMIT",
    "WHEEL_GAPS",
    "generate_prime_multiplier",
    "is_prime",
    "is_small_strong_pseudoprime",
    "is_strong_pseudoprime",
    "next_prime",
    "scale_to_fixed_point",
    "trial_division",
]
