"""Integer primitives for obfuskey.

Pure functions over Python ints (arbitrary precision):
  - gcd / floor_divmod
  - bit_length / isqrt
  - mod_pow (square-and-multiply) / mod_inverse (extended Euclid)
  - factor_two_powers: n-1 = 2^s * d, the Miller-Rabin split

Everything here raises ObfuskeyError on bad input; nothing is clamped.
"""

from __future__ import annotations

from obk_errors import ErrorKind, ObfuskeyError, require_int

# --- Division -----------------------------------------------------------------


def gcd(a: int, b: int) -> int:
    """Euclid on absolute values. gcd(0, 0) == 0."""
    a = abs(require_int(a, "gcd argument 'a'"))
    b = abs(require_int(b, "gcd argument 'b'"))
    while b:
        a, b = b, a % b
    return a


def floor_divmod(a: int, b: int) -> tuple[int, int]:
    """(q, r) with floor division: r has the sign of b and a == q*b + r."""
    require_int(a, "floor_divmod argument 'a'")
    require_int(b, "floor_divmod argument 'b'")
    if b == 0:
        raise ObfuskeyError(ErrorKind.OUT_OF_RANGE, "division by zero")
    q = a // b
    return q, a - q * b


# --- Size -----------------------------------------------------------------------


def bit_length(n: int | float) -> int:
    """Number of bits needed for n >= 0 (0 -> 0).

    Integral floats are accepted (3.0 -> 2); anything else non-int is a type error.
    """
    if isinstance(n, float):
        if not n.is_integer():
            raise ObfuskeyError(ErrorKind.TYPE_MISMATCH, "bit_length argument 'n' must be an integer.")
        n = int(n)
    elif isinstance(n, bool) or not isinstance(n, int):
        raise ObfuskeyError(
            ErrorKind.TYPE_MISMATCH,
            f"bit_length argument 'n' must be an int or float, got {type(n).__name__}.",
        )
    if n < 0:
        raise ObfuskeyError(ErrorKind.INVALID_VALUE, "bit_length argument 'n' must be non-negative.")
    return n.bit_length()


def isqrt(n: int) -> int:
    """floor(sqrt(n)) via Newton, seeded from 1 << ceil(bit_length(n) / 2)."""
    require_int(n, "isqrt argument 'n'")
    if n < 0:
        raise ObfuskeyError(ErrorKind.OUT_OF_RANGE, "Square root is not defined for negative numbers.")
    if n < 2:
        return n

    x0 = 1 << ((bit_length(n) + 1) >> 1)
    x1 = (x0 + n // x0) >> 1
    while x1 < x0:
        x0 = x1
        x1 = (x0 + n // x0) >> 1
    return x0


# --- Modular arithmetic ---------------------------------------------------------


def mod_pow(base: int, exponent: int, modulus: int | None = None) -> int:
    """base**exponent, optionally reduced mod modulus (exponentiation by squaring).

    Without a modulus the exact power is returned. With one, the result is
    always in [0, modulus): negative bases are normalized first and
    modulus 1 gives 0. base**0 == 1, 0**0 included.
    """
    require_int(base, "mod_pow argument 'base'")
    require_int(exponent, "mod_pow argument 'exponent'")
    if modulus is not None:
        require_int(modulus, "mod_pow argument 'modulus'")
    if exponent < 0:
        raise ObfuskeyError(ErrorKind.NEGATIVE_VALUE, "Negative exponents are not supported.")
    if modulus == 0:
        raise ObfuskeyError(ErrorKind.INVALID_VALUE, "Modulus cannot be zero.")
    if modulus == 1:
        return 0
    if exponent == 0:
        return 1

    if modulus is not None:
        base %= modulus

    result = 1
    while exponent > 0:
        if exponent & 1:
            result = result * base if modulus is None else (result * base) % modulus
        exponent >>= 1
        if exponent:
            base = base * base if modulus is None else (base * base) % modulus
    return result


def mod_inverse(a: int, m: int) -> int:
    """x in [0, m) with a*x ≡ 1 (mod m); requires gcd(a mod m, m) == 1."""
    require_int(a, "mod_inverse argument 'a'")
    require_int(m, "mod_inverse argument 'm'")
    if m <= 0:
        raise ObfuskeyError(ErrorKind.NEGATIVE_VALUE, "mod_inverse modulus must be a positive integer.")

    r_prev, r_cur = m, a % m
    t_prev, t_cur = 0, 1
    while r_cur:
        q = r_prev // r_cur
        r_prev, r_cur = r_cur, r_prev - q * r_cur
        t_prev, t_cur = t_cur, t_prev - q * t_cur

    if r_prev != 1:
        raise ObfuskeyError(
            ErrorKind.INVALID_VALUE,
            f"No modular inverse for {a} mod {m}: not invertible (gcd is {r_prev}).",
            gcd=r_prev,
        )
    return t_prev % m


def factor_two_powers(n: int) -> tuple[int, int]:
    """(s, d) with n - 1 = 2^s * d and d odd. Requires n > 1."""
    require_int(n, "factor_two_powers argument 'n'")
    if n <= 1:
        raise ObfuskeyError(ErrorKind.INVALID_VALUE, "factor_two_powers argument 'n' must be greater than 1.")
    d = n - 1
    s = 0
    while d % 2 == 0:
        d //= 2
        s += 1
    return s, d


__all__ = [
    "bit_length",
    "factor_two_powers",
    "floor_divmod",
    "gcd",
    "isqrt",
    "mod_inverse",
    "mod_pow",
]
