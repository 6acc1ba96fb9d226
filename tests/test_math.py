from __future__ import annotations

import pytest

from tests._helpers import naive_pow
from obk_errors import ErrorKind, ObfuskeyError
from obk_math import bit_length, factor_two_powers, floor_divmod, gcd, isqrt, mod_inverse, mod_pow


def test_gcd_basic_and_signs():
    assert gcd(12, 18) == 6
    assert gcd(-12, 18) == 6
    assert gcd(17, 5) == 1
    assert gcd(0, 9) == 9
    assert gcd(0, 0) == 0


def test_floor_divmod_follows_divisor_sign():
    assert floor_divmod(7, 2) == (3, 1)
    assert floor_divmod(-7, 2) == (-4, 1)
    assert floor_divmod(7, -2) == (-4, -1)
    for a in range(-20, 21):
        for b in (-7, -3, 1, 4):
            q, r = floor_divmod(a, b)
            assert a == q * b + r
            assert (q, r) == divmod(a, b)


def test_floor_divmod_by_zero():
    with pytest.raises(ObfuskeyError) as ei:
        floor_divmod(1, 0)
    assert ei.value.kind is ErrorKind.OUT_OF_RANGE


def test_bit_length_values():
    assert bit_length(0) == 0
    assert bit_length(1) == 1
    assert bit_length(255) == 8
    assert bit_length(256) == 9
    assert bit_length(3.0) == 2


def test_bit_length_errors():
    with pytest.raises(ObfuskeyError) as ei:
        bit_length(-1)
    assert ei.value.kind is ErrorKind.INVALID_VALUE

    with pytest.raises(ObfuskeyError) as ei:
        bit_length(2.5)
    assert ei.value.kind is ErrorKind.TYPE_MISMATCH

    with pytest.raises(ObfuskeyError) as ei:
        bit_length("8")
    assert ei.value.kind is ErrorKind.TYPE_MISMATCH


def test_isqrt_matches_floor_sqrt():
    for n in list(range(0, 200)) + [10**12, 10**12 - 1, 2**127 + 5]:
        r = isqrt(n)
        assert r * r <= n < (r + 1) * (r + 1)


def test_isqrt_negative():
    with pytest.raises(ObfuskeyError) as ei:
        isqrt(-4)
    assert ei.value.kind is ErrorKind.OUT_OF_RANGE


def test_mod_pow_matches_naive_power():
    for base in (-3, 0, 1, 2, 7, 10):
        for exponent in range(0, 12):
            assert mod_pow(base, exponent) == naive_pow(base, exponent)
            for modulus in (2, 7, 97, 1000):
                assert mod_pow(base, exponent, modulus) == naive_pow(base, exponent) % modulus


def test_mod_pow_edge_cases():
    assert mod_pow(0, 0) == 1
    assert mod_pow(0, 0, 5) == 1
    assert mod_pow(123, 456, 1) == 0
    assert mod_pow(-2, 3, 5) == 2  # -8 mod 5


def test_mod_pow_errors():
    with pytest.raises(ObfuskeyError) as ei:
        mod_pow(2, -1, 5)
    assert ei.value.kind is ErrorKind.NEGATIVE_VALUE

    with pytest.raises(ObfuskeyError) as ei:
        mod_pow(2, 3, 0)
    assert ei.value.kind is ErrorKind.INVALID_VALUE

    with pytest.raises(ObfuskeyError) as ei:
        mod_pow(2.0, 3)
    assert ei.value.kind is ErrorKind.TYPE_MISMATCH


def test_mod_inverse_iff_coprime():
    m = 36
    for a in range(1, 60):
        if gcd(a, m) == 1:
            x = mod_inverse(a, m)
            assert 0 <= x < m
            assert (a * x) % m == 1
        else:
            with pytest.raises(ObfuskeyError) as ei:
                mod_inverse(a, m)
            assert ei.value.kind is ErrorKind.INVALID_VALUE
            assert ei.value.payload["gcd"] == gcd(a, m)


def test_mod_inverse_large_and_negative_operand():
    m = 62**6
    x = mod_inverse(27146107, m)
    assert (27146107 * x) % m == 1
    assert (-3 * mod_inverse(-3, 10)) % 10 == 1


def test_mod_inverse_bad_modulus():
    for m in (0, -5):
        with pytest.raises(ObfuskeyError) as ei:
            mod_inverse(3, m)
        assert ei.value.kind is ErrorKind.NEGATIVE_VALUE


def test_factor_two_powers():
    assert factor_two_powers(2) == (0, 1)
    assert factor_two_powers(3) == (1, 1)
    assert factor_two_powers(561) == (4, 35)
    s, d = factor_two_powers(1_000_001)
    assert d % 2 == 1
    assert (2**s) * d == 1_000_000


def test_factor_two_powers_rejects_small():
    for n in (1, 0, -3):
        with pytest.raises(ObfuskeyError) as ei:
            factor_two_powers(n)
        assert ei.value.kind is ErrorKind.INVALID_VALUE


def test_bools_are_not_ints():
    with pytest.raises(ObfuskeyError) as ei:
        gcd(True, 4)
    assert ei.value.kind is ErrorKind.TYPE_MISMATCH
