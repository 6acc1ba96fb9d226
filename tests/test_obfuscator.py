from __future__ import annotations

import threading

import pytest

import obfuskey
from obfuskey import Obfuscator
from obk_alphabet import Alphabet
from obk_alphabets import (
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
    ZBASE32_ALPHABET,
)
from obk_errors import ErrorKind, ObfuskeyError

KNOWN_KEYS_12345 = [
    (BASE16_ALPHABET, "A16A63"),
    (BASE32_ALPHABET, "O6VAF5"),
    (BASE36_ALPHABET, "MNYJ53"),
    (BASE52_ALPHABET, "ckPl95"),
    (BASE56_ALPHABET, "dGTZmF"),
    (BASE58_ALPHABET, "dWxtix"),
    (BASE62_ALPHABET, "d2Aasl"),
    (BASE64_ALPHABET, "eIq9Uz"),
    (BASE94_ALPHABET, "\\2'?@X"),
    (CROCKFORD_BASE32_ALPHABET, "M4V6B3"),
    (ZBASE32_ALPHABET, "wr5gmd"),
    (BASE64_URL_SAFE_ALPHABET, "eIq9Uz"),
]


@pytest.mark.parametrize("alphabet,key", KNOWN_KEYS_12345)
def test_known_keys_for_12345(alphabet, key):
    ob = Obfuscator(alphabet, 6)
    assert ob.get_key(12345) == key
    assert ob.get_value(key) == 12345


def test_generated_multiplier_is_odd_prime_above_keyspace():
    ob = Obfuscator(BASE16_ALPHABET, 6)
    assert ob.multiplier == 27_146_107
    assert ob.multiplier > ob.maximum_value
    assert obfuskey.is_prime(ob.multiplier)


def test_fixed_multiplier_vector():
    ob = Obfuscator(BASE64_ALPHABET, 6, multiplier=7)
    assert ob.get_key(54321) == "001SrN"
    assert ob.get_value("001SrN") == 54321


def test_url_safe_extremes():
    ob = Obfuscator(BASE64_URL_SAFE_ALPHABET, 6)
    assert ob.get_key(0) == "000000"
    assert ob.get_value("000000") == 0
    assert ob.get_key(34_359_738_367) == "uSY6HR"
    assert ob.get_value("uSY6HR") == 34_359_738_367


def test_full_roundtrip_small_keyspace():
    ob = Obfuscator(Alphabet("abcde"), 3)
    assert ob.maximum_value == 124
    keys = set()
    for v in range(ob.maximum_value + 1):
        key = ob.get_key(v)
        assert len(key) == 3
        assert ob.get_value(key) == v
        keys.add(key)
    assert len(keys) == 125


def test_roundtrip_sample_large_keyspace():
    ob = Obfuscator(BASE62_ALPHABET, 12)
    for v in (1, 2, 3, 999_999, 2**40 + 3, ob.maximum_value - 1, ob.maximum_value):
        key = ob.get_key(v)
        assert len(key) == 12
        assert ob.get_value(key) == v


def test_adjacent_values_do_not_give_adjacent_keys():
    ob = Obfuscator(BASE62_ALPHABET, 6)
    assert ob.get_key(1)[:-1] != ob.get_key(2)[:-1]


def test_str_alphabet_is_accepted():
    ob = Obfuscator("0123456789ABCDEF", 6)
    assert ob.get_key(12345) == "A16A63"


def test_constructor_errors():
    with pytest.raises(ObfuskeyError) as ei:
        Obfuscator(BASE62_ALPHABET, 6, multiplier=8)
    assert ei.value.kind is ErrorKind.MULTIPLIER
    assert str(ei.value) == "The multiplier must be an odd integer."

    with pytest.raises(ObfuskeyError) as ei:
        Obfuscator(BASE62_ALPHABET, 0)
    assert ei.value.kind is ErrorKind.INVALID_VALUE

    with pytest.raises(ObfuskeyError) as ei:
        Obfuscator(BASE62_ALPHABET, -1)
    assert ei.value.kind is ErrorKind.NEGATIVE_VALUE

    with pytest.raises(ObfuskeyError) as ei:
        Obfuscator(BASE62_ALPHABET, "6")
    assert ei.value.kind is ErrorKind.TYPE_MISMATCH

    with pytest.raises(ObfuskeyError) as ei:
        Obfuscator(62, 6)
    assert ei.value.kind is ErrorKind.TYPE_MISMATCH


def test_get_key_errors():
    ob = Obfuscator(BASE16_ALPHABET, 2)
    with pytest.raises(ObfuskeyError) as ei:
        ob.get_key(-1)
    assert ei.value.kind is ErrorKind.NEGATIVE_VALUE

    with pytest.raises(ObfuskeyError) as ei:
        ob.get_key(256)
    assert ei.value.kind is ErrorKind.MAXIMUM_VALUE
    assert str(ei.value) == "The maximum value possible is 255"


def test_get_value_errors():
    ob = Obfuscator(BASE16_ALPHABET, 6)
    with pytest.raises(ObfuskeyError) as ei:
        ob.get_value("A16A6")
    assert ei.value.kind is ErrorKind.KEY_LENGTH
    assert ei.value.payload == {"expected": 6, "actual": 5}

    with pytest.raises(ObfuskeyError) as ei:
        ob.get_value("a16a63")
    assert ei.value.kind is ErrorKind.UNKNOWN_SYMBOL

    with pytest.raises(ObfuskeyError) as ei:
        ob.get_value(12345)
    assert ei.value.kind is ErrorKind.TYPE_MISMATCH


def test_non_coprime_multiplier_fails_on_get_value():
    # 5 divides 10**2
    ob = Obfuscator("0123456789", 2, multiplier=5)
    key = ob.get_key(3)
    with pytest.raises(ObfuskeyError) as ei:
        ob.get_value(key)
    assert ei.value.kind is ErrorKind.INVALID_VALUE


def test_multiplier_synthesized_once_across_threads(monkeypatch):
    calls = []
    real = obfuskey.generate_prime_multiplier

    def counting(*args, **kwargs):
        calls.append(1)
        return real(*args, **kwargs)

    monkeypatch.setattr(obfuskey, "generate_prime_multiplier", counting)
    ob = Obfuscator(BASE62_ALPHABET, 8)
    seen = []

    def worker():
        seen.append(ob.multiplier)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(calls) == 1
    assert len(set(seen)) == 1


def test_repr_hides_multiplier():
    ob = Obfuscator(BASE62_ALPHABET, 6, multiplier=7)
    assert repr(ob) == "Obfuscator(base=62, key_length=6)"
