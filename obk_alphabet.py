"""Alphabet value object and the base-N codec built on it."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from obk_errors import ErrorKind, ObfuskeyError, require_int


@dataclass(frozen=True)
class Alphabet:
    """Ordered set of distinct symbols; its size is the numeral base.

    The first symbol is the zero digit.
    """

    symbols: str
    _index: dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.symbols, str):
            raise ObfuskeyError(
                ErrorKind.TYPE_MISMATCH,
                f"Alphabet symbols must be a str, got {type(self.symbols).__name__}.",
            )
        if len(self.symbols) < 2:
            raise ObfuskeyError(
                ErrorKind.INVALID_VALUE,
                f"An alphabet needs at least 2 symbols, got {len(self.symbols)}.",
            )
        dupes = sorted(c for c, k in Counter(self.symbols).items() if k > 1)
        if dupes:
            raise ObfuskeyError(
                ErrorKind.DUPLICATE_SYMBOL,
                f"The alphabet contains duplicate characters: {''.join(dupes)!r}.",
                duplicates=dupes,
            )
        object.__setattr__(self, "_index", {c: i for i, c in enumerate(self.symbols)})

    @property
    def base(self) -> int:
        return len(self.symbols)

    @property
    def zero(self) -> str:
        return self.char_at(0)

    def __len__(self) -> int:
        return len(self.symbols)

    def __str__(self) -> str:
        return self.symbols

    def __contains__(self, char: object) -> bool:
        return char in self._index

    def index_of(self, char: str) -> int:
        """Digit value of a single symbol."""
        if not isinstance(char, str) or len(char) == 0:
            raise ObfuskeyError(ErrorKind.UNKNOWN_SYMBOL, "Cannot find index of an empty string in the alphabet.")
        if len(char) != 1:
            raise ObfuskeyError(ErrorKind.UNKNOWN_SYMBOL, f"Expected a single character, but received {char!r}.")
        try:
            return self._index[char]
        except KeyError:
            raise ObfuskeyError(
                ErrorKind.UNKNOWN_SYMBOL,
                f"Character {char!r} not found in the alphabet.",
                symbol=char,
            ) from None

    def char_at(self, index: int) -> str:
        require_int(index, "Alphabet.char_at argument 'index'")
        if index < 0 or index >= self.base:
            raise ObfuskeyError(
                ErrorKind.OUT_OF_RANGE,
                f"Index {index} is out of bounds for alphabet with base {self.base}.",
            )
        return self.symbols[index]

    def max_value(self, key_length: int) -> int:
        """Largest value a key of `key_length` symbols can hold: base**key_length - 1."""
        require_int(key_length, "key_length")
        if key_length < 0:
            raise ObfuskeyError(ErrorKind.NEGATIVE_VALUE, "Key length cannot be negative.")
        return self.base**key_length - 1


def encode(value: int, alphabet: Alphabet) -> str:
    """Positional base-`alphabet.base` representation, most significant digit first, unpadded."""
    require_int(value, "encode argument 'value'")
    if value < 0:
        raise ObfuskeyError(ErrorKind.NEGATIVE_VALUE, "The value must be greater than or equal to zero.")

    base = alphabet.base
    if value < base:
        return alphabet.char_at(value)

    digits: list[str] = []
    while value > 0:
        value, rem = divmod(value, base)
        digits.append(alphabet.char_at(rem))
    return "".join(reversed(digits))


def decode(value: str, alphabet: Alphabet) -> int:
    """Inverse of encode; leading zero symbols are accepted and contribute nothing."""
    if not isinstance(value, str):
        raise ObfuskeyError(ErrorKind.TYPE_MISMATCH, f"decode argument must be a str, got {type(value).__name__}.")
    if len(value) == 1:
        return alphabet.index_of(value)

    base = alphabet.base
    n = 0
    for pos, char in enumerate(reversed(value)):
        n += alphabet.index_of(char) * base**pos
    return n


__all__ = ["Alphabet", "decode", "encode"]
