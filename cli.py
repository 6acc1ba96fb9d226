#!/usr/bin/env python3
"""CLI for obfuskey.

Usage examples:
  - Value -> key and back:
      python3 obfuskey.py key 12345 --alphabet base62 --key-length 6
      python3 obfuskey.py value d2Aasl --alphabet base62 --key-length 6
      python3 obfuskey.py value --key=-epyI9 --alphabet base64url   (keys starting with '-')

  - Fixed multiplier:
      python3 obfuskey.py key 54321 --alphabet base64url --multiplier 7

  - Bit fields (schema from a JSON file, see obk_json.py):
      python3 obfuskey.py pack --schema ids.json id=100 type=2 flag=1
      python3 obfuskey.py pack --schema ids.json id=100 type=2 flag=1 --obfuscate --key-length 3
      python3 obfuskey.py unpack --schema ids.json 0325 --bytes big
      python3 obfuskey.py unpack --schema ids.json --data=-Ab --obfuscated --alphabet base64url --key-length 3

  - Primes:
      python3 obfuskey.py prime 9
      python3 obfuskey.py prime 561 --check
"""

from __future__ import annotations

import argparse

from obfuskey import Obfuscator
from obk_alphabet import Alphabet
from obk_alphabets import PRESETS, resolve_alphabet
from obk_bits import BYTE_ORDERS, Packer
from obk_errors import ObfuskeyError
from obk_json import load_schema_json
from obk_primes import is_prime, next_prime

DEFAULT_ALPHABET = "base62"
DEFAULT_KEY_LENGTH = 6


def resolve_key_options(
    *,
    alphabet: str | None,
    key_length: int | None,
    multiplier: int | None,
) -> tuple[Alphabet, int, int | None]:
    """Resolve defaults + overrides.

    Returns: (alphabet, key_length, multiplier_or_None)
    """
    alpha = resolve_alphabet(DEFAULT_ALPHABET if alphabet is None else alphabet)
    length = DEFAULT_KEY_LENGTH if key_length is None else int(key_length)
    if length < 1:
        raise ValueError("key_length must be >= 1")
    return alpha, length, multiplier


def parse_assignments(items: list[str]) -> dict[str, int]:
    """["id=100", "flag=1"] -> {"id": 100, "flag": 1}"""
    out: dict[str, int] = {}
    for item in items:
        name, sep, raw = item.partition("=")
        name = name.strip()
        if not sep or not name:
            raise ValueError(f"Expected NAME=VALUE, got {item!r}")
        if name in out:
            raise ValueError(f"Field given twice: {name!r}")
        out[name] = int(raw.strip(), 0)
    return out


def _add_key_options(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--alphabet",
        default=None,
        help=f"Preset ({', '.join(sorted(PRESETS))}) or literal symbols. Default: {DEFAULT_ALPHABET}.",
    )
    p.add_argument("--key-length", type=int, default=None, help=f"Key length in symbols. Default: {DEFAULT_KEY_LENGTH}.")
    p.add_argument("--multiplier", type=int, default=None, help="Odd multiplier (default: synthesized prime).")


def build_argparser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="obfuskey — fixed-length obfuscated keys and bit-field packing.")
    sub = ap.add_subparsers(dest="command", required=True)

    p = sub.add_parser("key", help="Obfuscate an integer into a key.")
    p.add_argument("value", type=int)
    _add_key_options(p)

    p = sub.add_parser("value", help="Recover the integer behind a key.")
    p.add_argument("key", nargs="?", help="Key. Omit it and use --key=KEY if the key starts with '-'.")
    p.add_argument("--key", dest="key_option", default=None, help="Key, for keys starting with '-' (write --key=KEY).")
    _add_key_options(p)

    p = sub.add_parser("pack", help="Pack NAME=VALUE fields using a JSON schema.")
    p.add_argument("--schema", required=True, help="Schema JSON file.")
    p.add_argument("fields", nargs="+", metavar="NAME=VALUE")
    p.add_argument("--obfuscate", action="store_true", help="Emit an obfuscated key instead of an int.")
    p.add_argument("--bytes", choices=BYTE_ORDERS, default=None, help="Emit fixed-width bytes (hex) in this order.")
    _add_key_options(p)

    p = sub.add_parser("unpack", help="Unpack an int, a key (--obfuscated) or hex bytes (--bytes).")
    p.add_argument("--schema", required=True, help="Schema JSON file.")
    p.add_argument("data", nargs="?", help="Int, key or hex. Omit it and use --data=DATA if it starts with '-'.")
    p.add_argument("--data", dest="data_option", default=None, help="DATA, for keys starting with '-' (write --data=DATA).")
    p.add_argument("--obfuscated", action="store_true", help="DATA is an obfuscated key.")
    p.add_argument("--bytes", choices=BYTE_ORDERS, default=None, help="DATA is hex bytes in this order.")
    _add_key_options(p)

    p = sub.add_parser("prime", help="Next prime above N, or a primality check.")
    p.add_argument("n", type=int)
    p.add_argument("--check", action="store_true", help="Only report whether N is prime.")

    return ap


def _obfuscator_from(args: argparse.Namespace) -> Obfuscator:
    alphabet, key_length, multiplier = resolve_key_options(
        alphabet=args.alphabet,
        key_length=args.key_length,
        multiplier=args.multiplier,
    )
    return Obfuscator(alphabet, key_length, multiplier)


def _packer_from(args: argparse.Namespace, with_key: bool) -> Packer:
    schema = load_schema_json(args.schema)
    return Packer(schema, _obfuscator_from(args) if with_key else None)


def _positional_or_option(positional: str | None, option: str | None, name: str) -> str:
    """One of DATA / --data=DATA; the option form carries values starting with '-'."""
    if (positional is None) == (option is None):
        raise ValueError(f"Give exactly one of {name.upper()} or --{name}={name.upper()}")
    return positional if option is None else option


def _format_fields(values: dict[str, int]) -> str:
    return "  ".join(f"{k}={v}" for k, v in values.items())


def _run(args: argparse.Namespace) -> int:
    if args.command == "key":
        ob = _obfuscator_from(args)
        print(f"[key] {ob.get_key(args.value)}")
        return 0

    if args.command == "value":
        key = _positional_or_option(args.key, args.key_option, "key")
        ob = _obfuscator_from(args)
        print(f"[value] {ob.get_value(key)}")
        return 0

    if args.command == "pack":
        if args.obfuscate and args.bytes:
            raise ValueError("--obfuscate and --bytes are mutually exclusive")
        packer = _packer_from(args, with_key=args.obfuscate)
        values = parse_assignments(args.fields)
        if args.bytes:
            print(f"[pack] bytes={packer.pack_bytes(values, args.bytes).hex()}")
        elif args.obfuscate:
            print(f"[pack] key={packer.pack(values, obfuscate=True)}")
        else:
            print(f"[pack] int={packer.pack(values)}  total_bits={packer.total_bits}")
        return 0

    if args.command == "unpack":
        if args.obfuscated and args.bytes:
            raise ValueError("--obfuscated and --bytes are mutually exclusive")
        data = _positional_or_option(args.data, args.data_option, "data")
        packer = _packer_from(args, with_key=args.obfuscated)
        if args.bytes:
            values = packer.unpack_bytes(bytes.fromhex(data), args.bytes)
        elif args.obfuscated:
            values = packer.unpack(data, obfuscated=True)
        else:
            values = packer.unpack(int(data, 0))
        print(f"[unpack] {_format_fields(values)}")
        return 0

    if args.command == "prime":
        if args.check:
            print(f"[prime] is_prime({args.n})={is_prime(args.n)}")
        else:
            print(f"[prime] next_prime({args.n})={next_prime(args.n)}")
        return 0

    raise AssertionError(f"unhandled command {args.command!r}")


def main(argv: list[str] | None = None) -> int:
    ap = build_argparser()
    args = ap.parse_args(argv)
    try:
        return _run(args)
    except ObfuskeyError as e:
        ap.error(f"{e.kind.value}: {e}")
    except ValueError as e:
        ap.error(str(e))


if __name__ == "__main__":
    raise SystemExit(main())
