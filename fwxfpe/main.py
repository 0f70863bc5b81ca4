# FWXFPE FORMAT-PRESERVING ENCRYPTION ENGINE ->

import os as _os_module
import re as _re_module
import sys as _sys_module
import warnings as _warnings_module
from dataclasses import dataclass
from typing import Optional

from .converter import NumeralConverter
from .errors import (
    ConfigurationError,
    DomainExhaustionError,
    FPEError,
    InputValidationError,
)
from .primitives import (
    BASES,
    CIPHERS,
    CipherSpec,
    coerce_bytes,
    digest_password,
    encrypt_block,
    get_cipher,
    normalize_base,
)

# Domains may span thousands of decimal digits
if hasattr(_sys_module, "set_int_max_str_digits"):
    _sys_module.set_int_max_str_digits(0)  # 0 = unlimited


KEY_MIN_LENGTH = 16


def _env_int(name: str) -> Optional[int]:
    value = _os_module.getenv(name)
    if not value:
        return None
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return None
    if parsed <= 0:
        return None
    return parsed


@dataclass(frozen=True, repr=False)
class KeyMaterial:
    """Master key, password and IV for one encrypt/decrypt call."""

    master_key: bytes
    password: bytes
    iv: Optional[bytes] = None

    def __post_init__(self) -> None:
        master_key = coerce_bytes(self.master_key)
        password = coerce_bytes(self.password)
        iv = None if self.iv is None else coerce_bytes(self.iv)
        if len(master_key) < KEY_MIN_LENGTH:
            raise ConfigurationError(f"Key must be at least {KEY_MIN_LENGTH} bytes long.")
        if len(password) < KEY_MIN_LENGTH:
            raise ConfigurationError(f"Password must be at least {KEY_MIN_LENGTH} bytes long.")
        object.__setattr__(self, "master_key", master_key)
        object.__setattr__(self, "password", password)
        object.__setattr__(self, "iv", iv)

    def __repr__(self) -> str:
        iv_text = "None" if self.iv is None else f"<{len(self.iv)} bytes>"
        return f"KeyMaterial(master_key=<hidden>, password=<hidden>, iv={iv_text})"


@dataclass(frozen=True)
class SizingParameters:
    bin_size: int
    side_size: int
    dec_size: int
    hex_size: int

    def width(self, base: int) -> int:
        return {2: self.bin_size, 10: self.dec_size, 16: self.hex_size}[base]


class fwxfpe:
    import functools
    import os
    import pathlib
    import typing
    re = _re_module

    ENGINE_VERSION = "1.0.0"
    KEY_MIN_LENGTH = KEY_MIN_LENGTH
    MIN_ROUNDS = 3
    DEFAULT_MIN_VALUE = "0"
    DEFAULT_MAX_VALUE = "9999999999"
    # Warn when the domain fills less than 1/SPARSE_DOMAIN_RATIO of the block space
    SPARSE_DOMAIN_RATIO = 16

    _env_rounds = _env_int("FWXFPE_ROUNDS")
    DEFAULT_ROUNDS = _env_rounds if _env_rounds and _env_rounds >= MIN_ROUNDS else 7
    DEFAULT_CIPHER = os.getenv("FWXFPE_CIPHER", "aes-128-cbc").lower()
    if DEFAULT_CIPHER not in CIPHERS:
        DEFAULT_CIPHER = "aes-128-cbc"
    MAX_CYCLE_WALK = _env_int("FWXFPE_MAX_CYCLE_WALK") or 100_000
    del _env_rounds

    CIPHERS = CIPHERS
    BASES = BASES
    KeyMaterial = KeyMaterial
    SizingParameters = SizingParameters
    NumeralConverter = NumeralConverter

    _MIN_VALUE_PATTERN = re.compile(r"0|[1-9][0-9]*")
    _MAX_VALUE_PATTERN = re.compile(r"[1-9][0-9]*")

    @staticmethod
    def _warn(message: str) -> None:
        _warnings_module.warn(message, RuntimeWarning, stacklevel=3)

    @staticmethod
    def _normalize_bound(value: "typing.Union[int, str]", pattern, message: str) -> str:
        if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
            value = str(value)
        if not isinstance(value, str) or not pattern.fullmatch(value):
            raise ConfigurationError(message)
        return value

    @staticmethod
    def _check_rounds(rounds) -> int:
        if isinstance(rounds, bool) or not isinstance(rounds, int) or rounds < fwxfpe.MIN_ROUNDS:
            raise ConfigurationError(
                f"Number of rounds must be an integer greater or equal {fwxfpe.MIN_ROUNDS}"
            )
        return rounds

    @staticmethod
    def _check_iv(iv: "typing.Optional[bytes]", cipher: CipherSpec) -> "typing.Optional[bytes]":
        if cipher.requires_iv:
            given = 0 if iv is None else len(iv)
            if given != cipher.iv_bytes:
                raise InputValidationError(
                    f"Initialization vector of {cipher.iv_bytes} bytes is required "
                    f'for cipher "{cipher.name}", {given} given.'
                )
            return iv
        if iv is not None:
            raise InputValidationError(
                f'Cipher "{cipher.name}" does not take an initialization vector.'
            )
        return None

    @staticmethod
    def _low_bits(raw: bytes, width: int) -> str:
        """Low-order `width` bits of a big-endian byte string, zero-filled."""
        value = int.from_bytes(raw, "big") & ((1 << width) - 1)
        return format(value, f"0{width}b")

    # ----------------------------------------------------------------------
    # Domain sizing
    # ----------------------------------------------------------------------

    @staticmethod
    def size_domain(max_value: "typing.Union[int, str]", block_bits: int) -> SizingParameters:
        """
        Find the smallest even bit width whose square-root span exceeds `max_value`.

        The Feistel halves are `side_size = bin_size / 2` bits wide and are fed
        through the block cipher, so they may not exceed `block_bits`.
        """
        max_text = fwxfpe._normalize_bound(
            max_value,
            fwxfpe._MAX_VALUE_PATTERN,
            "Max value must start with a nonzero digit and contain only digits."
        )
        limit = int(max_text)
        bin_size = 2
        span = 4
        while span <= limit:
            bin_size += 2
            span *= 4
        side_size = bin_size // 2
        if side_size > block_bits:
            raise ConfigurationError(
                f"Side size ({side_size} bits) must be less or equal to cipher length ({block_bits} bits)"
            )
        return SizingParameters(
            bin_size=bin_size,
            side_size=side_size,
            dec_size=len(max_text),
            hex_size=-(-bin_size // 4),
        )

    # ----------------------------------------------------------------------
    # Round keys
    # ----------------------------------------------------------------------

    @staticmethod
    def derive_schedule(
        key: KeyMaterial,
        rounds: int,
        cipher: "typing.Union[str, CipherSpec]",
        side_size: int,
    ) -> "typing.Tuple[str, ...]":
        """
        Chain block-cipher calls from the master key into one subkey per round.

        Every call uses the same (password digest, IV) pair; entry `i - 1`
        holds the key of round `i` as a `side_size`-digit binary string.
        """
        if not isinstance(key, KeyMaterial):
            raise TypeError(f"Expected KeyMaterial, got {type(key)!r}")
        spec = get_cipher(cipher)
        rounds = fwxfpe._check_rounds(rounds)
        if side_size < 1 or side_size > spec.block_bits:
            raise ConfigurationError(
                f"Side size ({side_size} bits) must be between 1 and {spec.block_bits} bits"
            )
        iv = fwxfpe._check_iv(key.iv, spec)
        cipher_key = digest_password(key.password, spec)
        return fwxfpe._chain_keys(key.master_key, cipher_key, iv, spec, rounds, side_size)

    @staticmethod
    def _chain_keys(
        master_key: bytes,
        cipher_key: bytes,
        iv: "typing.Optional[bytes]",
        spec: CipherSpec,
        rounds: int,
        side_size: int,
    ) -> "typing.Tuple[str, ...]":
        schedule = []
        prev = encrypt_block(master_key, cipher_key, iv, spec)
        for _ in range(rounds):
            prev = encrypt_block(prev, cipher_key, iv, spec)
            schedule.append(fwxfpe._low_bits(prev, side_size))
        return tuple(schedule)

    # ----------------------------------------------------------------------
    # Feistel network
    # ----------------------------------------------------------------------

    @staticmethod
    def round_function(
        half: str,
        round_key: str,
        cipher_key: bytes,
        iv: "typing.Optional[bytes]",
        cipher: CipherSpec,
    ) -> str:
        # The digit strings themselves are the cipher input, not their packed bits
        raw = encrypt_block((half + round_key).encode("ascii"), cipher_key, iv, cipher)
        return fwxfpe._low_bits(raw, len(half))

    @staticmethod
    def _xor_bits(left: str, right: str) -> str:
        return format(int(left, 2) ^ int(right, 2), f"0{len(left)}b")

    @staticmethod
    def _split(block: str) -> "typing.Tuple[str, str]":
        if not block or len(block) % 2:
            raise ValueError(f"Feistel block must have a positive even length, got {len(block)}")
        side = len(block) // 2
        return block[:side], block[side:]

    @staticmethod
    def feistel_encrypt(block: str, schedule, round_fn) -> str:
        for round_key in schedule:
            left, right = fwxfpe._split(block)
            block = right + fwxfpe._xor_bits(left, round_fn(right, round_key))
        return block

    @staticmethod
    def feistel_decrypt(block: str, schedule, round_fn) -> str:
        for round_key in reversed(schedule):
            left, right = fwxfpe._split(block)
            block = fwxfpe._xor_bits(right, round_fn(left, round_key)) + left
        return block

    # ----------------------------------------------------------------------
    # Cycle walking
    # ----------------------------------------------------------------------

    @staticmethod
    def cycle_walk(
        numeral: str,
        base: int,
        transform,
        *,
        bin_size: int,
        lower: int,
        upper: int,
        pad_length: int = 0,
        max_walk: "typing.Optional[int]" = None,
    ) -> str:
        """
        Re-run `transform` on its own output until the value lands in [lower, upper].

        Each pass converts the current numeral to a `bin_size`-bit block, applies
        `transform` and converts back to `base`. Raises DomainExhaustionError
        after `max_walk` passes.
        """
        limit = fwxfpe.MAX_CYCLE_WALK if max_walk is None else max_walk
        current = numeral
        for _ in range(limit):
            block = NumeralConverter.to_bin(current, base, bin_size)
            if len(block) != bin_size:
                raise InputValidationError(
                    f"Value {current} does not fit in a {bin_size}-bit block."
                )
            block = transform(block)
            current = NumeralConverter.from_bin(block, base, pad_length)
            if lower <= int(block, 2) <= upper:
                return current
        raise DomainExhaustionError(
            f"Cycle walk did not reach [{lower}, {upper}] within {limit} attempts.",
            attempts=limit,
        )

    # ----------------------------------------------------------------------
    # Encryption context
    # ----------------------------------------------------------------------

    class Context:
        """
        Immutable encryption context: domain, cipher and round count.

        Key material is passed per call, so one context can serve many keys and
        threads. Use `with_range`, `with_rounds`, `with_cipher` or
        `with_max_walk` to get a context with different settings.
        """

        __slots__ = ("_cipher", "_rounds", "_min_value", "_max_value", "_sizing", "_max_walk")

        def __init__(
            self,
            min_value: "fwxfpe.typing.Union[int, str, None]" = None,
            max_value: "fwxfpe.typing.Union[int, str, None]" = None,
            cipher: "fwxfpe.typing.Union[str, CipherSpec, None]" = None,
            rounds: "fwxfpe.typing.Optional[int]" = None,
            *,
            max_walk: "fwxfpe.typing.Optional[int]" = None
        ) -> None:
            spec = get_cipher(fwxfpe.DEFAULT_CIPHER if cipher is None else cipher)
            rounds = fwxfpe._check_rounds(fwxfpe.DEFAULT_ROUNDS if rounds is None else rounds)
            min_text = fwxfpe._normalize_bound(
                fwxfpe.DEFAULT_MIN_VALUE if min_value is None else min_value,
                fwxfpe._MIN_VALUE_PATTERN,
                "Min value must contain only digits."
            )
            max_text = fwxfpe._normalize_bound(
                fwxfpe.DEFAULT_MAX_VALUE if max_value is None else max_value,
                fwxfpe._MAX_VALUE_PATTERN,
                "Max value must start with a nonzero digit and contain only digits."
            )
            if int(max_text) <= int(min_text):
                raise ConfigurationError("Max value must be greater than min value.")
            sizing = fwxfpe.size_domain(max_text, spec.block_bits)
            walk = fwxfpe.MAX_CYCLE_WALK if max_walk is None else max_walk
            if isinstance(walk, bool) or not isinstance(walk, int) or walk < 1:
                raise ConfigurationError("Cycle walk limit must be a positive integer.")

            object.__setattr__(self, "_cipher", spec)
            object.__setattr__(self, "_rounds", rounds)
            object.__setattr__(self, "_min_value", min_text)
            object.__setattr__(self, "_max_value", max_text)
            object.__setattr__(self, "_sizing", sizing)
            object.__setattr__(self, "_max_walk", walk)

            space = 1 << sizing.bin_size
            size = int(max_text) - int(min_text) + 1
            if space > size * fwxfpe.SPARSE_DOMAIN_RATIO:
                fwxfpe._warn(
                    f"Domain [{min_text}, {max_text}] fills 1/{space // size} of the "
                    f"{sizing.bin_size}-bit block space; expect about {space // size} "
                    "cycle-walk passes per call."
                )

        def __setattr__(self, name, value):
            raise AttributeError("Context is immutable; use the with_* methods instead")

        def __delattr__(self, name):
            raise AttributeError("Context is immutable; use the with_* methods instead")

        def __repr__(self) -> str:
            return (
                f"Context(min_value={self._min_value!r}, max_value={self._max_value!r}, "
                f"cipher={self._cipher.name!r}, rounds={self._rounds}, max_walk={self._max_walk})"
            )

        def __eq__(self, other) -> bool:
            if not isinstance(other, fwxfpe.Context):
                return NotImplemented
            return self._key() == other._key()

        def __hash__(self) -> int:
            return hash(self._key())

        def _key(self):
            return (self._min_value, self._max_value, self._cipher, self._rounds, self._max_walk)

        @property
        def cipher(self) -> CipherSpec:
            return self._cipher

        @property
        def rounds(self) -> int:
            return self._rounds

        @property
        def min_value(self) -> str:
            return self._min_value

        @property
        def max_value(self) -> str:
            return self._max_value

        @property
        def sizing(self) -> SizingParameters:
            return self._sizing

        @property
        def max_walk(self) -> int:
            return self._max_walk

        def _rebuild(self, **changes) -> "fwxfpe.Context":
            params = {
                "min_value": self._min_value,
                "max_value": self._max_value,
                "cipher": self._cipher,
                "rounds": self._rounds,
                "max_walk": self._max_walk,
            }
            params.update(changes)
            return fwxfpe.Context(**params)

        def with_range(self, min_value, max_value) -> "fwxfpe.Context":
            return self._rebuild(min_value=min_value, max_value=max_value)

        def with_rounds(self, rounds: int) -> "fwxfpe.Context":
            return self._rebuild(rounds=rounds)

        def with_cipher(self, cipher) -> "fwxfpe.Context":
            return self._rebuild(cipher=cipher)

        def with_max_walk(self, max_walk: int) -> "fwxfpe.Context":
            return self._rebuild(max_walk=max_walk)

        def _numeral(self, value, base: int) -> str:
            if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
                return NumeralConverter.from_bin(format(value, "b"), base)
            pattern = BASES[base]
            if not isinstance(value, str) or not pattern.fullmatch(value):
                raise InputValidationError(
                    f'Input data does not match pattern "{pattern.pattern}".'
                )
            return value

        def _run(self, value, key: KeyMaterial, base, pad: bool, forward: bool) -> str:
            base = normalize_base(base)
            numeral = self._numeral(value, base)
            if not isinstance(key, KeyMaterial):
                raise TypeError(f"Expected KeyMaterial, got {type(key)!r}")
            iv = fwxfpe._check_iv(key.iv, self._cipher)
            lower = int(self._min_value)
            upper = int(self._max_value)
            if not lower <= int(numeral, base) <= upper:
                raise InputValidationError(
                    f"Input value {numeral} (base {base}) is outside "
                    f"[{self._min_value}, {self._max_value}]."
                )
            cipher_key = digest_password(key.password, self._cipher)
            schedule = fwxfpe._chain_keys(
                key.master_key,
                cipher_key,
                iv,
                self._cipher,
                self._rounds,
                self._sizing.side_size,
            )
            round_fn = fwxfpe.functools.partial(
                fwxfpe.round_function,
                cipher_key=cipher_key,
                iv=iv,
                cipher=self._cipher,
            )
            network = fwxfpe.feistel_encrypt if forward else fwxfpe.feistel_decrypt
            return fwxfpe.cycle_walk(
                numeral,
                base,
                lambda block: network(block, schedule, round_fn),
                bin_size=self._sizing.bin_size,
                lower=lower,
                upper=upper,
                pad_length=self._sizing.width(base) if pad else 0,
                max_walk=self._max_walk,
            )

        def encrypt(self, value, key: KeyMaterial, base=10, pad: bool = False) -> str:
            """Encrypt `value` (a numeral in `base`) to another numeral of the same domain."""
            return self._run(value, key, base, pad, forward=True)

        def decrypt(self, value, key: KeyMaterial, base=10, pad: bool = False) -> str:
            return self._run(value, key, base, pad, forward=False)

    # ----------------------------------------------------------------------
    # One-shot helpers
    # ----------------------------------------------------------------------

    @staticmethod
    def encrypt(
        value,
        base=10,
        *,
        master_key,
        password,
        iv=None,
        min_value=None,
        max_value=None,
        rounds=None,
        cipher=None,
        pad: bool = False,
        max_walk=None
    ) -> str:
        context = fwxfpe.Context(min_value, max_value, cipher, rounds, max_walk=max_walk)
        return context.encrypt(value, KeyMaterial(master_key, password, iv), base=base, pad=pad)

    @staticmethod
    def decrypt(
        value,
        base=10,
        *,
        master_key,
        password,
        iv=None,
        min_value=None,
        max_value=None,
        rounds=None,
        cipher=None,
        pad: bool = False,
        max_walk=None
    ) -> str:
        context = fwxfpe.Context(min_value, max_value, cipher, rounds, max_walk=max_walk)
        return context.decrypt(value, KeyMaterial(master_key, password, iv), base=base, pad=pad)

    # ----------------------------------------------------------------------
    # CLI helpers
    # ----------------------------------------------------------------------

    @staticmethod
    def _resolve_secret(value: "typing.Optional[str]", env_name: str) -> "typing.Optional[bytes]":
        raw = value if value else fwxfpe.os.getenv(env_name)
        if not raw:
            return None
        if raw.startswith("hex:"):
            try:
                return bytes.fromhex(raw[4:])
            except ValueError as exc:
                raise InputValidationError(f"Invalid hex secret: {exc}") from exc
        try:
            candidate = fwxfpe.pathlib.Path(raw).expanduser()
            is_file = candidate.is_file()
        except OSError:
            is_file = False
        if is_file:
            try:
                return candidate.read_bytes().rstrip(b"\r\n")
            except OSError as exc:
                raise InputValidationError(f"Cannot read secret file {candidate}: {exc}") from exc
        return raw.encode("utf-8")


def cli(argv=None) -> int:
    import argparse

    parser = argparse.ArgumentParser(prog="fwxfpe", description="FWXFPE format-preserving number encryption")
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_domain_arguments(sub) -> None:
        sub.add_argument(
            "--min",
            dest="min_value",
            default=fwxfpe.DEFAULT_MIN_VALUE,
            help="Smallest value of the domain (decimal)"
        )
        sub.add_argument(
            "--max",
            dest="max_value",
            default=fwxfpe.DEFAULT_MAX_VALUE,
            help="Largest value of the domain (decimal)"
        )
        sub.add_argument(
            "--cipher",
            default=None,
            help=f"Block cipher: {', '.join(CIPHERS)} (default {fwxfpe.DEFAULT_CIPHER})"
        )

    for name, help_text in (
        ("encrypt", "Encrypt one or more numbers inside the domain"),
        ("decrypt", "Decrypt one or more numbers inside the domain"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument(
            "values",
            nargs="+",
            help="Numbers written in --base"
        )
        add_domain_arguments(sub)
        sub.add_argument(
            "--base",
            default="10",
            help="Numeral base: 2, 10, 16, bin, dec or hex"
        )
        sub.add_argument(
            "--pad",
            action="store_true",
            help="Left-pad results to the domain's full width"
        )
        sub.add_argument(
            "--rounds",
            type=int,
            default=None,
            help=f"Feistel rounds, at least {fwxfpe.MIN_ROUNDS} (default {fwxfpe.DEFAULT_ROUNDS})"
        )
        sub.add_argument(
            "--max-walk",
            dest="max_walk",
            type=int,
            default=None,
            help=f"Cycle-walk iteration cap (default {fwxfpe.MAX_CYCLE_WALK})"
        )
        sub.add_argument(
            "-k", "--key",
            default=None,
            help="Master key text, path or hex:<digits> (falls back to FWXFPE_KEY)"
        )
        sub.add_argument(
            "-p", "--password",
            default=None,
            help="Password text, path or hex:<digits> (falls back to FWXFPE_PASSWORD)"
        )
        sub.add_argument(
            "--iv",
            default=None,
            help="Initialization vector text, path or hex:<digits> (falls back to FWXFPE_IV)"
        )

    subparsers.add_parser("ciphers", help="List supported block ciphers")

    info = subparsers.add_parser("info", help="Show block sizing for a domain")
    add_domain_arguments(info)

    args = parser.parse_args(argv)

    if args.command == "ciphers":
        for spec in CIPHERS.values():
            print(spec.describe())
        return 0

    if args.command == "info":
        try:
            context = fwxfpe.Context(args.min_value, args.max_value, args.cipher)
        except FPEError as exc:
            print(f"FAIL! {exc}")
            return 1
        sizing = context.sizing
        print(f"domain: [{context.min_value}, {context.max_value}]")
        print(f"cipher: {context.cipher.describe()}")
        print(f"bin_size: {sizing.bin_size}")
        print(f"side_size: {sizing.side_size}")
        print(f"dec_size: {sizing.dec_size}")
        print(f"hex_size: {sizing.hex_size}")
        return 0

    try:
        context = fwxfpe.Context(
            args.min_value,
            args.max_value,
            args.cipher,
            args.rounds,
            max_walk=args.max_walk
        )
        base = normalize_base(args.base)
        master_key = fwxfpe._resolve_secret(args.key, "FWXFPE_KEY")
        password = fwxfpe._resolve_secret(args.password, "FWXFPE_PASSWORD")
        iv = fwxfpe._resolve_secret(args.iv, "FWXFPE_IV")
        if master_key is None or password is None:
            raise ConfigurationError("Both a master key and a password are required")
        key = KeyMaterial(master_key, password, iv)
    except FPEError as exc:
        print(f"FAIL! {exc}")
        return 1

    operation = context.encrypt if args.command == "encrypt" else context.decrypt
    results = []
    failures = 0
    for value in args.values:
        try:
            results.append((value, operation(value, key, base=base, pad=args.pad)))
        except FPEError as exc:
            results.append((value, f"FAIL! {exc}"))
            failures += 1

    if len(results) == 1:
        print(results[0][1])
    else:
        for value, result in results:
            print(f"{value}: {result}")
    return 0 if failures == 0 else 1


def main(argv=None) -> int:
    return cli(argv)


__all__ = [
    "ConfigurationError",
    "DomainExhaustionError",
    "FPEError",
    "InputValidationError",
    "KeyMaterial",
    "NumeralConverter",
    "SizingParameters",
    "cli",
    "fwxfpe",
    "main",
]


if __name__ == "__main__":
    raise SystemExit(main())
