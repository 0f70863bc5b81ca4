"""
Block cipher and password digest primitives used by the Feistel engine.

Both are thin wrappers over the `cryptography` package. They reproduce the
OpenSSL behaviour the engine's ciphertexts depend on: PKCS#7 padded raw
output from `encrypt_block`, and an MD5 hex digest truncated to the cipher's
key size from `digest_password`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Pattern, Union

from cryptography.hazmat.primitives import hashes, padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .errors import ConfigurationError, InputValidationError


@dataclass(frozen=True)
class CipherSpec:
    name: str
    key_bytes: int
    block_bits: int
    mode: str
    requires_iv: bool

    @property
    def iv_bytes(self) -> int:
        return self.block_bits // 8 if self.requires_iv else 0

    def describe(self) -> str:
        return (
            f"{self.name} key={self.key_bytes * 8} block={self.block_bits} "
            f"iv={'yes' if self.requires_iv else 'no'}"
        )


CIPHERS: Mapping[str, CipherSpec] = MappingProxyType({
    "aes-128-cbc": CipherSpec("aes-128-cbc", 16, 128, "cbc", True),
    "aes-192-cbc": CipherSpec("aes-192-cbc", 24, 128, "cbc", True),
    "aes-256-cbc": CipherSpec("aes-256-cbc", 32, 128, "cbc", True),
    "aes-128-ecb": CipherSpec("aes-128-ecb", 16, 128, "ecb", False),
})

BASES: Mapping[int, Pattern[str]] = MappingProxyType({
    2: re.compile(r"[0-1]+"),
    10: re.compile(r"[0-9]+"),
    16: re.compile(r"[a-f0-9]+"),
})

BASE_ALIASES: Mapping[str, int] = MappingProxyType({
    "bin": 2,
    "dec": 10,
    "hex": 16,
})


def get_cipher(cipher: Union[str, CipherSpec]) -> CipherSpec:
    if isinstance(cipher, CipherSpec):
        if CIPHERS.get(cipher.name) != cipher:
            raise ConfigurationError(f"Unregistered cipher spec: {cipher.name}")
        return cipher
    spec = CIPHERS.get(str(cipher).lower())
    if spec is None:
        raise ConfigurationError(
            f'Cipher must be one of "{", ".join(CIPHERS)}", got {cipher!r}.'
        )
    return spec


def normalize_base(base: Union[int, str]) -> int:
    if isinstance(base, bool):
        raise InputValidationError(f"Unsupported base: {base!r}")
    if isinstance(base, str):
        key = base.strip().lower()
        if key in BASE_ALIASES:
            return BASE_ALIASES[key]
        if key.isdigit():
            base = int(key)
    if isinstance(base, int) and base in BASES:
        return base
    allowed = ", ".join([str(b) for b in BASES] + list(BASE_ALIASES))
    raise InputValidationError(f'Base must be one of "{allowed}", got {base!r}.')


def coerce_bytes(value: Union[str, bytes, bytearray, memoryview]) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise TypeError(f"Unsupported secret type: {type(value)!r}")


def digest_password(password: Union[str, bytes], cipher: CipherSpec) -> bytes:
    """MD5 hex digest of the password, as ASCII, cut to the cipher key length."""
    h = hashes.Hash(hashes.MD5())
    h.update(coerce_bytes(password))
    return h.finalize().hex().encode("ascii")[:cipher.key_bytes]


def encrypt_block(
    plaintext: bytes,
    key: bytes,
    iv: Optional[bytes],
    cipher: CipherSpec,
) -> bytes:
    if cipher.mode == "cbc":
        mode = modes.CBC(iv)
    elif cipher.mode == "ecb":
        mode = modes.ECB()
    else:  # pragma: no cover - registry only holds the modes above
        raise ConfigurationError(f"Unsupported cipher mode: {cipher.mode}")
    padder = padding.PKCS7(cipher.block_bits).padder()
    data = padder.update(plaintext) + padder.finalize()
    encryptor = Cipher(algorithms.AES(key), mode).encryptor()
    return encryptor.update(data) + encryptor.finalize()


__all__ = [
    "BASES",
    "BASE_ALIASES",
    "CIPHERS",
    "CipherSpec",
    "coerce_bytes",
    "digest_password",
    "encrypt_block",
    "get_cipher",
    "normalize_base",
]
