"""Numeral conversion and one-shot encryption convenience wrappers."""

from .main import fwxfpe

NumeralConverter = fwxfpe.NumeralConverter


def pad(value: str, length: int = 0):
    return NumeralConverter.pad(value, length)


def bin_to_dec(binary: str, length: int = 0):
    return NumeralConverter.bin_to_dec(binary, length)


def bin_to_hex(binary: str, length: int = 0):
    return NumeralConverter.bin_to_hex(binary, length)


def bin_to_raw(binary: str, length: int = 0):
    return NumeralConverter.bin_to_raw(binary, length)


def dec_to_bin(decimal: str, length: int = 0):
    return NumeralConverter.dec_to_bin(decimal, length)


def dec_to_hex(decimal: str, length: int = 0):
    return NumeralConverter.dec_to_hex(decimal, length)


def dec_to_raw(decimal: str, length: int = 0):
    return NumeralConverter.dec_to_raw(decimal, length)


def hex_to_bin(hexadecimal: str, length: int = 0):
    return NumeralConverter.hex_to_bin(hexadecimal, length)


def hex_to_dec(hexadecimal: str, length: int = 0):
    return NumeralConverter.hex_to_dec(hexadecimal, length)


def hex_to_raw(hexadecimal: str, length: int = 0):
    return NumeralConverter.hex_to_raw(hexadecimal, length)


def raw_to_bin(raw: bytes, length: int = 0):
    return NumeralConverter.raw_to_bin(raw, length)


def raw_to_dec(raw: bytes, length: int = 0):
    return NumeralConverter.raw_to_dec(raw, length)


def raw_to_hex(raw: bytes, length: int = 0):
    return NumeralConverter.raw_to_hex(raw, length)


def encrypt_decimal(value: str, master_key, password, iv=None, **options):
    return fwxfpe.encrypt(value, 10, master_key=master_key, password=password, iv=iv, **options)


def decrypt_decimal(value: str, master_key, password, iv=None, **options):
    return fwxfpe.decrypt(value, 10, master_key=master_key, password=password, iv=iv, **options)


def encrypt_hex(value: str, master_key, password, iv=None, **options):
    return fwxfpe.encrypt(value, 16, master_key=master_key, password=password, iv=iv, **options)


def decrypt_hex(value: str, master_key, password, iv=None, **options):
    return fwxfpe.decrypt(value, 16, master_key=master_key, password=password, iv=iv, **options)


__all__ = [
    "bin_to_dec",
    "bin_to_hex",
    "bin_to_raw",
    "dec_to_bin",
    "dec_to_hex",
    "dec_to_raw",
    "decrypt_decimal",
    "decrypt_hex",
    "encrypt_decimal",
    "encrypt_hex",
    "hex_to_bin",
    "hex_to_dec",
    "hex_to_raw",
    "pad",
    "raw_to_bin",
    "raw_to_dec",
    "raw_to_hex",
]
