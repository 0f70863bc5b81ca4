"""Exact conversions between binary, decimal and hexadecimal digit strings and raw bytes."""

from typing import Union


class NumeralConverter:
    """
    Stateless converters built on Python's arbitrary precision ints.

    Text outputs take `length` as a minimum digit count, raw outputs as a
    minimum byte count. Raw byte strings are unsigned big-endian.
    """

    @staticmethod
    def pad(value: str, length: int = 0) -> str:
        """Strip leading zeros (keeping at least "0") then left-pad to `length`."""
        value = value.lstrip("0") or "0"
        return value.rjust(length, "0")

    @staticmethod
    def pad_raw(data: bytes, length: int = 0) -> bytes:
        data = bytes(data).lstrip(b"\x00") or b"\x00"
        return data.rjust(length, b"\x00")

    @staticmethod
    def _to_raw(number: int, length: int) -> bytes:
        raw = number.to_bytes(max(1, (number.bit_length() + 7) // 8), "big")
        return NumeralConverter.pad_raw(raw, length)

    @staticmethod
    def _from_raw(raw: Union[bytes, bytearray, memoryview]) -> int:
        return int.from_bytes(bytes(raw), "big")

    # binary ->

    @staticmethod
    def bin_to_dec(binary: str, length: int = 0) -> str:
        return NumeralConverter.pad(str(int(binary, 2)), length)

    @staticmethod
    def bin_to_hex(binary: str, length: int = 0) -> str:
        return NumeralConverter.pad(format(int(binary, 2), "x"), length)

    @staticmethod
    def bin_to_raw(binary: str, length: int = 0) -> bytes:
        return NumeralConverter._to_raw(int(binary, 2), length)

    # decimal ->

    @staticmethod
    def dec_to_bin(decimal: str, length: int = 0) -> str:
        return NumeralConverter.pad(format(int(decimal, 10), "b"), length)

    @staticmethod
    def dec_to_hex(decimal: str, length: int = 0) -> str:
        return NumeralConverter.pad(format(int(decimal, 10), "x"), length)

    @staticmethod
    def dec_to_raw(decimal: str, length: int = 0) -> bytes:
        return NumeralConverter._to_raw(int(decimal, 10), length)

    # hexadecimal ->

    @staticmethod
    def hex_to_bin(hexadecimal: str, length: int = 0) -> str:
        return NumeralConverter.pad(format(int(hexadecimal, 16), "b"), length)

    @staticmethod
    def hex_to_dec(hexadecimal: str, length: int = 0) -> str:
        return NumeralConverter.pad(str(int(hexadecimal, 16)), length)

    @staticmethod
    def hex_to_raw(hexadecimal: str, length: int = 0) -> bytes:
        return NumeralConverter._to_raw(int(hexadecimal, 16), length)

    # raw ->

    @staticmethod
    def raw_to_bin(raw: bytes, length: int = 0) -> str:
        return NumeralConverter.pad(format(NumeralConverter._from_raw(raw), "b"), length)

    @staticmethod
    def raw_to_dec(raw: bytes, length: int = 0) -> str:
        return NumeralConverter.pad(str(NumeralConverter._from_raw(raw)), length)

    @staticmethod
    def raw_to_hex(raw: bytes, length: int = 0) -> str:
        return NumeralConverter.pad(format(NumeralConverter._from_raw(raw), "x"), length)

    # base dispatch used by the engine

    @staticmethod
    def to_bin(numeral: str, base: int, length: int = 0) -> str:
        if base == 2:
            return NumeralConverter.pad(numeral, length)
        if base == 10:
            return NumeralConverter.dec_to_bin(numeral, length)
        if base == 16:
            return NumeralConverter.hex_to_bin(numeral, length)
        raise ValueError(f"Unsupported base: {base}")

    @staticmethod
    def from_bin(binary: str, base: int, length: int = 0) -> str:
        if base == 2:
            return NumeralConverter.pad(binary, length)
        if base == 10:
            return NumeralConverter.bin_to_dec(binary, length)
        if base == 16:
            return NumeralConverter.bin_to_hex(binary, length)
        raise ValueError(f"Unsupported base: {base}")


__all__ = ["NumeralConverter"]
