"""16-bit CRC helpers and command-line seed parsing."""

from __future__ import annotations

from collections.abc import Sequence

__all__ = ["crcu8", "crcu16", "crcu32", "crc16", "parse_value", "get_seed"]


def _to_s32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def crcu8(data: int, crc: int) -> int:
    """Fold one byte into a 16-bit CRC."""
    data &= 0xFF
    crc &= 0xFFFF
    for _ in range(8):
        carry = (data ^ crc) & 1
        data >>= 1
        if carry:
            crc ^= 0x4002
            crc = (crc >> 1) | 0x8000
        else:
            crc >>= 1
    return crc


def crcu16(newval: int, crc: int) -> int:
    """Fold an unsigned 16-bit value into the CRC, low byte first."""
    newval &= 0xFFFF
    crc = crcu8(newval, crc)
    return crcu8(newval >> 8, crc)


def crc16(newval: int, crc: int) -> int:
    """Fold a signed 16-bit value into the CRC."""
    return crcu16(newval & 0xFFFF, crc)


def crcu32(newval: int, crc: int) -> int:
    """Fold an unsigned 32-bit value into the CRC, low half first."""
    newval &= 0xFFFFFFFF
    crc = crc16(newval & 0xFFFF, crc)
    return crc16(newval >> 16, crc)


_HEX_DIGITS = "0123456789abcdef"


def parse_value(text: str) -> int:
    """Parse a decimal or ``0x`` hex number with optional ``K``/``M`` suffix.

    Parsing stops at the first character that is not a digit; a leading
    ``-`` negates the result. The result is a signed 32-bit value.
    """
    pos = 0
    negative = text.startswith("-")
    if negative:
        pos = 1
    base = 10
    if text[pos:pos + 2] == "0x":
        base = 16
        pos += 2
    digits = _HEX_DIGITS[:base]
    value = 0
    while pos < len(text) and text[pos] in digits:
        value = value * base + digits.index(text[pos])
        pos += 1
    suffix = text[pos:pos + 1]
    if suffix == "K":
        value *= 1024
    elif suffix == "M":
        value *= 1024 * 1024
    if negative:
        value = -value
    return _to_s32(value)


def get_seed(argv: Sequence[str], index: int) -> int:
    """Return the parsed argument at ``index`` of ``argv``, or 0 if absent."""
    if len(argv) > index:
        return parse_value(argv[index])
    return 0