"""Bit-field helpers shared by every microcode decoder."""

from __future__ import annotations


WORD_BITS = 32
WORD_MASK = 0xFFFFFFFF


def extract_bits(word: int, low: int, high: int) -> int:
    """Return bits ``low`` through ``high`` (inclusive) of ``word``.

    Bit 0 is the least significant bit.  The result is right aligned so a
    request for ``(4, 7)`` on ``0xAB`` yields ``0xA``.  Requests outside a
    32-bit word are rejected instead of being wrapped.
    """

    if not (0 <= low <= high < WORD_BITS):
        raise ValueError(f"invalid bit range [{low}, {high}] for a 32-bit word")
    width = high - low + 1
    mask = WORD_MASK if width == WORD_BITS else (1 << width) - 1
    return ((word & WORD_MASK) >> low) & mask


def bit_is_set(word: int, bit: int) -> bool:
    return extract_bits(word, bit, bit) == 1
