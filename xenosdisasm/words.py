"""Helpers that turn raw shader blobs into 32-bit microcode words."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, List, Tuple


WORD_SIZE = 4


class Endianness(Enum):
    """Byte order applied uniformly to every word of a blob."""

    BIG = "big"
    LITTLE = "little"

    @classmethod
    def parse(cls, token: str) -> "Endianness":
        """Accept ``be``/``le`` shorthands as well as the full names."""

        normalized = token.strip().lower()
        aliases = {"be": cls.BIG, "big": cls.BIG, "le": cls.LITTLE, "little": cls.LITTLE}
        try:
            return aliases[normalized]
        except KeyError:
            raise ValueError(f"unknown byte order: {token!r}") from None

    @property
    def short_name(self) -> str:
        return "BE" if self is Endianness.BIG else "LE"


class WordAlignmentError(ValueError):
    """Raised when a byte buffer cannot be split into whole words."""

    def __init__(self, length: int) -> None:
        super().__init__(
            f"shader blob length {length} is not a multiple of {WORD_SIZE} bytes"
        )
        self.length = length


def load_words(data: bytes, endian: Endianness = Endianness.BIG) -> Tuple[int, ...]:
    """Decode ``data`` into an immutable sequence of unsigned 32-bit words.

    Unlike segment readers that tolerate trailing padding, a shader blob with
    a partial trailing word is rejected outright: the microcode is addressed
    in whole words and a misaligned blob means the caller picked the wrong
    slice of the container.
    """

    if len(data) % WORD_SIZE:
        raise WordAlignmentError(len(data))
    order = endian.value
    return tuple(
        int.from_bytes(data[idx : idx + WORD_SIZE], order)
        for idx in range(0, len(data), WORD_SIZE)
    )


def dump_words(words: Iterable[int], endian: Endianness = Endianness.BIG) -> bytes:
    """Serialise ``words`` back into bytes using ``endian``."""

    chunks: List[bytes] = []
    for word in words:
        chunks.append((word & 0xFFFFFFFF).to_bytes(WORD_SIZE, endian.value))
    return b"".join(chunks)
