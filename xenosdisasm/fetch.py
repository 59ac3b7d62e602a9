"""Decoder for vertex and texture fetch instructions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .bits import WORD_MASK, extract_bits
from .opcodes import FetchKind, FetchOpcode, resolve_opcode


@dataclass(frozen=True)
class FetchInstruction:
    kind: FetchKind
    dest: int
    src: int
    const_index: int
    # Words 1 and 2 hold extended addressing (format, stride, offsets) which
    # is not decoded yet; they are kept verbatim.
    extended_words: Tuple[int, int] = (0, 0)

    @property
    def name(self) -> str:
        return self.kind.name

    @property
    def is_vertex(self) -> bool:
        return self.kind == FetchOpcode.VTX_FETCH

    @property
    def is_texture(self) -> bool:
        return self.kind == FetchOpcode.TEX_FETCH


def decode_fetch(w0: int, w1: int, w2: int) -> FetchInstruction:
    return FetchInstruction(
        kind=resolve_opcode(FetchOpcode, extract_bits(w0, 0, 4)),
        dest=extract_bits(w0, 12, 17),
        src=extract_bits(w0, 5, 10),
        const_index=extract_bits(w0, 20, 24),
        extended_words=(w1 & WORD_MASK, w2 & WORD_MASK),
    )


def encode_fetch(kind: int, *, dest: int = 0, src: int = 0, const_index: int = 0) -> int:
    """Return the first word of a fetch instruction."""

    return (
        (int(kind) & 0x1F)
        | ((src & 0x3F) << 5)
        | ((dest & 0x3F) << 12)
        | ((const_index & 0x1F) << 20)
    )
