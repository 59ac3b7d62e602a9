"""Control-flow instruction decoding.

Two 48-bit control-flow instructions share every group of three microcode
words.  Instruction A owns the first word and the low half of the second;
instruction B owns the high half of the second word and the whole third word:

    word 0: A.w0[0:31]
    word 1: A.w1[0:15]       | B.w0[0:15] << 16
    word 2: B.w0[16:31]      | B.w1[0:15] << 16

The helpers in this module rebuild the two (w0, w1) pairs and decode them
into :class:`ControlFlowInstruction` records.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence, Tuple

from .bits import WORD_MASK, extract_bits
from .opcodes import CfOp, CfOpcode, STREAM_END, opcode_code, resolve_opcode


CF_GROUP_WORDS = 3
HALF_MASK = 0xFFFF


@dataclass(frozen=True)
class ControlFlowInstruction:
    opcode: CfOp
    address: int
    count: int
    serialize: int
    predicated: bool
    raw_words: Tuple[int, int] = field(default=(0, 0), compare=False)

    @property
    def name(self) -> str:
        return self.opcode.name

    @property
    def is_stream_end(self) -> bool:
        return self.opcode == STREAM_END

    @property
    def is_exec(self) -> bool:
        return isinstance(self.opcode, CfOpcode) and self.opcode.is_exec

    def slot_is_fetch(self, slot: int) -> bool:
        """Return ``True`` when ``slot`` of the block holds a fetch instruction."""

        return bool((self.serialize >> (slot * 2)) & 1)


def decode_cf(w0: int, w1: int) -> ControlFlowInstruction:
    return ControlFlowInstruction(
        opcode=resolve_opcode(CfOpcode, extract_bits(w1, 12, 15)),
        address=extract_bits(w0, 0, 11),
        count=extract_bits(w0, 12, 14),
        serialize=extract_bits(w0, 16, 27),
        predicated=bool(extract_bits(w1, 10, 10)),
        raw_words=(w0 & WORD_MASK, w1 & WORD_MASK),
    )


def split_cf_pair(words: Sequence[int], index: int) -> Tuple[Tuple[int, int], Tuple[int, int]]:
    """Rebuild the ``(w0, w1)`` pairs of both instructions at ``index``."""

    if index < 0 or index + 2 >= len(words):
        raise IndexError(
            f"control-flow group at word {index} exceeds stream of {len(words)} words"
        )
    first, second, third = (word & WORD_MASK for word in words[index : index + CF_GROUP_WORDS])
    a = (first, second & HALF_MASK)
    b = (((second >> 16) | (third << 16)) & WORD_MASK, third >> 16)
    return a, b


def unpack_cf_pair(
    words: Sequence[int], index: int
) -> Tuple[ControlFlowInstruction, ControlFlowInstruction]:
    a, b = split_cf_pair(words, index)
    return decode_cf(*a), decode_cf(*b)


# ----------------------------------------------------------------------
# encoding
# ----------------------------------------------------------------------
def encode_cf(cf: ControlFlowInstruction) -> Tuple[int, int]:
    """Return the ``(w0, w1)`` encoding of ``cf``'s decoded fields."""

    w0 = (
        (cf.address & 0xFFF)
        | ((cf.count & 0x7) << 12)
        | ((cf.serialize & 0xFFF) << 16)
    )
    w1 = (int(cf.predicated) << 10) | ((opcode_code(cf.opcode) & 0xF) << 12)
    return w0, w1


def pack_cf_pair(
    a: ControlFlowInstruction, b: ControlFlowInstruction
) -> Tuple[int, int, int]:
    """Interleave two instructions into a three word group."""

    a0, a1 = encode_cf(a)
    b0, b1 = encode_cf(b)
    return (
        a0,
        (a1 & HALF_MASK) | ((b0 & HALF_MASK) << 16),
        (b0 >> 16) | ((b1 & HALF_MASK) << 16),
    )


def make_cf(
    opcode: CfOpcode,
    *,
    address: int = 0,
    count: int = 0,
    serialize: int = 0,
    predicated: bool = False,
) -> ControlFlowInstruction:
    """Convenience constructor used by assemblers and tests."""

    return ControlFlowInstruction(opcode, address, count, serialize, predicated)
