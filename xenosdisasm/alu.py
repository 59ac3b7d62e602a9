"""Decoder for co-issued vector + scalar ALU instructions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from .bits import extract_bits
from .opcodes import ScalarOp, ScalarOpcode, VectorOp, VectorOpcode, opcode_code, resolve_opcode


CHANNELS = "xyzw"


class RegisterFile(Enum):
    TEMPORARY = 0
    CONSTANT = 1

    @property
    def prefix(self) -> str:
        return "c" if self is RegisterFile.CONSTANT else "r"


@dataclass(frozen=True)
class SourceOperand:
    """A source register reference.

    The ``(file, index)`` pair is the register identity: temporary ``r3`` and
    constant ``c3`` are distinct registers.
    """

    index: int
    file: RegisterFile = RegisterFile.TEMPORARY
    swizzle: int = 0
    negate: bool = False

    def render(self) -> str:
        return f"{self.file.prefix}{self.index}"

    def swizzle_text(self) -> str:
        return "".join(CHANNELS[(self.swizzle >> (i * 2)) & 0x3] for i in range(4))


@dataclass(frozen=True)
class AluInstruction:
    vector_opcode: VectorOp
    scalar_opcode: ScalarOp
    vector_dest: int
    scalar_dest: int
    write_mask: int
    sources: Tuple[SourceOperand, SourceOperand, SourceOperand]
    scalar_write_mask: int = 0
    export_data: bool = False

    @property
    def src1(self) -> SourceOperand:
        return self.sources[0]

    @property
    def src2(self) -> SourceOperand:
        return self.sources[1]

    @property
    def src3(self) -> SourceOperand:
        return self.sources[2]

    @property
    def write_channels(self) -> str:
        return mask_channels(self.write_mask)

    def operands_for_vector(self) -> Tuple[SourceOperand, ...]:
        """Return the sources consumed by the vector half of the instruction."""

        if isinstance(self.vector_opcode, VectorOpcode):
            return self.sources[: self.vector_opcode.source_count]
        return self.sources

    def describe_raw(self) -> str:
        parts = [
            f"vop={opcode_code(self.vector_opcode)}",
            f"sop={opcode_code(self.scalar_opcode)}",
            f"vdst={self.vector_dest}",
            f"vmask={self.write_mask:x}",
            f"sdst={self.scalar_dest}",
        ]
        for idx, source in enumerate(self.sources, start=1):
            parts.append(
                f"s{idx}(reg={source.index},sel={source.file.value},"
                f"swiz={source.swizzle:02x},neg={int(source.negate)})"
            )
        parts.append(f"export={int(self.export_data)}")
        return " ".join(parts)


def mask_channels(mask: int) -> str:
    """Return the ``xyzw`` subsequence selected by a 4-bit write mask."""

    return "".join(channel for bit, channel in enumerate(CHANNELS) if mask & (1 << bit))


def _source(w1: int, w2: int, reg_low: int, sel_bit: int, swiz_low: int, neg_bit: int) -> SourceOperand:
    return SourceOperand(
        index=extract_bits(w2, reg_low, reg_low + 7),
        file=RegisterFile(extract_bits(w2, sel_bit, sel_bit)),
        swizzle=extract_bits(w1, swiz_low, swiz_low + 7),
        negate=bool(extract_bits(w1, neg_bit, neg_bit)),
    )


def decode_alu(w0: int, w1: int, w2: int) -> AluInstruction:
    """Decode one ALU instruction body.  Every input produces a result."""

    sources = (
        _source(w1, w2, 0, 31, 16, 26),
        _source(w1, w2, 8, 30, 8, 25),
        _source(w1, w2, 16, 29, 0, 24),
    )
    return AluInstruction(
        vector_opcode=resolve_opcode(VectorOpcode, extract_bits(w2, 24, 28)),
        scalar_opcode=resolve_opcode(ScalarOpcode, extract_bits(w0, 26, 31)),
        vector_dest=extract_bits(w0, 0, 5),
        scalar_dest=extract_bits(w0, 8, 13),
        write_mask=extract_bits(w0, 16, 19),
        sources=sources,
        scalar_write_mask=extract_bits(w0, 20, 23),
        export_data=bool(extract_bits(w0, 15, 15)),
    )


def encode_alu(
    vector_opcode: int,
    scalar_opcode: int = 0,
    *,
    vector_dest: int = 0,
    scalar_dest: int = 0,
    write_mask: int = 0,
    sources: Tuple[SourceOperand, ...] = (),
) -> Tuple[int, int, int]:
    """Build the three words of an ALU instruction from its fields."""

    padded = tuple(sources) + (SourceOperand(0),) * (3 - len(sources))
    w0 = (
        (vector_dest & 0x3F)
        | ((scalar_dest & 0x3F) << 8)
        | ((write_mask & 0xF) << 16)
        | ((int(scalar_opcode) & 0x3F) << 26)
    )
    w1 = 0
    w2 = (int(vector_opcode) & 0x1F) << 24
    for source, reg_low, sel_bit, swiz_low, neg_bit in zip(
        padded, (0, 8, 16), (31, 30, 29), (16, 8, 0), (26, 25, 24)
    ):
        w2 |= (source.index & 0xFF) << reg_low
        w2 |= source.file.value << sel_bit
        w1 |= (source.swizzle & 0xFF) << swiz_low
        w1 |= int(source.negate) << neg_bit
    return w0, w1, w2
