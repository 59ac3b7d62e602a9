"""Linear intermediate representation produced by the shader traversal."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

from .alu import AluInstruction
from .fetch import FetchInstruction
from .opcodes import VectorOpcode


class IROp(Enum):
    MOV = "mov"
    MAD = "mad"
    MUL = "mul"
    MAX = "max"
    MIN = "min"
    ADD = "add"
    DP3 = "dp3"
    DP4 = "dp4"


# Vector opcodes with a direct IR counterpart.  The number of sources kept is
# the operand count of the vector op.
VECTOR_LOWERING: Dict[VectorOpcode, IROp] = {
    VectorOpcode.MULADDv: IROp.MAD,
    VectorOpcode.MULv: IROp.MUL,
    VectorOpcode.MAXv: IROp.MAX,
    VectorOpcode.MINv: IROp.MIN,
    VectorOpcode.ADDv: IROp.ADD,
    VectorOpcode.DOT3v: IROp.DP3,
    VectorOpcode.DOT4v: IROp.DP4,
    VectorOpcode.MOVAv: IROp.MOV,
}


@dataclass(frozen=True)
class IRInstruction:
    """One recognised operation.

    Sources are bare register indices; the register file of each operand is
    not part of the IR.
    """

    op: IROp
    dst: int
    sources: Tuple[int, ...]

    @property
    def src1(self) -> Optional[int]:
        return self._source(0)

    @property
    def src2(self) -> Optional[int]:
        return self._source(1)

    @property
    def src3(self) -> Optional[int]:
        return self._source(2)

    def _source(self, position: int) -> Optional[int]:
        if position < len(self.sources):
            return self.sources[position]
        return None

    def to_dict(self) -> Dict[str, object]:
        payload: Dict[str, object] = {"op": self.op.value, "dst": self.dst}
        for position, index in enumerate(self.sources, start=1):
            payload[f"src{position}"] = index
        return payload

    def to_text(self) -> str:
        operands = ", ".join(str(index) for index in self.sources)
        return f"{self.op.value} {self.dst} <- {operands}"


@dataclass
class IRProgram:
    """Append-only sequence of :class:`IRInstruction` owned by one run."""

    instructions: List[IRInstruction] = field(default_factory=list)

    def append(self, instruction: IRInstruction) -> None:
        self.instructions.append(instruction)

    def __iter__(self) -> Iterator[IRInstruction]:
        return iter(self.instructions)

    def __len__(self) -> int:
        return len(self.instructions)

    def __getitem__(self, index: int) -> IRInstruction:
        return self.instructions[index]

    def render_text(self) -> str:
        lines = ["; ir"]
        if not self.instructions:
            lines.append(";   (empty)")
        for idx, instruction in enumerate(self.instructions):
            lines.append(f"{idx:04d}: {instruction.to_text()}")
        return "\n".join(lines) + "\n"


def lower_fetch(fetch: FetchInstruction) -> Optional[IRInstruction]:
    if fetch.is_vertex:
        return IRInstruction(IROp.MOV, fetch.dest, (fetch.src,))
    return None


def lower_alu(alu: AluInstruction) -> Optional[IRInstruction]:
    opcode = alu.vector_opcode
    if not isinstance(opcode, VectorOpcode):
        return None
    op = VECTOR_LOWERING.get(opcode)
    if op is None:
        return None
    indices = tuple(source.index for source in alu.operands_for_vector())
    return IRInstruction(op, alu.vector_dest, indices)
