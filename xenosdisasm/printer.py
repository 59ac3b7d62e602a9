"""Render disassembly results into an assembly-like text listing."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional

from .alu import AluInstruction
from .disassembler import CfTrace, DisassemblyResult, SlotTrace
from .fetch import FetchInstruction
from .mnemonics import MnemonicTable
from .opcodes import ScalarOpcode


INDENT = "    "


class ListingRenderer:
    """Project decoded trace records onto text.

    Rendering never feeds back into decoding: the renderer only reads the
    typed structures recorded during traversal.
    """

    def __init__(self, mnemonics: Optional[MnemonicTable] = None) -> None:
        self.mnemonics = mnemonics or MnemonicTable()

    def render_lines(self, result: DisassemblyResult) -> List[str]:
        lines: List[str] = []
        for record in result.trace:
            if isinstance(record, CfTrace):
                lines.append(self.render_cf(record))
            else:
                lines.append(self.render_slot(record))
        return lines

    def render(self, result: DisassemblyResult) -> str:
        lines = self.render_lines(result)
        lines.extend(self._render_footer(result))
        return "\n".join(lines) + "\n"

    def write(self, result: DisassemblyResult, output_path: Path) -> None:
        output_path.write_text(self.render(result), "utf-8")

    def render_cf(self, record: CfTrace) -> str:
        cf = record.instruction
        return f"  //CF {record.pc:04d}: {cf.name} addr={cf.address} count={cf.count}"

    def render_slot(self, record: SlotTrace) -> str:
        instruction = record.instruction
        if instruction is None:
            return f"{INDENT}// truncated slot {record.slot} at word {record.offset}"
        if isinstance(instruction, FetchInstruction):
            return self.render_fetch(instruction)
        return self.render_alu(instruction)

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------
    def render_fetch(self, fetch: FetchInstruction) -> str:
        mnemonic = self.mnemonics.fetch(fetch.kind)
        if mnemonic is None:
            return f"{INDENT}// unsupported fetch {fetch.name}"
        if fetch.is_vertex:
            return f"{INDENT}{mnemonic} r{fetch.dest}, v{fetch.src}"
        return f"{INDENT}{mnemonic} r{fetch.dest}, r{fetch.src}, s{fetch.const_index}"

    def render_alu(self, alu: AluInstruction) -> str:
        """Render one line per ALU slot: the vector half, else the scalar half."""

        vector = self.mnemonics.vector(alu.vector_opcode)
        if vector is not None:
            mask = alu.write_channels
            dest = f"r{alu.vector_dest}" + (f".{mask}" if mask else "")
            operands = [dest] + [source.render() for source in alu.operands_for_vector()]
            return f"{INDENT}{vector} {', '.join(operands)}"

        scalar = None
        if alu.scalar_opcode != ScalarOpcode.RETAIN_PREV:
            scalar = self.mnemonics.scalar(alu.scalar_opcode)
        if scalar is not None:
            return f"{INDENT}{scalar} r{alu.scalar_dest}, {alu.src3.render()}"
        return f"{INDENT}// unknown ALU v={alu.vector_opcode.name} s={alu.scalar_opcode.name}"

    @staticmethod
    def _render_footer(result: DisassemblyResult) -> Iterable[str]:
        reason = result.halt_reason.value if result.halt_reason else "running"
        yield f"; halted: {reason} after {result.steps} group(s)"
        if result.coverage:
            yield "; unrecognized opcodes:"
            for name, count in sorted(result.coverage.items()):
                yield f";   {name} x{count}"
