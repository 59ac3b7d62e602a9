"""Linear traversal of a shader's control-flow stream."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Union

from .alu import AluInstruction, decode_alu
from .control_flow import CF_GROUP_WORDS, ControlFlowInstruction, unpack_cf_pair
from .fetch import FetchInstruction, decode_fetch
from .ir import IRInstruction, IRProgram, lower_alu, lower_fetch
from .opcodes import Unrecognized


logger = logging.getLogger(__name__)

SLOT_WORDS = 3


class TraversalState(Enum):
    RUNNING = "running"
    HALTED = "halted"


class HaltReason(Enum):
    STREAM_END = "stream-end"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class CfTrace:
    pc: int
    instruction: ControlFlowInstruction


@dataclass(frozen=True)
class SlotTrace:
    """Decoded instruction slot of an executed block.

    ``instruction`` is ``None`` when the slot lies past the end of the word
    stream.
    """

    slot: int
    offset: int
    instruction: Union[FetchInstruction, AluInstruction, None]
    ir: Optional[IRInstruction] = None

    @property
    def truncated(self) -> bool:
        return self.instruction is None


TraceRecord = Union[CfTrace, SlotTrace]


@dataclass
class DisassemblyResult:
    ir: IRProgram = field(default_factory=IRProgram)
    trace: List[TraceRecord] = field(default_factory=list)
    state: TraversalState = TraversalState.RUNNING
    halt_reason: Optional[HaltReason] = None
    steps: int = 0
    coverage: Counter = field(default_factory=Counter)

    def control_flow(self) -> List[CfTrace]:
        return [record for record in self.trace if isinstance(record, CfTrace)]

    def slots(self) -> List[SlotTrace]:
        return [record for record in self.trace if isinstance(record, SlotTrace)]


class ShaderTraversal:
    """Single-pass state machine over the control-flow groups of a shader.

    Each step consumes one three-word group, decodes both control-flow
    instructions and executes the block each of them references.  Branch,
    loop and call semantics are not interpreted: every referenced block is
    executed in place as if it were an unconditional ``EXEC``.
    """

    def __init__(self, words: Sequence[int]) -> None:
        self.words = words
        self.index = 0
        self.pc = 0
        self.result = DisassemblyResult()

    @property
    def state(self) -> TraversalState:
        return self.result.state

    def step(self) -> TraversalState:
        if self.result.state is TraversalState.HALTED:
            return self.result.state
        if self.index + 2 >= len(self.words):
            self._halt(HaltReason.EXHAUSTED)
            return self.result.state

        pair = unpack_cf_pair(self.words, self.index)
        for offset, cf in enumerate(pair):
            self.result.trace.append(CfTrace(self.pc + offset, cf))
            self._note_opcode(cf.opcode)
            self._execute_block(cf)
        self.result.steps += 1

        if any(cf.is_stream_end for cf in pair):
            self._halt(HaltReason.STREAM_END)
        else:
            self.index += CF_GROUP_WORDS
            self.pc += 2
        return self.result.state

    def run(self) -> DisassemblyResult:
        while self.step() is TraversalState.RUNNING:
            pass
        return self.result

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------
    def _halt(self, reason: HaltReason) -> None:
        self.result.state = TraversalState.HALTED
        self.result.halt_reason = reason
        logger.debug("traversal halted after %d step(s): %s", self.result.steps, reason.value)

    def _execute_block(self, cf: ControlFlowInstruction) -> None:
        if cf.count and not cf.is_exec:
            logger.debug(
                "executing %s block at %d linearly (control flow not followed)",
                cf.name,
                cf.address,
            )
        for slot in range(cf.count):
            base = (cf.address + slot) * SLOT_WORDS
            if base + 2 >= len(self.words):
                logger.warning(
                    "%s block at %d: slot %d (word %d) exceeds stream of %d words",
                    cf.name,
                    cf.address,
                    slot,
                    base,
                    len(self.words),
                )
                self.result.trace.append(SlotTrace(slot, base, None))
                break
            body = self.words[base : base + SLOT_WORDS]
            if cf.slot_is_fetch(slot):
                record = self._fetch_slot(slot, base, decode_fetch(*body))
            else:
                record = self._alu_slot(slot, base, decode_alu(*body))
            self.result.trace.append(record)
            if record.ir is not None:
                self.result.ir.append(record.ir)

    def _fetch_slot(self, slot: int, base: int, fetch: FetchInstruction) -> SlotTrace:
        logger.debug(
            "fetch @%d: %s dst=r%d src=r%d const=%d",
            base,
            fetch.name,
            fetch.dest,
            fetch.src,
            fetch.const_index,
        )
        self._note_opcode(fetch.kind)
        return SlotTrace(slot, base, fetch, lower_fetch(fetch))

    def _alu_slot(self, slot: int, base: int, alu: AluInstruction) -> SlotTrace:
        logger.debug("alu @%d: %s", base, alu.describe_raw())
        self._note_opcode(alu.vector_opcode)
        self._note_opcode(alu.scalar_opcode)
        return SlotTrace(slot, base, alu, lower_alu(alu))

    def _note_opcode(self, opcode: object) -> None:
        if isinstance(opcode, Unrecognized):
            self.result.coverage[opcode.name] += 1


class ShaderDisassembler:
    """Entry point that runs a fresh traversal for every shader."""

    def run(self, words: Sequence[int]) -> DisassemblyResult:
        return ShaderTraversal(words).run()


def disassemble(words: Sequence[int]) -> DisassemblyResult:
    return ShaderDisassembler().run(words)
