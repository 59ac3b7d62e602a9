"""Helpers to serialise disassembly results for offline analysis."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

from .disassembler import CfTrace, DisassemblyResult
from .ir import IRProgram


def serialize_program(program: IRProgram) -> List[Dict[str, Any]]:
    """Convert an :class:`IRProgram` into a list of JSON-compatible records."""

    return [instruction.to_dict() for instruction in program]


def serialize_cf(record: CfTrace) -> Dict[str, Any]:
    cf = record.instruction
    return {
        "pc": record.pc,
        "opcode": cf.name,
        "address": cf.address,
        "count": cf.count,
        "serialize": cf.serialize,
        "predicated": cf.predicated,
    }


def serialize_result(result: DisassemblyResult) -> Dict[str, Any]:
    return {
        "halt_reason": result.halt_reason.value if result.halt_reason else None,
        "steps": result.steps,
        "control_flow": [serialize_cf(record) for record in result.control_flow()],
        "ir": serialize_program(result.ir),
        "unrecognized": dict(sorted(result.coverage.items())),
    }


def write_result(result: DisassemblyResult, path: Path) -> None:
    path.write_text(json.dumps(serialize_result(result), indent=2) + "\n", "utf-8")
