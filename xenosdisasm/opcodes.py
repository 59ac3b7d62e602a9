"""Opcode tables for the Xenos shader microcode.

Every table is an :class:`~enum.IntEnum` keyed by the hardware code so the
decoders can dispatch on the typed variant directly.  Codes that fall outside
a table are represented by :class:`Unrecognized` rather than rejected; the
decoders are total over their input words.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Type, TypeVar, Union


class CfOpcode(IntEnum):
    NOP = 0
    EXEC = 1
    EXEC_END = 2
    COND_EXEC = 3
    COND_EXEC_END = 4
    COND_PRED_EXEC = 5
    COND_PRED_EXEC_END = 6
    LOOP_START = 7
    LOOP_END = 8
    COND_CALL = 9
    RETURN = 10
    COND_JMP = 11
    ALLOC = 12
    COND_EXEC_PRED_CLEAN = 13
    COND_EXEC_PRED_CLEAN_END = 14
    MARK_VS_FETCH_DONE = 15

    @property
    def is_exec(self) -> bool:
        return self in _EXEC_FAMILY

    @property
    def is_end(self) -> bool:
        return self in _EXEC_END_FAMILY


_EXEC_FAMILY = frozenset(
    {
        CfOpcode.EXEC,
        CfOpcode.EXEC_END,
        CfOpcode.COND_EXEC,
        CfOpcode.COND_EXEC_END,
        CfOpcode.COND_PRED_EXEC,
        CfOpcode.COND_PRED_EXEC_END,
        CfOpcode.COND_EXEC_PRED_CLEAN,
        CfOpcode.COND_EXEC_PRED_CLEAN_END,
    }
)

_EXEC_END_FAMILY = frozenset(
    {
        CfOpcode.EXEC_END,
        CfOpcode.COND_EXEC_END,
        CfOpcode.COND_PRED_EXEC_END,
        CfOpcode.COND_EXEC_PRED_CLEAN_END,
    }
)

# Opcode that terminates the control-flow stream.
STREAM_END = CfOpcode.EXEC_END


class VectorOpcode(IntEnum):
    ADDv = 0
    MULv = 1
    MAXv = 2
    MINv = 3
    SETEv = 4
    SETGTv = 5
    SETGTEv = 6
    SETNEv = 7
    FRACv = 8
    TRUNCv = 9
    FLOORv = 10
    MULADDv = 11
    CNDEv = 12
    CNDGTEv = 13
    CNDGTv = 14
    DOT4v = 15
    DOT3v = 16
    DOT2ADDv = 17
    CUBEv = 18
    MAX4v = 19
    PRED_SETE_PUSHv = 20
    PRED_SETNE_PUSHv = 21
    PRED_SETGT_PUSHv = 22
    PRED_SETGTE_PUSHv = 23
    KILLEv = 24
    KILLGTv = 25
    KILLGTEv = 26
    KILLNEv = 27
    DSTv = 28
    MOVAv = 29

    @property
    def source_count(self) -> int:
        return _VECTOR_SOURCE_COUNTS.get(self, 2)


_VECTOR_SOURCE_COUNTS: Dict[VectorOpcode, int] = {
    VectorOpcode.FRACv: 1,
    VectorOpcode.TRUNCv: 1,
    VectorOpcode.FLOORv: 1,
    VectorOpcode.MAX4v: 1,
    VectorOpcode.MOVAv: 1,
    VectorOpcode.MULADDv: 3,
    VectorOpcode.CNDEv: 3,
    VectorOpcode.CNDGTEv: 3,
    VectorOpcode.CNDGTv: 3,
    VectorOpcode.DOT2ADDv: 3,
}


class ScalarOpcode(IntEnum):
    ADDs = 0
    ADD_PREVs = 1
    MULs = 2
    MUL_PREVs = 3
    MUL_PREV2s = 4
    MAXs = 5
    MINs = 6
    SETEs = 7
    SETGTs = 8
    SETGTEs = 9
    SETNEs = 10
    FRACs = 11
    TRUNCs = 12
    FLOORs = 13
    EXP_IEEE = 14
    LOG_CLAMP = 15
    LOG_IEEE = 16
    RECIP_CLAMP = 17
    RECIP_FF = 18
    RECIP_IEEE = 19
    RECIPSQ_CLAMP = 20
    RECIPSQ_FF = 21
    RECIPSQ_IEEE = 22
    MOVAs = 23
    MOVA_FLOORs = 24
    SUBs = 25
    SUB_PREVs = 26
    PRED_SETEs = 27
    PRED_SETNEs = 28
    PRED_SETGTs = 29
    PRED_SETGTEs = 30
    PRED_SET_INVs = 31
    PRED_SET_POPs = 32
    PRED_SET_CLRs = 33
    PRED_SET_RESTOREs = 34
    KILLEs = 35
    KILLGTs = 36
    KILLGTEs = 37
    KILLNEs = 38
    KILLONEs = 39
    SQRT_IEEE = 40
    # 41 is unassigned.
    MUL_CONST_0 = 42
    MUL_CONST_1 = 43
    ADD_CONST_0 = 44
    ADD_CONST_1 = 45
    SUB_CONST_0 = 46
    SUB_CONST_1 = 47
    SIN = 48
    COS = 49
    RETAIN_PREV = 50


class FetchOpcode(IntEnum):
    VTX_FETCH = 0
    TEX_FETCH = 1


@dataclass(frozen=True)
class Unrecognized:
    """Opcode value that has no entry in the corresponding table."""

    family: str
    code: int

    @property
    def name(self) -> str:
        return f"{self.family}_{self.code}"

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.name


_FAMILIES: Dict[type, str] = {
    CfOpcode: "CF",
    VectorOpcode: "VOP",
    ScalarOpcode: "SOP",
    FetchOpcode: "FETCH",
}

E = TypeVar("E", bound=IntEnum)

CfOp = Union[CfOpcode, Unrecognized]
VectorOp = Union[VectorOpcode, Unrecognized]
ScalarOp = Union[ScalarOpcode, Unrecognized]
FetchKind = Union[FetchOpcode, Unrecognized]


def resolve_opcode(table: Type[E], code: int) -> Union[E, Unrecognized]:
    """Map ``code`` onto ``table`` or wrap it in :class:`Unrecognized`."""

    try:
        return table(code)
    except ValueError:
        return Unrecognized(_FAMILIES.get(table, table.__name__), code)


def opcode_code(opcode: Union[IntEnum, Unrecognized]) -> int:
    """Return the raw hardware code of a resolved opcode."""

    if isinstance(opcode, Unrecognized):
        return opcode.code
    return int(opcode)


def is_unrecognized(opcode: object) -> bool:
    return isinstance(opcode, Unrecognized)
