"""Public package exports for the Xenos shader microcode disassembler."""

from .alu import AluInstruction, RegisterFile, SourceOperand, decode_alu, mask_channels
from .bits import extract_bits
from .control_flow import ControlFlowInstruction, decode_cf, pack_cf_pair, unpack_cf_pair
from .disassembler import (
    DisassemblyResult,
    HaltReason,
    ShaderDisassembler,
    TraversalState,
    disassemble,
)
from .fetch import FetchInstruction, decode_fetch
from .ir import IRInstruction, IROp, IRProgram
from .mnemonics import MnemonicTable
from .opcodes import CfOpcode, FetchOpcode, ScalarOpcode, Unrecognized, VectorOpcode
from .printer import ListingRenderer
from .words import Endianness, WordAlignmentError, load_words

__all__ = [
    "AluInstruction",
    "RegisterFile",
    "SourceOperand",
    "decode_alu",
    "mask_channels",
    "extract_bits",
    "ControlFlowInstruction",
    "decode_cf",
    "pack_cf_pair",
    "unpack_cf_pair",
    "DisassemblyResult",
    "HaltReason",
    "ShaderDisassembler",
    "TraversalState",
    "disassemble",
    "FetchInstruction",
    "decode_fetch",
    "IRInstruction",
    "IROp",
    "IRProgram",
    "MnemonicTable",
    "CfOpcode",
    "FetchOpcode",
    "ScalarOpcode",
    "Unrecognized",
    "VectorOpcode",
    "ListingRenderer",
    "Endianness",
    "WordAlignmentError",
    "load_words",
]
