"""Display mnemonics for the listing renderer.

The decoders only produce typed opcodes; which name a listing prints for
each of them is configuration.  The defaults follow the DX9 assembly
vocabulary.  A JSON file can override or extend them::

    {
      "vector": {"DOT2ADDv": "dp2add"},
      "scalar": {"RECIP_IEEE": "rcp"}
    }

Keys are opcode names; unknown names are ignored so a mapping file written
for a newer table keeps loading.
"""

from __future__ import annotations

import json
import logging
from enum import IntEnum
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Type, TypeVar, Union

from .opcodes import FetchKind, FetchOpcode, ScalarOp, ScalarOpcode, Unrecognized, VectorOp, VectorOpcode


logger = logging.getLogger(__name__)

DEFAULT_VECTOR_MNEMONICS: Mapping[VectorOpcode, str] = {
    VectorOpcode.ADDv: "add",
    VectorOpcode.MULv: "mul",
    VectorOpcode.MAXv: "max",
    VectorOpcode.MINv: "min",
    VectorOpcode.DOT3v: "dp3",
    VectorOpcode.DOT4v: "dp4",
    VectorOpcode.MOVAv: "mov",
    VectorOpcode.MULADDv: "mad",
}

DEFAULT_SCALAR_MNEMONICS: Mapping[ScalarOpcode, str] = {
    ScalarOpcode.ADDs: "add",
    ScalarOpcode.MULs: "mul",
    ScalarOpcode.SUBs: "sub",
    ScalarOpcode.SIN: "sin",
    ScalarOpcode.COS: "cos",
}

DEFAULT_FETCH_MNEMONICS: Mapping[FetchOpcode, str] = {
    FetchOpcode.VTX_FETCH: "mov",
    FetchOpcode.TEX_FETCH: "texld",
}

E = TypeVar("E", bound=IntEnum)


class MnemonicTable:
    """Resolve typed opcodes to display mnemonics."""

    def __init__(
        self,
        vector: Optional[Mapping[VectorOpcode, str]] = None,
        scalar: Optional[Mapping[ScalarOpcode, str]] = None,
        fetch: Optional[Mapping[FetchOpcode, str]] = None,
    ) -> None:
        self._vector: Dict[VectorOpcode, str] = dict(
            DEFAULT_VECTOR_MNEMONICS if vector is None else vector
        )
        self._scalar: Dict[ScalarOpcode, str] = dict(
            DEFAULT_SCALAR_MNEMONICS if scalar is None else scalar
        )
        self._fetch: Dict[FetchOpcode, str] = dict(
            DEFAULT_FETCH_MNEMONICS if fetch is None else fetch
        )

    @classmethod
    def load(cls, path: Path) -> "MnemonicTable":
        """Load overrides from ``path`` on top of the defaults.

        A missing file yields the default table.
        """

        if not path.exists():
            return cls()

        data = json.loads(path.read_text("utf-8"))
        if not isinstance(data, Mapping):
            raise ValueError(f"mnemonic file {path} must contain a JSON object")

        table = cls()
        table._vector.update(_parse_section(data.get("vector"), VectorOpcode))
        table._scalar.update(_parse_section(data.get("scalar"), ScalarOpcode))
        table._fetch.update(_parse_section(data.get("fetch"), FetchOpcode))
        return table

    def vector(self, opcode: VectorOp) -> Optional[str]:
        if isinstance(opcode, Unrecognized):
            return None
        return self._vector.get(opcode)

    def scalar(self, opcode: ScalarOp) -> Optional[str]:
        if isinstance(opcode, Unrecognized):
            return None
        return self._scalar.get(opcode)

    def fetch(self, kind: FetchKind) -> Optional[str]:
        if isinstance(kind, Unrecognized):
            return None
        return self._fetch.get(kind)


def _parse_section(section: Any, table: Type[E]) -> Dict[E, str]:
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        raise ValueError(f"{table.__name__} overrides must be a JSON object")

    parsed: Dict[E, str] = {}
    for key, value in section.items():
        opcode = _lookup(table, key)
        if opcode is None:
            logger.debug("ignoring unknown %s entry %r", table.__name__, key)
            continue
        parsed[opcode] = str(value)
    return parsed


def _lookup(table: Type[E], key: Union[str, int]) -> Optional[E]:
    if isinstance(key, str) and key in table.__members__:
        return table[key]
    try:
        return table(int(str(key), 0))
    except ValueError:
        return None
