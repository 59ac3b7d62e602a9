import pytest

from xenosdisasm.opcodes import (
    CfOpcode,
    FetchOpcode,
    ScalarOpcode,
    Unrecognized,
    VectorOpcode,
    is_unrecognized,
    opcode_code,
    resolve_opcode,
)


@pytest.mark.parametrize(
    "table, code, expected",
    [
        (CfOpcode, 2, CfOpcode.EXEC_END),
        (VectorOpcode, 11, VectorOpcode.MULADDv),
        (ScalarOpcode, 25, ScalarOpcode.SUBs),
        (ScalarOpcode, 48, ScalarOpcode.SIN),
        (ScalarOpcode, 49, ScalarOpcode.COS),
        (FetchOpcode, 1, FetchOpcode.TEX_FETCH),
    ],
)
def test_known_codes_resolve_to_enum(table, code, expected):
    assert resolve_opcode(table, code) is expected


@pytest.mark.parametrize(
    "table, code, name",
    [
        (VectorOpcode, 30, "VOP_30"),
        (ScalarOpcode, 41, "SOP_41"),
        (ScalarOpcode, 63, "SOP_63"),
        (FetchOpcode, 7, "FETCH_7"),
    ],
)
def test_unknown_codes_resolve_to_unrecognized(table, code, name):
    opcode = resolve_opcode(table, code)
    assert isinstance(opcode, Unrecognized)
    assert is_unrecognized(opcode)
    assert opcode.name == name
    assert opcode_code(opcode) == code


def test_cf_table_covers_every_four_bit_code():
    assert [int(op) for op in CfOpcode] == list(range(16))


def test_vector_source_counts():
    assert VectorOpcode.MULADDv.source_count == 3
    assert VectorOpcode.DOT4v.source_count == 2
    assert VectorOpcode.FLOORv.source_count == 1


def test_opcode_code_for_enum():
    assert opcode_code(ScalarOpcode.RETAIN_PREV) == 50
