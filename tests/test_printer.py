from xenosdisasm import ListingRenderer, MnemonicTable, disassemble
from xenosdisasm.alu import RegisterFile, SourceOperand, encode_alu
from xenosdisasm.control_flow import make_cf, pack_cf_pair
from xenosdisasm.fetch import encode_fetch
from xenosdisasm.opcodes import CfOpcode, FetchOpcode, ScalarOpcode, VectorOpcode


def _single_block(serialize, bodies):
    words = list(
        pack_cf_pair(
            make_cf(CfOpcode.EXEC, address=1, count=len(bodies), serialize=serialize),
            make_cf(CfOpcode.EXEC_END),
        )
    )
    for body in bodies:
        words.extend(body)
    return disassemble(words)


def test_listing_for_mixed_block():
    result = _single_block(
        0b0101,
        [
            (encode_fetch(FetchOpcode.VTX_FETCH, dest=1, src=0), 0, 0),
            (encode_fetch(FetchOpcode.TEX_FETCH, dest=2, src=1, const_index=3), 0, 0),
            encode_alu(
                VectorOpcode.MULADDv,
                ScalarOpcode.RETAIN_PREV,
                vector_dest=0,
                write_mask=0b1010,
                sources=(
                    SourceOperand(1),
                    SourceOperand(4, RegisterFile.CONSTANT),
                    SourceOperand(3),
                ),
            ),
        ],
    )
    lines = ListingRenderer().render_lines(result)

    assert lines == [
        "  //CF 0000: EXEC addr=1 count=3",
        "    mov r1, v0",
        "    texld r2, r1, s3",
        "    mad r0.yw, r1, c4, r3",
        "  //CF 0001: EXEC_END addr=0 count=0",
    ]


def test_scalar_and_unknown_alu_lines():
    result = _single_block(
        0,
        [
            encode_alu(VectorOpcode.SETEv, ScalarOpcode.SIN, scalar_dest=6, sources=(SourceOperand(0), SourceOperand(0), SourceOperand(9))),
            encode_alu(30, 63),
            encode_alu(VectorOpcode.ADDv, ScalarOpcode.SUBs, vector_dest=1, write_mask=0b1111, sources=(SourceOperand(2), SourceOperand(3), SourceOperand(4))),
        ],
    )
    lines = ListingRenderer().render_lines(result)

    assert lines[1:4] == [
        "    sin r6, r9",
        "    // unknown ALU v=VOP_30 s=SOP_63",
        "    add r1.xyzw, r2, r3",
    ]
    assert lines[4] == "  //CF 0001: EXEC_END addr=0 count=0"


def test_multiply_add_slot_renders_a_single_line():
    result = _single_block(
        0,
        [encode_alu(VectorOpcode.MULADDv, vector_dest=0, sources=(SourceOperand(1), SourceOperand(2), SourceOperand(3)))],
    )
    lines = ListingRenderer().render_lines(result)

    assert lines == [
        "  //CF 0000: EXEC addr=1 count=1",
        "    mad r0, r1, r2, r3",
        "  //CF 0001: EXEC_END addr=0 count=0",
    ]
    assert len(result.ir) == 1


def test_unsupported_fetch_and_footer():
    result = _single_block(0b1, [(encode_fetch(4), 0, 0)])
    text = ListingRenderer().render(result)

    assert "    // unsupported fetch FETCH_4" in text
    assert "; halted: stream-end after 1 group(s)" in text
    assert ";   FETCH_4 x1" in text


def test_truncated_slot_line():
    words = list(pack_cf_pair(make_cf(CfOpcode.EXEC, address=9, count=1), make_cf(CfOpcode.EXEC_END)))
    lines = ListingRenderer().render_lines(disassemble(words))
    assert "    // truncated slot 0 at word 27" in lines


def test_custom_mnemonics_change_rendering_only():
    result = _single_block(0, [encode_alu(VectorOpcode.DOT2ADDv, sources=(SourceOperand(1), SourceOperand(2), SourceOperand(3)))])
    table = MnemonicTable(vector={VectorOpcode.DOT2ADDv: "dp2add"}, scalar={})
    lines = ListingRenderer(table).render_lines(result)

    assert lines[1] == "    dp2add r0, r1, r2, r3"
    assert len(result.ir) == 0


def test_write_listing(tmp_path):
    result = _single_block(0, [encode_alu(VectorOpcode.MULv, sources=(SourceOperand(1), SourceOperand(2)))])
    output = tmp_path / "shader.asm"
    ListingRenderer().write(result, output)
    assert "mul r0, r1, r2" in output.read_text("utf-8")
