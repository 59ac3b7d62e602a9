import json
import subprocess
import sys
from pathlib import Path

from xenosdisasm.alu import SourceOperand, encode_alu
from xenosdisasm.control_flow import make_cf, pack_cf_pair
from xenosdisasm.opcodes import CfOpcode, VectorOpcode
from xenosdisasm.words import Endianness, dump_words

SCRIPT = Path(__file__).resolve().parents[1] / "xenos_disasm.py"


def _write_shader(base: Path, endian: Endianness) -> Path:
    words = list(pack_cf_pair(make_cf(CfOpcode.EXEC, address=1, count=1), make_cf(CfOpcode.EXEC_END)))
    words.extend(
        encode_alu(
            VectorOpcode.MULADDv,
            vector_dest=0,
            sources=(SourceOperand(1), SourceOperand(2), SourceOperand(3)),
        )
    )
    path = base / "shader.bin"
    path.write_bytes(dump_words(words, endian))
    return path


def _run(*args: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, str(SCRIPT), *args],
        capture_output=True,
        text=True,
    )


def test_cli_prints_listing_and_ir(tmp_path: Path) -> None:
    shader = _write_shader(tmp_path, Endianness.BIG)
    result = _run(str(shader), "--mnemonics", str(tmp_path / "none.json"))

    assert result.returncode == 0, result.stderr
    assert "Loaded 6 dwords (24 bytes)" in result.stdout
    assert "Endian: BE" in result.stdout
    assert "  //CF 0000: EXEC addr=1 count=1" in result.stdout
    assert "    mad r0, r1, r2, r3" in result.stdout
    assert "0000: mad 0 <- 1, 2, 3" in result.stdout


def test_cli_little_endian_and_outputs(tmp_path: Path) -> None:
    shader = _write_shader(tmp_path, Endianness.LITTLE)
    ir_path = tmp_path / "shader.ir.txt"
    json_path = tmp_path / "shader.json"
    result = _run(
        str(shader),
        "le",
        "--ir-out",
        str(ir_path),
        "--json-out",
        str(json_path),
        "--mnemonics",
        str(tmp_path / "none.json"),
    )

    assert result.returncode == 0, result.stderr
    assert "Endian: LE" in result.stdout
    assert "mad 0 <- 1, 2, 3" in ir_path.read_text("utf-8")
    payload = json.loads(json_path.read_text("utf-8"))
    assert payload["ir"] == [{"op": "mad", "dst": 0, "src1": 1, "src2": 2, "src3": 3}]


def test_cli_rejects_misaligned_blob(tmp_path: Path) -> None:
    shader = tmp_path / "bad.bin"
    shader.write_bytes(b"\x00" * 5)
    result = _run(str(shader))

    assert result.returncode != 0
    assert "not a multiple of 4" in result.stderr
    assert "//CF" not in result.stdout


def test_cli_reports_missing_file(tmp_path: Path) -> None:
    result = _run(str(tmp_path / "missing.bin"))
    assert result.returncode != 0
    assert "missing input file" in result.stderr
