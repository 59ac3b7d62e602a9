#!/usr/bin/env python3
"""Command-line interface for the Xenos shader microcode disassembler."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from xenosdisasm import (
    Endianness,
    ListingRenderer,
    MnemonicTable,
    ShaderDisassembler,
    WordAlignmentError,
    load_words,
)
from xenosdisasm.serialize import write_result


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("file", type=Path, help="Raw shader microcode blob")
    parser.add_argument(
        "endian",
        nargs="?",
        default="be",
        help="Byte order of the blob: be (default) or le",
    )
    parser.add_argument(
        "--ir-out",
        type=Path,
        default=None,
        help="Also write the IR listing to this path",
    )
    parser.add_argument(
        "--json-out",
        type=Path,
        default=None,
        help="Write control flow, IR and coverage as JSON to this path",
    )
    parser.add_argument(
        "--mnemonics",
        type=Path,
        default=Path("mnemonics.json"),
        help="Optional JSON file overriding display mnemonics",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log raw instruction fields while decoding",
    )
    return parser.parse_args(argv)


def resolve_endianness(token: str) -> Endianness:
    try:
        return Endianness.parse(token)
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.file.exists():
        raise SystemExit(f"missing input file: {args.file}")
    endian = resolve_endianness(args.endian)

    data = args.file.read_bytes()
    try:
        words = load_words(data, endian)
    except WordAlignmentError as exc:
        raise SystemExit(f"error: {exc}") from exc

    print(f"Loaded {len(words)} dwords ({len(data)} bytes)")
    print(f"Endian: {endian.short_name}")
    print("---------------------------------------------------")

    result = ShaderDisassembler().run(words)
    renderer = ListingRenderer(MnemonicTable.load(args.mnemonics))
    print(renderer.render(result), end="")
    print(result.ir.render_text(), end="")

    if args.ir_out is not None:
        args.ir_out.write_text(result.ir.render_text(), "utf-8")
        print(f"ir written to {args.ir_out}")
    if args.json_out is not None:
        write_result(result, args.json_out)
        print(f"json written to {args.json_out}")


if __name__ == "__main__":
    main()
