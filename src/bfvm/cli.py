from __future__ import annotations

import argparse
import logging
import sys

from typing import List, Optional

from .api import RunOptions, compile_file, run_code
from .bytecode import disassemble
from .errors import BFError
from .vm import EOF_POLICIES, EOF_ZERO

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bfvm",
        description="Brainfuck interpreter (compiles to bytecode, runs on a 30000-cell tape).",
    )
    parser.add_argument("-f", "--file", required=True, help="Program file to run")
    parser.add_argument("--dump", action="store_true", help="Print the bytecode listing instead of running")
    parser.add_argument("--dump-tape", action="store_true", help="Print non-zero tape cells to stderr after halt")
    parser.add_argument("--eof", choices=EOF_POLICIES, default=EOF_ZERO,
                        help="What an input instruction does at end of input (default: zero)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    try:
        compiled = compile_file(args.file)
    except OSError as e:
        print(f"Error: cannot read {args.file}: {e.strerror or e}", file=sys.stderr)
        return 1
    except BFError as e:
        print(e, file=sys.stderr)
        return 1

    if args.dump:
        listing = disassemble(compiled.code)
        if listing:
            print(listing)
        return 0

    try:
        result = run_code(compiled.code, options=RunOptions(eof=args.eof))
    except BFError as e:
        sys.stdout.flush()
        print(f"\n{e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        logger.debug("interrupted")
        return 130

    if args.dump_tape:
        print(f"pointer={result.pointer} steps={result.steps}", file=sys.stderr)
        for index, value in result.nonzero_cells:
            print(f"  [{index:5d}] {value:3d}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
