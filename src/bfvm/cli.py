from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .api import compile_file
from .compiler import compile_bf
from .errors import BFVMError
from .instructions import disassemble, render
from .machine import DEFAULT_TAPE_LENGTH, TapeMachine

logger = logging.getLogger(__name__)


def _tape_length(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid tape length: {value!r}")
    if n <= 0:
        raise argparse.ArgumentTypeError("tape length must be at least 1")
    return n


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bfvm",
        description="Compile a tape-language program to bytecode and run it.",
    )
    parser.add_argument(
        "program", nargs="?", default="-",
        help=(
            "program file ('-' reads the program from standard input; "
            "the program then sees no input and every ',' reads 0)"
        ),
    )
    parser.add_argument(
        "-t", "--tape-length", type=_tape_length, default=DEFAULT_TAPE_LENGTH,
        help=f"number of tape cells (default {DEFAULT_TAPE_LENGTH})",
    )
    parser.add_argument(
        "--dump", choices=("listing", "source"),
        help="print the compiled program instead of running it",
    )
    parser.add_argument("--unbuffered", action="store_true", help="flush output after every byte")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging on stderr")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    stdout = sys.stdout.buffer
    try:
        if args.program == "-":
            program = compile_bf(sys.stdin.buffer)
        else:
            program = compile_file(args.program)

        if args.dump == "listing":
            listing = disassemble(program)
            stdout.write(listing.encode("ascii") + (b"\n" if listing else b""))
            stdout.flush()
            return 0
        if args.dump == "source":
            stdout.write(render(program).encode("ascii") + b"\n")
            stdout.flush()
            return 0

        machine = TapeMachine(args.tape_length, flush_output=args.unbuffered)
        logger.debug("running %s on %d cells", args.program, machine.tape_length)
        try:
            machine.execute(program, sys.stdin.buffer, stdout)
        finally:
            stdout.flush()
    except BFVMError as e:
        print(e, file=sys.stderr)
        return 1
    except OSError as e:
        print(f"bfvm: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
