from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, List, Optional

from .compiler import Source, compile_bf
from .errors import make_configuration_error, make_source_read_error
from .instructions import Program
from .machine import DEFAULT_TAPE_LENGTH, TapeMachine


@dataclass(frozen=True)
class RunOptions:
    tape_length: int = DEFAULT_TAPE_LENGTH
    flush_output: bool = False


@dataclass(frozen=True)
class RunResult:
    output: bytes
    cells: List[int]
    cursor: int
    steps: int


def _machine_for(options: Optional[RunOptions]) -> TapeMachine:
    opts = RunOptions() if options is None else options
    machine = TapeMachine.new(opts.tape_length, flush_output=opts.flush_output)
    if machine is None:
        raise make_configuration_error(
            f"tape length must be positive, got {opts.tape_length}", kind='tape_length',
        )
    return machine


def compile_string(source: Source) -> Program:
    return compile_bf(source)


def compile_file(path: str | Path) -> Program:
    p = Path(path)
    try:
        f = p.open('rb')
    except OSError as exc:
        raise make_source_read_error(exc) from exc
    with f:
        return compile_bf(f)


def run_string(source: Source, input_data: bytes = b"", *, options: Optional[RunOptions] = None) -> RunResult:
    """Compile source and run it against in-memory input, collecting the output."""
    program = compile_bf(source)
    machine = _machine_for(options)
    out = io.BytesIO()
    steps = machine.execute(program, io.BytesIO(input_data), out)
    return RunResult(output=out.getvalue(), cells=machine.cells, cursor=machine.cursor, steps=steps)


def run_file(
    path: str | Path,
    input_source: BinaryIO,
    output_sink: BinaryIO,
    *,
    options: Optional[RunOptions] = None,
) -> int:
    program = compile_file(path)
    machine = _machine_for(options)
    return machine.execute(program, input_source, output_sink)
