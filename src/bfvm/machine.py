from __future__ import annotations

import logging
from typing import BinaryIO, List, Optional, Sequence

import numpy as np

from .errors import make_machine_io_error
from .instructions import (
    Advance,
    BranchIfNonZero,
    BranchIfZero,
    Decrement,
    Increment,
    Instruction,
    Read,
    Retreat,
    Write,
    check_program,
)

logger = logging.getLogger(__name__)

DEFAULT_TAPE_LENGTH = 30000


def wrap_i8(value: int) -> int:
    """Wrap an int into the signed 8-bit range (127 + 1 -> -128)."""
    return ((value + 128) & 0xFF) - 128


class TapeMachine:
    """
    Interpreter for compiled programs.

    The tape is a fixed-size numpy array of int8 cells. Cell arithmetic is
    done on Python ints and wrapped back, so overflow never reaches numpy.
    The cursor is clamped to the tape: moving past either end is a no-op.
    """

    def __init__(self, tape_length: int = DEFAULT_TAPE_LENGTH, *, flush_output: bool = False):
        if tape_length <= 0:
            raise ValueError(f"tape length must be positive, got {tape_length}")
        self.tape = np.zeros(tape_length, dtype=np.int8)
        self.cursor = 0
        self.flush_output = flush_output

    @classmethod
    def new(cls, tape_length: int, *, flush_output: bool = False) -> Optional["TapeMachine"]:
        """Return a machine with an all-zero tape, or None when tape_length is zero."""
        if tape_length <= 0:
            return None
        return cls(tape_length, flush_output=flush_output)

    @property
    def tape_length(self) -> int:
        return int(self.tape.shape[0])

    @property
    def cells(self) -> List[int]:
        return self.tape.tolist()

    def reset(self) -> None:
        self.tape.fill(0)
        self.cursor = 0

    # ===== Execution =====

    def execute(self, program: Sequence[Instruction], input_source: BinaryIO, output_sink: BinaryIO) -> int:
        """
        Run a program until the program counter falls off its end.

        There is no step limit: a program that loops forever runs forever.

        Returns:
            Number of instructions executed

        Raises:
            InvalidProgramError: a branch target outside 0..len(program)
            MachineIOError: reading input or writing output failed
        """
        check_program(program)

        length = len(program)
        pc = 0
        steps = 0

        while pc < length:
            inst = program[pc]
            steps += 1

            if isinstance(inst, Increment):
                self._add_to_cell(1)
            elif isinstance(inst, Decrement):
                self._add_to_cell(-1)
            elif isinstance(inst, Advance):
                self._next_cell()
            elif isinstance(inst, Retreat):
                self._prev_cell()
            elif isinstance(inst, Read):
                self._read_cell(input_source)
            elif isinstance(inst, Write):
                self._write_cell(output_sink)
            elif isinstance(inst, BranchIfZero):
                if self._get_cell() == 0:
                    pc = inst.target
                    continue
            elif isinstance(inst, BranchIfNonZero):
                if self._get_cell() != 0:
                    pc = inst.target
                    continue

            pc += 1

        logger.debug("executed %d steps, cursor at %d", steps, self.cursor)
        return steps

    # ===== Cell operations =====

    def _get_cell(self) -> int:
        return int(self.tape[self.cursor])

    def _put_cell(self, value: int) -> None:
        self.tape[self.cursor] = value

    def _add_to_cell(self, delta: int) -> None:
        self._put_cell(wrap_i8(self._get_cell() + delta))

    def _next_cell(self) -> None:
        if self.cursor < self.tape_length - 1:
            self.cursor += 1

    def _prev_cell(self) -> None:
        if self.cursor > 0:
            self.cursor -= 1

    def _read_cell(self, input_source: BinaryIO) -> None:
        try:
            data = input_source.read(1)
        except OSError as exc:
            raise make_machine_io_error(operation='read', cause=exc) from exc
        if isinstance(data, str):
            raise make_machine_io_error(
                operation='read', cause=TypeError("input source must be opened in binary mode"),
            )
        # end of input reads as zero
        self._put_cell(wrap_i8(data[0]) if data else 0)

    def _write_cell(self, output_sink: BinaryIO) -> None:
        byte = bytes((self._get_cell() & 0xFF,))
        try:
            written = output_sink.write(byte)
            if self.flush_output:
                output_sink.flush()
        except (OSError, TypeError) as exc:
            raise make_machine_io_error(operation='write', cause=exc) from exc
        if written == 0:
            raise make_machine_io_error(operation='write', cause=OSError("sink accepted no bytes"))
