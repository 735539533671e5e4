from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import BinaryIO, Iterator, List, Union

from .errors import make_source_read_error, make_unmatched_bracket_error
from .instructions import (
    COMMANDS,
    LOOP_END,
    LOOP_START,
    BranchIfNonZero,
    BranchIfZero,
    Instruction,
    Program,
)

logger = logging.getLogger(__name__)

Source = Union[bytes, bytearray, memoryview, str, BinaryIO]

READ_CHUNK_SIZE = 8192


@dataclass
class CompilerState:
    code: List[Instruction] = field(default_factory=list)
    loop_stack: List[int] = field(default_factory=list)

    def reset(self) -> None:
        self.code.clear()
        self.loop_stack.clear()


def _iter_bytes(source: Source) -> Iterator[int]:
    if isinstance(source, str):
        source = source.encode('utf-8')
    if isinstance(source, (bytes, bytearray, memoryview)):
        yield from bytes(source)
        return

    while True:
        try:
            chunk = source.read(READ_CHUNK_SIZE)
        except OSError as exc:
            raise make_source_read_error(exc) from exc
        if isinstance(chunk, str):
            raise make_source_read_error(TypeError("source stream must be opened in binary mode"))
        if not chunk:
            return
        yield from chunk


class BytecodeCompiler:
    """
    Single-pass compiler from command text to a flat instruction tuple.

    Loops are resolved with a stack of pending loop starts: '[' emits a
    placeholder BranchIfZero and remembers its index, ']' emits the
    BranchIfNonZero back into the body and patches the placeholder so that
    both branches land just past the opposite bracket.

    Bytes other than the eight commands are comments. They emit nothing, so
    the instruction index is always len(code).
    """

    def __init__(self):
        self.state = CompilerState()

    def compile(self, source: Source) -> Program:
        """
        Compile a byte stream.

        Args:
            source: bytes, str, or a binary file-like object

        Returns:
            The finished program as a tuple of instructions

        Raises:
            UnmatchedBracketError: on a stray ']' or an unclosed '['
            SourceReadError: when reading the source stream fails
        """
        state = self.state
        state.reset()

        for byte in _iter_bytes(source):
            inst = COMMANDS.get(byte)
            if inst is not None:
                state.code.append(inst)
            elif byte == LOOP_START:
                self._open_loop()
            elif byte == LOOP_END:
                self._close_loop()

        if state.loop_stack:
            logger.debug("unclosed loops at end of source: %d", len(state.loop_stack))
            raise make_unmatched_bracket_error()

        program = tuple(state.code)
        state.reset()
        logger.debug("compiled %d instructions", len(program))
        return program

    # ===== Loop resolution =====

    def _open_loop(self):
        code = self.state.code
        self.state.loop_stack.append(len(code))
        code.append(BranchIfZero(0))

    def _close_loop(self):
        code = self.state.code
        if not self.state.loop_stack:
            raise make_unmatched_bracket_error()
        start = self.state.loop_stack.pop()
        counter = len(code)
        code.append(BranchIfNonZero(start + 1))
        code[start] = BranchIfZero(counter + 1)


def compile_bf(source: Source) -> Program:
    return BytecodeCompiler().compile(source)
