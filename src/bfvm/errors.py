from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


def _hint_for(kind: str) -> Optional[str]:
    if kind == 'unmatched_bracket':
        return 'Every "[" needs a matching "]" after it, and every "]" a "[" before it.'
    if kind == 'source_read':
        return 'Check that the program file exists and is readable.'
    if kind == 'tape_length':
        return 'The tape needs at least one cell. 30000 is the usual size.'
    return None


def _with_hint(message: str, kind: str) -> str:
    hint = _hint_for(kind)
    hint_block = f"\nHint: {hint}" if hint else ""
    return f"{message}{hint_block}"


@dataclass
class BFVMError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class CompileError(BFVMError):
    pass


@dataclass
class UnmatchedBracketError(CompileError):
    pass


@dataclass
class SourceReadError(CompileError):
    pass


@dataclass
class MachineIOError(BFVMError):
    operation: str  # 'read' or 'write'


@dataclass
class InvalidProgramError(BFVMError):
    index: int


@dataclass
class ConfigurationError(BFVMError):
    pass


def make_unmatched_bracket_error() -> UnmatchedBracketError:
    return UnmatchedBracketError(
        message=_with_hint("CompileError: unmatched bracket", 'unmatched_bracket'),
    )


def make_source_read_error(cause: BaseException) -> SourceReadError:
    return SourceReadError(
        message=_with_hint(f"CompileError: io error while reading source: {cause}", 'source_read'),
    )


def make_machine_io_error(*, operation: str, cause: BaseException) -> MachineIOError:
    direction = 'input' if operation == 'read' else 'output'
    return MachineIOError(
        message=f"MachineIOError: failed to {operation} {direction}: {cause}",
        operation=operation,
    )


def make_configuration_error(message: str, *, kind: str) -> ConfigurationError:
    return ConfigurationError(message=_with_hint(f"ConfigurationError: {message}", kind))
