from .instructions import (
    Advance,
    BranchIfNonZero,
    BranchIfZero,
    Decrement,
    Increment,
    Instruction,
    Program,
    Read,
    Retreat,
    Write,
    check_program,
    disassemble,
    render,
)
from .errors import (
    BFVMError,
    CompileError,
    ConfigurationError,
    InvalidProgramError,
    MachineIOError,
    SourceReadError,
    UnmatchedBracketError,
)
from .compiler import BytecodeCompiler, compile_bf
from .machine import DEFAULT_TAPE_LENGTH, TapeMachine
from .api import RunOptions, RunResult, compile_file, compile_string, run_file, run_string

__all__ = [
    'Advance',
    'BranchIfNonZero',
    'BranchIfZero',
    'Decrement',
    'Increment',
    'Instruction',
    'Program',
    'Read',
    'Retreat',
    'Write',
    'check_program',
    'disassemble',
    'render',
    'BFVMError',
    'CompileError',
    'ConfigurationError',
    'InvalidProgramError',
    'MachineIOError',
    'SourceReadError',
    'UnmatchedBracketError',
    'BytecodeCompiler',
    'compile_bf',
    'DEFAULT_TAPE_LENGTH',
    'TapeMachine',
    'RunOptions',
    'RunResult',
    'compile_string',
    'compile_file',
    'run_string',
    'run_file',
]
