from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple, Union

from .errors import InvalidProgramError


# ---------------- Instructions ----------------
@dataclass(frozen=True)
class Increment:
    pass  # '+'

@dataclass(frozen=True)
class Decrement:
    pass  # '-'

@dataclass(frozen=True)
class Advance:
    pass  # '>'

@dataclass(frozen=True)
class Retreat:
    pass  # '<'

@dataclass(frozen=True)
class Read:
    pass  # ','

@dataclass(frozen=True)
class Write:
    pass  # '.'

@dataclass(frozen=True)
class BranchIfZero:
    target: int  # absolute index, one past the matching BranchIfNonZero

@dataclass(frozen=True)
class BranchIfNonZero:
    target: int  # absolute index, one past the matching BranchIfZero


Instruction = Union[
    Increment, Decrement, Advance, Retreat, Read, Write, BranchIfZero, BranchIfNonZero,
]
Program = Tuple[Instruction, ...]

INSTRUCTION_TYPES = (
    Increment, Decrement, Advance, Retreat, Read, Write, BranchIfZero, BranchIfNonZero,
)

# ---------------- Command bytes ----------------
INC = ord('+')
DEC = ord('-')
NEXT = ord('>')
PREV = ord('<')
GET = ord(',')
PUT = ord('.')
LOOP_START = ord('[')
LOOP_END = ord(']')

COMMANDS: Dict[int, Instruction] = {
    INC: Increment(),
    DEC: Decrement(),
    NEXT: Advance(),
    PREV: Retreat(),
    GET: Read(),
    PUT: Write(),
}

_SYMBOLS: Dict[type, str] = {
    Increment: '+',
    Decrement: '-',
    Advance: '>',
    Retreat: '<',
    Read: ',',
    Write: '.',
    BranchIfZero: '[',
    BranchIfNonZero: ']',
}


def check_program(program: Sequence[Instruction]) -> None:
    """Raise InvalidProgramError unless every branch lands inside [0, len(program)]."""
    length = len(program)
    for index, inst in enumerate(program):
        if not isinstance(inst, INSTRUCTION_TYPES):
            raise InvalidProgramError(
                message=f"InvalidProgram: element {index} is not an instruction: {inst!r}",
                index=index,
            )
        if isinstance(inst, (BranchIfZero, BranchIfNonZero)):
            target = inst.target
            if not isinstance(target, int) or not 0 <= target <= length:
                raise InvalidProgramError(
                    message=(
                        f"InvalidProgram: branch at {index} targets {target!r}, "
                        f"expected 0..{length}"
                    ),
                    index=index,
                )


# ---------------- Debug output ----------------
def render(program: Sequence[Instruction]) -> str:
    """Turn a program back into command text."""
    return ''.join(_SYMBOLS[type(inst)] for inst in program)


def disassemble(program: Sequence[Instruction]) -> str:
    width = max(4, len(str(len(program))))
    lines: List[str] = []
    for index, inst in enumerate(program):
        name = type(inst).__name__
        if isinstance(inst, (BranchIfZero, BranchIfNonZero)):
            lines.append(f"{index:0{width}d}  {name} {inst.target}")
        else:
            lines.append(f"{index:0{width}d}  {name}")
    return "\n".join(lines)
