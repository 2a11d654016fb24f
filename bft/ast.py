"""Program model for bft.

A parsed program is a flat, immutable sequence of `Instruction`s. Each
instruction remembers where it came from in the source text so that
errors and traces can point at it. Loop instructions carry the index of
their structural partner in the same sequence; the parser fills these
in while it scans, and `Program.validate` rejects any that are still
missing.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from .errors import UnmatchedCloseError, UnmatchedOpenError


class InstructionKind(Enum):
    """The eight commands of the language, keyed by their source character."""
    MOVE_RIGHT = '>'
    MOVE_LEFT = '<'
    INCREMENT = '+'
    DECREMENT = '-'
    OUTPUT = '.'
    INPUT = ','
    LOOP_START = '['
    LOOP_END = ']'

    @property
    def is_loop(self) -> bool:
        return self in (InstructionKind.LOOP_START, InstructionKind.LOOP_END)

    @property
    def action(self) -> str:
        return ACTIONS[self]


ACTIONS = {
    InstructionKind.MOVE_RIGHT: 'Increment current pointer',
    InstructionKind.MOVE_LEFT: 'Decrement current pointer',
    InstructionKind.INCREMENT: 'Increment current data',
    InstructionKind.DECREMENT: 'Decrement current data',
    InstructionKind.OUTPUT: 'Print out current data',
    InstructionKind.INPUT: 'Type into current data',
    InstructionKind.LOOP_START: 'Start looping',
    InstructionKind.LOOP_END: 'End looping',
}


@dataclass(frozen=True)
class SourcePosition:
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass(frozen=True)
class Instruction:
    kind: InstructionKind
    position: SourcePosition
    partner: Optional[int] = None  # index of the matching bracket, loops only

    def describe(self) -> str:
        return f"{self.position} {self.kind.action}"

    def __str__(self) -> str:
        return self.describe()


@dataclass(frozen=True)
class Program:
    """A named, bracket-resolved instruction sequence.

    `name` is only used in diagnostics; it is usually the path the
    source was loaded from.
    """
    name: str
    instructions: Tuple[Instruction, ...]

    def __len__(self) -> int:
        return len(self.instructions)

    def validate(self) -> None:
        """Raise on the first loop instruction without a partner.

        An unresolved `[` raises `UnmatchedOpenError`, an unresolved `]`
        raises `UnmatchedCloseError`. Both cite the instruction's source
        position.
        """
        for instruction in self.instructions:
            if not instruction.kind.is_loop or instruction.partner is not None:
                continue
            if instruction.kind is InstructionKind.LOOP_START:
                raise UnmatchedOpenError(instruction, self.name)
            raise UnmatchedCloseError(instruction, self.name)

    def listing(self) -> List[str]:
        return [f"{self.name}: {instruction}" for instruction in self.instructions]
