from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from bft.ast import Instruction


class BftError(Exception):
    """Base exception for every failure raised while loading or running a program."""
    def __init__(self, message: str, instruction: Optional[Instruction] = None):
        super().__init__(message)
        self.instruction = instruction


class StructuralError(BftError):
    """A loop instruction has no resolved partner."""
    def __init__(self, instruction: Instruction, name: str = ''):
        super().__init__(self.describe(instruction, name), instruction)
        self.name = name

    def describe(self, instruction: Instruction, name: str) -> str:
        return f"Unmatched square bracket by {instruction}"


class UnmatchedOpenError(StructuralError):
    def describe(self, instruction: Instruction, name: str) -> str:
        return (f"Error in input file {name}, no close bracket found matching "
                f"'[' at line {instruction.position.line} column {instruction.position.column}")


class UnmatchedCloseError(StructuralError):
    def describe(self, instruction: Instruction, name: str) -> str:
        return (f"Error in input file {name}, no open bracket found matching "
                f"']' at line {instruction.position.line} column {instruction.position.column}")


class HeadPositionError(BftError):
    """The head would fall off either edge of the tape."""
    def __init__(self, instruction: Instruction):
        super().__init__(f"Head falling off edge by {instruction}", instruction)


class ChannelError(BftError):
    """Reading from the input channel or writing to the output channel failed."""
    def __init__(self, cause: BaseException, instruction: Instruction):
        reason = str(cause) or type(cause).__name__
        super().__init__(f"{reason} by {instruction}", instruction)
        self.cause = cause
