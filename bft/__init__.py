# bft language package
# This package provides a parser and a tape virtual machine for bft programs.
from .ast import Instruction, InstructionKind, Program, SourcePosition
from .errors import (
    BftError, StructuralError, UnmatchedOpenError, UnmatchedCloseError,
    HeadPositionError, ChannelError,
)
from .interpreter import VirtualMachine, run_program, DEFAULT_CELLS
from .parser import parse_program, load_program
from .types import CellKind, U8Cell

__version__ = '1.0.0'

__all__ = [
    'Instruction',
    'InstructionKind',
    'Program',
    'SourcePosition',
    'BftError',
    'StructuralError',
    'UnmatchedOpenError',
    'UnmatchedCloseError',
    'HeadPositionError',
    'ChannelError',
    'VirtualMachine',
    'run_program',
    'DEFAULT_CELLS',
    'parse_program',
    'load_program',
    'CellKind',
    'U8Cell',
]
