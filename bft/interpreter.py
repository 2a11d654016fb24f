"""Virtual machine for bft programs.

The machine owns a tape of cells, a head pointing into it and an
execution cursor pointing into the program. A program is borrowed
read-only, so one parsed `Program` can be run by any number of machines.

Execution is strictly serial. Each instruction is applied in full
before the next is looked at, the cursor moves forward by one after
every instruction, and only the two loop instructions may set it to
something else. The first error ends the run.

Every run finishes with the same bookkeeping step, whether it completes
or fails: if the last byte written to the output channel was not a
newline, one is appended. It runs from a single `finally` block in
`interpret`, before any error reaches the caller.
"""

from __future__ import annotations

import sys
from typing import BinaryIO, List, Optional

from .ast import Instruction, InstructionKind, Program
from .channels import read_byte, write_byte
from .errors import BftError, ChannelError, HeadPositionError, StructuralError
from .parser import parse_program
from .types import CellKind, U8Cell

DEFAULT_CELLS = 30000
NEWLINE = 0x0A


class VirtualMachine:
    """Runs one `Program` against a tape of cells.

    `cells` is the initial tape length, 0 meaning `DEFAULT_CELLS`. An
    `extensible` tape grows by one cell whenever the head moves right
    off its end; otherwise that move is an error. Moving left off cell
    0 is always an error.
    """
    def __init__(self, program: Program, cells: int = 0, extensible: bool = False,
                 cell_kind: Optional[CellKind] = None, debug_level: int = 0,
                 debug_file: str = 'debug.txt'):
        if cells < 0:
            raise ValueError(f'tape length must not be negative: {cells}')
        self.program = program
        self.cell_kind = cell_kind if cell_kind is not None else U8Cell()
        self.cells: List[int] = [self.cell_kind.zero] * (cells or DEFAULT_CELLS)
        self.head = 0
        self.extensible = extensible
        self.cursor = 0
        self.tail: Optional[int] = None  # last byte written
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w') if debug_level > 0 else None

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg, file=sys.stderr)

    @property
    def current(self) -> Instruction:
        return self.program.instructions[self.cursor]

    @property
    def value(self) -> int:
        return self.cells[self.head]

    # Head movement
    def move_head_left(self) -> None:
        if self.head == 0:
            raise HeadPositionError(self.current)
        self.head -= 1

    def move_head_right(self) -> None:
        if self.head >= len(self.cells) - 1:
            if not self.extensible:
                raise HeadPositionError(self.current)
            self.cells.append(self.cell_kind.zero)
            if self.debug_level >= 3:
                self.debug(f"tape extended to {len(self.cells)} cells")
        self.head += 1

    # Cell mutation
    def increment_cell(self) -> None:
        self.cells[self.head] = self.cell_kind.increment(self.cells[self.head])

    def decrement_cell(self) -> None:
        self.cells[self.head] = self.cell_kind.decrement(self.cells[self.head])

    # I/O
    def read_value(self, reader: BinaryIO) -> None:
        self.debug("Input a value: ")
        try:
            byte = read_byte(reader)
        except (OSError, EOFError, ValueError) as e:
            raise ChannelError(e, self.current) from e
        self.cells[self.head] = self.cell_kind.set_value(byte)

    def write_value(self, writer: BinaryIO) -> None:
        byte = self.cell_kind.get_value(self.cells[self.head])
        try:
            write_byte(writer, byte)
        except (OSError, ValueError) as e:
            raise ChannelError(e, self.current) from e
        self.tail = byte

    # Loop control
    def start_loop(self, partner: Optional[int]) -> None:
        if self.cells[self.head] == self.cell_kind.zero:
            if partner is None:
                raise StructuralError(self.current, self.program.name)
            self.cursor = partner

    def end_loop(self, partner: Optional[int]) -> None:
        if self.cells[self.head] != self.cell_kind.zero:
            if partner is None:
                raise StructuralError(self.current, self.program.name)
            self.cursor = partner

    def step(self, reader: BinaryIO, writer: BinaryIO) -> None:
        """Apply the instruction under the cursor and advance the cursor."""
        instruction = self.current
        if self.debug_level >= 2:
            self.debug(f"{instruction} | head={self.head} cell={self.value}")
        kind = instruction.kind
        if kind is InstructionKind.MOVE_RIGHT:
            self.move_head_right()
        elif kind is InstructionKind.MOVE_LEFT:
            self.move_head_left()
        elif kind is InstructionKind.INCREMENT:
            self.increment_cell()
        elif kind is InstructionKind.DECREMENT:
            self.decrement_cell()
        elif kind is InstructionKind.OUTPUT:
            self.write_value(writer)
        elif kind is InstructionKind.INPUT:
            self.read_value(reader)
        elif kind is InstructionKind.LOOP_START:
            self.start_loop(instruction.partner)
        elif kind is InstructionKind.LOOP_END:
            self.end_loop(instruction.partner)
        self.cursor += 1

    def interpret(self, reader: BinaryIO, writer: BinaryIO) -> None:
        """Run the program to completion or to its first error."""
        self.debug(f"run {self.program.name or '<source>'}: "
                   f"{len(self.program)} instructions, {len(self.cells)} cells, "
                   f"extensible={self.extensible}")
        try:
            while self.cursor < len(self.program.instructions):
                self.step(reader, writer)
            self.debug("finished")
        except BftError as e:
            self.debug(f"error: {e}")
            raise
        finally:
            self.finish(writer)
            if self.debug_fp:
                self.debug_fp.close()
                self.debug_fp = None

    def finish(self, writer: BinaryIO) -> None:
        """Terminate the output with a newline unless it already ends in one."""
        if self.tail == NEWLINE:
            return
        try:
            write_byte(writer, NEWLINE)
        except (OSError, ValueError) as e:
            print(e, file=sys.stderr)
            self.debug(f"trailing newline failed: {e}")


def run_program(source: str, reader: BinaryIO, writer: BinaryIO, cells: int = 0,
                extensible: bool = False, name: str = '') -> VirtualMachine:
    """Convenience function to parse, validate and run a bft program from source string."""
    program = parse_program(source, name=name)
    program.validate()
    vm = VirtualMachine(program, cells=cells, extensible=extensible)
    vm.interpret(reader, writer)
    return vm
