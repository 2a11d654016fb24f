"""Cell model for the bft tape.

The virtual machine never touches cell values directly. Every mutation
goes through a `CellKind`, which knows the zero value of its cells and
how they wrap. Cells are stored on the tape as plain integers; the cell
kind only describes how to interpret them. `U8Cell` is the reference
implementation with 8-bit modular arithmetic. A wider cell only needs
to implement the same five members.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class CellKind(ABC):
    """Operations the virtual machine needs from a tape cell."""

    @property
    @abstractmethod
    def zero(self) -> int:
        """Value every fresh cell holds."""

    @abstractmethod
    def increment(self, value: int) -> int:
        """Return `value` increased by one, wrapping at the top."""

    @abstractmethod
    def decrement(self, value: int) -> int:
        """Return `value` decreased by one, wrapping at the bottom."""

    @abstractmethod
    def get_value(self, value: int) -> int:
        """Return the byte written to the output channel for `value`."""

    @abstractmethod
    def set_value(self, byte: int) -> int:
        """Return the cell value storing a byte read from the input channel."""


class U8Cell(CellKind):
    """Unsigned 8-bit cell: 255 + 1 == 0 and 0 - 1 == 255."""
    modulus = 256

    @property
    def zero(self) -> int:
        return 0

    def increment(self, value: int) -> int:
        return (value + 1) % self.modulus

    def decrement(self, value: int) -> int:
        return (value - 1) % self.modulus

    def get_value(self, value: int) -> int:
        return value

    def set_value(self, byte: int) -> int:
        if not 0 <= byte < self.modulus:
            raise ValueError(f'byte out of range: {byte}')
        return byte

    def __repr__(self) -> str:
        return 'U8Cell()'
