"""Parser for bft programs.

Only eight characters mean anything in a bft program; every other
character is a comment. Tokenizing is delegated to a Lark lexer whose
grammar names one terminal per command and swallows everything else as
an ignored `COMMENT` terminal. Lark tracks line and column numbers for
us, including across the ignored comment runs, so each token arrives
already tagged with its 1-based source position.

The token stream is turned into a `Program` in a single pass. Loop
brackets are paired with a stack of open `[` indices: a `]` pops the
innermost open `[` and both sides record each other's index. A `]` with
nothing to pop keeps an empty partner, and any `[` still on the stack
at the end keeps one too; `Program.validate` reports them.
"""

from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import List, Union

from lark import Lark

from .ast import Instruction, InstructionKind, Program, SourcePosition


BFT_GRAMMAR = r"""
    start: instruction*

    instruction: MOVE_RIGHT
               | MOVE_LEFT
               | INCREMENT
               | DECREMENT
               | OUTPUT
               | INPUT
               | LOOP_START
               | LOOP_END

    MOVE_RIGHT: ">"
    MOVE_LEFT: "<"
    INCREMENT: "+"
    DECREMENT: "-"
    OUTPUT: "."
    INPUT: ","
    LOOP_START: "["
    LOOP_END: "]"

    // Anything else, newlines included, is commentary
    COMMENT: /[^<>+\-.,\[\]]+/
    %ignore COMMENT
"""


BFT_LEXER = Lark(
    BFT_GRAMMAR,
    parser='lalr',
    lexer='basic',
)


def parse_program(source: str, name: str = '') -> Program:
    """Parse bft source text into a bracket-resolved `Program`.

    Unbalanced brackets are not an error here; call `Program.validate`
    before running the result.
    """
    instructions: List[Instruction] = []
    open_loops: List[int] = []
    for token in BFT_LEXER.lex(source):
        index = len(instructions)
        kind = InstructionKind[token.type]
        instructions.append(Instruction(kind, SourcePosition(token.line, token.column)))
        if kind is InstructionKind.LOOP_START:
            open_loops.append(index)
        elif kind is InstructionKind.LOOP_END and open_loops:
            start = open_loops.pop()
            instructions[start] = dataclasses.replace(instructions[start], partner=index)
            instructions[index] = dataclasses.replace(instructions[index], partner=start)
    return Program(name=name, instructions=tuple(instructions))


def load_program(path: Union[str, Path]) -> Program:
    """Read and parse a bft source file. File errors propagate as OSError."""
    with open(path, 'r', encoding='utf-8') as f:
        source = f.read()
    return parse_program(source, name=str(path))
