"""JSON serialization/deserialization for bft programs.

This module converts between a resolved `Program` and plain Python
dict/list structures suitable for JSON encoding, so that a parsed and
validated program can be saved once and executed later without the
source text.
"""

from __future__ import annotations

from typing import Any, Dict, List

from .ast import Instruction, InstructionKind, Program, SourcePosition


def instruction_to_obj(instruction: Instruction) -> Dict[str, Any]:
    obj: Dict[str, Any] = {
        "op": instruction.kind.value,
        "line": instruction.position.line,
        "column": instruction.position.column,
    }
    if instruction.kind.is_loop:
        obj["partner"] = instruction.partner
    return obj


def is_index(value: Any) -> bool:
    # bool is an int subclass; JSON true/false are not indices
    return isinstance(value, int) and not isinstance(value, bool)


def instruction_from_obj(obj: Any) -> Instruction:
    if not isinstance(obj, dict):
        raise ValueError(f"instruction must be an object, got {obj!r}")
    if "op" not in obj:
        raise ValueError(f"instruction without op: {obj!r}")
    try:
        kind = InstructionKind(obj["op"])
    except ValueError:
        raise ValueError(f"Unknown instruction: {obj['op']!r}")
    line = obj.get("line")
    column = obj.get("column")
    if not (is_index(line) and is_index(column)):
        raise ValueError(f"invalid position for {obj['op']!r}: {line!r}:{column!r}")
    partner = obj.get("partner") if kind.is_loop else None
    return Instruction(kind, SourcePosition(line, column), partner)


def program_to_obj(program: Program) -> Dict[str, Any]:
    return {
        "type": "Program",
        "name": program.name,
        "instructions": [instruction_to_obj(i) for i in program.instructions],
    }


def program_from_obj(obj: Any) -> Program:
    """Rebuild a `Program`, checking that loop partners agree with each other.

    Missing partners are left for `Program.validate` to report; partners
    that point at the wrong place, and malformed data in general, raise
    ValueError here.
    """
    if not isinstance(obj, dict) or obj.get("type") != "Program":
        raise ValueError("not a program JSON object")
    if not isinstance(obj.get("instructions"), list):
        raise ValueError("program JSON has no instruction list")
    instructions: List[Instruction] = [instruction_from_obj(o) for o in obj["instructions"]]
    for index, instruction in enumerate(instructions):
        if instruction.partner is None:
            continue
        expected = (InstructionKind.LOOP_END if instruction.kind is InstructionKind.LOOP_START
                    else InstructionKind.LOOP_START)
        partner = instruction.partner
        if not (is_index(partner)
                and 0 <= partner < len(instructions)
                and instructions[partner].kind is expected
                and instructions[partner].partner == index):
            raise ValueError(f"inconsistent loop partner at {instruction.position}")
    return Program(name=str(obj.get("name", "")), instructions=tuple(instructions))
