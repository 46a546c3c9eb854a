from __future__ import annotations

from typing import List, Sequence, Union

from .lexer import Token
from .parser import Instruction, Loop

NestedProgram = List[Union[str, "NestedProgram"]]


def format_tokens(tokens: Sequence[Token]) -> str:
    return " ".join(token.value for token in tokens)


def format_program(program: Sequence[Instruction], indent: str = "  ") -> str:
    """Render the instruction tree as an outline, one instruction per line."""
    lines: List[str] = []
    _outline(program, 0, indent, lines)
    return "\n".join(lines)


def _outline(program: Sequence[Instruction], level: int, indent: str, lines: List[str]) -> None:
    for instruction in program:
        prefix = indent * level
        if isinstance(instruction, Loop):
            lines.append(f"{prefix}loop")
            _outline(instruction.body, level + 1, indent, lines)
        else:
            lines.append(f"{prefix}{instruction.name.lower()}")


def program_to_data(program: Sequence[Instruction]) -> NestedProgram:
    """Convert the tree to nested lists of symbols; loops become sub-lists."""
    data: NestedProgram = []
    for instruction in program:
        if isinstance(instruction, Loop):
            data.append(program_to_data(instruction.body))
        else:
            data.append(instruction.value)
    return data


__all__ = ["format_tokens", "format_program", "program_to_data"]
