from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Sequence, Tuple, Union

from .errors import LoopNestingTooDeep, UnmatchedLoopBegin, UnmatchedLoopEnd
from .lexer import Token


# === Instruction tree ===


class Op(str, Enum):
    INC_POINTER = ">"
    DEC_POINTER = "<"
    INC = "+"
    DEC = "-"
    WRITE = "."
    READ = ","


@dataclass(frozen=True)
class Loop:
    body: Tuple["Instruction", ...]


Instruction = Union[Op, Loop]
Program = Tuple[Instruction, ...]


_TOKEN_OPS: Dict[Token, Op] = {
    Token.INC_POINTER: Op.INC_POINTER,
    Token.DEC_POINTER: Op.DEC_POINTER,
    Token.INC: Op.INC,
    Token.DEC: Op.DEC,
    Token.WRITE: Op.WRITE,
    Token.READ: Op.READ,
}


def parse(tokens: Sequence[Token]) -> Program:
    """Build the instruction tree for ``tokens``.

    Tokens are scanned left to right with a nesting counter. Outside any loop
    each operation token becomes an instruction. Once the counter returns to
    zero on a ``]``, the tokens strictly between the matching brackets are
    parsed recursively into the body of a single :class:`Loop`.

    Raises :class:`UnmatchedLoopEnd` for a ``]`` with no open loop and
    :class:`UnmatchedLoopBegin` (with the outermost open loop's token index)
    when input ends inside a loop. Nesting deeper than the interpreter's
    recursion limit raises :class:`LoopNestingTooDeep` pointing at the
    deepest loop.
    """
    try:
        return _parse_tokens(tokens)
    except RecursionError:
        raise LoopNestingTooDeep(_deepest_loop_start(tokens)) from None


def _parse_tokens(tokens: Sequence[Token]) -> Program:
    program: List[Instruction] = []
    depth = 0
    loop_start = 0

    for index, token in enumerate(tokens):
        if depth == 0:
            if token is Token.LOOP_BEGIN:
                loop_start = index
                depth = 1
            elif token is Token.LOOP_END:
                raise UnmatchedLoopEnd(index)
            else:
                program.append(_TOKEN_OPS[token])
            continue

        if token is Token.LOOP_BEGIN:
            depth += 1
        elif token is Token.LOOP_END:
            depth -= 1
            if depth == 0:
                program.append(Loop(_parse_tokens(tokens[loop_start + 1 : index])))

    if depth != 0:
        raise UnmatchedLoopBegin(loop_start)
    return tuple(program)


def _deepest_loop_start(tokens: Sequence[Token]) -> int:
    depth = 0
    deepest = 0
    position = 0
    for index, token in enumerate(tokens):
        if token is Token.LOOP_BEGIN:
            depth += 1
            if depth > deepest:
                deepest = depth
                position = index
        elif token is Token.LOOP_END:
            depth -= 1
    return position


def count_instructions(program: Sequence[Instruction]) -> int:
    total = 0
    for instruction in program:
        total += 1
        if isinstance(instruction, Loop):
            total += count_instructions(instruction.body)
    return total


def max_depth(program: Sequence[Instruction]) -> int:
    """Return the deepest loop nesting level in ``program`` (0 for straight-line code)."""
    deepest = 0
    for instruction in program:
        if isinstance(instruction, Loop):
            deepest = max(deepest, 1 + max_depth(instruction.body))
    return deepest


__all__ = [
    "Op",
    "Loop",
    "Instruction",
    "Program",
    "parse",
    "count_instructions",
    "max_depth",
]
