from __future__ import annotations

from enum import Enum
from typing import Dict, List


class Token(str, Enum):
    INC_POINTER = ">"
    DEC_POINTER = "<"
    INC = "+"
    DEC = "-"
    WRITE = "."
    READ = ","
    LOOP_BEGIN = "["
    LOOP_END = "]"


_SYMBOLS: Dict[str, Token] = {token.value: token for token in Token}


def lex(source: str) -> List[Token]:
    """Convert source text into tokens, dropping every unrecognized character."""
    tokens: List[Token] = []
    for char in source:
        token = _SYMBOLS.get(char)
        if token is not None:
            tokens.append(token)
    return tokens


__all__ = ["Token", "lex"]
