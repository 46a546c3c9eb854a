from .errors import (
    BoundsError,
    ExecutionError,
    ExecutionTooDeep,
    InputExhausted,
    LoopNestingTooDeep,
    ParseError,
    SourceAccessError,
    StepLimitExceeded,
    TapeBFError,
    UnmatchedLoopBegin,
    UnmatchedLoopEnd,
)
from .interpreter import Interpreter, Tape, execute, run_source
from .lexer import Token, lex
from .parser import Instruction, Loop, Op, Program, parse

__all__ = [
    "Token",
    "lex",
    "Op",
    "Loop",
    "Instruction",
    "Program",
    "parse",
    "Tape",
    "Interpreter",
    "execute",
    "run_source",
    "TapeBFError",
    "SourceAccessError",
    "ParseError",
    "UnmatchedLoopEnd",
    "UnmatchedLoopBegin",
    "LoopNestingTooDeep",
    "ExecutionError",
    "BoundsError",
    "InputExhausted",
    "ExecutionTooDeep",
    "StepLimitExceeded",
]
