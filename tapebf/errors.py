from __future__ import annotations


class TapeBFError(Exception):
    """Base class for every error raised by the pipeline."""


class SourceAccessError(TapeBFError):
    pass


# === Parse errors ===


class ParseError(TapeBFError):
    kind = "parse error"

    def __init__(self, message: str, position: int) -> None:
        super().__init__(message)
        self.position = position


class UnmatchedLoopEnd(ParseError):
    kind = "unmatched loop end"

    def __init__(self, position: int) -> None:
        super().__init__(f"Unmatched ']' at token {position}", position)


class UnmatchedLoopBegin(ParseError):
    kind = "unmatched loop begin"

    def __init__(self, position: int) -> None:
        super().__init__(f"Loop starting at token {position} has no matching ']'", position)


class LoopNestingTooDeep(ParseError):
    kind = "nesting too deep"

    def __init__(self, position: int) -> None:
        super().__init__(f"Loop starting at token {position} is nested too deeply to parse", position)


# === Execution errors ===


class ExecutionError(TapeBFError):
    kind = "execution error"


class BoundsError(ExecutionError):
    kind = "bounds error"

    def __init__(self, message: str, pointer: int) -> None:
        super().__init__(message)
        self.pointer = pointer


class InputExhausted(ExecutionError):
    kind = "input exhausted"


class ExecutionTooDeep(ExecutionError):
    kind = "nesting too deep"


class StepLimitExceeded(ExecutionError):
    """Raised when execution exceeds the configured step budget."""

    kind = "step limit exceeded"


__all__ = [
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
