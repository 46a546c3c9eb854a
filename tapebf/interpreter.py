from __future__ import annotations

import io
import sys
from dataclasses import dataclass, field
from typing import BinaryIO, List, Optional, Sequence, Tuple

from .errors import BoundsError, ExecutionTooDeep, InputExhausted, StepLimitExceeded
from .lexer import lex
from .parser import Instruction, Loop, Op, parse

DEFAULT_TAPE_LENGTH = 1024
DEFAULT_START_POINTER = 512


@dataclass
class Tape:
    cells: bytearray
    pointer: int

    @classmethod
    def blank(
        cls,
        length: int = DEFAULT_TAPE_LENGTH,
        start: int = DEFAULT_START_POINTER,
    ) -> "Tape":
        if length < 1:
            raise ValueError("Tape length must be positive.")
        if not 0 <= start < length:
            raise ValueError(f"Start pointer {start} is outside a tape of length {length}.")
        return cls(cells=bytearray(length), pointer=start)

    @property
    def current(self) -> int:
        return self.cells[self.pointer]

    def window(self, radius: int) -> Tuple[int, List[int]]:
        """Return the start index and values of the cells within ``radius`` of the pointer."""
        start = max(0, self.pointer - radius)
        end = min(len(self.cells), self.pointer + radius + 1)
        return start, list(self.cells[start:end])


@dataclass
class Interpreter:
    tape_length: int = DEFAULT_TAPE_LENGTH
    start_pointer: int = DEFAULT_START_POINTER
    max_steps: Optional[int] = None

    steps: int = field(init=False, default=0, repr=False)

    def new_tape(self) -> Tape:
        return Tape.blank(self.tape_length, self.start_pointer)

    def execute(
        self,
        program: Sequence[Instruction],
        tape: Optional[Tape] = None,
        stdin: Optional[BinaryIO] = None,
        stdout: Optional[BinaryIO] = None,
    ) -> Tape:
        """Run ``program`` to completion and return the tape it ran on.

        ``stdin`` and ``stdout`` are binary streams; they default to the
        process's standard streams. Bounds violations, input exhaustion, an
        exceeded step budget and loops nested past the recursion limit abort
        the run by raising.
        """
        if tape is None:
            tape = self.new_tape()
        reader = stdin if stdin is not None else sys.stdin.buffer
        writer = stdout if stdout is not None else sys.stdout.buffer
        self.steps = 0
        try:
            self._run(program, tape, reader, writer)
        except RecursionError:
            raise ExecutionTooDeep("Loops are nested too deeply to execute.") from None
        return tape

    def run(self, code: str, input_data: bytes = b"") -> str:
        output = io.BytesIO()
        self.execute(parse(lex(code)), stdin=io.BytesIO(input_data), stdout=output)
        return output.getvalue().decode("latin-1")

    def _run(
        self,
        program: Sequence[Instruction],
        tape: Tape,
        reader: BinaryIO,
        writer: BinaryIO,
    ) -> None:
        for instruction in program:
            if isinstance(instruction, Loop):
                while True:
                    self._tick()
                    if tape.cells[tape.pointer] == 0:
                        break
                    self._run(instruction.body, tape, reader, writer)
            else:
                self._tick()
                self._execute_op(instruction, tape, reader, writer)

    def _tick(self) -> None:
        if self.max_steps is not None and self.steps >= self.max_steps:
            raise StepLimitExceeded("Program exceeded allowed step count")
        self.steps += 1

    def _execute_op(self, op: Op, tape: Tape, reader: BinaryIO, writer: BinaryIO) -> None:
        if op is Op.INC_POINTER:
            if tape.pointer + 1 >= len(tape.cells):
                raise BoundsError("Pointer moved beyond the tape length.", tape.pointer + 1)
            tape.pointer += 1
        elif op is Op.DEC_POINTER:
            if tape.pointer - 1 < 0:
                raise BoundsError("Pointer moved before start of tape.", tape.pointer - 1)
            tape.pointer -= 1
        elif op is Op.INC:
            tape.cells[tape.pointer] = (tape.cells[tape.pointer] + 1) % 256
        elif op is Op.DEC:
            tape.cells[tape.pointer] = (tape.cells[tape.pointer] - 1) % 256
        elif op is Op.WRITE:
            writer.write(bytes((tape.cells[tape.pointer],)))
            writer.flush()
        elif op is Op.READ:
            data = reader.read(1)
            if not data:
                raise InputExhausted("Read requested but no input is available.")
            tape.cells[tape.pointer] = data[0]


def execute(
    program: Sequence[Instruction],
    tape: Tape,
    stdin: Optional[BinaryIO] = None,
    stdout: Optional[BinaryIO] = None,
) -> None:
    Interpreter(tape_length=len(tape.cells)).execute(program, tape, stdin=stdin, stdout=stdout)


def run_source(
    source: str,
    stdin: Optional[BinaryIO] = None,
    stdout: Optional[BinaryIO] = None,
) -> Tape:
    """Lex, parse and execute ``source`` on a fresh default tape."""
    return Interpreter().execute(parse(lex(source)), stdin=stdin, stdout=stdout)


__all__ = [
    "DEFAULT_TAPE_LENGTH",
    "DEFAULT_START_POINTER",
    "Tape",
    "Interpreter",
    "execute",
    "run_source",
]
