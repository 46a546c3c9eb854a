from __future__ import annotations

import io
from typing import Any, List, Optional

from fastapi import FastAPI, HTTPException, status
from pydantic import BaseModel, Field

from tapebf.diagnostics import program_to_data
from tapebf.errors import BoundsError, ExecutionTooDeep, InputExhausted, ParseError, StepLimitExceeded
from tapebf.interpreter import DEFAULT_START_POINTER, DEFAULT_TAPE_LENGTH, Interpreter
from tapebf.lexer import lex
from tapebf.parser import Program, count_instructions, max_depth, parse

DEFAULT_MAX_STEPS = 1_000_000
MAX_STEP_BUDGET = 100_000_000
MAX_TAPE_LENGTH = 1_000_000
HTTP_422 = 422


def _string_to_input_bytes(data: str) -> bytes:
    return data.encode("latin-1", errors="replace")


def _parse_or_422(code: str) -> Program:
    try:
        return parse(lex(code))
    except ParseError as exc:
        raise HTTPException(
            status_code=HTTP_422,
            detail={"kind": exc.kind, "position": exc.position, "message": str(exc)},
        ) from exc


class CodeRequest(BaseModel):
    code: str = ""


class LexResponse(BaseModel):
    tokens: List[str]
    count: int


class ParseResponse(BaseModel):
    program: List[Any]
    instruction_count: int
    depth: int


class RunRequest(BaseModel):
    code: str = ""
    input: str = ""
    tape_length: int = Field(default=DEFAULT_TAPE_LENGTH, ge=1, le=MAX_TAPE_LENGTH)
    start_pointer: int = Field(default=DEFAULT_START_POINTER, ge=0)
    max_steps: Optional[int] = Field(default=None, ge=1, le=MAX_STEP_BUDGET)
    tape_window: int = Field(default=10, ge=0)


class RunResponse(BaseModel):
    output: str
    pointer: int
    tape_start: int
    tape: List[int]
    steps: int


def create_app(
    *,
    max_steps: int = DEFAULT_MAX_STEPS,
    max_tape_length: int = MAX_TAPE_LENGTH,
) -> FastAPI:
    """Build the API. ``max_steps`` is the step budget for requests that do not
    set one and the ceiling for those that do; ``max_tape_length`` caps the tape.
    """
    app = FastAPI(title="tapebf API", version="0.1.0")

    @app.post("/api/lex", response_model=LexResponse)
    def lex_code(payload: CodeRequest) -> LexResponse:
        tokens = lex(payload.code)
        return LexResponse(tokens=[token.value for token in tokens], count=len(tokens))

    @app.post("/api/parse", response_model=ParseResponse)
    def parse_code(payload: CodeRequest) -> ParseResponse:
        program = _parse_or_422(payload.code)
        return ParseResponse(
            program=program_to_data(program),
            instruction_count=count_instructions(program),
            depth=max_depth(program),
        )

    @app.post("/api/run", response_model=RunResponse)
    def run_code(payload: RunRequest) -> RunResponse:
        if payload.start_pointer >= payload.tape_length:
            raise HTTPException(
                status_code=HTTP_422,
                detail="start_pointer must be smaller than tape_length",
            )
        if payload.tape_length > max_tape_length:
            raise HTTPException(
                status_code=HTTP_422,
                detail=f"tape_length must not exceed {max_tape_length}",
            )
        if payload.max_steps is not None and payload.max_steps > max_steps:
            raise HTTPException(
                status_code=HTTP_422,
                detail=f"max_steps must not exceed {max_steps}",
            )
        program = _parse_or_422(payload.code)
        interpreter = Interpreter(
            tape_length=payload.tape_length,
            start_pointer=payload.start_pointer,
            max_steps=payload.max_steps or max_steps,
        )
        output = io.BytesIO()
        try:
            tape = interpreter.execute(
                program,
                stdin=io.BytesIO(_string_to_input_bytes(payload.input)),
                stdout=output,
            )
        except StepLimitExceeded as exc:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
        except (BoundsError, InputExhausted, ExecutionTooDeep) as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={"kind": exc.kind, "message": str(exc)},
            ) from exc

        tape_start, window = tape.window(payload.tape_window)
        return RunResponse(
            output=output.getvalue().decode("latin-1"),
            pointer=tape.pointer,
            tape_start=tape_start,
            tape=window,
            steps=interpreter.steps,
        )

    return app


__all__ = ["create_app", "DEFAULT_MAX_STEPS", "MAX_TAPE_LENGTH"]
