from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

from .diagnostics import format_program, format_tokens
from .errors import ExecutionError, ParseError, SourceAccessError
from .interpreter import Interpreter
from .lexer import lex
from .parser import parse


def _read_source(path: str) -> str:
    source_path = Path(path)
    if not source_path.is_file():
        raise SourceAccessError(f"Source file not found: {path}")
    try:
        return source_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceAccessError(f"Cannot read source file {path}: {exc}") from exc


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Run a tape language program")
    parser.add_argument("source", help="Path to the program source file")
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Print the token stream and instruction tree to stderr before running",
    )
    args = parser.parse_args(argv)

    try:
        source_text = _read_source(args.source)
    except SourceAccessError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    tokens = lex(source_text)
    if args.trace:
        print(f"tokens: {format_tokens(tokens)}", file=sys.stderr)

    try:
        program = parse(tokens)
    except ParseError as exc:
        print(f"{exc.kind}: {exc}", file=sys.stderr)
        return 1

    if args.trace:
        print("program:", file=sys.stderr)
        print(format_program(program), file=sys.stderr)

    sys.stdout.flush()
    try:
        Interpreter().execute(program)
    except ExecutionError as exc:
        print(f"{exc.kind}: {exc}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
