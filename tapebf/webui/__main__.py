from __future__ import annotations

import argparse
from typing import Optional

import uvicorn

from .app import DEFAULT_MAX_STEPS, MAX_TAPE_LENGTH, create_app


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return number


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Serve the tapebf lex/parse/run API")
    parser.add_argument("--host", default="127.0.0.1", help="Bind address (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=8000, help="Port to listen on (default: 8000)")
    parser.add_argument(
        "--max-steps",
        type=_positive_int,
        default=DEFAULT_MAX_STEPS,
        help=f"Step budget applied to every run request (default: {DEFAULT_MAX_STEPS})",
    )
    parser.add_argument(
        "--max-tape-length",
        type=_positive_int,
        default=MAX_TAPE_LENGTH,
        help=f"Largest tape a run request may ask for (default: {MAX_TAPE_LENGTH})",
    )
    args = parser.parse_args(argv)

    app = create_app(max_steps=args.max_steps, max_tape_length=args.max_tape_length)
    uvicorn.run(app, host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
