"""Command that parses a script and prints its syntax tree."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from parteescript.lexer import Lexer
from parteescript.loader import load_script
from parteescript.parser import Parser
from parteescript.syntax_tree import print_ast

__all__ = ["main"]

DEFAULT_SCRIPT = "exampleCode.par"


def main(argv: Sequence[str] | None = None) -> int:
    """Parse a script file and print its tree when it parsed cleanly."""
    arguments = argparse.ArgumentParser(
        prog="parteescript",
        description="Parse a script and print its syntax tree.",
    )
    arguments.add_argument(
        "script",
        nargs="?",
        default=DEFAULT_SCRIPT,
        help=f"script file to parse (default: {DEFAULT_SCRIPT})",
    )
    args = arguments.parse_args(argv)

    try:
        source = load_script(args.script)
    except FileNotFoundError as error:
        print(error, file=sys.stderr)
        return 1

    result = Parser().parse(Lexer(source))
    if result.ok:
        print_ast(result.program)
    return 0


if __name__ == "__main__":
    sys.exit(main())