"""
Monkey CLI Entrypoint.

This module provides the command-line interface for the Monkey front end.
It lexes and parses source code and prints the result, or starts the REPL.

Features:
    - Read source from `.monkey` files or inline strings.
    - Print the token stream, the reconstructed program, or a JSON dump of the AST.
    - Report parser errors on stderr with a non-zero exit status.
    - Optional parser tracing and verbose logging.
    - Launch an interactive REPL.

Example usage:
    monkey hello.monkey
    monkey -s "let x = 1 + 2 * 3;"
    monkey -s "-a * b" -o json
    monkey --repl --output tokens

Functions:
    run_monkey(source: str, is_string: bool = False, output: str = "program",
               trace: bool = False) -> str:
        Runs the pipeline (read → lex → parse → render) and prints the rendering.

    main() -> None:
        Parses CLI arguments and invokes the appropriate action (REPL or run).
"""

import argparse
import json
import logging
import sys

from monkey.monkey_lexer import Lexer
from monkey.monkey_parser import Parser, ParserError

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("tokens", "program", "json")


def run_monkey(
    source: str,
    is_string: bool = False,
    output: str = "program",
    trace: bool = False,
) -> str:
    """
    Run the Monkey front end over a file or string and print the result.

    Args:
        source (str): Monkey source code or path to a `.monkey` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path. Defaults to False.
        output (str): One of 'tokens', 'program' or 'json'. Defaults to 'program'.
        trace (bool): If True, logs parser tracing at DEBUG level. Defaults to False.

    Returns:
        str: The text that was printed.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.monkey',
            or if `output` is not a known format.
        ParserError: If the parser recorded errors (not raised in 'tokens' mode).
    """
    if output not in OUTPUT_FORMATS:
        raise ValueError(f"Unknown output format: {output}")
    if not is_string and not source.endswith(".monkey"):
        raise ValueError("Only .monkey files are supported.")

    # 1. Read source
    if not is_string:
        with open(source, encoding="utf-8") as f:
            source = f.read()
        logger.debug("read %d characters", len(source))

    # 2. Lexing only
    if output == "tokens":
        text = "\n".join(repr(tok) for tok in Lexer(source))
        print(text)
        return text

    # 3. Parsing
    parser = Parser(Lexer(source), trace=trace)
    program = parser.parse_program()
    if parser.errors:
        raise ParserError(
            f"parser has {len(parser.errors)} error(s)", list(parser.errors)
        )

    # 4. Rendering
    if output == "json":
        text = json.dumps(program.to_dict(), indent=2)
    else:
        text = str(program)
    print(text)
    return text


def main() -> None:
    """
    Entry point for the Monkey CLI.

    - Launches the REPL if no arguments are passed or `--repl` is specified.
    - Otherwise runs `run_monkey` and exits with status 1 on parser errors.

    Supported flags:
        - `-s`, `--string`: Interpret source as a raw string instead of a file path.
        - `-o`, `--output`: Output format ('tokens', 'program' or 'json'), default is 'program'.
        - `--repl`: Launch the interactive REPL.
        - `--trace`: Log parser BEGIN/END tracing.
        - `-v`, `--verbose`: Enable DEBUG logging.
    """
    if len(sys.argv) == 1:
        from monkey.monkey_repl import start_repl

        start_repl()
        return
    parser = argparse.ArgumentParser(prog="monkey")
    parser.add_argument("source", nargs="?", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "-o",
        "--output",
        choices=OUTPUT_FORMATS,
        default="program",
        help="What to print (default: program)",
    )
    parser.add_argument(
        "--repl",
        action="store_true",
        help="Launch interactive REPL",
    )
    parser.add_argument(
        "--trace", action="store_true", help="Log parser tracing (implies --verbose)"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose or args.trace else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.repl or args.source is None:
        from monkey.monkey_repl import start_repl

        mode = "tokens" if args.output == "tokens" else "program"
        start_repl(mode=mode, trace=args.trace)
        return

    try:
        run_monkey(
            source=args.source,
            is_string=args.string,
            output=args.output,
            trace=args.trace,
        )
    except ParserError as e:
        print(f"[error] >>> {e}", file=sys.stderr)
        for message in e.errors:
            print(f"\t{message}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__" and not any("pytest" in arg for arg in sys.argv):
    main()
