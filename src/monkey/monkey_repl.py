"""
Interactive read-eval-print loop for the Monkey front end.

Each line typed at the `>> ` prompt is lexed and parsed with a fresh
lexer/parser pair and then echoed back in one of two modes:

    program: the reconstructed, fully parenthesized program (default)
    tokens:  the raw token sequence, one token per line

REPL commands:
    :tokens / :program   switch output mode
    :trace               toggle parser tracing (BEGIN/END lines on stderr)
    exit / quit          leave the REPL (so do Ctrl-D and Ctrl-C)
"""

import logging

from monkey import monkey_parser
from monkey.monkey_lexer import Lexer
from monkey.monkey_parser import Parser

logger = logging.getLogger(__name__)

PROMPT = ">> "
MODES = ("program", "tokens")


class TraceOutput:
    """Shows parser trace records on stderr while REPL tracing is on.

    Nothing is attached when logging is already configured to show DEBUG
    records of the parser logger (e.g. `monkey --repl --trace`).
    """

    def __init__(self) -> None:
        self.logger = monkey_parser.logger
        self.handler: logging.Handler | None = None
        self.saved_level = logging.NOTSET
        self.saved_propagate = True

    def attach(self) -> None:
        if self.handler is not None or self.logger.isEnabledFor(logging.DEBUG):
            return
        self.handler = logging.StreamHandler()
        self.handler.setFormatter(logging.Formatter("%(message)s"))
        self.saved_level = self.logger.level
        self.saved_propagate = self.logger.propagate
        self.logger.addHandler(self.handler)
        self.logger.setLevel(logging.DEBUG)
        # Root handlers would print every record a second time
        self.logger.propagate = False

    def detach(self) -> None:
        if self.handler is None:
            return
        self.logger.removeHandler(self.handler)
        self.logger.setLevel(self.saved_level)
        self.logger.propagate = self.saved_propagate
        self.handler = None


def print_parser_errors(errors: list[str]) -> None:
    print("[error] >>>")
    for message in errors:
        print(f"\t{message}")


def show_tokens(src: str) -> None:
    for tok in Lexer(src):
        print(repr(tok))


def show_program(src: str, trace: bool = False) -> None:
    parser = Parser(Lexer(src), trace=trace)
    program = parser.parse_program()
    if parser.errors:
        print_parser_errors(parser.errors)
        return
    print(program)


def start_repl(mode: str = "program", trace: bool = False) -> None:
    if mode not in MODES:
        raise ValueError(f"Unknown REPL mode: {mode}")
    print(f"Monkey REPL [mode={mode}]. Type 'exit' or 'quit' to leave.")

    trace_output = TraceOutput()
    if trace:
        trace_output.attach()
    try:
        while True:
            try:
                src = input(PROMPT).strip()
                if not src:
                    continue
                if src in ("exit", "quit"):
                    print("Exiting Monkey REPL.")
                    return
                if src in (":tokens", ":program"):
                    mode = src[1:]
                    print(f"[mode] >>> Output mode {mode}")
                    continue
                if src == ":trace":
                    trace = not trace
                    if trace:
                        trace_output.attach()
                    else:
                        trace_output.detach()
                    print(f"[mode] >>> Parser tracing {'ON' if trace else 'OFF'}")
                    continue

                logger.debug("repl input (%s mode): %r", mode, src)
                if mode == "tokens":
                    show_tokens(src)
                else:
                    show_program(src, trace=trace)

            except (KeyboardInterrupt, EOFError):
                print("\nExiting Monkey REPL.")
                break
    finally:
        trace_output.detach()


def main() -> None:
    start_repl()


if __name__ == "__main__":
    main()
