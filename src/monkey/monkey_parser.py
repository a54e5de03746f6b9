"""
Monkey Language Parser

Parses the Monkey token stream into an abstract syntax tree (`Program`).

Statements are parsed by recursive descent; expressions by top-down operator
precedence (Pratt parsing): every token type that can start an expression has a
prefix parse function, every binary operator has an infix parse function, and a
numeric precedence ladder decides how tightly operators bind.

Supported Constructs
--------------------
- Statements:
    * `let <ident> = <expr>;`
    * `return <expr>;`
    * bare expressions, with or without a trailing `;`
- Expressions:
    * identifiers and integer literals
    * prefix operators: `!x`, `-x`
    * infix operators: `+ - * / < > == !=`, left-associative

Parser Behavior
---------------
- Never raises on malformed input. Problems are appended, in encounter order,
  to `Parser.errors` and parsing continues with the next statement.
- A failed expression slot holds `None`; a `let` statement missing its name or
  `=` is dropped from the program entirely.
- With `trace=True`, entry and exit of every parse function is logged at DEBUG
  level on this module's logger, indented by nesting depth.

Entry Points
------------
- `Parser(lexer).parse_program()`: Parse a full program.
- `parse_source(source)`: Convenience wrapper returning `(program, errors)`.

Raises
------
ParserError
    Only from `parse_source(..., strict=True)` when errors were recorded.
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Callable, TypeVar

from monkey.monkey_ast import (
    Expression,
    ExpressionStatement,
    Identifier,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    PrefixExpression,
    Program,
    ReturnStatement,
    Statement,
)
from monkey.monkey_constants import Precedence, TokenType, precedence_of
from monkey.monkey_lexer import Lexer, Token

logger = logging.getLogger(__name__)

INT64_MAX = 2**63 - 1

PrefixParseFn = Callable[[], Expression | None]
InfixParseFn = Callable[[Expression | None], Expression | None]

F = TypeVar("F", bound=Callable[..., Any])


class ParserError(Exception):
    """Raised by strict helpers when parsing recorded one or more errors.

    Attributes:
        errors (list[str]): The parser's diagnostics, in encounter order.
    """

    def __init__(self, message: str, errors: list[str] | None = None):
        super().__init__(message)
        self.errors = errors or []


def traced(func: F) -> F:
    """Logs BEGIN/END around a parse method when the parser has tracing enabled."""

    @functools.wraps(func)
    def wrapper(self: Parser, *args: Any) -> Any:
        if not self.trace:
            return func(self, *args)
        self.trace_level += 1
        self._trace_print(f"BEGIN {func.__name__}")
        try:
            return func(self, *args)
        finally:
            self._trace_print(f"END {func.__name__}")
            self.trace_level -= 1

    return wrapper  # type: ignore[return-value]


class Parser:
    """
    Monkey Parser Class

    Consumes tokens from a `Lexer` through a two-token window (`current_token`
    and `peek_token`) and builds a `Program`. A Parser is single-use: construct a
    new lexer/parser pair for every source unit.

    Attributes
    ----------
    lexer : Lexer
        Token source.
    errors : list[str]
        Diagnostics recorded so far. A non-empty list means the tree returned by
        `parse_program()` may contain absent (`None`) expressions.
    current_token : Token
        Token under examination.
    peek_token : Token
        Next token, inspected without being consumed.
    trace : bool
        Whether parse functions log BEGIN/END lines.
    prefix_parse_fns : dict[TokenType, PrefixParseFn]
        Handlers for token types that can start an expression.
    infix_parse_fns : dict[TokenType, InfixParseFn]
        Handlers for binary operators, called with the left operand.
    """

    def __init__(self, lexer: Lexer, trace: bool = False) -> None:
        self.lexer = lexer
        self.errors: list[str] = []
        self.trace = trace
        self.trace_level = 0

        self.current_token = Token(TokenType.EOF, "")
        self.peek_token = Token(TokenType.EOF, "")

        self.prefix_parse_fns: dict[TokenType, PrefixParseFn] = {
            TokenType.IDENT: self.parse_identifier,
            TokenType.INT: self.parse_integer_literal,
            TokenType.BANG: self.parse_prefix_expression,
            TokenType.MINUS: self.parse_prefix_expression,
        }

        self.infix_parse_fns: dict[TokenType, InfixParseFn] = {
            kind: self.parse_infix_expression
            for kind in (
                TokenType.PLUS,
                TokenType.MINUS,
                TokenType.SLASH,
                TokenType.ASTERISK,
                TokenType.EQ,
                TokenType.NOT_EQ,
                TokenType.LT,
                TokenType.GT,
            )
        }

        # Fill both lookahead slots
        self.next_token()
        self.next_token()

    def _trace_print(self, message: str) -> None:
        logger.debug("%s%s", "\t" * (self.trace_level - 1), message)

    def add_error(self, message: str) -> None:
        logger.debug("parse error: %s", message)
        self.errors.append(message)

    def next_token(self) -> None:
        self.current_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def current_token_is(self, kind: TokenType) -> bool:
        return self.current_token.type == kind

    def peek_token_is(self, kind: TokenType) -> bool:
        return self.peek_token.type == kind

    def peek_error(self, kind: TokenType) -> None:
        self.add_error(
            f"expected next token to be {kind}, got {self.peek_token.type} instead"
        )

    def no_prefix_parse_fn_error(self, kind: TokenType) -> None:
        self.add_error(f"no prefix parse function for token kind {kind}")

    def expect_peek(self, kind: TokenType) -> bool:
        """Advances if the peek token has type `kind`.

        On mismatch records an error and returns False without advancing, so
        the caller decides how to recover.
        """
        if self.peek_token_is(kind):
            self.next_token()
            return True
        self.peek_error(kind)
        return False

    def peek_precedence(self) -> Precedence:
        return precedence_of(self.peek_token.type)

    def current_precedence(self) -> Precedence:
        return precedence_of(self.current_token.type)

    def parse_program(self) -> Program:
        """Parse statements until EOF and return the Program.

        Always returns; check `errors` before trusting the tree.
        """
        program = Program()
        while not self.current_token_is(TokenType.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                program.statements.append(stmt)
            self.next_token()
        return program

    def parse_statement(self) -> Statement | None:
        if self.current_token.type == TokenType.LET:
            return self.parse_let_statement()
        if self.current_token.type == TokenType.RETURN:
            return self.parse_return_statement()
        return self.parse_expression_statement()

    @traced
    def parse_let_statement(self) -> LetStatement | None:
        token = self.current_token

        if not self.expect_peek(TokenType.IDENT):
            return None
        name = Identifier(self.current_token, self.current_token.literal)

        if not self.expect_peek(TokenType.ASSIGN):
            return None

        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)

        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()

        return LetStatement(token, name, value)

    @traced
    def parse_return_statement(self) -> ReturnStatement:
        token = self.current_token

        self.next_token()
        return_value = self.parse_expression(Precedence.LOWEST)

        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()

        return ReturnStatement(token, return_value)

    @traced
    def parse_expression_statement(self) -> ExpressionStatement:
        token = self.current_token
        expression = self.parse_expression(Precedence.LOWEST)

        # Optional, so that `5 + 5` works at the REPL
        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()

        return ExpressionStatement(token, expression)

    @traced
    def parse_expression(self, precedence: Precedence) -> Expression | None:
        prefix = self.prefix_parse_fns.get(self.current_token.type)
        if prefix is None:
            self.no_prefix_parse_fn_error(self.current_token.type)
            return None
        left = prefix()

        while (
            not self.peek_token_is(TokenType.SEMICOLON)
            and precedence < self.peek_precedence()
        ):
            infix = self.infix_parse_fns.get(self.peek_token.type)
            if infix is None:
                return left
            self.next_token()
            left = infix(left)

        return left

    @traced
    def parse_identifier(self) -> Expression | None:
        return Identifier(self.current_token, self.current_token.literal)

    @traced
    def parse_integer_literal(self) -> Expression | None:
        token = self.current_token
        # Length check first: int() refuses very long digit strings
        digits = token.literal.lstrip("0")
        if len(digits) > len(str(INT64_MAX)) or int(digits or "0") > INT64_MAX:
            self.add_error(f"could not parse {token.literal!r} as integer")
            return None
        return IntegerLiteral(token, int(digits or "0"))

    @traced
    def parse_prefix_expression(self) -> Expression | None:
        # A run such as `!-!x` is folded in a loop, not by recursion
        operators = [self.current_token]
        while self.peek_token.type in (TokenType.BANG, TokenType.MINUS):
            self.next_token()
            operators.append(self.current_token)
        self.next_token()
        expression = self.parse_expression(Precedence.PREFIX)
        for token in reversed(operators):
            expression = PrefixExpression(token, token.literal, expression)
        return expression

    @traced
    def parse_infix_expression(self, left: Expression | None) -> Expression | None:
        token = self.current_token
        # Right operand binds at the operator's own precedence: left-associative
        precedence = self.current_precedence()
        self.next_token()
        right = self.parse_expression(precedence)
        return InfixExpression(token, left, token.literal, right)


def parse_source(
    source: str, strict: bool = False, trace: bool = False
) -> tuple[Program, list[str]]:
    """Parse `source` with a fresh lexer/parser pair.

    Args:
        source (str): Monkey source text.
        strict (bool): Raise `ParserError` instead of returning errors. Defaults to False.
        trace (bool): Enable parser tracing. Defaults to False.

    Returns:
        tuple[Program, list[str]]: The program and the recorded errors.

    Raises:
        ParserError: If `strict` is True and any error was recorded.
    """
    parser = Parser(Lexer(source), trace=trace)
    program = parser.parse_program()
    if strict and parser.errors:
        raise ParserError(
            f"parser has {len(parser.errors)} error(s)", list(parser.errors)
        )
    return program, parser.errors


__all__ = ["Parser", "ParserError", "parse_source"]
