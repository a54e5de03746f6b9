"""
Lexical analyzer for the Monkey programming language.

This module provides the components that turn raw source text into tokens:

Classes:
    CharacterStream: Cursor over the source with one-character lookahead and line/column tracking.
    Token: A single token with type, literal text, and source location.
    Lexer: Pull-based scanner producing one Token per `next_token()` call.

Features:
    - Skips whitespace (space, tab, CR, LF)
    - Two-character operators `==` and `!=` via one character of lookahead
    - Identifiers (ASCII letters and underscore) classified through the keyword table
    - Integer literals (ASCII decimal digits, no sign)
    - Unknown characters become ILLEGAL tokens; nothing is raised
    - EOF is returned again on every call after the end of input

Example:
    >>> lexer = Lexer("let x = 5;")
    >>> lexer.next_token()
    Token(LET, let)

Exports:
    - CharacterStream
    - Token
    - Lexer
    - tokenize
"""

import string
from typing import Any, Iterator

from monkey.monkey_constants import (
    TokenType,
    lookup_identifier,
    single_char_tokens,
    two_char_tokens,
)

LETTERS = frozenset(string.ascii_letters + "_")
DIGITS = frozenset(string.digits)
WHITESPACE = frozenset(" \t\r\n")


class CharacterStream:
    """Cursor over Monkey source text.

    `position` indexes the next unread character; `line` and `column` (both
    1-based) locate it, so the lexer can stamp each token with where it began.
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self.position = 0
        self.line = 1
        self.column = 1

    def next(self) -> str:
        """Consumes one character. Raises EOFError once the source is exhausted."""
        if self.end_of_file():
            raise EOFError(
                f"read past end of Monkey source (line {self.line}, column {self.column})"
            )
        char = self.source[self.position]
        self.position += 1
        if char == "\n":
            self.line, self.column = self.line + 1, 1
        else:
            self.column += 1
        return char

    def peek(self, offset: int = 0) -> str:
        # "" doubles as the end-of-input sentinel for the lexer
        index = self.position + offset
        return self.source[index] if 0 <= index < len(self.source) else ""

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


class Token:
    """Represents a single lexical token in the Monkey language.

    Attributes:
        type (TokenType): The token's lexical category.
        literal (str): The source text of the token (empty for EOF).
        line (int): The 1-based line number where the token starts.
        col (int): The 1-based column number where the token starts.
    """

    def __init__(self, type_: TokenType, literal: str, line: int = 0, col: int = 0):
        self.type = type_
        self.literal = literal
        self.line = line
        self.col = col

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.literal})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.type == other.type
            and self.literal == other.literal
            and self.line == other.line
            and self.col == other.col
        )

    def __hash__(self) -> int:
        return hash((self.type, self.literal, self.line, self.col))


class Lexer:
    """Lexical analyzer for the Monkey language.

    Each call to `next_token()` skips leading whitespace and returns exactly one
    token, advancing the internal cursor. A Lexer is single-use: create a new one
    for every source unit.

    Iterating over a Lexer yields the remaining tokens up to, but not including, EOF.

    Attributes:
        stream (CharacterStream): The source stream being scanned.
    """

    def __init__(self, source: str) -> None:
        self.stream = CharacterStream(source)

    def __iter__(self) -> Iterator[Token]:
        while True:
            tok = self.next_token()
            if tok.type == TokenType.EOF:
                return
            yield tok

    def peek(self) -> str:
        """Returns the current character without consuming it, or "" at EOF."""
        return self.stream.peek()

    def peek_next(self) -> str:
        """Returns the character after the current one without consuming anything."""
        return self.stream.peek(1)

    def advance(self) -> str:
        """Consumes and returns the current character."""
        return self.stream.next()

    def skip_whitespace(self) -> None:
        while self.peek() in WHITESPACE:
            self.advance()

    def read_while(self, allowed: frozenset[str]) -> str:
        """Consumes the maximal run of characters in `allowed` and returns it."""
        start = self.stream.position
        while not self.stream.end_of_file() and self.peek() in allowed:
            self.advance()
        return self.stream.source[start : self.stream.position]

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream.

        Returns:
            Token: The next token. Once the input is exhausted every call returns
            an EOF token with an empty literal.
        """
        self.skip_whitespace()

        line, col = self.stream.line, self.stream.column
        if self.stream.end_of_file():
            return Token(TokenType.EOF, "", line, col)

        ch = self.peek()

        # 1. Identifier or keyword
        if ch in LETTERS:
            ident = self.read_while(LETTERS)
            return Token(lookup_identifier(ident), ident, line, col)

        # 2. Integer
        if ch in DIGITS:
            return Token(TokenType.INT, self.read_while(DIGITS), line, col)

        # 3. Two-character operator
        pair = ch + self.peek_next()
        if pair in two_char_tokens:
            self.advance()
            self.advance()
            return Token(two_char_tokens[pair], pair, line, col)

        # 4. Single-character operator or delimiter
        if ch in single_char_tokens:
            self.advance()
            return Token(single_char_tokens[ch], ch, line, col)

        # 5. Unknown character
        return Token(TokenType.ILLEGAL, self.advance(), line, col)


def tokenize(source: str) -> list[Token]:
    """Lexes `source` completely and returns its tokens, ending with EOF."""
    lexer = Lexer(source)
    tokens = list(lexer)
    tokens.append(lexer.next_token())
    return tokens


__all__ = ["CharacterStream", "Lexer", "Token", "tokenize"]
