"""
Canonical token kinds, reserved words and operator precedences for the Monkey language.

This module is the single source of truth shared by the lexer and the parser:

Contents:
    TokenType: Closed set of lexical categories produced by the lexer.
    keyword_hashmap: Read-only mapping from reserved word to keyword token type.
    lookup_identifier(): Classifies identifier text as a keyword or a plain IDENT.
    Precedence: Binding-strength ladder used by the Pratt expression parser.
    precedence_table: Read-only mapping from infix operator token type to its precedence.

Example:
    >>> lookup_identifier("let")
    <TokenType.LET: 'LET'>
    >>> lookup_identifier("letter")
    <TokenType.IDENT: 'IDENT'>
"""

from enum import Enum, IntEnum
from types import MappingProxyType
from typing import Mapping


class TokenType(str, Enum):
    """Lexical category of a token.

    Values are the canonical kind names, so a kind compares equal to its name
    (``TokenType.EOF == "EOF"``) and prints as that name in diagnostics.
    """

    # Special
    ILLEGAL = "ILLEGAL"
    EOF = "EOF"

    # Identifiers and literals
    IDENT = "IDENT"
    INT = "INT"

    # Operators
    ASSIGN = "ASSIGN"
    PLUS = "PLUS"
    MINUS = "MINUS"
    BANG = "BANG"
    ASTERISK = "ASTERISK"
    SLASH = "SLASH"
    LT = "LT"
    GT = "GT"
    EQ = "EQ"
    NOT_EQ = "NOT_EQ"

    # Delimiters
    COMMA = "COMMA"
    SEMICOLON = "SEMICOLON"
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    LBRACE = "LBRACE"
    RBRACE = "RBRACE"

    # Keywords
    FUNCTION = "FUNCTION"
    LET = "LET"
    TRUE = "TRUE"
    FALSE = "FALSE"
    IF = "IF"
    ELSE = "ELSE"
    RETURN = "RETURN"

    def __str__(self) -> str:
        return self.value


# Single-character operators and delimiters. `=` and `!` also start the
# two-character operators handled in `two_char_tokens`.
single_char_tokens: Mapping[str, TokenType] = MappingProxyType(
    {
        "=": TokenType.ASSIGN,
        "+": TokenType.PLUS,
        "-": TokenType.MINUS,
        "!": TokenType.BANG,
        "*": TokenType.ASTERISK,
        "/": TokenType.SLASH,
        "<": TokenType.LT,
        ">": TokenType.GT,
        ",": TokenType.COMMA,
        ";": TokenType.SEMICOLON,
        "(": TokenType.LPAREN,
        ")": TokenType.RPAREN,
        "{": TokenType.LBRACE,
        "}": TokenType.RBRACE,
    }
)

two_char_tokens: Mapping[str, TokenType] = MappingProxyType(
    {
        "==": TokenType.EQ,
        "!=": TokenType.NOT_EQ,
    }
)

keyword_hashmap: Mapping[str, TokenType] = MappingProxyType(
    {
        "fn": TokenType.FUNCTION,
        "let": TokenType.LET,
        "true": TokenType.TRUE,
        "false": TokenType.FALSE,
        "if": TokenType.IF,
        "else": TokenType.ELSE,
        "return": TokenType.RETURN,
    }
)


def lookup_identifier(text: str) -> TokenType:
    """Returns the keyword type for `text`, or IDENT if it is not reserved.

    Matching is exact and case-sensitive.
    """
    return keyword_hashmap.get(text, TokenType.IDENT)


class Precedence(IntEnum):
    """Binding strength of expression operators, weakest first."""

    LOWEST = 1
    EQUALS = 2  # == !=
    LESSGREATER = 3  # < >
    SUM = 4  # + -
    PRODUCT = 5  # * /
    PREFIX = 6  # -x !x
    CALL = 7  # reserved: no call syntax is parsed yet


precedence_table: Mapping[TokenType, Precedence] = MappingProxyType(
    {
        TokenType.EQ: Precedence.EQUALS,
        TokenType.NOT_EQ: Precedence.EQUALS,
        TokenType.LT: Precedence.LESSGREATER,
        TokenType.GT: Precedence.LESSGREATER,
        TokenType.PLUS: Precedence.SUM,
        TokenType.MINUS: Precedence.SUM,
        TokenType.SLASH: Precedence.PRODUCT,
        TokenType.ASTERISK: Precedence.PRODUCT,
    }
)


def precedence_of(token_type: TokenType) -> Precedence:
    """Returns the infix precedence of `token_type`; non-operators bind at LOWEST."""
    return precedence_table.get(token_type, Precedence.LOWEST)


__all__ = [
    "Precedence",
    "TokenType",
    "keyword_hashmap",
    "lookup_identifier",
    "precedence_of",
    "precedence_table",
    "single_char_tokens",
    "two_char_tokens",
]
