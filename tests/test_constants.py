import pytest

from monkey.monkey_constants import (
    Precedence,
    TokenType,
    keyword_hashmap,
    lookup_identifier,
    precedence_of,
)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("fn", TokenType.FUNCTION),
        ("let", TokenType.LET),
        ("true", TokenType.TRUE),
        ("false", TokenType.FALSE),
        ("if", TokenType.IF),
        ("else", TokenType.ELSE),
        ("return", TokenType.RETURN),
        ("foobar", TokenType.IDENT),
        ("Return", TokenType.IDENT),
        ("lets", TokenType.IDENT),
        ("", TokenType.IDENT),
    ],
)
def test_lookup_identifier(text: str, expected: TokenType) -> None:
    assert lookup_identifier(text) == expected


def test_keyword_table_is_read_only() -> None:
    with pytest.raises(TypeError):
        keyword_hashmap["while"] = TokenType.IDENT  # type: ignore[index]
    assert "while" not in keyword_hashmap


def test_token_type_prints_as_name() -> None:
    assert str(TokenType.NOT_EQ) == "NOT_EQ"
    assert f"{TokenType.IDENT}" == "IDENT"
    assert TokenType.EOF == "EOF"


def test_precedence_ladder_order() -> None:
    ladder = [
        Precedence.LOWEST,
        Precedence.EQUALS,
        Precedence.LESSGREATER,
        Precedence.SUM,
        Precedence.PRODUCT,
        Precedence.PREFIX,
        Precedence.CALL,
    ]
    assert ladder == sorted(ladder)
    assert len(set(ladder)) == len(ladder)


@pytest.mark.parametrize(
    "kind,expected",
    [
        (TokenType.EQ, Precedence.EQUALS),
        (TokenType.NOT_EQ, Precedence.EQUALS),
        (TokenType.LT, Precedence.LESSGREATER),
        (TokenType.GT, Precedence.LESSGREATER),
        (TokenType.PLUS, Precedence.SUM),
        (TokenType.MINUS, Precedence.SUM),
        (TokenType.ASTERISK, Precedence.PRODUCT),
        (TokenType.SLASH, Precedence.PRODUCT),
        (TokenType.SEMICOLON, Precedence.LOWEST),
        (TokenType.ASSIGN, Precedence.LOWEST),
        (TokenType.LPAREN, Precedence.LOWEST),
        (TokenType.EOF, Precedence.LOWEST),
    ],
)
def test_precedence_of(kind: TokenType, expected: Precedence) -> None:
    assert precedence_of(kind) == expected
