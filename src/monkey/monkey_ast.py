"""
Defines the abstract syntax tree (AST) node model for the Monkey programming language.

Classes:
    Node:
        Base of every node. Keeps the token that began it and exposes
        `token_literal()`, a canonical `str()` rendering and `to_dict()`.

    Statement, Expression:
        Role markers for the two node families.

    Program:
        Root node owning the ordered list of top-level statements.

    LetStatement, ReturnStatement, ExpressionStatement:
        Statement variants.

    Identifier, IntegerLiteral, PrefixExpression, InfixExpression:
        Expression variants.

    NodeDict:
        TypedDict shape of `to_dict()` output, suitable for JSON dumps.

Absent children:
    When the parser fails inside an expression slot it stores `None` there and
    records the error on its own error list. Every method in this module accepts
    such absent children: they render as "" and serialize as None.

Rendering:
    Expressions are fully parenthesized so that precedence and associativity are
    visible in the text, e.g. `a + b * c` renders as `(a + (b * c))`.

Example:
    >>> from monkey.monkey_constants import TokenType
    >>> from monkey.monkey_lexer import Token
    >>> name = Identifier(Token(TokenType.IDENT, "x"), "x")
    >>> value = IntegerLiteral(Token(TokenType.INT, "5"), 5)
    >>> str(LetStatement(Token(TokenType.LET, "let"), name, value))
    'let x = 5;'
"""

from typing import Any, TypedDict

from monkey.monkey_lexer import Token


class NodeDict(TypedDict, total=False):
    """
    TypedDict representation of a Node used for serialization.

    Fields:
        kind (str): Node class name (e.g., "LetStatement", "InfixExpression").
        token (str): Literal of the token that began the node.
        value (Any): Identifier name or integer value.
        name (NodeDict): Bound identifier of a let statement.
        operator (str): Operator text of prefix and infix expressions.
        left, right (NodeDict | None): Operands; None when absent.
        return_value, expression (NodeDict | None): Statement payloads; None when absent.
        statements (list[NodeDict]): Program body.
    """

    kind: str
    token: str
    value: Any
    name: "NodeDict"
    operator: str
    left: "NodeDict | None"
    right: "NodeDict | None"
    return_value: "NodeDict | None"
    expression: "NodeDict | None"
    statements: list["NodeDict"]


def render(node: "Node | None") -> str:
    """Renders an optional child; absent children render as an empty string.

    Expands `parts()` with an explicit stack, so arbitrarily deep trees (long
    operator chains, runs of prefix operators) render without recursion.
    """
    out: list[str] = []
    stack: list[Any] = [node]
    while stack:
        part = stack.pop()
        if isinstance(part, str):
            out.append(part)
        elif part is not None:
            stack.extend(reversed(part.parts()))
    return "".join(out)


class Node:
    """
    Base class of all AST nodes.

    Args:
        token (Token): The token that began this node.

    Methods:
        token_literal(): Literal text of the originating token.
        fields(): Node-specific attributes, used for equality, repr and serialization.
        parts(): Rendering pieces, text and child nodes in order.
        to_dict(): Nested dictionary form of the node and its children.
    """

    def __init__(self, token: Token) -> None:
        self.token = token

    def token_literal(self) -> str:
        return self.token.literal

    def fields(self) -> dict[str, Any]:
        return {}

    def parts(self) -> list[Any]:
        return [self.token_literal()]

    def __str__(self) -> str:
        return render(self)

    def __repr__(self) -> str:
        parts = [f"{key}={value!r}" for key, value in self.fields().items()]
        return f"{type(self).__name__}({', '.join(parts)})"

    def __eq__(self, other: Any) -> bool:
        if type(other) is not type(self):
            return False
        return self.token == other.token and self.fields() == other.fields()

    def to_dict(self) -> NodeDict:
        data: NodeDict = {"kind": type(self).__name__, "token": self.token_literal()}
        for key, value in self.fields().items():
            data[key] = value.to_dict() if isinstance(value, Node) else value  # type: ignore[literal-required]
        return data


class Statement(Node):
    """A node that does not produce a value, e.g. `let x = 5;`."""


class Expression(Node):
    """A node that produces a value, e.g. `5` or `a + b`."""


class Program:
    """
    Root of every AST produced by the parser.

    Statements appear in source order. An empty program is valid and renders as "".

    Attributes:
        statements (list[Statement]): Top-level statements.
    """

    def __init__(self, statements: list[Statement] | None = None) -> None:
        self.statements: list[Statement] = statements or []

    def token_literal(self) -> str:
        if self.statements:
            return self.statements[0].token_literal()
        return ""

    def __str__(self) -> str:
        return "".join(render(stmt) for stmt in self.statements)

    def __repr__(self) -> str:
        preview = ", ".join(repr(s) for s in self.statements[:3])
        if len(self.statements) > 3:
            preview += ", ..."
        return f"Program(statements=[{preview}])"

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, Program) and self.statements == other.statements

    def to_dict(self) -> NodeDict:
        return {
            "kind": "Program",
            "statements": [stmt.to_dict() for stmt in self.statements],
        }


class Identifier(Expression):
    """A name, either bound by `let` or referenced in an expression."""

    def __init__(self, token: Token, value: str) -> None:
        super().__init__(token)
        self.value = value

    def fields(self) -> dict[str, Any]:
        return {"value": self.value}

    def parts(self) -> list[Any]:
        return [self.value]


class IntegerLiteral(Expression):
    """A decimal integer literal; `value` fits in a signed 64-bit integer."""

    def __init__(self, token: Token, value: int) -> None:
        super().__init__(token)
        self.value = value

    def fields(self) -> dict[str, Any]:
        return {"value": self.value}


class PrefixExpression(Expression):
    """A unary operator applied to its operand: `(<operator><right>)`."""

    def __init__(self, token: Token, operator: str, right: Expression | None) -> None:
        super().__init__(token)
        self.operator = operator
        self.right = right

    def fields(self) -> dict[str, Any]:
        return {"operator": self.operator, "right": self.right}

    def parts(self) -> list[Any]:
        return ["(", self.operator, self.right, ")"]


class InfixExpression(Expression):
    """A binary operator with both operands: `(<left> <operator> <right>)`."""

    def __init__(
        self,
        token: Token,
        left: Expression | None,
        operator: str,
        right: Expression | None,
    ) -> None:
        super().__init__(token)
        self.left = left
        self.operator = operator
        self.right = right

    def fields(self) -> dict[str, Any]:
        return {"left": self.left, "operator": self.operator, "right": self.right}

    def parts(self) -> list[Any]:
        return ["(", self.left, f" {self.operator} ", self.right, ")"]


class LetStatement(Statement):
    """Binds `name` to `value`: `let <name> = <value>;`."""

    def __init__(self, token: Token, name: Identifier, value: Expression | None) -> None:
        super().__init__(token)
        self.name = name
        self.value = value

    def fields(self) -> dict[str, Any]:
        return {"name": self.name, "value": self.value}

    def parts(self) -> list[Any]:
        return [f"{self.token_literal()} ", self.name, " = ", self.value, ";"]


class ReturnStatement(Statement):
    """Returns the value of an expression: `return <value>;`."""

    def __init__(self, token: Token, return_value: Expression | None) -> None:
        super().__init__(token)
        self.return_value = return_value

    def fields(self) -> dict[str, Any]:
        return {"return_value": self.return_value}

    def parts(self) -> list[Any]:
        return [f"{self.token_literal()} ", self.return_value, ";"]


class ExpressionStatement(Statement):
    """A bare expression used as a statement, e.g. `x + 10;` typed at the REPL."""

    def __init__(self, token: Token, expression: Expression | None) -> None:
        super().__init__(token)
        self.expression = expression

    def fields(self) -> dict[str, Any]:
        return {"expression": self.expression}

    def parts(self) -> list[Any]:
        return [self.expression]


__all__ = [
    "Expression",
    "ExpressionStatement",
    "Identifier",
    "InfixExpression",
    "IntegerLiteral",
    "LetStatement",
    "Node",
    "NodeDict",
    "PrefixExpression",
    "Program",
    "ReturnStatement",
    "Statement",
    "render",
]
