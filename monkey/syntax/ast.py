"""Abstract syntax tree for the Monkey language.

A Program is an ordered sequence of statements. Every node keeps the token it was parsed from and can be rendered
back to text with str(): prefix and infix expressions are always parenthesized, so the rendered form shows exactly
how the parser grouped an expression:

```
-a * b                 ->  ((-a) * b)
a + add(b * c) + d     ->  ((a + add((b * c))) + d)
```

Nodes are frozen once built; child sequences are tuples.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from monkey.syntax.token import Token


def _join(nodes):
    return ", ".join(str(node) for node in nodes)


@dataclass(frozen=True)
class Node:
    """Superclass for every AST node."""
    token: Token

    def token_literal(self):
        return self.token.literal

    def __str__(self):
        return self.token.literal


class Statement(Node):
    """A node that appears directly in a Program or BlockStatement."""


class Expression(Node):
    """A node that produces a value."""


@dataclass(frozen=True)
class Program:
    statements: Tuple[Statement, ...] = ()

    def token_literal(self):
        return self.statements[0].token_literal() if self.statements else ""

    def __str__(self):
        return "".join(str(statement) for statement in self.statements)


# expressions

@dataclass(frozen=True)
class Identifier(Expression):
    value: str

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class IntegerLiteral(Expression):
    value: int


@dataclass(frozen=True)
class BooleanLiteral(Expression):
    value: bool


@dataclass(frozen=True)
class StringLiteral(Expression):
    value: str

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class PrefixExpression(Expression):
    operator: str
    right: Expression

    def __str__(self):
        return f"({self.operator}{self.right})"


@dataclass(frozen=True)
class InfixExpression(Expression):
    left: Expression
    operator: str
    right: Expression

    def __str__(self):
        return f"({self.left} {self.operator} {self.right})"


@dataclass(frozen=True)
class BlockStatement(Statement):
    statements: Tuple[Statement, ...] = ()

    def __str__(self):
        return " ".join(str(statement) for statement in self.statements)


@dataclass(frozen=True)
class IfExpression(Expression):
    condition: Expression
    consequence: BlockStatement
    alternative: Optional[BlockStatement] = None

    def __str__(self):
        result = f"if {self.condition} {self.consequence}"
        if self.alternative is not None:
            result += f" else {self.alternative}"
        return result


@dataclass(frozen=True)
class FunctionLiteral(Expression):
    parameters: Tuple[Identifier, ...]
    body: BlockStatement

    def __str__(self):
        return f"{self.token_literal()}({_join(self.parameters)}) {self.body}"


@dataclass(frozen=True)
class CallExpression(Expression):
    function: Expression  # Identifier or FunctionLiteral, usually
    arguments: Tuple[Expression, ...]

    def __str__(self):
        return f"{self.function}({_join(self.arguments)})"


@dataclass(frozen=True)
class ArrayLiteral(Expression):
    elements: Tuple[Expression, ...]

    def __str__(self):
        return f"[{_join(self.elements)}]"


@dataclass(frozen=True)
class IndexExpression(Expression):
    left: Expression
    index: Expression

    def __str__(self):
        return f"({self.left}[{self.index}])"


@dataclass(frozen=True)
class HashLiteral(Expression):
    pairs: Tuple[Tuple[Expression, Expression], ...]  # in source order

    def __str__(self):
        return "{" + ", ".join(f"{key}: {value}" for key, value in self.pairs) + "}"


# statements

@dataclass(frozen=True)
class LetStatement(Statement):
    name: Identifier
    value: Expression

    def __str__(self):
        return f"{self.token_literal()} {self.name} = {self.value};"


@dataclass(frozen=True)
class ReturnStatement(Statement):
    value: Optional[Expression] = None

    def __str__(self):
        if self.value is None:
            return f"{self.token_literal()};"
        return f"{self.token_literal()} {self.value};"


@dataclass(frozen=True)
class ExpressionStatement(Statement):
    expression: Expression

    def __str__(self):
        return str(self.expression)
