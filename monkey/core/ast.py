"""Abstract syntax tree for the Monkey language.

Syntactic grammar, loosely (precedence is handled by the parser, see parser.py):

```
<program>    ::= <statement>*
<statement>  ::= "let" <ident> "=" <expr> [";"]
               | "return" <expr> [";"]
               | <expr> [";"]
<block>      ::= "{" <statement>* "}"
<expr>       ::= <ident> | <int> | <string> | "true" | "false"
               | "[" [<expr> ("," <expr>)*] "]"
               | <prefix-op> <expr> | <expr> <infix-op> <expr> | "(" <expr> ")"
               | "if" "(" <expr> ")" <block> ["else" <block>]
               | "fn" "(" [<ident> ("," <ident>)*] ")" <block>
               | <expr> "(" [<expr> ("," <expr>)*] ")"
               | <expr> "[" <expr> "]"
```

Nodes are frozen dataclasses: the parser builds each one exactly once with all of its children, and nothing
mutates them afterwards. str(node) renders the fully parenthesized form used by tests and by `monkey --ast`.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Tuple

from monkey.core.tokens import Token


@dataclass(frozen=True)
class Node(ABC):
    """Superclass of every AST node."""

    def token_literal(self):
        """Literal of the token this node was parsed from."""
        return self.token.literal

    @abstractmethod
    def __str__(self):
        """Textual form of this node."""


class Statement(Node):
    """Superclass of nodes that appear directly in a program or block."""


class Expression(Node):
    """Superclass of nodes that produce a value."""


def variants(cls=Node):
    """Returns every concrete node class below cls, found by walking subclasses down to the leaves."""
    found = []
    for subclass in cls.__subclasses__():
        if subclass.__subclasses__():
            found.extend(variants(subclass))
        else:
            found.append(subclass)
    return found


@dataclass(frozen=True)
class Program(Node):
    statements: Tuple[Statement, ...] = ()

    def token_literal(self):
        if self.statements:
            return self.statements[0].token_literal()
        return ""

    def __str__(self):
        return "".join(str(statement) for statement in self.statements)


@dataclass(frozen=True)
class Identifier(Expression):
    token: Token
    value: str

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class IntegerLiteral(Expression):
    token: Token
    value: int

    def __str__(self):
        return self.token.literal


@dataclass(frozen=True)
class BooleanLiteral(Expression):
    token: Token
    value: bool

    def __str__(self):
        return self.token.literal


@dataclass(frozen=True)
class StringLiteral(Expression):
    token: Token
    value: str

    def __str__(self):
        return self.token.literal


@dataclass(frozen=True)
class ArrayLiteral(Expression):
    token: Token
    elements: Tuple[Expression, ...]

    def __str__(self):
        return f"[{', '.join(str(element) for element in self.elements)}]"


@dataclass(frozen=True)
class PrefixExpression(Expression):
    token: Token
    operator: str
    right: Expression

    def __str__(self):
        return f"({self.operator}{self.right})"


@dataclass(frozen=True)
class InfixExpression(Expression):
    token: Token
    left: Expression
    operator: str
    right: Expression

    def __str__(self):
        return f"({self.left} {self.operator} {self.right})"


@dataclass(frozen=True)
class LetStatement(Statement):
    token: Token
    name: Identifier
    value: Expression

    def __str__(self):
        return f"{self.token_literal()} {self.name} = {self.value};"


@dataclass(frozen=True)
class ReturnStatement(Statement):
    token: Token
    return_value: Expression

    def __str__(self):
        return f"{self.token_literal()} {self.return_value};"


@dataclass(frozen=True)
class ExpressionStatement(Statement):
    token: Token
    expression: Expression

    def __str__(self):
        return str(self.expression)


@dataclass(frozen=True)
class BlockStatement(Statement):
    token: Token
    statements: Tuple[Statement, ...]

    def __str__(self):
        return "".join(str(statement) for statement in self.statements)


@dataclass(frozen=True)
class IfExpression(Expression):
    token: Token
    condition: Expression
    consequence: BlockStatement
    alternative: Optional[BlockStatement] = None

    def __str__(self):
        result = f"if {self.condition} {self.consequence}"
        if self.alternative is not None:
            result += f"else {self.alternative}"
        return result


@dataclass(frozen=True)
class FunctionLiteral(Expression):
    token: Token
    parameters: Tuple[Identifier, ...]
    body: BlockStatement

    def __str__(self):
        return f"{self.token_literal()}({', '.join(str(param) for param in self.parameters)}) {self.body}"


@dataclass(frozen=True)
class CallExpression(Expression):
    token: Token
    function: Expression
    arguments: Tuple[Expression, ...]

    def __str__(self):
        return f"{self.function}({', '.join(str(arg) for arg in self.arguments)})"


@dataclass(frozen=True)
class IndexExpression(Expression):
    token: Token
    left: Expression
    index: Expression

    def __str__(self):
        return f"({self.left}[{self.index}])"
