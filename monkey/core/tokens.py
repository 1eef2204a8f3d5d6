"""Token kinds and the token record shared by the lexer and the parser.

The value of each TokenKind is the name used for it in parser diagnostics, so an error about a missing ")" reads
"expected next token to be ), got { instead".
"""

from enum import Enum
from typing import NamedTuple


class TokenKind(Enum):
    ILLEGAL = "ILLEGAL"
    EOF = "EOF"

    # identifiers + literals
    IDENT = "IDENT"
    INT = "INT"
    STRING = "STRING"

    # operators
    ASSIGN = "="
    PLUS = "+"
    MINUS = "-"
    BANG = "!"
    ASTERISK = "*"
    SLASH = "/"
    LT = "<"
    GT = ">"
    EQ = "=="
    NOT_EQ = "!="

    # delimiters
    COMMA = ","
    SEMICOLON = ";"
    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"
    LBRACKET = "["
    RBRACKET = "]"

    # keywords
    FUNCTION = "FUNCTION"
    LET = "LET"
    TRUE = "TRUE"
    FALSE = "FALSE"
    IF = "IF"
    ELSE = "ELSE"
    RETURN = "RETURN"

    def __str__(self):
        return self.value


class Token(NamedTuple):
    kind: TokenKind
    literal: str


KEYWORDS = {
    "fn": TokenKind.FUNCTION,
    "let": TokenKind.LET,
    "true": TokenKind.TRUE,
    "false": TokenKind.FALSE,
    "if": TokenKind.IF,
    "else": TokenKind.ELSE,
    "return": TokenKind.RETURN,
}

EOF = Token(TokenKind.EOF, "")


def lookup_ident(ident):
    """Returns the keyword kind for ident, or IDENT if ident is not reserved."""
    return KEYWORDS.get(ident, TokenKind.IDENT)
