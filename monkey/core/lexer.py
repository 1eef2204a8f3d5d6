"""Scanner for the Monkey language. Turns source text into tokens on demand.

Lexical grammar, loosely:

```
<ident>   ::= (<letter> | "_") (<letter> | <digit> | "_")*   ; keywords: fn let true false if else return
<int>     ::= <digit>+
<string>  ::= '"' <char>* '"'                                 ; no escapes, unterminated runs to end of input
<op>      ::= "=" | "+" | "-" | "!" | "*" | "/" | "<" | ">" | "==" | "!="
<delim>   ::= "," | ";" | "(" | ")" | "{" | "}" | "[" | "]"
```

Anything else is returned as an ILLEGAL token; whitespace only separates tokens.
"""

from monkey.core.tokens import EOF, Token, TokenKind, lookup_ident


class Lexer:
    """Lazy token producer. next_token keeps returning EOF once the input is exhausted."""
    SINGLE_CHARS = {
        "=": TokenKind.ASSIGN,
        "+": TokenKind.PLUS,
        "-": TokenKind.MINUS,
        "!": TokenKind.BANG,
        "*": TokenKind.ASTERISK,
        "/": TokenKind.SLASH,
        "<": TokenKind.LT,
        ">": TokenKind.GT,
        ",": TokenKind.COMMA,
        ";": TokenKind.SEMICOLON,
        "(": TokenKind.LPAREN,
        ")": TokenKind.RPAREN,
        "{": TokenKind.LBRACE,
        "}": TokenKind.RBRACE,
        "[": TokenKind.LBRACKET,
        "]": TokenKind.RBRACKET,
    }
    DOUBLE_CHARS = {
        "==": TokenKind.EQ,
        "!=": TokenKind.NOT_EQ,
    }

    def __init__(self, source):
        self.source = source
        self.position = 0

    @property
    def char(self):
        """Character under the cursor, or None at end of input."""
        if self.position >= len(self.source):
            return None
        return self.source[self.position]

    def peek_char(self):
        if self.position + 1 >= len(self.source):
            return None
        return self.source[self.position + 1]

    def next_token(self):
        self._skip_whitespace()

        char = self.char
        if char is None:
            return EOF

        if char + (self.peek_char() or "") in Lexer.DOUBLE_CHARS:
            literal = self.source[self.position:self.position + 2]
            self.position += 2
            return Token(Lexer.DOUBLE_CHARS[literal], literal)

        if char in Lexer.SINGLE_CHARS:
            self.position += 1
            return Token(Lexer.SINGLE_CHARS[char], char)

        if char == "\"":
            return Token(TokenKind.STRING, self._read_string())

        if Lexer.is_letter(char):
            ident = self._read_while(lambda c: Lexer.is_letter(c) or c.isdigit())
            return Token(lookup_ident(ident), ident)

        if char.isdigit():
            return Token(TokenKind.INT, self._read_while(str.isdigit))

        self.position += 1
        return Token(TokenKind.ILLEGAL, char)

    @staticmethod
    def is_letter(char):
        return char.isalpha() or char == "_"

    def _skip_whitespace(self):
        while self.char is not None and self.char.isspace():
            self.position += 1

    def _read_while(self, predicate):
        start = self.position
        while self.char is not None and predicate(self.char):
            self.position += 1
        return self.source[start:self.position]

    def _read_string(self):
        self.position += 1  # opening quote
        contents = self._read_while(lambda c: c != "\"")
        if self.char is not None:
            self.position += 1  # closing quote
        return contents

    def __iter__(self):
        """Yields tokens up to and including the first EOF."""
        while True:
            token = self.next_token()
            yield token
            if token.kind is TokenKind.EOF:
                return
