"""Pratt (top-down operator precedence) parser for the Monkey language.

Every token kind that can begin an expression has a prefix parse method, and every token kind that can continue one
has an infix parse method plus a precedence level. parse_expression applies the prefix method for the current token
and then keeps folding the expression parsed so far into infix methods for as long as the next token binds tighter
than the caller's precedence. Equal precedence does not bind tighter, so binary operators associate to the left.

The parser never raises on bad input. Diagnostics are collected in Parser.errors; a statement that fails to parse is
dropped and parsing resumes after it.
"""

from enum import IntEnum

from monkey.core.ast import (ArrayLiteral, BlockStatement, BooleanLiteral, CallExpression, ExpressionStatement,
                             FunctionLiteral, Identifier, IfExpression, IndexExpression, InfixExpression,
                             IntegerLiteral, LetStatement, PrefixExpression, Program, ReturnStatement, StringLiteral)
from monkey.core.tokens import EOF, TokenKind


class Precedence(IntEnum):
    LOWEST = 1
    EQUALS = 2       # ==
    LESSGREATER = 3  # > or <
    SUM = 4          # +
    PRODUCT = 5      # *
    PREFIX = 6       # -x or !x
    CALL = 7         # fn(x)
    INDEX = 8        # array[index]


PRECEDENCES = {
    TokenKind.EQ: Precedence.EQUALS,
    TokenKind.NOT_EQ: Precedence.EQUALS,
    TokenKind.LT: Precedence.LESSGREATER,
    TokenKind.GT: Precedence.LESSGREATER,
    TokenKind.PLUS: Precedence.SUM,
    TokenKind.MINUS: Precedence.SUM,
    TokenKind.SLASH: Precedence.PRODUCT,
    TokenKind.ASTERISK: Precedence.PRODUCT,
    TokenKind.LPAREN: Precedence.CALL,
    TokenKind.LBRACKET: Precedence.INDEX,
}


class Parser:
    """Builds a Program from a token stream, using the current token and one token of lookahead."""

    def __init__(self, tokens):
        self._tokens = iter(tokens)
        self.errors = []

        self.prefix_parse_fns = {}
        self.infix_parse_fns = {}

        self.register_prefix(TokenKind.IDENT, self.parse_identifier)
        self.register_prefix(TokenKind.INT, self.parse_integer_literal)
        self.register_prefix(TokenKind.STRING, self.parse_string_literal)
        self.register_prefix(TokenKind.TRUE, self.parse_boolean)
        self.register_prefix(TokenKind.FALSE, self.parse_boolean)
        self.register_prefix(TokenKind.LBRACKET, self.parse_array_literal)
        self.register_prefix(TokenKind.LPAREN, self.parse_grouped_expression)
        self.register_prefix(TokenKind.BANG, self.parse_prefix_expression)
        self.register_prefix(TokenKind.MINUS, self.parse_prefix_expression)
        self.register_prefix(TokenKind.IF, self.parse_if_expression)
        self.register_prefix(TokenKind.FUNCTION, self.parse_function_literal)

        for kind in (TokenKind.PLUS, TokenKind.MINUS, TokenKind.ASTERISK, TokenKind.SLASH,
                     TokenKind.EQ, TokenKind.NOT_EQ, TokenKind.LT, TokenKind.GT):
            self.register_infix(kind, self.parse_infix_expression)
        self.register_infix(TokenKind.LPAREN, self.parse_call_expression)
        self.register_infix(TokenKind.LBRACKET, self.parse_index_expression)

        self.depth = 0  # number of "{" open at the current token
        self.cur_token = EOF
        self.peek_token = self._pull()
        self.next_token()

    def register_prefix(self, kind, fn):
        self.prefix_parse_fns[kind] = fn

    def register_infix(self, kind, fn):
        self.infix_parse_fns[kind] = fn

    # ---------------------------------------------------------------------------------------------------- cursor

    def _pull(self):
        return next(self._tokens, EOF)

    def next_token(self):
        self.cur_token = self.peek_token
        self.peek_token = self._pull()

        if self.cur_token_is(TokenKind.LBRACE):
            self.depth += 1
        elif self.cur_token_is(TokenKind.RBRACE):
            self.depth -= 1

    def cur_token_is(self, kind):
        return self.cur_token.kind is kind

    def peek_token_is(self, kind):
        return self.peek_token.kind is kind

    def expect_peek(self, kind):
        """Advances if the next token is of kind; otherwise records a diagnostic and stays put."""
        if self.peek_token_is(kind):
            self.next_token()
            return True
        self.errors.append(f"expected next token to be {kind}, got {self.peek_token.kind} instead")
        return False

    def peek_precedence(self):
        return PRECEDENCES.get(self.peek_token.kind, Precedence.LOWEST)

    def cur_precedence(self):
        return PRECEDENCES.get(self.cur_token.kind, Precedence.LOWEST)

    # ------------------------------------------------------------------------------------------------ statements

    def parse_program(self):
        """Parses statements until EOF. Failed statements are left out; see self.errors for why."""
        return Program(self._parse_statements(TokenKind.EOF, 0))

    def _parse_statements(self, end, depth):
        """Parses statements up to end. depth is self.depth once the end token that closes this run is current."""
        statements = []
        while not self.cur_token_is(end) and not self.cur_token_is(TokenKind.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
            elif self.cur_token_is(end) and self.depth == depth:
                break  # the broken statement ran into the closing "}" of this block
            else:
                self._synchronize()
            self.next_token()
        return tuple(statements)

    def _synchronize(self):
        """Skips the rest of a broken statement: stops on the next ";" outside any nested block, just before the
        "}" that closes the block being parsed, or at EOF.
        """
        depth = 0
        while not self.cur_token_is(TokenKind.EOF):
            if self.cur_token_is(TokenKind.LBRACE):
                depth += 1
            elif self.cur_token_is(TokenKind.RBRACE) and depth > 0:
                depth -= 1

            if depth == 0 and (self.cur_token_is(TokenKind.SEMICOLON) or self.peek_token_is(TokenKind.RBRACE)):
                return
            self.next_token()

    def parse_statement(self):
        if self.cur_token_is(TokenKind.LET):
            return self.parse_let_statement()
        elif self.cur_token_is(TokenKind.RETURN):
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self):
        token = self.cur_token

        if not self.expect_peek(TokenKind.IDENT):
            return None
        name = Identifier(self.cur_token, self.cur_token.literal)

        if not self.expect_peek(TokenKind.ASSIGN):
            return None

        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None

        if self.peek_token_is(TokenKind.SEMICOLON):
            self.next_token()
        return LetStatement(token, name, value)

    def parse_return_statement(self):
        token = self.cur_token

        self.next_token()
        return_value = self.parse_expression(Precedence.LOWEST)
        if return_value is None:
            return None

        if self.peek_token_is(TokenKind.SEMICOLON):
            self.next_token()
        return ReturnStatement(token, return_value)

    def parse_expression_statement(self):
        token = self.cur_token

        expression = self.parse_expression(Precedence.LOWEST)
        if expression is None:
            return None

        if self.peek_token_is(TokenKind.SEMICOLON):
            self.next_token()
        return ExpressionStatement(token, expression)

    def parse_block_statement(self):
        """Parses "{" <statement>* "}" with the current token on "{". Leaves the current token on "}"."""
        token = self.cur_token
        closing_depth = self.depth - 1
        self.next_token()

        statements = self._parse_statements(TokenKind.RBRACE, closing_depth)
        if not self.cur_token_is(TokenKind.RBRACE):
            self.errors.append(f"expected next token to be {TokenKind.RBRACE}, got {self.cur_token.kind} instead")
            return None
        return BlockStatement(token, statements)

    # ----------------------------------------------------------------------------------------------- expressions

    def parse_expression(self, precedence):
        """Precedence-climbing core: returns None (with a diagnostic recorded) if any part of the expression fails."""
        prefix = self.prefix_parse_fns.get(self.cur_token.kind)
        if prefix is None:
            self.errors.append(f"no prefix parse function for {self.cur_token.kind} found")
            return None

        left = prefix()
        while left is not None and not self.peek_token_is(TokenKind.SEMICOLON) and precedence < self.peek_precedence():
            infix = self.infix_parse_fns.get(self.peek_token.kind)
            if infix is None:
                return left

            self.next_token()
            left = infix(left)

        return left

    def parse_identifier(self):
        return Identifier(self.cur_token, self.cur_token.literal)

    def parse_integer_literal(self):
        try:
            value = int(self.cur_token.literal)
        except ValueError:
            self.errors.append(f"could not parse {self.cur_token.literal} as integer")
            return None
        return IntegerLiteral(self.cur_token, value)

    def parse_string_literal(self):
        return StringLiteral(self.cur_token, self.cur_token.literal)

    def parse_boolean(self):
        return BooleanLiteral(self.cur_token, self.cur_token_is(TokenKind.TRUE))

    def parse_array_literal(self):
        token = self.cur_token
        elements = self.parse_expression_list(TokenKind.RBRACKET)
        if elements is None:
            return None
        return ArrayLiteral(token, elements)

    def parse_grouped_expression(self):
        self.next_token()

        expression = self.parse_expression(Precedence.LOWEST)
        if expression is None or not self.expect_peek(TokenKind.RPAREN):
            return None
        return expression

    def parse_prefix_expression(self):
        token = self.cur_token

        self.next_token()
        right = self.parse_expression(Precedence.PREFIX)
        if right is None:
            return None
        return PrefixExpression(token, token.literal, right)

    def parse_infix_expression(self, left):
        token = self.cur_token
        precedence = self.cur_precedence()

        self.next_token()
        right = self.parse_expression(precedence)
        if right is None:
            return None
        return InfixExpression(token, left, token.literal, right)

    def parse_if_expression(self):
        token = self.cur_token

        if not self.expect_peek(TokenKind.LPAREN):
            return None
        self.next_token()
        condition = self.parse_expression(Precedence.LOWEST)
        if condition is None or not self.expect_peek(TokenKind.RPAREN):
            return None

        if not self.expect_peek(TokenKind.LBRACE):
            return None
        consequence = self.parse_block_statement()
        if consequence is None:
            return None

        alternative = None
        if self.peek_token_is(TokenKind.ELSE):
            self.next_token()
            if not self.expect_peek(TokenKind.LBRACE):
                return None
            alternative = self.parse_block_statement()
            if alternative is None:
                return None

        return IfExpression(token, condition, consequence, alternative)

    def parse_function_literal(self):
        token = self.cur_token

        if not self.expect_peek(TokenKind.LPAREN):
            return None
        parameters = self.parse_function_parameters()
        if parameters is None:
            return None

        if not self.expect_peek(TokenKind.LBRACE):
            return None
        body = self.parse_block_statement()
        if body is None:
            return None

        return FunctionLiteral(token, parameters, body)

    def parse_function_parameters(self):
        """Parses IDENT ("," IDENT)* ")" with the current token on "(". Returns None on a malformed list."""
        parameters = []

        if self.peek_token_is(TokenKind.RPAREN):
            self.next_token()
            return ()

        if not self.expect_peek(TokenKind.IDENT):
            return None
        parameters.append(Identifier(self.cur_token, self.cur_token.literal))

        while self.peek_token_is(TokenKind.COMMA):
            self.next_token()
            if not self.expect_peek(TokenKind.IDENT):
                return None
            parameters.append(Identifier(self.cur_token, self.cur_token.literal))

        if not self.expect_peek(TokenKind.RPAREN):
            return None
        return tuple(parameters)

    def parse_call_expression(self, function):
        token = self.cur_token
        arguments = self.parse_expression_list(TokenKind.RPAREN)
        if arguments is None:
            return None
        return CallExpression(token, function, arguments)

    def parse_index_expression(self, left):
        token = self.cur_token

        self.next_token()
        index = self.parse_expression(Precedence.LOWEST)
        if index is None or not self.expect_peek(TokenKind.RBRACKET):
            return None
        return IndexExpression(token, left, index)

    def parse_expression_list(self, end):
        """Parses <expr> ("," <expr>)* followed by end, with the current token on the opening bracket."""
        expressions = []

        if self.peek_token_is(end):
            self.next_token()
            return ()

        self.next_token()
        expression = self.parse_expression(Precedence.LOWEST)
        if expression is None:
            return None
        expressions.append(expression)

        while self.peek_token_is(TokenKind.COMMA):
            self.next_token()
            self.next_token()
            expression = self.parse_expression(Precedence.LOWEST)
            if expression is None:
                return None
            expressions.append(expression)

        if not self.expect_peek(end):
            return None
        return tuple(expressions)


def parse_program(tokens):
    """Parses tokens into a (Program, errors) pair. errors is empty iff the whole input parsed."""
    parser = Parser(tokens)
    program = parser.parse_program()
    return program, parser.errors
