"""Monkey interpreter: a front end and tree-walking executor for the Monkey language.

Basic program flow:
    1. Lexer (core/lexer.py): source text -> tokens, produced lazily
    2. Parser (core/parser.py): tokens -> Program AST plus a list of syntax error messages. Parsing recovers after a
       bad statement, so one mistake does not hide the rest
    3. Evaluator (core/evaluator.py): walks the AST against an Environment (core/environment.py) and produces a
       Value (core/values.py). Runtime errors are Error values, not exceptions

The lang/ package wraps this for the command line: sessions, the interactive shell and error reporting.
"""

from monkey.core.environment import Environment
from monkey.core.evaluator import evaluate
from monkey.core.lexer import Lexer
from monkey.core.parser import parse_program


def tokenize(source):
    """Returns the tokens of source, ending with EOF."""
    return list(Lexer(source))


def parse(source):
    """Returns (Program, errors) for source."""
    return parse_program(Lexer(source))


def run(source, env=None):
    """Parses and evaluates source in env (a fresh root Environment if None). Returns (value, errors); value is None
    when there are syntax errors, since a partially parsed program is not executed.
    """
    program, errors = parse(source)
    if errors:
        return None, errors
    return evaluate(program, Environment() if env is None else env), []
