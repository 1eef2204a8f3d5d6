"""Session control for the monkey host: runs a .monkey file or backs the interactive shell.

A session owns one root Environment for its whole lifetime, so every entry sees the bindings made by the entries
before it. An entry is a complete program: a whole file in file mode, or one shell entry, which spans as many lines
as it takes to close every "(", "[" and "{" it opens.
"""

from monkey.core.lexer import Lexer
from monkey.core.environment import Environment
from monkey.core.tokens import TokenKind
from monkey.core.values import Error
from monkey.interpreter import parse, evaluate
from monkey.lang.error import MonkeyError, escape


OPENERS = {TokenKind.LPAREN, TokenKind.LBRACKET, TokenKind.LBRACE}
CLOSERS = {TokenKind.RPAREN, TokenKind.RBRACKET, TokenKind.RBRACE}


class Session:
    """Governs a monkey session: parses entries as they are added and evaluates them, in order, on run."""
    SH_FILE = "<stdin>"  # command-line interpreter filename

    def __init__(self, error_handler, path, cmd_line):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path            # used for error messages
        self.cmd_line = cmd_line    # whether or not in command-line mode

        self.env = Environment()    # root scope shared by every entry
        self.sources = {}           # dict of line num: entry source, for error messages
        self.to_exec = {}           # dict of line num: Programs to execute
        self.results = []           # values of executed entries, oldest first

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r") as file:
                    source = file.read()
            except OSError:
                raise MonkeyError("'{}' could not be opened", path)

            if source.strip():
                self.add(source)  # the whole file is one program

        elif not cmd_line:
            raise MonkeyError("'{}' is a reserved filename", Session.SH_FILE)

    @staticmethod
    def open_brackets(source):
        """Number of brackets opened but not closed in source. Counted on tokens, so brackets in strings are ignored.
        """
        balance = 0
        for token in Lexer(source):
            if token.kind in OPENERS:
                balance += 1
            elif token.kind in CLOSERS:
                balance -= 1
        return balance

    @staticmethod
    def preprocess_line(line, prev=""):
        """Joins a shell line onto prev, the unfinished entry so far (if any). Returns the joined source and whether
        the entry still has open brackets and needs more lines.
        """
        line = line.rstrip()
        source = f"{prev}\n{line}" if prev else line
        return source, Session.open_brackets(source) > 0

    def add(self, source, line_num=1):
        """Parses source and queues it for execution. Raises a MonkeyError listing every syntax error."""
        if not source.strip():
            raise ValueError("cannot add an empty entry")

        self.error_handler.register_line(self.path, source, line_num)  # in case error is raised

        program, errors = parse(source)
        if errors:
            noun = "error" if len(errors) == 1 else "errors"
            details = "".join(f"\n  {escape(error)}" for error in errors)
            raise MonkeyError(f"{len(errors)} syntax {noun} in entry starting '{{}}':{details}",
                              source.strip().splitlines()[0])

        self.sources[line_num] = source
        self.to_exec[line_num] = program

        self.error_handler.remove_line(self.path)  # error was not raised

    def run(self):
        """Evaluates queued entries in line order against the session's root environment. An entry that evaluates to
        an Error value is raised as a MonkeyError; entries before it keep their effects.
        """
        for line_num, program in sorted(self.to_exec.items()):
            self.error_handler.register_line(self.path, self.sources[line_num], line_num)

            try:
                result = evaluate(program, self.env)
            finally:
                if self.cmd_line:
                    del self.to_exec[line_num]

            if isinstance(result, Error):
                raise MonkeyError(escape(result.message))

            self.results.append(result)
            self.error_handler.remove_line(self.path)

        if not self.cmd_line:
            self.to_exec = {}

    def pop(self):
        """Removes and returns the most recent result."""
        return self.results.pop()
