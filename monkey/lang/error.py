"""Error reporting for the monkey host (file runner and shell). The language core never raises for bad programs:
syntax errors come back as parser diagnostics and runtime errors as Error values. The session turns those into
MonkeyErrors, and ErrorHandler prints them. Any other exception that reaches ErrorHandler is an internal issue.
"""

import sys

from termcolor import colored


def escape(text):
    """Escapes braces in text so it can be embedded in a MonkeyError message template."""
    return text.replace("{", "{{").replace("}", "}}")


class MonkeyError(Exception):
    """Templates an error/warning message. Each '{}' in msg is filled with the matching entry of exprs, in bold."""

    def __init__(self, msg, exprs=None, internal=False):
        if exprs is None:
            exprs = []
        if isinstance(exprs, str):
            exprs = [exprs]

        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))
        self.internal = internal

        super().__init__(self.msg)


class ErrorHandler:
    """Context manager that reports MonkeyErrors (and converts stray Python errors into them) instead of letting
    them propagate. Exits the process on the first error if fatal.
    """
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers the source being processed. Should be called prior to Session add/run."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Clears the source registered for path. Should be called after a successful Session add/run."""
        self.traceback[path] = (None, None)

    def _location(self):
        """Returns 'file:line: ' for the innermost registered line, or '' if no line is registered."""
        for file, (line, line_num) in reversed(list(self.traceback.items())):
            if line is not None:
                return f"{file}:{line_num}: "
        return ""

    def warn(self, *args, **kwargs):
        """Generates and prints a warning message based on args (see MonkeyError)."""
        error = MonkeyError(*args, **kwargs)

        warning_msg = colored(self._location(), attrs=["bold"])
        warning_msg += colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + error.msg
        print(warning_msg)

    def throw(self, error):
        """Prints error, a MonkeyError, preceded by the registered traceback. Exits with status 1 if fatal."""
        error_msg = ""
        lines = 0
        for file, (line, line_num) in self.traceback.items():  # insertion order: outermost file first
            if line:
                error_msg += f"  File '{file}', line {line_num}:\n"
                first, *rest = line.splitlines()
                error_msg += f"    {first}\n" + ("    ...\n" if rest else "")  # a whole file is one entry
                lines += 1

        if lines:
            error_msg = "Traceback:\n" + error_msg

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        if self.fatal:
            sys.exit(1)
        self.traceback = {path: (None, None) for path in self.traceback}

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(MonkeyError("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(MonkeyError("maximum recursion depth exceeded during evaluation (see --recursion-limit)"))
        elif exc_type is MonkeyError:
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(MonkeyError(escape(f"unknown error: '{exc_type.__name__}: {exc_val}'"), internal=True))
            do_exit = True

        return not do_exit
