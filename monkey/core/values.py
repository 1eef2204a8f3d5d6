"""Runtime values produced by the evaluator.

Every value has a `type` name (used in error messages) and an inspect() form (used for display). ReturnSignal and
Error are control markers: the evaluator passes them up unchanged until a function call (ReturnSignal) or the host
(Error) consumes them, and never uses them as operands.

TRUE, FALSE and NULL are the only Boolean and Null instances ever created, so truthiness and ==/!= on them can be
decided by identity. No value defines structural equality.
"""

from abc import ABC, abstractmethod


class Value(ABC):
    """Superclass of all runtime values."""
    type = None

    @abstractmethod
    def inspect(self):
        """Display form of this value."""

    def __str__(self):
        return self.inspect()


class Integer(Value):
    type = "INTEGER"

    def __init__(self, value):
        self.value = value

    def inspect(self):
        return str(self.value)

    def __repr__(self):
        return f"Integer({self.value})"


class Boolean(Value):
    type = "BOOLEAN"

    def __init__(self, value):
        self.value = value

    def inspect(self):
        return "true" if self.value else "false"

    def __repr__(self):
        return f"Boolean({self.inspect()})"


class Null(Value):
    type = "NULL"

    def inspect(self):
        return "null"

    def __repr__(self):
        return "Null"


class String(Value):
    type = "STRING"

    def __init__(self, value):
        self.value = value

    def inspect(self):
        return self.value

    def __repr__(self):
        return f"String({self.value!r})"


class Array(Value):
    type = "ARRAY"

    def __init__(self, elements):
        self.elements = list(elements)

    def inspect(self):
        return f"[{', '.join(element.inspect() for element in self.elements)}]"

    def __repr__(self):
        return f"Array({self.elements!r})"


class Function(Value):
    """User-defined function. env is the scope the function literal was evaluated in, shared, not copied."""
    type = "FUNCTION"

    def __init__(self, parameters, body, env):
        self.parameters = tuple(parameters)
        self.body = body
        self.env = env

    def inspect(self):
        return f"fn({', '.join(self.parameters)}) {{ {self.body} }}"

    def __repr__(self):
        return f"Function({self.inspect()!r})"


class BuiltIn(Value):
    """Function implemented in Python. fn receives the evaluated argument values positionally."""
    type = "BUILTIN"

    def __init__(self, name, fn):
        self.name = name
        self.fn = fn

    def __call__(self, *args):
        return self.fn(*args)

    def inspect(self):
        return "builtin function"

    def __repr__(self):
        return f"BuiltIn({self.name!r})"


class ReturnSignal(Value):
    type = "RETURN_VALUE"

    def __init__(self, value):
        self.value = value

    def inspect(self):
        return self.value.inspect()

    def __repr__(self):
        return f"ReturnSignal({self.value!r})"


class Error(Value):
    type = "ERROR"

    def __init__(self, message):
        self.message = message

    def inspect(self):
        return self.message

    def __repr__(self):
        return f"Error({self.message!r})"


TRUE = Boolean(True)
FALSE = Boolean(False)
NULL = Null()


def native_bool(value):
    """Maps a Python bool onto the canonical TRUE/FALSE instances."""
    return TRUE if value else FALSE


def is_error(value):
    return isinstance(value, Error)


def is_truthy(value):
    """NULL and FALSE are falsy; everything else, Integer 0 and the empty string included, is truthy."""
    return value is not NULL and value is not FALSE
