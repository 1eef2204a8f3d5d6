"""Built-in functions. The evaluator falls back to this table when a name is not bound anywhere in the environment
chain, so a program can shadow any of them with a let binding.

Built-ins report misuse by returning an Error value, exactly like the evaluator does. Array built-ins never mutate
their argument: push and rest return new arrays.
"""

from monkey.core.values import NULL, Array, BuiltIn, Error, Integer, String


def _arity(name, want):
    """Decorator that returns an Error instead of calling fn when it gets the wrong number of arguments."""

    def decorator(fn):
        def checked(*args):
            if len(args) != want:
                return Error(f"wrong number of arguments. got={len(args)}, want={want}")
            return fn(*args)

        return BuiltIn(name, checked)

    return decorator


def _expect_array(name, value):
    if not isinstance(value, Array):
        return Error(f"argument to '{name}' must be {Array.type}, got {value.type}")
    return None


@_arity("len", 1)
def builtin_len(value):
    if isinstance(value, String):
        return Integer(len(value.value))
    elif isinstance(value, Array):
        return Integer(len(value.elements))
    return Error(f"argument to 'len' not supported, got {value.type}")


@_arity("first", 1)
def builtin_first(array):
    error = _expect_array("first", array)
    if error is not None:
        return error
    return array.elements[0] if array.elements else NULL


@_arity("last", 1)
def builtin_last(array):
    error = _expect_array("last", array)
    if error is not None:
        return error
    return array.elements[-1] if array.elements else NULL


@_arity("rest", 1)
def builtin_rest(array):
    error = _expect_array("rest", array)
    if error is not None:
        return error
    return Array(array.elements[1:]) if array.elements else NULL


@_arity("push", 2)
def builtin_push(array, value):
    error = _expect_array("push", array)
    if error is not None:
        return error
    return Array(array.elements + [value])


BUILTINS = {builtin.name: builtin for builtin in (builtin_len, builtin_first, builtin_last, builtin_rest, builtin_push)}
