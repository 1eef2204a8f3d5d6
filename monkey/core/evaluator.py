"""Tree-walking evaluator for the Monkey language.

evaluate(node, env) dispatches on the node's class through EVALUATORS, which must cover every AST variant (checked
when this module is imported). Evaluation order is strictly left to right and depth first: statements in sequence,
left operand before right, callee before arguments, arguments as written.

Failures never raise. They become Error values that every step returns as soon as it sees one, so the first error
in evaluation order is the one the host gets. `return` works the same way: a ReturnSignal is passed up through
enclosing blocks untouched and unwrapped by the function call (or the program) that owns it.
"""

from monkey.core import ast
from monkey.core.builtins import BUILTINS
from monkey.core.values import (NULL, Array, BuiltIn, Error, Function, Integer, ReturnSignal, String, is_error,
                                is_truthy, native_bool)


def evaluate(node, env):
    """Evaluates node in env and returns the resulting Value. Objects that are not AST nodes evaluate to NULL."""
    evaluator = EVALUATORS.get(type(node))
    if evaluator is None:
        return NULL
    return evaluator(node, env)


# ------------------------------------------------------------------------------------------------------- statements

def eval_program(program, env):
    result = NULL
    for statement in program.statements:
        result = evaluate(statement, env)

        if isinstance(result, ReturnSignal):
            return result.value
        elif is_error(result):
            return result
    return result


def eval_block_statement(block, env):
    """Like eval_program, but a ReturnSignal is handed up as is so it can escape any number of nested blocks."""
    result = NULL
    for statement in block.statements:
        result = evaluate(statement, env)

        if isinstance(result, (ReturnSignal, Error)):
            return result
    return result


def eval_expression_statement(statement, env):
    return evaluate(statement.expression, env)


def eval_let_statement(statement, env):
    value = evaluate(statement.value, env)
    if is_error(value):
        return value
    return env.set(statement.name.value, value)


def eval_return_statement(statement, env):
    value = evaluate(statement.return_value, env)
    if is_error(value):
        return value
    return ReturnSignal(value)


# ---------------------------------------------------------------------------------------------------------- literals

def eval_integer_literal(node, env):
    return Integer(node.value)


def eval_boolean_literal(node, env):
    return native_bool(node.value)


def eval_string_literal(node, env):
    return String(node.value)


def eval_array_literal(node, env):
    elements = eval_expressions(node.elements, env)
    if is_error(elements):
        return elements
    return Array(elements)


def eval_function_literal(node, env):
    return Function([param.value for param in node.parameters], node.body, env)


def eval_identifier(node, env):
    value = env.get(node.value)
    if value is not None:
        return value

    builtin = BUILTINS.get(node.value)
    if builtin is not None:
        return builtin

    return Error(f"identifier not found: {node.value}")


def eval_expressions(expressions, env):
    """Evaluates expressions in order. Returns the list of values, or the first Error encountered."""
    values = []
    for expression in expressions:
        value = evaluate(expression, env)
        if is_error(value):
            return value
        values.append(value)
    return values


# --------------------------------------------------------------------------------------------------------- operators

def eval_prefix_expression(node, env):
    right = evaluate(node.right, env)
    if is_error(right):
        return right

    if node.operator == "!":
        return native_bool(not is_truthy(right))
    elif node.operator == "-":
        if not isinstance(right, Integer):
            return Error(f"unknown operator: -{right.type}")
        return Integer(-right.value)
    return Error(f"unknown operator: {node.operator}{right.type}")


def eval_infix_expression(node, env):
    left = evaluate(node.left, env)
    if is_error(left):
        return left

    right = evaluate(node.right, env)
    if is_error(right):
        return right

    return apply_infix(node.operator, left, right)


def apply_infix(operator, left, right):
    """Applies a binary operator to two already evaluated operands."""
    if isinstance(left, Integer) and isinstance(right, Integer):
        return apply_integer_infix(operator, left, right)
    elif isinstance(left, String) and isinstance(right, String):
        return apply_string_infix(operator, left, right)
    elif operator == "==":
        return native_bool(left is right)
    elif operator == "!=":
        return native_bool(left is not right)
    elif left.type != right.type:
        return Error(f"type mismatch: {left.type} {operator} {right.type}")
    return Error(f"unknown operator: {left.type} {operator} {right.type}")


def apply_integer_infix(operator, left, right):
    a, b = left.value, right.value

    if operator == "+":
        return Integer(a + b)
    elif operator == "-":
        return Integer(a - b)
    elif operator == "*":
        return Integer(a * b)
    elif operator == "/":
        if b == 0:
            return Error("division by zero")
        quotient = abs(a) // abs(b)  # truncate toward zero, not floor
        return Integer(quotient if (a < 0) == (b < 0) else -quotient)
    elif operator == "<":
        return native_bool(a < b)
    elif operator == ">":
        return native_bool(a > b)
    elif operator == "==":
        return native_bool(a == b)
    elif operator == "!=":
        return native_bool(a != b)
    return Error(f"unknown operator: {left.type} {operator} {right.type}")


def apply_string_infix(operator, left, right):
    if operator != "+":
        return Error(f"unknown operator: {left.type} {operator} {right.type}")
    return String(left.value + right.value)


# ------------------------------------------------------------------------------------------------------ control flow

def eval_if_expression(node, env):
    condition = evaluate(node.condition, env)
    if is_error(condition):
        return condition

    if is_truthy(condition):
        return evaluate(node.consequence, env)
    elif node.alternative is not None:
        return evaluate(node.alternative, env)
    return NULL


def eval_call_expression(node, env):
    function = evaluate(node.function, env)
    if is_error(function):
        return function

    arguments = eval_expressions(node.arguments, env)
    if is_error(arguments):
        return arguments

    return apply_function(function, arguments)


def apply_function(function, arguments):
    """Calls a Function or BuiltIn with already evaluated arguments.

    Arity is not checked: parameters without an argument stay unbound in the call scope (reading one is an
    "identifier not found" error, unless an enclosing scope binds the same name) and surplus arguments are ignored.
    """
    if isinstance(function, Function):
        call_env = function.env.enclosed()
        for param, arg in zip(function.parameters, arguments):
            call_env.set(param, arg)

        result = evaluate(function.body, call_env)
        if isinstance(result, ReturnSignal):
            return result.value
        return result

    elif isinstance(function, BuiltIn):
        return function(*arguments)

    return Error(f"not a function: {function.type}")


def eval_index_expression(node, env):
    left = evaluate(node.left, env)
    if is_error(left):
        return left

    index = evaluate(node.index, env)
    if is_error(index):
        return index

    if isinstance(left, Array) and isinstance(index, Integer):
        if 0 <= index.value < len(left.elements):
            return left.elements[index.value]
        return NULL
    return Error(f"index operator not supported: {left.type}")


EVALUATORS = {
    ast.Program: eval_program,
    ast.BlockStatement: eval_block_statement,
    ast.ExpressionStatement: eval_expression_statement,
    ast.LetStatement: eval_let_statement,
    ast.ReturnStatement: eval_return_statement,
    ast.Identifier: eval_identifier,
    ast.IntegerLiteral: eval_integer_literal,
    ast.BooleanLiteral: eval_boolean_literal,
    ast.StringLiteral: eval_string_literal,
    ast.ArrayLiteral: eval_array_literal,
    ast.PrefixExpression: eval_prefix_expression,
    ast.InfixExpression: eval_infix_expression,
    ast.IfExpression: eval_if_expression,
    ast.FunctionLiteral: eval_function_literal,
    ast.CallExpression: eval_call_expression,
    ast.IndexExpression: eval_index_expression,
}

_missing = set(ast.variants()) - set(EVALUATORS)
if _missing:
    raise TypeError(f"no evaluator for AST node(s): {', '.join(sorted(cls.__name__ for cls in _missing))}")
