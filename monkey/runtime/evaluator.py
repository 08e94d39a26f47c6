"""Tree-walking evaluator for the Monkey language.

evaluate(node, env) dispatches on the node's class and returns a MonkeyObject. Runtime errors are values, not
Python exceptions: an Error produced anywhere is handed straight back up by every enclosing evaluation until it
becomes the result of the whole program. A return statement produces a ReturnValue, which every enclosing
evaluation hands back up the same way (even out of an if used as an operand, argument or element) until it is
unwrapped at the nearest function call or at the top level of the program.

Integers behave like 64-bit signed integers: results wrap around and division truncates toward zero. Dividing by
zero is not a Monkey error; Python's ZeroDivisionError propagates to the caller.
"""

from monkey.runtime.builtins import BUILTINS
from monkey.runtime.environment import Environment
from monkey.runtime.object import (
    FALSE, NULL, TRUE, Array, Error, Function, Hash, Hashable, HashPair, Integer, ObjectType, ReturnValue, String,
    native_bool,
)
from monkey.syntax import ast


def int64(value):
    """Wraps value to the signed 64-bit range."""
    return (value + 2 ** 63) % 2 ** 64 - 2 ** 63


def is_abrupt(obj):
    """True for an Error or a ReturnValue: either one ends the enclosing evaluation and is never stored."""
    return obj.type in (ObjectType.ERROR, ObjectType.RETURN_VALUE)


def evaluate(node, env):
    """Evaluates node in env and returns the resulting MonkeyObject."""
    # statements
    if isinstance(node, ast.Program):
        return evaluate_program(node, env)

    elif isinstance(node, ast.ExpressionStatement):
        return evaluate(node.expression, env)

    elif isinstance(node, ast.BlockStatement):
        return evaluate_block_statement(node, env)

    elif isinstance(node, ast.ReturnStatement):
        if node.value is None:
            return ReturnValue(NULL)
        value = evaluate(node.value, env)
        if is_abrupt(value):
            return value
        return ReturnValue(value)

    elif isinstance(node, ast.LetStatement):
        value = evaluate(node.value, env)
        if is_abrupt(value):
            return value
        return env.set(node.name.value, value)

    # literals
    elif isinstance(node, ast.IntegerLiteral):
        return Integer(node.value)

    elif isinstance(node, ast.BooleanLiteral):
        return native_bool(node.value)

    elif isinstance(node, ast.StringLiteral):
        return String(node.value)

    elif isinstance(node, ast.ArrayLiteral):
        elements = evaluate_expressions(node.elements, env)
        if len(elements) == 1 and is_abrupt(elements[0]):
            return elements[0]
        return Array(elements)

    elif isinstance(node, ast.HashLiteral):
        return evaluate_hash_literal(node, env)

    elif isinstance(node, ast.FunctionLiteral):
        return Function(list(node.parameters), node.body, env)

    # expressions
    elif isinstance(node, ast.Identifier):
        return evaluate_identifier(node, env)

    elif isinstance(node, ast.PrefixExpression):
        right = evaluate(node.right, env)
        if is_abrupt(right):
            return right
        return evaluate_prefix_expression(node.operator, right)

    elif isinstance(node, ast.InfixExpression):
        left = evaluate(node.left, env)
        if is_abrupt(left):
            return left
        right = evaluate(node.right, env)
        if is_abrupt(right):
            return right
        return evaluate_infix_expression(node.operator, left, right)

    elif isinstance(node, ast.IfExpression):
        return evaluate_if_expression(node, env)

    elif isinstance(node, ast.CallExpression):
        function = evaluate(node.function, env)
        if is_abrupt(function):
            return function

        args = evaluate_expressions(node.arguments, env)
        if len(args) == 1 and is_abrupt(args[0]):
            return args[0]
        return apply_function(function, args)

    elif isinstance(node, ast.IndexExpression):
        left = evaluate(node.left, env)
        if is_abrupt(left):
            return left
        index = evaluate(node.index, env)
        if is_abrupt(index):
            return index
        return evaluate_index_expression(left, index)

    raise TypeError(f"cannot evaluate {type(node).__name__}")


def evaluate_program(program, env):
    result = NULL
    for statement in program.statements:
        result = evaluate(statement, env)

        if result.type is ObjectType.RETURN_VALUE:
            return result.value
        elif result.type is ObjectType.ERROR:
            return result
    return result


def evaluate_block_statement(block, env):
    """Like evaluate_program, but a ReturnValue is passed up still wrapped so enclosing blocks stop too."""
    result = NULL
    for statement in block.statements:
        result = evaluate(statement, env)

        if result.type in (ObjectType.RETURN_VALUE, ObjectType.ERROR):
            return result
    return result


def evaluate_expressions(expressions, env):
    """Evaluates expressions left to right. If one of them is abrupt, returns a list holding only that result."""
    results = []
    for expression in expressions:
        evaluated = evaluate(expression, env)
        if is_abrupt(evaluated):
            return [evaluated]
        results.append(evaluated)
    return results


def is_truthy(obj):
    """Only false and null are falsy."""
    return obj is not FALSE and obj is not NULL


def evaluate_identifier(node, env):
    value = env.get(node.value)
    if value is not None:
        return value

    builtin = BUILTINS.get(node.value)
    if builtin is not None:
        return builtin

    return Error(f"identifier not found: {node.value}")


def evaluate_prefix_expression(operator, right):
    if operator == "!":
        return FALSE if is_truthy(right) else TRUE

    elif operator == "-":
        if right.type is not ObjectType.INTEGER:
            return Error(f"unknown operator: -{right.type}")
        return Integer(int64(-right.value))

    return Error(f"unknown operator: {operator}{right.type}")


def evaluate_infix_expression(operator, left, right):
    if left.type is ObjectType.INTEGER and right.type is ObjectType.INTEGER:
        return evaluate_integer_infix_expression(operator, left, right)

    elif left.type is ObjectType.STRING and right.type is ObjectType.STRING:
        return evaluate_string_infix_expression(operator, left, right)

    elif left.type is not right.type:
        return Error(f"type mismatch: {left.type} {operator} {right.type}")

    elif operator == "==":
        return native_bool(left is right)

    elif operator == "!=":
        return native_bool(left is not right)

    return Error(f"unknown operator: {left.type} {operator} {right.type}")


def evaluate_integer_infix_expression(operator, left, right):
    lval, rval = left.value, right.value

    if operator == "+":
        return Integer(int64(lval + rval))
    elif operator == "-":
        return Integer(int64(lval - rval))
    elif operator == "*":
        return Integer(int64(lval * rval))
    elif operator == "/":
        quotient = abs(lval) // abs(rval)  # raises ZeroDivisionError on rval == 0
        return Integer(int64(quotient if (lval < 0) == (rval < 0) else -quotient))
    elif operator == "<":
        return native_bool(lval < rval)
    elif operator == ">":
        return native_bool(lval > rval)
    elif operator == "==":
        return native_bool(lval == rval)
    elif operator == "!=":
        return native_bool(lval != rval)

    return Error(f"unknown operator: {left.type} {operator} {right.type}")


def evaluate_string_infix_expression(operator, left, right):
    if operator == "+":
        return String(left.value + right.value)
    elif operator == "==":
        return native_bool(left.value == right.value)
    elif operator == "!=":
        return native_bool(left.value != right.value)

    return Error(f"unknown operator: {left.type} {operator} {right.type}")


def evaluate_if_expression(node, env):
    condition = evaluate(node.condition, env)
    if is_abrupt(condition):
        return condition

    if is_truthy(condition):
        return evaluate(node.consequence, env)
    elif node.alternative is not None:
        return evaluate(node.alternative, env)
    return NULL


def apply_function(function, args):
    if function.type is ObjectType.FUNCTION:
        env = Environment.new_enclosed(function.env)
        for param, arg in zip(function.parameters, args):  # arity is not checked
            env.set(param.value, arg)

        result = evaluate(function.body, env)
        if result.type is ObjectType.RETURN_VALUE:
            return result.value
        return result

    elif function.type is ObjectType.BUILTIN:
        result = function.fn(*args)
        return NULL if result is None else result

    return Error(f"not a function: {function.type}")


def evaluate_index_expression(left, index):
    if left.type is ObjectType.ARRAY and index.type is ObjectType.INTEGER:
        elements = left.elements
        if 0 <= index.value < len(elements):
            return elements[index.value]
        return NULL

    elif left.type is ObjectType.HASH:
        if not isinstance(index, Hashable):
            return Error(f"unusable as hash key: {index.type}")
        pair = left.pairs.get(index.hash_key())
        return NULL if pair is None else pair.value

    return Error(f"index operator not supported: {left.type}")


def evaluate_hash_literal(node, env):
    pairs = {}
    for key_node, value_node in node.pairs:
        key = evaluate(key_node, env)
        if is_abrupt(key):
            return key
        if not isinstance(key, Hashable):
            return Error(f"unusable as hash key: {key.type}")

        value = evaluate(value_node, env)
        if is_abrupt(value):
            return value

        pairs[key.hash_key()] = HashPair(key, value)
    return Hash(pairs)
