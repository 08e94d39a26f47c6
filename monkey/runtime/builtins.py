"""Built-in functions available to every Monkey program. Builtins receive already-evaluated arguments and report
misuse by returning an Error object, exactly like any other runtime error.
"""

from monkey.runtime.object import NULL, Array, Builtin, Error, Integer, ObjectType


def wrong_arguments(args, want):
    return Error(f"wrong number of arguments. got={len(args)}, want={want}")


def array_argument(name, args):
    """Returns an Error unless args is exactly one Array, else None."""
    if len(args) != 1:
        return wrong_arguments(args, 1)
    if args[0].type is not ObjectType.ARRAY:
        return Error(f"argument to `{name}` must be ARRAY, got {args[0].type}")
    return None


def monkey_len(*args):
    if len(args) != 1:
        return wrong_arguments(args, 1)

    arg, = args
    if arg.type is ObjectType.STRING:
        return Integer(len(arg.value))
    elif arg.type is ObjectType.ARRAY:
        return Integer(len(arg.elements))
    return Error(f"argument to `len` not supported, got {arg.type}")


def monkey_first(*args):
    error = array_argument("first", args)
    if error:
        return error

    elements = args[0].elements
    return elements[0] if elements else NULL


def monkey_last(*args):
    error = array_argument("last", args)
    if error:
        return error

    elements = args[0].elements
    return elements[-1] if elements else NULL


def monkey_rest(*args):
    """All but the first element, as a new Array. Empty arrays give null rather than another empty array."""
    error = array_argument("rest", args)
    if error:
        return error

    elements = args[0].elements
    return Array(list(elements[1:])) if elements else NULL


def monkey_push(*args):
    """New Array with the second argument appended; the Array passed in is left unchanged."""
    if len(args) != 2:
        return wrong_arguments(args, 2)
    if args[0].type is not ObjectType.ARRAY:
        return Error(f"argument to `push` must be ARRAY, got {args[0].type}")

    array, value = args
    return Array(array.elements + [value])


def monkey_puts(*args):
    for arg in args:
        print(arg.inspect())
    return NULL


BUILTINS = {
    "len": Builtin(monkey_len),
    "first": Builtin(monkey_first),
    "last": Builtin(monkey_last),
    "rest": Builtin(monkey_rest),
    "push": Builtin(monkey_push),
    "puts": Builtin(monkey_puts),
}
