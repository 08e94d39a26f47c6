"""Runtime values of the Monkey language.

Every value is a MonkeyObject with an ObjectType (whose value is the type name shown in error messages) and an
inspect() method giving its display text. TRUE, FALSE and NULL are shared instances: the evaluator never creates
other Boolean or Null objects, so booleans and null can be compared by identity.

Only Hashable objects (Integer, Boolean, String) can key a Hash. Their HashKey is purely structural, so two
different String objects with the same contents find the same entry.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, NamedTuple, Optional

from monkey.syntax import ast


class ObjectType(Enum):
    INTEGER = "Integer"
    BOOLEAN = "Boolean"
    STRING = "String"
    NULL = "Null"
    RETURN_VALUE = "ReturnValue"
    ERROR = "Error"
    FUNCTION = "Function"
    BUILTIN = "Builtin"
    ARRAY = "Array"
    HASH = "Hash"

    def __str__(self):
        return self.value


class HashKey(NamedTuple):
    type: ObjectType
    value: int


class MonkeyObject(ABC):
    """Superclass for every runtime value."""
    type: ObjectType

    @abstractmethod
    def inspect(self):
        """Human-readable form of this object, as printed by the shell."""

    def __str__(self):
        return self.inspect()


class Hashable(ABC):
    """Capability of objects that can be used as Hash keys."""

    @abstractmethod
    def hash_key(self):
        """Returns the HashKey for this object."""


def fnv1a_64(text):
    """64-bit FNV-1a hash of text's UTF-8 encoding. Stable across processes, unlike hash()."""
    result = 0xcbf29ce484222325
    for byte in text.encode("utf-8"):
        result ^= byte
        result = (result * 0x100000001b3) & 0xffffffffffffffff
    return result


@dataclass
class Integer(MonkeyObject, Hashable):
    value: int
    type = ObjectType.INTEGER

    def inspect(self):
        return str(self.value)

    def hash_key(self):
        return HashKey(self.type, self.value)


@dataclass(eq=False)
class Boolean(MonkeyObject, Hashable):
    value: bool
    type = ObjectType.BOOLEAN

    def inspect(self):
        return "true" if self.value else "false"

    def hash_key(self):
        return HashKey(self.type, 1 if self.value else 0)


@dataclass
class String(MonkeyObject, Hashable):
    value: str
    type = ObjectType.STRING

    def inspect(self):
        return self.value

    def hash_key(self):
        return HashKey(self.type, fnv1a_64(self.value))


@dataclass(eq=False)
class Null(MonkeyObject):
    type = ObjectType.NULL

    def inspect(self):
        return "null"


@dataclass
class ReturnValue(MonkeyObject):
    """Wraps the value of a return statement while it unwinds to the enclosing function call or program."""
    value: MonkeyObject
    type = ObjectType.RETURN_VALUE

    def inspect(self):
        return self.value.inspect()


@dataclass
class Error(MonkeyObject):
    message: str
    type = ObjectType.ERROR

    def inspect(self):
        return f"ERROR: {self.message}"


@dataclass(eq=False)
class Function(MonkeyObject):
    parameters: List[ast.Identifier]
    body: ast.BlockStatement
    env: Any = field(repr=False)  # Environment the function was defined in
    type = ObjectType.FUNCTION

    def inspect(self):
        params = ", ".join(str(param) for param in self.parameters)
        return f"fn({params}) {{ {self.body} }}"


@dataclass(eq=False)
class Builtin(MonkeyObject):
    fn: Callable[..., Optional[MonkeyObject]]
    type = ObjectType.BUILTIN

    def inspect(self):
        return "builtin function"


@dataclass
class Array(MonkeyObject):
    elements: List[MonkeyObject] = field(default_factory=list)
    type = ObjectType.ARRAY

    def inspect(self):
        return "[" + ", ".join(element.inspect() for element in self.elements) + "]"


class HashPair(NamedTuple):
    key: MonkeyObject
    value: MonkeyObject


@dataclass
class Hash(MonkeyObject):
    pairs: Dict[HashKey, HashPair] = field(default_factory=dict)
    type = ObjectType.HASH

    def inspect(self):
        return "{" + ", ".join(f"{pair.key.inspect()}: {pair.value.inspect()}" for pair in self.pairs.values()) + "}"


TRUE = Boolean(True)
FALSE = Boolean(False)
NULL = Null()


def native_bool(value):
    """Returns the shared TRUE or FALSE for a Python bool."""
    return TRUE if value else FALSE
