"""Runtime values of the lox language.

lox value    Python representation
---------    ---------------------
nil          None
boolean      bool
number       float
string       str
callable     NativeFunction | LoxFunction

Callables carry their defining data by value. A LoxFunction does not capture the frame it was defined in: calls run
in a fresh frame enclosed by the interpreter's global frame.
"""

import time
from dataclasses import dataclass
from typing import Any, Callable, Tuple

from lox.grammar import stmt, tokens


class LoxCallable:
    """Superclass of everything that can appear as a callee."""
    name: str

    @property
    def arity(self):
        raise NotImplementedError()

    def call(self, interpreter, arguments):
        raise NotImplementedError()


@dataclass(frozen=True)
class NativeFunction(LoxCallable):
    """Host-provided function with a fixed name and arity."""
    name: str
    fixed_arity: int
    function: Callable[..., Any]

    @property
    def arity(self):
        return self.fixed_arity

    def call(self, interpreter, arguments):
        return self.function(*arguments)

    def __str__(self):
        return f"<native fn {self.name}>"


@dataclass(frozen=True)
class LoxFunction(LoxCallable):
    """User-defined function: name, parameter names and body, copied out of a stmt.Function."""
    name: str
    params: Tuple[str, ...]
    body: Tuple[stmt.Stmt, ...]

    @classmethod
    def from_declaration(cls, declaration):
        return cls(declaration.name.lexeme, tuple(param.lexeme for param in declaration.params), declaration.body)

    @property
    def arity(self):
        return len(self.params)

    def call(self, interpreter, arguments):
        return interpreter.call_function(self, arguments)

    def __str__(self):
        return f"<fn {self.name}>"


def is_truthy(value):
    """Booleans are themselves, numbers are truthy iff non-zero, strings iff non-empty, nil and callables are falsy."""
    if isinstance(value, bool):
        return value
    if isinstance(value, float):
        return value != 0.0
    if isinstance(value, str):
        return value != ""
    return False


def stringify(value):
    """Display form of a runtime value, as written by 'print'."""
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if value != value:
            return "NaN"
        if value in (float("inf"), float("-inf")):
            return "inf" if value > 0 else "-inf"
        if value.is_integer():
            return f"{value:.0f}"
        return repr(value)
    return str(value)


def from_literal(literal):
    """Maps a non-identifier literal payload to its runtime value."""
    if literal.type is tokens.LiteralType.TRUE:
        return True
    if literal.type is tokens.LiteralType.FALSE:
        return False
    if literal.type is tokens.LiteralType.NULL:
        return None
    if literal.type is tokens.LiteralType.NUMBER:
        return float(literal.value)
    return literal.value


NATIVES = (
    NativeFunction("clock", 0, lambda: float(time.time())),
)
