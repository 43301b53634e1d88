"""Tree-walking evaluator for lox.

Statements are executed for their effects and return a Completion: normal, or a 'return' carrying its value. Blocks,
loops and calls thread completions through instead of using exceptions for control transfer. Expressions evaluate to
runtime values (see values.py) or raise a LoxRuntimeError.

The interpreter owns an explicit stack of frames. Blocks and calls push a frame inside _scope(), which pops it on every
exit path, errors included.
"""

import sys
from contextlib import contextmanager
from enum import Enum, auto
from math import copysign

from lox.grammar.tokens import LiteralType, TokenType
from lox.lang.environment import Environment
from lox.lang.error import (
    BinaryOperationError,
    InvalidCallError,
    LogicalOperatorError,
    UnaryOperationError,
)
from lox.lang.values import NATIVES, LoxCallable, LoxFunction, from_literal, is_truthy, stringify


class Flow(Enum):
    NORMAL = auto()
    RETURN = auto()


class Completion:
    """Outcome of executing a statement."""
    __slots__ = ("flow", "value")

    def __init__(self, flow=Flow.NORMAL, value=None):
        self.flow = flow
        self.value = value

    @property
    def normal(self):
        return self.flow is Flow.NORMAL

    def __repr__(self):
        return f"Completion({self.flow.name}, {self.value!r})"


NORMAL = Completion()


ARITHMETIC = {
    TokenType.MINUS: lambda a, b: a - b,
    TokenType.PLUS: lambda a, b: a + b,
    TokenType.STAR: lambda a, b: a * b,
    TokenType.SLASH: lambda a, b: _divide(a, b),
}

RELATIONAL = {
    TokenType.GREATER: lambda a, b: a > b,
    TokenType.GREATER_EQUAL: lambda a, b: a >= b,
    TokenType.LESS: lambda a, b: a < b,
    TokenType.LESS_EQUAL: lambda a, b: a <= b,
    TokenType.BANG_EQUAL: lambda a, b: a != b,
    TokenType.EQUAL_EQUAL: lambda a, b: a == b,
}


def _divide(a, b):
    """IEEE-754 division: x/0 is +-inf, 0/0 is nan."""
    if b == 0.0:
        if a == 0.0 or a != a:
            return float("nan")
        return copysign(float("inf"), a) * copysign(1.0, b)
    return a / b


def _is_number(value):
    return isinstance(value, float)


class Interpreter:
    """Executes a tuple of statements against a chain of Environments."""

    def __init__(self, out=None, echo=True):
        """out is the stream 'print' writes to (sys.stdout at write time if None). If echo, expression statements
        write the display form of their value too.
        """
        self.out = out
        self.echo = echo
        self.globals = self._new_globals()
        self._frames = [self.globals]

    @staticmethod
    def _new_globals():
        frame = Environment()
        for native in NATIVES:
            frame.define(native.name, native)
        return frame

    @property
    def environment(self):
        """The current (innermost) frame."""
        return self._frames[-1]

    def interpret(self, statements, fresh=True):
        """Runs statements as one top-level program. If fresh, starts from a new global frame. LoxRuntimeErrors
        propagate to the caller after the frame stack is unwound.
        """
        if fresh:
            self.globals = self._new_globals()
        self._frames = [self.globals]

        for statement in statements:
            self.execute(statement)

    def _write(self, value):
        print(stringify(value), file=self.out if self.out is not None else sys.stdout)

    @contextmanager
    def _scope(self, environment):
        self._frames.append(environment)
        try:
            yield environment
        finally:
            self._frames.pop()

    # -------------------------------------------------------------------------------------------------- statements

    def execute(self, statement):
        method = getattr(self, f"execute_{type(statement).__name__}")
        return method(statement)

    def execute_Print(self, node):
        self._write(self.evaluate(node.expression))
        return NORMAL

    def execute_Expression(self, node):
        value = self.evaluate(node.expression)
        if self.echo:
            self._write(value)
        return NORMAL

    def execute_Var(self, node):
        if node.initializer is None:
            self.environment.define(node.name.lexeme)
        else:
            self.environment.define(node.name.lexeme, self.evaluate(node.initializer))
        return NORMAL

    def execute_Block(self, node):
        return self.execute_block(node.statements)

    def execute_block(self, statements, environment=None):
        """Executes statements in environment, or in a new frame enclosed by the current one. Stops at the first
        completion that is not normal and returns it.
        """
        if environment is None:
            environment = Environment(self.environment)

        with self._scope(environment):
            for statement in statements:
                completion = self.execute(statement)
                if not completion.normal:
                    return completion
        return NORMAL

    def execute_If(self, node):
        if is_truthy(self.evaluate(node.condition)):
            return self.execute(node.then_branch)
        if node.else_branch is not None:
            return self.execute(node.else_branch)
        return NORMAL

    def execute_While(self, node):
        while is_truthy(self.evaluate(node.condition)):
            completion = self.execute(node.body)
            if not completion.normal:
                return completion
        return NORMAL

    def execute_Function(self, node):
        self.environment.define(node.name.lexeme, LoxFunction.from_declaration(node))
        return NORMAL

    def execute_Return(self, node):
        value = None if node.value is None else self.evaluate(node.value)
        return Completion(Flow.RETURN, value)

    # ------------------------------------------------------------------------------------------------- expressions

    def evaluate(self, node):
        method = getattr(self, f"evaluate_{type(node).__name__}")
        return method(node)

    def evaluate_Literal(self, node):
        if node.value.type is LiteralType.IDENTIFIER:
            return self.environment.get(node.value.value)
        return from_literal(node.value)

    def evaluate_Grouping(self, node):
        return self.evaluate(node.expression)

    def evaluate_Variable(self, node):
        return self.environment.get(node.name.lexeme, node.name)

    def evaluate_Assign(self, node):
        value = self.evaluate(node.value)
        self.environment.assign(node.name.lexeme, value, node.name)
        return value

    def evaluate_Unary(self, node):
        right = self.evaluate(node.right)
        operator = node.operator

        if operator.type is TokenType.BANG:
            return not is_truthy(right)
        if operator.type is TokenType.MINUS and _is_number(right):
            return -right
        raise UnaryOperationError("operand of '{}' must be a number, got '{}'", [operator.lexeme, stringify(right)],
                                  operator)

    def evaluate_Binary(self, node):
        left = self.evaluate(node.left)
        right = self.evaluate(node.right)
        operator = node.operator

        if _is_number(left) and _is_number(right):
            if operator.type in ARITHMETIC:
                return ARITHMETIC[operator.type](left, right)
            if operator.type in RELATIONAL:
                return RELATIONAL[operator.type](left, right)
        elif operator.type is TokenType.PLUS and isinstance(left, str) and isinstance(right, str):
            return left + right

        raise BinaryOperationError("unsupported operands for '{}': '{}' and '{}'",
                                   [operator.lexeme, stringify(left), stringify(right)], operator)

    def evaluate_Logical(self, node):
        left = self.evaluate(node.left)
        operator = node.operator

        if operator.type is TokenType.OR:
            if is_truthy(left):
                return left
        elif operator.type is TokenType.AND:
            if not is_truthy(left):
                return left
        else:
            raise LogicalOperatorError("'{}' is not a logical operator", operator.lexeme, operator)

        return self.evaluate(node.right)

    def evaluate_Call(self, node):
        callee = self.evaluate(node.callee)
        arguments = [self.evaluate(argument) for argument in node.arguments]

        if not isinstance(callee, LoxCallable):
            raise InvalidCallError("can only call functions, got '{}'", stringify(callee), node.paren)
        if len(arguments) != callee.arity:
            raise InvalidCallError("'{}' expected {} arguments but got {}",
                                   [callee.name, callee.arity, len(arguments)], node.paren)

        return callee.call(self, arguments)

    def call_function(self, function, arguments):
        """Runs function's body in a fresh frame enclosed by the global frame. Returns nil unless the body returns."""
        frame = Environment(self.globals)
        for param, argument in zip(function.params, arguments):
            frame.define(param, argument)

        completion = self.execute_block(function.body, frame)
        return completion.value if completion.flow is Flow.RETURN else None
