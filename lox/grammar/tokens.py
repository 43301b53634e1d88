"""Shared lexical vocabulary for lox: token kinds, literal payloads, and the keyword table.

Tokens are produced by lang/lexical.py and consumed by lang/parser.py. Literal payloads travel inside tokens (as
scanned) and inside expr.Literal nodes (as parsed).
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any


class TokenType(Enum):
    """All token kinds produced by the lexer."""

    # single-character punctuation/operators
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    LEFT_BRACE = auto()
    RIGHT_BRACE = auto()
    COMMA = auto()
    DOT = auto()
    MINUS = auto()
    PLUS = auto()
    SEMICOLON = auto()
    SLASH = auto()
    STAR = auto()

    # one or two character operators
    BANG = auto()
    BANG_EQUAL = auto()
    EQUAL = auto()
    EQUAL_EQUAL = auto()
    GREATER = auto()
    GREATER_EQUAL = auto()
    LESS = auto()
    LESS_EQUAL = auto()

    # literals
    IDENTIFIER = auto()
    STRING = auto()
    NUMBER = auto()

    # keywords
    AND = auto()
    CLASS = auto()
    ELSE = auto()
    FALSE = auto()
    FUN = auto()
    FOR = auto()
    IF = auto()
    NIL = auto()
    OR = auto()
    PRINT = auto()
    RETURN = auto()
    SUPER = auto()
    THIS = auto()
    TRUE = auto()
    VAR = auto()
    WHILE = auto()

    EOF = auto()


KEYWORDS = {
    "and": TokenType.AND,
    "class": TokenType.CLASS,
    "else": TokenType.ELSE,
    "false": TokenType.FALSE,
    "for": TokenType.FOR,
    "fun": TokenType.FUN,
    "if": TokenType.IF,
    "nil": TokenType.NIL,
    "or": TokenType.OR,
    "print": TokenType.PRINT,
    "return": TokenType.RETURN,
    "super": TokenType.SUPER,
    "this": TokenType.THIS,
    "true": TokenType.TRUE,
    "var": TokenType.VAR,
    "while": TokenType.WHILE,
}


class LiteralType(Enum):
    """Tag of a literal payload."""

    NULL = auto()
    IDENTIFIER = auto()
    STRING = auto()
    NUMBER = auto()
    TRUE = auto()
    FALSE = auto()


@dataclass(frozen=True)
class Literal:
    """Tagged literal payload. value is the identifier name, string contents or float; None for the other tags."""

    type: LiteralType
    value: Any = None

    def __str__(self):
        if self.type is LiteralType.NULL:
            return "null"
        if self.type in (LiteralType.TRUE, LiteralType.FALSE):
            return self.type.name.lower()
        return str(self.value)


NULL = Literal(LiteralType.NULL)
TRUE = Literal(LiteralType.TRUE)
FALSE = Literal(LiteralType.FALSE)


@dataclass(frozen=True)
class Token:
    """A single token with its lexeme and 1-based source location (column of the first character)."""

    type: TokenType
    lexeme: str
    literal: Literal = NULL
    line: int = 1
    col: int = 1

    @classmethod
    def synthetic(cls, type, lexeme=None):
        """Builds a location-less token for trees assembled by hand."""
        return cls(type, lexeme if lexeme is not None else "", NULL, 0, 0)

    def __str__(self):
        return f"{self.type.name} {self.lexeme!r} {self.literal} {self.line}:{self.col}"
