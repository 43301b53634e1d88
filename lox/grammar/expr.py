"""Expression nodes of the lox syntax tree.

Formally, the expression grammar (lowest precedence first) is

```
<expression> ::= <assignment>
<assignment> ::= IDENTIFIER "=" <assignment> | <logic_or>     ; right-associative
<logic_or>   ::= <logic_and> ( "or" <logic_and> )*
<logic_and>  ::= <equality> ( "and" <equality> )*
<equality>   ::= <comparison> ( ( "!=" | "==" ) <comparison> )*
<comparison> ::= <term> ( ( ">" | ">=" | "<" | "<=" ) <term> )*
<term>       ::= <factor> ( ( "-" | "+" ) <factor> )*
<factor>     ::= <unary> ( ( "/" | "*" ) <unary> )*
<unary>      ::= ( "!" | "-" ) <unary> | <call>
<call>       ::= <primary> ( "(" <arguments>? ")" )*
<primary>    ::= NUMBER | STRING | "true" | "false" | "nil" | IDENTIFIER | "(" <expression> ")"
```

Nodes are frozen: evaluation never mutates the tree.
"""

from dataclasses import dataclass
from typing import Tuple

from lox.grammar import tokens


class Expr:
    """Superclass of every expression node."""


@dataclass(frozen=True)
class Literal(Expr):
    value: tokens.Literal


@dataclass(frozen=True)
class Unary(Expr):
    operator: tokens.Token
    right: Expr


@dataclass(frozen=True)
class Binary(Expr):
    left: Expr
    operator: tokens.Token
    right: Expr


@dataclass(frozen=True)
class Logical(Expr):
    """Short-circuiting 'and'/'or'."""
    left: Expr
    operator: tokens.Token
    right: Expr


@dataclass(frozen=True)
class Call(Expr):
    """paren is the closing ')' of the call site, kept for diagnostics."""
    callee: Expr
    paren: tokens.Token
    arguments: Tuple[Expr, ...]


@dataclass(frozen=True)
class Grouping(Expr):
    expression: Expr


@dataclass(frozen=True)
class Variable(Expr):
    name: tokens.Token


@dataclass(frozen=True)
class Assign(Expr):
    name: tokens.Token
    value: Expr
