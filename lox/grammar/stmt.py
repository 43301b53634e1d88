"""Statement nodes of the lox syntax tree.

```
<program>     ::= <declaration>* EOF
<declaration> ::= <fun_decl> | <var_decl> | <statement>
<fun_decl>    ::= "fun" IDENTIFIER "(" <parameters>? ")" <block>
<var_decl>    ::= "var" IDENTIFIER ( "=" <expression> )? ";"
<statement>   ::= <expr_stmt> | <for_stmt> | <if_stmt> | <print_stmt> | <return_stmt> | <while_stmt> | <block>
<for_stmt>    ::= "for" "(" ( <var_decl> | <expr_stmt> | ";" ) <expression>? ";" <expression>? ")" <statement>
<return_stmt> ::= "return" <expression>? ";"                 ; only inside a function body
```

There is no For node: 'for' is desugared by the parser into Block/While.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from lox.grammar import tokens
from lox.grammar.expr import Expr


class Stmt:
    """Superclass of every statement node."""


@dataclass(frozen=True)
class Expression(Stmt):
    expression: Expr


@dataclass(frozen=True)
class Print(Stmt):
    expression: Expr


@dataclass(frozen=True)
class Var(Stmt):
    """A missing initializer leaves the binding declared but uninitialized."""
    name: tokens.Token
    initializer: Optional[Expr] = None


@dataclass(frozen=True)
class Block(Stmt):
    statements: Tuple[Stmt, ...]


@dataclass(frozen=True)
class If(Stmt):
    condition: Expr
    then_branch: Stmt
    else_branch: Optional[Stmt] = None


@dataclass(frozen=True)
class While(Stmt):
    condition: Expr
    body: Stmt


@dataclass(frozen=True)
class Function(Stmt):
    name: tokens.Token
    params: Tuple[tokens.Token, ...]
    body: Tuple[Stmt, ...]


@dataclass(frozen=True)
class Return(Stmt):
    keyword: tokens.Token
    value: Optional[Expr] = None
