"""Recursive descent parser for lox: consumes the token list from the lexer and produces a tuple of statement nodes.

One method per grammar level (see grammar/expr.py and grammar/stmt.py for the grammar). Errors inside a declaration
are raised as ParseErrors, reported, and recovered from by synchronizing to the next statement boundary, so a single
parse() call can surface many diagnostics.
"""

from lox.grammar import expr, stmt
from lox.grammar.tokens import TRUE, Token, TokenType
from lox.lang.error import ExpectedExpressionError, ParseError


class Parser:
    """Recursive descent parser for lox."""

    MAX_ARGS = 255

    # tokens that begin a declaration/statement; synchronize() stops in front of them
    BOUNDARIES = {
        TokenType.CLASS,
        TokenType.FUN,
        TokenType.VAR,
        TokenType.FOR,
        TokenType.IF,
        TokenType.WHILE,
        TokenType.PRINT,
        TokenType.RETURN,
    }

    PRIMARY = (
        TokenType.FALSE,
        TokenType.TRUE,
        TokenType.NIL,
        TokenType.NUMBER,
        TokenType.STRING,
        TokenType.IDENTIFIER,
        TokenType.LEFT_PAREN,
    )

    def __init__(self, tokens, error_handler=None):
        """error_handler, if given, is an ErrorHandler that every ParseError is reported to as soon as it is raised."""
        if not tokens or tokens[-1].type is not TokenType.EOF:
            tokens = list(tokens) + [Token(TokenType.EOF, "")]

        self.tokens = tokens
        self.current = 0
        self.error_handler = error_handler
        self.errors = []
        self._function_depth = 0

    @property
    def had_error(self):
        return bool(self.errors)

    def parse(self):
        """Parse a whole lox program."""
        statements = []
        while not self._is_at_end():
            try:
                statements.append(self.declaration())
            except ParseError as error:
                self._report(error)
                self.synchronize()
        return tuple(statements)

    def _report(self, error):
        self.errors.append(error)
        if self.error_handler is not None:
            self.error_handler.report(error)

    # ------------------------------------------------------------------------------------------------------- helpers

    def _peek(self):
        return self.tokens[self.current]

    def _previous(self):
        return self.tokens[self.current - 1]

    def _is_at_end(self):
        return self._peek().type is TokenType.EOF

    def _advance(self):
        if not self._is_at_end():
            self.current += 1
        return self._previous()

    def _check(self, type):
        return not self._is_at_end() and self._peek().type is type

    def _match(self, *types):
        for type in types:
            if self._check(type):
                self._advance()
                return True
        return False

    def _consume(self, type, message):
        """If the current token is of the expected type, consume and return it; otherwise raise ParseError."""
        if self._check(type):
            return self._advance()
        found = self._peek()
        raise ParseError(message, type, found.type, found.line, found.col)

    def _error(self, token, message):
        return ParseError(message, None, token.type, token.line, token.col)

    def synchronize(self):
        """Discard tokens until just past a ';' or in front of a token that starts a new statement."""
        self._advance()
        while not self._is_at_end():
            if self._previous().type is TokenType.SEMICOLON:
                return
            if self._peek().type in self.BOUNDARIES:
                return
            self._advance()

    # -------------------------------------------------------------------------------------------------- statements

    def declaration(self):
        if self._match(TokenType.FUN):
            return self.function("function")
        if self._match(TokenType.VAR):
            return self.var_declaration()
        return self.statement()

    def function(self, kind):
        name = self._consume(TokenType.IDENTIFIER, f"expect {kind} name")
        self._consume(TokenType.LEFT_PAREN, f"expect '(' after {kind} name")

        params = []
        if not self._check(TokenType.RIGHT_PAREN):
            while True:
                if len(params) >= self.MAX_ARGS:
                    raise self._error(self._peek(), f"can't have more than {self.MAX_ARGS} parameters")
                params.append(self._consume(TokenType.IDENTIFIER, "expect parameter name"))
                if not self._match(TokenType.COMMA):
                    break
        self._consume(TokenType.RIGHT_PAREN, "expect ')' after parameters")

        self._consume(TokenType.LEFT_BRACE, f"expect '{{' before {kind} body")
        self._function_depth += 1
        try:
            body = self.block()
        finally:
            self._function_depth -= 1
        return stmt.Function(name, tuple(params), body)

    def var_declaration(self):
        name = self._consume(TokenType.IDENTIFIER, "expect variable name")
        initializer = None
        if self._match(TokenType.EQUAL):
            initializer = self.expression()
        self._consume(TokenType.SEMICOLON, "expect ';' after variable declaration")
        return stmt.Var(name, initializer)

    def statement(self):
        if self._match(TokenType.PRINT):
            return self.print_statement()
        if self._match(TokenType.WHILE):
            return self.while_statement()
        if self._match(TokenType.FOR):
            return self.for_statement()
        if self._match(TokenType.IF):
            return self.if_statement()
        if self._match(TokenType.RETURN):
            return self.return_statement()
        if self._match(TokenType.LEFT_BRACE):
            return stmt.Block(self.block())
        return self.expression_statement()

    def print_statement(self):
        value = self.expression()
        self._consume(TokenType.SEMICOLON, "expect ';' after value")
        return stmt.Print(value)

    def expression_statement(self):
        value = self.expression()
        self._consume(TokenType.SEMICOLON, "expect ';' after expression")
        return stmt.Expression(value)

    def block(self):
        """Parse declarations up to the closing '}'. The opening '{' is already consumed."""
        statements = []
        while not self._check(TokenType.RIGHT_BRACE) and not self._is_at_end():
            statements.append(self.declaration())
        self._consume(TokenType.RIGHT_BRACE, "expect '}' after block")
        return tuple(statements)

    def if_statement(self):
        self._consume(TokenType.LEFT_PAREN, "expect '(' after 'if'")
        condition = self.expression()
        self._consume(TokenType.RIGHT_PAREN, "expect ')' after if condition")

        then_branch = self.statement()
        else_branch = None
        if self._match(TokenType.ELSE):
            else_branch = self.statement()
        return stmt.If(condition, then_branch, else_branch)

    def while_statement(self):
        self._consume(TokenType.LEFT_PAREN, "expect '(' after 'while'")
        condition = self.expression()
        self._consume(TokenType.RIGHT_PAREN, "expect ')' after condition")
        return stmt.While(condition, self.statement())

    def for_statement(self):
        """Desugars 'for (init; cond; incr) body' into '{ init; while (cond) { body; incr; } }'."""
        self._consume(TokenType.LEFT_PAREN, "expect '(' after 'for'")

        if self._match(TokenType.SEMICOLON):
            initializer = None
        elif self._match(TokenType.VAR):
            initializer = self.var_declaration()
        else:
            initializer = self.expression_statement()

        condition = None
        if not self._check(TokenType.SEMICOLON):
            condition = self.expression()
        self._consume(TokenType.SEMICOLON, "expect ';' after loop condition")

        increment = None
        if not self._check(TokenType.RIGHT_PAREN):
            increment = self.expression()
        self._consume(TokenType.RIGHT_PAREN, "expect ')' after for clauses")

        body = self.statement()

        if increment is not None:
            body = stmt.Block((body, stmt.Expression(increment)))
        if condition is None:
            condition = expr.Literal(TRUE)
        body = stmt.While(condition, body)
        if initializer is not None:
            body = stmt.Block((initializer, body))

        return body

    def return_statement(self):
        keyword = self._previous()
        if not self._function_depth:
            raise self._error(keyword, "can't return from top-level code")

        value = None
        if not self._check(TokenType.SEMICOLON):
            value = self.expression()
        self._consume(TokenType.SEMICOLON, "expect ';' after return value")
        return stmt.Return(keyword, value)

    # ------------------------------------------------------------------------------------------------- expressions

    def expression(self):
        return self.assignment()

    def assignment(self):
        target = self.logic_or()

        if self._match(TokenType.EQUAL):
            equals = self._previous()
            value = self.assignment()  # right-associative

            if isinstance(target, expr.Variable):
                return expr.Assign(target.name, value)
            raise self._error(equals, "invalid assignment target")

        return target

    def logic_or(self):
        left = self.logic_and()
        while self._match(TokenType.OR):
            operator = self._previous()
            left = expr.Logical(left, operator, self.logic_and())
        return left

    def logic_and(self):
        left = self.equality()
        while self._match(TokenType.AND):
            operator = self._previous()
            left = expr.Logical(left, operator, self.equality())
        return left

    def _binary(self, operand, *operators):
        """Left-associative binary level: operand ( operator operand )*."""
        left = operand()
        while self._match(*operators):
            operator = self._previous()
            left = expr.Binary(left, operator, operand())
        return left

    def equality(self):
        return self._binary(self.comparison, TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL)

    def comparison(self):
        return self._binary(self.term, TokenType.GREATER, TokenType.GREATER_EQUAL, TokenType.LESS,
                            TokenType.LESS_EQUAL)

    def term(self):
        return self._binary(self.factor, TokenType.MINUS, TokenType.PLUS)

    def factor(self):
        return self._binary(self.unary, TokenType.SLASH, TokenType.STAR)

    def unary(self):
        if self._match(TokenType.BANG, TokenType.MINUS):
            operator = self._previous()
            return expr.Unary(operator, self.unary())
        return self.call()

    def call(self):
        callee = self.primary()
        while self._match(TokenType.LEFT_PAREN):
            callee = self.finish_call(callee)
        return callee

    def finish_call(self, callee):
        """Parse arguments inside parentheses. The opening '(' is already consumed."""
        arguments = []
        if not self._check(TokenType.RIGHT_PAREN):
            while True:
                if len(arguments) >= self.MAX_ARGS:
                    raise self._error(self._peek(), f"can't have more than {self.MAX_ARGS} arguments")
                arguments.append(self.expression())
                if not self._match(TokenType.COMMA):
                    break

        paren = self._consume(TokenType.RIGHT_PAREN, "expect ')' after arguments")
        return expr.Call(callee, paren, tuple(arguments))

    def primary(self):
        if self._match(TokenType.FALSE, TokenType.TRUE, TokenType.NIL, TokenType.NUMBER, TokenType.STRING):
            return expr.Literal(self._previous().literal)
        if self._match(TokenType.IDENTIFIER):
            return expr.Variable(self._previous())
        if self._match(TokenType.LEFT_PAREN):
            inner = self.expression()
            self._consume(TokenType.RIGHT_PAREN, "expect ')' after expression")
            return expr.Grouping(inner)

        found = self._peek()
        raise ExpectedExpressionError(self.PRIMARY, found.type, found.line, found.col)
