"""Lexical analysis for the lox language: converts source text into a list of tokens.

The lexer never aborts. An unexpected character, an unterminated string or an unterminated block comment is recorded
as a LexerError and scanning continues, so a single pass surfaces every lexical diagnostic. Callers check had_error
(and errors) after the full scan.

Lexical grammar:

```
<number>     ::= <digit>+ ( "." <digit>+ )?            ; no exponent, no sign
<string>     ::= '"' <char>* '"'                       ; may span lines, no escapes
<identifier> ::= <alpha> ( <alpha> | <digit> )*        ; <alpha> is ASCII letters and "_"
<comment>    ::= "//" <char>* | "/*" <char>* "*/"      ; block comments do not nest
```
"""

from lox.grammar.tokens import FALSE, KEYWORDS, NULL, TRUE, Literal, LiteralType, Token, TokenType
from lox.lang.error import LexerError


class Lexer:
    """lox lexer. Produces tokens via the tokenize() generator, or all at once via scan_tokens()."""

    SINGLE = {
        "(": TokenType.LEFT_PAREN,
        ")": TokenType.RIGHT_PAREN,
        "{": TokenType.LEFT_BRACE,
        "}": TokenType.RIGHT_BRACE,
        ",": TokenType.COMMA,
        ".": TokenType.DOT,
        "-": TokenType.MINUS,
        "+": TokenType.PLUS,
        ";": TokenType.SEMICOLON,
        "*": TokenType.STAR,
    }

    # first char: (kind alone, kind when followed by "=")
    DOUBLE = {
        "!": (TokenType.BANG, TokenType.BANG_EQUAL),
        "=": (TokenType.EQUAL, TokenType.EQUAL_EQUAL),
        "<": (TokenType.LESS, TokenType.LESS_EQUAL),
        ">": (TokenType.GREATER, TokenType.GREATER_EQUAL),
    }

    WHITESPACE = {" ", "\t", "\r", "\n"}
    DIGITS = "0123456789"
    ALPHA = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_"

    def __init__(self, source):
        self.source = source
        self.pos = 0   # current character index
        self.line = 1  # current line (1-based)
        self.col = 1   # current column (1-based)
        self.len = len(source)

        self.errors = []

        self._start = 0
        self._start_line = 1
        self._start_col = 1

    @property
    def had_error(self):
        return bool(self.errors)

    def _current(self):
        """Return the current character or None if at EOF."""
        if self.pos >= self.len:
            return None
        return self.source[self.pos]

    def _peek(self, offset=1):
        """Look ahead without advancing."""
        peek_pos = self.pos + offset
        if peek_pos >= self.len:
            return None
        return self.source[peek_pos]

    def _advance(self):
        """Consume one character, updating line/col."""
        ch = self._current()
        if ch is None:
            return None
        self.pos += 1
        if ch == "\n":
            self.line += 1
            self.col = 1
        else:
            self.col += 1
        return ch

    def _match(self, expected):
        """Consume the current character only if it is expected."""
        if self._current() != expected:
            return False
        self._advance()
        return True

    def _error(self, message, line, col, *exprs):
        self.errors.append(LexerError(message, list(exprs), line, col))

    def _token(self, type, literal=NULL):
        lexeme = self.source[self._start:self.pos]
        return Token(type, lexeme, literal, self._start_line, self._start_col)

    def _skip_line_comment(self):
        """Skip from // to the end of the line. The newline itself is left for the main loop."""
        while (ch := self._current()) is not None and ch != "\n":
            self._advance()

    def _skip_block_comment(self):
        """Skip a /* ... */ comment. The opening '/*' is already consumed."""
        while self._current() is not None:
            if self._current() == "*" and self._peek() == "/":
                self._advance()
                self._advance()
                return
            self._advance()
        self._error("unterminated block comment", self._start_line, self._start_col)

    def _read_string(self):
        """Read a string literal. The opening quote is already consumed."""
        while (ch := self._current()) is not None and ch != '"':
            self._advance()

        if self._current() is None:
            self._error("unterminated string", self._start_line, self._start_col)
            return None

        self._advance()  # closing quote
        value = self.source[self._start + 1:self.pos - 1]
        return self._token(TokenType.STRING, Literal(LiteralType.STRING, value))

    def _read_number(self):
        """Read digits, optionally followed by one '.' and at least one digit. The first digit is consumed."""
        while (ch := self._current()) is not None and ch in self.DIGITS:
            self._advance()

        nxt = self._peek()
        if self._current() == "." and nxt is not None and nxt in self.DIGITS:
            self._advance()  # consume '.'
            while (ch := self._current()) is not None and ch in self.DIGITS:
                self._advance()

        value = float(self.source[self._start:self.pos])
        return self._token(TokenType.NUMBER, Literal(LiteralType.NUMBER, value))

    def _read_identifier_or_keyword(self):
        """Read an identifier (or keyword if it matches). The first character is consumed."""
        while (ch := self._current()) is not None and (ch in self.ALPHA or ch in self.DIGITS):
            self._advance()

        text = self.source[self._start:self.pos]
        if text in KEYWORDS:
            kind = KEYWORDS[text]
            literal = TRUE if kind is TokenType.TRUE else FALSE if kind is TokenType.FALSE else NULL
            return self._token(kind, literal)
        return self._token(TokenType.IDENTIFIER, Literal(LiteralType.IDENTIFIER, text))

    def _scan_token(self):
        """Scan from the current position. Returns None when nothing was emitted (whitespace, comment, error)."""
        self._start, self._start_line, self._start_col = self.pos, self.line, self.col
        ch = self._advance()

        if ch in self.WHITESPACE:
            return None
        if ch in self.SINGLE:
            return self._token(self.SINGLE[ch])
        if ch in self.DOUBLE:
            alone, with_equal = self.DOUBLE[ch]
            return self._token(with_equal if self._match("=") else alone)

        if ch == "/":
            if self._match("/"):
                self._skip_line_comment()
                return None
            if self._match("*"):
                self._skip_block_comment()
                return None
            return self._token(TokenType.SLASH)

        if ch == '"':
            return self._read_string()
        if ch in self.DIGITS:
            return self._read_number()
        if ch in self.ALPHA:
            return self._read_identifier_or_keyword()

        self._error("unexpected character '{}'", self._start_line, self._start_col, ch)
        return None

    def tokenize(self):
        """Main lexer entry point: yields tokens, then exactly one EOF token."""
        while self._current() is not None:
            token = self._scan_token()
            if token is not None:
                yield token

        yield Token(TokenType.EOF, "", NULL, self.line, self.col)

    def scan_tokens(self):
        """Return a list of all tokens, ending with EOF."""
        return list(self.tokenize())
