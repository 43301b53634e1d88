"""Error handling for the lox language. Only LoxExceptions should be encountered during running: if another type of
error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Exit statuses follow sysexits: 64 for lexical errors, 65 for syntax errors, 70 for runtime errors.
"""

import sys

from termcolor import colored


class LoxException(Exception):
    """Templates an error/warning message so that it can be used to throw a lox error/warning. msg is a str.format
    template whose slots are filled with exprs, the offending snippets.
    """
    status = 70

    def __init__(self, msg, exprs=None, line=0, col=0, internal=False):
        if exprs is None:
            exprs = []
        if isinstance(exprs, str):
            exprs = [exprs]

        self.template = msg
        self.exprs = [str(expr) for expr in exprs]
        self.msg = msg.format(*self.exprs)

        self.line = line  # 1-based, 0 when unknown
        self.col = col
        self.internal = internal

        super().__init__(self.msg)

    def render(self, **attrs):
        """Returns self.msg with every expr snippet highlighted."""
        return self.template.format(*(colored(expr, **attrs) for expr in self.exprs))


class LexerError(LoxException):
    """Recorded by the lexer on an unexpected character, unterminated string or unterminated comment."""
    status = 64


class SourceError(LoxException):
    """The source file could not be read."""
    status = 66


class ParseError(LoxException):
    """Structural mismatch: expected one token kind, found another. expected is None for errors that are not a
    single-token mismatch (invalid assignment target, too many arguments).
    """
    status = 65

    def __init__(self, message, expected, found, line, col):
        self.message = message
        self.expected = expected
        self.found = found

        escaped = message.replace("{", "{{").replace("}", "}}")
        if expected is None:
            super().__init__(escaped, None, line, col)
        else:
            super().__init__("expected {}, found {}: " + escaped, [expected.name, found.name], line, col)


class ExpectedExpressionError(ParseError):
    """No primary-expression alternative matched the current token. expected is the tuple of acceptable leading
    token kinds.
    """

    def __init__(self, expected, found, line, col):
        self.message = "expected expression"
        self.expected = tuple(expected)
        self.found = found
        LoxException.__init__(self, "expected expression, found {} (one of {})",
                              [found.name, ", ".join(kind.name for kind in self.expected)], line, col)


class LoxRuntimeError(LoxException):
    """Superclass of every error raised while evaluating a syntax tree."""
    status = 70

    def __init__(self, msg, exprs=None, token=None):
        self.token = token
        line, col = (token.line, token.col) if token is not None else (0, 0)
        super().__init__(msg, exprs, line, col)


class BinaryOperationError(LoxRuntimeError):
    """Operand types do not fit a binary operator."""


class UnaryOperationError(LoxRuntimeError):
    """Operand type does not fit a unary operator."""


class VariableNotFoundError(LoxRuntimeError):
    """Name is absent from the entire scope chain."""


class VariableNotInitializedError(LoxRuntimeError):
    """Name is declared but holds no value."""


class LogicalOperatorError(LoxRuntimeError):
    """A Logical node carries an operator other than 'and'/'or'."""


class InvalidCallError(LoxRuntimeError):
    """Callee is not callable, or was called with the wrong number of arguments."""


class ErrorHandler:
    """Context manager that will silently suppress Python errors and raise custom lox errors/warnings."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True, stream=None):
        self.fatal = fatal
        self.stream = stream   # None means sys.stderr at report time
        self.traceback = {}    # path: (source, line offset)
        self.reported = 0

    @property
    def _stream(self):
        return self.stream if self.stream is not None else sys.stderr

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, 0)

    def register_source(self, path, source, line_num=1):
        """Registers source in traceback given path. line_num is the line source starts on. Should be called prior to
        Session run.
        """
        self.traceback[path] = (source, line_num - 1)

    def remove_source(self, path):
        """Removes source from traceback given path. Should be called after a successful Session run."""
        self.traceback[path] = (None, 0)

    def _locate(self, error):
        """Returns (location prefix, offending source line or None) for error."""
        if not self.traceback:
            return "", None

        file, (source, offset) = next(iter(self.traceback.items()))
        if not error.line:
            return f"{file}: ", None

        source_line = None
        if source is not None:
            lines = source.splitlines()
            if 1 <= error.line <= len(lines):
                source_line = lines[error.line - 1]

        where = f"{file}:{error.line + offset}"
        if error.col:
            where += f":{error.col}"
        return where + ": ", source_line

    @staticmethod
    def diagnose(error, source_line, warning=False):
        """Returns source_line with a pointer under error.col."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR
        lead = len(source_line) - len(source_line.lstrip())

        diagnosis = "  " + source_line.strip() + "\n"
        diagnosis += "  " + " " * max(error.col - 1 - lead, 0)
        diagnosis += colored("^", color, attrs=["bold"])

        return diagnosis

    def warn(self, *args, **kwargs):
        """Generates and prints warning message based on args."""
        error = LoxException(*args, **kwargs)
        where, source_line = self._locate(error)

        warning_msg = colored(where, attrs=["bold"])
        warning_msg += colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + error.render(attrs=["bold"])
        print(warning_msg, file=self._stream)

        if source_line is not None and error.col:
            print(ErrorHandler.diagnose(error, source_line, warning=True), file=self._stream)

    def report(self, error):
        """Prints error (a LoxException) without exiting. Lexer and parser diagnostics go through here."""
        where, source_line = self._locate(error)

        error_msg = colored(where, attrs=["bold"])
        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])
        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.render(attrs=["bold"])
        print(error_msg, file=self._stream)

        if not error.internal and source_line is not None and error.col:
            print(ErrorHandler.diagnose(error, source_line), file=self._stream)

        self.reported += 1

    def throw(self, error):
        """Reports error, then exits with error.status if fatal."""
        self.report(error)

        if self.fatal:
            sys.exit(error.status)
        for path in self.traceback:  # if error occurred, reset registered sources (no need if error is fatal)
            self.traceback[path] = (None, 0)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(LoxException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(LoxException("maximum recursion depth exceeded"))
        elif exc_type is not None and issubclass(exc_type, LoxException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(LoxException("unknown error: '{}: {}'", [exc_type.__name__, exc_val], internal=True))
            do_exit = True

        return not do_exit
