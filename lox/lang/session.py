"""Session control for the lox language. Drives the lexer -> parser -> interpreter pipeline, either on a whole file or
on one line at a time in command-line mode.
"""

from lox.grammar.tokens import TokenType
from lox.lang.error import LexerError, LoxException, ParseError, SourceError
from lox.lang.interpreter import Interpreter
from lox.lang.lexical import Lexer
from lox.lang.parser import Parser


class Session:
    """Governs a lox session. In command-line mode the global frame survives from one run to the next."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path, cmd_line, out=None, echo=True, dump_tokens=False):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path                # used for error messages
        self.cmd_line = cmd_line        # whether or not in command-line mode
        self.out = out
        self.dump_tokens = dump_tokens  # print every token before parsing

        self.interpreter = Interpreter(out=out, echo=echo)
        self.source = None
        self.runs = 0

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r", encoding="utf-8") as file:
                    self.source = file.read()
            except OSError:
                raise SourceError("'{}' could not be opened", path)
            except UnicodeDecodeError:
                raise SourceError("'{}' is not valid UTF-8", path)

        elif not cmd_line:
            raise LoxException("'<in>' is a reserved filename")

    @staticmethod
    def preprocess_line(line):
        """Preprocesses a line from the command-line. Returns the line and whether a continuation is necessary, which
        is the case while a '(' or '{' token is left open. Brackets inside strings and comments don't count.
        """
        line = line.rstrip("\n")
        kinds = [token.type for token in Lexer(line).tokenize()]
        open_parens = kinds.count(TokenType.LEFT_PAREN) - kinds.count(TokenType.RIGHT_PAREN)
        open_braces = kinds.count(TokenType.LEFT_BRACE) - kinds.count(TokenType.RIGHT_BRACE)
        return line, open_parens > 0 or open_braces > 0

    def scan(self, source):
        """Lexes source, reporting every LexerError. Returns (tokens, had_error)."""
        lexer = Lexer(source)
        tokens = lexer.scan_tokens()

        for error in lexer.errors:
            self.error_handler.report(error)

        if self.dump_tokens:
            for token in tokens:
                print(token, file=self.out)

        return tokens, lexer.had_error

    def run(self, source=None, line_num=1):
        """Runs source (or the file's source) through the whole pipeline. Statements are only executed if lexing and
        parsing were error-free. Returns the exit status: LexerError.status, ParseError.status, or 0. Runtime errors
        are raised to the caller.
        """
        if source is None:
            source = self.source
        self.error_handler.register_source(self.path, source, line_num)  # in case error is raised

        tokens, lex_failed = self.scan(source)
        parser = Parser(tokens, self.error_handler)
        statements = parser.parse()

        if lex_failed:
            return LexerError.status
        if parser.had_error:
            return ParseError.status

        fresh = not self.cmd_line or not self.runs
        self.runs += 1
        self.interpreter.interpret(statements, fresh=fresh)

        self.error_handler.remove_source(self.path)
        return 0
