import io
import unittest

from lox.grammar.tokens import Token, TokenType
from lox.lang.error import (
    BinaryOperationError,
    ErrorHandler,
    ExpectedExpressionError,
    LexerError,
    LoxException,
    LoxRuntimeError,
    ParseError,
    SourceError,
)


class LoxExceptionTestCase(unittest.TestCase):

    def test_message(self):
        error = LexerError("unexpected character '{}'", ["@"], 1, 3)
        self.assertEqual("unexpected character '@'", error.msg)
        self.assertEqual("unexpected character '@'", str(error))
        self.assertEqual((1, 3), (error.line, error.col))

        self.assertEqual("'x' could not be opened", SourceError("'{}' could not be opened", "x").msg)

    def test_statuses(self):
        cases = [
            (LexerError("lex"), 64),
            (ParseError("parse", None, TokenType.EOF, 1, 1), 65),
            (SourceError("source"), 66),
            (LoxRuntimeError("runtime"), 70),
            (BinaryOperationError("binary"), 70),
        ]
        for error, status in cases:
            self.assertEqual(status, error.status, error)

    def test_parse_error(self):
        error = ParseError("expect ';' after value", TokenType.SEMICOLON, TokenType.EOF, 2, 4)
        self.assertEqual("expected SEMICOLON, found EOF: expect ';' after value", error.msg)

        error = ParseError("expect '{' before function body", TokenType.LEFT_BRACE, TokenType.NUMBER, 1, 1)
        self.assertEqual("expected LEFT_BRACE, found NUMBER: expect '{' before function body", error.msg)

        error = ParseError("invalid assignment target", None, TokenType.EQUAL, 1, 7)
        self.assertEqual("invalid assignment target", error.msg)

        error = ExpectedExpressionError((TokenType.NUMBER, TokenType.STRING), TokenType.SEMICOLON, 1, 1)
        self.assertEqual("expected expression, found SEMICOLON (one of NUMBER, STRING)", error.msg)

    def test_runtime_location(self):
        token = Token(TokenType.PLUS, "+", line=3, col=9)
        error = BinaryOperationError("bad '{}'", "+", token)
        self.assertEqual((3, 9), (error.line, error.col))
        self.assertIs(token, error.token)
        self.assertEqual((0, 0), (LoxRuntimeError("no token").line, LoxRuntimeError("no token").col))


class ErrorHandlerTestCase(unittest.TestCase):

    def setUp(self):
        self.stream = io.StringIO()
        self.handler = ErrorHandler(stream=self.stream)
        self.handler.register_source("main.lox", "var a = 1;\n  print a + ;\n")

    def test_report(self):
        self.handler.report(ParseError("bad", None, TokenType.SEMICOLON, 2, 13))
        output = self.stream.getvalue()
        self.assertIn("main.lox:2:13", output)
        self.assertIn("error", output)
        self.assertIn("print a + ;", output)
        self.assertIn("^", output)
        self.assertEqual(1, self.handler.reported)

    def test_diagnose(self):
        error = LexerError("x", None, 2, 13)
        diagnosis = ErrorHandler.diagnose(error, "  print a + ;")
        source_line, pointer = diagnosis.split("\n")
        self.assertEqual("  print a + ;", source_line)
        self.assertEqual(source_line.index(";"), len(pointer) - len(pointer.lstrip()))

    def test_line_offset(self):
        self.handler.register_source("main.lox", "print ;", line_num=5)
        self.handler.report(LexerError("x", None, 1, 7))
        self.assertIn("main.lox:5:7", self.stream.getvalue())

    def test_unlocated(self):
        self.handler.report(LoxRuntimeError("no location"))
        output = self.stream.getvalue()
        self.assertIn("main.lox: ", output)
        self.assertNotIn("^", output)

    def test_throw_fatal(self):
        with self.assertRaises(SystemExit) as cm:
            self.handler.throw(ParseError("bad", None, TokenType.EOF, 1, 1))
        self.assertEqual(65, cm.exception.code)

    def test_throw_non_fatal(self):
        self.handler.fatal = False
        self.handler.throw(LoxRuntimeError("oops"))
        self.assertEqual((None, 0), self.handler.traceback["main.lox"])

    def test_context_manager(self):
        with self.assertRaises(SystemExit) as cm:
            with self.handler:
                raise BinaryOperationError("unsupported")
        self.assertEqual(70, cm.exception.code)
        self.assertIn("unsupported", self.stream.getvalue())

    def test_context_manager_non_fatal(self):
        handler = ErrorHandler(fatal=False, stream=self.stream)
        with handler:
            raise LoxRuntimeError("suppressed")
        with handler:
            raise RecursionError()
        self.assertIn("suppressed", self.stream.getvalue())
        self.assertIn("maximum recursion depth exceeded", self.stream.getvalue())

    def test_internal_error(self):
        handler = ErrorHandler(fatal=False, stream=self.stream)
        with self.assertRaises(ZeroDivisionError):
            with handler:
                raise ZeroDivisionError("boom")
        self.assertIn("[internal]", self.stream.getvalue())

    def test_warn(self):
        self.handler.warn("ignoring '{}'", "x")
        self.assertIn("warning", self.stream.getvalue())
        self.assertIn("ignoring", self.stream.getvalue())
        self.assertEqual(0, self.handler.reported)

    def test_generic(self):
        self.assertTrue(issubclass(ParseError, LoxException))
        self.assertTrue(issubclass(BinaryOperationError, LoxRuntimeError))


if __name__ == '__main__':
    unittest.main()
