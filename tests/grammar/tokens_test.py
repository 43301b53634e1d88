import unittest

from lox.grammar.tokens import FALSE, KEYWORDS, NULL, TRUE, Literal, LiteralType, Token, TokenType


class KeywordTestCase(unittest.TestCase):

    def test_keywords(self):
        words = ["and", "class", "else", "false", "for", "fun", "if", "nil", "or", "print", "return", "super", "this",
                 "true", "var", "while"]
        self.assertEqual(sorted(words), sorted(KEYWORDS))
        for word in words:
            self.assertEqual(TokenType[word.upper()], KEYWORDS[word], word)


class LiteralTestCase(unittest.TestCase):

    def test_str(self):
        cases = {
            NULL: "null",
            TRUE: "true",
            FALSE: "false",
            Literal(LiteralType.NUMBER, 2.5): "2.5",
            Literal(LiteralType.STRING, "hi"): "hi",
            Literal(LiteralType.IDENTIFIER, "name"): "name",
        }
        for literal, expected in cases.items():
            self.assertEqual(expected, str(literal), literal)

    def test_equality(self):
        self.assertEqual(Literal(LiteralType.NUMBER, 1.0), Literal(LiteralType.NUMBER, 1.0))
        self.assertNotEqual(Literal(LiteralType.STRING, "a"), Literal(LiteralType.IDENTIFIER, "a"))


class TokenTestCase(unittest.TestCase):

    def test_immutable(self):
        token = Token(TokenType.PLUS, "+", NULL, 1, 2)
        with self.assertRaises(AttributeError):
            token.lexeme = "-"

    def test_synthetic(self):
        token = Token.synthetic(TokenType.MINUS, "-")
        self.assertEqual((TokenType.MINUS, "-", NULL, 0, 0),
                         (token.type, token.lexeme, token.literal, token.line, token.col))

    def test_str(self):
        token = Token(TokenType.NUMBER, "12", Literal(LiteralType.NUMBER, 12.0), 3, 7)
        self.assertEqual("NUMBER '12' 12.0 3:7", str(token))


if __name__ == '__main__':
    unittest.main()
