import unittest

from lox.core.scanner import Scanner, scan
from lox.core.tokens import Token, TokenType
from lox.lang.error import ScanError


def types(source):
    return [token.type for token in Scanner(source).scan_tokens()]


class ScannerTestCase(unittest.TestCase):

    def test_operators(self):
        cases = {
            "(){},.-+;*/": [
                TokenType.LEFT_PAREN, TokenType.RIGHT_PAREN, TokenType.LEFT_BRACE, TokenType.RIGHT_BRACE,
                TokenType.COMMA, TokenType.DOT, TokenType.MINUS, TokenType.PLUS, TokenType.SEMICOLON, TokenType.STAR,
                TokenType.SLASH,
            ],
            "! != = == < <= > >=": [
                TokenType.BANG, TokenType.BANG_EQUAL, TokenType.EQUAL, TokenType.EQUAL_EQUAL, TokenType.LESS,
                TokenType.LESS_EQUAL, TokenType.GREATER, TokenType.GREATER_EQUAL,
            ],
            "===": [TokenType.EQUAL_EQUAL, TokenType.EQUAL],
            "!==": [TokenType.BANG_EQUAL, TokenType.EQUAL],
            "<==": [TokenType.LESS_EQUAL, TokenType.EQUAL],
        }
        for case, expected in cases.items():
            self.assertEqual(expected + [TokenType.EOF], types(case), case)

    def test_comments_and_whitespace(self):
        cases = {
            "// nothing to see here": [],
            "1 // one\n2": [TokenType.NUMBER, TokenType.NUMBER],
            " \t\r\n": [],
            "/ /": [TokenType.SLASH, TokenType.SLASH],
        }
        for case, expected in cases.items():
            self.assertEqual(expected + [TokenType.EOF], types(case), case)

    def test_numbers(self):
        cases = {
            "43": 43.0,
            "3.14": 3.14,
            "0": 0.0,
            "007.50": 7.5,
        }
        for case, expected in cases.items():
            token = scan(case)[0]
            self.assertEqual(TokenType.NUMBER, token.type, case)
            self.assertEqual(expected, token.literal, case)
            self.assertEqual(case, token.lexeme, case)

        # no leading or trailing "."
        self.assertEqual([TokenType.NUMBER, TokenType.DOT, TokenType.EOF], types("1."))
        self.assertEqual([TokenType.DOT, TokenType.NUMBER, TokenType.EOF], types(".5"))

    def test_strings(self):
        token = scan("\"hello world\"")[0]
        self.assertEqual(Token(TokenType.STRING, "\"hello world\"", 1, "hello world"), token)

        tokens = scan("\"two\nlines\" x")
        self.assertEqual("two\nlines", tokens[0].literal)
        self.assertEqual(2, tokens[1].line)

    def test_identifiers_keywords_constants(self):
        cases = {
            "orchid": (TokenType.IDENTIFIER, "orchid"),
            "_private1": (TokenType.IDENTIFIER, "_private1"),
            "or": (TokenType.OR, None),
            "while": (TokenType.WHILE, None),
            "break": (TokenType.BREAK, None),
            "class": (TokenType.CLASS, None),
            "true": (TokenType.CONSTANT, True),
            "false": (TokenType.CONSTANT, False),
            "nil": (TokenType.CONSTANT, None),
        }
        for case, (type_, literal) in cases.items():
            token = scan(case)[0]
            self.assertEqual(type_, token.type, case)
            if isinstance(literal, str):
                self.assertEqual(literal, token.literal, case)
            else:
                self.assertIs(literal, token.literal, case)

    def test_lines(self):
        tokens = scan("var a;\n\n// comment\nprint a;")
        self.assertEqual([1, 1, 1, 4, 4, 4, 4], [token.line for token in tokens])

    def test_errors(self):
        should_raise = ["\"unterminated", "@", "var a = 1 # 2;"]
        for case in should_raise:
            self.assertRaises(ScanError, scan, case)

    def test_errors_do_not_stop_scan(self):
        scanner = Scanner("@ var a = \"oops\n")
        tokens = scanner.scan_tokens()

        self.assertFalse(scanner.success())
        self.assertEqual(2, len(scanner.errors))
        self.assertIn("Unexpected character", scanner.errors[0].msg)
        self.assertIn("Unterminated string", scanner.errors[1].msg)

        self.assertEqual([TokenType.VAR, TokenType.IDENTIFIER, TokenType.EQUAL, TokenType.EOF],
                         [token.type for token in tokens])

    def test_first_error_surfaces(self):
        with self.assertRaises(ScanError) as context:
            scan("1;\n$;\n\"never closed")
        self.assertEqual(2, context.exception.line)

    def test_always_ends_with_eof(self):
        for case in ["", "1 + 2", "\"open", "#"]:
            tokens = Scanner(case).scan_tokens()
            self.assertIs(TokenType.EOF, tokens[-1].type, case)


if __name__ == '__main__':
    unittest.main()
