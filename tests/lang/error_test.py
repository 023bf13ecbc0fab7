import io
import unittest

from lox.core.tokens import Token, TokenType
from lox.lang.error import (
    BreakSignal, ErrorHandler, LoxError, LoxRuntimeError, LoxSystemError, ParseError, ScanError, UsageError,
)


class LoxErrorTestCase(unittest.TestCase):

    def test_where(self):
        cases = {
            LoxError("msg", line=3): "",
            ParseError("msg", token=Token(TokenType.EOF, "", 3)): " at end",
            ParseError("msg", token=Token(TokenType.SEMICOLON, ";", 3)): " at ';'",
        }
        for error, expected in cases.items():
            self.assertEqual(expected, error.where())
            self.assertEqual(3, error.line)

    def test_str(self):
        error = LoxRuntimeError("Division by zero.", token=Token(TokenType.SLASH, "/", 12))
        self.assertEqual("[line 12] Error at '/': Division by zero.", str(error))

    def test_exit_codes(self):
        cases = {UsageError: 64, ScanError: 65, ParseError: 65, LoxRuntimeError: 70, LoxSystemError: 70}
        for cls, code in cases.items():
            self.assertEqual(code, cls("msg").exit_code, cls)

    def test_internal_exit_code(self):
        self.assertEqual(70, LoxError("msg", internal=True).exit_code)
        self.assertEqual(70, ParseError("msg", internal=True).exit_code)
        self.assertEqual(65, LoxError("msg").exit_code)

    def test_break_is_not_reportable(self):
        self.assertFalse(issubclass(BreakSignal, LoxError))


class ErrorHandlerTestCase(unittest.TestCase):

    def setUp(self):
        self.stream = io.StringIO()
        self.handler = ErrorHandler(file=self.stream)
        self.handler.register_file("script.lox")

    def test_fatal_exits_with_code(self):
        for error in [ScanError("bad", line=1), LoxRuntimeError("bad", line=1), UsageError("bad")]:
            with self.assertRaises(SystemExit) as context:
                with self.handler:
                    raise error
            self.assertEqual(error.exit_code, context.exception.code)

    def test_fatal_internal_error(self):
        with self.assertRaises(SystemExit) as context:
            with self.handler:
                raise LoxError("Unknown binary operator '%'.", line=1, internal=True)
        self.assertEqual(70, context.exception.code)

        with self.assertRaises(SystemExit) as context:
            with self.handler:
                raise ZeroDivisionError("boom")
        self.assertEqual(70, context.exception.code)

    def test_non_fatal_suppresses(self):
        self.handler.fatal = False

        with self.handler:
            raise LoxRuntimeError("Undefined variable 'x'.", token=Token(TokenType.IDENTIFIER, "x", 4))

        output = self.stream.getvalue()
        self.assertIn("script.lox:4:", output)
        self.assertIn("Undefined variable 'x'.", output)

    def test_diagnosis(self):
        self.handler.fatal = False
        self.handler.register_source("var a = 1;\nprint a / 0;")

        with self.handler:
            raise LoxRuntimeError("Division by zero.", token=Token(TokenType.SLASH, "/", 2))

        output = self.stream.getvalue()
        self.assertIn("print a ", output)
        self.assertIn("^", output)
        self.assertEqual([], self.handler.lines)  # forgotten after the error

    def test_diagnose(self):
        error = ParseError("msg", token=Token(TokenType.IDENTIFIER, "oops", 1))
        diagnosis = ErrorHandler.diagnose(error, "print oops;")

        self.assertIn("oops", diagnosis)
        self.assertIsNone(ErrorHandler.diagnose(error, "print fine;"))
        self.assertIsNone(ErrorHandler.diagnose(ParseError("msg", line=1), "print fine;"))

    def test_recursion_error(self):
        self.handler.fatal = False

        with self.handler:
            raise RecursionError()

        self.assertIn("stack overflow", self.stream.getvalue())

    def test_internal_error_propagates(self):
        self.handler.fatal = False

        with self.assertRaises(ZeroDivisionError):
            with self.handler:
                raise ZeroDivisionError("boom")

        self.assertIn("[internal]", self.stream.getvalue())

    def test_warn(self):
        self.handler.warn("careful", line=2)

        output = self.stream.getvalue()
        self.assertIn("script.lox:2:", output)
        self.assertIn("careful", output)


if __name__ == '__main__':
    unittest.main()
