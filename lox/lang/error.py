"""Error handling for the Lox interpreter. Only LoxErrors should be encountered while running a program: if another
type of error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.
"""

import sys

from termcolor import colored

from lox.core.tokens import TokenType


class LoxError(Exception):
    """Templates an error message so that it can be reported by ErrorHandler. Every stage of the pipeline raises a
    subclass of this: the line is always known, the offending token is attached whenever there is one.
    """
    exit_code = 65
    INTERNAL_EXIT_CODE = 70  # interpreter bug, not a fault in the program

    def __init__(self, msg, line=0, token=None, internal=False):
        if token is not None and not line:
            line = token.line

        super().__init__(msg)
        self.msg = msg
        self.line = line
        self.token = token
        self.internal = internal
        if internal:
            self.exit_code = LoxError.INTERNAL_EXIT_CODE

    def where(self):
        """Location hint for the error: the offending lexeme, or 'end' if the error is at the end of input."""
        if self.token is None:
            return ""
        elif self.token.type is TokenType.EOF:
            return " at end"
        return f" at '{self.token.lexeme}'"

    def __str__(self):
        return f"[line {self.line}] Error{self.where()}: {self.msg}"


class UsageError(LoxError):
    """Bad command line or unreadable script."""
    exit_code = 64


class ScanError(LoxError):
    """Unterminated string literal or unrecognized character."""


class ParseError(LoxError):
    """Unexpected or missing token at a specific grammar position."""


class LoxRuntimeError(LoxError):
    """Type-mismatched operands, division by zero, undefined variable, arity mismatch or misplaced break."""
    exit_code = 70


class LoxSystemError(LoxError):
    """Host environment failure reported by a native function."""
    exit_code = 70


class BreakSignal(Exception):
    """Raised by a break statement and caught by the nearest enclosing while loop. Deliberately not a LoxError, so it
    can never reach ErrorHandler.
    """

    def __init__(self, token):
        super().__init__("break")
        self.token = token


class ErrorHandler:
    """Context manager that will report LoxErrors (and suppress them in interactive mode) and turn any other Python
    error into an internal error report.
    """
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True, file=None):
        self.fatal = fatal
        self.file = file  # defaults to sys.stderr, looked up on every report
        self.path = None
        self.lines = []

    def register_file(self, path):
        """Registers path as the origin of subsequent errors."""
        self.path = path
        self.lines = []

    def register_source(self, source):
        """Registers the source being run so errors can quote the offending line. Should be called prior to
        Session.run.
        """
        self.lines = source.split("\n")

    def remove_source(self):
        """Should be called after a successful Session.run."""
        self.lines = []

    @staticmethod
    def diagnose(error, line, warning=False):
        """Returns line with the offending lexeme highlighted and underlined, or None if it cannot be located."""
        if error.token is None or not error.token.lexeme:
            return None

        start = line.find(error.token.lexeme)
        if start == -1:
            return None
        end = start + len(error.token.lexeme)

        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        diagnosis = "  " + line[:start]
        diagnosis += colored(line[start:end], color, attrs=["bold"])
        diagnosis += line[end:] + "\n"

        diagnosis += "  " + " " * start
        diagnosis += colored("^" + "~" * (end - start - 1), color, attrs=["bold"])

        return diagnosis

    def _print(self, msg):
        print(msg, file=self.file if self.file is not None else sys.stderr)

    def _source_line(self, line_num):
        if 0 < line_num <= len(self.lines):
            return self.lines[line_num - 1]
        return None

    def warn(self, msg, line=0):
        """Prints a warning that does not interrupt the session."""
        warning = colored(f"{self.path}:{line}: ", attrs=["bold"])
        warning += colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + msg
        self._print(warning)

    def report(self, error):
        """Prints error without deciding anything about the session. Used directly for errors that have been
        recovered from (for example all but the last parse error of a run).
        """
        error_msg = colored(f"{self.path}:{error.line}: ", attrs=["bold"])

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error", ErrorHandler.ERROR, attrs=["bold"]) + f"{error.where()}: {error.msg}"
        self._print(error_msg)

        line = self._source_line(error.line)
        if not error.internal and line is not None:
            diagnosis = ErrorHandler.diagnose(error, line)
            if diagnosis:
                self._print(diagnosis)

    def throw(self, error):
        """Reports error. In file mode this ends the process with the error's exit code."""
        self.report(error)

        if self.fatal:
            sys.exit(error.exit_code)
        self.lines = []  # if error occurred, forget the source (no need if error is fatal)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(LoxRuntimeError("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(LoxRuntimeError("stack overflow, maximum recursion depth exceeded"))
        elif exc_type is not None and issubclass(exc_type, LoxError):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(LoxError(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit
