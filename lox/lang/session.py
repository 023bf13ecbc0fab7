"""Session control for Lox. Runs a script file, or the lines typed into the interactive shell, through the core
pipeline and keeps the error handler informed about what is being run.
"""

from lox.core.interpreter import Interpreter
from lox.core.parser import Parser
from lox.core.printer import AstPrinter
from lox.core.scanner import Scanner, scan
from lox.core.tokens import TokenType
from lox.lang.error import UsageError


class Session:
    """Governs a Lox session. A session owns one Interpreter, so top-level bindings survive from one run to the next
    (this is what lets the shell remember variables between lines).
    """
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path, cmd_line, output=None):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode
        self.source = ""          # contents of path (empty in command-line mode)

        self.interpreter = Interpreter(output)

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r") as file:
                    self.source = file.read()
            except OSError:
                raise UsageError(f"'{path}' could not be opened")

        elif not cmd_line:
            raise UsageError(f"'{Session.SH_FILE}' is a reserved filename")

    @staticmethod
    def is_incomplete(line):
        """Whether or not line leaves a block open, in which case the shell should keep reading. Only brace tokens
        count: braces inside strings or comments do not. Scan errors are left for run() to report.
        """
        types = [token.type for token in Scanner(line).scan_tokens()]
        return types.count(TokenType.LEFT_BRACE) > types.count(TokenType.RIGHT_BRACE)

    def parse(self, source):
        """Scans and parses source. If parsing failed, every parse error but the last is reported straight away and the
        last one is raised, so that the error handler decides whether the session goes on.
        """
        parser = Parser(scan(source))
        statements = parser.parse()

        if not parser.success():
            *recovered, last = parser.errors
            for error in recovered:
                self.error_handler.report(error)
            raise last

        return statements

    def run(self, source=None):
        """Runs source (the session's file if None). Will raise any error that is encountered."""
        if source is None:
            source = self.source

        self.error_handler.register_source(source)  # in case error is raised
        self.interpreter.interpret(self.parse(source))
        self.error_handler.remove_source()  # error was not raised

    def dump(self, source=None):
        """Returns the canonical parenthesized form of every statement in source (the session's file if None)."""
        if source is None:
            source = self.source

        self.error_handler.register_source(source)
        printer = AstPrinter()
        dumped = [printer.print(statement) for statement in self.parse(source)]
        self.error_handler.remove_source()

        return dumped
