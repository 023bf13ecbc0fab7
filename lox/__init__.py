"""Lox tree-walking interpreter: public API."""

from lox.core.interpreter import Interpreter
from lox.core.parser import Parser
from lox.core.scanner import scan


def parse(source):
    """Scans and parses Lox source into a list of statements. Raises the first ScanError, or the first ParseError once
    the whole source has been parsed.
    """
    parser = Parser(scan(source))
    statements = parser.parse()
    if not parser.success():
        raise parser.errors[0]
    return statements


def run(source, interpreter=None):
    """Scans, parses and (if that succeeded) interprets source. Pass an interpreter to keep globals between runs.
    Returns the interpreter used.
    """
    statements = parse(source)
    if interpreter is None:
        interpreter = Interpreter()
    interpreter.interpret(statements)
    return interpreter
