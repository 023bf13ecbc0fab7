"""Token model shared by the scanner, the parser and the AST. Tokens are immutable: the scanner creates one per lexeme,
the parser only reads them, and AST nodes that need operator/name identity keep a reference to theirs.
"""

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    # single-character tokens
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    LEFT_BRACE = auto()
    RIGHT_BRACE = auto()
    COMMA = auto()
    DOT = auto()
    MINUS = auto()
    PLUS = auto()
    SEMICOLON = auto()
    SLASH = auto()
    STAR = auto()

    # one or two character tokens
    BANG = auto()
    BANG_EQUAL = auto()
    EQUAL = auto()
    EQUAL_EQUAL = auto()
    GREATER = auto()
    GREATER_EQUAL = auto()
    LESS = auto()
    LESS_EQUAL = auto()

    # literals
    IDENTIFIER = auto()
    STRING = auto()
    NUMBER = auto()
    CONSTANT = auto()  # true, false, nil

    # keywords
    AND = auto()
    BREAK = auto()
    CLASS = auto()
    ELSE = auto()
    FOR = auto()
    FUN = auto()
    IF = auto()
    OR = auto()
    PRINT = auto()
    RETURN = auto()
    SUPER = auto()
    THIS = auto()
    VAR = auto()
    WHILE = auto()

    EOF = auto()


KEYWORDS = {
    "and": TokenType.AND,
    "break": TokenType.BREAK,
    "class": TokenType.CLASS,
    "else": TokenType.ELSE,
    "for": TokenType.FOR,
    "fun": TokenType.FUN,
    "if": TokenType.IF,
    "or": TokenType.OR,
    "print": TokenType.PRINT,
    "return": TokenType.RETURN,
    "super": TokenType.SUPER,
    "this": TokenType.THIS,
    "var": TokenType.VAR,
    "while": TokenType.WHILE,
}

# literal constants are resolved by the scanner, so the parser never sees their text
CONSTANTS = {
    "true": True,
    "false": False,
    "nil": None,
}


@dataclass(frozen=True)
class Token:
    """A lexeme with its type, source line and (for identifiers, strings, numbers and constants) literal payload."""
    type: TokenType
    lexeme: str
    line: int
    literal: object = None

    @classmethod
    def eof(cls, line):
        """Synthetic end-of-file token. Always the last token the scanner produces."""
        return cls(TokenType.EOF, "", line)

    def __str__(self):
        return f"[{self.line}]{self.type.name} {self.lexeme} {self.literal!r}"
