"""Lexical analysis for Lox. The scanner is the only part of the interpreter that deals with individual characters:
everything after it works on tokens.

Lexical grammar, loosely:

```
<number>     ::= <digit>+ ( "." <digit>+ )?          ; no exponent, no leading or trailing "."
<string>     ::= '"' <any char except '"'>* '"'       ; may span lines, no escape sequences
<identifier> ::= <alpha> ( <alpha> | <digit> )*       ; <alpha> is [a-zA-Z_]
<comment>    ::= "//" <any char except newline>*
```

Operators are matched greedily: `==` wins over `=`, `!=` over `!`, and so on.
"""

from lox.core.tokens import CONSTANTS, KEYWORDS, Token, TokenType
from lox.lang.error import ScanError


class Scanner:
    """Single pass, left-to-right scanner with one character of lookahead (two for numbers). Errors do not stop the
    scan: they are collected in self.errors and the scanner carries on with the next character, so that the token
    stream is as complete as possible. An EOF token is always appended.
    """
    SINGLE = {
        "(": TokenType.LEFT_PAREN,
        ")": TokenType.RIGHT_PAREN,
        "{": TokenType.LEFT_BRACE,
        "}": TokenType.RIGHT_BRACE,
        ",": TokenType.COMMA,
        ".": TokenType.DOT,
        "-": TokenType.MINUS,
        "+": TokenType.PLUS,
        ";": TokenType.SEMICOLON,
        "*": TokenType.STAR,
    }
    # char: (token type alone, token type when followed by "=")
    PAIRED = {
        "!": (TokenType.BANG, TokenType.BANG_EQUAL),
        "=": (TokenType.EQUAL, TokenType.EQUAL_EQUAL),
        "<": (TokenType.LESS, TokenType.LESS_EQUAL),
        ">": (TokenType.GREATER, TokenType.GREATER_EQUAL),
    }
    WHITESPACE = " \r\t"

    def __init__(self, source):
        self.source = source
        self.tokens = []
        self.errors = []

        self.start = 0    # first character of the lexeme being scanned
        self.current = 0  # character about to be consumed
        self.line = 1

    def scan_tokens(self):
        """Scans the whole source and returns the token list, EOF included."""
        while not self.is_at_end():
            self.start = self.current
            try:
                self.scan_token()
            except ScanError as error:
                self.errors.append(error)

        self.tokens.append(Token.eof(self.line))
        return self.tokens

    def success(self):
        """Whether or not the scan finished without errors."""
        return not self.errors

    def scan_token(self):
        char = self.advance()

        if char in Scanner.SINGLE:
            self.add_token(Scanner.SINGLE[char])

        elif char in Scanner.PAIRED:
            alone, with_equal = Scanner.PAIRED[char]
            self.add_token(with_equal if self.match("=") else alone)

        elif char == "/":
            if self.match("/"):
                while self.peek() != "\n" and not self.is_at_end():
                    self.advance()
            else:
                self.add_token(TokenType.SLASH)

        elif char in Scanner.WHITESPACE:
            pass

        elif char == "\n":
            self.line += 1

        elif char == "\"":
            self.string()

        elif Scanner.is_digit(char):
            self.number()

        elif Scanner.is_alpha(char):
            self.identifier()

        else:
            raise ScanError(f"Unexpected character '{char}'.", self.line)

    def string(self):
        while self.peek() != "\"" and not self.is_at_end():
            if self.peek() == "\n":
                self.line += 1
            self.advance()

        if self.is_at_end():
            raise ScanError("Unterminated string.", self.line)

        self.advance()  # closing "
        self.add_token(TokenType.STRING, self.source[self.start + 1:self.current - 1])

    def number(self):
        while Scanner.is_digit(self.peek()):
            self.advance()

        # a fractional part needs at least one digit after the "."
        if self.peek() == "." and Scanner.is_digit(self.peek_next()):
            self.advance()
            while Scanner.is_digit(self.peek()):
                self.advance()

        self.add_token(TokenType.NUMBER, float(self.source[self.start:self.current]))

    def identifier(self):
        while Scanner.is_alpha(self.peek()) or Scanner.is_digit(self.peek()):
            self.advance()

        text = self.source[self.start:self.current]
        if text in KEYWORDS:
            self.add_token(KEYWORDS[text])
        elif text in CONSTANTS:
            self.add_token(TokenType.CONSTANT, CONSTANTS[text])
        else:
            self.add_token(TokenType.IDENTIFIER, text)

    def add_token(self, type_, literal=None):
        self.tokens.append(Token(type_, self.source[self.start:self.current], self.line, literal))

    def advance(self):
        char = self.source[self.current]
        self.current += 1
        return char

    def match(self, expected):
        """Consumes the next character only if it is expected."""
        if self.is_at_end() or self.source[self.current] != expected:
            return False
        self.current += 1
        return True

    def peek(self):
        return "\0" if self.is_at_end() else self.source[self.current]

    def peek_next(self):
        if self.current + 1 >= len(self.source):
            return "\0"
        return self.source[self.current + 1]

    def is_at_end(self):
        return self.current >= len(self.source)

    @staticmethod
    def is_digit(char):
        return "0" <= char <= "9"

    @staticmethod
    def is_alpha(char):
        return "a" <= char <= "z" or "A" <= char <= "Z" or char == "_"


def scan(source):
    """Scans source and returns its tokens. If the scan found errors, the first one is raised once the whole source has
    been scanned.
    """
    scanner = Scanner(source)
    tokens = scanner.scan_tokens()
    if not scanner.success():
        raise scanner.errors[0]
    return tokens
