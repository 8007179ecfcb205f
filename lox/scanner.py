"""Lexical scanner for Lox.

The scanner makes a single left-to-right pass over the source, keeping
three cursors: the start of the current lexeme, the current read position
and the current line. Errors are recorded and scanning carries on, so one
pass reports every bad character in the file. Callers check
``had_error`` before handing the tokens to the parser.
"""

from __future__ import annotations

from typing import List, Optional

from .errors import ScanError
from .tokens import IGNORED, KEYWORDS, OPERATORS, Token, TokenType

ESCAPES = {'"': '"', '\\': '\\', 'n': '\n', 't': '\t', 'r': '\r'}


def is_digit(c: str) -> bool:
    return '0' <= c <= '9'


def is_alpha(c: str) -> bool:
    return c.isalpha() or c == '_'


def is_alphanumeric(c: str) -> bool:
    return is_alpha(c) or is_digit(c) or c.isalnum()


class Scanner:
    def __init__(self, source: str):
        self.source = source
        self.tokens: List[Token] = []
        self.errors: List[ScanError] = []
        self.start = 0
        self.current = 0
        self.line = 1

    @property
    def had_error(self) -> bool:
        return bool(self.errors)

    def scan_tokens(self) -> List[Token]:
        while not self.is_at_end():
            self.start = self.current
            self.scan_token()
        self.tokens.append(Token(TokenType.EOF, '', None, self.line))
        return self.tokens

    def is_at_end(self) -> bool:
        return self.current >= len(self.source)

    def scan_token(self):
        c = self.advance()
        if is_alpha(c):
            self.identifier()
            return
        if is_digit(c):
            self.number()
            return
        token_type = self.match_operator()
        if token_type is None:
            self.error(f"Unexpected character '{c}'.")
            return
        if token_type in IGNORED:
            return
        if token_type == TokenType.NEWLINE:
            self.line += 1
            return
        if token_type == TokenType.QUOTE:
            self.string()
            return
        if token_type == TokenType.SLASH and self.match('/'):
            # comment runs to the end of the line
            while self.peek() != '\n' and not self.is_at_end():
                self.advance()
            return
        self.add_token(token_type)

    def match_operator(self) -> Optional[TokenType]:
        """Find the longest operator starting at the current lexeme."""
        for lexeme, token_type in OPERATORS:
            if self.source.startswith(lexeme, self.start):
                self.current = self.start + len(lexeme)
                return token_type
        return None

    def identifier(self):
        while is_alphanumeric(self.peek()):
            self.advance()
        text = self.source[self.start:self.current]
        self.add_token(KEYWORDS.get(text, TokenType.IDENTIFIER))

    def number(self):
        while is_digit(self.peek()):
            self.advance()
        # fractional part only when a digit follows the dot
        if self.peek() == '.' and is_digit(self.peek_next()):
            self.advance()
            while is_digit(self.peek()):
                self.advance()
        self.add_token(TokenType.NUMBER, self.source[self.start:self.current])

    def string(self):
        start_line = self.line
        chars: List[str] = []
        while self.peek() != '"' and not self.is_at_end():
            c = self.advance()
            if c == '\n':
                self.line += 1
            if c == '\\' and not self.is_at_end():
                escaped = self.advance()
                if escaped == '\n':
                    self.line += 1
                chars.append(ESCAPES.get(escaped, '\\' + escaped))
                continue
            chars.append(c)
        if self.is_at_end():
            self.errors.append(ScanError('Unterminated string.', start_line))
            return
        self.advance()  # closing quote
        self.add_token(TokenType.STRING, ''.join(chars), line=start_line)

    def advance(self) -> str:
        c = self.source[self.current]
        self.current += 1
        return c

    def match(self, expected: str) -> bool:
        if self.is_at_end() or self.source[self.current] != expected:
            return False
        self.current += 1
        return True

    def peek(self) -> str:
        if self.is_at_end():
            return '\0'
        return self.source[self.current]

    def peek_next(self) -> str:
        if self.current + 1 >= len(self.source):
            return '\0'
        return self.source[self.current + 1]

    def add_token(self, token_type: TokenType, literal: Optional[str] = None, line: Optional[int] = None):
        lexeme = self.source[self.start:self.current]
        self.tokens.append(Token(token_type, lexeme, literal, self.line if line is None else line))

    def error(self, message: str):
        self.errors.append(ScanError(message, self.line))


def tokenize(source: str) -> List[Token]:
    """Scan source into tokens, raising the first error if any was found."""
    scanner = Scanner(source)
    tokens = scanner.scan_tokens()
    if scanner.had_error:
        raise scanner.errors[0]
    return tokens
