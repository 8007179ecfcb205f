"""Token model for the Lox scanner and parser.

A `Token` is an immutable record of a lexical category, the lexeme it was
scanned from, an optional literal payload (the raw text of a NUMBER or the
decoded contents of a STRING) and the 1-based source line.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple


class TokenType(Enum):
    # Single-character tokens.
    LEFT_PAREN = '('
    RIGHT_PAREN = ')'
    LEFT_BRACE = '{'
    RIGHT_BRACE = '}'
    COMMA = ','
    DOT = '.'
    MINUS = '-'
    PLUS = '+'
    COLON = ':'
    SEMICOLON = ';'
    SLASH = '/'
    STAR = '*'

    # One or two character tokens.
    BANG = '!'
    BANG_EQUAL = '!='
    EQUAL = '='
    EQUAL_EQUAL = '=='
    GREATER = '>'
    GREATER_EQUAL = '>='
    LESS = '<'
    LESS_EQUAL = '<='

    # Literals.
    IDENTIFIER = 'identifier'
    STRING = 'string'
    NUMBER = 'number'

    # Keywords.
    AND = 'and'
    CLASS = 'class'
    ELSE = 'else'
    FALSE = 'false'
    FUN = 'fun'
    FOR = 'for'
    IF = 'if'
    NIL = 'nil'
    OR = 'or'
    PRINT = 'print'
    RETURN = 'return'
    SUPER = 'super'
    THIS = 'this'
    TRUE = 'true'
    VAR = 'var'
    WHILE = 'while'

    # Consumed by the scanner, never emitted.
    SPACE = ' '
    TAB = '\t'
    CARRIAGE_RETURN = '\r'
    NEWLINE = '\n'
    QUOTE = '"'

    EOF = 'eof'

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Token:
    type: TokenType
    lexeme: str
    literal: Optional[str]
    line: int

    def __str__(self) -> str:
        if self.literal is None:
            return f"{self.type} {self.lexeme}"
        return f"{self.type} {self.lexeme} {self.literal}"


KEYWORDS: Dict[str, TokenType] = {
    'and': TokenType.AND,
    'class': TokenType.CLASS,
    'else': TokenType.ELSE,
    'false': TokenType.FALSE,
    'for': TokenType.FOR,
    'fun': TokenType.FUN,
    'if': TokenType.IF,
    'nil': TokenType.NIL,
    'or': TokenType.OR,
    'print': TokenType.PRINT,
    'return': TokenType.RETURN,
    'super': TokenType.SUPER,
    'this': TokenType.THIS,
    'true': TokenType.TRUE,
    'var': TokenType.VAR,
    'while': TokenType.WHILE,
}

# Punctuation, operators and the whitespace markers, keyed by their text.
# Longest lexemes come first so that '!=' wins over '!'.
OPERATORS: List[Tuple[str, TokenType]] = sorted(
    ((t.value, t) for t in TokenType
     if t.value and not t.value.isalpha() and t is not TokenType.EOF),
    key=lambda item: len(item[0]),
    reverse=True,
)

IGNORED = {TokenType.SPACE, TokenType.TAB, TokenType.CARRIAGE_RETURN}
