from typing import Optional

from lox.tokens import Token, TokenType


class LoxError(Exception):
    """Base class for every error reported against Lox source code."""
    def __init__(self, message: str, line: int):
        super().__init__(message)
        self.message = message
        self.line = line


class ScanError(LoxError):
    """Unrecognized character or unterminated string literal."""
    def __str__(self) -> str:
        return f"[line {self.line}] Error: {self.message}"


class ParseError(LoxError):
    """Grammar violation found while parsing a declaration."""
    def __init__(self, token: Token, message: str):
        super().__init__(message, token.line)
        self.token = token

    def __str__(self) -> str:
        if self.token.type == TokenType.EOF:
            return f"[line {self.line}] Error at end: {self.message}"
        return f"[line {self.line}] Error at '{self.token.lexeme}': {self.message}"


class LoxRuntimeError(LoxError):
    """Error raised while evaluating a single top-level statement."""
    def __init__(self, token: Optional[Token], message: str, line: Optional[int] = None):
        if line is None:
            line = token.line if token is not None else 0
        super().__init__(message, line)
        self.token = token

    def __str__(self) -> str:
        return f"{self.message}\n[line {self.line}]"


class UndefinedVariableError(LoxRuntimeError):
    """Lookup or assignment of a name that was never defined."""
    def __init__(self, name: Token):
        super().__init__(name, f"Undefined variable '{name.lexeme}'.")


class LoxTypeError(LoxRuntimeError):
    """Operand of the wrong type for an operator."""
    pass
