from __future__ import annotations

from typing import Any, Dict, Optional

from .errors import UndefinedVariableError
from .tokens import Token


class Environment:
    """Maps variable names to values, optionally nested in an enclosing scope.

    `define` always succeeds and overwrites a binding in this scope. `assign`
    and `get` require the name to be bound here or in an enclosing scope.
    """
    def __init__(self, enclosing: Optional['Environment'] = None):
        self.enclosing = enclosing
        self.values: Dict[str, Any] = {}

    def __contains__(self, name: str) -> bool:
        if name in self.values:
            return True
        return self.enclosing is not None and name in self.enclosing

    def define(self, name: str, value: Any):
        self.values[name] = value

    def get(self, name: Token) -> Any:
        if name.lexeme in self.values:
            return self.values[name.lexeme]
        if self.enclosing is not None:
            return self.enclosing.get(name)
        raise UndefinedVariableError(name)

    def assign(self, name: Token, value: Any):
        if name.lexeme in self.values:
            self.values[name.lexeme] = value
            return
        if self.enclosing is not None:
            self.enclosing.assign(name, value)
            return
        raise UndefinedVariableError(name)
