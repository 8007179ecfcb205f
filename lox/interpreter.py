"""Tree-walking interpreter for Lox.

Statements are executed in order against an explicitly passed
:class:`~lox.environment.Environment`. A runtime error aborts only the
top-level statement that raised it: it is reported, recorded and the next
statement runs. The interpreter keeps one global environment for its whole
life, so repeated calls to :meth:`Interpreter.run` (as the interactive
shell does) see each other's variables.
"""

from __future__ import annotations

from dataclasses import fields, is_dataclass
import math
import sys
from typing import Any, List, Optional, TextIO

from .ast import (
    Assign, Binary, Expr, Expression, Grouping, Literal, Print, Stmt, Unary,
    Var, Variable,
)
from .ast_printer import print_ast
from .environment import Environment
from .errors import LoxError, LoxRuntimeError, LoxTypeError
from .parser import NESTED_TOO_DEEPLY, Parser
from .scanner import Scanner
from .tokens import Token, TokenType
from .types import NIL, NilVal, is_value, stringify, type_name, values_equal


def divide(a: float, b: float) -> float:
    """IEEE 754 division: dividing by zero gives an infinity or NaN."""
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        # the sign of the zero decides the sign of the infinity
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


ARITHMETIC = {
    TokenType.MINUS: lambda a, b: a - b,
    TokenType.SLASH: divide,
    TokenType.STAR: lambda a, b: a * b,
}

COMPARISON = {
    TokenType.GREATER: lambda a, b: a > b,
    TokenType.GREATER_EQUAL: lambda a, b: a >= b,
    TokenType.LESS: lambda a, b: a < b,
    TokenType.LESS_EQUAL: lambda a, b: a <= b,
}


def statement_line(node: Any) -> int:
    """Line of the first token found in a statement, walking without recursion."""
    stack = [node]
    while stack:
        item = stack.pop()
        if isinstance(item, Token):
            return item.line
        if isinstance(item, list):
            stack.extend(reversed(item))
        elif is_dataclass(item):
            stack.extend(reversed([getattr(item, f.name) for f in fields(item)]))
    return 0


class Interpreter:
    """Core interpreter that executes Lox statements."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt',
                 stdout: Optional[TextIO] = None):
        self.global_env = Environment()
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 else None
        self._stdout = stdout
        self.static_errors: List[LoxError] = []
        self.runtime_errors: List[LoxRuntimeError] = []

    # Looked up on every write so that a later sys.stdout swap is honoured
    @property
    def stdout(self) -> TextIO:
        return self._stdout if self._stdout is not None else sys.stdout

    @property
    def had_error(self) -> bool:
        return bool(self.static_errors)

    @property
    def had_runtime_error(self) -> bool:
        return bool(self.runtime_errors)

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg, file=sys.stderr)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    def report(self, error: LoxError):
        # diagnostics share the output stream with print
        print(error, file=self.stdout)

    # Public API
    def run(self, statements: List[Stmt], env: Optional[Environment] = None) -> List[LoxRuntimeError]:
        if env is None:
            env = self.global_env
        errors: List[LoxRuntimeError] = []
        self.debug(f"run {len(statements)} statement(s)")
        for stmt in statements:
            try:
                self.execute(stmt, env)
            except RecursionError:
                error = LoxRuntimeError(None, NESTED_TOO_DEEPLY, statement_line(stmt))
                self.debug(f"recursion limit hit at line {error.line}")
                self.report(error)
                errors.append(error)
            except LoxRuntimeError as error:
                self.debug(f"runtime error at line {error.line}: {error.message}")
                self.report(error)
                errors.append(error)
        self.runtime_errors.extend(errors)
        return errors

    def execute(self, node: Stmt, env: Environment):
        if self.debug_level >= 3:
            self.debug(f"execute {print_ast(node)}")
        if isinstance(node, Expression):
            self.evaluate(node.expression, env)
            return
        if isinstance(node, Print):
            value = self.evaluate(node.expression, env)
            print(stringify(value), file=self.stdout)
            return
        if isinstance(node, Var):
            value = NIL
            if node.initializer is not None:
                value = self.evaluate(node.initializer, env)
            env.define(node.name.lexeme, value)
            if self.debug_level >= 2:
                self.debug(f"define {node.name.lexeme}: {type_name(value)} = {stringify(value)}")
            return
        raise NotImplementedError(f"execute: unsupported statement {type(node).__name__}")

    def evaluate(self, node: Expr, env: Environment) -> Any:
        if isinstance(node, Literal):
            if not is_value(node.value):
                raise NotImplementedError(f"evaluate: literal without a Lox value: {node.value!r}")
            return node.value
        if isinstance(node, Grouping):
            return self.evaluate(node.expression, env)
        if isinstance(node, Variable):
            return env.get(node.name)
        if isinstance(node, Assign):
            value = self.evaluate(node.value, env)
            env.assign(node.name, value)
            if self.debug_level >= 2:
                self.debug(f"assign {node.name.lexeme}: {type_name(value)} = {stringify(value)}")
            return value
        if isinstance(node, Unary):
            right = self.evaluate(node.right, env)
            return self.apply_unary_op(node.operator, right)
        if isinstance(node, Binary):
            left = self.evaluate(node.left, env)
            right = self.evaluate(node.right, env)
            return self.apply_binary_op(node.operator, left, right)
        raise NotImplementedError(f"evaluate: unsupported expression {type(node).__name__}")

    def apply_unary_op(self, operator: Token, operand: Any) -> Any:
        if operator.type == TokenType.MINUS:
            if isinstance(operand, float):
                return -operand
            raise LoxTypeError(operator, "Operand must be a number.")
        if operator.type == TokenType.BANG:
            # only booleans and nil have a truth value
            if isinstance(operand, bool):
                return not operand
            if isinstance(operand, NilVal):
                return True
            raise LoxTypeError(operator, "Operand must be a boolean.")
        raise NotImplementedError(f"unknown unary operator {operator.lexeme}")

    def apply_binary_op(self, operator: Token, a: Any, b: Any) -> Any:
        op = operator.type
        if op == TokenType.PLUS:
            if isinstance(a, float) and isinstance(b, float):
                return a + b
            if isinstance(a, str) and isinstance(b, str):
                return a + b
            raise LoxTypeError(operator, "Operands must be two numbers or two strings.")
        if op in ARITHMETIC or op in COMPARISON:
            if not (isinstance(a, float) and isinstance(b, float)):
                raise LoxTypeError(operator, "Operands must be numbers.")
            if op in ARITHMETIC:
                return ARITHMETIC[op](a, b)
            return COMPARISON[op](a, b)
        if op == TokenType.EQUAL_EQUAL:
            return values_equal(a, b)
        if op == TokenType.BANG_EQUAL:
            return not values_equal(a, b)
        raise NotImplementedError(f"unknown binary operator {operator.lexeme}")


def run_program(source: str, interpreter: Optional[Interpreter] = None, debug_level: int = 0) -> Interpreter:
    """Scan, parse and run Lox source code.

    Every scan and parse error is reported, and nothing runs if there was
    one. The interpreter is returned so callers can inspect
    `static_errors` and `runtime_errors`.
    """
    if interpreter is None:
        interpreter = Interpreter(debug_level=debug_level)
    scanner = Scanner(source)
    tokens = scanner.scan_tokens()
    if interpreter.debug_level >= 2:
        for token in tokens:
            interpreter.debug(f"token [line {token.line}] {token}")
    parser = Parser(tokens)
    statements = parser.parse()
    errors: List[LoxError] = [*scanner.errors, *parser.errors]
    interpreter.static_errors = errors
    if errors:
        for error in errors:
            interpreter.report(error)
        interpreter.debug(f"{len(errors)} static error(s), nothing executed")
        return interpreter
    interpreter.run(statements)
    return interpreter


def run_file(file_path: str, debug_level: int = 0) -> Interpreter:
    """Run a Lox file and return the interpreter instance."""
    with open(file_path, 'r', encoding='utf-8') as f:
        source = f.read()
    interpreter = Interpreter(debug_level=debug_level)
    try:
        return run_program(source, interpreter)
    finally:
        interpreter.close()
