"""Parenthesized prefix rendering of Lox syntax trees.

``2 + 2 * 2`` renders as ``(+ 2 (* 2 2))``, which makes precedence and
associativity visible at a glance. Used by the ``--print-ast`` command line
mode, the debug trace and the parser tests.
"""

from __future__ import annotations

from typing import Any

from .ast import (
    Assign, Binary, Block, Call, Class, Expression, Function, Get, Grouping,
    If, Literal, Logical, Print, Return, Set, Super, This, Unary, Var,
    Variable, While,
)
from .types import stringify


def parenthesize(name: str, *parts: Any) -> str:
    return '(' + ' '.join([name, *(print_ast(p) for p in parts)]) + ')'


def print_literal(value: Any) -> str:
    if value is None:
        return '<missing>'
    if isinstance(value, str):
        return f'"{value}"'
    return stringify(value)


def print_ast(node: Any) -> str:
    # Expressions
    if isinstance(node, Literal):
        return print_literal(node.value)
    if isinstance(node, Grouping):
        return parenthesize('group', node.expression)
    if isinstance(node, Unary):
        return parenthesize(node.operator.lexeme, node.right)
    if isinstance(node, (Binary, Logical)):
        return parenthesize(node.operator.lexeme, node.left, node.right)
    if isinstance(node, Variable):
        return node.name.lexeme
    if isinstance(node, Assign):
        return parenthesize('=', node.name.lexeme, node.value)
    if isinstance(node, Call):
        return parenthesize('call', node.callee, *node.arguments)
    if isinstance(node, Get):
        return parenthesize('.', node.object, node.name.lexeme)
    if isinstance(node, Set):
        return parenthesize('=', node.object, node.name.lexeme, node.value)
    if isinstance(node, This):
        return 'this'
    if isinstance(node, Super):
        return parenthesize('super', node.method.lexeme)
    # Statements
    if isinstance(node, Expression):
        return parenthesize(';', node.expression)
    if isinstance(node, Print):
        return parenthesize('print', node.expression)
    if isinstance(node, Var):
        if node.initializer is None:
            return parenthesize('var', node.name.lexeme)
        return parenthesize('var', node.name.lexeme, node.initializer)
    if isinstance(node, Block):
        return parenthesize('block', *node.statements)
    if isinstance(node, If):
        if node.else_branch is None:
            return parenthesize('if', node.condition, node.then_branch)
        return parenthesize('if-else', node.condition, node.then_branch, node.else_branch)
    if isinstance(node, While):
        return parenthesize('while', node.condition, node.body)
    if isinstance(node, Function):
        params = '(' + ' '.join(p.lexeme for p in node.params) + ')'
        return parenthesize('fun', node.name.lexeme, params, *node.body)
    if isinstance(node, Return):
        if node.value is None:
            return '(return)'
        return parenthesize('return', node.value)
    if isinstance(node, Class):
        parts = [node.name.lexeme]
        if node.superclass is not None:
            parts.append('< ' + node.superclass.name.lexeme)
        return parenthesize('class', *parts, *node.methods)
    # plain text (names already rendered by the caller)
    if isinstance(node, str):
        return node
    raise NotImplementedError(f"print_ast: unexpected node type {type(node)}")
