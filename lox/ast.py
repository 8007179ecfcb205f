"""Abstract Syntax Tree (AST) definitions for Lox.

Two closed families of nodes: expressions (:class:`Expr`) and statements
(:class:`Stmt`). Each node owns its children, so a parsed program is a
strict tree. Every node also receives a process-wide unique ``node_id``
which is not part of node equality; it is there for passes that need to
key data by node identity.

Only part of the grammar is produced by the parser. The Logical, Call,
Get, Set, This and Super expressions and the Block, If, While, Function,
Return and Class statements can be built directly but are not evaluated.
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import count
from typing import Any, List, Optional

from .tokens import Token

_node_ids = count(1)


@dataclass
class Node:
    """Base class for all AST nodes."""

    def __post_init__(self):
        self.node_id = next(_node_ids)


@dataclass
class Expr(Node):
    pass


@dataclass
class Stmt(Node):
    pass


# Expressions

@dataclass
class Literal(Expr):
    value: Any  # a Lox value; None means the payload is missing


@dataclass
class Grouping(Expr):
    expression: Expr


@dataclass
class Unary(Expr):
    operator: Token
    right: Expr


@dataclass
class Binary(Expr):
    left: Expr
    operator: Token
    right: Expr


@dataclass
class Logical(Expr):
    left: Expr
    operator: Token
    right: Expr


@dataclass
class Variable(Expr):
    name: Token


@dataclass
class Assign(Expr):
    name: Token
    value: Expr


@dataclass
class Call(Expr):
    callee: Expr
    paren: Token
    arguments: List[Expr]


@dataclass
class Get(Expr):
    object: Expr
    name: Token


@dataclass
class Set(Expr):
    object: Expr
    name: Token
    value: Expr


@dataclass
class This(Expr):
    keyword: Token


@dataclass
class Super(Expr):
    keyword: Token
    method: Token


# Statements

@dataclass
class Expression(Stmt):
    expression: Expr


@dataclass
class Print(Stmt):
    expression: Expr


@dataclass
class Var(Stmt):
    name: Token
    initializer: Optional[Expr]


@dataclass
class Block(Stmt):
    statements: List[Stmt]


@dataclass
class If(Stmt):
    condition: Expr
    then_branch: Stmt
    else_branch: Optional[Stmt]


@dataclass
class While(Stmt):
    condition: Expr
    body: Stmt


@dataclass
class Function(Stmt):
    name: Token
    params: List[Token]
    body: List[Stmt]


@dataclass
class Return(Stmt):
    keyword: Token
    value: Optional[Expr]


@dataclass
class Class(Stmt):
    name: Token
    superclass: Optional[Variable]
    methods: List[Function]
