"""JSON serialization/deserialization for Lox syntax trees.

This module converts between the AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. It supports a full
round-trip for every node type, for tokens and for literal values,
including the non-finite numbers that JSON cannot represent directly.
"""

from __future__ import annotations

from dataclasses import fields
import math
from typing import Any, Dict

from . import ast
from .tokens import Token, TokenType
from .types import NIL, NilVal

NODE_TYPES: Dict[str, type] = {
    cls.__name__: cls
    for cls in (
        ast.Literal, ast.Grouping, ast.Unary, ast.Binary, ast.Logical,
        ast.Variable, ast.Assign, ast.Call, ast.Get, ast.Set, ast.This,
        ast.Super, ast.Expression, ast.Print, ast.Var, ast.Block, ast.If,
        ast.While, ast.Function, ast.Return, ast.Class,
    )
}


def token_to_obj(token: Token) -> Dict[str, Any]:
    return {
        "__token__": token.type.name,
        "lexeme": token.lexeme,
        "literal": token.literal,
        "line": token.line,
    }


def token_from_obj(o: Dict[str, Any]) -> Token:
    return Token(TokenType[o["__token__"]], o["lexeme"], o.get("literal"), o["line"])


def value_to_obj(value: Any) -> Any:
    if isinstance(value, NilVal):
        return {"__nil__": True}
    if isinstance(value, float) and not math.isfinite(value):
        if math.isnan(value):
            return {"__number__": "nan"}
        return {"__number__": "inf" if value > 0 else "-inf"}
    return value


def value_from_obj(o: Any) -> Any:
    if isinstance(o, dict):
        if o.get("__nil__"):
            return NIL
        if "__number__" in o:
            return float(o["__number__"])
        raise ValueError(f"Invalid literal object: {o!r}")
    # JSON may hand back an int for a number written without a fraction
    if isinstance(o, int) and not isinstance(o, bool):
        return float(o)
    return o


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None
    if isinstance(node, list):
        return [ast_to_obj(n) for n in node]
    if isinstance(node, Token):
        return token_to_obj(node)
    if isinstance(node, ast.Literal):
        return {"type": "Literal", "value": value_to_obj(node.value)}
    if type(node).__name__ in NODE_TYPES:
        obj: Dict[str, Any] = {"type": type(node).__name__}
        for f in fields(node):
            obj[f.name] = ast_to_obj(getattr(node, f.name))
        return obj
    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None:
        return None
    if isinstance(obj, list):
        return [ast_from_obj(o) for o in obj]
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    if "__token__" in obj:
        return token_from_obj(obj)
    t = obj.get("type")
    if t == "Literal":
        return ast.Literal(value_from_obj(obj["value"]))
    cls = NODE_TYPES.get(t)
    if cls is None:
        raise ValueError(f"Unknown AST node type: {t}")
    return cls(**{f.name: ast_from_obj(obj.get(f.name)) for f in fields(cls)})
