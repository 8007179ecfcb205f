import json
import math

import pytest

from lox.ast import Literal
from lox.ast_json import ast_from_obj, ast_to_obj, token_from_obj, token_to_obj
from lox.ast_printer import print_ast
from lox.parser import parse_expression, parse_program
from lox.tokens import Token, TokenType
from lox.types import NIL


def roundtrip(node):
    return ast_from_obj(json.loads(json.dumps(ast_to_obj(node))))


def test_program_roundtrip():
    source = 'var a = 1;\nvar b;\nb = a = 2 * (3 - 1);\nprint !true == nil;\nprint "s" + "t";'
    statements, errors = parse_program(source)
    assert errors == []
    loaded = roundtrip(statements)
    assert loaded == statements
    assert [print_ast(s) for s in loaded] == [print_ast(s) for s in statements]


def test_token_fields_survive():
    token = Token(TokenType.STRING, '"hi"', 'hi', 12)
    obj = token_to_obj(token)
    assert obj['__token__'] == 'STRING'
    assert token_from_obj(obj) == token


def test_nil_and_numbers():
    assert roundtrip(Literal(NIL)).value is NIL
    loaded = roundtrip(parse_expression('4'))
    assert loaded.value == 4.0 and isinstance(loaded.value, float)


def test_non_finite_numbers():
    assert roundtrip(Literal(math.inf)).value == math.inf
    assert roundtrip(Literal(-math.inf)).value == -math.inf
    assert math.isnan(roundtrip(Literal(math.nan)).value)
    # the emitted document stays strict JSON
    json.dumps(ast_to_obj(Literal(math.nan)), allow_nan=False)


def test_integer_from_json_becomes_number():
    assert ast_from_obj({"type": "Literal", "value": 3}).value == 3.0


def test_unknown_node_type():
    with pytest.raises(ValueError):
        ast_from_obj({"type": "Lambda"})
    with pytest.raises(TypeError):
        ast_to_obj(object())
    with pytest.raises(TypeError):
        ast_from_obj(42)
