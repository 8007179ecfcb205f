import math

import pytest

from lox.types import NIL, format_number, is_value, stringify, type_name, values_equal


@pytest.mark.parametrize('value, expected', [
    (7.0, '7'),
    (2.5, '2.5'),
    (0.1, '0.1'),
    (-4.0, '-4'),
    (1e21, '1000000000000000000000'),
    (123.456, '123.456'),
    (math.inf, 'inf'),
    (-math.inf, '-inf'),
    (math.nan, 'NaN'),
])
def test_format_number(value, expected):
    assert format_number(value) == expected


def test_stringify():
    assert stringify(True) == 'true'
    assert stringify(False) == 'false'
    assert stringify(NIL) == 'nil'
    assert stringify('Hello, Lox!') == 'Hello, Lox!'
    assert stringify(3.0) == '3'


def test_type_names():
    assert [type_name(v) for v in (True, 1.0, 's', NIL)] == ['Boolean', 'Number', 'String', 'Nil']


def test_values_equal_never_crosses_variants():
    assert values_equal(1.0, 1.0)
    assert values_equal('a', 'a')
    assert values_equal(NIL, NIL)
    assert not values_equal(True, 1.0)
    assert not values_equal(False, 0.0)
    assert not values_equal(NIL, False)
    assert not values_equal('1', 1.0)


def test_nan_is_not_equal_to_itself():
    assert not values_equal(math.nan, math.nan)


def test_is_value():
    assert is_value(1.0) and is_value(NIL) and is_value('') and is_value(False)
    assert not is_value(None)
    assert not is_value(1)
