"""Runtime values for the Lox interpreter.

Lox values map onto native Python objects:

* Boolean -> ``bool``
* Number  -> ``float``
* String  -> ``str``
* Nil     -> the ``NIL`` singleton of :class:`NilVal`

Python considers ``True == 1.0`` and ``hash(True) == hash(1.0)``, so
equality between Lox values must always go through :func:`values_equal`,
which never treats two different variants as equal.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Union
import math


@dataclass(frozen=True)
class NilVal:
    """Marker object for the Lox `nil` value."""

    def __repr__(self) -> str:
        return 'nil'


NIL = NilVal()

Value = Union[bool, float, str, NilVal]


def is_value(value: Any) -> bool:
    return isinstance(value, (bool, float, str, NilVal))


def type_name(value: Any) -> str:
    """Return the Lox type name of a runtime value."""
    if isinstance(value, bool):
        return 'Boolean'
    if isinstance(value, float):
        return 'Number'
    if isinstance(value, str):
        return 'String'
    if isinstance(value, NilVal):
        return 'Nil'
    return type(value).__name__


def number_from_literal(text: str) -> float:
    """Convert the literal payload of a NUMBER token to a Lox number."""
    return float(text)


def values_equal(a: Any, b: Any) -> bool:
    """Structural equality, only defined within the same variant."""
    if type_name(a) != type_name(b):
        return False
    return a == b


def format_number(value: float) -> str:
    """Shortest round-trip form, without exponent or a trailing '.0'."""
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'inf' if value > 0 else '-inf'
    text = format(Decimal(repr(value)), 'f')
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    return text


def stringify(value: Any) -> str:
    """Convert a Lox value to the text written by `print`."""
    if isinstance(value, NilVal):
        return 'nil'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float):
        return format_number(value)
    if isinstance(value, str):
        return value
    return str(value)
