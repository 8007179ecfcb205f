import pytest

from lox.environment import Environment
from lox.errors import UndefinedVariableError
from lox.tokens import Token, TokenType
from lox.types import NIL


def name(lexeme, line=1):
    return Token(TokenType.IDENTIFIER, lexeme, None, line)


def test_define_and_get():
    env = Environment()
    env.define('z', '1234')
    assert env.get(name('z')) == '1234'


def test_get_nonexistent_variable():
    env = Environment()
    with pytest.raises(UndefinedVariableError) as excinfo:
        env.get(name('y', line=7))
    assert excinfo.value.line == 7
    assert str(excinfo.value) == "Undefined variable 'y'.\n[line 7]"


def test_assign_requires_existing_binding():
    env = Environment()
    with pytest.raises(UndefinedVariableError):
        env.assign(name('x'), 1.0)
    assert 'x' not in env


def test_assign_overwrites_existing_binding():
    env = Environment()
    env.define('x', NIL)
    env.assign(name('x'), 1.0)
    assert env.get(name('x')) == 1.0


def test_redefine_variable():
    env = Environment()
    env.define('z', '1234')
    env.define('z', '1')
    assert env.get(name('z')) == '1'


def test_nested_scope_lookup_and_shadowing():
    outer = Environment()
    outer.define('a', 1.0)
    outer.define('b', 2.0)
    inner = Environment(enclosing=outer)
    inner.define('a', 'shadow')
    assert inner.get(name('a')) == 'shadow'
    assert inner.get(name('b')) == 2.0
    assert outer.get(name('a')) == 1.0
    assert 'b' in inner


def test_nested_assign_updates_nearest_binding():
    outer = Environment()
    outer.define('a', 1.0)
    inner = Environment(enclosing=outer)
    inner.assign(name('a'), 5.0)
    assert outer.get(name('a')) == 5.0
    assert 'a' not in inner.values
    with pytest.raises(UndefinedVariableError):
        inner.assign(name('missing'), 1.0)
