from pathlib import Path

from lox.interpreter import run_program
from lox.types import NIL

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_2_no_output(capsys):
    source = (EXAMPLES / 'program_2.lox').read_text(encoding='utf-8')
    interp = run_program(source)
    captured = capsys.readouterr()
    # Program 2 has no print statements so output should be empty
    assert captured.out == ''
    assert captured.err == ''
    assert interp.global_env.values['a'] == 2.0
    assert interp.global_env.values['b'] is NIL
