from pathlib import Path

from lox.interpreter import run_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_8_chained_assignment(capsys):
    source = (EXAMPLES / 'program_8.lox').read_text(encoding='utf-8')
    run_program(source)
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == ['3', '3', '4', '4']
