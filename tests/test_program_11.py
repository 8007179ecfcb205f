from pathlib import Path

from lox.interpreter import run_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_11_parse_errors_prevent_execution(capsys):
    source = (EXAMPLES / 'program_11.lox').read_text(encoding='utf-8')
    interp = run_program(source)
    captured = capsys.readouterr()
    assert captured.err == ''
    assert captured.out.strip().split('\n') == [
        "[line 2] Error at '=': Expect variable name.",
        "[line 3] Error at ';': Expect ')' after expression.",
    ]
    assert interp.had_error
    assert 'ok' not in interp.global_env
