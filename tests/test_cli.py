import json

import pytest

from lox.__main__ import main


def write(tmp_path, name, source):
    path = tmp_path / name
    path.write_text(source, encoding='utf-8')
    return path


def test_run_program_file(tmp_path, capsys):
    script = write(tmp_path, 'hello.lox', 'print "hello";\nprint 1 + 2;\n')
    main([str(script)])
    assert capsys.readouterr().out == 'hello\n3\n'


def test_missing_file(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / 'nope.lox')])
    assert excinfo.value.code == 1
    assert 'not found' in capsys.readouterr().err


def test_static_error_exit_code(tmp_path, capsys):
    script = write(tmp_path, 'bad.lox', 'print "ok";\nvar = 1;\n')
    with pytest.raises(SystemExit) as excinfo:
        main([str(script)])
    assert excinfo.value.code == 65
    captured = capsys.readouterr()
    assert captured.out == "[line 2] Error at '=': Expect variable name.\n"
    assert captured.err == ''


def test_runtime_error_exit_code(tmp_path, capsys):
    script = write(tmp_path, 'boom.lox', 'print "before";\nprint -"x";\nprint "after";\n')
    with pytest.raises(SystemExit) as excinfo:
        main([str(script)])
    assert excinfo.value.code == 70
    captured = capsys.readouterr()
    assert captured.out == 'before\nOperand must be a number.\n[line 2]\nafter\n'
    assert captured.err == ''


def test_print_ast(tmp_path, capsys):
    script = write(tmp_path, 'tree.lox', 'var a = 1;\nprint a + 2 * 3;\n')
    main(['--print-ast', str(script)])
    assert capsys.readouterr().out == '(var a 1)\n(print (+ a (* 2 3)))\n'


def test_emit_and_run_ast(tmp_path, capsys):
    script = write(tmp_path, 'calc.lox', 'var x = 10;\nx = x / 4;\nprint x;\n')
    main(['--emit-ast', str(script)])
    out_path = tmp_path / 'calc.lox.ast.json'
    assert capsys.readouterr().out.strip() == str(out_path)
    document = json.loads(out_path.read_text(encoding='utf-8'))
    assert [node['type'] for node in document] == ['Var', 'Expression', 'Print']

    main(['--ast', str(out_path)])
    assert capsys.readouterr().out == '2.5\n'


def test_emit_ast_refuses_broken_source(tmp_path):
    script = write(tmp_path, 'broken.lox', 'print (1;\n')
    with pytest.raises(SystemExit) as excinfo:
        main(['--emit-ast', str(script)])
    assert excinfo.value.code == 65
    assert not (tmp_path / 'broken.lox.ast.json').exists()


def test_verbose_writes_debug_file(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    script = write(tmp_path, 'v.lox', 'var a = 1;\nprint a;\n')
    main(['-vv', str(script)])
    assert capsys.readouterr().out == '1\n'
    trace = (tmp_path / 'debug.txt').read_text(encoding='utf-8')
    assert 'run 2 statement(s)' in trace
    assert 'define a: Number = 1' in trace


def test_no_debug_file_without_verbose(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    script = write(tmp_path, 'q.lox', 'print nil;\n')
    main([str(script)])
    assert not (tmp_path / 'debug.txt').exists()


def test_emit_ast_errors_on_stdout(tmp_path, capsys):
    script = write(tmp_path, 'half.lox', 'print 1 +;\n')
    with pytest.raises(SystemExit):
        main(['--emit-ast', str(script)])
    captured = capsys.readouterr()
    assert captured.out == "[line 1] Error at ';': Expect expression.\n"
    assert captured.err == ''


def test_deeply_nested_program_does_not_crash(tmp_path, capsys):
    depth = 2000
    script = write(tmp_path, 'deep.lox', 'print ' + '(' * depth + '1' + ')' * depth + ';\nprint "next";\n')
    with pytest.raises(SystemExit) as excinfo:
        main([str(script)])
    assert excinfo.value.code == 65
    assert 'Expression nested too deeply.' in capsys.readouterr().out
