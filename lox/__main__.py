"""CLI entry point for the Lox interpreter.

Usage:
    python -m lox [-v|-vv|-vvv] [script]
    python -m lox [-v...] --emit-ast <script>
    python -m lox [-v...] --ast <ast_json_file>
    python -m lox --print-ast <script>

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse the given .lox file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file
  --print-ast   Print the parenthesized syntax tree of every statement

Without a script the interactive shell is started. Debug information is
written to `debug.txt` in the current directory when verbosity is greater
than zero.
"""

import argparse
import json
import sys
from pathlib import Path

from .ast_json import ast_to_obj, ast_from_obj
from .ast_printer import print_ast
from .interpreter import Interpreter, run_program
from .parser import parse_program
from .repl import Shell

EXIT_STATIC_ERROR = 65
EXIT_RUNTIME_ERROR = 70


def read_source(path_arg: str) -> str:
    program_file = Path(path_arg)
    if not program_file.exists():
        print(f"Error: file {program_file} not found", file=sys.stderr)
        sys.exit(1)
    with open(program_file, 'r', encoding='utf-8') as f:
        return f.read()


def parse_or_exit(source: str):
    statements, errors = parse_program(source)
    if errors:
        for error in errors:
            print(error)
        sys.exit(EXIT_STATIC_ERROR)
    return statements


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog='lox', description="Lox language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='LOX_FILE', help='emit AST JSON for the given .lox file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    group.add_argument('--print-ast', metavar='LOX_FILE', help='print the syntax tree of the given .lox file')
    parser.add_argument('program', nargs='?', help='Lox program file (.lox) to execute; omit for the interactive shell')
    args = parser.parse_args(argv)

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        statements = parse_or_exit(read_source(args.emit_ast))
        obj = ast_to_obj(statements)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(obj, out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    if args.print_ast:
        for stmt in parse_or_exit(read_source(args.print_ast)):
            print(print_ast(stmt))
        return

    interpreter = Interpreter(debug_level=args.v)
    try:
        # Execute from AST JSON
        if args.ast:
            statements = ast_from_obj(json.loads(read_source(args.ast)))
            interpreter.run(statements)
        elif args.program:
            run_program(read_source(args.program), interpreter)
            if interpreter.had_error:
                sys.exit(EXIT_STATIC_ERROR)
        else:
            Shell(interpreter).cmdloop()
            return
    finally:
        interpreter.close()
    if interpreter.had_runtime_error:
        sys.exit(EXIT_RUNTIME_ERROR)


if __name__ == '__main__':
    main()
