# Lox language package
# This package provides a scanner, parser and tree-walking interpreter for Lox.
from .errors import LoxError, LoxRuntimeError, ParseError, ScanError
from .environment import Environment
from .interpreter import Interpreter, run_file, run_program
from .parser import Parser, parse_program
from .scanner import Scanner

__all__ = [
    'run_program',
    'run_file',
    'parse_program',
    'Interpreter',
    'Environment',
    'Parser',
    'Scanner',
    'LoxError',
    'LoxRuntimeError',
    'ParseError',
    'ScanError',
]
