"""Interactive mode for the Lox interpreter. Uses cmd as backend."""

import cmd

from .interpreter import Interpreter, run_program


class Shell(cmd.Cmd):
    """Lox interpreter shell.

    Every entered line runs against the same interpreter, so variables
    declared on one line are visible on the next. A line ending in ';'
    asks for a continuation line; input is executed once a line without a
    trailing ';' (an empty line, for instance) is entered.
    """
    intro = "Welcome to lox! (Type exit to quit)"
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "

    builtins = {"help", "exit", "EOF"}

    def __init__(self, interpreter=None, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.interpreter = interpreter if interpreter is not None else Interpreter()
        self._tmp_line = ""

    def parseline(self, line):
        """Only a bare `help`, `exit` or `EOF` is a shell command; the rest is Lox."""
        cmd, arg, line = super().parseline(line)
        if cmd not in self.builtins or arg:
            return None, None, line
        return cmd, arg, line

    def default(self, line):
        """Executes arbitrary Lox source."""
        source = self._tmp_line + line + "\n"
        if line.rstrip().endswith(";"):
            self._tmp_line = source
            self.prompt = self.secondary_prompt
            return
        self._tmp_line = ""
        self.prompt = self._tmp_prompt
        run_program(source, self.interpreter)

    def emptyline(self):
        """Runs pending continuation lines instead of repeating the last command."""
        if self._tmp_line:
            self.default("")

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Lox is a small dynamically-typed scripting language.\n\n"
              "Try 'var a = 1 + 2;' then 'print a * 2;'. Statements ending in ';'\n"
              "continue on the next line; enter an empty line to run them.\n"
              "Type 'exit' to quit.", file=self.stdout)

    def do_EOF(self, arg):
        """Exits interpreter."""
        print(file=self.stdout)
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
