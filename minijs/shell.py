"""Interactive mode for minijs. Uses cmd as backend."""

from typing import Any, Optional, TextIO, Tuple

import cmd
import sys

from .lexer import Lexer
from .ast import Parser
from .errors import ScriptError, paint
from .interpreter import Interpreter

class Shell(cmd.Cmd):
    """Reads one line at a time and evaluates it against a scope that lives as long as the shell."""
    intro = None
    prompt = '> '
    filename = '<stdin>'

    def __init__(
        self,
        interpreter: Optional[Interpreter] = None,
        stderr: Optional[TextIO] = None,
        show_tokens: bool = False,
        show_ast: bool = False,
        *args: Any,
        **kwargs: Any
    ) -> None:
        super().__init__(*args, **kwargs)

        self.interpreter = interpreter if interpreter is not None else Interpreter()
        self.stderr = stderr if stderr is not None else sys.stderr

        self.show_tokens = show_tokens
        self.show_ast = show_ast

    def cmdloop(self, intro: Optional[str] = None) -> None:
        """
        Same loop as `cmd.Cmd.cmdloop`, except that the end of input is reported as None
        instead of the text 'EOF', which is a perfectly good identifier.
        """
        if intro is not None:
            self.intro = intro

        if self.intro:
            self.stdout.write(f'{self.intro}\n')

        self.preloop()

        stop = False
        while not stop:
            line = self.readline()
            if line is None:
                stop = self.do_EOF('')
                continue

            line = self.precmd(line)
            stop = self.postcmd(self.onecmd(line), line)

        self.postloop()

    def readline(self) -> Optional[str]:
        """Reads the next line without its terminator, or None at the end of input."""
        if self.cmdqueue:
            return self.cmdqueue.pop(0)

        if self.use_rawinput:
            try:
                return input(self.prompt)
            except EOFError:
                return None

        self.stdout.write(self.prompt)
        self.stdout.flush()

        line = self.stdin.readline()
        if not line:
            return None

        return line.rstrip('\r\n')

    def parseline(self, line: str) -> Tuple[Optional[str], Optional[str], str]:
        # Every line is source text, never a command name.
        return None, None, line

    def default(self, line: str) -> None:
        """Evaluates a line of source and prints the value it produced."""
        try:
            tokens = Lexer(line, self.filename).tokenize()
            if self.show_tokens:
                for token in tokens:
                    self.stdout.write(f'{token!r}\n')

            program = Parser(tokens).parse()
        except ScriptError as exc:
            self.stderr.write(f'{paint("parser error:", "red", self.stderr)} {exc}\n')
            self.stderr.flush()
            return None

        if self.show_ast:
            self.stdout.write(f'{program}\n')

        value = self.interpreter.evaluate(program)
        if value is not None:
            self.stdout.write(f'{value.inspect()}\n')

        return None

    def emptyline(self) -> bool:
        """Do not repeat the previous line."""
        return False

    def do_EOF(self, arg: str) -> bool:
        """Exits the shell."""
        self.stdout.write('\n')
        return True
