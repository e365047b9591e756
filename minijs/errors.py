from typing import List, Optional, TextIO

import sys

from termcolor import colored

from .tokens import Span, Token

def paint(text: str, color: str, stream: TextIO, attrs: Optional[List[str]] = None) -> str:
    if attrs is None:
        attrs = ['bold']

    return colored(text, color, attrs=attrs, no_color=not stream.isatty())

class ScriptError(Exception):
    """Base class for errors found in the source text before it is evaluated."""

    def __init__(self, span: Span, message: str) -> None:
        super().__init__(message)

        self.span = span
        self.message = message

class LexerError(ScriptError):
    MESSAGE = 'Invalid or unexpected token'

    def __init__(self, span: Span) -> None:
        super().__init__(span, self.MESSAGE)

    def __str__(self) -> str:
        caret = ' ' * (self.span.start.column - 1) + '^'
        return f'{self.span.line}\n{caret}\nSyntaxError: {self.message}'

class ParserError(ScriptError):
    def __init__(self, token: Token) -> None:
        super().__init__(token.span, f'unexpected token {token.describe()}')

        self.token = token

    def __str__(self) -> str:
        return f'SyntaxError: {self.message}'

def report(error: ScriptError, stream: Optional[TextIO] = None) -> None:
    if stream is None:
        stream = sys.stderr

    span = error.span
    gutter = f'{span.start.line} |'

    stream.write(paint(f'{span.filename}:{span.start.line}:{span.start.column}', 'white', stream))
    stream.write(f' {paint("Error:", "red", stream)} {error.message}\n')

    stream.write(f'{paint(gutter, "white", stream)} {span.line}\n')
    stream.write(' ' * (len(gutter) + span.start.column) + '^\n')
    stream.flush()
