from typing import Any, Optional, Union

from .lexer import Lexer
from .ast import Parser
from .errors import ScriptError, LexerError, ParserError
from .interpreter import Interpreter, Scope, Value, ValueType

__all__ = (
    'Lexer',
    'Parser',
    'Interpreter',
    'Scope',
    'Value',
    'ValueType',
    'ScriptError',
    'LexerError',
    'ParserError',
    'run',
)

def run(
    source: Union[str, bytes], scope: Optional[Scope] = None, filename: str = '<stdin>'
) -> Optional[Value[Any]]:
    """Lexes, parses and evaluates `source`. Syntax errors are raised as `ScriptError`."""
    tokens = Lexer(source, filename).tokenize()
    program = Parser(tokens).parse()

    return Interpreter(scope).evaluate(program)
