from typing import List, Optional

import argparse
import sys

from .lexer import Lexer
from .ast import Parser
from .errors import ScriptError, paint, report
from .interpreter import Interpreter
from .shell import Shell

def run_file(filename: str, show_tokens: bool = False, show_ast: bool = False) -> int:
    try:
        with open(filename, 'rb') as file:
            source = file.read()
    except OSError as exc:
        sys.stderr.write(f'{paint("Error:", "red", sys.stderr)} could not read {filename}: {exc.strerror}\n')
        return 1

    try:
        tokens = Lexer(source, filename).tokenize()
        if show_tokens:
            for token in tokens:
                print(repr(token))

        program = Parser(tokens).parse()
    except ScriptError as exc:
        report(exc)
        return 1

    if show_ast:
        print(program)

    value = Interpreter().evaluate(program)
    if value is not None:
        print(value.inspect())

    return 0

def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog='minijs', description='A small JavaScript subset interpreter.')
    parser.add_argument('file', help='script to run (if omitted, starts the interactive shell)', nargs='?')
    parser.add_argument('--tokens', action='store_true', help='print the token stream before evaluating')
    parser.add_argument('--ast', action='store_true', help='print the parsed program before evaluating')

    args = parser.parse_args(argv)

    try:
        if args.file is not None:
            sys.exit(run_file(args.file, args.tokens, args.ast))

        Shell(show_tokens=args.tokens, show_ast=args.ast).cmdloop()
    except KeyboardInterrupt:
        print()
        sys.exit(130)

    sys.exit(0)

if __name__ == '__main__':
    main()
