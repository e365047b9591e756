from typing import List, Optional, Union

import re

from .tokens import Token, TokenType, KEYWORDS, PUNCTUATORS, MAX_PUNCTUATOR_LENGTH, Location, Span
from .errors import LexerError

QUOTES = ('\'', '"', '`')
SPACES = (' ', '\t', '\v', '\f', '\u00a0', '\ufeff')
LINE_TERMINATORS = ('\n', '\r', '\u2028', '\u2029')

# str.splitlines() also breaks on \v and \f, which are plain spaces here.
LINE_TERMINATOR_RE = re.compile('\r\n|[\n\r\u2028\u2029]')

def is_digit(char: Optional[str]) -> bool:
    return char is not None and '0' <= char <= '9'

def is_identifier_start(char: Optional[str]) -> bool:
    if char is None:
        return False

    return 'a' <= char <= 'z' or 'A' <= char <= 'Z' or char in ('_', '$')

def is_identifier_part(char: Optional[str]) -> bool:
    return is_identifier_start(char) or is_digit(char)

class Lexer:
    def __init__(self, source: Union[str, bytes], filename: str = '<stdin>') -> None:
        if isinstance(source, bytes):
            source = source.decode('utf-8', errors='replace')

        self.source = source
        self.filename = filename
        self.lines = LINE_TERMINATOR_RE.split(source)

        self.index = -1
        self.line = 1
        self.column = 0

        self.current_char: Optional[str] = None
        self.next()

    @property
    def location(self) -> Location:
        return Location(self.line, self.column, self.index)

    def make_span(self, start: Location, end: Optional[Location] = None) -> Span:
        if end is None:
            end = self.location

        return Span(start, end, self.filename, self.lines[start.line - 1])

    def make_token(self, type: TokenType, start: Location) -> Token:
        return Token(type, self.source[start.index:self.index], self.make_span(start))

    def error(self, location: Location) -> LexerError:
        return LexerError(self.make_span(location))

    def next(self) -> None:
        self.index += 1
        self.column += 1

        if self.index < len(self.source):
            self.current_char = self.source[self.index]
        else:
            self.current_char = None

    def peek(self, offset: int = 1) -> Optional[str]:
        if self.index + offset < len(self.source):
            return self.source[self.index + offset]

        return None

    def skip_line_terminator(self) -> None:
        if self.current_char == '\r' and self.peek() == '\n':
            self.next()

        self.next()

        self.line += 1
        self.column = 1

    def parse_newline(self) -> Token:
        start = self.location
        self.skip_line_terminator()

        return self.make_token(TokenType.Newline, start)

    def parse_whitespace(self) -> Token:
        start = self.location
        while self.current_char is not None and self.current_char in SPACES:
            self.next()

        return self.make_token(TokenType.Whitespace, start)

    def parse_line_comment(self, type: TokenType) -> Token:
        start = self.location
        while self.current_char is not None and self.current_char not in LINE_TERMINATORS:
            self.next()

        return self.make_token(type, start)

    def parse_block_comment(self) -> Token:
        start = self.location

        self.next(); self.next()
        while not (self.current_char == '*' and self.peek() == '/'):
            if self.current_char is None:
                raise self.error(start)

            if self.current_char in LINE_TERMINATORS:
                self.skip_line_terminator()
            else:
                self.next()

        self.next(); self.next()
        return self.make_token(TokenType.MultiLineComment, start)

    def parse_string(self) -> Token:
        start = self.location
        ending = self.current_char

        self.next()
        while self.current_char != ending:
            if self.current_char == '\\':
                self.next()

            if self.current_char is None or self.current_char in LINE_TERMINATORS:
                raise self.error(start)

            self.next()

        self.next()
        return self.make_token(TokenType.String, start)

    def parse_number(self) -> Token:
        start = self.location

        while is_digit(self.current_char):
            self.next()

        if self.current_char == '.' and is_digit(self.peek()):
            self.next()
            while is_digit(self.current_char):
                self.next()

        if is_identifier_start(self.current_char):
            raise self.error(self.location)

        return self.make_token(TokenType.Number, start)

    def parse_identifier(self) -> Token:
        start = self.location

        while is_identifier_part(self.current_char):
            self.next()

        value = self.source[start.index:self.index]
        return self.make_token(KEYWORDS.get(value, TokenType.Ident), start)

    def parse_punctuator(self) -> Token:
        start = self.location

        for length in range(MAX_PUNCTUATOR_LENGTH, 0, -1):
            text = self.source[self.index:self.index + length]
            if len(text) == length and text in PUNCTUATORS:
                for _ in range(length):
                    self.next()

                return self.make_token(PUNCTUATORS[text], start)

        raise self.error(start)

    def lex(self) -> Token:
        char = self.current_char
        if char is None:
            return Token(TokenType.EOF, '', self.make_span(self.location))

        if char in LINE_TERMINATORS:
            return self.parse_newline()
        elif char in SPACES:
            return self.parse_whitespace()
        elif char == '/' and self.peek() == '/':
            return self.parse_line_comment(TokenType.SingleLineComment)
        elif char == '/' and self.peek() == '*':
            return self.parse_block_comment()
        elif char == '#' and self.peek() == '!':
            return self.parse_line_comment(TokenType.HashBang)
        elif char in QUOTES:
            return self.parse_string()
        elif is_digit(char):
            return self.parse_number()
        elif is_identifier_start(char):
            return self.parse_identifier()

        return self.parse_punctuator()

    def tokenize(self) -> List[Token]:
        """Scans the whole source, trivia included; the last token is always EOF."""
        tokens = list(self)
        tokens.append(self.lex())

        return tokens

    def __iter__(self):
        return self

    def __next__(self) -> Token:
        token = self.lex()
        if token.type is TokenType.EOF:
            raise StopIteration

        return token
