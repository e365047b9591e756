from __future__ import annotations

from typing import NamedTuple
from enum import IntEnum, auto

class TokenType(IntEnum):
    LParen = auto()
    RParen = auto()
    LBrace = auto()
    RBrace = auto()
    LBracket = auto()
    RBracket = auto()

    BitAnd = auto()         # &
    And = auto()            # &&
    AndAssign = auto()      # &&=
    BitAndAssign = auto()   # &=
    Not = auto()            # !
    NEq = auto()            # !=
    NTripleEq = auto()      # !==
    Colon = auto()
    Comma = auto()
    Dot = auto()
    Ellipsis = auto()       # ...
    Assign = auto()         # =
    Eq = auto()             # ==
    TripleEq = auto()       # ===
    Gt = auto()             # >
    GtEq = auto()           # >=
    Shr = auto()            # >>
    ShrAssign = auto()      # >>=
    UShr = auto()           # >>>
    UShrAssign = auto()     # >>>=
    Hash = auto()           # #
    HashBang = auto()       # #! up to the end of the line
    BitXor = auto()         # ^
    BitXorAssign = auto()   # ^=
    Lt = auto()             # <
    LtEq = auto()           # <=
    Shl = auto()            # <<
    ShlAssign = auto()      # <<=
    Minus = auto()
    MinusAssign = auto()
    Decrement = auto()      # --
    Mod = auto()
    ModAssign = auto()
    BitOr = auto()          # |
    BitOrAssign = auto()    # |=
    Or = auto()             # ||
    OrAssign = auto()       # ||=
    Plus = auto()
    PlusAssign = auto()
    Increment = auto()      # ++
    Question = auto()
    QuestionDot = auto()    # ?.
    Coalesce = auto()       # ??
    CoalesceAssign = auto() # ??=
    SemiColon = auto()
    Div = auto()
    DivAssign = auto()
    Mul = auto()
    MulAssign = auto()
    Pow = auto()            # **
    PowAssign = auto()      # **=
    Tilde = auto()

    Ident = auto()
    String = auto()
    Number = auto()

    Arguments = auto()
    As = auto()
    Async = auto()
    Await = auto()
    Break = auto()
    Case = auto()
    Catch = auto()
    Class = auto()
    Const = auto()
    Continue = auto()
    Debugger = auto()
    Default = auto()
    Delete = auto()
    Do = auto()
    Else = auto()
    Enum = auto()
    Eval = auto()
    Export = auto()
    Extends = auto()
    False_ = auto()
    Finally = auto()
    For = auto()
    From = auto()
    Function = auto()
    Get = auto()
    If = auto()
    Implements = auto()
    Import = auto()
    In = auto()
    Instanceof = auto()
    Interface = auto()
    Let = auto()
    Meta = auto()
    New = auto()
    Null = auto()
    Of = auto()
    Package = auto()
    Private = auto()
    Protected = auto()
    Public = auto()
    Return = auto()
    Set = auto()
    Static = auto()
    Super = auto()
    Switch = auto()
    Target = auto()
    This = auto()
    Throw = auto()
    True_ = auto()
    Try = auto()
    Typeof = auto()
    Undefined = auto()
    Var = auto()
    Void = auto()
    While = auto()
    With = auto()
    Yield = auto()

    Newline = auto()
    Whitespace = auto()
    SingleLineComment = auto()
    MultiLineComment = auto()

    EOF = auto()

class Location(NamedTuple):
    line: int
    column: int
    index: int

class Span(NamedTuple):
    start: Location
    end: Location

    filename: str
    line: str

    @classmethod
    def merge(cls, start: Span, end: Span) -> Span:
        return cls(start.start, end.end, start.filename, start.line)

    @classmethod
    def empty(cls, filename: str = '<stdin>') -> Span:
        location = Location(1, 1, 0)
        return cls(location, location, filename, '')

class Token(NamedTuple):
    type: TokenType
    literal: str
    span: Span

    def __repr__(self) -> str:
        return f'<Token type={self.type.name} literal={self.literal!r} line={self.line} col={self.col}>'

    @property
    def line(self) -> int:
        return self.span.start.line

    @property
    def col(self) -> int:
        return self.span.start.column

    @property
    def value(self) -> str:
        """The payload of the token: string bodies lose their quotes, shebangs their `#!`."""
        if self.type is TokenType.String:
            return self.literal[1:-1]
        elif self.type is TokenType.HashBang:
            return self.literal[2:]

        return self.literal

    @property
    def is_trivia(self) -> bool:
        return self.type in TRIVIA

    def describe(self) -> str:
        return self.literal or self.type.name

KEYWORDS = {
    "arguments": TokenType.Arguments,
    "as": TokenType.As,
    "async": TokenType.Async,
    "await": TokenType.Await,
    "break": TokenType.Break,
    "case": TokenType.Case,
    "catch": TokenType.Catch,
    "class": TokenType.Class,
    "const": TokenType.Const,
    "continue": TokenType.Continue,
    "debugger": TokenType.Debugger,
    "default": TokenType.Default,
    "delete": TokenType.Delete,
    "do": TokenType.Do,
    "else": TokenType.Else,
    "enum": TokenType.Enum,
    "eval": TokenType.Eval,
    "export": TokenType.Export,
    "extends": TokenType.Extends,
    "false": TokenType.False_,
    "finally": TokenType.Finally,
    "for": TokenType.For,
    "from": TokenType.From,
    "function": TokenType.Function,
    "get": TokenType.Get,
    "if": TokenType.If,
    "implements": TokenType.Implements,
    "import": TokenType.Import,
    "in": TokenType.In,
    "instanceof": TokenType.Instanceof,
    "interface": TokenType.Interface,
    "let": TokenType.Let,
    "meta": TokenType.Meta,
    "new": TokenType.New,
    "null": TokenType.Null,
    "of": TokenType.Of,
    "package": TokenType.Package,
    "private": TokenType.Private,
    "protected": TokenType.Protected,
    "public": TokenType.Public,
    "return": TokenType.Return,
    "set": TokenType.Set,
    "static": TokenType.Static,
    "super": TokenType.Super,
    "switch": TokenType.Switch,
    "target": TokenType.Target,
    "this": TokenType.This,
    "throw": TokenType.Throw,
    "true": TokenType.True_,
    "try": TokenType.Try,
    "typeof": TokenType.Typeof,
    "undefined": TokenType.Undefined,
    "var": TokenType.Var,
    "void": TokenType.Void,
    "while": TokenType.While,
    "with": TokenType.With,
    "yield": TokenType.Yield,
}

KEYWORDS_TO_STR = {v: k for k, v in KEYWORDS.items()}

# `//`, `/*` and `#!` open comments and are handled by the lexer before this table is consulted.
PUNCTUATORS = {
    '(': TokenType.LParen,
    ')': TokenType.RParen,
    '{': TokenType.LBrace,
    '}': TokenType.RBrace,
    '[': TokenType.LBracket,
    ']': TokenType.RBracket,
    '&': TokenType.BitAnd,
    '&&': TokenType.And,
    '&&=': TokenType.AndAssign,
    '&=': TokenType.BitAndAssign,
    '!': TokenType.Not,
    '!=': TokenType.NEq,
    '!==': TokenType.NTripleEq,
    ':': TokenType.Colon,
    ',': TokenType.Comma,
    '.': TokenType.Dot,
    '...': TokenType.Ellipsis,
    '=': TokenType.Assign,
    '==': TokenType.Eq,
    '===': TokenType.TripleEq,
    '>': TokenType.Gt,
    '>=': TokenType.GtEq,
    '>>': TokenType.Shr,
    '>>=': TokenType.ShrAssign,
    '>>>': TokenType.UShr,
    '>>>=': TokenType.UShrAssign,
    '#': TokenType.Hash,
    '^': TokenType.BitXor,
    '^=': TokenType.BitXorAssign,
    '<': TokenType.Lt,
    '<=': TokenType.LtEq,
    '<<': TokenType.Shl,
    '<<=': TokenType.ShlAssign,
    '-': TokenType.Minus,
    '-=': TokenType.MinusAssign,
    '--': TokenType.Decrement,
    '%': TokenType.Mod,
    '%=': TokenType.ModAssign,
    '|': TokenType.BitOr,
    '|=': TokenType.BitOrAssign,
    '||': TokenType.Or,
    '||=': TokenType.OrAssign,
    '+': TokenType.Plus,
    '+=': TokenType.PlusAssign,
    '++': TokenType.Increment,
    '?': TokenType.Question,
    '?.': TokenType.QuestionDot,
    '??': TokenType.Coalesce,
    '??=': TokenType.CoalesceAssign,
    ';': TokenType.SemiColon,
    '/': TokenType.Div,
    '/=': TokenType.DivAssign,
    '*': TokenType.Mul,
    '*=': TokenType.MulAssign,
    '**': TokenType.Pow,
    '**=': TokenType.PowAssign,
    '~': TokenType.Tilde,
}

MAX_PUNCTUATOR_LENGTH = max(len(punctuator) for punctuator in PUNCTUATORS)

TRIVIA = frozenset((
    TokenType.Whitespace,
    TokenType.Newline,
    TokenType.SingleLineComment,
    TokenType.MultiLineComment,
    TokenType.HashBang,
))
