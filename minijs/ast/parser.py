from typing import List, Optional

import sys

from .ast import *
from minijs.tokens import Token, TokenType, Span, TRIVIA
from minijs.errors import ParserError

# Each parenthesised sub-expression descends through the whole precedence ladder,
# so a couple hundred nested parentheses need a few thousand frames.
RECURSION_LIMIT = 10000

# Trivia that may appear inside a statement that must end on its own line.
INLINE_TRIVIA = frozenset((TokenType.Whitespace, TokenType.MultiLineComment))

STATEMENT_END = (
    TokenType.SemiColon, TokenType.RBrace, TokenType.Newline, TokenType.SingleLineComment, TokenType.EOF
)

EQUALITY_OPS = (TokenType.Eq, TokenType.NEq, TokenType.TripleEq, TokenType.NTripleEq)

RELATIONAL_OPS = (
    TokenType.Lt, TokenType.Gt, TokenType.LtEq, TokenType.GtEq, TokenType.Instanceof, TokenType.In
)

SHIFT_OPS = (TokenType.Shl, TokenType.Shr, TokenType.UShr)

ADDITIVE_OPS = (TokenType.Plus, TokenType.Minus)

MULTIPLICATIVE_OPS = (TokenType.Mul, TokenType.Div, TokenType.Mod)

UNARY_OPS = (
    TokenType.Delete, TokenType.Void, TokenType.Typeof,
    TokenType.Plus, TokenType.Minus, TokenType.Tilde, TokenType.Not
)

UPDATE_OPS = (TokenType.Increment, TokenType.Decrement)

LITERAL_KINDS = {
    TokenType.Null: LiteralKind.Null,
    TokenType.True_: LiteralKind.Boolean,
    TokenType.False_: LiteralKind.Boolean,
    TokenType.Number: LiteralKind.Number,
    TokenType.String: LiteralKind.String,
    TokenType.Undefined: LiteralKind.Undefined,
}

class Parser:
    def __init__(self, tokens: List[Token]) -> None:
        self.tokens = tokens
        self.index = -1

        self.current: Token = None # type: ignore
        self.previous: Optional[Token] = None
        self.next()

    def eof(self) -> Token:
        if self.tokens:
            return Token(TokenType.EOF, '', self.tokens[-1].span)

        return Token(TokenType.EOF, '', Span.empty())

    def next(self) -> None:
        self.index += 1
        if self.index < len(self.tokens):
            self.current = self.tokens[self.index]
        else:
            self.index = len(self.tokens)
            self.current = self.eof()

    def advance(self) -> Token:
        token = self.current
        self.next()

        self.previous = token
        return token

    def skip(self, types: frozenset = TRIVIA) -> None:
        while self.current.type in types:
            self.next()

    def peek(self) -> Token:
        """Returns the first significant token after the current one."""
        index = self.index + 1
        while index < len(self.tokens) and self.tokens[index].type in TRIVIA:
            index += 1

        if index < len(self.tokens):
            return self.tokens[index]

        return self.eof()

    def check(self, *types: TokenType) -> bool:
        self.skip()
        return self.current.type in types

    def match(self, *types: TokenType) -> Optional[Token]:
        if self.check(*types):
            return self.advance()

        return None

    def expect(self, type: TokenType) -> Token:
        token = self.match(type)
        if token is None:
            raise ParserError(self.current)

        return token

    def span_from(self, start: Token) -> Span:
        assert self.previous is not None
        return Span.merge(start.span, self.previous.span)

    def parse(self) -> Program:
        limit = sys.getrecursionlimit()
        sys.setrecursionlimit(max(limit, RECURSION_LIMIT))

        try:
            stmts = self.parse_statements()
        finally:
            sys.setrecursionlimit(limit)

        if stmts:
            span = Span.merge(stmts[0].span, stmts[-1].span)
        else:
            span = self.current.span

        return Program(span, stmts)

    def parse_statements(self) -> List[ASTStmt]:
        stmts = []
        while not self.check(TokenType.EOF):
            stmts.append(self.statement())

        return stmts

    def statement(self) -> ASTStmt:
        self.skip()
        type = self.current.type

        if type is TokenType.Break:
            return self.parse_break_statement()
        elif type is TokenType.Continue:
            return self.parse_continue_statement()
        elif type is TokenType.Debugger:
            token = self.advance()
            self.match(TokenType.SemiColon)

            return DebuggerStmt(self.span_from(token))
        elif type is TokenType.Do:
            return self.parse_do_while_statement()
        elif type is TokenType.For:
            return self.parse_for_statement()
        elif type is TokenType.If:
            return self.parse_if_statement()
        elif type is TokenType.LBrace:
            return self.parse_block_statement()
        elif type is TokenType.Return:
            return self.parse_return_statement()
        elif type is TokenType.SemiColon:
            token = self.advance()
            return EmptyStmt(token.span)
        elif type is TokenType.Switch:
            return self.parse_switch_statement()
        elif type is TokenType.Throw:
            return self.parse_throw_statement()
        elif type is TokenType.Try:
            return self.parse_try_statement()
        elif type is TokenType.Var:
            return self.parse_variable_statement()
        elif type is TokenType.While:
            return self.parse_while_statement()
        elif type is TokenType.Ident and self.peek().type is TokenType.Colon:
            return self.parse_labelled_statement()

        return self.parse_expression_statement()

    def parse_label(self) -> Optional[IdentifierExpr]:
        # `break`/`continue` only take a label written on the same line.
        self.skip(INLINE_TRIVIA)
        if self.current.type is not TokenType.Ident:
            return None

        token = self.advance()
        return IdentifierExpr(token.span, token.literal)

    def parse_break_statement(self) -> BreakStmt:
        start = self.expect(TokenType.Break)
        label = self.parse_label()

        self.match(TokenType.SemiColon)
        return BreakStmt(self.span_from(start), label)

    def parse_continue_statement(self) -> ContinueStmt:
        start = self.expect(TokenType.Continue)
        label = self.parse_label()

        self.match(TokenType.SemiColon)
        return ContinueStmt(self.span_from(start), label)

    def parse_return_statement(self) -> ReturnStmt:
        start = self.expect(TokenType.Return)

        self.skip(INLINE_TRIVIA)
        argument: Optional[ASTExpr] = None
        if self.current.type not in STATEMENT_END:
            argument = self.expression()

        self.match(TokenType.SemiColon)
        return ReturnStmt(self.span_from(start), argument)

    def parse_throw_statement(self) -> ThrowStmt:
        start = self.expect(TokenType.Throw)
        argument = self.expression()

        self.match(TokenType.SemiColon)
        return ThrowStmt(self.span_from(start), argument)

    def parse_block_statement(self) -> BlockStmt:
        start = self.expect(TokenType.LBrace)

        stmts = []
        while not self.check(TokenType.RBrace):
            if self.current.type is TokenType.EOF:
                raise ParserError(self.current)

            stmts.append(self.statement())

        self.advance()
        return BlockStmt(self.span_from(start), stmts)

    def parse_variable_declaration(self) -> VariableDecl:
        token = self.expect(TokenType.Ident)
        name = IdentifierExpr(token.span, token.literal)

        init: Optional[ASTExpr] = None
        if self.match(TokenType.Assign):
            init = self.assignment()

        return VariableDecl(name, init)

    def parse_variable_declarations(self) -> List[VariableDecl]:
        declarations = [self.parse_variable_declaration()]
        while self.match(TokenType.Comma):
            declarations.append(self.parse_variable_declaration())

        return declarations

    def parse_variable_statement(self) -> VarStmt:
        start = self.expect(TokenType.Var)
        declarations = self.parse_variable_declarations()

        self.match(TokenType.SemiColon)
        return VarStmt(self.span_from(start), declarations)

    def parse_if_statement(self) -> IfStmt:
        start = self.expect(TokenType.If)

        self.expect(TokenType.LParen)
        condition = self.expression()
        self.expect(TokenType.RParen)

        consequent = self.statement()

        alternate: Optional[ASTStmt] = None
        if self.match(TokenType.Else):
            alternate = self.statement()

        return IfStmt(self.span_from(start), condition, consequent, alternate)

    def parse_for_statement(self) -> ForStmt:
        start = self.expect(TokenType.For)
        self.expect(TokenType.LParen)

        init: Optional[ASTStmt] = None
        if self.check(TokenType.Var):
            var = self.advance()
            declarations = self.parse_variable_declarations()

            init = VarStmt(self.span_from(var), declarations)
        elif not self.check(TokenType.SemiColon):
            expr = self.expression()
            init = ExprStmt(expr.span, expr)

        self.expect(TokenType.SemiColon)

        condition: Optional[ASTExpr] = None
        if not self.check(TokenType.SemiColon):
            condition = self.expression()

        self.expect(TokenType.SemiColon)

        update: Optional[ASTExpr] = None
        if not self.check(TokenType.RParen):
            update = self.expression()

        self.expect(TokenType.RParen)

        body = self.statement()
        return ForStmt(self.span_from(start), init, condition, update, body)

    def parse_while_statement(self) -> WhileStmt:
        start = self.expect(TokenType.While)

        self.expect(TokenType.LParen)
        condition = self.expression()
        self.expect(TokenType.RParen)

        body = self.statement()
        return WhileStmt(self.span_from(start), condition, body)

    def parse_do_while_statement(self) -> DoWhileStmt:
        start = self.expect(TokenType.Do)
        body = self.statement()

        self.expect(TokenType.While)
        self.expect(TokenType.LParen)
        condition = self.expression()
        self.expect(TokenType.RParen)

        self.match(TokenType.SemiColon)
        return DoWhileStmt(self.span_from(start), body, condition)

    def parse_switch_statement(self) -> SwitchStmt:
        start = self.expect(TokenType.Switch)

        self.expect(TokenType.LParen)
        discriminant = self.expression()
        self.expect(TokenType.RParen)
        self.expect(TokenType.LBrace)

        cases: List[SwitchCase] = []
        default_case: Optional[SwitchCase] = None

        while not self.check(TokenType.RBrace):
            clause = self.current

            test: Optional[ASTExpr] = None
            if self.match(TokenType.Case):
                test = self.expression()
            elif self.match(TokenType.Default):
                if default_case is not None:
                    raise ParserError(clause)
            else:
                raise ParserError(self.current)

            self.expect(TokenType.Colon)

            consequent = []
            while not self.check(TokenType.Case, TokenType.Default, TokenType.RBrace):
                consequent.append(self.statement())

            case = SwitchCase(self.span_from(clause), test, consequent)
            if test is None:
                default_case = case
            else:
                cases.append(case)

        self.advance()
        return SwitchStmt(self.span_from(start), discriminant, cases, default_case)

    def parse_try_statement(self) -> TryStmt:
        start = self.expect(TokenType.Try)
        block = self.parse_block_statement()

        handler: Optional[CatchClause] = None
        if self.check(TokenType.Catch):
            catch = self.advance()

            param: Optional[IdentifierExpr] = None
            if self.match(TokenType.LParen):
                token = self.expect(TokenType.Ident)
                param = IdentifierExpr(token.span, token.literal)

                self.expect(TokenType.RParen)

            body = self.parse_block_statement()
            handler = CatchClause(self.span_from(catch), param, body)

        finalizer: Optional[BlockStmt] = None
        if self.match(TokenType.Finally):
            finalizer = self.parse_block_statement()

        if handler is None and finalizer is None:
            raise ParserError(self.current)

        return TryStmt(self.span_from(start), block, handler, finalizer)

    def parse_labelled_statement(self) -> LabelledStmt:
        token = self.expect(TokenType.Ident)
        self.expect(TokenType.Colon)

        return LabelledStmt(IdentifierExpr(token.span, token.literal), self.statement())

    def parse_expression_statement(self) -> ExprStmt:
        expr = self.expression()

        self.match(TokenType.SemiColon)
        return ExprStmt(Span.merge(expr.span, self.previous.span), expr) # type: ignore

    def expression(self) -> ASTExpr:
        return self.assignment()

    def assignment(self) -> ASTExpr:
        target = self.conditional()
        if self.check(TokenType.Assign):
            op = self.advance()
            if not isinstance(target, IdentifierExpr):
                raise ParserError(op)

            return AssignExpr(target, self.assignment(), op)

        return target

    def conditional(self) -> ASTExpr:
        condition = self.logical_or()
        if not self.match(TokenType.Question):
            return condition

        consequent = self.assignment()
        self.expect(TokenType.Colon)
        alternate = self.assignment()

        return TernaryExpr(condition, consequent, alternate)

    def logical_or(self) -> ASTExpr:
        lhs = self.logical_and()
        while self.check(TokenType.Or):
            op = self.advance()
            lhs = BinaryOpExpr(lhs, self.logical_and(), op)

        return lhs

    def logical_and(self) -> ASTExpr:
        lhs = self.bitwise_or()
        while self.check(TokenType.And):
            op = self.advance()
            lhs = BinaryOpExpr(lhs, self.bitwise_or(), op)

        return lhs

    def bitwise_or(self) -> ASTExpr:
        lhs = self.bitwise_xor()
        while self.check(TokenType.BitOr):
            op = self.advance()
            lhs = BinaryOpExpr(lhs, self.bitwise_xor(), op)

        return lhs

    def bitwise_xor(self) -> ASTExpr:
        lhs = self.bitwise_and()
        while self.check(TokenType.BitXor):
            op = self.advance()
            lhs = BinaryOpExpr(lhs, self.bitwise_and(), op)

        return lhs

    def bitwise_and(self) -> ASTExpr:
        lhs = self.equality()
        while self.check(TokenType.BitAnd):
            op = self.advance()
            lhs = BinaryOpExpr(lhs, self.equality(), op)

        return lhs

    def equality(self) -> ASTExpr:
        lhs = self.relational()
        while self.check(*EQUALITY_OPS):
            op = self.advance()
            lhs = BinaryOpExpr(lhs, self.relational(), op)

        return lhs

    def relational(self) -> ASTExpr:
        lhs = self.shift()
        while self.check(*RELATIONAL_OPS):
            op = self.advance()
            lhs = BinaryOpExpr(lhs, self.shift(), op)

        return lhs

    def shift(self) -> ASTExpr:
        lhs = self.additive()
        while self.check(*SHIFT_OPS):
            op = self.advance()
            lhs = BinaryOpExpr(lhs, self.additive(), op)

        return lhs

    def additive(self) -> ASTExpr:
        lhs = self.multiplicative()
        while self.check(*ADDITIVE_OPS):
            op = self.advance()
            lhs = BinaryOpExpr(lhs, self.multiplicative(), op)

        return lhs

    def multiplicative(self) -> ASTExpr:
        lhs = self.exponentiation()
        while self.check(*MULTIPLICATIVE_OPS):
            op = self.advance()
            lhs = BinaryOpExpr(lhs, self.exponentiation(), op)

        return lhs

    def exponentiation(self) -> ASTExpr:
        lhs = self.unary()
        if self.check(TokenType.Pow):
            op = self.advance()
            return BinaryOpExpr(lhs, self.exponentiation(), op)

        return lhs

    def unary(self) -> ASTExpr:
        if not self.check(*UNARY_OPS):
            return self.update()

        op = self.advance()
        return UnaryOpExpr(op, self.unary())

    def update(self) -> ASTExpr:
        if self.check(*UPDATE_OPS):
            op = self.advance()
            return UnaryOpExpr(op, self.unary())

        expr = self.new_expr()

        # A postfix operator has to stay on the operand's line.
        self.skip(INLINE_TRIVIA)
        if self.current.type in UPDATE_OPS:
            op = self.advance()
            return UnaryOpExpr(op, expr, prefix=False)

        return expr

    def new_expr(self) -> ASTExpr:
        if not self.check(TokenType.New):
            return self.member()

        op = self.advance()
        return UnaryOpExpr(op, self.new_expr())

    def member(self) -> ASTExpr:
        return self.primary()

    def primary(self) -> ASTExpr:
        self.skip()
        token = self.current

        if token.type is TokenType.Ident:
            self.advance()
            return IdentifierExpr(token.span, token.literal)
        elif token.type in LITERAL_KINDS:
            self.advance()
            return LiteralExpr(token.span, LITERAL_KINDS[token.type], token.value, token.literal)
        elif token.type is TokenType.LBracket:
            return self.array()
        elif token.type is TokenType.LParen:
            self.advance()
            expr = self.expression()

            self.expect(TokenType.RParen)
            return expr

        raise ParserError(token)

    def array(self) -> ArrayExpr:
        start = self.expect(TokenType.LBracket)

        elements: List[ASTExpr] = []
        while not self.check(TokenType.RBracket):
            if self.current.type is TokenType.Comma:
                token = self.advance()
                elements.append(ElisionExpr(token.span))

                continue

            if self.current.type is TokenType.Ellipsis:
                token = self.advance()
                argument = self.assignment()

                elements.append(SpreadExpr(Span.merge(token.span, argument.span), argument))
            else:
                elements.append(self.assignment())

            if not self.check(TokenType.RBracket):
                self.expect(TokenType.Comma)

        self.advance()
        return ArrayExpr(self.span_from(start), elements)
