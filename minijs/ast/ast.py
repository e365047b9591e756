from typing import Any, Dict, List, Optional

from enum import IntEnum

from minijs.tokens import Token, Span, KEYWORDS_TO_STR

__all__ = (
    'LiteralKind',
    'ASTNode',
    'ASTStmt',
    'ASTExpr',
    'Program',
    'BlockStmt',
    'EmptyStmt',
    'ExprStmt',
    'VarStmt',
    'VariableDecl',
    'IfStmt',
    'ForStmt',
    'WhileStmt',
    'DoWhileStmt',
    'ContinueStmt',
    'BreakStmt',
    'ReturnStmt',
    'SwitchStmt',
    'SwitchCase',
    'LabelledStmt',
    'ThrowStmt',
    'TryStmt',
    'CatchClause',
    'DebuggerStmt',
    'IdentifierExpr',
    'LiteralExpr',
    'ArrayExpr',
    'ElisionExpr',
    'SpreadExpr',
    'UnaryOpExpr',
    'BinaryOpExpr',
    'TernaryExpr',
    'AssignExpr',
)


class LiteralKind(IntEnum):
    Null = 0
    Boolean = 1
    Number = 2
    String = 3
    Undefined = 4

class ASTNode:
    """
    Base class of every node. `str()` renders source text that parses back into an equal tree,
    which is why every operator expression is wrapped in parentheses.
    """
    span: Span

    def __init__(self, span: Span) -> None:
        self.span = span

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__}>'

    def __eq__(self, other: Any) -> bool:
        if type(self) is not type(other):
            return False

        return self.structure() == other.structure()

    def structure(self) -> Dict[str, Any]:
        """The node's fields without source positions, used for structural comparison."""
        fields: Dict[str, Any] = {}
        for name, value in vars(self).items():
            if name == 'span':
                continue

            if isinstance(value, Token):
                value = (value.type, value.literal)

            fields[name] = value

        return fields

class ASTStmt(ASTNode):
    pass

class ASTExpr(ASTNode):
    pass

class Program(ASTNode):
    def __init__(self, span: Span, statements: List[ASTStmt]) -> None:
        super().__init__(span)

        self.statements = statements

    def __repr__(self) -> str:
        return f'<Program statements={self.statements!r}>'

    def __str__(self) -> str:
        return '\n'.join(str(stmt) for stmt in self.statements)

class BlockStmt(ASTStmt):
    def __init__(self, span: Span, statements: List[ASTStmt]) -> None:
        super().__init__(span)

        self.statements = statements

    def __repr__(self) -> str:
        return f'<BlockStmt statements={self.statements!r}>'

    def __str__(self) -> str:
        return '{\n' + ''.join(f'{stmt}\n' for stmt in self.statements) + '}'

class EmptyStmt(ASTStmt):
    def __str__(self) -> str:
        return ';'

class ExprStmt(ASTStmt):
    def __init__(self, span: Span, expr: ASTExpr) -> None:
        super().__init__(span)

        self.expr = expr

    def __repr__(self) -> str:
        return f'<ExprStmt expr={self.expr!r}>'

    def __str__(self) -> str:
        return f'{self.expr};'

class VariableDecl(ASTNode):
    def __init__(self, name: 'IdentifierExpr', init: Optional[ASTExpr]) -> None:
        super().__init__(name.span if init is None else Span.merge(name.span, init.span))

        self.name = name
        self.init = init

    def __repr__(self) -> str:
        return f'<VariableDecl name={self.name.name!r} init={self.init!r}>'

    def __str__(self) -> str:
        if self.init is None:
            return str(self.name)

        return f'{self.name} = {self.init}'

class VarStmt(ASTStmt):
    def __init__(self, span: Span, declarations: List[VariableDecl]) -> None:
        super().__init__(span)

        self.declarations = declarations

    def __repr__(self) -> str:
        return f'<VarStmt declarations={self.declarations!r}>'

    def __str__(self) -> str:
        return 'var ' + ', '.join(str(decl) for decl in self.declarations) + ';'

class IfStmt(ASTStmt):
    def __init__(
        self, span: Span, condition: ASTExpr, consequent: ASTStmt, alternate: Optional[ASTStmt]
    ) -> None:
        super().__init__(span)

        self.condition = condition
        self.consequent = consequent
        self.alternate = alternate

    def __repr__(self) -> str:
        return f'<IfStmt condition={self.condition!r} consequent={self.consequent!r} alternate={self.alternate!r}>'

    def __str__(self) -> str:
        text = f'if ({self.condition}) {self.consequent}'
        if self.alternate is not None:
            text += f' else {self.alternate}'

        return text

class ForStmt(ASTStmt):
    def __init__(
        self,
        span: Span,
        init: Optional[ASTStmt],
        condition: Optional[ASTExpr],
        update: Optional[ASTExpr],
        body: ASTStmt
    ) -> None:
        super().__init__(span)

        self.init = init
        self.condition = condition
        self.update = update
        self.body = body

    def __repr__(self) -> str:
        return (
            f'<ForStmt init={self.init!r} condition={self.condition!r} '
            f'update={self.update!r} body={self.body!r}>'
        )

    def __str__(self) -> str:
        # The init slot is a full statement and brings its own semicolon.
        text = 'for (' + (str(self.init) if self.init is not None else ';')
        text += f' {self.condition};' if self.condition is not None else ';'
        if self.update is not None:
            text += f' {self.update}'

        return text + f') {self.body}'

class WhileStmt(ASTStmt):
    def __init__(self, span: Span, condition: ASTExpr, body: ASTStmt) -> None:
        super().__init__(span)

        self.condition = condition
        self.body = body

    def __repr__(self) -> str:
        return f'<WhileStmt condition={self.condition!r} body={self.body!r}>'

    def __str__(self) -> str:
        return f'while ({self.condition}) {self.body}'

class DoWhileStmt(ASTStmt):
    def __init__(self, span: Span, body: ASTStmt, condition: ASTExpr) -> None:
        super().__init__(span)

        self.body = body
        self.condition = condition

    def __repr__(self) -> str:
        return f'<DoWhileStmt body={self.body!r} condition={self.condition!r}>'

    def __str__(self) -> str:
        return f'do {self.body} while ({self.condition});'

class ContinueStmt(ASTStmt):
    def __init__(self, span: Span, label: Optional['IdentifierExpr']) -> None:
        super().__init__(span)

        self.label = label

    def __repr__(self) -> str:
        return f'<ContinueStmt label={self.label!r}>'

    def __str__(self) -> str:
        if self.label is None:
            return 'continue;'

        return f'continue {self.label};'

class BreakStmt(ASTStmt):
    def __init__(self, span: Span, label: Optional['IdentifierExpr']) -> None:
        super().__init__(span)

        self.label = label

    def __repr__(self) -> str:
        return f'<BreakStmt label={self.label!r}>'

    def __str__(self) -> str:
        if self.label is None:
            return 'break;'

        return f'break {self.label};'

class ReturnStmt(ASTStmt):
    def __init__(self, span: Span, argument: Optional[ASTExpr]) -> None:
        super().__init__(span)

        self.argument = argument

    def __repr__(self) -> str:
        return f'<ReturnStmt argument={self.argument!r}>'

    def __str__(self) -> str:
        if self.argument is None:
            return 'return;'

        return f'return {self.argument};'

class SwitchCase(ASTNode):
    """A `case` clause, or the `default` clause when `test` is None."""

    def __init__(self, span: Span, test: Optional[ASTExpr], consequent: List[ASTStmt]) -> None:
        super().__init__(span)

        self.test = test
        self.consequent = consequent

    def __repr__(self) -> str:
        return f'<SwitchCase test={self.test!r} consequent={self.consequent!r}>'

    def __str__(self) -> str:
        head = 'default:' if self.test is None else f'case {self.test}:'
        return head + '\n' + ''.join(f'{stmt}\n' for stmt in self.consequent)

class SwitchStmt(ASTStmt):
    def __init__(
        self,
        span: Span,
        discriminant: ASTExpr,
        cases: List[SwitchCase],
        default_case: Optional[SwitchCase]
    ) -> None:
        super().__init__(span)

        self.discriminant = discriminant
        self.cases = cases
        self.default_case = default_case

    def __repr__(self) -> str:
        return (
            f'<SwitchStmt discriminant={self.discriminant!r} cases={self.cases!r} '
            f'default_case={self.default_case!r}>'
        )

    def __str__(self) -> str:
        text = f'switch ({self.discriminant}) {{\n'
        text += ''.join(str(case) for case in self.cases)
        if self.default_case is not None:
            text += str(self.default_case)

        return text + '}'

class LabelledStmt(ASTStmt):
    def __init__(self, label: 'IdentifierExpr', body: ASTStmt) -> None:
        super().__init__(Span.merge(label.span, body.span))

        self.label = label
        self.body = body

    def __repr__(self) -> str:
        return f'<LabelledStmt label={self.label.name!r} body={self.body!r}>'

    def __str__(self) -> str:
        return f'{self.label}: {self.body}'

class ThrowStmt(ASTStmt):
    def __init__(self, span: Span, argument: ASTExpr) -> None:
        super().__init__(span)

        self.argument = argument

    def __repr__(self) -> str:
        return f'<ThrowStmt argument={self.argument!r}>'

    def __str__(self) -> str:
        return f'throw {self.argument};'

class CatchClause(ASTNode):
    def __init__(self, span: Span, param: Optional['IdentifierExpr'], body: BlockStmt) -> None:
        super().__init__(span)

        self.param = param
        self.body = body

    def __repr__(self) -> str:
        return f'<CatchClause param={self.param!r} body={self.body!r}>'

    def __str__(self) -> str:
        if self.param is None:
            return f'catch {self.body}'

        return f'catch ({self.param}) {self.body}'

class TryStmt(ASTStmt):
    def __init__(
        self,
        span: Span,
        block: BlockStmt,
        handler: Optional[CatchClause],
        finalizer: Optional[BlockStmt]
    ) -> None:
        super().__init__(span)

        self.block = block
        self.handler = handler
        self.finalizer = finalizer

    def __repr__(self) -> str:
        return f'<TryStmt block={self.block!r} handler={self.handler!r} finalizer={self.finalizer!r}>'

    def __str__(self) -> str:
        text = f'try {self.block}'
        if self.handler is not None:
            text += f' {self.handler}'

        if self.finalizer is not None:
            text += f' finally {self.finalizer}'

        return text

class DebuggerStmt(ASTStmt):
    def __str__(self) -> str:
        return 'debugger;'

class IdentifierExpr(ASTExpr):
    def __init__(self, span: Span, name: str) -> None:
        super().__init__(span)

        self.name = name

    def __repr__(self) -> str:
        return f'<IdentifierExpr name={self.name!r}>'

    def __str__(self) -> str:
        return self.name

class LiteralExpr(ASTExpr):
    """`value` is the payload (a string without its quotes), `raw` the text as written."""

    def __init__(self, span: Span, kind: LiteralKind, value: str, raw: str) -> None:
        super().__init__(span)

        self.kind = kind
        self.value = value
        self.raw = raw

    def __repr__(self) -> str:
        return f'<LiteralExpr kind={self.kind.name} value={self.value!r}>'

    def __str__(self) -> str:
        return self.raw

class ElisionExpr(ASTExpr):
    def __str__(self) -> str:
        return ''

class SpreadExpr(ASTExpr):
    def __init__(self, span: Span, argument: ASTExpr) -> None:
        super().__init__(span)

        self.argument = argument

    def __repr__(self) -> str:
        return f'<SpreadExpr argument={self.argument!r}>'

    def __str__(self) -> str:
        return f'...{self.argument}'

class ArrayExpr(ASTExpr):
    def __init__(self, span: Span, elements: List[ASTExpr]) -> None:
        super().__init__(span)

        self.elements = elements

    def __repr__(self) -> str:
        return f'<ArrayExpr elements={self.elements!r}>'

    def __str__(self) -> str:
        text = ', '.join(str(element) for element in self.elements)
        # A trailing hole needs its own comma, otherwise `[,]` would come back as `[]`.
        if self.elements and isinstance(self.elements[-1], ElisionExpr):
            text += ','

        return f'[{text}]'

class UnaryOpExpr(ASTExpr):
    def __init__(self, op: Token, expr: ASTExpr, prefix: bool = True) -> None:
        if prefix:
            span = Span.merge(op.span, expr.span)
        else:
            span = Span.merge(expr.span, op.span)

        super().__init__(span)

        self.op = op
        self.expr = expr
        self.prefix = prefix

    def __repr__(self) -> str:
        return f'<UnaryOpExpr expr={self.expr!r} op={self.op.literal!r} prefix={self.prefix}>'

    def __str__(self) -> str:
        if not self.prefix:
            return f'({self.expr}{self.op.literal})'

        separator = ' ' if self.op.type in KEYWORDS_TO_STR else ''
        return f'({self.op.literal}{separator}{self.expr})'

class BinaryOpExpr(ASTExpr):
    def __init__(self, lhs: ASTExpr, rhs: ASTExpr, op: Token) -> None:
        super().__init__(Span.merge(lhs.span, rhs.span))

        self.lhs = lhs
        self.rhs = rhs
        self.op = op

    def __repr__(self) -> str:
        return f'<BinaryOpExpr lhs={self.lhs!r} rhs={self.rhs!r} op={self.op.literal!r}>'

    def __str__(self) -> str:
        return f'({self.lhs} {self.op.literal} {self.rhs})'

class TernaryExpr(ASTExpr):
    def __init__(self, condition: ASTExpr, consequent: ASTExpr, alternate: ASTExpr) -> None:
        super().__init__(Span.merge(condition.span, alternate.span))

        self.condition = condition
        self.consequent = consequent
        self.alternate = alternate

    def __repr__(self) -> str:
        return (
            f'<TernaryExpr condition={self.condition!r} consequent={self.consequent!r} '
            f'alternate={self.alternate!r}>'
        )

    def __str__(self) -> str:
        return f'({self.condition} ? {self.consequent} : {self.alternate})'

class AssignExpr(ASTExpr):
    def __init__(self, target: IdentifierExpr, value: ASTExpr, op: Token) -> None:
        super().__init__(Span.merge(target.span, value.span))

        self.target = target
        self.value = value
        self.op = op

    def __repr__(self) -> str:
        return f'<AssignExpr target={self.target.name!r} value={self.value!r}>'

    def __str__(self) -> str:
        return f'({self.target} {self.op.literal} {self.value})'
