from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import math

from minijs.ast import *
from minijs.tokens import Token, TokenType

from .value import Value, ValueType
from .scope import Scope

Labels = Tuple[str, ...]
Loop = Union[WhileStmt, DoWhileStmt, ForStmt]

def divide(lhs: float, rhs: float) -> float:
    if rhs != 0:
        return lhs / rhs

    if lhs == 0 or math.isnan(lhs):
        return math.nan

    return math.copysign(math.inf, lhs) * math.copysign(1.0, rhs)

NUMBER_OPERATORS: Dict[TokenType, Callable[[float, float], Any]] = {
    TokenType.Plus: lambda lhs, rhs: lhs + rhs,
    TokenType.Minus: lambda lhs, rhs: lhs - rhs,
    TokenType.Mul: lambda lhs, rhs: lhs * rhs,
    TokenType.Div: divide,
    TokenType.Lt: lambda lhs, rhs: lhs < rhs,
    TokenType.Gt: lambda lhs, rhs: lhs > rhs,
    TokenType.Eq: lambda lhs, rhs: lhs == rhs,
    TokenType.NEq: lambda lhs, rhs: lhs != rhs,
}

def is_truthy(value: Value[Any]) -> bool:
    if value.type is ValueType.Null:
        return False
    elif value.type is ValueType.Boolean:
        return value.value
    elif value.type is ValueType.Number:
        return value.value != 0
    elif value.type is ValueType.String:
        return value.value != ''

    return True

class ControlSignal(Exception):
    """Unwinds the Python stack for `break` and `continue` up to the loop they target."""

    def __init__(self, label: Optional[str] = None) -> None:
        super().__init__(label)

        self.label = label
        # Completion value of the statements that ran before the jump.
        self.value: Optional[Value[Any]] = None

    def targets(self, labels: Labels) -> bool:
        return self.label is None or self.label in labels

class BreakSignal(ControlSignal):
    pass

class ContinueSignal(ControlSignal):
    pass

class Interpreter:
    def __init__(self, scope: Optional[Scope] = None) -> None:
        if scope is None:
            scope = Scope()

        self.scope = scope

    def evaluate(self, program: Program) -> Optional[Value[Any]]:
        """
        Evaluates a whole program and returns the value of the last statement that produced one,
        or None when no statement did (an empty program, for example).
        """
        try:
            return self.visit(program)
        except BreakSignal as signal:
            if signal.label is not None:
                return Value.error(f"Undefined label '{signal.label}'")

            return Value.error('Illegal break statement')
        except ContinueSignal as signal:
            if signal.label is not None:
                return Value.error(f"Undefined label '{signal.label}'")

            return Value.error('Illegal continue statement')

    def visit(self, node: ASTNode) -> Optional[Value[Any]]:
        method = getattr(self, f'visit_{node.__class__.__name__}', self.visit_unsupported)
        return method(node)

    def visit_unsupported(self, node: ASTNode) -> Value[Any]:
        return Value.error(f'{node.__class__.__name__} is not supported')

    def run_statements(self, statements: List[ASTStmt]) -> Optional[Value[Any]]:
        result: Optional[Value[Any]] = None
        try:
            for stmt in statements:
                value = self.visit(stmt)
                if value is None:
                    continue

                result = value
                if value.is_error:
                    break
        except ControlSignal as signal:
            if signal.value is None:
                signal.value = result

            raise

        return result

    def visit_Program(self, program: Program) -> Optional[Value[Any]]:
        return self.run_statements(program.statements)

    def visit_BlockStmt(self, block: BlockStmt) -> Value[Any]:
        result = self.run_statements(block.statements)
        if result is None:
            return Value.undefined()

        return result

    def visit_EmptyStmt(self, stmt: EmptyStmt) -> None:
        return None

    def visit_DebuggerStmt(self, stmt: DebuggerStmt) -> None:
        return None

    def visit_ExprStmt(self, stmt: ExprStmt) -> Optional[Value[Any]]:
        return self.visit(stmt.expr)

    def visit_VarStmt(self, stmt: VarStmt) -> Value[Any]:
        for decl in stmt.declarations:
            name = decl.name.name
            if decl.init is None:
                # Redeclaring without an initialiser keeps the current binding.
                if name not in self.scope:
                    self.scope.set(name, Value.undefined())

                continue

            value = self.visit(decl.init)
            if value.is_error:
                return value

            self.scope.set(name, value)

        return Value.undefined()

    def visit_IfStmt(self, stmt: IfStmt) -> Optional[Value[Any]]:
        condition = self.visit(stmt.condition)
        if condition.is_error:
            return condition

        if is_truthy(condition):
            return self.visit(stmt.consequent)
        elif stmt.alternate is not None:
            return self.visit(stmt.alternate)

        return Value.null()

    def visit_WhileStmt(self, stmt: WhileStmt) -> Value[Any]:
        return self.run_loop(stmt, ())

    def visit_DoWhileStmt(self, stmt: DoWhileStmt) -> Value[Any]:
        return self.run_loop(stmt, ())

    def visit_ForStmt(self, stmt: ForStmt) -> Value[Any]:
        return self.run_loop(stmt, ())

    def run_loop(self, loop: Loop, labels: Labels) -> Value[Any]:
        result: Value[Any] = Value.undefined()

        if isinstance(loop, ForStmt) and loop.init is not None:
            init = self.visit(loop.init)
            if init is not None and init.is_error:
                return init

        # A do-while runs its body once before the first test.
        check = not isinstance(loop, DoWhileStmt)
        while True:
            if check and loop.condition is not None:
                condition = self.visit(loop.condition)
                if condition.is_error:
                    return condition

                if not is_truthy(condition):
                    break

            check = True

            value, stop = self.run_loop_body(loop.body, labels)
            if value is not None:
                result = value
                if value.is_error:
                    return value

            if stop:
                break

            if isinstance(loop, ForStmt) and loop.update is not None:
                update = self.visit(loop.update)
                if update.is_error:
                    return update

        return result

    def run_loop_body(self, body: ASTStmt, labels: Labels) -> Tuple[Optional[Value[Any]], bool]:
        """Runs one iteration; the flag tells the loop to stop because of a `break`."""
        try:
            return self.visit(body), False
        except BreakSignal as signal:
            if not signal.targets(labels):
                raise

            return signal.value, True
        except ContinueSignal as signal:
            if not signal.targets(labels):
                raise

            return signal.value, False

    def visit_LabelledStmt(self, stmt: LabelledStmt) -> Optional[Value[Any]]:
        labels = [stmt.label.name]

        body = stmt.body
        while isinstance(body, LabelledStmt):
            labels.append(body.label.name)
            body = body.body

        if isinstance(body, (WhileStmt, DoWhileStmt, ForStmt)):
            return self.run_loop(body, tuple(labels))

        try:
            return self.visit(body)
        except BreakSignal as signal:
            if signal.label not in labels:
                raise

            return signal.value

    def visit_BreakStmt(self, stmt: BreakStmt) -> None:
        raise BreakSignal(stmt.label.name if stmt.label is not None else None)

    def visit_ContinueStmt(self, stmt: ContinueStmt) -> None:
        raise ContinueSignal(stmt.label.name if stmt.label is not None else None)

    def visit_ReturnStmt(self, stmt: ReturnStmt) -> Value[Any]:
        if stmt.argument is None:
            return Value.undefined()

        return self.visit(stmt.argument)

    def visit_ThrowStmt(self, stmt: ThrowStmt) -> Value[Any]:
        value = self.visit(stmt.argument)
        if value.is_error:
            return value

        return Value.error(f'Uncaught {value.inspect()}')

    def visit_IdentifierExpr(self, expr: IdentifierExpr) -> Value[Any]:
        value, found = self.scope.get(expr.name)
        if not found:
            return Value.error(f'identifier not found: {expr.name}')

        return value

    def visit_LiteralExpr(self, expr: LiteralExpr) -> Value[Any]:
        if expr.kind is LiteralKind.Number:
            try:
                return Value.number(float(expr.value))
            except ValueError:
                return Value.error(f'could not parse "{expr.value}" as number')
        elif expr.kind is LiteralKind.String:
            return Value.string(expr.value)
        elif expr.kind is LiteralKind.Boolean:
            return Value.boolean(expr.value == 'true')
        elif expr.kind is LiteralKind.Null:
            return Value.null()

        return Value.undefined()

    def visit_UnaryOpExpr(self, expr: UnaryOpExpr) -> Value[Any]:
        operand = self.visit(expr.expr)
        if operand.is_error:
            return operand

        op = expr.op
        if op.type is TokenType.Not:
            return Value.boolean(not is_truthy(operand))
        elif op.type is TokenType.Minus and expr.prefix:
            if operand.type is not ValueType.Number:
                return Value.error(f'unknown operator: -{operand.type}')

            return Value.number(-operand.value)

        return Value.error(f'unknown operator: {op.literal}{operand.type}')

    def visit_BinaryOpExpr(self, expr: BinaryOpExpr) -> Value[Any]:
        lhs = self.visit(expr.lhs)
        if lhs.is_error:
            return lhs

        rhs = self.visit(expr.rhs)
        if rhs.is_error:
            return rhs

        return self.binary_op(expr.op, lhs, rhs)

    def binary_op(self, op: Token, lhs: Value[Any], rhs: Value[Any]) -> Value[Any]:
        if lhs.type is ValueType.Number and rhs.type is ValueType.Number:
            function = NUMBER_OPERATORS.get(op.type)
            if function is None:
                return Value.error(f'unknown operator: {lhs.type} {op.literal} {rhs.type}')

            result = function(lhs.value, rhs.value)
            if isinstance(result, bool):
                return Value.boolean(result)

            return Value.number(result)

        # Only the shared singletons compare equal outside of numbers.
        if op.type is TokenType.Eq:
            return Value.boolean(lhs is rhs)
        elif op.type is TokenType.NEq:
            return Value.boolean(lhs is not rhs)
        elif lhs.type is not rhs.type:
            return Value.error(f'type mismatch: {lhs.type} {op.literal} {rhs.type}')

        return Value.error(f'unknown operator: {lhs.type} {op.literal} {rhs.type}')

    def visit_TernaryExpr(self, expr: TernaryExpr) -> Value[Any]:
        condition = self.visit(expr.condition)
        if condition.is_error:
            return condition

        if is_truthy(condition):
            return self.visit(expr.consequent)

        return self.visit(expr.alternate)

    def visit_AssignExpr(self, expr: AssignExpr) -> Value[Any]:
        value = self.visit(expr.value)
        if value.is_error:
            return value

        return self.scope.assign(expr.target.name, value)
