import sys
import unittest

from minijs.lexer import Lexer
from minijs.ast import *
from minijs.errors import ParserError
from minijs.tokens import TokenType

def parse(source):
    return Parser(Lexer(source).tokenize()).parse()

def render(source):
    return str(parse(source))

class ExpressionTestCase(unittest.TestCase):

    def test_precedence(self):
        cases = {
            '1 + 2 * 3;': '(1 + (2 * 3));',
            '1 * 2 + 3;': '((1 * 2) + 3);',
            '1 - 2 - 3;': '((1 - 2) - 3);',
            '2 ** 3 ** 2;': '(2 ** (3 ** 2));',
            'a || b && c | d ^ e & f;': '(a || (b && (c | (d ^ (e & f)))));',
            'a == b < c << d;': '(a == (b < (c << d)));',
            'a in b instanceof c;': '((a in b) instanceof c);',
            '1 + 2 >>> 3;': '((1 + 2) >>> 3);',
            'a = b = 1;': '(a = (b = 1));',
            'a ? b : c ? d : e;': '(a ? b : (c ? d : e));',
            '!a == b;': '((!a) == b);',
            '-x ** 2;': '((-x) ** 2);',
            '(1 + 2) * 3;': '((1 + 2) * 3);',
        }
        for source, expected in cases.items():
            self.assertEqual(render(source), expected, source)

    def test_unary_operators(self):
        cases = {
            'typeof x;': '(typeof x);',
            'void 0;': '(void 0);',
            'delete a;': '(delete a);',
            '~-+!a;': '(~(-(+(!a))));',
            '-x++;': '(-(x++));',
            '++x;': '(++x);',
            'new a;': '(new a);',
        }
        for source, expected in cases.items():
            self.assertEqual(render(source), expected, source)

        expr = parse('x--;').statements[0].expr
        self.assertIsInstance(expr, UnaryOpExpr)
        self.assertFalse(expr.prefix)
        self.assertIs(expr.op.type, TokenType.Decrement)

    def test_postfix_operator_must_stay_on_its_line(self):
        program = parse('a\n++b')

        self.assertEqual(len(program.statements), 2)
        self.assertEqual(str(program), 'a;\n(++b);')

    def test_literals(self):
        program = parse('null; true; false; undefined; 1.5; "two"; \'three\';')
        kinds = [stmt.expr.kind for stmt in program.statements]

        self.assertEqual(kinds, [
            LiteralKind.Null, LiteralKind.Boolean, LiteralKind.Boolean, LiteralKind.Undefined,
            LiteralKind.Number, LiteralKind.String, LiteralKind.String
        ])

        literal = program.statements[5].expr
        self.assertEqual(literal.value, 'two')
        self.assertEqual(literal.raw, '"two"')
        self.assertEqual(str(program.statements[6]), "'three';")

    def test_array_literals(self):
        expr = parse('[1, , ...a, 2,];').statements[0].expr

        self.assertIsInstance(expr, ArrayExpr)
        self.assertEqual(
            [type(element) for element in expr.elements],
            [LiteralExpr, ElisionExpr, SpreadExpr, LiteralExpr]
        )
        self.assertEqual(str(expr), '[1, , ...a, 2]')

        self.assertEqual(render('[];'), '[];')
        self.assertEqual(render('[,];'), '[,];')

    def test_assignment_target_must_be_identifier(self):
        with self.assertRaises(ParserError) as cm:
            parse('1 = 2;')

        self.assertEqual(cm.exception.token.type, TokenType.Assign)

        with self.assertRaises(ParserError):
            parse('(a + b) = 2;')

    def test_deeply_nested_parentheses(self):
        source = '(' * 200 + '1' + ')' * 200 + ';'
        expr = parse(source).statements[0].expr

        self.assertIsInstance(expr, LiteralExpr)
        self.assertEqual(expr.value, '1')

    def test_recursion_limit_is_restored(self):
        limit = sys.getrecursionlimit()

        parse('(' * 200 + '1' + ')' * 200 + ';')
        self.assertEqual(sys.getrecursionlimit(), limit)

        with self.assertRaises(ParserError):
            parse('(' * 200 + '1')

        self.assertEqual(sys.getrecursionlimit(), limit)

class StatementTestCase(unittest.TestCase):

    def test_empty_program(self):
        self.assertEqual(parse('').statements, [])
        self.assertEqual(parse('  // only a comment\n').statements, [])

    def test_variable_statement(self):
        stmt = parse('var a, b = 2;').statements[0]

        self.assertIsInstance(stmt, VarStmt)
        self.assertEqual([decl.name.name for decl in stmt.declarations], ['a', 'b'])
        self.assertIsNone(stmt.declarations[0].init)
        self.assertEqual(str(stmt), 'var a, b = 2;')

    def test_statement_kinds(self):
        cases = {
            ';': EmptyStmt,
            '{ 1; 2; }': BlockStmt,
            'if (a) b; else c;': IfStmt,
            'while (a) b;': WhileStmt,
            'do a; while (b);': DoWhileStmt,
            'for (;;) {}': ForStmt,
            'debugger;': DebuggerStmt,
            'throw a;': ThrowStmt,
            'return;': ReturnStmt,
            'label: a;': LabelledStmt,
            'switch (a) { case 1: b; default: c; }': SwitchStmt,
            'try {} catch {}': TryStmt,
        }
        for source, kind in cases.items():
            program = parse(source)

            self.assertEqual(len(program.statements), 1, source)
            self.assertIsInstance(program.statements[0], kind, source)

    def test_if_else(self):
        stmt = parse('if (1 < 2) 42; else 0;').statements[0]

        self.assertEqual(str(stmt.condition), '(1 < 2)')
        self.assertEqual(str(stmt.consequent), '42;')
        self.assertEqual(str(stmt.alternate), '0;')
        self.assertIsNone(parse('if (a) b;').statements[0].alternate)

    def test_for_statement(self):
        stmt = parse('for (var i = 0; i < 3; i = i + 1) x;').statements[0]

        self.assertIsInstance(stmt.init, VarStmt)
        self.assertEqual(str(stmt), 'for (var i = 0; (i < 3); (i = (i + 1))) x;')

        stmt = parse('for (i = 0;;) {}').statements[0]
        self.assertIsInstance(stmt.init, ExprStmt)
        self.assertIsNone(stmt.condition)
        self.assertIsNone(stmt.update)

    def test_jump_operands_stay_on_the_same_line(self):
        program = parse('return\n1;')
        self.assertEqual(len(program.statements), 2)
        self.assertIsNone(program.statements[0].argument)

        program = parse('return /* same line */ 1;')
        self.assertEqual(str(program.statements[0].argument), '1')

        program = parse('a: while (1) break\na;')
        self.assertIsNone(program.statements[0].body.body.label)
        self.assertEqual(len(program.statements), 2)

        stmt = parse('a: while (1) continue a;').statements[0].body.body
        self.assertIsInstance(stmt, ContinueStmt)
        self.assertEqual(stmt.label.name, 'a')

    def test_switch(self):
        stmt = parse('switch (x) { case 1: a; b; default: c; case 2: }').statements[0]

        self.assertEqual(len(stmt.cases), 2)
        self.assertEqual(len(stmt.cases[0].consequent), 2)
        self.assertEqual(stmt.cases[1].consequent, [])
        self.assertIsNotNone(stmt.default_case)
        self.assertIsNone(stmt.default_case.test)

        with self.assertRaises(ParserError) as cm:
            parse('switch (x) { default: a; default: b; }')

        self.assertEqual(cm.exception.token.type, TokenType.Default)
        self.assertEqual(cm.exception.token.col, 26)

    def test_try(self):
        stmt = parse('try { a; } catch (e) { b; } finally { c; }').statements[0]

        self.assertEqual(stmt.handler.param.name, 'e')
        self.assertIsNotNone(stmt.finalizer)

        stmt = parse('try {} finally {}').statements[0]
        self.assertIsNone(stmt.handler)

        with self.assertRaises(ParserError):
            parse('try {}')

    def test_labels_are_identifiers_followed_by_colon(self):
        stmt = parse('outer: inner: for (;;) {}').statements[0]

        self.assertEqual(stmt.label.name, 'outer')
        self.assertEqual(stmt.body.label.name, 'inner')
        self.assertIsInstance(stmt.body.body, ForStmt)

class ParserErrorTestCase(unittest.TestCase):

    def test_unexpected_end_of_input(self):
        with self.assertRaises(ParserError) as cm:
            parse('1 +')

        self.assertIs(cm.exception.token.type, TokenType.EOF)
        self.assertEqual(str(cm.exception), 'SyntaxError: unexpected token EOF')

    def test_unexpected_token(self):
        with self.assertRaises(ParserError) as cm:
            parse('var x = 1;\nx = ;')

        error = cm.exception
        self.assertEqual(str(error), 'SyntaxError: unexpected token ;')
        self.assertEqual((error.span.start.line, error.span.start.column), (2, 5))

    def test_invalid_statements(self):
        for source in ('var;', 'var 1;', 'if 1;', '{ a;', 'for (a) b;', 'do a;', ')', '[1 2];'):
            with self.assertRaises(ParserError, msg=source):
                parse(source)

class RoundTripTestCase(unittest.TestCase):

    def test_rendering_parses_back_to_an_equal_tree(self):
        sources = [
            'var a = 10; a - 4;',
            'if (1 < 2) { 42; } else if (x) y; else ;',
            'for (var i = 0, j; i < 3; i = i + 1) { continue; }',
            'for (;;) break;',
            'outer: while (true) { do x = x ** 2; while (x < 100); break outer; }',
            'switch (a) { case 1: b; default: c; }',
            'try { throw "boom"; } catch (e) { e; } finally { debugger; }',
            'try {} catch {}',
            'typeof -a++ == "number" ? [1, , ...b,] : !c;',
            'return; return a >>> 1 | 2;',
            'new a in b;',
            "'single' + `back`;",
        ]
        for source in sources:
            program = parse(source)
            reparsed = parse(str(program))

            self.assertEqual(reparsed, program, source)
            self.assertEqual(str(reparsed), str(program), source)

    def test_parsing_is_deterministic(self):
        source = 'var a = 1; while (a < 10) a = a * 2;'
        self.assertEqual(parse(source), parse(source))

    def test_structural_equality_ignores_positions(self):
        self.assertEqual(parse('1 + 2;'), parse('\n\n  1   +  2  ;'))
        self.assertNotEqual(parse('1 + 2;'), parse('1 - 2;'))


if __name__ == '__main__':
    unittest.main()
