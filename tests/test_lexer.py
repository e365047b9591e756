import unittest

from minijs.lexer import Lexer
from minijs.tokens import TokenType
from minijs.errors import LexerError

def lex(source):
    return Lexer(source).tokenize()

def significant(source):
    return [token.type for token in lex(source) if not token.is_trivia]

class LexerTestCase(unittest.TestCase):

    def test_literals_reassemble_source(self):
        sources = [
            'var a = 10;\na - 4;',
            '#!/usr/bin/env minijs\r\nx >>>= 1 /* note */ // done',
            "'single' + \"double\" + `back`",
            '\t\v\f' + chr(0xa0) + 'x' + chr(0x2028) + 'y',
        ]
        for source in sources:
            tokens = lex(source)
            self.assertEqual(''.join(token.literal for token in tokens), source)
            self.assertIs(tokens[-1].type, TokenType.EOF)
            self.assertEqual(tokens[-1].literal, '')

    def test_positions_never_go_backwards(self):
        tokens = lex('var a = 1;\n/* one\ntwo */ a\n  + 2;')
        positions = [(token.line, token.col) for token in tokens]
        self.assertEqual(positions, sorted(positions))

    def test_positions_point_at_first_character(self):
        tokens = [token for token in lex('var a = 1;\n  a - 4;') if not token.is_trivia]

        self.assertEqual((tokens[0].line, tokens[0].col), (1, 1))
        self.assertEqual((tokens[1].line, tokens[1].col), (1, 5))
        self.assertEqual((tokens[5].literal, tokens[5].line, tokens[5].col), ('a', 2, 3))
        self.assertEqual((tokens[6].literal, tokens[6].col), ('-', 5))

    def test_longest_punctuator_wins(self):
        self.assertEqual(
            significant('a >>>= b >>> c >> d'),
            [
                TokenType.Ident, TokenType.UShrAssign, TokenType.Ident, TokenType.UShr,
                TokenType.Ident, TokenType.Shr, TokenType.Ident, TokenType.EOF
            ]
        )
        self.assertEqual(significant('a ?.b ?? c ??= d')[1::2], [
            TokenType.QuestionDot, TokenType.Coalesce, TokenType.CoalesceAssign, TokenType.EOF
        ])
        self.assertEqual(significant('!== === ** **= ...'), [
            TokenType.NTripleEq, TokenType.TripleEq, TokenType.Pow, TokenType.PowAssign,
            TokenType.Ellipsis, TokenType.EOF
        ])

    def test_comment_close_outside_comment_is_two_punctuators(self):
        self.assertEqual(significant('*/'), [TokenType.Mul, TokenType.Div, TokenType.EOF])

    def test_keywords(self):
        self.assertEqual(
            significant('var undefined typeof instanceof true false null vars'),
            [
                TokenType.Var, TokenType.Undefined, TokenType.Typeof, TokenType.Instanceof,
                TokenType.True_, TokenType.False_, TokenType.Null, TokenType.Ident, TokenType.EOF
            ]
        )

    def test_trivia_tokens(self):
        tokens = lex('#!shebang\n  a // line\r\n/* block */')
        self.assertEqual([token.type for token in tokens], [
            TokenType.HashBang, TokenType.Newline, TokenType.Whitespace, TokenType.Ident,
            TokenType.Whitespace, TokenType.SingleLineComment, TokenType.Newline,
            TokenType.MultiLineComment, TokenType.EOF
        ])

        self.assertEqual(tokens[0].value, 'shebang')
        self.assertEqual(tokens[2].literal, '  ')
        self.assertEqual(tokens[6].literal, '\r\n')
        self.assertEqual(tokens[7].line, 3)

    def test_line_separators_start_new_lines(self):
        tokens = lex('a' + chr(0x2028) + 'b' + chr(0x2029) + 'c')
        idents = [token for token in tokens if token.type is TokenType.Ident]

        self.assertEqual([(token.line, token.col) for token in idents], [(1, 1), (2, 1), (3, 1)])

    def test_numbers(self):
        tokens = [token for token in lex('12 3.25 7.') if not token.is_trivia]
        self.assertEqual([token.literal for token in tokens[:3]], ['12', '3.25', '7'])
        self.assertIs(tokens[3].type, TokenType.Dot)

    def test_strings(self):
        token = lex('"a\\"b"')[0]
        self.assertIs(token.type, TokenType.String)
        self.assertEqual(token.literal, '"a\\"b"')
        self.assertEqual(token.value, 'a\\"b')

        token = lex("'it''s'")[0]
        self.assertEqual(token.literal, "'it'")

    def test_bytes_are_decoded(self):
        tokens = Lexer(('var s = "h' + chr(0xe9) + '";').encode('utf-8')).tokenize()
        strings = [token for token in tokens if token.type is TokenType.String]
        self.assertEqual(strings[0].value, 'h' + chr(0xe9))

    def test_iteration_stops_before_eof(self):
        tokens = list(Lexer('a b'))
        self.assertEqual(len(tokens), 3)
        self.assertNotIn(TokenType.EOF, [token.type for token in tokens])

class LexerErrorTestCase(unittest.TestCase):

    def assertLexerError(self, source, line, column):
        with self.assertRaises(LexerError) as cm:
            lex(source)

        self.assertEqual((cm.exception.span.start.line, cm.exception.span.start.column), (line, column))
        return cm.exception

    def test_unterminated_string(self):
        self.assertLexerError('var s = "abc', 1, 9)
        self.assertLexerError("x;\n'abc\ndef'", 2, 1)
        # An escaped line terminator does not continue the string either.
        self.assertLexerError('"abc\\\ndef"', 1, 1)

    def test_stray_backtick(self):
        self.assertLexerError('`', 1, 1)

    def test_unterminated_block_comment(self):
        self.assertLexerError('a;\n  /* never closed\n', 2, 3)

    def test_identifier_directly_after_number(self):
        self.assertLexerError('1 + 3in', 1, 6)

    def test_unexpected_character(self):
        self.assertLexerError('a @ b', 1, 3)

    def test_invalid_utf8(self):
        self.assertLexerError(b'1 + \xff', 1, 5)

    def test_rendering(self):
        error = self.assertLexerError('var s = "abc', 1, 9)
        self.assertEqual(
            str(error), 'var s = "abc\n        ^\nSyntaxError: Invalid or unexpected token'
        )


if __name__ == '__main__':
    unittest.main()
