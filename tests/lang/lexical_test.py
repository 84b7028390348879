import io
import unittest

from pfx.lang.lexical import Lexer, Line, Mode, START, ScanState, Token, TokenKind, flush, transition


def tok(kind, value):
    return Token(TokenKind[kind], value)


class TransitionTestCase(unittest.TestCase):

    def test_string_mode(self):
        step = transition(START, "\"", "a")
        self.assertEqual(ScanState(Mode.IN_STRING), step.state)
        self.assertEqual((), step.tokens)

        step = transition(ScanState(Mode.IN_STRING, "a b"), "\"")
        self.assertEqual(START, step.state)
        self.assertEqual((tok("STRING", "a b"),), step.tokens)

        step = transition(ScanState(Mode.IN_STRING, "a"), "#", "")
        self.assertEqual(ScanState(Mode.IN_STRING, "a#"), step.state)  # comments don't start inside strings

    def test_string_absorbs_line_comment(self):
        step = transition(ScanState(Mode.IN_STRING, "http:"), "/", "/")
        self.assertTrue(step.stop)
        self.assertEqual((tok("STRING", "http:"),), step.tokens)

    def test_number_mode(self):
        step = transition(START, "-", "5")
        self.assertEqual(ScanState(Mode.IN_NUMBER, "-"), step.state)

        step = transition(ScanState(Mode.IN_NUMBER, "3"), "-", "5")
        self.assertEqual(START, step.state)
        self.assertEqual((tok("NUMBER", "3"), tok("OPERATOR", "-")), step.tokens)

        step = transition(ScanState(Mode.IN_NUMBER, "12"), "a", "")
        self.assertEqual(ScanState(Mode.DEFAULT, "a"), step.state)
        self.assertEqual((tok("NUMBER", "12"),), step.tokens)

    def test_operators(self):
        cases = {(">", "="): (">=", 2), ("=", "="): ("==", 2), ("!", "="): ("!=", 2), ("&", "&"): ("&&", 2),
                 ("|", "|"): ("||", 2), ("&", "x"): ("&", 1), ("+", " "): ("+", 1), ("=", ""): ("=", 1)}
        for (char, nxt), (value, advance) in cases.items():
            step = transition(START, char, nxt)
            self.assertEqual((tok("OPERATOR", value),), step.tokens, (char, nxt))
            self.assertEqual(advance, step.advance, (char, nxt))

    def test_comments(self):
        for char, nxt in [("#", ""), ("#", "x"), ("/", "/")]:
            step = transition(ScanState(Mode.DEFAULT, "x"), char, nxt)
            self.assertTrue(step.stop)
            self.assertEqual((tok("IDENTIFIER", "x"),), step.tokens)

    def test_flush(self):
        self.assertEqual((), flush(START))
        self.assertEqual((tok("STRING", ""),), flush(ScanState(Mode.IN_STRING)))
        self.assertEqual((tok("BOOLEAN", "true"),), flush(ScanState(Mode.DEFAULT, "true")))
        self.assertEqual((tok("IDENTIFIER", "truth"),), flush(ScanState(Mode.DEFAULT, "truth")))


class LexerTestCase(unittest.TestCase):

    def test_scan(self):
        cases = {
            "3-5": [tok("NUMBER", "3"), tok("OPERATOR", "-"), tok("NUMBER", "5")],
            "-5": [tok("NUMBER", "-5")],
            "x-5": [tok("IDENTIFIER", "x"), tok("OPERATOR", "-"), tok("NUMBER", "5")],
            "x = -5": [tok("IDENTIFIER", "x"), tok("OPERATOR", "="), tok("NUMBER", "-5")],
            "a>=b": [tok("IDENTIFIER", "a"), tok("OPERATOR", ">="), tok("IDENTIFIER", "b")],
            "a && b || c": [tok("IDENTIFIER", "a"), tok("OPERATOR", "&&"), tok("IDENTIFIER", "b"),
                            tok("OPERATOR", "||"), tok("IDENTIFIER", "c")],
            "print \"a\" // trailing": [tok("IDENTIFIER", "print"), tok("STRING", "a")],
            "print \"a\" # trailing": [tok("IDENTIFIER", "print"), tok("STRING", "a")],
            "print \"http://x\" y": [tok("IDENTIFIER", "print"), tok("STRING", "http:")],
            "(x)[y]{z}": [tok("SYMBOL", "("), tok("IDENTIFIER", "x"), tok("SYMBOL", ")"), tok("SYMBOL", "["),
                          tok("IDENTIFIER", "y"), tok("SYMBOL", "]"), tok("SYMBOL", "{"), tok("IDENTIFIER", "z"),
                          tok("SYMBOL", "}")],
            "true false truthy": [tok("BOOLEAN", "true"), tok("BOOLEAN", "false"), tok("IDENTIFIER", "truthy")],
            "\"a  b\" \"\"": [tok("STRING", "a  b"), tok("STRING", "")],
            "print \"abc": [tok("IDENTIFIER", "print"), tok("STRING", "abc")],
            "007 12ab x1": [tok("NUMBER", "007"), tok("NUMBER", "12"), tok("IDENTIFIER", "ab"), tok("IDENTIFIER", "x1")],
            "x =": [tok("IDENTIFIER", "x"), tok("OPERATOR", "=")],
            "print 1\r": [tok("IDENTIFIER", "print"), tok("NUMBER", "1")],
        }
        for case, expected in cases.items():
            self.assertEqual(tuple(expected), Lexer.scan(case), case)

    def test_scan_empty(self):
        for case in ["", "   ", "\r", "// comment", "   // indented comment", "# comment"]:
            self.assertEqual((), Lexer.scan(case), case)

    def test_lex(self):
        code = "x = 3\ny = 4\n\n// comment\n# comment\nprint x; print y\n"
        program = Lexer().lex(code)

        self.assertEqual([1, 2, 6, 6], [line.number for line in program])
        self.assertEqual((tok("IDENTIFIER", "x"), tok("OPERATOR", "="), tok("NUMBER", "3")), program[0].tokens)
        self.assertEqual("print y", program[3].source)
        self.assertEqual([tok("IDENTIFIER", "print"), tok("IDENTIFIER", "x")], list(program[2]))

    def test_lex_start(self):
        program = Lexer().lex("print 1\nprint 2", start=10)
        self.assertEqual([10, 11], [line.number for line in program])

    def test_line(self):
        line = Line(1, (tok("NUMBER", "1"), tok("NUMBER", "2")))
        self.assertEqual(2, len(line))
        self.assertEqual(tok("NUMBER", "2"), line[1])

    def test_debug_echo(self):
        stream = io.StringIO()
        Lexer(debug=True, stream=stream).lex("print 1")
        self.assertIn("--- Code ---\nprint 1\n", stream.getvalue())

        stream = io.StringIO()
        Lexer(stream=stream).lex("print 1")
        self.assertEqual("", stream.getvalue())


if __name__ == '__main__':
    unittest.main()
