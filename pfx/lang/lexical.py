"""Lexical analysis for the pfx language. Turns program text into lines of typed tokens; evaluation is done in
evaluation.py.

Statements are separated by newlines or ';'. Within a statement, tokens can loosely be defined as follows:

```
<string>     ::= '"' <char>* '"'          ; quotes are stripped, an unterminated string runs to the end of the line
<number>     ::= ["-"] <digit>+           ; "-" is only a sign if no token is in progress: "3-5" is 3, -, 5
<boolean>    ::= "true" | "false"
<symbol>     ::= "(" | ")" | "[" | "]" | "{" | "}"
<operator>   ::= <op_char> ["="] | "&&" | "||"
<op_char>    ::= "=" | "+" | "-" | "*" | "/" | "^" | "!" | ">" | "<" | "&" | "|"
<identifier> ::= <char>+                  ; anything else, up to the next whitespace/symbol/operator/quote

<comment>    ::= ("#" | "//") <char>*     ; discards the rest of the line
```

Scanning is a finite-state machine: `transition` is a pure function of the current ScanState and one character (plus
one character of lookahead), and Lexer just drives it over each statement. Malformed input never raises: the scanner
always degrades to the best tokens it can make.

Note that a string literal that contains "//" is cut at the marker and ends the line, so `"http://x"` lexes as the
string `http:`. This is kept for compatibility with existing programs.
"""

import sys
from collections import namedtuple
from dataclasses import dataclass
from enum import Enum


DIGITS = "0123456789"
SYMBOLS = "()[]{}"
OPERATORS = "=+-*/^!><&|"
PAIRS = ("&&", "||")      # two-character operators that don't end in "="
BOOLEANS = ("true", "false")

COMMENT = "#"
LINE_COMMENT = "//"


class TokenKind(Enum):
    IDENTIFIER = "Identifier"
    NUMBER = "Number"
    STRING = "String"
    BOOLEAN = "Boolean"
    OPERATOR = "Operator"
    SYMBOL = "Symbol"

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class Token:
    """Lexical unit. Numbers and booleans keep their literal text until an operator or print consumes them."""
    kind: TokenKind
    value: str

    def __repr__(self):
        return f"{self.kind}('{self.value}')"


@dataclass(frozen=True)
class Line:
    """Tokens of one statement in source order. number is the 1-based physical line the statement was found on, and
    source is the statement's raw text (used for diagnostics).
    """
    number: int
    tokens: tuple
    source: str = ""

    def __iter__(self):
        return iter(self.tokens)

    def __len__(self):
        return len(self.tokens)

    def __getitem__(self, idx):
        return self.tokens[idx]


class Mode(Enum):
    DEFAULT = "default"      # between tokens, or inside an identifier
    IN_STRING = "string"
    IN_NUMBER = "number"


@dataclass(frozen=True)
class ScanState:
    """In-progress token: the scanner's mode and the text accumulated so far."""
    mode: Mode = Mode.DEFAULT
    text: str = ""


START = ScanState()

# state: next ScanState, tokens: tokens emitted by this character, advance: number of characters consumed,
# stop: whether the rest of the line should be discarded
Step = namedtuple("Step", ["state", "tokens", "advance", "stop"])


def flush(state):
    """Returns the tokens (zero or one) that state's in-progress text makes."""
    if state.mode is Mode.IN_STRING:
        return (Token(TokenKind.STRING, state.text),)
    elif not state.text:
        return ()
    elif state.mode is Mode.IN_NUMBER:
        return (Token(TokenKind.NUMBER, state.text),)
    elif state.text in BOOLEANS:
        return (Token(TokenKind.BOOLEAN, state.text),)
    return (Token(TokenKind.IDENTIFIER, state.text),)


def transition(state, char, nxt=""):
    """Feeds char to the scanner in state. nxt is the character after char ("" at the end of the line). Returns a Step."""
    if state.mode is Mode.IN_STRING:
        if char == "\"":
            return Step(START, flush(state), 1, False)
        elif char + nxt == LINE_COMMENT:
            return Step(START, flush(state), 1, True)
        return Step(ScanState(Mode.IN_STRING, state.text + char), (), 1, False)

    if char == "\"":
        return Step(ScanState(Mode.IN_STRING), flush(state), 1, False)

    elif char == COMMENT or char + nxt == LINE_COMMENT:
        return Step(START, flush(state), 1, True)

    elif char.isspace():
        return Step(START, flush(state), 1, False)

    elif char in SYMBOLS:
        return Step(START, flush(state) + (Token(TokenKind.SYMBOL, char),), 1, False)

    elif char == "-" and nxt and nxt in DIGITS and not state.text:
        return Step(ScanState(Mode.IN_NUMBER, char), (), 1, False)

    elif char in OPERATORS:
        if nxt == "=" or char + nxt in PAIRS:
            return Step(START, flush(state) + (Token(TokenKind.OPERATOR, char + nxt),), 2, False)
        return Step(START, flush(state) + (Token(TokenKind.OPERATOR, char),), 1, False)

    elif char in DIGITS:
        if state.text:
            return Step(ScanState(state.mode, state.text + char), (), 1, False)  # x1 stays an identifier
        return Step(ScanState(Mode.IN_NUMBER, char), (), 1, False)

    elif state.mode is Mode.IN_NUMBER:
        return Step(ScanState(Mode.DEFAULT, char), flush(state), 1, False)  # 12ab: number, then identifier

    return Step(ScanState(Mode.DEFAULT, state.text + char), (), 1, False)


class Lexer:
    """Splits program text into Lines of Tokens. If debug, the raw text is echoed to stream (stderr by default) before
    it is tokenized.
    """

    def __init__(self, debug=False, stream=None):
        self.debug = debug
        self.stream = stream

    @staticmethod
    def scan(statement):
        """Returns the tokens of a single statement as a tuple."""
        chars = statement.replace("\r", "")
        if not chars.strip() or chars.strip().startswith(LINE_COMMENT):
            return ()

        tokens = []
        state = START
        pos = 0
        while pos < len(chars):
            nxt = chars[pos + 1] if pos + 1 < len(chars) else ""
            step = transition(state, chars[pos], nxt)

            tokens.extend(step.tokens)
            state = step.state
            if step.stop:
                break
            pos += step.advance

        tokens.extend(flush(state))
        return tuple(tokens)

    def lex(self, code, start=1):
        """Returns the program in code as a list of Lines, in source order. start is the number given to the first
        physical line. Statements without tokens (blank or comment-only) are left out.
        """
        if self.debug:
            print(f"--- Code ---\n{code}\n------------\n", file=self.stream if self.stream is not None else sys.stderr)

        program = []
        for line_num, physical in enumerate(code.split("\n"), start):
            for statement in physical.split(";"):
                tokens = Lexer.scan(statement)
                if tokens:
                    program.append(Line(line_num, tokens, statement.strip()))

        return program
