"""Evaluation for the pfx language. Lines are evaluated one at a time by scanning their tokens right-to-left: literals
are pushed onto an operand stack, identifiers are either builtins (print) or variables, and operators pull their
operands from their source neighbors and the stack.

Binary operators can be written infix or trailing:

```
x = 3 + 4      ; infix: right operand was already pushed (scanned first), left operand is the token before "+"
z = x y +      ; trailing: nothing pushed yet, so both operands are the two tokens before "+"
print z        ; 7
```

Errors raised while evaluating a line stop the current run but never the process: they are reported through the
parser's ErrorHandler, and the variable table survives for the next run.
"""

import operator
import sys
from dataclasses import dataclass
from typing import Optional

from termcolor import colored

from pfx.lang import numerical
from pfx.lang.error import ErrorHandler, MissingOperand, ScriptError, TypeMismatch, UnknownIdentifier, UnknownOperator
from pfx.lang.lexical import Token, TokenKind


LITERALS = (TokenKind.NUMBER, TokenKind.STRING, TokenKind.BOOLEAN)

TRUE = "true"
FALSE = "false"


@dataclass(frozen=True)
class Variable:
    type: TokenKind
    value: str

    def token(self):
        return Token(self.type, self.value)


@dataclass(frozen=True)
class Outcome:
    """Result of evaluating a line (or a run of lines): either continue, or stop because of error."""
    error: Optional[ScriptError] = None

    @property
    def stopped(self):
        return self.error is not None


CONTINUE = Outcome()


def source_neighbor(line, idx, offset):
    """Returns the token offset positions away from idx in line's source order, or None if there is none."""
    pos = idx + offset
    if 0 <= pos < len(line):
        return line[pos]
    return None


def _boolean(value):
    return Token(TokenKind.BOOLEAN, TRUE if value else FALSE)


def _expect(op, kinds, expected, *operands):
    for token in operands:
        if token.kind not in kinds:
            raise TypeMismatch(op, expected, token.value)


def _add(op, left, right):
    _expect(op, (TokenKind.NUMBER, TokenKind.STRING), "Number or String", left, right)

    if TokenKind.STRING in (left.kind, right.kind):
        return Token(TokenKind.STRING, left.value + right.value)
    total = numerical.to_int(left.value, op) + numerical.to_int(right.value, op)
    return Token(TokenKind.NUMBER, numerical.to_text(total, op))


def _equality(op, left, right):
    _expect(op, LITERALS, "Number, String or Boolean", left, right)

    equal = left.value == right.value  # textual
    return _boolean(equal if op == "==" else not equal)


COMPARISONS = {">": operator.gt, "<": operator.lt, ">=": operator.ge, "<=": operator.le}


def _compare(op, left, right):
    _expect(op, (TokenKind.NUMBER,), "Number", left, right)
    return _boolean(COMPARISONS[op](numerical.to_int(left.value, op), numerical.to_int(right.value, op)))


LOGICAL = {"&&": lambda a, b: a and b, "||": lambda a, b: a or b}


def _logical(op, left, right):
    _expect(op, (TokenKind.BOOLEAN,), "Boolean", left, right)
    return _boolean(LOGICAL[op](left.value == TRUE, right.value == TRUE))


BINARY = {
    "+": _add,
    "==": _equality,
    "!=": _equality,
    ">": _compare,
    "<": _compare,
    ">=": _compare,
    "<=": _compare,
    "&&": _logical,
    "||": _logical,
}
ASSIGN = "="


class Parser:
    """Evaluates programs (lists of Lines) against a variable table that persists across calls to parse. print output
    goes to out (stdout by default); errors go to error_handler, which must not be fatal for REPL use.
    """

    def __init__(self, error_handler=None, out=None, debug=False):
        self.error_handler = error_handler if error_handler is not None else ErrorHandler(fatal=False)
        self.out = out
        self.debug = debug

        self.stack = []      # operand stack of Tokens
        self.variables = {}  # dict of name: Variable
        self.aborted = False

        self.builtins = {"print": self.do_print}

    def parse(self, program):
        """Evaluates program line by line. Stops at the first line that raises an error, reports it, and returns its
        Outcome. Output printed before the error is not retracted, and variables assigned before it are kept.
        """
        self.aborted = False

        if self.debug:
            dump = "\n".join(f"{line.number}: {list(line.tokens)}" for line in program)
            print(f"--- Tokens ---\n{dump}\n--------------\n", file=self.error_handler.stream or sys.stderr)

        for line in program:
            outcome = self.evaluate_line(line)
            if outcome.stopped:
                self.aborted = True
                self.stack.clear()  # next run starts quiescent
                self.error_handler.report(outcome.error)
                return outcome

        return CONTINUE

    def evaluate_line(self, line):
        """Evaluates a single Line and returns its Outcome. Does not report errors."""
        try:
            self._evaluate(line)
        except ScriptError as error:
            error.line_num = line.number
            return Outcome(error)
        return CONTINUE

    def _evaluate(self, line):
        base = len(self.stack)  # values above base were pushed by this line
        skip = 0

        for idx in reversed(range(len(line))):
            if skip:
                skip -= 1  # already consumed by an operator
                continue

            token = line[idx]
            if token.kind in LITERALS:
                self.stack.append(token)
            elif token.kind is TokenKind.IDENTIFIER:
                self.identifier(token)
            elif token.kind is TokenKind.OPERATOR:
                skip = self.binary(line, idx, base)
            # symbols are reserved

    def identifier(self, token):
        """Invokes token if it is a builtin, otherwise pushes the variable it names."""
        if token.value in self.builtins:
            self.builtins[token.value]()
        else:
            self.stack.append(self.resolve(token))

    def resolve(self, token, resolve=True):
        """Returns the value token stands for: the variable it names if it is an identifier and resolve is set,
        otherwise token itself.
        """
        if token.kind is not TokenKind.IDENTIFIER or not resolve:
            return token

        try:
            return self.variables[token.value].token()
        except KeyError:
            raise UnknownIdentifier(token.value) from None

    def stack_top(self, base=0):
        """Pops and returns the top of the operand stack if it is above base, else returns None."""
        if len(self.stack) > base:
            return self.stack.pop()
        return None

    def operand(self, line, idx, offset, op, side, resolve=True):
        """Returns the (resolved) source neighbor of the operator at idx, raising a MissingOperand if there is none."""
        token = source_neighbor(line, idx, offset)
        if token is None:
            raise MissingOperand(op, side)
        return self.resolve(token, resolve)

    def binary(self, line, idx, base):
        """Evaluates the binary operator at idx in line. Returns the number of source tokens before it that were
        consumed as operands (and must be skipped).
        """
        op = line[idx].value
        if op != ASSIGN and op not in BINARY:
            raise UnknownOperator(op)

        resolve = op != ASSIGN  # the assignment target is a name, not a value

        right = self.stack_top(base)
        if right is not None:
            left = self.operand(line, idx, -1, op, "left", resolve)
            consumed = 1
        else:
            right = self.operand(line, idx, -1, op, "right", resolve)
            left = self.operand(line, idx, -2, op, "left", resolve)
            consumed = 2

        if op == ASSIGN:
            self.assign(left, right)
        else:
            self.stack.append(BINARY[op](op, left, right))

        return consumed

    def assign(self, target, value):
        if target.kind is not TokenKind.IDENTIFIER:
            raise TypeMismatch(ASSIGN, "Identifier", target.value)
        _expect(ASSIGN, LITERALS, "Number, String or Boolean", value)

        self.variables[target.value] = Variable(value.kind, value.value)

    def do_print(self):
        """Pops a value (or "" if there is none) and prints it. Numbers lose their zero padding, booleans are bold."""
        token = self.stack_top()
        if token is None:
            token = Token(TokenKind.STRING, "")

        text = token.value
        if token.kind is TokenKind.NUMBER:
            text = numerical.normalize(text)
        elif token.kind is TokenKind.BOOLEAN:
            text = colored(text, attrs=["bold"])

        print(text, file=self.out if self.out is not None else sys.stdout)
