"""Error handling for the pfx language. Evaluation errors are ScriptErrors: the parser catches them at the line boundary
and reports them through an ErrorHandler without ending the process. Anything else that makes it all the way to the
ErrorHandler is assumed to be an internal issue.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error/warning message so that it can be used to throw a pfx error/warning. The message is a format
    string whose fields are filled in with exprs (bolded when shown to the user).
    """

    def __init__(self, msg, exprs=None, line_num=None, internal=False):
        if exprs is None:
            exprs = []
        if isinstance(exprs, str):
            exprs = [exprs]
        exprs = [str(expr) for expr in exprs]

        self.plain = msg.format(*exprs)
        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = exprs[0] if exprs else ""  # exprs[0] should be the offending expr that caused the error

        self.line_num = line_num  # attached by the parser when the error escapes a line
        self.internal = internal

        super().__init__(self.plain)

    def __str__(self):
        return self.plain


class ScriptError(GenericException):
    """Superclass for errors raised while evaluating a line."""


class UnknownIdentifier(ScriptError):

    def __init__(self, name):
        super().__init__("unknown identifier '{}'", name)
        self.name = name


class MissingOperand(ScriptError):

    def __init__(self, operator, side):
        super().__init__("'{}' needs a {} operand", [operator, side])
        self.operator = operator
        self.side = side


class TypeMismatch(ScriptError):

    def __init__(self, operator, expected, got):
        super().__init__("'{}' expected {}, got '{}'", [operator, expected, got])
        self.operator = operator
        self.expected = expected
        self.got = got


class UnknownOperator(ScriptError):

    def __init__(self, operator):
        super().__init__("unknown operator '{}'", operator)
        self.operator = operator


class ErrorHandler:
    """Reports pfx errors/warnings, one line each, on a diagnostic stream. Can also be used as a context manager that
    will suppress Python errors and report them as pfx errors instead.
    """
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, path="<in>", fatal=True, stream=None):
        self.path = path
        self.fatal = fatal
        self.stream = stream

    def _write(self, text):
        print(text, file=self.stream if self.stream is not None else sys.stderr)

    def _location(self, error):
        if error.line_num is None:
            return colored(f"{self.path}: ", attrs=["bold"])
        return colored(f"{self.path}:{error.line_num}: ", attrs=["bold"])

    def warn(self, *args, **kwargs):
        """Generates and reports a warning based on args."""
        error = GenericException(*args, **kwargs)
        self._write(self._location(error) + colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + error.msg)

    def report(self, error):
        """Reports error without ever exiting."""
        error_msg = self._location(error)
        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])
        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg

        self._write(error_msg)

    def throw(self, error):
        """Reports error, then exits if this handler is fatal."""
        self.report(error)
        if self.fatal:
            sys.exit(1)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException("unknown error: '{}: {}'", [exc_type.__name__, exc_val], internal=True))

        return not do_exit
