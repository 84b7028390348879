"""Session control for the pfx language. A session owns one Lexer and one Parser, so variables persist for as long as
the session does, either over a whole file or over every line typed in command-line mode.
"""

import sys

from pfx.lang.error import GenericException
from pfx.lang.evaluation import Parser
from pfx.lang.lexical import Lexer


class Session:
    """Governs a pfx session."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path, cmd_line, debug=False, out=None):
        self.error_handler = error_handler
        self.error_handler.path = path  # used for error messages

        self.path = path
        self.cmd_line = cmd_line  # whether or not in command-line mode
        self.code = None          # file contents (not used in command-line mode)
        self.line_num = 0         # physical lines consumed so far

        if self.cmd_line:
            self.error_handler.fatal = False

        self.lexer = Lexer(debug=debug, stream=error_handler.stream)
        self.parser = Parser(error_handler, out=out, debug=debug)

        if path != Session.SH_FILE:
            try:
                with open(path, "r") as file:
                    self.code = file.read()
            except OSError:
                raise GenericException("'{}' could not be opened", path)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename")

    @property
    def variables(self):
        return self.parser.variables

    def add(self, code):
        """Lexes and evaluates code, numbering its lines after those already added. Returns the run's Outcome."""
        program = self.lexer.lex(code, start=self.line_num + 1)
        self.line_num += code.count("\n") + 1

        return self.parser.parse(program)

    def run(self):
        """Runs the file this session was opened with. If the run aborts and errors are fatal, exits with status 1."""
        outcome = self.add(self.code)
        if outcome.stopped and self.error_handler.fatal:
            sys.exit(1)
        return outcome
