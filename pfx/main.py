"""Runs .pfx files, or the pfx interpreter in command-line mode. Called from the pfx executable script. Uses the error
handling context manager, so anything that goes wrong is reported as a pfx error.
"""

import argparse
import sys

from pfx.lang.error import ErrorHandler
from pfx.lang.session import Session
from pfx.lang.shell import Shell


def main():
    """Runs pfx interpreter. Called from pfx executable script."""
    assert sys.version_info >= (3, 7), "pfx cannot be run with python < 3.7"

    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="pfx")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("-r", "--repl", help="run in command-line mode", action="store_true")
        parser.add_argument("-d", "--debug", help="echo source and tokens to stderr", action="store_true")
        args = parser.parse_args()

        if args.file is not None and not args.repl:
            Session(error_handler, args.file, cmd_line=False, debug=args.debug).run()
        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True, debug=args.debug)).cmdloop()


if __name__ == "__main__":
    main()
