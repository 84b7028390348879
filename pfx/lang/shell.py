"""Handles interactive/command-line mode for the pfx interpreter. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """pfx interpreter shell."""
    intro = "pfx interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.sess = sess

    def default(self, line):
        """Executes arbitrary pfx statements."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.sess.add(line)

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the pfx interpreter!\n\n"
              "Statements are evaluated right to left, so operators can trail their operands: \n"
              "'x = 3 4 +' stores 7 in 'x', and 'print x' prints it. Strings, integers, and \n"
              "true/false are supported, along with + == != > < >= <= && ||.\n\n"
              "Variables are kept until the interpreter exits. Type 'exit' or Ctrl-D to quit.",
              file=self.stdout)

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print(file=self.stdout)
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        if arg:
            self.sess.error_handler.warn("unrecognized token: '{}'", arg)
            return False
        return True
