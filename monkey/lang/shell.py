"""Handles interactive/command-line mode for the Monkey interpreter. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """Monkey interpreter shell. An empty line ends the session."""
    intro = "Monkey interpreter :: Python backend\nType 'help' for more information, or an empty line to quit."
    prompt = ">> "

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self.sess.error_handler.fatal = False  # errors should not end the session
        self.line_num = 0

    def default(self, line):
        """Executes arbitrary Monkey source."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1

            if not self.sess.add(line, self.line_num):
                self.sess.error_handler.report_parser_errors(self.sess.parser_errors)
                return

            self.sess.run()

            if self.sess.results:
                self.sess.error_handler.report_result(self.sess.pop())

    def do_help(self, arg):
        """Prints a short intro to the language instead of command docs."""
        if arg:
            return self.default(self.lastcmd)  # e.g. "help(x)" is Monkey source

        print("Welcome to the Monkey interpreter!\n\n"
              "Monkey is a small language with C-like syntax, first-class functions and closures. \n"
              "Try it out by typing 'let add = fn(x, y) { x + y };'. This will bind the function \n"
              "to the name 'add'. Next, try typing 'add(1, 2)'. Built-in functions: len, first, \n"
              "last, rest, push and puts.")

    def emptyline(self):
        """An empty line ends the session."""
        return True

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return True

    def do_exit(self, arg):
        """Exits interpreter."""
        if arg:
            return self.default(self.lastcmd)
        return True
