"""Session control for the Monkey shell: parses input lines and evaluates them against one persistent Environment,
so bindings made on one line are visible on the next.
"""

from monkey.runtime.environment import Environment
from monkey.runtime.evaluator import evaluate
from monkey.syntax.lexer import Lexer
from monkey.syntax.parser import Parser


class Session:
    """Governs a Monkey session, with control over the scope shared by its lines."""
    SH_FILE = "<stdin>"  # command-line interpreter filename

    def __init__(self, error_handler, path=SH_FILE):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path  # used for error messages

        self.environment = Environment()  # top-level scope, lives as long as the session
        self.to_exec = {}                 # dict of line num: (line, Program) to evaluate
        self.results = []                 # results of evaluated Programs, oldest first
        self.parser_errors = []           # syntax errors of the last line passed to add

    @staticmethod
    def parse(expr):
        """Parses expr and returns (Program, list of syntax errors)."""
        parser = Parser(Lexer(expr))
        program = parser.parse_program()
        return program, parser.errors

    def add(self, expr, line_num):
        """Parses expr and queues it for evaluation. Evaluation is delayed until run is called. Returns False (and
        leaves the syntax errors in self.parser_errors) if expr does not parse; nothing is queued in that case.
        """
        self.error_handler.register_line(self.path, expr, line_num)  # in case error is raised

        program, self.parser_errors = Session.parse(expr)
        if not self.parser_errors:
            self.to_exec[line_num] = (expr, program)

        self.error_handler.remove_line(self.path)  # error was not raised
        return not self.parser_errors

    def run(self):
        """Evaluates this session's queued Programs in order, appending their results to self.results. Python errors
        raised during evaluation propagate, but the failing Program is still removed from the queue.
        """
        for line_num, (expr, program) in list(self.to_exec.items()):
            self.error_handler.register_line(self.path, expr, line_num)

            try:
                self.results.append(evaluate(program, self.environment))
            finally:
                del self.to_exec[line_num]

            self.error_handler.remove_line(self.path)

    def pop(self):
        """Removes and returns the most recent result."""
        return self.results.pop()

    def evaluate(self, expr, line_num=1):
        """Parses and evaluates expr right away. Returns the result, or None if expr has syntax errors."""
        if not self.add(expr, line_num):
            return None
        self.run()
        return self.pop()
