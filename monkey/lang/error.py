"""Host-level error reporting for the Monkey interpreter.

Monkey's own errors never reach this module: syntax errors are collected by the parser and runtime errors are
Error objects returned by the evaluator. What ends up here is everything Python itself raises while running a
program (division by zero, runaway recursion, Ctrl-C) plus GenericExceptions raised by the shell or command line.
If any other type of error makes it all the way to ErrorHandler, it is assumed to be an internal issue.
"""

import sys

from termcolor import colored

from monkey.runtime.object import ObjectType


class GenericException(Exception):
    """Templates an error message so that it can be used to report a Monkey interpreter error. The offending
    snippets in exprs are substituted into msg and highlighted.
    """

    def __init__(self, msg, exprs=None, internal=False):
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]

        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.internal = internal

        super().__init__(self.msg)


class ErrorHandler:
    """Context manager that suppresses Python errors raised while running Monkey code and reports them instead.
    With fatal=True (command-line use) a reported error exits the process with status 1.
    """
    ERROR = "red"

    HOST_ERRORS = {
        KeyboardInterrupt: "keyboard interrupt",
        RecursionError: "maximum recursion depth exceeded",
        ZeroDivisionError: "division by zero",
    }

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called prior to Session add/run."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after successful Session add/run."""
        self.traceback[path] = (None, None)

    @staticmethod
    def report_parser_errors(errors):
        """Prints the parser error block: a header line, then one tab-indented message per error."""
        print(colored(" parser errors:", ErrorHandler.ERROR, attrs=["bold"]))
        for error in errors:
            print(f"\t{error}")

    @staticmethod
    def report_result(result):
        """Prints result's inspect() text, in red if it is a Monkey runtime error."""
        text = result.inspect()
        if result.type is ObjectType.ERROR:
            text = colored(text, ErrorHandler.ERROR)
        print(text)

    def throw(self, error):
        """Reports error (a GenericException) along with the lines registered in self.traceback."""
        error_msg = ""
        for file, (line, line_num) in self.traceback.items():
            if line:
                error_msg += f"  File '{file}', line {line_num}:\n"
                error_msg += f"    {line}\n"

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        if self.fatal:
            sys.exit(1)
        self.traceback = {key: (None, None) for key in self.traceback}  # no need if error is fatal

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is None:
            return True
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type in ErrorHandler.HOST_ERRORS:
            self.throw(GenericException(ErrorHandler.HOST_ERRORS[exc_type]))
        elif issubclass(exc_type, GenericException):
            self.throw(exc_val)
        else:
            self.throw(GenericException(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit
