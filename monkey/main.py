"""Command-line entry point for the Monkey interpreter: evaluates a single program given with -e, or runs the
interactive shell. Also uses the error handling context manager. Called from the `monkey` console script.

Basic program flow, per line of input:
    1. Lexer: turns the source text into tokens (monkey/syntax/lexer.py)
    2. Parser: builds the AST from the tokens, collecting syntax errors (monkey/syntax/parser.py)
    3. Evaluator: walks the AST in the session's Environment and produces a runtime object
       (monkey/runtime/evaluator.py), whose inspect() text is printed
"""

import argparse
import sys

from monkey.lang.error import ErrorHandler, GenericException
from monkey.lang.session import Session
from monkey.lang.shell import Shell

RECURSION_LIMIT = 10000  # each Monkey call uses several Python frames


def main(argv=None):
    """Runs the Monkey interpreter."""
    assert sys.version_info >= (3, 8), "monkey cannot be run with python < 3.8"

    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="monkey", description="Monkey language interpreter")
        parser.add_argument("-e", "--eval", dest="source", help="evaluate SOURCE and print the result "
                                                                 "(if omitted, goes to command-line mode)")
        parser.add_argument("--recursion-limit", type=int, default=RECURSION_LIMIT,
                            help=f"maximum Python recursion depth (default: {RECURSION_LIMIT})")
        args = parser.parse_args(argv)

        sys.setrecursionlimit(args.recursion_limit)
        sess = Session(error_handler)

        if args.source is not None:
            result = sess.evaluate(args.source)
            if result is None:
                error_handler.report_parser_errors(sess.parser_errors)
                raise GenericException("'{}' could not be parsed", args.source)
            error_handler.report_result(result)

        else:
            Shell(sess).cmdloop()


if __name__ == "__main__":
    main()
