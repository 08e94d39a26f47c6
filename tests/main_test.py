import io
import sys
import unittest
from contextlib import redirect_stdout

from monkey.main import main

def run_main(*argv):
    """Runs main with argv (keeping the current recursion limit) and returns what it printed."""
    out = io.StringIO()
    with redirect_stdout(out):
        main(["--recursion-limit", str(sys.getrecursionlimit()), *argv])
    return out.getvalue()


class MainTestCase(unittest.TestCase):

    def test_eval(self):
        cases = {
            "1 + 2": "3\n",
            '"Hello" + " " + "World!"': "Hello World!\n",
            "let f = fn(x) { x * x }; f(4)": "16\n",
            "[1, 2 * 2][1]": "4\n",
            "": "null\n",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, run_main("-e", case), case)

        self.assertEqual("6\n", run_main("--eval", "len(\"monkey\")"))

    def test_eval_runtime_error(self):
        output = run_main("-e", "5 + true")
        self.assertIn("ERROR: type mismatch: Integer + Boolean", output)

    def test_eval_syntax_error(self):
        out = io.StringIO()
        with self.assertRaises(SystemExit) as context:
            with redirect_stdout(out):
                main(["--recursion-limit", str(sys.getrecursionlimit()), "-e", "let x 5;"])

        self.assertEqual(1, context.exception.code)
        self.assertIn("parser errors:", out.getvalue())
        self.assertIn("\texpected next token to be =, got INT instead\n", out.getvalue())
        self.assertIn("could not be parsed", out.getvalue())

    def test_eval_host_error(self):
        with self.assertRaises(SystemExit) as context:
            run_main("-e", "1 / 0")
        self.assertEqual(1, context.exception.code)


if __name__ == '__main__':
    unittest.main()
