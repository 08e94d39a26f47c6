import unittest

from monkey.runtime.environment import Environment
from monkey.runtime.evaluator import evaluate, int64, is_truthy
from monkey.runtime.object import FALSE, NULL, TRUE, Array, Error, Function, Hash, Integer, ObjectType, String
from monkey.syntax.lexer import Lexer
from monkey.syntax.parser import Parser

def run(source, env=None):
    parser = Parser(Lexer(source))
    program = parser.parse_program()
    assert not parser.errors, parser.errors
    return evaluate(program, Environment() if env is None else env)


class EvaluatorTestCase(unittest.TestCase):

    def assert_results(self, cases):
        for case, expected in cases.items():
            result = run(case)
            if expected is None:
                self.assertIs(NULL, result, case)
            elif isinstance(expected, bool):
                self.assertIs(TRUE if expected else FALSE, result, case)
            elif isinstance(expected, int):
                self.assertEqual(Integer(expected), result, case)
            else:
                self.assertEqual(expected, result, case)

    def test_integer_expressions(self):
        self.assert_results({
            "5": 5,
            "10": 10,
            "-5": -5,
            "-10": -10,
            "5 + 5 + 5 + 5 - 10": 10,
            "2 * 2 * 2 * 2 * 2": 32,
            "-50 + 100 + -50": 0,
            "5 * 2 + 10": 20,
            "5 + 2 * 10": 25,
            "20 + 2 * -10": 0,
            "50 / 2 * 2 + 10": 60,
            "2 * (5 + 10)": 30,
            "3 * 3 * 3 + 10": 37,
            "3 * (3 * 3) + 10": 37,
            "(5 + 10 * 2 + 15 / 3) * 2 + -10": 50,
        })

    def test_integer_division_truncates(self):
        self.assert_results({
            "7 / 2": 3,
            "-7 / 2": -3,
            "7 / -2": -3,
            "-7 / -2": 3,
            "1 / 3": 0,
        })

        with self.assertRaises(ZeroDivisionError):
            run("1 / 0")

    def test_integer_overflow_wraps(self):
        self.assert_results({
            "9223372036854775807 + 1": -2 ** 63,
            "-9223372036854775807 - 2": 2 ** 63 - 1,
            "9223372036854775807 * 2": -2,
        })

        cases = {2 ** 63: -2 ** 63, -2 ** 63 - 1: 2 ** 63 - 1, 5: 5, -5: -5}
        for case, expected in cases.items():
            self.assertEqual(expected, int64(case), case)

    def test_boolean_expressions(self):
        self.assert_results({
            "true": True,
            "false": False,
            "1 < 2": True,
            "1 > 2": False,
            "1 < 1": False,
            "1 > 1": False,
            "1 == 1": True,
            "1 != 1": False,
            "1 == 2": False,
            "1 != 2": True,
            "true == true": True,
            "false == false": True,
            "true == false": False,
            "true != false": True,
            "false != true": True,
            "(1 < 2) == true": True,
            "(1 < 2) == false": False,
            "(1 > 2) == true": False,
            "(1 > 2) == false": True,
        })

    def test_bang_operator(self):
        self.assert_results({
            "!true": False,
            "!false": True,
            "!5": False,
            "!!true": True,
            "!!false": False,
            "!!5": True,
            "!0": False,
            '!""': False,
        })

    def test_if_else_expressions(self):
        self.assert_results({
            "if (true) { 10 }": 10,
            "if (false) { 10 }": None,
            "if (1) { 10 }": 10,
            "if (0) { 10 }": 10,
            "if (1 < 2) { 10 }": 10,
            "if (1 > 2) { 10 }": None,
            "if (1 > 2) { 10 } else { 20 }": 20,
            "if (1 < 2) { 10 } else { 20 }": 10,
            "if (true) { }": None,
        })

    def test_truthiness(self):
        should_pass = [TRUE, Integer(0), String(""), Array(), Hash()]
        for case in should_pass:
            self.assertTrue(is_truthy(case), case)

        should_fail = [FALSE, NULL]
        for case in should_fail:
            self.assertFalse(is_truthy(case), case)

    def test_return_statements(self):
        self.assert_results({
            "return 10;": 10,
            "return 10; 9;": 10,
            "return 2 * 5; 9;": 10,
            "9; return 2 * 5; 9;": 10,
            "if (10 > 1) { if (10 > 1) { return 10; } return 1; }": 10,
            "let f = fn(x) { return x; x + 10; }; f(10);": 10,
            "let f = fn(x) { let result = x + 10; return result; return 10; }; f(10);": 20,
            "return;": None,
            "let f = fn() { return; 5 }; f()": None,
        })

    def test_return_inside_operands(self):
        # a return reached while evaluating an operand unwinds the whole program or call
        self.assert_results({
            "[if (true) { return 1 }][0] + 1": 1,
            'len(if (true) { return "ab" })': String("ab"),
            '{"a": if (true) { return 2 }}': 2,
            "{if (true) { return 3 }: 1}": 3,
            "if (true) { return 4 } + 1": 4,
            "-if (true) { return 5 }": 5,
            "[1, 2][if (true) { return 6 }]": 6,
            "let x = if (true) { return 7 }; x + 1": 7,
            "let f = fn() { let a = [if (true) { return 8 }]; 0 }; f() + 1": 9,
            "let f = fn() { if (if (true) { return 10 }) { 1 } else { 2 } }; f()": 10,
        })

    def test_return_inside_let_binds_nothing(self):
        env = Environment()
        self.assertEqual(Integer(5), run("let x = if (true) { return 5 };", env))
        self.assertNotIn("x", env.store)
        self.assertEqual(Error("identifier not found: x"), run("x + 1", env))

        run("let f = fn() { let y = if (true) { return 1 }; 2 };", env)
        self.assertEqual(Integer(1), run("f()", env))
        self.assertEqual(["f"], sorted(env.store))

    def test_error_handling(self):
        cases = {
            "5 + true;": "type mismatch: Integer + Boolean",
            "5 + true; 5;": "type mismatch: Integer + Boolean",
            "-true": "unknown operator: -Boolean",
            '-"a"': "unknown operator: -String",
            "true + false;": "unknown operator: Boolean + Boolean",
            "true + false + true + false;": "unknown operator: Boolean + Boolean",
            "5; true + false; 5": "unknown operator: Boolean + Boolean",
            "if (10 > 1) { true + false; }": "unknown operator: Boolean + Boolean",
            "if (10 > 1) { if (10 > 1) { return true + false; } return 1; }": "unknown operator: Boolean + Boolean",
            "foobar": "identifier not found: foobar",
            '"Hello" - "World"': "unknown operator: String - String",
            '"a" < "b"': "unknown operator: String < String",
            '{"name": "Monkey"}[fn(x) { x }];': "unusable as hash key: Function",
            '{fn(x) { x }: 1}': "unusable as hash key: Function",
            "{[1]: 1}": "unusable as hash key: Array",
            "1 == true": "type mismatch: Integer == Boolean",
            '"a" != 1': "type mismatch: String != Integer",
            "5(1)": "not a function: Integer",
            '"f"()': "not a function: String",
            "1[0]": "index operator not supported: Integer",
            '"abc"[0]': "index operator not supported: String",
            "[1, 2][true]": "index operator not supported: Array",
            "null == null": "identifier not found: null",
            "[1, x, 3]": "identifier not found: x",
            "len(1, y)": "identifier not found: y",
            "let x = y; x": "identifier not found: y",
            "fn(x, y) { y }(1)": "identifier not found: y",
        }
        for case, expected in cases.items():
            result = run(case)
            self.assertEqual(ObjectType.ERROR, result.type, case)
            self.assertEqual(expected, result.message, case)

    def test_let_statements(self):
        self.assert_results({
            "let a = 5; a;": 5,
            "let a = 5 * 5; a;": 25,
            "let a = 5; let b = a; b;": 5,
            "let a = 5; let b = a; let c = a + b + 5; c;": 15,
            "let a = 5;": 5,
            "let a = 1; let a = a + 1; a": 2,
        })

    def test_functions(self):
        result = run("fn(x) { x + 2; };")
        self.assertIsInstance(result, Function)
        self.assertEqual(["x"], [str(param) for param in result.parameters])
        self.assertEqual("(x + 2)", str(result.body))

        self.assert_results({
            "let identity = fn(x) { x; }; identity(5);": 5,
            "let identity = fn(x) { return x; }; identity(5);": 5,
            "let double = fn(x) { x * 2; }; double(5);": 10,
            "let add = fn(x, y) { x + y; }; add(5, 5);": 10,
            "let add = fn(x, y) { x + y; }; add(5 + 5, add(5, 5));": 20,
            "fn(x) { x; }(5)": 5,
            "fn() { }()": None,
            "fn(x) { x }(1, 2, 3)": 1,
        })

    def test_closures(self):
        self.assert_results({
            "let newAdder = fn(x) { fn(y) { x + y }; }; let addTwo = newAdder(2); addTwo(2);": 4,
            "let x = 10; let f = fn() { x }; let g = fn(x) { f() }; g(1)": 10,
            "let counter = fn(x) { if (x > 50) { return x; } counter(x + 1) }; counter(0)": 51,
            "let f = fn(x) { let y = x; y }; f(1); let y = 7; y": 7,
        })

        # bindings made inside a call stay inside it
        result = run("let f = fn() { let inner = 1; inner }; f(); inner")
        self.assertEqual(Error("identifier not found: inner"), result)

    def test_recursion(self):
        source = """
        let fibonacci = fn(x) {
            if (x == 0) { return 0; }
            if (x == 1) { return 1; }
            fibonacci(x - 1) + fibonacci(x - 2);
        };
        fibonacci(15);
        """
        self.assertEqual(Integer(610), run(source))

    def test_strings(self):
        self.assert_results({
            '"Hello World!"': String("Hello World!"),
            '"Hello" + " " + "World!"': String("Hello World!"),
            '"a" == "a"': True,
            '"a" == "b"': False,
            '"a" != "b"': True,
            r'"a\nb"': String(r"a\nb"),
        })

    def test_builtin_functions(self):
        self.assert_results({
            'len("")': 0,
            'len("four")': 4,
            'len("hello world")': 11,
            "len([1, 2, 3])": 3,
            "len([])": 0,
            'len(1)': Error("argument to `len` not supported, got Integer"),
            'len("one", "two")': Error("wrong number of arguments. got=2, want=1"),
            "first([1, 2, 3])": 1,
            "first([])": None,
            "first(1)": Error("argument to `first` must be ARRAY, got Integer"),
            "last([1, 2, 3])": 3,
            "last([])": None,
            "last(1)": Error("argument to `last` must be ARRAY, got Integer"),
            "rest([1, 2, 3])": Array([Integer(2), Integer(3)]),
            "rest([])": None,
            "push([], 1)": Array([Integer(1)]),
            "push(1, 1)": Error("argument to `push` must be ARRAY, got Integer"),
            "let a = [1]; let b = push(a, 2); len(a)": 1,
            "let len = fn(x) { 42 }; len([])": 42,
        })
        self.assertEqual("builtin function", run("len").inspect())

    def test_array_literals(self):
        self.assertEqual(Array([Integer(1), Integer(4), Integer(6)]), run("[1, 2 * 2, 3 + 3]"))
        self.assertEqual("[1, true, a, []]", run('[1, true, "a", []]').inspect())

    def test_array_index_expressions(self):
        self.assert_results({
            "[1, 2, 3][0]": 1,
            "[1, 2, 3][1]": 2,
            "[1, 2, 3][2]": 3,
            "let i = 0; [1][i];": 1,
            "[1, 2, 3][1 + 1];": 3,
            "let myArray = [1, 2, 3]; myArray[2];": 3,
            "let myArray = [1, 2, 3]; myArray[0] + myArray[1] + myArray[2];": 6,
            "let myArray = [1, 2, 3]; let i = myArray[0]; myArray[i]": 2,
            "[1, 2, 3][3]": None,
            "[1, 2, 3][-1]": None,
        })

    def test_hash_literals(self):
        source = """let two = "two";
        {
            "one": 10 - 9,
            two: 1 + 1,
            "thr" + "ee": 6 / 2,
            4: 4,
            true: 5,
            false: 6
        }"""
        result = run(source)
        self.assertIsInstance(result, Hash)

        expected = [
            (String("one"), 1),
            (String("two"), 2),
            (String("three"), 3),
            (Integer(4), 4),
            (TRUE, 5),
            (FALSE, 6),
        ]
        self.assertEqual(len(expected), len(result.pairs))
        for key, value in expected:
            pair = result.pairs[key.hash_key()]
            self.assertEqual(Integer(value), pair.value, key)

        self.assertEqual('{1: 1, 1: 2}', run('{1: 1, "1": 2}').inspect())
        self.assertEqual("{1: 2}", run("{1: 1, 1: 2}").inspect())

    def test_hash_index_expressions(self):
        self.assert_results({
            '{"foo": 5}["foo"]': 5,
            '{"foo": 5}["bar"]': None,
            'let key = "foo"; {"foo": 5}[key]': 5,
            '{}["foo"]': None,
            "{5: 5}[5]": 5,
            "{true: 5}[true]": 5,
            "{false: 5}[false]": 5,
            '{"a" + "b": 1}["ab"]': 1,
        })

    def test_environment_persists(self):
        env = Environment()
        run("let x = 5; let add = fn(a, b) { a + b };", env)
        self.assertEqual(Integer(8), run("add(x, 3)", env))

    def test_empty_program(self):
        self.assertIs(NULL, run(""))


if __name__ == '__main__':
    unittest.main()
