import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout

from monkey.main import main


class MainTestCase(unittest.TestCase):

    def run_main(self, *argv):
        out = io.StringIO()
        with redirect_stdout(out):
            main(list(argv))
        return out.getvalue()

    def assert_fails(self, *argv):
        out = io.StringIO()
        with redirect_stdout(out):
            with self.assertRaises(SystemExit) as cm:
                main(list(argv))
        self.assertEqual(1, cm.exception.code)
        return out.getvalue()

    def test_eval(self):
        cases = {
            "1 + 2": "3\n",
            "let a = [1, 2]; push(a, 3)": "[1, 2, 3]\n",
            "\"hi\"": "hi\n",
            "if (false) { 1 }": "null\n",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, self.run_main("-e", case), case)

    def test_eval_errors(self):
        self.assertIn("type mismatch: INTEGER + BOOLEAN", self.assert_fails("-e", "5 + true"))
        self.assertIn("syntax error", self.assert_fails("-e", "let = 1"))
        self.assert_fails("-e", "   ")

    def test_recursion_error(self):
        output = self.assert_fails("-e", "let f = fn() { f() }; f()")
        self.assertIn("maximum recursion depth exceeded", output)

    def test_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "answer.monkey")
            with open(path, "w") as file:
                file.write("let a = 2;\n\na * 21\n")

            self.assertEqual("42\n", self.run_main(path))
            self.assertEqual("(a * 21)\n", self.run_main("--ast", path).splitlines(True)[-1])

            self.assertIn("could not be opened", self.assert_fails(os.path.join(tmp, "missing.monkey")))

    def test_tokens(self):
        expected = ["LET        'let'", "IDENT      'x'", "EOF        ''"]
        self.assertEqual(expected, self.run_main("--tokens", "-e", "let x").splitlines())

    def test_ast(self):
        self.assertEqual("((-a) * b)\n", self.run_main("--ast", "-e", "-a * b"))
        self.assertEqual("let x = (1 + 2);\nx\n", self.run_main("--ast", "-e", "let x = 1 + 2; x"))

        output = self.assert_fails("--ast", "-e", "let = 1; 5")
        self.assertIn("5\n", output)
        self.assertIn("1 syntax error(s):", output)

    def test_dump_needs_source(self):
        self.assertIn("need a file or --eval", self.assert_fails("--ast"))


if __name__ == '__main__':
    unittest.main()
