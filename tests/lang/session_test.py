import os
import tempfile
import unittest

from monkey.lang.error import ErrorHandler, MonkeyError
from monkey.lang.session import Session


PROGRAM = """let add = fn(a, b) {
  a + b
};
let x = add(2, 3);

x * 2
"""


class SessionTestCase(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmp.cleanup()

    def write(self, name, source):
        path = os.path.join(self.tmp.name, name)
        with open(path, "w") as file:
            file.write(source)
        return path

    def shell_session(self):
        return Session(ErrorHandler(), Session.SH_FILE, cmd_line=True)

    def test_file(self):
        sess = Session(ErrorHandler(), self.write("prog.monkey", PROGRAM), cmd_line=False)
        self.assertEqual([1], sorted(sess.to_exec))
        self.assertEqual(PROGRAM, sess.sources[1])

        sess.run()
        self.assertEqual(["10"], [result.inspect() for result in sess.results])
        self.assertEqual({}, sess.to_exec)

    def test_file_is_one_program(self):
        cases = {
            "let x = 1 +\n  2;\nx": "3",
            "if (true) {\n  1\n}\nelse {\n  2\n}": "1",
            "if (false) {\n  1\n}\nelse {\n  2\n}": "2",
            "return 1;\n2;": "1",
            "let f = fn(n) {\n  n * 2\n};\n\nreturn f(4);\nf(5)": "8",
        }
        for case, expected in cases.items():
            sess = Session(ErrorHandler(), self.write("case.monkey", case), cmd_line=False)
            sess.run()
            self.assertEqual([expected], [result.inspect() for result in sess.results], case)

    def test_empty_file(self):
        sess = Session(ErrorHandler(), self.write("empty.monkey", "\n  \n"), cmd_line=False)
        sess.run()
        self.assertEqual([], sess.results)

    def test_file_runtime_error(self):
        path = self.write("bad.monkey", "let a = 1;\n\na + true;\nlet b = 2;\n")
        sess = Session(ErrorHandler(), path, cmd_line=False)
        with self.assertRaises(MonkeyError) as cm:
            sess.run()
        self.assertIn("type mismatch: INTEGER + BOOLEAN", str(cm.exception))
        self.assertEqual([], sess.results)
        self.assertEqual(1, sess.env.get("a").value)
        self.assertIsNone(sess.env.get("b"))

    def test_file_syntax_error(self):
        path = self.write("bad.monkey", "let = 1;\n")
        with self.assertRaises(MonkeyError) as cm:
            Session(ErrorHandler(), path, cmd_line=False)
        self.assertIn("1 syntax error in entry starting", str(cm.exception))
        self.assertIn("expected next token to be IDENT, got = instead", str(cm.exception))

    def test_unopenable_file(self):
        with self.assertRaises(MonkeyError) as cm:
            Session(ErrorHandler(), os.path.join(self.tmp.name, "missing.monkey"), cmd_line=False)
        self.assertIn("could not be opened", str(cm.exception))

    def test_reserved_filename(self):
        with self.assertRaises(MonkeyError):
            Session(ErrorHandler(), Session.SH_FILE, cmd_line=False)

    def test_command_line(self):
        sess = self.shell_session()
        self.assertFalse(sess.error_handler.fatal)

        sess.add("let a = 1;")
        sess.run()
        sess.add("a + 1", 2)
        sess.run()

        self.assertEqual("2", sess.pop().inspect())
        self.assertEqual({}, sess.to_exec)

    def test_runtime_error(self):
        sess = self.shell_session()
        sess.add("let a = 1;")
        sess.add("a + true", 2)

        with self.assertRaises(MonkeyError) as cm:
            sess.run()
        self.assertIn("type mismatch: INTEGER + BOOLEAN", str(cm.exception))
        self.assertEqual(["1"], [result.inspect() for result in sess.results])
        self.assertEqual({}, sess.to_exec)

    def test_several_syntax_errors(self):
        with self.assertRaises(MonkeyError) as cm:
            self.shell_session().add("let = 1; let x 2;")
        self.assertIn("2 syntax errors in entry starting", str(cm.exception))

    def test_empty_entry(self):
        with self.assertRaises(ValueError):
            self.shell_session().add("   ")

    def test_open_brackets(self):
        cases = {"fn(x) {": 2, "\"{\"": 0, "}": -1, "[1, [2]]": 0, "": 0}
        for case, expected in cases.items():
            self.assertEqual(expected, Session.open_brackets(case), case)

    def test_preprocess_line(self):
        self.assertEqual(("fn(x) {", True), Session.preprocess_line("fn(x) {  "))
        self.assertEqual(("fn(x) {\nx }", False), Session.preprocess_line("x }", "fn(x) {"))


if __name__ == '__main__':
    unittest.main()
