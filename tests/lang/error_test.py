import io
import unittest
from contextlib import redirect_stdout

from monkey.lang.error import ErrorHandler, MonkeyError, escape


class ErrorTestCase(unittest.TestCase):

    def test_escape(self):
        cases = {"": "", "fn() { 1 }": "fn() {{ 1 }}", "plain": "plain"}
        for case, expected in cases.items():
            self.assertEqual(expected, escape(case))
            self.assertEqual(case, escape(case).format())

    def test_monkey_error(self):
        error = MonkeyError("'{}' could not be opened", "a.monkey")
        self.assertIn("a.monkey", error.msg)
        self.assertIn("' could not be opened", error.msg)
        self.assertFalse(error.internal)
        self.assertEqual(error.msg, str(error))

        self.assertEqual("no template", MonkeyError("no template").msg)

    def test_throw(self):
        handler = ErrorHandler(fatal=False)
        handler.register_file("<stdin>")
        handler.register_line("<stdin>", "5 + true", 3)

        out = io.StringIO()
        with redirect_stdout(out):
            handler.throw(MonkeyError("type mismatch"))

        output = out.getvalue()
        self.assertIn("Traceback:", output)
        self.assertIn("File '<stdin>', line 3:", output)
        self.assertIn("    5 + true", output)
        self.assertIn("error: ", output)
        self.assertIn("type mismatch", output)
        self.assertEqual({"<stdin>": (None, None)}, handler.traceback)

    def test_throw_shortens_multiline_entries(self):
        handler = ErrorHandler(fatal=False)
        handler.register_file("prog.monkey")
        handler.register_line("prog.monkey", "let a = 1;\nlet b = 2;\na + true", 1)

        out = io.StringIO()
        with redirect_stdout(out):
            handler.throw(MonkeyError("type mismatch"))

        output = out.getvalue()
        self.assertIn("    let a = 1;\n    ...\n", output)
        self.assertNotIn("a + true", output)

    def test_throw_fatal(self):
        handler = ErrorHandler()
        with redirect_stdout(io.StringIO()):
            with self.assertRaises(SystemExit) as cm:
                handler.throw(MonkeyError("boom"))
        self.assertEqual(1, cm.exception.code)

    def test_warn(self):
        handler = ErrorHandler(fatal=False)
        handler.register_file("f.monkey")
        handler.register_line("f.monkey", "x", 4)

        out = io.StringIO()
        with redirect_stdout(out):
            handler.warn("careful with '{}'", "x")

        output = out.getvalue()
        self.assertIn("f.monkey:4: ", output)
        self.assertIn("warning: ", output)
        self.assertIn("careful with '", output)

    def test_context_manager(self):
        handler = ErrorHandler(fatal=False)

        out = io.StringIO()
        with redirect_stdout(out):
            with handler:
                raise MonkeyError("bad entry")
            with handler:
                raise RecursionError()
        output = out.getvalue()
        self.assertIn("bad entry", output)
        self.assertIn("maximum recursion depth exceeded", output)

    def test_internal_errors_propagate(self):
        handler = ErrorHandler(fatal=False)

        out = io.StringIO()
        with redirect_stdout(out):
            with self.assertRaises(ZeroDivisionError):
                with handler:
                    raise ZeroDivisionError("division by zero")
        self.assertIn("[internal] ", out.getvalue())
        self.assertIn("unknown error", out.getvalue())

    def test_system_exit_passes_through(self):
        with self.assertRaises(SystemExit):
            with ErrorHandler(fatal=False):
                raise SystemExit(0)


if __name__ == '__main__':
    unittest.main()
