"""Handles interactive/command-line mode for the monkey interpreter. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """Monkey interpreter shell."""
    intro = "Monkey interpreter :: Python backend\nType 'help' for more information, 'exit' to quit."
    prompt = ">> "
    secondary_prompt = ".. "  # used for line continuations
    _tmp_prompt = ">> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""
        self.line_num = 0
        self._start_line = 0

    def default(self, line):
        """Executes an arbitrary monkey entry."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            if not self._tmp_line:
                self._start_line = self.line_num

            line, add_to_prev = self.sess.preprocess_line(line, self._tmp_line)

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
            else:
                self._tmp_line = ""
                self.prompt = self._tmp_prompt

                self.sess.add(line, self._start_line)
                self.sess.run()

                if self.sess.results:
                    print(self.sess.pop().inspect())

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the monkey interpreter!\n\n"
              "Monkey has integers, booleans, strings, arrays and first-class functions. Bind \n"
              "names with 'let', branch with 'if (...) { ... } else { ... }' and build functions \n"
              "with 'fn'. Built-ins: len, first, last, rest, push.\n\n"
              "Try it out by typing 'let add = fn(a, b) { a + b };'. Next, try typing \n"
              "'add(1, 2)'. Entries with unclosed brackets continue on the next line.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit("")

    def do_exit(self, arg):
        """Exits interpreter."""
        if arg:
            self.sess.error_handler.warn("ignoring unexpected argument '{}' to exit", arg)
        return True
