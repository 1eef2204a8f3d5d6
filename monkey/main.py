"""Runs .monkey files, single snippets, or the interactive shell. Also uses the error handling context manager.
Installed as the `monkey` console script.
"""

import argparse
import sys

from monkey.interpreter import parse, tokenize
from monkey.lang.error import ErrorHandler, MonkeyError, escape
from monkey.lang.session import Session
from monkey.lang.shell import Shell


def read_source(args):
    """Returns (path, source) for --tokens/--ast, which work on raw text instead of a Session."""
    if args.eval is not None:
        return Session.SH_FILE, args.eval
    if args.file is None:
        raise MonkeyError("--tokens and --ast need a file or --eval SOURCE")

    try:
        with open(args.file, "r") as file:
            return args.file, file.read()
    except OSError:
        raise MonkeyError("'{}' could not be opened", args.file)


def dump(args):
    """Prints the token stream (--tokens) or the parsed program (--ast) of the requested source."""
    __, source = read_source(args)

    if args.tokens:
        for token in tokenize(source):
            print(f"{token.kind.name:<10} {token.literal!r}")
        return

    program, errors = parse(source)
    for statement in program.statements:
        print(statement)
    if errors:
        details = "".join(f"\n  {escape(error)}" for error in errors)
        raise MonkeyError(f"{len(errors)} syntax error(s):{details}")


def main(argv=None):
    """Runs monkey interpreter. Called from the monkey console script."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="monkey", description="Monkey language interpreter")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("-e", "--eval", metavar="SOURCE", help="evaluate SOURCE and print its value")
        parser.add_argument("--tokens", action="store_true", help="print the token stream instead of evaluating")
        parser.add_argument("--ast", action="store_true", help="print the parsed program instead of evaluating")
        parser.add_argument("--recursion-limit", type=int, metavar="N",
                            help="raise Python's recursion limit for deeply recursive programs")
        args = parser.parse_args(argv)

        if args.recursion_limit is not None:
            sys.setrecursionlimit(args.recursion_limit)

        if args.tokens or args.ast:
            dump(args)

        elif args.eval is not None:
            if not args.eval.strip():
                raise MonkeyError("--eval needs a non-empty SOURCE")

            sess = Session(error_handler, Session.SH_FILE, cmd_line=True)
            error_handler.fatal = True
            sess.add(args.eval)
            sess.run()
            print(sess.pop().inspect())

        elif args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False)
            sess.run()

            if sess.results:
                print(sess.pop().inspect())

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True)).cmdloop()


if __name__ == "__main__":
    main()
