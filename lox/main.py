"""Runs .lox files, or starts command-line mode, using the lox lexer/parser/interpreter pipeline. Also uses error
handling context manager. Installed as the lox executable script.

Basic program flow:
    1. Lexer (lang/lexical.py): source text -> tokens ending in EOF; bad characters are recorded, not fatal
    2. Parser (lang/parser.py): tokens -> statement nodes (grammar/stmt.py, grammar/expr.py); recovers from errors
    3. Interpreter (lang/interpreter.py): walks the statements against a chain of scope frames (lang/environment.py)

Exit statuses: 0 on success, 64 if the lexer reported an error, 65 for parse errors, 66 if the file can't be read,
70 for runtime errors.
"""

import argparse
import sys

from lox.lang.error import ErrorHandler
from lox.lang.session import Session
from lox.lang.shell import Shell


def build_parser():
    parser = argparse.ArgumentParser(prog="lox", description="lox interpreter")
    parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("-t", "--tokens", action="store_true", help="print every scanned token before running")
    parser.add_argument("-q", "--quiet", action="store_true", help="don't echo the value of expression statements")
    return parser


def main(argv=None):
    """Runs lox interpreter. Called from lox executable script."""
    args = build_parser().parse_args(argv)

    with ErrorHandler() as error_handler:
        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False, echo=not args.quiet, dump_tokens=args.tokens)
            status = sess.run()
            if status:
                sys.exit(status)

        else:
            sess = Session(error_handler, Session.SH_FILE, cmd_line=True, echo=not args.quiet,
                           dump_tokens=args.tokens)
            Shell(sess).cmdloop()


if __name__ == "__main__":
    main()
