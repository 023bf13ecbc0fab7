"""Runs a .lox script, or the interactive shell if no script is given. Installed as the `lox` executable.

Exit codes follow the usual convention: 64 for a usage error, 65 for a scan/parse error, 70 for a runtime error.
"""

import argparse
import sys

from lox.lang.error import ErrorHandler, UsageError
from lox.lang.session import Session
from lox.lang.shell import Shell


class ArgumentParser(argparse.ArgumentParser):
    """argparse, but a bad command line exits with the usage error code rather than 2."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(UsageError.exit_code, f"{self.prog}: error: {message}\n")


def main():
    """Runs lox interpreter. Called from the lox executable script."""
    with ErrorHandler() as error_handler:
        parser = ArgumentParser(prog="lox", description="Tree-walking interpreter for the Lox language.")
        parser.add_argument("file", help="script to interpret and run (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("--ast", action="store_true", help="print the parsed program instead of running it")
        args = parser.parse_args()

        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False)

            if args.ast:
                for line in sess.dump():
                    print(line)
            else:
                sess.run()

        elif args.ast:
            raise UsageError("--ast needs a script")

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True)).cmdloop()


if __name__ == "__main__":
    main()
