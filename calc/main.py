"""Uses implementation of the calc language to interpret files/streams of lines or run in command-line mode. Also uses
error handling context manager. Called from the calc console script.
"""

import argparse
import logging
import os
import sys

from calc.lang.error import ErrorHandler
from calc.lang.session import Session
from calc.lang.shell import Shell


def main():
    """Runs calc interpreter. Called from calc console script."""
    parser = argparse.ArgumentParser(description="Line-oriented calculator with variables and functions.")
    parser.add_argument("file", nargs="?",
                        help="file to interpret and run, '-' for stdin (if empty, goes to command-line mode)")
    parser.add_argument("--strict", action="store_true", help="stop at the first error in a file")
    parser.add_argument("--debug", action="store_true", help="log tokens and syntax trees of every line")
    parser.add_argument("--no-color", action="store_true", help="do not color errors and warnings")
    args = parser.parse_args()

    if args.no_color:
        os.environ["NO_COLOR"] = "1"  # honored by termcolor

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    with ErrorHandler(fatal=args.strict) as error_handler:
        if args.file is None and sys.stdin.isatty():
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True)).cmdloop()
            return

        sess = Session(error_handler, args.file or Session.STDIN, cmd_line=False)
        sess.run()

    if error_handler.errors:
        sys.exit(1)


if __name__ == "__main__":
    main()
