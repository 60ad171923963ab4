"""Session control for the calc language. Drives the lexer, parser and evaluator for one line at a time, either in
command-line mode or when interpreting a file/stream of lines, and owns the Context that lines are evaluated against.
"""

import logging
import math
import sys

from calc.lang.error import GenericException
from calc.lang.numerical import format_result, number
from calc.pure.context import Context
from calc.pure.lexical import tokenize
from calc.pure.parser import Parser


logger = logging.getLogger(__name__)


class Session:
    """Governs a calc session, with control over the symbols visible to each line."""
    SH_FILE = "<in>"     # command-line interpreter filename
    STDIN = "-"          # read lines from stdin without a prompt
    COMMENT = ";;"       # everything after this on a line is ignored

    def __init__(self, error_handler, path=SH_FILE, cmd_line=True):
        self.path = path if path != Session.STDIN else "<stdin>"  # used for error messages
        self.source = path
        self.cmd_line = cmd_line  # whether or not in command-line mode

        self.error_handler = error_handler
        self.error_handler.register_file(self.path)

        self.context = Context()
        self.results = []  # results of lines that have been added but not popped

        if self.cmd_line:
            self.error_handler.fatal = False
            self.error_handler.interactive = True

        if path == Session.SH_FILE and not cmd_line:
            raise GenericException("'<in>' is a reserved filename", diagnosis=False)

    @staticmethod
    def preprocess_line(line):
        """Gets rid of comments and surrounding whitespace."""
        if Session.COMMENT in line:
            line = line[:line.index(Session.COMMENT)]
        return line.strip()

    def parse(self, line):
        """Returns the syntax tree of line against the current context, without evaluating it."""
        tokens = list(tokenize(line))
        logger.debug("tokens: %s", tokens)

        root = Parser.parse(tokens, self.context)
        logger.debug("tree:\n%s", root.display())
        return root

    def execute(self, line):
        """Parses and evaluates line, returning its value (None if it has none). The line is evaluated against a copy of
        the context, which is only committed if nothing was raised, so a failing line has no effect.
        """
        root = self.parse(line)

        scratch = self.context.copy()
        result = root.evaluate(scratch, [])

        self.context.commit(scratch)
        logger.debug("committed %r -> %s", line, result)
        return result

    def add(self, line, line_num):
        """Executes line and stores its result, to be retrieved with pop. Blank lines and comments are skipped. Raises
        any error encountered while executing.
        """
        line = self.preprocess_line(line)
        if not line:
            return

        self.error_handler.register_line(self.path, line, line_num)  # in case error is raised
        result = self.execute(line)
        if result is not None and not math.isfinite(result):
            self.error_handler.warn("'{}' evaluated to {}", (line, number(result)), diagnosis=False)

        self.results.append(result)
        self.error_handler.remove_line(self.path)  # error was not raised

    def pop(self):
        """Returns the oldest stored result, formatted for display."""
        return format_result(self.results.pop(0))

    def run(self):
        """Runs every line of this session's file (or stdin), printing each result. Errors are reported by the error
        handler, which decides whether to carry on with the next line.
        """
        if self.source == Session.STDIN:
            self._run_lines(sys.stdin)
            return

        try:
            file = open(self.source, "r")
        except OSError:
            raise GenericException("'{}' could not be opened", self.source, diagnosis=False)

        with file:
            self._run_lines(file)

    def _run_lines(self, lines):
        for line_num, line in enumerate(lines):
            with self.error_handler:
                self.add(line, line_num + 1)
                while self.results:
                    print(self.pop())
