"""Handles interactive/command-line mode for the calc interpreter. Uses cmd as backend."""

import cmd

from calc.lang.error import GenericException
from calc.lang.numerical import number


class Shell(cmd.Cmd):
    """Calculator interpreter shell."""
    intro = "Line calculator :: Python backend\nType ':help' for more information."
    prompt = "> "
    command_prefix = ":"  # never part of a calc line, so commands cannot shadow identifiers

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self.line_num = 0

    def onecmd(self, line):
        """Runs ':command' lines as shell commands and everything else as a calc line. 'EOF' is sent by cmdloop at
        the end of input.
        """
        line = line.strip()
        if line.startswith(self.command_prefix):
            line = line[len(self.command_prefix):]
            name = self.parseline(line)[0]
            if not hasattr(self, f"do_{name}"):
                with self.sess.error_handler:
                    raise GenericException("unknown command '{}', try ':help'", self.command_prefix + line)
                return None
            return super().onecmd(line)
        elif line == "EOF":
            return self.do_EOF("")
        elif not line:
            return self.emptyline()
        return self.default(line)

    def default(self, line):
        """Executes arbitrary calc line."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            self.sess.add(line, self.line_num)

            if self.sess.results:
                print(self.sess.pop())

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the calc interpreter!\n\n"
              "Every line is an arithmetic expression (+ - * / % and brackets), an assignment \n"
              "or a function definition. Try 'a = 10', then 'a * 2'. Assignments are \n"
              "expressions too: 'b = a = 3' binds both names.\n\n"
              "Define functions with 'add x y => x + y' and call them with 'add 3 4'. Function \n"
              "bodies only see their parameters and other functions, not variables.\n\n"
              "Commands: ':symbols' lists variables and functions, ':tree LINE' shows how LINE \n"
              "is parsed, ':exit' quits. Everything after ';;' is a comment.")

    def do_symbols(self, arg):
        """Lists variables and functions of the session."""
        for name, value in self.sess.context.variables():
            print(f"{name} = {number(value)}")
        for name, func in self.sess.context.functions():
            print(f"{name}/{func.arity} => {func.body}")

    def do_tree(self, arg):
        """Shows the syntax tree of a line without evaluating it."""
        with self.sess.error_handler:
            line = self.sess.preprocess_line(arg)
            if line:
                print(self.sess.parse(line).display())

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
