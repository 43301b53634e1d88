"""Handles interactive/command-line mode for the lox interpreter. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """lox interpreter shell."""
    intro = "lox interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continutations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    COMMANDS = {"help", "exit", "EOF"}  # only when typed alone; 'exit = 1;' is lox source

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""
        self.line_num = 0

    def default(self, line):
        """Executes arbitrary lox source."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            start = self.line_num - self._tmp_line.count("\n")
            line, add_to_prev = self.sess.preprocess_line(self._tmp_line + line)

            if add_to_prev:
                self._tmp_line = line + "\n"
                self.prompt = self.secondary_prompt
            else:
                self._tmp_line = ""
                self.prompt = self._tmp_prompt

                self.sess.run(line, start)

    def onecmd(self, line):
        """Sends every line to default() while a continuation is pending, or when a command name is followed by more
        input, so keywords like 'help' are not dispatched mid-statement.
        """
        if self._tmp_line and line != "EOF":
            return self.default(line)

        command, arg, line = self.parseline(line)
        if command in self.COMMANDS and arg:
            return self.default(line)
        return super().onecmd(line)

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the lox interpreter!\n\n"
              "Every line is lexed, parsed and run as soon as it is entered. Lines that leave a '(' or '{' open are\n"
              "continued on the next line. Variables and functions persist for the whole session.\n\n"
              "Try it out by typing 'var a = 1 + 2;'. Next, try typing 'print a;'. This will print '3'.\n"
              "Type 'exit' or press Ctrl-D to leave.", file=self.stdout)

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print(file=self.stdout)
        if self._tmp_line:
            self.sess.error_handler.warn("unfinished input discarded: '{}'", self._tmp_line.strip())
            self._tmp_line = ""
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
