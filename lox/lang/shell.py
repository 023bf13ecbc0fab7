"""Handles interactive/command-line mode for the Lox interpreter. Uses cmd as backend."""

import cmd

from lox.lang.session import Session


class Shell(cmd.Cmd):
    """Lox interpreter shell."""
    intro = "Lox interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self._tmp_line = ""

    def parseline(self, line):
        """Shell commands take no arguments, so a line with anything after its first word is Lox source
        (`exit = 1;` assigns to a variable named exit).
        """
        command, arg, line = super().parseline(line)
        if arg:
            return None, None, line
        return command, arg, line

    def default(self, line):
        """Executes arbitrary Lox source."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            line = self._tmp_line + line

            if Session.is_incomplete(line):
                self._tmp_line = line + "\n"
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt

            self.sess.run(line)

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the Lox interpreter!\n\n"
              "Lox is a small dynamically-typed scripting language with C-like syntax, lexical \n"
              "scoping and first-class functions. Statements end with ';'.\n\n"
              "Try it out by typing 'var greeting = \"hello\";'. This binds the string to the \n"
              "name 'greeting', which is remembered for the rest of the session. Next, try \n"
              "typing 'print greeting + \" world\";'. Blocks left open with '{' continue on the \n"
              "next line.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        if self._tmp_line:
            self._tmp_line += "\n"
        return False

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        if self._tmp_line:
            self.sess.error_handler.warn("unfinished input discarded")
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
