import io
import os
import tempfile
import unittest

from lox.lang.error import ErrorHandler, LoxRuntimeError, ParseError, UsageError
from lox.lang.session import Session
from lox.lang.shell import Shell


class SessionTestCase(unittest.TestCase):

    def setUp(self):
        self.stream = io.StringIO()
        self.output = io.StringIO()
        self.handler = ErrorHandler(file=self.stream)

    def script(self, source):
        """Writes source to a temporary .lox file and returns its path."""
        fd, path = tempfile.mkstemp(suffix=".lox")
        with os.fdopen(fd, "w") as file:
            file.write(source)
        self.addCleanup(os.remove, path)
        return path

    def test_run_file(self):
        path = self.script("var a = 1;\nprint a + 2;\n")
        sess = Session(self.handler, path, cmd_line=False, output=self.output)

        sess.run()

        self.assertEqual("3\n", self.output.getvalue())
        self.assertTrue(self.handler.fatal)
        self.assertEqual([], self.handler.lines)

    def test_unreadable_file(self):
        missing = os.path.join(tempfile.gettempdir(), "no_such_dir_for_lox", "missing.lox")
        self.assertRaises(UsageError, Session, self.handler, missing, False)

    def test_reserved_filename(self):
        self.assertRaises(UsageError, Session, self.handler, Session.SH_FILE, False)

    def test_cmd_line_is_not_fatal(self):
        sess = Session(self.handler, Session.SH_FILE, cmd_line=True, output=self.output)
        self.assertFalse(sess.error_handler.fatal)
        self.assertEqual("", sess.source)

    def test_is_incomplete(self):
        should_pass = ["{", "fun f() {", "while (true) { if (x) {}"]
        for case in should_pass:
            self.assertTrue(Session.is_incomplete(case), case)

        should_fail = ["print 1;", "{}", "fun f() { }", "}", "print \"{\";", "print 1; // {", "\"{"]
        for case in should_fail:
            self.assertFalse(Session.is_incomplete(case), case)

    def test_parse_errors_reported_then_raised(self):
        sess = Session(self.handler, Session.SH_FILE, cmd_line=True, output=self.output)

        with self.assertRaises(ParseError) as context:
            sess.run("print ;\nvar = 1;\nprint 2 print 3;")
        self.assertEqual(3, context.exception.line)

        reported = self.stream.getvalue()
        self.assertIn("<in>:1:", reported)
        self.assertIn("<in>:2:", reported)
        self.assertNotIn("<in>:3:", reported)
        self.assertEqual("", self.output.getvalue())

    def test_runtime_error_keeps_source(self):
        sess = Session(self.handler, Session.SH_FILE, cmd_line=True, output=self.output)

        self.assertRaises(LoxRuntimeError, sess.run, "print nope;")
        self.assertEqual(["print nope;"], self.handler.lines)

    def test_dump(self):
        path = self.script("var a = 1 + 2 * 3;\nif (a) print a; else break;\n")
        sess = Session(self.handler, path, cmd_line=False, output=self.output)

        expected = ["(var a (+ 1 (* 2 3)))", "(if a (print a) (break))"]
        self.assertEqual(expected, sess.dump())
        self.assertEqual("", self.output.getvalue())


class ShellTestCase(unittest.TestCase):

    def setUp(self):
        self.stream = io.StringIO()
        self.output = io.StringIO()
        sess = Session(ErrorHandler(file=self.stream), Session.SH_FILE, cmd_line=True, output=self.output)
        self.shell = Shell(sess, stdout=io.StringIO())

    def printed(self):
        return self.output.getvalue().splitlines()

    def test_globals_persist(self):
        self.shell.onecmd("var greeting = \"hello\";")
        self.shell.onecmd("print greeting + \" world\";")
        self.assertEqual(["hello world"], self.printed())

    def test_line_continuation(self):
        self.shell.onecmd("fun add(a, b) {")
        self.assertEqual(Shell.secondary_prompt, self.shell.prompt)

        self.shell.onecmd("print a + b;")
        self.shell.emptyline()
        self.shell.onecmd("}")
        self.assertEqual("> ", self.shell.prompt)

        self.shell.onecmd("add(1, 2);")
        self.assertEqual(["3"], self.printed())

    def test_errors_do_not_end_shell(self):
        self.shell.onecmd("print 1 / 0;")
        self.shell.onecmd("print @;")
        self.shell.onecmd("print \"still here\";")

        reported = self.stream.getvalue()
        self.assertIn("Division by zero.", reported)
        self.assertIn("Unexpected character '@'.", reported)
        self.assertEqual(["still here"], self.printed())

    def test_braces_in_strings_and_comments(self):
        self.shell.onecmd("print \"{\";")
        self.assertEqual("> ", self.shell.prompt)

        self.shell.onecmd("print 1; // {")
        self.shell.onecmd("print \"}\";")
        self.assertEqual(["{", "1", "}"], self.printed())

    def test_exit(self):
        self.assertTrue(self.shell.onecmd("exit"))
        self.assertEqual("", self.stream.getvalue())

    def test_eof_discards_unfinished_input(self):
        self.shell.onecmd("while (true) {")
        self.assertTrue(self.shell.do_EOF(""))
        self.assertIn("unfinished input discarded", self.stream.getvalue())

    def test_command_words_as_names(self):
        should_pass = ["var exit = 1;", "exit = exit + 1;", "var help = 2;", "print exit + help;"]
        for case in should_pass:
            self.assertFalse(self.shell.onecmd(case), case)

        self.assertEqual(["4"], self.printed())
        self.assertEqual("", self.stream.getvalue())


if __name__ == '__main__':
    unittest.main()
