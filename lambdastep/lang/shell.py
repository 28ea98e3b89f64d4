"""Handles interactive/command-line mode for lambdastep. Uses cmd as backend."""

import cmd

from termcolor import colored


class Shell(cmd.Cmd):
    """Lambda calculus stepper shell."""
    intro = "Lambda calculus stepper :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, numerals=False, labels=True, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self.numerals = numerals
        self.labels = labels

        self._tmp_line = ""
        self.line_num = 0

    def show(self, prefix=None):
        print(self.sess.display(labels=self.labels, numerals=self.numerals, prefix=prefix))

    def is_command(self, line):
        """Whether or not line is a shell command. Macro definitions, continuation lines and lines that only start
        with a command name (such as 'run x') are λ-input instead.
        """
        if not line.strip():
            return True
        if self._tmp_line or "=" in line:
            return False

        name, arg, __ = self.parseline(line)
        if not name or not hasattr(self, f"do_{name}"):
            return False
        if name == "help":
            return True
        if name == "run":
            return not arg or arg.isdigit()
        return not arg

    def onecmd(self, line):
        if not self.is_command(line):
            return self.default(line)
        return super().onecmd(line)

    def default(self, line):
        """Defines a macro (NAME = body) or loads a λ-term."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            line, add_to_prev = self.sess.preprocess_line(f"{self._tmp_line} {line}")

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt

            loaded = self.sess.term
            self.sess.add(line, self.line_num)
            if self.sess.term is not loaded:
                self.show()

    def do_step(self, arg):
        """Performs one normal-order β-reduction step and prints the result."""
        with self.sess.error_handler:
            if self.sess.step() is None:
                print(colored("normal form", attrs=["bold"]))
            else:
                self.show()

    def do_back(self, arg):
        """Undoes the last step."""
        with self.sess.error_handler:
            if self.sess.back():
                self.show()
            else:
                print(colored("nothing to undo", attrs=["bold"]))

    def do_run(self, arg):
        """Reduces to normal form: run [max steps]."""
        with self.sess.error_handler:
            self.sess.run(int(arg) if arg.strip().isdigit() else None)
            self.show()

    def do_show(self, arg):
        """Prints the current λ-term."""
        with self.sess.error_handler:
            self.show()

    def do_prefix(self, arg):
        """Prints the current λ-term in prefix notation."""
        with self.sess.error_handler:
            self.show(prefix=True)

    def do_macros(self, arg):
        """Lists the macros defined so far."""
        for macro in self.sess.macros:
            print(f"{colored(macro.name, attrs=['bold'])} = {macro.body}")

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to lambdastep!\n\n"
              "Type a λ-term such as '(:x y.x) a b' to load it, then 'step' to reduce it one \n"
              "normal-order step at a time, 'back' to undo a step or 'run' to reduce it to \n"
              "normal form. 'show' and 'prefix' print the current term.\n\n"
              "A line like 'K = :x y.x' defines a macro: later lines may use 'K', and parts of \n"
              "the result that match a macro are printed by name. 'macros' lists them.\n\n"
              "A line is only read as a command when it is exactly one ('run' may be followed by \n"
              "a step count): 'run x' loads a term and 'show = :x.x' defines a macro.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits stepper."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits stepper."""
        return True
