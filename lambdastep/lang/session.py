"""Session control for lambdastep. Loads macros and an expression, either from a file or line by line from the
command line, and steps the expression through normal-order reduction with an undo history.
"""

from lambdastep.lang.error import GenericException
from lambdastep.lang.macros import MacroStmt, collect_macros, relabel
from lambdastep.lang.numerical import numberify
from lambdastep.pure.lexical import InfixParser
from lambdastep.pure.prefix import PrefixParser, unparse_prefix
from lambdastep.pure.reduction import NormalOrderReducer, has_redex


class Session:
    """Governs a lambdastep session: its macros, the term being reduced and the terms it was before."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path=SH_FILE, prefix=False):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path      # used for error messages
        self.prefix = prefix  # whether or not expressions are written in prefix notation (no macros then)

        self.macros = []      # MacroStmts, in definition order
        self.reducer = None   # NormalOrderReducer owning the current term
        self.history = []     # copies of the term before each step, most recent last
        self.steps = []       # (rule, expr) for each step taken

    @staticmethod
    def preprocess_line(line):
        """Strips line and returns it along with whether or not it leaves a parenthesis open, in which case the next
        line continues it.
        """
        line = line.strip()
        return line, line.count("(") > line.count(")")

    @property
    def term(self):
        return self.reducer.tree if self.reducer is not None else None

    def read(self):
        """Loads the contents of self.path."""
        try:
            with open(self.path, "r", encoding="utf-8") as file:
                text = file.read()
        except (OSError, UnicodeDecodeError):
            raise GenericException("'{}' could not be read", self.path, diagnosis=False)
        self.load(text)

    def load(self, text):
        """Loads a whole program: macro definitions followed by the expression they expand into."""
        if self.prefix:
            expr = text.strip()
        else:
            self.macros, expr = collect_macros(text)
        self.load_expr(expr)

    def add(self, line, line_num):
        """Adds one line from the command line: either a macro definition or an expression to load."""
        self.error_handler.register_line(self.path, line, line_num)  # in case error is raised

        if not self.prefix and MacroStmt.check_grammar(line):
            macro = MacroStmt(line)
            if macro.well_formed:
                for defined in self.macros:
                    macro.body = defined.replace(macro.body)
                self.macros.append(macro)
        else:
            expr = line
            for macro in self.macros:
                expr = macro.replace(expr)
            self.load_expr(expr)

        self.error_handler.remove_line(self.path)  # error was not raised

    def load_expr(self, expr):
        """Parses expr and makes it the current term. Leftover input is reported as a warning, not an error."""
        parser = PrefixParser(expr) if self.prefix else InfixParser(expr)
        term = parser.parse()

        remaining = parser.remaining.strip()
        if remaining:
            self.error_handler.warn("'{}' was left unparsed", remaining)

        self.reducer = NormalOrderReducer(term)
        self.history = []
        self.steps = []

    def _check_loaded(self):
        if self.reducer is None:
            raise GenericException("no λ-term has been loaded", diagnosis=False)

    def step(self):
        """Performs one normal-order step. Returns the Reduction, or None if the term is in normal form."""
        self._check_loaded()

        snapshot = self.reducer.tree.copy()
        reduction = self.reducer.reduce_once()
        if reduction is not None:
            self.history.append(snapshot)
            self.steps.append(("β", str(self.reducer.tree)))
        return reduction

    def back(self):
        """Undoes the last step. Returns whether or not there was a step to undo."""
        self._check_loaded()

        if not self.history:
            return False
        self.reducer.tree = self.history.pop()
        self.reducer.steps -= 1
        self.steps.pop()
        return True

    def run(self, max_steps=None):
        """Steps the term until it reaches normal form or max_steps steps were taken, in which case a warning is
        given. Returns whether or not a normal form was reached.
        """
        self._check_loaded()
        if max_steps is None:
            max_steps = NormalOrderReducer.STEP_LIMIT

        for __ in range(max_steps):
            if self.step() is None:
                return True

        if not has_redex(self.reducer.tree):
            return True

        self.error_handler.warn("'{}' does not reach a β-normal form within {} steps",
                                [self.reducer.original_expr, max_steps], diagnosis=False)
        return False

    def display(self, labels=True, numerals=False, prefix=None):
        """Current term as text. Sub-terms matching a macro are shown by name if labels, Church numerals are shown as
        digits if numerals.
        """
        self._check_loaded()
        if prefix is None:
            prefix = self.prefix

        term = self.reducer.tree
        if numerals:
            term = numberify(term)
        if labels and self.macros:
            term = relabel(term, self.macros)
        return unparse_prefix(term) if prefix else str(term)
