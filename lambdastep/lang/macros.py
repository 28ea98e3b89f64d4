"""Textual macros, expanded before parsing.

```
<macro_stmt> ::= <name> "=" <body>   ; the first "=" is the delimiter, name and body are stripped
                                     ; - a line with an empty name or body is dropped without an error
<expr_line>  ::= <λ-term>            ; every line without "=": joined with spaces into the expression to reduce
```

Blank lines are ignored. A macro body may use macros defined above it, never the ones below it, so definitions cannot
be recursive. Expansion is purely textual: a free name in a macro body can be captured by an abstraction at the place
the macro is used.

After reduction, the same macros are used the other way around: any sub-term alpha-equivalent to a macro body can be
labelled with the macro's name.
"""

import re

from lambdastep.lang.error import ParseError
from lambdastep.pure.lexical import Abstraction, Application, Variable, parse


class MacroStmt:
    """Macro definition: <name> = <body>. See module docstring for grammar."""
    BOUNDARY = r"\s():.="

    def __init__(self, line):
        name, body = line.split("=", 1)
        self.name = name.strip()
        self.body = body.strip()
        self._term = None

    @staticmethod
    def check_grammar(line):
        """Whether or not line is a macro definition (well-formed or not)."""
        return "=" in line

    @property
    def well_formed(self):
        return bool(self.name) and bool(self.body)

    @property
    def pattern(self):
        """Matches self.name as a whole token: the characters around it must be absent or syntax characters."""
        boundary = MacroStmt.BOUNDARY
        return re.compile(f"(?<![^{boundary}]){re.escape(self.name)}(?![^{boundary}])")

    def replace(self, expr):
        """Replaces every whole-token occurrence of self.name in expr with '(<body>)'."""
        return self.pattern.sub(lambda match: f"({self.body})", expr)

    @property
    def term(self):
        """Parsed body, or None if the body does not parse."""
        if self._term is None:
            try:
                self._term = parse(self.body, strict=True)
            except ParseError:
                return None
        return self._term

    def __repr__(self):
        return f"{type(self).__name__}('{self.name} = {self.body}')"

    def __eq__(self, other):
        return isinstance(other, MacroStmt) and (self.name, self.body) == (other.name, other.body)


def collect_macros(text):
    """Returns (macros, expr): the well-formed macro definitions in text, in definition order and with earlier macros
    expanded into their bodies, and the expression lines of text joined and expanded into a single expression. If text
    has no macro lines or no expression lines, expr is text itself, stripped.
    """
    macros = []
    expr_lines = []
    has_macro_lines = False

    for line in text.splitlines():
        line = line.strip()
        if not line:
            continue

        if MacroStmt.check_grammar(line):
            has_macro_lines = True
            macro = MacroStmt(line)
            if not macro.well_formed:
                continue
            for defined in macros:
                macro.body = defined.replace(macro.body)
            macros.append(macro)
        else:
            expr_lines.append(line)

    if not has_macro_lines or not expr_lines:
        return macros, text.strip()

    expr = " ".join(expr_lines)
    for macro in macros:
        expr = macro.replace(expr)
    return macros, expr


def expand_macros(text):
    """Expands the macros of a (possibly multi-line) text into a single expression."""
    return collect_macros(text)[1]


def find_macro_label(term, macros):
    """Name of the first macro whose body is alpha-equivalent to term, or None."""
    for macro in macros:
        if macro.term is not None and macro.term.alpha_equals(term):
            return macro.name
    return None


def macro_labels(term, macros, path=None):
    """Yields (path, name) for every labelled sub-term of term. A labelled sub-term is not searched any further."""
    if path is None:
        path = []

    name = find_macro_label(term, macros)
    if name is not None:
        yield path, name
        return

    for idx, node in enumerate(term.nodes):
        yield from macro_labels(node, macros, path + [idx])


def relabel(term, macros):
    """Returns a copy of term in which every labelled sub-term is replaced by a Variable named after its macro. The
    result is meant for display only.
    """
    name = find_macro_label(term, macros)
    if name is not None:
        return Variable(name)

    if isinstance(term, Abstraction):
        return Abstraction(term.arg, relabel(term.body, macros))
    if isinstance(term, Application):
        return Application(relabel(term.left, macros), relabel(term.right, macros))
    return term.copy()
