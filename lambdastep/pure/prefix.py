"""Prefix notation for λ-terms. Every operator comes first and has a fixed arity, so no parentheses are needed:

```
<expr> ::= "@" <expr> <expr>      ; application of the first expr to the second
         | ":" <variable> <expr>  ; abstraction, one parameter at a time
         | <variable>             ; any run of characters other than whitespace, @ and :
```

Example: `@ :x :y x :x :y y` is the infix `(:x y.x) (:x y.y)`. The trees produced are the same as those of the infix
parser.
"""

import re

from lambdastep.lang.error import ParseError
from lambdastep.pure.lexical import Abstraction, Application, Variable


class PrefixParser:
    """Recursive descent parser for the prefix notation. Like InfixParser, consumes self.remaining as it goes."""
    VARIABLE = re.compile(r"[^\s@:]+")
    LAMBDA_HEADER = re.compile(r":\s*([^\s@:]+)")

    def __init__(self, text):
        self.text = text
        self.remaining = text

    def parse(self, strict=False):
        term = self.parse_expression()
        self.remaining = self.remaining.lstrip()
        if strict and self.remaining:
            raise ParseError("unexpected trailing input '{}'", self.remaining)
        return term

    def parse_expression(self):
        self.remaining = self.remaining.lstrip()
        if not self.remaining:
            raise ParseError("'{}' ends where a λ-term was expected", self.text)

        if self.remaining.startswith("@"):
            self.remaining = self.remaining[1:]
            left = self.parse_expression()
            return Application(left, self.parse_expression())

        if self.remaining.startswith(":"):
            match = PrefixParser.LAMBDA_HEADER.match(self.remaining)
            if match is None:
                raise ParseError("'{}' has a malformed abstraction header", self.remaining)
            self.remaining = self.remaining[match.end():]
            return Abstraction(match.group(1), self.parse_expression())

        match = PrefixParser.VARIABLE.match(self.remaining)
        self.remaining = self.remaining[match.end():]
        return Variable(match.group())


def parse_prefix(text, strict=False):
    """Parses text written in prefix notation."""
    return PrefixParser(text).parse(strict)


def unparse_prefix(term):
    """Inverse of parse_prefix, up to whitespace."""
    if isinstance(term, Variable):
        return term.name
    if isinstance(term, Abstraction):
        return f":{term.arg} {unparse_prefix(term.body)}"
    if isinstance(term, Application):
        return f"@ {unparse_prefix(term.left)} {unparse_prefix(term.right)}"
    raise TypeError(f"unrecognized λ-term type '{type(term).__name__}'")
