"""Pure lambda calculus abstract syntax tree and infix parser.

The `pure` directory contains the calculus itself (terms, parsing, reduction) and never prints anything: it is driven
by the `lang` directory.

Formally, the infix notation accepted here can be defined as

```
<expr>     ::= <term>+                      ; "application" when there is more than one term
                                            ; - associating by left: f a b = ((f a) b)
<term>     ::= <variable>
             | "(" <expr> ")"
             | <lambda>
<lambda>   ::= ":" <variable>+ "." <expr>   ; "abstraction"
                                            ; - :x y z.M is sugar for :x.(:y.(:z.M))
                                            ; - abstraction bodies are greedy: :x.x y = :x.(x y) != (:x.x) y
<variable> ::= any run of characters other than whitespace and ( ) : . = @
```

Sources: https://plato.stanford.edu/entries/lambda-calculus/#Com,
         https://opendsa-server.cs.vt.edu/ODSA/Books/PL/html/Syntax.html

------------------------------------------------------------------------------------------------------------------------

Terms are mutable trees. No node may be reachable from two positions at once: whenever a term has to appear in more
than one place it is copied with `copy()`. Variables are never marked as free or bound; that is always recomputed from
the position of a node (see pure/names.py).
"""

import re
from abc import abstractmethod, ABC

from lambdastep.lang.error import ParseError


class LambdaTerm(ABC):
    """Represents a λ-term: variable, abstraction, or application."""

    @property
    @abstractmethod
    def nodes(self):
        """Children of this term, left to right."""

    @abstractmethod
    def copy(self):
        """Returns a full structural copy of this term. Shares no nodes with self."""

    @abstractmethod
    def set_node(self, idx, node):
        """Replaces the child at idx with node."""

    @abstractmethod
    def alpha_equals(self, other, mapping=None, other_mapping=None):
        """Whether or not two LambdaTerms are alpha-equivalent. mapping maps the names bound by the abstractions of
        self that enclose this position onto the names bound by the paired abstractions of other; other_mapping is the
        same map from the perspective of other. Both are only ever extended by copying, never in place.
        """

    def size(self):
        """Number of nodes in this term, including self."""
        return 1 + sum(node.size() for node in self.nodes)

    def get(self, idxs):
        """Gets node at positions specified by idxs. idxs=[] will return self."""
        if not idxs:
            return self

        this, *others = idxs
        return self.nodes[this].get(others)

    def set(self, idxs, node):
        """Sets node at positions specified by idxs. idxs=[] will raise an error."""
        if not idxs:
            raise ValueError("idxs cannot be empty")

        *parents, this = idxs
        self.get(parents).set_node(this, node)

    def walk(self, path=None):
        """Yields (path, node) for self and every sub node, in pre-order."""
        if path is None:
            path = []

        yield path, self
        for idx, node in enumerate(self.nodes):
            yield from node.walk(path + [idx])

    def become(self, node):
        """Turns self into node in place, so that every reference to self now sees node. node itself should not be
        used afterwards.
        """
        self.__class__ = node.__class__
        self.__dict__ = dict(node.__dict__)

    def display(self, indents=0):
        """Recursively displays the tree with readable format.

        Format:
        <LambdaTerm>(expr='<expr>', nodes=[
            <LambdaTerm>(expr='<expr>', nodes=[
                ...
                <LambdaTerm>(expr='<expr>')  # <-- if nodes is empty
            ])
        ])
        """
        result = f"{'    ' * indents}{type(self).__name__}(expr='{self}'"
        if self.nodes:
            result += ", nodes=["
            for node in self.nodes:
                result += "\n" + node.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result + ")"

    def __str__(self):
        return unparse(self)

    def __repr__(self):
        return f"{type(self).__name__}('{self}')"


class Variable(LambdaTerm):
    """Variable in lambda calculus: an opaque name, unique only relative to the abstractions around it."""

    def __init__(self, name):
        self.name = name

    @property
    def nodes(self):
        return []

    def copy(self):
        return Variable(self.name)

    def set_node(self, idx, node):
        raise IndexError("variables have no nodes")

    def alpha_equals(self, other, mapping=None, other_mapping=None):
        if mapping is None:
            mapping = {}
        if other_mapping is None:
            other_mapping = {}

        if not isinstance(other, Variable):
            return False

        if self.name in mapping or other.name in other_mapping:
            return mapping.get(self.name) == other.name and other_mapping.get(other.name) == self.name
        return self.name == other.name

    def __eq__(self, other):
        return isinstance(other, Variable) and self.name == other.name


class Abstraction(LambdaTerm):
    """Abstraction: binds arg over the whole of body, unless an inner abstraction rebinds it."""

    def __init__(self, arg, body):
        self.arg = arg
        self.body = body

    @property
    def nodes(self):
        return [self.body]

    def copy(self):
        return Abstraction(self.arg, self.body.copy())

    def set_node(self, idx, node):
        if idx != 0:
            raise IndexError(f"abstractions have no node {idx}")
        self.body = node

    def alpha_equals(self, other, mapping=None, other_mapping=None):
        if mapping is None:
            mapping = {}
        if other_mapping is None:
            other_mapping = {}

        if not isinstance(other, Abstraction):
            return False

        mapping = {**mapping, self.arg: other.arg}
        other_mapping = {**other_mapping, other.arg: self.arg}

        return self.body.alpha_equals(other.body, mapping, other_mapping)

    def __eq__(self, other):
        return isinstance(other, Abstraction) and self.arg == other.arg and self.body == other.body


class Application(LambdaTerm):
    """Application of left (function position) to right (argument position)."""

    def __init__(self, left, right):
        self.left = left
        self.right = right

    @property
    def nodes(self):
        return [self.left, self.right]

    def copy(self):
        return Application(self.left.copy(), self.right.copy())

    def set_node(self, idx, node):
        if idx == 0:
            self.left = node
        elif idx == 1:
            self.right = node
        else:
            raise IndexError(f"applications have no node {idx}")

    def alpha_equals(self, other, mapping=None, other_mapping=None):
        if mapping is None:
            mapping = {}
        if other_mapping is None:
            other_mapping = {}

        if not isinstance(other, Application):
            return False

        return (self.left.alpha_equals(other.left, mapping, other_mapping)
                and self.right.alpha_equals(other.right, mapping, other_mapping))

    @property
    def is_redex(self):
        """An Application is a redex if its left child is an Abstraction."""
        return isinstance(self.left, Abstraction)

    def __eq__(self, other):
        return isinstance(other, Application) and self.left == other.left and self.right == other.right


def alpha_equivalent(term, other):
    """Whether or not term and other are equal up to a consistent renaming of bound variables."""
    return term.alpha_equals(other)


class InfixParser:
    """Recursive descent parser for the infix notation. Consumes self.remaining from the left as it goes, so after
    parse() returns, self.remaining holds whatever input was left over (a stray ')' for instance).
    """
    VARIABLE = re.compile(r"[^\s().:=@]+")
    LAMBDA_HEADER = re.compile(r":\s*([^\s().:=@][^().:=@]*)\.")

    def __init__(self, text):
        self.text = text
        self.remaining = text

    def _peek(self):
        """Strips leading whitespace from self.remaining and returns the next character ('' at the end)."""
        self.remaining = self.remaining.lstrip()
        return self.remaining[:1]

    def parse(self, strict=False):
        """Parses a whole expression. If strict, leftover input raises a ParseError instead of being left in
        self.remaining for the caller to inspect.
        """
        term = self.parse_expression()
        if strict and self._peek():
            raise ParseError("unexpected trailing input '{}'", self.remaining)
        return term

    def parse_expression(self):
        """Parses terms until ')' or the end of input, and chains them into left-associative applications."""
        terms = []
        char = self._peek()
        while char and char != ")":
            if char == "(":
                terms.append(self.parse_parenthetical())
            elif char == ":":
                terms.append(self.parse_lambda())
            elif InfixParser.VARIABLE.match(char):
                terms.append(self.parse_variable())
            else:
                raise ParseError("unexpected character at '{}'", self.remaining, end=1)
            char = self._peek()

        if not terms:
            raise ParseError("expected a λ-term at '{}'", self.remaining or self.text)

        term = terms[0]
        for right in terms[1:]:
            term = Application(term, right)
        return term

    def parse_parenthetical(self):
        opened = self.remaining
        self.remaining = self.remaining[1:]
        term = self.parse_expression()
        if self._peek() != ")":
            raise ParseError("'{}' is missing a closing parenthesis", opened)
        self.remaining = self.remaining[1:]
        return term

    def parse_lambda(self):
        """Parses ':x y z.body' into nested single-parameter Abstractions."""
        match = InfixParser.LAMBDA_HEADER.match(self.remaining)
        if match is None:
            raise ParseError("'{}' has a malformed abstraction header", self.remaining)

        args = match.group(1).split()
        self.remaining = self.remaining[match.end():]

        term = self.parse_expression()
        for arg in reversed(args):
            term = Abstraction(arg, term)
        return term

    def parse_variable(self):
        match = InfixParser.VARIABLE.match(self.remaining)
        if match is None:
            raise ParseError("'{}' is not a valid variable", self.remaining)

        self.remaining = self.remaining[match.end():]
        return Variable(match.group())


def parse(text, strict=False):
    """Parses text written in infix notation. Leftover input is ignored unless strict; use InfixParser directly to
    inspect it.
    """
    return InfixParser(text).parse(strict)


def unparse(term):
    """Inverse of parse, up to whitespace and parentheses. Nested abstractions are printed as ':x y z.body'."""
    if isinstance(term, Variable):
        return term.name

    if isinstance(term, Abstraction):
        args = [term.arg]
        body = term.body
        while isinstance(body, Abstraction):
            args.append(body.arg)
            body = body.body
        return f":{' '.join(args)}.{unparse(body)}"

    if isinstance(term, Application):
        left = unparse(term.left)
        if isinstance(term.left, Abstraction):
            left = f"({left})"

        right = unparse(term.right)
        if isinstance(term.right, (Abstraction, Application)):
            right = f"({right})"
        return f"{left} {right}"

    raise TypeError(f"unrecognized λ-term type '{type(term).__name__}'")
