"""Normal-order (leftmost-outermost) β-reduction, one step at a time.

A step is split in two so that a caller can look at the tree in between:
    1. step_reduce finds the redex (:x.M) N and substitutes N for x inside M. The tree now holds the abstraction with
       its substituted body, still applied to N.
    2. collapse replaces the application with that body.

Substitution is capture-avoiding in both directions:
    - an abstraction in M whose name is free in N is renamed before N is pushed beneath it;
    - every copy of N that is inserted has its own abstractions renamed away from the names bound around the use site.

Sources: http://pages.cs.wisc.edu/~horwitz/CS704-NOTES/1.LAMBDA-CALCULUS.html#NOR,
         https://en.wikipedia.org/wiki/Lambda_calculus#Capture-avoiding_substitutions
"""

from dataclasses import dataclass, field
from typing import List, Optional

from lambdastep.lang.error import NonTerminationError
from lambdastep.pure.lexical import Abstraction, Application, LambdaTerm, Variable
from lambdastep.pure.names import all_names, count_occurrences, free_variables, fresh_name, rename_bound_uses


@dataclass
class Reduction:
    """Result of one step: application is the rewritten redex and body is what it will collapse into. parent and
    index locate the application's slot (parent is None if the application is the root) and path is the index path
    from the root to it.
    """
    application: Application
    body: LambdaTerm
    parent: Optional[LambdaTerm] = None
    index: Optional[int] = None
    path: List[int] = field(default_factory=list)


def alpha_convert(term, scope, renames=None, avoid=None):
    """In-place renaming of every abstraction in term whose name is already bound in scope. term is expected to be a
    fresh copy about to be inserted at a position where scope is bound. Returns term.
    """
    if renames is None:
        renames = {}
    if avoid is None:
        avoid = all_names(term)

    if isinstance(term, Variable):
        term.name = renames.get(term.name, term.name)

    elif isinstance(term, Abstraction):
        if term.arg in scope:
            new_arg = fresh_name(term.arg, scope, avoid)
            renames = {**renames, term.arg: new_arg}
            scope = scope | {new_arg}
            term.arg = new_arg
        alpha_convert(term.body, scope, renames, avoid)

    elif isinstance(term, Application):
        alpha_convert(term.left, scope, renames, avoid)
        alpha_convert(term.right, scope, renames, avoid)

    else:
        raise TypeError(f"unrecognized λ-term type '{type(term).__name__}'")

    return term


def substitute(term, name, sub, scope=frozenset(), sub_free=None):
    """Replaces every free use of name in term with a copy of sub, avoiding capture. scope holds the names bound
    around term. term is modified in place; the returned node takes its place (it only differs from term when term
    is itself a use of name).
    """
    if sub_free is None:
        sub_free = free_variables(sub)

    if isinstance(term, Variable):
        if term.name != name:
            return term
        return alpha_convert(sub.copy(), scope)

    if isinstance(term, Abstraction):
        if term.arg == name:
            return term  # name is rebound here, so there is nothing left to substitute

        if term.arg in sub_free and count_occurrences(term.body, name):
            new_arg = fresh_name(term.arg, scope, sub_free, all_names(term.body))
            rename_bound_uses(term.body, term.arg, new_arg)
            term.arg = new_arg

        term.body = substitute(term.body, name, sub, scope | {term.arg}, sub_free)
        return term

    if isinstance(term, Application):
        term.left = substitute(term.left, name, sub, scope, sub_free)
        term.right = substitute(term.right, name, sub, scope, sub_free)
        return term

    raise TypeError(f"unrecognized λ-term type '{type(term).__name__}'")


def _step(term, scope, parent, index, path):
    if isinstance(term, Variable):
        return None

    if isinstance(term, Abstraction):
        return _step(term.body, scope | {term.arg}, term, 0, path + [0])

    if isinstance(term, Application):
        if term.is_redex:
            abstraction = term.left

            # normalizing the argument once is cheaper than normalizing each of its copies
            if count_occurrences(abstraction.body, abstraction.arg) > 1:
                reduction = _step(term.right, scope, term, 1, path + [1])
                if reduction is not None:
                    return reduction

            abstraction.body = substitute(abstraction.body, abstraction.arg, term.right, scope)
            return Reduction(term, abstraction.body, parent, index, path)

        reduction = _step(term.left, scope, term, 0, path + [0])
        if reduction is None:
            reduction = _step(term.right, scope, term, 1, path + [1])
        return reduction

    raise TypeError(f"unrecognized λ-term type '{type(term).__name__}'")


def has_redex(term):
    """Whether or not term contains a redex. Unlike step_reduce, this never modifies term."""
    if isinstance(term, Application) and term.is_redex:
        return True
    return any(has_redex(node) for node in term.nodes)


def step_reduce(term):
    """Performs the substitution half of one normal-order step on term. Returns the Reduction, or None if term is
    already in normal form.
    """
    return _step(term, frozenset(), None, None, [])


def collapse(reduction):
    """Replaces reduction.application with reduction.body and returns the node now at the application's position. If
    the application is the root, it becomes the body in place, so the caller's root reference stays valid.
    """
    if reduction.parent is None:
        reduction.application.become(reduction.body)
        reduction.body = reduction.application
    else:
        reduction.parent.set_node(reduction.index, reduction.body)
    return reduction.body


class NormalOrderReducer:
    """Owns a syntax tree and implements normal-order β-reduction of it, in place."""
    STEP_LIMIT = 1000

    def __init__(self, tree):
        self.tree = tree
        self.original_expr = str(tree)
        self.steps = 0

    def step(self):
        """First half of a step (see step_reduce). Returns the pending Reduction or None."""
        return step_reduce(self.tree)

    def collapse(self, reduction):
        """Second half of a step (see collapse)."""
        body = collapse(reduction)
        self.steps += 1
        return body

    def reduce_once(self):
        """Performs a whole step. Returns the Reduction, or None if self.tree is in normal form."""
        reduction = self.step()
        if reduction is not None:
            self.collapse(reduction)
        return reduction

    def normalize(self, max_steps=None):
        """Reduces self.tree to normal form. Raises NonTerminationError if none is reached within max_steps."""
        if max_steps is None:
            max_steps = NormalOrderReducer.STEP_LIMIT

        for __ in range(max_steps):
            if self.reduce_once() is None:
                return self.tree

        if not has_redex(self.tree):
            return self.tree
        raise NonTerminationError("'{}' has no β-normal form within {} steps", [self.original_expr, max_steps])

    def __repr__(self):
        return repr(self.tree)

    def __str__(self):
        return self.tree.display()
