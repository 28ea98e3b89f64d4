"""Name analysis over λ-terms: which variables are free, which names are used at all, how often a variable is used and
how to rename the uses belonging to one binder. Scopes are passed down as frozensets, so a recursion never sees names
bound by a sibling subtree.
"""

from itertools import count

from lambdastep.pure.lexical import Abstraction, Application, Variable


def free_variables(term, bound=frozenset()):
    """Returns the set of names used in term that no enclosing abstraction (inside term, or in bound) binds."""
    if isinstance(term, Variable):
        return set() if term.name in bound else {term.name}
    if isinstance(term, Abstraction):
        return free_variables(term.body, bound | {term.arg})
    if isinstance(term, Application):
        return free_variables(term.left, bound) | free_variables(term.right, bound)
    raise TypeError(f"unrecognized λ-term type '{type(term).__name__}'")


def all_names(term):
    """Returns every name in term, whether it is bound by an abstraction or used by a variable."""
    if isinstance(term, Variable):
        return {term.name}
    if isinstance(term, Abstraction):
        return {term.arg} | all_names(term.body)
    if isinstance(term, Application):
        return all_names(term.left) | all_names(term.right)
    raise TypeError(f"unrecognized λ-term type '{type(term).__name__}'")


def count_occurrences(term, name):
    """Counts the free uses of name in term. An abstraction that rebinds name hides its whole body."""
    if isinstance(term, Variable):
        return int(term.name == name)
    if isinstance(term, Abstraction):
        return 0 if term.arg == name else count_occurrences(term.body, name)
    if isinstance(term, Application):
        return count_occurrences(term.left, name) + count_occurrences(term.right, name)
    raise TypeError(f"unrecognized λ-term type '{type(term).__name__}'")


def rename_bound_uses(term, old, new):
    """In-place rename of the free uses of old in term to new. Meant to be called on the body of the abstraction that
    binds old: abstractions inside it that rebind old are left untouched, since their uses belong to them.
    """
    if isinstance(term, Variable):
        if term.name == old:
            term.name = new
    elif isinstance(term, Abstraction):
        if term.arg != old:
            rename_bound_uses(term.body, old, new)
    elif isinstance(term, Application):
        rename_bound_uses(term.left, old, new)
        rename_bound_uses(term.right, old, new)
    else:
        raise TypeError(f"unrecognized λ-term type '{type(term).__name__}'")
    return term


def fresh_name(name, *used):
    """Returns name suffixed with the smallest positive integer that makes it absent from every set in used."""
    for suffix in count(1):
        candidate = f"{name}{suffix}"
        if not any(candidate in names for names in used):
            return candidate
