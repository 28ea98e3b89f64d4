"""Natural numbers encoded as Church numerals. Operations on them are not implemented here: they are ordinary macros
(SUCC, PLUS, MULT...), thus keeping everything as pure as possible. This module only builds numerals and recognizes
them in reduced terms for display.

Source: https://en.wikipedia.org/wiki/Church_encoding#Calculation_with_Church_numerals
"""

from lambdastep.lang.error import GenericException
from lambdastep.pure.lexical import Abstraction, Application, Variable


def cnumber(num):
    """Returns the Church numeral of num (cnum = Church numeral): :f x.f (f (... x))."""
    try:
        assert not isinstance(num, (bool, float))
        num = int(num)
        assert num >= 0
    except (AssertionError, TypeError, ValueError):
        raise GenericException("expected natural number, got '{}'", str(num), internal=True)

    body = Variable("x")
    for __ in range(num):
        body = Application(Variable("f"), body)
    return Abstraction("f", Abstraction("x", body))


def number(cnum):
    """Returns str(number) given LambdaTerm cnum. If cnum isn't a Church numeral, returns None."""
    if not isinstance(cnum, Abstraction) or not isinstance(cnum.body, Abstraction):
        return None

    f, x = cnum.arg, cnum.body.arg
    if f == x:
        return None  # :x x.x x is not a numeral: the inner binder hides the outer one

    num = 0
    nth_body = cnum.body.body
    while isinstance(nth_body, Application):
        if nth_body.left != Variable(f):
            return None
        nth_body = nth_body.right
        num += 1

    return str(num) if nth_body == Variable(x) else None


def numberify(term):
    """Returns a copy of term in which every Church numeral is replaced by a Variable named after its number."""
    num = number(term)
    if num is not None:
        return Variable(num)

    if isinstance(term, Abstraction):
        return Abstraction(term.arg, numberify(term.body))
    if isinstance(term, Application):
        return Application(numberify(term.left), numberify(term.right))
    return term.copy()
