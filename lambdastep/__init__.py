"""Untyped lambda calculus, one normal-order β-reduction step at a time.

For reference:
- "pure": the calculus itself (lambdastep/pure): terms, the infix and prefix notations, name analysis, reduction
- "lang": what is wrapped around it (lambdastep/lang): errors, macros, Church numerals, sessions and the shell

Basic program flow:
    1. Macros: `NAME = body` lines are expanded textually into the expression (lang/macros.py)
    2. Parser: produces a syntax tree from the expanded expression (pure/lexical.py, pure/prefix.py)
    3. Reduction: each call to step_reduce rewrites the leftmost-outermost redex, collapse commits it
       (pure/reduction.py)
"""

from lambdastep.lang.error import GenericException, NonTerminationError, ParseError
from lambdastep.lang.macros import collect_macros, expand_macros
from lambdastep.pure.lexical import (Abstraction, Application, InfixParser, LambdaTerm, Variable, alpha_equivalent,
                                     parse, unparse)
from lambdastep.pure.prefix import PrefixParser, parse_prefix, unparse_prefix
from lambdastep.pure.reduction import NormalOrderReducer, Reduction, collapse, step_reduce

__all__ = [
    "Abstraction", "Application", "GenericException", "InfixParser", "LambdaTerm", "NonTerminationError",
    "NormalOrderReducer", "ParseError", "PrefixParser", "Reduction", "Variable", "alpha_equivalent", "collapse",
    "collect_macros", "expand_macros", "parse", "parse_prefix", "step_reduce", "unparse", "unparse_prefix",
]
