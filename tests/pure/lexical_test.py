import unittest

from lambdastep.lang.error import ParseError
from lambdastep.pure.lexical import Abstraction, Application, InfixParser, Variable, alpha_equivalent, parse, unparse


def var(name):
    return Variable(name)


def lam(arg, body):
    return Abstraction(arg, body)


def app(left, right):
    return Application(left, right)


class InfixParserTestCase(unittest.TestCase):

    def test_parse(self):
        should_raise = ["", "   ", ":.x", ": .x", ":x", ":x.", "(x", "()", "x (y", ".x", "x = y", "@ x y", "(:x)"]
        for case in should_raise:
            self.assertRaises(ParseError, parse, case)

        cases = {
            "x": var("x"),
            "  ( ( x ) )  ": var("x"),
            ":x.x": lam("x", var("x")),
            ":x y.x": lam("x", lam("y", var("x"))),
            ": x  y .x": lam("x", lam("y", var("x"))),
            "f a b": app(app(var("f"), var("a")), var("b")),
            "f (a b)": app(var("f"), app(var("a"), var("b"))),
            ":x.x y": lam("x", app(var("x"), var("y"))),
            "(:x.x) y": app(lam("x", var("x")), var("y")),
            "f :x.x y": app(var("f"), lam("x", app(var("x"), var("y")))),
            "+ 2 3": app(app(var("+"), var("2")), var("3")),
            "(f)(g)": app(var("f"), var("g")),
            ":f x.f (f x)": lam("f", lam("x", app(var("f"), app(var("f"), var("x"))))),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, parse(case), case)

    def test_parse_error_expr(self):
        with self.assertRaises(ParseError) as context:
            parse("f .x")
        self.assertEqual(".x", context.exception.expr)

        with self.assertRaises(ParseError) as context:
            parse("f :.x")
        self.assertEqual(":.x", context.exception.expr)

        cases = {"f (x y": "(x y", "(a (b": "(b", "((a) b": "((a) b"}
        for case, expr in cases.items():
            with self.assertRaises(ParseError) as context:
                parse(case)
            self.assertEqual(expr, context.exception.expr, case)

    def test_trailing_input(self):
        cases = {"x) y": ") y", "(f x)) (g": ") (g", "f x": ""}
        for case, remaining in cases.items():
            parser = InfixParser(case)
            parser.parse()
            self.assertEqual(remaining, parser.remaining, case)

        self.assertEqual(var("x"), parse("x) y"))
        self.assertRaises(ParseError, parse, "x) y", strict=True)


class UnparseTestCase(unittest.TestCase):

    def test_unparse(self):
        cases = {
            "x": "x",
            ":x.:y.:z.x z (y z)": ":x y z.x z (y z)",
            "(:x.x) (:x.x)": "(:x.x) (:x.x)",
            "f (g x)": "f (g x)",
            "(f g) x": "f g x",
            ":f x.f (f x)": ":f x.f (f x)",
            "f (:x.x) y": "f (:x.x) y",
            ":x.(:y.y) x": ":x.(:y.y) x",
            ":x.x (:y.y)": ":x.x (:y.y)",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, unparse(parse(case)), case)
            self.assertEqual(expected, str(parse(case)), case)

    def test_round_trip(self):
        cases = [
            "(:x y.x) (:x y.y)",
            "S K K a",
            ":f.(:x.f (x x)) (:x.f (x x))",
            ":n f x.f (n f x)",
            "f (:x.x) (g :y.y y) z",
            "((a b) (c d)) (e (f g))",
            ":p.p (:x y.y) (:x y.x)",
        ]
        for case in cases:
            term = parse(case)
            reparsed = parse(unparse(term))
            self.assertEqual(term, reparsed, case)
            self.assertTrue(alpha_equivalent(term, reparsed), case)

    def test_unrecognized(self):
        self.assertRaises(TypeError, unparse, object())


class AlphaEquivalenceTestCase(unittest.TestCase):

    def test_alpha_equals(self):
        should_fail = [
            (":x.y", ":x.z"),
            (":x y.x", ":x y.y"),
            (":x.x y", ":y.y y"),
            (":x.:y.x", ":y.:y.y"),
            ("x", ":x.x"),
            ("f x", "f y"),
            ("f x", "x f"),
            (":x.x", ":x.x x"),
        ]
        for left, right in should_fail:
            self.assertFalse(alpha_equivalent(parse(left), parse(right)), (left, right))
            self.assertFalse(alpha_equivalent(parse(right), parse(left)), (right, left))

        should_pass = [
            (":x.x", ":y.y"),
            (":x y.x", ":a b.a"),
            (":x.x y", ":z.z y"),
            (":x.:x.x", ":a.:b.b"),
            ("f", "f"),
            ("(:x.x) (:y.y)", "(:a.a) (:a.a)"),
            (":f x.f (f x)", ":g y.g (g y)"),
        ]
        for left, right in should_pass:
            self.assertTrue(alpha_equivalent(parse(left), parse(right)), (left, right))
            self.assertTrue(alpha_equivalent(parse(right), parse(left)), (right, left))

    def test_reflexive(self):
        cases = [":x.x", "f (:x.x) y", ":x.:x.x x", "(:x.x x) (:x.x x)", "a b c"]
        for case in cases:
            term = parse(case)
            self.assertTrue(term.alpha_equals(term), case)


class LambdaTermTestCase(unittest.TestCase):

    def test_size(self):
        cases = {"x": 1, ":x.x": 2, ":x.x y": 4, "(:x.x) (:x.x)": 5}
        for case, size in cases.items():
            self.assertEqual(size, parse(case).size(), case)

    def test_copy(self):
        term = parse(":x.f (g x)")
        copied = term.copy()
        self.assertEqual(term, copied)

        for (__, node), (__, copied_node) in zip(term.walk(), copied.walk()):
            self.assertIsNot(node, copied_node)

        copied.body.left.name = "h"
        self.assertEqual(":x.f (g x)", str(term))

    def test_get_set(self):
        term = parse("f (g x)")
        self.assertIs(term, term.get([]))
        self.assertEqual(var("g"), term.get([1, 0]))

        term.set([1, 1], var("y"))
        self.assertEqual("f (g y)", str(term))

        term.set([0], parse(":z.z"))
        self.assertEqual("(:z.z) (g y)", str(term))

        self.assertRaises(ValueError, term.set, [], var("y"))
        self.assertRaises(IndexError, term.set, [0, 1], var("y"))

    def test_walk(self):
        paths = [path for path, __ in parse(":x.f x").walk()]
        self.assertEqual([[], [0], [0, 0], [0, 1]], paths)

    def test_repr(self):
        self.assertEqual("Abstraction(':x y.x')", repr(parse(":x y.x")))
        self.assertEqual("Application('(:x.x) y')", repr(parse("(:x.x) y")))
        self.assertIn("Variable(expr='x')", parse(":x.x").display())


if __name__ == '__main__':
    unittest.main()
