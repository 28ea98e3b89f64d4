import unittest

from lambdastep.lang.error import ParseError
from lambdastep.pure.lexical import parse
from lambdastep.pure.prefix import PrefixParser, parse_prefix, unparse_prefix


class PrefixTestCase(unittest.TestCase):

    def test_parse_prefix(self):
        should_raise = ["", "  ", "@ x", "@", ":", ": @", ":x", ":: x"]
        for case in should_raise:
            self.assertRaises(ParseError, parse_prefix, case)

        cases = {
            "x": "x",
            ":x x": ":x.x",
            "@ :x :y x :x :y y": "(:x y.x) (:x y.y)",
            "@ f @ g x": "f (g x)",
            "@ @ f a b": "f a b",
            ":x @ x x": ":x.x x",
            "@:x x y": "(:x.x) y",
        }
        for case, infix in cases.items():
            self.assertEqual(parse(infix), parse_prefix(case), case)

    def test_trailing_input(self):
        parser = PrefixParser("x y")
        parser.parse()
        self.assertEqual("y", parser.remaining)
        self.assertRaises(ParseError, parse_prefix, "x y", strict=True)

    def test_unparse_prefix(self):
        cases = {
            "(:x y.x) a": "@ :x :y x a",
            "f (g x)": "@ f @ g x",
            ":f x.f (f x)": ":f :x @ f @ f x",
        }
        for infix, expected in cases.items():
            term = parse(infix)
            self.assertEqual(expected, unparse_prefix(term), infix)
            self.assertEqual(term, parse_prefix(unparse_prefix(term)), infix)

        self.assertRaises(TypeError, unparse_prefix, object())


if __name__ == '__main__':
    unittest.main()
