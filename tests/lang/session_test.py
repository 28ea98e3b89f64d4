import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout

from lambdastep.lang.error import ErrorHandler, GenericException, ParseError
from lambdastep.lang.session import Session
from lambdastep.pure.lexical import parse


class SessionTestCase(unittest.TestCase):

    def setUp(self):
        self.sess = Session(ErrorHandler(fatal=False))

    def test_load(self):
        self.sess.load("I = :x.x\nI y")
        self.assertEqual(["I"], [macro.name for macro in self.sess.macros])
        self.assertEqual(parse("(:x.x) y"), self.sess.term)

        self.assertTrue(self.sess.run())
        self.assertEqual("y", self.sess.display())

        self.assertRaises(ParseError, self.sess.load, "(x")

    def test_trailing_input(self):
        with redirect_stdout(io.StringIO()) as out:
            self.sess.load("x) y")
        self.assertIn("warning", out.getvalue())
        self.assertEqual(parse("x"), self.sess.term)

    def test_step_back(self):
        self.sess.load("(:x.x) ((:y.y) z)")

        self.assertIsNotNone(self.sess.step())
        self.assertEqual("(:y.y) z", str(self.sess.term))
        self.assertIsNotNone(self.sess.step())
        self.assertEqual("z", str(self.sess.term))
        self.assertIsNone(self.sess.step())
        self.assertEqual([("β", "(:y.y) z"), ("β", "z")], self.sess.steps)

        self.assertTrue(self.sess.back())
        self.assertEqual("(:y.y) z", str(self.sess.term))
        self.assertTrue(self.sess.back())
        self.assertEqual("(:x.x) ((:y.y) z)", str(self.sess.term))
        self.assertFalse(self.sess.back())
        self.assertEqual([], self.sess.steps)

        self.assertIsNotNone(self.sess.step())
        self.assertEqual("(:y.y) z", str(self.sess.term))

    def test_history_is_not_shared(self):
        self.sess.load("(:x.x x) ((:y.y) z)")
        self.sess.step()
        self.sess.step()
        self.sess.back()
        self.assertEqual("(:x.x x) z", str(self.sess.term))
        self.sess.back()
        self.assertEqual("(:x.x x) ((:y.y) z)", str(self.sess.term))

    def test_run(self):
        self.sess.load("(:x.x x) (:x.x x)")
        with redirect_stdout(io.StringIO()) as out:
            self.assertFalse(self.sess.run(max_steps=5))
        self.assertIn("warning", out.getvalue())
        self.assertEqual(5, len(self.sess.history))

        self.sess.load("(:x.x) y")
        self.assertTrue(self.sess.run(max_steps=1))

    def test_display(self):
        self.sess.load("TRUE = :x y.x\nFALSE = :x y.y\nNOT = :p.p FALSE TRUE\nNOT TRUE")
        self.sess.run()
        self.assertEqual("FALSE", self.sess.display())
        self.assertEqual(":x y.y", self.sess.display(labels=False))
        self.assertEqual(":x :y y", self.sess.display(labels=False, prefix=True))

        self.sess.load("SUCC = :n f x.f (n f x)\nSUCC (SUCC (:f x.x))")
        self.sess.run()
        self.assertEqual("2", self.sess.display(numerals=True))

    def test_add(self):
        self.sess.add("I = :x.x", 1)
        self.sess.add("K = :x y.x", 2)
        self.sess.add("= broken", 3)
        self.assertEqual(["I", "K"], [macro.name for macro in self.sess.macros])
        self.assertIsNone(self.sess.term)

        self.sess.add("K I a", 4)
        self.assertEqual(parse("(:x y.x) (:x.x) a"), self.sess.term)
        self.sess.run()
        self.assertEqual("I", self.sess.display())

    def test_prefix(self):
        sess = Session(ErrorHandler(fatal=False), prefix=True)
        sess.load("@ :x x y")
        sess.run()
        self.assertEqual("y", sess.display())

        sess.add("@ :x :y x a", 1)
        self.assertEqual("@ :x :y x a", sess.display())
        self.assertEqual("(:x y.x) a", sess.display(prefix=False))

    def test_not_loaded(self):
        self.assertRaises(GenericException, self.sess.step)
        self.assertRaises(GenericException, self.sess.back)
        self.assertRaises(GenericException, self.sess.display)

    def test_read(self):
        with tempfile.TemporaryDirectory() as directory:
            path = os.path.join(directory, "pair.lc")
            with open(path, "w") as file:
                file.write("PAIR = :a b f.f a b\nFST = :p.p (:x y.x)\n\nFST (PAIR a b)\n")

            sess = Session(ErrorHandler(fatal=False), path)
            sess.read()
            sess.run()
            self.assertEqual("a", sess.display())

            missing = Session(ErrorHandler(fatal=False), os.path.join(directory, "missing.lc"))
            self.assertRaises(GenericException, missing.read)

            garbled = os.path.join(directory, "garbled.lc")
            with open(garbled, "wb") as file:
                file.write(b"I = :x.x\n\xff\xfe y\n")
            self.assertRaises(GenericException, Session(ErrorHandler(fatal=False), garbled).read)


if __name__ == '__main__':
    unittest.main()
