import unittest

from lox.lang.environment import UNINITIALIZED, Environment
from lox.lang.error import VariableNotFoundError, VariableNotInitializedError


class EnvironmentTestCase(unittest.TestCase):

    def test_define_get(self):
        env = Environment()
        env.define("a", 1.0)
        self.assertEqual(1.0, env.get("a"))

        env.define("a", "redefined")
        self.assertEqual("redefined", env.get("a"))

        env.define("nothing", None)
        self.assertIsNone(env.get("nothing"))

    def test_uninitialized(self):
        env = Environment()
        env.define("a")
        self.assertIs(UNINITIALIZED, env.values["a"])
        self.assertIn("a", env)
        with self.assertRaises(VariableNotInitializedError):
            env.get("a")

        env.assign("a", 2.0)
        self.assertEqual(2.0, env.get("a"))

    def test_not_found(self):
        env = Environment(Environment())
        with self.assertRaises(VariableNotFoundError):
            env.get("missing")
        with self.assertRaises(VariableNotFoundError):
            env.assign("missing", 1.0)
        self.assertNotIn("missing", env)
        self.assertNotIn("missing", env.enclosing)

    def test_chain(self):
        outer = Environment()
        outer.define("a", 1.0)
        outer.define("b", 2.0)
        inner = Environment(outer)
        inner.define("b", 3.0)

        self.assertEqual(1.0, inner.get("a"))
        self.assertEqual(3.0, inner.get("b"))
        self.assertEqual(2.0, outer.get("b"))
        self.assertIn("a", inner)
        self.assertNotIn("b", Environment())

    def test_assign_nearest(self):
        outer = Environment()
        outer.define("a", 1.0)
        inner = Environment(outer)

        inner.assign("a", 5.0)
        self.assertEqual(5.0, outer.get("a"))
        self.assertNotIn("a", inner.values)

        inner.define("a", 0.0)
        inner.assign("a", 7.0)
        self.assertEqual(7.0, inner.get("a"))
        self.assertEqual(5.0, outer.get("a"))

    def test_error_message(self):
        env = Environment()
        env.define("x")
        try:
            env.get("x")
        except VariableNotInitializedError as error:
            self.assertEqual("variable 'x' is not initialized", error.msg)
        try:
            env.get("y")
        except VariableNotFoundError as error:
            self.assertEqual("undefined variable 'y'", error.msg)


if __name__ == '__main__':
    unittest.main()
