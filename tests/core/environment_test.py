import unittest

from monkey.core.environment import Environment
from monkey.core.values import Integer


class EnvironmentTestCase(unittest.TestCase):

    def test_get_set(self):
        env = Environment()
        self.assertIsNone(env.get("x"))

        five = Integer(5)
        self.assertIs(five, env.set("x", five))
        self.assertIs(five, env.get("x"))

    def test_lookup_walks_every_outer_scope(self):
        root = Environment()
        root.set("a", Integer(1))
        inner = root.enclosed().enclosed().enclosed()

        self.assertEqual(1, inner.get("a").value)
        self.assertIsNone(inner.get("b"))

    def test_shadowing(self):
        outer = Environment()
        outer.set("x", Integer(1))
        inner = outer.enclosed()
        inner.set("x", Integer(2))

        self.assertEqual(2, inner.get("x").value)
        self.assertEqual(1, outer.get("x").value)

    def test_set_never_writes_outward(self):
        outer = Environment()
        inner = outer.enclosed()
        inner.set("y", Integer(3))

        self.assertIsNone(outer.get("y"))
        self.assertIs(outer, inner.outer)


if __name__ == '__main__':
    unittest.main()
