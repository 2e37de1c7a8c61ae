"""
Tests for the internal helpers (Unset, coalesce, rename, ordinal).
"""
import unittest
from unittest import TestCase

from argotree.utils import Unset, UnsetType, coalesce, ordinal, rename


class TestUnset(TestCase):

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalsyAndRepr(self):
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testFinalClass(self):
        with self.assertRaises(TypeError):
            class Custom(UnsetType):  # NOQA: F-841
                pass

    def testUnionSupport(self):
        self.assertIsInstance(Unset, str | Unset)
        self.assertIsInstance("x", str | Unset)


class TestCoalesce(TestCase):

    def testReplacesOnlyUnset(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)
        self.assertIsNone(coalesce(Unset))


class TestRename(TestCase):

    def testFunctionForm(self):
        def work():
            pass
        self.assertIs(rename(work, "renamed"), work)
        self.assertEqual(work.__name__, "renamed")
        self.assertEqual(work.__qualname__, "renamed")

    def testDecoratorForm(self):
        @rename("renamed")
        def work():
            pass
        self.assertEqual(work.__name__, "renamed")

    def testArity(self):
        with self.assertRaises(TypeError):
            rename()
        with self.assertRaises(TypeError):
            rename(len, "x", "y")

    def testRejectsNonCallable(self):
        with self.assertRaises(TypeError):
            rename(1, "x")


class TestOrdinal(TestCase):

    def testWords(self):
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(3), "third")
        self.assertEqual(ordinal(10), "tenth")

    def testSuffixes(self):
        self.assertEqual(ordinal(21), "21st")
        self.assertEqual(ordinal(22), "22nd")
        self.assertEqual(ordinal(23), "23rd")
        self.assertEqual(ordinal(24), "24th")

    def testTeens(self):
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(12), "12th")
        self.assertEqual(ordinal(113), "113th")

    def testRejectsBadInput(self):
        with self.assertRaises(TypeError):
            ordinal("1")
        with self.assertRaises(ValueError):
            ordinal(0)


if __name__ == '__main__':
    unittest.main()
