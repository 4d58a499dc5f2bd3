"""
Utilities tests (Unset sentinel, coalesce, rename).

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from covenant.utils import *


class UnsetTest(TestCase):

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalsely(self):
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)

    def testRepr(self):
        self.assertEqual(repr(Unset), "Unset")

    def testUnionWithTypes(self):
        self.assertIsInstance(Unset, str | Unset)
        self.assertIsInstance("text", Unset | str)

    def testFinalClass(self):
        with self.assertRaises(TypeError):
            type("UnsetType", (UnsetType,), {})


class CoalesceTest(TestCase):

    def testUnsetResolvesToDefault(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))

    def testFalseyValuesArePreserved(self):
        for value in (None, 0, "", []):
            self.assertIs(coalesce(value, "fallback"), value)


class RenameTest(TestCase):

    def testFunctionForm(self):
        def validator(value):
            return value

        self.assertIs(rename(validator, "equals"), validator)
        self.assertEqual(validator.__name__, "equals")
        self.assertEqual(validator.__qualname__, "equals")

    def testDecoratorForm(self):
        @rename("matcher")
        def _(tokens):
            return tokens

        self.assertEqual(_.__name__, "matcher")

    def testInvalidArguments(self):
        with self.assertRaises(TypeError):
            rename(42, "name")
        with self.assertRaises(TypeError):
            rename(len, 42)
        with self.assertRaises(TypeError):
            rename(42)
        with self.assertRaises(TypeError):
            rename()
        with self.assertRaises(TypeError):
            rename("name")(42)

    def testBuiltinsCannotBeRenamed(self):
        with self.assertRaises(TypeError):
            rename(len, "length")


if __name__ == "__main__":
    unittest.main()
