"""
Tests for the internal utilities.

This module verifies the guarantees the option and parser layers rely on:
- Unset is a falsy, sealed singleton that survives copying and pickling.
- coalesce() only replaces Unset.
- rename() updates callable metadata in both forms.
- mirror() exposes immutable copies of private state.
"""
import copy
import pickle
import unittest
from types import MappingProxyType
from unittest import TestCase

from getoptic.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `Unset` sentinel.
    """

    def testSingleton(self) -> None:
        self.assertIs(Unset, UnsetType())

    def testFalsy(self) -> None:
        self.assertFalse(bool(Unset))
        self.assertNotEqual(Unset, None)
        self.assertNotEqual(Unset, "")

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testCopyDeepcopyPickle(self) -> None:
        """
        copy(), deepcopy() and pickle round-trips preserve identity.
        """
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testUnionWithTypes(self) -> None:
        self.assertTrue(isinstance(Unset, str | Unset))
        self.assertTrue(isinstance("x", str | Unset))
        self.assertFalse(isinstance(1, str | Unset))

    def testFinal(self) -> None:
        with self.assertRaises(TypeError):
            class Sub(UnsetType):  # NOQA: F-841
                pass


class CoalesceTest(TestCase):

    def testReplacesUnsetOnly(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertEqual(coalesce("", "fallback"), "")
        self.assertIsNone(coalesce(None, "fallback"))


class RenameTest(TestCase):

    def testFunctionForm(self) -> None:
        def f():
            pass

        self.assertIs(rename(f, "store"), f)
        self.assertEqual((f.__name__, f.__qualname__), ("store", "store"))

    def testDecoratorForm(self) -> None:
        @rename("append")
        def f():
            pass

        self.assertEqual(f.__name__, "append")

    def testErrors(self) -> None:
        with self.assertRaises(TypeError):
            rename(1, "x")
        with self.assertRaises(TypeError):
            rename(lambda: None, 1)
        with self.assertRaises(TypeError):
            rename(len, "size")
        with self.assertRaises(TypeError):
            rename()


class MirrorTest(TestCase):

    def setUp(self) -> None:
        class Holder:
            items = mirror("items")
            table = mirror("table")
            tags = mirror("tags")
            name = mirror("name")

            def __init__(self):
                self._items = ["a", ["b"]]
                self._table = {"k": ["v"]}
                self._tags = {"x"}
                self._name = "holder"

        self.holder = Holder()

    def testSequencesBecomeTuples(self) -> None:
        self.assertEqual(self.holder.items, ("a", ("b",)))

    def testMappingsAreReadOnly(self) -> None:
        self.assertIsInstance(self.holder.table, MappingProxyType)
        self.assertEqual(self.holder.table["k"], ("v",))

    def testSetsAreFrozen(self) -> None:
        self.assertEqual(self.holder.tags, frozenset({"x"}))

    def testScalarsPassThrough(self) -> None:
        self.assertEqual(self.holder.name, "holder")

    def testNoSetter(self) -> None:
        with self.assertRaises(AttributeError):
            self.holder.items = ()

    def testNameMustBeString(self) -> None:
        with self.assertRaises(TypeError):
            mirror(1)


if __name__ == "__main__":
    unittest.main()
