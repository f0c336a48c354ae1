"""
Tests for the utility helpers.

This module verifies the guarantees the widget layer builds on:
- Unset is a falsy, final singleton that survives copying and pickling.
- coalesce() only replaces Unset.
- rename() sets stable names on generated functions.
- mirror() exposes frozen, read-only snapshots of private fields.
"""
import copy
import pickle
import unittest
from types import MappingProxyType
from unittest import TestCase

from switchboard.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `Unset` sentinel.
    """

    def testSingleton(self) -> None:
        self.assertIs(Unset, UnsetType())
        self.assertIs(UnsetType(), UnsetType())

    def testFalsy(self) -> None:
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)
        self.assertNotEqual(Unset, "")

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testCopyAndPickle(self) -> None:
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testUnion(self) -> None:
        self.assertIsInstance("name", str | Unset)
        self.assertIsInstance(Unset, str | Unset)
        self.assertNotIsInstance(None, str | Unset)

    def testFinal(self) -> None:
        with self.assertRaises(TypeError):
            class Subtype(UnsetType):
                pass


class CoalesceTest(TestCase):
    """
    Test suite for `coalesce`.
    """

    def testReplacesUnset(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))

    def testKeepsFalsyValues(self) -> None:
        for value in (None, 0, "", ()):
            self.assertIs(coalesce(value, "fallback"), value)


class RenameTest(TestCase):
    """
    Test suite for `rename`.
    """

    def testSetsBothNames(self) -> None:
        @rename("renamed")
        def function():
            pass

        self.assertEqual(function.__name__, "renamed")
        self.assertEqual(function.__qualname__, "renamed")

    def testReturnsSameFunction(self) -> None:
        def function():
            pass

        self.assertIs(rename("renamed")(function), function)

    def testArgumentChecks(self) -> None:
        with self.assertRaises(TypeError):
            rename(3)
        with self.assertRaises(TypeError):
            rename("name")("not callable")

    def testWidgetReprName(self) -> None:
        from switchboard import ExclusiveSwitch

        self.assertEqual(ExclusiveSwitch.__repr__.__qualname__, "__repr__")


class MirrorTest(TestCase):
    """
    Test suite for `mirror`.
    """

    class Holder:
        items = mirror("items")
        table = mirror("table")
        tags = mirror("tags")
        name = mirror("name")

        def __init__(self):
            self._items = ["a", "b"]
            self._table = {"a": 1}
            self._tags = {"x"}
            self._name = "holder"

    def testFrozenSnapshots(self) -> None:
        holder = self.Holder()
        self.assertEqual(holder.items, ("a", "b"))
        self.assertIsInstance(holder.table, MappingProxyType)
        self.assertEqual(holder.tags, frozenset({"x"}))
        self.assertEqual(holder.name, "holder")

    def testReadOnly(self) -> None:
        with self.assertRaises(AttributeError):
            self.Holder().items = ()

    def testPropertyName(self) -> None:
        self.assertEqual(self.Holder.items.fget.__name__, "items")


if __name__ == "__main__":
    unittest.main()
