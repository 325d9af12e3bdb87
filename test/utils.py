"""
Tests for the internal helpers.

This module verifies semantic guarantees of the `Unset` sentinel and the small
helpers built around it:
- Singleton identity, falsy semantics and representation.
- Copying, deep copying and pickling preserve identity.
- Finality (type cannot be subclassed) and PEP 604 unions.
- coalesce(), mirror(), ordinal() and jsonify() behaviour.
"""
import copy
import pickle
import unittest
from unittest import TestCase

from schemargs.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `Unset` singleton.

    This suite asserts that:
    - UnsetType() always returns the same instance (singleton).
    - The sentinel is falsy but not equal to other falsy values.
    - Copy/deepcopy/pickle round-trips preserve identity.
    - The type is final and cannot be subclassed.
    """

    def testSingleton(self) -> None:
        """
        The constructor returns the exported instance on every call.
        """
        self.assertIs(UnsetType(), Unset)
        self.assertIs(UnsetType(), UnsetType())

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testFalsely(self) -> None:
        """
        The sentinel is falsy but distinct from None and False.
        """
        self.assertFalse(bool(Unset))
        self.assertIsNot(Unset, None)
        self.assertNotEqual(Unset, False)  # noqa: E712

    def testCopyDeepcopyPreserveSingleton(self) -> None:
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)
        self.assertIs(copy.deepcopy({"value": Unset})["value"], Unset)

    def testPickleRoundTrip(self) -> None:
        """
        Pickle round-trips preserve the identity of the singleton.
        """
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testUnionInIsinstance(self) -> None:
        """
        `str | Unset` is usable as an isinstance() target.
        """
        self.assertTrue(isinstance("x", str | Unset))
        self.assertTrue(isinstance(Unset, str | Unset))
        self.assertFalse(isinstance(1, str | Unset))

    def testFinalClass(self) -> None:
        with self.assertRaises(TypeError):
            type("UnsetType", (UnsetType,), {})


class HelpersTest(TestCase):
    """coalesce, mirror, ordinal and jsonify."""

    def testCoalesce(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertEqual(coalesce(0, 1), 0)
        self.assertIsNone(coalesce(None, "fallback"))

    def testMirrorReturnsCopies(self) -> None:
        class Holder:
            items = mirror("items")

            def __init__(self):
                self._items = [1, [2, 3]]

        holder = Holder()
        holder.items[1].append(4)
        self.assertEqual(holder.items, [1, [2, 3]])
        with self.assertRaises(AttributeError):
            holder.items = []

    def testMirrorKeepsTuples(self) -> None:
        class Holder:
            items = mirror("items")

            def __init__(self):
                self._items = ("a", "b")

        self.assertEqual(Holder().items, ("a", "b"))

    def testOrdinalWords(self) -> None:
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(10), "tenth")

    def testOrdinalSuffixes(self) -> None:
        for number, expected in ((11, "11th"), (12, "12th"), (21, "21st"), (22, "22nd"), (23, "23rd"), (111, "111th")):
            with self.subTest(number=number):
                self.assertEqual(ordinal(number), expected)

    def testJsonify(self) -> None:
        self.assertEqual(jsonify(["a", 1]), '["a",1]')
        self.assertEqual(jsonify(False), "false")
        self.assertEqual(jsonify(frozenset()), "frozenset()")

    def testRename(self) -> None:
        @rename("renamed")
        def original():
            pass

        self.assertEqual(original.__name__, "renamed")
        with self.assertRaises(TypeError):
            rename(1, "x")


if __name__ == '__main__':
    unittest.main()
