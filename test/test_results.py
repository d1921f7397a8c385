"""
Result store tests (completion gating and typed accessors).

Scope
- Validate that typed reads are refused before completion, defaults or not.
- Validate default handling for absent names and empty value lists.
- Validate kind= conversions through getall()/get().

Conventions
- Test method names follow CamelCase per project convention.
"""
import ctypes
import unittest
from unittest import TestCase

from argosy import Results, Value, ValueType
from argosy.faults import IncompleteParseError, NotFoundError, QueryError


def results(completed=True, **recorded):
    results = Results()
    for name, values in recorded.items():
        results._record(name, values)
    if completed:
        results._complete()
    return results


class TestResults(TestCase):
    """Behavioral tests for Results."""

    def testIncompleteRefusesTypedReads(self):
        store = results(completed=False, n=[Value(ValueType.INTEGER, "1")])
        self.assertFalse(store.completed)
        for call in (
            lambda: store.get("n"),
            lambda: store.get("n", 0),
            lambda: store.getall("missing", 0),
        ):
            with self.assertRaises(IncompleteParseError):
                call()

    def testFindIgnoresCompletion(self):
        store = results(completed=False, n=[Value(ValueType.INTEGER, "1")])
        self.assertTrue(store.find("n"))
        self.assertIn("n", store)
        self.assertFalse(store.find("m"))

    def testAbsentNameWithDefault(self):
        store = results()
        self.assertEqual(store.get("missing", 42), 42)
        self.assertEqual(store.getall("missing", 42), [42])
        self.assertIsNone(store.get("missing", None))

    def testAbsentNameWithoutDefault(self):
        store = results()
        with self.assertRaises(NotFoundError) as context:
            store.get("missing")
        self.assertEqual(str(context.exception), "argument 'missing' not found")
        self.assertIsInstance(context.exception, KeyError)
        self.assertIsInstance(context.exception, QueryError)
        with self.assertRaises(LookupError):
            store.getall("missing")

    def testEmptyValueList(self):
        store = results(files=[])
        self.assertEqual(store.getall("files"), [])
        self.assertEqual(store.get("files", "none"), "none")
        with self.assertRaises(NotFoundError):
            store.get("files")

    def testKindConversion(self):
        store = results(n=[Value(ValueType.INTEGER, "300"), Value(ValueType.INTEGER, "7")])
        self.assertEqual(store.getall("n"), [300, 7])
        self.assertEqual(store.getall("n", kind=float), [300.0, 7.0])
        self.assertEqual(store.get("n", kind=ctypes.c_uint8), 44)
        self.assertEqual(store.get("n", kind=str), "300")

    def testFirstRecordingWins(self):
        store = Results()
        self.assertTrue(store._record("n", [Value(ValueType.INTEGER, "1")]))
        self.assertFalse(store._record("n", [Value(ValueType.INTEGER, "2")]))
        store._complete()
        self.assertEqual(store.get("n"), 1)

    def testNamesAndItemsKeepRecordingOrder(self):
        store = results(b=[Value(ValueType.STRING, "x")], a=[])
        self.assertEqual(store.names(), ("b", "a"))
        self.assertEqual(store.items(), (("b", (Value(ValueType.STRING, "x"),)), ("a", ())))
        self.assertEqual(len(store), 2)


if __name__ == "__main__":
    unittest.main()
