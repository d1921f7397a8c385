"""
Registry tests (registration invariants and frozen snapshots).

Scope
- Validate the variadic lock, duplicate names and duplicate flags.
- Validate freeze(): snapshots are immutable and do not alias later additions.
- Validate option lookup by token.

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from argosy import Option, Positional, ValueType, VARIABLE
from argosy.faults import ConfigurationError, FaultCode
from argosy.registry import Registry


class TestRegistry(TestCase):
    """Behavioral tests for Registry."""

    def testDeclarationOrderIsKept(self):
        registry = Registry()
        registry.add_positional(Positional("a", ValueType.INTEGER))
        registry.add_option(Option("-x", "x"))
        registry.add_positional(Positional("b", ValueType.INTEGER))
        self.assertEqual([spec.name for spec in registry.positionals], ["a", "b"])
        self.assertEqual([spec.name for spec in registry.options], ["x"])
        self.assertEqual(len(registry), 3)
        self.assertEqual(registry.names(), {"a", "b", "x"})

    def testNothingAfterVariadicPositional(self):
        registry = Registry()
        registry.add_positional(Positional("rest", ValueType.STRING, VARIABLE))
        self.assertTrue(registry.variadic)
        with self.assertRaises(ConfigurationError) as context:
            registry.add_positional(Positional("more", ValueType.STRING))
        self.assertEqual(context.exception.code, FaultCode.AFTER_VARIADIC)
        self.assertEqual(context.exception.message, "cannot add any argument after varargs")
        with self.assertRaises(ConfigurationError):
            registry.add_option(Option("-v", "verbose"))

    def testNothingAfterVariadicOption(self):
        registry = Registry()
        registry.add_option(Option("-f", "files", ValueType.STRING, VARIABLE))
        with self.assertRaises(ConfigurationError):
            registry.add_positional(Positional("x", ValueType.STRING))
        with self.assertRaises(ConfigurationError):
            registry.add_option(Option("-v", "verbose"))

    def testDuplicatedPositionalName(self):
        registry = Registry()
        registry.add_positional(Positional("x", ValueType.STRING))
        with self.assertRaises(ConfigurationError) as context:
            registry.add_positional(Positional("x", ValueType.INTEGER))
        self.assertEqual(context.exception.code, FaultCode.DUPLICATED_NAME)

    def testNameSharedBetweenKinds(self):
        registry = Registry()
        registry.add_option(Option("-x", "x"))
        with self.assertRaises(ConfigurationError) as context:
            registry.add_positional(Positional("x", ValueType.STRING))
        self.assertEqual(context.exception.code, FaultCode.DUPLICATED_NAME)

    def testDuplicatedFlag(self):
        registry = Registry()
        registry.add_option(Option(["-v", "--verbose"], "verbose"))
        with self.assertRaises(ConfigurationError) as context:
            registry.add_option(Option(["--version", "-v"], "version"))
        self.assertEqual(context.exception.code, FaultCode.DUPLICATED_FLAG)
        self.assertIn("'-v'", context.exception.message)
        self.assertEqual(len(registry.options), 1)

    def testOptionLookup(self):
        registry = Registry()
        verbose = Option(["-v", "--verbose"], "verbose")
        registry.add_option(verbose)
        self.assertIs(registry.option("--verbose"), verbose)
        self.assertIsNone(registry.option("verbose"))

    def testFreezeSnapshot(self):
        registry = Registry()
        registry.add_positional(Positional("a", ValueType.INTEGER))
        snapshot = registry.freeze()
        self.assertTrue(snapshot.frozen)
        self.assertFalse(registry.frozen)

        registry.add_positional(Positional("b", ValueType.INTEGER))
        self.assertEqual(len(snapshot), 1)
        self.assertEqual(len(registry), 2)

        with self.assertRaises(ConfigurationError) as context:
            snapshot.add_option(Option("-v", "verbose"))
        self.assertEqual(context.exception.code, FaultCode.FROZEN_REGISTRY)


if __name__ == "__main__":
    unittest.main()
