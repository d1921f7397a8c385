"""
Parsing engine tests (option pass, help short-circuit, positional pass).

Scope
- Validate option extraction: switches, fixed arities, variadic options.
- Validate positional assignment, trailing tokens and insufficient input.
- Validate the helper short-circuit and duplicate-option handling.
- Validate that partial results survive a failed session.

Conventions
- Test method names follow CamelCase per project convention.
- Sessions run with helper=None unless the short-circuit is under test.
"""
import unittest
from unittest import TestCase

from argosy import Option, Positional, ValueType, VARIABLE
from argosy.engine import Session
from argosy.faults import ArityError, ConversionError, DuplicatedOptionWarning, FaultCode
from argosy.registry import Registry


def registry(*specs):
    registry = Registry()
    for spec in specs:
        if isinstance(spec, Option):
            registry.add_option(spec)
        else:
            registry.add_positional(spec)
    return registry


class TestOptionPass(TestCase):
    """Behavioral tests for option extraction."""

    def testOptionsAreRemovedFromPositionalInput(self):
        session = Session(registry(
            Option("-n", "num", ValueType.INTEGER),
            Positional("x", ValueType.STRING),
            Positional("y", ValueType.STRING),
        ), ["a", "-n", "3", "b"])
        results = session.run()
        self.assertEqual(session.remaining, ("a", "b"))
        self.assertEqual(results.get("num"), 3)
        self.assertEqual(results.get("x"), "a")
        self.assertEqual(results.get("y"), "b")

    def testSwitchRecordsTrue(self):
        results = Session(registry(Option(["-v", "--verbose"], "verbose")), ["--verbose"]).run()
        self.assertEqual(results.getall("verbose"), [True])

    def testFixedArityConsumesFlagLookingTokens(self):
        session = Session(registry(
            Option("-h", "help"),
            Option("-p", "pattern", ValueType.STRING),
        ), ["-p", "-h", "x"])
        results = session.run()
        self.assertEqual(results.get("pattern"), "-h")
        self.assertFalse(results.find("help"))
        self.assertEqual(session.remaining, ("x",))

    def testVariadicOptionConsumesTheRest(self):
        results = Session(registry(
            Option("-n", "num", ValueType.INTEGER),
            Option("-f", "files", ValueType.STRING, VARIABLE),
        ), ["-f", "a", "-n", "b"]).run()
        self.assertEqual(results.getall("files"), ["a", "-n", "b"])
        self.assertFalse(results.find("num"))

    def testVariadicOptionMayConsumeNothing(self):
        results = Session(registry(Option("-f", "files", ValueType.STRING, VARIABLE)), ["-f"]).run()
        self.assertTrue(results.find("files"))
        self.assertEqual(results.getall("files"), [])

    def testConversionFailureNamesTheArgument(self):
        session = Session(registry(Option("-n", "num", ValueType.INTEGER)), ["-n", "abc"])
        with self.assertRaises(ConversionError) as context:
            session.run()
        fault = context.exception
        self.assertEqual(fault.message, "value is not convertible to integer-type")
        self.assertEqual(fault.code, FaultCode.INCONVERTIBLE_VALUE)
        self.assertEqual(fault.options["argument"], "num")
        self.assertEqual(fault.options["index"], 2)
        self.assertIn("second position", fault.hint)

    def testArityOverrun(self):
        session = Session(registry(Option("-p", "point", ValueType.FLOAT, 2)), ["-p", "1.0"])
        with self.assertRaises(ArityError) as context:
            session.run()
        self.assertEqual(context.exception.code, FaultCode.INSUFFICIENT_ARGUMENTS)
        self.assertFalse(session.results.completed)

    def testDuplicatedOptionKeepsFirstValues(self):
        session = Session(registry(Option("-n", "num", ValueType.INTEGER)), ["-n", "1", "-n", "2"])
        results = session.run()
        self.assertEqual(results.getall("num"), [1])
        self.assertEqual(len(session.warnings), 1)
        self.assertIsInstance(session.warnings[0], DuplicatedOptionWarning)
        self.assertEqual(session.warnings[0].code, FaultCode.DUPLICATED_OPTION)

    def testDuplicatedOptionIsStillValidated(self):
        session = Session(registry(Option("-n", "num", ValueType.INTEGER)), ["-n", "1", "-n", "two"])
        with self.assertRaises(ConversionError):
            session.run()


class TestPositionalPass(TestCase):
    """Behavioral tests for positional assignment."""

    def testTrailingTokensAreDiscarded(self):
        session = Session(registry(Positional("arg1", ValueType.INTEGER)), ["1", "2"])
        results = session.run()
        self.assertTrue(results.completed)
        self.assertEqual(results.getall("arg1"), [1])
        self.assertEqual(session.remaining, ("1", "2"))

    def testInsufficientArguments(self):
        session = Session(registry(Positional("arg1", ValueType.INTEGER)), [])
        with self.assertRaises(ArityError) as context:
            session.run()
        self.assertEqual(context.exception.message, "insufficient number of arguments")
        self.assertFalse(session.results.completed)

    def testFixedArityNeedsEveryToken(self):
        session = Session(registry(Positional("pair", ValueType.INTEGER, 2)), ["1"])
        with self.assertRaises(ArityError):
            session.run()

    def testVariadicTakesEverythingLeft(self):
        results = Session(registry(
            Positional("first", ValueType.INTEGER),
            Positional("rest", ValueType.INTEGER, VARIABLE),
        ), ["1", "2", "3"]).run()
        self.assertEqual(results.get("first"), 1)
        self.assertEqual(results.getall("rest"), [2, 3])

    def testVariadicNeedsOneToken(self):
        session = Session(registry(
            Positional("first", ValueType.INTEGER),
            Positional("rest", ValueType.INTEGER, VARIABLE),
        ), ["1"])
        with self.assertRaises(ArityError):
            session.run()

    def testConversionFailure(self):
        session = Session(registry(Positional("arg1", ValueType.INTEGER)), ["a"])
        with self.assertRaises(ConversionError) as context:
            session.run()
        self.assertIn("integer-type", str(context.exception))
        self.assertEqual(context.exception.options["argument"], "arg1")

    def testPartialResultsSurviveFailure(self):
        session = Session(registry(
            Option("-v", "verbose"),
            Positional("count", ValueType.INTEGER),
        ), ["-v", "many"])
        with self.assertRaises(ConversionError):
            session.run()
        self.assertTrue(session.results.find("verbose"))
        self.assertFalse(session.results.find("count"))
        self.assertFalse(session.results.completed)


class TestHelperShortCircuit(TestCase):
    """Behavioral tests for the helper option."""

    def specs(self):
        return registry(Option(["-h", "--help"], "help"), Positional("arg1", ValueType.INTEGER))

    def testHelperSkipsPositionals(self):
        results = Session(self.specs(), ["-h"], helper="help").run()
        self.assertTrue(results.completed)
        self.assertTrue(results.find("help"))
        self.assertFalse(results.find("arg1"))

    def testHelperStillRunsOptionPass(self):
        with self.assertRaises(ConversionError):
            Session(registry(
                Option("-h", "help"),
                Option("-n", "num", ValueType.INTEGER),
            ), ["-h", "-n", "x"], helper="help").run()

    def testValueBearingHelperGivenFalse(self):
        specs = registry(
            Option("--help", "help", ValueType.BOOLEAN, 1),
            Positional("arg1", ValueType.INTEGER),
        )
        session = Session(specs, ["--help", "false", "5"], helper="help")
        results = session.run()
        self.assertFalse(session.helped)
        self.assertEqual(results.get("arg1"), 5)
        with self.assertRaises(ArityError):
            Session(specs, ["--help", "false"], helper="help").run()

    def testValueBearingHelperGivenTrue(self):
        session = Session(registry(
            Option("--help", "help", ValueType.BOOLEAN, 1),
            Positional("arg1", ValueType.INTEGER),
        ), ["--help", "1"], helper="help")
        session.run()
        self.assertTrue(session.helped)
        self.assertFalse(session.results.find("arg1"))

    def testWithoutHelperPositionalsAreMandatory(self):
        with self.assertRaises(ArityError):
            Session(self.specs(), ["-h"]).run()


class TestSession(TestCase):
    """Behavioral tests for session setup."""

    def testRegistryIsFrozen(self):
        source = registry(Positional("a", ValueType.STRING))
        session = Session(source, ["x"])
        self.assertTrue(session.registry.frozen)
        self.assertFalse(source.frozen)

    def testTokensMustBeStrings(self):
        with self.assertRaises(TypeError):
            Session(registry(), ["1", 2])


if __name__ == "__main__":
    unittest.main()
