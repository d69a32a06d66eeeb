"""
Argument binder tests.

Scope
- Exact arity without a trailing argument.
- Trailing argument absorbing zero or more tokens, in order.
- Null tokens and callback faults.

Conventions
- Test method names follow CamelCase per project convention.
"""

import unittest
from unittest import TestCase

from argot import (
    Argument,
    Command,
    InvalidInputError,
    InvalidNumberOfArgsError,
    OptionParsingError,
    Parser,
    Slot,
    SlotKind,
)
from argot.binder import bind_arguments
from argot.parser import Context


class TestBinder(TestCase):

    def setUp(self):
        self.calls = []
        self.parser = Parser(Command())

    def record(self, name):
        return Argument(name, callback=lambda value, context: self.calls.append((context.name, value, context.offset)))

    def bind(self, arguments, *tokens, offset=1):
        context = Context(("prog",) + tokens, offset, "prog", self.parser, self.parser.command, ("prog",))
        return bind_arguments(context, tuple(arguments))

    def testExactArity(self):
        self.assertEqual(self.bind([self.record("a"), self.record("b")], "1", "2"), 3)
        self.assertEqual(self.calls, [("a", "1", 1), ("b", "2", 2)])

    def testNotEnough(self):
        with self.assertRaises(InvalidNumberOfArgsError) as context:
            self.bind([self.record("a"), self.record("b")], "1")
        self.assertEqual(context.exception.tag, "not enough arguments")
        self.assertEqual(self.calls, [])

    def testTooMany(self):
        with self.assertRaises(InvalidNumberOfArgsError) as context:
            self.bind([self.record("a")], "1", "2")
        self.assertEqual(context.exception.tag, "too many arguments")

    def testNoArgumentsNoTokens(self):
        self.assertEqual(self.bind([]), 1)

    def testTrailingAbsorbsInOrder(self):
        self.bind([self.record("first"), self.record("*")], "a", "b", "c", "d")
        self.assertEqual(self.calls, [("first", "a", 1), ("*", "b", 2), ("*", "c", 3), ("*", "d", 4)])

    def testTrailingMayBindNothing(self):
        self.bind([self.record("*")])
        self.bind([self.record("first"), self.record("*")], "a")
        self.assertEqual(self.calls, [("first", "a", 1)])

    def testLeadingArgumentsStayMandatory(self):
        with self.assertRaises(InvalidNumberOfArgsError):
            self.bind([self.record("first"), self.record("*")])

    def testOffsetIsHonoured(self):
        self.bind([self.record("x")], "sub", "value", offset=2)
        self.assertEqual(self.calls, [("x", "value", 2)])

    def testNullToken(self):
        with self.assertRaises(InvalidInputError):
            self.bind([self.record("a"), self.record("b")], "1", None)
        self.assertEqual(self.calls, [("a", "1", 1)])

    def testConversionFaultAborts(self):
        first, second = Slot(SlotKind.INT8), Slot(SlotKind.INT8)
        with self.assertRaises(OptionParsingError) as context:
            self.bind([Argument("a", into=first), Argument("b", into=second)], "1000", "2")
        self.assertEqual(context.exception.tag, "a")
        self.assertFalse(second.assigned)


if __name__ == "__main__":
    unittest.main()
