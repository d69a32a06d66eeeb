"""
Slot destination tests.

Conventions
- Test method names follow CamelCase per project convention.
"""

import unittest
from unittest import TestCase

from argot import Slot, SlotKind, OptionParsingError


class TestSlotKind(TestCase):

    def testPythonTypeAliases(self):
        self.assertIs(SlotKind(bool), SlotKind.BOOLEAN)
        self.assertIs(SlotKind(int), SlotKind.INT64)
        self.assertIs(SlotKind(float), SlotKind.FLOAT64)
        self.assertIs(SlotKind(str), SlotKind.TEXT)
        self.assertIs(SlotKind("uint16"), SlotKind.UINT16)

    def testConverterLookup(self):
        self.assertEqual(SlotKind.UINT8.convert("0x10"), 16)
        self.assertIs(SlotKind.BOOLEAN.convert("false"), False)


class TestSlot(TestCase):

    def testStartsAtDefault(self):
        slot = Slot(SlotKind.INT32, default=7)
        self.assertEqual(slot.value, 7)
        self.assertEqual(slot.default, 7)
        self.assertFalse(slot.assigned)

    def testAssignConvertsAndStores(self):
        slot = Slot(SlotKind.FLOAT64)
        self.assertEqual(slot.assign("2.5"), 2.5)
        self.assertEqual(slot.value, 2.5)
        self.assertTrue(slot.assigned)

    def testBooleanWithoutValueIsTrue(self):
        slot = Slot(bool, default=False)
        self.assertIs(slot.assign(None), True)
        self.assertIs(slot.value, True)

    def testFailedAssignLeavesValueUntouched(self):
        slot = Slot(SlotKind.INT8, default=1)
        with self.assertRaises(OptionParsingError) as context:
            slot.assign("300")
        self.assertEqual(context.exception.tag, "300")
        self.assertEqual(slot.value, 1)
        self.assertFalse(slot.assigned)

    def testReset(self):
        slot = Slot(SlotKind.TEXT, default="anon")
        slot.assign("bob")
        slot.reset()
        self.assertEqual(slot.value, "anon")
        self.assertFalse(slot.assigned)

    def testKindIsReadOnly(self):
        slot = Slot(SlotKind.TEXT)
        with self.assertRaises(AttributeError):
            slot.kind = SlotKind.INT8  # type: ignore[misc]

    def testUnsupportedKind(self):
        with self.assertRaises(TypeError):
            Slot("complex")
        with self.assertRaises(TypeError):
            Slot(bytes)

    def testRepr(self):
        self.assertEqual(repr(Slot(SlotKind.UINT8, default=3)), "Slot(uint8, value=3)")


if __name__ == "__main__":
    unittest.main()
