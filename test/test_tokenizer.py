"""
Option token syntax tests.

Conventions
- Test method names follow CamelCase per project convention.
"""

import unittest
from unittest import TestCase

from argot.tokenizer import is_option, split_option


class TestTokenizer(TestCase):

    def testOptionDetection(self):
        self.assertTrue(is_option("-v"))
        self.assertTrue(is_option("--verbose"))
        self.assertTrue(is_option("-"))
        self.assertFalse(is_option("value"))
        self.assertFalse(is_option(""))
        self.assertTrue(is_option("/out", "/"))

    def testSinglePrefix(self):
        self.assertEqual(split_option("-v"), ("v", None))
        self.assertEqual(split_option("-name=value"), ("name", "value"))

    def testDoublePrefix(self):
        self.assertEqual(split_option("--verbose"), ("verbose", None))
        self.assertEqual(split_option("--name=value"), ("name", "value"))

    def testOnlyTwoPrefixCharactersAreStripped(self):
        self.assertEqual(split_option("---x"), ("-x", None))

    def testSplitsAtFirstSeparator(self):
        self.assertEqual(split_option("--define=key=value"), ("define", "key=value"))

    def testEmptyInlineValue(self):
        self.assertEqual(split_option("--x="), ("x", ""))

    def testPrefixOnlyTokensYieldEmptyNames(self):
        self.assertEqual(split_option("-"), ("", None))
        self.assertEqual(split_option("--"), ("", None))
        self.assertEqual(split_option("--=value"), ("", "value"))

    def testCustomCharacters(self):
        self.assertEqual(split_option("//out:file.txt", "/", ":"), ("out", "file.txt"))
        self.assertEqual(split_option("/v", "/", ":"), ("v", None))


if __name__ == "__main__":
    unittest.main()
