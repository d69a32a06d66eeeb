"""
Help and version rendering tests.

Scope
- Version construction, parsing and formatting.
- help/version as options and as subcommands, including topic lookup.
- Plain help layout (column widths) and the fancy panel title.

Conventions
- Test method names follow CamelCase per project convention.
- Output is captured with a rich Console writing to io.StringIO; lines are
  compared with trailing whitespace stripped.
"""

import io
import unittest
from unittest import TestCase

from rich.console import Console

from argot import (
    Argument,
    Command,
    InvalidInputError,
    Option,
    Parser,
    Slot,
    SlotKind,
    StopParsing,
    Version,
    help_command,
    help_option,
    version_command,
    version_option,
)


def capture():
    return Console(file=io.StringIO(), width=100)


def lines(console):
    return [line.rstrip() for line in console.file.getvalue().splitlines()]


class TestVersion(TestCase):

    def testFormatting(self):
        self.assertEqual(str(Version(0, 0, 1, "dev")), "0.0.1-dev")
        self.assertEqual(str(Version(1, 2, 3)), "1.2.3")

    def testParse(self):
        self.assertEqual(Version.parse("1.2.3"), Version(1, 2, 3))
        self.assertEqual(Version.parse(" 10.0.7-rc.1 "), Version(10, 0, 7, "rc.1"))
        for text in ("1.2", "1.2.3.4", "v1.2.3", "1.2.3-", "1.2.3-bad tag"):
            with self.assertRaises(ValueError, msg=text):
                Version.parse(text)
        with self.assertRaises(TypeError):
            Version.parse(123)

    def testValidation(self):
        with self.assertRaises(ValueError):
            Version(-1, 0, 0)
        with self.assertRaises(TypeError):
            Version(True, 0, 0)
        with self.assertRaises(TypeError):
            Version("1", 0, 0)
        with self.assertRaises(ValueError):
            Version(1, 0, 0, "bad tag!")


class TestHelpOption(TestCase):

    def setUp(self):
        self.first, self.second = Slot(SlotKind.INT32), Slot(SlotKind.INT32)
        self.add = Command("Add numbers", arguments=[
            Argument("arg1", "1st argument", into=self.first),
            Argument("arg2", "2nd argument", into=self.second),
        ])
        self.root = Command("Example program", options=[
            help_option(),
            version_option("tool", Version(0, 0, 1, "dev")),
            Option("i", "listCounter", descr="Listing size", into=Slot(SlotKind.UINT32)),
            Option("quiet", into=Slot(SlotKind.BOOLEAN)),
        ], commands={
            "add": self.add,
            "count": Command(),
        })
        self.console = capture()
        self.parser = Parser(self.root, console=self.console)

    def testRootHelpLayout(self):
        with self.assertRaises(StopParsing) as context:
            self.parser.parse(["prog", "--help"])
        self.assertEqual(context.exception.tag, "help")
        self.assertEqual(lines(self.console), [
            "Usage: prog [options] <command>",
            "Example program",
            "Options:",
            "  " + "-h, --help".ljust(26) + "Print help",
            "  " + "-v, --version".ljust(26) + "Print version",
            "  " + "-i, --listCounter".ljust(26) + "Listing size",
            "  --quiet",
            "Commands:",
            "  " + "add".ljust(16) + "Add numbers",
            "  count",
        ])

    def testSubcommandHelp(self):
        with self.assertRaises(StopParsing):
            self.parser.parse(["prog", "-h", "add"])
        self.assertEqual(lines(self.console), [
            "Usage: prog add [arg1] [arg2]",
            "Add numbers",
            "Arguments:",
            "  " + "arg1".ljust(16) + "1st argument",
            "  " + "arg2".ljust(16) + "2nd argument",
        ])
        self.assertFalse(self.first.assigned)

    def testUnknownTopic(self):
        with self.assertRaises(InvalidInputError) as context:
            self.parser.parse(["prog", "-h", "nope"])
        self.assertEqual(context.exception.tag, "help")
        self.assertEqual(self.console.file.getvalue(), "")

    def testVersionOption(self):
        with self.assertRaises(StopParsing) as context:
            self.parser.parse(["prog", "--version", "add", "1", "2"])
        self.assertEqual(context.exception.tag, "version")
        self.assertEqual(lines(self.console), ["tool 0.0.1-dev"])
        self.assertFalse(self.first.assigned)

    def testVersionFromString(self):
        parser = Parser(Command(options=[version_option("tool", "2.0.0-rc.1")]), console=self.console)
        with self.assertRaises(StopParsing):
            parser.parse(["prog", "-v"])
        self.assertEqual(lines(self.console), ["tool 2.0.0-rc.1"])
        with self.assertRaises(TypeError):
            version_option("tool", 2)

    def testCustomPrefixSpelling(self):
        parser = Parser(Command(options=[help_option("Show this")]), prefix="/", console=self.console)
        with self.assertRaises(StopParsing):
            parser.parse(["prog", "//help"])
        self.assertIn("  " + "/h, //help".ljust(26) + "Show this", lines(self.console))

    def testFancyPanel(self):
        parser = Parser(self.root, fancy=True, console=self.console)
        with self.assertRaises(StopParsing):
            parser.parse(["prog", "-h", "add"])
        output = self.console.file.getvalue()
        self.assertIn("[ PROG ADD HELP ]", output)
        self.assertIn("Add numbers", output)


class TestHelpCommand(TestCase):

    def setUp(self):
        self.remote = Command("Manage remotes", commands=[
            help_command(),
            ("add", Command("Add a remote")),
        ])
        self.root = Command("Example program", commands=[
            help_command(),
            version_command("tool", Version(1, 2, 3)),
            ("remote", self.remote),
        ])
        self.console = capture()
        self.parser = Parser(self.root, console=self.console)

    def testHelpWithoutTopic(self):
        self.assertIsNone(self.parser.parse(["prog", "help"])())
        output = lines(self.console)
        self.assertEqual(output[0], "Usage: prog <command>")
        self.assertIn("  " + "help".ljust(16) + "Print help", output)
        self.assertIn("  " + "remote".ljust(16) + "Manage remotes", output)

    def testHelpWithNestedTopics(self):
        self.parser.parse(["prog", "help", "remote", "add"])()
        self.assertEqual(lines(self.console), ["Usage: prog remote add", "Add a remote"])

    def testHelpInsideSubcommand(self):
        self.parser.parse(["prog", "remote", "help"])()
        self.assertEqual(lines(self.console)[:2], ["Usage: prog remote <command>", "Manage remotes"])

    def testUnknownTopic(self):
        result = self.parser.parse(["prog", "help", "nope"])()
        self.assertIsInstance(result, InvalidInputError)
        self.assertEqual(result.tag, "help")

    def testHelpCommandDescribesItself(self):
        self.parser.parse(["prog", "help", "help"])()
        self.assertEqual(lines(self.console), [
            "Usage: prog help [...]",
            "Print help",
            "Arguments:",
            "  " + "*".ljust(16) + "Command to describe",
        ])

    def testVersionCommand(self):
        self.parser.parse(["prog", "version"])()
        self.assertEqual(lines(self.console), ["tool 1.2.3"])


if __name__ == "__main__":
    unittest.main()
