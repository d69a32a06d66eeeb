"""
Built-in help and version support.

What this module provides
- Version: semantic version (major.minor.patch[-prerelease]).
- help_option() / version_option(): ready-made options. Both print, then stop
  parsing with the NO_ERROR signal so no action runs.
- help_command() / version_command(): the same as (name, Command) pairs for
  trees whose first token is a subcommand.
- render_help() / render_version(): the rich renderers behind them.

Help layout (plain mode)
    Usage: prog [options] [arg] <command>
    Description
    Options:
      -h, --help               Print help
    Arguments:
      arg             Description
    Commands:
      name            Description

Styling
- Palette keys: usage-label, program-name, usage-section, description-section,
  group-label, option-name, metavar, argument-name, argument-description,
  children, program-version, panel-title.
- Define a mapping named __styles__ in __main__ to override any entry; styles
  apply only when the parser is colorful. fancy wraps output in a panel.
"""
import re
from collections import defaultdict, namedtuple

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from .faults import InvalidInputError, StopParsing
from .specs import Argument, Command, Option, ValuePolicy


class Version(namedtuple("Version", ("major", "minor", "patch", "prerelease"))):
    """
    Semantic version triple with an optional prerelease tag.

        >>> str(Version(0, 0, 1, "dev"))
        '0.0.1-dev'
        >>> Version.parse("1.2.3")
        Version(major=1, minor=2, patch=3, prerelease='')
    """
    __slots__ = ()

    def __new__(cls, major, minor, patch, prerelease=""):
        for label, number in (("major", major), ("minor", minor), ("patch", patch)):
            if not isinstance(number, int) or isinstance(number, bool):
                raise TypeError(f"version {label!r} must be an integer")
            if number < 0:
                raise ValueError(f"version {label!r} cannot be negative")
        if not isinstance(prerelease, str):
            raise TypeError("version 'prerelease' must be a string")
        if prerelease and not re.fullmatch(r"[0-9A-Za-z.-]+", prerelease):
            raise ValueError("version 'prerelease' must be dot separated alphanumerics")
        return super().__new__(cls, major, minor, patch, prerelease)

    @classmethod
    def parse(cls, text, /):
        if not isinstance(text, str):
            raise TypeError("Version.parse() argument must be a string")
        if not (match := re.fullmatch(r"\s*(\d+)\.(\d+)\.(\d+)(?:-([0-9A-Za-z.-]+))?\s*", text)):
            raise ValueError(f"invalid version {text!r}")
        major, minor, patch, prerelease = match.groups()
        return cls(int(major), int(minor), int(patch), prerelease or "")

    def __str__(self):
        core = f"{self.major}.{self.minor}.{self.patch}"
        return f"{core}-{self.prerelease}" if self.prerelease else core


def _coerce_version(version, /):
    if isinstance(version, Version):
        return version
    if isinstance(version, str):
        return Version.parse(version)
    raise TypeError("version must be a Version or a string")


def _palette(colorful, /):
    styles = defaultdict(str, {
        # === Head sections ===
        "usage-label": "bold #00E6FF",
        "program-name": "bold #FF4D94",
        "usage-section": "bold #36C5F0",
        "description-section": "italic #A3A3A3",

        # === Groups / entries ===
        "group-label": "bold #FFFFFF",
        "option-name": "bold #00E6FF",
        "metavar": "bold #FFD600",
        "argument-name": "bold #FFD600",
        "argument-description": "#9CA3AF",
        "children": "bold #36C5F0",

        # === Version ===
        "program-version": "bold #00E6FF",

        # === Fancy panel ===
        "panel-title": "bold #FF4D94",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    return styler, text


def _entry(label, width, descr, style, text, styler, /):
    # two-space indent, label padded to a column, description after it
    line = Text("  ")
    if not descr:
        return line.append(text(label, style))
    return line.append(text(label.ljust(width - 1) + " ", style)).append(text(descr, styler("argument-description")))


def render_help(parser, command, path, /):
    """
    Print usage, description, options, arguments and subcommands of command.

    path is the program name followed by the subcommand names leading to it.
    """
    styler, text = _palette(parser.colorful)
    renders = []

    usage = Text.assemble(text("Usage:", styler("usage-label")), " ", text(" ".join(path), styler("program-name")))
    if command.options:
        usage.append(" ").append(text("[options]", styler("usage-section")))
    for argument in command.arguments:
        usage.append(" ").append(text("[...]" if argument.trailing else f"[{argument.name}]", styler("metavar")))
    if command.commands:
        usage.append(" ").append(text("<command>", styler("usage-section")))
    renders.append(usage)

    if command.descr:
        renders.append(text(command.descr, styler("description-section")))

    if command.options:
        renders.append(text("Options:", styler("group-label")))
        for option in command.options:
            spelled = ", ".join(
                (parser.prefix if len(name) == 1 else parser.prefix * 2) + name for name in option.names
            )
            renders.append(_entry(spelled, 26, option.descr, styler("option-name"), text, styler))

    if command.arguments:
        renders.append(text("Arguments:", styler("group-label")))
        for argument in command.arguments:
            renders.append(_entry(argument.name, 16, argument.descr, styler("argument-name"), text, styler))

    if command.commands:
        renders.append(text("Commands:", styler("group-label")))
        for name, child in command.commands.items():
            renders.append(_entry(name, 16, child.descr, styler("children"), text, styler))

    renderable = Group(*renders)
    if parser.fancy:
        renderable = Panel(
            renderable,
            title=Text.assemble("[ ", f"{' '.join(path)} help".upper(), " ]", style=styler("panel-title")),
            title_align="left",
        )
    parser.console.print(renderable)


def render_version(parser, name, version, /):
    """Print "<name> <version>"."""
    styler, text = _palette(parser.colorful)
    renderable = Text.assemble(
        text(name, styler("program-name")),
        " ",
        text(str(version), styler("program-version")),
    )
    if parser.fancy:
        renderable = Panel(
            renderable,
            title=Text.assemble("[ ", f"{name} version".upper(), " ]", style=styler("panel-title")),
            title_align="left",
        )
    parser.console.print(renderable)


def help_option(descr="Print help"):
    """
    Option -h/--help [command].

    Without a value, prints help for the command being parsed; with one,
    for that subcommand of it (unknown names fail with InvalidInput "help").
    Stops parsing with StopParsing("help").
    """
    def callback(value, context):
        command, path = context.command, context.path
        if value is not None:
            try:
                command = command.commands[value]
            except KeyError:
                return InvalidInputError("help")
            path += (value,)
        render_help(context.parser, command, path)
        return StopParsing("help")

    return Option("h", "help", descr=descr, policy=ValuePolicy.OPTIONAL, callback=callback)


def version_option(name, version, /, descr="Print version"):
    """
    Option -v/--version printing "<name> <version>", then StopParsing("version").
    """
    version = _coerce_version(version)

    def callback(value, context):
        render_version(context.parser, name, version)
        return StopParsing("version")

    return Option("v", "version", descr=descr, policy=ValuePolicy.NOT_REQUIRED, callback=callback)


def help_command(descr="Print help"):
    """
    ("help", Command) pair: `help [command]...` prints help for the parent
    command or the named (nested) subcommand of it.
    """
    def action(context):
        parser = context.parser
        path = context.path[:-1]
        command = parser.command
        for name in path[1:]:
            command = command.commands[name]
        for topic in context.tokens[context.offset:]:
            try:
                command = command.commands[topic]
            except KeyError:
                return InvalidInputError("help")
            path += (topic,)
        render_help(parser, command, path)

    return "help", Command(
        descr,
        action,
        arguments=[Argument("*", "Command to describe", callback=lambda value, context: None)],
    )


def version_command(name, version, /, descr="Print version"):
    """("version", Command) pair printing "<name> <version>"."""
    version = _coerce_version(version)

    def action(context):
        render_version(context.parser, name, version)

    return "version", Command(descr, action)


__all__ = (
    "Version",
    "render_help",
    "render_version",
    "help_option",
    "version_option",
    "help_command",
    "version_command",
)
