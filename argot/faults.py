"""
Argot faults: the parse error taxonomy and its rendering.

Scope
- FaultCode: stable numeric identifiers for every outcome a parse can signal,
  including the non-failure NO_ERROR stop signal used by help/version.
- ErrorCategory: a named owner of the code → message table. Categories live in
  one read-only registry built at import time (see `categories`).
- ParserError and its per-code subclasses: carry category, code and the
  free-form tag (offending name or value), and know how to render themselves
  with rich.
- fault(code, tag): build the right ParserError subclass from a code.
- trigger(): surface a fault with runtime options (shell/fancy/colorful/prog).

UX
- In shell mode a fault is printed to standard error and the process exits
  with status 1; otherwise it is raised.
- Palette is overridable through a __styles__ mapping in __main__, and the
  program name through __prog__.
"""
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType
from typing import final

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import mirror

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical parse outcome codes (stable identifiers).

    - NO_ERROR is not a failure: it is the stop signal help/version handlers
      raise to end parsing without running any action.
    - the remaining codes are real failures and map to a non-zero exit status.
    """
    NO_ERROR               = 0
    INVALID_NUMBER_OF_ARGS = 1
    VALUE_EXPECTED         = 2
    UNEXPECTED_VALUE       = 3
    INVALID_INPUT          = 4
    OPTION_PARSING         = 5

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


@final
class ErrorCategory:
    """
    Named family of fault codes with a code → message formatter.

    Instances are immutable; the message table is exposed as a read-only view.
    Unknown codes format as "unknown error".
    """

    name = mirror("name")
    messages = mirror("messages")

    def __init__(self, name, messages, /):
        if not isinstance(name, str):
            raise TypeError("error category name must be a string")
        elif not (name := name.strip()):
            raise ValueError("error category name cannot be empty")
        self._name = name
        self._messages = {FaultCode(code): str(message) for code, message in dict(messages).items()}

    def message(self, code, /):
        try:
            return self._messages[FaultCode(code)]
        except (KeyError, ValueError):
            return "unknown error"

    def __repr__(self):
        return f"ErrorCategory({self._name!r})"


categories = MappingProxyType({
    category.name: category for category in (
        ErrorCategory("CLI arguments", {
            FaultCode.NO_ERROR: "not an error",
            FaultCode.INVALID_NUMBER_OF_ARGS: "invalid number of arguments",
            FaultCode.VALUE_EXPECTED: "value is expected",
            FaultCode.UNEXPECTED_VALUE: "unexpected value",
            FaultCode.INVALID_INPUT: "invalid input",
            FaultCode.OPTION_PARSING: "error parsing option value",
        }),
    )
})


def category(name="CLI arguments", /):
    """
    look up a registered error category by name.

    raises LookupError when no category with that name exists.
    """
    try:
        return categories[name]
    except KeyError:
        raise LookupError(f"unknown error category {name!r}") from None


class ParserError(Exception):
    """
    Structured parse failure (or the NO_ERROR stop signal).

    Attributes
    - category: the ErrorCategory this fault belongs to.
    - code: a FaultCode, fixed per subclass.
    - tag: free-form offending name or value ("" when there is none).
    - message: category message for the code.
    - options: read-only runtime options used when rendering/triggering
      (prog, shell, fancy, colorful).
    """
    code = FaultCode.OPTION_PARSING

    def __init__(self, tag="", /, **options):
        if not isinstance(tag, str):
            raise TypeError(f"{type(self).__name__} tag must be a string")
        super().__init__(tag)
        self.tag = tag
        self.options = MappingProxyType(options)

    @property
    def category(self):
        return category()

    @property
    def message(self):
        return self.category.message(self.code)

    @property
    def stop(self):
        return self.code is FaultCode.NO_ERROR

    def __str__(self):
        return f"{self.message}: {self.tag}" if self.tag else self.message

    def __repr__(self):
        return f"{type(self).__name__}({self.tag!r})"

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",

            # body
            "error-message": "#C8C8D0",
            "tag-arrow": "#9CE19C dim",
            "tag": "italic #9CE19C",
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", False)
        fancy = self.options.get("fancy", False)

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

        prog = text(getattr(main, "__prog__", self.options.get("prog", "argot")), styler("prog-name"))

        header = Text.assemble(
            "[ ",
            prog,
            " - ",
            text(self.code.normalize(), styler("code")),
            " | ",
            text(self.code.name.replace("_", " ").title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))
        renders = [message]
        if self.tag:
            renders.append(Text.assemble(text(" → ", styler("tag-arrow")), text(self.tag, styler("tag"))))

        if fancy:
            return Panel(Group(*renders), title=header, title_align="left", width=console.width - 4)

        return Group(header, *renders)

    def __trigger__(self):
        if self.stop:
            return
        if not self.options.get("shell"):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.tag, **{**self.options, **overrides})


class StopParsing(ParserError):
    code = FaultCode.NO_ERROR

class InvalidNumberOfArgsError(ParserError):
    code = FaultCode.INVALID_NUMBER_OF_ARGS

class ValueExpectedError(ParserError):
    code = FaultCode.VALUE_EXPECTED

class UnexpectedValueError(ParserError):
    code = FaultCode.UNEXPECTED_VALUE

class InvalidInputError(ParserError):
    code = FaultCode.INVALID_INPUT

class OptionParsingError(ParserError):
    code = FaultCode.OPTION_PARSING


_faults = MappingProxyType({
    cls.code: cls for cls in (
        StopParsing,
        InvalidNumberOfArgsError,
        ValueExpectedError,
        UnexpectedValueError,
        InvalidInputError,
        OptionParsingError,
    )
})


def fault(code, tag="", /, **options):
    """
    build the ParserError subclass matching a fault code.

    raises ValueError for integers that are not a FaultCode.
    """
    return _faults[FaultCode(code)](tag, **options)


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods.
    - options are merged into the fault via __replace__ before triggering.
    - in shell mode the fault is rendered on standard error and the process
      exits with status 1; otherwise the fault is raised. NO_ERROR is a no-op.

    typical options
    - prog, shell, fancy, colorful.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


__all__ = (
    "FaultCode",
    "ErrorCategory",
    "categories",
    "category",
    "ParserError",
    "StopParsing",
    "InvalidNumberOfArgsError",
    "ValueExpectedError",
    "UnexpectedValueError",
    "InvalidInputError",
    "OptionParsingError",
    "fault",
    "trigger",
)
