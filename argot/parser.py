"""
argot.parser
~~~~~~~~~~~~

Parser root and per-invocation Context.

What this module provides
- Context: immutable view of one parse step (token array, scan offset, name
  under consideration, root parser, current command, command path). Derived
  contexts are built with _replace().
- Parser: validates a command tree once, then resolves token arrays to
  actions (parse) or runs them with the process-exit contract (__invoke__).
- invoke(object, prompt): run a Parser, or a bare Command wrapped in one.

Exit contract (Parser.__invoke__)
- the NO_ERROR stop signal (help/version) returns 0 without running an action.
- a resolved action is run; returns 0 unless it returns or raises a fault.
- a real fault is triggered: raised when shell is False, otherwise printed
  to standard error followed by sys.exit(1).
"""
import os
import shlex
import sys
from collections import namedtuple
from collections.abc import Iterable

from rich.console import Console

from .dispatcher import dispatch
from .faults import ParserError, trigger
from .logger import logger
from .specs import Command
from .utils import *


class Context(namedtuple("Context", ("tokens", "offset", "name", "parser", "command", "path"))):
    """
    Per-step parse state handed to every callback.

    - tokens: the full token tuple, program name at index 0.
    - offset: index of the token being handled.
    - name: option alias, argument name or command name under consideration.
    - parser: the root Parser.
    - command: the Command whose options/arguments are being matched.
    - path: program name followed by the subcommand names descended so far.
    """
    __slots__ = ()


def _validate(command, prefix, separator, /, *, ancestry=(), seen=None):
    """
    Walk the command graph once: reject cycles and names the tokenizer could
    never produce.
    """
    seen = set() if seen is None else seen
    if any(command is ancestor for ancestor in ancestry):
        raise ValueError("command tree cannot contain cycles")
    if id(command) in seen:
        return
    for option in command.options:
        for alias in option.names:
            if alias.startswith(prefix):
                raise ValueError(f"option alias {alias!r} cannot start with the prefix {prefix!r}")
            if separator in alias:
                raise ValueError(f"option alias {alias!r} cannot contain the separator {separator!r}")
    for name, child in command.commands.items():
        if name.startswith(prefix):
            raise ValueError(f"command name {name!r} cannot start with the prefix {prefix!r}")
        _validate(child, prefix, separator, ancestry=ancestry + (command,), seen=seen)
    seen.add(id(command))


class Parser:
    """
    Root of a command-line interface.

    Parameters
    - command: root Command.
    - prefix: option prefix character (default "-").
    - separator: inline value separator character (default "=").
    - name: program name for usage/version/fault output; defaults to the
      basename of the first token.
    - shell: print faults and exit instead of raising them (see __invoke__).
    - fancy: draw rich panels around help, version and fault output.
    - colorful: enable styles (palette overridable via __main__.__styles__).
    - console: rich Console for help/version output; a fresh stdout console
      is used when unset.

    Raises
    - TypeError/ValueError on malformed configuration or command trees.
    """

    command = mirror("command")
    prefix = mirror("prefix")
    separator = mirror("separator")
    shell = mirror("shell")
    fancy = mirror("fancy")
    colorful = mirror("colorful")

    def __init__(
            self,
            command,
            /,
            *,
            prefix="-",
            separator="=",
            name=Unset,
            shell=False,
            fancy=False,
            colorful=False,
            console=Unset
    ):
        if not isinstance(command, Command):
            raise TypeError("parser root must be a command")
        for label, character in (("prefix", prefix), ("separator", separator)):
            if not isinstance(character, str):
                raise TypeError(f"parser {label!r} must be a string")
            if len(character) != 1 or character.isspace():
                raise ValueError(f"parser {label!r} must be a single printable character")
        if prefix == separator:
            raise ValueError("parser 'prefix' and 'separator' must differ")
        if not isinstance(name, str | Unset):
            raise TypeError("parser 'name' must be a string")
        elif isinstance(name, str) and not (name := name.strip()):
            raise ValueError("parser 'name' cannot be empty")
        if not isinstance(console, Console | Unset):
            raise TypeError("parser 'console' must be a rich console")

        _validate(command, prefix, separator)

        self._command = command
        self._prefix = prefix
        self._separator = separator
        self._name = name
        self._shell = bool(shell)
        self._fancy = bool(fancy)
        self._colorful = bool(colorful)
        self._console = console

    @property
    def console(self):
        return Console() if self._console is Unset else self._console

    def prog(self, tokens=(), /):
        """program name: explicit name, else basename of tokens[0], else "argot"."""
        if self._name is not Unset:
            return self._name
        if tokens and tokens[0]:
            return os.path.basename(tokens[0]) or tokens[0]
        return "argot"

    def parse(self, tokens, /):
        """
        Resolve a token array (program name at index 0) to an action.

        Returns the action without running it. An empty array behaves like a
        lone program name.

        Raises
        - ParserError on the first fault, StopParsing included.
        - TypeError when tokens is not an iterable of strings (None entries
          are accepted and reported as InvalidInputError).
        """
        if isinstance(tokens, str) or not isinstance(tokens, Iterable):
            raise TypeError("parse() argument must be an iterable of strings")
        tokens = tuple(tokens)
        if any(token is not None and not isinstance(token, str) for token in tokens):
            raise TypeError("parse() argument must be an iterable of strings")

        prog = self.prog(tokens)
        logger.debug("parsing %d token(s) for %r", len(tokens), prog)
        return dispatch(self._command, Context(
            tokens=tokens,
            offset=min(1, len(tokens)),
            name=prog,
            parser=self,
            command=self._command,
            path=(prog,),
        ))

    def __invoke__(self, prompt=Unset, /):
        """
        Parse and run with the process-exit contract; return the exit status.

        Parameters
        - prompt (program name excluded):
          • Unset: sys.argv[1:].
          • str: shell-like string split with shlex.split.
          • Iterable[str]: pre-tokenized arguments.
        """
        if prompt is Unset:
            arguments = sys.argv[1:]
        elif isinstance(prompt, str):
            arguments = shlex.split(prompt)
        elif isinstance(prompt, Iterable):
            arguments = list(prompt)
            if not all(isinstance(argument, str) for argument in arguments):
                raise TypeError("__invoke__() argument must be a string or an iterable of strings")
        else:
            raise TypeError("__invoke__() argument must be a string or an iterable of strings")

        tokens = [coalesce(self._name, sys.argv[0] if sys.argv and sys.argv[0] else "argot"), *arguments]
        options = {
            "prog": self.prog(tokens),
            "shell": self._shell,
            "fancy": self._fancy,
            "colorful": self._colorful,
        }

        try:
            result = self.parse(tokens)()
        except ParserError as fault:
            result = fault

        if isinstance(result, ParserError):
            if result.stop:
                logger.debug("stopped by %r", result.tag)
                return 0
            trigger(result, **options)
            return 1
        return 0


def invoke(object, prompt=Unset, /):
    """
    Convenience runner returning an exit status.

    - object: anything implementing __invoke__(prompt) (a Parser), or a bare
      Command, which is wrapped in a default Parser.
    - prompt: see Parser.__invoke__.
    """
    if hasattr(object, "__invoke__") and callable(object.__invoke__):
        return object.__invoke__(prompt)
    if isinstance(object, Command):
        return invoke(Parser(object), prompt)
    target = "argument" if prompt is Unset else "first argument"
    raise TypeError(f"invoke() {target} must implement __invoke__ method") from None


__all__ = (
    "Context",
    "Parser",
    "invoke",
)
