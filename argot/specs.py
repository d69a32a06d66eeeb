r"""
Argot specification model: options, positional arguments and commands.

Overview
- Specs
  • Option: named flag with one or more bare aliases ("h", "help"), a value
    policy, and either a callback or a Slot destination.
  • Argument: positional value bound by position; the name "*" marks the
    trailing slot that absorbs every remaining token.
  • Command: node of the dispatch tree holding options, either arguments or
    named subcommands, and an action run once the node is resolved.

- Decorators
  • @option(...), @argument(...): build a spec and bind the decorated function
    as its callback.
  • @command(...): build a Command whose action is the decorated function.

- Value policy
  • REQUIRED: a value must follow, inline ("--name=value") or as the next token.
  • OPTIONAL: a value is taken when available, otherwise the callback gets None.
  • NOT_REQUIRED: any value is discarded and the callback gets None.

Callbacks
- Option callbacks receive (value, context) where value is a str or None.
- Argument callbacks receive (value, context) where value is a str.
- A callback signals failure by returning or raising a ParserError. Any other
  exception escaping a callback is reported as an OptionParsingError tagged
  with the name under consideration and chained to the original exception.

Immutability
- All public attributes are read-only properties returning snapshots; a built
  tree cannot be changed through its public surface.

Quick example:
    >>> from argot import Command, Option, Argument, Slot, SlotKind
    >>> left, right = Slot(SlotKind.INT32), Slot(SlotKind.INT32)
    >>> add = Command("Add numbers", lambda: print(left.value + right.value),
    ...               arguments=[Argument("a", into=left), Argument("b", into=right)])
"""
import functools
import inspect
import operator
import re
from collections.abc import Iterable, Mapping
from enum import Enum
from types import MappingProxyType

from rich.text import Text

from .faults import ParserError, OptionParsingError
from .slots import Slot, SlotKind
from .utils import *


class ValuePolicy(Enum):
    """
    whether an option takes a value.

    string aliases are accepted: "required", "optional", "not-required"
    (also "not_required" and "none"), case-insensitive.
    """
    REQUIRED     = "required"
    OPTIONAL     = "optional"
    NOT_REQUIRED = "not-required"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            value = value.strip().lower().replace("_", "-")
            return {"required": cls.REQUIRED, "optional": cls.OPTIONAL,
                    "not-required": cls.NOT_REQUIRED, "none": cls.NOT_REQUIRED}.get(value)
        return None


class SpecType(type):
    """
    Metaclass giving specs a stable identity and read-only introspection.

    Responsibilities
    - Derive __typename__ from the class name (camel case split with hyphens)
      for use in construction errors.
    - Publish every name in __introspectable__ as a mirror() property over
      the matching "_name" field.
    - Provide __repr__/__rich_repr__ over __displayable__ (or
      __introspectable__ when unset).
    - Seal the class against subclassing when created with sealed=True.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, *, sealed=False, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
            **options
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        if sealed:
            @rename("__init_subclass__")
            def __init_subclass__(cls, **options):  # NOQA: F-841
                raise TypeError(f"type {self.__name__!r} is not an acceptable base type")
            self.__init_subclass__ = classmethod(__init_subclass__)

        return self


def _unbound(*unused):
    """placeholder callback of a decorator-built spec awaiting its function."""
    raise TypeError("spec callback was never bound")


def _sanitize_descr(cls, metadata, /):
    """
    Validate the shared 'descr' field: Unset or a non-empty (trimmed) string.

    Unset becomes None; rich Text is accepted as-is.
    """
    if not isinstance(descr := metadata["descr"], str | Text | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    metadata["descr"] = coalesce(descr)


def _sanitize_name(cls, name, /):
    if not isinstance(name, str):
        raise TypeError(f"{cls.__typename__} names must be strings")
    elif not name:
        raise ValueError(f"{cls.__typename__} names cannot be empty-strings")
    elif re.search(r"\s", name):
        raise ValueError(f"{cls.__typename__} names cannot contain whitespace")
    return name


def _sanitize_binding(cls, metadata, /):
    r"""
    Validate how a spec delivers its value: exactly one of 'callback' or 'into'.

    - callback: any callable taking (value, context).
    - into: a Slot. For options the value policy is derived from the slot
      kind (boolean → OPTIONAL, anything else → REQUIRED) and cannot be
      given explicitly.
    - policy (options only): Unset → REQUIRED for callbacks, otherwise any
      ValuePolicy member or alias.
    """
    callback, into = metadata["callback"], metadata["into"]
    if (callback is Unset) == (into is Unset):
        raise TypeError(f"{cls.__typename__} requires exactly one of 'callback' or 'into'")
    if callback is not Unset and not callable(callback):
        raise TypeError(f"{cls.__typename__} 'callback' must be callable")
    if into is not Unset and not isinstance(into, Slot):
        raise TypeError(f"{cls.__typename__} 'into' must be a slot")

    if "policy" not in metadata:
        return
    if into is not Unset:
        if metadata["policy"] is not Unset:
            raise TypeError(f"{cls.__typename__} cannot specify a 'policy' for a slot destination")
        metadata["policy"] = ValuePolicy.OPTIONAL if into.kind is SlotKind.BOOLEAN else ValuePolicy.REQUIRED
    else:
        try:
            metadata["policy"] = ValuePolicy(coalesce(metadata["policy"], ValuePolicy.REQUIRED))
        except ValueError:
            raise ValueError(f"{cls.__typename__} 'policy' must be a value policy") from None


def _deliver(self, value, context, /):
    """
    Hand a value to a spec's slot or callback and normalize the outcome.

    A ParserError (returned or raised) propagates; slot conversion failures
    and any other exception become OptionParsingError tagged with the name
    under consideration.
    """
    if self._into is not Unset:
        try:
            self._into.assign(value)
        except OptionParsingError as error:
            raise OptionParsingError(context.name) from error
        return

    try:
        result = self._callback(value, context)
    except ParserError:
        raise
    except Exception as error:
        raise OptionParsingError(context.name) from error

    if isinstance(result, ParserError):
        raise result


class Option(metaclass=SpecType, sealed=True):
    """
    Named option specification.

    Properties
    - names: tuple of bare aliases, in declaration order.
    - descr: short description or None.
    - policy: ValuePolicy.
    - into: the destination Slot, or Unset for callback options.

    Calling an option delivers a value: option(value, context).
    """

    __introspectable__ = (
        "names",
        "descr",
        "policy",
        "into",
    )
    __displayable__ = (
        "names",
        "descr",
        "policy",
    )

    def __new__(cls, *names, descr=Unset, policy=Unset, callback=Unset, into=Unset):
        """
        Construct an Option.

        Parameters
        - names: one or more bare aliases without prefix characters. Aliases
          are case-sensitive, must be non-empty, free of whitespace and unique.
        - descr: Unset | str | Text, shown in help.
        - policy: ValuePolicy (or alias); only with 'callback'.
        - callback: Callable[[str | None, Context], ParserError | None].
        - into: Slot destination.

        Raises
        - TypeError/ValueError on malformed metadata.
        """
        metadata = {
            "names": names,
            "descr": descr,
            "policy": policy,
            "callback": callback,
            "into": into,
        }
        if not names:
            raise TypeError(f"{cls.__typename__} must specify at least one name")
        sanitized = []
        for name in names:
            if _sanitize_name(cls, name) in sanitized:
                raise ValueError(f"{cls.__typename__} names cannot contain duplicates")
            sanitized.append(name)
        metadata["names"] = tuple(sanitized)
        _sanitize_descr(cls, metadata)
        _sanitize_binding(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    def matches(self, name, /):
        """exact, case-sensitive alias test."""
        return name in self._names

    __call__ = rename(_deliver, "__call__")


class Argument(metaclass=SpecType, sealed=True):
    """
    Positional argument specification.

    Properties
    - name: display name; "*" marks the trailing argument.
    - descr: short description or None.
    - into: the destination Slot, or Unset for callback arguments.
    - trailing: True for the "*" argument.

    Calling an argument delivers a value: argument(value, context).
    """

    __introspectable__ = (
        "name",
        "descr",
        "into",
    )
    __displayable__ = (
        "name",
        "descr",
    )

    def __new__(cls, name, /, descr=Unset, *, callback=Unset, into=Unset):
        metadata = {
            "name": _sanitize_name(cls, name),
            "descr": descr,
            "callback": callback,
            "into": into,
        }
        _sanitize_descr(cls, metadata)
        _sanitize_binding(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    @property
    def trailing(self):
        return self._name == "*"

    __call__ = rename(_deliver, "__call__")


def _idle():
    return None


def _contextual(action, /):
    """
    Tell whether an action wants the resolving context.

    Actions take either nothing or exactly one positional parameter (the
    Context). Parameters with defaults, *args and keyword-only parameters with
    defaults do not count.
    """
    try:
        signature = inspect.signature(action)
    except (TypeError, ValueError):
        return False
    required = [
        parameter for parameter in signature.parameters.values()
        if parameter.default is inspect.Parameter.empty and parameter.kind not in (
            inspect.Parameter.VAR_POSITIONAL,
            inspect.Parameter.VAR_KEYWORD,
        )
    ]
    if any(parameter.kind is inspect.Parameter.KEYWORD_ONLY for parameter in required):
        raise TypeError("command action cannot require keyword-only parameters")
    if len(required) > 1:
        raise TypeError("command action must take no parameters or only the context")
    return bool(required)


class Command(metaclass=SpecType, sealed=True):
    """
    Node of the dispatch tree.

    Properties
    - descr: short description or None.
    - action: callable run when dispatch resolves to this node.
    - options: tuple of Option.
    - arguments: tuple of Argument (the trailing one, if any, is last).
    - commands: read-only mapping name → Command, in declaration order.
    - contextual: whether the action takes the resolving Context.
    - trailing: whether the last argument is the trailing one.

    Subcommands take precedence over arguments when a node declares both.
    """

    __introspectable__ = (
        "descr",
        "action",
        "options",
        "arguments",
        "commands",
    )

    def __new__(cls, descr=Unset, action=Unset, *, options=(), arguments=(), commands=()):
        """
        Construct a Command.

        Parameters
        - descr: Unset | str | Text, shown in help.
        - action: Callable[[], Any] or Callable[[Context], Any]; defaults to
          an idle action returning None.
        - options: iterable of Option. Aliases must be unique across options.
        - arguments: iterable of Argument; only the last may be trailing.
        - commands: mapping or iterable of (name, Command) pairs.

        Raises
        - TypeError/ValueError on malformed metadata.
        """
        metadata = {
            "descr": descr,
            "action": coalesce(action, _idle),
            "options": options,
            "arguments": arguments,
            "commands": commands,
        }
        _sanitize_descr(cls, metadata)

        if not callable(metadata["action"]):
            raise TypeError(f"{cls.__typename__} 'action' must be callable")
        contextual = _contextual(metadata["action"])

        if not isinstance(options, Iterable):
            raise TypeError(f"{cls.__typename__} 'options' must be iterable")
        aliases = set()
        for option in (options := tuple(options)):
            if not isinstance(option, Option):
                raise TypeError(f"{cls.__typename__} 'options' must contain only options")
            if duplicates := aliases.intersection(option.names):
                raise ValueError(f"{cls.__typename__} option alias {min(duplicates)!r} is declared more than once")
            aliases.update(option.names)
        metadata["options"] = options

        if not isinstance(arguments, Iterable):
            raise TypeError(f"{cls.__typename__} 'arguments' must be iterable")
        for index, argument in enumerate(arguments := tuple(arguments)):
            if not isinstance(argument, Argument):
                raise TypeError(f"{cls.__typename__} 'arguments' must contain only arguments")
            if argument.trailing and index != len(arguments) - 1:
                raise ValueError(f"{cls.__typename__} trailing argument must be the last one")
        metadata["arguments"] = arguments

        if isinstance(commands, Mapping):
            commands = commands.items()
        elif not isinstance(commands, Iterable):
            raise TypeError(f"{cls.__typename__} 'commands' must be a mapping or an iterable of pairs")
        children = {}
        for pair in commands:
            try:
                name, command = pair
            except (TypeError, ValueError):
                raise TypeError(f"{cls.__typename__} 'commands' must contain (name, command) pairs") from None
            if not isinstance(command, Command):
                raise TypeError(f"{cls.__typename__} subcommand {name!r} must be a command")
            if _sanitize_name(cls, name) in children:
                raise ValueError(f"{cls.__typename__} subcommand {name!r} is declared more than once")
            children[name] = command
        metadata["commands"] = MappingProxyType(children)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        self._contextual = contextual
        return self

    @property
    def contextual(self):
        return self._contextual

    @property
    def trailing(self):
        return bool(self._arguments) and self._arguments[-1].trailing


def option(*names, **metadata):
    """
    Decorator/factory for an Option bound to a callback.

    Usage
        @option("t", "threads", descr="Worker threads")
        def threads(value, context): ...

    The decorator returns the Option itself; the spec is validated eagerly,
    and the decorator may be applied only once.
    """
    if "callback" in metadata or "into" in metadata:
        raise TypeError("@option() binds the decorated function; 'callback' and 'into' are not accepted")
    spec = Option(*names, callback=_unbound, **metadata)

    @rename("option")
    def wrapper(callback, /):
        if not callable(callback):
            raise TypeError("@option() must be applied to a callable")
        if spec._callback is not _unbound:  # NOQA: E-501
            raise TypeError("@option() must be applied only once")
        spec._callback = callback
        return spec
    return wrapper


def argument(name, /, descr=Unset):
    """
    Decorator/factory for an Argument bound to a callback.

    Usage
        @argument("*", descr="Input files")
        def files(value, context): ...
    """
    spec = Argument(name, descr, callback=_unbound)

    @rename("argument")
    def wrapper(callback, /):
        if not callable(callback):
            raise TypeError("@argument() must be applied to a callable")
        if spec._callback is not _unbound:  # NOQA: E-501
            raise TypeError("@argument() must be applied only once")
        spec._callback = callback
        return spec
    return wrapper


def command(descr=Unset, /, **metadata):
    """
    Decorator building a Command whose action is the decorated function.

    Usage
        @command("Print n numbers", options=[...])
        def count(): ...
    """
    if "action" in metadata:
        raise TypeError("@command() binds the decorated function; 'action' is not accepted")

    @rename("command")
    def wrapper(action, /):
        if not callable(action):
            raise TypeError("@command() must be applied to a callable")
        return Command(descr, action, **metadata)
    return wrapper


__all__ = (
    "ValuePolicy",
    "Option",
    "Argument",
    "Command",
    "option",
    "argument",
    "command",
)

del SpecType
