"""
Argument binder: bind the remaining positional tokens to declared arguments.

Without a trailing argument exactly one token per argument is required. With
one, the leading arguments are mandatory and the trailing slot absorbs every
token after them, zero or more, one delivery per token in order.
"""
from .faults import InvalidInputError, InvalidNumberOfArgsError
from .logger import logger


def bind_arguments(context, arguments, /):
    """
    deliver tokens[context.offset:] to arguments; return the end offset.

    raises InvalidNumberOfArgsError("not enough arguments" / "too many
    arguments") on an arity mismatch, InvalidInputError on a null token, and
    propagates any fault raised or returned by an argument callback.
    """
    remaining = len(context.tokens) - context.offset
    trailing = bool(arguments) and arguments[-1].trailing
    required = len(arguments) - trailing

    if remaining < required:
        raise InvalidNumberOfArgsError("not enough arguments")
    if remaining > required and not trailing:
        raise InvalidNumberOfArgsError("too many arguments")

    for index in range(context.offset, len(context.tokens)):
        argument = arguments[min(index - context.offset, len(arguments) - 1)]
        if (token := context.tokens[index]) is None:
            raise InvalidInputError("null string as input")
        logger.debug("binding %r to argument %r", token, argument.name)
        argument(token, context._replace(offset=index, name=argument.name))

    return len(context.tokens)


__all__ = ("bind_arguments",)
