"""
Command dispatcher: recursive descent over the command tree.

At every node the options are matched first. Remaining positional tokens then
select a subcommand (exact, case-sensitive name) or are bound to the node's
arguments. There is no backtracking; the first fault ends the parse.
"""
import functools

from .binder import bind_arguments
from .faults import InvalidNumberOfArgsError, UnexpectedValueError
from .logger import logger
from .matcher import match_options


def _resolve(command, context, /):
    logger.debug("resolved command %r", " ".join(context.path))
    if command.contextual:
        return functools.partial(command.action, context)
    return command.action


def dispatch(command, context, /):
    """
    resolve the action selected by context.tokens[context.offset:] under command.

    the returned action is not run. actions declared with a context parameter
    come back bound to the final context of their node.
    """
    context = context._replace(command=command)
    context = context._replace(offset=match_options(context, command.options))
    commands = command.commands

    if context.offset < len(context.tokens):
        token = context.tokens[context.offset]
        if commands:
            try:
                child = commands[token]
            except KeyError:
                raise UnexpectedValueError("command not supported") from None
            logger.debug("descending into command %r", token)
            return dispatch(child, context._replace(
                offset=context.offset + 1,
                name=token,
                path=context.path + (token,),
            ))
        if command.arguments:
            bind_arguments(context, command.arguments)
            return _resolve(command, context)
        raise UnexpectedValueError("unexpected arguments given")

    if commands and not command.trailing:
        raise InvalidNumberOfArgsError("not enough arguments")
    # the trailing argument may bind zero tokens; the ones before it may not
    bind_arguments(context, command.arguments)
    return _resolve(command, context)


__all__ = ("dispatch",)
