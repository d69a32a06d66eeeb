"""
Option matcher: consume a run of option tokens against one command's options.

Scanning starts at context.offset and stops at the first token that does not
start with the prefix. For each option token:

1. split it into (name, inline value);
2. without an inline value, peek at the next token: a null one fails with
   InvalidInput, otherwise a non-option token becomes the tentative value;
3. deliver the value to every option carrying that alias. REQUIRED options
   with no value fail with ValueExpected; NOT_REQUIRED options get None.
   The peeked token is consumed at most once, and only by an option whose
   policy takes a value;
4. an alias nobody declares fails with UnexpectedValue.
"""
from .faults import InvalidInputError, UnexpectedValueError, ValueExpectedError
from .logger import logger
from .specs import ValuePolicy
from .tokenizer import is_option, split_option


def match_options(context, options, /):
    """
    match option tokens from context.offset on; return the offset of the
    first non-option token.

    raises ParserError on the first failure, including any fault raised or
    returned by an option callback (the NO_ERROR stop signal included).
    """
    parser = context.parser
    tokens = context.tokens
    index = context.offset

    while index < len(tokens):
        if (token := tokens[index]) is None:
            raise InvalidInputError("null string as input")
        if not is_option(token, parser.prefix):
            break

        name, value = split_option(token, parser.prefix, parser.separator)
        if not name:
            raise InvalidInputError(token)

        if value is None and index + 1 < len(tokens) and tokens[index + 1] is None:
            raise InvalidInputError("null string as input")

        lookahead = (
            value is None and
            index + 1 < len(tokens) and
            not is_option(tokens[index + 1], parser.prefix)
        )
        if lookahead:
            value = tokens[index + 1]

        current = context._replace(offset=index, name=name)
        matched = 0
        consumed = False
        for option in options:
            if not option.matches(name):
                continue
            if value is None and option.policy is ValuePolicy.REQUIRED:
                raise ValueExpectedError(name)
            if lookahead and not consumed and option.policy is not ValuePolicy.NOT_REQUIRED:
                consumed = True
                index += 1
            logger.debug("matched option %r at %d", name, current.offset)
            option(None if option.policy is ValuePolicy.NOT_REQUIRED else value, current)
            matched += 1

        if not matched:
            raise UnexpectedValueError(name)
        index += 1

    return index


__all__ = ("match_options",)
