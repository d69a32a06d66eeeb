"""
Option token syntax.

A token is an option when it starts with the prefix character. One prefix
character is stripped, or two when doubled ("-v", "--verbose"); the rest is
split at the first separator into a name and an inline value
("--name=value"). A token made only of prefix characters yields an empty
name, which the option matcher rejects.
"""


def is_option(token, prefix="-", /):
    return token.startswith(prefix)


def split_option(token, prefix="-", separator="=", /):
    """
    split an option token into (name, value); value is None when absent.

        >>> split_option("--name=value")
        ('name', 'value')
        >>> split_option("-v")
        ('v', None)
        >>> split_option("--x=")
        ('x', '')
    """
    body = token[2:] if token[1:].startswith(prefix) else token[1:]
    name, found, value = body.partition(separator)
    return name, value if found else None


__all__ = (
    "is_option",
    "split_option",
)
