"""
Argot value conversions.

Pure text → typed value converters used by slot-bound options and arguments.
Every converter either returns a value or raises OptionParsingError tagged
with the offending text; malformed input never escapes as ValueError,
OverflowError or similar.

Grammar
- booleans: "1"/"true" and "0"/"false", case-insensitive.
- integers: C literal forms with an optional sign and surrounding blanks:
  "0x1F" (hexadecimal), "017" (octal), "42" (decimal). The whole token must
  be consumed, and the value must fit the destination width.
- floats: decimal or scientific notation, "inf"/"infinity"/"nan"
  (case-insensitive), independent of the process locale.
"""
import math
import re
import struct

from .faults import OptionParsingError

_INTEGER = re.compile(r"""
    \s*
    (?P<sign>[+-]?)
    (?:
        0[xX](?P<hexadecimal>[0-9a-fA-F]+)
      | (?P<octal>0[0-7]*)
      | (?P<decimal>[1-9][0-9]*)
    )
    \s*
""", re.VERBOSE | re.ASCII)

_FLOAT = re.compile(r"""
    \s*
    [+-]?
    (?:
        (?P<finite>(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)
      | inf(?:inity)?
      | nan
    )
    \s*
""", re.VERBOSE | re.ASCII | re.IGNORECASE)


def _require_text(text):
    if not isinstance(text, str):
        raise TypeError(f"conversion input must be a string, not {type(text).__name__}")
    return text


def parse_boolean(text, /):
    if _require_text(text) == "1" or text.lower() == "true":
        return True
    if text == "0" or text.lower() == "false":
        return False
    raise OptionParsingError(text)


def _parse_integer(text, low, high, /):
    if not (match := _INTEGER.fullmatch(_require_text(text))):
        raise OptionParsingError(text)

    if match["hexadecimal"] is not None:
        magnitude = int(match["hexadecimal"], 16)
    elif match["octal"] is not None:
        magnitude = int(match["octal"], 8)
    else:
        magnitude = int(match["decimal"])

    # unsigned destinations reject a minus sign outright, even for "-0"
    if match["sign"] == "-" and low == 0:
        raise OptionParsingError(text)

    value = -magnitude if match["sign"] == "-" else magnitude
    if not low <= value <= high:
        raise OptionParsingError(text)
    return value


def parse_int8(text, /):
    return _parse_integer(text, -2 ** 7, 2 ** 7 - 1)


def parse_int16(text, /):
    return _parse_integer(text, -2 ** 15, 2 ** 15 - 1)


def parse_int32(text, /):
    return _parse_integer(text, -2 ** 31, 2 ** 31 - 1)


def parse_int64(text, /):
    return _parse_integer(text, -2 ** 63, 2 ** 63 - 1)


def parse_uint8(text, /):
    return _parse_integer(text, 0, 2 ** 8 - 1)


def parse_uint16(text, /):
    return _parse_integer(text, 0, 2 ** 16 - 1)


def parse_uint32(text, /):
    return _parse_integer(text, 0, 2 ** 32 - 1)


def parse_uint64(text, /):
    return _parse_integer(text, 0, 2 ** 64 - 1)


def parse_float64(text, /):
    if not (match := _FLOAT.fullmatch(_require_text(text))):
        raise OptionParsingError(text)
    value = float(text.strip())
    # a finite literal that rounds to infinity is out of range
    if match["finite"] is not None and math.isinf(value):
        raise OptionParsingError(text)
    return value


def parse_float32(text, /):
    value = parse_float64(text)
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        raise OptionParsingError(text) from None


def parse_text(text, /):
    return _require_text(text)


__all__ = (
    "parse_boolean",
    "parse_int8",
    "parse_int16",
    "parse_int32",
    "parse_int64",
    "parse_uint8",
    "parse_uint16",
    "parse_uint32",
    "parse_uint64",
    "parse_float32",
    "parse_float64",
    "parse_text",
)
