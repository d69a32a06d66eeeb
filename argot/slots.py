"""
Argot destinations.

A Slot is a caller-owned, typed holder that an Option or Argument writes its
converted value into. The parser never owns slots; it only writes through them
during a parse. SlotKind is the closed set of destination types and knows the
converter for each.

Example
    >>> count = Slot(SlotKind.UINT32, default=3)
    >>> count.assign("0x10")
    16
    >>> count.value
    16
"""
from enum import Enum

from . import conversions
from .utils import mirror


class SlotKind(Enum):
    """
    destination types understood by slot-bound specs.

    python types are accepted as aliases: SlotKind(bool) is BOOLEAN,
    SlotKind(int) is INT64, SlotKind(float) is FLOAT64, SlotKind(str) is TEXT.
    """
    BOOLEAN = "boolean"
    INT8    = "int8"
    INT16   = "int16"
    INT32   = "int32"
    INT64   = "int64"
    UINT8   = "uint8"
    UINT16  = "uint16"
    UINT32  = "uint32"
    UINT64  = "uint64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    TEXT    = "text"

    @classmethod
    def _missing_(cls, value):
        return {bool: cls.BOOLEAN, int: cls.INT64, float: cls.FLOAT64, str: cls.TEXT}.get(value)

    @property
    def convert(self):
        """the text → value converter for this kind."""
        return getattr(conversions, "parse_" + self.value)


class Slot:
    """
    Caller-owned typed destination.

    Attributes
    - kind: SlotKind of the destination (read-only).
    - default: value the slot starts with and returns to on reset() (read-only).
    - value: current value; written by assign() and free for the caller to read.
    - assigned: whether assign() has succeeded since construction or reset().

    Boolean slots accept a missing value (None) as True, which is how a bare
    `--verbose` flag binds.
    """

    kind = mirror("kind")
    default = mirror("default")

    def __init__(self, kind, /, default=None):
        try:
            self._kind = SlotKind(kind)
        except ValueError:
            raise TypeError(f"unsupported slot kind {kind!r}") from None
        self._default = default
        self.value = default
        self._assigned = False

    @property
    def assigned(self):
        return self._assigned

    def assign(self, text, /):
        """
        convert text and store the result; raise OptionParsingError on bad input.
        """
        if text is None and self._kind is SlotKind.BOOLEAN:
            value = True
        else:
            value = self._kind.convert(text)
        self.value = value
        self._assigned = True
        return value

    def reset(self):
        self.value = self._default
        self._assigned = False

    def __repr__(self):
        return f"Slot({self._kind.value}, value={self.value!r})"


__all__ = (
    "SlotKind",
    "Slot",
)

