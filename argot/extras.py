"""
Optional helpers built on top of the callback protocol.

MultivalueCollector
- An option callback for list-like options: "--id=1,2,3 --id 4" collects
  [1, 2, 3, 4]. Each occurrence is split on the separator and every piece is
  converted; an occurrence with a bad piece adds nothing and fails the parse
  with OptionParsingError.

    >>> ids = MultivalueCollector(SlotKind.UINT32)
    >>> spec = Option("id", descr="Identifiers", callback=ids)
"""
from .faults import OptionParsingError, ParserError, ValueExpectedError
from .slots import SlotKind
from .conversions import parse_text
from .utils import mirror


class MultivalueCollector:
    """
    Accumulate converted, separator-split option values across occurrences.

    Parameters
    - convert: SlotKind or callable text → value (default: text as-is).
      Converters may raise OptionParsingError or ValueError for bad input.
    - separator: non-empty string to split values on (default ",").
    """

    values = mirror("values")

    def __init__(self, convert=parse_text, /, separator=","):
        if isinstance(convert, SlotKind):
            convert = convert.convert
        if not callable(convert):
            raise TypeError("multivalue converter must be callable or a slot kind")
        if not isinstance(separator, str):
            raise TypeError("multivalue separator must be a string")
        if not separator:
            raise ValueError("multivalue separator cannot be empty")
        self._convert = convert
        self._separator = separator
        self._values = []

    @property
    def has_values(self):
        return bool(self._values)

    def parse(self, text, /):
        """convert every piece of text; nothing is stored."""
        parsed = []
        for piece in text.split(self._separator):
            try:
                parsed.append(self._convert(piece))
            except ParserError:
                raise
            except (TypeError, ValueError, OverflowError) as error:
                raise OptionParsingError(piece) from error
        return parsed

    def clear(self):
        self._values.clear()

    def __call__(self, value, context, /):
        if value is None:
            return ValueExpectedError(context.name)
        self._values.extend(self.parse(value))

    def __len__(self):
        return len(self._values)

    def __repr__(self):
        return f"MultivalueCollector({self._values!r})"


__all__ = ("MultivalueCollector",)
