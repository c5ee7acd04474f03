"""Exceptions raised by the record codec.

Everything derives from ValueError so callers that already guard parser
calls with ``except ValueError`` keep working.
"""


class WonderRecordError(ValueError):
    """Base class for structural record errors."""


class UnrecognizedLengthError(WonderRecordError):
    """Buffer length matches none of the four known record shapes."""

    def __init__(self, length: int) -> None:
        super().__init__(f"Unrecognized record length {length} (0x{length:X})")
        self.length = length


class OutOfRangeAccessError(WonderRecordError, IndexError):
    """Raw read or write outside the record buffer."""


class CardOnlyError(WonderRecordError):
    """Wonder Card field (icon, legacy text) requested from a news record."""


class ScriptRegionError(CardOnlyError):
    """Script area operation attempted on a record without a script area."""
