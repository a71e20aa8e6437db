"""Exception types raised by the ordering toolkit."""

from __future__ import annotations


class InitializationError(RuntimeError):
    """The menu or store configuration could not be loaded."""


class ValidationError(ValueError):
    """User input failed validation.

    ``fields`` maps a form field key (``"cart"``, ``"time"``, ``"address"``)
    to the message shown next to it.
    """

    def __init__(self, fields: dict[str, str]) -> None:
        self.fields = dict(fields)
        super().__init__("; ".join(self.fields.values()))


class OrderLogError(RuntimeError):
    """Reading the remote order log failed."""


class MalformedRecordError(OrderLogError, ValueError):
    """A row from the order log does not match the expected columns."""
