"""Exception types raised by cashio.

Parse and validation errors are raised while turning user input into domain
values. Store errors come from the persistence layer and propagate to the
command layer unmodified.
"""


class CashioError(Exception):
    """Base class for all cashio errors."""


class ParseError(CashioError, ValueError):
    """Raised when date or amount text cannot be parsed."""

    def __init__(self, message: str, text: str) -> None:
        super().__init__(f"{message}: {text!r}")
        self.text = text


class AmountOverflowError(CashioError, OverflowError):
    """Raised when an amount does not fit the stored integer range."""

    def __init__(self, text: str) -> None:
        super().__init__(f"Amount out of range: {text!r}")
        self.text = text


class ValidationError(CashioError, ValueError):
    """Raised when a value is well-formed but structurally invalid."""


class NotFoundError(CashioError, LookupError):
    """Raised when no record exists for an identity."""

    def __init__(self, record_id: int) -> None:
        super().__init__(f"Record {record_id} not found")
        self.record_id = record_id


class NotInitializedError(CashioError, RuntimeError):
    """Raised when the store is used before its schema is set up."""


class StorageError(CashioError, OSError):
    """Raised when the database backend fails."""


class ConfigError(CashioError):
    """Raised when the config file cannot be read."""
