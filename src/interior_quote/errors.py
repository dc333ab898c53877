"""Exception types raised by the quote builder collaborators."""


class QuoteBuilderError(Exception):
    """Base class for all quote builder errors."""


class RateConfigurationError(QuoteBuilderError):
    """A rate card failed validation."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("Invalid rate configuration: " + "; ".join(self.errors))


class InvalidEntryError(QuoteBuilderError):
    """A dimension, quantity or other form field could not be accepted."""

    def __init__(self, field: str, value, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field} {value!r}: {reason}")


class NotFoundError(QuoteBuilderError):
    """A room, line item, template or snapshot id did not resolve."""
