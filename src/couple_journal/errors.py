"""
Error taxonomy for the journal core.

Providers raise ProviderError; the record store converts it into one of the
store-level errors below so no backend exception reaches the caller.
"""


class JournalError(Exception):
    """Base class for every journal core failure."""


class InvalidRecord(JournalError):
    """A draft has neither text nor image."""


class StoreUnavailable(JournalError):
    """Loading the record set from the provider failed."""


class PersistError(JournalError):
    """Creating a record or clearing all records failed at the provider."""


class StoreTimeout(StoreUnavailable, PersistError):
    """A bounded provider call did not finish in time."""

    def __init__(self, operation: str, timeout_seconds: float) -> None:
        super().__init__(f"{operation} timed out after {timeout_seconds}s")
        self.operation = operation
        self.timeout_seconds = timeout_seconds


class SubscriptionError(JournalError):
    """The change notifier could not attach to the change feed."""


class ProviderError(JournalError):
    """A persistence provider failed; converted at the store boundary."""


class ProviderTimeout(ProviderError):
    """The backend itself cancelled a call that ran past its time bound."""
