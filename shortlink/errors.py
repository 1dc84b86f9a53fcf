"""Errors raised by the short link service to its callers."""

from .database.models import GatewayFailure


class ShortLinkError(Exception):
    """Base class for service errors."""


class GatewayError(ShortLinkError):
    """The datastore failed; the request cannot be completed."""

    def __init__(self, failure: GatewayFailure):
        super().__init__(str(failure))
        self.failure = failure


class RetriesExhaustedError(ShortLinkError):
    """Every attempt in the retry budget hit an identifier collision.

    The identifier space is saturated for the configured length; widen the
    length or the retry budget.
    """

    def __init__(self, attempts: int, length: int):
        super().__init__(
            f"Maximum retries reached without successful insertion "
            f"({attempts} attempts, identifier length {length})"
        )
        self.attempts = attempts
        self.length = length


class ShortLinkNotFoundError(ShortLinkError):
    """No short link exists for the identifier."""

    def __init__(self, short_id: str):
        super().__init__(f"Short link '{short_id}' not found")
        self.short_id = short_id
