"""Custom exceptions for backend sources."""


class AdapterError(Exception):
    """Base exception for all source errors.

    Catching this is enough to isolate one source's failure: the aggregator
    degrades it to an empty contribution and the mutation coordinator turns
    it into a failed result for that record.
    """


class AdapterHTTPError(AdapterError):
    """Request failed with a non-2xx status or never reached the backend.

    ``status_code`` is 0 for transport failures (DNS, refused connection).
    """

    def __init__(self, message: str, status_code: int, url: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class AdapterTimeoutError(AdapterError):
    """Request did not complete within the configured timeout."""

    def __init__(self, message: str, url: str) -> None:
        super().__init__(message)
        self.url = url


class AdapterResponseError(AdapterError):
    """Response arrived but could not be decoded or had an unexpected shape."""


class AdapterConfigurationError(AdapterError):
    """Source was given invalid settings (bad URL, timeout out of range, ...)."""


class UnknownSourceKindError(AdapterConfigurationError):
    """No source is registered for a record's ownership tag."""
