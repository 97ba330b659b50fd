"""Errors raised by the Incapsula clients and resource manager."""


class IncapsulaError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(IncapsulaError):
    """Raised when the client configuration is incomplete."""


class TransportError(IncapsulaError):
    """Raised when an HTTP call could not be completed."""


class DecodeError(IncapsulaError):
    """Raised when a response body is not the JSON we expect."""

    def __init__(self, message: str, body: str = ""):
        super().__init__(message)
        self.body = body


class RemoteRejectionError(IncapsulaError):
    """Raised when the service answers with a non-zero result code or bad status."""

    def __init__(self, message: str, body: str = "", status_code: int | None = None):
        super().__init__(message)
        self.body = body
        self.status_code = status_code


class SiteStatusError(RemoteRejectionError):
    """
    Rejection of a site status call.

    The decoded response is still attached so callers can look at fields
    such as `exception_id`.
    """

    def __init__(self, message: str, body: str = "", response=None):
        super().__init__(message, body=body)
        self.response = response


class PolicyConflictError(IncapsulaError):
    """Raised when more than one WAF policy targets the same asset."""

    def __init__(self, asset_id: str):
        super().__init__(f"site {asset_id} has more than one WAF Policy assigned")
        self.asset_id = asset_id


class InvalidIdentifierError(IncapsulaError):
    """Raised when a synthetic association identifier cannot be split."""


class UnsupportedOperationError(IncapsulaError):
    """Raised for lifecycle operations a resource does not implement."""
