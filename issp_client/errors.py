"""Exception hierarchy for the ISSP client."""

from typing import Optional


class IsspClientError(Exception):
    """Base class for all client errors."""


class ApiError(IsspClientError):
    """The backend answered with a non-success HTTP status."""

    def __init__(self, status: int, message: str = "", url: str = ""):
        self.status = status
        self.message = message or f"HTTP {status}"
        self.url = url
        super().__init__(f"{self.message} (HTTP {status})" if message else self.message)


class AuthenticationError(ApiError):
    """Missing, expired or rejected session token."""

    def __init__(self, status: int = 401, message: str = "Authentication required", url: str = ""):
        super().__init__(status, message, url)


class RecordError(IsspClientError):
    """A payload from the backend is not a JSON object."""

    def __init__(self, kind: str, payload: Optional[object] = None):
        self.kind = kind
        self.payload = payload
        super().__init__(f"Expected a JSON object for {kind}, got {type(payload).__name__}")


class ValidationError(IsspClientError):
    """Input rejected locally before it reaches the backend."""


class NetworkError(IsspClientError):
    """The backend could not be reached after all retries."""
