"""Exception types shared across the categorizer."""

from typing import Optional


class CategorizerError(Exception):
    """Base class for all categorizer errors."""


class ConfigurationError(CategorizerError):
    """Raised when required settings (credentials, model) are missing or invalid.

    Always raised before any network activity takes place.
    """


class TransportError(CategorizerError):
    """A non-success response (or transport failure) from the ledger or a model backend.

    Attributes:
        status: HTTP status code, or None when no response was received.
        body: Response body text when available.
    """

    def __init__(
        self, message: str, status: Optional[int] = None, body: Optional[str] = None
    ):
        super().__init__(message)
        self.status = status
        self.body = body

    def __str__(self) -> str:
        message = super().__str__()
        if self.status is not None:
            message = f"{message} (HTTP {self.status})"
        if self.body:
            message = f"{message}: {self.body}"
        return message


class ParseError(CategorizerError):
    """Model output could not be decoded as structured data."""


class OperationCancelled(CategorizerError):
    """Cooperative cancellation was observed at a checkpoint."""

    def __init__(self, message: str = "Operation cancelled"):
        super().__init__(message)
