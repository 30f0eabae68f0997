"""
Gifddo client exceptions.

Every error the client raises derives from GifddoError. A signature
mismatch on an inbound response is not an error: verify() returns False.
"""

from typing import Optional


class GifddoError(Exception):
    """Base class for all Gifddo client errors."""


class MissingParameterError(GifddoError, ValueError):
    """Raised when a required protocol field is absent."""

    def __init__(self, parameter: str):
        self.parameter = parameter
        super().__init__(f"Undefined parameter: {parameter}")


class SigningError(GifddoError):
    """Raised when the private key or signing primitive rejects the input."""


class KeyMaterialError(GifddoError):
    """Raised when a gateway public key cannot be resolved."""


class TransportError(GifddoError):
    """Raised when the HTTP submission fails at the network or TLS layer."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(f"Error making a request to the Gifddo API: {message}")


class ProtocolError(GifddoError):
    """Raised when the gateway answers without the expected redirect."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)
