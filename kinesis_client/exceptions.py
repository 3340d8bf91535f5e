"""Exceptions raised by the Kinesis client."""

from typing import Optional


class KinesisError(Exception):
    """Base exception for Kinesis client errors."""
    pass


class ConfigurationError(KinesisError):
    """Missing or empty credential/config field. Not recoverable at runtime."""
    pass


class KinesisTransportError(KinesisError):
    """DNS, TLS, connect or timeout failure (status code 0)."""

    def __init__(self, message: str, action: Optional[str] = None):
        super().__init__(message)
        self.action = action


class KinesisAPIError(KinesisError):
    """Non-200 response from the Kinesis API."""

    def __init__(
        self,
        message: str,
        status_code: int,
        error_type: Optional[str] = None,
        body: str = "",
        action: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.error_type = error_type
        self.body = body
        self.action = action
