"""
Error taxonomy shared by every gateway adapter.
"""
from typing import Any, Dict, Optional


class PaymentError(Exception):
    """Base class for all paygate errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class FormatError(PaymentError, ValueError):
    """Malformed hex or JSON payload."""


class AuthenticationError(PaymentError):
    """Missing or invalid callback signature."""


class ConfigurationError(PaymentError, ValueError):
    """Missing credentials or unsupported configuration."""


class ProviderError(PaymentError):
    """
    Non-success response from a remote provider.

    Carries the provider's message verbatim when one was returned.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response: Optional[Dict[str, Any]] = None,
    ):
        self.status_code = status_code
        self.response = response
        super().__init__(message)
