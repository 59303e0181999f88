"""
Failure taxonomy for the advice service and the inference proxy.
"""

from typing import Optional


class AdviceError(Exception):
    """Base class for advice pipeline errors."""


class TransportError(AdviceError):
    """Network or HTTP failure talking to the inference provider."""

    def __init__(self, message: str, model: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.model = model
        self.status_code = status_code


class ExtractionInsufficient(AdviceError):
    """A response was received but no usable text could be extracted."""


class NotConfigured(AdviceError):
    """No transport is available (AI disabled, or no proxy/credential)."""


ConfigurationAbsent = NotConfigured


class InputValidationError(AdviceError):
    """Malformed request to the proxy."""

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.status_code = status_code
