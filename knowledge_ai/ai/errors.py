"""
Error taxonomy for the AI invocation layer.
Configuration and provider errors propagate unmodified to the caller.
"""
from enum import Enum
from typing import Optional


class ErrorCategory(str, Enum):
    """Failure category inferred from the provider's HTTP status (where exposed)."""
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    UNKNOWN = "unknown"

    @classmethod
    def from_status(cls, status_code: Optional[int]) -> "ErrorCategory":
        if status_code in (401, 403):
            return cls.UNAUTHORIZED
        if status_code == 404:
            return cls.NOT_FOUND
        return cls.UNKNOWN


class AIServiceError(Exception):
    """Base class for every error raised by this layer."""

    def __init__(self, message: str, provider: str = "", model: str = ""):
        self.provider = provider
        self.model = model
        super().__init__(message)


class ConfigurationError(AIServiceError):
    """No usable credential or provider could be resolved. Raised before any network I/O."""


class ProviderError(AIServiceError):
    """The provider call failed (transport error, non-2xx status, SDK exception)."""

    def __init__(
        self,
        message: str,
        provider: str = "",
        model: str = "",
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        status_code: Optional[int] = None,
    ):
        self.category = category
        self.status_code = status_code
        super().__init__(message, provider=provider, model=model)


class MalformedResponseError(AIServiceError):
    """The model returned JSON that lacks the required summary/keyPoints shape."""
