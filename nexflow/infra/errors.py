"""Error taxonomy for the relay and conversion of library errors."""

from typing import Optional
from enum import Enum

import httpx


class ErrorCategory(str, Enum):
    """Categories of errors for logging and HTTP mapping."""
    CONFIGURATION = "configuration"  # Missing credentials, bad settings
    VALIDATION = "validation"  # Caller sent an unusable request
    NOT_READY = "not_ready"  # Tool catalog unavailable
    UPSTREAM = "upstream"  # Language model or tool provider failed
    CATALOG_LOAD = "catalog_load"  # Startup catalog fetch failed


class RelayError(Exception):
    """Base exception for relay errors."""
    status_code: int = 500

    def __init__(self, message: str, category: ErrorCategory):
        self.message = message
        self.category = category
        super().__init__(message)


class ConfigurationError(RelayError):
    """Required configuration is missing or invalid. Fatal at startup."""
    def __init__(self, message: str):
        super().__init__(message, ErrorCategory.CONFIGURATION)


class ValidationError(RelayError):
    """Request validation errors."""
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message, ErrorCategory.VALIDATION)


class CatalogNotReady(RelayError):
    """The tool catalog has not been loaded."""
    status_code = 503

    def __init__(self, message: str = "Tool catalog is not available"):
        super().__init__(message, ErrorCategory.NOT_READY)


class UpstreamError(RelayError):
    """A language-model or tool-provider call failed."""
    def __init__(self, message: str, provider: str, status_code: Optional[int] = None):
        self.provider = provider
        self.upstream_status = status_code
        super().__init__(message, ErrorCategory.UPSTREAM)


class MalformedToolSelection(UpstreamError):
    """The language model returned a tool selection that cannot be used."""
    def __init__(self, message: str):
        super().__init__(message, provider="openai")


class CatalogLoadError(RelayError):
    """Fetching the tool catalog at startup failed. Logged, never returned to callers."""
    def __init__(self, message: str):
        super().__init__(message, ErrorCategory.CATALOG_LOAD)


def wrap_http_error(error: Exception, provider: str) -> UpstreamError:
    """
    Wrap httpx errors into UpstreamError, keeping the original message.

    Args:
        error: Original exception
        provider: Upstream name ('veyrax')

    Returns:
        UpstreamError carrying the upstream status code when there is one
    """
    status_code = None
    if isinstance(error, httpx.HTTPStatusError):
        status_code = error.response.status_code
    return UpstreamError(str(error), provider=provider, status_code=status_code)


def wrap_llm_error(error: Exception, provider: str) -> UpstreamError:
    """
    Wrap LLM SDK errors into UpstreamError.

    Args:
        error: Original exception
        provider: LLM provider name ('openai')

    Returns:
        UpstreamError with the provider's status code if the SDK exposed one
    """
    if isinstance(error, UpstreamError):
        return error
    status_code = getattr(error, "status_code", None)
    return UpstreamError(str(error), provider=provider, status_code=status_code)
