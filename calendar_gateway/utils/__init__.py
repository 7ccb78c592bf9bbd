"""
Utility modules for the calendar gateway.

This package contains:
- error_handler: Centralized error handling and custom exceptions
- validators: Event request and OAuth callback validation
- logging_utils: Logging configuration (import it directly)
"""

from .error_handler import (
    AppError,
    ConfigurationError,
    ValidationError,
    AuthenticationError,
    UpstreamError,
    UnsupportedProviderError,
    InternalError,
    handle_errors
)

from .validators import EventValidator, validate_authorization_code

__all__ = [
    'AppError',
    'ConfigurationError',
    'ValidationError',
    'AuthenticationError',
    'UpstreamError',
    'UnsupportedProviderError',
    'InternalError',
    'handle_errors',
    'EventValidator',
    'validate_authorization_code'
]
