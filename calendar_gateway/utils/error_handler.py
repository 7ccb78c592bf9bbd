import logging
import traceback
from functools import wraps
from flask import jsonify

logger = logging.getLogger(__name__)

class AppError(Exception):
    """Base application error class"""
    def __init__(self, message: str, error_code: str = "INTERNAL_ERROR", status_code: int = 500):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        super().__init__(self.message)

class ConfigurationError(AppError):
    """Missing or invalid startup configuration. Fatal, never per-request."""
    def __init__(self, message: str = "Invalid configuration"):
        super().__init__(message, "CONFIGURATION_ERROR", 500)

class ValidationError(AppError):
    """Input validation errors"""
    def __init__(self, message: str = "Invalid input"):
        super().__init__(message, "VALIDATION_ERROR", 400)

class AuthenticationError(AppError):
    """
    Authentication-related errors.

    400 for a bad or missing authorization code during the exchange,
    401 for a missing or expired access token during event creation.
    """
    def __init__(self, message: str = "Authentication failed", status_code: int = 401):
        super().__init__(message, "AUTH_ERROR", status_code)

class UpstreamError(AppError):
    """A calendar provider rejected the call with a status we pass through"""
    def __init__(self, message: str = "Calendar provider request failed", status_code: int = 502):
        super().__init__(message, "UPSTREAM_ERROR", status_code)

class UnsupportedProviderError(AppError):
    """The URL names a provider this gateway does not serve"""
    def __init__(self, provider: str):
        super().__init__(f"Unsupported calendar provider: {provider}", "NOT_FOUND", 404)

class InternalError(AppError):
    """Unexpected failure; the detail stays in the server logs"""
    def __init__(self, message: str = "Internal server error"):
        super().__init__(message, "INTERNAL_ERROR", 500)

def handle_errors(fallback_message: str = "Internal server error"):
    """Decorator for consistent error handling in API endpoints"""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except AppError as e:
                logger.warning(f"Application error: {e.error_code} - {e.message}")
                return jsonify({"error": e.message}), e.status_code
            except Exception as e:
                logger.error(f"Unexpected error in {f.__name__}: {str(e)}")
                logger.error(traceback.format_exc())
                return jsonify({"error": fallback_message}), 500
        return decorated_function
    return decorator

