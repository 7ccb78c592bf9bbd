"""
Multi-provider calendar service package.

Supports Google Calendar and Outlook Calendar with a unified interface.
"""

from .unified_service import (
    authenticate,
    build_authorization_url,
    build_providers,
    create_calendar_event,
    get_provider,
)

__all__ = [
    "authenticate",
    "build_authorization_url",
    "build_providers",
    "create_calendar_event",
    "get_provider",
]
