"""
Unified calendar service: route a request to the right provider adapter and
shape the response envelope.

Provides a single interface for calendar operations across providers. The
adapters are built once at startup (see `build_providers`) and passed in.
"""

from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from calendar_gateway.config import OAuthClientConfig
from calendar_gateway.utils.error_handler import (
    AppError,
    AuthenticationError,
    InternalError,
    UnsupportedProviderError,
    UpstreamError,
)
from calendar_gateway.utils.logging_utils import get_logger
from calendar_gateway.utils.validators import EventValidator
from .base_provider import CalendarProvider
from .google_provider import GoogleCalendarProvider
from .models import EventRequest, EventResult, Unauthorized, Unknown, UpstreamRejected
from .outlook_provider import OutlookCalendarProvider

logger = get_logger(__name__)

SUCCESS_MESSAGES = {
    "google": "Successfully authenticated with Google Calendar",
    "microsoft": "Successfully authenticated with Microsoft Calendar",
}


def build_providers(
    google_config: OAuthClientConfig,
    microsoft_config: OAuthClientConfig,
) -> Dict[str, CalendarProvider]:
    """Construct one adapter per provider, keyed by provider tag"""
    providers = [
        GoogleCalendarProvider(google_config),
        OutlookCalendarProvider(microsoft_config),
    ]
    return {provider.provider_name: provider for provider in providers}


def get_provider(providers: Mapping[str, CalendarProvider], tag: str) -> CalendarProvider:
    provider = providers.get(tag)
    if provider is None:
        raise UnsupportedProviderError(tag)
    return provider


def build_authorization_url(provider: CalendarProvider) -> str:
    try:
        return provider.build_auth_url()
    except Exception as e:
        logger.error(f"Failed to build {provider.provider_name} auth URL: {e}", exc_info=True)
        raise InternalError("Failed to generate auth URL")


def authenticate(provider: CalendarProvider, code: Any) -> Dict[str, Any]:
    """
    Exchange the callback code and build the callback response body.

    Returns
    -------
    dict
        `message`, plus whatever the provider's credential store hands back
        to the caller (the Microsoft token and its expiry)
    """
    try:
        credential = provider.exchange_code(code)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"{provider.provider_name} code exchange failed: {e}", exc_info=True)
        raise InternalError("Authentication failed")

    body = {"message": SUCCESS_MESSAGES.get(provider.provider_name, "Successfully authenticated")}
    body.update(provider.credential_store.callback_payload(credential))
    return body


def create_calendar_event(
    provider: CalendarProvider,
    data: Dict[str, Any],
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Validate the request, create the event and return the 201 body.

    The credential is resolved before validation, so a Microsoft request
    without `accessToken` is rejected with 401 ahead of any field errors.

    Raises
    ------
    AuthenticationError, ValidationError, UpstreamError, InternalError
    """
    credential = provider.credential_store.resolve(data)

    EventValidator.validate_event_request(data, now=now)
    event = EventRequest.from_payload(data)

    outcome = provider.create_event(event, credential)

    if isinstance(outcome, EventResult):
        body = {"message": "Event created successfully"}
        body.update(outcome.to_dict())
        return body
    if isinstance(outcome, Unauthorized):
        raise AuthenticationError(outcome.message, status_code=401)
    if isinstance(outcome, UpstreamRejected):
        raise UpstreamError(outcome.message, status_code=outcome.status)
    if isinstance(outcome, Unknown):
        logger.error(f"{provider.provider_name} event creation failed: {outcome.detail}")
    raise InternalError("Failed to create event")
