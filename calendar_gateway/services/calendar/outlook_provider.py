"""
Outlook Calendar provider implementation.

Uses the Microsoft identity platform (v2.0 endpoints) through
requests-oauthlib for the authorization-code flow and Microsoft Graph for
event creation. No credential is kept server-side: the access token goes
back to the caller, who sends it with every event-creation request.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

import requests
from oauthlib.oauth2.rfc6749.errors import MissingTokenError, OAuth2Error
from requests_oauthlib import OAuth2Session

from calendar_gateway.config import Config, OAuthClientConfig
from calendar_gateway.utils.error_handler import AuthenticationError
from calendar_gateway.utils.logging_utils import get_logger
from calendar_gateway.utils.validators import validate_authorization_code
from .base_provider import CalendarProvider
from .credential_store import CredentialStore, StatelessCallerSuppliedStore
from .models import (
    CreateEventOutcome,
    EventRequest,
    EventResult,
    TokenCredential,
    Unauthorized,
    Unknown,
    UpstreamRejected,
)
from .normalizer import MICROSOFT, normalize_event

logger = get_logger(__name__)

MISSING_TOKEN_MESSAGE = "Missing access token. Please authenticate via /microsoft/auth first"
GENERIC_UPSTREAM_MESSAGE = "Failed to create event in Microsoft Calendar"


class OutlookCalendarProvider(CalendarProvider):
    """Outlook Calendar provider implementation using Microsoft Graph API"""

    AUTHORITY = "https://login.microsoftonline.com"
    GRAPH_API_ENDPOINT = "https://graph.microsoft.com/v1.0"

    def __init__(self, config: OAuthClientConfig, credential_store: Optional[CredentialStore] = None):
        super().__init__(config, credential_store or StatelessCallerSuppliedStore(MISSING_TOKEN_MESSAGE))

    def _get_provider_name(self) -> str:
        return MICROSOFT

    @property
    def unauthorized_message(self) -> str:
        return "Microsoft access token is invalid or expired. Please re-authenticate via /microsoft/auth"

    @property
    def authorize_url(self) -> str:
        return f"{self.AUTHORITY}/{self.config.tenant_id or 'common'}/oauth2/v2.0/authorize"

    @property
    def token_url(self) -> str:
        return f"{self.AUTHORITY}/{self.config.tenant_id or 'common'}/oauth2/v2.0/token"

    def _session(self) -> OAuth2Session:
        return OAuth2Session(
            self.config.client_id,
            redirect_uri=self.config.redirect_uri,
            scope=Config.MICROSOFT_SCOPES,
        )

    def build_auth_url(self) -> str:
        auth_url, _state = self._session().authorization_url(
            self.authorize_url,
            response_mode="query",
        )
        return auth_url

    def exchange_code(self, code: Any) -> TokenCredential:
        code = validate_authorization_code(code)

        try:
            token = self._session().fetch_token(
                self.token_url,
                code=code,
                client_secret=self.config.client_secret,
                include_client_id=True,
            )
        except MissingTokenError:
            raise AuthenticationError("Invalid credentials received from Microsoft", status_code=400)
        except OAuth2Error as e:
            logger.warning(f"Microsoft rejected the authorization code: {e.error}")
            raise AuthenticationError("Invalid or expired authorization code", status_code=400)

        access_token = token.get("access_token")
        if not access_token:
            raise AuthenticationError("Invalid credentials received from Microsoft", status_code=400)

        expires_at = token.get("expires_at")
        expires_on = datetime.fromtimestamp(expires_at, tz=timezone.utc) if expires_at else None

        credential = TokenCredential(
            provider=self.provider_name,
            access_token=access_token,
            refresh_token=token.get("refresh_token"),
            expires_on=expires_on,
        )
        self.credential_store.save(credential)
        return credential

    @staticmethod
    def _error_message(response: requests.Response) -> Optional[str]:
        """Graph errors look like {"error": {"code": ..., "message": ...}}"""
        try:
            error_data = response.json() if response.content else {}
        except ValueError:
            return None
        if not isinstance(error_data, dict):
            return None
        error = error_data.get("error")
        if isinstance(error, dict):
            return error.get("message") or None
        return None

    def create_event(self, event: EventRequest, credential: Optional[Any]) -> CreateEventOutcome:
        """Create the event in the signed-in user's default calendar"""
        if not credential:
            return Unauthorized(MISSING_TOKEN_MESSAGE)

        headers = {
            "Authorization": f"Bearer {credential}",
            "Content-Type": "application/json",
        }
        url = f"{self.GRAPH_API_ENDPOINT}/me/events"

        try:
            response = requests.post(
                url,
                headers=headers,
                json=normalize_event(event, self.provider_name),
                timeout=Config.HTTP_TIMEOUT_SECONDS,
            )
        except requests.RequestException as e:
            logger.error(f"Microsoft Graph request error: {e}", exc_info=True)
            return Unknown(str(e))

        if response.status_code == 401:
            logger.warning("Microsoft Graph rejected the access token")
            return Unauthorized(self.unauthorized_message)

        if response.status_code >= 400:
            message = self._error_message(response) or GENERIC_UPSTREAM_MESSAGE
            logger.warning(f"Microsoft Graph returned {response.status_code}: {message}")
            return UpstreamRejected(status=response.status_code, message=message)

        try:
            created_event: Dict[str, Any] = response.json()
        except ValueError as e:
            logger.error(f"Unreadable Microsoft Graph response: {e}")
            return Unknown(f"Unreadable Microsoft Graph response: {e}")

        online_meeting = created_event.get("onlineMeeting") or {}
        meet_link = online_meeting.get("joinUrl") if event.need_meet_link else None
        logger.info(f"Created Microsoft Calendar event {created_event.get('id')}")

        return EventResult(
            event_id=created_event.get("id"),
            event_link=created_event.get("webLink", ""),
            meet_link=meet_link,
        )
