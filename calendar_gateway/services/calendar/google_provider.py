"""
Google Calendar provider implementation.

Uses google-auth-oauthlib for the authorization-code flow and the Google
Calendar API v3 for event creation. The exchanged credential lives in the
process-wide slot of a ProcessSingletonStore.
"""

from typing import Any, Dict, Optional

from google.auth.exceptions import RefreshError
from google_auth_oauthlib.flow import Flow
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from oauthlib.oauth2.rfc6749.errors import MissingTokenError, OAuth2Error

from calendar_gateway.config import Config, OAuthClientConfig
from calendar_gateway.utils.error_handler import AuthenticationError
from calendar_gateway.utils.logging_utils import get_logger
from calendar_gateway.utils.validators import validate_authorization_code
from .base_provider import CalendarProvider
from .credential_store import CredentialStore, ProcessSingletonStore
from .models import (
    CreateEventOutcome,
    EventRequest,
    EventResult,
    TokenCredential,
    Unauthorized,
    Unknown,
)
from .normalizer import GOOGLE, normalize_event

logger = get_logger(__name__)


class GoogleCalendarProvider(CalendarProvider):
    """Google Calendar provider implementation"""

    AUTH_URI = "https://accounts.google.com/o/oauth2/auth"
    TOKEN_URI = "https://oauth2.googleapis.com/token"
    CALENDAR_ID = "primary"

    def __init__(self, config: OAuthClientConfig, credential_store: Optional[CredentialStore] = None):
        super().__init__(config, credential_store or ProcessSingletonStore())

    def _get_provider_name(self) -> str:
        return GOOGLE

    @property
    def unauthorized_message(self) -> str:
        return "Not authenticated with Google Calendar or the session expired. Please authenticate via /google/auth"

    def _client_config(self) -> Dict[str, Any]:
        return {
            "web": {
                "client_id": self.config.client_id,
                "client_secret": self.config.client_secret,
                "auth_uri": self.AUTH_URI,
                "token_uri": self.TOKEN_URI,
                "redirect_uris": [self.config.redirect_uri],
            }
        }

    def _build_flow(self) -> Flow:
        """Fresh Flow per call; nothing is shared between the redirect and the callback"""
        return Flow.from_client_config(
            self._client_config(),
            scopes=Config.GOOGLE_SCOPES,
            redirect_uri=self.config.redirect_uri,
            autogenerate_code_verifier=False,
        )

    def build_auth_url(self) -> str:
        auth_url, _state = self._build_flow().authorization_url(access_type="offline")
        return auth_url

    def exchange_code(self, code: Any) -> TokenCredential:
        code = validate_authorization_code(code)

        flow = self._build_flow()
        try:
            flow.fetch_token(code=code)
        except MissingTokenError:
            raise AuthenticationError("Invalid credentials received from Google", status_code=400)
        except OAuth2Error as e:
            logger.warning(f"Google rejected the authorization code: {e.error}")
            raise AuthenticationError("Invalid or expired authorization code", status_code=400)

        try:
            creds = flow.credentials
        except ValueError:
            creds = None
        if creds is None or not creds.token:
            raise AuthenticationError("Invalid credentials received from Google", status_code=400)

        self.credential_store.save(creds)
        logger.info("Google credentials stored in the process-wide slot")

        return TokenCredential(
            provider=self.provider_name,
            access_token=creds.token,
            refresh_token=creds.refresh_token,
            expires_on=creds.expiry,
        )

    def create_event(self, event: EventRequest, credential: Optional[Any]) -> CreateEventOutcome:
        """Insert the event into the primary calendar"""
        if credential is None:
            return Unauthorized(self.unauthorized_message)

        payload = normalize_event(event, self.provider_name)

        try:
            service = build("calendar", "v3", credentials=credential, cache_discovery=False)
            created_event = service.events().insert(
                calendarId=self.CALENDAR_ID,
                body=payload.body,
                conferenceDataVersion=payload.conference_data_version,
                sendUpdates="all" if event.participants else "none",
            ).execute()
        except HttpError as e:
            if e.resp.status == 401:
                logger.warning("Google Calendar API rejected the stored credential")
                return Unauthorized(self.unauthorized_message)
            logger.error(f"Google Calendar API error: {e}", exc_info=True)
            return Unknown(f"Google Calendar API error {e.resp.status}: {e.reason}")
        except RefreshError as e:
            logger.warning(f"Google credential could not be refreshed: {e}")
            return Unauthorized(self.unauthorized_message)
        except Exception as e:
            logger.error(f"Error creating Google Calendar event: {e}", exc_info=True)
            return Unknown(str(e))

        meet_link = created_event.get("hangoutLink") if event.need_meet_link else None
        logger.info(f"Created Google Calendar event {created_event.get('id')}")

        return EventResult(
            event_id=created_event["id"],
            event_link=created_event.get("htmlLink", ""),
            meet_link=meet_link,
        )
