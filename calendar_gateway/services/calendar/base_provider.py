"""
Abstract base class for calendar providers.

Defines the interface that the Google and Microsoft adapters implement.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from calendar_gateway.config import OAuthClientConfig
from .credential_store import CredentialStore
from .models import CreateEventOutcome, EventRequest, TokenCredential


class CalendarProvider(ABC):
    """
    Abstract base class for calendar providers.

    Each provider owns its OAuth client configuration and its credential
    store. The lifecycle is Unauthenticated -> Authenticated through a
    successful `exchange_code`; there is no logout or expiry transition.
    """

    def __init__(self, config: OAuthClientConfig, credential_store: CredentialStore):
        """
        Initialize the calendar provider.

        Parameters
        ----------
        config : OAuthClientConfig
            Client id, secret and redirect URI, built once at startup
        credential_store : CredentialStore
            Where the exchanged credential lives (if anywhere)
        """
        self.config = config
        self.credential_store = credential_store
        self.provider_name = self._get_provider_name()

    @abstractmethod
    def _get_provider_name(self) -> str:
        """Return the name of this provider (e.g., 'google', 'microsoft')"""
        pass

    @property
    @abstractmethod
    def unauthorized_message(self) -> str:
        """Message telling the caller where to (re-)authenticate"""
        pass

    @abstractmethod
    def build_auth_url(self) -> str:
        """
        Build the consent-screen URL the caller is redirected to.

        Returns
        -------
        str
            Authorization URL
        """
        pass

    @abstractmethod
    def exchange_code(self, code: Any) -> TokenCredential:
        """
        Exchange a one-time authorization code for a credential.

        Raises
        ------
        AuthenticationError
            400 if the code is missing/invalid or no usable token came back
        """
        pass

    @abstractmethod
    def create_event(self, event: EventRequest, credential: Optional[Any]) -> CreateEventOutcome:
        """
        Create the event with the provider's REST API.

        Never raises for remote failures; returns one of EventResult,
        Unauthorized, UpstreamRejected or Unknown.
        """
        pass
