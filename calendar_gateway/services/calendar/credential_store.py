"""
Where each provider keeps (or does not keep) the credential obtained from
the authorization-code exchange.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from calendar_gateway.utils.error_handler import AuthenticationError
from .models import TokenCredential


class CredentialStore(ABC):
    """Save the credential after an exchange, resolve it for an event call."""

    @abstractmethod
    def save(self, credential: Any) -> None:
        pass

    @abstractmethod
    def resolve(self, data: Dict[str, Any]) -> Optional[Any]:
        """
        Return the credential to use for an event-creation request.

        Parameters
        ----------
        data : dict
            The inbound request body
        """
        pass

    @abstractmethod
    def callback_payload(self, credential: TokenCredential) -> Dict[str, Any]:
        """Extra fields the OAuth callback response hands back to the caller"""
        pass


class ProcessSingletonStore(CredentialStore):
    """
    One process-wide credential slot, last write wins.

    Every successful exchange overwrites the slot and every later event
    call uses whatever is there, regardless of who authenticated. There is
    no locking: a re-authentication can land while other requests are in
    flight and they may pick up either credential. There is also no
    per-user isolation. Known hazard, kept deliberately.
    """

    def __init__(self):
        self._credential: Optional[Any] = None

    def save(self, credential: Any) -> None:
        self._credential = credential

    def resolve(self, data: Dict[str, Any]) -> Optional[Any]:
        return self._credential

    def callback_payload(self, credential: TokenCredential) -> Dict[str, Any]:
        # Token stays server-side
        return {}

    @property
    def is_authenticated(self) -> bool:
        return self._credential is not None


class StatelessCallerSuppliedStore(CredentialStore):
    """
    Nothing is kept server-side.

    The token goes back to the caller in the callback response and must be
    sent as `accessToken` on every event-creation request.
    """

    def __init__(self, missing_token_message: str):
        self.missing_token_message = missing_token_message

    def save(self, credential: Any) -> None:
        return None

    def resolve(self, data: Dict[str, Any]) -> str:
        token = data.get("accessToken")
        if not token or not isinstance(token, str):
            raise AuthenticationError(self.missing_token_message, status_code=401)
        return token

    def callback_payload(self, credential: TokenCredential) -> Dict[str, Any]:
        return {
            "accessToken": credential.access_token,
            "expiresOn": credential.expires_on_iso(),
        }
