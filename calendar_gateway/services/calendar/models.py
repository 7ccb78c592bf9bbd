"""
Provider-neutral data types shared by the calendar adapters.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union


@dataclass(frozen=True)
class EventRequest:
    """A validated, provider-neutral event-creation request."""

    title: str
    description: str
    location: str
    start_time: str
    end_time: str
    participants: List[str] = field(default_factory=list)
    need_meet_link: bool = False

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> "EventRequest":
        """Build from a request body that already passed EventValidator"""
        return cls(
            title=data["title"],
            description=data["description"],
            location=data["location"],
            start_time=data["startTime"],
            end_time=data["endTime"],
            participants=list(data.get("participants") or []),
            need_meet_link=bool(data.get("needMeetLink", False)),
        )


@dataclass(frozen=True)
class TokenCredential:
    """Result of a successful authorization-code exchange."""

    provider: str
    access_token: str
    refresh_token: Optional[str] = None
    expires_on: Optional[datetime] = None

    def expires_on_iso(self) -> Optional[str]:
        if self.expires_on is None:
            return None
        expires = self.expires_on
        if expires.tzinfo is None:
            expires = expires.replace(tzinfo=timezone.utc)
        return expires.astimezone(timezone.utc).isoformat()


# ──────────────────────────────────────────────────────────────────────
# Event creation outcomes
# ──────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class EventResult:
    """Unified success shape, whichever provider created the event."""

    event_id: str
    event_link: str
    meet_link: Optional[str] = None

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {
            "eventId": self.event_id,
            "eventLink": self.event_link,
            "meetLink": self.meet_link,
        }


@dataclass(frozen=True)
class Unauthorized:
    """The provider refused the credential (missing, invalid or expired)."""

    message: str


@dataclass(frozen=True)
class UpstreamRejected:
    """Non-2xx provider response we can safely pass through."""

    status: int
    message: str


@dataclass(frozen=True)
class Unknown:
    """Anything else. `detail` is for the server log only."""

    detail: str


CreateEventOutcome = Union[EventResult, Unauthorized, UpstreamRejected, Unknown]
