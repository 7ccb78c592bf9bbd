"""
Map a validated EventRequest onto each provider's create-event payload.

Pure functions, no I/O. Timezones are fixed per provider (see Config) and
are not derived from the request.
"""

import uuid
from dataclasses import dataclass
from typing import Any, Dict

from calendar_gateway.config import Config
from .models import EventRequest

GOOGLE = "google"
MICROSOFT = "microsoft"

GOOGLE_CONFERENCE_SOLUTION = "hangoutsMeet"
MICROSOFT_ONLINE_MEETING_PROVIDER = "teamsForBusiness"


@dataclass(frozen=True)
class GoogleEventPayload:
    """Request body plus the companion flag Google needs to honor conferenceData."""

    body: Dict[str, Any]
    conference_data_version: int


def to_google_payload(event: EventRequest) -> GoogleEventPayload:
    body: Dict[str, Any] = {
        "summary": event.title,
        "description": event.description,
        "location": event.location,
        "start": {
            "dateTime": event.start_time,
            "timeZone": Config.GOOGLE_TIMEZONE,
        },
        "end": {
            "dateTime": event.end_time,
            "timeZone": Config.GOOGLE_TIMEZONE,
        },
    }

    if event.participants:
        body["attendees"] = [{"email": email} for email in event.participants]

    if event.need_meet_link:
        body["conferenceData"] = {
            "createRequest": {
                # uuid1 is time-based, so every call gets a fresh id
                "requestId": uuid.uuid1().hex,
                "conferenceSolutionKey": {"type": GOOGLE_CONFERENCE_SOLUTION},
            }
        }

    return GoogleEventPayload(
        body=body,
        conference_data_version=1 if event.need_meet_link else 0,
    )


def to_outlook_payload(event: EventRequest) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "subject": event.title,
        "body": {
            "contentType": "Text",
            "content": event.description,
        },
        "start": {
            "dateTime": event.start_time,
            "timeZone": Config.MICROSOFT_TIMEZONE,
        },
        "end": {
            "dateTime": event.end_time,
            "timeZone": Config.MICROSOFT_TIMEZONE,
        },
        "location": {
            "displayName": event.location,
        },
    }

    if event.participants:
        body["attendees"] = [
            {
                "emailAddress": {"address": email},
                "type": "required",
            }
            for email in event.participants
        ]

    if event.need_meet_link:
        body["isOnlineMeeting"] = True
        body["onlineMeetingProvider"] = MICROSOFT_ONLINE_MEETING_PROVIDER

    return body


_BUILDERS = {
    GOOGLE: to_google_payload,
    MICROSOFT: to_outlook_payload,
}


def normalize_event(event: EventRequest, provider: str):
    """Dispatch to the payload builder for `provider`"""
    try:
        builder = _BUILDERS[provider]
    except KeyError:
        raise ValueError(f"No payload mapping for provider: {provider}")
    return builder(event)
