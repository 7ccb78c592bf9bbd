"""
Validation engine for event-creation and OAuth callback input.

Every check raises ValidationError (or AuthenticationError for the
authorization code) on the first violation it finds. `validate_event_request`
runs the checks in a fixed order, so a request with several problems always
gets the same message.
"""

import re
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .error_handler import AuthenticationError, ValidationError

REQUIRED_EVENT_FIELDS = ("title", "description", "location", "startTime", "endTime")
TEXT_EVENT_FIELDS = ("title", "description", "location")

MISSING_FIELDS_MESSAGE = (
    "Missing required fields: title, description, location, startTime, endTime"
)
INVALID_DATETIME_MESSAGE = "Invalid datetime format for startTime or endTime"
END_BEFORE_START_MESSAGE = "endTime must be after startTime"
START_IN_PAST_MESSAGE = "startTime cannot be in the past"
PARTICIPANTS_NOT_A_LIST_MESSAGE = "participants must be an array of email addresses"
NEED_MEET_LINK_TYPE_MESSAGE = "needMeetLink must be a boolean"
MISSING_CODE_MESSAGE = "Missing or invalid authorization code"


class EventValidator:
    """Checks for the provider-neutral event request"""

    EMAIL_REGEX = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
    # Extended-format date plus time, e.g. 2030-05-01T10:00
    ISO_DATETIME_REGEX = re.compile(r'^\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}')

    @classmethod
    def validate_required_fields(cls, data: Dict[str, Any]) -> None:
        """All of title, description, location, startTime, endTime must be non-empty; the text fields must be strings"""
        missing = [field for field in REQUIRED_EVENT_FIELDS if not data.get(field)]
        missing += [field for field in TEXT_EVENT_FIELDS if field not in missing and not isinstance(data[field], str)]
        if missing:
            raise ValidationError(MISSING_FIELDS_MESSAGE)

    @classmethod
    def parse_datetime(cls, value: Any) -> datetime:
        """
        Parse an ISO-8601 string into an aware datetime.

        A trailing "Z" is accepted; values without an offset are taken as UTC.
        Date-only and basic-format values are rejected.
        """
        if not isinstance(value, str) or not cls.ISO_DATETIME_REGEX.match(value.strip()):
            raise ValidationError(INVALID_DATETIME_MESSAGE)
        try:
            parsed = datetime.fromisoformat(value.strip().replace('Z', '+00:00'))
        except ValueError:
            raise ValidationError(INVALID_DATETIME_MESSAGE)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed

    @classmethod
    def validate_datetime(cls, value: Any) -> None:
        cls.parse_datetime(value)

    @classmethod
    def validate_temporal_order(cls, start: datetime, end: datetime, now: datetime) -> None:
        if end <= start:
            raise ValidationError(END_BEFORE_START_MESSAGE)
        if start < now:
            raise ValidationError(START_IN_PAST_MESSAGE)

    @classmethod
    def validate_participants(cls, participants: Any) -> None:
        """Optional; when given it must be a list of syntactically valid emails"""
        if participants is None:
            return
        if not isinstance(participants, list):
            raise ValidationError(PARTICIPANTS_NOT_A_LIST_MESSAGE)
        for participant in participants:
            if not isinstance(participant, str) or not cls.EMAIL_REGEX.fullmatch(participant):
                raise ValidationError(f"Invalid email address: {participant}")

    @classmethod
    def validate_flag(cls, value: Any, message: str = NEED_MEET_LINK_TYPE_MESSAGE) -> None:
        if value is not None and not isinstance(value, bool):
            raise ValidationError(message)

    @classmethod
    def validate_event_request(cls, data: Dict[str, Any], now: Optional[datetime] = None) -> None:
        """Run every event check in order, stopping at the first violation"""
        cls.validate_required_fields(data)

        start = cls.parse_datetime(data["startTime"])
        end = cls.parse_datetime(data["endTime"])
        cls.validate_temporal_order(start, end, now or datetime.now(timezone.utc))

        cls.validate_participants(data.get("participants"))
        cls.validate_flag(data.get("needMeetLink"))


def validate_authorization_code(code: Any) -> str:
    """The OAuth callback code must be a non-empty string"""
    if not code or not isinstance(code, str):
        raise AuthenticationError(MISSING_CODE_MESSAGE, status_code=400)
    return code
