from datetime import datetime, timezone

import pytest

from calendar_gateway.utils.error_handler import AuthenticationError, ValidationError
from calendar_gateway.utils.validators import (
    END_BEFORE_START_MESSAGE,
    INVALID_DATETIME_MESSAGE,
    MISSING_FIELDS_MESSAGE,
    NEED_MEET_LINK_TYPE_MESSAGE,
    PARTICIPANTS_NOT_A_LIST_MESSAGE,
    START_IN_PAST_MESSAGE,
    EventValidator,
    validate_authorization_code,
)

NOW = datetime(2030, 5, 1, 9, 0, tzinfo=timezone.utc)


def _body(**overrides):
    body = {
        "title": "Standup",
        "description": "daily",
        "location": "Room1",
        "startTime": "2030-05-01T10:00:00Z",
        "endTime": "2030-05-01T11:00:00Z",
    }
    body.update(overrides)
    return body


def _message(data):
    with pytest.raises(ValidationError) as exc_info:
        EventValidator.validate_event_request(data, now=NOW)
    return exc_info.value.message


class TestRequiredFields:

    @pytest.mark.parametrize("missing", [
        ["title"],
        ["description"],
        ["location"],
        ["startTime", "endTime"],
        ["title", "description", "location", "startTime", "endTime"],
    ])
    def test_same_message_whatever_is_missing(self, missing):
        data = _body()
        for field in missing:
            del data[field]
        assert _message(data) == MISSING_FIELDS_MESSAGE

    def test_empty_description_counts_as_missing(self):
        assert _message(_body(description="")) == MISSING_FIELDS_MESSAGE

    def test_missing_fields_checked_before_datetimes(self):
        assert _message(_body(title="", startTime="garbage")) == MISSING_FIELDS_MESSAGE

    @pytest.mark.parametrize("field, value", [("title", 123), ("description", ["x"]), ("location", {"room": 1})])
    def test_non_string_text_field_counts_as_missing(self, field, value):
        assert _message(_body(**{field: value})) == MISSING_FIELDS_MESSAGE


class TestDatetimes:

    @pytest.mark.parametrize("value", [
        "tomorrow at 2pm", "2030-13-01T10:00:00", "10:00", "2030-05-01T25:00:00Z",
        "2030-05-01", "20300501T100000Z", "2030-05-01T1000",
    ])
    def test_unparseable_start(self, value):
        assert _message(_body(startTime=value)) == INVALID_DATETIME_MESSAGE

    def test_unparseable_end(self):
        assert _message(_body(endTime="soon")) == INVALID_DATETIME_MESSAGE

    def test_non_string_datetime(self):
        assert _message(_body(startTime=1234567890)) == INVALID_DATETIME_MESSAGE

    def test_format_checked_before_order(self):
        # End is before start, but start is unparseable
        assert _message(_body(startTime="nope", endTime="2020-01-01T00:00:00Z")) == INVALID_DATETIME_MESSAGE

    def test_offsets_and_naive_values(self):
        parsed = EventValidator.parse_datetime("2030-05-01T17:00:00+07:00")
        assert parsed == datetime(2030, 5, 1, 10, 0, tzinfo=timezone.utc)
        naive = EventValidator.parse_datetime("2030-05-01T10:00:00")
        assert naive.tzinfo == timezone.utc


class TestTemporalOrder:

    def test_end_equal_to_start(self):
        data = _body(endTime="2030-05-01T10:00:00Z")
        assert _message(data) == END_BEFORE_START_MESSAGE

    def test_end_before_start(self):
        data = _body(startTime="2030-05-01T12:00:00Z")
        assert _message(data) == END_BEFORE_START_MESSAGE

    def test_start_in_past(self):
        data = _body(startTime="2030-05-01T08:00:00Z")
        assert _message(data) == START_IN_PAST_MESSAGE

    def test_end_check_wins_over_past_check(self):
        data = _body(startTime="2020-01-01T12:00:00Z", endTime="2020-01-01T11:00:00Z")
        assert _message(data) == END_BEFORE_START_MESSAGE

    def test_start_exactly_now_is_allowed(self):
        EventValidator.validate_event_request(_body(startTime="2030-05-01T09:00:00Z"), now=NOW)


class TestParticipants:

    def test_valid_list(self):
        EventValidator.validate_event_request(
            _body(participants=["a@example.com", "b.c@sub.example.org"]), now=NOW
        )

    def test_empty_list_is_fine(self):
        EventValidator.validate_event_request(_body(participants=[]), now=NOW)

    def test_not_a_list(self):
        assert _message(_body(participants="a@example.com")) == PARTICIPANTS_NOT_A_LIST_MESSAGE

    @pytest.mark.parametrize("bad", ["not-an-email", "a@b", "a b@example.com", "@example.com", "a@b.co\n"])
    def test_names_the_first_invalid_value(self, bad):
        data = _body(participants=["ok@example.com", bad, "also bad"])
        assert _message(data) == f"Invalid email address: {bad}"

    def test_non_string_entry(self):
        assert _message(_body(participants=[42])) == "Invalid email address: 42"

    def test_temporal_errors_come_first(self):
        data = _body(startTime="2020-01-01T00:00:00Z", endTime="2020-01-01T01:00:00Z", participants=["bad"])
        assert _message(data) == START_IN_PAST_MESSAGE


class TestNeedMeetLink:

    @pytest.mark.parametrize("value", ["true", 1, 0, "yes"])
    def test_non_boolean(self, value):
        assert _message(_body(needMeetLink=value)) == NEED_MEET_LINK_TYPE_MESSAGE

    @pytest.mark.parametrize("value", [True, False, None])
    def test_boolean_or_absent(self, value):
        EventValidator.validate_event_request(_body(needMeetLink=value), now=NOW)

    def test_participants_checked_before_flag(self):
        data = _body(participants=["bad"], needMeetLink="yes")
        assert _message(data) == "Invalid email address: bad"


class TestAuthorizationCode:

    def test_returns_code(self):
        assert validate_authorization_code("4/0Abc") == "4/0Abc"

    @pytest.mark.parametrize("code", [None, "", ["a", "b"], 123])
    def test_missing_or_not_a_string(self, code):
        with pytest.raises(AuthenticationError) as exc_info:
            validate_authorization_code(code)
        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Missing or invalid authorization code"
