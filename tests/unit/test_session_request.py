"""
Unit Tests for Session Save Request Validation
"""

import pytest

from moodlog.domain.exceptions import ValidationError
from moodlog.services.session.session_request import SaveSessionRequest
from moodlog.services.session.session_service import count_messages


class TestSaveSessionRequest:
    """Test suite for SaveSessionRequest.from_payload."""

    def test_minimal_valid_payload(self) -> None:
        request = SaveSessionRequest.from_payload({
            "conversationText": "User: hello",
            "userId": "user-1",
        })

        assert request.conversation_text == "User: hello"
        assert request.user_id == "user-1"
        assert request.session_duration is None
        assert request.message_count is None

    def test_optional_fields_accepted(self) -> None:
        request = SaveSessionRequest.from_payload({
            "conversationText": "User: hello there",
            "userId": "user-1",
            "sessionDuration": 12.5,
            "messageCount": 4,
        })

        assert request.session_duration == 12.5
        assert request.message_count == 4

    def test_length_boundaries(self) -> None:
        """Test that 10 characters pass and 9 fail."""
        SaveSessionRequest.from_payload({"conversationText": "a" * 10, "userId": "u"})
        SaveSessionRequest.from_payload({"conversationText": "a" * 50_000, "userId": "u"})

        with pytest.raises(ValidationError) as exc_info:
            SaveSessionRequest.from_payload({"conversationText": "a" * 9, "userId": "u"})
        assert exc_info.value.fields == ["conversationText"]

        with pytest.raises(ValidationError):
            SaveSessionRequest.from_payload({"conversationText": "a" * 50_001, "userId": "u"})

    def test_empty_payload_reports_required_fields(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            SaveSessionRequest.from_payload({})

        assert sorted(exc_info.value.fields) == ["conversationText", "userId"]
        details = exc_info.value.to_list()
        assert {"field", "message"} <= set(details[0])

    def test_all_violations_collected(self) -> None:
        """Test that every invalid field is reported once."""
        with pytest.raises(ValidationError) as exc_info:
            SaveSessionRequest.from_payload({
                "conversationText": 12345678901,
                "userId": "x" * 101,
                "sessionDuration": "long",
                "messageCount": 0,
            })

        assert sorted(exc_info.value.fields) == [
            "conversationText",
            "messageCount",
            "sessionDuration",
            "userId",
        ]

    def test_error_messages(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            SaveSessionRequest.from_payload({"conversationText": "short", "userId": ""})

        messages = {v.field: v.message for v in exc_info.value.violations}
        assert messages["conversationText"] == "Conversation text must be between 10 and 50,000 characters"
        assert messages["userId"] == "User ID is required and must be less than 100 characters"

    @pytest.mark.parametrize("value", [1.5, "many", -2, True, False])
    def test_invalid_message_count(self, value) -> None:
        with pytest.raises(ValidationError) as exc_info:
            SaveSessionRequest.from_payload({
                "conversationText": "User: hello there",
                "userId": "u",
                "messageCount": value,
            })

        assert exc_info.value.fields == ["messageCount"]

    @pytest.mark.parametrize("value", [True, False, "long", float("inf")])
    def test_invalid_session_duration(self, value) -> None:
        with pytest.raises(ValidationError) as exc_info:
            SaveSessionRequest.from_payload({
                "conversationText": "User: hello there",
                "userId": "u",
                "sessionDuration": value,
            })

        assert exc_info.value.fields == ["sessionDuration"]
        assert exc_info.value.violations[0].message == "Session duration must be a number"

    def test_numeric_string_duration_accepted(self) -> None:
        request = SaveSessionRequest.from_payload({
            "conversationText": "User: hello there",
            "userId": "u",
            "sessionDuration": "12",
        })

        assert request.session_duration == 12.0


class TestCountMessages:
    """Test suite for speaker line counting."""

    def test_counts_tagged_lines(self) -> None:
        text = "User: hi\nAssistant: hello\n\nUser: how are you?\nrandom line"

        assert count_messages(text) == 3

    def test_untagged_text_counts_as_one(self) -> None:
        assert count_messages("just some thoughts I wrote down") == 1

    def test_blank_lines_ignored(self) -> None:
        assert count_messages("\n\n   \nUser: one\n\n") == 1
