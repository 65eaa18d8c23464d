"""
Session Save Request

Input contract of the session save operation. Checked before any
analysis or storage work happens.
"""

from collections.abc import Mapping
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator
from pydantic import ValidationError as PydanticValidationError

from moodlog.domain.exceptions import FieldViolation, ValidationError
from moodlog.domain.models.session import MAX_CONVERSATION_LENGTH

MIN_CONVERSATION_LENGTH: int = 10
MAX_USER_ID_LENGTH: int = 100

FIELD_MESSAGES: dict[str, str] = {
    "conversationText": "Conversation text must be between 10 and 50,000 characters",
    "userId": "User ID is required and must be less than 100 characters",
    "sessionDuration": "Session duration must be a number",
    "messageCount": "Message count must be a positive integer",
}


class SaveSessionRequest(BaseModel):
    """
    Validated save request.

    Field names follow the external camelCase contract; Python code uses
    the snake_case attributes.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    conversation_text: StrictStr = Field(
        ...,
        alias="conversationText",
        min_length=MIN_CONVERSATION_LENGTH,
        max_length=MAX_CONVERSATION_LENGTH,
    )
    user_id: StrictStr = Field(
        ...,
        alias="userId",
        min_length=1,
        max_length=MAX_USER_ID_LENGTH,
    )
    session_duration: Optional[float] = Field(
        default=None,
        alias="sessionDuration",
        allow_inf_nan=False,
    )
    message_count: Optional[int] = Field(
        default=None,
        alias="messageCount",
        ge=1,
    )

    @field_validator("session_duration", "message_count", mode="before")
    @classmethod
    def _reject_booleans(cls, value: Any) -> Any:
        # JSON true/false would otherwise coerce to 1/0
        if isinstance(value, bool):
            raise ValueError("booleans are not numbers")
        return value

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "SaveSessionRequest":
        """
        Validate a raw payload.

        Raises:
            ValidationError: Listing every violated field once
        """
        try:
            return cls.model_validate(dict(payload))
        except PydanticValidationError as e:
            violations: list[FieldViolation] = []
            seen: set[str] = set()
            for error in e.errors():
                field = str(error["loc"][0]) if error["loc"] else "request"
                if field in seen:
                    continue
                seen.add(field)
                violations.append(
                    FieldViolation(
                        field=field,
                        message=FIELD_MESSAGES.get(field, error["msg"]),
                    )
                )
            raise ValidationError(violations) from None
