"""Input and output contracts for the five tool operations."""

import math
from typing import Annotated, Optional

import emoji
from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    Field,
    HttpUrl,
    StrictBool,
    StrictStr,
    TypeAdapter,
)
from pydantic import ValidationError as PydanticValidationError

from wachat.models.messages import Group, MessageKey, SentMessageKey

_HTTP_URL = TypeAdapter(HttpUrl)


def _check_http_url(value: str) -> str:
    try:
        _HTTP_URL.validate_python(value)
    except PydanticValidationError:
        raise ValueError("must be a well-formed http(s) URL") from None
    return value


def _check_single_emoji(value: str) -> str:
    if not emoji.is_emoji(value):
        raise ValueError("must be exactly one emoji")
    return value


def _require_number(value):
    # bool is an int subclass; "1.5" would be coerced by lax float parsing
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("must be a number")
    if not math.isfinite(value):
        raise ValueError("must be a finite number")
    return value


Jid = Annotated[
    StrictStr,
    Field(
        min_length=1,
        description="Recipient id (phone number or group id). Example: 521XXXXXXXXXX or a group id.",
    ),
]
Coordinate = Annotated[float, BeforeValidator(_require_number)]
IsGroup = Annotated[StrictBool, Field(description="Whether the JID belongs to a group.")]


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


class SendMessageInput(BaseModel):
    jid: Jid
    messageText: StrictStr = Field(min_length=1, description="Text content of the message.")
    isGroup: IsGroup = False


class SendLocationInput(BaseModel):
    jid: Jid
    latitude: Coordinate = Field(description="Latitude of the location.")
    longitude: Coordinate = Field(description="Longitude of the location.")
    isGroup: IsGroup = False


class SendImageInput(BaseModel):
    jid: Jid
    imageUrl: Annotated[StrictStr, AfterValidator(_check_http_url)] = Field(
        description="Public http(s) URL of the image to send."
    )
    caption: Optional[StrictStr] = Field(default=None, description="Optional image caption.")
    isGroup: IsGroup = False


class SendReactionInput(BaseModel):
    messageKey: MessageKey = Field(
        description="Key of the message to react to, as returned by the relay."
    )
    reactionText: Annotated[StrictStr, AfterValidator(_check_single_emoji)] = Field(
        description="A single emoji, e.g. 👍."
    )
    isGroup: IsGroup = False


class SearchGroupsInput(BaseModel):
    name: Optional[StrictStr] = Field(
        default=None,
        description="Group name or part of it. Omit to list every group.",
    )


# ---------------------------------------------------------------------------
# Outputs
# ---------------------------------------------------------------------------


class SendResult(BaseModel):
    success: bool
    messageKey: Optional[SentMessageKey] = None
    error: Optional[str] = None


class ReactionResult(BaseModel):
    success: bool
    messageId: Optional[str] = None
    error: Optional[str] = None


class SearchGroupsResult(BaseModel):
    success: bool
    groups: Optional[list[Group]] = Field(default=None, description="Groups found.")
    error: Optional[str] = None
