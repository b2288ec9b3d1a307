"""Validated operation input → relay request.

Pure functions: no I/O, no settings, same input always yields the same
request.
"""

from dataclasses import dataclass
from typing import Any

from wachat.models.operations import (
    SearchGroupsInput,
    SendImageInput,
    SendLocationInput,
    SendMessageInput,
    SendReactionInput,
)

SEND_PATH = "/messages/send/"
SEARCH_GROUPS_PATH = "/groups/search"


@dataclass(frozen=True)
class RelayRequest:
    method: str
    path: str
    params: dict[str, str] | None = None
    json: dict[str, Any] | None = None


def _recipient_type(is_group: bool) -> str:
    return "group" if is_group else "number"


def _send(jid: str, is_group: bool, message: dict[str, Any]) -> RelayRequest:
    return RelayRequest(
        method="POST",
        path=SEND_PATH,
        json={"jid": jid, "type": _recipient_type(is_group), "message": message},
    )


def build_text_request(params: SendMessageInput) -> RelayRequest:
    return _send(params.jid, params.isGroup, {"text": params.messageText})


def build_location_request(params: SendLocationInput) -> RelayRequest:
    return _send(
        params.jid,
        params.isGroup,
        {
            "location": {
                "degreesLatitude": params.latitude,
                "degreesLongitude": params.longitude,
            }
        },
    )


def build_image_request(params: SendImageInput) -> RelayRequest:
    message: dict[str, Any] = {"image": {"url": params.imageUrl}}
    if params.caption is not None:
        message["caption"] = params.caption
    return _send(params.jid, params.isGroup, message)


def build_reaction_request(params: SendReactionInput) -> RelayRequest:
    """The reaction goes to the chat of the message being reacted to."""
    key = params.messageKey.model_dump(exclude_none=True)
    return _send(
        params.messageKey.remoteJid,
        params.isGroup,
        {"react": {"key": key, "text": params.reactionText}},
    )


def build_search_groups_request(params: SearchGroupsInput) -> RelayRequest:
    name = (params.name or "").strip()
    return RelayRequest(
        method="GET",
        path=SEARCH_GROUPS_PATH,
        params={"name": name} if name else None,
    )
