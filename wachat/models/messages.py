"""Relay-side value objects: message keys and groups.

Field names follow the relay's JSON so models round-trip without aliases.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field, StrictBool, StrictInt, StrictStr


class MessageKey(BaseModel):
    """Identifies one relay message inside a chat."""

    remoteJid: StrictStr = Field(min_length=1, description="JID of the chat the message belongs to.")
    fromMe: StrictBool = Field(description="Whether the message was sent by this session.")
    id: StrictStr = Field(min_length=1, description="Relay message id.")
    participant: Optional[StrictStr] = Field(
        default=None, description="Sender JID inside a group chat."
    )


class SentMessageKey(BaseModel):
    """Key of a message the relay just accepted.

    The flat acknowledgement shape only guarantees ``id``; the nested shape
    usually carries the full key.
    """

    id: StrictStr = Field(min_length=1)
    remoteJid: Optional[StrictStr] = None
    fromMe: Optional[StrictBool] = None
    participant: Optional[StrictStr] = None


class GroupParticipant(BaseModel):
    id: StrictStr = Field(description="Participant JID.")
    admin: Optional[Literal["admin", "superadmin"]] = Field(
        default=None, description="Participant role in the group; absent for members."
    )


class Group(BaseModel):
    id: StrictStr = Field(description="Group JID.")
    subject: StrictStr = Field(description="Group name.")
    owner: Optional[StrictStr] = Field(default=None, description="JID of the group owner.")
    creation: Optional[StrictInt] = Field(default=None, description="Creation timestamp (seconds).")
    desc: Optional[StrictStr] = Field(default=None, description="Group description.")
    participants: list[GroupParticipant] = Field(description="Group participants, in relay order.")
