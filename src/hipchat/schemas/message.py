"""
Message Schema Definitions

This module defines the canonical send-message request, the options object
for simple senders, and the Message record returned by room history.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from .base import (
    BackgroundColor,
    BaseRequest,
    BaseResponse,
    MessageFormat,
    ResponseFormat,
    as_int,
    as_timestamp,
)
from .room import RoomRef


@dataclass
class SendMessageRequest(BaseRequest):
    """
    Canonical request every send-message call is normalized into.

    Attributes:
        message: The message body (HTML or plain text)
        room: Target room
        sender: Name the message appears to be from (wire key "from")
        notify: Whether the message triggers a notification in the room
        color: Background color of the message
        message_format: How the service renders the body
        format: Response format requested from the service
    """

    message: str
    room: RoomRef
    sender: str
    notify: bool = False
    color: BackgroundColor = BackgroundColor.YELLOW
    message_format: MessageFormat = MessageFormat.HTML
    format: ResponseFormat = ResponseFormat.JSON

    @property
    def endpoint(self) -> str:
        return "rooms/message"

    @property
    def method(self) -> str:
        return "POST"

    def to_params(self) -> Dict[str, str]:
        """Convert to form parameters using the service's wire keys."""
        return {
            "room_id": self.room.wire_value,
            "from": self.sender,
            "message": self.message,
            "notify": "1" if self.notify else "0",
            "color": self.color.value,
            "message_format": self.message_format.value,
        }


@dataclass
class MessageParams:
    """
    Options for a simple send: any field left as None uses the client
    default.

    Attributes:
        message: The message body
        sender: Name the message appears to be from
        room_name: Name of the target room
        color: Background color of the message
    """

    message: str
    sender: Optional[str] = None
    room_name: Optional[str] = None
    color: Optional[BackgroundColor] = None


@dataclass(frozen=True)
class FileAttachment:
    """
    File shared in a room.

    Attributes:
        name: File name
        size: Size in bytes
        url: Download URL
    """

    name: str
    size: Optional[int]
    url: str


@dataclass(frozen=True)
class Message(BaseResponse):
    """
    A single entry of room history.

    Attributes:
        date: When the message was sent
        sender: Display name of the sender
        sender_id: User id of the sender, or "api" for API messages
        message: Message body
        file: Attached file, if the entry is a file share
    """

    date: datetime
    sender: str
    message: str
    sender_id: Optional[str] = None
    file: Optional[FileAttachment] = None

    @classmethod
    def _from_data(cls, data: Dict[str, Any]) -> "Message":
        """Create from a rooms/history entry."""
        sender = data["from"]
        attachment = data.get("file")
        user_id = sender.get("user_id")
        return cls(
            date=as_timestamp(data["date"]),
            sender=sender["name"],
            message=data.get("message") or "",
            sender_id=None if user_id is None else str(user_id),
            file=FileAttachment(
                name=attachment["name"],
                size=as_int(attachment.get("size")),
                url=attachment["url"],
            )
            if attachment
            else None,
        )
