"""
Schemas Package

This package contains the request and response schemas of the HipChat API.
Schemas are organized by category: room and message operations.

The base module also defines the enumerations shared across schemas
(BackgroundColor, ResponseFormat, MessageFormat).
"""

from .base import (
    BaseRequest,
    BaseResponse,
    BackgroundColor,
    ResponseFormat,
    MessageFormat,
)
from .room import (
    RoomRef,
    RoomId,
    RoomName,
    Room,
    ListRoomsRequest,
    RoomHistoryRequest,
)
from .message import (
    SendMessageRequest,
    MessageParams,
    Message,
    FileAttachment,
)

__all__ = [
    # Base classes
    "BaseRequest",
    "BaseResponse",
    # Enumerations
    "BackgroundColor",
    "ResponseFormat",
    "MessageFormat",
    # Room schemas
    "RoomRef",
    "RoomId",
    "RoomName",
    "Room",
    "ListRoomsRequest",
    "RoomHistoryRequest",
    # Message schemas
    "SendMessageRequest",
    "MessageParams",
    "Message",
    "FileAttachment",
]
