"""
HipChat Client Package

This package provides a client for the HipChat HTTP API: sending messages
to rooms, listing rooms and reading room history, with responses available
as raw text or as typed records.

Schemas are organized in the `schemas` subpackage by category:
    - room: Room references, the Room record and room read requests
    - message: The canonical send request and history Message records
"""

from .service import HipChatClient
from .config import ClientConfig
from .decoder import ResponseDecoder
from .transport import HttpTransport
from .errors import (
    HipChatError,
    InvalidParameter,
    MissingRoom,
    TransportFailure,
    DecodeError,
    UnsupportedFormat,
)
from .schemas import (
    # Enumerations
    BackgroundColor,
    ResponseFormat,
    MessageFormat,
    # Room schemas
    RoomRef,
    RoomId,
    RoomName,
    Room,
    # Message schemas
    SendMessageRequest,
    MessageParams,
    Message,
    FileAttachment,
)

__all__ = [
    # Service classes
    "HipChatClient",
    "ClientConfig",
    "ResponseDecoder",
    "HttpTransport",
    # Errors
    "HipChatError",
    "InvalidParameter",
    "MissingRoom",
    "TransportFailure",
    "DecodeError",
    "UnsupportedFormat",
    # Enumerations
    "BackgroundColor",
    "ResponseFormat",
    "MessageFormat",
    # Room schemas
    "RoomRef",
    "RoomId",
    "RoomName",
    "Room",
    # Message schemas
    "SendMessageRequest",
    "MessageParams",
    "Message",
    "FileAttachment",
]
