"""
Room Schema Definitions

This module defines room references, the Room record returned by the
rooms/list call, and the requests for room-scoped read operations.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional, Union

from .base import BaseRequest, BaseResponse, as_bool, as_int, as_timestamp


@dataclass(frozen=True)
class RoomRef:
    """
    Reference to a room, either by numeric id or by name.

    The service accepts both in the same ``room_id`` parameter, so the
    variant only matters to callers; it is resolved to a wire value at
    dispatch time.
    """

    @property
    def wire_value(self) -> str:
        raise NotImplementedError("Subclasses must define wire_value")

    @classmethod
    def coerce(cls, value: Union["RoomRef", int, str, None]) -> Optional["RoomRef"]:
        """
        Build a RoomRef from an int, a string or an existing RoomRef.

        Empty or blank names resolve to None.
        """
        if value is None or isinstance(value, RoomRef):
            return value
        if isinstance(value, bool):
            raise TypeError("Room must be an int, str or RoomRef")
        if isinstance(value, int):
            return RoomId(value)
        if isinstance(value, str):
            name = value.strip()
            return RoomName(name) if name else None
        raise TypeError("Room must be an int, str or RoomRef")

    @classmethod
    def parse(cls, text: str) -> Optional["RoomRef"]:
        """Parse configuration text: digits become a RoomId, else a RoomName."""
        text = (text or "").strip()
        if text.isdigit():
            return RoomId(int(text))
        return cls.coerce(text)


@dataclass(frozen=True)
class RoomId(RoomRef):
    """Room referenced by its numeric id."""

    value: int

    @property
    def wire_value(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class RoomName(RoomRef):
    """Room referenced by its display name."""

    value: str

    @property
    def wire_value(self) -> str:
        return self.value


@dataclass(frozen=True)
class Room(BaseResponse):
    """
    A chat room as listed by the service.

    Attributes:
        room_id: Numeric room identifier
        name: Display name of the room
        topic: Current room topic
        last_active: Time of the last message, None if never active
        created: Creation time
        owner_user_id: Id of the room owner
        is_archived: Whether the room is archived
        is_private: Whether the room is private
        xmpp_jid: XMPP address of the room
    """

    room_id: int
    name: str
    topic: str = ""
    last_active: Optional[datetime] = None
    created: Optional[datetime] = None
    owner_user_id: Optional[int] = None
    is_archived: bool = False
    is_private: bool = False
    xmpp_jid: Optional[str] = None

    @property
    def ref(self) -> RoomId:
        """Reference usable as the room of a send or history call."""
        return RoomId(self.room_id)

    @classmethod
    def _from_data(cls, data: Dict[str, Any]) -> "Room":
        """Create from a rooms/list entry."""
        return cls(
            room_id=int(data["room_id"]),
            name=data["name"],
            topic=data.get("topic") or "",
            last_active=as_timestamp(data.get("last_active")),
            created=as_timestamp(data.get("created")),
            owner_user_id=as_int(data.get("owner_user_id")),
            is_archived=as_bool(data.get("is_archived")),
            is_private=as_bool(data.get("is_private")),
            xmpp_jid=data.get("xmpp_jid"),
        )


@dataclass
class ListRoomsRequest(BaseRequest):
    """
    Request to list all rooms available to the token.

    This request has no parameters of its own.
    """

    @property
    def endpoint(self) -> str:
        return "rooms/list"


@dataclass
class RoomHistoryRequest(BaseRequest):
    """
    Request for the history of a single room on a single day.

    Attributes:
        room_id: Wire value of the room (id or name)
        date: Day in YYYY-MM-DD form, or "recent" for the latest messages
        timezone: Timezone used to interpret the date
    """

    room_id: str
    date: str = "recent"
    timezone: Optional[str] = None

    @property
    def endpoint(self) -> str:
        return "rooms/history"
