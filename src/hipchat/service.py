"""
HipChat Client

This module provides the main client class for the HipChat HTTP API. It
sends messages to rooms, lists rooms and reads room history.

Architecture:
    - Every send call is normalized into one SendMessageRequest: values the
      caller leaves out are taken from the client configuration, then the
      request is validated (and truncated if enabled) before dispatch
    - Values passed to a single call apply to that call only; only the
      client properties change the configured defaults
    - The HTTP transport and the response decoder are injectable
      (for testability)
    - Read operations return either the raw response body or typed
      records decoded according to the configured response format
"""

import logging
from dataclasses import replace
from datetime import date as date_type
from typing import Iterator, List, Optional, Union

from .config import ClientConfig
from .decoder import ResponseDecoder
from .errors import InvalidParameter, MissingRoom, TransportFailure, UnsupportedFormat
from .schemas import (
    BackgroundColor,
    BaseRequest,
    ListRoomsRequest,
    Message,
    MessageFormat,
    MessageParams,
    ResponseFormat,
    Room,
    RoomHistoryRequest,
    RoomId,
    RoomName,
    RoomRef,
    SendMessageRequest,
)
from .transport import HttpTransport
from .utils import apply_policy

logger = logging.getLogger(__name__)

RoomArg = Union[RoomRef, int, str, None]
ColorArg = Union[BackgroundColor, str, None]
DateArg = Union[date_type, str, None]


class HipChatClient:
    """
    Client for the HipChat HTTP API.

    Attributes:
        config: Defaults applied to every call (see ClientConfig)
    """

    def __init__(
        self,
        token: Optional[str] = None,
        room: RoomArg = None,
        sender: Optional[str] = None,
        config: Optional[ClientConfig] = None,
        transport=None,
        decoder: Optional[ResponseDecoder] = None,
    ):
        """
        Initialize the client.

        Args:
            token: API authentication token, overrides config.token
            room: Default room (id, name or RoomRef), overrides config.room
            sender: Default sender name, overrides config.sender
            config: Initial configuration; the client keeps its own copy
                    (a default one if omitted)
            transport: Object with send(method, url, params) returning
                       (status_code, body); an HttpTransport if omitted
            decoder: Response decoder, a ResponseDecoder if omitted
        """
        self.config = replace(config) if config is not None else ClientConfig()
        if token is not None:
            self.config.token = token
        if room is not None:
            self.config.room = RoomRef.coerce(room)
        if sender is not None:
            self.config.sender = sender

        self._transport = transport or HttpTransport(timeout=self.config.timeout)
        self._decoder = decoder or ResponseDecoder()

        logger.info(f"HipChatClient initialized for {self.config.api_url}")

    @classmethod
    def from_env(cls, **kwargs) -> "HipChatClient":
        """Create a client configured from HIPCHAT_* environment variables."""
        return cls(config=ClientConfig.from_env(), **kwargs)

    def close(self) -> None:
        """Release the transport's resources."""
        close = getattr(self._transport, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> "HipChatClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # Configuration surface

    @property
    def token(self) -> Optional[str]:
        return self.config.token

    @token.setter
    def token(self, value: Optional[str]) -> None:
        self.config.token = value

    @property
    def room(self) -> Optional[RoomRef]:
        """Default room, by id or by name."""
        return self.config.room

    @room.setter
    def room(self, value: RoomArg) -> None:
        self.config.room = RoomRef.coerce(value)

    @property
    def room_id(self) -> Optional[int]:
        """Default room id, None if the default room is unset or a name."""
        room = self.config.room
        return room.value if isinstance(room, RoomId) else None

    @room_id.setter
    def room_id(self, value: int) -> None:
        self.config.room = RoomId(int(value))

    @property
    def room_name(self) -> Optional[str]:
        """Default room name, None if the default room is unset or an id."""
        room = self.config.room
        return room.value if isinstance(room, RoomName) else None

    @room_name.setter
    def room_name(self, value: str) -> None:
        self.config.room = RoomRef.coerce(str(value))

    @property
    def sender(self) -> str:
        return self.config.sender

    @sender.setter
    def sender(self, value: str) -> None:
        self.config.sender = value

    @property
    def notify(self) -> bool:
        return self.config.notify

    @notify.setter
    def notify(self, value: bool) -> None:
        self.config.notify = bool(value)

    @property
    def color(self) -> BackgroundColor:
        return self.config.color

    @color.setter
    def color(self, value: ColorArg) -> None:
        self.config.color = BackgroundColor.parse(value, "color")

    @property
    def format(self) -> ResponseFormat:
        return self.config.format

    @format.setter
    def format(self, value: Union[ResponseFormat, str]) -> None:
        if not isinstance(value, ResponseFormat):
            try:
                value = ResponseFormat(str(value).strip().lower())
            except ValueError:
                raise UnsupportedFormat(value) from None
        self.config.format = value

    @property
    def auto_truncate(self) -> bool:
        return self.config.auto_truncate

    @auto_truncate.setter
    def auto_truncate(self, value: bool) -> None:
        self.config.auto_truncate = bool(value)

    @property
    def message_format(self) -> MessageFormat:
        return self.config.message_format

    @message_format.setter
    def message_format(self, value: Union[MessageFormat, str]) -> None:
        self.config.message_format = MessageFormat.parse(value, "message_format")

    # Sending

    def build_request(
        self,
        message: str,
        room: RoomArg = None,
        sender: Optional[str] = None,
        notify: Optional[bool] = None,
        color: ColorArg = None,
        message_format: Union[MessageFormat, str, None] = None,
    ) -> SendMessageRequest:
        """
        Merge call arguments with the configured defaults.

        Arguments left as None take the configured default. The result is
        validated and, if auto-truncate is enabled, truncated.

        Returns:
            The canonical request that send_message would dispatch

        Raises:
            MissingRoom: If no room is given and none is configured
            InvalidParameter: If a field violates a service constraint
        """
        target = RoomRef.coerce(room) if room is not None else self.config.room
        if target is None:
            raise MissingRoom()

        request = SendMessageRequest(
            message=message,
            room=target,
            sender=self.config.sender if sender is None else sender,
            notify=self.config.notify if notify is None else bool(notify),
            color=self.config.color
            if color is None
            else BackgroundColor.parse(color, "color"),
            message_format=self.config.message_format
            if message_format is None
            else MessageFormat.parse(message_format, "message_format"),
            format=self.config.format,
        )
        return apply_policy(request, self.config.auto_truncate)

    def send_request(self, request: SendMessageRequest) -> None:
        """
        Validate and dispatch a canonical request.

        Raises:
            InvalidParameter: If a field violates a service constraint
            TransportFailure: If the call fails or returns a non-2xx status
        """
        request = apply_policy(request, self.config.auto_truncate)
        logger.info(f"Sending message to room '{request.room.wire_value}'")
        self._call(request, request.format)

    def send_message(
        self,
        message: str,
        room: RoomArg = None,
        sender: Optional[str] = None,
        notify: Optional[bool] = None,
        color: ColorArg = None,
        message_format: Union[MessageFormat, str, None] = None,
    ) -> None:
        """
        Send a message to a room.

        Args:
            message: The message to send; may contain basic HTML
            room: Target room (id, name or RoomRef), default room if None
            sender: Name the message appears to be from, default if None
            notify: Whether to notify people in the room, default if None
            color: Background color, default if None
            message_format: "html" or "text", default if None

        Raises:
            MissingRoom: If no room is given and none is configured
            InvalidParameter: If a field violates a service constraint
            TransportFailure: If the call fails or returns a non-2xx status
        """
        self.send_request(
            self.build_request(message, room, sender, notify, color, message_format)
        )

    def send_message_to_room(
        self,
        message: str,
        room: RoomArg,
        sender: Optional[str] = None,
        notify: Optional[bool] = None,
    ) -> None:
        """Send a message to the given room."""
        if RoomRef.coerce(room) is None:
            raise MissingRoom("Room must not be empty")
        self.send_message(message, room=room, sender=sender, notify=notify)

    def send_message_as(
        self,
        message: str,
        sender: str,
        notify: Optional[bool] = None,
        color: ColorArg = None,
    ) -> None:
        """Send a message to the default room under the given sender name."""
        self.send_message(message, sender=sender, notify=notify, color=color)

    def send_colored_message(
        self, message: str, color: ColorArg, notify: Optional[bool] = None
    ) -> None:
        """Send a message to the default room with the given background color."""
        self.send_message(message, notify=notify, color=color)

    def send(self, params: MessageParams) -> None:
        """Send a message described by a MessageParams options object."""
        self.send_message(
            params.message,
            room=params.room_name,
            sender=params.sender,
            color=params.color,
        )

    # Rooms

    def list_rooms(self) -> str:
        """
        List the rooms available to the token.

        Returns:
            The raw response body, in the configured response format

        Raises:
            TransportFailure: If the call fails or returns a non-2xx status
        """
        return self._call(ListRoomsRequest(), self.config.format)

    def list_rooms_typed(self) -> List[Room]:
        """
        List the rooms available to the token as Room records.

        Raises:
            TransportFailure: If the call fails or returns a non-2xx status
            DecodeError: If the response does not match the expected shape
            UnsupportedFormat: If the configured format cannot be decoded
        """
        fmt = self.config.format
        body = self._call(ListRoomsRequest(), fmt)
        rooms = self._decoder.decode_rooms(body, fmt)
        logger.info(f"Received rooms list with {len(rooms)} rooms")
        return rooms

    def yield_rooms(self) -> Iterator[Room]:
        """
        Yield the rooms available to the token one at a time.

        Nothing is fetched until iteration starts. Each call fetches the
        list again; the response is decoded as the caller advances.

        Example:
            for room in client.yield_rooms():
                print(room.name)
        """
        fmt = self.config.format
        body = self._call(ListRoomsRequest(), fmt)
        yield from self._decoder.iter_rooms(body, fmt)

    # History

    def room_history(self, date: DateArg = None, room: RoomArg = None) -> str:
        """
        Get the history of a room for a single day.

        Args:
            date: Day to read (date, datetime or "YYYY-MM-DD");
                  the most recent messages if None
            room: Room to read, the default room if None

        Returns:
            The raw response body, in the configured response format

        Raises:
            MissingRoom: If no room is given and none is configured
            TransportFailure: If the call fails or returns a non-2xx status
        """
        return self._call(self._history_request(date, room), self.config.format)

    def room_history_typed(
        self, date: DateArg = None, room: RoomArg = None
    ) -> List[Message]:
        """
        Get the history of a room for a single day as Message records.

        Raises:
            MissingRoom: If no room is given and none is configured
            TransportFailure: If the call fails or returns a non-2xx status
            DecodeError: If the response does not match the expected shape
            UnsupportedFormat: If the configured format cannot be decoded
        """
        fmt = self.config.format
        body = self._call(self._history_request(date, room), fmt)
        messages = self._decoder.decode_messages(body, fmt)
        logger.info(f"Received {len(messages)} history messages")
        return messages

    def _history_request(self, date: DateArg, room: RoomArg) -> RoomHistoryRequest:
        target = RoomRef.coerce(room) if room is not None else self.config.room
        if target is None:
            raise MissingRoom()

        if date is None:
            day = "recent"
        elif isinstance(date, date_type):
            day = date.strftime("%Y-%m-%d")
        else:
            day = str(date)

        return RoomHistoryRequest(
            room_id=target.wire_value, date=day, timezone=self.config.timezone
        )

    # Dispatch

    def _call(self, request: BaseRequest, fmt: ResponseFormat) -> str:
        if not self.config.token:
            raise InvalidParameter("auth_token", "required", "no API token configured")

        params = request.to_params()
        params["auth_token"] = self.config.token
        params["format"] = fmt.value
        url = f"{self.config.api_url.rstrip('/')}/{request.endpoint}"

        logger.debug(f"{request.method} {request.endpoint} format={fmt.value}")
        status, body = self._transport.send(request.method, url, params)

        if not 200 <= status < 300:
            detail = self._decoder.decode_error(body, fmt) or body.strip()[:200]
            raise TransportFailure(detail or "request failed", status_code=status, body=body)
        return body
