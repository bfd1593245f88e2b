"""
Client Configuration

Default values used for every field a caller does not pass explicitly,
plus the authentication token and connection settings.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import InvalidParameter
from .schemas import BackgroundColor, MessageFormat, ResponseFormat, RoomRef

DEFAULT_API_URL = "https://api.hipchat.com/v1"
DEFAULT_SENDER = "API"
DEFAULT_TIMEOUT = 10.0


@dataclass
class ClientConfig:
    """
    Client-wide defaults.

    Attributes:
        token: API authentication token
        room: Default target room, None if unset
        sender: Default sender name
        notify: Default notification flag
        color: Default background color
        format: Response format requested from the service
        auto_truncate: Truncate over-long sender names and messages
        message_format: Default rendering of message bodies
        timezone: Timezone used for history dates, None for the service default
        api_url: Base URL of the API
        timeout: Request timeout in seconds
    """

    token: Optional[str] = None
    room: Optional[RoomRef] = None
    sender: str = DEFAULT_SENDER
    notify: bool = False
    color: BackgroundColor = BackgroundColor.YELLOW
    format: ResponseFormat = ResponseFormat.JSON
    auto_truncate: bool = True
    message_format: MessageFormat = MessageFormat.HTML
    timezone: Optional[str] = None
    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ClientConfig":
        """
        Build a configuration from HIPCHAT_* environment variables.

        Unset variables keep their defaults.

        Raises:
            InvalidParameter: If a color, format or timeout variable is invalid
        """
        env = os.environ if environ is None else environ

        return cls(
            token=env.get("HIPCHAT_TOKEN") or None,
            room=RoomRef.parse(env.get("HIPCHAT_ROOM", "")),
            sender=env.get("HIPCHAT_FROM", DEFAULT_SENDER),
            notify=env.get("HIPCHAT_NOTIFY", "0").strip().lower() in ("1", "true", "yes"),
            color=BackgroundColor.parse(env.get("HIPCHAT_COLOR", "yellow"), "color"),
            format=ResponseFormat.parse(env.get("HIPCHAT_FORMAT", "json"), "format"),
            auto_truncate=env.get("HIPCHAT_AUTO_TRUNCATE", "1").strip().lower()
            in ("1", "true", "yes"),
            timezone=env.get("HIPCHAT_TIMEZONE") or None,
            api_url=env.get("HIPCHAT_API_URL", DEFAULT_API_URL),
            timeout=_parse_timeout(env.get("HIPCHAT_TIMEOUT", DEFAULT_TIMEOUT)),
        )


def _parse_timeout(value) -> float:
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        raise InvalidParameter(
            "timeout", "number", f"{value!r} is not a number of seconds"
        ) from None
    if timeout <= 0:
        raise InvalidParameter("timeout", "number", "must be greater than zero")
    return timeout
