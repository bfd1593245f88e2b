"""
Base Schema Classes

This module provides base classes for request and response schemas with
common serialization and deserialization methods, plus the enumerations
shared by requests and responses.
"""

from dataclasses import asdict, fields
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, TypeVar

from ..errors import InvalidParameter

T = TypeVar("T", bound="BaseResponse")


class _ChoiceEnum(str, Enum):
    """String enum that parses case-insensitively from configuration."""

    @classmethod
    def parse(cls, value, field: str):
        """
        Convert a string (or an existing member) to an enum member.

        Raises:
            InvalidParameter: If the value is not one of the members
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            allowed = ", ".join(member.value for member in cls)
            raise InvalidParameter(
                field, "choice", f"{value!r} is not one of {allowed}"
            ) from None


class BackgroundColor(_ChoiceEnum):
    """Background color of a message in the room."""

    YELLOW = "yellow"
    RED = "red"
    GREEN = "green"
    PURPLE = "purple"
    GRAY = "gray"
    RANDOM = "random"


class ResponseFormat(_ChoiceEnum):
    """Wire format of API responses: structured (json) or markup (xml)."""

    JSON = "json"
    XML = "xml"


class MessageFormat(_ChoiceEnum):
    """How the service renders the message body."""

    HTML = "html"
    TEXT = "text"


class BaseRequest:
    """
    Base class for request schemas.

    Requests are always sent as form-encoded key/value pairs, whatever
    response format is configured.
    """

    def to_params(self) -> Dict[str, str]:
        """
        Convert to form parameters.

        Returns:
            Mapping of wire keys to string values. None values are dropped.
        """
        if not (hasattr(self, "__dataclass_fields__") and fields(self)):
            return {}
        return {
            key: _to_wire(value)
            for key, value in asdict(self).items()
            if value is not None
        }

    @property
    def endpoint(self) -> str:
        """
        API path of the request, relative to the base URL.

        Should be overridden by subclasses.
        """
        raise NotImplementedError("Subclasses must define endpoint")

    @property
    def method(self) -> str:
        """HTTP method used for the request."""
        return "GET"


def _to_wire(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


class BaseResponse:
    """
    Base class for response schemas.

    Records are built from decoded dictionaries; json and xml payloads
    reach from_dict in the same shape.
    """

    @classmethod
    def from_dict(cls: type[T], data: Dict[str, Any]) -> T:
        """
        Create instance from dictionary.

        Args:
            data: Dictionary containing response data.

        Returns:
            Instance of the response class.
        """
        return cls._from_data(data)

    @classmethod
    def _from_data(cls: type[T], data: Dict[str, Any]) -> T:
        """
        Create instance from response data dictionary.

        Should be overridden by subclasses for custom deserialization.
        """
        return cls(**data)


# Field coercion helpers. JSON payloads carry native types while XML
# payloads carry strings, so record constructors accept both.


def as_int(value: Any) -> Optional[int]:
    """Convert an int-like value to int, keeping None and empty as None."""
    if value is None or value == "":
        return None
    return int(value)


def as_bool(value: Any) -> bool:
    """Convert 0/1, true/false and native booleans to bool."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in ("1", "true", "yes")


def as_timestamp(value: Any) -> Optional[datetime]:
    """
    Convert a service timestamp to an aware datetime.

    Accepts Unix epoch seconds (0 meaning "never") and ISO 8601 strings
    such as "2010-11-19T15:48:19-0800".
    """
    if value is None or value == "":
        return None
    if isinstance(value, (int, float)) or str(value).isdigit():
        seconds = int(value)
        if seconds == 0:
            return None
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+0000"
    return datetime.strptime(text, "%Y-%m-%dT%H:%M:%S%z")
