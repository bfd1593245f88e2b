"""
Client Errors

Exception types raised by the HipChat client. All of them derive from
HipChatError so callers can catch the whole family at once.
"""

from typing import Optional


class HipChatError(Exception):
    """Base class for all client errors."""


class InvalidParameter(HipChatError, ValueError):
    """
    A request field violates a service constraint.

    Attributes:
        field: Wire name of the offending field (e.g. "from", "message")
        constraint: Short name of the violated constraint
            (e.g. "max_length", "charset", "required")
    """

    def __init__(self, field: str, constraint: str, detail: str = ""):
        self.field = field
        self.constraint = constraint
        message = f"Invalid '{field}' ({constraint})"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class MissingRoom(HipChatError):
    """No room was given and no default room is configured."""

    def __init__(self, message: str = "No room given and no default room configured"):
        super().__init__(message)


class TransportFailure(HipChatError):
    """
    The HTTP call failed or returned a non-2xx status.

    Attributes:
        cause: Underlying exception or a description of the failure
        status_code: HTTP status if a response was received
        body: Raw response body if a response was received
    """

    def __init__(
        self,
        cause,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ):
        self.cause = cause
        self.status_code = status_code
        self.body = body
        if status_code is not None:
            super().__init__(f"HTTP {status_code}: {cause}")
        else:
            super().__init__(f"Transport error: {cause}")


class DecodeError(HipChatError):
    """
    A response body did not match the expected shape.

    Attributes:
        fragment: The part of the body that could not be decoded
        expected_shape: Description of what the decoder expected
    """

    def __init__(self, fragment: str, expected_shape: str):
        self.fragment = fragment
        self.expected_shape = expected_shape
        super().__init__(
            f"Could not decode response as {expected_shape}: {fragment[:200]!r}"
        )


class UnsupportedFormat(HipChatError, ValueError):
    """The requested response format has no decoder."""

    def __init__(self, fmt):
        self.format = fmt
        super().__init__(f"Unsupported response format: {fmt!r}")
