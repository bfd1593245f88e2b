"""
Validation Utilities

Contains the field constraints of the send-message call and the policy
that either truncates over-long values or rejects the request.
"""

import re
from dataclasses import replace
from typing import Optional, Tuple

from ..errors import InvalidParameter
from ..schemas import SendMessageRequest

# Sender constraints imposed by the service
MAX_SENDER_LENGTH = 15
SENDER_PATTERN = re.compile(r"^[A-Za-z0-9_\- ]+$")

# Message validation constants
MAX_MESSAGE_LENGTH = 10000


def validate_sender(sender: str) -> Tuple[bool, Optional[str]]:
    """
    Validate a sender name.

    Args:
        sender: The name the message will appear to be from

    Returns:
        tuple: (is_valid, constraint)
            - is_valid: True if the name is valid, False otherwise
            - constraint: Name of the violated constraint, None if valid
    """
    if not sender:
        return False, "required"

    if not SENDER_PATTERN.match(sender):
        return False, "charset"

    if len(sender) > MAX_SENDER_LENGTH:
        return False, "max_length"

    return True, None


def validate_message_content(content: str) -> Tuple[bool, Optional[str]]:
    """
    Validate message content.

    Args:
        content: The message content to validate

    Returns:
        tuple: (is_valid, constraint)
            - is_valid: True if content is valid, False otherwise
            - constraint: Name of the violated constraint, None if valid
    """
    if not content:
        return False, "required"

    if len(content) > MAX_MESSAGE_LENGTH:
        return False, "max_length"

    return True, None


_DETAILS = {
    ("from", "required"): "sender name cannot be empty",
    ("from", "charset"): "may only contain letters, digits, '-', '_' and spaces",
    ("from", "max_length"): f"must be at most {MAX_SENDER_LENGTH} characters",
    ("message", "required"): "message cannot be empty",
    ("message", "max_length"): f"must be at most {MAX_MESSAGE_LENGTH} characters",
}


def apply_policy(
    request: SendMessageRequest, auto_truncate: bool
) -> SendMessageRequest:
    """
    Enforce the sender and message constraints on a request.

    Over-long values are cut to the maximum length when auto_truncate is
    set, and only the kept prefix is then validated. Any other violation is
    always rejected.

    Args:
        request: The merged request
        auto_truncate: Whether over-long values are truncated

    Returns:
        The request, or a truncated copy of it

    Raises:
        InvalidParameter: If a constraint is violated and cannot be corrected
    """
    sender = _enforce(
        "from", request.sender, validate_sender, MAX_SENDER_LENGTH, auto_truncate
    )
    message = _enforce(
        "message",
        request.message,
        validate_message_content,
        MAX_MESSAGE_LENGTH,
        auto_truncate,
    )
    if sender == request.sender and message == request.message:
        return request
    return replace(request, sender=sender, message=message)


def _enforce(field, value, validator, max_length, auto_truncate) -> str:
    if auto_truncate and value and len(value) > max_length:
        value = value[:max_length]
    is_valid, constraint = validator(value)
    if is_valid:
        return value
    raise InvalidParameter(field, constraint, _DETAILS[(field, constraint)])
