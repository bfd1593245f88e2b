"""
Utilities for the HipChat Client

This module contains helpers for validating outgoing requests.
"""

from .validation import (
    MAX_MESSAGE_LENGTH,
    MAX_SENDER_LENGTH,
    apply_policy,
    validate_message_content,
    validate_sender,
)

__all__ = [
    "MAX_MESSAGE_LENGTH",
    "MAX_SENDER_LENGTH",
    "apply_policy",
    "validate_message_content",
    "validate_sender",
]
