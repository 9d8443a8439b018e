"""
Helper Utility Module

This module provides various helper functions used throughout the Prompt Feed.
"""

import os
import hashlib
from datetime import datetime, timezone
from typing import Optional

BASE62_CHARS = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
SOCIAL_ID_LENGTH = 6


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def encode_base62(value: int, length: int = SOCIAL_ID_LENGTH) -> str:
    """
    Encode a non-negative integer in base62.

    Args:
        value: The integer to encode
        length: Minimum length; shorter results are right-padded with "0"

    Returns:
        str: The base62 representation
    """
    if value < 0:
        raise ValueError("value must be non-negative")

    result = ""
    while True:
        value, index = divmod(value, 62)
        result = BASE62_CHARS[index] + result
        if value == 0:
            break

    return result.ljust(length, "0")


def create_social_id(uid: str) -> str:
    """
    Derive a short, stable public id for a user.

    Nothing in the app calls this yet; demo handles come from
    services.mock_data.author_for.

    The first four bytes of the SHA-256 digest of the uid are read as a
    big-endian integer and base62-encoded.

    Args:
        uid: The user's internal id

    Returns:
        str: A six character social id
    """
    digest = hashlib.sha256(uid.encode("utf-8")).digest()
    value = int.from_bytes(digest[:4], "big")
    return encode_base62(value)


def truncate_text(text: Optional[str], max_length: int = 40, add_ellipsis: bool = True) -> Optional[str]:
    """
    Truncate text to a maximum length.

    Args:
        text: The text to truncate
        max_length: Maximum length
        add_ellipsis: Whether to add an ellipsis if text is truncated

    Returns:
        str: Truncated text
    """
    if not text or len(text) <= max_length:
        return text

    truncated = text[:max_length].rstrip()
    if add_ellipsis:
        truncated += "..."

    return truncated


def file_size(path: Optional[str]) -> int:
    """
    Size of a file in bytes, or 0 if it does not exist.

    Args:
        path: The file path to check
    """
    if not path or not os.path.isfile(path):
        return 0
    return os.path.getsize(path)
