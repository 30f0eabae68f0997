"""
Utility functions for the Gifddo client.

Provides encoding, identifier and time helpers.
"""

import base64
import secrets
import string
from datetime import datetime, timezone
from typing import Optional, Union

STAMP_ALPHABET = string.ascii_lowercase + string.digits
DATETIME_FORMAT = '%Y-%m-%dT%H:%M:%S%z'


def b64e(b: bytes) -> str:
    """Base64 encode bytes to string."""
    return base64.b64encode(b).decode('ascii')


def b64d(s: Union[str, bytes]) -> bytes:
    """Base64 decode a string or bytes; characters outside the alphabet are rejected."""
    if not isinstance(s, (str, bytes)):
        raise TypeError(f"Expected str or bytes, got {type(s).__name__}")
    return base64.b64decode(to_bytes(s), validate=True)


def to_bytes(value: Union[str, bytes]) -> bytes:
    if isinstance(value, str):
        return value.encode('utf-8')
    return bytes(value)


def random_string(length: int = 20) -> str:
    """Generate a random lowercase alphanumeric identifier."""
    return ''.join(secrets.choice(STAMP_ALPHABET) for _ in range(length))


def date_string(now: Optional[datetime] = None) -> str:
    """
    Format a timestamp as YYYY-MM-DDThh:mm:ss+hhmm.

    Defaults to the current UTC time.
    """
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.strftime(DATETIME_FORMAT)
