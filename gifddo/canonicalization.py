"""
Gifddo Canonical Message Packing

Every value is written as a three digit, zero padded decimal byte length
followed by the value's UTF-8 bytes. Segments are concatenated in the order
given, with no separators. The packed bytes are the exact input to signing
and verification.
"""

from typing import Any, Iterable, List

LENGTH_WIDTH = 3
MAX_VALUE_LENGTH = 10 ** LENGTH_WIDTH - 1


class FieldLengthError(ValueError):
    """Raised when a value does not fit in the three digit length prefix."""

    def __init__(self, index: int, length: int):
        self.index = index
        self.length = length
        super().__init__(
            f"Value at position {index} is {length} bytes; "
            f"maximum is {MAX_VALUE_LENGTH}"
        )


def pack(values: Iterable[Any]) -> bytes:
    """
    Pack an ordered sequence of values into a canonical message.

    Order is preserved exactly: values are neither sorted nor deduplicated.
    Non-string values are converted with str() first, so 10 and "10" pack
    identically.

    Raises:
        FieldLengthError: a value is longer than 999 bytes
    """
    segments = []
    for index, value in enumerate(values):
        raw = str(value).encode('utf-8')
        if len(raw) > MAX_VALUE_LENGTH:
            raise FieldLengthError(index, len(raw))
        segments.append(str(len(raw)).zfill(LENGTH_WIDTH).encode('ascii'))
        segments.append(raw)
    return b''.join(segments)


def unpack(message: bytes) -> List[str]:
    """Split a canonical message back into its values."""
    values = []
    offset = 0
    while offset < len(message):
        prefix = message[offset:offset + LENGTH_WIDTH]
        if len(prefix) != LENGTH_WIDTH or not prefix.isdigit():
            raise ValueError(f"Invalid length prefix at byte {offset}: {prefix!r}")
        length = int(prefix)
        offset += LENGTH_WIDTH
        if offset + length > len(message):
            raise ValueError(
                f"Truncated message: value at byte {offset} needs {length} bytes"
            )
        values.append(message[offset:offset + length].decode('utf-8'))
        offset += length
    return values
