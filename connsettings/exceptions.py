"""
Custom Exception Hierarchy for the connection settings codec

Provides structured exceptions for codec and store failures.
All custom exceptions inherit from ConnSettingsError base class.

Decode errors are normally carried inside a DecodeResult rather than
raised, since malformed input is an expected condition. They are still
exceptions so that callers who prefer raising can do so via
decode_or_raise().
"""
from enum import Enum
from typing import List, Optional, Tuple


class ErrorKind(str, Enum):
    """Machine-readable error categories"""

    OUT_OF_BOUNDS = "out_of_bounds"
    LENGTH_OVERFLOW = "length_overflow"
    IMPLAUSIBLE_LENGTH = "implausible_length"
    INVALID_ASCII = "invalid_ascii"
    TRAILING_DATA = "trailing_data"
    UNKNOWN_LAYOUT = "unknown_layout"
    VALUE_TOO_LARGE = "value_too_large"
    CODEC_ERROR = "codec_error"
    DECODE_ERROR = "decode_error"
    ENCODE_ERROR = "encode_error"


class ConnSettingsError(Exception):
    """
    Base exception for all codec and store errors.

    All custom exceptions should inherit from this class to allow
    catching all project errors with a single except clause.
    """
    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


# Codec Errors

class CodecError(ConnSettingsError):
    """
    Errors raised while decoding or encoding a settings blob.

    Base class for all byte-layout handling errors. Every subclass sets
    its own kind; the base kinds only show up for errors raised directly.
    """
    kind: ErrorKind = ErrorKind.CODEC_ERROR


class DecodeError(CodecError):
    """
    Failed to decode a blob.

    Carries the offset at which the failure was detected so the decoder
    can rank competing layout attempts by how far they got.
    """
    kind = ErrorKind.DECODE_ERROR

    def __init__(self, message: str, offset: int = 0, details: Optional[dict] = None):
        super().__init__(message, {"offset": offset, **(details or {})})
        self.offset = offset


class OutOfBoundsError(DecodeError):
    """Fewer bytes remain than a fixed-width field requires."""
    kind = ErrorKind.OUT_OF_BOUNDS


class LengthOverflowError(DecodeError):
    """A declared string length runs past the end of the buffer."""
    kind = ErrorKind.LENGTH_OVERFLOW


class ImplausibleLengthError(DecodeError):
    """A declared string length exceeds the sanity threshold."""
    kind = ErrorKind.IMPLAUSIBLE_LENGTH


class InvalidAsciiError(DecodeError):
    """A string run contains bytes outside the ASCII range."""
    kind = ErrorKind.INVALID_ASCII


class TrailingDataError(DecodeError):
    """Bytes after the last string are not a valid zero padding tail."""
    kind = ErrorKind.TRAILING_DATA


class UnknownLayoutError(DecodeError):
    """
    No known layout fully and plausibly consumed the buffer.

    Attributes:
        buffer_length: Size of the rejected buffer
        reason: Failure of the attempt that got furthest
        attempts: (layout name, error) for every candidate tried
    """
    kind = ErrorKind.UNKNOWN_LAYOUT

    def __init__(
        self,
        buffer_length: int,
        reason: Optional[DecodeError] = None,
        attempts: Optional[List[Tuple[str, DecodeError]]] = None,
    ):
        suffix = f": {reason.message}" if reason is not None else ""
        super().__init__(
            f"No known layout matches {buffer_length}-byte buffer{suffix}",
            offset=reason.offset if reason is not None else 0,
            details={
                "buffer_length": buffer_length,
                "reason_kind": reason.kind.value if reason is not None else None,
            },
        )
        self.buffer_length = buffer_length
        self.reason = reason
        self.attempts = attempts or []


class EncodeError(CodecError):
    """Failed to serialize a record to bytes."""
    kind = ErrorKind.ENCODE_ERROR


class ValueTooLargeError(EncodeError):
    """A string field exceeds the sanity threshold and cannot be encoded."""
    kind = ErrorKind.VALUE_TOO_LARGE

    def __init__(self, field: str, length: int, limit: int):
        super().__init__(
            f"Field '{field}' is {length} bytes encoded, limit is {limit}",
            {"field": field, "length": length, "limit": limit},
        )
        self.field = field
        self.length = length
        self.limit = limit


# Store Errors

class StoreError(ConnSettingsError):
    """
    Settings store failures.

    Base class for errors reading or writing the persisted blob.
    """
    pass


class StoreReadError(StoreError):
    """Failed to read the raw blob from the store."""
    pass


class StoreWriteError(StoreError):
    """Failed to write the raw blob to the store."""
    pass


# Validation and Assertion Errors

class InvariantViolation(ConnSettingsError):
    """
    Internal invariant violated.

    Indicates a bug in the codec itself, such as a malformed layout
    definition (should never happen).
    """
    pass
