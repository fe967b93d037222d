"""
Bounds-checked primitive reads and writes for the settings blob.

Every read validates against the buffer end before touching it, so a
truncated or corrupted blob surfaces as a DecodeError subclass instead of
an IndexError or struct.error.
"""
import struct
from typing import Tuple

from connsettings.codec.sanity import check_declared_length, check_encodable
from connsettings.exceptions import InvalidAsciiError, OutOfBoundsError

DWORD_SIZE = 4

_UINT32_LE = struct.Struct("<I")


def read_uint32_le(buffer: bytes, offset: int) -> int:
    """Read a little-endian DWORD at offset."""
    if offset < 0 or offset + DWORD_SIZE > len(buffer):
        raise OutOfBoundsError(
            f"Read of {DWORD_SIZE} bytes at offset {offset} "
            f"would exceed boundary at {len(buffer)}",
            offset=offset,
        )
    return _UINT32_LE.unpack_from(buffer, offset)[0]


def read_ascii_run(buffer: bytes, offset: int, length: int) -> str:
    """
    Read an ASCII string run whose length has already been read.

    Exactly one trailing NUL is stripped if present; its absence is tolerated.

    Raises:
        LengthOverflowError, ImplausibleLengthError: see check_declared_length
        InvalidAsciiError: If the run contains non-ASCII bytes
    """
    check_declared_length(length, offset, len(buffer))
    raw = bytes(buffer[offset:offset + length])
    try:
        text = raw.decode("ascii")
    except UnicodeDecodeError as e:
        raise InvalidAsciiError(
            f"Non-ASCII byte 0x{raw[e.start]:02X} at offset {offset + e.start}",
            offset=offset + e.start,
        ) from e

    if text.endswith("\x00"):
        text = text[:-1]
    return text


def read_length_prefixed_ascii(buffer: bytes, offset: int) -> Tuple[str, int]:
    """
    Read a DWORD length followed by that many ASCII bytes.

    Returns:
        (text, bytes consumed including the length prefix). A zero length
        means the string is absent and consumes only the prefix.
    """
    length = read_uint32_le(buffer, offset)
    if length == 0:
        return "", DWORD_SIZE
    return read_ascii_run(buffer, offset + DWORD_SIZE, length), DWORD_SIZE + length


def pack_uint32_le(value: int) -> bytes:
    return _UINT32_LE.pack(value)


def pack_length_prefixed_ascii(text: str, field: str = "value") -> bytes:
    """
    Serialize a string as DWORD length + ASCII bytes + NUL.

    Empty strings are written as a bare zero length.

    Raises:
        ValueTooLargeError: If the encoded run exceeds the sanity threshold
    """
    if not text:
        return pack_uint32_le(0)
    payload = text.encode("ascii") + b"\x00"
    check_encodable(field, len(payload))
    return pack_uint32_le(len(payload)) + payload
