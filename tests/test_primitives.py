"""Tests for bounds-checked primitive reads/writes - all synthetic bytes."""
import struct

import pytest

from connsettings.codec.primitives import (
    pack_length_prefixed_ascii,
    pack_uint32_le,
    read_ascii_run,
    read_length_prefixed_ascii,
    read_uint32_le,
)
from connsettings.codec.sanity import SANITY_MAX_STRING_LEN, check_declared_length
from connsettings.exceptions import (
    CodecError,
    DecodeError,
    EncodeError,
    ErrorKind,
    ImplausibleLengthError,
    InvalidAsciiError,
    LengthOverflowError,
    OutOfBoundsError,
    UnknownLayoutError,
    ValueTooLargeError,
)


def test_read_uint32_le():
    data = struct.pack("<II", 42, 0xDEADBEEF)
    assert read_uint32_le(data, 0) == 42
    assert read_uint32_le(data, 4) == 0xDEADBEEF


def test_read_uint32_le_past_end():
    with pytest.raises(OutOfBoundsError, match="exceed boundary") as exc_info:
        read_uint32_le(b"\x01\x02\x03\x04\x05", 2)
    assert exc_info.value.offset == 2
    assert exc_info.value.kind == ErrorKind.OUT_OF_BOUNDS


def test_read_uint32_le_negative_offset():
    with pytest.raises(OutOfBoundsError):
        read_uint32_le(b"\x00" * 8, -1)


def test_read_uint32_le_accepts_bytearray():
    assert read_uint32_le(bytearray(b"\x46\x00\x00\x00"), 0) == 0x46


def test_length_prefixed_zero_length_is_absent():
    assert read_length_prefixed_ascii(struct.pack("<I", 0), 0) == ("", 4)


def test_length_prefixed_strips_one_terminator():
    data = struct.pack("<I", 6) + b"p:8080" + struct.pack("<I", 7) + b"p:8080\x00"
    assert read_length_prefixed_ascii(data, 0) == ("p:8080", 10)
    assert read_length_prefixed_ascii(data, 10) == ("p:8080", 11)


def test_length_prefixed_strips_only_one_nul():
    data = struct.pack("<I", 4) + b"ab\x00\x00"
    assert read_length_prefixed_ascii(data, 0) == ("ab\x00", 8)


def test_length_prefixed_overflow():
    data = struct.pack("<I", 50) + b"short\x00"
    with pytest.raises(LengthOverflowError, match="exceeds remaining 6 bytes"):
        read_length_prefixed_ascii(data, 0)


def test_length_prefixed_implausible():
    length = SANITY_MAX_STRING_LEN + 1
    data = struct.pack("<I", length) + b"a" * length
    with pytest.raises(ImplausibleLengthError, match="sanity limit"):
        read_length_prefixed_ascii(data, 0)


def test_overflow_is_checked_before_plausibility():
    # Huge declared length in a short buffer is an overflow, not implausible
    data = struct.pack("<I", 0x41414141) + b"AAAA"
    with pytest.raises(LengthOverflowError):
        read_length_prefixed_ascii(data, 0)


def test_length_prefixed_missing_prefix():
    with pytest.raises(OutOfBoundsError):
        read_length_prefixed_ascii(b"\x01\x00", 0)


def test_ascii_run_rejects_high_bytes():
    with pytest.raises(InvalidAsciiError, match="0xE9") as exc_info:
        read_ascii_run(b"xxcaf\xe9\x00", 2, 5)
    assert exc_info.value.offset == 5


def test_ascii_run_zero_length():
    assert read_ascii_run(b"", 0, 0) == ""


def test_check_declared_length_at_limit_passes():
    check_declared_length(SANITY_MAX_STRING_LEN, 0, SANITY_MAX_STRING_LEN)


def test_pack_uint32_le():
    assert pack_uint32_le(0x46) == b"\x46\x00\x00\x00"
    assert pack_uint32_le(0xFFFFFFFF) == b"\xff\xff\xff\xff"


def test_pack_length_prefixed_ascii():
    assert pack_length_prefixed_ascii("") == b"\x00\x00\x00\x00"
    assert pack_length_prefixed_ascii("<local>") == struct.pack("<I", 8) + b"<local>\x00"


def test_pack_length_prefixed_ascii_limit():
    longest = "a" * (SANITY_MAX_STRING_LEN - 1)
    assert len(pack_length_prefixed_ascii(longest)) == 4 + SANITY_MAX_STRING_LEN

    with pytest.raises(ValueTooLargeError) as exc_info:
        pack_length_prefixed_ascii("a" * SANITY_MAX_STRING_LEN, field="proxy_server")
    assert exc_info.value.field == "proxy_server"
    assert exc_info.value.length == SANITY_MAX_STRING_LEN + 1
    assert exc_info.value.kind == ErrorKind.VALUE_TOO_LARGE


@pytest.mark.parametrize("error_class,kind", [
    (CodecError, ErrorKind.CODEC_ERROR),
    (DecodeError, ErrorKind.DECODE_ERROR),
    (EncodeError, ErrorKind.ENCODE_ERROR),
    (OutOfBoundsError, ErrorKind.OUT_OF_BOUNDS),
    (LengthOverflowError, ErrorKind.LENGTH_OVERFLOW),
])
def test_base_error_kinds(error_class, kind):
    assert error_class("failed").kind == kind


def test_unknown_layout_kind_is_distinct_from_plain_decode_error():
    assert UnknownLayoutError(8).kind == ErrorKind.UNKNOWN_LAYOUT
    assert DecodeError("failed").kind != ErrorKind.UNKNOWN_LAYOUT
