"""
Encoder - serializes records in the canonical 12-byte-header layout.

Output is always canonical regardless of the layout a record was decoded
from, so unknown_field is not written. Length prefixes are recomputed from
the strings and a fixed zero padding tail is appended.
"""
import structlog

from connsettings.codec.layouts import CANONICAL_LAYOUT, PADDING_SIZE, STRING_FIELDS
from connsettings.codec.primitives import DWORD_SIZE, pack_length_prefixed_ascii, pack_uint32_le
from connsettings.models import ConnectionSettingsRecord

logger = structlog.get_logger()


def encode(record: ConnectionSettingsRecord) -> bytes:
    """
    Serialize a record to bytes.

    raw_flags is written verbatim; flag bits are never inferred from the
    strings here.

    Raises:
        ValueTooLargeError: If a string field exceeds the sanity threshold
    """
    parts = [pack_uint32_le(getattr(record, slot.value)) for slot in CANONICAL_LAYOUT.field_order]
    for name in STRING_FIELDS:
        parts.append(pack_length_prefixed_ascii(getattr(record, name), field=name))
    parts.append(b"\x00" * PADDING_SIZE)

    blob = b"".join(parts)
    logger.debug(
        "blob_encoded",
        total_bytes=len(blob),
        dropped_unknown_field=record.unknown_field is not None,
    )
    return blob


def encoded_length(record: ConnectionSettingsRecord) -> int:
    """Size of encode(record) without building it."""
    total = CANONICAL_LAYOUT.fixed_header_size + PADDING_SIZE
    for name in STRING_FIELDS:
        value = getattr(record, name)
        total += DWORD_SIZE + (len(value) + 1 if value else 0)
    return total
