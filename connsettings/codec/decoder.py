"""
Structural Decoder - tolerant decoding of connection settings blobs

Tries every known LayoutCandidate and accepts one only if it consumes the
whole buffer: header, three strings, and nothing after them except a zero
padding tail. A layout that merely reads without running off the end is
not enough.

Acceptance is two-tiered. A remainder that is empty or exactly one full
padding tail is a strict match; a shorter all-zero remainder is a tolerant
match (seen in older, smaller samples). Strict matches win over tolerant
ones. Among strict matches the first layout in DECODE_PRIORITY wins; among
tolerant matches CANONICAL_LAYOUT wins if it is one of them, since it is
the only shape ever written, and otherwise the first in priority order.

Malformed input never raises out of decode(). The outcome is a
DecodeResult carrying either the reconciled record or an
UnknownLayoutError describing the attempt that got furthest. An attempt
that failed inside its own fixed header ranks below any attempt that got
past its header.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import structlog

from connsettings.codec.layouts import (
    CANONICAL_LAYOUT,
    DECODE_PRIORITY,
    PADDING_SIZE,
    STRING_FIELDS,
    LayoutCandidate,
)
from connsettings.codec.primitives import (
    DWORD_SIZE,
    read_ascii_run,
    read_length_prefixed_ascii,
    read_uint32_le,
)
from connsettings.codec.reconciler import reconcile
from connsettings.exceptions import DecodeError, TrailingDataError, UnknownLayoutError
from connsettings.models import ConnectionSettingsRecord

logger = structlog.get_logger()

_STRICT = 1
_TOLERANT = 2


@dataclass(frozen=True)
class DecodeResult:
    """
    Outcome of decoding a blob.

    Exactly one of record / error is set. layout names the candidate that
    matched; it is diagnostic only and does not affect encoding.
    """
    record: Optional[ConnectionSettingsRecord] = None
    layout: Optional[LayoutCandidate] = None
    error: Optional[DecodeError] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.record is not None

    def unwrap(self) -> ConnectionSettingsRecord:
        """Return the record or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.record


def _parse_with_layout(data: bytes, layout: LayoutCandidate) -> Tuple[Dict[str, Any], int]:
    """
    Parse header and strings under one layout.

    Returns:
        (field values keyed by record field name, bytes consumed)

    Raises:
        DecodeError: On any bounds, length or encoding failure
    """
    values: Dict[str, Any] = {}
    offset = 0

    for slot in layout.field_order:
        values[slot.value] = read_uint32_le(data, offset)
        offset += DWORD_SIZE

    if layout.lengths_up_front:
        # Data runs follow the header back to back
        for name in STRING_FIELDS:
            length = values.pop(f"{name}_len")
            values[name] = read_ascii_run(data, offset, length)
            offset += length
    else:
        for name in STRING_FIELDS:
            values[name], consumed = read_length_prefixed_ascii(data, offset)
            offset += consumed

    return values, offset


def _tail_tier(data: bytes, offset: int) -> int:
    """Classify the bytes after the last string, or raise TrailingDataError."""
    remainder = data[offset:]
    for index, byte in enumerate(remainder):
        if byte:
            raise TrailingDataError(
                f"Non-zero byte 0x{byte:02X} in padding tail at offset {offset + index}",
                offset=offset + index,
            )

    if len(remainder) > PADDING_SIZE:
        raise TrailingDataError(
            f"{len(remainder)} bytes remain after strings, padding tail is {PADDING_SIZE}",
            offset=offset + PADDING_SIZE,
            details={"remainder": len(remainder)},
        )

    if len(remainder) in (0, PADDING_SIZE):
        return _STRICT
    return _TOLERANT


def _best_attempt(attempts: List[Tuple[LayoutCandidate, DecodeError]]) -> DecodeError:
    """
    Pick the failure that best explains why the buffer was rejected.

    Offsets are only comparable between attempts that parsed their whole
    fixed header; a header read running off a short buffer says nothing
    about the strings. Ties go to the higher-priority layout, since max()
    keeps the first of equal keys.
    """
    def score(attempt: Tuple[LayoutCandidate, DecodeError]) -> Tuple[bool, int]:
        layout, error = attempt
        return error.offset >= layout.fixed_header_size, error.offset

    _, error = max(attempts, key=score)
    return error


def _pick_tolerant(
    matches: List[Tuple[Dict[str, Any], LayoutCandidate]],
) -> Tuple[Dict[str, Any], LayoutCandidate]:
    for match in matches:
        if match[1] is CANONICAL_LAYOUT:
            if len(matches) > 1:
                logger.debug(
                    "tolerant_match_ambiguous",
                    chosen=CANONICAL_LAYOUT.name,
                    candidates=[layout.name for _, layout in matches],
                )
            return match
    return matches[0]


def decode(buffer: bytes) -> DecodeResult:
    """
    Decode a raw settings blob.

    Args:
        buffer: Untrusted bytes as read from the settings store

    Returns:
        DecodeResult with the reconciled record and matched layout, or
        with an UnknownLayoutError if no known layout fits
    """
    data = bytes(buffer)
    attempts: List[Tuple[LayoutCandidate, DecodeError]] = []
    tolerant_matches: List[Tuple[Dict[str, Any], LayoutCandidate]] = []

    for layout in DECODE_PRIORITY:
        try:
            values, consumed = _parse_with_layout(data, layout)
            tier = _tail_tier(data, consumed)
        except DecodeError as e:
            logger.debug(
                "layout_rejected",
                layout=layout.name,
                kind=e.kind.value,
                offset=e.offset,
                reason=e.message,
            )
            attempts.append((layout, e))
            continue

        if tier == _STRICT:
            return _accept(values, layout, len(data))
        tolerant_matches.append((values, layout))

    if tolerant_matches:
        values, layout = _pick_tolerant(tolerant_matches)
        return _accept(values, layout, len(data))

    reason = _best_attempt(attempts)
    error = UnknownLayoutError(
        len(data),
        reason,
        [(layout.name, e) for layout, e in attempts],
    )
    logger.warning(
        "unknown_layout",
        buffer_length=len(data),
        reason_kind=reason.kind.value,
        reason=reason.message,
    )
    return DecodeResult(error=error)


def _accept(values: Dict[str, Any], layout: LayoutCandidate, buffer_length: int) -> DecodeResult:
    record = reconcile(ConnectionSettingsRecord(**values))
    logger.debug("blob_decoded", layout=layout.name, buffer_length=buffer_length)
    return DecodeResult(record=record, layout=layout)


def decode_or_raise(buffer: bytes) -> ConnectionSettingsRecord:
    """Decode a blob, raising UnknownLayoutError on failure."""
    return decode(buffer).unwrap()
