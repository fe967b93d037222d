"""
Connection settings blob codec.

    bytes -> decode() -> DecodeResult(record, layout)   (record is reconciled)
    record -> encode() -> bytes                         (canonical layout)
"""
from connsettings.codec.decoder import DecodeResult, decode, decode_or_raise
from connsettings.codec.encoder import encode, encoded_length
from connsettings.codec.layouts import CANONICAL_LAYOUT, DECODE_PRIORITY, LayoutCandidate
from connsettings.codec.reconciler import reconcile
from connsettings.codec.sanity import SANITY_MAX_STRING_LEN

__all__ = [
    "CANONICAL_LAYOUT",
    "DECODE_PRIORITY",
    "DecodeResult",
    "LayoutCandidate",
    "SANITY_MAX_STRING_LEN",
    "decode",
    "decode_or_raise",
    "encode",
    "encoded_length",
    "reconcile",
]
