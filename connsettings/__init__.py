"""
Codec for proxy connection settings blobs.

The codec proper lives in connsettings.codec; connsettings.store holds the
settings store interface and the load/save service around it.
"""
from connsettings.codec import DecodeResult, decode, decode_or_raise, encode, reconcile
from connsettings.models import ConnectionSettingsRecord, ProxyFlags

__version__ = "0.1.0"

__all__ = [
    "ConnectionSettingsRecord",
    "DecodeResult",
    "ProxyFlags",
    "decode",
    "decode_or_raise",
    "encode",
    "reconcile",
]
