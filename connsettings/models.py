"""
Core data models
"""
from enum import IntFlag
from typing import Annotated, Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

UINT32_MAX = 0xFFFFFFFF

UInt32 = Annotated[int, Field(ge=0, le=UINT32_MAX)]


class ProxyFlags(IntFlag):
    """Known bits of the raw flags DWORD. Bits 4-31 are reserved."""

    DIRECT = 0x01
    PROXY = 0x02
    AUTO_CONFIG = 0x04
    AUTO_DETECT = 0x08


KNOWN_FLAGS_MASK = int(
    ProxyFlags.DIRECT | ProxyFlags.PROXY | ProxyFlags.AUTO_CONFIG | ProxyFlags.AUTO_DETECT
)


def _ascii_only(value: str) -> str:
    if not value.isascii():
        raise ValueError("must contain ASCII characters only")
    return value


class ConnectionSettingsRecord(BaseModel):
    """
    Decoded connection settings blob.

    Immutable. Use with_changes() / with_flag() to derive a modified copy.
    The effective_* fields are computed by the flag reconciler on the read
    path and are never written to the wire.
    """

    model_config = ConfigDict(frozen=True)

    version_signature: UInt32
    change_counter: UInt32 = 0
    raw_flags: UInt32 = 0
    unknown_field: Optional[UInt32] = None
    proxy_server: str = ""
    proxy_bypass: str = ""
    auto_config_url: str = ""
    effective_proxy_enabled: bool = False
    effective_auto_config_enabled: bool = False

    @field_validator("proxy_server", "proxy_bypass", "auto_config_url")
    @classmethod
    def _require_ascii(cls, value: str) -> str:
        return _ascii_only(value)

    @property
    def direct_connection(self) -> bool:
        return bool(self.raw_flags & ProxyFlags.DIRECT)

    @property
    def proxy_requested(self) -> bool:
        return bool(self.raw_flags & ProxyFlags.PROXY)

    @property
    def auto_config_requested(self) -> bool:
        return bool(self.raw_flags & ProxyFlags.AUTO_CONFIG)

    @property
    def auto_detect_enabled(self) -> bool:
        return bool(self.raw_flags & ProxyFlags.AUTO_DETECT)

    @property
    def reserved_flags(self) -> int:
        """Bits 4-31, carried through untouched."""
        return self.raw_flags & ~KNOWN_FLAGS_MASK & UINT32_MAX

    def with_changes(self, **changes: Any) -> "ConnectionSettingsRecord":
        """Return a validated copy with the given fields replaced."""
        data = self.model_dump()
        data.update(changes)
        return type(self).model_validate(data)

    def with_flag(self, flag: ProxyFlags, enabled: bool) -> "ConnectionSettingsRecord":
        """Return a copy with one flag bit set or cleared, other bits kept."""
        if enabled:
            flags = self.raw_flags | int(flag)
        else:
            flags = self.raw_flags & ~int(flag) & UINT32_MAX
        return self.with_changes(raw_flags=flags)


# ========== API Models ==========


class DecodeRequest(BaseModel):
    """Request to decode a stored blob"""

    hex_data: str  # Hex string (with or without spaces)


class DecodeResponse(BaseModel):
    """Response from blob decoding"""

    success: bool
    record: Optional[ConnectionSettingsRecord] = None
    layout: Optional[str] = None
    raw_hex: str = ""
    total_bytes: int = 0
    error: Optional[str] = None
    error_kind: Optional[str] = None
    reason_kind: Optional[str] = None


class EncodeRequest(BaseModel):
    """Record fields to serialize. Derived effective flags are not accepted."""

    version_signature: UInt32 = 0x46
    change_counter: UInt32 = 0
    raw_flags: UInt32 = 0
    proxy_server: str = ""
    proxy_bypass: str = ""
    auto_config_url: str = ""

    @field_validator("proxy_server", "proxy_bypass", "auto_config_url")
    @classmethod
    def _require_ascii(cls, value: str) -> str:
        return _ascii_only(value)

    def to_record(self) -> ConnectionSettingsRecord:
        return ConnectionSettingsRecord(**self.model_dump())


class EncodeResponse(BaseModel):
    """Serialized blob"""

    hex_data: str
    total_bytes: int


class StoredSettingsResponse(BaseModel):
    """Settings as loaded from (or written to) the settings store"""

    record: ConnectionSettingsRecord
    present: bool = Field(description="Whether the store held any bytes")
    from_default: bool = Field(
        default=False, description="True when the stored blob was missing or undecodable"
    )
    error: Optional[str] = None
