"""
Connection settings service - load/save around a SettingsStore.

This is where store-level policy lives, not in the codec:

- An undecodable or missing blob is treated as "no configuration" and
  replaced by default_record(); it is never fatal.
- Each write bumps change_counter (wrapping at 2**32) when
  increment_counter_on_write is enabled. The codec itself copies the
  counter through unchanged.
"""
from typing import Any, Optional

import structlog

from connsettings.codec import DecodeResult, decode, encode, reconcile
from connsettings.config import settings
from connsettings.models import UINT32_MAX, ConnectionSettingsRecord, ProxyFlags
from connsettings.store.backends import SettingsStore

logger = structlog.get_logger()


def default_record(version_signature: Optional[int] = None) -> ConnectionSettingsRecord:
    """Direct connection, no proxy, no PAC script."""
    if version_signature is None:
        version_signature = settings.default_version_signature
    return reconcile(
        ConnectionSettingsRecord(
            version_signature=version_signature,
            change_counter=0,
            raw_flags=int(ProxyFlags.DIRECT),
        )
    )


class ConnectionSettingsService:
    """Reads, decodes, modifies, encodes and writes the blob held by a store"""

    def __init__(self, store: SettingsStore, increment_counter: Optional[bool] = None):
        self.store = store
        self.increment_counter = (
            settings.increment_counter_on_write if increment_counter is None else increment_counter
        )

    def inspect(self) -> Optional[DecodeResult]:
        """Decode whatever the store holds. None if the store is empty."""
        data = self.store.get_raw_bytes()
        if data is None:
            return None
        return decode(data)

    def load(self) -> ConnectionSettingsRecord:
        """Return the stored settings, falling back to defaults."""
        result = self.inspect()
        if result is None:
            logger.info("settings_absent_using_default")
            return default_record()
        if not result.ok:
            logger.warning(
                "settings_undecodable_using_default",
                error=result.error.message,
                kind=result.error.kind.value,
            )
            return default_record()
        return result.record

    def save(
        self,
        record: ConnectionSettingsRecord,
        bump_counter: Optional[bool] = None,
    ) -> ConnectionSettingsRecord:
        """
        Encode and write a record.

        Args:
            record: Settings to persist. raw_flags is written as given.
            bump_counter: Override the service's counter policy for this write

        Returns:
            The record as it now reads back from the store

        Raises:
            ValueTooLargeError: If a string field cannot be encoded
            StoreWriteError: If the store rejects the write
        """
        bump = self.increment_counter if bump_counter is None else bump_counter
        if bump:
            record = record.with_changes(change_counter=(record.change_counter + 1) & UINT32_MAX)

        blob = encode(record)
        self.store.set_raw_bytes(blob)
        logger.info(
            "settings_saved",
            change_counter=record.change_counter,
            raw_flags=hex(record.raw_flags),
            total_bytes=len(blob),
        )
        # The canonical layout has no unknown field
        return reconcile(record.with_changes(unknown_field=None))

    def update(self, **changes: Any) -> ConnectionSettingsRecord:
        """Load, apply field changes, and save."""
        current = self.load()
        return self.save(current.with_changes(**changes))
