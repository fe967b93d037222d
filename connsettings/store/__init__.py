"""Settings store backends and the read-modify-write service around the codec."""
from connsettings.store.backends import FileSettingsStore, MemorySettingsStore, SettingsStore
from connsettings.store.service import ConnectionSettingsService, default_record

__all__ = [
    "ConnectionSettingsService",
    "FileSettingsStore",
    "MemorySettingsStore",
    "SettingsStore",
    "default_record",
]
