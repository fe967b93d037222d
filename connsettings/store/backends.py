"""
Settings Store - raw byte persistence for the connection settings blob.

The codec only ever sees bytes; where they live is the store's concern.
A store holds exactly one blob and exposes it through get_raw_bytes() /
set_raw_bytes(). A store that holds nothing returns None.

Stores do not lock. A read-decode-modify-encode-write cycle is not atomic
across processes and the last writer wins.
"""
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

import structlog

from connsettings.config import settings
from connsettings.exceptions import StoreReadError, StoreWriteError

logger = structlog.get_logger()


class SettingsStore(ABC):
    """Holder of a single raw settings blob"""

    @abstractmethod
    def get_raw_bytes(self) -> Optional[bytes]:
        """Return the stored blob, or None if nothing is stored."""

    @abstractmethod
    def set_raw_bytes(self, data: bytes) -> None:
        """Replace the stored blob."""


class MemorySettingsStore(SettingsStore):
    """In-memory store, mainly for tests and dry runs"""

    def __init__(self, initial: Optional[bytes] = None):
        self._data = bytes(initial) if initial is not None else None
        self.write_count = 0

    def get_raw_bytes(self) -> Optional[bytes]:
        return self._data

    def set_raw_bytes(self, data: bytes) -> None:
        self._data = bytes(data)
        self.write_count += 1


class FileSettingsStore(SettingsStore):
    """
    Store backed by a single binary file.

    Writes go to a sibling temp file which then replaces the target, so a
    reader never observes a half-written blob.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else settings.store_path

    def get_raw_bytes(self) -> Optional[bytes]:
        if not self.path.exists():
            return None
        try:
            with open(self.path, "rb") as f:
                return f.read()
        except OSError as e:
            logger.error("failed_to_read_blob", path=str(self.path), error=str(e))
            raise StoreReadError(f"Failed to read {self.path}: {e}", {"path": str(self.path)}) from e

    def set_raw_bytes(self, data: bytes) -> None:
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "wb") as f:
                f.write(data)
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error("failed_to_write_blob", path=str(self.path), error=str(e))
            raise StoreWriteError(f"Failed to write {self.path}: {e}", {"path": str(self.path)}) from e

        logger.debug("blob_written", path=str(self.path), size=len(data))
