"""A disk of fixed-size sectors with one request served at a time."""

from __future__ import annotations

import os
import threading
from pathlib import Path

SECTOR_SIZE = 128
NUM_SECTORS = 1024


class SynchDisk:
    """Sector-addressed storage; each request finishes before it returns.

    With ``path`` the sectors live in that file, otherwise in memory.
    """

    def __init__(
        self,
        path: str | os.PathLike[str] | None = None,
        *,
        sector_size: int = SECTOR_SIZE,
        num_sectors: int = NUM_SECTORS,
    ):
        if sector_size <= 0 or num_sectors <= 0:
            raise ValueError("sector size and sector count must be positive")
        self.sector_size = sector_size
        self.num_sectors = num_sectors
        self._lock = threading.Lock()
        total = sector_size * num_sectors
        self._path = Path(path) if path is not None else None
        self._image: bytearray | None = None
        if self._path is None:
            self._image = bytearray(total)
        elif not self._path.exists():
            self._path.write_bytes(bytes(total))
        elif self._path.stat().st_size < total:
            with self._path.open("r+b") as handle:
                handle.truncate(total)

    def _offset(self, sector_number: int) -> int:
        if not 0 <= sector_number < self.num_sectors:
            raise IndexError(
                f"sector {sector_number} out of range 0..{self.num_sectors - 1}"
            )
        return sector_number * self.sector_size

    def read_sector(self, sector_number: int) -> bytes:
        """Return the contents of one sector."""
        offset = self._offset(sector_number)
        with self._lock:
            if self._image is not None:
                return bytes(self._image[offset : offset + self.sector_size])
            with self._path.open("rb") as handle:
                handle.seek(offset)
                return handle.read(self.sector_size).ljust(self.sector_size, b"\0")

    def write_sector(self, sector_number: int, data: bytes) -> None:
        """Store ``data`` in one sector, padding a short buffer with zeros."""
        offset = self._offset(sector_number)
        if len(data) > self.sector_size:
            raise ValueError(
                f"{len(data)} bytes do not fit in a {self.sector_size}-byte sector"
            )
        block = bytes(data).ljust(self.sector_size, b"\0")
        with self._lock:
            if self._image is not None:
                self._image[offset : offset + self.sector_size] = block
                return
            with self._path.open("r+b") as handle:
                handle.seek(offset)
                handle.write(block)