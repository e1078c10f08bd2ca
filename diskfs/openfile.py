"""Reading and writing a file stored on the simulated disk."""

from __future__ import annotations

from typing import Protocol

from .debug import DBG_FILE, Debug
from .filehdr import FileHeader
from .synchdisk import SECTOR_SIZE


class _Disk(Protocol):
    def read_sector(self, sector_number: int) -> bytes: ...

    def write_sector(self, sector_number: int, data: bytes) -> None: ...


class OpenFile:
    """An open file whose header lives in ``sector`` of ``disk``.

    The header is read once, when the file is opened, and kept in memory.
    Files have a fixed length: reads and writes are cut off at its end.
    """

    def __init__(self, disk: _Disk, sector: int, *, debug: Debug | None = None):
        self._disk = disk
        self._header = FileHeader()
        self._header.fetch_from(disk, sector)
        self._debug = debug
        self.position = 0

    @property
    def header(self) -> FileHeader:
        return self._header

    def _log(self, text: str) -> None:
        if self._debug is not None:
            self._debug.message(DBG_FILE, text)

    def _clip(self, num_bytes: int, position: int) -> int:
        """Return how many of ``num_bytes`` at ``position`` lie inside the file."""
        if position < 0:
            raise ValueError(f"position {position} is negative")
        length = self.length()
        if num_bytes <= 0 or position >= length:
            return 0
        return min(num_bytes, length - position)

    def _sectors(self, position: int, num_bytes: int) -> range:
        first = position // SECTOR_SIZE
        last = (position + num_bytes - 1) // SECTOR_SIZE
        return range(first, last + 1)

    def seek(self, position: int) -> None:
        """Set where the next :meth:`read` or :meth:`write` starts."""
        self.position = position

    def read(self, num_bytes: int) -> bytes:
        """Read from the current position and move past what was read."""
        data = self.read_at(num_bytes, self.position)
        self.position += len(data)
        return data

    def write(self, data: bytes) -> int:
        """Write at the current position and move past what was written."""
        written = self.write_at(data, self.position)
        self.position += written
        return written

    def read_at(self, num_bytes: int, position: int) -> bytes:
        """Return up to ``num_bytes`` bytes starting at ``position``."""
        count = self._clip(num_bytes, position)
        if count == 0:
            return b""
        self._log(
            f"Reading {count} bytes at {position} from file of length {self.length()}"
        )
        sectors = self._sectors(position, count)
        image = b"".join(
            self._disk.read_sector(self._header.byte_to_sector(index * SECTOR_SIZE))
            for index in sectors
        )
        start = position - sectors.start * SECTOR_SIZE
        return image[start : start + count]

    def write_at(self, data: bytes, position: int) -> int:
        """Write ``data`` starting at ``position``; return how many bytes fit."""
        data = bytes(data)
        count = self._clip(len(data), position)
        if count == 0:
            return 0
        self._log(
            f"Writing {count} bytes at {position} from file of length {self.length()}"
        )
        end = position + count
        for index in self._sectors(position, count):
            sector_start = index * SECTOR_SIZE
            sector_end = sector_start + SECTOR_SIZE
            low = max(position, sector_start)
            high = min(end, sector_end)
            chunk = data[low - position : high - position]
            disk_sector = self._header.byte_to_sector(sector_start)
            if low == sector_start and high == sector_end:
                block = chunk
            else:
                existing = bytearray(self._disk.read_sector(disk_sector))
                existing[low - sector_start : high - sector_start] = chunk
                block = bytes(existing)
            self._disk.write_sector(disk_sector, block)
        return count

    def length(self) -> int:
        """Return the number of bytes in the file."""
        return self._header.num_bytes