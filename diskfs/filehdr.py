"""The on-disk file header: a table of the sectors holding a file's data."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import Protocol

from .bitmap import Bitmap
from .synchdisk import SECTOR_SIZE
from .utility import div_round_up

INT_SIZE = 4
NUM_DIRECT = (SECTOR_SIZE - 2 * INT_SIZE) // INT_SIZE
MAX_FILE_SIZE = NUM_DIRECT * SECTOR_SIZE

_LAYOUT = struct.Struct(f"<ii{NUM_DIRECT}i")


class _Disk(Protocol):
    def read_sector(self, sector_number: int) -> bytes: ...

    def write_sector(self, sector_number: int, data: bytes) -> None: ...


def _printable(data: bytes) -> str:
    return "".join(chr(b) if 0x20 <= b <= 0x7E else f"\\{b:x}" for b in data)


@dataclass
class FileHeader:
    """Length of a file and the sector number of each of its data blocks.

    A header fills exactly one sector, which limits a file to
    ``NUM_DIRECT`` data sectors.
    """

    num_bytes: int = 0
    data_sectors: list[int] = field(default_factory=list)

    @property
    def num_sectors(self) -> int:
        return len(self.data_sectors)

    def allocate(self, free_map: Bitmap, file_size: int) -> bool:
        """Take sectors for ``file_size`` bytes from ``free_map``.

        Return False, changing nothing, if there are not enough free sectors.
        """
        if file_size < 0:
            raise ValueError(f"file size must not be negative, got {file_size}")
        num_sectors = div_round_up(file_size, SECTOR_SIZE)
        if num_sectors > NUM_DIRECT:
            raise ValueError(
                f"file size {file_size} exceeds the maximum of {MAX_FILE_SIZE} bytes"
            )
        if free_map.num_clear() < num_sectors:
            return False
        sectors = [free_map.find_and_set() for _ in range(num_sectors)]
        if None in sectors:
            raise RuntimeError("free map ran out of sectors during allocation")
        self.num_bytes = file_size
        self.data_sectors = sectors
        return True

    def deallocate(self, free_map: Bitmap) -> None:
        """Give this file's data sectors back to ``free_map``."""
        for sector in self.data_sectors:
            if not free_map.test(sector):
                raise RuntimeError(f"sector {sector} is not marked as in use")
            free_map.clear(sector)

    def fetch_from(self, disk: _Disk, sector: int) -> None:
        """Load this header from ``sector`` of ``disk``."""
        loaded = self.from_bytes(disk.read_sector(sector))
        self.num_bytes = loaded.num_bytes
        self.data_sectors = loaded.data_sectors

    def write_back(self, disk: _Disk, sector: int) -> None:
        """Store this header in ``sector`` of ``disk``."""
        disk.write_sector(sector, self.to_bytes())

    def byte_to_sector(self, offset: int) -> int:
        """Return the disk sector holding byte ``offset`` of the file."""
        if offset < 0:
            raise IndexError(f"offset {offset} is negative")
        index = offset // SECTOR_SIZE
        if index >= len(self.data_sectors):
            raise IndexError(f"offset {offset} lies beyond the allocated sectors")
        return self.data_sectors[index]

    def to_bytes(self) -> bytes:
        """Return the header as one sector's worth of bytes."""
        if len(self.data_sectors) > NUM_DIRECT:
            raise ValueError(f"a header holds at most {NUM_DIRECT} sectors")
        padded = self.data_sectors + [0] * (NUM_DIRECT - len(self.data_sectors))
        return _LAYOUT.pack(self.num_bytes, len(self.data_sectors), *padded)

    @classmethod
    def from_bytes(cls, data: bytes) -> FileHeader:
        """Build a header from the bytes of one sector."""
        image = bytes(data[: _LAYOUT.size]).ljust(_LAYOUT.size, b"\0")
        num_bytes, num_sectors, *sectors = _LAYOUT.unpack(image)
        if not 0 <= num_sectors <= NUM_DIRECT:
            raise ValueError(f"corrupt header: {num_sectors} data sectors")
        return cls(num_bytes, list(sectors[:num_sectors]))

    def format(self, disk: _Disk) -> str:
        """Describe the header and show the file's contents read from ``disk``."""
        parts = [
            f"FileHeader contents.  File size: {self.num_bytes}.  File blocks:\n",
            "".join(f"{sector} " for sector in self.data_sectors),
            "\nFile contents:\n",
        ]
        remaining = self.num_bytes
        for sector in self.data_sectors:
            chunk = disk.read_sector(sector)[: max(0, min(SECTOR_SIZE, remaining))]
            remaining -= len(chunk)
            parts.append(_printable(chunk) + "\n")
        return "".join(parts)