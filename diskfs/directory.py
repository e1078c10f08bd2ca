"""A flat directory: a fixed table of file names and header sectors."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Protocol

from .filehdr import FileHeader

FILE_NAME_MAX_LEN = 9

_ENTRY = struct.Struct(f"<?3xi{FILE_NAME_MAX_LEN + 1}s2x")
DIRECTORY_ENTRY_SIZE = _ENTRY.size


class _RandomAccess(Protocol):
    def read_at(self, num_bytes: int, position: int) -> bytes: ...

    def write_at(self, data: bytes, position: int) -> int: ...


class _Disk(Protocol):
    def read_sector(self, sector_number: int) -> bytes: ...


@dataclass
class DirectoryEntry:
    """One slot of a directory: a file name and its header's sector."""

    in_use: bool = False
    sector: int = 0
    name: str = ""


def _key(name: str) -> str:
    if "\0" in name:
        raise ValueError("file names may not contain NUL characters")
    key = name[:FILE_NAME_MAX_LEN]
    key.encode("latin-1")
    return key


def _pack(entry: DirectoryEntry) -> bytes:
    return _ENTRY.pack(entry.in_use, entry.sector, entry.name.encode("latin-1"))


def _unpack(raw: tuple[bool, int, bytes]) -> DirectoryEntry:
    in_use, sector, name = raw
    return DirectoryEntry(in_use, sector, name.split(b"\0", 1)[0].decode("latin-1"))


class Directory:
    """A table of ``size`` entries; names longer than nine characters are cut."""

    def __init__(self, size: int):
        if size < 0:
            raise ValueError(f"directory size must not be negative, got {size}")
        self._table = [DirectoryEntry() for _ in range(size)]

    @property
    def size(self) -> int:
        return len(self._table)

    @property
    def entries(self) -> tuple[DirectoryEntry, ...]:
        return tuple(self._table)

    def _find_index(self, name: str) -> int | None:
        key = _key(name)
        return next(
            (
                index
                for index, entry in enumerate(self._table)
                if entry.in_use and entry.name[:FILE_NAME_MAX_LEN] == key
            ),
            None,
        )

    def fetch_from(self, file: _RandomAccess) -> None:
        """Load the table from the start of ``file``."""
        self.load_bytes(file.read_at(len(self._table) * DIRECTORY_ENTRY_SIZE, 0))

    def write_back(self, file: _RandomAccess) -> None:
        """Store the table at the start of ``file``."""
        file.write_at(self.to_bytes(), 0)

    def find(self, name: str) -> int | None:
        """Return the header sector of ``name``, or None if it is not listed."""
        index = self._find_index(name)
        return self._table[index].sector if index is not None else None

    def add(self, name: str, new_sector: int) -> bool:
        """List ``name`` at ``new_sector``; False if present or the table is full."""
        if self._find_index(name) is not None:
            return False
        free = next((entry for entry in self._table if not entry.in_use), None)
        if free is None:
            return False
        free.in_use = True
        free.name = _key(name)
        free.sector = new_sector
        return True

    def remove(self, name: str) -> bool:
        """Drop ``name`` from the table; False if it is not listed."""
        index = self._find_index(name)
        if index is None:
            return False
        self._table[index].in_use = False
        return True

    def names(self) -> list[str]:
        """Return the names in use, in table order."""
        return [entry.name for entry in self._table if entry.in_use]

    def to_bytes(self) -> bytes:
        """Return the table in its on-disk form."""
        return b"".join(_pack(entry) for entry in self._table)

    def load_bytes(self, data: bytes) -> None:
        """Overwrite the table with ``data``; a short ``data`` replaces a prefix."""
        image = bytearray(self.to_bytes())
        chunk = bytes(data[: len(image)])
        image[: len(chunk)] = chunk
        self._table = [_unpack(raw) for raw in _ENTRY.iter_unpack(bytes(image))]

    def format(self, disk: _Disk) -> str:
        """Describe every listed file, its header and its contents."""
        parts = ["Directory contents:\n"]
        for entry in self._table:
            if entry.in_use:
                parts.append(f"Name: {entry.name}, Sector: {entry.sector}\n")
                header = FileHeader()
                header.fetch_from(disk, entry.sector)
                parts.append(header.format(disk))
        parts.append("\n")
        return "".join(parts)