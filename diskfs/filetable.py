"""Per-process tables of files opened on the host file system."""

from __future__ import annotations

import enum
import os

FILE_MAX = 10
CONSOLE_IN = 0
CONSOLE_OUT = 1
FIRST_FILE = 2

_BINARY = getattr(os, "O_BINARY", 0)


class OpenMode(enum.IntEnum):
    READWRITE = 0
    READ = 1
    WRITE = 2


class FileTableError(Exception):
    """Base class for file table failures."""


class TableFullError(FileTableError):
    """Every file slot of the table is taken."""


class BadDescriptorError(FileTableError):
    """The descriptor does not name a usable open file."""


class ShortReadError(FileTableError):
    """Fewer bytes were available than were asked for.

    ``data`` holds what was read; the file position has moved past it.
    """

    def __init__(self, data: bytes, requested: int):
        super().__init__(f"read {len(data)} of {requested} requested bytes")
        self.data = data
        self.requested = requested


class HostFile:
    """An open host file descriptor with its own current offset."""

    def __init__(self, fd: int):
        self._fd = fd
        self._offset = 0
        self._closed = False

    @classmethod
    def open(cls, name: str | os.PathLike[str], mode: OpenMode) -> HostFile:
        """Open ``name`` for reading, or for reading and writing."""
        if mode is OpenMode.READWRITE:
            flags = os.O_RDWR
        elif mode is OpenMode.READ:
            flags = os.O_RDONLY
        else:
            raise ValueError(f"files cannot be opened in {mode.name} mode")
        return cls(os.open(name, flags | _BINARY))

    def __enter__(self) -> HostFile:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _read_at(self, num_bytes: int, position: int) -> bytes:
        os.lseek(self._fd, position, os.SEEK_SET)
        return os.read(self._fd, max(0, num_bytes))

    def _write_at(self, data: bytes, position: int) -> int:
        os.lseek(self._fd, position, os.SEEK_SET)
        view = memoryview(bytes(data))
        while view:
            written = os.write(self._fd, view)
            view = view[written:]
        return len(data)

    def read(self, num_bytes: int) -> bytes:
        """Read up to ``num_bytes`` at the current offset and advance it."""
        data = self._read_at(num_bytes, self._offset)
        self._offset += len(data)
        return data

    def write(self, data: bytes) -> int:
        """Write all of ``data`` at the current offset and advance it."""
        written = self._write_at(data, self._offset)
        self._offset += written
        return written

    def seek(self, position: int) -> int:
        """Move the current offset to ``position`` and return it."""
        self._offset = position
        return position

    def length(self) -> int:
        """Return the size of the file in bytes."""
        return os.lseek(self._fd, 0, os.SEEK_END)

    def close(self) -> None:
        """Close the descriptor; closing twice does nothing."""
        if not self._closed:
            self._closed = True
            os.close(self._fd)


class FileTable:
    """Up to ``FILE_MAX`` open files; slots 0 and 1 belong to the console."""

    def __init__(self) -> None:
        self._files: list[HostFile | None] = [None] * FILE_MAX
        self._modes: list[OpenMode] = [OpenMode.READWRITE] * FILE_MAX
        self._modes[CONSOLE_IN] = OpenMode.READ
        self._modes[CONSOLE_OUT] = OpenMode.WRITE

    def __enter__(self) -> FileTable:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close_all()

    def _open_file(self, index: int, lowest: int) -> HostFile:
        if not lowest <= index < FILE_MAX:
            raise BadDescriptorError(f"descriptor {index} is out of range")
        handle = self._files[index]
        if handle is None:
            raise BadDescriptorError(f"descriptor {index} is not open")
        return handle

    def insert(self, file_name: str | os.PathLike[str], open_mode: OpenMode) -> int:
        """Open ``file_name`` in the first free slot and return its descriptor."""
        index = next(
            (i for i in range(FIRST_FILE, FILE_MAX) if self._files[i] is None), None
        )
        if index is None:
            raise TableFullError(f"all {FILE_MAX - FIRST_FILE} file slots are in use")
        mode = OpenMode(open_mode)
        self._files[index] = HostFile.open(file_name, mode)
        self._modes[index] = mode
        return index

    def remove(self, index: int) -> None:
        """Close the file at descriptor ``index``."""
        handle = self._open_file(index, FIRST_FILE)
        handle.close()
        self._files[index] = None

    def read(self, char_count: int, index: int) -> bytes:
        """Read exactly ``char_count`` bytes, or raise ShortReadError."""
        data = self._open_file(index, 0).read(char_count)
        if len(data) != char_count:
            raise ShortReadError(data, char_count)
        return data

    def write(self, data: bytes, index: int) -> int:
        """Write ``data`` to a file not opened read-only; return the count."""
        handle = self._open_file(index, 0)
        if self._modes[index] is OpenMode.READ:
            raise BadDescriptorError(f"descriptor {index} is open read-only")
        return handle.write(data)

    def seek(self, position: int, index: int) -> int:
        """Move to ``position`` (-1 means the end) and return the new offset."""
        handle = self._open_file(index, FIRST_FILE)
        length = handle.length()
        if position == -1:
            position = length
        if not 0 <= position <= length:
            raise ValueError(f"position {position} lies outside 0..{length}")
        return handle.seek(position)

    def close_all(self) -> None:
        """Close every open file."""
        for index, handle in enumerate(self._files):
            if handle is not None:
                handle.close()
                self._files[index] = None