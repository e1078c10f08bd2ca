"""A flat file system on a simulated disk: one free-sector map and one directory."""

from __future__ import annotations

from .bitmap import BITS_IN_BYTE
from .debug import DBG_FILE, Debug
from .directory import DIRECTORY_ENTRY_SIZE, Directory
from .filehdr import FileHeader
from .openfile import OpenFile
from .pbitmap import PersistentBitmap
from .synchdisk import SynchDisk

FREE_MAP_SECTOR = 0
DIRECTORY_SECTOR = 1
NUM_DIR_ENTRIES = 10
DIRECTORY_FILE_SIZE = DIRECTORY_ENTRY_SIZE * NUM_DIR_ENTRIES


class FileSystem:
    """Named, fixed-size files stored on ``disk``.

    The free-sector bitmap and the directory are themselves files whose
    headers sit in sectors 0 and 1. With ``format_disk`` the disk is
    initialised with an empty directory; otherwise the existing structures
    are used. Changes are written to disk only when an operation succeeds.
    """

    def __init__(
        self,
        disk: SynchDisk,
        format_disk: bool = False,
        *,
        debug: Debug | None = None,
    ):
        self._disk = disk
        self._debug = debug
        self._log("Initializing the file system.")
        if format_disk:
            self._format_disk()
        self._free_map_file = OpenFile(disk, FREE_MAP_SECTOR, debug=debug)
        self._directory_file = OpenFile(disk, DIRECTORY_SECTOR, debug=debug)
        if format_disk:
            self._write_initial_contents()

    @property
    def disk(self) -> SynchDisk:
        return self._disk

    @property
    def free_map_file_size(self) -> int:
        return self._disk.num_sectors // BITS_IN_BYTE

    def _log(self, text: str) -> None:
        if self._debug is not None:
            self._debug.message(DBG_FILE, text)

    def _format_disk(self) -> None:
        self._log("Formatting the file system.")
        free_map = PersistentBitmap(self._disk.num_sectors)
        free_map.mark(FREE_MAP_SECTOR)
        free_map.mark(DIRECTORY_SECTOR)
        map_header = FileHeader()
        dir_header = FileHeader()
        if not map_header.allocate(free_map, self.free_map_file_size):
            raise RuntimeError("no room on disk for the free-sector map")
        if not dir_header.allocate(free_map, DIRECTORY_FILE_SIZE):
            raise RuntimeError("no room on disk for the directory")
        self._log("Writing headers back to disk.")
        map_header.write_back(self._disk, FREE_MAP_SECTOR)
        dir_header.write_back(self._disk, DIRECTORY_SECTOR)
        self._pending_map = free_map

    def _write_initial_contents(self) -> None:
        self._log("Writing bitmap and directory back to disk.")
        free_map = self._pending_map
        del self._pending_map
        directory = Directory(NUM_DIR_ENTRIES)
        free_map.write_back(self._free_map_file)
        directory.write_back(self._directory_file)
        if self._debug is not None and self._debug.is_enabled(DBG_FILE):
            self._log(free_map.format() + directory.format(self._disk))

    def _load_directory(self) -> Directory:
        directory = Directory(NUM_DIR_ENTRIES)
        directory.fetch_from(self._directory_file)
        return directory

    def _load_free_map(self) -> PersistentBitmap:
        return PersistentBitmap(self._disk.num_sectors, self._free_map_file)

    def create(self, name: str, initial_size: int) -> bool:
        """Create file ``name`` of ``initial_size`` bytes.

        Return False if the name is taken, the directory is full, or there
        is no room for the header or the data.
        """
        self._log(f"Creating file {name} size {initial_size}")
        directory = self._load_directory()
        if directory.find(name) is not None:
            return False
        free_map = self._load_free_map()
        sector = free_map.find_and_set()
        if sector is None:
            return False
        if not directory.add(name, sector):
            return False
        header = FileHeader()
        if not header.allocate(free_map, initial_size):
            return False
        header.write_back(self._disk, sector)
        directory.write_back(self._directory_file)
        free_map.write_back(self._free_map_file)
        return True

    def open(self, name: str) -> OpenFile:
        """Open file ``name``; raise FileNotFoundError if it does not exist."""
        self._log(f"Opening file {name}")
        sector = self._load_directory().find(name)
        if sector is None:
            raise FileNotFoundError(name)
        return OpenFile(self._disk, sector, debug=self._debug)

    def remove(self, name: str) -> bool:
        """Delete file ``name`` and free its sectors; False if it does not exist."""
        directory = self._load_directory()
        sector = directory.find(name)
        if sector is None:
            return False
        header = FileHeader()
        header.fetch_from(self._disk, sector)
        free_map = self._load_free_map()
        header.deallocate(free_map)
        free_map.clear(sector)
        directory.remove(name)
        free_map.write_back(self._free_map_file)
        directory.write_back(self._directory_file)
        return True

    def list(self) -> list[str]:
        """Return the names of all files, in directory order."""
        return self._load_directory().names()

    def format(self) -> str:
        """Describe the bitmap, the directory and every file's contents."""
        map_header = FileHeader()
        map_header.fetch_from(self._disk, FREE_MAP_SECTOR)
        dir_header = FileHeader()
        dir_header.fetch_from(self._disk, DIRECTORY_SECTOR)
        return "".join(
            [
                "Bit map file header:\n",
                map_header.format(self._disk),
                "Directory file header:\n",
                dir_header.format(self._disk),
                self._load_free_map().format(),
                self._load_directory().format(self._disk),
            ]
        )