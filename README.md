# diskfs

A small, flat file system that lives on a simulated disk of fixed-size
sectors, together with the containers it is built from. Every piece is
small enough to read in one sitting.

## The pieces

- `diskfs.synchdisk.SynchDisk` – a disk of numbered sectors (128 bytes
  each, 1024 of them by default), read and written one whole sector at a
  time. It lives in memory, or in a file when given a path.
- `diskfs.bitmap.Bitmap` – a fixed-size bit array with `mark`, `clear`,
  `test`, `find_and_set`, `num_clear` and `set_bits`.
- `diskfs.pbitmap.PersistentBitmap` – a bitmap that can be written to and
  read back from an open file.
- `diskfs.filehdr.FileHeader` – the per-file header mapping byte offsets to
  data sectors; it fits in exactly one sector, which caps a file at
  `diskfs.filehdr.MAX_FILE_SIZE` bytes.
- `diskfs.directory.Directory` – a fixed table of `(name, header sector)`
  entries; names are cut to nine characters.
- `diskfs.openfile.OpenFile` – reading and writing a file on the disk, at a
  seek position (`read`, `write`, `seek`) or at an explicit offset
  (`read_at`, `write_at`).
- `diskfs.filesys.FileSystem` – formatting the disk and creating, opening,
  removing and listing files.
- `diskfs.filetable.FileTable` – a table of up to ten files opened on the
  host file system, indexed by small descriptors; slots 0 and 1 are kept
  for the console. `OpenMode` selects read-only or read-write access.
- `diskfs.linkedlist.LinkedList`, `diskfs.linkedlist.SortedList` and
  `diskfs.hashtable.HashTable` – general containers of distinct items.
- `diskfs.debug.Debug` – debug messages switched on by flag characters.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## A short tour

```python
from diskfs.synchdisk import SynchDisk
from diskfs.filesys import FileSystem

disk = SynchDisk()                      # in memory
fs = FileSystem(disk, format_disk=True)

fs.create("notes", 100)                 # True
f = fs.open("notes")
f.write(b"hello, disk")                 # 11
f.seek(0)
print(f.read(11))                       # b'hello, disk'

print(fs.list())                        # ['notes']
print(fs.format())                      # bitmap, directory and file contents
fs.remove("notes")                      # True
```

`create` returns `False`, leaving the disk unchanged, when the name is
taken, the directory (ten entries) is full, or there is no room for the
header or the data; a size beyond `MAX_FILE_SIZE` raises `ValueError`.
`open` raises `FileNotFoundError` for an unknown name. Files have the size
they were created with: reads and writes stop at the end.

To keep a disk between runs, give `SynchDisk` a path and leave out
`format_disk` when opening it again:

```python
disk = SynchDisk("disk.img")
fs = FileSystem(disk, format_disk=True)   # first time only
...
fs = FileSystem(SynchDisk("disk.img"))    # later: use what is there
```

Passing `debug=Debug("f")` (from `diskfs.debug`) to `FileSystem` or
`OpenFile` prints file-system messages to standard error.

The bitmap on its own:

```python
from diskfs.bitmap import Bitmap

bits = Bitmap(64)
bits.find_and_set()          # 0
bits.mark(31)
print(list(bits.set_bits())) # [0, 31]
print(bits.num_clear())      # 62
```

Host files through a file table:

```python
from diskfs.filetable import FileTable, OpenMode

with FileTable() as table:
    fd = table.insert("data.bin", OpenMode.READWRITE)   # 2
    table.write(b"abc", fd)
    table.seek(0, fd)
    table.read(3, fd)                                   # b'abc'
```

`read` raises `ShortReadError` (carrying what was read) when fewer bytes
are available, writing to a read-only descriptor raises
`BadDescriptorError`, and a full table raises `TableFullError`.
`seek(-1, fd)` moves to the end of the file.

## What it does not do

- There is no command-line tool; the package is used from Python.
- There is a single directory: no subdirectories and no paths.
- Files cannot grow after they are created, and there is no journalling,
  permissions, ownership or timestamps.
- Operations are not safe to run from several threads at once; only single
  sector reads and writes on a `SynchDisk` are serialised.