import pytest

from diskfs.pbitmap import PersistentBitmap


class MemoryFile:
    def __init__(self, length):
        self.data = bytearray(length)

    def read_at(self, num_bytes, position):
        if num_bytes <= 0 or position >= len(self.data):
            return b""
        return bytes(self.data[position : position + num_bytes])

    def write_at(self, data, position):
        if not data or position >= len(self.data):
            return 0
        count = min(len(data), len(self.data) - position)
        self.data[position : position + count] = data[:count]
        return count


def test_new_bitmap_is_clear():
    bitmap = PersistentBitmap(100)
    assert bitmap.num_clear() == 100


def test_round_trip_through_file():
    bitmap = PersistentBitmap(100)
    for which in (3, 64, 99):
        bitmap.mark(which)
    file = MemoryFile(16)
    bitmap.write_back(file)
    loaded = PersistentBitmap(100, file)
    assert list(loaded.set_bits()) == [3, 64, 99]


def test_fetch_from_overwrites_bits():
    file = MemoryFile(16)
    PersistentBitmap(100).write_back(file)
    bitmap = PersistentBitmap(100)
    bitmap.mark(5)
    bitmap.fetch_from(file)
    assert not bitmap.test(5)


def test_write_back_stores_little_endian_words():
    bitmap = PersistentBitmap(32)
    bitmap.mark(0)
    file = MemoryFile(4)
    bitmap.write_back(file)
    assert bytes(file.data) == b"\x01\x00\x00\x00"


def test_short_file_replaces_only_prefix():
    file = MemoryFile(1)
    file.data[0] = 0xFF
    bitmap = PersistentBitmap(64)
    bitmap.mark(40)
    bitmap.fetch_from(file)
    assert list(bitmap.set_bits()) == list(range(8)) + [40]


def test_out_of_range_bit_raises():
    with pytest.raises(IndexError):
        PersistentBitmap(100).mark(100)


def test_empty_bitmap_rejected():
    with pytest.raises(ValueError):
        PersistentBitmap(0)