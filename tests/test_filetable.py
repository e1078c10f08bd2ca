import pytest

from diskfs.filetable import (
    FILE_MAX,
    BadDescriptorError,
    FileTable,
    HostFile,
    OpenMode,
    ShortReadError,
    TableFullError,
)


@pytest.fixture
def sample(tmp_path):
    path = tmp_path / "sample.txt"
    path.write_bytes(b"hello world")
    return path


@pytest.fixture
def table():
    with FileTable() as files:
        yield files


def test_first_descriptor_follows_console(table, sample):
    assert table.insert(sample, OpenMode.READ) == 2
    assert table.insert(sample, OpenMode.READ) == 3


def test_read_returns_requested_bytes(table, sample):
    fd = table.insert(sample, OpenMode.READ)
    assert table.read(5, fd) == b"hello"
    assert table.read(6, fd) == b" world"


def test_short_read_reports_partial_data(table, sample):
    fd = table.insert(sample, OpenMode.READ)
    with pytest.raises(ShortReadError) as info:
        table.read(100, fd)
    assert info.value.data == b"hello world"
    assert info.value.requested == 100


def test_write_and_read_back(table, sample):
    fd = table.insert(sample, OpenMode.READWRITE)
    assert table.write(b"HELLO", fd) == 5
    table.seek(0, fd)
    assert table.read(11, fd) == b"HELLO world"
    assert sample.read_bytes() == b"HELLO world"


def test_write_to_read_only_file_fails(table, sample):
    fd = table.insert(sample, OpenMode.READ)
    with pytest.raises(BadDescriptorError):
        table.write(b"x", fd)
    assert sample.read_bytes() == b"hello world"


def test_write_only_mode_cannot_be_opened(table, sample):
    with pytest.raises(ValueError):
        table.insert(sample, OpenMode.WRITE)


def test_missing_file_cannot_be_opened(table, tmp_path):
    with pytest.raises(FileNotFoundError):
        table.insert(tmp_path / "absent", OpenMode.READ)


def test_seek_to_end_with_minus_one(table, sample):
    fd = table.insert(sample, OpenMode.READWRITE)
    assert table.seek(-1, fd) == len(b"hello world")
    table.write(b"!", fd)
    assert sample.read_bytes() == b"hello world!"


def test_seek_outside_file_is_rejected(table, sample):
    fd = table.insert(sample, OpenMode.READ)
    with pytest.raises(ValueError):
        table.seek(len(b"hello world") + 1, fd)
    with pytest.raises(ValueError):
        table.seek(-2, fd)


def test_console_descriptors_are_not_files(table):
    with pytest.raises(BadDescriptorError):
        table.read(1, 0)
    with pytest.raises(BadDescriptorError):
        table.write(b"x", 1)
    with pytest.raises(BadDescriptorError):
        table.seek(0, 1)
    with pytest.raises(BadDescriptorError):
        table.remove(0)


def test_out_of_range_descriptor(table):
    with pytest.raises(BadDescriptorError):
        table.read(1, FILE_MAX)
    with pytest.raises(BadDescriptorError):
        table.remove(FILE_MAX)


def test_remove_frees_slot(table, sample):
    fd = table.insert(sample, OpenMode.READ)
    table.remove(fd)
    with pytest.raises(BadDescriptorError):
        table.remove(fd)
    with pytest.raises(BadDescriptorError):
        table.read(1, fd)
    assert table.insert(sample, OpenMode.READ) == fd


def test_table_fills_up(table, sample):
    descriptors = [table.insert(sample, OpenMode.READ) for _ in range(2, FILE_MAX)]
    assert descriptors == list(range(2, FILE_MAX))
    with pytest.raises(TableFullError):
        table.insert(sample, OpenMode.READ)


def test_close_all_releases_every_slot(table, sample):
    for _ in range(2, FILE_MAX):
        table.insert(sample, OpenMode.READ)
    table.close_all()
    assert table.insert(sample, OpenMode.READ) == 2


def test_host_file_offsets(sample):
    with HostFile.open(sample, OpenMode.READWRITE) as handle:
        assert handle.length() == len(b"hello world")
        assert handle.read(5) == b"hello"
        assert handle.seek(6) == 6
        assert handle.read(100) == b"world"
        assert handle.read(5) == b""
        handle.seek(0)
        assert handle.write(b"J") == 1
        assert handle.read(4) == b"ello"
    assert sample.read_bytes() == b"Jello world"


def test_host_file_write_extends_length(sample):
    with HostFile.open(sample, OpenMode.READWRITE) as handle:
        handle.seek(handle.length())
        handle.write(b"!!")
        assert handle.length() == len(b"hello world!!")
    assert sample.read_bytes() == b"hello world!!"