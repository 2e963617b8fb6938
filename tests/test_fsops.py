import errno
import os
import stat

import pytest

from fvekit.fsops import FILE_NAME, FILE_PATH, FileAttributes, VolumeFileSystem
from fvekit.volume import Volume

KEY = 0x33
SECTOR = 512
SIZE = SECTOR * 8


class XorCodec:
    def __init__(self, plain: bytes) -> None:
        self.storage = bytearray(b ^ KEY for b in plain)

    def decrypt_region(self, sector_count, sector_size, offset):
        chunk = self.storage[offset : offset + sector_count * sector_size]
        return bytes(b ^ KEY for b in chunk)

    def encrypt_region(self, sector_count, sector_size, offset, data):
        self.storage[offset : offset + len(data)] = bytes(b ^ KEY for b in data)


def make_fs(read_only=False):
    plain = bytes(i % 251 for i in range(SIZE))
    volume = Volume(XorCodec(plain), SECTOR, SIZE, read_only=read_only)
    volume.mark_ready(True)
    return VolumeFileSystem(volume), plain


def test_getattr_root():
    fs, _ = make_fs()
    assert fs.getattr("/") == FileAttributes(mode=stat.S_IFDIR | 0o555, nlink=2)


def test_getattr_file_read_write():
    fs, _ = make_fs()
    attrs = fs.getattr(FILE_PATH)
    assert attrs.mode == stat.S_IFREG | 0o666
    assert attrs.nlink == 1
    assert attrs.size == SIZE


def test_getattr_file_read_only():
    fs, _ = make_fs(read_only=True)
    assert fs.getattr(FILE_PATH).mode == stat.S_IFREG | 0o444


def test_getattr_unknown_path():
    fs, _ = make_fs()
    with pytest.raises(OSError) as info:
        fs.getattr("/other")
    assert info.value.errno == errno.ENOENT


def test_getattr_empty_path():
    fs, _ = make_fs()
    with pytest.raises(OSError) as info:
        fs.getattr("")
    assert info.value.errno == errno.EINVAL


def test_readdir_root():
    fs, _ = make_fs()
    assert fs.readdir("/") == [".", "..", FILE_NAME]


def test_readdir_other_path():
    fs, _ = make_fs()
    with pytest.raises(OSError) as info:
        fs.readdir(FILE_PATH)
    assert info.value.errno == errno.ENOENT


@pytest.mark.parametrize("flags", [os.O_RDONLY, os.O_WRONLY, os.O_RDWR])
def test_open_read_write_accepts_all_modes(flags):
    fs, _ = make_fs()
    assert fs.open(FILE_PATH, flags) is None


@pytest.mark.parametrize("flags", [os.O_WRONLY, os.O_RDWR])
def test_open_read_only_refuses_writing(flags):
    fs, _ = make_fs(read_only=True)
    with pytest.raises(OSError) as info:
        fs.open(FILE_PATH, flags)
    assert info.value.errno == errno.EACCES


def test_open_invalid_access_mode():
    fs, _ = make_fs()
    with pytest.raises(OSError) as info:
        fs.open(FILE_PATH, 3)
    assert info.value.errno == errno.EACCES


def test_open_unknown_path():
    fs, _ = make_fs()
    with pytest.raises(OSError) as info:
        fs.open("/nope", os.O_RDONLY)
    assert info.value.errno == errno.ENOENT


def test_read_returns_plain_bytes():
    fs, plain = make_fs()
    assert fs.read(FILE_PATH, 700, 100) == plain[100:800]


def test_read_unknown_path():
    fs, _ = make_fs()
    with pytest.raises(OSError) as info:
        fs.read("/nope", 10, 0)
    assert info.value.errno == errno.ENOENT


def test_write_then_read_round_trip():
    fs, plain = make_fs()
    data = b"hello world" * 60
    written = fs.write(FILE_PATH, data, 300)
    assert written == len(data)
    assert fs.read(FILE_PATH, len(data), 300) == data
    assert fs.read(FILE_PATH, 300, 0) == plain[:300]


def test_write_on_read_only_volume():
    fs, _ = make_fs(read_only=True)
    with pytest.raises(OSError) as info:
        fs.write(FILE_PATH, b"abc", 0)
    assert info.value.errno == errno.EACCES


def test_write_unknown_path():
    fs, _ = make_fs()
    with pytest.raises(OSError) as info:
        fs.write("/nope", b"abc", 0)
    assert info.value.errno == errno.ENOENT