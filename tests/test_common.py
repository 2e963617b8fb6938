import errno
import os

import pytest

from fvekit.common import OpenError, hexdump, open_file, xor_buffer


def test_xor_round_trip():
    a = bytes(range(32))
    b = bytes(reversed(range(32)))
    mixed = xor_buffer(a, b)
    assert xor_buffer(mixed, b) == a
    assert xor_buffer(mixed, a) == b


def test_xor_with_itself_is_zero():
    data = b"\x01\xff\x80\x7f" * 4
    assert xor_buffer(data, data) == bytes(len(data))


def test_xor_keeps_leading_zero_bytes():
    assert xor_buffer(b"\x00\x00\x01", b"\x00\x00\x03") == b"\x00\x00\x02"


def test_xor_length_mismatch():
    with pytest.raises(ValueError):
        xor_buffer(b"ab", b"abc")


def test_hexdump_empty():
    assert hexdump(b"") == ""


def test_hexdump_full_line():
    assert hexdump(bytes(range(16))) == (
        "0x00000000 00 01 02 03 04 05 06 07-08 09 0a 0b 0c 0d 0e 0f \n"
    )


def test_hexdump_partial_lines():
    out = hexdump(bytes(range(17)))
    lines = out.splitlines()
    assert len(lines) == 2
    assert lines[1] == "0x00000010 10 "


def test_hexdump_no_dash_when_line_ends_at_eighth_byte():
    assert "-" not in hexdump(bytes(8))


def test_open_file_reads(tmp_path):
    target = tmp_path / "data.bin"
    target.write_bytes(b"content")
    fd = open_file(target, os.O_RDONLY)
    try:
        assert os.read(fd, 100) == b"content"
    finally:
        os.close(fd)


def test_open_file_missing(tmp_path):
    with pytest.raises(OpenError) as info:
        open_file(tmp_path / "missing", os.O_RDONLY)
    assert info.value.errno == errno.ENOENT
    assert "Failed to open file" in str(info.value)


def test_open_file_long_name_truncated(tmp_path):
    path = str(tmp_path / ("a" * 80))
    with pytest.raises(OpenError) as info:
        open_file(path, os.O_RDONLY)
    message = info.value.strerror
    assert "..." in message
    assert path not in message