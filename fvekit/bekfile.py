"""Reading the dataset stored in a .BEK external key file."""

from __future__ import annotations

import logging
import os
from typing import BinaryIO

from .common import OpenError, open_file

logger = logging.getLogger(__name__)

BEK_DATASET_HEADER_SIZE = 0x30


class BekFileError(ValueError):
    """Raised when a .BEK file cannot be read or holds a malformed dataset."""


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    chunks = []
    remaining = size
    while remaining > 0:
        chunk = stream.read(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def read_bek_dataset(stream: BinaryIO) -> bytes:
    """Read one dataset, header included, from a binary stream.

    The little-endian 32-bit size at the start of the header gives the
    length of the whole dataset. Raises BekFileError when the header or the
    content is truncated, or when the size does not exceed the header.
    """
    header = _read_exact(stream, BEK_DATASET_HEADER_SIZE)
    if len(header) != BEK_DATASET_HEADER_SIZE:
        raise BekFileError("Not all byte read (bek dataset header).")

    size = int.from_bytes(header[:4], "little")
    if size <= BEK_DATASET_HEADER_SIZE:
        raise BekFileError("Dataset size < dataset header size.")

    rest = size - BEK_DATASET_HEADER_SIZE
    content = _read_exact(stream, rest)
    if len(content) != rest:
        raise BekFileError("Not all byte read (bek dataset content).")

    return header + content


def load_bek_dataset(path: str | os.PathLike) -> bytes:
    """Open the .BEK file at ``path`` and return its dataset."""
    name = os.fspath(path)
    try:
        fd = open_file(name, os.O_RDONLY | getattr(os, "O_BINARY", 0))
    except OpenError as exc:
        raise BekFileError(f"Cannot open BEK file ({name})") from exc
    with os.fdopen(fd, "rb") as stream:
        dataset = read_bek_dataset(stream)
    logger.info("BEK File Information: %s", name)
    return dataset