"""Low-level helpers: opening files, hex dumps and buffer xor."""

from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)

_OPEN_FAIL = "Failed to open file"
_NAME_WIDTH = 42
_HEXDUMP_WIDTH = 16


class OpenError(OSError):
    """Raised when a file cannot be opened."""


def _truncate_name(path: str) -> str:
    """Shorten a path for error messages, marking the cut with an ellipsis."""
    if len(path) > _NAME_WIDTH:
        return path[: _NAME_WIDTH - 4] + "..."
    return path[: _NAME_WIDTH - 1]


def open_file(path: str | os.PathLike, flags: int) -> int:
    """Open ``path`` with ``os.open`` flags and return the file descriptor.

    Raises OpenError (carrying the original errno) when opening fails.
    """
    name = os.fspath(path)
    logger.debug("Trying to open '%s'...", name)
    try:
        fd = os.open(name, flags)
    except OSError as exc:
        message = f"{_OPEN_FAIL} '{_truncate_name(name)}': {exc.strerror}"
        logger.error("%s", message)
        raise OpenError(exc.errno, message) from exc
    logger.debug("Opened (fd #%d).", fd)
    return fd


def hexdump(data: bytes) -> str:
    """Render ``data`` as hex lines of 16 bytes, each prefixed by its offset."""
    lines = []
    half = _HEXDUMP_WIDTH // 2
    for start in range(0, len(data), _HEXDUMP_WIDTH):
        chunk = data[start : start + _HEXDUMP_WIDTH]
        parts = [f"0x{start:08x} "]
        for pos, byte in enumerate(chunk):
            sep = "-" if pos == half - 1 and pos + 1 != len(chunk) else " "
            parts.append(f"{byte:02x}{sep}")
        lines.append("".join(parts) + "\n")
    return "".join(lines)


def xor_buffer(buf1: bytes, buf2: bytes) -> bytes:
    """Return the byte-wise xor of two buffers of equal length."""
    if len(buf1) != len(buf2):
        raise ValueError(
            f"buffers differ in length ({len(buf1)} and {len(buf2)})"
        )
    size = len(buf1)
    value = int.from_bytes(buf1, "big") ^ int.from_bytes(buf2, "big")
    return value.to_bytes(size, "big")