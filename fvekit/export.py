"""Copy the deciphered contents of a volume into a plain file."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable

from .volume import Volume

logger = logging.getLogger(__name__)

NB_READ_SECTOR = 16
_LARGEFILE = getattr(os, "O_LARGEFILE", 0)
_BINARY = getattr(os, "O_BINARY", 0)


class ExportError(OSError):
    """Raised when the output file cannot be created."""


def _create_output(path: str, read_only: bool) -> int:
    mode = 0o400 if read_only else 0o600
    flags = os.O_CREAT | os.O_EXCL | os.O_RDWR | _LARGEFILE | _BINARY
    logger.debug("Trying to open '%s'...", path)
    try:
        fd = os.open(path, flags, mode)
    except FileExistsError as exc:
        raise ExportError(
            exc.errno, f"'{path}' already exists, can't override."
        ) from exc
    except OSError as exc:
        raise ExportError(
            exc.errno, f"Failed to open file '{path}': {exc.strerror}"
        ) from exc
    logger.debug("Opened (fd #%d).", fd)
    return fd


def decrypt_to_file(
    volume: Volume,
    path: str | os.PathLike,
    progress: Callable[[int], None] | None = None,
) -> int:
    """Write every deciphered byte of ``volume`` into the new file ``path``.

    The volume is read sixteen sectors at a time and each chunk is written
    whole. ``progress`` is called with the completed percentage each time it
    changes. Returns the number of bytes written. Raises ExportError if
    ``path`` already exists or cannot be created.
    """
    name = os.fspath(path)
    if os.path.lexists(name):
        raise ExportError(
            17, f"'{name}' already exists, can't override."
        )

    logger.info("Putting volume data into '%s'...", name)
    chunk_size = NB_READ_SECTOR * volume.sector_size
    total = volume.volume_size

    fd = _create_output(name, volume.read_only)
    logger.info("File size: %d bytes", total)
    logger.info("Decrypting... 0%%")

    offset = 0
    written = 0
    percent = 0
    with os.fdopen(fd, "wb") as out:
        while offset < total:
            data = volume.read(offset, chunk_size)
            offset += chunk_size
            out.write(data)
            written += len(data)

            current = offset * 100 // total
            if current != percent:
                percent = current
                logger.info("Decrypting... %d%%", percent)
                if progress is not None:
                    progress(percent)

    logger.info("Decrypting... Done.")
    return written