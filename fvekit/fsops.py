"""Filesystem operations exposing a volume as a single file."""

from __future__ import annotations

import errno
import logging
import os
import stat
from dataclasses import dataclass

from .volume import Volume

logger = logging.getLogger(__name__)

FILE_NAME = "fvekit-file"
FILE_PATH = "/" + FILE_NAME
ROOT_PATH = "/"
ACCESS_MODE_MASK = 3


@dataclass(frozen=True)
class FileAttributes:
    """The attributes reported for an entry of the filesystem."""

    mode: int
    nlink: int
    size: int = 0


class VolumeFileSystem:
    """A one-directory filesystem whose single file is the deciphered volume."""

    def __init__(self, volume: Volume) -> None:
        self.volume = volume

    @staticmethod
    def _require(path: str | None) -> str:
        if not path:
            raise OSError(errno.EINVAL, "No path given")
        return path

    def _require_file(self, path: str | None) -> None:
        path = self._require(path)
        if path != FILE_PATH:
            logger.debug('Unknown entry requested: "%s"', path)
            raise OSError(errno.ENOENT, os.strerror(errno.ENOENT), path)

    def getattr(self, path: str) -> FileAttributes:
        """Return the attributes of the root directory or of the volume file."""
        path = self._require(path)
        if path == ROOT_PATH:
            return FileAttributes(mode=stat.S_IFDIR | 0o555, nlink=2)
        if path == FILE_PATH:
            perms = 0o444 if self.volume.read_only else 0o666
            return FileAttributes(
                mode=stat.S_IFREG | perms, nlink=1, size=self.volume.volume_size
            )
        raise OSError(errno.ENOENT, os.strerror(errno.ENOENT), path)

    def readdir(self, path: str) -> list[str]:
        """List the entries of the root directory."""
        path = self._require(path)
        if path != ROOT_PATH:
            raise OSError(errno.ENOENT, os.strerror(errno.ENOENT), path)
        return [".", "..", FILE_NAME]

    def open(self, path: str, flags: int) -> None:
        """Check that the volume file may be opened with ``flags``."""
        self._require_file(path)
        access = flags & ACCESS_MODE_MASK
        if self.volume.read_only:
            allowed = {os.O_RDONLY}
        else:
            allowed = {os.O_RDONLY, os.O_WRONLY, os.O_RDWR}
        if access not in allowed:
            raise OSError(errno.EACCES, os.strerror(errno.EACCES), path)

    def read(self, path: str, size: int, offset: int) -> bytes:
        """Read ``size`` deciphered bytes of the volume file at ``offset``."""
        self._require_file(path)
        return self.volume.read(offset, size)

    def write(self, path: str, data: bytes, offset: int) -> int:
        """Encipher ``data`` into the volume file at ``offset``."""
        self._require_file(path)
        if data is None:
            raise OSError(errno.EINVAL, "No data given")
        return self.volume.write(offset, data)