"""Sector-aligned reads and writes on an encrypted volume."""

from __future__ import annotations

import errno
import logging
from collections.abc import Iterable
from typing import Protocol

logger = logging.getLogger(__name__)

INT_MAX = 2**31 - 1


class VolumeError(OSError):
    """Raised when a volume operation fails; ``errno`` tells why."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(code, message)


class RegionCodec(Protocol):
    """Reads and writes whole sectors, deciphering and enciphering them."""

    def decrypt_region(self, sector_count: int, sector_size: int, offset: int) -> bytes:
        """Return ``sector_count`` deciphered sectors starting at byte ``offset``."""

    def encrypt_region(
        self, sector_count: int, sector_size: int, offset: int, data: bytes
    ) -> None:
        """Encipher ``data`` and store it as sectors starting at byte ``offset``."""


def sector_span(offset: int, size: int, sector_size: int) -> tuple[int, int]:
    """Return the first sector and the number of sectors covering a request.

    A sector is added for a start that is not on a sector boundary and
    another for an end that is not.
    """
    if sector_size <= 0:
        raise ValueError("sector size must be positive")
    extra = 0
    if offset % sector_size:
        extra += 1
    if (offset + size) % sector_size:
        extra += 1
    return offset // sector_size, size // sector_size + extra


class Volume:
    """An unlocked volume giving byte-level access over a sector codec."""

    def __init__(
        self,
        codec: RegionCodec,
        sector_size: int,
        volume_size: int,
        read_only: bool = False,
        decrypted_state: bool = False,
        seven_layout: bool = False,
        virtualized_size: int = 0,
        boot_sectors_backup: int = 0,
        protected: Iterable[tuple[int, int]] = (),
    ) -> None:
        if sector_size <= 0:
            raise ValueError("sector size must be positive")
        if volume_size < 0:
            raise ValueError("volume size must not be negative")
        self.codec = codec
        self.sector_size = sector_size
        self.volume_size = volume_size
        self.read_only = read_only
        self.decrypted_state = decrypted_state
        self.seven_layout = seven_layout
        self.virtualized_size = virtualized_size
        self.boot_sectors_backup = boot_sectors_backup
        self.protected = [(int(start), int(length)) for start, length in protected]
        self._ready = False
        self._state_ok = False

    @property
    def ready(self) -> bool:
        """Whether initialization completed and the volume state is safe."""
        return self._ready and self._state_ok

    def mark_ready(self, state_ok: bool = True) -> None:
        """Record that initialization is complete and whether the state is safe."""
        self._ready = True
        self._state_ok = bool(state_ok)

    def _check_usable(self) -> None:
        if not self._ready:
            raise VolumeError(errno.EFAULT, "Initialization not completed.")
        if not self._state_ok:
            raise VolumeError(
                errno.EFAULT, "Invalid volume state, can't run safely."
            )

    def _check_size(self, size: int) -> None:
        if size < 0:
            raise VolumeError(errno.EINVAL, f"Negative size: {size}")
        if size > INT_MAX:
            raise VolumeError(
                errno.EOVERFLOW, f"Received size which will overflow: {size:#x}"
            )

    def _decrypt(self, offset: int, size: int) -> tuple[bytearray, int, int]:
        start, count = sector_span(offset, size, self.sector_size)
        logger.debug(
            "Start sector number: %#x || Number of sectors: %#x", start, count
        )
        try:
            region = self.codec.decrypt_region(
                count, self.sector_size, start * self.sector_size
            )
        except OSError as exc:
            raise VolumeError(errno.EIO, "Cannot decrypt sectors.") from exc
        skip = offset % self.sector_size
        if region is None or len(region) < skip + size:
            raise VolumeError(errno.EIO, "Cannot decrypt sectors.")
        return bytearray(region), start, count

    def read(self, offset: int, size: int) -> bytes:
        """Return ``size`` deciphered bytes starting at ``offset``."""
        self._check_usable()
        if size == 0:
            logger.debug("Received a request with a null size")
            return b""
        self._check_size(size)
        if offset < 0:
            raise VolumeError(errno.EFAULT, f"Offset under 0: {offset:#x}")
        if offset >= self.volume_size and not self.decrypted_state:
            raise VolumeError(
                errno.EFAULT,
                f"Offset ({offset:#x}) exceeds volume's size ({self.volume_size:#x})",
            )

        region, _, _ = self._decrypt(offset, size)
        skip = offset % self.sector_size
        return bytes(region[skip : skip + size])

    def _overlaps_protected(self, offset: int, size: int) -> bool:
        end = offset + size
        return any(
            start < end and offset < start + length
            for start, length in self.protected
        )

    def write(self, offset: int, data: bytes) -> int:
        """Encipher ``data`` at ``offset`` and return the number of bytes written.

        Writes running past the end of the volume are cut short.
        """
        self._check_usable()
        if self.read_only:
            raise VolumeError(errno.EACCES, "Volume opened read-only.")
        data = bytes(data)
        size = len(data)
        if size == 0:
            logger.debug("Received a request with a null size")
            return 0
        self._check_size(size)
        if offset < 0:
            raise VolumeError(errno.EFAULT, f"Offset under 0: {offset:#x}")
        if offset >= self.volume_size:
            raise VolumeError(
                errno.EFAULT,
                f"Offset ({offset:#x}) exceeds volume's size ({self.volume_size:#x})",
            )
        if offset + size >= self.volume_size:
            size = self.volume_size - offset
            logger.warning(
                "Size modified as exceeding volume's end; new size: %#x", size
            )
            data = data[:size]

        if self._overlaps_protected(offset, size):
            raise VolumeError(
                errno.EFAULT, f"Refusing to overwrite protected area at {offset:#x}"
            )

        written = 0
        if self.seven_layout and offset < self.virtualized_size:
            if offset + size <= self.virtualized_size:
                offset += self.boot_sectors_backup
                logger.debug("Redirecting to %#x", offset)
            else:
                head = self.virtualized_size - offset
                written = self.write(offset, data[:head])
                offset = self.virtualized_size
                data = data[head:]
                size -= head

        region, start, count = self._decrypt(offset, size)
        skip = offset % self.sector_size
        region[skip : skip + size] = data
        try:
            self.codec.encrypt_region(
                count, self.sector_size, start * self.sector_size, bytes(region)
            )
        except OSError as exc:
            raise VolumeError(errno.EIO, "Cannot encrypt sectors.") from exc

        return size + written