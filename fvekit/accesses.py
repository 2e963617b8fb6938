"""Choosing the decryption mean that unlocks the volume keys."""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

logger = logging.getLogger(__name__)

ALGORITHM_MASK = 0xFFFF


class DecryptionMean(enum.Flag):
    """The ways a volume key can be obtained, combinable as flags."""

    CLEAR_KEY = enum.auto()
    USER_PASSWORD = enum.auto()
    RECOVERY_PASSWORD = enum.auto()
    BEKFILE = enum.auto()
    FVEKFILE = enum.auto()
    VMKFILE = enum.auto()


_PRIORITY = (
    DecryptionMean.CLEAR_KEY,
    DecryptionMean.USER_PASSWORD,
    DecryptionMean.RECOVERY_PASSWORD,
    DecryptionMean.BEKFILE,
    DecryptionMean.FVEKFILE,
    DecryptionMean.VMKFILE,
)

_DESCRIPTIONS = {
    DecryptionMean.CLEAR_KEY: "clear key",
    DecryptionMean.USER_PASSWORD: "user password",
    DecryptionMean.RECOVERY_PASSWORD: "recovery password",
    DecryptionMean.BEKFILE: "bek file",
    DecryptionMean.FVEKFILE: "FVEK file",
    DecryptionMean.VMKFILE: "VMK file",
}


class AccessError(Exception):
    """Raised when no key can be obtained or the key is unusable."""


def _combine(means: DecryptionMean | Iterable[DecryptionMean]) -> DecryptionMean:
    if isinstance(means, DecryptionMean):
        return means
    combined = DecryptionMean(0)
    for mean in means:
        combined |= mean
    return combined


def select_key(
    means: DecryptionMean | Iterable[DecryptionMean],
    resolvers: Mapping[DecryptionMean, Callable[[], Any]],
) -> tuple[DecryptionMean, Any]:
    """Try each requested mean in a fixed order and return the first success.

    The order is clear key, user password, recovery password, bek file,
    FVEK file, then VMK file. A resolver fails by returning None or by
    raising OSError, ValueError, LookupError or AccessError; a requested mean
    without a resolver counts as failed. Returns ``(mean, key)``. Raises
    AccessError when none of the requested means yields a key.
    """
    remaining = _combine(means)
    for mean in _PRIORITY:
        if not remaining & mean:
            continue
        resolver = resolvers.get(mean)
        key = None
        if resolver is None:
            logger.debug("No way to use the %s decryption method", _DESCRIPTIONS[mean])
        else:
            try:
                key = resolver()
            except (OSError, ValueError, LookupError, AccessError) as exc:
                logger.debug(
                    "The %s decryption method failed: %s", _DESCRIPTIONS[mean], exc
                )
                key = None
        if key is not None:
            logger.info("Used %s decryption method", _DESCRIPTIONS[mean])
            return mean, key
        remaining &= ~mean

    raise AccessError(
        "None of the provided decryption mean is decrypting the keys."
    )


def check_algorithm(algo: int, lowest: int, highest: int) -> int:
    """Keep the low 16 bits of ``algo`` and check they name a supported cipher.

    Returns the masked value. Raises AccessError when it lies outside
    ``lowest``..``highest``.
    """
    masked = algo & ALGORITHM_MASK
    if masked < lowest or masked > highest:
        raise AccessError(
            f"Can't recognize the encryption algorithm used: {masked:#x}."
        )
    return masked