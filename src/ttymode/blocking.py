"""
Non-blocking mode for descriptors.

With O_NONBLOCK set, a read() that has no data available fails with
EAGAIN (BlockingIOError in Python) instead of waiting. Event loops use
this to poll the terminal without stalling.
"""

import logging

from .bindings import ffi, get_errno, lib
from .constants import F_GETFL, F_SETFL, O_NONBLOCK
from .errors import DeviceError

logger = logging.getLogger(__name__)


def get_status_flags(fd: int) -> int:
    """
    Read a descriptor's file status flags (O_APPEND, O_NONBLOCK, ...).

    Raises:
        DeviceError: If the descriptor is invalid.
    """
    # fcntl is variadic: F_GETFL ignores the third argument but cffi
    # still needs an explicit one.
    flags = lib.fcntl(fd, F_GETFL, ffi.cast("int", 0))
    if flags < 0:
        raise DeviceError("fcntl(F_GETFL)", get_errno(), fd)
    return flags


def is_nonblocking(fd: int) -> bool:
    """Check whether O_NONBLOCK is set on a descriptor."""
    return bool(get_status_flags(fd) & O_NONBLOCK)


def set_nonblocking(fd: int, enable: bool) -> None:
    """
    Set or clear O_NONBLOCK, leaving every other status flag unchanged.

    Args:
        fd: Any open descriptor (not only terminals).
        enable: True for non-blocking reads/writes, False to block normally.

    Raises:
        DeviceError: If the flags cannot be read or written.
    """
    flags = get_status_flags(fd)
    new_flags = flags | O_NONBLOCK if enable else flags & ~O_NONBLOCK

    if new_flags == flags:
        return

    if lib.fcntl(fd, F_SETFL, ffi.cast("int", new_flags)) < 0:
        raise DeviceError("fcntl(F_SETFL)", get_errno(), fd)

    logger.debug(f"fd {fd}: O_NONBLOCK {'set' if enable else 'cleared'}")
