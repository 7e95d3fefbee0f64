"""
Terminal window size queries.
"""

import errno
import logging
from typing import NamedTuple

from .bindings import ffi, get_errno, lib
from .constants import TIOCGWINSZ
from .errors import DeviceError

logger = logging.getLogger(__name__)


class WindowSize(NamedTuple):
    """Terminal dimensions in character cells."""

    columns: int
    rows: int

    def __str__(self) -> str:
        return f"{self.columns}x{self.rows}"


def get_window_size(fd: int) -> WindowSize:
    """
    Ask the terminal driver for the window size.

    The driver is queried on every call; nothing is cached, so a resize
    is picked up the next time this is called.

    Args:
        fd: A terminal descriptor.

    Returns:
        (columns, rows), both positive.

    Raises:
        DeviceError: If fd is not a terminal (ENOTTY), or the terminal
            reports a zero size, meaning its geometry is unknown (EINVAL).
    """
    ws = ffi.new("struct winsize *")

    result = lib.ioctl(fd, TIOCGWINSZ, ws)
    if result < 0:
        raise DeviceError("ioctl(TIOCGWINSZ)", get_errno(), fd)

    size = WindowSize(columns=ws.ws_col, rows=ws.ws_row)
    if size.columns == 0 or size.rows == 0:
        # Fresh pseudo-terminals report 0x0 until someone sets a size
        raise DeviceError("ioctl(TIOCGWINSZ)", errno.EINVAL, fd)

    logger.debug(f"Window size of fd {fd}: {size}")
    return size
