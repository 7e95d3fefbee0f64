"""
Terminal attribute records.

A terminal's behaviour (line buffering, echo, signal keys, output
translation, ...) is described by one attribute record: four flag words,
two baud rates and a table of control characters. This module wraps that
record in an immutable value so a snapshot can be stored, compared and
written back bit-for-bit.
"""

import logging
import termios
from dataclasses import dataclass

from .constants import (
    APPLY_TIMINGS,
    CC,
    CFLAG,
    IFLAG,
    ISPEED,
    LFLAG,
    OFLAG,
    OSPEED,
    TCSANOW,
)
from .errors import DeviceError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TerminalAttributes:
    """
    Snapshot of a terminal's attribute record.

    Attributes:
        iflag: Input mode flags
        oflag: Output mode flags
        cflag: Control mode flags
        lflag: Local mode flags
        ispeed: Input baud rate
        ospeed: Output baud rate
        cc: Control characters. Each entry is a one-byte bytes object, or
            an int for VMIN/VTIME when the terminal is non-canonical.
    """

    iflag: int
    oflag: int
    cflag: int
    lflag: int
    ispeed: int
    ospeed: int
    cc: tuple

    @classmethod
    def from_list(cls, attrs: list) -> "TerminalAttributes":
        """Build a snapshot from the list returned by termios.tcgetattr()."""
        iflag, oflag, cflag, lflag, ispeed, ospeed, cc = attrs
        return cls(iflag, oflag, cflag, lflag, ispeed, ospeed, tuple(cc))

    def to_list(self) -> list:
        """Convert back to the list form termios.tcsetattr() expects."""
        attrs = [0] * (CC + 1)
        attrs[IFLAG] = self.iflag
        attrs[OFLAG] = self.oflag
        attrs[CFLAG] = self.cflag
        attrs[LFLAG] = self.lflag
        attrs[ISPEED] = self.ispeed
        attrs[OSPEED] = self.ospeed
        attrs[CC] = list(self.cc)
        return attrs

    def __str__(self) -> str:
        return (
            f"iflag=0x{self.iflag:08x} oflag=0x{self.oflag:08x} "
            f"cflag=0x{self.cflag:08x} lflag=0x{self.lflag:08x}"
        )


def read_attributes(fd: int) -> TerminalAttributes:
    """
    Read the current attribute record of a terminal.

    Raises:
        DeviceError: If fd is not a terminal or cannot be queried.
    """
    try:
        attrs = termios.tcgetattr(fd)
    except termios.error as e:
        raise DeviceError("tcgetattr", e.args[0], fd) from e

    snapshot = TerminalAttributes.from_list(attrs)
    logger.debug(f"Read attributes from fd {fd}: {snapshot}")
    return snapshot


def write_attributes(
    fd: int,
    attrs: TerminalAttributes,
    when: int = TCSANOW,
) -> None:
    """
    Apply an attribute record to a terminal.

    Args:
        fd: The terminal descriptor.
        attrs: The record to apply.
        when: TCSANOW, TCSADRAIN or TCSAFLUSH.

    Raises:
        ValueError: If when is not one of the apply timings.
        DeviceError: If the terminal rejects the record.
    """
    if when not in APPLY_TIMINGS:
        raise ValueError(f"Invalid apply timing: {when}")

    try:
        termios.tcsetattr(fd, when, attrs.to_list())
    except termios.error as e:
        raise DeviceError("tcsetattr", e.args[0], fd) from e

    logger.debug(f"Applied attributes to fd {fd}: {attrs}")
