"""
Shared fixtures: real pseudo-terminals and plain pipes.
"""

import fcntl
import os
import struct
import termios

import pytest


def set_window_size(fd: int, columns: int, rows: int) -> None:
    """Set a terminal's size the way a terminal emulator would."""
    fcntl.ioctl(fd, termios.TIOCSWINSZ, struct.pack("HHHH", rows, columns, 0, 0))


class PtyPair:
    """A pseudo-terminal: write to master to "type", read slave like stdin."""

    def __init__(self):
        self.master, self.slave = os.openpty()

    def close(self):
        for fd in (self.master, self.slave):
            try:
                os.close(fd)
            except OSError:
                pass


@pytest.fixture
def pty_pair():
    pair = PtyPair()
    yield pair
    pair.close()


@pytest.fixture
def pipe():
    read_fd, write_fd = os.pipe()
    yield read_fd, write_fd
    for fd in (read_fd, write_fd):
        try:
            os.close(fd)
        except OSError:
            pass


@pytest.fixture
def closed_fd():
    """A descriptor number that is guaranteed not to be open."""
    read_fd, write_fd = os.pipe()
    os.close(read_fd)
    os.close(write_fd)
    return read_fd
