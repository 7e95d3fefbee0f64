import errno
import os

from ttymode.errors import DeviceError


def test_message_includes_call_and_errno() -> None:
    error = DeviceError("tcgetattr", errno.ENOTTY, 3)
    assert str(error) == f"tcgetattr failed on fd 3: [Errno {errno.ENOTTY}] {os.strerror(errno.ENOTTY)}"


def test_without_fd() -> None:
    error = DeviceError("fcntl(F_GETFL)", errno.EBADF)
    assert error.fd is None
    assert str(error).startswith("fcntl(F_GETFL) failed: ")
