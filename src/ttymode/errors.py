"""
Errors raised by terminal device operations.
"""

import os


class DeviceError(Exception):
    """
    Exception raised when an operation on a terminal device fails.

    Attributes:
        operation: The system call that failed (e.g. "tcgetattr").
        errno: The operating system error code reported for the failure.
        fd: The descriptor the call was made on, if known.
    """

    def __init__(self, operation: str, errno: int, fd: int | None = None):
        self.operation = operation
        self.errno = errno
        self.fd = fd
        target = f" on fd {fd}" if fd is not None else ""
        super().__init__(
            f"{operation} failed{target}: [Errno {errno}] {os.strerror(errno)}"
        )
