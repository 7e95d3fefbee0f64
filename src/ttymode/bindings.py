"""
Low-level cffi bindings for the terminal ioctl and fcntl calls.

Python's termios module covers reading and writing the attribute record,
but window geometry and descriptor status flags are plain libc calls.
We reach them through cffi in ABI mode so no compiler is needed at
install time.
"""

from cffi import FFI

ffi = FFI()

# Declarations follow <sys/ioctl.h> and <fcntl.h>. Both calls are variadic,
# so every argument after the request/command must be passed as an explicit
# cdata value (see ffi.cast in the callers).
ffi.cdef("""
    // ioctl request type
    typedef unsigned long ioctl_request_t;

    // Terminal window size, filled in by TIOCGWINSZ
    struct winsize {
        unsigned short ws_row;     // rows, in characters
        unsigned short ws_col;     // columns, in characters
        unsigned short ws_xpixel;  // horizontal size, pixels (often 0)
        unsigned short ws_ypixel;  // vertical size, pixels (often 0)
    };

    int ioctl(int fd, ioctl_request_t request, ...);
    int fcntl(int fd, int cmd, ...);
""")

lib = ffi.dlopen(None)  # None means use the C library


def get_errno() -> int:
    """
    Get the errno left behind by the most recent C call on this thread.

    cffi saves errno right after each call returns, so this is safe to
    read even if Python itself made system calls in between.
    """
    return ffi.errno
