"""
ttymode - terminal mode control.

Main entry points:
- TerminalSession / enable_raw_mode / restore_mode: raw mode with an
  exact restore of the original attributes
- get_window_size: terminal dimensions in character cells
- set_nonblocking: toggle O_NONBLOCK on a descriptor
"""

__version__ = "0.1.0"

from .attributes import TerminalAttributes, read_attributes, write_attributes
from .blocking import get_status_flags, is_nonblocking, set_nonblocking
from .errors import DeviceError
from .geometry import WindowSize, get_window_size
from .profile import CBREAK, RAW, RawModeProfile
from .terminal import TerminalSession, enable_raw_mode, restore_mode

__all__ = [
    "__version__",
    # Errors
    "DeviceError",
    # Attribute records
    "TerminalAttributes",
    "read_attributes",
    "write_attributes",
    # Raw mode
    "RawModeProfile",
    "RAW",
    "CBREAK",
    "TerminalSession",
    "enable_raw_mode",
    "restore_mode",
    # Geometry
    "WindowSize",
    "get_window_size",
    # Blocking
    "get_status_flags",
    "is_nonblocking",
    "set_nonblocking",
]
