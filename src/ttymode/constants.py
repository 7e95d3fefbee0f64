"""
Terminal constants.

Request codes and flag values differ between Linux and macOS, so they are
taken from the standard library modules that were compiled for this
platform rather than hard-coded.
"""

import fcntl
import os
import termios

# ============================================================================
# Attribute record layout
# ============================================================================
# termios.tcgetattr() returns a 7-element list in this order.

IFLAG = 0  # Input modes
OFLAG = 1  # Output modes
CFLAG = 2  # Control modes
LFLAG = 3  # Local modes
ISPEED = 4  # Input baud rate
OSPEED = 5  # Output baud rate
CC = 6  # Control character table

# ============================================================================
# When to apply new attributes
# ============================================================================

TCSANOW = termios.TCSANOW  # Immediately
TCSADRAIN = termios.TCSADRAIN  # After pending output has been transmitted
TCSAFLUSH = termios.TCSAFLUSH  # As TCSADRAIN, and discard unread input

APPLY_TIMINGS = (TCSANOW, TCSADRAIN, TCSAFLUSH)

# ============================================================================
# ioctl / fcntl requests
# ============================================================================

# Read the window size into a struct winsize.
TIOCGWINSZ = termios.TIOCGWINSZ

# Get / set the file status flags (O_APPEND, O_NONBLOCK, ...).
F_GETFL = fcntl.F_GETFL
F_SETFL = fcntl.F_SETFL

O_NONBLOCK = os.O_NONBLOCK
