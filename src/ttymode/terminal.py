"""
Terminal mode management for raw/cooked mode switching.

When a program reads keystrokes one at a time, the terminal has to be in
raw mode so:
- Bytes are delivered immediately (no line buffering)
- Typed characters are not echoed
- Ctrl+C, Ctrl+Z etc. arrive as bytes instead of signals

Just as important, the terminal must be put back exactly as it was found
when the program is done. Otherwise the user's shell is left unusable.

This module provides a session object (and context manager) that takes a
snapshot of the terminal's attributes before the first change and
restores that snapshot on exit.
"""

import atexit
import logging

from .attributes import TerminalAttributes, read_attributes, write_attributes
from .constants import TCSANOW
from .errors import DeviceError
from .profile import RAW, RawModeProfile

logger = logging.getLogger(__name__)

# Sessions created by enable_raw_mode(), by descriptor, until restored
_active_sessions: dict[int, "TerminalSession"] = {}


class TerminalSession:
    """
    Owns the raw-mode state of one terminal descriptor.

    The first successful enable_raw_mode() captures the terminal's
    attributes as the session baseline. The baseline is never replaced or
    cleared afterwards: restore() always writes back that original record,
    no matter how many times raw mode was re-applied in between.

    Usage:
        with TerminalSession(sys.stdin.fileno()) as session:
            # Terminal is in raw mode here
            data = os.read(session.fd, 1)

    The terminal is restored when the with block exits, even if an
    exception occurs, and from an atexit hook if the interpreter exits
    while the session is still raw.

    The descriptor is borrowed: the session never opens or closes it.
    Sessions are not thread-safe.
    """

    def __init__(
        self,
        fd: int,
        profile: RawModeProfile = RAW,
        when: int = TCSANOW,
    ):
        """
        Create a session for a terminal descriptor.

        Args:
            fd: An open terminal descriptor.
            profile: Which processing layers raw mode switches off.
            when: When attribute changes take effect (TCSANOW, TCSADRAIN
                  or TCSAFLUSH). TCSAFLUSH discards unread input.
        """
        self._fd = fd
        self._profile = profile
        self._when = when
        self._baseline: TerminalAttributes | None = None
        self._in_raw_mode = False
        self._exit_hook_registered = False

    @property
    def fd(self) -> int:
        """Get the terminal descriptor for use with select() or os.read()."""
        return self._fd

    @property
    def profile(self) -> RawModeProfile:
        return self._profile

    @property
    def baseline(self) -> TerminalAttributes | None:
        """The attributes captured before the first change, or None."""
        return self._baseline

    @property
    def in_raw_mode(self) -> bool:
        """Check if this session last left the terminal in raw mode."""
        return self._in_raw_mode

    def enable_raw_mode(self, profile: RawModeProfile | None = None) -> None:
        """
        Switch the terminal to raw mode.

        The current attributes are read and, on the first successful read,
        saved as the baseline. The profile is then applied to the *current*
        attributes. Calling this again while already raw re-applies the
        profile but leaves the baseline alone.

        Args:
            profile: If given, replaces the session's profile first.

        Raises:
            DeviceError: If the attributes cannot be read (nothing changes)
                or the raw attributes cannot be applied (the baseline, if
                just captured, stays captured).
        """
        if profile is not None:
            self._profile = profile

        current = read_attributes(self._fd)

        if self._baseline is None:
            self._baseline = current
            logger.debug(f"Captured baseline for fd {self._fd}: {current}")

        write_attributes(self._fd, self._profile.apply(current), self._when)
        self._in_raw_mode = True

        if not self._exit_hook_registered:
            # Restore on interpreter exit if the caller never does
            atexit.register(self._cleanup)
            self._exit_hook_registered = True

    def restore(self) -> None:
        """
        Put the terminal back to its baseline attributes.

        Does nothing if no baseline was ever captured. The baseline is kept,
        so restore() can be called any number of times. Once the terminal
        is back to its baseline the atexit hook is dropped.

        Raises:
            DeviceError: If the terminal rejects the baseline record
                (e.g. the device has gone away).
        """
        if self._baseline is None:
            return

        write_attributes(self._fd, self._baseline, self._when)
        self._in_raw_mode = False
        self._drop_exit_hook()
        logger.debug(f"Restored baseline for fd {self._fd}")

    def close(self) -> None:
        """Restore the terminal and release everything the session holds."""
        try:
            self.restore()
        finally:
            self._drop_exit_hook()
            if _active_sessions.get(self._fd) is self:
                del _active_sessions[self._fd]

    def _drop_exit_hook(self) -> None:
        if self._exit_hook_registered:
            atexit.unregister(self._cleanup)
            self._exit_hook_registered = False

    def _cleanup(self) -> None:
        """Cleanup handler for atexit - restores terminal mode."""
        if not self._in_raw_mode:
            return
        try:
            self.restore()
        except DeviceError as e:
            # Nobody is left to handle this at interpreter exit
            logger.warning(f"Could not restore terminal on exit: {e}")

    def __enter__(self) -> "TerminalSession":
        """Enter context manager - switch to raw mode."""
        self.enable_raw_mode()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit context manager - restore terminal mode."""
        self.close()

    def __repr__(self) -> str:
        state = "raw" if self._in_raw_mode else "restored"
        return f"TerminalSession(fd={self._fd}, {state})"


def enable_raw_mode(fd: int, profile: RawModeProfile = RAW) -> TerminalSession:
    """
    Switch a terminal to raw mode and return the session that can undo it.

    While a descriptor has a session that has not been restored, calling
    this again re-applies the profile through that same session, so the
    attributes captured by the first call remain the restore target.

    Pass the returned session to restore_mode(), or use it in a with
    statement, to put the terminal back.

    Raises:
        DeviceError: If the terminal cannot be read or updated.
    """
    session = _active_sessions.get(fd)
    if session is None:
        session = TerminalSession(fd, profile)

    try:
        session.enable_raw_mode(profile)
    finally:
        # A failed apply still captured the baseline; keep it for the retry
        if session.baseline is not None:
            _active_sessions[fd] = session

    return session


def restore_mode(session: TerminalSession) -> None:
    """
    Restore the terminal a session was created for and release the session.

    The next enable_raw_mode() on the same descriptor starts a new session.

    Raises:
        DeviceError: If the baseline cannot be applied.
    """
    session.close()
