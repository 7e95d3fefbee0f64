"""
Command-line interface for ttymode.

This module defines all CLI commands using the Typer library.
"""

import logging
import os
from typing import Annotated

import typer

from ttymode import __version__

app = typer.Typer(
    name="ttymode",
    help="ttymode - inspect and control terminal modes",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        typer.echo(f"ttymode {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-V", callback=version_callback, is_eager=True),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log every terminal call"),
    ] = False,
) -> None:
    """ttymode - inspect and control terminal modes."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command("size")
def size(
    fd: int = typer.Option(1, "--fd", "-f", help="Terminal file descriptor"),
) -> None:
    """
    Print the terminal window size as COLUMNSxROWS.
    """
    from ttymode.errors import DeviceError
    from ttymode.geometry import get_window_size

    try:
        print(get_window_size(fd))
    except DeviceError as e:
        print(f"Error: {e}")
        raise typer.Exit(code=1) from e


@app.command("info")
def info(
    fd: int = typer.Option(0, "--fd", "-f", help="Terminal file descriptor"),
) -> None:
    """
    Display the current mode of a terminal.

    Shows whether the descriptor is a terminal, its window size, whether
    it is non-blocking, and which input/output processing layers are on.
    """
    from ttymode.attributes import read_attributes
    from ttymode.blocking import is_nonblocking
    from ttymode.errors import DeviceError
    from ttymode.geometry import get_window_size
    from ttymode.profile import LAYERS, enabled_layers

    try:
        print(f"Terminal Information (fd {fd})")
        print("=" * 60)
        print(f"Is a terminal:     {'yes' if os.isatty(fd) else 'no'}")
        print(f"Non-blocking:      {'yes' if is_nonblocking(fd) else 'no'}")

        try:
            window = str(get_window_size(fd))
        except DeviceError:
            window = "unknown"
        print(f"Window size:       {window}")

        attrs = read_attributes(fd)
        print(f"Attributes:        {attrs}")
        print()
        print("Processing layers:")
        print("-" * 60)
        active = enabled_layers(attrs)
        for layer in LAYERS:
            print(f"  {layer:<22} {'on' if layer in active else 'off'}")

    except DeviceError as e:
        print(f"Error: {e}")
        raise typer.Exit(code=1) from e


@app.command("keys")
def keys(
    fd: int = typer.Option(0, "--fd", "-f", help="Terminal file descriptor"),
    profile: str = typer.Option(
        "raw",
        "--profile",
        "-p",
        help="Mode to use while reading: raw or cbreak",
    ),
):
    """
    Show the bytes each key press sends.

    Puts the terminal into raw (or cbreak) mode, prints every byte read
    until 'q' is pressed or input ends, then restores the terminal.

    Example:
        ttymode keys
        ttymode keys --profile cbreak
    """
    from ttymode.errors import DeviceError
    from ttymode.profile import PROFILES
    from ttymode.terminal import TerminalSession

    if profile not in PROFILES:
        print(f"Error: unknown profile {profile!r} (choose from {', '.join(PROFILES)})")
        raise typer.Exit(code=2)

    try:
        with TerminalSession(fd, PROFILES[profile]) as session:
            # Output processing may be off, so end lines with \r\n ourselves
            print("Press keys to see their bytes, 'q' to quit.\r")
            while True:
                data = os.read(session.fd, 1)
                if not data or data == b"q":
                    break
                print(f"{data!r:<8} 0x{data[0]:02x}\r")

    except DeviceError as e:
        print(f"\nError: {e}")
        raise typer.Exit(code=1) from e


if __name__ == "__main__":
    app()
