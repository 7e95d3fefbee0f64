"""
Raw mode profiles.

A profile describes which of the terminal driver's processing layers stay
switched on. Raw mode is simply the profile with every layer off:

- Input: no line buffering, no echo, no signal keys (Ctrl+C, Ctrl+Z),
  no CR/NL translation, no XON/XOFF flow control
- Output: no post-processing (\\n is not turned into \\r\\n)

The mapping from layer to flag bits lives in _LAYER_BITS below, so the
policy can be read and tested without knowing the bit layout.
"""

import termios
from dataclasses import dataclass, replace

from .attributes import TerminalAttributes

# Which flag word each layer lives in, and the bits it owns there.
# Every name here is a boolean field on RawModeProfile.
_LAYER_BITS = {
    # Local flags
    "canonical_input": ("lflag", termios.ICANON),
    "echo": ("lflag", termios.ECHO | termios.ECHOE | termios.ECHOK | termios.ECHONL),
    "signals": ("lflag", termios.ISIG | termios.NOFLSH),
    "extended_input": ("lflag", termios.IEXTEN),
    "job_control_output": ("lflag", termios.TOSTOP),
    # Input flags
    "break_handling": ("iflag", termios.IGNBRK | termios.BRKINT),
    "parity_checking": (
        "iflag",
        termios.IGNPAR | termios.PARMRK | termios.INPCK | termios.ISTRIP,
    ),
    "input_translation": ("iflag", termios.INLCR | termios.IGNCR | termios.ICRNL),
    "flow_control": ("iflag", termios.IXON | termios.IXANY | termios.IXOFF),
    # Output flags
    "output_processing": ("oflag", termios.OPOST),
}

LAYERS = tuple(_LAYER_BITS)


@dataclass(frozen=True)
class RawModeProfile:
    """
    Which terminal processing layers to leave enabled.

    Each boolean field names one layer. True keeps the layer as the
    terminal currently has it; False switches it off.

    Attributes:
        canonical_input: Line-at-a-time input with editing (ICANON)
        echo: Echo typed characters back (ECHO and friends)
        signals: Ctrl+C / Ctrl+Z / Ctrl+\\ generate signals (ISIG)
        extended_input: Implementation-defined input processing (IEXTEN)
        job_control_output: Stop background jobs that write (TOSTOP)
        break_handling: BREAK condition handling (IGNBRK, BRKINT)
        parity_checking: Parity checks and 8th-bit stripping
        input_translation: CR/NL translation on input (ICRNL, ...)
        flow_control: XON/XOFF flow control, Ctrl+S / Ctrl+Q (IXON, ...)
        output_processing: Output post-processing such as \\n -> \\r\\n (OPOST)
        eight_bit: Force 8-bit characters with no parity (CS8, ~PARENB)
        min_bytes: VMIN, bytes a read waits for (None = unchanged)
        timeout: VTIME, read timeout in tenths of a second (None = unchanged)
    """

    canonical_input: bool = False
    echo: bool = False
    signals: bool = False
    extended_input: bool = False
    job_control_output: bool = False
    break_handling: bool = False
    parity_checking: bool = False
    input_translation: bool = False
    flow_control: bool = False
    output_processing: bool = False
    eight_bit: bool = True
    min_bytes: int | None = 1
    timeout: int | None = 0

    def __post_init__(self):
        for name in ("min_bytes", "timeout"):
            value = getattr(self, name)
            if value is not None and not 0 <= value <= 255:
                raise ValueError(f"{name} must be between 0 and 255, got {value}")

    @property
    def disabled_layers(self) -> tuple[str, ...]:
        """Names of the layers this profile switches off."""
        return tuple(name for name in LAYERS if not getattr(self, name))

    def apply(self, attrs: TerminalAttributes) -> TerminalAttributes:
        """
        Transform an attribute record according to this profile.

        Bits that belong to no disabled layer are left exactly as they
        were. The input record is not modified.
        """
        words = {
            "iflag": attrs.iflag,
            "oflag": attrs.oflag,
            "cflag": attrs.cflag,
            "lflag": attrs.lflag,
        }
        for name in self.disabled_layers:
            word, bits = _LAYER_BITS[name]
            words[word] &= ~bits

        if self.eight_bit:
            words["cflag"] &= ~(termios.CSIZE | termios.PARENB)
            words["cflag"] |= termios.CS8

        cc = list(attrs.cc)
        if self.min_bytes is not None:
            cc[termios.VMIN] = self.min_bytes
        if self.timeout is not None:
            cc[termios.VTIME] = self.timeout

        return replace(attrs, cc=tuple(cc), **words)


def enabled_layers(attrs: TerminalAttributes) -> tuple[str, ...]:
    """
    Names of the layers that are active in an attribute record.

    A layer counts as active if any of its bits is set.
    """
    return tuple(
        name
        for name, (word, bits) in _LAYER_BITS.items()
        if getattr(attrs, word) & bits
    )


# Full raw mode: cfmakeraw() with output processing off.
RAW = RawModeProfile()

# Keystrokes arrive immediately and unechoed, but Ctrl+S/Ctrl+Q, CR/NL
# translation and \n -> \r\n output translation still work.
CBREAK = RawModeProfile(
    canonical_input=False,
    echo=False,
    signals=False,
    extended_input=True,
    job_control_output=True,
    break_handling=True,
    parity_checking=True,
    input_translation=True,
    flow_control=True,
    output_processing=True,
    eight_bit=False,
)

PROFILES = {"raw": RAW, "cbreak": CBREAK}
