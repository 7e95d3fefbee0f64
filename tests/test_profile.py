"""
Test raw mode profiles against synthetic attribute records.
"""

import termios

import pytest

from ttymode.attributes import TerminalAttributes
from ttymode.profile import (
    CBREAK,
    LAYERS,
    PROFILES,
    RAW,
    RawModeProfile,
    enabled_layers,
)

ALL_BITS = 0xFFFFFFFF


def make_attrs(iflag=ALL_BITS, oflag=ALL_BITS, cflag=ALL_BITS, lflag=ALL_BITS):
    cc = tuple(b"\x00" for _ in range(32))
    return TerminalAttributes(iflag, oflag, cflag, lflag, 38400, 38400, cc)


class TestRawProfile:
    """RAW is cfmakeraw() with output processing off."""

    def test_disables_every_layer(self):
        assert RAW.disabled_layers == LAYERS

    def test_local_flags(self):
        attrs = RAW.apply(make_attrs())
        for bit in (termios.ICANON, termios.ECHO, termios.ECHONL, termios.ISIG, termios.IEXTEN):
            assert not attrs.lflag & bit

    def test_input_flags(self):
        attrs = RAW.apply(make_attrs())
        for bit in (termios.ICRNL, termios.IXON, termios.IXOFF, termios.BRKINT, termios.ISTRIP):
            assert not attrs.iflag & bit

    def test_output_processing_off(self):
        attrs = RAW.apply(make_attrs())
        assert not attrs.oflag & termios.OPOST

    def test_eight_bit_characters(self):
        attrs = RAW.apply(make_attrs(cflag=termios.PARENB | termios.CS7))
        assert attrs.cflag & termios.CSIZE == termios.CS8
        assert not attrs.cflag & termios.PARENB

    def test_read_returns_after_one_byte(self):
        attrs = RAW.apply(make_attrs())
        assert attrs.cc[termios.VMIN] == 1
        assert attrs.cc[termios.VTIME] == 0

    def test_unrelated_bits_preserved(self):
        # ECHOCTL and the output delay bits belong to no layer
        original = make_attrs()
        attrs = RAW.apply(original)
        assert attrs.lflag & termios.ECHOCTL
        assert attrs.oflag == original.oflag & ~termios.OPOST
        assert attrs.ispeed == original.ispeed
        assert attrs.ospeed == original.ospeed

    def test_input_not_modified(self):
        original = make_attrs()
        RAW.apply(original)
        assert original == make_attrs()

    def test_other_control_characters_kept(self):
        cc = [bytes([i]) for i in range(32)]
        original = TerminalAttributes(0, 0, 0, 0, 0, 0, tuple(cc))
        attrs = RAW.apply(original)
        assert attrs.cc[termios.VINTR] == cc[termios.VINTR]
        assert attrs.cc[termios.VEOF] == cc[termios.VEOF]


class TestCbreakProfile:

    def test_keys_immediate_and_silent(self):
        attrs = CBREAK.apply(make_attrs())
        assert not attrs.lflag & termios.ICANON
        assert not attrs.lflag & termios.ECHO
        assert not attrs.lflag & termios.ISIG

    def test_output_translation_kept(self):
        attrs = CBREAK.apply(make_attrs())
        assert attrs.oflag & termios.OPOST
        assert attrs.iflag == ALL_BITS

    def test_control_flags_untouched(self):
        attrs = CBREAK.apply(make_attrs(cflag=termios.PARENB | termios.CS7))
        assert attrs.cflag == termios.PARENB | termios.CS7

    def test_disabled_layers(self):
        assert CBREAK.disabled_layers == ("canonical_input", "echo", "signals")


class TestCustomProfile:

    def test_keep_signals(self):
        profile = RawModeProfile(signals=True)
        attrs = profile.apply(make_attrs())
        assert attrs.lflag & termios.ISIG
        assert not attrs.lflag & termios.ICANON

    def test_leave_read_settings_alone(self):
        original = make_attrs()
        profile = RawModeProfile(min_bytes=None, timeout=None)
        assert profile.apply(original).cc == original.cc

    def test_polling_read(self):
        attrs = RawModeProfile(min_bytes=0, timeout=1).apply(make_attrs())
        assert attrs.cc[termios.VMIN] == 0
        assert attrs.cc[termios.VTIME] == 1

    @pytest.mark.parametrize("field", ["min_bytes", "timeout"])
    def test_out_of_range(self, field):
        with pytest.raises(ValueError):
            RawModeProfile(**{field: 256})
        with pytest.raises(ValueError):
            RawModeProfile(**{field: -1})

    def test_profiles_by_name(self):
        assert PROFILES["raw"] is RAW
        assert PROFILES["cbreak"] is CBREAK


class TestEnabledLayers:

    def test_all_on(self):
        assert enabled_layers(make_attrs()) == LAYERS

    def test_raw_has_none(self):
        assert enabled_layers(RAW.apply(make_attrs())) == ()

    def test_cbreak(self):
        active = enabled_layers(CBREAK.apply(make_attrs()))
        assert "output_processing" in active
        assert "echo" not in active
