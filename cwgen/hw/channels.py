"""Channel and waveform-mode identifiers with explicit integer mapping."""

from __future__ import annotations

from enum import Enum


class Channel(Enum):
    """DAC output paths fed by the tone generator (numbered as on the SoC)."""

    CHANNEL_1 = 1
    CHANNEL_2 = 2

    @property
    def index(self) -> int:
        return self.value - 1


class WaveformMode(Enum):
    """2-bit inversion field; the hardware decides what each value looks like."""

    RISING_COSINE_FIRST = 0
    FALLING_COSINE_FIRST = 1
    SINE = 2
    INVERTED_SINE = 3


_CHANNELS = {channel.value: channel for channel in Channel}
_MODES = {mode.value: mode for mode in WaveformMode}


def channel_from_int(number: int) -> Channel:
    """Map a wire/UI channel number (1 or 2) to a Channel."""
    try:
        return _CHANNELS[int(number)]
    except KeyError:
        raise ValueError(f"Unknown channel number {number}") from None


def mode_from_int(number: int) -> WaveformMode:
    """Map a wire/UI mode number (0-3) to a WaveformMode."""
    try:
        return _MODES[int(number)]
    except KeyError:
        raise ValueError(f"Unknown waveform mode {number}") from None


__all__ = ["Channel", "WaveformMode", "channel_from_int", "mode_from_int"]
