"""Hardware boundary: register arithmetic, identifiers and tone generator ports."""

from .channels import Channel, WaveformMode, channel_from_int, mode_from_int
from .port import ToneGeneratorPort
from .shadow_port import ShadowTonePort

__all__ = [
    "Channel",
    "WaveformMode",
    "channel_from_int",
    "mode_from_int",
    "ToneGeneratorPort",
    "ShadowTonePort",
]
