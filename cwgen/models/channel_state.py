"""ChannelState model - represents one CW generator output channel."""

from __future__ import annotations

from dataclasses import dataclass

from ..hw.channels import WaveformMode
from ..hw.utils import MAX_OFFSET, MAX_SCALE, MIN_OFFSET, MIN_SCALE, clamp


@dataclass
class ChannelState:
    """Settings for one output channel.

    Frequency is shared by both channels, so only amplitude scale, DC offset,
    inversion mode and the enable flag live here.
    """

    scale: int = 0  # 0-3, Vout * 2^-scale
    offset: int = 0  # 0-255, DC bias
    mode: WaveformMode = WaveformMode.SINE
    enabled: bool = False

    def __post_init__(self) -> None:
        """Clamp parameters to valid ranges."""
        self.scale = clamp(self.scale, MIN_SCALE, MAX_SCALE)
        self.offset = clamp(self.offset, MIN_OFFSET, MAX_OFFSET)


__all__ = ["ChannelState"]
