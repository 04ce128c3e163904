"""Shadow copy of the CW generator register fields."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from .channels import Channel, WaveformMode
from .port import ToneGeneratorPort

logger = logging.getLogger(__name__)

# Field name -> width in bits
_FIELD_WIDTHS = {
    "TONE_EN": 1,  # common tone generator enable
    "CW_EN1": 1,
    "CW_EN2": 1,
    "OUT_EN1": 1,  # DAC pad output enable
    "OUT_EN2": 1,
    "SCALE1": 2,
    "SCALE2": 2,
    "DC1": 8,
    "DC2": 8,
    "INV1": 2,
    "INV2": 2,
    "DIV_SEL": 3,
    "FSTEP": 16,
}


def _mask(name: str, value: int) -> int:
    return int(value) & ((1 << _FIELD_WIDTHS[name]) - 1)


@dataclass
class ShadowTonePort(ToneGeneratorPort):
    """Maintains the latest value written to each tone generator field.

    Stands in for the register driver on machines without the SoC. Values are
    masked to the field width, mirroring what a hardware field write keeps.
    """

    fields: Dict[str, int] = field(default_factory=lambda: {name: 0 for name in _FIELD_WIDTHS})
    writes: List[Tuple[str, Tuple[Any, ...]]] = field(default_factory=list)

    def update(self, **kwargs: int) -> None:
        """Update field values, masking each one to its width."""

        for key, value in kwargs.items():
            if key not in self.fields:
                raise KeyError(f"Unknown field {key}")
            self.fields[key] = _mask(key, value)

    def snapshot(self) -> Dict[str, int]:
        """Return an independent copy of the field values."""

        return dict(self.fields)

    def _record(self, name: str, *args: Any) -> None:
        self.writes.append((name, args))
        logger.debug(f"{name}{args}")

    # ToneGeneratorPort -------------------------------------------------
    def enable_channel(self, channel: Channel) -> None:
        self._record("enable_channel", channel)
        n = channel.value
        self.update(TONE_EN=1, **{f"CW_EN{n}": 1, f"OUT_EN{n}": 1})

    def disable_channel(self, channel: Channel) -> None:
        self._record("disable_channel", channel)
        self.update(**{f"OUT_EN{channel.value}": 0})

    def set_channel_scale(self, channel: Channel, scale: int) -> None:
        self._record("set_channel_scale", channel, scale)
        self.update(**{f"SCALE{channel.value}": scale})

    def set_channel_offset(self, channel: Channel, offset: int) -> None:
        self._record("set_channel_offset", channel, offset)
        self.update(**{f"DC{channel.value}": offset})

    def set_channel_mode(self, channel: Channel, mode: WaveformMode) -> None:
        self._record("set_channel_mode", channel, mode)
        self.update(**{f"INV{channel.value}": mode.value})

    def latch_divisor_and_step(self, divisor: int, step: int) -> None:
        self._record("latch_divisor_and_step", divisor, step)
        self.update(DIV_SEL=divisor, FSTEP=step)

    def latch_clock_divisor(self, divisor: int) -> None:
        self._record("latch_clock_divisor", divisor)
        self.update(DIV_SEL=divisor)

    def latch_frequency_step(self, step: int) -> None:
        self._record("latch_frequency_step", step)
        self.update(FSTEP=step)


__all__ = ["ShadowTonePort"]
