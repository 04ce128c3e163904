"""Boundary between the frequency model and the register-level driver."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .channels import Channel, WaveformMode


class ToneGeneratorPort(ABC):
    """Hardware side effects requested by FrequencySynthesisModel.

    Implementations own register addresses, bit positions and masks; the model
    only hands over raw field values. Calls are expected to be non-blocking.
    """

    @abstractmethod
    def enable_channel(self, channel: Channel) -> None: ...

    @abstractmethod
    def disable_channel(self, channel: Channel) -> None: ...

    @abstractmethod
    def set_channel_scale(self, channel: Channel, scale: int) -> None: ...

    @abstractmethod
    def set_channel_offset(self, channel: Channel, offset: int) -> None: ...

    @abstractmethod
    def set_channel_mode(self, channel: Channel, mode: WaveformMode) -> None: ...

    @abstractmethod
    def latch_divisor_and_step(self, divisor: int, step: int) -> None:
        """Write divisor and step together."""

    @abstractmethod
    def latch_clock_divisor(self, divisor: int) -> None:
        """Write the divisor, leaving the step register untouched."""

    @abstractmethod
    def latch_frequency_step(self, step: int) -> None:
        """Write the step, leaving the divisor register untouched."""


__all__ = ["ToneGeneratorPort"]
