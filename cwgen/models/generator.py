"""FrequencySynthesisModel - divisor/step solver and CW generator state."""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from typing import Dict, List

import numpy as np

from ..hw.channels import Channel, WaveformMode
from ..hw.port import ToneGeneratorPort
from ..hw.utils import (
    MAX_DIVISOR,
    MAX_OFFSET,
    MAX_SCALE,
    MAX_STEP,
    MIN_OFFSET,
    MIN_SCALE,
    MIN_STEP,
    candidate_frequencies,
    clamp,
    clamp_divisor,
    clamp_step,
    clamp_tolerance,
    round_half_away,
    tolerance_bound,
)
from .channel_state import ChannelState
from .synthesis import Candidate, MatchPolicy, SearchResult, SynthesisParameters

logger = logging.getLogger(__name__)


class FrequencySynthesisModel:
    """Single source of truth for the tone generator.

    The hardware can only produce f0 * step / (1 + divisor) for integer
    divisor 0-7 and step 1-65535. This model finds the pair closest to a
    requested frequency, keeps actual frequency and deviation in step with the
    stored parameters, and forwards every change to a ToneGeneratorPort.

    All public methods hold one re-entrant lock, so a UI thread and a command
    thread can share an instance.
    """

    def __init__(
        self,
        port: ToneGeneratorPort,
        reference_frequency: float,
        tolerance: int = 10,
    ) -> None:
        """Create the model and push the power-on state to the port.

        Args:
            port: Driver that receives register writes
            reference_frequency: Measured f0 in Hz (must be positive)
            tolerance: Allowed deviation in parts per thousand (clamped 1-999)
        """
        if reference_frequency <= 0:
            raise ValueError(f"reference frequency must be > 0, got {reference_frequency}")

        self.port = port
        self._lock = threading.RLock()
        self._params = SynthesisParameters(
            reference_frequency=float(reference_frequency),
            tolerance=tolerance,
        )
        self._channels: Dict[Channel, ChannelState] = {
            channel: ChannelState() for channel in Channel
        }

        for channel, state in self._channels.items():
            self.port.set_channel_scale(channel, state.scale)
            self.port.set_channel_offset(channel, state.offset)
        self.port.latch_divisor_and_step(self._params.divisor, self._params.step)
        logger.info(f"CW generator model ready: f0={self._params.reference_frequency} Hz")

    # Read access -----------------------------------------------------
    @property
    def reference_frequency(self) -> float:
        return self._params.reference_frequency

    @property
    def clock_divisor(self) -> int:
        return self._params.divisor

    @property
    def frequency_step(self) -> int:
        return self._params.step

    @property
    def target_frequency(self) -> float:
        return self._params.target_frequency

    @property
    def actual_frequency(self) -> float:
        return self._params.actual_frequency

    @property
    def deviation(self) -> float:
        return self._params.deviation

    @property
    def tolerance(self) -> int:
        return self._params.tolerance

    def snapshot(self) -> SynthesisParameters:
        """Consistent copy of the frequency state for readers on other threads."""
        with self._lock:
            return self._params.snapshot()

    def channel(self, channel: Channel) -> ChannelState:
        """Copy of one channel's settings."""
        with self._lock:
            return replace(self._channels[channel])

    # Frequency -------------------------------------------------------
    def apply_divisor_and_step(self, divisor: int, step: int) -> None:
        """Store and latch a raw pair. No clamping: the caller keeps it in range."""
        with self._lock:
            params = self._params
            params.divisor = divisor
            params.step = step
            params.recompute()
            self.port.latch_divisor_and_step(divisor, step)

    def set_reference_frequency(self, reference_frequency: float) -> None:
        """Update f0 after recalibration; target, divisor and step are kept."""
        if reference_frequency <= 0:
            logger.warning(
                f"Ignoring non-positive reference frequency {reference_frequency}"
            )
            return
        with self._lock:
            self._params.reference_frequency = float(reference_frequency)
            self._params.recompute()

    def set_clock_divisor(self, divisor: int) -> None:
        # Only actual_frequency is refreshed; deviation keeps its last value
        with self._lock:
            self._params.divisor = divisor
            self._params.recompute_actual()
            self.port.latch_clock_divisor(divisor)

    def set_frequency_step(self, step: int) -> None:
        # Only actual_frequency is refreshed; deviation keeps its last value
        with self._lock:
            self._params.step = step
            self._params.recompute_actual()
            self.port.latch_frequency_step(step)

    def set_tolerance(self, tolerance: int) -> None:
        with self._lock:
            self._params.tolerance = clamp_tolerance(tolerance)

    def set_frequency_with_divisor(self, target_frequency: float, divisor: int) -> None:
        """Keep the divisor fixed and pick the nearest step.

        Formula: step = round(f × (divisor + 1) / f0)
        """
        with self._lock:
            params = self._params
            divisor = clamp_divisor(divisor)
            params.target_frequency = float(target_frequency)
            raw = target_frequency * (divisor + 1) / params.reference_frequency
            # Limit before rounding; huge targets overflow to inf
            step = round_half_away(max(MIN_STEP, min(MAX_STEP, raw)))
            self.apply_divisor_and_step(divisor, step)

    def set_frequency_with_step(self, target_frequency: float, step: int) -> None:
        """Keep the step fixed and pick the nearest divisor.

        Formula: divisor = round(f0 × step / f) - 1, limited to 1-7
        """
        with self._lock:
            params = self._params
            step = clamp_step(step)
            params.target_frequency = float(target_frequency)
            if target_frequency > 0:
                raw = params.reference_frequency * step / target_frequency
                divisor = round_half_away(max(1, min(MAX_DIVISOR + 1, raw))) - 1
            else:
                divisor = MAX_DIVISOR
            # Lower bound is 1 here, unlike set_frequency_with_divisor
            divisor = max(1, min(MAX_DIVISOR, divisor))
            self.apply_divisor_and_step(divisor, step)

    def candidate_table(self, target_frequency: float) -> List[Candidate]:
        """Nearest step, frequency and error for every divisor. State is untouched."""
        with self._lock:
            reference = self._params.reference_frequency
        steps, frequencies, errors = candidate_frequencies(reference, target_frequency)
        return _to_candidates(steps, frequencies, errors)

    def search_best_frequency(
        self,
        target_frequency: float,
        policy: MatchPolicy = MatchPolicy.OPTIMAL,
    ) -> SearchResult:
        """Find and apply the divisor/step pair for a target frequency.

        For q = f / f0 every divisor D in 0-7 gets step round(q × (D + 1)).
        The most accurate divisor is the first one with the smallest error.
        Lower divisors give a smoother waveform, so the OPTIMAL policy takes
        the smallest divisor whose error is below target × tolerance / 1000
        and only falls back to the most accurate one when none qualifies.

        Args:
            target_frequency: Requested frequency in Hz
            policy: OPTIMAL (smoothness within tolerance) or BEST (accuracy)

        Returns:
            SearchResult with the applied pair and whether tolerance was met
        """
        with self._lock:
            params = self._params
            params.target_frequency = float(target_frequency)

            steps, frequencies, errors = candidate_frequencies(
                params.reference_frequency, params.target_frequency
            )
            for divisor, (step, freq, err) in enumerate(zip(steps, frequencies, errors)):
                logger.debug(f"{divisor} {int(step):5d} {freq:12.5f} {err:12.5f}")

            best = int(np.argmin(errors))
            within = np.flatnonzero(
                errors < tolerance_bound(params.target_frequency, params.tolerance)
            )
            tolerant = int(within[0]) if within.size else None

            if policy is MatchPolicy.OPTIMAL and tolerant is not None:
                chosen = tolerant
            else:
                chosen = best

            if tolerant is None:
                logger.warning(
                    f"{params.target_frequency:.2f} Hz cannot be set within "
                    f"{params.tolerance} per mille; best approximation "
                    f"{frequencies[best]:.2f} Hz used instead"
                )

            self.apply_divisor_and_step(chosen, int(steps[chosen]))
            logger.info(
                f"Divisor={chosen} / step={params.step}: {params.actual_frequency:.3f} Hz "
                f"(deviation {params.deviation:+.3f} Hz, {policy.value} match)"
            )
            return SearchResult(
                divisor=chosen,
                step=params.step,
                frequency=params.actual_frequency,
                error=float(errors[chosen]),
                tolerance_met=tolerant is not None,
                policy=policy,
                candidates=_to_candidates(steps, frequencies, errors),
            )

    # Channels --------------------------------------------------------
    def set_scale(self, channel: Channel, scale: int) -> None:
        with self._lock:
            state = self._channels[channel]
            state.scale = clamp(scale, MIN_SCALE, MAX_SCALE)
            self.port.set_channel_scale(channel, state.scale)

    def set_offset(self, channel: Channel, offset: int) -> None:
        with self._lock:
            state = self._channels[channel]
            state.offset = clamp(offset, MIN_OFFSET, MAX_OFFSET)
            self.port.set_channel_offset(channel, state.offset)

    def set_mode(self, channel: Channel, mode: WaveformMode) -> None:
        with self._lock:
            self._channels[channel].mode = mode
            self.port.set_channel_mode(channel, mode)

    def enable(self, channel: Channel) -> None:
        with self._lock:
            self._channels[channel].enabled = True
            self.port.enable_channel(channel)

    def disable(self, channel: Channel) -> None:
        with self._lock:
            self._channels[channel].enabled = False
            self.port.disable_channel(channel)

    def toggle(self, channel: Channel) -> None:
        with self._lock:
            if self.is_enabled(channel):
                self.disable(channel)
            else:
                self.enable(channel)

    def is_enabled(self, channel: Channel) -> bool:
        with self._lock:
            return self._channels[channel].enabled

    # Diagnostics -----------------------------------------------------
    def describe(self) -> str:
        """Fixed-width dump of the frequency state for calibration work."""
        p = self.snapshot()
        return "\n".join(
            [
                f"f0          = {p.reference_frequency:9.2f}",
                f"step        = {p.step:9d}",
                f"divisor     = {p.divisor:9d}",
                f"tolerance   = {p.tolerance:9d} ‰",
                f"f_target    = {p.target_frequency:9.2f}",
                f"f_actual    = {p.actual_frequency:9.2f}",
                f"f_delta     = {p.deviation:9.2f}",
            ]
        )


def _to_candidates(
    steps: np.ndarray, frequencies: np.ndarray, errors: np.ndarray
) -> List[Candidate]:
    return [
        Candidate(divisor=divisor, step=int(step), frequency=float(freq), error=float(err))
        for divisor, (step, freq, err) in enumerate(zip(steps, frequencies, errors))
    ]


__all__ = ["FrequencySynthesisModel"]
