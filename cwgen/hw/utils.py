"""Utilities for cosine-wave generator frequency arithmetic.

The CW generator derives its output from the RTC 8 MHz oscillator:

    f = f0 * step / (1 + divisor)

f0 is the frequency produced with divisor=0 and step=1. The nominal value is
8 MHz / 65536, but the RC oscillator drifts from chip to chip, so f0 is
measured externally and entered by the operator.
"""

from __future__ import annotations

import math
from typing import Tuple

import numpy as np

# Calibration range for f0; nominal is 8 MHz / 65536 = 122.07 Hz
MIN_REFERENCE_HZ = 100.0
MAX_REFERENCE_HZ = 150.0

MIN_DIVISOR = 0
MAX_DIVISOR = 7  # 3-bit clock divider select
MIN_STEP = 1
MAX_STEP = 65535  # 16-bit frequency step register

MIN_SCALE = 0
MAX_SCALE = 3  # Vout * 2^-scale
MIN_OFFSET = 0
MAX_OFFSET = 255

MIN_TOLERANCE = 1
MAX_TOLERANCE = 999  # parts per thousand

DIVISORS = np.arange(MIN_DIVISOR, MAX_DIVISOR + 1)


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, int(value)))


def clamp_divisor(divisor: int) -> int:
    return clamp(divisor, MIN_DIVISOR, MAX_DIVISOR)


def clamp_step(step: int) -> int:
    return clamp(step, MIN_STEP, MAX_STEP)


def clamp_tolerance(tolerance: int) -> int:
    return clamp(tolerance, MIN_TOLERANCE, MAX_TOLERANCE)


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero (C ``round``).

    Python's built-in ``round`` rounds halves to even, which picks a different
    step than the firmware for targets landing exactly between two steps.
    """
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def actual_frequency(reference: float, divisor: int, step: int) -> float:
    """Frequency produced by a divisor/step pair.

    Formula: F = f0 × step / (1 + divisor)
    """
    return reference * step / (1 + divisor)


def candidate_steps(ratio: float) -> np.ndarray:
    """Nearest step for every divisor, given ratio = target / f0.

    Steps are clamped into the register range so every candidate is realizable.
    """
    raw = ratio * (DIVISORS + 1)
    steps = np.sign(raw) * np.floor(np.abs(raw) + 0.5)
    return np.clip(steps, MIN_STEP, MAX_STEP).astype(np.int64)


def candidate_frequencies(
    reference: float, target: float
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Evaluate all eight divisors for a target frequency.

    Returns:
        Tuple of (steps, frequencies, absolute errors), each indexed by divisor
    """
    steps = candidate_steps(target / reference)
    frequencies = reference * steps / (DIVISORS + 1)
    errors = np.abs(target - frequencies)
    return steps, frequencies, errors


def tolerance_bound(target: float, tolerance: int) -> float:
    """Largest allowed absolute deviation for a tolerance in parts per thousand."""
    return target * tolerance / 1000.0
