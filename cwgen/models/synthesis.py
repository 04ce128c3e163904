"""Synthesis parameters shared by both CW generator channels."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional

from ..hw.utils import actual_frequency, clamp_tolerance


class MatchPolicy(Enum):
    """How search_best_frequency picks among the eight divisors."""

    OPTIMAL = "optimal"  # smallest divisor within tolerance, else best
    BEST = "best"  # smallest absolute error


@dataclass
class SynthesisParameters:
    """Frequency state of the tone generator.

    actual_frequency and deviation are stored rather than computed on access;
    FrequencySynthesisModel decides when each one is refreshed.
    """

    reference_frequency: float  # f0, Hz at divisor=0/step=1
    divisor: int = 0  # 0-7
    step: int = 1  # 1-65535
    target_frequency: Optional[float] = None  # defaults to the initial actual frequency
    tolerance: int = 10  # parts per thousand, 1-999
    actual_frequency: float = field(init=False, default=0.0)
    deviation: float = field(init=False, default=0.0)

    def __post_init__(self) -> None:
        self.tolerance = clamp_tolerance(self.tolerance)
        self.recompute_actual()
        if self.target_frequency is None:
            self.target_frequency = self.actual_frequency
        self.recompute_deviation()

    def recompute_actual(self) -> None:
        self.actual_frequency = actual_frequency(
            self.reference_frequency, self.divisor, self.step
        )

    def recompute_deviation(self) -> None:
        self.deviation = self.actual_frequency - self.target_frequency

    def recompute(self) -> None:
        """Refresh both derived fields from (f0, divisor, step)."""
        self.recompute_actual()
        self.recompute_deviation()

    def snapshot(self) -> SynthesisParameters:
        """Return an independent copy with the derived fields as they stand."""
        copy = replace(self)
        # replace() re-runs __post_init__; restore possibly stale values
        copy.actual_frequency = self.actual_frequency
        copy.deviation = self.deviation
        return copy


@dataclass(frozen=True)
class Candidate:
    """Result of one divisor in the search table."""

    divisor: int
    step: int
    frequency: float
    error: float


@dataclass(frozen=True)
class SearchResult:
    """Outcome of search_best_frequency.

    tolerance_met is False when no divisor came within tolerance; the applied
    pair is then the most accurate one.
    """

    divisor: int
    step: int
    frequency: float
    error: float
    tolerance_met: bool
    policy: MatchPolicy
    candidates: List[Candidate] = field(default_factory=list)


__all__ = ["Candidate", "MatchPolicy", "SearchResult", "SynthesisParameters"]
