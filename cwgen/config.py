"""Startup configuration for the cwgen tools."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .hw.channels import Channel, channel_from_int
from .hw.utils import MAX_REFERENCE_HZ, MIN_REFERENCE_HZ, clamp_tolerance
from .models.synthesis import MatchPolicy

# Measured on the reference board
DEFAULT_REFERENCE_HZ = 132.5
DEFAULT_TOLERANCE = 10

ENV_REFERENCE = "CWGEN_REFERENCE_HZ"
ENV_TOLERANCE = "CWGEN_TOLERANCE"
ENV_POLICY = "CWGEN_POLICY"
ENV_CHANNEL = "CWGEN_CHANNEL"


@dataclass
class GeneratorConfig:
    reference_frequency: float = DEFAULT_REFERENCE_HZ
    tolerance: int = DEFAULT_TOLERANCE
    policy: MatchPolicy = MatchPolicy.OPTIMAL
    channel: Channel = Channel.CHANNEL_2  # channel 1 drives the LDR on the reference board

    def __post_init__(self) -> None:
        """Validate f0 against the calibration range and clamp tolerance."""
        self.reference_frequency = float(self.reference_frequency)
        if not MIN_REFERENCE_HZ <= self.reference_frequency <= MAX_REFERENCE_HZ:
            raise ValueError(
                f"reference frequency must be {MIN_REFERENCE_HZ}-{MAX_REFERENCE_HZ} Hz, "
                f"got {self.reference_frequency}"
            )
        self.tolerance = clamp_tolerance(self.tolerance)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> GeneratorConfig:
        """Build a config from CWGEN_* environment variables, falling back to defaults."""
        env = os.environ if environ is None else environ
        return cls(
            reference_frequency=float(env.get(ENV_REFERENCE, DEFAULT_REFERENCE_HZ)),
            tolerance=int(env.get(ENV_TOLERANCE, DEFAULT_TOLERANCE)),
            policy=MatchPolicy(env.get(ENV_POLICY, MatchPolicy.OPTIMAL.value).lower()),
            channel=channel_from_int(env.get(ENV_CHANNEL, Channel.CHANNEL_2.value)),
        )


__all__ = ["GeneratorConfig"]
