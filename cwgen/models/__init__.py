"""Domain models for cwgen - pure Python, no Qt dependencies."""

from __future__ import annotations

from .channel_state import ChannelState
from .generator import FrequencySynthesisModel
from .synthesis import Candidate, MatchPolicy, SearchResult, SynthesisParameters

__all__ = [
    "Candidate",
    "ChannelState",
    "FrequencySynthesisModel",
    "MatchPolicy",
    "SearchResult",
    "SynthesisParameters",
]
