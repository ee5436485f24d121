"""Secret reconstruction with outlier detection for polynomial secret sharing."""

from __future__ import annotations

from .consensus import consensus
from .errors import (
    DegenerateInterpolation,
    DivisionByZero,
    InsufficientShares,
    InvalidFraction,
    NoViableConsensus,
    QuorumError,
    SearchTooLarge,
    ShareDecodingError,
)
from .fraction import ExactFraction
from .interpolation import lagrange_constant
from .models import ConsensusResult, Share

__version__ = "0.1.0"

__all__ = [
    "ConsensusResult",
    "DegenerateInterpolation",
    "DivisionByZero",
    "ExactFraction",
    "InsufficientShares",
    "InvalidFraction",
    "NoViableConsensus",
    "QuorumError",
    "SearchTooLarge",
    "Share",
    "ShareDecodingError",
    "consensus",
    "lagrange_constant",
]
