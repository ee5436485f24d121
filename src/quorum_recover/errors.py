"""Error taxonomy for secret reconstruction."""
from __future__ import annotations


class QuorumError(RuntimeError):
    """Base class for every failure raised by :mod:`quorum_recover`."""


class InvalidFraction(QuorumError, ValueError):
    """Raised when a fraction is built with a zero denominator."""


class DivisionByZero(QuorumError, ZeroDivisionError):
    """Raised when a fraction is divided by zero."""


class DegenerateInterpolation(QuorumError):
    """Raised when interpolation points share an x coordinate."""


class InsufficientShares(QuorumError):
    """Raised when the threshold cannot be met by the supplied shares."""


class SearchTooLarge(QuorumError):
    """Raised when the combination count exceeds the configured budget."""


class NoViableConsensus(QuorumError):
    """Raised when no combination of shares could be interpolated."""


class ShareDecodingError(QuorumError, ValueError):
    """Raised when a share document or share value is malformed."""


__all__ = [
    "QuorumError",
    "InvalidFraction",
    "DivisionByZero",
    "DegenerateInterpolation",
    "InsufficientShares",
    "SearchTooLarge",
    "NoViableConsensus",
    "ShareDecodingError",
]
