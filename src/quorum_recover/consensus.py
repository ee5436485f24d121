"""Maximum-consensus secret reconstruction in the presence of bad shares.

Every k-subset of the shares is a candidate generator for the polynomial. A
candidate is scored by cross-validation: a share outside the subset counts as
an inlier when swapping it in for one of the subset members reproduces the
same constant term. The candidate explaining the most shares wins; ties go to
the candidate enumerated first.

Work grows with ``C(n, k)`` so this is meant for small share counts only.
"""
from __future__ import annotations

import functools
import itertools
import logging
import math
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from typing import FrozenSet, Iterable, Iterator, Optional, Sequence, Tuple

from .errors import (
    DegenerateInterpolation,
    InsufficientShares,
    NoViableConsensus,
    SearchTooLarge,
)
from .fraction import ExactFraction
from .interpolation import lagrange_constant
from .models import ConsensusResult, Share

_logger = logging.getLogger(__name__)

Combination = Tuple[int, ...]


@dataclass(frozen=True)
class Candidate:
    combination: Combination
    secret: ExactFraction
    inliers: FrozenSet[int]


def iter_combinations(n: int, k: int) -> Iterator[Combination]:
    """Yield k-combinations of ``range(n)`` lazily in lexicographic order."""
    return itertools.combinations(range(n), k)


def combination_count(n: int, k: int) -> int:
    return math.comb(n, k)


def _corroborates(
    shares: Sequence[Share],
    combination: Combination,
    position: int,
    secret: ExactFraction,
) -> bool:
    for drop in range(len(combination)):
        trial = [shares[p] for j, p in enumerate(combination) if j != drop]
        trial.append(shares[position])
        try:
            if lagrange_constant(trial) == secret:
                return True
        except DegenerateInterpolation:
            continue
    return False


def evaluate_combination(shares: Sequence[Share], combination: Combination) -> Optional[Candidate]:
    """Score one combination, or return ``None`` when it cannot be interpolated."""
    try:
        secret = lagrange_constant([shares[p] for p in combination])
    except DegenerateInterpolation:
        _logger.debug("skipping degenerate combination %s", combination)
        return None
    members = set(combination)
    inliers = set(combination)
    for position in range(len(shares)):
        if position in members:
            continue
        if _corroborates(shares, combination, position, secret):
            inliers.add(position)
    return Candidate(combination=combination, secret=secret, inliers=frozenset(inliers))


def _select_best(candidates: Iterable[Optional[Candidate]], total: int) -> Optional[Candidate]:
    best: Optional[Candidate] = None
    for candidate in candidates:
        if candidate is None:
            continue
        if best is None or len(candidate.inliers) > len(best.inliers):
            best = candidate
            _logger.debug(
                "combination %s explains %d of %d shares",
                candidate.combination,
                len(candidate.inliers),
                total,
            )
            if len(best.inliers) == total:
                break
    return best


def _validate(shares: Sequence[Share], k: int) -> None:
    if k < 2:
        raise InsufficientShares(f"threshold k must be >= 2, got {k}")
    if len(shares) < k:
        raise InsufficientShares(f"Not enough shares provided: need k={k}, got {len(shares)}")


def consensus(
    shares: Sequence[Share],
    k: int,
    *,
    workers: Optional[int] = None,
    max_combinations: Optional[int] = None,
) -> ConsensusResult:
    """Recover the secret agreed on by the largest consistent set of shares.

    ``workers`` greater than one spreads combinations over a process pool;
    results are still reduced in enumeration order so the outcome matches the
    sequential search. ``max_combinations`` refuses oversized searches with
    :class:`SearchTooLarge` before any work is done.
    """
    shares = list(shares)
    _validate(shares, k)
    n = len(shares)
    count = combination_count(n, k)
    if max_combinations is not None and max_combinations > 0 and count > max_combinations:
        raise SearchTooLarge(
            f"C({n}, {k}) = {count} combinations exceeds the limit of {max_combinations}"
        )

    evaluate = functools.partial(evaluate_combination, shares)
    if workers is not None and workers > 1:
        chunksize = max(1, count // (workers * 4))
        pool = ProcessPoolExecutor(max_workers=workers)
        try:
            best = _select_best(pool.map(evaluate, iter_combinations(n, k), chunksize=chunksize), n)
        finally:
            pool.shutdown(wait=True, cancel_futures=True)
    else:
        best = _select_best(map(evaluate, iter_combinations(n, k)), n)

    if best is None:
        raise NoViableConsensus(f"all {count} combinations of {n} shares were degenerate")

    inliers = tuple(sorted(shares[p].index for p in best.inliers))
    outliers = tuple(sorted(shares[p].index for p in range(n) if p not in best.inliers))
    _logger.info(
        "consensus over %d shares (k=%d): %d inliers, %d outliers",
        n,
        k,
        len(inliers),
        len(outliers),
    )
    return ConsensusResult(secret=best.secret, inliers=inliers, outliers=outliers)


__all__ = [
    "Candidate",
    "combination_count",
    "consensus",
    "evaluate_combination",
    "iter_combinations",
]
