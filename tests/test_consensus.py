import itertools
import logging

import pytest

from quorum_recover.consensus import (
    combination_count,
    consensus,
    evaluate_combination,
    iter_combinations,
)
from quorum_recover.errors import InsufficientShares, NoViableConsensus, SearchTooLarge
from quorum_recover.fraction import ExactFraction
from quorum_recover.models import ConsensusResult, Share, render_json


def test_sample_all_shares_agree(sample_set):
    result = consensus(sample_set.shares, sample_set.k)
    assert str(result.secret) == "3"
    assert result.inliers == (1, 2, 3, 6)
    assert result.outliers == ()


def test_corrupted_shares_are_detected(corrupted_set):
    result = consensus(corrupted_set.shares, corrupted_set.k)
    assert str(result.secret) == "79836264049851"
    assert result.inliers == (1, 3, 4, 5, 6, 7, 9, 10)
    assert result.outliers == (2, 8)


def test_search_is_deterministic(corrupted_set):
    first = consensus(corrupted_set.shares, corrupted_set.k)
    second = consensus(corrupted_set.shares, corrupted_set.k)
    assert first == second
    assert render_json(first) == render_json(second)


def test_parallel_search_matches_sequential(corrupted_set):
    sequential = consensus(corrupted_set.shares, corrupted_set.k)
    parallel = consensus(corrupted_set.shares, corrupted_set.k, workers=2)
    assert parallel == sequential


def test_threshold_equal_to_share_count(sample_set):
    result = consensus(sample_set.shares, 4)
    assert result.secret == ExactFraction.of(3)
    assert result.inliers == (1, 2, 3, 6)
    assert result.outliers == ()


def test_off_line_share_found_in_any_order():
    shares = [Share(1, 5), Share(2, 7), Share(3, 9), Share(4, 20)]
    for ordering in itertools.permutations(shares):
        result = consensus(list(ordering), 2)
        assert result.secret == ExactFraction.of(3)
        assert result.inliers == (1, 2, 3)
        assert result.outliers == (4,)


def test_first_maximal_candidate_wins_ties():
    # (1, 2), (2, 3) lie on x + 1 and (3, 11), (4, 14) on 3x + 2; every
    # combination explains exactly two shares.
    shares = [Share(1, 2), Share(2, 3), Share(3, 11), Share(4, 14)]
    result = consensus(shares, 2)
    assert result.secret == ExactFraction.of(1)
    assert result.inliers == (1, 2)
    assert result.outliers == (3, 4)


def test_partition_covers_every_index(corrupted_set):
    result = consensus(corrupted_set.shares, corrupted_set.k)
    indices = sorted(share.index for share in corrupted_set.shares)
    assert sorted(result.inliers + result.outliers) == indices
    assert not set(result.inliers) & set(result.outliers)


def test_degenerate_combinations_are_skipped():
    shares = [Share(1, 5), Share(1, 6), Share(2, 7), Share(3, 9)]
    assert evaluate_combination(shares, (0, 1)) is None
    result = consensus(shares, 2)
    assert result.secret == ExactFraction.of(3)
    assert result.outliers == (1,)


def test_all_degenerate_raises():
    shares = [Share(1, 4), Share(1, 5), Share(1, 6)]
    with pytest.raises(NoViableConsensus):
        consensus(shares, 2)


@pytest.mark.parametrize("k, count", [(1, 3), (4, 3), (0, 0)])
def test_insufficient_shares(k, count):
    shares = [Share(i, i) for i in range(1, count + 1)]
    with pytest.raises(InsufficientShares):
        consensus(shares, k)


def test_search_budget(corrupted_set):
    with pytest.raises(SearchTooLarge) as exc:
        consensus(corrupted_set.shares, corrupted_set.k, max_combinations=100)
    assert "120" in str(exc.value)
    # A limit of zero disables the guard.
    assert consensus(corrupted_set.shares, corrupted_set.k, max_combinations=0).outliers == (2, 8)


def test_combinations_are_lexicographic():
    assert list(iter_combinations(4, 2)) == [(0, 1), (0, 2), (0, 3), (1, 2), (1, 3), (2, 3)]
    assert combination_count(10, 7) == 120


def test_evaluate_combination_scores_candidate(corrupted_set):
    candidate = evaluate_combination(corrupted_set.shares, (0, 2, 3, 4, 5, 6, 8))
    assert candidate is not None
    assert str(candidate.secret) == "79836264049851"
    assert candidate.inliers == frozenset({0, 2, 3, 4, 5, 6, 8, 9})


def test_summary_is_logged_without_secret(sample_set, caplog):
    with caplog.at_level(logging.INFO, logger="quorum_recover.consensus"):
        result = consensus(sample_set.shares, sample_set.k)
    assert "4 inliers, 0 outliers" in caplog.text
    assert isinstance(result, ConsensusResult)


def test_negative_budget_disables_guard(corrupted_set):
    result = consensus(corrupted_set.shares, corrupted_set.k, max_combinations=-1)
    assert result.outliers == (2, 8)
