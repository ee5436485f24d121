"""Shared share sets for the test-suite."""
from __future__ import annotations

import pytest

from quorum_recover.decoding import parse_document

# Four points on x**2 + 3, indices are not contiguous.
SAMPLE_DOCUMENT = {
    "keys": {"n": 4, "k": 3},
    "1": {"base": "10", "value": "4"},
    "2": {"base": "2", "value": "111"},
    "3": {"base": "10", "value": "12"},
    "6": {"base": "4", "value": "213"},
}

# Ten shares with k=7; shares 2 and 8 are corrupted.
CORRUPTED_DOCUMENT = {
    "keys": {"n": 10, "k": 7},
    "1": {"base": "6", "value": "13444211440455345511"},
    "2": {"base": "15", "value": "aed7015a346d635"},
    "3": {"base": "15", "value": "6aeeb69631c227c"},
    "4": {"base": "16", "value": "e1b5e05623d881f"},
    "5": {"base": "8", "value": "316034514573652620673"},
    "6": {"base": "3", "value": "2122212201122002221120200210011020220200"},
    "7": {"base": "3", "value": "20120221122211000100210021102001201112121"},
    "8": {"base": "6", "value": "20220554335330240002224253"},
    "9": {"base": "12", "value": "45153788322a1255483"},
    "10": {"base": "7", "value": "1101613130313526312514143"},
}


@pytest.fixture
def sample_set():
    return parse_document(SAMPLE_DOCUMENT)


@pytest.fixture
def corrupted_set():
    return parse_document(CORRUPTED_DOCUMENT)


@pytest.fixture
def sample_document():
    return dict(SAMPLE_DOCUMENT)


@pytest.fixture
def corrupted_document():
    return dict(CORRUPTED_DOCUMENT)
