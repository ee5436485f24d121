"""Runtime configuration for the reconstruction search.

Defaults live in :class:`SolverPolicy`; each value can be overridden through
an environment variable so batch jobs can tune the search without code
changes. Command line options take precedence over both.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


def _load_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _load_path(name: str) -> Optional[str]:
    value = os.environ.get(name, "").strip()
    return value or None


@dataclass(frozen=True)
class SolverPolicy:
    """Holds tunables for the consensus search."""

    max_combinations: int = 5_000_000
    workers: int = 1
    audit_dir: Optional[str] = None


def load_policy() -> SolverPolicy:
    """Load the solver policy considering environment overrides."""

    return SolverPolicy(
        max_combinations=max(0, _load_int("QUORUM_MAX_COMBINATIONS", 5_000_000)),
        workers=_load_int("QUORUM_WORKERS", 1),
        audit_dir=_load_path("QUORUM_AUDIT_DIR"),
    )


policy = load_policy()


__all__ = ["SolverPolicy", "policy", "load_policy"]
