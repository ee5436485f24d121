"""Share and result records exchanged by the reconstruction pipeline."""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

import yaml

from .fraction import ExactFraction


@dataclass(frozen=True)
class Share:
    """A single ``(index, value)`` point on the sharing polynomial.

    ``index`` doubles as the x coordinate, so inputs such as ``1, 2, 3, 6``
    are evaluated at exactly those abscissas.
    """

    index: int
    y: int

    @property
    def x(self) -> int:
        return self.index


@dataclass(frozen=True)
class ConsensusResult:
    secret: ExactFraction
    inliers: Tuple[int, ...] = field(default_factory=tuple)
    outliers: Tuple[int, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "secret": str(self.secret),
            "inliers": list(self.inliers),
            "outliers": list(self.outliers),
        }


def render_json(result: ConsensusResult) -> str:
    return json.dumps(result.to_dict(), ensure_ascii=False, indent=2)


def render_yaml(result: ConsensusResult) -> str:
    return yaml.safe_dump(result.to_dict(), sort_keys=False)


__all__ = ["Share", "ConsensusResult", "render_json", "render_yaml"]
