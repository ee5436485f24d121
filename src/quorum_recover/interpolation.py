"""Lagrange interpolation at the origin using exact fractions."""
from __future__ import annotations

from typing import Sequence

from .errors import DegenerateInterpolation, DivisionByZero
from .fraction import ONE, ZERO, ExactFraction
from .models import Share


def _basis_at_zero(i: int, xs: Sequence[int]) -> ExactFraction:
    """Return ``L_i(0) = prod_{j != i} (0 - x_j) / (x_i - x_j)``."""
    num = ONE
    den = ONE
    xi = xs[i]
    for j, xj in enumerate(xs):
        if i == j:
            continue
        num = num * -xj
        den = den * (xi - xj)
    try:
        return num / den
    except DivisionByZero as exc:
        raise DegenerateInterpolation(f"duplicate x coordinate {xi}") from exc


def lagrange_constant(points: Sequence[Share]) -> ExactFraction:
    """Evaluate the polynomial through ``points`` at ``x = 0``.

    The k points define a unique polynomial of degree ``k - 1``; its constant
    term is the shared secret. Raises :class:`DegenerateInterpolation` when
    two points share an x coordinate or when ``points`` is empty.
    """
    if not points:
        raise DegenerateInterpolation("no points to interpolate")
    xs = [p.x for p in points]
    total = ZERO
    for i, point in enumerate(points):
        total = total + _basis_at_zero(i, xs) * point.y
    return total


__all__ = ["lagrange_constant"]
