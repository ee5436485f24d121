"""Exact rational arithmetic over arbitrary-precision integers.

:class:`ExactFraction` is a small value type in the spirit of a field element:
every operation returns a new, fully reduced instance and never touches its
operands. Reconstruction compares candidate secrets with ``==``, so the
normal form (lowest terms, positive denominator) is what makes those
comparisons exact.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

from .errors import DivisionByZero, InvalidFraction

Operand = Union["ExactFraction", int]


@dataclass(frozen=True)
class ExactFraction:
    numerator: int
    denominator: int = 1

    def __post_init__(self) -> None:
        num, den = self.numerator, self.denominator
        if den == 0:
            raise InvalidFraction(f"zero denominator for numerator {num}")
        if den < 0:
            num, den = -num, -den
        g = math.gcd(num, den)
        if g > 1:
            num, den = num // g, den // g
        object.__setattr__(self, "numerator", num)
        object.__setattr__(self, "denominator", den)

    @classmethod
    def of(cls, value: int) -> "ExactFraction":
        return cls(value, 1)

    @staticmethod
    def _coerce(other: Operand) -> "ExactFraction":
        if isinstance(other, ExactFraction):
            return other
        if isinstance(other, int):
            return ExactFraction.of(other)
        raise TypeError(f"unsupported operand type: {type(other).__name__}")

    @property
    def is_integer(self) -> bool:
        return self.denominator == 1

    def add(self, other: Operand) -> "ExactFraction":
        o = self._coerce(other)
        return ExactFraction(
            self.numerator * o.denominator + o.numerator * self.denominator,
            self.denominator * o.denominator,
        )

    def sub(self, other: Operand) -> "ExactFraction":
        o = self._coerce(other)
        return ExactFraction(
            self.numerator * o.denominator - o.numerator * self.denominator,
            self.denominator * o.denominator,
        )

    def mul(self, other: Operand) -> "ExactFraction":
        o = self._coerce(other)
        return ExactFraction(self.numerator * o.numerator, self.denominator * o.denominator)

    def div(self, other: Operand) -> "ExactFraction":
        o = self._coerce(other)
        if o.numerator == 0:
            raise DivisionByZero(f"cannot divide {self} by zero")
        return ExactFraction(self.numerator * o.denominator, self.denominator * o.numerator)

    def __add__(self, other: Operand) -> "ExactFraction":
        if not isinstance(other, (ExactFraction, int)):
            return NotImplemented
        return self.add(other)

    __radd__ = __add__

    def __sub__(self, other: Operand) -> "ExactFraction":
        if not isinstance(other, (ExactFraction, int)):
            return NotImplemented
        return self.sub(other)

    def __rsub__(self, other: int) -> "ExactFraction":
        if not isinstance(other, int):
            return NotImplemented
        return ExactFraction.of(other).sub(self)

    def __mul__(self, other: Operand) -> "ExactFraction":
        if not isinstance(other, (ExactFraction, int)):
            return NotImplemented
        return self.mul(other)

    __rmul__ = __mul__

    def __truediv__(self, other: Operand) -> "ExactFraction":
        if not isinstance(other, (ExactFraction, int)):
            return NotImplemented
        return self.div(other)

    def __rtruediv__(self, other: int) -> "ExactFraction":
        if not isinstance(other, int):
            return NotImplemented
        return ExactFraction.of(other).div(self)

    def __neg__(self) -> "ExactFraction":
        return ExactFraction(-self.numerator, self.denominator)

    def __str__(self) -> str:
        if self.denominator == 1:
            return str(self.numerator)
        return f"{self.numerator}/{self.denominator}"

    def __repr__(self) -> str:
        return f"ExactFraction({self.numerator}, {self.denominator})"


ZERO = ExactFraction(0)
ONE = ExactFraction(1)


__all__ = ["ExactFraction", "ZERO", "ONE"]
