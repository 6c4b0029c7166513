"""
qvalue.core.fraction
====================

Exact small-rational exponents.

``ExactFraction`` is used when a unit is raised to a fractional power (roots).
It keeps numerator/denominator in lowest terms so unit exponents compose
exactly; the float form is only produced when a raw magnitude must actually be
raised to the power.
"""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from math import gcd
from typing import Union

from qvalue.core.utils import rationalize

Exponent = Union[int, "ExactFraction"]
ExponentLike = Union[int, float, Fraction, "ExactFraction"]


@dataclass(frozen=True, slots=True, eq=False)
class ExactFraction:
    """
    An exact rational number ``numerator/denominator``.

    The pair is reduced at construction and the sign is carried by the
    numerator, so ``ExactFraction(2, -4)`` is stored as ``-1/2``. Equality is
    decided by cross-multiplication, never through floats.
    """

    numerator: int
    denominator: int = 1

    def __post_init__(self) -> None:
        n, d = self.numerator, self.denominator
        if not isinstance(n, int) or not isinstance(d, int):
            raise TypeError(
                f"ExactFraction needs integer terms, got {type(n).__name__} and {type(d).__name__}"
            )
        if d == 0:
            raise ZeroDivisionError(f"ExactFraction({n}, 0)")
        if d < 0:
            n, d = -n, -d
        g = gcd(n, d)
        object.__setattr__(self, "numerator", n // g)
        object.__setattr__(self, "denominator", d // g)

    @classmethod
    def from_fraction(cls, value: Fraction) -> ExactFraction:
        return cls(value.numerator, value.denominator)

    # --- conversions ---
    def to_real(self) -> float:
        """Return ``numerator / denominator`` as a float."""
        return self.numerator / self.denominator

    def __float__(self) -> float:
        return self.to_real()

    def as_fraction(self) -> Fraction:
        return Fraction(self.numerator, self.denominator)

    @property
    def is_integer(self) -> bool:
        return self.denominator == 1

    # --- exact algebra ---
    @staticmethod
    def _terms(other: object) -> tuple[int, int] | None:
        if isinstance(other, ExactFraction):
            return other.numerator, other.denominator
        if isinstance(other, (int, Fraction)):
            return other.numerator, other.denominator
        return None

    def __eq__(self, other: object) -> bool:
        terms = self._terms(other)
        if terms is None:
            return NotImplemented
        on, od = terms
        return self.numerator * od == on * self.denominator

    def __hash__(self) -> int:
        # Same hash as the equal int / Fraction.
        return hash(Fraction(self.numerator, self.denominator))

    def __mul__(self, other: object) -> ExactFraction:
        terms = self._terms(other)
        if terms is None:
            return NotImplemented
        on, od = terms
        return ExactFraction(self.numerator * on, self.denominator * od)

    __rmul__ = __mul__

    def __add__(self, other: object) -> ExactFraction:
        terms = self._terms(other)
        if terms is None:
            return NotImplemented
        on, od = terms
        return ExactFraction(self.numerator * od + on * self.denominator, self.denominator * od)

    __radd__ = __add__

    def __neg__(self) -> ExactFraction:
        return ExactFraction(-self.numerator, self.denominator)

    def __sub__(self, other: object) -> ExactFraction:
        terms = self._terms(other)
        if terms is None:
            return NotImplemented
        on, od = terms
        return self + ExactFraction(-on, od)

    def __rsub__(self, other: object) -> ExactFraction:
        return -self + other

    def __str__(self) -> str:
        if self.denominator == 1:
            return str(self.numerator)
        return f"{self.numerator}/{self.denominator}"


def coerce_exponent(n: ExponentLike) -> Exponent:
    """
    Normalize an exponent to ``int`` or ``ExactFraction``.

    Floats are rationalized (``0.5`` -> ``1/2``); whole fractions collapse to
    ``int`` so integer powers keep their simple form.
    """
    if isinstance(n, bool):
        raise TypeError("Exponent must be int, float, Fraction or ExactFraction, got bool")
    if isinstance(n, int):
        return n
    if isinstance(n, float):
        n = rationalize(n)
        if isinstance(n, int):
            return n
    if isinstance(n, Fraction):
        n = ExactFraction.from_fraction(n)
    if isinstance(n, ExactFraction):
        return n.numerator if n.is_integer else n
    raise TypeError(
        f"Exponent must be int, float, Fraction or ExactFraction, got {type(n).__name__}"
    )


__all__ = ["ExactFraction", "Exponent", "ExponentLike", "coerce_exponent"]
