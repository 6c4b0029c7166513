# qvalue.core.dimensions

from __future__ import annotations

from fractions import Fraction
from typing import Any, Iterable, Tuple, TypeAlias, Union

from qvalue.core.errors import IrrationalExponentError
from qvalue.core.utils import format_dim, simplify_fraction

# --- Public typing -----------------------------------------------------------
Dim: TypeAlias = "Dimension"
DimTuple = Tuple[Fraction, Fraction, Fraction, Fraction, Fraction, Fraction, Fraction]
DimLike = Union["Dimension", DimTuple, Iterable[Any]]

_NAMES = ("L", "M", "T", "I", "Θ", "N", "J")

# --- Core object -------------------------------------------------------------

class Dimension(tuple):
    """
    Immutable 7-length vector of rational exponents over the SI base
    dimensions (L, M, T, I, Θ, N, J).

    A unit's dimension identity: two units are convertible iff their
    dimensions are equal. Being a tuple subclass it is hashable and usable as
    a dict key. Dimension algebra is written multiplicatively, so
    ``a * b`` adds exponent vectors and ``a ** n`` scales them.
    """

    __slots__ = ()

    def __new__(cls, data: DimLike = (0, 0, 0, 0, 0, 0, 0)) -> "Dimension":
        if isinstance(data, Dimension):
            return data

        t = tuple(simplify_fraction(x) for x in data)
        if len(t) != 7:
            raise ValueError("Dimension must have length 7 (L, M, T, I, Θ, N, J).")
        return tuple.__new__(cls, t)

    # --- Algebra (operator overloads) ---
    def __mul__(self, other: DimLike) -> "Dimension":  # type: ignore[override]
        o = Dimension(other)
        return Dimension(x + y for x, y in zip(self, o, strict=True))

    def __truediv__(self, other: DimLike) -> "Dimension":
        o = Dimension(other)
        return Dimension(x - y for x, y in zip(self, o, strict=True))

    def __rtruediv__(self, other: DimLike) -> "Dimension":
        return Dimension(other) / self

    def __pow__(self, n: Any, modulo: Any | None = None) -> "Dimension":
        if modulo is not None:
            raise TypeError("Modulo exponentiation is not supported for Dimension.")
        try:
            exp = simplify_fraction(n)  # floats may raise IrrationalExponentError
        except TypeError:
            raise TypeError(
                f"Exponent must be int, float or a fraction, got {type(n).__name__}"
            ) from None
        return Dimension(e * exp for e in self)

    def __rmul__(self, other: Any) -> "Dimension":
        """Prevent (int * Dimension) from falling back to tuple repetition."""
        return NotImplemented

    def __add__(self, other: Any) -> "Dimension":
        """Block tuple concatenation (e.g., LENGTH + MASS)."""
        return NotImplemented

    def __radd__(self, other: Any) -> "Dimension":
        return NotImplemented

    # --- Helpers ---
    @property
    def is_dimensionless(self) -> bool:
        return all(x == 0 for x in self)

    def as_tuple(self) -> DimTuple:
        return tuple(self)  # type: ignore[return-value]

    @property
    def si_name(self) -> str:
        """Coherent SI unit name for this dimension, e.g. 'kg·m/s²'."""
        return format_dim(self)

    def __repr__(self) -> str:
        parts = ""
        for n, v in zip(_NAMES, self, strict=True):
            if v != 0:
                exp = v.numerator if v.denominator == 1 else f"({v.numerator}/{v.denominator})"
                parts += f"[{n}^{exp}]"
        return parts or "[1]"

# --- Function shims ----------------------------------------------------------

def dim_mul(a: DimLike, b: DimLike) -> Dimension:
    return Dimension(a) * b

def dim_div(a: DimLike, b: DimLike) -> Dimension:
    return Dimension(a) / b

def dim_pow(a: DimLike, n: Any) -> Dimension:
    return Dimension(a) ** n

# --- Public constants --------------------------------------------------------

DIM_0: Dim       = Dimension((0, 0, 0, 0, 0, 0, 0))
LENGTH: Dim      = Dimension((1, 0, 0, 0, 0, 0, 0))
MASS: Dim        = Dimension((0, 1, 0, 0, 0, 0, 0))
TIME: Dim        = Dimension((0, 0, 1, 0, 0, 0, 0))
CURRENT: Dim     = Dimension((0, 0, 0, 1, 0, 0, 0))
TEMPERATURE: Dim = Dimension((0, 0, 0, 0, 1, 0, 0))
AMOUNT: Dim      = Dimension((0, 0, 0, 0, 0, 1, 0))
LUMINOUS: Dim    = Dimension((0, 0, 0, 0, 0, 0, 1))

__all__ = [
    "Dim",
    "Dimension",
    "IrrationalExponentError",
    "dim_mul",
    "dim_div",
    "dim_pow",
    "DIM_0",
    "LENGTH",
    "MASS",
    "TIME",
    "CURRENT",
    "TEMPERATURE",
    "AMOUNT",
    "LUMINOUS",
]
