"""
qvalue.core.utils
=================

Helpers shared by the dimension, fraction and unit modules:

- exact rationalization of float exponents,
- symbol/exponent bookkeeping for composed unit names,
- readable formatting of dimensions and unit names (e.g. 'kg·m/s^2').
"""

from __future__ import annotations

from fractions import Fraction
from typing import Dict, Iterable, List, Sequence, Union

from qvalue.core.errors import IrrationalExponentError

# Largest denominator accepted when turning a float exponent into a fraction.
MAX_EXPONENT_DENOMINATOR = 64

SymbolComponents = Dict[str, Fraction]
RationalLike = Union[int, float, Fraction]

_SUPERSCRIPTS = str.maketrans("0123456789-", "⁰¹²³⁴⁵⁶⁷⁸⁹⁻")


def _sup(n: int) -> str:
    return "" if n == 1 else str(n).translate(_SUPERSCRIPTS)


def rationalize(x: float, max_denominator: int = MAX_EXPONENT_DENOMINATOR) -> int | Fraction:
    """
    Return the exact rational a float exponent stands for.

    ``0.5`` -> ``Fraction(1, 2)``, ``1/3`` -> ``Fraction(1, 3)``, ``2.0`` -> ``2``.
    Raises ``IrrationalExponentError`` when no fraction with a small
    denominator reproduces ``x`` to float precision.
    """
    if x != x or x in (float("inf"), float("-inf")):
        raise IrrationalExponentError(f"Exponent {x!r} is not a finite number")
    frac = Fraction(x).limit_denominator(max_denominator)
    if abs(float(frac) - x) > 1e-12 * max(1.0, abs(x)):
        raise IrrationalExponentError(
            f"Exponent {x!r} has no rational form with denominator <= {max_denominator}"
        )
    if frac.denominator == 1:
        return frac.numerator
    return frac


def simplify_fraction(x: object) -> Fraction:
    """Coerce an exponent (int, Fraction, float or any rational pair) to ``Fraction``."""
    if isinstance(x, Fraction):
        return x
    if isinstance(x, bool):
        raise TypeError("Dimension exponents cannot be bool")
    if isinstance(x, int):
        return Fraction(x)
    if isinstance(x, float):
        return Fraction(rationalize(x))
    num = getattr(x, "numerator", None)
    den = getattr(x, "denominator", None)
    if isinstance(num, int) and isinstance(den, int):
        return Fraction(num, den)
    raise TypeError(f"Cannot use {type(x).__name__} as an exponent")


# ---------- symbol components (for composed unit names) ----------

def scale_components(components: SymbolComponents, factor: RationalLike) -> SymbolComponents:
    """Multiply every exponent by ``factor``; zero exponents are dropped."""
    f = simplify_fraction(factor)
    return {sym: exp * f for sym, exp in components.items() if exp * f != 0}


def combine_components(*maps: SymbolComponents) -> SymbolComponents:
    """Merge symbol maps, adding exponents and cancelling symbols that reach zero.

    Insertion order is kept so 'm' stays ahead of 's' in 'm/s'.
    """
    combined: SymbolComponents = {}
    for mapping in maps:
        for sym, exp in mapping.items():
            new_exp = combined.get(sym, Fraction(0)) + exp
            if new_exp == 0:
                combined.pop(sym, None)
            else:
                combined[sym] = new_exp
    return combined


def format_exponent(exp: Fraction) -> str:
    if exp.denominator == 1:
        return str(exp.numerator)
    return f"({exp.numerator}/{exp.denominator})"


def format_unit_components(components: SymbolComponents) -> str:
    """
    Render a symbol map as a unit name.

    ``{"m": 1, "s": -2}`` -> ``"m/s^2"``; ``{"kg": 1, "m": 1, "s": -2}`` ->
    ``"kg·m/s^2"``; an empty map renders as ``""`` (dimensionless).
    """
    if not components:
        return ""

    def fmt(sym: str, exp: Fraction) -> str:
        mag = abs(exp)
        if mag == 1:
            return sym
        return f"{sym}^{format_exponent(mag)}"

    positives: List[str] = [fmt(s, e) for s, e in components.items() if e > 0]
    negatives: List[str] = [fmt(s, e) for s, e in components.items() if e < 0]

    numerator = "·".join(positives) if positives else "1"
    if not negatives:
        return numerator
    denominator = "·".join(negatives)
    if len(negatives) > 1:
        denominator = f"({denominator})"
    return f"{numerator}/{denominator}"


# ---------- Dimension → pretty unit string ----------

_DIM_LABELS: Sequence[str] = ("m", "kg", "s", "A", "K", "mol", "cd")
# indices: L=0 M=1 T=2 I=3 Θ=4 N=5 J=6, printed in the conventional M, L, T, ... order
_DIM_ORDER: Sequence[int] = (1, 0, 2, 3, 4, 5, 6)


def _dim_part(label: str, exp: Fraction) -> str:
    if exp.denominator == 1:
        return label + _sup(exp.numerator)
    return f"{label}^{format_exponent(exp)}"


def format_dim(dim: Iterable[object]) -> str:
    """
    Turn a dimension vector (L,M,T,I,Θ,N,J) into the coherent SI unit name,
    e.g. ``(1, 1, -2, 0, 0, 0, 0)`` -> ``'kg·m/s²'``. Dimensionless gives ``'1'``.
    """
    exps = [simplify_fraction(e) for e in dim]
    num: List[str] = []
    den: List[str] = []
    for i in _DIM_ORDER:
        e = exps[i]
        if e > 0:
            num.append(_dim_part(_DIM_LABELS[i], e))
        elif e < 0:
            den.append(_dim_part(_DIM_LABELS[i], -e))

    numerator = "·".join(num) if num else "1"
    denominator = "·".join(den)
    return f"{numerator}/{denominator}" if denominator else numerator


__all__ = [
    "MAX_EXPONENT_DENOMINATOR",
    "SymbolComponents",
    "rationalize",
    "simplify_fraction",
    "scale_components",
    "combine_components",
    "format_exponent",
    "format_unit_components",
    "format_dim",
]
