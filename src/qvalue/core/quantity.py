"""
qvalue.core.quantity
====================

Defines ``QuantityValue``: an immutable pair of a raw magnitude and a unit.

The raw magnitude is always stored in the coherent SI basis shared by every
unit of the same dimension, so re-tagging a value with a convertible unit
never touches the number; only ``value`` asks the unit to render it.

The module provides:
- factories (``of_number``, ``of_scaled``, ``of_unscaled``),
- conversion and arithmetic, both as operators and as plain functions
  (``converted``, ``add``, ``subtract``, ``multiply``, ``divide``, ``power``),
- ordering with a relative tolerance (``compare_to``) and exact equality.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import ClassVar, Union

from qvalue.core.dimensions import Dim, Dimension
from qvalue.core.errors import DimensionalityError, IncomparableQuantitiesError
from qvalue.core.fraction import ExactFraction, ExponentLike, coerce_exponent
from qvalue.core.unit import AggregateUnit, Unit

logger = logging.getLogger(__name__)

Number = Union[int, float]


def _dimensionless_unit() -> Unit:
    # Local import: the catalog imports this module.
    from qvalue.units.registry import NUM

    return NUM


def _total_order(a: float, b: float) -> int:
    """
    Three-way float comparison under a total order: -0.0 sorts below 0.0 and
    NaN sorts above every other value (including +inf) and equal to itself.
    """
    if a < b:
        return -1
    if a > b:
        return 1
    a_nan, b_nan = math.isnan(a), math.isnan(b)
    if a_nan or b_nan:
        return a_nan - b_nan
    sa, sb = math.copysign(1.0, a), math.copysign(1.0, b)
    return (sa > sb) - (sa < sb)


def _same_bits(a: float, b: float) -> bool:
    """Bitwise float equality: 0.0 and -0.0 differ, NaN equals NaN."""
    return _total_order(a, b) == 0


def _is_odd_integer(y: float) -> bool:
    return y.is_integer() and y % 2 == 1


def _ieee_div(a: float, b: float) -> float:
    """``a / b`` with IEEE 754 results for a zero divisor instead of an exception."""
    if b != 0.0:
        return a / b
    if a == 0.0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, math.copysign(1.0, a) * math.copysign(1.0, b))


def _ieee_pow(x: float, y: float) -> float:
    """
    ``x ** y`` with IEEE 754 results where ``math.pow`` would raise.

    Zero to a negative power is infinite (signed for -0.0 under an odd integer
    exponent), a finite negative base under a non-integer exponent is NaN, and
    overflow is infinite.
    """
    if x == 0.0 and y < 0:
        return math.copysign(math.inf, x) if _is_odd_integer(y) else math.inf
    if x < 0 and math.isfinite(x) and math.isfinite(y) and not y.is_integer():
        return math.nan
    try:
        return math.pow(x, y)
    except OverflowError:
        return -math.inf if x < 0 and _is_odd_integer(y) else math.inf


@dataclass(frozen=True, slots=True, eq=False)
class QuantityValue:
    """
    A physical quantity: a raw magnitude in the coherent SI basis tagged with
    a unit.

    Attributes
    ----------
    raw : float
        Magnitude in the coherent basis of the unit's dimension.
    unit : Unit
        Shared, immutable unit reference.

    Notes
    -----
    Ordering and equality deliberately disagree. ``compare_to`` (and ``<``,
    ``<=``, ``>``, ``>=``) treat raws within a relative ``EPSILON`` as equal to
    absorb scale/unscale round-off, while ``==`` requires bit-identical raws.
    So ``a.compare_to(b) == 0`` does not imply ``a == b``.
    """

    EPSILON: ClassVar[float] = 1e-5

    raw: float
    unit: Unit

    def __post_init__(self) -> None:
        object.__setattr__(self, "raw", float(self.raw))

    # --- factories ---
    @classmethod
    def of_number(cls, value: Number) -> QuantityValue:
        """Dimensionless quantity."""
        return cls(value, _dimensionless_unit())

    @classmethod
    def of_scaled(cls, value: Number, unit: Unit) -> QuantityValue:
        """Quantity from a human-scale magnitude expressed in ``unit``."""
        return cls(unit.unscale(value), unit)

    @classmethod
    def of_unscaled(cls, raw: Number, unit: Unit) -> QuantityValue:
        """Quantity from a magnitude already in the coherent raw basis."""
        return cls(raw, unit)

    # --- accessors ---
    @property
    def value(self) -> float:
        """The magnitude rendered in ``unit`` (recomputed on every access)."""
        return self.unit.scale(self.raw)

    @property
    def dim(self) -> Dim:
        return self.unit.dim

    # --- conversion ---
    def to(self, unit: Unit) -> QuantityValue:
        """Re-tag with a convertible unit; the raw magnitude is unchanged."""
        if not self.unit.is_convertible(unit):
            logger.debug("Conversion contract violated: %s -> %s", self, unit)
            raise DimensionalityError(
                f"Cannot convert '{self}' to '{unit}': dimensions "
                f"{self.unit.dim!r} and {unit.dim!r} differ",
                self,
                unit,
            )
        return QuantityValue.of_unscaled(self.raw, unit)

    # --- arithmetic ---
    @staticmethod
    def _coerce(other: object) -> QuantityValue | None:
        if isinstance(other, QuantityValue):
            return other
        if isinstance(other, (int, float)) and not isinstance(other, bool):
            return QuantityValue.of_number(other)
        return None

    def _require_convertible(self, other: QuantityValue, op: str) -> None:
        if not self.unit.is_convertible(other.unit):
            logger.debug("%s contract violated: %s, %s", op, self, other)
            raise DimensionalityError(
                f"{op} requires convertible units, got '{self.unit}' and '{other.unit}'",
                self,
                other,
            )

    def __add__(self, other: object) -> QuantityValue:
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        # An exact zero on either side is dimensionally universal.
        if self.raw == 0.0:
            return o
        if o.raw == 0.0:
            return self
        self._require_convertible(o, "Addition")
        return QuantityValue(self.raw + o.raw, self.unit)

    def __radd__(self, other: object) -> QuantityValue:
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return o.__add__(self)

    def __sub__(self, other: object) -> QuantityValue:
        """
        ``self - other`` in ``self``'s unit.

        When ``self`` is exactly zero the result is ``-other.value`` stored as
        the raw magnitude in ``other``'s unit. That matches ``-other`` only for
        coherent units; for scaled (km) or offset (°C) units the displayed
        magnitude is taken as if it were already in the coherent basis.
        """
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        if self.raw == 0.0:
            return QuantityValue.of_unscaled(-o.value, o.unit)
        if o.raw == 0.0:
            return self
        self._require_convertible(o, "Subtraction")
        return QuantityValue(self.raw - o.raw, self.unit)

    def __rsub__(self, other: object) -> QuantityValue:
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return o.__sub__(self)

    def __neg__(self) -> QuantityValue:
        return QuantityValue(-self.raw, self.unit)

    def __mul__(self, other: object) -> QuantityValue:
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return QuantityValue(self.raw * o.raw, AggregateUnit(self.unit, 1, o.unit, 1))

    def __rmul__(self, other: object) -> QuantityValue:
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return o.__mul__(self)

    def __truediv__(self, other: object) -> QuantityValue:
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return QuantityValue(_ieee_div(self.raw, o.raw), AggregateUnit(self.unit, 1, o.unit, -1))

    def __rtruediv__(self, other: object) -> QuantityValue:
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return o.__truediv__(self)

    def __pow__(self, n: ExponentLike) -> QuantityValue:
        exp = coerce_exponent(n)
        return QuantityValue(_ieee_pow(self.raw, float(exp)), AggregateUnit(self.unit, exp))

    # --- ordering ---
    def compare_to(self, other: QuantityValue) -> int:
        """
        Three-way comparison within one convertibility class.

        Returns 0 when ``|1 - self.raw / other.raw| < EPSILON``, otherwise -1 or
        1 by raw magnitude under a total order (-0.0 below 0.0, NaN above
        everything). Raises ``IncomparableQuantitiesError`` when the units are
        not convertible.
        """
        if not isinstance(other, QuantityValue) or not self.unit.is_convertible(other.unit):
            raise IncomparableQuantitiesError(f"Cannot compare {self} to {other}", self, other)
        if other.raw != 0.0 and abs(1 - self.raw / other.raw) < self.EPSILON:
            return 0
        return _total_order(self.raw, other.raw)

    def __lt__(self, other: QuantityValue) -> bool:
        return self.compare_to(other) < 0

    def __le__(self, other: QuantityValue) -> bool:
        return self.compare_to(other) <= 0

    def __gt__(self, other: QuantityValue) -> bool:
        return self.compare_to(other) > 0

    def __ge__(self, other: QuantityValue) -> bool:
        return self.compare_to(other) >= 0

    # --- equality & hashing ---
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, QuantityValue):
            return NotImplemented
        if type(self) is not type(other):
            return False
        return _same_bits(self.raw, other.raw) and self.unit.is_convertible(other.unit)

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self) -> int:
        raw_key = "nan" if math.isnan(self.raw) else self.raw
        return hash((raw_key, self.unit.dim))

    # --- rendering ---
    def _unit_label(self) -> str:
        # The dimensionless unit renders as a bare number.
        label = str(self.unit)
        return "" if label == "1" else label

    def __str__(self) -> str:
        unit = self._unit_label()
        return f"{self.value} {unit}" if unit else f"{self.value}"

    def __format__(self, spec: str) -> str:
        """
        Format specifiers
        -----------------
        ""      ``str(q)``: value in the current unit.
        "si"    the raw magnitude with the coherent SI unit for the dimension.
        other   a float format spec applied to ``value``, e.g. ``f"{q:.2f}"``.
        """
        spec = (spec or "").strip()
        if spec == "":
            return str(self)
        if spec.lower() == "si":
            si = Dimension(self.unit.dim).si_name
            return f"{self.raw}" if si == "1" else f"{self.raw} {si}"
        unit = self._unit_label()
        mag = format(self.value, spec)
        return f"{mag} {unit}" if unit else mag


# --- functional API -----------------------------------------------------------

def converted(qv: QuantityValue, unit: Unit) -> QuantityValue:
    """``qv`` re-tagged with the convertible ``unit``; raises ``DimensionalityError``."""
    return qv.to(unit)


def add(a: QuantityValue, b: QuantityValue) -> QuantityValue:
    return a + b


def subtract(a: QuantityValue, b: QuantityValue) -> QuantityValue:
    return a - b


def multiply(a: QuantityValue, b: QuantityValue) -> QuantityValue:
    return a * b


def divide(a: QuantityValue, b: QuantityValue) -> QuantityValue:
    return a / b


def power(qv: QuantityValue, exponent: ExponentLike, denominator: int | None = None) -> QuantityValue:
    """
    Raise ``qv`` to an integer or exact fractional power.

    ``power(q, 2)``, ``power(q, ExactFraction(1, 2))`` and ``power(q, 1, 2)``
    are all accepted; the two-integer form builds the fraction.
    """
    if denominator is not None:
        if not isinstance(exponent, int):
            raise TypeError("power(qv, num, denom) needs integer numerator and denominator")
        exponent = ExactFraction(exponent, denominator)
    return qv ** exponent


__all__ = [
    "QuantityValue",
    "converted",
    "add",
    "subtract",
    "multiply",
    "divide",
    "power",
]
