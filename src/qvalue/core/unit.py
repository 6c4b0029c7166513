"""
qvalue.core.unit
================

The unit capability contract and its two concrete variants.

- ``Unit`` is the structural contract every unit satisfies: ``scale`` /
  ``unscale`` between the raw (coherent SI) basis and the unit's display
  basis, a dimension identity ``dim``, and ``is_convertible``.
- ``LinearUnit`` is a catalog unit: a factor to SI plus an optional offset
  (°C, °F).
- ``AggregateUnit`` is synthesized by multiply / divide / power from one or two
  constituent units raised to integer or exact fractional exponents.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from fractions import Fraction
from math import isfinite
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from qvalue.core.dimensions import Dim, Dimension
from qvalue.core.errors import OffsetUnitError
from qvalue.core.fraction import Exponent, ExponentLike, coerce_exponent
from qvalue.core.utils import (
    SymbolComponents,
    combine_components,
    format_unit_components,
    scale_components,
)

if TYPE_CHECKING:  # pragma: no cover - imported only for type checking
    from qvalue.core.quantity import QuantityValue

logger = logging.getLogger(__name__)


@runtime_checkable
class Unit(Protocol):
    dim: Dim

    # raw (coherent basis) -> display magnitude
    def scale(self, raw: float) -> float: ...

    # display magnitude -> raw (coherent basis)
    def unscale(self, value: float) -> float: ...

    def is_convertible(self, other: "Unit") -> bool: ...


class _UnitAlgebra:
    """Operators shared by the concrete unit classes."""

    __slots__ = ()

    dim: Dim

    def is_convertible(self, other: Unit) -> bool:
        """True iff both units share the same dimension identity."""
        return self.dim == other.dim

    def __rmul__(self, value: float) -> "QuantityValue":
        # 5 * km -> QuantityValue.of_scaled(5, km)
        from qvalue.core.quantity import QuantityValue

        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return NotImplemented
        return QuantityValue.of_scaled(value, self)  # type: ignore[arg-type]

    def __mul__(self, other: Unit) -> "AggregateUnit":
        if not isinstance(other, Unit):
            return NotImplemented
        return AggregateUnit(self, 1, other, 1)  # type: ignore[arg-type]

    def __truediv__(self, other: Unit) -> "AggregateUnit":
        if not isinstance(other, Unit):
            return NotImplemented
        return AggregateUnit(self, 1, other, -1)  # type: ignore[arg-type]

    def __rtruediv__(self, n: int | float) -> "AggregateUnit":
        if n != 1:
            raise TypeError(
                f"Invalid operation: cannot divide {n} by a unit ({self}). "
                "Only 1/unit (reciprocal) is supported."
            )
        return AggregateUnit(self, -1)  # type: ignore[arg-type]

    def __pow__(self, n: ExponentLike) -> "AggregateUnit":
        return AggregateUnit(self, n)  # type: ignore[arg-type]


@dataclass(frozen=True, slots=True)
class LinearUnit(_UnitAlgebra):
    """
    A catalog unit related to the coherent SI basis by a factor and an offset.

    Attributes
    ----------
    name : str
        Symbol (e.g., "m", "km", "°C").
    scale_to_si : float
        Multiplicative factor taking 1 of this unit to SI. m=1.0, km=1000.0.
    dim : Dim
        Dimension vector (L,M,T,I,Θ,N,J).
    offset : float
        SI value of this unit's zero point (273.15 for °C, 0 for most units).
    """

    name: str
    scale_to_si: float
    dim: Dim
    offset: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "dim", Dimension(self.dim))
        if not (self.scale_to_si > 0 and isfinite(self.scale_to_si)):
            raise ValueError("scale_to_si must be a positive, finite number")
        if not isfinite(self.offset):
            raise ValueError("offset must be a finite number")

    @property
    def is_linear(self) -> bool:
        """Purely multiplicative w.r.t. SI (no offset)?"""
        return self.offset == 0.0

    def scale(self, raw: float) -> float:
        return (raw - self.offset) / self.scale_to_si

    def unscale(self, value: float) -> float:
        return value * self.scale_to_si + self.offset

    def __str__(self) -> str:
        return self.name


def _reject_offset(unit: Unit) -> None:
    """Raise ``OffsetUnitError`` if ``unit`` does not map zero to zero."""
    zero = unit.unscale(0.0)
    if zero != 0.0:
        logger.debug("Rejecting offset unit %s (zero point %r) in an aggregate", unit, zero)
        raise OffsetUnitError(
            f"Cannot compose offset unit '{unit}' into a product, quotient or power; "
            "convert it to an absolute unit first."
        )


def _symbol_components(unit: Unit) -> SymbolComponents:
    if isinstance(unit, AggregateUnit):
        return dict(unit.components)
    name = str(unit)
    if name in ("", "1"):
        return {}
    return {name: Fraction(1)}


@dataclass(frozen=True, slots=True)
class AggregateUnit(_UnitAlgebra):
    """
    A unit synthesized from ``unit_a ** exponent_a`` and, optionally,
    ``unit_b ** exponent_b``.

    Multiply builds ``(a, 1, b, 1)``, divide ``(a, 1, b, -1)`` and power
    ``(a, n)``. The dimension is the exponent-weighted sum of the
    constituents' dimensions. ``scale``/``unscale`` are the identity: results
    of composition are already in the coherent raw basis, so an aggregate
    displays its raw magnitude (``36 km / 1 h`` shows ``10.0 km/h``).
    Offset-bearing constituents raise ``OffsetUnitError``.
    """

    unit_a: Unit
    exponent_a: Exponent
    unit_b: Unit | None = None
    exponent_b: Exponent = 0

    dim: Dim = field(init=False, repr=False, compare=False)
    components: SymbolComponents = field(init=False, repr=False, compare=False)
    name: str = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        exp_a = coerce_exponent(self.exponent_a)
        exp_b = coerce_exponent(self.exponent_b)
        if self.unit_b is None and exp_b != 0:
            raise ValueError("exponent_b given without unit_b")
        object.__setattr__(self, "exponent_a", exp_a)
        object.__setattr__(self, "exponent_b", exp_b)

        _reject_offset(self.unit_a)
        dim = Dimension(self.unit_a.dim) ** exp_a
        components = scale_components(_symbol_components(self.unit_a), exp_a)

        if self.unit_b is not None:
            _reject_offset(self.unit_b)
            dim = dim * (Dimension(self.unit_b.dim) ** exp_b)
            components = combine_components(
                components, scale_components(_symbol_components(self.unit_b), exp_b)
            )

        object.__setattr__(self, "dim", dim)
        object.__setattr__(self, "components", components)
        object.__setattr__(self, "name", format_unit_components(components))

    def scale(self, raw: float) -> float:
        return raw

    def unscale(self, value: float) -> float:
        return value

    def __str__(self) -> str:
        return self.name


__all__ = ["Unit", "LinearUnit", "AggregateUnit"]
