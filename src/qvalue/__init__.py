"""
qvalue: dimensionally safe arithmetic on physical quantity values.

A ``QuantityValue`` pairs a raw magnitude, stored in the coherent SI basis of
its dimension, with a unit. Quantities convert, multiply, divide and take
integer or exact fractional powers, and refuse to add, subtract or compare
values of incompatible dimensions.
"""

from importlib import metadata as _metadata

from qvalue.core.errors import (
    DimensionalityError,
    IncomparableQuantitiesError,
    OffsetUnitError,
)
from qvalue.core.fraction import ExactFraction
from qvalue.core.quantity import QuantityValue
from qvalue.core.unit import AggregateUnit, LinearUnit, Unit

__license__ = "MIT"

# Try to read the installed package version first; fall back to pyproject.toml for local dev.
try:
    __version__ = _metadata.version("qvalue")
except _metadata.PackageNotFoundError:
    import tomllib
    with open("pyproject.toml", "rb") as f:
        __version__ = tomllib.load(f)["project"]["version"]

# Public names exposed by the package. Keep this minimal and stable.
__all__ = [
    "__version__",
    "__license__",
    "QuantityValue",
    "Unit",
    "LinearUnit",
    "AggregateUnit",
    "ExactFraction",
    "DimensionalityError",
    "IncomparableQuantitiesError",
    "OffsetUnitError",
]
