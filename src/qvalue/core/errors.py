"""
qvalue.core.errors
==================

Exception hierarchy for dimensional contract violations.

The exceptions subclass the built-in ``TypeError`` / ``ValueError`` so callers
that already guard unit arithmetic with those keep working.
"""

from __future__ import annotations


class DimensionalityError(TypeError):
    """Raised when an operation combines units of incompatible dimensions.

    This signals a programming error in the calling code (e.g. adding a length
    to a time), not a condition to branch on at runtime.
    """

    def __init__(self, message: str, left: object = None, right: object = None) -> None:
        super().__init__(message)
        self.left = left
        self.right = right


class IncomparableQuantitiesError(DimensionalityError, ValueError):
    """Raised when two quantities outside one convertibility class are ordered."""


class OffsetUnitError(ValueError):
    """Raised when an offset-bearing unit (e.g. °C) is composed into an aggregate."""


class IrrationalExponentError(ValueError):
    """Raised when a float exponent has no small exact rational form."""


__all__ = [
    "DimensionalityError",
    "IncomparableQuantitiesError",
    "OffsetUnitError",
    "IrrationalExponentError",
]
