"""
qvalue.units.registry
=====================

The catalog of predefined units used with ``QuantityValue``.

- ``UnitsRegistry`` maps symbols and aliases to immutable ``LinearUnit``
  instances; its maps are guarded by a lock.
- Symbols are normalized (Unicode NFC, ASCII ``u`` micro, ``ohm`` → ``Ω``)
  before lookup.
- ``DEFAULT_REGISTRY`` is bootstrapped with the SI base units, the canonical
  dimensionless unit ``NUM``, SI-prefixed units, and a few common non-SI
  units (minute, hour, °C, °F, inch, foot, mile).

Compound expressions such as ``"m/s"`` are not parsed; build them with unit
algebra instead (``u.m / u.s``).
"""
from __future__ import annotations

import logging
import math
import re
import threading
import unicodedata
from typing import ClassVar, Dict, Mapping

from qvalue.core.dimensions import (
    AMOUNT,
    CURRENT,
    DIM_0,
    LENGTH,
    LUMINOUS,
    MASS,
    TEMPERATURE,
    TIME,
    dim_div,
    dim_mul,
    dim_pow,
)
from qvalue.core.unit import LinearUnit
from qvalue.units.prefixes import PREFIXES

logger = logging.getLogger(__name__)

_MICRO = "µ"
_OHM_RE = re.compile(r"(?i)ohm")

# Canonical dimensionless unit; ``QuantityValue.of_number`` tags with it.
NUM = LinearUnit("1", 1.0, DIM_0)


def normalize_symbol(s: str) -> str:
    """Normalize user-provided unit symbols.

    Rules:
    - Strip surrounding whitespace and Unicode normalize to NFC.
    - Greek small mu (U+03BC) and a leading ASCII 'u' become the micro sign.
    - Any spelling of 'ohm' becomes 'Ω'.
    """
    if not s:
        return s

    s = unicodedata.normalize("NFC", s.strip())
    s = s.replace("μ", _MICRO)
    if s.startswith("u") and len(s) > 1:
        s = _MICRO + s[1:]
    return _OHM_RE.sub("Ω", s)


class UnitsRegistry:
    """Thread-safe symbol → ``LinearUnit`` registry with alias support."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._units: Dict[str, LinearUnit] = {}
        self._aliases: Dict[str, str] = {}

    def __contains__(self, symbol: str) -> bool:
        return self.has(symbol)

    # -------------------------- public API ---------------------------------
    def register(self, unit: LinearUnit, replace: bool = False) -> None:
        """Register (or overwrite if replace is True) a unit under its name."""
        with self._lock:
            if unit.name in UnitNamespace._reserved_names:
                raise ValueError(
                    f"Cannot register unit '{unit.name}': "
                    "name conflicts with UnitNamespace attribute/method."
                )
            if not replace:
                if unit.name in self._units:
                    raise ValueError(
                        f"Cannot register unit '{unit.name}': "
                        "a unit with this name already exists."
                    )
                if unit.name in self._aliases:
                    raise ValueError(
                        f"Cannot register unit '{unit.name}': "
                        "an alias with this name already exists."
                    )
            self._units[unit.name] = unit
        logger.debug("Registered unit %r (scale_to_si=%r, dim=%r)", unit.name, unit.scale_to_si, unit.dim)

    def register_alias(self, alias: str, canonical: str, replace: bool = False) -> None:
        """Make ``alias`` resolve to the registered unit ``canonical``."""
        literal_key = unicodedata.normalize("NFC", alias.strip())
        norm_key = normalize_symbol(alias)

        with self._lock:
            if canonical not in self._units:
                raise ValueError(f"Cannot alias '{alias}': unknown unit '{canonical}'")
            if literal_key in UnitNamespace._reserved_names:
                raise ValueError(
                    f"Cannot register alias '{alias}': "
                    "name conflicts with UnitNamespace attribute/method."
                )
            if not replace:
                for key in {literal_key, norm_key}:
                    if key in self._units and key != canonical:
                        raise ValueError(
                            f"Cannot register alias '{alias}': "
                            f"a unit with the name '{key}' already exists."
                        )
            self._aliases[literal_key] = canonical
            self._aliases[norm_key] = canonical

    def has(self, symbol: str) -> bool:
        try:
            self.get(symbol)
            return True
        except ValueError:
            return False

    def get(self, symbol: str) -> LinearUnit:
        """Lookup a unit by symbol or alias. Raises ``ValueError`` if unknown."""
        with self._lock:
            for key in (symbol, normalize_symbol(symbol)):
                key = self._aliases.get(key, key)
                unit = self._units.get(key)
                if unit is not None:
                    return unit
        raise ValueError(f"Unknown unit symbol: {symbol}")

    def all(self) -> Mapping[str, LinearUnit]:
        with self._lock:
            return dict(self._units)

    def aliases(self) -> Mapping[str, str]:
        with self._lock:
            return dict(self._aliases)

    def as_namespace(self) -> UnitNamespace:
        return UnitNamespace(self)


class UnitNamespace:
    """Attribute-style access to a registry: ``u.km``, ``u("°C")``."""

    _reserved_names: ClassVar[set[str]] = set()

    def __init__(self, reg: UnitsRegistry) -> None:
        self._reg = reg

    def __contains__(self, spec: str) -> bool:
        return self._reg.has(spec)

    def define(self, name: str, scale: float | int, reference: LinearUnit, replace: bool = False) -> LinearUnit:
        """Register ``name`` as ``scale`` times the linear unit ``reference``."""
        if not reference.is_linear:
            raise ValueError(f"Cannot define '{name}' relative to offset unit '{reference.name}'")
        unit = LinearUnit(name, float(scale) * reference.scale_to_si, reference.dim)
        self._reg.register(unit, replace)
        return unit

    def __call__(self, spec: str) -> LinearUnit:
        return self._reg.get(spec)

    def __getattr__(self, name: str) -> LinearUnit:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._reg.get(name)
        except ValueError as e:
            raise AttributeError(name) from e

    def __dir__(self) -> list[str]:
        """List all available unit symbols for autocomplete."""
        base_dir = set(super().__dir__())
        return sorted(base_dir | set(self._reg.all()) | set(self._reg.aliases()))


UnitNamespace._reserved_names = set(dir(UnitNamespace))


# ---------------------------------------------------------------------------
# Bootstrap a default registry
# ---------------------------------------------------------------------------

# Units that accept SI prefixes. 'g' skips 'k' since 'kg' is the base unit.
_PREFIXABLE = ("m", "g", "s", "A", "mol", "Hz", "N", "Pa", "J", "W", "V", "Ω")


def _bootstrap_default_registry() -> UnitsRegistry:
    reg = UnitsRegistry()

    base_units = (
        LinearUnit("m",   1.0, LENGTH),       # length
        LinearUnit("kg",  1.0, MASS),         # mass
        LinearUnit("s",   1.0, TIME),         # time
        LinearUnit("A",   1.0, CURRENT),      # electric current
        LinearUnit("K",   1.0, TEMPERATURE),  # temperature
        LinearUnit("mol", 1.0, AMOUNT),       # amount of substance
        LinearUnit("cd",  1.0, LUMINOUS),     # luminous intensity
    )

    FORCE      = dim_mul(MASS, dim_div(LENGTH, dim_pow(TIME, 2)))
    PRESSURE   = dim_div(FORCE, dim_pow(LENGTH, 2))
    ENERGY     = dim_mul(FORCE, LENGTH)
    POWER      = dim_div(ENERGY, TIME)
    CHARGE     = dim_mul(CURRENT, TIME)
    VOLTAGE    = dim_div(POWER, CURRENT)
    RESISTANCE = dim_div(VOLTAGE, CURRENT)
    FREQUENCY  = dim_pow(TIME, -1)

    # (symbol, scale_to_si, dim)
    derived_units = (
        ("rad", 1.0,  DIM_0),
        ("sr",  1.0,  DIM_0),
        ("deg", math.pi / 180.0, DIM_0),
        ("g",   1e-3, MASS),
        ("Hz",  1.0,  FREQUENCY),
        ("N",   1.0,  FORCE),
        ("Pa",  1.0,  PRESSURE),
        ("J",   1.0,  ENERGY),
        ("W",   1.0,  POWER),
        ("C",   1.0,  CHARGE),
        ("V",   1.0,  VOLTAGE),
        ("Ω",   1.0,  RESISTANCE),
    )

    other_units = (
        ("min", 60.0,          TIME),
        ("h",   3600.0,        TIME),
        ("d",   86400.0,       TIME),
        ("in",  0.0254,        LENGTH),
        ("ft",  0.3048,        LENGTH),
        ("mi",  1609.344,      LENGTH),
    )

    reg.register(NUM)
    for u in base_units:
        reg.register(u)
    for sym, scale, dim in derived_units + other_units:
        reg.register(LinearUnit(sym, scale, dim))

    for base_sym in _PREFIXABLE:
        base = reg.get(base_sym)
        for p in PREFIXES:
            sym = f"{p.symbol}{base_sym}"
            if sym in reg.all():
                continue
            reg.register(LinearUnit(sym, base.scale_to_si * p.factor, base.dim))

    # Offset temperatures share the kelvin raw basis.
    reg.register(LinearUnit("°C", 1.0, TEMPERATURE, offset=273.15))
    reg.register(LinearUnit("°F", 5.0 / 9.0, TEMPERATURE, offset=273.15 - 32.0 * 5.0 / 9.0))

    aliases = {
        "ohm": "Ω",
        "meter": "m", "metre": "m",
        "gram": "g",
        "second": "s", "sec": "s",
        "minute": "min",
        "hour": "h", "hr": "h",
        "day": "d",
        "kelvin": "K",
        "degC": "°C", "celsius": "°C",
        "degF": "°F", "fahrenheit": "°F",
        "inch": "in", "foot": "ft", "mile": "mi",
        "one": "1",
    }
    for alias, canonical in aliases.items():
        reg.register_alias(alias, canonical)

    logger.debug("Bootstrapped default registry with %d units", len(reg.all()))
    return reg


# Public, shared default registry
DEFAULT_REGISTRY: UnitsRegistry = _bootstrap_default_registry()


__all__ = [
    "NUM",
    "UnitsRegistry",
    "UnitNamespace",
    "DEFAULT_REGISTRY",
    "normalize_symbol",
]
