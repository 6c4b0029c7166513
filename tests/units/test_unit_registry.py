# pytest tests for qvalue.units.registry
#
# These tests exercise the shipped catalog, symbol normalization, aliases,
# prefixed units and thread-safety. They use an isolated registry instance
# for anything that mutates state.

import logging
import math
import threading

import pytest

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
from qvalue.core.unit import LinearUnit, Unit

import qvalue.units.registry as regmod
from qvalue.units.registry import NUM, UnitsRegistry, normalize_symbol

# ---------------------------------------------------------------------------
# Base/derived presence & correctness
# ---------------------------------------------------------------------------

def test_base_units_present(reg):
    for sym, dim in [("m", LENGTH), ("kg", MASS), ("s", TIME), ("A", CURRENT), ("K", TEMPERATURE), ("mol", AMOUNT), ("cd", LUMINOUS)]:
        u = reg.get(sym)
        assert isinstance(u, Unit)
        assert u.name == sym
        assert u.scale_to_si == pytest.approx(1.0)
        assert u.dim == dim


def test_dimensionless_unit_present(reg):
    assert reg.get("1") is NUM
    assert reg.get("one") is NUM


def test_common_derived_units_present(reg):
    # spot-check a few dimensions/scales
    assert reg.get("rad").dim == DIM_0
    assert reg.get("sr").dim == DIM_0
    assert reg.get("deg").scale_to_si == pytest.approx(math.pi / 180.0)

    Hz = reg.get("Hz")
    assert Hz.dim == dim_pow(TIME, -1)
    assert Hz.scale_to_si == pytest.approx(1.0)

    N_unit = reg.get("N")
    assert N_unit.dim == dim_mul(MASS, dim_div(LENGTH, dim_pow(TIME, 2)))  # kg·m/s²

    Pa = reg.get("Pa")
    assert Pa.dim == dim_div(N_unit.dim, dim_pow(LENGTH, 2))

    J_unit = reg.get("J")
    assert J_unit.dim == dim_mul(N_unit.dim, LENGTH)

    W = reg.get("W")
    assert W.dim == dim_div(J_unit.dim, TIME)

    V = reg.get("V")
    assert V.dim == dim_div(W.dim, CURRENT)

    assert reg.get("C").dim == dim_mul(CURRENT, TIME)

    ohm = reg.get("Ω")
    assert ohm.dim == dim_div(V.dim, CURRENT)


def test_offset_temperatures(reg):
    degC = reg.get("°C")
    degF = reg.get("°F")
    assert degC.dim == TEMPERATURE and degF.dim == TEMPERATURE
    assert degC.offset == pytest.approx(273.15)
    assert not degF.is_linear
    assert degF.scale(degC.unscale(100.0)) == pytest.approx(212.0)


# ---------------------------------------------------------------------------
# Normalization & aliases
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("inp, expected", [
    ("um", "µm"),        # ASCII micro-prefix fallback at start
    ("uA", "µA"),
    ("μs", "µs"),   # Greek mu → micro sign
    ("ohm", "Ω"),
    ("Ohm", "Ω"),
    ("OHM", "Ω"),
    ("kohm", "kΩ"),
    ("  m  ", "m"),
])
def test_normalize_symbol(inp, expected):
    assert normalize_symbol(inp) == expected


def test_normalize_leaves_single_u_alone():
    assert normalize_symbol("u") == "u"
    assert normalize_symbol("") == ""


@pytest.mark.parametrize("inp, expected", [
    ("um", "µm"),
    ("uA", "µA"),
    ("ohm", "Ω"),
    ("Ohm", "Ω"),
    ("MOhm", "MΩ"),
])
def test_normalization_maps_to_canonical(inp, expected, reg):
    assert reg.get(inp) is reg.get(expected)


@pytest.mark.parametrize("alias, canonical", [
    ("meter", "m"),
    ("metre", "m"),
    ("sec", "s"),
    ("hour", "h"),
    ("celsius", "°C"),
    ("degF", "°F"),
    ("inch", "in"),
])
def test_builtin_aliases(alias, canonical, reg):
    assert reg.get(alias) is reg.get(canonical)


def test_alias_registration_custom(reg):
    reg.register_alias("ohms", "Ω")
    assert reg.get("ohms") is reg.get("Ω")
    assert reg.aliases()["ohms"] == "Ω"


def test_alias_to_unknown_unit_rejected(reg):
    with pytest.raises(ValueError):
        reg.register_alias("foo", "not-a-unit")


def test_alias_shadowing_unit_rejected(reg):
    with pytest.raises(ValueError):
        reg.register_alias("s", "m")
    # allowed when explicitly replacing
    reg.register_alias("s", "m", replace=True)


def test_alias_reserved_name_rejected(reg):
    with pytest.raises(ValueError):
        reg.register_alias("define", "m")


# ---------------------------------------------------------------------------
# Prefixed units
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("pref, base, factor", [
    ("k", "m", 1e3),
    ("M", "s", 1e6),
    ("µ", "A", 1e-6),
    ("n", "mol", 1e-9),
    ("c", "m", 1e-2),
    ("m", "g", 1e-3),
    ("k", "Ω", 1e3),
])
def test_prefixed_units_present(pref, base, factor, reg):
    base_u = reg.get(base)
    sym = f"{pref}{base}"
    u = reg.get(sym)
    assert u.name == sym
    assert u.dim == base_u.dim
    assert u.scale_to_si == pytest.approx(base_u.scale_to_si * factor)


def test_kg_is_the_base_not_a_prefixed_gram(reg):
    kg = reg.get("kg")
    assert kg.scale_to_si == 1.0
    assert reg.get("g").scale_to_si == pytest.approx(1e-3)


def test_prefixes_do_not_stack(reg):
    for sym in ("kkm", "mkm", "µkg"):
        assert not reg.has(sym)


# ---------------------------------------------------------------------------
# Registration rules
# ---------------------------------------------------------------------------

def test_register_new_unit(reg):
    furlong = LinearUnit("fur", 201.168, LENGTH)
    reg.register(furlong)
    assert reg.get("fur") is furlong
    assert "fur" in reg
    assert "fur" in reg.all()


def test_register_duplicate_rejected(reg):
    with pytest.raises(ValueError):
        reg.register(LinearUnit("m", 2.0, LENGTH))


def test_register_replace(reg):
    new_m = LinearUnit("m", 1.0, LENGTH)
    reg.register(new_m, replace=True)
    assert reg.get("m") is new_m


def test_register_name_clashing_with_alias_rejected(reg):
    with pytest.raises(ValueError):
        reg.register(LinearUnit("meter", 1.0, LENGTH))


def test_register_reserved_name_rejected(reg):
    with pytest.raises(ValueError):
        reg.register(LinearUnit("define", 1.0, LENGTH))


def test_unknown_symbol(reg):
    assert not reg.has("parsec")
    assert "parsec" not in reg
    with pytest.raises(ValueError, match="Unknown unit symbol"):
        reg.get("parsec")


def test_compound_expressions_are_not_parsed(reg):
    # compound units are built with unit algebra, not strings
    assert not reg.has("m/s")


def test_all_returns_a_copy(reg):
    snapshot = reg.all()
    snapshot["bogus"] = NUM
    assert not reg.has("bogus")


def test_registration_is_logged(reg, caplog):
    caplog.set_level(logging.DEBUG, logger="qvalue.units.registry")
    reg.register(LinearUnit("ly", 9.4607e15, LENGTH))
    assert any("'ly'" in r.getMessage() for r in caplog.records)


# ---------------------------------------------------------------------------
# Default registry
# ---------------------------------------------------------------------------

def test_default_registry_is_bootstrapped(ureg):
    assert isinstance(ureg, UnitsRegistry)
    assert ureg is regmod.DEFAULT_REGISTRY
    assert ureg.get("km").scale_to_si == pytest.approx(1000.0)


def test_bootstrap_returns_independent_registries():
    a = regmod._bootstrap_default_registry()
    b = regmod._bootstrap_default_registry()
    a.register(LinearUnit("fur", 201.168, LENGTH))
    assert a.has("fur")
    assert not b.has("fur")


# ---------------------------------------------------------------------------
# Thread-safety
# ---------------------------------------------------------------------------

def test_concurrent_registration_and_lookup(reg):
    errors = []

    def worker(i):
        try:
            reg.register(LinearUnit(f"unit{i}", float(i + 1), LENGTH))
            for _ in range(50):
                assert reg.get(f"unit{i}").scale_to_si == float(i + 1)
                reg.get("km")
        except Exception as e:  # pragma: no cover - only on failure
            errors.append(e)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(16)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert all(reg.has(f"unit{i}") for i in range(16))
