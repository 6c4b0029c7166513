import math
from dataclasses import FrozenInstanceError

import pytest

from qvalue.core.dimensions import LENGTH, TEMPERATURE, TIME, Dimension
from qvalue.core.quantity import QuantityValue
from qvalue.core.unit import LinearUnit, Unit


# -------------------------------
# Construction & validation
# -------------------------------

def test_linear_unit_fields(u):
    km = u.km
    assert km.name == "km"
    assert km.scale_to_si == pytest.approx(1000.0)
    assert km.dim == LENGTH
    assert km.offset == 0.0
    assert km.is_linear


def test_dim_is_coerced_to_dimension():
    furlong = LinearUnit("fur", 201.168, (1, 0, 0, 0, 0, 0, 0))
    assert isinstance(furlong.dim, Dimension)
    assert furlong.dim == LENGTH


@pytest.mark.parametrize("scale", [0.0, -1.0, math.inf, math.nan])
def test_invalid_scale_rejected(scale):
    with pytest.raises(ValueError):
        LinearUnit("bad", scale, LENGTH)


@pytest.mark.parametrize("offset", [math.inf, math.nan])
def test_invalid_offset_rejected(offset):
    with pytest.raises(ValueError):
        LinearUnit("bad", 1.0, TEMPERATURE, offset=offset)


def test_units_are_frozen(u):
    with pytest.raises(FrozenInstanceError):
        u.m.name = "meter"


# -------------------------------
# The scale/unscale contract
# -------------------------------

@pytest.mark.parametrize("sym, display, raw", [
    ("m", 3.0, 3.0),
    ("km", 2.0, 2000.0),
    ("cm", 50.0, 0.5),
    ("min", 2.0, 120.0),
    ("ft", 1.0, 0.3048),
])
def test_scale_unscale_linear(u, sym, display, raw):
    unit = u(sym)
    assert unit.unscale(display) == pytest.approx(raw)
    assert unit.scale(raw) == pytest.approx(display)


def test_offset_unit_scale_unscale(u):
    degC = u("°C")
    assert not degC.is_linear
    assert degC.unscale(0.0) == pytest.approx(273.15)
    assert degC.scale(273.15) == pytest.approx(0.0)
    assert degC.scale(degC.unscale(21.5)) == pytest.approx(21.5)


def test_fahrenheit_zero_point(u):
    degF = u("°F")
    assert degF.unscale(32.0) == pytest.approx(273.15)
    assert degF.unscale(212.0) == pytest.approx(373.15)


def test_catalog_units_satisfy_protocol(u):
    for sym in ("m", "km", "°C", "N", "1"):
        assert isinstance(u(sym), Unit)


def test_str_is_symbol(u):
    assert str(u.km) == "km"
    assert str(u("°C")) == "°C"


# -------------------------------
# Convertibility
# -------------------------------

def test_is_convertible_by_dimension(u):
    assert u.km.is_convertible(u.m)
    assert u.m.is_convertible(u.mi)
    assert u("°C").is_convertible(u.K)
    assert not u.m.is_convertible(u.s)
    assert not u.kg.is_convertible(u.g ** 2)


def test_is_convertible_is_symmetric(u):
    pairs = [(u.km, u.ft), (u.h, u.s), (u.N, u.kg * u.m / u.s ** 2), (u.m, u.s)]
    for a, b in pairs:
        assert a.is_convertible(b) == b.is_convertible(a)


# -------------------------------
# number * unit
# -------------------------------

def test_number_times_unit_builds_quantity(u):
    q = 5 * u.km
    assert isinstance(q, QuantityValue)
    assert q.unit is u.km
    assert q.raw == pytest.approx(5000.0)
    assert q.value == pytest.approx(5.0)


def test_bool_times_unit_rejected(u):
    with pytest.raises(TypeError):
        True * u.m


def test_unit_times_string_rejected(u):
    with pytest.raises(TypeError):
        u.m * "s"


def test_time_units_chain(u):
    assert (1 * u.d).to(u.h).value == pytest.approx(24.0)
    assert (90 * u.min).to(u.h).value == pytest.approx(1.5)
    assert (1 * u.h).dim == TIME
