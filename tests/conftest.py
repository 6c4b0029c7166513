# tests/conftest.py
import pytest
from qvalue.units.registry import DEFAULT_REGISTRY as _ureg
from qvalue.units.registry import _bootstrap_default_registry


@pytest.fixture(scope="session")
def ureg():
    return _ureg


@pytest.fixture()
def reg():
    """Fresh, fully-bootstrapped UnitsRegistry for isolation per test."""
    return _bootstrap_default_registry()


@pytest.fixture(scope="session")
def u(ureg):
    return ureg.as_namespace()
