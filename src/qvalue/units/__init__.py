from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover - typing aid only
    from qvalue.units.registry import UnitsRegistry

# Lazy access helpers -------------------------------------------------------

def _get_default_registry() -> "UnitsRegistry":
    # Import here to avoid import-time side-effects / circular imports.
    from qvalue.units.registry import DEFAULT_REGISTRY
    return DEFAULT_REGISTRY

def __getattr__(name: str) -> Any:
    """
    Lazy attribute access. ``u`` is a namespace over the package's default
    registry, built on first use; ``NUM`` is the canonical dimensionless unit.
    """
    if name == "u":
        return _get_default_registry().as_namespace()
    if name == "NUM":
        from qvalue.units.registry import NUM
        return NUM
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + ["u", "NUM"])
