# qvalue/units/prefixes.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Prefix:
    symbol: str
    factor: float
    name: str


PREFIXES: tuple[Prefix, ...] = (
    Prefix("T", 1e12, "tera"),
    Prefix("G", 1e9, "giga"),
    Prefix("M", 1e6, "mega"),
    Prefix("k", 1e3, "kilo"),
    Prefix("h", 1e2, "hecto"),
    Prefix("da", 1e1, "deca"),
    Prefix("d", 1e-1, "deci"),
    Prefix("c", 1e-2, "centi"),
    Prefix("m", 1e-3, "milli"),
    Prefix("µ", 1e-6, "micro"),
    Prefix("n", 1e-9, "nano"),
    Prefix("p", 1e-12, "pico"),
)

__all__ = ["Prefix", "PREFIXES"]
