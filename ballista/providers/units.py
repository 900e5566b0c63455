"""Unit conversion provider: ``<number> <unit> to|in <unit>``."""

import re

from ballista.providers.calculator import format_number
from ballista.providers.interface import Provider
from ballista.providers.models import ActivationResult, Result

# Factors to the base unit of each dimension.
LINEAR_UNITS: dict[str, dict[str, float]] = {
    "length": {
        "mm": 0.001, "cm": 0.01, "m": 1.0, "km": 1000.0,
        "in": 0.0254, "ft": 0.3048, "yd": 0.9144, "mi": 1609.344,
    },
    "mass": {
        "mg": 1e-6, "g": 0.001, "kg": 1.0, "t": 1000.0,
        "oz": 0.028349523125, "lb": 0.45359237,
    },
    "time": {
        "ms": 0.001, "s": 1.0, "min": 60.0, "h": 3600.0, "d": 86400.0, "wk": 604800.0,
    },
    "data": {
        "b": 1.0, "kb": 1e3, "mb": 1e6, "gb": 1e9, "tb": 1e12,
        "kib": 1024.0, "mib": 1024.0**2, "gib": 1024.0**3, "tib": 1024.0**4,
    },
}

ALIASES = {
    "meter": "m", "meters": "m", "metre": "m", "metres": "m",
    "kilometer": "km", "kilometers": "km", "mile": "mi", "miles": "mi",
    "inch": "in", "inches": "in", "foot": "ft", "feet": "ft", "yard": "yd", "yards": "yd",
    "gram": "g", "grams": "g", "kilogram": "kg", "kilograms": "kg", "kilo": "kg", "kilos": "kg",
    "pound": "lb", "pounds": "lb", "lbs": "lb", "ounce": "oz", "ounces": "oz",
    "sec": "s", "second": "s", "seconds": "s", "minute": "min", "minutes": "min",
    "hour": "h", "hours": "h", "day": "d", "days": "d", "week": "wk", "weeks": "wk",
    "byte": "b", "bytes": "b",
    "celsius": "c", "°c": "c", "fahrenheit": "f", "°f": "f", "kelvin": "k",
}

TEMPERATURE_UNITS = ("c", "f", "k")

_QUERY = re.compile(
    r"^\s*(?P<value>-?\d+(?:\.\d+)?)\s*(?P<src>[a-z°]+)\s+(?:to|in)\s+(?P<dst>[a-z°]+)\s*$",
    re.IGNORECASE,
)


def _normalize(unit: str) -> str:
    unit = unit.lower()
    return ALIASES.get(unit, unit)


def _to_kelvin(value: float, unit: str) -> float:
    if unit == "c":
        return value + 273.15
    if unit == "f":
        return (value - 32) * 5 / 9 + 273.15
    return value


def _from_kelvin(value: float, unit: str) -> float:
    if unit == "c":
        return value - 273.15
    if unit == "f":
        return (value - 273.15) * 9 / 5 + 32
    return value


def convert(value: float, src: str, dst: str) -> float | None:
    """Convert between two units of the same dimension, or None if incompatible."""
    src, dst = _normalize(src), _normalize(dst)
    if src in TEMPERATURE_UNITS and dst in TEMPERATURE_UNITS:
        return _from_kelvin(_to_kelvin(value, src), dst)
    for factors in LINEAR_UNITS.values():
        if src in factors and dst in factors:
            return value * factors[src] / factors[dst]
    return None


class UnitsProvider(Provider):
    def search(self, query: str) -> list[Result]:
        match = _QUERY.match(query or "")
        if not match:
            return []
        value = float(match.group("value"))
        converted = convert(value, match.group("src"), match.group("dst"))
        if converted is None:
            return []
        text = format_number(round(converted, 6))
        dst = match.group("dst")
        return [
            Result(
                name=f"{format_number(value)} {match.group('src')} = {text} {dst}",
                completion=text,
                icon="accessories-calculator",
                priority=0,
                kind="conversion",
                payload=f"{text} {dst}",
            )
        ]

    def activate(self, result: Result) -> ActivationResult:
        return ActivationResult.ok(str(result.payload))

    def get_provider_name(self) -> str:
        return "units"
