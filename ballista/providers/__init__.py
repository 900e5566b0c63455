from ballista.providers.applications import ApplicationsProvider
from ballista.providers.calculator import CalculatorProvider
from ballista.providers.interface import Provider
from ballista.providers.models import UNRANKED, ActivationResult, Result
from ballista.providers.paths import PathsProvider
from ballista.providers.shell import ShellProvider
from ballista.providers.units import UnitsProvider

__all__ = [
    "Provider",
    "Result",
    "ActivationResult",
    "UNRANKED",
    "ApplicationsProvider",
    "PathsProvider",
    "ShellProvider",
    "CalculatorProvider",
    "UnitsProvider",
]
