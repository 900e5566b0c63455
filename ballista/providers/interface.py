"""Standard interface for launcher providers.

Every data source (applications, paths, shell, calculator, units) implements
Provider: ``search`` turns a query into ranked Results, ``activate`` runs one.
"""

from abc import ABC, abstractmethod

from ballista.providers.models import ActivationResult, Result


class Provider(ABC):
    """Base class for all providers."""

    @abstractmethod
    def search(self, query: str) -> list[Result]:
        """Return candidates for the query. Must return promptly."""

    @abstractmethod
    def activate(self, result: Result) -> ActivationResult:
        """Execute a result this provider returned earlier."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Default registry key."""
