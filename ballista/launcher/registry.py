"""Provider registry: ordered name → provider mapping, fixed once the session starts."""

import logging

from ballista.core.config import Config
from ballista.providers import (
    ApplicationsProvider,
    CalculatorProvider,
    PathsProvider,
    Provider,
    ShellProvider,
    UnitsProvider,
)

logger = logging.getLogger(__name__)


class ProviderRegistry:
    """Registration order is the tie-break order for equal-priority results."""

    def __init__(self) -> None:
        self._providers: dict[str, Provider] = {}

    def register(self, provider: Provider, name: str | None = None) -> None:
        if not isinstance(provider, Provider):
            raise TypeError(f"Expected Provider instance, got {type(provider)}")
        key = name or provider.get_provider_name()
        if key in self._providers:
            raise ValueError(f"Provider already registered: {key}")
        self._providers[key] = provider
        logger.info("Registered provider: %s (%s)", key, type(provider).__name__)

    def get(self, name: str) -> Provider | None:
        return self._providers.get(name)

    def names(self) -> list[str]:
        return list(self._providers.keys())

    def items(self) -> list[tuple[str, Provider]]:
        return list(self._providers.items())

    def __len__(self) -> int:
        return len(self._providers)

    def __contains__(self, name: object) -> bool:
        return name in self._providers


def build_default_registry(cfg: Config) -> ProviderRegistry:
    """Instantiate the configured providers in LAUNCHER_PROVIDERS order."""
    factories = {
        "applications": lambda: ApplicationsProvider(
            cfg.application_dirs, terminal=cfg.terminal, max_results=cfg.max_results_per_provider
        ),
        "paths": lambda: PathsProvider(
            opener=cfg.opener, max_results=cfg.max_results_per_provider, timeout=cfg.provider_timeout
        ),
        "shell": lambda: ShellProvider(shell=cfg.shell),
        "calculator": CalculatorProvider,
        "units": UnitsProvider,
    }
    registry = ProviderRegistry()
    for name in cfg.providers:
        factory = factories.get(name)
        if factory is None:
            logger.warning("Unknown provider %r in configuration, skipping", name)
            continue
        registry.register(factory(), name=name)
    return registry
