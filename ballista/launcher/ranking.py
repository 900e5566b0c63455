"""Rank merge: folds every provider's results into one priority-ordered list.

The merged order is a stable sort by priority: lower priority first, and among
equal priorities the arrival order (provider registration order, then each
provider's own return order) is kept.
"""

import time
from bisect import bisect_right
from collections.abc import Iterator
from operator import attrgetter

from ballista.core.logger import logger
from ballista.launcher.registry import ProviderRegistry
from ballista.providers.models import Result

_priority = attrgetter("priority")


class RankedResultList:
    """Ordered Results, non-decreasing in priority. Rebuilt, never patched, per query."""

    def __init__(self) -> None:
        self._items: list[Result] = []

    def insert_sorted(self, result: Result) -> int:
        """Insert after every result with priority <= result.priority; return the index.

        bisect_right keeps equal priorities in arrival order, lands a new minimum at
        0 and a new maximum at len(), and returns 0 for an empty list.
        """
        index = bisect_right(self._items, result.priority, key=_priority)
        self._items.insert(index, result)
        return index

    def priorities(self) -> list[int]:
        return [r.priority for r in self._items]

    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> Result:
        return self._items[index]

    def __iter__(self) -> Iterator[Result]:
        return iter(self._items)

    def __repr__(self) -> str:
        return f"RankedResultList({[(r.name, r.priority) for r in self._items]!r})"


def build_ranked_list(registry: ProviderRegistry, query: str) -> RankedResultList:
    """Query every provider in registration order and merge the answers.

    A provider that raises, even part way through yielding, or that hands back
    anything other than Results contributes nothing; the others are still merged.
    """
    ranked = RankedResultList()
    if not query:
        return ranked

    start = time.monotonic()
    failed: list[str] = []
    for name, provider in registry.items():
        try:
            # Drain lazy results here so a mid-iteration failure stays isolated.
            results = list(provider.search(query) or [])
            for result in results:
                if not isinstance(result, Result):
                    raise TypeError(f"{name} returned {type(result).__name__}, expected Result")
        except Exception as e:
            logger.provider_failed(name, e)
            failed.append(name)
            continue
        for result in results:
            stamped = result.model_copy(update={"provider": name})
            index = ranked.insert_sorted(stamped)
            logger.console.debug(f"  {name}: {stamped.name!r} priority={stamped.priority} → #{index}")

    logger.query_built(query, len(ranked), time.monotonic() - start, failed_providers=failed)
    return ranked
