"""Launcher core: rank merge, carousel selection, query/history session."""

from ballista.launcher.dispatcher import DisplaySnapshot, InputDispatcher, InputEvent
from ballista.launcher.history_store import HistoryStore
from ballista.launcher.ranking import RankedResultList, build_ranked_list
from ballista.launcher.registry import ProviderRegistry, build_default_registry
from ballista.launcher.selection import SelectionState
from ballista.launcher.session import QuerySession

__all__ = [
    "DisplaySnapshot",
    "HistoryStore",
    "InputDispatcher",
    "InputEvent",
    "ProviderRegistry",
    "QuerySession",
    "RankedResultList",
    "SelectionState",
    "build_default_registry",
    "build_ranked_list",
]
