"""One-shot interface: rank a single query, print it, optionally launch the top result."""

from __future__ import annotations

from ballista.core.config import config
from ballista.launcher.dispatcher import InputDispatcher, InputEvent


def run_oneshot(query: str, launch: bool = False, dispatcher: InputDispatcher | None = None) -> int:
    text = (query or "").strip()
    if not text:
        print("Error: query must not be empty")
        return 2

    dispatcher = dispatcher or InputDispatcher.create(config)
    try:
        dispatcher.show()
        dispatcher.dispatch(InputEvent.PASTE, text)
        results = list(dispatcher.results)
        if not results:
            print("No results.")
            return 1
        for i, result in enumerate(results, start=1):
            marker = "▶" if i == 1 else " "
            kind = f" ({result.kind})" if result.kind else ""
            print(f"{marker} {i:2d}. {result.name}{kind}  [{result.provider}]")

        if not launch:
            return 0
        dispatcher.dispatch(InputEvent.COMMIT)
        outcome = dispatcher.last_activation
        if outcome is None or not outcome.success:
            print(f"Error: {outcome.error if outcome else 'nothing selected'}")
            return 1
        if outcome.output:
            print(outcome.output)
        return 0
    finally:
        dispatcher.close()
