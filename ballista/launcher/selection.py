"""Carousel selection over the ranked result list.

States are ``Empty`` (index -1) and ``Positioned(i)`` with ``0 <= i < len``.
Moves clamp at both ends instead of wrapping, so the index can never leave
that range. Every position change reports the new completion text to the
listener; no-op moves report nothing.
"""

from collections.abc import Callable, Sequence

from ballista.providers.models import Result

CompletionListener = Callable[[str], None]


class SelectionState:
    def __init__(self, on_completion_changed: CompletionListener | None = None) -> None:
        self._results: Sequence[Result] = ()
        self._index = -1
        self._on_completion_changed = on_completion_changed

    @property
    def index(self) -> int:
        return self._index

    @property
    def is_empty(self) -> bool:
        return self._index < 0

    @property
    def length(self) -> int:
        return len(self._results)

    def selected(self) -> Result | None:
        if self._index < 0:
            return None
        return self._results[self._index]

    def completion(self) -> str:
        current = self.selected()
        return current.completion if current is not None else ""

    def rebuild(self, results: Sequence[Result]) -> None:
        """Adopt a freshly built list: first entry selected, or Empty."""
        self._results = results
        self._index = 0 if len(results) > 0 else -1
        self._emit()

    def clear(self) -> None:
        self.rebuild(())

    def move_right(self) -> bool:
        if self._index < 0 or self._index + 1 >= len(self._results):
            return False
        self._index += 1
        self._emit()
        return True

    def move_left(self) -> bool:
        if self._index < 1:
            return False
        self._index -= 1
        self._emit()
        return True

    def _emit(self) -> None:
        if self._on_completion_changed is not None:
            self._on_completion_changed(self.completion())
