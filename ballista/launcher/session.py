"""Query text, input-method composition overlay and the recall history."""

from collections.abc import Iterable

DEFAULT_HISTORY_LIMIT = 50
DEFAULT_PATH_PREFIX = "~/"


class QuerySession:
    """Editable query plus a capped, most-recent-first history.

    ``text`` is the committed query. ``composition`` is in-progress input-method
    text shown after it. It becomes part of ``text`` when the input method
    commits it or when a further append, paste or backspace splices it in. It
    is never written to history while still composing.
    """

    def __init__(
        self,
        history: Iterable[str] = (),
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        path_prefix: str = DEFAULT_PATH_PREFIX,
    ) -> None:
        if history_limit < 1:
            raise ValueError(f"history_limit must be positive, got {history_limit}")
        self._limit = history_limit
        self._path_prefix = path_prefix
        self._text = ""
        self._composition = ""
        self._history: list[str] = list(history)[:history_limit]
        self._history_cursor = -1
        self._live_text = ""

    @property
    def text(self) -> str:
        return self._text

    @property
    def composition(self) -> str:
        return self._composition

    @property
    def visible_text(self) -> str:
        return self._text + self._composition

    @property
    def history(self) -> list[str]:
        return list(self._history)

    @property
    def history_cursor(self) -> int:
        return self._history_cursor

    @property
    def history_limit(self) -> int:
        return self._limit

    def _normalize(self, text: str) -> str:
        # Emptying a path down to the bare home prefix clears the field.
        return "" if text == self._path_prefix else text

    def set_text(self, text: str) -> None:
        self._text = text
        self._composition = ""

    def append(self, chars: str) -> None:
        self.set_text(self.visible_text + chars)

    def paste(self, clipboard: str) -> None:
        self.set_text(self.visible_text + clipboard)

    def backspace(self) -> None:
        self.set_text(self._normalize(self.visible_text[:-1]))

    def compose(self, commit: str = "", preedit: str = "", replacement_start: int = 0) -> None:
        """Apply an input-method update.

        ``replacement_start`` is zero or negative: that many committed characters
        before the cursor are replaced by ``commit``.
        """
        text = self._text
        if replacement_start < 0:
            text = text[: max(0, len(text) + replacement_start)]
        self._text = self._normalize(text + commit)
        self._composition = preedit

    def complete(self, completion: str) -> bool:
        """Replace the whole text with a non-empty completion."""
        if not completion:
            return False
        self.set_text(completion)
        return True

    def clear(self) -> None:
        self.set_text("")

    def push_history(self) -> None:
        """Record the committed text as the most recent entry; oldest falls off."""
        self._history_cursor = -1
        # Empty commits are not recorded.
        if not self._text:
            return
        self._history.insert(0, self._text)
        del self._history[self._limit :]

    def load_history(self, entries: Iterable[str]) -> None:
        self._history = [e for e in entries if isinstance(e, str)][: self._limit]
        self._history_cursor = -1

    def reset_recall(self) -> None:
        self._history_cursor = -1

    def history_up(self) -> bool:
        """Step to the next older entry; clamps at the oldest. Returns True if moved."""
        if self._history_cursor + 1 >= len(self._history):
            return False
        if self._history_cursor == -1:
            self._live_text = self._text
        self._history_cursor += 1
        self.set_text(self._history[self._history_cursor])
        return True

    def history_down(self) -> bool:
        """Step to the next newer entry, or back to the live text. Clamps at -1."""
        if self._history_cursor < 0:
            return False
        self._history_cursor -= 1
        if self._history_cursor >= 0:
            self.set_text(self._history[self._history_cursor])
        else:
            self.set_text(self._live_text)
        return True
