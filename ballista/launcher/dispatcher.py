"""Input dispatcher: maps edit, navigation and commit events onto the session,
the ranked list and the selection, and publishes a display snapshot after each.
"""

from collections.abc import Callable
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from ballista.core.config import Config
from ballista.core.logger import logger
from ballista.launcher.history_store import HistoryStore
from ballista.launcher.ranking import RankedResultList, build_ranked_list
from ballista.launcher.registry import ProviderRegistry, build_default_registry
from ballista.launcher.selection import SelectionState
from ballista.launcher.session import QuerySession
from ballista.providers.models import ActivationResult, Result


class InputEvent(StrEnum):
    CHARACTER = "character"
    BACKSPACE = "backspace"
    PASTE = "paste"
    COMPOSE = "compose"
    TAB = "tab"
    COMMIT = "commit"
    CANCEL = "cancel"
    HISTORY_UP = "history_up"
    HISTORY_DOWN = "history_down"
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"


class DisplaySnapshot(BaseModel):
    """Read-only projection handed to the front end after every transition."""

    model_config = ConfigDict(frozen=True)

    text: str = ""
    composition: str = ""
    completion: str = ""
    selected_index: int = -1
    results: list[Result] = Field(default_factory=list)
    visible: bool = False


DisplaySink = Callable[[DisplaySnapshot], None]


class InputDispatcher:
    def __init__(
        self,
        registry: ProviderRegistry,
        session: QuerySession | None = None,
        store: HistoryStore | None = None,
        sink: DisplaySink | None = None,
    ):
        self.registry = registry
        self.session = session or QuerySession()
        self.store = store
        self._sink = sink
        self._results = RankedResultList()
        self._completion = ""
        self.selection = SelectionState(on_completion_changed=self._set_completion)
        self._visible = False
        self._processing = False
        self.last_activation: ActivationResult | None = None

    @classmethod
    def create(cls, cfg: Config, sink: DisplaySink | None = None) -> "InputDispatcher":
        """Build providers from config and load persisted history."""
        for problem in cfg.validate():
            logger.warning(problem)
        store = HistoryStore(cfg.history_file)
        session = QuerySession(
            history=store.load(),
            history_limit=cfg.history_limit,
            path_prefix=cfg.path_prefix,
        )
        return cls(build_default_registry(cfg), session=session, store=store, sink=sink)

    @property
    def results(self) -> RankedResultList:
        return self._results

    @property
    def completion(self) -> str:
        return self._completion

    @property
    def visible(self) -> bool:
        return self._visible

    @property
    def processing(self) -> bool:
        return self._processing

    def _set_completion(self, completion: str) -> None:
        self._completion = completion

    def snapshot(self) -> DisplaySnapshot:
        return DisplaySnapshot(
            text=self.session.text,
            composition=self.session.composition,
            completion=self._completion,
            selected_index=self.selection.index,
            results=list(self._results),
            visible=self._visible,
        )

    def _publish(self) -> None:
        if self._sink is not None:
            self._sink(self.snapshot())

    def _rebuild(self) -> None:
        self._results = build_ranked_list(self.registry, self.session.visible_text)
        self.selection.rebuild(self._results)

    def dispatch(
        self,
        event: InputEvent,
        text: str = "",
        *,
        preedit: str = "",
        replacement_start: int = 0,
    ) -> bool:
        """Handle one event to completion. Returns False if it was rejected."""
        if self._processing:
            logger.debug(f"Dropped re-entrant {event} while another event is in progress")
            return False
        self._processing = True
        try:
            self._handle(event, text, preedit, replacement_start)
        finally:
            self._processing = False
        self._publish()
        return True

    def _handle(self, event: InputEvent, text: str, preedit: str, replacement_start: int) -> None:
        session = self.session
        before = session.visible_text

        if event == InputEvent.CHARACTER:
            session.append(text)
        elif event == InputEvent.BACKSPACE:
            session.backspace()
        elif event == InputEvent.PASTE:
            session.paste(text)
        elif event == InputEvent.COMPOSE:
            session.compose(commit=text, preedit=preedit, replacement_start=replacement_start)
        elif event == InputEvent.TAB:
            session.complete(self.selection.completion())
        elif event == InputEvent.HISTORY_UP:
            session.history_up()
        elif event == InputEvent.HISTORY_DOWN:
            session.history_down()
        elif event == InputEvent.MOVE_LEFT:
            self.selection.move_left()
            return
        elif event == InputEvent.MOVE_RIGHT:
            self.selection.move_right()
            return
        elif event == InputEvent.COMMIT:
            self._commit()
            return
        elif event == InputEvent.CANCEL:
            self._hide()
            return
        else:
            raise ValueError(f"Unknown input event: {event!r}")

        if session.visible_text != before:
            self._rebuild()

    def _commit(self) -> None:
        self.session.push_history()
        selected = self.selection.selected()
        if selected is not None:
            self.last_activation = self.activate(selected)
        self._hide()

    def activate(self, result: Result) -> ActivationResult:
        """Route a result back to the provider that produced it."""
        provider = self.registry.get(result.provider)
        if provider is None:
            outcome = ActivationResult.fail(f"No provider registered as {result.provider!r}")
        else:
            try:
                outcome = provider.activate(result)
            except Exception as e:
                logger.error(f"Provider {result.provider} failed to activate {result.name!r}", exception=e)
                outcome = ActivationResult.fail(str(e) or type(e).__name__)
        logger.activation(result.provider, result.name, outcome.success, error_reason=outcome.error)
        return outcome

    def _hide(self) -> None:
        self.session.clear()
        self._results = RankedResultList()
        self.selection.clear()
        self._visible = False

    def show(self) -> None:
        self.session.reset_recall()
        self._visible = True
        self._publish()

    def hide(self) -> None:
        self._hide()
        self._publish()

    def toggle(self) -> None:
        if self._visible:
            self.hide()
        else:
            self.show()

    def close(self) -> None:
        """End of session: persist history."""
        if self.store is None:
            return
        try:
            self.store.save(self.session.history)
        except OSError as e:
            logger.error(f"Could not save history to {self.store.path}", exception=e)
            return
        logger.history_saved(str(self.store.path), len(self.session.history))
