"""Terminal front end: full-screen prompt_toolkit app driving the input dispatcher."""

import logging

from prompt_toolkit.application import Application
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.key_binding import KeyBindings, KeyPressEvent
from prompt_toolkit.keys import Keys
from prompt_toolkit.layout import HSplit, Layout, Window
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.styles import Style

from ballista.core.config import config
from ballista.core.logger import logger
from ballista.launcher.dispatcher import DisplaySnapshot, InputDispatcher, InputEvent

STYLE = Style.from_dict(
    {
        "prompt": "ansimagenta bold",
        "text": "",
        "preedit": "underline",
        "completion": "ansibrightblack",
        "selected": "reverse bold",
        "neighbour": "ansibrightblack",
        "kind": "ansicyan",
        "hint": "ansibrightblack italic",
        "status-ok": "ansigreen",
        "status-fail": "ansired",
    }
)

HINT = "  ←/→ browse · Tab complete · ↑/↓ history · Enter launch · Esc cancel"


def render_query_line(snap: DisplaySnapshot) -> FormattedText:
    fragments = [("class:prompt", "❯ "), ("class:text", snap.text)]
    if snap.composition:
        fragments.append(("class:preedit", snap.composition))
    typed = snap.text + snap.composition
    if snap.completion and snap.completion != typed:
        if snap.completion.lower().startswith(typed.lower()):
            fragments.append(("class:completion", snap.completion[len(typed):]))
        else:
            fragments.append(("class:completion", f"  → {snap.completion}"))
    return FormattedText(fragments)


def render_carousel(snap: DisplaySnapshot) -> FormattedText:
    if snap.selected_index < 0:
        if snap.text:
            return FormattedText([("class:hint", "  (no results)")])
        return FormattedText([("class:hint", HINT)])
    i = snap.selected_index
    current = snap.results[i]
    fragments = []
    if i > 0:
        fragments.append(("class:neighbour", f"  ‹ {snap.results[i - 1].name}  "))
    else:
        fragments.append(("", "    "))
    fragments.append(("class:selected", f" {current.name} "))
    if current.kind:
        fragments.append(("class:kind", f" ({current.kind})"))
    if i + 1 < len(snap.results):
        fragments.append(("class:neighbour", f"  {snap.results[i + 1].name} ›"))
    fragments.append(("class:hint", f"   {i + 1}/{len(snap.results)}"))
    return FormattedText(fragments)


def build_key_bindings(dispatcher: InputDispatcher, on_finished) -> KeyBindings:
    kb = KeyBindings()

    def _send(event_type: InputEvent, text: str = "") -> None:
        dispatcher.dispatch(event_type, text)

    @kb.add("c-c")
    @kb.add("c-q")
    def _quit(event: KeyPressEvent) -> None:
        event.app.exit()

    @kb.add("enter")
    def _commit(event: KeyPressEvent) -> None:
        _send(InputEvent.COMMIT)
        on_finished(event)

    @kb.add("escape", eager=True)
    def _cancel(event: KeyPressEvent) -> None:
        _send(InputEvent.CANCEL)
        on_finished(event)

    @kb.add("tab")
    def _tab(event: KeyPressEvent) -> None:
        _send(InputEvent.TAB)

    @kb.add("backspace")
    def _backspace(event: KeyPressEvent) -> None:
        _send(InputEvent.BACKSPACE)

    @kb.add("up")
    def _up(event: KeyPressEvent) -> None:
        _send(InputEvent.HISTORY_UP)

    @kb.add("down")
    def _down(event: KeyPressEvent) -> None:
        _send(InputEvent.HISTORY_DOWN)

    @kb.add("left")
    def _left(event: KeyPressEvent) -> None:
        _send(InputEvent.MOVE_LEFT)

    @kb.add("right")
    def _right(event: KeyPressEvent) -> None:
        _send(InputEvent.MOVE_RIGHT)

    @kb.add(Keys.BracketedPaste)
    def _paste(event: KeyPressEvent) -> None:
        _send(InputEvent.PASTE, event.data.replace("\r\n", "\n").rstrip("\n"))

    @kb.add(Keys.Any)
    def _character(event: KeyPressEvent) -> None:
        if event.data and event.data.isprintable():
            _send(InputEvent.CHARACTER, event.data)

    return kb


def run_tui(stay_open: bool = False) -> int:
    latest: list[DisplaySnapshot] = [DisplaySnapshot()]
    status: list[tuple[str, str]] = []
    app_ref: list[Application] = []

    def sink(snap: DisplaySnapshot) -> None:
        latest[0] = snap
        if app_ref:
            app_ref[0].invalidate()

    dispatcher = InputDispatcher.create(config, sink=sink)

    def on_finished(event: KeyPressEvent) -> None:
        outcome = dispatcher.last_activation
        dispatcher.last_activation = None
        if outcome is not None:
            status[:] = [
                ("class:status-ok", f"  launched {outcome.output}")
                if outcome.success
                else ("class:status-fail", f"  failed: {outcome.error}")
            ]
        if stay_open:
            dispatcher.show()
        else:
            event.app.exit(result=0 if outcome is None or outcome.success else 1)

    layout = Layout(
        HSplit(
            [
                Window(FormattedTextControl(lambda: render_query_line(latest[0]), show_cursor=False), height=1),
                Window(FormattedTextControl(lambda: render_carousel(latest[0])), height=1),
                Window(FormattedTextControl(lambda: FormattedText(status)), height=1),
            ]
        )
    )
    app: Application = Application(
        layout=layout,
        key_bindings=build_key_bindings(dispatcher, on_finished),
        style=STYLE,
        full_screen=False,
        erase_when_done=True,
    )
    app_ref.append(app)

    # Console log lines would tear the live display.
    logger.set_console_level(logging.ERROR)
    dispatcher.show()
    try:
        code = app.run()
    finally:
        dispatcher.close()
    return code if isinstance(code, int) else 0
