import shutil
import time

import pytest

from ballista.launcher.dispatcher import InputDispatcher, InputEvent
from ballista.launcher.registry import ProviderRegistry
from ballista.providers import PathsProvider, ShellProvider


def _wait_for(predicate, timeout: float = 5.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.05)
    return False


@pytest.mark.skipif(shutil.which("touch") is None, reason="needs touch on PATH")
def test_shell_command_is_launched_detached(tmp_path):
    target = tmp_path / "launched"
    registry = ProviderRegistry()
    registry.register(ShellProvider(shell="/bin/sh"))
    dispatcher = InputDispatcher(registry)

    dispatcher.dispatch(InputEvent.PASTE, f"touch {target}")
    dispatcher.dispatch(InputEvent.COMMIT)

    assert dispatcher.last_activation.success
    assert _wait_for(target.exists)


def test_paths_tab_completion_against_real_directory(tmp_path):
    (tmp_path / "projects").mkdir()
    registry = ProviderRegistry()
    registry.register(PathsProvider())
    dispatcher = InputDispatcher(registry)

    dispatcher.dispatch(InputEvent.PASTE, f"{tmp_path}/pro")
    dispatcher.dispatch(InputEvent.TAB)

    assert dispatcher.session.text == f"{tmp_path}/projects/"
