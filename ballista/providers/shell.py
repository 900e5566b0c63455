"""Shell provider: runs the query as a command line when it names an executable."""

import shlex
import shutil
import subprocess

from ballista.providers.interface import Provider
from ballista.providers.models import ActivationResult, Result

SHELL_PRIORITY = 100


class ShellProvider(Provider):
    def __init__(self, shell: str = "/bin/sh"):
        self._shell = shell

    def search(self, query: str) -> list[Result]:
        command = (query or "").strip()
        if not command:
            return []
        try:
            words = shlex.split(command)
        except ValueError:
            # Unbalanced quotes while the user is still typing.
            words = command.split()
        if not words:
            return []
        executable = shutil.which(words[0])
        if executable is None:
            return []
        return [
            Result(
                name=command,
                completion="",
                icon="utilities-terminal",
                priority=SHELL_PRIORITY,
                kind="command",
                payload=command,
            )
        ]

    def activate(self, result: Result) -> ActivationResult:
        command = str(result.payload)
        try:
            subprocess.Popen(
                [self._shell, "-c", command],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as e:
            return ActivationResult.fail(f"Could not start {self._shell}: {e}")
        return ActivationResult.ok(command)

    def get_provider_name(self) -> str:
        return "shell"
