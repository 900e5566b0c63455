"""Filesystem path provider: completes absolute and home-relative paths."""

import os
import subprocess
import time
from pathlib import Path

from ballista.core.logger import logger
from ballista.providers.interface import Provider
from ballista.providers.models import ActivationResult, Result

PATH_PRIORITY_BASE = 50


class PathsProvider(Provider):
    def __init__(self, opener: str = "xdg-open", max_results: int = 20, timeout: float = 0.5):
        self._opener = opener
        self._max_results = max_results
        self._timeout = timeout

    def search(self, query: str) -> list[Result]:
        if not query or query[0] not in ("/", "~"):
            return []
        typed_dir, sep, partial = query.rpartition("/")
        if not sep:
            # "~user" style without a slash: nothing to list yet.
            return []
        typed_dir += "/"
        directory = Path(os.path.expanduser(typed_dir))
        if not directory.is_dir():
            return []

        deadline = time.monotonic() + self._timeout
        matches: list[tuple[str, bool]] = []
        try:
            with os.scandir(directory) as it:
                for entry in it:
                    if time.monotonic() > deadline:
                        logger.debug(f"paths: listing {directory} hit the time budget")
                        break
                    name = entry.name
                    if not name.startswith(partial):
                        continue
                    if name.startswith(".") and not partial.startswith("."):
                        continue
                    try:
                        is_dir = entry.is_dir()
                    except OSError:
                        is_dir = False
                    matches.append((name, is_dir))
        except OSError as e:
            logger.debug(f"paths: cannot list {directory}: {e}")
            return []

        matches.sort(key=lambda m: (len(m[0]), m[0].lower()))
        results = []
        for name, is_dir in matches[: self._max_results]:
            typed = typed_dir + name + ("/" if is_dir else "")
            results.append(
                Result(
                    name=name + ("/" if is_dir else ""),
                    completion=typed,
                    icon="folder" if is_dir else "text-x-generic",
                    priority=PATH_PRIORITY_BASE + len(name) - len(partial),
                    kind="directory" if is_dir else "file",
                    payload=str(directory / name),
                )
            )
        return results

    def activate(self, result: Result) -> ActivationResult:
        path = str(result.payload)
        try:
            subprocess.Popen(
                [self._opener, path],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as e:
            return ActivationResult.fail(f"Could not open {path} with {self._opener}: {e}")
        return ActivationResult.ok(path)

    def get_provider_name(self) -> str:
        return "paths"
