"""Applications provider: desktop entries from the XDG application directories."""

import configparser
import re
import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path

from ballista.core.logger import logger
from ballista.providers.interface import Provider
from ballista.providers.models import ActivationResult, Result

PREFIX_PRIORITY_BASE = 10
SUBSTRING_PRIORITY_BASE = 200

_FIELD_CODE = re.compile(r"%[fFuUdDnNickvm]")


@dataclass
class DesktopEntry:
    name: str
    exec_line: str
    icon: str = ""
    comment: str = ""
    terminal: bool = False
    path: Path | None = None


def parse_desktop_file(path: Path) -> DesktopEntry | None:
    """Parse the [Desktop Entry] group; None for hidden, non-application or broken files."""
    parser = configparser.ConfigParser(interpolation=None, strict=False)
    parser.optionxform = str
    try:
        parser.read(path, encoding="utf-8")
    except (configparser.Error, UnicodeDecodeError, OSError) as e:
        logger.debug(f"applications: skipping {path.name}: {e}")
        return None
    if not parser.has_section("Desktop Entry"):
        return None
    section = parser["Desktop Entry"]
    if section.get("Type", "Application") != "Application":
        return None
    if section.get("NoDisplay", "false").lower() == "true" or section.get("Hidden", "false").lower() == "true":
        return None
    name = section.get("Name", "").strip()
    exec_line = section.get("Exec", "").strip()
    if not name or not exec_line:
        return None
    return DesktopEntry(
        name=name,
        exec_line=exec_line,
        icon=section.get("Icon", ""),
        comment=section.get("Comment", ""),
        terminal=section.get("Terminal", "false").lower() == "true",
        path=path,
    )


def exec_argv(exec_line: str) -> list[str]:
    """Split an Exec line and drop the desktop-entry field codes."""
    argv = []
    for word in shlex.split(exec_line):
        word = _FIELD_CODE.sub("", word).replace("%%", "%")
        if word:
            argv.append(word)
    return argv


class ApplicationsProvider(Provider):
    def __init__(self, directories: list[Path], terminal: str = "xterm", max_results: int = 20):
        self._directories = directories
        self._terminal = terminal
        self._max_results = max_results
        self._entries: list[DesktopEntry] | None = None

    def _load_entries(self) -> list[DesktopEntry]:
        if self._entries is not None:
            return self._entries
        entries: dict[str, DesktopEntry] = {}
        for directory in self._directories:
            if not directory.is_dir():
                continue
            for path in sorted(directory.rglob("*.desktop")):
                # Earlier directories (user data home) shadow later ones.
                desktop_id = str(path.relative_to(directory)).replace("/", "-")
                if desktop_id in entries:
                    continue
                entry = parse_desktop_file(path)
                if entry is not None:
                    entries[desktop_id] = entry
        self._entries = list(entries.values())
        logger.debug(f"applications: loaded {len(self._entries)} desktop entries")
        return self._entries

    def search(self, query: str) -> list[Result]:
        needle = (query or "").strip().lower()
        if not needle:
            return []
        results = []
        for entry in self._load_entries():
            haystack = entry.name.lower()
            position = haystack.find(needle)
            if position < 0:
                continue
            if position == 0:
                priority = PREFIX_PRIORITY_BASE + len(haystack) - len(needle)
            else:
                priority = SUBSTRING_PRIORITY_BASE + position
            results.append(
                Result(
                    name=entry.name,
                    completion=entry.name,
                    icon=entry.icon,
                    priority=priority,
                    kind="application",
                    payload=entry,
                )
            )
        results.sort(key=lambda r: r.priority)
        return results[: self._max_results]

    def activate(self, result: Result) -> ActivationResult:
        entry: DesktopEntry = result.payload
        try:
            argv = exec_argv(entry.exec_line)
        except ValueError as e:
            return ActivationResult.fail(f"Malformed Exec line for {entry.name}: {e}")
        if not argv:
            return ActivationResult.fail(f"Empty Exec line for {entry.name}")
        if entry.terminal:
            argv = [self._terminal, "-e", *argv]
        try:
            subprocess.Popen(
                argv,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as e:
            return ActivationResult.fail(f"Could not start {entry.name}: {e}")
        return ActivationResult.ok(" ".join(argv))

    def get_provider_name(self) -> str:
        return "applications"
