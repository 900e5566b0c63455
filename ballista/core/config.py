"""Configuration from environment variables (.env)."""

import os
from pathlib import Path
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

KNOWN_PROVIDERS = ("applications", "paths", "shell", "calculator", "units")


def _split_list(raw: str, sep: str = ",") -> list[str]:
    return [item.strip() for item in raw.split(sep) if item.strip()]


def _default_application_dirs() -> list[Path]:
    data_home = os.getenv("XDG_DATA_HOME") or str(Path.home() / ".local" / "share")
    data_dirs = _split_list(os.getenv("XDG_DATA_DIRS", "/usr/local/share:/usr/share"), ":")
    return [Path(d) / "applications" for d in [data_home, *data_dirs]]


@dataclass
class Config:
    project_root: Path
    data_dir: Path
    logs_dir: Path
    history_file: Path
    history_limit: int
    path_prefix: str
    providers: list[str]  # Registration order is also the tie-break order
    provider_timeout: float
    max_results_per_provider: int
    application_dirs: list[Path]
    shell: str
    terminal: str
    opener: str
    console_log_level: str

    @classmethod
    def load(cls) -> "Config":
        project_root = Path(__file__).parent.parent.parent
        data_dir = Path(os.getenv("LAUNCHER_DATA_DIR", str(project_root / "data")))
        app_dirs = os.getenv("LAUNCHER_APPLICATION_DIRS", "")
        return cls(
            project_root=project_root,
            data_dir=data_dir,
            logs_dir=Path(os.getenv("LAUNCHER_LOGS_DIR", str(project_root / "logs"))),
            history_file=data_dir / "history.json",
            history_limit=int(os.getenv("LAUNCHER_HISTORY_LIMIT", "50")),
            path_prefix=os.getenv("LAUNCHER_PATH_PREFIX", "~/"),
            providers=_split_list(os.getenv("LAUNCHER_PROVIDERS", ",".join(KNOWN_PROVIDERS))),
            provider_timeout=float(os.getenv("LAUNCHER_PROVIDER_TIMEOUT", "0.5")),
            max_results_per_provider=int(os.getenv("LAUNCHER_MAX_RESULTS", "20")),
            application_dirs=[Path(d) for d in _split_list(app_dirs, ":")] or _default_application_dirs(),
            shell=os.getenv("LAUNCHER_SHELL", os.getenv("SHELL", "/bin/sh")),
            terminal=os.getenv("LAUNCHER_TERMINAL", "xterm"),
            opener=os.getenv("LAUNCHER_OPENER", "xdg-open"),
            console_log_level=os.getenv("LAUNCHER_CONSOLE_LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> list[str]:
        errors = []
        unknown = [p for p in self.providers if p not in KNOWN_PROVIDERS]
        if unknown:
            errors.append(f"Unknown providers in LAUNCHER_PROVIDERS: {', '.join(unknown)}")
        if not self.providers:
            errors.append("LAUNCHER_PROVIDERS is empty; nothing to search")
        if self.history_limit < 1:
            errors.append(f"LAUNCHER_HISTORY_LIMIT must be positive, got {self.history_limit}")
        if self.max_results_per_provider < 1:
            errors.append(f"LAUNCHER_MAX_RESULTS must be positive, got {self.max_results_per_provider}")
        if self.provider_timeout <= 0:
            errors.append(f"LAUNCHER_PROVIDER_TIMEOUT must be positive, got {self.provider_timeout}")
        return errors


config = Config.load()
