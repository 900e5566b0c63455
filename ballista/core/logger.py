"""Structured logging: console plus a JSON-lines event file."""

import json
import logging
import os
import sys
import threading
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any

from ballista.core.config import config


def _format_duration(seconds: float) -> str:
    if seconds < 0:
        return "0ms"
    if seconds >= 1:
        return f"{seconds:.1f}s"
    ms = seconds * 1000
    if ms >= 1:
        return f"{ms:.0f}ms"
    if ms > 0:
        return "<1ms"
    return "0ms"


def _short_reason(reason: str | None, max_len: int = 80) -> str:
    """One-line short reason for console (failed provider or launch)."""
    if not reason or not reason.strip():
        return ""
    s = reason.strip().replace("\n", " ").strip()
    return s[:max_len] + "..." if len(s) > max_len else s


def _use_color() -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    try:
        return sys.stderr.isatty()
    except Exception:
        return False


def _c(role: str) -> str:
    if not _use_color():
        return ""
    # 38;5;N = foreground 256-color
    codes = {
        "dim": "\033[38;5;239m",
        "provider": "\033[38;5;81m",  # cyan for provider names
        "done_ok": "\033[38;5;78m",  # green for [ok]
        "done_fail": "\033[38;5;203m",  # red for [failed]
        "duration": "\033[38;5;221m",  # yellow for durations
        "query": "\033[38;5;246m",
    }
    return codes.get(role, "")


def _reset() -> str:
    if not _use_color():
        return ""
    return "\033[0m"


@dataclass
class LogEvent:
    event_type: str
    timestamp: str
    data: dict[str, Any]

    def to_dict(self) -> dict:
        return asdict(self)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)


class BallistaLogger:
    def __init__(self):
        config.logs_dir.mkdir(parents=True, exist_ok=True)
        self.log_file = config.logs_dir / "launcher.log"
        self._file_lock = threading.Lock()
        self._log_file_handle = open(self.log_file, "a", encoding="utf-8")
        self._setup_console_logger()

    def _setup_console_logger(self):
        self.console = logging.getLogger("ballista")
        self.console.setLevel(logging.DEBUG)
        self._console_formatter = logging.Formatter(
            "%(asctime)s │ %(message)s", datefmt="%H:%M:%S"
        )
        if not self.console.handlers:
            self._console_handler = logging.StreamHandler()
            self._console_handler.setLevel(
                getattr(logging, config.console_log_level, logging.INFO)
            )
            self._console_handler.setFormatter(self._console_formatter)
            self.console.addHandler(self._console_handler)
        else:
            self._console_handler = self.console.handlers[0]

    def set_console_level(self, level: int) -> None:
        """Full-screen front ends raise this so log lines don't tear the display."""
        self._console_handler.setLevel(level)

    def log_event(self, event: LogEvent) -> None:
        with self._file_lock:
            self._log_file_handle.write(event.to_json() + "\n")
            self._log_file_handle.flush()

    def _timestamp(self) -> str:
        return datetime.now().isoformat()

    def query_built(
        self,
        query: str,
        result_count: int,
        duration_seconds: float,
        failed_providers: list[str] | None = None,
    ):
        event = LogEvent(
            event_type="QUERY_BUILT",
            timestamp=self._timestamp(),
            data={
                "query": query[:200],
                "results": result_count,
                "failed_providers": failed_providers or [],
                "duration_seconds": round(duration_seconds, 4),
            },
        )
        self.log_event(event)
        dur = f"{_c('duration')}{_format_duration(duration_seconds)}{_reset()}"
        self.console.debug(
            f"{_c('query')}{query[:60]!r}{_reset()} → {result_count} results  {dur}"
        )

    def provider_failed(self, provider: str, exception: Exception):
        event = LogEvent(
            event_type="PROVIDER_FAILED",
            timestamp=self._timestamp(),
            data={"provider": provider, "exception": repr(exception)},
        )
        self.log_event(event)
        self.console.warning(
            f"⚠️ {_c('provider')}{provider}{_reset()} search failed: "
            f"{_short_reason(str(exception)) or type(exception).__name__}"
        )

    def activation(
        self,
        provider: str,
        name: str,
        success: bool,
        *,
        error_reason: str | None = None,
    ) -> None:
        data: dict[str, Any] = {"provider": provider, "name": name, "success": success}
        if not success and error_reason:
            data["error_reason"] = error_reason[:500]
        event = LogEvent(event_type="ACTIVATION", timestamp=self._timestamp(), data=data)
        self.log_event(event)
        if success:
            status_str = f"{_c('done_ok')}[ok]{_reset()}"
        else:
            status_str = f"{_c('done_fail')}[failed]{_reset()} {_short_reason(error_reason)}"
        self.console.info(
            f"▶ Launch  {_c('provider')}{provider}{_reset()}  {name}  {status_str}"
        )

    def history_saved(self, path: str, entries: int):
        event = LogEvent(
            event_type="HISTORY_SAVED",
            timestamp=self._timestamp(),
            data={"path": path, "entries": entries},
        )
        self.log_event(event)
        self.console.debug(f"History saved: {entries} entries → {path}")

    def error(self, message: str, *args, exception: Exception | None = None, **kwargs):
        event = LogEvent(
            event_type="ERROR",
            timestamp=self._timestamp(),
            data={
                "message": message,
                "exception": str(exception) if exception else None,
            },
        )
        self.log_event(event)

        # Filter kwargs for standard logger
        allowed = {"exc_info", "stack_info", "stacklevel", "extra"}
        log_kwargs = {k: v for k, v in kwargs.items() if k in allowed}
        if exception and "exc_info" not in log_kwargs:
            log_kwargs["exc_info"] = exception

        self.console.error(f"❌ Error: {message}", *args, **log_kwargs)

    def warning(self, message: str, *args, **kwargs):
        event = LogEvent(
            event_type="WARNING",
            timestamp=self._timestamp(),
            data={"message": message[:500]},
        )
        self.log_event(event)

        allowed = {"exc_info", "stack_info", "stacklevel", "extra"}
        log_kwargs = {k: v for k, v in kwargs.items() if k in allowed}
        self.console.warning(f"⚠️ {message}", *args, **log_kwargs)

    def debug(self, message: str, *args, **kwargs):
        event = LogEvent(
            event_type="DEBUG", timestamp=self._timestamp(), data={"message": message}
        )
        self.log_event(event)

        allowed = {"exc_info", "stack_info", "stacklevel", "extra"}
        log_kwargs = {k: v for k, v in kwargs.items() if k in allowed}
        self.console.debug(message, *args, **log_kwargs)


logger = BallistaLogger()
