"""Persisted query history: a small JSON document under the data directory."""

import logging
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)


class HistoryDocument(BaseModel):
    """On-disk shape of the history file."""

    history: list[str] = Field(default_factory=list, description="Most recent first")


class HistoryStore:
    def __init__(self, path: Path):
        self.path = path

    def load(self) -> list[str]:
        if not self.path.exists():
            return []
        try:
            raw = self.path.read_text(encoding="utf-8")
            return HistoryDocument.model_validate_json(raw).history
        except (OSError, UnicodeDecodeError, ValidationError) as e:
            logger.warning("Ignoring unreadable history file %s: %s", self.path, e)
            return []

    def save(self, entries: list[str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(
            HistoryDocument(history=list(entries)).model_dump_json(indent=2),
            encoding="utf-8",
        )
        tmp.replace(self.path)
