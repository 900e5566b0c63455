"""Result and activation models shared by providers and the launcher core."""

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Sentinel for results the provider did not rank (sorts last).
UNRANKED = 2**31 - 1


class Result(BaseModel):
    """One candidate returned by a provider for the current query."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Display name")
    completion: str = Field(default="", description="Text that Tab puts into the query field")
    icon: str = Field(default="", description="Icon theme name or path")
    priority: int = Field(default=UNRANKED, description="Lower is more relevant")
    kind: str = Field(default="", description="Short type label, e.g. 'application'")
    payload: Any = Field(default=None, description="Provider-owned data used on activation")
    provider: str = Field(default="", description="Registry key of the originating provider")


@dataclass
class ActivationResult:
    success: bool
    output: str = ""
    error: str = ""

    @classmethod
    def ok(cls, output: str = "") -> "ActivationResult":
        return cls(success=True, output=output)

    @classmethod
    def fail(cls, error: str) -> "ActivationResult":
        return cls(success=False, error=error)
