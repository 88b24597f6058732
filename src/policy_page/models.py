"""Domain models for policy rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class RenderStatus(str, Enum):
    LOADED = "loaded"
    FALLBACK = "fallback"
    REDIRECT = "redirect"
    ERROR = "error"


class ContentSource(str, Enum):
    PRIMARY = "primary"
    EMBEDDED = "embedded"


@dataclass(slots=True)
class RenderOutcome:
    """What ends up in the content container for one page view."""

    run_id: str
    status: RenderStatus
    html: str
    source: ContentSource | None = None
    redirect_url: str | None = None
    error_code: str | None = None
    warnings: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status in (RenderStatus.LOADED, RenderStatus.FALLBACK)


@dataclass(slots=True)
class SiteResult:
    """Result metadata for a page written to disk."""

    outcome: RenderOutcome
    output_path: Path
    summary: str


__all__ = ["ContentSource", "RenderOutcome", "RenderStatus", "SiteResult"]
