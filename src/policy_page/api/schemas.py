from __future__ import annotations

from pydantic import BaseModel

from ..theme import Theme


class HealthStatus(BaseModel):
    status: str
    version: str


class ConvertRequest(BaseModel):
    markdown: str
    decorate: bool = True


class ConvertResponse(BaseModel):
    html: str


class ContentResponse(BaseModel):
    run_id: str
    status: str
    source: str | None = None
    html: str
    redirect_url: str | None = None
    error_code: str | None = None
    warnings: list[str] = []


class ThemeUpdate(BaseModel):
    theme: Theme


class ThemeResponse(BaseModel):
    theme: Theme
    css_class: str
    stored: bool
