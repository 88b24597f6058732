"""FastAPI dependency providers for application services."""

from __future__ import annotations

from fastapi import HTTPException, Request

from ..config import AppConfig
from ..core import PolicyRenderer
from ..theme import ThemeManager


def get_config(request: Request) -> AppConfig:
    config = getattr(request.app.state, "config", None)
    if config is None:
        raise HTTPException(status_code=503, detail="CONFIG_UNAVAILABLE")
    return config


def get_renderer(request: Request) -> PolicyRenderer:
    renderer = getattr(request.app.state, "renderer", None)
    if renderer is None:
        raise HTTPException(status_code=503, detail="RENDERER_UNAVAILABLE")
    return renderer


def get_theme_manager(request: Request) -> ThemeManager:
    manager = getattr(request.app.state, "themes", None)
    if manager is None:
        raise HTTPException(status_code=503, detail="THEME_STORE_UNAVAILABLE")
    return manager


__all__ = ["get_config", "get_renderer", "get_theme_manager"]
