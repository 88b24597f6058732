from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI

from ..config import AppConfig, load_config
from ..constants import API_VERSION
from ..core import PolicyRenderer
from ..settings import Settings, get_settings
from ..theme import ThemeManager
from .routers import content, health, theme


def create_app(
    config_path: Path | None = None,
    *,
    require_enabled: bool = True,
    config: AppConfig | None = None,
) -> FastAPI:
    config = config or _prepare_config(get_settings(), config_path)
    if require_enabled and not config.runtime.enable_local_api:
        raise RuntimeError("Local API is disabled. Enable it via configuration or environment.")

    app = FastAPI(title="Policy Page", version=API_VERSION)
    app.state.config = config
    app.state.renderer = PolicyRenderer(config)
    app.state.themes = ThemeManager(config.theme)

    app.include_router(health.router)
    app.include_router(content.router)
    app.include_router(theme.router)
    return app


def _prepare_config(settings: Settings, config_path: Path | None) -> AppConfig:
    config = load_config(config_path or settings.config_path)
    if settings.enable_local_api is not None:
        config.runtime.enable_local_api = settings.enable_local_api
    return config


__all__ = ["create_app"]
