from __future__ import annotations

from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import RedirectResponse, Response

from ...theme import Theme, ThemeManager, prefers_dark
from ..dependencies import get_theme_manager
from ..schemas import ThemeResponse, ThemeUpdate
from .content import COLOR_SCHEME_HINT

router = APIRouter(prefix="/theme", tags=["theme"])


def _describe(manager: ThemeManager, theme: Theme) -> ThemeResponse:
    return ThemeResponse(theme=theme, css_class=theme.css_class, stored=manager.saved() is not None)


@router.get("", summary="Current theme preference")
def get_theme(
    manager: ThemeManager = Depends(get_theme_manager),
    color_scheme: str | None = Header(None, alias=COLOR_SCHEME_HINT),
) -> ThemeResponse:
    return _describe(manager, manager.current(prefers_dark(color_scheme)))


@router.post("", summary="Store a theme preference")
def set_theme(payload: ThemeUpdate, manager: ThemeManager = Depends(get_theme_manager)) -> ThemeResponse:
    return _describe(manager, manager.set(payload.theme))


@router.post("/toggle", summary="Toggle between light and dark", response_model=None)
def toggle_theme(
    request: Request,
    manager: ThemeManager = Depends(get_theme_manager),
    color_scheme: str | None = Header(None, alias=COLOR_SCHEME_HINT),
) -> ThemeResponse | Response:
    theme = manager.toggle(prefers_dark(color_scheme))
    if "text/html" in request.headers.get("accept", ""):
        return RedirectResponse("/", status_code=303)
    return _describe(manager, theme)


__all__ = ["router"]
