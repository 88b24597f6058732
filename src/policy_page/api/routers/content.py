from __future__ import annotations

from fastapi import APIRouter, Depends, Header, HTTPException
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from ...config import AppConfig
from ...core import PolicyRenderer
from ...models import RenderOutcome, RenderStatus
from ...page import render_document
from ...pipeline import ConversionError
from ...theme import ThemeManager, prefers_dark
from ..dependencies import get_config, get_renderer, get_theme_manager
from ..schemas import ContentResponse, ConvertRequest, ConvertResponse

router = APIRouter(tags=["content"])

COLOR_SCHEME_HINT = "Sec-CH-Prefers-Color-Scheme"


@router.get("/", summary="Rendered policy page", response_class=HTMLResponse)
async def policy_page(
    renderer: PolicyRenderer = Depends(get_renderer),
    themes: ThemeManager = Depends(get_theme_manager),
    config: AppConfig = Depends(get_config),
    color_scheme: str | None = Header(None, alias=COLOR_SCHEME_HINT),
) -> Response:
    outcome = await _render_outcome(renderer)
    if outcome.status is RenderStatus.REDIRECT and outcome.redirect_url:
        return RedirectResponse(outcome.redirect_url, status_code=307)
    theme = themes.current(prefers_dark(color_scheme))
    document = render_document(outcome, config.page, theme, toggle_action="/theme/toggle")
    status_code = 503 if outcome.status is RenderStatus.ERROR else 200
    return HTMLResponse(document, status_code=status_code, headers={"Accept-CH": COLOR_SCHEME_HINT})


@router.get("/content", summary="Rendered policy fragment")
async def policy_content(renderer: PolicyRenderer = Depends(get_renderer)) -> ContentResponse:
    outcome = await _render_outcome(renderer)
    return _serialize_outcome(outcome)


@router.post("/convert", summary="Convert markdown text to an HTML fragment")
async def convert_markdown(
    payload: ConvertRequest,
    renderer: PolicyRenderer = Depends(get_renderer),
) -> ConvertResponse:
    try:
        fragment = await run_in_threadpool(renderer.convert, payload.markdown, decorate=payload.decorate)
    except ConversionError as exc:
        raise HTTPException(status_code=400, detail=exc.code) from exc
    return ConvertResponse(html=fragment)


async def _render_outcome(renderer: PolicyRenderer) -> RenderOutcome:
    # Loading may block on the network or disk.
    return await run_in_threadpool(renderer.render)


def _serialize_outcome(outcome: RenderOutcome) -> ContentResponse:
    return ContentResponse(
        run_id=outcome.run_id,
        status=outcome.status.value,
        source=outcome.source.value if outcome.source else None,
        html=outcome.html,
        redirect_url=outcome.redirect_url,
        error_code=outcome.error_code,
        warnings=outcome.warnings,
    )


__all__ = ["router"]
