"""ASGI entry point: ``uvicorn main:app``."""

from fastapi import FastAPI, HTTPException

from policy_page.api import create_app
from policy_page.constants import API_VERSION, ENV_PREFIX
from policy_page.settings import get_settings

DISABLED_DETAIL = (
    "Local API disabled. Set runtime.enable_local_api = true in {config_path} "
    "or export {prefix}ENABLE_LOCAL_API=1"
)


def _disabled_app() -> FastAPI:
    detail = DISABLED_DETAIL.format(config_path=get_settings().config_path, prefix=ENV_PREFIX)
    disabled = FastAPI(title="Policy Page (disabled)", version=API_VERSION)

    @disabled.get("/{path:path}", include_in_schema=False)
    async def api_disabled(path: str) -> dict[str, str]:
        raise HTTPException(status_code=503, detail=detail)

    return disabled


def build_app() -> FastAPI:
    try:
        return create_app(require_enabled=True)
    except RuntimeError:
        return _disabled_app()


app = build_app()
