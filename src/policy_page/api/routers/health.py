from __future__ import annotations

from fastapi import APIRouter

from ...constants import API_VERSION
from ..schemas import HealthStatus

router = APIRouter(tags=["health"])


@router.get("/health", summary="Health check")
def health() -> HealthStatus:
    return HealthStatus(status="ok", version=API_VERSION)


__all__ = ["router"]
