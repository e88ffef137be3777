from __future__ import annotations

from fastapi import APIRouter, Depends

from api.dependencies import get_worker
from api.version import API_VERSION
from core.web_minifier.worker import MinifyWorker
from models.schemas import HealthStatus

router = APIRouter(tags=["health"])


@router.get("/health", summary="Health check", response_model=HealthStatus)
def health(worker: MinifyWorker = Depends(get_worker)) -> HealthStatus:
    return HealthStatus(
        status="ok",
        version=API_VERSION,
        advanced_html=worker.service.has_advanced_html,
    )


__all__ = ["router"]
