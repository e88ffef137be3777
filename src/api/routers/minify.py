from __future__ import annotations

import asyncio

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_config, get_worker
from core.web_minifier.config import AppConfig
from core.web_minifier.detection import detect_language
from core.web_minifier.utils import size_within_limit
from core.web_minifier.worker import MinifyResponse, MinifyWorker, WorkerClosedError
from models.schemas import (
    DetectRequestSchema,
    DetectResponseSchema,
    MinifyRequestSchema,
    MinifyResponseSchema,
)

router = APIRouter(prefix="/api/v1", tags=["minify"])


@router.post("/minify", summary="Minify JavaScript, CSS or HTML", response_model=MinifyResponseSchema)
async def minify(
    payload: MinifyRequestSchema,
    worker: MinifyWorker = Depends(get_worker),
    config: AppConfig = Depends(get_config),
) -> MinifyResponseSchema:
    _enforce_size_limit(payload.code, config)
    try:
        future = worker.dispatch(payload.model_dump(by_alias=True))
    except WorkerClosedError as exc:
        raise HTTPException(status_code=503, detail="WORKER_UNAVAILABLE") from exc
    response: MinifyResponse = await asyncio.wrap_future(future)
    return MinifyResponseSchema.model_validate(response.to_message())


@router.post("/detect", summary="Guess the language of a snippet", response_model=DetectResponseSchema)
def detect(payload: DetectRequestSchema) -> DetectResponseSchema:
    return DetectResponseSchema(language=detect_language(payload.code).value)


def _enforce_size_limit(code: str, config: AppConfig) -> None:
    if not size_within_limit(code, config.runtime.max_input_size_kb):
        raise HTTPException(status_code=413, detail="SIZE_LIMIT")


__all__ = ["router"]
