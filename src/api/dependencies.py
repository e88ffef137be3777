"""FastAPI dependency providers for application services."""

from __future__ import annotations

from fastapi import HTTPException, Request

from core.web_minifier.config import AppConfig
from core.web_minifier.worker import MinifyWorker


def get_config(request: Request) -> AppConfig:
    config = getattr(request.app.state, "config", None)
    if config is None:
        raise HTTPException(status_code=503, detail="CONFIG_UNAVAILABLE")
    return config


def get_worker(request: Request) -> MinifyWorker:
    worker = getattr(request.app.state, "worker", None)
    if worker is None or worker.closed:
        raise HTTPException(status_code=503, detail="WORKER_UNAVAILABLE")
    return worker


__all__ = ["get_config", "get_worker"]
