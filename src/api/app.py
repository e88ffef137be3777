from __future__ import annotations

from fastapi import FastAPI

from api.routers import health, minify
from api.version import API_VERSION
from core.settings import Settings, get_settings
from core.web_minifier.config import AppConfig, load_config
from core.web_minifier.worker import build_worker


def create_app(config: AppConfig | None = None) -> FastAPI:
    config = config or _prepare_config(get_settings())
    if not config.runtime.enable_local_api:
        raise RuntimeError("Local API is disabled. Enable it via configuration or environment.")

    app = FastAPI(title="Local Web Minifier", version=API_VERSION)
    app.state.config = config
    app.state.worker = build_worker(config)

    app.include_router(health.router)
    app.include_router(minify.router)

    @app.on_event("shutdown")
    async def _shutdown() -> None:  # pragma: no cover - FastAPI lifecycle
        app.state.worker.close()

    return app


def _prepare_config(settings: Settings) -> AppConfig:
    config = load_config(settings.config_path)
    if settings.enable_local_api is not None:
        config.runtime.enable_local_api = settings.enable_local_api
    return config


__all__ = ["create_app"]
