from __future__ import annotations

import logging

from fastapi import FastAPI, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from .routers import gate
from .services.runtime import get_runtime
from .util.env import load_env_file
from .util.logging import setup_logging
from .version import APP_VERSION

LOGGER = logging.getLogger(__name__)


def create_app() -> FastAPI:
    application = FastAPI(title="tradegate", version=APP_VERSION)
    application.include_router(gate.router)

    @application.get("/healthz")
    def healthz() -> dict:
        runtime = get_runtime()
        return {"ok": True, "initialized": runtime.holder.initialized, "version": APP_VERSION}

    @application.get("/metrics")
    def metrics() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    @application.on_event("startup")
    async def _startup() -> None:
        load_env_file()
        runtime = get_runtime()
        setup_logging(runtime.settings.log_level)
        LOGGER.info(
            "tradegate started",
            extra={"initialized": runtime.holder.initialized, "venue": runtime.settings.exchange.venue},
        )

    return application


app = create_app()
