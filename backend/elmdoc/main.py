from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from .config import ViewerConfig, build_config
from .routers import viewer
from .services.index import ManifestError

LOGGER = logging.getLogger(__name__)

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def create_app(config: ViewerConfig | None = None) -> FastAPI:
    """Build the viewer application around a fixed configuration."""
    config = config or build_config()

    app = FastAPI(title="elm-doc", docs_url=None, redoc_url=None, openapi_url=None)
    app.state.config = config

    @app.exception_handler(ManifestError)
    async def manifest_error_handler(request: Request, exc: ManifestError) -> PlainTextResponse:
        LOGGER.error("[index] %s", exc)
        return PlainTextResponse(str(exc), status_code=500)

    app.include_router(viewer.router)

    LOGGER.info(
        "[main] serving docs from %s, manifest %s", config.packages_root, config.manifest_path
    )
    return app
