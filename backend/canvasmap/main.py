"""FastAPI app factory."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from canvasmap import __version__
from canvasmap.config import settings
from canvasmap.errors import CanvasMapError
from canvasmap.miro.client import MiroClient
from canvasmap.models.responses import ErrorResponse

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.canvasmap_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    if not settings.miro_oauth_token:
        logger.warning("MIRO_OAUTH_TOKEN is not set; remote calls will be rejected")
    client = MiroClient(
        settings.miro_oauth_token,
        base_url=settings.miro_api_base_url,
        timeout=settings.miro_http_timeout,
        page_size=settings.miro_page_size,
    )
    app.state.miro_client = client
    logger.info("canvasmap %s started (%s)", __version__, settings.canvasmap_env)
    try:
        yield
    finally:
        await client.aclose()
        app.state.miro_client = None


async def _canvasmap_error(request: Request, exc: CanvasMapError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    body = ErrorResponse(error=type(exc).__name__, detail=str(exc))
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


async def _value_error(request: Request, exc: ValueError) -> JSONResponse:
    body = ErrorResponse(error="ValueError", detail=str(exc))
    return JSONResponse(status_code=422, content=body.model_dump())


def create_app() -> FastAPI:
    app = FastAPI(
        title="canvasmap",
        description="Command server for Miro boards with frame spatial maps",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(CanvasMapError, _canvasmap_error)
    app.add_exception_handler(ValueError, _value_error)

    # Import all command modules to trigger registration
    from canvasmap.commands.router import register_commands

    register_commands()

    from canvasmap.api.router import api_router

    app.include_router(api_router)

    return app


app = create_app()
