# skyglow/main.py

import logging
from contextlib import asynccontextmanager
from typing import Optional

import anyio.to_thread
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from skyglow.api.api import api_router
from skyglow.core.config import Settings, get_settings
from skyglow.core.logging import setup_logging
from skyglow.services.context import SkyContext, load_sky_context

logger = logging.getLogger(__name__)

# Sent on every response, including bare OPTIONS and errors.
CROSS_ORIGIN_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def create_application(
    settings: Optional[Settings] = None,
    context: Optional[SkyContext] = None,
) -> FastAPI:
    """
    Build the API.

    Pass `context` when the raster was already loaded (the server entry
    point does this so a bad raster stops the process before it binds).
    Without it the lifespan hook loads the raster from settings and a
    failure aborts startup.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings.log_level)
        anyio.to_thread.current_default_thread_limiter().total_tokens = settings.worker_threads

        owned = None
        if app.state.sky_context is None:
            owned = load_sky_context(settings.raster_path, preload=settings.raster_preload)
            app.state.sky_context = owned
        try:
            yield
        finally:
            if owned is not None:
                owned.close()
                app.state.sky_context = None

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.sky_context = context

    # ---------- CORS ----------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.backend_cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    # Outermost: answers every OPTIONS itself, with or without an Origin.
    @app.middleware("http")
    async def permissive_cross_origin(request: Request, call_next):
        if request.method == "OPTIONS":
            response = Response(status_code=200)
        else:
            response = await call_next(request)

        for name, value in CROSS_ORIGIN_HEADERS.items():
            response.headers.setdefault(name, value)
        return response

    # ---------- ERRORS ----------
    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            {"error": exc.detail},
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled error serving %s %s",
            request.method,
            request.url.path,
            exc_info=exc,
        )
        return JSONResponse(
            {"error": "Internal server error"},
            status_code=500,
            headers=CROSS_ORIGIN_HEADERS,
        )

    # ---------- ROUTERS ----------
    app.include_router(api_router)

    return app


app = create_application()
