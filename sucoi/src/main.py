"""
Sucoi - Application Entry Point
================================
FastAPI application factory.  ``create_app`` wires the shared resources
into ``app.state``, registers the API routes, CORS and the error
handlers, and mounts the static dashboard as the catch-all fallback.

Shared resources
----------------
``app.state.settings``
    The ``Settings`` instance in effect.
``app.state.database``
    ``MongoDatabase`` handle.  Connected in the lifespan; a failed
    connection raises ``DatabaseConnectionError`` and aborts startup.
``app.state.completion``
    ``CompletionClient`` used for companion replies (Gemini by default).

Both resources can be injected, which is how the tests swap in an
in-memory MongoDB and a fake completion client.

Run:
    python -m sucoi.src.main
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from sucoi.config.settings import Settings, settings as default_settings
from sucoi.src.api.routes import router
from sucoi.src.core.companion import CompletionClient, GeminiCompletionClient
from sucoi.src.core.errors import SucoiError
from sucoi.src.database.mongo import MongoDatabase
from sucoi.src.utils.logger import get_logger

logger = get_logger(__name__)

DASHBOARD_FILE = "dashboard.html"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    database: MongoDatabase = app.state.database
    await database.connect()
    logger.info("Sucoi API ready.")
    try:
        yield
    finally:
        database.close()


async def _sucoi_error_handler(request: Request, exc: SucoiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=getattr(exc, "headers", None))


def create_app(settings: Settings | None = None, database: MongoDatabase | None = None, completion: CompletionClient | None = None) -> FastAPI:
    """
    Build the Sucoi FastAPI application.

    Parameters
    ----------
    settings
        Configuration; defaults to the module-level singleton.
    database
        Pre-built ``MongoDatabase``; defaults to one built from settings.
    completion
        Completion client; defaults to ``GeminiCompletionClient``.
    """
    settings = settings or default_settings

    app = FastAPI(title="Sucoi Companion API", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database or MongoDatabase.from_settings(settings)
    app.state.completion = completion or GeminiCompletionClient.from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(SucoiError, _sucoi_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)

    app.include_router(router)
    _mount_dashboard(app, settings)
    return app


def _mount_dashboard(app: FastAPI, settings: Settings) -> None:
    """Serve ``dashboard.html`` at ``/`` and the rest of ``STATIC_DIR`` as fallback."""
    static_dir = settings.STATIC_DIR

    @app.get("/", include_in_schema=False)
    async def dashboard() -> FileResponse:
        path = static_dir / DASHBOARD_FILE
        if not path.is_file():
            raise HTTPException(status_code=404, detail="Not Found")
        return FileResponse(path)

    # Must be mounted last: a mount at "/" shadows any route added after it
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir), name="static")
    else:
        logger.warning("Static directory not found: %s (dashboard disabled)", static_dir)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(create_app(), host=default_settings.HOST, port=default_settings.PORT)
