from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from jobboard.api.auth import router as auth_router
from jobboard.api.routes import router as jobs_router
from jobboard.config import get_settings
from jobboard.core.errors import JobBoardError
from jobboard.db.init import ensure_data_directories, init_database
from jobboard.db.session import engine
from jobboard.logging_config import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    # schema patching finishes before the first request is accepted
    init_database()
    yield


def describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    reason = first.get("msg", "is invalid")
    return f"Invalid request: {field} {reason}" if field else f"Invalid request: {reason}"


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging()
    ensure_data_directories()

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(JobBoardError)
    async def handle_job_board_error(request: Request, exc: JobBoardError) -> JSONResponse:
        return JSONResponse({"message": exc.message}, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse({"message": describe_validation_error(exc)}, status_code=400)

    @app.get("/health")
    def health() -> JSONResponse:
        status = {"server": "ok"}
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            status["db"] = "connected"
        except SQLAlchemyError as exc:
            logger.warning("Health check database query failed: %s", exc)
            status["db"] = "down"
            status["error"] = str(exc)
        return JSONResponse(status)

    app.include_router(auth_router)
    app.include_router(jobs_router)

    app.mount("/uploads", StaticFiles(directory=str(settings.upload_dir)), name="uploads")
    return app
