"""Weld registry FastAPI application."""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from weldreg.api import api_router
from weldreg.core.config import settings
from weldreg.core.logging_config import setup_logging
from weldreg.db.session import init_db

logger = logging.getLogger(__name__)


def _error_body(status_code: int, message: Any) -> dict[str, Any]:
    return {
        "statusCode": status_code,
        "message": message,
        "error": HTTPStatus(status_code).phrase,
    }


def _format_validation_error(error: dict[str, Any]) -> str:
    location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
    message = error.get("msg", "Invalid value")
    return f"{'.'.join(location)}: {message}" if location else message


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = [_format_validation_error(error) for error in exc.errors()]
    logger.info("Rejected %s %s: %s", request.method, request.url.path, messages)
    return JSONResponse(status_code=400, content=_error_body(400, messages))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.status_code, exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error for %s: %s", request.url.path, exc)
    return JSONResponse(status_code=500, content=_error_body(500, "Internal server error"))


def create_app() -> FastAPI:
    setup_logging()
    logger.info("Initializing %s API", settings.app_name)

    app = FastAPI(title=settings.app_name, version=settings.app_version)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(api_router, prefix=settings.api_prefix)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    @app.get("/", include_in_schema=False)
    async def root() -> dict[str, str]:
        """Provide a friendly landing response for the bare hostname."""

        return {
            "message": (
                f"{settings.app_name} API is online. Try GET "
                f"{settings.api_prefix}/health for a health check."
            )
        }

    @app.on_event("startup")
    def _init_database() -> None:
        init_db()
        logger.info("API listening on port %s with prefix %s", settings.port, settings.api_prefix)

    return app


app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run("weldreg.main:app", host=settings.host, port=settings.port, reload=False)


if __name__ == "__main__":
    run()
