"""Service-level routes."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from weldreg.api.deps import get_db
from weldreg.core.config import settings

logger = logging.getLogger(__name__)

health_router = APIRouter(tags=["system"])


@health_router.get("/health", summary="Service and database health probe")
def healthcheck(session: Session = Depends(get_db)) -> dict[str, str]:
    database = "ok"
    try:
        session.connection().execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.warning("Database health check failed: %s", exc)
        database = "unavailable"
    return {
        "status": "ok" if database == "ok" else "degraded",
        "database": database,
        "version": settings.app_version,
    }
