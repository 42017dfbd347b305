"""Recent log entries kept by the in-memory buffer."""

from __future__ import annotations

from typing import Literal, Optional

from fastapi import APIRouter, Query

from weldreg.core.logging_config import get_log_buffer

router = APIRouter(prefix="/logs", tags=["system"])

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@router.get("", summary="Most recent log entries, newest first")
def recent_logs(
    limit: int = Query(100, ge=1, le=200),
    level: Optional[LogLevel] = Query(None, description="Minimum level to include"),
) -> dict[str, list[dict[str, str]]]:
    return {"logs": get_log_buffer(limit=limit, level=level)}


__all__ = ["router"]
