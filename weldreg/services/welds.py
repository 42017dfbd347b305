"""Weld registry CRUD operations."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Sequence

from sqlmodel import Session, select

from weldreg.models import Weld, WeldCreate, WeldUpdate

logger = logging.getLogger(__name__)


class WeldNotFoundError(LookupError):
    """Raised when no weld exists with the requested id."""

    def __init__(self, weld_id: str) -> None:
        super().__init__(f'Weld with id "{weld_id}" not found')
        self.weld_id = weld_id


def _contains(haystack: Optional[str], needle: str) -> bool:
    return bool(haystack) and needle in haystack.casefold()


def create_weld(session: Session, payload: WeldCreate | Mapping[str, Any]) -> Weld:
    """Validate and persist a new weld record."""

    if not isinstance(payload, WeldCreate):
        payload = WeldCreate.model_validate(payload)
    record = Weld(**payload.model_dump(mode="json"))
    session.add(record)
    session.commit()
    session.refresh(record)
    logger.info("Created weld %s (%s)", record.id, record.weld_number)
    return record


def list_welds(
    session: Session,
    search: Optional[str] = None,
    object_name: Optional[str] = None,
    page: Optional[int] = None,
    limit: Optional[int] = None,
) -> Sequence[Weld]:
    """List welds newest-first, optionally filtered and paginated.

    ``search`` matches a case-insensitive substring of the weld number,
    ``object_name`` a case-insensitive substring of the object name.
    Pagination applies only when ``limit`` is given; ``page`` starts at 1.
    """

    records = session.exec(select(Weld).order_by(Weld.created_at.desc())).all()
    # SQLite's lower()/LIKE only fold ASCII, weld numbers are often Cyrillic
    if search:
        needle = search.casefold()
        records = [r for r in records if _contains(r.weld_number, needle)]
    if object_name:
        needle = object_name.casefold()
        records = [r for r in records if _contains(r.object_name, needle)]
    if limit:
        start = (max(page or 1, 1) - 1) * limit
        records = records[start : start + limit]
    return records


def get_weld(session: Session, weld_id: str) -> Weld:
    record = session.get(Weld, weld_id)
    if record is None:
        raise WeldNotFoundError(weld_id)
    return record


def update_weld(session: Session, weld_id: str, payload: WeldUpdate | Mapping[str, Any]) -> Weld:
    """Apply only the submitted fields; last write wins."""

    if not isinstance(payload, WeldUpdate):
        payload = WeldUpdate.model_validate(payload)
    record = get_weld(session, weld_id)
    changes = payload.changes()
    for field, value in changes.items():
        setattr(record, field, value)
    record.updated_at = datetime.now(timezone.utc)
    session.add(record)
    session.commit()
    session.refresh(record)
    logger.info("Updated weld %s fields=%s", weld_id, sorted(changes))
    return record


def delete_weld(session: Session, weld_id: str) -> None:
    record = get_weld(session, weld_id)
    weld_number = record.weld_number
    session.delete(record)
    session.commit()
    logger.info("Deleted weld %s (%s)", weld_id, weld_number)


__all__ = [
    "WeldNotFoundError",
    "create_weld",
    "list_welds",
    "get_weld",
    "update_weld",
    "delete_weld",
]
