"""Weld registry CRUD endpoints."""

from __future__ import annotations

from typing import Any, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlmodel import Session

from weldreg.api.deps import get_db
from weldreg.models import WeldCreate, WeldRead, WeldUpdate
from weldreg.services.welds import (
    WeldNotFoundError,
    create_weld,
    delete_weld,
    get_weld,
    list_welds,
    update_weld,
)

router = APIRouter(prefix="/welds", tags=["welds"])


@router.get("", response_model=List[WeldRead])
def get_welds(
    search: Optional[str] = Query(None, description="Substring of the weld number"),
    object_name: Optional[str] = Query(None, alias="objectName"),
    page: Optional[int] = Query(None, ge=1),
    limit: Optional[int] = Query(None, ge=1, le=1000),
    session: Session = Depends(get_db),
) -> Any:
    records = list_welds(
        session=session,
        search=search,
        object_name=object_name,
        page=page,
        limit=limit,
    )
    return [WeldRead.model_validate(record) for record in records]


@router.get("/{weld_id}", response_model=WeldRead)
def get_weld_endpoint(weld_id: str, session: Session = Depends(get_db)) -> Any:
    try:
        return WeldRead.model_validate(get_weld(session, weld_id))
    except WeldNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.post("", response_model=WeldRead, status_code=status.HTTP_201_CREATED)
def create_weld_endpoint(payload: WeldCreate, session: Session = Depends(get_db)) -> Any:
    return WeldRead.model_validate(create_weld(session, payload))


@router.patch("/{weld_id}", response_model=WeldRead)
def update_weld_endpoint(
    weld_id: str, payload: WeldUpdate, session: Session = Depends(get_db)
) -> Any:
    try:
        return WeldRead.model_validate(update_weld(session, weld_id, payload))
    except WeldNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.delete("/{weld_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_weld_endpoint(weld_id: str, session: Session = Depends(get_db)) -> Response:
    try:
        delete_weld(session, weld_id)
    except WeldNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
