# church_admin/api/positions.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from church_admin.dependencies import current_session, get_db, list_params, require_admin
from church_admin.schemas.common import MessageOut, Page
from church_admin.schemas.position import PositionCreate, PositionRead, PositionUpdate
from church_admin.services import positions as svc
from church_admin.services.listing import ListParams

router = APIRouter(prefix="/positions", tags=["Positions"], dependencies=[Depends(current_session)])


@router.get("", response_model=Page[PositionRead])
def list_positions(
    params: ListParams = Depends(list_params),
    name: Optional[str] = Query(None),
    description: Optional[str] = Query(None),
    created_from: Optional[datetime] = Query(None, alias="createdAtFrom"),
    created_to: Optional[datetime] = Query(None, alias="createdAtTo"),
    include_users: bool = Query(False, alias="includeUsers"),
    db: Session = Depends(get_db),
):
    return svc.list_positions(
        db,
        params,
        name=name,
        description=description,
        created_from=created_from,
        created_to=created_to,
        include_users=include_users,
    )


@router.get("/{position_id}", response_model=PositionRead)
def get_position(position_id: int, db: Session = Depends(get_db)):
    pos = svc.get_position(db, position_id)
    if not pos:
        raise HTTPException(status_code=404, detail="Position not found")
    return pos


@router.post(
    "",
    response_model=PositionRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_position(payload: PositionCreate, db: Session = Depends(get_db)):
    return svc.create_position(db, payload)


@router.put(
    "/{position_id}",
    response_model=PositionRead,
    dependencies=[Depends(require_admin)],
)
def update_position(position_id: int, payload: PositionUpdate, db: Session = Depends(get_db)):
    pos = svc.update_position(db, position_id, payload)
    if not pos:
        raise HTTPException(status_code=404, detail="Position not found")
    return pos


@router.delete("/{position_id}", response_model=MessageOut, dependencies=[Depends(require_admin)])
def delete_position(position_id: int, db: Session = Depends(get_db)):
    if not svc.delete_position(db, position_id):
        raise HTTPException(status_code=404, detail="Position not found")
    return {"message": "Position deleted successfully"}
