# church_admin/api/churches.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from church_admin.dependencies import current_session, get_db, list_params, require_admin
from church_admin.schemas.church import ChurchCreate, ChurchRead, ChurchUpdate
from church_admin.schemas.common import MessageOut, Page
from church_admin.services import churches as svc
from church_admin.services.listing import ListParams

router = APIRouter(prefix="/church", tags=["Churches"], dependencies=[Depends(current_session)])


@router.get("", response_model=Page[ChurchRead])
def list_churches(
    params: ListParams = Depends(list_params),
    address: Optional[str] = Query(None),
    latitude: Optional[int] = Query(None),
    longitude: Optional[int] = Query(None),
    created_from: Optional[datetime] = Query(None, alias="createdAtFrom"),
    created_to: Optional[datetime] = Query(None, alias="createdAtTo"),
    db: Session = Depends(get_db),
):
    return svc.list_churches(
        db,
        params,
        address=address,
        latitude=latitude,
        longitude=longitude,
        created_from=created_from,
        created_to=created_to,
    )


@router.get("/{church_id}", response_model=ChurchRead)
def get_church(church_id: int, db: Session = Depends(get_db)):
    church = svc.get_church(db, church_id)
    if not church:
        raise HTTPException(status_code=404, detail="Church not found")
    return church


@router.post(
    "",
    response_model=ChurchRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_church(payload: ChurchCreate, db: Session = Depends(get_db)):
    return svc.create_church(db, payload)


@router.put("/{church_id}", response_model=ChurchRead, dependencies=[Depends(require_admin)])
def update_church(church_id: int, payload: ChurchUpdate, db: Session = Depends(get_db)):
    church = svc.update_church(db, church_id, payload)
    if not church:
        raise HTTPException(status_code=404, detail="Church not found")
    return church


@router.delete("/{church_id}", response_model=MessageOut, dependencies=[Depends(require_admin)])
def delete_church(church_id: int, db: Session = Depends(get_db)):
    if not svc.delete_church(db, church_id):
        raise HTTPException(status_code=404, detail="Church not found")
    return {"message": "Church deleted successfully"}
