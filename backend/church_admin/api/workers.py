# church_admin/api/workers.py
# Worker-scoped view of /users: every query is pinned to role=worker, so a
# worker id never resolves to an admin and vice versa.
from __future__ import annotations

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from church_admin.dependencies import current_session, get_db, list_params, require_admin
from church_admin.models.user import UserRole, UserStatus
from church_admin.schemas.common import MessageOut, Page
from church_admin.schemas.user import UserRead, WorkerCreate, WorkerUpdate
from church_admin.services import users as svc
from church_admin.services.listing import ListParams

router = APIRouter(prefix="/users/workers", tags=["Workers"], dependencies=[Depends(current_session)])


@router.get("", response_model=Page[UserRead])
def list_workers(
    params: ListParams = Depends(list_params),
    email: Optional[str] = Query(None),
    church_id: Optional[int] = Query(None, alias="churchId"),
    position_id: Optional[int] = Query(None, alias="positionId"),
    status_: Optional[UserStatus] = Query(None, alias="status"),
    created_from: Optional[datetime] = Query(None, alias="createdAtFrom"),
    created_to: Optional[datetime] = Query(None, alias="createdAtTo"),
    db: Session = Depends(get_db),
):
    return svc.list_users(
        db,
        params,
        role=UserRole.worker,
        email=email,
        church_id=church_id,
        position_id=position_id,
        status_=status_,
        created_from=created_from,
        created_to=created_to,
    )


@router.get("/{worker_id}", response_model=UserRead)
def get_worker(worker_id: int, db: Session = Depends(get_db)):
    worker = svc.get_user(db, worker_id, role=UserRole.worker)
    if not worker:
        raise HTTPException(status_code=404, detail="Worker not found")
    return worker


@router.post(
    "",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_worker(payload: WorkerCreate, db: Session = Depends(get_db)):
    return svc.create_user(db, payload, role=UserRole.worker)


@router.put("/{worker_id}", response_model=UserRead, dependencies=[Depends(require_admin)])
def update_worker(worker_id: int, payload: WorkerUpdate, db: Session = Depends(get_db)):
    worker = svc.update_user(db, worker_id, payload, role=UserRole.worker)
    if not worker:
        raise HTTPException(status_code=404, detail="Worker not found")
    return worker


@router.delete("/{worker_id}", response_model=MessageOut, dependencies=[Depends(require_admin)])
def delete_worker(worker_id: int, db: Session = Depends(get_db)):
    if not svc.delete_user(db, worker_id, role=UserRole.worker):
        raise HTTPException(status_code=404, detail="Worker not found")
    return {"message": "Worker deleted successfully"}
