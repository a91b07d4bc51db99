# church_admin/api/subjects.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from church_admin.dependencies import current_session, get_db, list_params, require_admin
from church_admin.schemas.common import MessageOut, Page
from church_admin.schemas.subject import SubjectCreate, SubjectRead, SubjectUpdate
from church_admin.services import subjects as svc
from church_admin.services.listing import ListParams

router = APIRouter(prefix="/subjects", tags=["Subjects"], dependencies=[Depends(current_session)])


@router.get("", response_model=Page[SubjectRead])
def list_subjects(
    params: ListParams = Depends(list_params),
    name: Optional[str] = Query(None),
    description: Optional[str] = Query(None),
    disabled: Optional[bool] = Query(None),
    created_from: Optional[datetime] = Query(None, alias="createdAtFrom"),
    created_to: Optional[datetime] = Query(None, alias="createdAtTo"),
    include_users: bool = Query(False, alias="includeUsers"),
    db: Session = Depends(get_db),
):
    return svc.list_subjects(
        db,
        params,
        name=name,
        description=description,
        disabled=disabled,
        created_from=created_from,
        created_to=created_to,
        include_users=include_users,
    )


@router.get("/{subject_id}", response_model=SubjectRead)
def get_subject(subject_id: int, db: Session = Depends(get_db)):
    subject = svc.get_subject(db, subject_id)
    if not subject:
        raise HTTPException(status_code=404, detail="Subject not found")
    return subject


@router.post(
    "",
    response_model=SubjectRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_subject(payload: SubjectCreate, db: Session = Depends(get_db)):
    return svc.create_subject(db, payload)


@router.put(
    "/{subject_id}",
    response_model=SubjectRead,
    dependencies=[Depends(require_admin)],
)
def update_subject(subject_id: int, payload: SubjectUpdate, db: Session = Depends(get_db)):
    subject = svc.update_subject(db, subject_id, payload)
    if not subject:
        raise HTTPException(status_code=404, detail="Subject not found")
    return subject


@router.delete("/{subject_id}", response_model=MessageOut, dependencies=[Depends(require_admin)])
def delete_subject(subject_id: int, db: Session = Depends(get_db)):
    if not svc.delete_subject(db, subject_id):
        raise HTTPException(status_code=404, detail="Subject not found")
    return {"message": "Subject deleted successfully"}
