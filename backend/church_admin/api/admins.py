# church_admin/api/admins.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from church_admin.dependencies import get_db, list_params, require_admin
from church_admin.models.user import UserRole
from church_admin.schemas.common import MessageOut, Page
from church_admin.schemas.user import AdminCreate, AdminRead, AdminUpdate
from church_admin.services import users as svc
from church_admin.services.listing import ListParams

router = APIRouter(prefix="/users/admin", tags=["Admins"], dependencies=[Depends(require_admin)])


@router.get("", response_model=Page[AdminRead])
def list_admins(
    params: ListParams = Depends(list_params),
    email: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    created_from: Optional[datetime] = Query(None, alias="createdAtFrom"),
    created_to: Optional[datetime] = Query(None, alias="createdAtTo"),
    db: Session = Depends(get_db),
):
    return svc.list_users(
        db,
        params,
        role=UserRole.admin,
        email=email,
        search=search,
        created_from=created_from,
        created_to=created_to,
        projection=AdminRead,
    )


@router.get("/{admin_id}", response_model=AdminRead)
def get_admin(admin_id: int, db: Session = Depends(get_db)):
    admin = svc.get_user(db, admin_id, role=UserRole.admin)
    if not admin:
        raise HTTPException(status_code=404, detail="Admin not found")
    return admin


@router.post("", response_model=AdminRead, status_code=status.HTTP_201_CREATED)
def create_admin(payload: AdminCreate, db: Session = Depends(get_db)):
    return svc.create_user(db, payload, role=UserRole.admin)


@router.put("/{admin_id}", response_model=AdminRead)
def update_admin(admin_id: int, payload: AdminUpdate, db: Session = Depends(get_db)):
    admin = svc.update_user(db, admin_id, payload, role=UserRole.admin)
    if not admin:
        raise HTTPException(status_code=404, detail="Admin not found")
    return admin


@router.delete("/{admin_id}", response_model=MessageOut)
def delete_admin(admin_id: int, db: Session = Depends(get_db)):
    if not svc.delete_user(db, admin_id, role=UserRole.admin):
        raise HTTPException(status_code=404, detail="Admin not found")
    return {"message": "Admin deleted successfully"}
