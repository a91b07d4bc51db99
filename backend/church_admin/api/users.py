# church_admin/api/users.py
from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from church_admin.dependencies import current_session, get_db, list_params, require_admin
from church_admin.models.user import UserGender, UserRole, UserStatus
from church_admin.schemas.common import MessageOut, Page
from church_admin.schemas.user import UserCreate, UserRead, UserUpdate
from church_admin.services import users as svc
from church_admin.services.listing import ListParams

router = APIRouter(prefix="/users", tags=["Users"], dependencies=[Depends(current_session)])


@router.get("", response_model=Page[UserRead])
def list_users(
    params: ListParams = Depends(list_params),
    role: Optional[UserRole] = Query(None),
    gender: Optional[UserGender] = Query(None),
    status_: Optional[UserStatus] = Query(None, alias="status"),
    church_id: Optional[int] = Query(None, alias="churchId"),
    position_id: Optional[int] = Query(None, alias="positionId"),
    email: Optional[str] = Query(None),
    contact: Optional[str] = Query(None),
    address: Optional[str] = Query(None),
    search: Optional[str] = Query(None, description="firstname, lastname or email contains"),
    birthday_from: Optional[date] = Query(None, alias="birthdayFrom"),
    birthday_to: Optional[date] = Query(None, alias="birthdayTo"),
    created_from: Optional[datetime] = Query(None, alias="createdAtFrom"),
    created_to: Optional[datetime] = Query(None, alias="createdAtTo"),
    db: Session = Depends(get_db),
):
    return svc.list_users(
        db,
        params,
        role=role,
        gender=gender,
        status_=status_,
        church_id=church_id,
        position_id=position_id,
        email=email,
        contact=contact,
        address=address,
        search=search,
        birthday_from=birthday_from,
        birthday_to=birthday_to,
        created_from=created_from,
        created_to=created_to,
    )


@router.get("/{user_id}", response_model=UserRead)
def get_user(user_id: int, db: Session = Depends(get_db)):
    user = svc.get_user(db, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.post(
    "",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_user(payload: UserCreate, db: Session = Depends(get_db)):
    return svc.create_user(db, payload)


@router.put("/{user_id}", response_model=UserRead, dependencies=[Depends(require_admin)])
def update_user(user_id: int, payload: UserUpdate, db: Session = Depends(get_db)):
    user = svc.update_user(db, user_id, payload)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.delete("/{user_id}", response_model=MessageOut, dependencies=[Depends(require_admin)])
def delete_user(user_id: int, db: Session = Depends(get_db)):
    if not svc.delete_user(db, user_id):
        raise HTTPException(status_code=404, detail="User not found")
    return {"message": "User deleted successfully"}
