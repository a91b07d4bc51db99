# church_admin/services/users.py
"""
User aggregate writes and reads.

A user is written together with its dependent collections (children,
educational attainment, cases, subject links) in one transaction. On update a
collection present in the payload replaces the stored rows wholesale; a
collection left out of the payload is not touched.
"""
from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional

from fastapi import HTTPException, status
from sqlalchemy import delete, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from church_admin.models.subject import UserSubject
from church_admin.models.user import (
    User,
    UserCase,
    UserChild,
    UserEducationalAttainment,
    UserRole,
)
from church_admin.schemas.user import BootstrapAdminCreate, UserRead
from church_admin.services.auth import hash_password
from church_admin.services.churches import ensure_church_exists
from church_admin.services.listing import (
    ListParams,
    contains,
    date_range,
    equals,
    order_by_clause,
    page_envelope,
    paginate,
)
from church_admin.services.positions import ensure_position_exists
from church_admin.services.subjects import ensure_subjects_exist

logger = logging.getLogger(__name__)

SORT_COLUMNS = {
    "id": User.id,
    "email": User.email,
    "firstname": User.firstname,
    "lastname": User.lastname,
    "birthday": User.birthday,
    "role": User.role,
    "status": User.status,
    "createdAt": User.created_at,
    "updatedAt": User.updated_at,
}

PROFILE_FIELDS = (
    "firstname", "middlename", "lastname", "birthday", "gender", "contact",
    "address", "description", "profile_picture", "status",
    "sss", "sssimage", "pagibig", "pagibigimage", "tin", "tinimage",
    "psn", "psnimage", "philhealth", "philhealthimage",
    "church_id", "position_id",
)

# payload key -> (row model, User relationship attribute)
COLLECTIONS = {
    "children": (UserChild, "children"),
    "educational_attainment": (UserEducationalAttainment, "educational_attainment"),
    "cases": (UserCase, "cases"),
}


# ---- guards ----

def _ensure_email_free(db: Session, email: str, exclude_id: Optional[int] = None) -> None:
    stmt = select(User.id).where(User.email == email)
    if exclude_id is not None:
        stmt = stmt.where(User.id != exclude_id)
    if db.execute(stmt).first() is not None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already in use")


def _check_references(db: Session, data: Dict[str, Any]) -> None:
    if "church_id" in data:
        ensure_church_exists(db, data["church_id"])
    if "position_id" in data:
        ensure_position_exists(db, data["position_id"])
    if data.get("subjects"):
        ensure_subjects_exist(db, data["subjects"])


def _commit(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if "email" in str(exc.orig).lower():
            raise HTTPException(status_code=400, detail="Email already in use") from exc
        raise
    except SQLAlchemyError:
        db.rollback()
        raise


# ---- collections ----

def _unique_ids(ids: Iterable[int]) -> List[int]:
    return list(dict.fromkeys(ids))


def _build_rows(data: Dict[str, Any]) -> Dict[str, List[Any]]:
    rows: Dict[str, List[Any]] = {}
    for key, (model, attr) in COLLECTIONS.items():
        if data.get(key) is not None:
            rows[attr] = [model(**item) for item in data[key]]
    if data.get("subjects") is not None:
        rows["user_subjects"] = [UserSubject(subject_id=sid) for sid in _unique_ids(data["subjects"])]
    return rows


def _replace_collections(db: Session, user: User, data: Dict[str, Any]) -> None:
    """Delete then re-insert every collection present in `data`."""
    replaced = _build_rows(data)
    models = {attr: model for model, attr in COLLECTIONS.values()}
    models["user_subjects"] = UserSubject

    for attr, new_rows in replaced.items():
        model = models[attr]
        db.execute(delete(model).where(model.user_id == user.id))
        db.expire(user, [attr])
        db.flush()
        for row in new_rows:
            row.user_id = user.id
            db.add(row)


# ---- reads ----

def list_users(
    db: Session,
    params: ListParams,
    role: Optional[UserRole] = None,
    gender: Optional[str] = None,
    status_: Optional[str] = None,
    church_id: Optional[int] = None,
    position_id: Optional[int] = None,
    email: Optional[str] = None,
    contact: Optional[str] = None,
    address: Optional[str] = None,
    search: Optional[str] = None,
    birthday_from: Optional[date] = None,
    birthday_to: Optional[date] = None,
    created_from: Optional[datetime] = None,
    created_to: Optional[datetime] = None,
    projection=UserRead,
) -> Dict[str, Any]:
    conds = [
        *equals(User.role, role),
        *equals(User.gender, gender),
        *equals(User.status, status_),
        *equals(User.church_id, church_id),
        *equals(User.position_id, position_id),
        *contains(User.email, email),
        *contains(User.contact, contact),
        *contains(User.address, address),
        *date_range(User.birthday, birthday_from, birthday_to),
        *date_range(User.created_at, created_from, created_to),
    ]
    if search:
        conds.append(
            or_(
                User.firstname.icontains(search, autoescape=True),
                User.lastname.icontains(search, autoescape=True),
                User.email.icontains(search, autoescape=True),
            )
        )
    rows, total = paginate(db, User, conds, order_by_clause(User, SORT_COLUMNS, params), params)
    return page_envelope([projection.model_validate(u) for u in rows], total, params)


def get_user(db: Session, user_id: int, role: Optional[UserRole] = None) -> Optional[User]:
    user = db.get(User, user_id)
    if user is None or (role is not None and user.role != role):
        return None
    return user


# ---- writes ----

def create_user(db: Session, payload, role: Optional[UserRole] = None) -> User:
    """
    Insert a user with its collections. `role` pins the role for the
    worker/admin endpoints; otherwise the payload's role is used.
    """
    data = payload.model_dump(exclude_unset=True)
    _ensure_email_free(db, payload.email)
    _check_references(db, data)

    user = User(
        email=payload.email,
        password=hash_password(payload.password),
        role=role or data.get("role") or UserRole.worker,
    )
    for field in PROFILE_FIELDS:
        if field in data:
            setattr(user, field, data[field])
    for attr, rows in _build_rows(data).items():
        setattr(user, attr, rows)

    db.add(user)
    _commit(db)
    db.refresh(user)
    logger.info("user created id=%s role=%s", user.id, user.role.value)
    return user


def update_user(
    db: Session, user_id: int, payload, role: Optional[UserRole] = None
) -> Optional[User]:
    user = get_user(db, user_id, role)
    if user is None:
        return None

    data = payload.model_dump(exclude_unset=True)
    data.pop("confirm_password", None)

    if data.get("email") and data["email"] != user.email:
        _ensure_email_free(db, data["email"], exclude_id=user.id)
    _check_references(db, data)

    try:
        if data.get("email"):
            user.email = data["email"]
        if data.get("password"):
            user.password = hash_password(data["password"])
        if data.get("role") is not None and role is None:
            user.role = data["role"]
        for field in PROFILE_FIELDS:
            if field in data:
                setattr(user, field, data[field])
        _replace_collections(db, user, data)
    except SQLAlchemyError:
        db.rollback()
        raise

    _commit(db)
    db.refresh(user)
    logger.info(
        "user updated id=%s fields=%s",
        user_id,
        sorted(k for k in data if k != "password"),
    )
    return user


def delete_user(db: Session, user_id: int, role: Optional[UserRole] = None) -> bool:
    user = get_user(db, user_id, role)
    if user is None:
        return False
    try:
        db.delete(user)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    logger.info("user deleted id=%s", user_id)
    return True


def bootstrap_admin(db: Session, payload: BootstrapAdminCreate) -> User:
    _ensure_email_free(db, payload.email)
    user = User(
        email=payload.email,
        password=hash_password(payload.password),
        firstname=payload.first_name,
        lastname=payload.last_name,
        role=UserRole.admin,
    )
    db.add(user)
    _commit(db)
    db.refresh(user)
    logger.info("admin account created id=%s", user.id)
    return user