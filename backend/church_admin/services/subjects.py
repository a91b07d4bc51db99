# church_admin/services/subjects.py
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Iterable, Optional

from fastapi import HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from church_admin.models.subject import Subject, UserSubject
from church_admin.schemas.subject import SubjectCreate, SubjectRead, SubjectUpdate, SubjectUserLink
from church_admin.services.listing import (
    ListParams,
    contains,
    date_range,
    equals,
    order_by_clause,
    page_envelope,
    paginate,
)

logger = logging.getLogger(__name__)

SORT_COLUMNS = {
    "id": Subject.id,
    "name": Subject.name,
    "description": Subject.description,
    "disabled": Subject.disabled,
    "createdAt": Subject.created_at,
    "updatedAt": Subject.updated_at,
}


def _to_read(subject: Subject, include_users: bool = False) -> SubjectRead:
    links = None
    if include_users:
        links = [SubjectUserLink.model_validate(link) for link in subject.user_subjects]
    return SubjectRead(
        id=subject.id,
        name=subject.name,
        description=subject.description,
        disabled=subject.disabled,
        created_at=subject.created_at,
        updated_at=subject.updated_at,
        user_subjects=links,
    )


def list_subjects(
    db: Session,
    params: ListParams,
    name: Optional[str] = None,
    description: Optional[str] = None,
    disabled: Optional[bool] = None,
    created_from: Optional[datetime] = None,
    created_to: Optional[datetime] = None,
    include_users: bool = False,
) -> Dict[str, Any]:
    conds = [
        *contains(Subject.name, name),
        *contains(Subject.description, description),
        *equals(Subject.disabled, disabled),
        *date_range(Subject.created_at, created_from, created_to),
    ]
    options = (
        [selectinload(Subject.user_subjects).joinedload(UserSubject.user)] if include_users else []
    )
    rows, total = paginate(
        db, Subject, conds, order_by_clause(Subject, SORT_COLUMNS, params), params, options
    )
    return page_envelope([_to_read(s, include_users) for s in rows], total, params)


def get_subject(db: Session, subject_id: int) -> Optional[SubjectRead]:
    subject = db.get(Subject, subject_id)
    if not subject:
        return None
    return _to_read(subject, include_users=True)


def create_subject(db: Session, payload: SubjectCreate) -> SubjectRead:
    subject = Subject(name=payload.name, description=payload.description, disabled=payload.disabled)
    db.add(subject)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    db.refresh(subject)
    logger.info("subject created id=%s", subject.id)
    return _to_read(subject)


def update_subject(db: Session, subject_id: int, payload: SubjectUpdate) -> Optional[SubjectRead]:
    subject = db.get(Subject, subject_id)
    if not subject:
        return None

    data = payload.model_dump(exclude_unset=True)
    if "name" in data:
        subject.name = data["name"]
    if data.get("description") is not None:
        subject.description = data["description"]
    if data.get("disabled") is not None:
        subject.disabled = data["disabled"]

    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    db.refresh(subject)
    logger.info("subject updated id=%s fields=%s", subject_id, sorted(data))
    return _to_read(subject)


def delete_subject(db: Session, subject_id: int) -> bool:
    """Delete a subject unless users are still linked to it (checked under row lock)."""
    subject = db.get(Subject, subject_id, with_for_update=True)
    if not subject:
        return False

    links = db.execute(
        select(func.count()).select_from(UserSubject).where(UserSubject.subject_id == subject_id)
    ).scalar_one()
    if links:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot delete subject with associated users",
        )

    try:
        db.delete(subject)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    logger.info("subject deleted id=%s", subject_id)
    return True


def ensure_subjects_exist(db: Session, subject_ids: Iterable[int]) -> None:
    wanted = set(subject_ids)
    if not wanted:
        return
    found = set(db.execute(select(Subject.id).where(Subject.id.in_(wanted))).scalars().all())
    missing = sorted(wanted - found)
    if missing:
        raise HTTPException(
            status_code=400,
            detail=f"Subject not found: {', '.join(str(m) for m in missing)}",
        )
